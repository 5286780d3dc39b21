#!/usr/bin/env python3
"""
Text Utilities

Provides text manipulation functions for article generation and publishing.
"""

import re
from datetime import datetime, timezone
from typing import List, Optional
from bs4 import BeautifulSoup

from core.config import Config

H1_PATTERN = re.compile(r'<h1[^>]*>.*?</h1>\s*', re.IGNORECASE | re.DOTALL)
HTML_BLOCK_PATTERN = re.compile(r'<(h[1-6]|p|ul|ol)[\s>]', re.IGNORECASE)
ORDERED_ITEM_PATTERN = re.compile(r'^\d+\.\s')
UNORDERED_ITEM_PATTERN = re.compile(r'^-\s')


def extract_title(content: str, fallback: str, max_length: int = Config.MAX_TITLE_LENGTH) -> str:
    """
    Extract an article title from the first line of an LLM response

    Leading markdown heading markers and HTML tags are removed. The fallback
    is used when the line is empty or longer than max_length.

    Examples:
        >>> extract_title("# My Title\\n<p>Body</p>", "Video")
        'My Title'
        >>> extract_title("<h1>My Title</h1>\\n<p>Body</p>", "Video")
        'My Title'
        >>> extract_title("A" * 150, "Video")
        'Video'
    """
    first_line = (content or '').lstrip().split('\n')[0]
    title = re.sub(r'^#+\s*', '', first_line)
    title = BeautifulSoup(title, 'html.parser').get_text().strip()

    if not title or len(title) > max_length:
        return fallback
    return title


def strip_h1(content: str) -> str:
    """Remove every <h1> element; WordPress renders the post title itself"""
    return H1_PATTERN.sub('', content or '')


def has_html_formatting(content: str) -> bool:
    return bool(HTML_BLOCK_PATTERN.search(content or ''))


def format_for_gutenberg(content: str) -> str:
    """
    Format article content for the WordPress Gutenberg editor

    HTML content is returned without its <h1>. Plain or markdown-style content
    is converted to Gutenberg block markup (headings, lists, paragraphs).

    Args:
        content: Raw article content

    Returns:
        Content ready for the WordPress posts endpoint
    """
    cleaned = strip_h1(content)

    if has_html_formatting(cleaned):
        return cleaned

    blocks: List[str] = []
    for paragraph in cleaned.split('\n\n'):
        paragraph = paragraph.strip()
        if not paragraph:
            continue

        if paragraph.startswith('#'):
            level = min(len(re.match(r'^#+', paragraph).group(0)), 6)
            text = re.sub(r'^#+\s*', '', paragraph)
            blocks.append(
                f'<!-- wp:heading {{"level":{level}}} -->\n'
                f'<h{level}>{text}</h{level}>\n'
                f'<!-- /wp:heading -->\n'
            )
        elif ORDERED_ITEM_PATTERN.match(paragraph) or UNORDERED_ITEM_PATTERN.match(paragraph):
            ordered = bool(ORDERED_ITEM_PATTERN.match(paragraph))
            tag = 'ol' if ordered else 'ul'
            items = [
                re.sub(r'^(\d+\.|-)\s+', '', line.strip())
                for line in paragraph.split('\n') if line.strip()
            ]
            inner = ''.join(f'<li>{item}</li>' for item in items)
            blocks.append(
                f'<!-- wp:list {{"ordered":{"true" if ordered else "false"}}} -->\n'
                f'<{tag}>{inner}</{tag}>\n'
                f'<!-- /wp:list -->\n'
            )
        else:
            blocks.append(
                '<!-- wp:paragraph -->\n'
                f'<p>{paragraph}</p>\n'
                '<!-- /wp:paragraph -->\n'
            )

    return '\n'.join(blocks)


def hours_since(published: datetime, now: Optional[datetime] = None) -> float:
    """
    Hours elapsed between a publication date and now

    Naive datetimes are treated as UTC.
    """
    now = now or datetime.now(timezone.utc)
    if published.tzinfo is None:
        published = published.replace(tzinfo=timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return (now - published).total_seconds() / 3600


def mask_secret(value: Optional[str]) -> Optional[str]:
    """Mask a stored credential for API responses"""
    return '********' if value else None
