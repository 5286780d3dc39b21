"""
YouTube RSS Fetcher

Retrieves a channel's Atom feed and parses its entries.
"""

import logging
from datetime import datetime, timezone
from typing import Dict, List, Optional
import feedparser
import requests
from dateutil import parser as date_parser

from core.config import Config
from core.exceptions import FeedParseError


def build_rss_url(channel_id: str) -> str:
    """Build the public RSS feed URL for a YouTube channel ID"""
    return Config.YOUTUBE_RSS_URL.format(channel_id)


class YouTubeFeedFetcher:
    """Fetches and parses YouTube channel feeds"""

    def __init__(self, session: Optional[requests.Session] = None):
        self.session = session or requests.Session()
        self.session.headers.update(Config.get_default_headers())
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def fetch_channel_feed(self, channel_id: str) -> List[Dict]:
        """
        Fetch the feed entries for a channel

        Args:
            channel_id: External YouTube channel ID (UC...)

        Returns:
            List of entries: {video_id, title, content, author, published}

        Raises:
            requests.RequestException: On network or HTTP errors
            FeedParseError: If the response is not a parseable feed
        """
        feed_url = build_rss_url(channel_id)
        self.logger.info(f"Fetching RSS feed for channel: {channel_id}")

        response = self.session.get(feed_url, timeout=Config.DEFAULT_TIMEOUT)
        response.raise_for_status()

        entries = self.parse_feed(response.content)
        self.logger.info(f"Found {len(entries)} videos in feed for channel: {channel_id}")
        return entries

    def parse_feed(self, content: bytes) -> List[Dict]:
        """
        Parse raw feed XML into entry dictionaries

        Raises:
            FeedParseError: If the document is malformed and yields no entries
        """
        feed = feedparser.parse(content)

        if feed.bozo and not feed.entries:
            raise FeedParseError(f"Unable to parse feed: {feed.bozo_exception}")

        if feed.bozo:
            self.logger.warning(f"Feed parsing warning: {feed.bozo_exception}")

        feed_author = feed.feed.get('author') or feed.feed.get('title')

        entries = []
        for entry in feed.entries:
            video_id = entry.get('yt_videoid')
            if not video_id:
                self.logger.debug(f"Skipping entry without video id: {entry.get('id', 'unknown')}")
                continue

            entries.append({
                'video_id': video_id,
                'title': entry.get('title', ''),
                'content': self._extract_description(entry),
                'author': entry.get('author') or feed_author,
                'published': self._extract_published(entry)
            })

        return entries

    def _extract_description(self, entry) -> str:
        """YouTube puts the description in media:group/media:description"""
        description = entry.get('media_description') or entry.get('summary')
        if description:
            return description
        content = entry.get('content')
        if content:
            return content[0].get('value', '')
        return ''

    def _extract_published(self, entry) -> Optional[datetime]:
        if entry.get('published_parsed'):
            return datetime(*entry.published_parsed[:6], tzinfo=timezone.utc)

        raw = entry.get('published') or entry.get('updated')
        if raw:
            try:
                published = date_parser.parse(raw)
                if published.tzinfo is None:
                    published = published.replace(tzinfo=timezone.utc)
                return published
            except (ValueError, OverflowError):
                self.logger.debug(f"Unparseable published date: {raw}")

        return None
