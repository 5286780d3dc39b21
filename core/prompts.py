#!/usr/bin/env python3
"""
Prompts for article generation

The prompts live in Git and are synced to Braintrust with
`.braintrust/push_py_prompts.py` for observability.
"""

from typing import Dict, List, Optional

from core.config import Config


LENGTH_RULES = """**************************************************
IMPORTANT: THE ARTICLE LENGTH MUST MATCH THE VIDEO DURATION:
- Video < 5 min -> 700-900 words
- Video 5-10 min -> 1000-2000 words
- Video > 10 min -> 2500+ words
**************************************************"""

HTML_RULES = """STRICT HTML FORMATTING RULES:
- ONE main title with an <h1> tag (never more than one <h1>)
- Subheadings with <h2> and <h3> tags only
- Paragraphs with <p>
- Bulleted lists: <ul><li>Item</li></ul>
- Numbered lists: <ol><li>Item</li></ol>
- Bold: <strong>word</strong> (never <b>)
- Quotes: <blockquote><p>Quote</p></blockquote>"""

META_DESCRIPTION_RULE = (
    '<div class="meta-description" style="display:none">'
    'SEO description of 150 characters maximum</div>'
)


class ArticleGenerationPrompt:
    """
    Prompt pair turning a video transcript into a WordPress-ready HTML article

    Output: HTML article whose first line is the <h1> title, ending with a
    hidden SEO meta-description div.
    """

    # Braintrust metadata
    SLUG = "video-article-generation"
    NAME = "Video Article Generation"
    MODEL = Config.DEFAULT_MISTRAL_MODEL
    MAX_TOKENS = Config.LLM_MAX_TOKENS
    TEMPERATURE = Config.LLM_TEMPERATURE

    @staticmethod
    def build_system(language_name: str) -> str:
        """
        Build the system prompt

        Args:
            language_name: Display name of the output language (e.g. 'French')
        """
        return f"""{LENGTH_RULES}

You are an expert writer who turns video transcripts into high quality articles. Extract the key ideas, rewrite the content in a fluent and engaging style, and enrich the article with relevant editorial elements.

Goal: produce a structured, professional and easy to read article from a raw transcript.

{HTML_RULES}

ALWAYS end the article with an SEO meta description formatted exactly like this:
{META_DESCRIPTION_RULE}

WORKFLOW:
- Analyse the transcript to identify the main topics, subtopics, examples and arguments.
- Rewrite the content in a journalistic or editorial style suited to the subject and audience.
- Structure the article with a single catchy title (ONE <h1>), an introduction and clear subheadings (<h2>, <h3>).
- Write short, dynamic paragraphs, with rephrased quotes where useful.
- Use bulleted or numbered lists when they make the information easier to scan.
- Enrich the content with data, definitions, analogies or extra context.

Fix repetitions, verbal tics and irrelevant parts of the transcript.

NEVER mention that the text comes from a transcript or a video.

IMPORTANT: all content must be written in {language_name}, with the exact WordPress Gutenberg compatible HTML formatting described above."""

    @staticmethod
    def build_user(title: str, description: Optional[str], transcript: str, language_name: str) -> str:
        """
        Build the user prompt

        Args:
            title: Original video title
            description: Video description
            transcript: Transcript text (truncated to Config.MAX_TRANSCRIPT_CHARS)
            language_name: Display name of the output language
        """
        truncated = (transcript or '')[:Config.MAX_TRANSCRIPT_CHARS]

        return f"""{LENGTH_RULES}

Here is the transcript of a video to turn into a quality article.

Original video title: {title}
Description: {description or 'N/A'}

Transcript:
{truncated}

{HTML_RULES}

ALWAYS finish the article with an SEO meta description formatted exactly like this:
{META_DESCRIPTION_RULE}

Language: {language_name}"""

    @classmethod
    def build_messages(cls, video: Dict, transcript: str, language: Optional[str]) -> List[Dict[str, str]]:
        """Build chat-completion messages for a video row"""
        language_name = Config.get_language_name(language)
        return [
            {"role": "system", "content": cls.build_system(language_name)},
            {
                "role": "user",
                "content": cls.build_user(
                    video.get('title', ''),
                    video.get('description'),
                    transcript,
                    language_name
                )
            },
        ]
