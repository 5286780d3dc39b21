#!/usr/bin/env python3
"""
Article Generator

Turns a video transcript into an HTML article through a hosted LLM
chat-completion endpoint.
"""

import logging
from typing import Dict, Optional
import requests

from core.config import Config
from core.prompts import ArticleGenerationPrompt
from core.text_utils import extract_title


def get_youtube_thumbnail_url(video_id: str) -> str:
    """High quality thumbnail URL for a YouTube video ID"""
    return Config.YOUTUBE_THUMBNAIL_URL.format(video_id)


class ArticleGenerator:
    """Generates articles with the provider configured in a project's LLM settings"""

    def __init__(self, session: Optional[requests.Session] = None):
        self.session = session or requests.Session()
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def generate(
        self,
        video: Dict,
        transcript: str,
        settings: Optional[Dict] = None,
        language: str = Config.DEFAULT_LANGUAGE
    ) -> Dict[str, str]:
        """
        Generate an article for a video

        Args:
            video: Video row (title, description)
            transcript: Transcript text, possibly empty
            settings: Project LLM settings row (provider, model_name, api_key)
            language: Output language code

        Returns:
            Dictionary with 'title' and 'content'

        Raises:
            ValueError: Unknown provider or missing API key
            NotImplementedError: Declared provider without implementation
            requests.RequestException: LLM API failure
        """
        provider = ((settings or {}).get('provider') or Config.DEFAULT_LLM_PROVIDER).lower()

        if provider == 'mistral':
            return self._generate_with_mistral(video, transcript, settings or {}, language)
        if provider == 'openai':
            raise NotImplementedError("OpenAI integration not yet implemented")
        if provider == 'anthropic':
            raise NotImplementedError("Anthropic integration not yet implemented")

        self.logger.error(f"Unknown LLM provider: {provider}")
        raise ValueError(f"Unknown LLM provider: {provider}")

    def _generate_with_mistral(self, video: Dict, transcript: str, settings: Dict, language: str) -> Dict[str, str]:
        video_title = video.get('title', '')
        self.logger.info(f"🤖 Generating article for video '{video_title}' using Mistral AI in {language}")

        api_key = settings.get('api_key') or Config.get_api_keys()['mistral']
        model = settings.get('model_name') or Config.DEFAULT_MISTRAL_MODEL

        if not api_key:
            raise ValueError("Mistral API key is missing")

        request_data = {
            'model': model,
            'messages': ArticleGenerationPrompt.build_messages(video, transcript, language),
            'temperature': ArticleGenerationPrompt.TEMPERATURE,
            'max_tokens': ArticleGenerationPrompt.MAX_TOKENS
        }

        response = self.session.post(
            f"{Config.MISTRAL_API_URL}/chat/completions",
            json=request_data,
            headers={
                'Authorization': f'Bearer {api_key}',
                'Content-Type': 'application/json'
            },
            timeout=Config.LONG_TIMEOUT
        )
        response.raise_for_status()

        article_content = response.json()['choices'][0]['message']['content']
        title = extract_title(article_content, fallback=video_title)

        self.logger.info(f"✅ Article generated: '{title}' ({len(article_content)} chars)")

        return {
            'title': title,
            'content': article_content
        }

    def verify_api_key(self, provider: str, api_key: str) -> bool:
        """
        Check that an API key is accepted by its provider

        Returns:
            True if the provider's model listing succeeds, False otherwise
        """
        provider = (provider or '').lower()

        try:
            if provider == 'mistral':
                response = self.session.get(
                    f"{Config.MISTRAL_API_URL}/models",
                    headers={'Authorization': f'Bearer {api_key}'},
                    timeout=Config.SHORT_TIMEOUT
                )
                return response.status_code == 200

            if provider == 'openai':
                from openai import OpenAI
                OpenAI(api_key=api_key).models.list()
                return True

            if provider == 'anthropic':
                import anthropic
                anthropic.Anthropic(api_key=api_key).models.list()
                return True

        except Exception as e:
            self.logger.error(f"Error verifying {provider} API key: {e}")
            return False

        return False
