#!/usr/bin/env python3
"""
Centralized configuration management for the YouTube article monitor
"""

import os
from typing import Dict, Optional


class Config:
    """Centralized configuration constants and environment management"""

    # Video ingestion
    RECENCY_WINDOW_HOURS = 48
    YOUTUBE_RSS_URL = "https://www.youtube.com/feeds/videos.xml?channel_id={}"
    YOUTUBE_THUMBNAIL_URL = "https://i.ytimg.com/vi/{}/hqdefault.jpg"

    # Article generation
    MAX_TRANSCRIPT_CHARS = 14000
    MAX_TITLE_LENGTH = 100
    LLM_MAX_TOKENS = 4000
    LLM_TEMPERATURE = 0.7
    DEFAULT_LLM_PROVIDER = "mistral"
    DEFAULT_MISTRAL_MODEL = "mistral-large-latest"
    MISTRAL_API_URL = "https://api.mistral.ai/v1"
    DEFAULT_LANGUAGE = "en"

    # HTTP timeouts (seconds)
    DEFAULT_TIMEOUT = 30
    LONG_TIMEOUT = 120
    SHORT_TIMEOUT = 15

    # Scheduling
    MONITORING_SCHEDULE = "0 */6 * * *"
    LEGACY_CRON_SCHEDULE = "0 * * * *"
    MONITORING_LOG_LIMIT = 20

    # Auth
    DEV_USER_ID = "00000000-0000-0000-0000-000000000000"

    LANGUAGE_NAMES = {
        'en': 'English',
        'fr': 'French',
        'es': 'Spanish',
        'de': 'German',
        'it': 'Italian',
        'pt': 'Portuguese',
        'nl': 'Dutch',
        'ru': 'Russian',
        'ja': 'Japanese',
        'zh': 'Chinese',
    }

    @staticmethod
    def get_transcript_timeout() -> float:
        """Transcript fetch timeout in seconds (env value is in milliseconds)"""
        return int(os.getenv('YOUTUBE_TRANSCRIPT_TIMEOUT', '60000')) / 1000

    @staticmethod
    def get_cron_schedules() -> Dict[str, Optional[str]]:
        """Get cron expressions for the monitoring jobs (empty string disables a job)"""
        return {
            'scheduled': os.getenv('MONITORING_SCHEDULE', Config.MONITORING_SCHEDULE) or None,
            'legacy': os.getenv('CRON_SCHEDULE', Config.LEGACY_CRON_SCHEDULE) or None,
        }

    @staticmethod
    def is_scheduler_enabled() -> bool:
        return os.getenv('ENABLE_SCHEDULER', 'true').lower() == 'true'

    @staticmethod
    def is_auth_bypassed() -> bool:
        """Development-only authentication bypass"""
        return (
            os.getenv('ENVIRONMENT', 'development') == 'development'
            and os.getenv('AUTH_BYPASS', 'false').lower() == 'true'
        )

    @staticmethod
    def get_api_keys() -> Dict[str, Optional[str]]:
        """Get all configured LLM API keys"""
        return {
            'mistral': os.getenv('MISTRAL_API_KEY'),
            'openai': os.getenv('OPENAI_API_KEY'),
            'anthropic': os.getenv('ANTHROPIC_API_KEY'),
        }

    @staticmethod
    def get_language_name(language: Optional[str]) -> str:
        return Config.LANGUAGE_NAMES.get((language or '').lower(), 'English')

    @staticmethod
    def get_default_headers() -> Dict[str, str]:
        """Get default HTTP headers"""
        return {
            'User-Agent': os.getenv(
                'USER_AGENT',
                'Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36'
            ),
            'Accept': 'application/atom+xml,application/xml;q=0.9,*/*;q=0.8',
            'Accept-Language': 'en-US,en;q=0.5',
        }

    @staticmethod
    def validate_environment() -> Dict[str, bool]:
        """Validate required environment variables and return status"""
        required = {
            'SUPABASE_URL': bool(os.getenv('SUPABASE_URL')),
            'SUPABASE_SERVICE_ROLE_KEY': bool(os.getenv('SUPABASE_SERVICE_ROLE_KEY')),
        }

        optional = {
            'MISTRAL_API_KEY': bool(os.getenv('MISTRAL_API_KEY')),
            'OPENAI_API_KEY': bool(os.getenv('OPENAI_API_KEY')),
            'ANTHROPIC_API_KEY': bool(os.getenv('ANTHROPIC_API_KEY')),
        }

        return {
            'required': required,
            'optional': optional,
            'all_required_present': all(required.values()),
            'any_llm_key_present': any(optional.values())
        }
