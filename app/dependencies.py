"""
Service providers for route handlers

Each provider builds its service around the request's Supabase client so
that tests can swap any of them through app.dependency_overrides.
"""

from fastapi import Depends, Request
from supabase import Client

from core.database import get_supabase
from core.wordpress_client import WordPressClient
from processors.article_generator import ArticleGenerator
from processors.rss_fetcher import YouTubeFeedFetcher
from app.services.monitoring_service import MonitoringService
from app.services.video_processor import VideoProcessor
from app.services.wordpress_publisher import WordPressPublisher


def get_feed_fetcher() -> YouTubeFeedFetcher:
    return YouTubeFeedFetcher()


def get_article_generator() -> ArticleGenerator:
    return ArticleGenerator()


def get_wordpress_publisher(supabase: Client = Depends(get_supabase)) -> WordPressPublisher:
    return WordPressPublisher(supabase)


def get_video_processor(
    supabase: Client = Depends(get_supabase),
    publisher: WordPressPublisher = Depends(get_wordpress_publisher),
    article_generator: ArticleGenerator = Depends(get_article_generator)
) -> VideoProcessor:
    return VideoProcessor(supabase, article_generator=article_generator, publisher=publisher)


def get_monitoring_service(
    supabase: Client = Depends(get_supabase),
    feed_fetcher: YouTubeFeedFetcher = Depends(get_feed_fetcher),
    video_processor: VideoProcessor = Depends(get_video_processor)
) -> MonitoringService:
    return MonitoringService(supabase, feed_fetcher=feed_fetcher, video_processor=video_processor)


def get_scheduler(request: Request):
    """The running MonitoringScheduler, or None when scheduling is disabled"""
    return getattr(request.app.state, 'scheduler', None)


def get_wordpress_client_factory():
    """Callable building a WordPressClient from site credentials"""
    return WordPressClient
