"""
WordPress publishing service
Publishes generated articles as draft posts with the video thumbnail as featured image
"""

import logging
from typing import Callable, Dict, Optional
import requests
from supabase import Client

from core.config import Config
from core.database import first_row
from core.exceptions import NotFoundError
from core.text_utils import format_for_gutenberg
from core.wordpress_client import WordPressClient
from processors.article_generator import get_youtube_thumbnail_url


class WordPressPublisher:
    """Publishes articles to the WordPress site of their project"""

    def __init__(
        self,
        supabase: Client,
        session: Optional[requests.Session] = None,
        client_factory: Optional[Callable[..., WordPressClient]] = None
    ):
        self.supabase = supabase
        self.session = session or requests.Session()
        self.client_factory = client_factory or WordPressClient
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def get_project_sites(self, project_id) -> list:
        result = self.supabase.table('wordpress_sites').select('*').eq('project_id', project_id).execute()
        return result.data or []

    def _load_article_chain(self, article_id) -> Dict:
        """Load article -> video -> channel, raising NotFoundError on any gap"""
        article = first_row(self.supabase.table('articles').select('*').eq('id', article_id).limit(1).execute())
        if not article:
            raise NotFoundError(f"Article {article_id} not found")

        video = first_row(self.supabase.table('videos').select('*').eq('id', article['video_id']).limit(1).execute())
        if not video:
            raise NotFoundError(f"Video for article {article_id} not found")

        channel = first_row(
            self.supabase.table('youtube_channels').select('*').eq('id', video['channel_id']).limit(1).execute()
        )
        if not channel:
            raise NotFoundError(f"Channel for article {article_id} not found")

        return {'article': article, 'video': video, 'channel': channel}

    def publish_article(self, article_id) -> Dict:
        """
        Publish an article to WordPress as a draft

        The thumbnail upload is best-effort: failures are logged and the
        article still counts as published.

        Args:
            article_id: Database ID of the article

        Returns:
            Dictionary with article_id, wordpress_post_id and post_url

        Raises:
            NotFoundError: Missing article chain or no WordPress site for the project
            requests.RequestException: Post creation failed
        """
        chain = self._load_article_chain(article_id)
        article, video, channel = chain['article'], chain['video'], chain['channel']

        sites = self.get_project_sites(channel['project_id'])
        if not sites:
            raise NotFoundError("No WordPress site found for this project")
        site = sites[0]

        client = self.client_factory(
            site['url'], site['username'], site['application_password'], session=self.session
        )

        content = format_for_gutenberg(article['content'])
        post = client.create_post(article['title'], content, status='draft')
        post_id = post['id']
        self.logger.info(f"📝 Created WordPress draft {post_id} for article {article_id}")

        self._attach_thumbnail(client, post_id, video['video_id'], article_id)

        self.supabase.table('articles').update({
            'wordpress_post_id': post_id,
            'published': True
        }).eq('id', article_id).execute()

        self.logger.info(f"✅ Published article \"{article['title']}\" to WordPress as post ID {post_id}")

        return {
            'article_id': article_id,
            'wordpress_post_id': post_id,
            'post_url': post.get('link')
        }

    def _attach_thumbnail(self, client: WordPressClient, post_id: int, youtube_video_id: str, article_id) -> None:
        """Upload the video thumbnail and set it as featured image (never raises)"""
        thumbnail_url = get_youtube_thumbnail_url(youtube_video_id)
        filename = f"thumbnail-{youtube_video_id}.jpg"

        try:
            image_response = self.session.get(thumbnail_url, timeout=Config.DEFAULT_TIMEOUT)
            image_response.raise_for_status()

            media = client.upload_media(filename, image_response.content)
            if media and media.get('id'):
                client.set_featured_media(post_id, media['id'])
                self.logger.info(f"🖼️ Featured image {media['id']} set on post {post_id}")
        except Exception as e:
            self.logger.error(f"Error uploading featured image for article {article_id}: {e}")
