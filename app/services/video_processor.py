"""
Video processing service

Runs a stored video through the article pipeline:
transcript -> LLM article -> save -> mark processed -> auto-publish draft.
"""

import asyncio
import logging
from datetime import datetime, timezone
from typing import Dict, Optional
from supabase import Client

from core.config import Config
from core.database import first_row
from core.exceptions import NotFoundError, ValidationError
from processors.article_generator import ArticleGenerator
from processors.transcript_processor import TranscriptProcessor
from app.services.wordpress_publisher import WordPressPublisher


class VideoProcessor:
    """Generates and stores articles for videos"""

    def __init__(
        self,
        supabase: Client,
        transcript_processor: Optional[TranscriptProcessor] = None,
        article_generator: Optional[ArticleGenerator] = None,
        publisher: Optional[WordPressPublisher] = None
    ):
        self.supabase = supabase
        self.transcript_processor = transcript_processor or TranscriptProcessor()
        self.article_generator = article_generator or ArticleGenerator()
        self.publisher = publisher or WordPressPublisher(supabase)
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def load_video_context(self, video_id) -> Dict:
        """
        Load a video with its channel and project

        Raises:
            NotFoundError: If the video or its channel does not exist
        """
        video = first_row(self.supabase.table('videos').select('*').eq('id', video_id).limit(1).execute())
        if not video:
            raise NotFoundError(f"Video {video_id} not found")

        channel = first_row(
            self.supabase.table('youtube_channels').select('*').eq('id', video['channel_id']).limit(1).execute()
        )
        if not channel:
            raise NotFoundError(f"Channel for video {video_id} not found")

        project = first_row(
            self.supabase.table('projects').select('*').eq('id', channel['project_id']).limit(1).execute()
        )

        return {'video': video, 'channel': channel, 'project': project}

    def resolve_language(self, context: Dict) -> str:
        """Project language first, then the video's own language, then English"""
        project = context.get('project') or {}
        return project.get('language') or context['video'].get('language') or Config.DEFAULT_LANGUAGE

    def get_llm_settings(self, project_id) -> Optional[Dict]:
        result = self.supabase.table('llm_settings').select('*').eq('project_id', project_id).limit(1).execute()
        return first_row(result)

    def save_article(self, video_id, language: str, title: str, content: str) -> Dict:
        """
        Save an article, keeping one row per (video, language)

        Returns:
            The inserted or updated article row
        """
        existing = first_row(
            self.supabase.table('articles').select('*').eq('video_id', video_id).eq('language', language).limit(1).execute()
        )

        if existing:
            result = self.supabase.table('articles').update({
                'title': title,
                'content': content,
                'updated_at': datetime.now(timezone.utc).isoformat()
            }).eq('id', existing['id']).execute()
        else:
            result = self.supabase.table('articles').insert({
                'video_id': video_id,
                'title': title,
                'content': content,
                'language': language,
                'published': False
            }).execute()

        saved = first_row(result)
        if not saved:
            raise RuntimeError(f"Failed to save article for video {video_id}")
        return saved

    async def fetch_transcript(self, video_id, language: Optional[str] = None) -> Dict:
        """
        Fetch and store the transcript of a video

        Returns:
            Dictionary with video_id and transcript (empty when unavailable)
        """
        context = self.load_video_context(video_id)
        language = language or self.resolve_language(context)
        transcript = await self.transcript_processor.get_transcript_text(context['video']['video_id'], language)

        if transcript:
            self.supabase.table('videos').update({'transcript': transcript}).eq('id', video_id).execute()

        return {'video_id': video_id, 'transcript': transcript}

    async def process_video(self, video_id) -> Dict:
        """
        Process a video: get transcript, generate article, and publish a draft

        The video is marked processed only after its article was saved.
        Publishing is attempted when the project has a WordPress site; a
        publishing failure is logged and does not undo the article.

        Args:
            video_id: Database ID of the video

        Returns:
            The saved article row
        """
        context = self.load_video_context(video_id)
        video, channel = context['video'], context['channel']
        language = self.resolve_language(context)

        self.logger.info(f"🎬 Processing video '{video.get('title')}' ({video['video_id']}) in {language}")

        transcript = await self.transcript_processor.get_transcript_text(video['video_id'], language)

        self.supabase.table('videos').update({'transcript': transcript}).eq('id', video_id).execute()

        settings = self.get_llm_settings(channel['project_id'])
        article = await asyncio.to_thread(
            self.article_generator.generate, video, transcript, settings, language
        )

        saved_article = self.save_article(video['id'], language, article['title'], article['content'])

        self.supabase.table('videos').update({'processed': True}).eq('id', video_id).execute()

        if self.publisher.get_project_sites(channel['project_id']):
            try:
                self.logger.info(f"Auto-publishing article to WordPress as draft for video {video.get('title')}")
                publish_result = await asyncio.to_thread(self.publisher.publish_article, saved_article['id'])
                saved_article['published'] = True
                saved_article['wordpress_post_id'] = publish_result['wordpress_post_id']
                self.logger.info(f"Article published successfully as draft: {publish_result.get('post_url')}")
            except Exception as e:
                self.logger.error(f"Error publishing article to WordPress for video {video_id}: {e}")

        return saved_article

    async def regenerate_article(self, video_id, language: Optional[str] = None) -> Dict:
        """
        Regenerate the article of a video from its stored transcript

        Raises:
            NotFoundError: Unknown video
            ValidationError: The video has no stored transcript
        """
        context = self.load_video_context(video_id)
        video, channel = context['video'], context['channel']
        language = language or Config.DEFAULT_LANGUAGE

        if not video.get('transcript'):
            raise ValidationError("Video has no transcript")

        settings = self.get_llm_settings(channel['project_id'])
        article = await asyncio.to_thread(
            self.article_generator.generate, video, video['transcript'], settings, language
        )

        return self.save_article(video['id'], language, article['title'], article['content'])
