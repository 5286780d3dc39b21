"""
Transcript Processing Module

Fetches YouTube captions for a video in a target language.
"""

import asyncio
import logging
from typing import Dict, List, Optional

from core.config import Config


class TranscriptProcessor:
    """Handles transcript extraction from YouTube captions"""

    def __init__(self, timeout: Optional[float] = None):
        self.timeout = timeout if timeout is not None else Config.get_transcript_timeout()
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def get_youtube_transcript(self, video_id: str, language: str = Config.DEFAULT_LANGUAGE) -> Dict:
        """
        Extract transcript segments from a YouTube video

        Args:
            video_id: YouTube video ID
            language: Language code of the captions

        Returns:
            Dictionary with 'success', 'transcript' segments and 'type'
            (manual/auto_generated), or 'error' when unavailable
        """
        from youtube_transcript_api import YouTubeTranscriptApi

        ytt_api = YouTubeTranscriptApi()
        transcript_list = ytt_api.list(video_id)

        # Manually created captions are preferred over auto-generated ones
        try:
            transcript = transcript_list.find_manually_created_transcript([language])
            transcript_data = transcript.fetch()
            transcript_type = 'manual'
        except Exception:
            try:
                transcript = transcript_list.find_generated_transcript([language])
                transcript_data = transcript.fetch()
                transcript_type = 'auto_generated'
            except Exception:
                return {
                    'success': False,
                    'error': f'No {language} transcript available',
                    'video_id': video_id
                }

        segments: List[Dict] = []
        for entry in transcript_data:
            segments.append({
                'start': entry.start,
                'text': entry.text,
                'duration': getattr(entry, 'duration', 0)
            })

        return {
            'success': True,
            'transcript': segments,
            'type': transcript_type,
            'video_id': video_id,
            'total_entries': len(segments)
        }

    async def get_transcript_text(self, video_id: str, language: str = Config.DEFAULT_LANGUAGE) -> str:
        """
        Get the full transcript text for a video

        Never raises: missing captions, timeouts and network errors all
        return an empty string so that processing can continue.

        Args:
            video_id: YouTube video ID
            language: Language code of the captions

        Returns:
            Transcript segments joined with spaces, or ''
        """
        self.logger.info(f"Fetching transcript for video: {video_id} (lang: {language})")

        try:
            result = await asyncio.wait_for(
                asyncio.to_thread(self.get_youtube_transcript, video_id, language),
                timeout=self.timeout
            )
        except asyncio.TimeoutError:
            self.logger.error(f"Transcript fetch timed out after {self.timeout}s for video {video_id}")
            return ''
        except Exception as e:
            self.logger.error(f"Error fetching transcript for video {video_id}: {e}")
            return ''

        if not result.get('success') or not result.get('transcript'):
            self.logger.warning(f"No transcript available for video: {video_id} ({result.get('error', 'empty')})")
            return ''

        full_transcript = ' '.join(segment['text'] for segment in result['transcript'])
        self.logger.info(
            f"Successfully fetched {result['type']} transcript for video: {video_id} "
            f"({len(full_transcript)} characters)"
        )
        return full_transcript
