"""
Video ingestion service
Stores recent, unseen feed entries as videos
"""

import logging
from datetime import datetime
from typing import Dict, List, Optional
from supabase import Client

from core.config import Config
from core.database import first_row
from core.text_utils import hours_since


class VideoIngestor:
    """Filters feed entries to the recency window and persists new videos"""

    def __init__(self, supabase: Client):
        self.supabase = supabase
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def is_recent(self, published: Optional[datetime], now: Optional[datetime] = None) -> bool:
        """Check if a video was published within the recency window (48 hours)"""
        if published is None:
            return False
        return hours_since(published, now) <= Config.RECENCY_WINDOW_HOURS

    def find_by_video_id(self, video_id: str) -> Optional[Dict]:
        """Look up a stored video by its external YouTube ID"""
        result = self.supabase.table('videos').select('*').eq('video_id', video_id).limit(1).execute()
        return first_row(result)

    def ingest(self, channel: Dict, entries: List[Dict], now: Optional[datetime] = None) -> List:
        """
        Insert videos for feed entries that are recent and not yet stored

        Args:
            channel: youtube_channels row
            entries: Feed entries from YouTubeFeedFetcher
            now: Reference time for the recency window

        Returns:
            Internal IDs of the newly created videos
        """
        new_video_ids = []

        for entry in entries:
            published = entry.get('published')

            if not self.is_recent(published, now):
                self.logger.debug(f"Skipping old video: {entry.get('title', '')[:60]}")
                continue

            if self.find_by_video_id(entry['video_id']):
                self.logger.info(f"Video {entry['video_id']} already exists in database, skipping")
                continue

            try:
                result = self.supabase.table('videos').insert({
                    'channel_id': channel['id'],
                    'title': entry.get('title', ''),
                    'description': entry.get('content') or '',
                    'video_id': entry['video_id'],
                    'published_at': published.isoformat(),
                    'processed': False
                }).execute()
            except Exception as e:
                self.logger.error(f"Error inserting video {entry['video_id']}: {e}")
                continue

            new_video = first_row(result)
            if not new_video:
                self.logger.error(f"Insert returned no row for video {entry['video_id']}")
                continue

            self.logger.info(f"Added new video to database: {entry.get('title')} ({entry['video_id']})")
            new_video_ids.append(new_video['id'])

        return new_video_ids
