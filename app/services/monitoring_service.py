"""
Channel monitoring service

Checks every monitored channel for new videos, stores them and runs each
newly ingested video through the article pipeline.
"""

import logging
from datetime import datetime, timezone
from typing import Dict, List, Optional
from supabase import Client

from core.config import Config
from core.database import first_row
from core.exceptions import NotFoundError
from processors.rss_fetcher import YouTubeFeedFetcher
from app.services.video_ingestor import VideoIngestor
from app.services.video_processor import VideoProcessor


class MonitoringService:
    """Runs monitoring passes over the stored YouTube channels"""

    TRIGGER_SCHEDULED = 'scheduled'
    TRIGGER_LEGACY = 'legacy'
    TRIGGER_MANUAL = 'manual'

    def __init__(
        self,
        supabase: Client,
        feed_fetcher: Optional[YouTubeFeedFetcher] = None,
        ingestor: Optional[VideoIngestor] = None,
        video_processor: Optional[VideoProcessor] = None
    ):
        self.supabase = supabase
        self.feed_fetcher = feed_fetcher or YouTubeFeedFetcher()
        self.ingestor = ingestor or VideoIngestor(supabase)
        self.video_processor = video_processor or VideoProcessor(supabase)
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def get_channels(self, trigger: str = TRIGGER_MANUAL) -> List[Dict]:
        """
        Load the channels to check

        Automatic triggers skip channels whose project turned monitoring off.
        """
        channels = self.supabase.table('youtube_channels').select('*').execute().data or []

        if trigger == self.TRIGGER_MANUAL or not channels:
            return channels

        project_ids = list({channel['project_id'] for channel in channels})
        projects = self.supabase.table('projects').select('*').in_('id', project_ids).execute().data or []
        disabled = {project['id'] for project in projects if project.get('auto_monitoring') is False}

        if disabled:
            self.logger.info(f"Skipping channels of {len(disabled)} project(s) with monitoring disabled")

        return [channel for channel in channels if channel['project_id'] not in disabled]

    def check_channel_entries(self, channel: Dict, now: Optional[datetime] = None) -> List:
        """Fetch one channel's feed and ingest its recent entries"""
        self.logger.info(f"Checking channel: {channel.get('channel_name') or channel['channel_id']}")
        entries = self.feed_fetcher.fetch_channel_feed(channel['channel_id'])
        return self.ingestor.ingest(channel, entries, now)

    def check_channel(self, channel_row_id) -> List:
        """
        Check a single channel for new videos without processing them

        Args:
            channel_row_id: Database ID of the youtube_channels row

        Returns:
            Internal IDs of the newly ingested videos

        Raises:
            NotFoundError: Unknown channel
        """
        channel = first_row(
            self.supabase.table('youtube_channels').select('*').eq('id', channel_row_id).limit(1).execute()
        )
        if not channel:
            raise NotFoundError(f"Channel {channel_row_id} not found")

        return self.check_channel_entries(channel)

    async def check_for_new_videos(self, trigger: str = TRIGGER_MANUAL, now: Optional[datetime] = None) -> List:
        """
        Check all channels for new videos and process them

        Channels are checked one after another and only the videos inserted
        during this run are processed. A feed failure aborts the run; a
        failure while processing a video is logged and the run continues.

        Args:
            trigger: What started the run (scheduled, legacy or manual)
            now: Reference time for the recency window

        Returns:
            Internal IDs of the newly ingested videos
        """
        self.logger.info(f"🔍 Checking for new videos ({trigger})...")
        log_id = self._start_log(trigger)

        channels: List[Dict] = []
        new_video_ids: List = []
        failed = 0

        try:
            channels = self.get_channels(trigger)
            self.logger.info(f"Found {len(channels)} channels to check")

            for channel in channels:
                new_video_ids.extend(self.check_channel_entries(channel, now))

            self.logger.info(f"Found {len(new_video_ids)} new videos to process")

            for video_id in new_video_ids:
                try:
                    await self.video_processor.process_video(video_id)
                except Exception as e:
                    failed += 1
                    self.logger.error(f"❌ Error processing video {video_id}: {e}")

        except Exception as e:
            self.logger.error(f"❌ Error checking for new videos: {e}")
            self._finish_log(log_id, 'error', len(channels), len(new_video_ids), str(e))
            raise

        message = f"Checked {len(channels)} channels, found {len(new_video_ids)} new videos"
        if failed:
            message += f" ({failed} failed to process)"
        self._finish_log(log_id, 'success', len(channels), len(new_video_ids), message)
        self.logger.info(f"✅ {message}")

        return new_video_ids

    async def run_monitoring_now(self) -> Dict:
        """
        Run a manual monitoring pass

        Returns:
            Dictionary with success, message and new_video_ids (never raises)
        """
        try:
            new_video_ids = await self.check_for_new_videos(self.TRIGGER_MANUAL)
            return {
                'success': True,
                'message': 'Monitoring completed successfully',
                'new_video_ids': new_video_ids
            }
        except Exception as e:
            return {
                'success': False,
                'message': f"Error: {str(e)}",
                'new_video_ids': []
            }

    def get_logs(self, limit: int = Config.MONITORING_LOG_LIMIT) -> List[Dict]:
        """Most recent monitoring runs, newest first"""
        result = self.supabase.table('monitoring_logs').select('*').order('started_at', desc=True).limit(limit).execute()
        return result.data or []

    def _start_log(self, trigger: str):
        try:
            result = self.supabase.table('monitoring_logs').insert({
                'trigger': trigger,
                'status': 'running',
                'started_at': datetime.now(timezone.utc).isoformat()
            }).execute()
            row = first_row(result)
            return row['id'] if row else None
        except Exception as e:
            self.logger.warning(f"Could not write monitoring log: {e}")
            return None

    def _finish_log(self, log_id, status: str, channels_checked: int, new_videos: int, message: str) -> None:
        if log_id is None:
            return
        try:
            self.supabase.table('monitoring_logs').update({
                'status': status,
                'channels_checked': channels_checked,
                'new_videos': new_videos,
                'message': message,
                'finished_at': datetime.now(timezone.utc).isoformat()
            }).eq('id', log_id).execute()
        except Exception as e:
            self.logger.warning(f"Could not update monitoring log {log_id}: {e}")
