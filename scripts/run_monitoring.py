#!/usr/bin/env python3
"""
Run a monitoring pass from the command line (same behavior as the scheduler)

Usage:
    python3 scripts/run_monitoring.py [options]

Examples:
    python3 scripts/run_monitoring.py
    python3 scripts/run_monitoring.py --channel <channel_row_id>
    python3 scripts/run_monitoring.py --video <video_row_id>

Options:
    --channel       Only ingest new videos of one channel (no processing)
    --video         Process a single stored video
    --trigger       Trigger recorded in the monitoring log (default: manual)

Environment Variables:
    SUPABASE_URL                Supabase project URL
    SUPABASE_SERVICE_ROLE_KEY   Supabase service role key
    MISTRAL_API_KEY             Fallback key when a project has none
"""

import argparse
import asyncio
import logging
import os
import sys

from dotenv import load_dotenv

# Add parent directory to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from app.services.monitoring_service import MonitoringService
from core.database import create_supabase_client


async def run(args: argparse.Namespace) -> int:
    supabase = create_supabase_client()
    service = MonitoringService(supabase)

    if args.video:
        print(f"🎬 Processing video {args.video}...")
        article = await service.video_processor.process_video(args.video)
        print(f"✅ Article saved: {article['title']}")
        if article.get('published'):
            print(f"📝 WordPress draft: {article.get('wordpress_post_id')}")
        return 0

    if args.channel:
        print(f"🔍 Checking channel {args.channel}...")
        new_video_ids = service.check_channel(args.channel)
    else:
        print("🔍 Checking all channels for new videos...")
        new_video_ids = await service.check_for_new_videos(args.trigger)

    print(f"\n✅ Found {len(new_video_ids)} new videos")
    for video_id in new_video_ids[:10]:
        print(f"   - {video_id}")
    if len(new_video_ids) > 10:
        print(f"   ... and {len(new_video_ids) - 10} more")

    return 0


def main():
    parser = argparse.ArgumentParser(description="Check YouTube channels and generate articles")
    group = parser.add_mutually_exclusive_group()
    group.add_argument('--channel', help="Database ID of a channel to check (ingest only)")
    group.add_argument('--video', help="Database ID of a video to process")
    parser.add_argument(
        '--trigger',
        default=MonitoringService.TRIGGER_MANUAL,
        choices=[MonitoringService.TRIGGER_MANUAL, MonitoringService.TRIGGER_SCHEDULED, MonitoringService.TRIGGER_LEGACY],
        help="Trigger recorded in the monitoring log"
    )
    args = parser.parse_args()

    load_dotenv('.env.local')
    logging.basicConfig(
        level=getattr(logging, os.getenv("LOG_LEVEL", "INFO").upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    try:
        exit_code = asyncio.run(run(args))
    except Exception as e:
        print(f"❌ Error: {e}")
        exit_code = 1

    sys.exit(exit_code)


if __name__ == "__main__":
    main()
