"""
API routes for YouTube channel management and channel checks
"""

import logging
from datetime import datetime, timezone
from fastapi import APIRouter, Depends, HTTPException, status
from supabase import Client

from app.dependencies import get_feed_fetcher, get_monitoring_service
from app.middleware.auth import verify_supabase_jwt
from app.models.youtube_channel import (
    ChannelCheckResponse,
    ChannelCreate,
    ChannelValidateRequest,
    ChannelValidateResponse
)
from app.services.monitoring_service import MonitoringService
from core.database import first_row, get_supabase
from core.exceptions import NotFoundError
from processors.rss_fetcher import YouTubeFeedFetcher, build_rss_url

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/project/{project_id}")
async def list_channels(
    project_id: str,
    user_id: str = Depends(verify_supabase_jwt),
    supabase: Client = Depends(get_supabase)
):
    try:
        result = supabase.table('youtube_channels').select('*').eq(
            'project_id', project_id
        ).order('created_at', desc=True).execute()
        return result.data or []

    except Exception as e:
        logger.error(f"Error fetching YouTube channels for project {project_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to fetch YouTube channels: {str(e)}"
        )


@router.post("/validate", response_model=ChannelValidateResponse)
async def validate_channel(
    request: ChannelValidateRequest,
    user_id: str = Depends(verify_supabase_jwt),
    feed_fetcher: YouTubeFeedFetcher = Depends(get_feed_fetcher)
):
    """
    Validate a YouTube channel ID by fetching its RSS feed

    An unreachable or empty feed is reported as invalid rather than as an error.
    """
    if not request.channel_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Channel ID is required"
        )

    try:
        entries = feed_fetcher.fetch_channel_feed(request.channel_id)
    except Exception as e:
        logger.info(f"Channel {request.channel_id} failed validation: {e}")
        return ChannelValidateResponse(valid=False, message="Invalid channel ID")

    if not entries:
        return ChannelValidateResponse(valid=False, message="No videos found for this channel")

    return ChannelValidateResponse(
        valid=True,
        channelId=request.channel_id,
        channelName=entries[0].get('author') or 'Unknown Channel',
        videoCount=len(entries)
    )


@router.post("/project/{project_id}", status_code=status.HTTP_201_CREATED)
async def add_channel(
    project_id: str,
    channel: ChannelCreate,
    user_id: str = Depends(verify_supabase_jwt),
    supabase: Client = Depends(get_supabase)
):
    """Add a YouTube channel to a project"""
    if not channel.channel_id or not channel.channel_name:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Channel ID and name are required"
        )

    try:
        existing = supabase.table('youtube_channels').select('*').eq(
            'project_id', project_id
        ).eq('channel_id', channel.channel_id).limit(1).execute()

        if existing.data:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="This channel is already added to the project"
            )

        result = supabase.table('youtube_channels').insert({
            'project_id': project_id,
            'channel_id': channel.channel_id,
            'channel_name': channel.channel_name,
            'rss_url': build_rss_url(channel.channel_id)
        }).execute()

        created = first_row(result)
        if not created:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Failed to add YouTube channel"
            )

        logger.info(f"Added channel {channel.channel_name} ({channel.channel_id}) to project {project_id}")
        return created

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error adding YouTube channel to project {project_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to add YouTube channel: {str(e)}"
        )


@router.post("/check-all-channels", response_model=ChannelCheckResponse)
async def check_all_channels(
    user_id: str = Depends(verify_supabase_jwt),
    monitoring_service: MonitoringService = Depends(get_monitoring_service)
):
    """Check every channel for new videos and process them (waits for completion)"""
    logger.info("Manually triggered check for new videos on all channels")

    try:
        new_video_ids = await monitoring_service.check_for_new_videos(MonitoringService.TRIGGER_MANUAL)

        return ChannelCheckResponse(
            message="Check for new videos completed successfully",
            newVideosCount=len(new_video_ids),
            newVideoIds=new_video_ids
        )

    except Exception as e:
        logger.error(f"Error checking for new videos: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to check for new videos: {str(e)}"
        )


@router.put("/{channel_id}")
async def update_channel(
    channel_id: str,
    channel: ChannelCreate,
    user_id: str = Depends(verify_supabase_jwt),
    supabase: Client = Depends(get_supabase)
):
    """Rename a channel or point it at another YouTube channel ID"""
    if not channel.channel_id and not channel.channel_name:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Channel ID or name is required"
        )

    try:
        update_data = {'updated_at': datetime.now(timezone.utc).isoformat()}
        if channel.channel_name:
            update_data['channel_name'] = channel.channel_name
        if channel.channel_id:
            update_data['channel_id'] = channel.channel_id
            update_data['rss_url'] = build_rss_url(channel.channel_id)

        result = supabase.table('youtube_channels').update(update_data).eq('id', channel_id).execute()

        if not result.data:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Channel not found"
            )

        return result.data[0]

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error updating YouTube channel {channel_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to update YouTube channel: {str(e)}"
        )


@router.delete("/{channel_id}")
async def delete_channel(
    channel_id: str,
    user_id: str = Depends(verify_supabase_jwt),
    supabase: Client = Depends(get_supabase)
):
    try:
        supabase.table('youtube_channels').delete().eq('id', channel_id).execute()
        return {"message": "YouTube channel deleted successfully"}

    except Exception as e:
        logger.error(f"Error deleting YouTube channel {channel_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to delete YouTube channel: {str(e)}"
        )


@router.post("/{channel_id}/check", response_model=ChannelCheckResponse)
async def check_channel(
    channel_id: str,
    user_id: str = Depends(verify_supabase_jwt),
    monitoring_service: MonitoringService = Depends(get_monitoring_service)
):
    """Ingest new videos of a single channel without processing them"""
    try:
        new_video_ids = monitoring_service.check_channel(channel_id)

        return ChannelCheckResponse(
            message=f"Found {len(new_video_ids)} new videos",
            newVideosCount=len(new_video_ids),
            newVideoIds=new_video_ids
        )

    except NotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Channel not found"
        )
    except Exception as e:
        logger.error(f"Error checking for new videos for channel {channel_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to check for new videos: {str(e)}"
        )
