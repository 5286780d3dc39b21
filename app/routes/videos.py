"""
API routes for videos: listing, manual creation, processing and transcripts
"""

import logging
from datetime import datetime, timezone
from fastapi import APIRouter, Depends, HTTPException, status
from supabase import Client

from app.dependencies import get_video_processor
from app.middleware.auth import verify_supabase_jwt
from app.models.video import TranscriptResponse, VideoCreate
from app.services.video_processor import VideoProcessor
from core.database import first_row, get_supabase
from core.exceptions import NotFoundError

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/project/{project_id}")
async def list_project_videos(
    project_id: str,
    user_id: str = Depends(verify_supabase_jwt),
    supabase: Client = Depends(get_supabase)
):
    """List the videos of every channel in a project, newest first"""
    try:
        channels = supabase.table('youtube_channels').select('*').eq('project_id', project_id).execute().data or []
        if not channels:
            return []

        channels_by_id = {channel['id']: channel for channel in channels}
        result = supabase.table('videos').select('*').in_(
            'channel_id', list(channels_by_id)
        ).order('published_at', desc=True).execute()

        return [
            {**video, 'youtube_channels': channels_by_id.get(video['channel_id'])}
            for video in result.data or []
        ]

    except Exception as e:
        logger.error(f"Error fetching videos for project {project_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to fetch videos: {str(e)}"
        )


@router.get("/channel/{channel_id}")
async def list_channel_videos(
    channel_id: str,
    user_id: str = Depends(verify_supabase_jwt),
    supabase: Client = Depends(get_supabase)
):
    try:
        result = supabase.table('videos').select('*').eq(
            'channel_id', channel_id
        ).order('published_at', desc=True).execute()
        return result.data or []

    except Exception as e:
        logger.error(f"Error fetching videos for channel {channel_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to fetch videos: {str(e)}"
        )


@router.get("/{video_id}")
async def get_video(
    video_id: str,
    user_id: str = Depends(verify_supabase_jwt),
    video_processor: VideoProcessor = Depends(get_video_processor),
    supabase: Client = Depends(get_supabase)
):
    """Get a video with its channel, project and articles"""
    try:
        context = video_processor.load_video_context(video_id)
        articles = supabase.table('articles').select('*').eq('video_id', video_id).execute().data or []

        return {
            **context['video'],
            'youtube_channels': {**context['channel'], 'projects': context['project']},
            'articles': articles
        }

    except NotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Video not found"
        )
    except Exception as e:
        logger.error(f"Error fetching video {video_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to fetch video: {str(e)}"
        )


@router.post("", status_code=status.HTTP_201_CREATED)
async def add_video(
    video: VideoCreate,
    user_id: str = Depends(verify_supabase_jwt),
    supabase: Client = Depends(get_supabase)
):
    """Manually add a YouTube video"""
    if not video.channel_id or not video.video_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Channel ID and video ID are required"
        )

    try:
        existing = supabase.table('videos').select('*').eq('video_id', video.video_id).limit(1).execute()
        if existing.data:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="This video is already in the database"
            )

        result = supabase.table('videos').insert({
            'channel_id': video.channel_id,
            'video_id': video.video_id,
            'title': video.title or 'Untitled Video',
            'description': video.description or '',
            'published_at': datetime.now(timezone.utc).isoformat(),
            'processed': False
        }).execute()

        created = first_row(result)
        if not created:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Failed to add video"
            )

        logger.info(f"Manually added video {video.video_id}")
        return created

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error adding video: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to add video: {str(e)}"
        )


@router.post("/{video_id}/process")
async def process_video(
    video_id: str,
    user_id: str = Depends(verify_supabase_jwt),
    video_processor: VideoProcessor = Depends(get_video_processor)
):
    """Fetch the transcript, generate the article and auto-publish it"""
    try:
        return await video_processor.process_video(video_id)

    except NotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e)
        )
    except Exception as e:
        logger.error(f"Error processing video {video_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to process video: {str(e)}"
        )


@router.post("/{video_id}/transcript", response_model=TranscriptResponse)
async def fetch_transcript(
    video_id: str,
    user_id: str = Depends(verify_supabase_jwt),
    video_processor: VideoProcessor = Depends(get_video_processor)
):
    try:
        result = await video_processor.fetch_transcript(video_id)

        if not result['transcript']:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="No transcript available for this video"
            )

        return TranscriptResponse(videoId=video_id, transcript=result['transcript'])

    except HTTPException:
        raise
    except NotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Video not found"
        )
    except Exception as e:
        logger.error(f"Error fetching transcript for video {video_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to fetch transcript: {str(e)}"
        )


@router.delete("/{video_id}")
async def delete_video(
    video_id: str,
    user_id: str = Depends(verify_supabase_jwt),
    supabase: Client = Depends(get_supabase)
):
    try:
        supabase.table('videos').delete().eq('id', video_id).execute()
        return {"message": "Video deleted successfully"}

    except Exception as e:
        logger.error(f"Error deleting video {video_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to delete video: {str(e)}"
        )
