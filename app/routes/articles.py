"""
API routes for articles: listing, editing, regeneration and publishing
"""

import asyncio
import logging
from datetime import datetime, timezone
from fastapi import APIRouter, Depends, HTTPException, status
from supabase import Client

from app.dependencies import get_video_processor, get_wordpress_publisher
from app.middleware.auth import verify_supabase_jwt
from app.models.article import ArticleUpdate, PublishResponse, RegenerateRequest
from app.services.video_processor import VideoProcessor
from app.services.wordpress_publisher import WordPressPublisher
from core.config import Config
from core.database import first_row, get_supabase
from core.exceptions import NotFoundError, ValidationError

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/project/{project_id}")
async def list_project_articles(
    project_id: str,
    user_id: str = Depends(verify_supabase_jwt),
    supabase: Client = Depends(get_supabase)
):
    """List the articles of a project with their source video, newest first"""
    try:
        channels = supabase.table('youtube_channels').select('*').eq('project_id', project_id).execute().data or []
        if not channels:
            return []

        videos = supabase.table('videos').select('*').in_(
            'channel_id', [channel['id'] for channel in channels]
        ).execute().data or []
        if not videos:
            return []

        videos_by_id = {video['id']: video for video in videos}
        result = supabase.table('articles').select('*').in_(
            'video_id', list(videos_by_id)
        ).order('created_at', desc=True).execute()

        return [
            {**article, 'videos': videos_by_id.get(article['video_id'])}
            for article in result.data or []
        ]

    except Exception as e:
        logger.error(f"Error fetching articles for project {project_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to fetch articles: {str(e)}"
        )


@router.get("/{article_id}")
async def get_article(
    article_id: str,
    user_id: str = Depends(verify_supabase_jwt),
    supabase: Client = Depends(get_supabase),
    video_processor: VideoProcessor = Depends(get_video_processor)
):
    """Get an article with its video, channel and project"""
    try:
        article = first_row(supabase.table('articles').select('*').eq('id', article_id).limit(1).execute())
        if not article:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Article not found"
            )

        try:
            context = video_processor.load_video_context(article['video_id'])
            article['videos'] = {
                **context['video'],
                'youtube_channels': {**context['channel'], 'projects': context['project']}
            }
        except NotFoundError:
            article['videos'] = None

        return article

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error fetching article {article_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to fetch article: {str(e)}"
        )


@router.put("/{article_id}")
async def update_article(
    article_id: str,
    article: ArticleUpdate,
    user_id: str = Depends(verify_supabase_jwt),
    supabase: Client = Depends(get_supabase)
):
    """Save a manual edit of an article"""
    if not article.title or not article.content:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Title and content are required"
        )

    try:
        result = supabase.table('articles').update({
            'title': article.title,
            'content': article.content,
            'language': article.language or Config.DEFAULT_LANGUAGE,
            'updated_at': datetime.now(timezone.utc).isoformat()
        }).eq('id', article_id).execute()

        if not result.data:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Article not found"
            )

        return result.data[0]

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error updating article {article_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to update article: {str(e)}"
        )


@router.post("/{video_id}/regenerate")
async def regenerate_article(
    video_id: str,
    request: RegenerateRequest,
    user_id: str = Depends(verify_supabase_jwt),
    video_processor: VideoProcessor = Depends(get_video_processor)
):
    """Generate the article of a video again from its stored transcript"""
    try:
        return await video_processor.regenerate_article(video_id, request.language)

    except NotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Video not found"
        )
    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )
    except Exception as e:
        logger.error(f"Error regenerating article for video {video_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to regenerate article: {str(e)}"
        )


@router.post("/{article_id}/publish", response_model=PublishResponse)
async def publish_article(
    article_id: str,
    user_id: str = Depends(verify_supabase_jwt),
    publisher: WordPressPublisher = Depends(get_wordpress_publisher)
):
    """Publish an article to the project's WordPress site as a draft"""
    try:
        result = await asyncio.to_thread(publisher.publish_article, article_id)
        return PublishResponse(**result)

    except NotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e)
        )
    except Exception as e:
        logger.error(f"Error publishing article {article_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to publish article to WordPress: {str(e)}"
        )


@router.delete("/{article_id}")
async def delete_article(
    article_id: str,
    user_id: str = Depends(verify_supabase_jwt),
    supabase: Client = Depends(get_supabase)
):
    try:
        supabase.table('articles').delete().eq('id', article_id).execute()
        return {"message": "Article deleted successfully"}

    except Exception as e:
        logger.error(f"Error deleting article {article_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to delete article: {str(e)}"
        )
