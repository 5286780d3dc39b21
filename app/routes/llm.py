"""
API routes for per-project LLM settings
"""

import asyncio
import logging
from datetime import datetime, timezone
from fastapi import APIRouter, Depends, HTTPException, status
from supabase import Client

from app.dependencies import get_article_generator
from app.middleware.auth import verify_supabase_jwt
from app.models.llm_settings import LLMSettingsUpdate, LLMVerifyRequest
from app.models.wordpress_site import VerifyResponse
from core.config import Config
from core.database import first_row, get_supabase
from core.text_utils import mask_secret
from processors.article_generator import ArticleGenerator

logger = logging.getLogger(__name__)
router = APIRouter()

SUPPORTED_PROVIDERS = {
    'mistral': 'Mistral',
    'openai': 'OpenAI',
    'anthropic': 'Anthropic',
}


def _sanitize(settings: dict) -> dict:
    return {**settings, 'api_key': mask_secret(settings.get('api_key'))}


@router.get("/project/{project_id}")
async def get_llm_settings(
    project_id: str,
    user_id: str = Depends(verify_supabase_jwt),
    supabase: Client = Depends(get_supabase)
):
    """Get the LLM settings of a project, or the defaults when none are stored"""
    try:
        settings = first_row(
            supabase.table('llm_settings').select('*').eq('project_id', project_id).limit(1).execute()
        )

        if not settings:
            return {
                'project_id': project_id,
                'provider': Config.DEFAULT_LLM_PROVIDER,
                'model_name': Config.DEFAULT_MISTRAL_MODEL,
                'api_key': None
            }

        return _sanitize(settings)

    except Exception as e:
        logger.error(f"Error fetching LLM settings for project {project_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to fetch LLM settings: {str(e)}"
        )


@router.put("/project/{project_id}")
async def update_llm_settings(
    project_id: str,
    settings: LLMSettingsUpdate,
    user_id: str = Depends(verify_supabase_jwt),
    supabase: Client = Depends(get_supabase)
):
    """Create or update LLM settings; the stored key is kept when none is sent"""
    if not settings.provider or not settings.model_name:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Provider and model name are required"
        )

    provider = settings.provider.lower()
    if provider not in SUPPORTED_PROVIDERS:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Unsupported provider: {settings.provider}"
        )

    try:
        existing = first_row(
            supabase.table('llm_settings').select('*').eq('project_id', project_id).limit(1).execute()
        )

        if existing:
            update_data = {
                'provider': provider,
                'model_name': settings.model_name,
                'updated_at': datetime.now(timezone.utc).isoformat()
            }
            if settings.api_key:
                update_data['api_key'] = settings.api_key

            result = supabase.table('llm_settings').update(update_data).eq('id', existing['id']).execute()
        else:
            result = supabase.table('llm_settings').insert({
                'project_id': project_id,
                'provider': provider,
                'model_name': settings.model_name,
                'api_key': settings.api_key or None
            }).execute()

        saved = first_row(result)
        if not saved:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Failed to save LLM settings"
            )

        logger.info(f"Saved LLM settings for project {project_id}: {provider}/{settings.model_name}")
        return _sanitize(saved)

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error updating LLM settings for project {project_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to update LLM settings: {str(e)}"
        )


@router.post("/verify", response_model=VerifyResponse)
async def verify_llm_key(
    request: LLMVerifyRequest,
    user_id: str = Depends(verify_supabase_jwt),
    article_generator: ArticleGenerator = Depends(get_article_generator)
):
    """Check an API key against its provider"""
    if not request.provider or not request.api_key:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Provider and API key are required"
        )

    provider = request.provider.lower()
    provider_name = SUPPORTED_PROVIDERS.get(provider)
    if not provider_name:
        return VerifyResponse(valid=False, message=f"Unsupported provider: {request.provider}")

    is_valid = await asyncio.to_thread(article_generator.verify_api_key, provider, request.api_key)

    return VerifyResponse(
        valid=is_valid,
        message=f"{provider_name} API key is valid" if is_valid else f"Invalid {provider_name} API key"
    )
