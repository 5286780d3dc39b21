"""
API routes for project management
"""

import logging
from datetime import datetime, timezone
from fastapi import APIRouter, Depends, HTTPException, status
from supabase import Client

from app.middleware.auth import verify_supabase_jwt
from app.models.project import ProjectCreate, ProjectUpdate
from core.config import Config
from core.database import first_row, get_supabase
from core.text_utils import mask_secret

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("")
async def list_projects(
    user_id: str = Depends(verify_supabase_jwt),
    supabase: Client = Depends(get_supabase)
):
    """List all projects, newest first"""
    try:
        result = supabase.table('projects').select('*').order('created_at', desc=True).execute()
        return result.data or []

    except Exception as e:
        logger.error(f"Error fetching projects: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to fetch projects: {str(e)}"
        )


@router.get("/{project_id}")
async def get_project(
    project_id: str,
    user_id: str = Depends(verify_supabase_jwt),
    supabase: Client = Depends(get_supabase)
):
    """
    Get a project with its WordPress sites, YouTube channels and LLM settings

    Secrets are masked in the response.
    """
    try:
        project = first_row(supabase.table('projects').select('*').eq('id', project_id).limit(1).execute())
        if not project:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Project not found"
            )

        sites = supabase.table('wordpress_sites').select('*').eq('project_id', project_id).execute().data or []
        channels = supabase.table('youtube_channels').select('*').eq('project_id', project_id).execute().data or []
        llm_settings = supabase.table('llm_settings').select('*').eq('project_id', project_id).execute().data or []

        return {
            **project,
            'wordpressSites': [
                {**site, 'application_password': mask_secret(site.get('application_password'))}
                for site in sites
            ],
            'youtubeChannels': channels,
            'llmSettings': [
                {**settings, 'api_key': mask_secret(settings.get('api_key'))}
                for settings in llm_settings
            ]
        }

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error fetching project {project_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to fetch project: {str(e)}"
        )


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_project(
    project: ProjectCreate,
    user_id: str = Depends(verify_supabase_jwt),
    supabase: Client = Depends(get_supabase)
):
    """Create a new project"""
    if not project.name:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Project name is required"
        )

    try:
        result = supabase.table('projects').insert({
            'name': project.name,
            'description': project.description or '',
            'language': project.language or Config.DEFAULT_LANGUAGE,
            'auto_monitoring': project.auto_monitoring if project.auto_monitoring is not None else True
        }).execute()

        created = first_row(result)
        if not created:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Failed to create project"
            )

        logger.info(f"Created project: {project.name}")
        return created

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error creating project: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to create project: {str(e)}"
        )


@router.put("/{project_id}")
async def update_project(
    project_id: str,
    project: ProjectUpdate,
    user_id: str = Depends(verify_supabase_jwt),
    supabase: Client = Depends(get_supabase)
):
    """Update a project; language and auto_monitoring change only when provided"""
    if not project.name:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Project name is required"
        )

    try:
        update_data = {
            'name': project.name,
            'description': project.description or '',
            'updated_at': datetime.now(timezone.utc).isoformat()
        }
        if project.language is not None:
            update_data['language'] = project.language
        if project.auto_monitoring is not None:
            update_data['auto_monitoring'] = project.auto_monitoring

        result = supabase.table('projects').update(update_data).eq('id', project_id).execute()

        if not result.data:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Project not found"
            )

        return result.data[0]

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error updating project {project_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to update project: {str(e)}"
        )


@router.delete("/{project_id}")
async def delete_project(
    project_id: str,
    user_id: str = Depends(verify_supabase_jwt),
    supabase: Client = Depends(get_supabase)
):
    try:
        supabase.table('projects').delete().eq('id', project_id).execute()
        logger.info(f"Deleted project: {project_id}")
        return {"message": "Project deleted successfully"}

    except Exception as e:
        logger.error(f"Error deleting project {project_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to delete project: {str(e)}"
        )
