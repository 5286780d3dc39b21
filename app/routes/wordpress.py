"""
API routes for WordPress site management
"""

import logging
from datetime import datetime, timezone
from fastapi import APIRouter, Depends, HTTPException, status
from supabase import Client

from app.dependencies import get_wordpress_client_factory
from app.middleware.auth import verify_supabase_jwt
from app.models.wordpress_site import VerifyResponse, WordPressSiteRequest
from core.database import first_row, get_supabase
from core.text_utils import mask_secret

logger = logging.getLogger(__name__)
router = APIRouter()


def _sanitize(site: dict) -> dict:
    return {**site, 'application_password': mask_secret(site.get('application_password'))}


def _require_credentials(site: WordPressSiteRequest) -> None:
    if not site.url or not site.username or not site.application_password:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="URL, username, and application password are required"
        )


@router.get("/project/{project_id}")
async def list_sites(
    project_id: str,
    user_id: str = Depends(verify_supabase_jwt),
    supabase: Client = Depends(get_supabase)
):
    """List the WordPress sites of a project (passwords masked)"""
    try:
        result = supabase.table('wordpress_sites').select('*').eq(
            'project_id', project_id
        ).order('created_at', desc=True).execute()

        return [_sanitize(site) for site in result.data or []]

    except Exception as e:
        logger.error(f"Error fetching WordPress sites for project {project_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to fetch WordPress sites: {str(e)}"
        )


@router.post("/verify", response_model=VerifyResponse)
async def verify_site(
    site: WordPressSiteRequest,
    user_id: str = Depends(verify_supabase_jwt),
    client_factory=Depends(get_wordpress_client_factory)
):
    """Check WordPress credentials against the site's REST API"""
    _require_credentials(site)

    try:
        client = client_factory(site.url, site.username, site.application_password)
        is_valid = client.verify_credentials()

        return VerifyResponse(
            valid=is_valid,
            message="WordPress credentials are valid" if is_valid else "Invalid WordPress credentials"
        )

    except Exception as e:
        logger.error(f"Error verifying WordPress credentials: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to verify WordPress credentials: {str(e)}"
        )


@router.post("/project/{project_id}", status_code=status.HTTP_201_CREATED)
async def add_site(
    project_id: str,
    site: WordPressSiteRequest,
    user_id: str = Depends(verify_supabase_jwt),
    supabase: Client = Depends(get_supabase),
    client_factory=Depends(get_wordpress_client_factory)
):
    """
    Add a WordPress site to a project

    Credentials are verified before the site is stored.
    """
    _require_credentials(site)

    try:
        client = client_factory(site.url, site.username, site.application_password)
        if not client.verify_credentials():
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Invalid WordPress credentials"
            )

        existing = supabase.table('wordpress_sites').select('*').eq(
            'project_id', project_id
        ).eq('url', site.url).limit(1).execute()

        if existing.data:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="This WordPress site is already added to the project"
            )

        result = supabase.table('wordpress_sites').insert({
            'project_id': project_id,
            'url': site.url,
            'username': site.username,
            'application_password': site.application_password
        }).execute()

        created = first_row(result)
        if not created:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Failed to add WordPress site"
            )

        logger.info(f"Added WordPress site {site.url} to project {project_id}")
        return _sanitize(created)

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error adding WordPress site to project {project_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to add WordPress site: {str(e)}"
        )


@router.put("/{site_id}")
async def update_site(
    site_id: str,
    site: WordPressSiteRequest,
    user_id: str = Depends(verify_supabase_jwt),
    supabase: Client = Depends(get_supabase),
    client_factory=Depends(get_wordpress_client_factory)
):
    """Update a site; the stored password is kept when none is provided"""
    if not site.url or not site.username:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="URL and username are required"
        )

    try:
        if site.application_password:
            client = client_factory(site.url, site.username, site.application_password)
            if not client.verify_credentials():
                raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    detail="Invalid WordPress credentials"
                )

        current = first_row(supabase.table('wordpress_sites').select('*').eq('id', site_id).limit(1).execute())
        if not current:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="WordPress site not found"
            )

        update_data = {
            'url': site.url,
            'username': site.username,
            'updated_at': datetime.now(timezone.utc).isoformat()
        }
        if site.application_password:
            update_data['application_password'] = site.application_password

        result = supabase.table('wordpress_sites').update(update_data).eq('id', site_id).execute()
        return _sanitize(first_row(result) or {**current, **update_data})

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error updating WordPress site {site_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to update WordPress site: {str(e)}"
        )


@router.delete("/{site_id}")
async def delete_site(
    site_id: str,
    user_id: str = Depends(verify_supabase_jwt),
    supabase: Client = Depends(get_supabase)
):
    try:
        supabase.table('wordpress_sites').delete().eq('id', site_id).execute()
        return {"message": "WordPress site deleted successfully"}

    except Exception as e:
        logger.error(f"Error deleting WordPress site {site_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to delete WordPress site: {str(e)}"
        )
