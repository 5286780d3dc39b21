"""
Supabase client handle

The client is created once at process start (FastAPI lifespan or CLI entry
point) and handed to services and routes explicitly.
"""

import os
import logging
from typing import Any, Dict, Optional
from fastapi import Request
from supabase import create_client, Client

logger = logging.getLogger(__name__)


def create_supabase_client(url: Optional[str] = None, key: Optional[str] = None) -> Client:
    """
    Create a Supabase client using the service role key

    Args:
        url: Supabase project URL (defaults to SUPABASE_URL)
        key: Service role key (defaults to SUPABASE_SERVICE_ROLE_KEY)

    Returns:
        Initialized Supabase client

    Raises:
        ValueError: If credentials are missing
    """
    supabase_url = url or os.getenv('SUPABASE_URL')
    supabase_key = key or os.getenv('SUPABASE_SERVICE_ROLE_KEY')

    if not supabase_url or not supabase_key:
        raise ValueError("SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY must be set")

    client = create_client(supabase_url, supabase_key)
    logger.info("✅ Supabase client initialized")
    return client


def get_supabase(request: Request) -> Client:
    """FastAPI dependency returning the client attached to the application state"""
    supabase = getattr(request.app.state, 'supabase', None)
    if supabase is None:
        raise RuntimeError("Supabase client not initialized")
    return supabase


def first_row(result: Any) -> Optional[Dict]:
    """Return the first row of a query result, or None"""
    if result is None or not result.data:
        return None
    return result.data[0]
