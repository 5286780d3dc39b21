"""
Authentication Middleware

Provides Supabase JWT authentication for protected endpoints.
Tokens are validated by Supabase Auth through the shared client.
"""

import logging
from fastapi import Depends, Header, HTTPException, Request, status
from typing import Dict, Optional

from core.config import Config
from core.database import get_supabase

logger = logging.getLogger(__name__)

DEV_USER = {
    'id': Config.DEV_USER_ID,
    'email': 'dev@example.com',
    'name': 'Development User',
    'isAdmin': True
}


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def user_to_dict(user) -> Dict:
    """Convert a Supabase Auth user object to the API user shape"""
    metadata = getattr(user, 'user_metadata', None) or {}
    return {
        'id': user.id,
        'email': getattr(user, 'email', None),
        'name': metadata.get('name') or getattr(user, 'email', None),
        'isAdmin': bool(metadata.get('is_admin', False))
    }


async def get_current_user(request: Request, authorization: Optional[str] = Header(None)) -> Dict:
    """
    Resolve the authenticated user from the Authorization header

    Args:
        request: Incoming request (gives access to the Supabase client)
        authorization: Authorization header value (Bearer TOKEN)

    Returns:
        User dictionary with id, email, name and isAdmin

    Raises:
        HTTPException: If token is missing or invalid
    """
    if Config.is_auth_bypassed():
        logger.debug("*** DEV MODE: Authentication bypassed ***")
        return dict(DEV_USER)

    if not authorization:
        logger.warning("🔒 API request without Authorization header")
        raise _unauthorized("Missing Authorization header")

    parts = authorization.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        logger.warning("🔒 Invalid Authorization format")
        raise _unauthorized("Invalid Authorization header format. Expected: Bearer <token>")

    token = parts[1]

    try:
        supabase = get_supabase(request)
        user_response = supabase.auth.get_user(token)

        if not user_response or not user_response.user:
            logger.warning("🔒 Invalid token - no user found")
            raise _unauthorized("Invalid authentication token")

        user = user_to_dict(user_response.user)
        logger.debug(f"✅ JWT validated successfully for user: {user['id']}")
        return user

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"❌ Error verifying JWT: {str(e)}")
        raise _unauthorized("Invalid authentication token")


async def verify_supabase_jwt(user: Dict = Depends(get_current_user)) -> str:
    """Dependency returning only the authenticated user's ID"""
    return user['id']
