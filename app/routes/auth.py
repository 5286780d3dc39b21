"""
Authentication Routes

Signup and login through Supabase Auth, plus the current user lookup.
"""

import logging
from fastapi import APIRouter, Depends, HTTPException, status
from supabase import Client
from typing import Dict

from app.middleware.auth import get_current_user, user_to_dict
from app.models.auth import AuthResponse, LoginRequest, SignupRequest, User
from core.database import get_supabase

logger = logging.getLogger(__name__)

router = APIRouter()


def _access_token(auth_response):
    session = getattr(auth_response, 'session', None)
    return session.access_token if session else None


@router.post("/signup", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def signup(request: SignupRequest, supabase: Client = Depends(get_supabase)):
    """
    Register a new user

    Returns a token only when the Supabase project does not require
    email confirmation.
    """
    logger.info(f"Signup request received with email: {request.email}")

    if not request.name or not request.email or not request.password:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Name, email and password are required"
        )

    try:
        auth_response = supabase.auth.sign_up({
            'email': request.email,
            'password': request.password,
            'options': {'data': {'name': request.name}}
        })
    except Exception as e:
        logger.error(f"Signup error: {e}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Failed to create user account: {str(e)}"
        )

    if not auth_response or not auth_response.user:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create user account: No user data returned"
        )

    logger.info(f"✅ User created: {request.email}")
    return AuthResponse(
        message="User created successfully",
        token=_access_token(auth_response),
        user=User(**user_to_dict(auth_response.user))
    )


@router.post("/login", response_model=AuthResponse)
async def login(request: LoginRequest, supabase: Client = Depends(get_supabase)):
    """Authenticate with email and password"""
    logger.info(f"Login attempt with email: {request.email}")

    if not request.email or not request.password:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email and password are required"
        )

    try:
        auth_response = supabase.auth.sign_in_with_password({
            'email': request.email,
            'password': request.password
        })
    except Exception as e:
        logger.info(f"Login failed for {request.email}: {e}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials"
        )

    if not auth_response or not auth_response.user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials"
        )

    logger.info(f"Login successful for user: {request.email}")
    return AuthResponse(
        message="Authentication successful",
        token=_access_token(auth_response),
        user=User(**user_to_dict(auth_response.user))
    )


@router.get("/me", response_model=User)
async def me(user: Dict = Depends(get_current_user)):
    """Get current user info"""
    return User(**user)
