"""
Pydantic models for authentication requests/responses
"""

from pydantic import BaseModel
from typing import Optional


class SignupRequest(BaseModel):
    """Request model for POST /api/auth/signup"""
    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None


class LoginRequest(BaseModel):
    """Request model for POST /api/auth/login"""
    email: Optional[str] = None
    password: Optional[str] = None


class User(BaseModel):
    id: str
    email: Optional[str] = None
    name: Optional[str] = None
    isAdmin: bool = False


class AuthResponse(BaseModel):
    """Response model for signup and login"""
    message: str
    token: Optional[str] = None
    user: User
