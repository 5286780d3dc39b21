"""
Pydantic models for WordPress sites
"""

from pydantic import BaseModel, Field
from typing import Optional


class WordPressSiteRequest(BaseModel):
    """Credentials of a WordPress site (verify, create and update)"""
    url: Optional[str] = Field(None, description="Base URL of the WordPress site")
    username: Optional[str] = None
    application_password: Optional[str] = Field(None, description="WordPress application password")


class VerifyResponse(BaseModel):
    """Response model for credential and API key verification"""
    valid: bool
    message: str
