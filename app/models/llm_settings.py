"""
Pydantic models for per-project LLM settings
"""

from pydantic import BaseModel, Field
from typing import Optional


class LLMSettingsUpdate(BaseModel):
    """Provider and model are required; an omitted api_key keeps the stored one"""
    provider: Optional[str] = Field(None, description="mistral, openai or anthropic")
    model_name: Optional[str] = None
    api_key: Optional[str] = None


class LLMVerifyRequest(BaseModel):
    provider: Optional[str] = None
    api_key: Optional[str] = None
