"""
Pydantic models for YouTube channels
"""

from pydantic import BaseModel, Field
from typing import Optional


class ChannelValidateRequest(BaseModel):
    """Request model for POST /api/youtube/validate"""
    channel_id: Optional[str] = Field(None, alias="channelId")

    class Config:
        populate_by_name = True


class ChannelCreate(BaseModel):
    """Request model for adding or updating a channel"""
    channel_id: Optional[str] = Field(None, alias="channelId", description="External YouTube channel ID (UC...)")
    channel_name: Optional[str] = Field(None, alias="channelName")

    class Config:
        populate_by_name = True


class ChannelValidateResponse(BaseModel):
    valid: bool
    channelId: Optional[str] = None
    channelName: Optional[str] = None
    videoCount: Optional[int] = None
    message: Optional[str] = None


class ChannelCheckResponse(BaseModel):
    """Response model for single channel and all channel checks"""
    message: str
    newVideosCount: int
    newVideoIds: list
