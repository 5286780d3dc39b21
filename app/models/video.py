"""
Pydantic models for videos
"""

from pydantic import BaseModel, Field
from typing import Optional


class VideoCreate(BaseModel):
    """Request model for manually adding a video"""
    channel_id: Optional[str] = Field(None, alias="channelId", description="Database ID of the channel")
    video_id: Optional[str] = Field(None, alias="videoId", description="External YouTube video ID")
    title: Optional[str] = None
    description: Optional[str] = None

    class Config:
        populate_by_name = True


class TranscriptResponse(BaseModel):
    videoId: str
    transcript: str
