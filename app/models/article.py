"""
Pydantic models for articles
"""

from pydantic import BaseModel
from typing import Optional


class ArticleUpdate(BaseModel):
    """Manual article edit (title and content are checked by the route)"""
    title: Optional[str] = None
    content: Optional[str] = None
    language: Optional[str] = None


class RegenerateRequest(BaseModel):
    language: Optional[str] = None


class PublishResponse(BaseModel):
    """Response model for POST /api/articles/{id}/publish"""
    article_id: str
    wordpress_post_id: int
    post_url: Optional[str] = None
