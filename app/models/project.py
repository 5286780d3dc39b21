"""
Pydantic models for projects
"""

from pydantic import BaseModel, Field
from typing import Optional


class ProjectCreate(BaseModel):
    """Model for creating a project (name is checked by the route to return 400)"""
    name: Optional[str] = None
    description: Optional[str] = None
    language: Optional[str] = Field(None, description="Article language code, e.g. 'en'")
    auto_monitoring: Optional[bool] = None


class ProjectUpdate(ProjectCreate):
    """Model for updating a project"""
    pass
