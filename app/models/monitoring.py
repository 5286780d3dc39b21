"""
Pydantic models for monitoring endpoints
"""

from pydantic import BaseModel, Field
from typing import Any, Dict, List


class MonitoringTriggerResponse(BaseModel):
    success: bool
    message: str


class MonitoringLogsResponse(BaseModel):
    """Response model for GET /api/monitoring/logs"""
    success: bool
    data: List[Dict[str, Any]] = Field(default_factory=list, description="Most recent runs, newest first")
    nextRuns: Dict[str, Any] = Field(default_factory=dict, description="Next run time per scheduled job")
