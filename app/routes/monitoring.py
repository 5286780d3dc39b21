"""
API routes for monitoring runs
"""

import logging
from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, status

from app.dependencies import get_monitoring_service, get_scheduler
from app.middleware.auth import verify_supabase_jwt
from app.models.monitoring import MonitoringLogsResponse, MonitoringTriggerResponse
from app.services.monitoring_service import MonitoringService

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/trigger", response_model=MonitoringTriggerResponse)
async def trigger_monitoring(
    background_tasks: BackgroundTasks,
    user_id: str = Depends(verify_supabase_jwt),
    monitoring_service: MonitoringService = Depends(get_monitoring_service)
):
    """
    Start a monitoring run in the background

    Returns immediately; the run's outcome is recorded in the monitoring logs.
    """
    logger.info("🔔 Manual monitoring triggered")
    background_tasks.add_task(monitoring_service.run_monitoring_now)

    return MonitoringTriggerResponse(
        success=True,
        message="Monitoring started in the background"
    )


@router.get("/logs", response_model=MonitoringLogsResponse)
async def get_monitoring_logs(
    user_id: str = Depends(verify_supabase_jwt),
    monitoring_service: MonitoringService = Depends(get_monitoring_service),
    scheduler=Depends(get_scheduler)
):
    """Recent monitoring runs and the next scheduled run times"""
    try:
        return MonitoringLogsResponse(
            success=True,
            data=monitoring_service.get_logs(),
            nextRuns=scheduler.get_next_run_times() if scheduler else {}
        )

    except Exception as e:
        logger.error(f"Error fetching monitoring logs: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to fetch monitoring logs: {str(e)}"
        )
