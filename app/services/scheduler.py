"""
Monitoring scheduler

Runs monitoring passes on cron schedules with APScheduler.
"""

import logging
from typing import Dict, List, Optional
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger

from core.config import Config
from app.services.monitoring_service import MonitoringService


class MonitoringScheduler:
    """Owns the AsyncIOScheduler and the monitoring jobs"""

    def __init__(self, monitoring_service: MonitoringService, schedules: Optional[Dict[str, Optional[str]]] = None):
        self.monitoring_service = monitoring_service
        self.schedules = schedules if schedules is not None else Config.get_cron_schedules()
        self.scheduler = AsyncIOScheduler()
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    async def run_job(self, trigger: str) -> None:
        """Job body: a failed run is logged and the schedule keeps going"""
        self.logger.info(f"⏰ Running {trigger} check for new videos")
        try:
            await self.monitoring_service.check_for_new_videos(trigger)
        except Exception as e:
            self.logger.error(f"Error in {trigger} monitoring job: {e}")

    def add_jobs(self) -> List[str]:
        """Register one cron job per configured schedule"""
        job_ids = []
        for trigger, expression in self.schedules.items():
            if not expression:
                self.logger.info(f"No schedule for {trigger} monitoring, job not registered")
                continue

            job = self.scheduler.add_job(
                self.run_job,
                CronTrigger.from_crontab(expression),
                args=[trigger],
                id=f"monitoring_{trigger}",
                replace_existing=True
            )
            job_ids.append(job.id)
            self.logger.info(f"Scheduled {trigger} monitoring with cron '{expression}'")

        return job_ids

    def start(self) -> None:
        """Register jobs and start; must be called from a running event loop"""
        self.add_jobs()
        self.scheduler.start()
        self.logger.info("✅ Monitoring scheduler started")

    def shutdown(self) -> None:
        if self.scheduler.running:
            self.scheduler.shutdown(wait=False)
            self.logger.info("Monitoring scheduler stopped")

    def get_next_run_times(self) -> Dict[str, Optional[str]]:
        next_runs = {}
        for job in self.scheduler.get_jobs():
            next_run = getattr(job, 'next_run_time', None)
            next_runs[job.id] = next_run.isoformat() if next_run else None
        return next_runs
