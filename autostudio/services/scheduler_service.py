"""
AutoStudio - Background Scheduler
Periodic trend auto-refresh using APScheduler for in-process job scheduling.

Only one auto-refresh job exists at a time: it is registered under a fixed id
with replace_existing, and max_instances=1 keeps ticks from overlapping.
"""
import logging
from datetime import datetime
from typing import Dict, Any

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.interval import IntervalTrigger

logger = logging.getLogger(__name__)

AUTO_REFRESH_JOB_ID = 'trend_auto_refresh'


class SchedulerService:
    """Owns the BackgroundScheduler for one application"""

    def __init__(self, state, interval_minutes: int = 5):
        self.state = state
        self.interval_minutes = interval_minutes
        self.scheduler = BackgroundScheduler(
            job_defaults={
                'coalesce': True,  # Combine missed runs into one
                'max_instances': 1,  # Only one instance of each job at a time
                'misfire_grace_time': 60
            }
        )

    def start(self) -> None:
        if not self.scheduler.running:
            self.scheduler.start()
            logger.info("Background scheduler started")

    def shutdown(self) -> None:
        if self.scheduler.running:
            self.scheduler.shutdown(wait=False)
            logger.info("Background scheduler stopped")

    def enable_auto_refresh(
        self,
        niche: str,
        country: str = 'GLOBAL',
        category: str = 'all',
        api_key: str = None
    ) -> Dict[str, Any]:
        """(Re)register the auto-refresh job with new parameters"""
        # Jobs added to a stopped scheduler are only queued, without replacement
        self.start()
        self.scheduler.add_job(
            func=run_trend_refresh,
            trigger=IntervalTrigger(minutes=self.interval_minutes),
            id=AUTO_REFRESH_JOB_ID,
            name='Trend Auto-Refresh',
            replace_existing=True,
            max_instances=1,
            coalesce=True,
            kwargs={
                'state': self.state,
                'niche': niche,
                'country': country,
                'category': category,
                'api_key': api_key
            }
        )
        self.state.activity.info(f"Auto-refresh enabled. Syncing every {self.interval_minutes} minutes...")
        return self.get_status()

    def disable_auto_refresh(self) -> Dict[str, Any]:
        if self.scheduler.get_job(AUTO_REFRESH_JOB_ID):
            self.scheduler.remove_job(AUTO_REFRESH_JOB_ID)
            self.state.activity.info("Auto-refresh disabled.")
        return self.get_status()

    @property
    def auto_refresh_enabled(self) -> bool:
        return self.scheduler.get_job(AUTO_REFRESH_JOB_ID) is not None

    def get_status(self) -> Dict[str, Any]:
        """Get current scheduler status and job list"""
        jobs = []
        for job in self.scheduler.get_jobs():
            next_run = getattr(job, 'next_run_time', None)
            jobs.append({
                'id': job.id,
                'name': job.name,
                'next_run': next_run.isoformat() if next_run else None,
                'trigger': str(job.trigger)
            })

        return {
            'status': 'running' if self.scheduler.running else 'stopped',
            'auto_refresh': self.auto_refresh_enabled,
            'jobs': jobs
        }


def run_trend_refresh(state, niche: str, country: str = 'GLOBAL', category: str = 'all', api_key: str = None):
    """One auto-refresh tick: fetch trends and store them as the latest snapshot"""
    logger.info(f"Trend auto-refresh running at {datetime.utcnow().isoformat()}")
    state.activity.info(f"Initiating Scheduled Scan: {niche} | {country} | {category}")
    try:
        trends = state.ai.fetch_trending_topics(niche, country, category, api_key=api_key)
    except Exception as e:
        state.activity.error(f"Sync Error: {e}")
        return None

    state.set_latest_trends(trends, niche=niche, country=country, category=category)
    state.activity.success(f"Success: Found {len(trends)} breakout topics.")
    return trends
