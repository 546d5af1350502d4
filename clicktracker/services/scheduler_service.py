"""
Background scheduler for the daily decay sweep.

A job checks every minute and sweeps all goals once per day, as soon as
the configured decay_sweep_time has been reached.
"""
import logging
from datetime import datetime
from typing import Optional
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger

from clicktracker.database import SessionLocal
from clicktracker.constants import DEFAULT_DECAY_SWEEP_TIME
from clicktracker.exceptions import ClickTrackerException
from clicktracker.repositories.settings_repository import SettingsRepository
from clicktracker.services.date_service import DateService
from clicktracker.services.decay_service import DecayService

logger = logging.getLogger("clicktracker.scheduler")

scheduler = AsyncIOScheduler()


def _normalize_time(time_str: Optional[str]) -> str:
    """
    Bring a time to HHMM for comparison.
    Examples: '00:05' -> '0005', '0005' -> '0005', None -> '0000'
    """
    if not time_str:
        return "0000"
    return time_str.replace(":", "")


def is_sweep_due(settings, now: datetime) -> bool:
    """The sweep runs once a day, at or after decay_sweep_time"""
    if not settings.decay_enabled:
        return False
    current_time = now.strftime("%H%M")
    target_time = _normalize_time(settings.decay_sweep_time or DEFAULT_DECAY_SWEEP_TIME)
    return int(current_time) >= int(target_time) and settings.last_decay_sweep_date != now.date()


def run_decay_sweep(now: Optional[datetime] = None, session_factory=SessionLocal) -> Optional[int]:
    """
    Run the decay sweep if it is due.

    Returns:
        Number of goals that lost points, None when the sweep was not due
    """
    now = now or DateService.now()
    db = session_factory()
    try:
        settings = SettingsRepository.get_or_create(db)
        if not is_sweep_due(settings, now):
            return None

        logger.info(f"Executing decay sweep (Current: {now.strftime('%H:%M')}, Target: {settings.decay_sweep_time})")
        charged = DecayService(db).sweep_all(now)
        logger.info(f"Decay sweep finished: {charged} goal(s) lost points")
        return charged
    except ClickTrackerException as e:
        logger.error(f"Scheduler Error (Decay Sweep): {e}")
        return None
    finally:
        db.close()


async def decay_sweep_job():
    run_decay_sweep()


def start_scheduler():
    """Start the scheduler"""
    if not scheduler.running:
        scheduler.add_job(
            decay_sweep_job,
            CronTrigger(minute='*'),
            id='decay_sweep',
            replace_existing=True
        )
        scheduler.start()
        logger.info(">>> APScheduler STARTED <<<")
        logger.info(f"Scheduled jobs: {[job.id for job in scheduler.get_jobs()]}")


def stop_scheduler():
    """Stop the scheduler"""
    if scheduler.running:
        scheduler.shutdown()
        logger.info("APScheduler stopped")
