"""
APScheduler integration for the token refresh jobs.

Both jobs run on a fixed interval, independent of when the tokens
actually expire. Nothing is persisted in the job store: the schedule
is static and re-registered on every start.
"""

import logging
from typing import Optional

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.executors.pool import ThreadPoolExecutor
from apscheduler.events import (
    EVENT_JOB_ERROR,
    EVENT_JOB_EXECUTED,
    EVENT_JOB_MISSED,
)

from mixtape.config.settings import TOKEN_REFRESH_MINUTES
from mixtape.services.token_jobs import (
    refresh_client_access_token,
    refresh_server_access_token,
)

logger = logging.getLogger(__name__)

CLIENT_TOKEN_JOB_ID = "refresh_client_access_token"
SERVER_TOKEN_JOB_ID = "refresh_server_access_token"

# Global scheduler instance
_scheduler: Optional[BackgroundScheduler] = None


def _on_job_executed(event):
    """Listener for finished job execution."""
    logger.debug(f"Job {event.job_id} executed")


def _on_job_error(event):
    """Listener for failed job execution."""
    logger.error(
        f"Job {event.job_id} failed with exception: "
        f"{event.exception}",
        exc_info=event.traceback,
    )


def _on_job_missed(event):
    """Listener for missed job execution."""
    logger.warning(
        f"Job {event.job_id} missed its scheduled run time"
    )


def register_token_jobs(
    scheduler: BackgroundScheduler,
    minutes: int = TOKEN_REFRESH_MINUTES,
) -> None:
    """Add both refresh jobs to a scheduler, replacing existing ones."""
    scheduler.add_job(
        refresh_client_access_token,
        trigger="interval",
        minutes=minutes,
        id=CLIENT_TOKEN_JOB_ID,
        name="Refresh client access token",
        replace_existing=True,
    )
    scheduler.add_job(
        refresh_server_access_token,
        trigger="interval",
        minutes=minutes,
        id=SERVER_TOKEN_JOB_ID,
        name="Refresh server access token",
        replace_existing=True,
    )


def init_scheduler(
    enabled: bool = True,
    minutes: int = TOKEN_REFRESH_MINUTES,
) -> Optional[BackgroundScheduler]:
    """
    Create, configure and start the BackgroundScheduler.

    Returns:
        The running scheduler, or None if disabled or startup failed.
    """
    global _scheduler

    if not enabled:
        logger.info("Scheduler disabled by configuration")
        return None

    if _scheduler is not None and _scheduler.running:
        logger.warning(
            "Scheduler already running, skipping re-init"
        )
        return _scheduler

    try:
        _scheduler = BackgroundScheduler(
            executors={"default": ThreadPoolExecutor(max_workers=2)},
            job_defaults={
                "coalesce": True,
                "max_instances": 1,
                "misfire_grace_time": 60,
            },
        )

        _scheduler.add_listener(
            _on_job_executed, EVENT_JOB_EXECUTED
        )
        _scheduler.add_listener(_on_job_error, EVENT_JOB_ERROR)
        _scheduler.add_listener(_on_job_missed, EVENT_JOB_MISSED)

        register_token_jobs(_scheduler, minutes=minutes)

        _scheduler.start()
        logger.info(
            f"APScheduler started, refreshing tokens every "
            f"{minutes} minutes"
        )
        return _scheduler

    except Exception as e:
        logger.error(
            f"Failed to initialize scheduler: {e}",
            exc_info=True,
        )
        _scheduler = None
        return None


def get_scheduler() -> Optional[BackgroundScheduler]:
    return _scheduler


def shutdown_scheduler() -> None:
    global _scheduler

    if _scheduler is not None and _scheduler.running:
        _scheduler.shutdown(wait=False)
        logger.info("APScheduler shut down")
    _scheduler = None
