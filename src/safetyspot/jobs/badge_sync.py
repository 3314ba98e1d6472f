"""Background scheduler for the nightly score-threshold badge sync."""

from __future__ import annotations

import logging

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from fastapi import FastAPI

from ..core.config import Settings
from ..core.database import get_session_factory, transaction
from ..services.badge_service import sync_all_users

logger = logging.getLogger(__name__)

_scheduler = AsyncIOScheduler(timezone="UTC")

JOB_ID = "badge_sync"


async def _execute_badge_sync() -> None:
    try:
        summary = run_badge_sync_once()
    except Exception:  # pragma: no cover - safeguard for background job
        logger.exception("badge sync job failed")
        raise
    logger.info("badge sync completed: %s", summary)


def register_scheduler(app: FastAPI, settings: Settings) -> None:
    """Attach APScheduler lifecycle hooks to the FastAPI app."""

    if not settings.badge_sync_enabled:
        logger.info("badge sync scheduler disabled")
        return

    _scheduler.add_job(
        _execute_badge_sync,
        "cron",
        hour=settings.badge_sync_hour,
        minute=0,
        id=JOB_ID,
        replace_existing=True,
        misfire_grace_time=3600,
    )

    @app.on_event("startup")
    async def start_scheduler() -> None:
        if not _scheduler.running:
            _scheduler.start()
            logger.info("badge sync scheduler started")

    @app.on_event("shutdown")
    async def shutdown_scheduler() -> None:
        if _scheduler.running:
            _scheduler.shutdown(wait=False)
            logger.info("badge sync scheduler stopped")


def run_badge_sync_once(session_factory=None) -> dict[str, int]:
    """Run the sync synchronously, e.g. from a shell or a test."""

    factory = session_factory or get_session_factory()
    session = factory()
    try:
        with transaction(session):
            return sync_all_users(session)
    finally:
        session.close()
