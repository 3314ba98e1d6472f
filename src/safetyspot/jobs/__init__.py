"""Scheduled background jobs."""

from .badge_sync import register_scheduler, run_badge_sync_once

__all__ = ["register_scheduler", "run_badge_sync_once"]
