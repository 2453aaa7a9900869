"""Scheduler package for managing background jobs."""
from . import settings
from .scheduler_manager import setup_scheduler, start_scheduler, print_scheduled_jobs

__all__ = [
    'settings',
    'setup_scheduler',
    'start_scheduler',
    'print_scheduled_jobs',
]
