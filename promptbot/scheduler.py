from __future__ import annotations

from datetime import datetime

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.cron import CronTrigger

from promptbot.config import Settings
from promptbot.logging_setup import get_logger
from promptbot.runtime import DialogRuntime


def sweep_idle_sessions(runtime: DialogRuntime, ttl_s: int, now: datetime | None = None) -> int:
    logger = get_logger("scheduler")
    ended = runtime.sweep_idle(ttl_s, now=now)
    if ended:
        logger.info("Ended %d idle conversation(s)", ended)
    return ended


def start_session_sweeper(
    runtime: DialogRuntime,
    settings: Settings,
    *,
    cron: str | None = None,
) -> BackgroundScheduler:
    """Start a background job that ends conversations idle longer than SESSION_IDLE_TTL_S.

    The caller owns the returned scheduler and must ``shutdown()`` it.
    """
    logger = get_logger("scheduler")
    cron_expr = cron or settings.SWEEP_CRON
    scheduler = BackgroundScheduler()

    scheduler.add_job(
        lambda: sweep_idle_sessions(runtime, settings.SESSION_IDLE_TTL_S),
        CronTrigger.from_crontab(cron_expr),
        name="promptbot_sweep_idle_sessions",
        max_instances=1,
        coalesce=True,
        misfire_grace_time=30,
    )

    scheduler.start()
    logger.info("Session sweeper started with cron: %s", cron_expr)
    return scheduler
