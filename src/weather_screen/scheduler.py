from __future__ import annotations

import logging
from datetime import datetime, timezone

from apscheduler.schedulers.background import BackgroundScheduler

from .controller import WeatherController
from .settings import AppSettings

LOGGER = logging.getLogger(__name__)

CLOCK_JOB_ID = "clock_tick_job"


def run_clock_tick_job(controller: WeatherController) -> None:
    ticked_at = datetime.now(timezone.utc)
    controller.tick_clock(ticked_at)
    LOGGER.debug("Clock tick at %s", ticked_at)


def build_scheduler(settings: AppSettings, controller: WeatherController) -> BackgroundScheduler:
    scheduler = BackgroundScheduler(timezone=settings.timezone)
    scheduler.add_job(
        run_clock_tick_job,
        "interval",
        kwargs={"controller": controller},
        seconds=settings.yaml.ui.clock_interval_seconds,
        id=CLOCK_JOB_ID,
        replace_existing=True,
        max_instances=1,
        coalesce=True,
        misfire_grace_time=30,
    )
    return scheduler
