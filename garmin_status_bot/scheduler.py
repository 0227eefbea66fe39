"""Fixed-interval scheduling for daemon mode."""

import logging
import time

from .config import SchedulerConfig

logger = logging.getLogger(__name__)


def interval_seconds(config: SchedulerConfig) -> int:
    """Seconds to sleep between two polls."""
    return config.interval_minutes * 60


def wait_for_next_run(config: SchedulerConfig) -> None:
    """Block until the next poll is due. Runs after every pass, failed or not."""
    logger.info(f"Sleep {config.interval_minutes} min")
    time.sleep(interval_seconds(config))
