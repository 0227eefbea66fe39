"""Main entry point for the Garmin status bot."""

import argparse
import dataclasses
import logging
import os
import sys
from typing import Callable

from . import scheduler
from .config import AppConfig, ConfigurationError, load_config
from .garmin_client import GarminClient
from .status_updater import StatusUpdater

# Configure logging
log_level = os.getenv("LOG_LEVEL", "INFO").upper()
logging.basicConfig(
    level=getattr(logging, log_level, logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)]
)
logger = logging.getLogger(__name__)

ClientFactory = Callable[[AppConfig], GarminClient]


def _create_client(config: AppConfig) -> GarminClient:
    return GarminClient(config.garmin)


def run_pass(client: GarminClient, updater: StatusUpdater) -> None:
    """Fetch today's values once and push them to Slack and LINE."""
    if not client.logged_in:
        client.login()
    values = client.get_latest_values()
    updater.update(values)
    updater.line_notify(values)


def run_once(
    config: AppConfig,
    client_factory: ClientFactory = _create_client,
) -> None:
    """Run a single pass; exits with status 1 on any error."""
    client = client_factory(config)
    updater = StatusUpdater(config.slack, config.line)
    try:
        run_pass(client, updater)
        logger.info("Run completed successfully.")
    except Exception as e:
        logger.error(f"Run failed: {e}", exc_info=True)
        sys.exit(1)
    finally:
        client.close()


def run_daemon(
    config: AppConfig,
    client_factory: ClientFactory = _create_client,
) -> None:
    """
    Poll forever, sleeping a fixed interval between passes.

    An error in any pass is logged, the browser session is closed and a
    fresh client (logged out) takes its place for the next pass.
    """
    client = client_factory(config)
    updater = StatusUpdater(config.slack, config.line)
    while True:
        try:
            logger.info("Crawling")
            run_pass(client, updater)
        except Exception as e:
            logger.warning(f"Crawl failed: {e}", exc_info=True)
            try:
                client.close()
            except Exception as close_error:
                logger.warning(f"Could not close browser session: {close_error}")
            client = client_factory(config)
        scheduler.wait_for_next_run(config.scheduler)


def main():
    """Main entry point with command-line argument parsing."""
    parser = argparse.ArgumentParser(
        description="Post Garmin stress, body battery and heart rate to Slack and LINE"
    )
    parser.add_argument(
        "--once",
        action="store_true",
        help="Run a single pass and exit (default: from CI env var, otherwise loop forever)"
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Show the browser window instead of running headless (same as DEBUG env var)"
    )
    args = parser.parse_args()

    try:
        config = load_config()
    except ConfigurationError as e:
        logger.error(str(e))
        sys.exit(1)

    if args.debug:
        config = dataclasses.replace(
            config, garmin=dataclasses.replace(config.garmin, debug=True)
        )

    if args.once or config.run_once:
        run_once(config)
    else:
        run_daemon(config)


if __name__ == "__main__":
    main()
