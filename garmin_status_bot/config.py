"""Configuration management."""

import os
from dataclasses import dataclass
from typing import Any, Callable, List, Optional

from dotenv import load_dotenv

load_dotenv()


class ConfigurationError(ValueError):
    """Raised when required configuration values are missing or invalid."""

    def __init__(
        self,
        missing: List[str],
        reason: str = "Missing required environment variables",
    ):
        self.missing = missing
        super().__init__(f"{reason}: {', '.join(missing)}")


@dataclass(frozen=True)
class GarminConfig:
    """Garmin Connect login configuration."""
    mail_address: str
    password: str
    debug: bool = False          # show the browser window instead of running headless
    wait_seconds: float = 30.0   # how long to wait for page elements


@dataclass(frozen=True)
class SlackConfig:
    """Slack profile status configuration."""
    legacy_token: str
    emojis: Optional[str] = None  # e.g. "weary:wink:smiley", colon or space separated


@dataclass(frozen=True)
class LineConfig:
    """LINE Notify configuration."""
    notify_token: str


@dataclass(frozen=True)
class SchedulerConfig:
    """Scheduler configuration."""
    interval_minutes: int = 60


@dataclass(frozen=True)
class AppConfig:
    """Complete application configuration."""
    garmin: GarminConfig
    slack: SlackConfig
    line: LineConfig
    scheduler: SchedulerConfig
    run_once: bool = False  # CI mode: one pass, then exit


def _env_flag(key: str) -> bool:
    """Treat any non-empty value as set, the way CI runners export flags."""
    return bool(os.getenv(key))


def _env_number(key: str, default: str, convert: Callable[[str], Any]) -> Any:
    """Read a numeric environment variable, naming the key if it does not parse."""
    value = os.getenv(key, default)
    try:
        return convert(value)
    except ValueError:
        raise ConfigurationError(
            [key], f"Invalid value '{value}' for environment variable"
        )


def load_config() -> AppConfig:
    """
    Load configuration from environment variables.

    Raises:
        ConfigurationError: If required configuration values are missing,
            or a numeric setting does not parse.
    """
    mail_address = os.getenv("GARMIN_MAIL_ADDRESS")
    password = os.getenv("GARMIN_PASSWORD")
    slack_legacy_token = os.getenv("SLACK_LEGACY_TOKEN")
    line_notify_token = os.getenv("LINE_NOTIFY_TOKEN")

    missing = []
    if not mail_address:
        missing.append("GARMIN_MAIL_ADDRESS")
    if not password:
        missing.append("GARMIN_PASSWORD")
    if not slack_legacy_token:
        missing.append("SLACK_LEGACY_TOKEN")
    if not line_notify_token:
        missing.append("LINE_NOTIFY_TOKEN")

    if missing:
        raise ConfigurationError(missing)

    return AppConfig(
        garmin=GarminConfig(
            mail_address=mail_address,
            password=password,
            debug=_env_flag("DEBUG"),
            wait_seconds=_env_number("BROWSER_WAIT_SECONDS", "30", float),
        ),
        slack=SlackConfig(
            legacy_token=slack_legacy_token,
            emojis=os.getenv("EMOJIS") or None,
        ),
        line=LineConfig(
            notify_token=line_notify_token,
        ),
        scheduler=SchedulerConfig(
            interval_minutes=_env_number("POLL_INTERVAL_MINUTES", "60", int),
        ),
        run_once=_env_flag("CI"),
    )
