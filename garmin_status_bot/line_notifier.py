"""LINE Notify push message module."""

import logging

import requests

from .config import LineConfig
from .slack_notifier import REQUEST_TIMEOUT, NotifyError

logger = logging.getLogger(__name__)

NOTIFY_URL = "https://notify-api.line.me/api/notify"


def send_line_notify(message: str, config: LineConfig) -> None:
    """
    Send a push message via LINE Notify.

    Args:
        message: The message text to send.
        config: LINE configuration.

    Raises:
        NotifyError: If LINE Notify does not answer with HTTP 200.
    """
    if not message or not message.strip():
        logger.info("Message is empty; not sending LINE notification.")
        return

    logger.info(f"Send Line Notify. message: {message}")
    response = requests.post(
        NOTIFY_URL,
        headers={"Authorization": f"Bearer {config.notify_token}"},
        data={"message": message},
        timeout=REQUEST_TIMEOUT,
    )
    if response.status_code != 200:
        logger.error(f"LINE Notify error: {response.status_code} - {response.text}")
        raise NotifyError(response.text)
