"""Slack profile status module."""

import json
import logging

import requests

from .config import SlackConfig

logger = logging.getLogger(__name__)

PROFILE_SET_URL = "https://slack.com/api/users.profile.set"
REQUEST_TIMEOUT = 30


class NotifyError(Exception):
    """An outbound notification endpoint rejected the request."""

    def __init__(self, response):
        self.response = response
        super().__init__(
            json.dumps(response, ensure_ascii=False)
            if isinstance(response, dict) else str(response)
        )


def set_status(emoji: str, text: str, config: SlackConfig) -> None:
    """
    Set the Slack profile status.

    Args:
        emoji: Status emoji code, e.g. ":wink:".
        text: Status text.
        config: Slack configuration.

    Raises:
        NotifyError: If Slack does not answer with ``"ok": true``.
        requests.RequestException: If the request itself fails.
    """
    logger.info(f"Set Slack Status. emoji: {emoji}, message: {text}")
    response = requests.post(
        PROFILE_SET_URL,
        data={
            "token": config.legacy_token,
            "profile": json.dumps({
                "status_emoji": emoji,
                "status_text": text,
            }),
        },
        timeout=REQUEST_TIMEOUT,
    )
    try:
        body = response.json()
    except ValueError:
        raise NotifyError(response.text)

    if not body.get("ok"):
        logger.error(f"Slack rejected status update: {body.get('error')}")
        raise NotifyError(body)
