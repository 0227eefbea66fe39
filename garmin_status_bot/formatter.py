"""Formatting of wellness metrics into status text and alert lines."""

import math
import re
from typing import List, Optional

from .models import Values

DEFAULT_EMOJIS = (
    "weary confounded persevere disappointed slightly_smiling_face "
    "wink sweat_smile smiley laughing star-struck"
)

BODY_BATTERY_MAX = 100
BODY_BATTERY_ALERT_THRESHOLD = 10
MEDIUM_STRESS_THRESHOLD = 51
HIGH_STRESS_THRESHOLD = 75

MEDIUM_STRESS_MESSAGE = "\n😥中ストレス状態です(ストレス値:{stress})"
HIGH_STRESS_MESSAGE = "\n😰高ストレス状態です(ストレス値:{stress})"
BODY_BATTERY_ALERT_MESSAGE = "\n🔋ボディバッテリーが10を切りました"


def parse_emojis(emojis: Optional[str] = None) -> List[str]:
    """
    Split an emoji palette string into Slack emoji codes.

    Names may be separated by colons and/or whitespace, so both
    ":weary::wink:" and "weary wink" give [":weary:", ":wink:"]. A palette
    with no names in it falls back to the default one.
    """
    names = [name for name in re.split(r":|\s+", emojis or "") if name]
    if not names:
        names = DEFAULT_EMOJIS.split()
    return [f":{name}:" for name in names]


def emoji_index(body_battery: float, size: int) -> int:
    """Pick the bucket for a body battery value when [0, 100] is split into `size` buckets."""
    index = math.floor(body_battery / BODY_BATTERY_MAX * size)
    return min(max(index, 0), size - 1)


def format_emoji(values: Values, emojis: Optional[str] = None) -> str:
    """Return the status emoji matching the latest body battery level."""
    body_battery = values.latest_body_battery
    if body_battery is None:
        raise ValueError("No body battery value to pick an emoji from")
    items = parse_emojis(emojis)
    return items[emoji_index(float(body_battery), len(items))]


def format_status(values: Values) -> str:
    """Return the status text, e.g. "🔋50 🧠60 💗70"."""
    return (
        f"🔋{values.latest_body_battery} "
        f"🧠{values.latest_stress} "
        f"💗{values.latest_heart_rate}"
    )


def build_stress_message(stress) -> str:
    """Return the stress line for a stress value, or "" when stress is low."""
    if stress is None:
        return ""
    level = float(stress)
    if level > HIGH_STRESS_THRESHOLD:
        return HIGH_STRESS_MESSAGE.format(stress=stress)
    if level > MEDIUM_STRESS_THRESHOLD:
        return MEDIUM_STRESS_MESSAGE.format(stress=stress)
    return ""


def is_body_battery_low(body_battery) -> bool:
    return body_battery is not None and float(body_battery) < BODY_BATTERY_ALERT_THRESHOLD
