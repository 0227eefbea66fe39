"""Data models for Garmin wellness metrics."""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

# Garmin returns each series as [[timestamp, value], ...]
Metrics = List[List[Any]]


def last(items: Optional[Sequence[Any]]) -> Any:
    """Return the last element of a sequence, or None if it is empty or missing."""
    if not items:
        return None
    return items[-1]


def latest_value(metrics: Optional[Metrics]) -> Any:
    """Return the value of the most recent (timestamp, value) pair."""
    return last(last(metrics))


@dataclass
class Values:
    """Snapshot of today's metrics as fetched from Garmin Connect."""
    stress: Optional[Dict[str, Any]]      # dailyStress payload
    heart_rate: Optional[Dict[str, Any]]  # dailyHeartRate payload

    @property
    def latest_stress(self) -> Any:
        return latest_value((self.stress or {}).get("stressValuesArray"))

    @property
    def latest_body_battery(self) -> Any:
        return latest_value((self.stress or {}).get("bodyBatteryValuesArray"))

    @property
    def latest_heart_rate(self) -> Any:
        return latest_value((self.heart_rate or {}).get("heartRateValues"))
