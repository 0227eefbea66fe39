"""Shared fixtures and fakes for the test suite."""

from __future__ import annotations

import json
from typing import Any

import pytest
from selenium.common.exceptions import NoSuchElementException

from garmin_status_bot.config import (
    AppConfig,
    GarminConfig,
    LineConfig,
    SchedulerConfig,
    SlackConfig,
)
from garmin_status_bot.models import Values

REQUIRED_ENV = {
    "GARMIN_MAIL_ADDRESS": "me@example.com",
    "GARMIN_PASSWORD": "hunter2",
    "SLACK_LEGACY_TOKEN": "xoxp-token",
    "LINE_NOTIFY_TOKEN": "line-token",
}
OPTIONAL_ENV = ["EMOJIS", "DEBUG", "CI", "POLL_INTERVAL_MINUTES", "BROWSER_WAIT_SECONDS"]


def make_values(
    stress: Any = 60, body_battery: Any = 50, heart_rate: Any = 70
) -> Values:
    return Values(
        stress={
            "stressValuesArray": [[1, 20], [2, stress]],
            "bodyBatteryValuesArray": [[1, 80], [2, body_battery]],
        },
        heart_rate={"heartRateValues": [[1, 55], [2, heart_rate]]},
    )


class FakeResponse:
    def __init__(self, status_code: int = 200, body: Any = None) -> None:
        self.status_code = status_code
        self._body = body
        self.text = json.dumps(body) if body is not None else ""

    def json(self) -> Any:
        if self._body is None:
            raise ValueError("no json")
        return self._body


class FakeElement:
    def __init__(self, driver: "FakeDriver", src: str = "", on_click: str = "") -> None:
        self.driver = driver
        self.src = src
        self.on_click = on_click
        self.typed: list[str] = []

    def get_attribute(self, name: str) -> str:
        return self.src if name == "src" else ""

    def send_keys(self, text: str) -> None:
        self.typed.append(text)

    def click(self) -> None:
        if self.on_click:
            self.driver.current_url = self.on_click


class _SwitchTo:
    def __init__(self, driver: "FakeDriver") -> None:
        self.driver = driver

    def frame(self, element: FakeElement) -> None:
        self.driver.in_frame = element

    def default_content(self) -> None:
        self.driver.in_frame = None


class FakeDriver:
    """Just enough of a WebDriver to walk through the Garmin sign-in flow."""

    def __init__(
        self,
        frame_src: str = "https://sso.garmin.com/sso/signin",
        with_form: bool = True,
        pages: dict[str, str] | None = None,
        quit_error: Exception | None = None,
    ) -> None:
        self.quit_error = quit_error
        self.current_url = ""
        self.visited: list[str] = []
        self.in_frame: FakeElement | None = None
        self.quit_calls = 0
        self.pages = pages or {}
        self.iframe = FakeElement(self, src=frame_src)
        self.elements: dict[str, FakeElement] = {"iframe.gauth-iframe": self.iframe}
        if with_form:
            self.elements.update({
                "input#username": FakeElement(self),
                "input#password": FakeElement(self),
                "#login-btn-signin": FakeElement(
                    self, on_click="https://connect.garmin.com/modern/"
                ),
            })
        self.switch_to = _SwitchTo(self)

    def get(self, url: str) -> None:
        self.current_url = url
        self.visited.append(url)

    def find_element(self, by: str, value: str) -> FakeElement:
        if value in self.elements:
            return self.elements[value]
        raise NoSuchElementException(value)

    def find_elements(self, by: str, value: str) -> list[FakeElement]:
        return [self.iframe] if value == "iframe" else []

    def execute_script(self, script: str) -> str | None:
        for fragment, text in self.pages.items():
            if fragment in self.current_url:
                return text
        return None

    def quit(self) -> None:
        self.quit_calls += 1
        if self.quit_error is not None:
            raise self.quit_error


@pytest.fixture
def app_config() -> AppConfig:
    return AppConfig(
        garmin=GarminConfig(
            mail_address="me@example.com", password="hunter2", wait_seconds=0
        ),
        slack=SlackConfig(legacy_token="xoxp-token"),
        line=LineConfig(notify_token="line-token"),
        scheduler=SchedulerConfig(interval_minutes=60),
    )


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    for key, value in REQUIRED_ENV.items():
        monkeypatch.setenv(key, value)
    for key in OPTIONAL_ENV:
        monkeypatch.delenv(key, raising=False)
    return monkeypatch
