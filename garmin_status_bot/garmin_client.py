"""Garmin Connect client that drives a browser session to read wellness data."""

import json
import logging
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable, Optional

from selenium import webdriver
from selenium.common.exceptions import TimeoutException
from selenium.webdriver.common.by import By
from selenium.webdriver.support import expected_conditions as EC
from selenium.webdriver.support.ui import WebDriverWait

from .config import GarminConfig
from .models import Values

logger = logging.getLogger(__name__)

SIGNIN_URL = "https://connect.garmin.com/signin/"
PROXY_URL = "https://connect.garmin.com/modern/proxy/wellness-service/wellness"
DAILY_STRESS_URL = PROXY_URL + "/dailyStress/{date}"
DAILY_HEART_RATE_URL = PROXY_URL + "/dailyHeartRate/?date={date}"

LOGIN_IFRAME_SELECTOR = "iframe.gauth-iframe"
USERNAME_SELECTOR = "input#username"
PASSWORD_SELECTOR = "input#password"
SUBMIT_SELECTOR = "#login-btn-signin"


class GarminClientError(Exception):
    """Base error for Garmin Connect session failures."""


class AuthFormNotFoundError(GarminClientError):
    """The sign-in page did not contain the embedded SSO login form."""


class NotLoggedInError(GarminClientError):
    """Metrics were requested before the session was authenticated."""


class SessionState(Enum):
    LOGGED_OUT = "logged_out"
    LOGGING_IN = "logging_in"
    LOGGED_IN = "logged_in"


def create_driver(headless: bool = True) -> webdriver.Chrome:
    """Create a Chrome WebDriver instance."""
    options = webdriver.ChromeOptions()
    if headless:
        options.add_argument("--headless")
    options.add_argument("--no-sandbox")
    options.add_argument("--disable-dev-shm-usage")
    return webdriver.Chrome(options=options)


def _today() -> str:
    return datetime.now(timezone.utc).date().isoformat()


class GarminClient:
    """
    One authenticated Garmin Connect browser session.

    The session moves LOGGED_OUT -> LOGGING_IN -> LOGGED_IN. A failed login
    drops back to LOGGED_OUT; callers that hit an error should close() the
    client and build a new one.
    """

    def __init__(
        self,
        config: GarminConfig,
        driver_factory: Optional[Callable[[bool], Any]] = None,
    ):
        """
        Initialize the client. No browser is started until it is needed.

        Args:
            config: Garmin configuration.
            driver_factory: Callable taking ``headless`` and returning a
                WebDriver. Defaults to a local Chrome.
        """
        self.config = config
        self._driver_factory = driver_factory or create_driver
        self._driver = None
        self.state = SessionState.LOGGED_OUT

    @property
    def logged_in(self) -> bool:
        return self.state is SessionState.LOGGED_IN

    def _get_driver(self):
        if self._driver is None:
            headless = not self.config.debug
            logger.debug(f"Starting browser (headless={headless})")
            self._driver = self._driver_factory(headless)
        return self._driver

    def _wait(self, driver) -> WebDriverWait:
        return WebDriverWait(driver, self.config.wait_seconds)

    def login(self) -> None:
        """
        Sign in to Garmin Connect through the embedded SSO form.

        Raises:
            AuthFormNotFoundError: If the login iframe or its form is missing.
        """
        logger.info("Login to Garmin Connect")
        driver = self._get_driver()
        self.state = SessionState.LOGGING_IN
        try:
            self._submit_login_form(driver)
        except Exception:
            self.state = SessionState.LOGGED_OUT
            raise
        self.state = SessionState.LOGGED_IN
        logger.info("Logged in to Garmin Connect")

    def _submit_login_form(self, driver) -> None:
        driver.get(SIGNIN_URL)
        try:
            self._wait(driver).until(
                EC.presence_of_element_located((By.CSS_SELECTOR, LOGIN_IFRAME_SELECTOR))
            )
        except TimeoutException as e:
            raise AuthFormNotFoundError("Login iframe not found") from e

        signin_url = driver.current_url
        frame = None
        for candidate in driver.find_elements(By.TAG_NAME, "iframe"):
            if "sso" in (candidate.get_attribute("src") or ""):
                frame = candidate
                break
        if frame is None:
            raise AuthFormNotFoundError("Login form not found")

        driver.switch_to.frame(frame)
        try:
            try:
                username = self._wait(driver).until(
                    EC.presence_of_element_located((By.CSS_SELECTOR, USERNAME_SELECTOR))
                )
            except TimeoutException as e:
                raise AuthFormNotFoundError("Login form not found") from e
            username.send_keys(self.config.mail_address)
            driver.find_element(By.CSS_SELECTOR, PASSWORD_SELECTOR).send_keys(
                self.config.password
            )
            driver.find_element(By.CSS_SELECTOR, SUBMIT_SELECTOR).click()
        finally:
            driver.switch_to.default_content()

        self._wait(driver).until(EC.url_changes(signin_url))

    def _read_json(self, driver, url: str) -> Optional[Any]:
        """Open a JSON resource in the page and parse its body text."""
        driver.get(url)
        text = driver.execute_script("return document.body.textContent")
        if not text:
            logger.warning(f"Empty response from {url}")
            return None
        try:
            return json.loads(text)
        except ValueError as e:
            logger.warning(f"Could not parse JSON from {url}: {e}")
            return None

    def get_latest_values(self) -> Values:
        """
        Fetch today's stress/body battery and heart rate payloads.

        Returns:
            Values with either payload set to None if it could not be parsed.

        Raises:
            NotLoggedInError: If login() has not completed.
        """
        if not self.logged_in:
            raise NotLoggedInError("Call login() before fetching values")

        driver = self._get_driver()
        today = _today()
        logger.info(f"Fetching wellness data for {today}")
        stress = self._read_json(driver, DAILY_STRESS_URL.format(date=today))
        heart_rate = self._read_json(driver, DAILY_HEART_RATE_URL.format(date=today))
        return Values(stress=stress, heart_rate=heart_rate)

    def close(self) -> None:
        """Quit the browser, if one was started."""
        if self._driver is None:
            return
        try:
            self._driver.quit()
        except Exception as e:
            logger.warning(f"Error closing browser: {e}")
        finally:
            self._driver = None
            self.state = SessionState.LOGGED_OUT
