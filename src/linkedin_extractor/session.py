"""LinkedIn browser session for profile extraction.

This module owns the Selenium Chrome WebDriver: it starts the browser,
authenticates with LinkedIn (session cookie, stored cookie jar, or
email/password), navigates to profile pages and hands out a
``SeleniumSurface`` bound to the page for the extraction core.
"""

from __future__ import annotations

import json
import logging
import time
from datetime import datetime
from pathlib import Path
from typing import Optional
from urllib.parse import quote

from selenium import webdriver
from selenium.common.exceptions import (
    NoSuchElementException,
    TimeoutException,
    WebDriverException,
)
from selenium.webdriver.chrome.options import Options as ChromeOptions
from selenium.webdriver.chrome.service import Service as ChromeService
from selenium.webdriver.common.by import By
from selenium.webdriver.support import expected_conditions as EC
from selenium.webdriver.support.ui import WebDriverWait
from webdriver_manager.chrome import ChromeDriverManager

from .config import AuthConfig, AuthMethod
from .errors import ConfigError
from .scraper_errors import (
    BrowserError,
    CookieExpired,
    PageLoadTimeout,
    ProfileNotFound,
    ScraperAuthError,
    TwoFactorRequired,
)
from .selectors import DEFAULT_SELECTORS, LoginSelectors
from .selenium_surface import SeleniumSurface, to_locator

logger = logging.getLogger(__name__)

# Cookie keys Chrome reports but refuses in add_cookie
_UNSUPPORTED_COOKIE_KEYS = ("sameSite", "storeId", "hostOnly", "session", "id")


class LinkedInSession:
    """Browser session that can open LinkedIn profile pages.

    Attributes:
        driver: The Selenium WebDriver instance, created lazily
        authenticated: Whether the session is currently logged in
    """

    LINKEDIN_BASE_URL = "https://www.linkedin.com"
    LINKEDIN_LOGIN_URL = "https://www.linkedin.com/login"
    LINKEDIN_FEED_URL = "https://www.linkedin.com/feed/"

    def __init__(
        self,
        headless: bool = True,
        chromedriver_path: Optional[str] = None,
        page_load_timeout: int = 30,
        action_delay: float = 1.0,
        user_agent: Optional[str] = None,
        screenshot_on_error: bool = False,
        screenshot_dir: Optional[str] = None,
        max_retries: int = 3,
        wait_timeout: float = 10.0,
        login_selectors: LoginSelectors = DEFAULT_SELECTORS.login,
    ):
        """Initialize the LinkedIn session.

        Args:
            headless: Whether to run Chrome in headless mode
            chromedriver_path: Path to ChromeDriver executable (auto-downloads if None)
            page_load_timeout: Maximum time to wait for page loads in seconds
            action_delay: Delay after navigation and login steps in seconds
            user_agent: Custom user agent string (uses Chrome default if None)
            screenshot_on_error: Whether to capture screenshots when errors occur
            screenshot_dir: Directory to save screenshots (defaults to current directory)
            max_retries: Maximum navigation retry attempts
            wait_timeout: Default timeout of the surfaces handed out, in seconds
            login_selectors: Selectors of the login form
        """
        self.headless = headless
        self.chromedriver_path = chromedriver_path
        self.page_load_timeout = page_load_timeout
        self.action_delay = action_delay
        self.user_agent = user_agent
        self.screenshot_on_error = screenshot_on_error
        self.screenshot_dir = screenshot_dir or "."
        self.max_retries = max_retries
        self.wait_timeout = wait_timeout
        self.login_selectors = login_selectors

        self.driver: Optional[webdriver.Chrome] = None
        self.authenticated: bool = False

        logger.debug(
            "LinkedInSession initialized: headless=%s, timeout=%ds, max_retries=%d",
            headless,
            page_load_timeout,
            max_retries,
        )

    def _create_driver(self) -> webdriver.Chrome:
        """Create and configure the Chrome WebDriver.

        Raises:
            BrowserError: If the browser fails to start
        """
        options = self._build_chrome_options()
        service = self._get_chromedriver_service()

        try:
            driver = webdriver.Chrome(service=service, options=options)
            driver.set_page_load_timeout(self.page_load_timeout)

            # Hide navigator.webdriver from page scripts
            driver.execute_cdp_cmd(
                "Page.addScriptToEvaluateOnNewDocument",
                {
                    "source": """
                    Object.defineProperty(navigator, 'webdriver', {
                        get: () => undefined
                    })
                """
                },
            )

            logger.info(
                "Chrome WebDriver started: headless=%s, browser_version=%s",
                self.headless,
                driver.capabilities.get("browserVersion", "unknown"),
            )
            return driver

        except WebDriverException as e:
            raise BrowserError(
                f"Failed to start Chrome browser: {e}",
                details={
                    "headless": self.headless,
                    "chromedriver_path": self.chromedriver_path,
                    "error": str(e),
                    "suggestion": "Ensure Chrome browser is installed and chromedriver version matches",
                },
            ) from e

    def _build_chrome_options(self) -> ChromeOptions:
        """Build Chrome options with anti-detection measures."""
        options = ChromeOptions()

        if self.headless:
            options.add_argument("--headless=new")

        options.add_argument("--disable-blink-features=AutomationControlled")
        options.add_argument("--disable-infobars")
        options.add_argument("--disable-dev-shm-usage")
        options.add_argument("--no-sandbox")
        options.add_argument("--disable-gpu")
        options.add_argument("--window-size=1920,1080")

        if self.user_agent:
            options.add_argument(f"--user-agent={self.user_agent}")

        options.add_experimental_option("excludeSwitches", ["enable-automation"])
        options.add_experimental_option("useAutomationExtension", False)

        return options

    def _get_chromedriver_service(self) -> ChromeService:
        """Get ChromeDriver service, auto-downloading if needed.

        Raises:
            BrowserError: If chromedriver cannot be found or downloaded
        """
        if self.chromedriver_path:
            if not Path(self.chromedriver_path).exists():
                raise BrowserError(
                    f"ChromeDriver not found at specified path: {self.chromedriver_path}",
                    details={
                        "chromedriver_path": self.chromedriver_path,
                        "suggestion": "Verify the path is correct or remove CHROMEDRIVER_PATH to auto-download",
                    },
                )
            logger.debug("Using custom chromedriver: %s", self.chromedriver_path)
            return ChromeService(executable_path=self.chromedriver_path)

        try:
            driver_path = ChromeDriverManager().install()
            logger.debug("Auto-downloaded chromedriver: %s", driver_path)
            return ChromeService(executable_path=driver_path)
        except Exception as e:
            raise BrowserError(
                f"Failed to auto-download ChromeDriver: {e}",
                details={
                    "error": str(e),
                    "suggestion": "Check internet connection or manually download chromedriver and set CHROMEDRIVER_PATH",
                },
            ) from e

    def _ensure_driver(self) -> webdriver.Chrome:
        if self.driver is None:
            self.driver = self._create_driver()
        return self.driver

    def take_screenshot(self, name: str = "error") -> Optional[str]:
        """Take a screenshot of the current browser state.

        Returns:
            Path to the saved screenshot, or None if failed
        """
        if self.driver is None:
            logger.warning("Cannot take screenshot: driver not initialized")
            return None

        try:
            screenshot_path = Path(self.screenshot_dir)
            screenshot_path.mkdir(parents=True, exist_ok=True)
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            filepath = screenshot_path / f"{name}_{timestamp}.png"
            self.driver.save_screenshot(str(filepath))
            logger.info("Screenshot saved: %s", filepath)
            return str(filepath)
        except Exception as e:
            logger.warning("Failed to take screenshot: %s", e)
            return None

    def _capture_error_screenshot(self, error_name: str) -> Optional[str]:
        if not self.screenshot_on_error:
            return None
        return self.take_screenshot(error_name)

    # ------------------------------------------------------------------
    # Authentication
    # ------------------------------------------------------------------

    def authenticate_with_cookie(self, cookie: str) -> bool:
        """Authenticate with LinkedIn using the li_at session cookie.

        Raises:
            CookieExpired: If the cookie is no longer valid
            ScraperAuthError: If authentication fails otherwise
        """
        return self._authenticate_with_cookies(
            [
                {
                    "name": "li_at",
                    "value": cookie,
                    "domain": ".linkedin.com",
                    "path": "/",
                    "secure": True,
                    "httpOnly": True,
                }
            ],
            source="cookie",
        )

    def authenticate_with_stored_cookies(self, storage_path: str) -> bool:
        """Authenticate by replaying the cookie jar saved by a previous login.

        Raises:
            ConfigError: If the storage file cannot be read
            CookieExpired: If the stored session is no longer valid
        """
        try:
            cookies = json.loads(Path(storage_path).read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            raise ConfigError(
                f"Cannot read stored session from {storage_path}: {e}",
                details={"storage_path": storage_path},
            ) from e
        if not isinstance(cookies, list):
            raise ConfigError(
                f"Stored session in {storage_path} is not a cookie list",
                details={"storage_path": storage_path},
            )
        return self._authenticate_with_cookies(cookies, source="stored")

    def _authenticate_with_cookies(self, cookies: list[dict], source: str) -> bool:
        driver = self._ensure_driver()

        try:
            # Cookies can only be set for the domain currently loaded
            logger.debug("Navigating to LinkedIn to set cookie domain")
            driver.get(self.LINKEDIN_BASE_URL)
            time.sleep(self.action_delay)

            driver.delete_all_cookies()
            for cookie in cookies:
                driver.add_cookie(_clean_cookie(cookie))

            logger.debug("%d cookie(s) set, verifying authentication", len(cookies))
            driver.get(self.LINKEDIN_FEED_URL)
            time.sleep(self.action_delay)

            if self._is_logged_in():
                self.authenticated = True
                logger.info("Successfully authenticated with %s cookies", source)
                return True

            if "/login" in driver.current_url or "/checkpoint" in driver.current_url:
                raise CookieExpired(
                    "LinkedIn session cookie has expired or is invalid",
                    details={"redirect_url": driver.current_url, "source": source},
                )

            raise ScraperAuthError(
                "Failed to authenticate with cookie: unexpected state",
                details={"current_url": driver.current_url, "source": source},
            )

        except (CookieExpired, ScraperAuthError):
            raise
        except Exception as e:
            raise ScraperAuthError(
                f"Cookie authentication failed: {e}",
                details={"error": str(e), "source": source},
            ) from e

    def authenticate_with_credentials(self, email: str, password: str) -> bool:
        """Authenticate with LinkedIn using email and password.

        Raises:
            ScraperAuthError: If authentication fails
            TwoFactorRequired: If 2FA verification is required
        """
        driver = self._ensure_driver()
        form = self.login_selectors

        try:
            logger.debug("Navigating to LinkedIn login page")
            driver.get(self.LINKEDIN_LOGIN_URL)
            time.sleep(self.action_delay)

            wait = WebDriverWait(driver, self.page_load_timeout)
            email_field = wait.until(
                EC.presence_of_element_located(to_locator(form.username))
            )
            password_field = driver.find_element(*to_locator(form.password))

            logger.debug("Entering credentials")
            email_field.clear()
            email_field.send_keys(email)
            password_field.clear()
            password_field.send_keys(password)
            driver.find_element(*to_locator(form.submit)).click()
            time.sleep(self.action_delay * 2)

            if self._is_2fa_challenge():
                raise TwoFactorRequired(
                    "LinkedIn requires two-factor authentication. "
                    "Please complete verification in the browser.",
                    details={"current_url": driver.current_url},
                )

            if self._has_login_error():
                raise ScraperAuthError(
                    "Login failed: invalid email or password",
                    details={"current_url": driver.current_url},
                )

            if self._is_logged_in():
                self.authenticated = True
                logger.info("Successfully authenticated with credentials")
                return True

            raise ScraperAuthError(
                "Failed to authenticate: unexpected state after login",
                details={"current_url": driver.current_url},
            )

        except (TwoFactorRequired, ScraperAuthError):
            raise
        except TimeoutException as e:
            raise ScraperAuthError(
                "Login page timed out",
                details={"error": str(e)},
            ) from e
        except Exception as e:
            raise ScraperAuthError(
                f"Credential authentication failed: {e}",
                details={"error": str(e)},
            ) from e

    def wait_for_2fa_completion(self, timeout: int = 120) -> bool:
        """Wait for the user to complete 2FA verification manually.

        Raises:
            TwoFactorRequired: If timeout is reached without completion
        """
        logger.info("Waiting for manual 2FA completion (timeout: %ds)...", timeout)

        start_time = time.monotonic()
        while time.monotonic() - start_time < timeout:
            if self._is_logged_in():
                self.authenticated = True
                logger.info("2FA completed successfully")
                return True
            time.sleep(2)

        raise TwoFactorRequired(
            f"2FA verification not completed within {timeout} seconds",
            details={"waited_seconds": timeout},
        )

    def handle_2fa_challenge(self, timeout: int = 120) -> bool:
        """Pause for the user to complete 2FA in the browser window.

        Raises:
            TwoFactorRequired: If verification fails or times out
        """
        logger.warning("=" * 60)
        logger.warning("2FA VERIFICATION REQUIRED")
        logger.warning("=" * 60)
        logger.warning("Please complete the verification in the browser window.")
        logger.warning("TIP: cookie authentication (LINKEDIN_COOKIE) avoids 2FA.")
        logger.warning("After completing 2FA, press Enter to continue...")
        logger.warning("=" * 60)

        try:
            input()
        except EOFError:
            logger.warning("Running in non-interactive mode, waiting for 2FA...")
            return self.wait_for_2fa_completion(timeout)

        time.sleep(self.action_delay * 2)

        if self._is_logged_in():
            self.authenticated = True
            logger.info("2FA completed successfully")
            return True

        raise TwoFactorRequired(
            "2FA verification failed - not logged in after user input",
            details={
                "current_url": self.driver.current_url if self.driver else "unknown"
            },
        )

    def authenticate(
        self,
        auth: AuthConfig,
        handle_2fa: bool = True,
        twofa_timeout: int = 120,
    ) -> bool:
        """Authenticate using the method selected in ``auth``.

        After a successful credential login with ``auth.remember`` set, the
        session cookies are written to ``auth.storage_path`` so the next
        run can use the stored method and skip the login form.

        Raises:
            ConfigError: If the selected method lacks its inputs
            ScraperAuthError: If authentication fails
            CookieExpired: If the cookie or stored session is invalid
            TwoFactorRequired: If 2FA is required and handle_2fa is False
        """
        method = auth.method
        logger.info("Authenticating with LinkedIn (%s method)", method.value if method else None)

        try:
            if method == AuthMethod.COOKIE:
                return self.authenticate_with_cookie(auth.cookie)
            if method == AuthMethod.STORED:
                return self.authenticate_with_stored_cookies(auth.storage_path)
            if method == AuthMethod.CREDENTIALS:
                try:
                    self.authenticate_with_credentials(auth.email, auth.password)
                except TwoFactorRequired:
                    if not handle_2fa:
                        raise
                    logger.warning("2FA challenge detected, requesting manual intervention")
                    self.handle_2fa_challenge(twofa_timeout)
                if auth.remember and auth.storage_path:
                    self.save_cookies(auth.storage_path)
                return True
            raise ConfigError(
                "No authentication method configured",
                details={"method": str(method)},
            )

        except (ScraperAuthError, ConfigError):
            self._capture_error_screenshot("auth_failure")
            raise

    def save_cookies(self, storage_path: str) -> None:
        """Write the current session cookies to ``storage_path`` as JSON."""
        driver = self._ensure_driver()
        path = Path(storage_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(driver.get_cookies(), indent=2), encoding="utf-8")
        logger.info("Saved session cookies to %s", path)

    def _is_logged_in(self) -> bool:
        if self.driver is None:
            return False

        try:
            self.driver.find_element(By.ID, "global-nav")
            return True
        except NoSuchElementException:
            pass

        try:
            self.driver.find_element(
                By.CSS_SELECTOR, ".global-nav__me-photo, .feed-identity-module"
            )
            return True
        except NoSuchElementException:
            return False

    def _is_2fa_challenge(self) -> bool:
        if self.driver is None:
            return False

        current_url = self.driver.current_url.lower()
        if any(
            pattern in current_url
            for pattern in ["checkpoint", "challenge", "two-step-verification"]
        ):
            return True

        return bool(
            self.driver.find_elements(
                By.CSS_SELECTOR,
                "#input__phone_verification_pin, input[name='pin'], input[aria-label*='verification']",
            )
        )

    def _has_login_error(self) -> bool:
        if self.driver is None:
            return False
        return bool(
            self.driver.find_elements(
                By.CSS_SELECTOR,
                ".form__input--error, .alert-content, #error-for-password",
            )
        )

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def profile_url(self, profile_id: str) -> str:
        """Build the canonical profile URL from an id or a profile URL.

        Examples:
            "johndoe"                              -> https://www.linkedin.com/in/johndoe/
            "https://linkedin.com/in/johndoe"      -> https://www.linkedin.com/in/johndoe/
        """
        value = profile_id.strip()
        if "/in/" in value:
            value = value.split("/in/", 1)[1]
        value = value.split("?", 1)[0].strip("/")
        return f"{self.LINKEDIN_BASE_URL}/in/{quote(value)}/"

    def open_profile(self, profile_id: str, isolated: bool = False) -> SeleniumSurface:
        """Navigate to a profile page and return a surface bound to it.

        Args:
            profile_id: LinkedIn profile id or profile URL
            isolated: Open the profile in a new browser tab

        Raises:
            ScraperAuthError: If the session is not authenticated
            CookieExpired: If LinkedIn redirects to its login wall
            ProfileNotFound: If the profile does not exist
            PageLoadTimeout: If the page does not load within the retry budget
            BrowserError: If the browser fails while navigating
        """
        if not self.authenticated:
            raise ScraperAuthError("Must authenticate before opening profiles")

        driver = self._ensure_driver()
        url = self.profile_url(profile_id)

        if isolated:
            driver.switch_to.new_window("tab")
        elif driver.current_url == url:
            logger.debug("Already on %s", url)
            return SeleniumSurface(driver, default_timeout=self.wait_timeout)

        attempt = 0
        while True:
            try:
                logger.info("Opening profile: %s", url)
                driver.get(url)
                time.sleep(self.action_delay)
                break
            except TimeoutException as e:
                if attempt >= self.max_retries:
                    self._capture_error_screenshot("page_load_timeout")
                    raise PageLoadTimeout(
                        url,
                        self.page_load_timeout,
                        details={"attempts": attempt + 1},
                    ) from e
                wait_time = 2**attempt
                logger.warning(
                    "Loading %s timed out (attempt %d/%d). Retrying in %ds...",
                    url,
                    attempt + 1,
                    self.max_retries + 1,
                    wait_time,
                )
                time.sleep(wait_time)
                attempt += 1
            except WebDriverException as e:
                self._capture_error_screenshot("navigation_failed")
                raise BrowserError(
                    f"Navigation to {url} failed: {e}",
                    details={"url": url, "error": str(e)},
                ) from e

        current_url = driver.current_url
        if "/authwall" in current_url or "/login" in current_url:
            raise CookieExpired(
                "LinkedIn redirected to its login wall",
                details={"redirect_url": current_url},
            )
        if "/404" in current_url or "/in/unavailable" in current_url:
            self._capture_error_screenshot("profile_not_found")
            raise ProfileNotFound(url, details={"redirect_url": current_url})

        return SeleniumSurface(driver, default_timeout=self.wait_timeout)

    def close(self) -> None:
        """Close the browser. Safe to call multiple times."""
        if self.driver is not None:
            try:
                logger.debug("Closing Chrome WebDriver")
                self.driver.quit()
                logger.info("Chrome WebDriver closed successfully")
            except WebDriverException as e:
                logger.warning("WebDriverException while closing: %s", e)
            finally:
                self.driver = None
                self.authenticated = False

    def __enter__(self) -> "LinkedInSession":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    async def __aenter__(self) -> "LinkedInSession":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


def _clean_cookie(cookie: dict) -> dict:
    """Drop the cookie keys that WebDriver's add_cookie rejects."""
    clean = {k: v for k, v in cookie.items() if k not in _UNSUPPORTED_COOKIE_KEYS}
    if "expiry" in clean:
        clean["expiry"] = int(clean["expiry"])
    return clean
