"""Scraper-specific error classes for LinkedIn Profile Extractor.

This module defines error classes for handling browser, session and
page-level failures while driving a LinkedIn profile with Selenium.
"""

from typing import Any, Optional

from .errors import ExtractorError


class ScraperError(ExtractorError):
    """Base error for scraping operations."""

    def __init__(
        self,
        message: str,
        details: Optional[dict[str, Any]] = None,
        recoverable: bool = False,
    ):
        """Initialize scraper error.

        Args:
            message: Human-readable error message
            details: Additional error context
            recoverable: Whether extraction can carry on past the error
        """
        super().__init__("scraper", message, details)
        self.recoverable = recoverable


class BrowserError(ScraperError):
    """Error related to browser/WebDriver operations."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        """Initialize browser error.

        Examples:
            - ChromeDriver not found
            - Browser failed to start
        """
        super().__init__(message, details, recoverable=False)


class ElementDetached(ScraperError):
    """An element handle went stale between lookup and use.

    The page re-rendered the subtree the handle pointed into. Field reads
    treat this as absence; section extractors treat it as a failed section.
    """

    def __init__(
        self,
        message: str = "Element is no longer attached to the page",
        details: Optional[dict[str, Any]] = None,
    ):
        """Initialize element detached error."""
        super().__init__(message, details, recoverable=True)


class ScraperAuthError(ScraperError):
    """Error related to LinkedIn authentication during scraping.

    Use this for scraper authentication failures like invalid cookies,
    expired sessions, or a rejected login form.
    """

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        """Initialize scraper auth error.

        Examples:
            - Invalid credentials
            - Missing cookie
            - Session expired
        """
        super().__init__(message, details, recoverable=False)


class TwoFactorRequired(ScraperAuthError):
    """Error indicating 2FA verification is required.

    This error is raised when LinkedIn requires two-factor authentication
    during login. The user must complete the verification manually.
    """

    def __init__(
        self,
        message: str = "Two-factor authentication required. Complete the challenge in the browser and press Enter.",
        details: Optional[dict[str, Any]] = None,
    ):
        """Initialize 2FA required error."""
        super().__init__(message, details)
        # User can complete 2FA manually
        self.recoverable = True


class CookieExpired(ScraperAuthError):
    """Error indicating the LinkedIn session cookie has expired.

    Raised when the li_at cookie, or a stored cookie jar, no longer
    yields an authenticated session.
    """

    def __init__(
        self,
        message: str = "LinkedIn session cookie has expired. Please obtain a fresh li_at cookie from LinkedIn.",
        details: Optional[dict[str, Any]] = None,
    ):
        """Initialize cookie expired error."""
        super().__init__(message, details)


class ProfileNotFound(ScraperError):
    """Error indicating the LinkedIn profile was not found."""

    def __init__(
        self,
        profile_url: str,
        message: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        """Initialize profile not found error.

        Args:
            profile_url: The URL that was requested
            message: Optional custom message
            details: Additional error context
        """
        error_message = (
            message
            or f"Profile not found: {profile_url}. Verify the profile exists and is accessible."
        )
        error_details = details or {}
        error_details["profile_url"] = profile_url
        super().__init__(error_message, error_details, recoverable=False)
        self.profile_url = profile_url


class PageLoadTimeout(ScraperError):
    """Error indicating a page failed to load within the timeout period."""

    def __init__(
        self,
        url: str,
        timeout_seconds: int,
        message: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        """Initialize page load timeout error.

        Args:
            url: The URL that timed out
            timeout_seconds: The timeout value that was exceeded
            message: Optional custom message
            details: Additional error context
        """
        error_message = (
            message or f"Page load timed out after {timeout_seconds}s: {url}"
        )
        error_details = details or {}
        error_details["url"] = url
        error_details["timeout_seconds"] = timeout_seconds
        super().__init__(error_message, error_details, recoverable=True)
        self.url = url
        self.timeout_seconds = timeout_seconds
