"""Configuration management for LinkedIn Profile Extractor.

This module provides Pydantic models for configuring authentication, the
Selenium browser, and the pacing of the extraction loops.
"""

from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator


class AuthMethod(str, Enum):
    """Authentication method for the LinkedIn session.

    COOKIE: Direct injection of the li_at session cookie.
            This is the PREFERRED method as it bypasses 2FA and CAPTCHA.

    CREDENTIALS: Email and password authentication via the login form.
                 This is the FALLBACK method and may trigger 2FA.

    STORED: Reuse a cookie jar saved by a previous credential login.
    """

    COOKIE = "cookie"
    CREDENTIALS = "credentials"
    STORED = "stored"


class AuthConfig(BaseModel):
    """LinkedIn authentication configuration.

    Priority order when no method is given:
    1. Cookie, if provided
    2. Stored cookie jar, if ``storage_path`` points at an existing file
    3. Email/password, if both provided
    """

    method: Optional[AuthMethod] = Field(
        default=None,
        description="Authentication method (auto-detected if not specified)",
    )
    cookie: Optional[str] = Field(
        default=None,
        description="LinkedIn li_at session cookie (preferred method)",
    )
    email: Optional[str] = Field(
        default=None,
        description="LinkedIn email address (fallback method)",
    )
    password: Optional[str] = Field(
        default=None,
        description="LinkedIn password (fallback method)",
    )
    storage_path: Optional[str] = Field(
        default=None,
        description="JSON file holding the session cookies of a previous login",
    )
    remember: bool = Field(
        default=True,
        description="Save session cookies to storage_path after a credential login",
    )

    @field_validator("cookie")
    @classmethod
    def validate_cookie(cls, v: Optional[str]) -> Optional[str]:
        """Validate and clean the cookie value."""
        if v is not None:
            v = v.strip()
            if not v:
                return None
        return v

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: Optional[str]) -> Optional[str]:
        """Validate and clean the email value."""
        if v is not None:
            v = v.strip()
            if not v:
                return None
            if "@" not in v:
                raise ValueError("Invalid email format")
        return v

    @model_validator(mode="after")
    def validate_auth_config(self) -> "AuthConfig":
        """Auto-detect the authentication method and check its inputs."""
        stored_available = bool(self.storage_path) and Path(self.storage_path).is_file()

        if self.method is None:
            if self.cookie:
                object.__setattr__(self, "method", AuthMethod.COOKIE)
            elif stored_available:
                object.__setattr__(self, "method", AuthMethod.STORED)
            elif self.email and self.password:
                object.__setattr__(self, "method", AuthMethod.CREDENTIALS)
            else:
                raise ValueError(
                    "Authentication requires LINKEDIN_COOKIE (preferred), "
                    "an existing LINKEDIN_STORAGE_PATH, "
                    "or both LINKEDIN_EMAIL and LINKEDIN_PASSWORD"
                )

        if self.method == AuthMethod.COOKIE and not self.cookie:
            raise ValueError(
                "Cookie authentication requires LINKEDIN_COOKIE to be set"
            )
        if self.method == AuthMethod.STORED and not stored_available:
            raise ValueError(
                "Stored authentication requires LINKEDIN_STORAGE_PATH to point at an existing file"
            )
        if self.method == AuthMethod.CREDENTIALS:
            if not self.email:
                raise ValueError(
                    "Credentials authentication requires LINKEDIN_EMAIL to be set"
                )
            if not self.password:
                raise ValueError(
                    "Credentials authentication requires LINKEDIN_PASSWORD to be set"
                )

        return self


class BrowserConfig(BaseModel):
    """Selenium browser configuration."""

    headless: bool = Field(
        default=True,
        description="Run Chrome in headless mode (no visible window). "
        "Set to False for debugging.",
    )
    chromedriver_path: Optional[str] = Field(
        default=None,
        description="Path to ChromeDriver executable. "
        "If not set, webdriver-manager will auto-download.",
    )
    page_load_timeout: int = Field(
        default=30,
        ge=5,
        le=120,
        description="Maximum time to wait for page loads in seconds",
    )
    action_delay: float = Field(
        default=1.0,
        ge=0.0,
        le=10.0,
        description="Delay after navigation and login steps in seconds",
    )
    max_retries: int = Field(
        default=3,
        ge=0,
        le=10,
        description="Maximum navigation retry attempts",
    )
    screenshot_on_error: bool = Field(
        default=False,
        description="Capture screenshot when errors occur (for debugging)",
    )
    user_agent: Optional[str] = Field(
        default=None,
        description="Custom user agent string. Uses Chrome default if not set.",
    )


class ExtractionConfig(BaseModel):
    """Pacing and bounds of the extraction loops.

    All durations are in seconds.
    """

    wait_timeout: float = Field(
        default=10.0,
        gt=0,
        le=120,
        description="Default bound for waits on elements, sections and popups",
    )
    badge_timeout: float = Field(
        default=2.0,
        ge=0,
        le=30,
        description="Bound for premium/influencer/assessment badge probes",
    )
    poll_interval: float = Field(
        default=1.0,
        gt=0,
        le=10,
        description="Wait between disclosure clicks and reveal scrolls",
    )
    disclosure_budget: float = Field(
        default=60.0,
        gt=0,
        description="Wall-clock budget of one see-more disclosure run",
    )
    scroll_budget: float = Field(
        default=600.0,
        gt=0,
        description="Wall-clock budget for draining one endorsers popup",
    )
    settle_delay: float = Field(
        default=5.0,
        ge=0,
        le=60,
        description="Pause after expanding certifications and skills",
    )
    jitter_min: float = Field(
        default=5.0,
        ge=0,
        description="Lower bound of the pause between endorser list scrolls",
    )
    jitter_max: float = Field(
        default=10.0,
        ge=0,
        description="Upper bound (exclusive) of the pause between endorser list scrolls",
    )
    detailed_skills: bool = Field(
        default=True,
        description="Open every skill's endorsers popup and list the endorsers",
    )

    @model_validator(mode="after")
    def validate_jitter(self) -> "ExtractionConfig":
        """Validate the jitter range is not inverted."""
        if self.jitter_max < self.jitter_min:
            raise ValueError(
                f"jitter_max ({self.jitter_max}) must not be below jitter_min ({self.jitter_min})"
            )
        return self


class Config(BaseModel):
    """Main configuration for LinkedIn Profile Extractor."""

    auth: AuthConfig = Field(description="LinkedIn authentication configuration")
    browser: BrowserConfig = Field(
        default_factory=BrowserConfig,
        description="Browser configuration",
    )
    extraction: ExtractionConfig = Field(
        default_factory=ExtractionConfig,
        description="Extraction pacing configuration",
    )
    profile_id: str = Field(description="LinkedIn profile id or URL")
    output_path: Optional[str] = Field(
        default=None,
        description="Write the profile JSON here instead of stdout",
    )
    verbose: bool = Field(default=False, description="Enable verbose logging")

    @field_validator("profile_id")
    @classmethod
    def validate_profile_id(cls, v: str) -> str:
        """Validate profile id is not empty."""
        if not v or not v.strip():
            raise ValueError("Profile id cannot be empty")
        return v.strip()
