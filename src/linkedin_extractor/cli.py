"""CLI entry point for LinkedIn Profile Extractor."""

import asyncio
import json
import logging
import os
import sys
from pathlib import Path
from typing import Optional

import click
from dotenv import load_dotenv
from pydantic import ValidationError

from linkedin_extractor.config import (
    AuthConfig,
    BrowserConfig,
    Config,
    ExtractionConfig,
)
from linkedin_extractor.logging_config import setup_logging
from linkedin_extractor.orchestrator import extract_profile

TRUTHY = ("true", "1", "yes")


def _env_flag(name: str) -> bool:
    return os.getenv(name, "").lower() in TRUTHY


def load_config(
    profile_id: str,
    # Authentication options
    linkedin_cookie: Optional[str],
    linkedin_email: Optional[str],
    linkedin_password: Optional[str],
    storage_path: Optional[str],
    # Browser configuration options
    headless: Optional[bool],
    chromedriver_path: Optional[str],
    page_load_timeout: Optional[int],
    max_retries: Optional[int],
    screenshot_on_error: bool,
    # Extraction options
    wait_timeout: Optional[float],
    detailed_skills: bool,
    # General options
    output_path: Optional[str],
    verbose: bool,
) -> Config:
    """Load configuration from CLI arguments and environment variables.

    CLI arguments take precedence over environment variables. Options left
    unset on the command line (``None``) fall back to the environment and
    then to the model defaults.

    Raises:
        SystemExit: If configuration validation fails
    """
    load_dotenv()

    auth_config_dict = {
        "cookie": linkedin_cookie or os.getenv("LINKEDIN_COOKIE"),
        "email": linkedin_email or os.getenv("LINKEDIN_EMAIL"),
        "password": linkedin_password or os.getenv("LINKEDIN_PASSWORD"),
        "storage_path": storage_path or os.getenv("LINKEDIN_STORAGE_PATH"),
    }

    # Headless unless --no-headless or HEADLESS=false says otherwise
    if headless is None:
        headless = _env_flag("HEADLESS") if os.getenv("HEADLESS") else True

    browser_config_dict = {
        "headless": headless,
        "chromedriver_path": chromedriver_path or os.getenv("CHROMEDRIVER_PATH"),
        "screenshot_on_error": screenshot_on_error or _env_flag("SCREENSHOT_ON_ERROR"),
    }
    if page_load_timeout is not None:
        browser_config_dict["page_load_timeout"] = page_load_timeout
    elif os.getenv("PAGE_LOAD_TIMEOUT"):
        browser_config_dict["page_load_timeout"] = os.getenv("PAGE_LOAD_TIMEOUT")
    if max_retries is not None:
        browser_config_dict["max_retries"] = max_retries
    elif os.getenv("MAX_RETRIES"):
        browser_config_dict["max_retries"] = os.getenv("MAX_RETRIES")

    extraction_config_dict = {"detailed_skills": detailed_skills}
    if wait_timeout is not None:
        extraction_config_dict["wait_timeout"] = wait_timeout
    elif os.getenv("WAIT_TIMEOUT"):
        extraction_config_dict["wait_timeout"] = os.getenv("WAIT_TIMEOUT")

    try:
        return Config(
            auth=AuthConfig(**auth_config_dict),
            browser=BrowserConfig(**browser_config_dict),
            extraction=ExtractionConfig(**extraction_config_dict),
            profile_id=profile_id,
            output_path=output_path,
            verbose=verbose,
        )
    except ValidationError as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(1)


def write_profile(profile_dict: dict, output_path: Optional[str]) -> None:
    """Print the profile as JSON, or write it to ``output_path``."""
    payload = json.dumps(profile_dict, indent=2, ensure_ascii=False)
    if output_path:
        path = Path(output_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(payload + "\n", encoding="utf-8")
    else:
        click.echo(payload)


@click.command()
@click.argument("profile_id")
# Authentication options
@click.option(
    "--linkedin-cookie",
    help="LinkedIn li_at session cookie (preferred auth method, bypasses 2FA)",
)
@click.option(
    "--linkedin-email",
    help="LinkedIn email (fallback auth, may trigger 2FA)",
)
@click.option(
    "--linkedin-password",
    help="LinkedIn password (fallback auth)",
)
@click.option(
    "--storage-path",
    help="JSON file with saved session cookies; written after a credential login",
)
# Browser configuration options
@click.option(
    "--headless/--no-headless",
    default=None,
    help="Run browser in headless mode (default: headless)",
)
@click.option(
    "--chromedriver-path",
    help="Path to chromedriver executable (auto-downloads if not specified)",
)
@click.option(
    "--page-load-timeout",
    type=int,
    default=None,
    help="Maximum page load timeout in seconds (default: 30)",
)
@click.option(
    "--max-retries",
    type=int,
    default=None,
    help="Maximum navigation retry attempts (default: 3)",
)
@click.option(
    "--screenshot-on-error",
    is_flag=True,
    default=False,
    help="Capture screenshot when errors occur (for debugging)",
)
# Extraction options
@click.option(
    "--wait-timeout",
    type=float,
    default=None,
    help="Maximum wait for sections and popups in seconds (default: 10)",
)
@click.option(
    "--detailed-skills/--basic-skills",
    default=True,
    help="List every skill's endorsers (slow) or only names and counts",
)
# General options
@click.option(
    "--output",
    "-o",
    "output_path",
    type=click.Path(dir_okay=False),
    help="Write the profile JSON to this file instead of stdout",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
def main(
    profile_id: str,
    linkedin_cookie: Optional[str],
    linkedin_email: Optional[str],
    linkedin_password: Optional[str],
    storage_path: Optional[str],
    headless: Optional[bool],
    chromedriver_path: Optional[str],
    page_load_timeout: Optional[int],
    max_retries: Optional[int],
    screenshot_on_error: bool,
    wait_timeout: Optional[float],
    detailed_skills: bool,
    output_path: Optional[str],
    verbose: bool,
) -> None:
    """Extract a LinkedIn profile into JSON using a Selenium-driven browser.

    PROFILE_ID: LinkedIn profile id (e.g. johndoe) or profile URL

    \b
    AUTHENTICATION:
    ---------------
    The recommended authentication method is cookie-based:

    \b
    1. Log into LinkedIn in your browser
    2. Open DevTools (F12) → Application → Cookies → linkedin.com
    3. Copy the value of the 'li_at' cookie
    4. Set LINKEDIN_COOKIE environment variable or use --linkedin-cookie

    \b
    Alternatively, log in with LINKEDIN_EMAIL and LINKEDIN_PASSWORD. With
    --storage-path (or LINKEDIN_STORAGE_PATH) the session is saved after the
    first login and reused on later runs.

    \b
    EXAMPLES:
    ---------
    # Using cookie authentication (recommended)
    export LINKEDIN_COOKIE="AQEDAQNv..."
    linkedin-extract johndoe --output johndoe.json

    \b
    # Skip the endorsers popups
    linkedin-extract https://www.linkedin.com/in/johndoe/ --basic-skills

    Exit code: 0 for success, 1 for failure
    """
    setup_logging(verbose)
    logger = logging.getLogger(__name__)

    logger.info(
        f"LinkedIn Profile Extractor v{__import__('linkedin_extractor').__version__}"
    )
    logger.info(f"Profile: {profile_id}")

    config = load_config(
        profile_id=profile_id,
        linkedin_cookie=linkedin_cookie,
        linkedin_email=linkedin_email,
        linkedin_password=linkedin_password,
        storage_path=storage_path,
        headless=headless,
        chromedriver_path=chromedriver_path,
        page_load_timeout=page_load_timeout,
        max_retries=max_retries,
        screenshot_on_error=screenshot_on_error,
        wait_timeout=wait_timeout,
        detailed_skills=detailed_skills,
        output_path=output_path,
        verbose=verbose,
    )

    logger.debug("Configuration loaded successfully")
    logger.info(f"Authentication method: {config.auth.method.value}")
    logger.debug(f"Headless mode: {config.browser.headless}")
    logger.debug(f"Detailed skills: {config.extraction.detailed_skills}")

    try:
        result = asyncio.run(extract_profile(config))
    except KeyboardInterrupt:
        logger.warning("Extraction interrupted by user")
        sys.exit(1)

    if not result.success:
        logger.error("=" * 60)
        logger.error("Extraction failed!")
        logger.error(f"  Error: {result.error}")
        logger.error("=" * 60)
        sys.exit(1)

    write_profile(result.profile.to_dict(), config.output_path)
    if config.output_path:
        logger.info(f"Profile written to {config.output_path}")
    sys.exit(0)


if __name__ == "__main__":
    main()
