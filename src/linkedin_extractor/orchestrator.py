"""Orchestration of a single profile extraction run."""

import logging
from dataclasses import dataclass
from typing import Optional

from .config import Config
from .context import ExtractionContext
from .errors import ExtractorError
from .events import EventSink
from .logging_config import log_error_with_details, log_progress
from .models import Profile
from .profile import ProfileExtractor
from .scraper_errors import (
    CookieExpired,
    PageLoadTimeout,
    ProfileNotFound,
    TwoFactorRequired,
)
from .session import LinkedInSession

logger = logging.getLogger(__name__)


@dataclass
class ExtractionResult:
    """Outcome of ``extract_profile``.

    Attributes:
        success: Whether a profile was extracted
        profile: The extracted profile, when successful
        error: Human readable failure reason, when unsuccessful
    """

    success: bool
    profile: Optional[Profile] = None
    error: Optional[str] = None


def create_session(config: Config) -> LinkedInSession:
    """Build the browser session described by ``config``."""
    return LinkedInSession(
        headless=config.browser.headless,
        chromedriver_path=config.browser.chromedriver_path,
        page_load_timeout=config.browser.page_load_timeout,
        action_delay=config.browser.action_delay,
        user_agent=config.browser.user_agent,
        screenshot_on_error=config.browser.screenshot_on_error,
        max_retries=config.browser.max_retries,
        wait_timeout=config.extraction.wait_timeout,
    )


async def extract_profile(
    config: Config,
    events: Optional[EventSink] = None,
    session: Optional[LinkedInSession] = None,
) -> ExtractionResult:
    """Authenticate, open the profile and extract it.

    Args:
        config: Authentication, browser and extraction settings plus the
                profile to extract
        events: Event sink for the extraction core (logs by default)
        session: Pre-built session, mainly for tests

    Returns:
        ExtractionResult with the profile or the error description

    Raises:
        Does not raise exceptions - all errors are caught and returned in ExtractionResult
    """
    logger.info("Starting LinkedIn profile extraction for %s", config.profile_id)

    try:
        log_progress(logger, "Initializing browser session")
        session = session or create_session(config)
    except Exception as e:
        error_msg = f"Failed to initialize browser session: {e}"
        logger.error(error_msg, extra={"profile_id": config.profile_id})
        return ExtractionResult(success=False, error=error_msg)

    try:
        log_progress(
            logger,
            f"Authenticating with LinkedIn ({config.auth.method.value} method)",
        )
        session.authenticate(config.auth)
        log_progress(logger, "Successfully authenticated with LinkedIn")

        log_progress(logger, f"Opening profile {config.profile_id}")
        surface = session.open_profile(config.profile_id)

        ctx = ExtractionContext.create(surface, config.extraction, events=events)
        profile = await ProfileExtractor(ctx).extract(
            detailed_skills=config.extraction.detailed_skills
        )

        log_progress(
            logger,
            f"Extracted profile: {profile.full_name}",
            details={
                "experiences_count": len(profile.experiences or ()),
                "educations_count": len(profile.educations or ()),
                "certifications_count": len(profile.certifications or ()),
                "skills_count": len(profile.skills or ()),
            },
        )
        return ExtractionResult(success=True, profile=profile)

    except CookieExpired as e:
        log_error_with_details(logger, e, context={"auth_method": config.auth.method.value})
        return ExtractionResult(
            success=False,
            error=f"LinkedIn session cookie has expired: {e.message}",
        )

    except TwoFactorRequired as e:
        log_error_with_details(logger, e, context={"auth_method": "credentials"})
        return ExtractionResult(
            success=False,
            error=f"Two-factor authentication required: {e.message}",
        )

    except ProfileNotFound as e:
        log_error_with_details(logger, e, context={"profile_id": config.profile_id})
        return ExtractionResult(success=False, error=f"Profile not found: {e.message}")

    except PageLoadTimeout as e:
        log_error_with_details(logger, e, context={"profile_id": config.profile_id})
        return ExtractionResult(success=False, error=f"Page load timed out: {e.message}")

    except ExtractorError as e:
        log_error_with_details(logger, e, context=e.details)
        return ExtractionResult(success=False, error=f"Extraction failed: {e.message}")

    except Exception as e:
        log_error_with_details(logger, e, context={"profile_id": config.profile_id})
        return ExtractionResult(
            success=False,
            error=f"Unexpected error during extraction: {e}",
        )

    finally:
        try:
            log_progress(logger, "Closing browser")
            session.close()
        except Exception as e:
            logger.warning("Error closing browser: %s", e)
