"""Profile-level extraction.

Reads the identity fields at the top of the profile, then runs the
section extractors one after another against the same page.
"""

import logging
from typing import Awaitable, Optional, TypeVar

from .certifications import CertificationExtractor
from .context import ExtractionContext
from .education import EducationExtractor
from .events import emit
from .experience import ExperienceExtractor
from .models import Profile
from .scraper_errors import ScraperError
from .skills import SkillExtractor

T = TypeVar("T")


class ProfileExtractor:
    """Builds a best-effort ``Profile`` from a surface showing a profile page.

    Each field and section is attempted independently. A recoverable
    ``ScraperError`` leaves that part ``None`` and the remaining parts are
    still extracted. ``SurfaceError`` and non-recoverable errors abort the
    whole call.
    """

    def __init__(self, ctx: ExtractionContext):
        self.ctx = ctx
        self.sel = ctx.selectors.base
        self.experience = ExperienceExtractor(ctx)
        self.education = EducationExtractor(ctx)
        self.certifications = CertificationExtractor(ctx)
        self.skills = SkillExtractor(ctx)

    async def extract(self, detailed_skills: bool = True) -> Profile:
        reader = self.ctx.reader
        profile = Profile(
            full_name=await self._attempt("full_name", reader.read_optional(self.sel.full_name)),
            short_description=await self._attempt(
                "short_description", reader.read_optional(self.sel.short_description)
            ),
            about=await self._attempt("about", self.about()),
            location=await self._attempt("location", reader.read_optional(self.sel.location)),
            is_premium=await self._attempt(
                "is_premium",
                reader.exists(self.sel.premium_badge, timeout=self.ctx.badge_timeout),
            ),
            is_influencer=await self._attempt(
                "is_influencer",
                reader.exists(self.sel.influencer_badge, timeout=self.ctx.badge_timeout),
            ),
            experiences=await self._attempt("experiences", self.experience.extract()),
            educations=await self._attempt("educations", self.education.extract()),
            certifications=await self._attempt(
                "certifications", self.certifications.extract()
            ),
            skills=await self._attempt("skills", self.skills.extract(detailed_skills)),
        )
        emit(
            self.ctx.events,
            "profile.extracted",
            logging.INFO,
            experiences=_count(profile.experiences),
            educations=_count(profile.educations),
            certifications=_count(profile.certifications),
            skills=_count(profile.skills),
        )
        return profile

    async def about(self) -> Optional[str]:
        """About text without its "see more" toggle, ``None`` if absent."""
        if not await self.ctx.reader.exists(self.sel.about):
            return None
        return await self.ctx.reader.read_filtered(
            self.sel.about, self.sel.about_see_more
        )

    async def _attempt(self, part: str, step: Awaitable[T]) -> Optional[T]:
        try:
            return await step
        except ScraperError as e:
            if not e.recoverable:
                raise
            emit(
                self.ctx.events,
                "section.failed",
                logging.WARNING,
                section=part,
                error=e.message,
            )
            return None


def _count(items: Optional[tuple]) -> Optional[int]:
    return None if items is None else len(items)
