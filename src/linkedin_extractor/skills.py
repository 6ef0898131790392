"""Skills extraction."""

import asyncio
from typing import Optional

from .context import ExtractionContext
from .endorsements import EndorsementCrawler
from .events import emit
from .models import Skill
from .parsing import parse_leading_int
from .surface import ElementHandle


class SkillExtractor:
    """Extracts the skills section, optionally with each skill's endorsers."""

    def __init__(
        self,
        ctx: ExtractionContext,
        crawler: Optional[EndorsementCrawler] = None,
    ):
        self.ctx = ctx
        self.sel = ctx.selectors.skills
        self.crawler = crawler or EndorsementCrawler(ctx)

    async def extract(self, detailed: bool = True) -> tuple[Skill, ...]:
        """Extract every skill in page order.

        Args:
            detailed: Open each skill's endorsers popup and list the endorsers.
                Popups share the page, so skills are then handled one by one.
        """
        section = await self.ctx.scroller.reveal(self.sel.section)
        if section is None:
            emit(self.ctx.events, "skills.absent")
            return ()
        await self.ctx.disclosure.expand(self.sel.see_more, section)
        await self.ctx.surface.delay(self.ctx.settle_delay)

        items = await self.ctx.surface.query_all(self.sel.item, section)
        skills = []
        for item in items:
            skills.append(await self._item(item, detailed))
        emit(self.ctx.events, "skills.extracted", count=len(skills), detailed=detailed)
        return tuple(skills)

    async def _item(self, item: ElementHandle, detailed: bool) -> Skill:
        reader = self.ctx.reader
        name, has_badge, link = await asyncio.gather(
            reader.read(self.sel.entity_name, item),
            reader.exists(self.sel.assessment_badge, item),
            self.ctx.surface.query(self.sel.detail_link, item),
        )
        # The endorsement count is rendered inside the detail link
        count_text = ""
        if link is not None:
            count_text = await reader.read(self.sel.endorsement_count, link)
        endorsements = ()
        if detailed:
            endorsements = await self.crawler.collect(link)
        return Skill(
            name=name,
            has_assessment_badge=has_badge,
            endorsement_count=parse_leading_int(count_text),
            endorsements=endorsements,
        )
