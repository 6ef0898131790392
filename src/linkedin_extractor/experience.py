"""Work experience extraction.

A company block on the profile comes in two layouts:

- single role: the block's summary shows company, role and dates directly;
- multi role: the block groups several role items under one company
  header, some of them hidden behind an "expand roles" trigger.
"""

import asyncio

from .context import ExtractionContext
from .events import emit
from .models import Company, Experience, Role
from .parsing import parse_company_header, parse_text_interval
from .surface import ElementHandle


class ExperienceExtractor:
    """Extracts the experience section into ``Experience`` records."""

    def __init__(self, ctx: ExtractionContext):
        self.ctx = ctx
        self.sel = ctx.selectors.experience

    async def extract(self) -> tuple[Experience, ...]:
        """Expand the section and extract every company block in page order.

        Returns an empty tuple when the profile has no experience section.
        """
        if await self.ctx.scroller.reveal(self.sel.group) is None:
            return ()
        await self.ctx.disclosure.expand(self.sel.more_button)

        blocks = await self.ctx.surface.query_all(self.sel.group)
        experiences = []
        # Blocks are handled one at a time: expanding roles moves the page.
        for block in blocks:
            experiences.append(await self.extract_block(block))
        emit(self.ctx.events, "experience.extracted", count=len(experiences))
        return tuple(experiences)

    async def extract_block(self, block: ElementHandle) -> Experience:
        company_url = await self.ctx.reader.read_attribute(
            self.sel.company_link, "href", block
        )
        roles = await self.ctx.surface.query_all(self.sel.role_container, block)
        if not roles:
            return await self._single_role(block, company_url)
        return await self._multiple_roles(block, company_url)

    async def _single_role(self, block: ElementHandle, company_url: str) -> Experience:
        read = self.ctx.reader.read
        header, interval, location, duration, description, role_name = await asyncio.gather(
            read(self.sel.summary_company_name, block),
            read(self.sel.summary_time_interval, block),
            read(self.sel.summary_location, block),
            read(self.sel.summary_duration, block),
            read(self.sel.description, block),
            read(self.sel.summary_role_name, block),
        )
        company_name, contract_type = parse_company_header(header)
        role = Role(
            name=role_name,
            location=location,
            description=description,
            duration=duration,
            time_interval=parse_text_interval(interval),
            contract_type=contract_type,
        )
        return Experience(
            company=Company(name=company_name, linkedin_url=company_url),
            roles=(role,),
            location=location,
            total_duration=duration,
        )

    async def _multiple_roles(
        self, block: ElementHandle, company_url: str
    ) -> Experience:
        await self.ctx.disclosure.expand(self.sel.expand_roles, block)
        # Expansion renders the hidden roles, so enumerate them afterwards.
        role_elements = await self.ctx.surface.query_all(self.sel.role_container, block)

        company_name, total_duration, *roles = await asyncio.gather(
            self.ctx.reader.read(self.sel.group_title, block),
            self.ctx.reader.read(self.sel.group_subtitle, block),
            *(self._role(element) for element in role_elements),
        )
        return Experience(
            company=Company(name=company_name, linkedin_url=company_url),
            roles=tuple(roles),
            location="",
            total_duration=total_duration,
        )

    async def _role(self, element: ElementHandle) -> Role:
        reader = self.ctx.reader
        name, contract_type, info_elements, description = await asyncio.gather(
            reader.read(self.sel.role_name, element),
            reader.read(self.sel.contract_type, element),
            self.ctx.surface.query_all(self.sel.role_info, element),
            reader.read_filtered(
                self.sel.role_description, self.sel.role_description_more, element
            ),
        )
        # Info lines: date range, duration, then location when present
        info = await asyncio.gather(*(reader.read_element(e) for e in info_elements[:3]))
        info += [""] * (3 - len(info))
        return Role(
            name=name,
            location=info[2],
            description=description,
            duration=info[1],
            time_interval=parse_text_interval(info[0]),
            contract_type=contract_type,
        )
