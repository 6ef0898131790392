"""Education extraction."""

import asyncio

from .context import ExtractionContext
from .events import emit
from .models import Education, School
from .parsing import parse_year_interval
from .surface import ElementHandle


class EducationExtractor:
    """Extracts the education section into ``Education`` records."""

    def __init__(self, ctx: ExtractionContext):
        self.ctx = ctx
        self.sel = ctx.selectors.education

    async def extract(self) -> tuple[Education, ...]:
        section = await self.ctx.scroller.reveal(self.sel.section)
        if section is None:
            emit(self.ctx.events, "education.absent")
            return ()
        await self.ctx.disclosure.expand(self.sel.see_more_button, section)

        items = await self.ctx.surface.query_all(self.sel.list_item, section)
        educations = await asyncio.gather(*(self._item(item) for item in items))
        emit(self.ctx.events, "education.extracted", count=len(educations))
        return tuple(educations)

    async def _item(self, item: ElementHandle) -> Education:
        read = self.ctx.reader.read
        (
            school_name,
            school_url,
            dates,
            field_of_study,
            degree,
            description,
            activities,
        ) = await asyncio.gather(
            read(self.sel.school_name, item),
            self.ctx.reader.read_attribute(self.sel.school_link, "href", item),
            read(self.sel.date, item),
            read(self.sel.field_name, item),
            read(self.sel.degree_name, item),
            read(self.sel.description, item),
            read(self.sel.activities_and_societies, item),
        )
        return Education(
            school=School(name=school_name, url=school_url),
            date=parse_year_interval(dates),
            field_of_study=field_of_study,
            degree=degree,
            description=description,
            activities_and_societies=activities,
        )
