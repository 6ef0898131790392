"""Licenses and certifications extraction."""

import asyncio

from .context import ExtractionContext
from .events import emit
from .models import Certification, Credential, Issuer
from .parsing import parse_certification_dates, strip_credential_label
from .surface import ElementHandle


class CertificationExtractor:
    """Extracts the certifications section into ``Certification`` records."""

    def __init__(self, ctx: ExtractionContext):
        self.ctx = ctx
        self.sel = ctx.selectors.certifications

    async def extract(self) -> tuple[Certification, ...]:
        section = await self.ctx.scroller.reveal(self.sel.section)
        if section is None:
            emit(self.ctx.events, "certifications.absent")
            return ()
        await self.ctx.disclosure.expand(self.sel.see_more, section)
        await self.ctx.surface.delay(self.ctx.settle_delay)

        items = await self.ctx.surface.query_all(self.sel.item, section)
        certifications = await asyncio.gather(*(self._item(item) for item in items))
        emit(self.ctx.events, "certifications.extracted", count=len(certifications))
        return tuple(certifications)

    async def _item(self, item: ElementHandle) -> Certification:
        reader = self.ctx.reader
        (
            issuer_url,
            issuer_name,
            name,
            dates,
            credential_id,
            credential_url,
        ) = await asyncio.gather(
            reader.read_attribute(self.sel.company_url, "href", item),
            reader.read(self.sel.company_name, item),
            reader.read(self.sel.name, item),
            reader.read(self.sel.dates, item),
            reader.read(self.sel.credential_id, item),
            reader.read_attribute(self.sel.credential_url, "href", item),
        )
        issued, expiration = parse_certification_dates(dates)
        return Certification(
            name=name,
            issuer=Issuer(name=issuer_name, linkedin_url=issuer_url),
            credential=Credential(
                id=strip_credential_label(credential_id), url=credential_url
            ),
            issued=issued,
            expiration=expiration,
        )
