"""Endorsers popup crawling.

Clicking a skill's endorsement link opens a modal listing the members who
endorsed it. The list loads lazily as it is scrolled, so the crawler
drains it before reading the entries, then closes the modal again.
"""

import asyncio
import logging
from typing import Optional

from .context import ExtractionContext
from .events import emit
from .models import User
from .parsing import username_from_profile_url
from .scraper_errors import ElementDetached
from .surface import ElementHandle


class EndorsementCrawler:
    """Collects the endorsers of one skill from its popup."""

    def __init__(self, ctx: ExtractionContext):
        self.ctx = ctx
        self.sel = ctx.selectors.skills.endorsements

    async def collect(self, detail_link: Optional[ElementHandle]) -> tuple[User, ...]:
        """Open the popup behind ``detail_link`` and return its endorsers.

        Any failure to open or read the popup yields an empty tuple and a
        warning event; it never fails the skill itself. An opened popup is
        always closed again.
        """
        if detail_link is None:
            return ()
        surface = self.ctx.surface
        try:
            await surface.click(detail_link)
        except ElementDetached:
            emit(self.ctx.events, "endorsements.link_detached", logging.WARNING)
            return ()

        popup = await surface.wait_for_appearance(
            self.sel.popup, None, self.ctx.wait_timeout
        )
        if popup is None:
            emit(
                self.ctx.events,
                "endorsements.popup_timeout",
                logging.WARNING,
                timeout=self.ctx.wait_timeout,
            )
            return ()

        try:
            return await self._read_popup(popup)
        except ElementDetached:
            emit(self.ctx.events, "endorsements.list_detached", logging.WARNING)
            return ()
        finally:
            await self._close(popup)

    async def _read_popup(self, popup: ElementHandle) -> tuple[User, ...]:
        surface = self.ctx.surface
        container = await surface.wait_for_appearance(
            self.sel.list_container, popup, self.ctx.wait_timeout
        )
        if container is None:
            emit(self.ctx.events, "endorsements.list_missing", logging.WARNING)
            return ()

        await self.ctx.scroller.drain(container)
        entities = await surface.query_all(self.sel.entity, container)
        users = await asyncio.gather(*(self._user(entity) for entity in entities))
        emit(self.ctx.events, "endorsements.collected", count=len(users))
        return tuple(users)

    async def _user(self, entity: ElementHandle) -> User:
        name, href = await asyncio.gather(
            self.ctx.reader.read(self.sel.entity_name, entity),
            self.ctx.reader.read_attribute(self.sel.entity_link, "href", entity),
        )
        return User(name=name, username=username_from_profile_url(href))

    async def _close(self, popup: ElementHandle) -> None:
        try:
            button = await self.ctx.surface.query(self.sel.close_button, popup)
            if button is None:
                emit(self.ctx.events, "endorsements.close_missing", logging.WARNING)
                return
            await self.ctx.surface.click(button)
        except ElementDetached:
            emit(self.ctx.events, "endorsements.close_failed", logging.WARNING)
