"""Absence-tolerant field reads on a renderable surface."""

from typing import Optional

from .scraper_errors import ElementDetached
from .surface import ElementHandle, RenderableSurface


class SafeFieldReader:
    """Reads single fields without failing the surrounding extraction.

    A selector that matches nothing, or an element that detaches while it
    is being read, yields ``""`` (or ``False`` for presence probes). Only
    surface-fatal errors propagate.
    """

    def __init__(self, surface: RenderableSurface):
        self.surface = surface

    async def read(self, selector: str, scope: Optional[ElementHandle] = None) -> str:
        """Return the trimmed text of the first match, or ``""``."""
        return (await self.read_optional(selector, scope)) or ""

    async def read_optional(
        self, selector: str, scope: Optional[ElementHandle] = None
    ) -> Optional[str]:
        """Return the trimmed text of the first match, or ``None`` if absent."""
        try:
            text = await self.surface.text_content(selector, scope)
        except ElementDetached:
            return None
        return text.strip() if text is not None else None

    async def read_element(self, element: ElementHandle) -> str:
        """Return the trimmed text of an already resolved element."""
        try:
            text = await self.surface.text_of(element)
        except ElementDetached:
            return ""
        return (text or "").strip()

    async def read_attribute(
        self, selector: str, name: str, scope: Optional[ElementHandle] = None
    ) -> str:
        """Return the trimmed attribute value of the first match, or ``""``."""
        try:
            value = await self.surface.attribute(selector, name, scope)
        except ElementDetached:
            return ""
        return (value or "").strip()

    async def exists(
        self,
        selector: str,
        scope: Optional[ElementHandle] = None,
        timeout: Optional[float] = None,
    ) -> bool:
        """Probe whether ``selector`` matches.

        Without a timeout this is an immediate lookup. With one it waits
        for the element to appear and reports ``False`` when the wait
        times out.
        """
        try:
            if timeout is None:
                return await self.surface.query(selector, scope) is not None
            found = await self.surface.wait_for_appearance(selector, scope, timeout)
        except ElementDetached:
            return False
        return found is not None

    async def read_filtered(
        self,
        selector: str,
        exclude: str,
        scope: Optional[ElementHandle] = None,
    ) -> str:
        """Read ``selector`` with the text of a nested ``exclude`` element removed.

        Used for descriptions that embed a "see more" toggle: the toggle's
        own text is cut out (last occurrence) before trimming.
        """
        try:
            target = await self.surface.query(selector, scope)
            if target is None:
                return ""
            text = await self.surface.text_of(target) or ""
            toggle = await self.surface.text_content(exclude, target)
        except ElementDetached:
            return ""
        if toggle:
            cut = text.rfind(toggle)
            if cut != -1:
                text = text[:cut] + text[cut + len(toggle):]
        return text.strip()
