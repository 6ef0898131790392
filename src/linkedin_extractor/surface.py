"""The rendered-document interface the extraction core runs against.

A ``RenderableSurface`` is a page already positioned on the target
profile. Extractors only ever talk to this protocol; ``SeleniumSurface``
is the production implementation and the test suite provides an
in-memory one.

Conventions shared by all implementations:

- ``scope`` is an element handle to search under, or ``None`` for the
  whole document.
- Lookups return ``None`` (or an empty list) for "nothing matches"; they
  never raise for absence.
- ``wait_for_appearance`` and ``wait_for_disappearance`` return
  ``None``/``False`` on timeout instead of raising.
- ``ElementDetached`` signals a stale handle (recoverable);
  ``SurfaceError`` signals a broken surface (fatal).
"""

from dataclasses import dataclass
from typing import Any, Optional, Protocol

# Opaque handle to a rendered element. Its concrete type belongs to the
# surface implementation (a WebElement for Selenium).
ElementHandle = Any


@dataclass(frozen=True)
class ScrollMetrics:
    """Scroll state of a container.

    Attributes:
        position: Current scroll offset
        viewport: Visible extent of the container
        limit: Total scrollable extent of the content
    """

    position: float
    viewport: float
    limit: float


class RenderableSurface(Protocol):
    """Async query/wait/click/scroll primitives over a rendered document."""

    async def text_content(
        self, selector: str, scope: Optional[ElementHandle] = None
    ) -> Optional[str]: ...

    async def text_of(self, element: ElementHandle) -> Optional[str]: ...

    async def attribute(
        self, selector: str, name: str, scope: Optional[ElementHandle] = None
    ) -> Optional[str]: ...

    async def query(
        self, selector: str, scope: Optional[ElementHandle] = None
    ) -> Optional[ElementHandle]: ...

    async def query_all(
        self, selector: str, scope: Optional[ElementHandle] = None
    ) -> list[ElementHandle]: ...

    async def click(self, element: ElementHandle) -> None: ...

    async def wait_for_appearance(
        self,
        selector: str,
        scope: Optional[ElementHandle] = None,
        timeout: Optional[float] = None,
    ) -> Optional[ElementHandle]: ...

    async def wait_for_disappearance(
        self,
        selector: str,
        scope: Optional[ElementHandle] = None,
        timeout: Optional[float] = None,
    ) -> bool: ...

    async def scroll_by(
        self, element: Optional[ElementHandle], amount: Optional[float] = None
    ) -> None:
        """Scroll ``element`` (the document when ``None``) by ``amount``.

        ``amount=None`` scrolls by one viewport height.
        """
        ...

    async def scroll_metrics(
        self, element: Optional[ElementHandle] = None
    ) -> ScrollMetrics: ...

    async def delay(self, seconds: float) -> None: ...
