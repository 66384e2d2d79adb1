"""Scroll-to and highlight behaviour between references and definitions.

The browser script emitted with every page does this client side. This
module implements the same contract over a parsed BeautifulSoup document so
it can be driven and checked from Python: jumping to a footnote scrolls the
target into view, adds the highlight classes, and schedules their removal
``HIGHLIGHT_MS`` milliseconds later.

Any object with ``call_later(delay_seconds, callback)`` can act as the
scheduler, which includes an asyncio event loop. When the returned handle has
a ``cancel()`` method, jumping to the same target again restarts the window.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, Protocol

from bs4 import BeautifulSoup, Tag

from footmark.registry import definition_anchor, reference_anchor

logger = logging.getLogger(__name__)

HIGHLIGHT_MS = 2000
HIGHLIGHT_CLASSES = ("bg-yellow-100", "dark:bg-yellow-900")


class Scheduler(Protocol):
    def call_later(self, delay: float, callback: Callable[[], Any]) -> Any: ...


ScrollHandler = Callable[[Tag, str], None]


class FootnoteNavigator:
    """Jump between footnote references and definitions in a rendered page."""

    def __init__(
        self,
        soup: BeautifulSoup,
        scheduler: Scheduler,
        scroll: ScrollHandler | None = None,
    ):
        self.soup = soup
        self.scheduler = scheduler
        self.scroll = scroll or self._record_scroll
        self.scrolled: list[tuple[str, str]] = []
        self._timers: dict[str, Any] = {}

    @classmethod
    def from_html(
        cls,
        page: str,
        scheduler: Scheduler,
        scroll: ScrollHandler | None = None,
    ) -> FootnoteNavigator:
        """Parse a rendered page and navigate within it."""
        return cls(BeautifulSoup(page, "lxml"), scheduler, scroll)

    def jump_to_definition(self, footnote_id: str) -> bool:
        return self._jump(definition_anchor(footnote_id), block="start")

    def jump_to_reference(self, footnote_id: str) -> bool:
        return self._jump(reference_anchor(footnote_id), block="center")

    def is_highlighted(self, anchor: str) -> bool:
        element = self.soup.find(id=anchor)
        if element is None:
            return False
        classes = element.get("class") or []
        return all(name in classes for name in HIGHLIGHT_CLASSES)

    def _jump(self, anchor: str, block: str) -> bool:
        element = self.soup.find(id=anchor)
        if element is None:
            logger.warning("No element with id %r to scroll to", anchor)
            return False

        self.scroll(element, block)
        classes = list(element.get("class") or [])
        for name in HIGHLIGHT_CLASSES:
            if name not in classes:
                classes.append(name)
        element["class"] = classes

        # A repeat jump restarts the window instead of inheriting the old timer
        previous = self._timers.pop(anchor, None)
        cancel = getattr(previous, "cancel", None)
        if cancel is not None:
            cancel()
        self._timers[anchor] = self.scheduler.call_later(
            HIGHLIGHT_MS / 1000, lambda: self._clear(anchor, element)
        )
        return True

    def _clear(self, anchor: str, element: Tag) -> None:
        self._timers.pop(anchor, None)
        try:
            classes = [c for c in element.get("class") or [] if c not in HIGHLIGHT_CLASSES]
            if classes:
                element["class"] = classes
            elif element.has_attr("class"):
                del element["class"]
        except Exception:
            logger.exception("Failed to clear footnote highlight")

    def _record_scroll(self, element: Tag, block: str) -> None:
        self.scrolled.append((element.get("id", ""), block))
