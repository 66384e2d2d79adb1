"""Per-document footnote numbering.

Numbers are handed out in the order footnotes are first registered during a
render:

    with FootnoteRegistry() as registry:
        registry.register("7", "A citation")   # -> 1
        registry.register("3", "Another")      # -> 2
        registry.register("7", "ignored")      # -> 1, no new entry
        registry.lookup("9")                   # -> None

Leaving the ``with`` block discards every entry, so nothing leaks into a
later render even if this one was abandoned half way.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from footmark.errors import RegistryScopeError


def reference_anchor(footnote_id: str) -> str:
    """Anchor id of the (first) inline reference to a footnote."""
    return f"fn-ref-{footnote_id}"


def definition_anchor(footnote_id: str) -> str:
    """Anchor id of a footnote definition in the footnote list."""
    return f"fn-{footnote_id}"


@dataclass(frozen=True)
class RegisteredFootnote:
    id: str
    number: int
    content: str

    @property
    def reference_anchor(self) -> str:
        return reference_anchor(self.id)

    @property
    def definition_anchor(self) -> str:
        return definition_anchor(self.id)


class FootnoteRegistry:
    """Ordered footnote store owned by exactly one document render."""

    def __init__(self) -> None:
        self._entries: list[RegisteredFootnote] = []
        self._numbers: dict[str, int] = {}
        self._active = False

    def __enter__(self) -> FootnoteRegistry:
        self.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    @property
    def active(self) -> bool:
        return self._active

    def open(self) -> None:
        if self._active:
            raise RegistryScopeError("Footnote registry is already in use by a render")
        self._entries = []
        self._numbers = {}
        self._active = True

    def close(self) -> None:
        self._active = False
        self._entries = []
        self._numbers = {}

    def register(self, footnote_id: str, content: str) -> int:
        """Assign the next number to a new id, or return the existing one."""
        self._require_scope("register")
        number = self._numbers.get(footnote_id)
        if number is not None:
            return number

        number = len(self._entries) + 1
        self._numbers[footnote_id] = number
        self._entries.append(RegisteredFootnote(footnote_id, number, content))
        return number

    def lookup(self, footnote_id: str) -> int | None:
        """Return the number assigned to an id, or None. Never registers."""
        self._require_scope("lookup")
        return self._numbers.get(footnote_id)

    @property
    def entries(self) -> tuple[RegisteredFootnote, ...]:
        return tuple(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[RegisteredFootnote]:
        return iter(self.entries)

    def __contains__(self, footnote_id: object) -> bool:
        return footnote_id in self._numbers

    def _require_scope(self, operation: str) -> None:
        if not self._active:
            raise RegistryScopeError(
                f"{operation}() called outside an open footnote registry scope"
            )
