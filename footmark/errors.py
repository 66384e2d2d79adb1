"""Exception types raised by footmark."""

from __future__ import annotations


class FootmarkError(Exception):
    """Base class for footmark errors."""


class RegistryScopeError(FootmarkError):
    """A footnote registry was used outside its render scope.

    This is a wiring defect in the renderer, never a content problem.
    """


class SourceError(FootmarkError):
    """The document source could not be located or read."""
