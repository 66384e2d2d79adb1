"""Inline nodes produced by footnote annotation.

A text run is split into three kinds of node:

    Text            literal text, including markers with no definition
    FootnoteRef     the first reference to a defined footnote; carries content
    FootnoteRepeat  every later reference to the same footnote; no content
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class Text:
    text: str


@dataclass(frozen=True)
class FootnoteRef:
    id: str
    content: str


@dataclass(frozen=True)
class FootnoteRepeat:
    id: str


Inline = Union[Text, FootnoteRef, FootnoteRepeat]
