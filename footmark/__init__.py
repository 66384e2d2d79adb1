"""footmark - markdown documents with numbered, clickable footnotes."""

__version__ = "0.1.0"
