from __future__ import annotations

class TagError(Exception):
    """Base class for failures that abort a tagging run."""

class SerializationError(TagError):
    """Markdown could not be rendered back to text."""

class PathResolutionError(TagError):
    """A stored chapter path cannot be written into the index page."""
