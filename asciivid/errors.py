"""Errors raised by the conversion pipeline and its media sources."""


class SourceUnavailable(Exception):
    """No usable frame: source not loaded, zero-area, or unreadable."""
