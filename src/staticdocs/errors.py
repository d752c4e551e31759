"""Exceptions raised by staticdocs.

Fatal conditions derive from both StaticDocsError and the matching builtin,
so callers can catch either.
"""


class StaticDocsError(Exception):
    """Base class for staticdocs errors."""


class RootNotFoundError(StaticDocsError, FileNotFoundError):
    """Configured docs or template root does not exist."""

    def __init__(self, root: object) -> None:
        super().__init__(f"Root directory not found: {root}")
        self.root = root


class FileSystemError(StaticDocsError, OSError):
    """Read, write or mkdir failure during a compile pass."""


class ConfigError(StaticDocsError, ValueError):
    """Configuration file contains invalid values."""


class RenderError(StaticDocsError):
    """Markdown front matter or a page template could not be rendered."""
