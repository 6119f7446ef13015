"""Source discovery failures."""

from __future__ import annotations


class DiscoveryError(Exception):
    """Base class for failures while discovering structs in a source file."""


class SourceReadError(DiscoveryError):
    """Raised when the source file cannot be read."""


class SourceSyntaxError(DiscoveryError):
    """Raised when the source file is not valid Go syntax."""


class TypeCheckError(DiscoveryError):
    """Raised when declared types reference unknown or invalid types."""


class NoStructsFoundError(DiscoveryError):
    """Raised when the source file declares no struct type."""
