class GtreeError(Exception):
    """Base exception for domain-specific errors."""


class ConfigurationError(GtreeError):
    """Bad CLI args or an unusable starting directory."""


class FilesystemError(GtreeError):
    """The starting directory could not be opened for reading."""


class TraversalError(GtreeError):
    """The frame stack ran out of room (nesting beyond the depth ceiling)."""
