from .errors import (
    ConfigurationError,
    FilesystemError,
    GtreeError,
    TraversalError,
)
from .models import (
    ActivityReport,
    Candidate,
    DirFrame,
    EntryKind,
    Identity,
    NodeStat,
)
from .options import MAX_DEPTH, MIN_DEPTH, PATH_MAX, TraversalOptions, clamp_depth

__all__ = [
    "ActivityReport",
    "Candidate",
    "ConfigurationError",
    "DirFrame",
    "EntryKind",
    "FilesystemError",
    "GtreeError",
    "Identity",
    "MAX_DEPTH",
    "MIN_DEPTH",
    "NodeStat",
    "PATH_MAX",
    "TraversalError",
    "TraversalOptions",
    "clamp_depth",
]
