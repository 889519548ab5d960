# Licensed under the Apache License, Version 2.0
from __future__ import annotations

import os
from dataclasses import dataclass

# Ceiling for -d and the size of the frame stack.
MAX_DEPTH = 1024
MIN_DEPTH = 2


def _path_max() -> int:
    try:
        return int(os.pathconf("/", "PC_PATH_MAX"))
    except (AttributeError, OSError, ValueError):
        return 4096


PATH_MAX = _path_max()


def clamp_depth(n: int) -> int:
    """Clamp a requested depth into [MIN_DEPTH, MAX_DEPTH]."""
    return max(MIN_DEPTH, min(int(n), MAX_DEPTH))


@dataclass(frozen=True)
class TraversalOptions:
    show_hidden: bool = False
    show_files: bool = False
    show_stats: bool = False
    follow_links: bool = False
    colour_files: bool = False
    max_depth: int = MAX_DEPTH
    max_path: int = PATH_MAX

    def __post_init__(self) -> None:
        # colour only means something for file lines
        if self.colour_files and not self.show_files:
            object.__setattr__(self, "show_files", True)
