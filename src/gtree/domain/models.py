# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

from __future__ import annotations

import stat as stat_mod
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, List, Optional

if TYPE_CHECKING:
    from ..ports.filesystem import DirectoryHandle


@dataclass(frozen=True)
class Identity:
    """(device, inode) pair that uniquely names a filesystem object."""

    device: int
    inode: int


@dataclass(frozen=True)
class NodeStat:
    """The slice of a stat result the traversal needs."""

    mode: int
    device: int
    inode: int
    size: int = 0

    @property
    def is_dir(self) -> bool:
        return stat_mod.S_ISDIR(self.mode)

    @property
    def is_regular(self) -> bool:
        return stat_mod.S_ISREG(self.mode)

    @property
    def is_symlink(self) -> bool:
        return stat_mod.S_ISLNK(self.mode)

    @property
    def identity(self) -> Identity:
        return Identity(self.device, self.inode)


class EntryKind(Enum):
    FILE = "file"
    LINKED_FILE = "linked_file"
    DANGLING_LINK = "dangling_link"
    DIRECTORY = "directory"
    LINKED_DIRECTORY = "linked_directory"
    OTHER = "other"

    @property
    def is_file_like(self) -> bool:
        return self in (EntryKind.FILE, EntryKind.LINKED_FILE, EntryKind.DANGLING_LINK)


@dataclass(frozen=True)
class Candidate:
    """
    A directory-like entry discovered by a scan.

    `link_target` is the raw symlink text for links (empty when it could not be
    read) and None for real directories. The resolved identity is looked up
    later, when the engine decides whether to descend.
    """

    path: str
    is_symlink: bool = False
    link_target: Optional[str] = None


@dataclass
class DirFrame:
    """
    Traversal state for one directory on the explicit stack: the equivalent of
    a single activation record of a recursive walk.

    The frame owns `handle` and must be released exactly once; `release()` is
    idempotent so callers on every exit path can invoke it safely.
    """

    path: str
    depth: int
    handle: Optional["DirectoryHandle"]
    is_last: bool = False
    ancestor_branches: List[bool] = field(default_factory=list)
    link_target: Optional[str] = None
    children: Optional[List[Candidate]] = None
    cursor: int = 0
    file_count: int = 0
    file_bytes: int = 0
    pending_file_lines: List[str] = field(default_factory=list)

    @property
    def scanned(self) -> bool:
        return self.children is not None

    @property
    def exhausted(self) -> bool:
        return self.children is not None and self.cursor >= len(self.children)

    @property
    def released(self) -> bool:
        return self.handle is None

    def next_child(self) -> Optional[Candidate]:
        if self.children is None or self.cursor >= len(self.children):
            return None
        child = self.children[self.cursor]
        self.cursor += 1
        return child

    def set_branch(self, level: int, continues: bool) -> None:
        """Record whether the branch line at `level` continues below this point."""
        if level >= len(self.ancestor_branches):
            self.ancestor_branches.extend([False] * (level + 1 - len(self.ancestor_branches)))
        self.ancestor_branches[level] = continues

    def branch_continues(self, level: int) -> bool:
        return level < len(self.ancestor_branches) and self.ancestor_branches[level]

    def release(self) -> None:
        handle, self.handle = self.handle, None
        if handle is not None:
            handle.close()
        self.pending_file_lines = []


@dataclass
class ActivityReport:
    """Totals accumulated over one traversal."""

    directories: int = 0
    linked_directories: int = 0
    files: int = 0
    linked_files: int = 0
    total_bytes: int = 0
    max_depth: int = 0

    def track_depth(self, depth: int) -> None:
        if depth > self.max_depth:
            self.max_depth = depth
