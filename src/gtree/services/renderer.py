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

import os

import typer

from ..domain.models import Candidate, DirFrame
from .report_service import human_size

BAR = "│   "
GAP = "    "
TEE = "├── "
ELBOW = "└── "

RECURSIVE = " [recursive]"
TRUNCATED = " [truncated]"


class TreeRenderer:
    """
    Turns frame state into tree lines. Read-only: nothing here mutates a frame.

    Three kinds of line are produced:
      - heading(): a directory's own line, emitted once it has been scanned
      - reference(): a child directory or symlink that is listed but not entered
      - file_line(): one queued file entry under a directory heading
    """

    def __init__(self, *, show_stats: bool = False, colour_files: bool = False) -> None:
        self._show_stats = bool(show_stats)
        self._colour_files = bool(colour_files)

    @staticmethod
    def _indent(depth: int, frame: DirFrame) -> str:
        return "".join(BAR if frame.branch_continues(i) else GAP for i in range(1, depth))

    @staticmethod
    def _connector(depth: int, is_last: bool) -> str:
        if depth <= 0:
            return ""
        return ELBOW if is_last else TEE

    @staticmethod
    def _name(path: str, depth: int) -> str:
        if depth == 0:
            return path
        return os.path.basename(os.path.normpath(path))

    def heading(self, frame: DirFrame) -> str:
        name = self._name(frame.path, frame.depth)
        if frame.link_target is not None:
            payload = f"@{name} -> {frame.link_target}"
        else:
            payload = name
        if self._show_stats and frame.file_count > 0:
            payload += f" [Files: {frame.file_count}] [Size: {human_size(frame.file_bytes)}]"
        return (
            self._indent(frame.depth, frame)
            + self._connector(frame.depth, frame.is_last)
            + payload
        )

    def reference(
        self,
        parent: DirFrame,
        candidate: Candidate,
        *,
        is_last: bool,
        recursive: bool = False,
        truncated: bool = False,
    ) -> str:
        depth = parent.depth + 1
        name = self._name(candidate.path, depth)
        if candidate.is_symlink:
            payload = f"@{name} -> {candidate.link_target or ''}"
        else:
            payload = name
        if recursive:
            payload += RECURSIVE
        elif truncated:
            payload += TRUNCATED
        return self._indent(depth, parent) + self._connector(depth, is_last) + payload

    def file_line(self, frame: DirFrame, text: str) -> str:
        if frame.depth == 0:
            column = ""
        else:
            column = GAP if frame.is_last else BAR
        if self._colour_files:
            text = typer.style(text, fg=typer.colors.CYAN)
        return f"{self._indent(frame.depth, frame)}{column}: {text}"
