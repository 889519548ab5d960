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

import logging
import os
from typing import Callable, List, Optional

from ..domain.models import ActivityReport, Candidate, DirFrame, EntryKind, NodeStat
from ..domain.options import TraversalOptions
from ..ports.filesystem import FilesystemPort
from .renderer import TreeRenderer
from .report_service import human_size

logger = logging.getLogger(__name__)


def classify_entry(lst: NodeStat, st: Optional[NodeStat]) -> EntryKind:
    """
    Classify an entry from its own metadata (`lst`) and its followed target
    (`st`, None when the target could not be resolved).
    """
    if lst.is_symlink:
        if st is None:
            return EntryKind.DANGLING_LINK
        if st.is_dir:
            return EntryKind.LINKED_DIRECTORY
        if st.is_regular:
            return EntryKind.LINKED_FILE
        return EntryKind.OTHER
    if st is None:
        return EntryKind.OTHER
    if st.is_dir:
        return EntryKind.DIRECTORY
    if st.is_regular:
        return EntryKind.FILE
    return EntryKind.OTHER


class DirectoryScanner:
    """
    Phase one of the per-directory protocol: read a frame's entries once,
    count its files, collect its directory candidates, then emit the heading
    and any requested file lines.
    """

    def __init__(
        self,
        fs: FilesystemPort,
        options: TraversalOptions,
        renderer: TreeRenderer,
        emit: Callable[[str], None],
    ) -> None:
        self._fs = fs
        self._options = options
        self._renderer = renderer
        self._emit = emit

    def _readlink(self, path: str) -> str:
        try:
            return self._fs.readlink(path)
        except OSError as e:
            logger.debug("readlink failed for %s: %s", path, e)
            return ""

    def _too_long(self, path: str) -> bool:
        return len(os.fsencode(path)) >= self._options.max_path

    def scan(self, frame: DirFrame, report: ActivityReport) -> bool:
        """
        Populate `frame` from its directory handle.

        Returns False without touching anything if the frame was already scanned.
        """
        if frame.scanned:
            return False

        children: List[Candidate] = []
        frame.file_count = 0
        frame.file_bytes = 0

        entries = frame.handle.entries() if frame.handle is not None else ()
        for name in entries:
            if name in (".", ".."):
                continue
            if not self._options.show_hidden and name.startswith("."):
                continue

            path = os.path.join(frame.path, name)
            if self._too_long(path):
                continue

            try:
                lst = self._fs.lstat(path)
            except OSError as e:
                logger.debug("lstat failed for %s: %s", path, e)
                continue
            try:
                st: Optional[NodeStat] = self._fs.stat(path)
            except OSError as e:
                logger.debug("stat failed for %s: %s", path, e)
                st = None

            kind = classify_entry(lst, st)
            if kind.is_file_like:
                self._count_file(frame, report, name, path, kind, st)
            elif kind is EntryKind.LINKED_DIRECTORY:
                children.append(Candidate(path, True, self._readlink(path)))
            elif kind is EntryKind.DIRECTORY:
                children.append(Candidate(path))

        frame.children = children
        frame.cursor = 0

        self._emit(self._renderer.heading(frame))
        if self._options.show_files:
            for text in frame.pending_file_lines:
                self._emit(self._renderer.file_line(frame, text))
        frame.pending_file_lines = []
        return True

    def _count_file(
        self,
        frame: DirFrame,
        report: ActivityReport,
        name: str,
        path: str,
        kind: EntryKind,
        st: Optional[NodeStat],
    ) -> None:
        size = st.size if st is not None else 0
        frame.file_count += 1
        frame.file_bytes += size
        report.files += 1
        report.total_bytes += size
        if kind is not EntryKind.FILE:
            report.linked_files += 1

        if not self._options.show_files:
            return
        if kind is EntryKind.FILE:
            text = f"{name} ({human_size(size)})"
        elif kind is EntryKind.LINKED_FILE:
            text = f"@{name} -> {self._readlink(path)}"
        else:
            text = f"@{name} -> {self._readlink(path)} [dangling]"
        frame.pending_file_lines.append(text)
