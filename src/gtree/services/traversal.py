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
from typing import Callable, List, Optional

from ..domain.errors import FilesystemError
from ..domain.models import ActivityReport, Candidate, DirFrame, Identity
from ..domain.options import TraversalOptions
from ..ports.filesystem import FilesystemPort
from .frame_stack import FrameStack
from .renderer import TreeRenderer
from .scanner import DirectoryScanner
from .visited import VisitedSet

logger = logging.getLogger(__name__)


class TraversalEngine:
    """
    Depth-first directory walk driven by an explicit stack of frames.

    Each loop iteration looks at the top frame:
      - not yet scanned  -> scan it (emits its heading and file lines)
      - candidates left  -> take the next one and either push a child frame
                            or emit a reference line for it
      - exhausted        -> pop it, releasing its directory handle

    Children are visited in directory enumeration order, so output matches what
    a plain recursive walk would print. Loop detection always applies; symlinked
    directories are additionally gated on `follow_links`.
    """

    def __init__(
        self,
        fs: FilesystemPort,
        options: Optional[TraversalOptions] = None,
        *,
        renderer: Optional[TreeRenderer] = None,
        emit: Optional[Callable[[str], None]] = None,
    ) -> None:
        self._fs = fs
        self._options = options or TraversalOptions()
        self._renderer = renderer or TreeRenderer(
            show_stats=self._options.show_stats,
            colour_files=self._options.colour_files,
        )
        self.lines: List[str] = []
        self._emit = emit or self.lines.append
        self._scanner = DirectoryScanner(fs, self._options, self._renderer, self._emit)

    @property
    def options(self) -> TraversalOptions:
        return self._options

    def _identity(self, path: str) -> Optional[Identity]:
        try:
            return self._fs.stat(path).identity
        except OSError as e:
            logger.debug("stat failed for %s: %s", path, e)
            return None

    def _open_frame(
        self,
        path: str,
        depth: int,
        parent: Optional[DirFrame],
        is_last: bool,
        link_target: Optional[str] = None,
    ) -> DirFrame:
        handle = self._fs.open_dir(path)
        branches = list(parent.ancestor_branches) if parent is not None else []
        return DirFrame(
            path=path,
            depth=depth,
            handle=handle,
            is_last=is_last,
            ancestor_branches=branches,
            link_target=link_target,
        )

    def run(self, root: str) -> ActivityReport:
        """
        Walk the tree under `root`, emitting lines as it goes.

        Raises:
            FilesystemError: if `root` cannot be opened.
        """
        report = ActivityReport()
        visited = VisitedSet()
        stack = FrameStack(self._options.max_depth + 2)

        try:
            root_frame = self._open_frame(root, 0, None, False)
        except OSError as e:
            raise FilesystemError(f"cannot open {root}: {e}") from e

        stack.push(root_frame)
        report.directories += 1
        root_id = self._identity(root)
        if root_id is not None:
            visited.insert_if_absent(root_id)

        try:
            while stack:
                frame = stack.peek()
                self._scanner.scan(frame, report)

                candidate = frame.next_child()
                if candidate is None:
                    stack.pop()
                    continue
                self._descend(frame, candidate, stack, visited, report)
        finally:
            stack.unwind()

        logger.debug(
            "TraversalEngine.run: %d directories, %d files under %s",
            report.directories,
            report.files,
            root,
        )
        return report

    def _descend(
        self,
        frame: DirFrame,
        candidate: Candidate,
        stack: FrameStack,
        visited: VisitedSet,
        report: ActivityReport,
    ) -> None:
        is_last_child = frame.exhausted
        child_depth = frame.depth + 1
        frame.set_branch(child_depth, not is_last_child)
        depth_limit_hit = child_depth >= self._options.max_depth

        identity = self._identity(candidate.path)

        if candidate.is_symlink:
            already_visited = identity is not None and identity in visited
            if identity is not None:
                report.linked_directories += 1
            if (
                identity is not None
                and not already_visited
                and self._options.follow_links
                and not depth_limit_hit
            ):
                if self._push_child(
                    frame, candidate, identity, is_last_child, stack, visited, report
                ):
                    return
            self._emit(
                self._renderer.reference(
                    frame, candidate, is_last=is_last_child, recursive=already_visited
                )
            )
            if not already_visited and depth_limit_hit:
                report.track_depth(child_depth)
            return

        if identity is None:
            # vanished or became unreadable between scan and descent
            logger.debug("Skipping %s: no longer resolvable", candidate.path)
            return

        already_visited = identity in visited
        if not already_visited and not depth_limit_hit:
            self._push_child(
                frame, candidate, identity, is_last_child, stack, visited, report
            )
            return

        self._emit(
            self._renderer.reference(
                frame,
                candidate,
                is_last=is_last_child,
                recursive=already_visited,
                truncated=depth_limit_hit and not already_visited,
            )
        )
        visited.insert_if_absent(identity)
        if not already_visited:
            report.track_depth(child_depth)

    def _push_child(
        self,
        frame: DirFrame,
        candidate: Candidate,
        identity: Identity,
        is_last_child: bool,
        stack: FrameStack,
        visited: VisitedSet,
        report: ActivityReport,
    ) -> bool:
        """Open and push a frame for `candidate`. Returns False if it could not be opened."""
        try:
            child = self._open_frame(
                candidate.path,
                frame.depth + 1,
                frame,
                is_last_child,
                link_target=candidate.link_target if candidate.is_symlink else None,
            )
        except OSError as e:
            logger.warning("Cannot open directory %s: %s", candidate.path, e)
            return False

        stack.push(child)
        if visited.insert_if_absent(identity):
            report.directories += 1
        report.track_depth(child.depth)
        return True
