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
from typing import Iterator

from ..domain.models import NodeStat
from ..ports.filesystem import DirectoryHandle, FilesystemPort


def _to_node(st: os.stat_result) -> NodeStat:
    return NodeStat(
        mode=st.st_mode,
        device=getattr(st, "st_dev", 0),
        inode=getattr(st, "st_ino", 0),
        size=st.st_size,
    )


class ScandirHandle(DirectoryHandle):
    """Wraps os.scandir(); only entry names are surfaced."""

    def __init__(self, path: str) -> None:
        self._it = os.scandir(path)

    def entries(self) -> Iterator[str]:
        if self._it is None:
            return
        for entry in self._it:
            yield entry.name

    def close(self) -> None:
        it, self._it = self._it, None
        if it is not None:
            it.close()


class LocalFS(FilesystemPort):
    """Local filesystem adapter backed by the os module."""

    def open_dir(self, path: str) -> DirectoryHandle:
        return ScandirHandle(path)

    def lstat(self, path: str) -> NodeStat:
        return _to_node(os.lstat(path))

    def stat(self, path: str) -> NodeStat:
        return _to_node(os.stat(path))

    def readlink(self, path: str) -> str:
        return os.readlink(path)
