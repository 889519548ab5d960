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

from abc import ABC, abstractmethod
from typing import Iterator

from ..domain.models import NodeStat


class DirectoryHandle(ABC):
    """An open directory stream. Owned by exactly one frame."""

    @abstractmethod
    def entries(self) -> Iterator[str]:
        """Yield entry names in the order the OS returns them."""
        raise NotImplementedError

    @abstractmethod
    def close(self) -> None:
        """Release the underlying OS resource."""
        raise NotImplementedError


class FilesystemPort(ABC):
    """Abstract interface for the OS primitives the traversal relies on.

    Every method raises OSError (or a subclass) on failure; callers decide
    whether that failure is fatal.
    """

    @abstractmethod
    def open_dir(self, path: str) -> DirectoryHandle:
        """Open a directory stream for incremental reading."""
        raise NotImplementedError

    @abstractmethod
    def lstat(self, path: str) -> NodeStat:
        """Metadata for `path` itself, without following a final symlink."""
        raise NotImplementedError

    @abstractmethod
    def stat(self, path: str) -> NodeStat:
        """Metadata for whatever `path` ultimately resolves to."""
        raise NotImplementedError

    @abstractmethod
    def readlink(self, path: str) -> str:
        """Return the raw target text of a symbolic link."""
        raise NotImplementedError
