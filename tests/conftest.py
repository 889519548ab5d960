# tests/conftest.py
import errno
import posixpath
import stat
from collections import Counter
from typing import Dict, Iterator, List

import pytest

from gtree.domain.models import NodeStat
from gtree.ports.filesystem import DirectoryHandle, FilesystemPort


class _Node:
    def __init__(self, kind: str, ino: int, size: int = 0, target: str = ""):
        self.kind = kind
        self.ino = ino
        self.size = size
        self.target = target


_MODES = {
    "dir": stat.S_IFDIR | 0o755,
    "file": stat.S_IFREG | 0o644,
    "link": stat.S_IFLNK | 0o777,
    "fifo": stat.S_IFIFO | 0o644,
}


class MemoryHandle(DirectoryHandle):
    def __init__(self, fs: "MemoryFS", path: str, names: List[str]):
        self._fs = fs
        self.path = path
        self._names = names

    def entries(self) -> Iterator[str]:
        yield "."
        yield ".."
        yield from self._names

    def close(self) -> None:
        self._fs.closed[self.path] += 1


class MemoryFS(FilesystemPort):
    """
    In-memory tree with real symlink semantics, deterministic entry order and
    open/close bookkeeping for handle-ownership checks.
    """

    def __init__(self) -> None:
        self._next_ino = 2
        self.nodes: Dict[str, _Node] = {"/": _Node("dir", 1)}
        self.children: Dict[str, List[str]] = {"/": []}
        self.unopenable: set = set()
        self.opened: Counter = Counter()
        self.closed: Counter = Counter()

    # -- building -----------------------------------------------------
    def _add(self, path: str, node: _Node) -> None:
        parent, name = posixpath.split(path)
        if parent not in self.children:
            self.mkdir(parent)
        self.nodes[path] = node
        self.children[parent].append(name)

    def _ino(self) -> int:
        self._next_ino += 1
        return self._next_ino

    def mkdir(self, path: str) -> None:
        if path in self.nodes:
            return
        self._add(path, _Node("dir", self._ino()))
        self.children[path] = []

    def touch(self, path: str, size: int = 0) -> None:
        self._add(path, _Node("file", self._ino(), size=size))

    def symlink(self, path: str, target: str) -> None:
        self._add(path, _Node("link", self._ino(), target=target))

    def fifo(self, path: str) -> None:
        self._add(path, _Node("fifo", self._ino()))

    # -- resolution ---------------------------------------------------
    def _resolve(self, path: str, follow_last: bool = True, hops: int = 0) -> str:
        parts = [p for p in path.split("/") if p]
        cur = "/"
        for i, part in enumerate(parts):
            if part == ".":
                continue
            if part == "..":
                cur = posixpath.dirname(cur) or "/"
                continue
            if self.nodes[cur].kind != "dir":
                raise NotADirectoryError(errno.ENOTDIR, "Not a directory", path)
            nxt = posixpath.join(cur, part)
            node = self.nodes.get(nxt)
            if node is None:
                raise FileNotFoundError(errno.ENOENT, "No such file or directory", path)
            last = i == len(parts) - 1
            if node.kind == "link" and (follow_last or not last):
                hops += 1
                if hops > 40:
                    raise OSError(errno.ELOOP, "Too many levels of symbolic links", path)
                target = node.target
                if not target.startswith("/"):
                    target = posixpath.join(cur, target)
                nxt = self._resolve(target, True, hops)
            cur = nxt
        return cur

    def _node_stat(self, canonical: str) -> NodeStat:
        node = self.nodes[canonical]
        return NodeStat(mode=_MODES[node.kind], device=1, inode=node.ino, size=node.size)

    # -- FilesystemPort -----------------------------------------------
    def open_dir(self, path: str) -> DirectoryHandle:
        canonical = self._resolve(path)
        if self.nodes[canonical].kind != "dir":
            raise NotADirectoryError(errno.ENOTDIR, "Not a directory", path)
        if canonical in self.unopenable or path in self.unopenable:
            raise PermissionError(errno.EACCES, "Permission denied", path)
        self.opened[path] += 1
        return MemoryHandle(self, path, list(self.children[canonical]))

    def lstat(self, path: str) -> NodeStat:
        return self._node_stat(self._resolve(path, follow_last=False))

    def stat(self, path: str) -> NodeStat:
        return self._node_stat(self._resolve(path))

    def readlink(self, path: str) -> str:
        node = self.nodes[self._resolve(path, follow_last=False)]
        if node.kind != "link":
            raise OSError(errno.EINVAL, "Invalid argument", path)
        return node.target

    # -- assertions ---------------------------------------------------
    def all_handles_closed_once(self) -> bool:
        return all(self.closed[p] == n for p, n in self.opened.items()) and set(
            self.closed
        ) <= set(self.opened)


@pytest.fixture
def memfs() -> MemoryFS:
    return MemoryFS()


@pytest.fixture
def lines() -> List[str]:
    return []
