from .filesystem import DirectoryHandle, FilesystemPort

__all__ = ["DirectoryHandle", "FilesystemPort"]
