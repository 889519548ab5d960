from .local_fs import LocalFS, ScandirHandle

__all__ = ["LocalFS", "ScandirHandle"]
