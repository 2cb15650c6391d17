"""A file handle built on ``MovableBase``.

Opens (creating if needed) a binary file for reading and writing.  The
underlying stream is closed by ``release_managed``; every accessor is
guarded so a moved or released handle fails loudly instead of touching
a closed stream.
"""
from __future__ import annotations

import os
from pathlib import Path
from typing import BinaryIO

from movable.base import MovableBase


class FileHandle(MovableBase):
    """Read/write access to a single file with move semantics.

    Parameters
    ----------
    path:
        File to open.  It is created empty if it does not exist.
    """

    def __init__(self, path: str | os.PathLike[str]) -> None:
        super().__init__()
        self._path = Path(path)
        self._path.touch(exist_ok=True)
        self._stream: BinaryIO | None = self._path.open("r+b")

    @property
    def path(self) -> Path:
        self.ensure_owned()
        return self._path

    def write(self, data: bytes) -> int:
        self.ensure_owned()
        assert self._stream is not None
        return self._stream.write(data)

    def read(self, size: int = -1) -> bytes:
        self.ensure_owned()
        assert self._stream is not None
        return self._stream.read(size)

    def seek(self, offset: int, whence: int = os.SEEK_SET) -> int:
        self.ensure_owned()
        assert self._stream is not None
        return self._stream.seek(offset, whence)

    def flush(self) -> None:
        self.ensure_owned()
        assert self._stream is not None
        self._stream.flush()

    def release_managed(self) -> None:
        if self._stream is not None:
            self._stream.close()
            self._stream = None
