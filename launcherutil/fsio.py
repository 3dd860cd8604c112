"""Filesystem helpers whose errors carry the path that failed."""

from __future__ import annotations

import os
import shutil
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Union

PathLike = Union[str, "os.PathLike[str]"]


class PathIOError(OSError):
    """An OS error annotated with the path it concerns."""

    def __init__(self, source: OSError, path: PathLike) -> None:
        super().__init__(source.errno, source.strerror or str(source))
        self.source = source
        self.path = os.fsdecode(os.fspath(path))
        self.__cause__ = source

    def __str__(self) -> str:
        return f"{self.source}, path: {self.path}"


def with_path(source: OSError, path: PathLike) -> PathIOError:
    """Wrap ``source`` so that its message names ``path``."""
    return PathIOError(source, path)


@contextmanager
def _reporting(path: PathLike) -> Iterator[None]:
    try:
        yield
    except PathIOError:
        raise
    except OSError as exc:
        raise PathIOError(exc, path) from exc


def canonicalize(path: PathLike) -> Path:
    """Return the absolute, symlink-free form of an existing path."""
    with _reporting(path):
        return Path(path).resolve(strict=True)


def read_dir(path: PathLike) -> list[Path]:
    """List the entries of a directory, sorted by name."""
    with _reporting(path):
        with os.scandir(path) as entries:
            return sorted((Path(entry.path) for entry in entries), key=lambda p: p.name)


def create_dir_all(path: PathLike) -> None:
    """Create a directory and any missing parents."""
    with _reporting(path):
        os.makedirs(path, exist_ok=True)


def remove_dir_all(path: PathLike) -> None:
    """Remove a directory and everything inside it."""
    with _reporting(path):
        shutil.rmtree(path)


def read_to_string(path: PathLike) -> str:
    """Read a whole file as UTF-8 text."""
    data = read(path)
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as exc:
        error = OSError("stream did not contain valid UTF-8")
        raise PathIOError(error, path) from exc


def read(path: PathLike) -> bytes:
    """Read a whole file as bytes."""
    with _reporting(path):
        return Path(path).read_bytes()


def write(path: PathLike, data: bytes | str) -> None:
    """Write ``data`` to a file, replacing its contents."""
    payload = data.encode("utf-8") if isinstance(data, str) else bytes(data)
    with _reporting(path):
        Path(path).write_bytes(payload)


def rename(src: PathLike, dst: PathLike) -> None:
    """Move ``src`` to ``dst``, replacing ``dst`` if it exists."""
    with _reporting(src):
        os.replace(src, dst)


def copy(src: PathLike, dst: PathLike) -> int:
    """Copy a file's contents and permissions; return the number of bytes copied."""
    with _reporting(src):
        shutil.copyfile(src, dst)
        shutil.copymode(src, dst)
        return os.path.getsize(dst)


def remove_file(path: PathLike) -> None:
    """Delete a single file."""
    with _reporting(path):
        os.remove(path)