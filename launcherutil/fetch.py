"""Downloading with retries and checksums, and semaphore-guarded file access."""

from __future__ import annotations

import asyncio
import hashlib
import inspect
import json
import logging
import os
from collections.abc import AsyncIterator, Awaitable, Callable, Sequence
from contextlib import asynccontextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Union

import httpx

from . import fsio

logger = logging.getLogger(__name__)

PathLike = Union[str, "os.PathLike[str]"]
ProgressCallback = Callable[[float], Union[None, Awaitable[None]]]

USER_AGENT = "launcherutil/0.1.0"
FETCH_ATTEMPTS = 3
CDN_PREFIX = "https://cdn.modrinth.com"
DETECT_URL = "https://launcher-files.modrinth.com/detect.txt"
_KEEPALIVE_LIMITS = httpx.Limits(keepalive_expiry=10.0)


class FetchError(Exception):
    """A download, upload or decoding step failed."""


class HashError(FetchError):
    """The downloaded data did not have the expected SHA-1 hash."""

    def __init__(self, expected: str, actual: str) -> None:
        super().__init__(f"Hash mismatch: expected {expected}, got {actual}")
        self.expected = expected
        self.actual = actual


class InputError(FetchError):
    """The arguments given to a fetch function were unusable."""


class RequestSemaphore:
    """A replaceable limit on how many operations run at once."""

    def __init__(self, permits: int) -> None:
        self.permits = permits
        self._semaphore = asyncio.Semaphore(permits)

    def reset(self, permits: int) -> None:
        """Replace the limit; operations already running keep their permit."""
        self.permits = permits
        self._semaphore = asyncio.Semaphore(permits)

    @asynccontextmanager
    async def permit(self) -> AsyncIterator[None]:
        """Hold one permit for the duration of the block."""
        semaphore = self._semaphore
        async with semaphore:
            yield


class FetchSemaphore(RequestSemaphore):
    """Limits concurrent network requests."""


class IoSemaphore(RequestSemaphore):
    """Limits concurrent file operations."""


@dataclass
class CredentialsStore:
    """The signed-in session, if any, sent with authorised requests."""

    session: str | None = None


def sha1_hex(data: bytes) -> str:
    """The lowercase hexadecimal SHA-1 digest of ``data``."""
    return hashlib.sha1(data).hexdigest()


def _client(timeout: float | None = None) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        headers={"User-Agent": USER_AGENT},
        timeout=timeout,
        limits=_KEEPALIVE_LIMITS,
    )


async def _download(
    client: httpx.AsyncClient,
    method: str,
    url: str,
    json_body: Any,
    headers: dict[str, str],
    loading_bar: tuple[ProgressCallback, float] | None,
) -> bytes:
    async with client.stream(method, url, json=json_body, headers=headers) as response:
        length = response.headers.get("content-length")
        if loading_bar is not None and length is not None and length.isdigit():
            callback, total = loading_bar
            total_size = int(length)
            chunks = []
            async for chunk in response.aiter_bytes():
                chunks.append(chunk)
                outcome = callback(len(chunk) / total_size * total)
                if inspect.isawaitable(outcome):
                    await outcome
            return b"".join(chunks)
        return await response.aread()


async def fetch(
    url: str,
    sha1: str | None,
    semaphore: FetchSemaphore,
    credentials: CredentialsStore,
) -> bytes:
    """GET ``url``, retrying on failure and checking the hash if given."""
    return await fetch_advanced("GET", url, sha1, None, None, None, semaphore, credentials)


async def fetch_json(
    method: str,
    url: str,
    sha1: str | None,
    json_body: Any,
    semaphore: FetchSemaphore,
    credentials: CredentialsStore,
) -> Any:
    """Fetch ``url`` and decode the response as JSON."""
    data = await fetch_advanced(method, url, sha1, json_body, None, None, semaphore, credentials)
    try:
        return json.loads(data)
    except ValueError as exc:
        raise FetchError(f"invalid JSON from {url}: {exc}") from exc


async def fetch_advanced(
    method: str,
    url: str,
    sha1: str | None,
    json_body: Any,
    header: tuple[str, str] | None,
    loading_bar: tuple[ProgressCallback, float] | None,
    semaphore: FetchSemaphore,
    credentials: CredentialsStore,
) -> bytes:
    """Download ``url`` with up to three retries and optional SHA-1 verification.

    ``loading_bar`` is a ``(callback, total)`` pair; the callback receives each
    chunk's share of ``total`` as the body streams in.
    """
    method = method.upper()
    async with semaphore.permit(), _client() as client:
        for attempt in range(1, FETCH_ATTEMPTS + 2):
            final = attempt > FETCH_ATTEMPTS
            headers: dict[str, str] = {}
            if header is not None:
                headers[header[0]] = header[1]
            if url.startswith(CDN_PREFIX) and credentials.session is not None:
                headers["Authorization"] = credentials.session

            try:
                data = await _download(client, method, url, json_body, headers, loading_bar)
            except httpx.HTTPError as exc:
                if not final:
                    continue
                raise FetchError(f"request to {url} failed: {exc}") from exc

            if sha1 is not None:
                actual = await asyncio.to_thread(sha1_hex, data)
                if actual != sha1:
                    if not final:
                        continue
                    raise HashError(sha1, actual)

            logger.debug("Done downloading URL %s", url)
            return data

    raise AssertionError("unreachable: the retry loop always returns or raises")


async def fetch_mirrors(
    mirrors: Sequence[str],
    sha1: str | None,
    semaphore: FetchSemaphore,
    credentials: CredentialsStore,
) -> bytes:
    """Try each mirror in turn; return the first success or the last error."""
    if not mirrors:
        raise InputError("No mirrors provided!")
    *rest, last = mirrors
    for mirror in rest:
        try:
            return await fetch(mirror, sha1, semaphore, credentials)
        except FetchError:
            continue
    return await fetch(last, sha1, semaphore, credentials)


async def check_internet(timeout: float) -> bool:
    """Whether the detection endpoint answers within ``timeout`` seconds."""
    try:
        async with _client(timeout=timeout) as client:
            await client.get(DETECT_URL)
    except httpx.HTTPError:
        return False
    return True


async def post_json(
    url: str,
    json_body: Any,
    semaphore: FetchSemaphore,
    credentials: CredentialsStore,
) -> Any:
    """POST ``json_body`` to ``url`` and decode the JSON reply."""
    headers: dict[str, str] = {}
    if credentials.session is not None:
        headers["Authorization"] = credentials.session
    async with semaphore.permit(), _client() as client:
        try:
            response = await client.post(url, json=json_body, headers=headers)
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise FetchError(f"request to {url} failed: {exc}") from exc
    try:
        return response.json()
    except ValueError as exc:
        raise FetchError(f"invalid JSON from {url}: {exc}") from exc


async def read_json(path: PathLike, semaphore: IoSemaphore) -> Any:
    """Read and decode a JSON file."""
    async with semaphore.permit():
        data = await asyncio.to_thread(fsio.read, path)
    try:
        return json.loads(data)
    except ValueError as exc:
        raise FetchError(f"invalid JSON in {os.fspath(path)}: {exc}") from exc


def _write_creating_parents(path: Path, data: bytes) -> None:
    fsio.create_dir_all(path.parent)
    fsio.write(path, data)


async def write(path: PathLike, data: bytes, semaphore: IoSemaphore) -> None:
    """Write ``data`` to ``path``, creating parent directories as needed."""
    target = Path(path)
    async with semaphore.permit():
        await asyncio.to_thread(_write_creating_parents, target, bytes(data))
    logger.debug("Done writing file %s", target)


def _copy_creating_parents(src: Path, dest: Path) -> None:
    fsio.create_dir_all(dest.parent)
    fsio.copy(src, dest)


async def copy(src: PathLike, dest: PathLike, semaphore: IoSemaphore) -> None:
    """Copy a file, creating the destination's parent directories."""
    source, target = Path(src), Path(dest)
    async with semaphore.permit():
        await asyncio.to_thread(_copy_creating_parents, source, target)
    logger.debug("Done copying file %s to %s", source, target)


async def write_cached_icon(
    icon_path: str,
    cache_dir: PathLike,
    data: bytes,
    semaphore: IoSemaphore,
) -> Path:
    """Store an icon under ``cache_dir/icons`` named by its hash; return its absolute path."""
    extension = Path(icon_path).suffix[1:]
    digest = await asyncio.to_thread(sha1_hex, data)
    name = f"{digest}.{extension}" if extension else digest
    path = Path(cache_dir) / "icons" / name
    await write(path, data, semaphore)
    return fsio.canonicalize(path)