"""Discovery and inspection of installed Java runtimes."""

from __future__ import annotations

import asyncio
import itertools
import os
import re
import sys
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Union

from . import fsio

PathLike = Union[str, "os.PathLike[str]"]

JAVA_BIN = "javaw.exe" if sys.platform.startswith("win") else "java"

_CONCURRENCY = 64
_U32_MAX = 2**32 - 1
_UNSIGNED = re.compile(r"\+?[0-9]+")

_WINDOWS_JAVA_DIRS = (
    "C:/Program Files/Java",
    "C:/Program Files (x86)/Java",
    "C:\\Program Files\\Eclipse Adoptium",
    "C:\\Program Files (x86)\\Eclipse Adoptium",
)

_WINDOWS_REGISTRY_KEYS = (
    "SOFTWARE\\JavaSoft\\Java Runtime Environment",
    "SOFTWARE\\JavaSoft\\Java Development Kit",
    "SOFTWARE\\JavaSoft\\JRE",
    "SOFTWARE\\JavaSoft\\JDK",
    "SOFTWARE\\Eclipse Foundation\\JDK",
    "SOFTWARE\\Eclipse Adoptium\\JRE",
    "SOFTWARE\\Microsoft\\JDK",
)

_WINDOWS_REGISTRY_VALUES = ("JavaHome", "InstallationPath", "\\\\hotspot\\\\MSI")

_MAC_JAVA_PATHS = (
    "/Applications/Xcode.app/Contents/Applications/Application Loader.app/Contents/MacOS/itms/java",
    "/Library/Internet Plug-Ins/JavaAppletPlugin.plugin/Contents/Home",
    "/System/Library/Frameworks/JavaVM.framework/Versions/Current/Commands",
)
_MAC_VIRTUAL_MACHINES = "/Library/Java/JavaVirtualMachines/"

_LINUX_JAVA_DIRS = (
    "/usr",
    "/usr/java",
    "/usr/lib/jvm",
    "/usr/lib64/jvm",
    "/opt/jdk",
    "/opt/jdks",
)


@dataclass(frozen=True, order=True)
class JavaVersion:
    """A Java executable together with the version and architecture it reports."""

    path: str
    version: str
    architecture: str


class JREError(Exception):
    """A Java runtime could not be found or understood."""


class InvalidJREVersion(JREError, ValueError):
    """A Java version string could not be parsed."""

    def __init__(self, version: str) -> None:
        super().__init__(f"Invalid JRE version string: {version}")
        self.version = version


def _entries(directory: PathLike) -> list[Path]:
    try:
        with os.scandir(directory) as it:
            return [Path(entry.path) for entry in it]
    except OSError:
        return []


def get_all_jre_path() -> set[Path]:
    """Every directory listed in the PATH environment variable."""
    value = os.environ.get("PATH")
    if value is None:
        return set()
    return {Path(part) for part in value.split(os.pathsep) if part}


def get_all_autoinstalled_jre_path(base_path: PathLike) -> set[Path]:
    """Candidate Java locations among runtimes installed under ``base_path``.

    An entry whose ``bin`` is a file names, relative to the entry, where its
    executable lives; otherwise ``bin/<java>`` inside the entry is used.
    """
    base = Path(base_path)
    found: set[Path] = set()
    if not base.is_dir():
        return found
    for entry in _entries(base):
        pointer = entry / "bin"
        try:
            contents = pointer.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError):
            if sys.platform != "darwin":
                found.add(pointer / JAVA_BIN)
        else:
            found.add(entry / contents)
    return found


def _registry_subkey_names(winreg: Any, handle: Any) -> Iterator[str]:
    for index in itertools.count():
        try:
            yield winreg.EnumKey(handle, index)
        except OSError:
            return


def _registry_paths() -> set[Path]:
    import winreg

    found: set[Path] = set()
    for key in _WINDOWS_REGISTRY_KEYS:
        for view in (winreg.KEY_WOW64_32KEY, winreg.KEY_WOW64_64KEY):
            try:
                handle = winreg.OpenKey(
                    winreg.HKEY_LOCAL_MACHINE, key, 0, winreg.KEY_READ | view
                )
            except OSError:
                continue
            with handle:
                for name in list(_registry_subkey_names(winreg, handle)):
                    try:
                        subkey = winreg.OpenKey(handle, name)
                    except OSError:
                        continue
                    with subkey:
                        for value_name in _WINDOWS_REGISTRY_VALUES:
                            try:
                                value, _ = winreg.QueryValueEx(subkey, value_name)
                            except OSError:
                                continue
                            if isinstance(value, str):
                                found.add(Path(value) / "bin")
    return found


def _platform_candidates() -> set[Path]:
    found: set[Path] = set()
    if sys.platform.startswith("win"):
        java_home = os.environ.get("JAVA_HOME")
        if java_home is not None:
            found.add(Path(java_home))
        for directory in _WINDOWS_JAVA_DIRS:
            found.update(entry / "bin" for entry in _entries(directory))
        found |= _registry_paths()
    elif sys.platform == "darwin":
        found.update(Path(path) for path in _MAC_JAVA_PATHS)
        found.update(
            entry / "Contents/Home/bin" for entry in _entries(_MAC_VIRTUAL_MACHINES)
        )
    elif sys.platform.startswith("linux"):
        for directory in map(Path, _LINUX_JAVA_DIRS):
            found.add(directory / "jre" / "bin")
            found.add(directory / "bin")
            for entry in _entries(directory):
                found.add(entry / "jre" / "bin")
                found.add(entry / "bin")
    return found


async def get_all_jre(autoinstalled_dir: PathLike | None = None) -> list[JavaVersion]:
    """Every distinct Java runtime found on PATH, in common locations and
    under ``autoinstalled_dir``, sorted by path."""
    candidates = get_all_jre_path()
    if autoinstalled_dir is not None:
        candidates |= get_all_autoinstalled_jre_path(autoinstalled_dir)
    candidates |= _platform_candidates()
    return sorted(await check_java_at_filepaths(candidates))


async def check_java_at_filepaths(paths: Iterable[PathLike]) -> set[JavaVersion]:
    """Check many candidate paths concurrently; return the runtimes found."""
    limit = asyncio.Semaphore(_CONCURRENCY)

    async def check(path: PathLike) -> JavaVersion | None:
        async with limit:
            return await check_java_at_filepath(path)

    results = await asyncio.gather(*(check(p) for p in set(paths)), return_exceptions=True)
    return {result for result in results if isinstance(result, JavaVersion)}


def parse_java_properties(output: str) -> dict[str, str]:
    """Parse ``key=value`` lines; later keys override earlier ones."""
    properties: dict[str, str] = {}
    for line in output.splitlines():
        parts = line.split("=")
        key = parts[0].strip()
        if not key:
            continue
        properties[key] = parts[1].strip() if len(parts) > 1 else ""
    return properties


async def check_java_at_filepath(path: PathLike) -> JavaVersion | None:
    """Ask the Java at ``path`` (or ``path/<java>``) for its version and architecture.

    Returns None when there is no working Java there.
    """
    try:
        resolved = fsio.canonicalize(path)
    except OSError:
        return None
    if not resolved.name:
        return None
    java = resolved if resolved.name == JAVA_BIN else resolved / JAVA_BIN
    if not java.exists():
        return None

    try:
        process = await asyncio.create_subprocess_exec(
            str(java),
            "-XshowSettings:properties",
            "-version",
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
        stdout, stderr = await process.communicate()
    except OSError:
        return None

    text = stdout.decode("utf-8", "replace") + "\n" + stderr.decode("utf-8", "replace")
    properties = parse_java_properties(text)
    version = properties.get("java.version")
    architecture = properties.get("os.arch")
    if version is None or architecture is None:
        return None
    return JavaVersion(path=str(java), version=version, architecture=architecture)


def _parse_u32(text: str, version: str) -> int:
    if not _UNSIGNED.fullmatch(text):
        raise InvalidJREVersion(version)
    value = int(text)
    if value > _U32_MAX:
        raise InvalidJREVersion(version)
    return value


def extract_java_majorminor_version(version: str) -> tuple[int, int]:
    """Extract ``(major, minor)`` from a Java version string.

    "1.8.0_361" gives (1, 8); "20" and "20.0.1" give (1, 20).
    """
    parts = version.split(".")
    if len(parts) > 1:
        major = _parse_u32(parts[0], version)
        minor = _parse_u32(parts[1], version)
    else:
        major = 1
        minor = _parse_u32(parts[0], version)

    if major > 1:
        major, minor = 1, major
    return major, minor