"""Operating-system detection and library rule matching."""

from __future__ import annotations

import enum
import platform as _stdplatform
import re
import sys
from dataclasses import dataclass

ARCH_WIDTH = "64" if sys.maxsize > 2**32 else "32"


class Os(enum.Enum):
    """Operating system and architecture pairs known to version manifests."""

    OSX = "osx"
    OSX_ARM64 = "osx-arm64"
    WINDOWS = "windows"
    WINDOWS_ARM64 = "windows-arm64"
    LINUX = "linux"
    LINUX_ARM64 = "linux-arm64"
    LINUX_ARM32 = "linux-arm32"
    UNKNOWN = "unknown"

    @classmethod
    def native(cls) -> Os:
        """The operating system of the running machine."""
        family = _os_family()
        if family == "windows":
            return cls.WINDOWS
        if family == "macos":
            return cls.OSX
        if family == "linux":
            return cls.LINUX
        return cls.UNKNOWN

    @classmethod
    def native_arch(cls, java_arch: str) -> Os:
        """The operating system combined with the architecture Java reports."""
        family = _os_family()
        if family == "windows":
            return cls.WINDOWS_ARM64 if java_arch == "aarch64" else cls.WINDOWS
        if family == "linux":
            if java_arch == "aarch64":
                return cls.LINUX_ARM64
            if java_arch == "arm":
                return cls.LINUX_ARM32
            return cls.LINUX
        if family == "macos":
            return cls.OSX_ARM64 if java_arch == "aarch64" else cls.OSX
        return cls.UNKNOWN


@dataclass(frozen=True)
class OsRule:
    """The ``os`` part of a library or argument rule."""

    name: Os | None = None
    version: str | None = None
    arch: str | None = None


def _os_family() -> str:
    plat = sys.platform
    if plat.startswith("win"):
        return "windows"
    if plat == "darwin":
        return "macos"
    if plat.startswith("linux"):
        return "linux"
    return "other"


def os_release() -> str:
    """The release string of the running operating system, or '' if unknown."""
    try:
        return _stdplatform.release() or ""
    except OSError:
        return ""


def os_rule(rule: OsRule, java_arch: str) -> bool:
    """Whether ``rule`` matches the running system."""
    matched = True

    if rule.arch is not None:
        matched &= rule.arch not in ("x86", "arm")

    if rule.name is not None:
        matched &= rule.name in (Os.native(), Os.native_arch(java_arch))

    if rule.version is not None:
        try:
            pattern = re.compile(rule.version)
        except re.error:
            pattern = None
        if pattern is not None:
            matched &= pattern.search(os_release()) is not None

    return matched


def classpath_separator(java_arch: str) -> str:
    """The separator Java expects between classpath entries."""
    if Os.native_arch(java_arch) in (Os.WINDOWS, Os.WINDOWS_ARM64):
        return ";"
    return ":"