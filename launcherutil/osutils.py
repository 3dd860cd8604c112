"""Small operating-system helpers for the desktop front end."""

from __future__ import annotations

import enum
import os
import platform
import re
import subprocess
import sys

_SEMANTIC = re.compile(r"(\d+)(?:\.(\d+))?(?:\.(\d+))?")


class OS(enum.Enum):
    """The desktop operating systems the launcher supports."""

    WINDOWS = "Windows"
    LINUX = "Linux"
    MACOS = "MacOS"


def get_os() -> OS:
    """The operating system of the running machine."""
    if sys.platform.startswith("win"):
        return OS.WINDOWS
    if sys.platform == "darwin":
        return OS.MACOS
    return OS.LINUX


def should_disable_mouseover() -> bool:
    """Whether hover effects should be turned off.

    Only macOS 12.3 and later (as major >= 12 and minor >= 3) keeps them;
    unrecognisable macOS versions disable them for safety.
    """
    if sys.platform != "darwin":
        return False
    match = _SEMANTIC.fullmatch(platform.mac_ver()[0])
    if match is None:
        return True
    major = int(match.group(1))
    minor = int(match.group(2) or 0)
    return not (major >= 12 and minor >= 3)


def show_in_folder(path: str) -> None:
    """Open the system file browser at ``path``."""
    if sys.platform.startswith("win"):
        subprocess.Popen(["explorer", path])
    elif sys.platform == "darwin":
        subprocess.Popen(["open", path])
    else:
        target = path
        if "," in path and not os.stat(path) is None and not os.path.isdir(path):
            target = os.path.dirname(path)
        subprocess.Popen(["xdg-open", target])