"""Helpers behind the ``profile`` command: loader choice, directory checks, listing."""

from __future__ import annotations

import enum
import os
import textwrap
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Union

from . import fsio
from .prompts import table, table_path_display

PathLike = Union[str, "os.PathLike[str]"]

PATH_COLUMN_WIDTH = 40
MODLOADER_CHOICES = ("vanilla", "fabric", "forge")


class ModLoader(enum.Enum):
    """The mod loaders a profile can be created with."""

    VANILLA = "vanilla"
    FORGE = "forge"
    FABRIC = "fabric"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class LoaderVersion:
    """One released version of a mod loader."""

    id: str
    stable: bool = False
    url: str = ""


@dataclass(frozen=True)
class GameVersionLoaders:
    """The loader versions available for one game version."""

    id: str
    loaders: tuple[LoaderVersion, ...] = ()


class ProfileInitError(Exception):
    """A profile could not be created with the given inputs."""


def modloader_from_str(text: str) -> ModLoader:
    """Parse a mod loader name as typed on the command line."""
    try:
        return ModLoader(text)
    except ValueError:
        raise ValueError(f"Invalid modloader: {text}") from None


def modloader_from_choice(index: int) -> ModLoader:
    """Map an index into :data:`MODLOADER_CHOICES` to its loader."""
    choices = {0: ModLoader.VANILLA, 1: ModLoader.FABRIC, 2: ModLoader.FORGE}
    try:
        return choices[index]
    except KeyError:
        raise ProfileInitError(
            f"Invalid modloader ID: {index}. This is a bug in the launcher!"
        ) from None


def loader_version_matches(loader_version: LoaderVersion, wanted: str) -> bool:
    """Whether ``loader_version`` satisfies "latest", "stable" or an exact ID."""
    if wanted == "latest":
        return True
    if wanted == "stable":
        return loader_version.stable
    return loader_version.id == wanted


def find_loader_version(
    game_versions: Sequence[GameVersionLoaders],
    loader: ModLoader,
    game_version: str,
    wanted: str,
) -> LoaderVersion | None:
    """Pick the first loader version for ``game_version`` matching ``wanted``.

    Vanilla has no loader version, so None is returned for it.
    """
    if loader is ModLoader.VANILLA:
        return None
    entry = next((gv for gv in game_versions if gv.id == game_version), None)
    if entry is None:
        raise ProfileInitError(
            f"Modloader {loader} unsupported for Minecraft version {game_version}"
        )
    found = next(
        (lv for lv in entry.loaders if loader_version_matches(lv, wanted)), None
    )
    if found is None:
        raise ProfileInitError(f"Invalid version {wanted} for modloader {loader}")
    return found


def check_init_directory(path: PathLike) -> bool:
    """Prepare ``path`` for a new profile.

    Creates the directory if it is missing. Returns True when it already
    holds files, in which case the user should confirm before continuing.
    """
    target = Path(path)
    if not target.exists():
        fsio.create_dir_all(target)
        return False
    if not target.is_dir():
        raise ProfileInitError(
            "Attempted to create profile in something other than a folder!"
        )
    if (target / "profile.json").exists():
        raise ProfileInitError(
            "Profile already exists! Perhaps you want `profile add` instead?"
        )
    return bool(fsio.read_dir(target))


@dataclass(frozen=True)
class ProfileRow:
    """One line of the profile listing."""

    name: str
    path: Path = field(metadata={"display": table_path_display})
    game_version: str = field(metadata={"header": "game version"})
    loader: ModLoader
    loader_version: str = field(metadata={"header": "loader version"})

    @classmethod
    def from_profile(
        cls,
        name: str,
        game_version: str,
        loader: ModLoader,
        loader_version: LoaderVersion | None,
    ) -> ProfileRow:
        """A row for a managed profile; its path is its name."""
        return cls(
            name=name,
            path=Path(name),
            game_version=game_version,
            loader=loader,
            loader_version=loader_version.id if loader_version is not None else "",
        )

    @classmethod
    def from_path(cls, path: PathLike) -> ProfileRow:
        """A row for a profile known only by its location."""
        return cls(
            name="?",
            path=Path(path),
            game_version="?",
            loader=ModLoader.VANILLA,
            loader_version="?",
        )


def _wrap(text: str) -> str:
    return "\n".join(textwrap.wrap(text, PATH_COLUMN_WIDTH)) or text


def profile_table(rows: Iterable[ProfileRow]) -> str:
    """Render profile rows, wrapping the path column at 40 characters."""
    return table(
        {
            "name": row.name,
            "path": _wrap(table_path_display(row.path)),
            "game version": row.game_version,
            "loader": str(row.loader),
            "loader version": row.loader_version,
        }
        for row in rows
    )