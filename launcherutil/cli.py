"""Command-line argument parsing and logging setup for the launcher."""

from __future__ import annotations

import argparse
import logging
import os
import sys
import uuid
from collections.abc import Sequence
from pathlib import Path

from .cli_profile import ModLoader, modloader_from_str

LOG_ENV_VAR = "LAUNCHERUTIL_LOG"
_HANDLER_NAME = "launcherutil-cli"


def _modloader_arg(text: str) -> ModLoader:
    try:
        return modloader_from_str(text)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from None


def _uuid_arg(text: str) -> uuid.UUID:
    try:
        return uuid.UUID(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid user id: {text}") from None


def build_parser() -> argparse.ArgumentParser:
    """The parser for the ``profile`` and ``user`` command families."""
    cwd = Path.cwd()
    parser = argparse.ArgumentParser(description="The official Modrinth CLI")
    commands = parser.add_subparsers(dest="command", required=True)

    profile = commands.add_parser("profile", help="manage Minecraft instances")
    profile_actions = profile.add_subparsers(dest="action", required=True)

    init = profile_actions.add_parser(
        "init", help="create a new profile and manage it with Theseus"
    )
    init.add_argument("path", nargs="?", type=Path, default=cwd,
                      help="the path of the newly created profile")
    init.add_argument("--name", help="the name of the profile")
    init.add_argument("--game-version", help="the game version of the profile")
    init.add_argument("--modloader", type=_modloader_arg, help="the modloader to use")
    init.add_argument(
        "--loader-version",
        help='the modloader version to use, set to "latest", "stable", '
        "or the ID of your chosen loader",
    )

    profile_actions.add_parser("list", help="list all managed profiles")

    remove = profile_actions.add_parser("remove", help="unmanage a profile")
    remove.add_argument("profile", nargs="?", type=Path, default=cwd,
                        help="the profile to get rid of")

    run = profile_actions.add_parser("run", help="run a profile")
    run.add_argument("profile", nargs="?", type=Path, default=cwd,
                     help="the profile to run")
    run.add_argument("--user", type=_uuid_arg, help="the user to authenticate with")

    user = commands.add_parser("user", help="manage Minecraft accounts")
    user_actions = user.add_subparsers(dest="action", required=True)

    add = user_actions.add_parser("add", help="add a new user to Theseus")
    add.add_argument("--browser", help="the browser to authenticate using")

    user_actions.add_parser("list", help="list all known users")

    user_remove = user_actions.add_parser("remove", help="remove a user")
    user_remove.add_argument("user", type=_uuid_arg, help="the user to remove")

    set_default = user_actions.add_parser("set-default", help="set the default user")
    set_default.add_argument("user", type=_uuid_arg, help="the user to set as default")

    return parser


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse ``argv`` (default: the process arguments)."""
    return build_parser().parse_args(argv)


def configure_logging() -> int:
    """Send compact, untimed log lines to stderr at the level named in the
    environment (default info); return the level used."""
    name = os.environ.get(LOG_ENV_VAR, "info").strip().upper()
    level = logging.getLevelName(name) if name else logging.INFO
    if not isinstance(level, int):
        level = logging.INFO

    root = logging.getLogger()
    for existing in list(root.handlers):
        if existing.get_name() == _HANDLER_NAME:
            root.removeHandler(existing)
    handler = logging.StreamHandler(sys.stderr)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(logging.Formatter("%(levelname)s %(message)s"))
    root.addHandler(handler)
    root.setLevel(level)
    return level