"""Interactive terminal prompts and table rendering for the command line."""

from __future__ import annotations

import asyncio
import dataclasses
import os
import sys
from collections.abc import Iterable, Mapping, Sequence
from pathlib import Path
from typing import Any

from tabulate import tabulate

_YELLOW = "\x1b[33m"
_RESET = "\x1b[0m"


def _print_prompt(text: str) -> None:
    print(f"{_YELLOW}?{_RESET} {text}:", flush=True)


def prompt(text: str, default: str | None = None) -> str:
    """Ask for a line of text; an empty answer takes ``default``."""
    if default == "":
        label = f"{text} (optional)"
    elif default is not None:
        label = f"{text} (default: {default})"
    else:
        label = text
    _print_prompt(label)

    while True:
        answer = input("").strip()
        if answer:
            return answer
        if default is not None:
            return default.strip()


async def prompt_async(text: str, default: str | None = None) -> str:
    """Run :func:`prompt` without blocking the event loop."""
    return await asyncio.to_thread(prompt, text, default)


def select(text: str, choices: Sequence[str]) -> int:
    """Ask the user to pick one of ``choices``; return its index (default 0)."""
    if not choices:
        raise ValueError("select needs at least one choice")
    _print_prompt(text)
    for number, choice in enumerate(choices, start=1):
        marker = ">" if number == 1 else " "
        print(f"{marker} {number}) {choice}")

    while True:
        answer = input("").strip()
        if not answer:
            index = 0
            break
        if answer.isdigit() and 1 <= int(answer) <= len(choices):
            index = int(answer) - 1
            break
        if answer in choices:
            index = list(choices).index(answer)
            break
        print(f"Enter a number between 1 and {len(choices)}")

    print(f"> {choices[index]}", file=sys.stderr)
    return index


async def select_async(text: str, choices: Sequence[str]) -> int:
    """Run :func:`select` without blocking the event loop."""
    return await asyncio.to_thread(select, text, choices)


def confirm(text: str, default: bool) -> bool:
    """Ask a yes/no question; an empty answer takes ``default``."""
    _print_prompt(text)
    hint = "[Y/n]" if default else "[y/N]"
    while True:
        answer = input(f"{hint} ").strip().lower()
        if not answer:
            return default
        if answer in ("y", "yes"):
            return True
        if answer in ("n", "no"):
            return False


async def confirm_async(text: str, default: bool) -> bool:
    """Run :func:`confirm` without blocking the event loop."""
    return await asyncio.to_thread(confirm, text, default)


def _cell(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _row_items(row: Any) -> list[tuple[str, str]]:
    if dataclasses.is_dataclass(row) and not isinstance(row, type):
        items = []
        for field in dataclasses.fields(row):
            value = getattr(row, field.name)
            display = field.metadata.get("display")
            header = field.metadata.get("header", field.name)
            items.append((header, display(value) if display else _cell(value)))
        return items
    if isinstance(row, Mapping):
        return [(str(key), _cell(value)) for key, value in row.items()]
    raise TypeError(f"cannot render {type(row).__name__} as a table row")


def table(rows: Iterable[Any]) -> str:
    """Render dataclass instances or mappings as a psql-style table.

    Dataclass fields may set ``metadata={"header": ...}`` to rename a column
    and ``metadata={"display": callable}`` to format a cell.
    """
    rendered = [_row_items(row) for row in rows]
    if not rendered:
        return ""
    headers = [header for header, _ in rendered[0]]
    body = [[cell for _, cell in items] for items in rendered]
    return tabulate(
        body,
        headers=headers,
        tablefmt="presto",
        stralign="left",
        numalign="left",
        disable_numparse=True,
    )


def table_path_display(path: str | os.PathLike[str]) -> str:
    """Show a path with the home directory abbreviated to ``~``."""
    text = os.fspath(path)
    try:
        home = str(Path.home())
    except RuntimeError:
        return text
    return text.replace(home, "~") if home else text