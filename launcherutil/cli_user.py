"""Helpers behind the ``user`` command: listing and choosing the default account."""

from __future__ import annotations

import uuid
from collections.abc import Iterable
from dataclasses import dataclass

from .prompts import table


@dataclass(frozen=True)
class Credentials:
    """A signed-in account."""

    id: uuid.UUID
    username: str


@dataclass(frozen=True)
class UserRow:
    """One line of the user listing."""

    username: str
    id: uuid.UUID
    default: bool

    @classmethod
    def from_credentials(
        cls, credentials: Credentials, default: uuid.UUID | None
    ) -> UserRow:
        """A row for ``credentials``, flagged if it is the default account."""
        return cls(
            username=credentials.username,
            id=credentials.id,
            default=default is not None and credentials.id == default,
        )


def user_table(users: Iterable[Credentials], default: uuid.UUID | None) -> str:
    """Render the known accounts as a table."""
    return table(UserRow.from_credentials(user, default) for user in users)


def set_default_user(
    current: uuid.UUID | None, user: uuid.UUID
) -> tuple[uuid.UUID, bool]:
    """Make ``user`` the default; return it and whether anything changed."""
    return user, current != user