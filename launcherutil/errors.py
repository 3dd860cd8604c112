"""Errors in a form that can be handed to a front end as plain data."""

from __future__ import annotations

import logging
import traceback
from typing import Any

logger = logging.getLogger(__name__)

_MESSAGES = {
    "Theseus": "{}",
    "IO": "IO error: {}",
    "Callback": "Callback error: {}",
}


class SerializableError(Exception):
    """An error tagged with its kind, serialisable to a small mapping."""

    def __init__(self, field_name: str, source: Any) -> None:
        if field_name not in _MESSAGES:
            raise ValueError(f"unknown error kind: {field_name!r}")
        super().__init__(_MESSAGES[field_name].format(source))
        self.field_name = field_name
        self.source = source
        if isinstance(source, BaseException):
            self.__cause__ = source

    def serialize(self) -> dict[str, str]:
        """A mapping with the error kind and the inner message."""
        if self.field_name == "Theseus" and isinstance(self.source, BaseException):
            display_tracing_error(self.source)
        return {"field_name": self.field_name, "message": str(self.source)}

    @classmethod
    def from_exception(cls, error: BaseException) -> SerializableError:
        """Wrap any exception: OS errors as ``IO``, everything else as ``Theseus``."""
        if isinstance(error, cls):
            return error
        if isinstance(error, OSError):
            return cls("IO", error)
        return cls("Theseus", error)


def display_tracing_error(error: BaseException) -> None:
    """Log ``error``, with the traceback of its cause when one is attached."""
    cause = error.__cause__ or error.__context__
    trace = cause.__traceback__ if cause is not None else None
    if trace is not None:
        span_trace = "".join(traceback.format_tb(trace))
        logger.error("error=%s span_trace=%s", error, span_trace)
    else:
        logger.error("error=%s", error)