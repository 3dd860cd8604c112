import logging

import pytest

from launcherutil.errors import SerializableError, display_tracing_error


def _raise_inner():
    raise KeyError("inner")


def _chained_error():
    try:
        try:
            _raise_inner()
        except KeyError as exc:
            raise RuntimeError("outer failure") from exc
    except RuntimeError as outer:
        return outer


def test_io_error_message_prefix():
    source = FileNotFoundError(2, "missing")
    error = SerializableError("IO", source)
    assert str(error) == f"IO error: {source}"


def test_callback_error_message():
    error = SerializableError("Callback", "Callback already set")
    assert str(error) == "Callback error: Callback already set"
    assert error.serialize() == {"field_name": "Callback", "message": "Callback already set"}


def test_serialize_io_uses_inner_message():
    source = PermissionError(13, "denied")
    assert SerializableError("IO", source).serialize() == {
        "field_name": "IO",
        "message": str(source),
    }


def test_from_exception_classifies():
    assert SerializableError.from_exception(OSError("disk")).field_name == "IO"
    assert SerializableError.from_exception(ValueError("bad")).field_name == "Theseus"


def test_from_exception_passes_through_existing():
    existing = SerializableError("Callback", "x")
    assert SerializableError.from_exception(existing) is existing


def test_wrapped_source_is_cause():
    source = ValueError("bad")
    assert SerializableError("Theseus", source).__cause__ is source


def test_unknown_kind_rejected():
    with pytest.raises(ValueError):
        SerializableError("Nope", "x")


def test_theseus_serialize_logs(caplog):
    source = RuntimeError("launcher broke")
    with caplog.at_level(logging.ERROR, logger="launcherutil.errors"):
        result = SerializableError("Theseus", source).serialize()
    assert result == {"field_name": "Theseus", "message": "launcher broke"}
    assert any("launcher broke" in record.getMessage() for record in caplog.records)


def test_display_without_cause_has_no_trace(caplog):
    with caplog.at_level(logging.ERROR, logger="launcherutil.errors"):
        display_tracing_error(RuntimeError("plain"))
    messages = [record.getMessage() for record in caplog.records]
    assert messages == ["error=plain"]


def test_display_with_cause_includes_trace(caplog):
    error = _chained_error()
    with caplog.at_level(logging.ERROR, logger="launcherutil.errors"):
        display_tracing_error(error)
    message = caplog.records[-1].getMessage()
    assert message.startswith("error=outer failure span_trace=")
    assert "_raise_inner" in message