import errno

import pytest

from launcherutil import fsio


def test_write_then_read_round_trip(tmp_path):
    target = tmp_path / "data.bin"
    fsio.write(target, b"\x00\x01hello")
    assert fsio.read(target) == b"\x00\x01hello"


def test_write_str_and_read_to_string(tmp_path):
    target = tmp_path / "text.txt"
    fsio.write(target, "héllo")
    assert fsio.read_to_string(target) == "héllo"


def test_read_missing_file_reports_path(tmp_path):
    missing = tmp_path / "nope.txt"
    with pytest.raises(fsio.PathIOError) as info:
        fsio.read(missing)
    assert info.value.path == str(missing)
    assert info.value.errno == errno.ENOENT
    assert str(info.value).endswith(f", path: {missing}")


def test_error_is_an_os_error(tmp_path):
    with pytest.raises(OSError):
        fsio.read_to_string(tmp_path / "missing")


def test_read_to_string_rejects_invalid_utf8(tmp_path):
    target = tmp_path / "bad.txt"
    target.write_bytes(b"\xff\xfe\xfa")
    with pytest.raises(fsio.PathIOError) as info:
        fsio.read_to_string(target)
    assert info.value.path == str(target)


def test_with_path_builds_error():
    source = FileNotFoundError(errno.ENOENT, "No such file or directory")
    error = fsio.with_path(source, "/some/where")
    assert error.source is source
    assert error.path == "/some/where"
    assert "path: /some/where" in str(error)


def test_create_and_remove_dir_all(tmp_path):
    nested = tmp_path / "a" / "b" / "c"
    fsio.create_dir_all(nested)
    assert nested.is_dir()
    fsio.create_dir_all(nested)
    (nested / "f.txt").write_text("x")
    fsio.remove_dir_all(tmp_path / "a")
    assert not (tmp_path / "a").exists()


def test_remove_dir_all_missing(tmp_path):
    with pytest.raises(fsio.PathIOError) as info:
        fsio.remove_dir_all(tmp_path / "ghost")
    assert info.value.path == str(tmp_path / "ghost")


def test_read_dir_lists_entries_sorted(tmp_path):
    for name in ("b.txt", "a.txt", "c"):
        (tmp_path / name).write_text("")
    entries = fsio.read_dir(tmp_path)
    assert [p.name for p in entries] == ["a.txt", "b.txt", "c"]


def test_read_dir_missing(tmp_path):
    with pytest.raises(fsio.PathIOError):
        fsio.read_dir(tmp_path / "missing")


def test_rename_overwrites(tmp_path):
    src = tmp_path / "src.txt"
    dst = tmp_path / "dst.txt"
    src.write_text("new")
    dst.write_text("old")
    fsio.rename(src, dst)
    assert not src.exists()
    assert dst.read_text() == "new"


def test_rename_missing_reports_source(tmp_path):
    src = tmp_path / "missing"
    with pytest.raises(fsio.PathIOError) as info:
        fsio.rename(src, tmp_path / "other")
    assert info.value.path == str(src)


def test_copy_returns_size(tmp_path):
    src = tmp_path / "src.bin"
    payload = b"abcdefgh" * 10
    src.write_bytes(payload)
    dst = tmp_path / "dst.bin"
    copied = fsio.copy(src, dst)
    assert copied == len(payload)
    assert dst.read_bytes() == payload


def test_copy_missing_reports_source(tmp_path):
    src = tmp_path / "missing"
    with pytest.raises(fsio.PathIOError) as info:
        fsio.copy(src, tmp_path / "dst")
    assert info.value.path == str(src)


def test_remove_file(tmp_path):
    target = tmp_path / "gone.txt"
    target.write_text("x")
    fsio.remove_file(target)
    assert not target.exists()
    with pytest.raises(fsio.PathIOError):
        fsio.remove_file(target)


def test_canonicalize_resolves_dots(tmp_path):
    (tmp_path / "sub").mkdir()
    result = fsio.canonicalize(tmp_path / "sub" / ".." / "sub")
    assert result == (tmp_path / "sub").resolve()
    assert result.is_absolute()


def test_canonicalize_missing(tmp_path):
    with pytest.raises(fsio.PathIOError):
        fsio.canonicalize(tmp_path / "nowhere")