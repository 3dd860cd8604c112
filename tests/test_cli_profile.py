from pathlib import Path

import pytest

from launcherutil.cli_profile import (
    GameVersionLoaders,
    LoaderVersion,
    ModLoader,
    ProfileInitError,
    ProfileRow,
    check_init_directory,
    find_loader_version,
    loader_version_matches,
    modloader_from_choice,
    modloader_from_str,
    profile_table,
)


@pytest.mark.parametrize(
    "text, expected",
    [("vanilla", ModLoader.VANILLA), ("forge", ModLoader.FORGE), ("fabric", ModLoader.FABRIC)],
)
def test_modloader_from_str(text, expected):
    assert modloader_from_str(text) is expected
    assert str(modloader_from_str(text)) == text


def test_modloader_from_str_invalid():
    with pytest.raises(ValueError, match="Invalid modloader: quiltish"):
        modloader_from_str("quiltish")


def test_modloader_from_choice_order():
    assert [modloader_from_choice(i) for i in range(3)] == [
        ModLoader.VANILLA,
        ModLoader.FABRIC,
        ModLoader.FORGE,
    ]


def test_modloader_from_choice_invalid():
    with pytest.raises(ProfileInitError):
        modloader_from_choice(3)


def test_loader_version_matches():
    stable = LoaderVersion("0.14.0", stable=True)
    beta = LoaderVersion("0.15.0-beta", stable=False)
    assert loader_version_matches(beta, "latest") is True
    assert loader_version_matches(stable, "stable") is True
    assert loader_version_matches(beta, "stable") is False
    assert loader_version_matches(beta, "0.15.0-beta") is True
    assert loader_version_matches(stable, "0.15.0-beta") is False


@pytest.fixture
def manifest():
    return [
        GameVersionLoaders(
            "1.19.2",
            (LoaderVersion("b", stable=False), LoaderVersion("a", stable=True)),
        ),
        GameVersionLoaders("1.18.2", (LoaderVersion("c", stable=True),)),
    ]


def test_find_loader_version(manifest):
    assert find_loader_version(manifest, ModLoader.FABRIC, "1.19.2", "latest").id == "b"
    assert find_loader_version(manifest, ModLoader.FABRIC, "1.19.2", "stable").id == "a"
    assert find_loader_version(manifest, ModLoader.FORGE, "1.18.2", "c").id == "c"


def test_find_loader_version_vanilla(manifest):
    assert find_loader_version(manifest, ModLoader.VANILLA, "1.19.2", "latest") is None


def test_find_loader_version_unsupported_game(manifest):
    with pytest.raises(ProfileInitError, match="unsupported for Minecraft version 1.7.10"):
        find_loader_version(manifest, ModLoader.FABRIC, "1.7.10", "latest")


def test_find_loader_version_unknown_id(manifest):
    with pytest.raises(ProfileInitError, match="Invalid version zzz for modloader forge"):
        find_loader_version(manifest, ModLoader.FORGE, "1.19.2", "zzz")


def test_check_init_directory_creates_missing(tmp_path):
    target = tmp_path / "new" / "profile"
    assert check_init_directory(target) is False
    assert target.is_dir()


def test_check_init_directory_empty(tmp_path):
    assert check_init_directory(tmp_path) is False


def test_check_init_directory_nonempty(tmp_path):
    (tmp_path / "mods").mkdir()
    assert check_init_directory(tmp_path) is True


def test_check_init_directory_file(tmp_path):
    target = tmp_path / "file.txt"
    target.write_text("x")
    with pytest.raises(ProfileInitError, match="other than a folder"):
        check_init_directory(target)


def test_check_init_directory_existing_profile(tmp_path):
    (tmp_path / "profile.json").write_text("{}")
    with pytest.raises(ProfileInitError, match="Profile already exists"):
        check_init_directory(tmp_path)


def test_row_from_path():
    row = ProfileRow.from_path("/somewhere/inst")
    assert (row.name, row.game_version, row.loader_version) == ("?", "?", "?")
    assert row.loader is ModLoader.VANILLA
    assert row.path == Path("/somewhere/inst")


def test_row_from_profile():
    row = ProfileRow.from_profile("Example", "1.19.2", ModLoader.FABRIC, None)
    assert row.path == Path("Example")
    assert row.loader_version == ""
    with_version = ProfileRow.from_profile(
        "Example", "1.19.2", ModLoader.FABRIC, LoaderVersion("0.14.0")
    )
    assert with_version.loader_version == "0.14.0"


def test_profile_table_headers_and_cells():
    rendered = profile_table(
        [ProfileRow.from_profile("Example", "1.19.2", ModLoader.FORGE, LoaderVersion("43.2"))]
    )
    header = rendered.splitlines()[0]
    assert "game version" in header
    assert "loader version" in header
    assert "Example" in rendered
    assert "forge" in rendered
    assert "43.2" in rendered


def test_profile_table_wraps_path():
    long_path = "/" + "b" * 80
    rendered = profile_table([ProfileRow.from_path(long_path)])
    assert "b" * 80 not in rendered
    assert "b" * 40 in rendered
    assert len(rendered.splitlines()) > 3


def test_profile_table_empty():
    assert profile_table([]) == ""