import os
import sys
import tempfile
from pathlib import Path

import pytest

# Add project root to path
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

from gemini_imagegen.domain.entity.storage import StorageStrategy
from gemini_imagegen.infrastructure.storage import locations
from gemini_imagegen.infrastructure.storage.filesystem import distinct_names, ensure_directory
from gemini_imagegen.infrastructure.storage.locations import (
    discover_desktop,
    resolve_base_directory,
)

posix_only = pytest.mark.skipif(os.name == "nt", reason="XDG user dirs are POSIX only")


@pytest.fixture
def home(tmp_path):
    path = tmp_path / "home"
    path.mkdir()
    return path


def write_user_dirs(config_home: Path, content: str) -> None:
    config_home.mkdir(parents=True, exist_ok=True)
    (config_home / "user-dirs.dirs").write_text(content, encoding="utf-8")


@posix_only
def test_desktop_from_user_dirs(home, tmp_path):
    config_home = tmp_path / "cfg"
    write_user_dirs(config_home, '# comment\nXDG_DESKTOP_DIR="$HOME/Schreibtisch"\n')

    desktop = discover_desktop({"HOME": str(home), "XDG_CONFIG_HOME": str(config_home)})

    assert desktop == home / "Schreibtisch"


@posix_only
def test_malformed_user_dirs_falls_back(home, tmp_path):
    config_home = tmp_path / "cfg"
    write_user_dirs(config_home, "XDG_DOWNLOAD_DIR=\"$HOME/Downloads\"\n")

    desktop = discover_desktop({"HOME": str(home), "XDG_CONFIG_HOME": str(config_home)})

    assert desktop == home / "Desktop"


@posix_only
def test_profile_variable_without_user_dirs(home):
    assert discover_desktop({"HOME": str(home)}) == home / "Desktop"


def test_discovery_never_fails(monkeypatch):
    def broken():
        raise OSError("no home")

    monkeypatch.setattr(locations, "desktop_probes", lambda environ=None: [broken, lambda: None])

    assert discover_desktop({}) == Path.cwd()


@posix_only
def test_base_directory_per_strategy(home, tmp_path):
    env = {"HOME": str(home)}

    assert resolve_base_directory(StorageStrategy.DESKTOP, "imgs", environ=env) == home / "Desktop" / "imgs"
    assert resolve_base_directory(StorageStrategy.WORKING_DIRECTORY, "imgs") == Path.cwd() / "imgs"
    assert resolve_base_directory(StorageStrategy.TEMPORARY_ROOT, "imgs") == Path(tempfile.gettempdir()) / "imgs"
    assert resolve_base_directory(StorageStrategy.EXPLICIT, "imgs", str(tmp_path / "out")) == tmp_path / "out"
    assert resolve_base_directory(StorageStrategy.EXPLICIT, "imgs", "out") == Path.cwd() / "out"

    with pytest.raises(ValueError):
        resolve_base_directory(StorageStrategy.EXPLICIT, "imgs", "")


def test_strategy_parse():
    assert StorageStrategy.parse("Working-Directory") is StorageStrategy.WORKING_DIRECTORY
    with pytest.raises(ValueError):
        StorageStrategy.parse("cloud")


@pytest.mark.asyncio
async def test_ensure_directory_is_idempotent(tmp_path):
    target = tmp_path / "a" / "b"

    await ensure_directory(str(target))
    await ensure_directory(str(target))

    assert target.is_dir()


def test_distinct_names():
    names = distinct_names(["/a/x.png", "/b/x.png", "C:\\c\\x.png", "/d/x-2.png"])
    assert names == ["x.png", "x-2.png", "x-3.png", "x-2-2.png"]
