import sys
from pathlib import Path

import pytest

# Add project root to path
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

from gemini_imagegen.domain.entity.storage import StorageStrategy
from gemini_imagegen.infrastructure.config.settings import ConfigError, load_settings

ENV_VARS = ("GEMINI_API_KEY", "IMAGEGEN_STORAGE_STRATEGY", "IMAGEGEN_STORAGE_PATH", "LOG_LEVEL")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults_when_file_missing(tmp_path):
    config = load_settings(tmp_path / "missing.yaml")

    assert config.storage.strategy is StorageStrategy.DESKTOP
    assert config.storage.app_folder == "gemini-images"
    assert config.storage.container_prefixes == ["/app/"]
    assert config.gemini.model == "imagen-3.0-generate-002"
    assert config.gemini.api_key == ""
    assert config.html.width == 512 and config.html.height == 512
    assert config.html.gallery is True
    assert config.html.use_temp is False


def test_load_yaml(tmp_path):
    config_path = tmp_path / "config.yaml"
    config_path.write_text(
        "gemini:\n"
        "  api_key: from-file\n"
        "  model: imagen-4.0-generate-001\n"
        "storage:\n"
        "  strategy: temporary-root\n"
        "  app_folder: pics\n"
        "html:\n"
        "  gallery: false\n"
        "  use_temp: true\n"
        "logging:\n"
        "  level: DEBUG\n"
        "  format: json\n",
        encoding="utf-8",
    )

    config = load_settings(config_path)

    assert config.gemini.api_key == "from-file"
    assert config.gemini.model == "imagen-4.0-generate-001"
    assert config.storage.strategy is StorageStrategy.TEMPORARY_ROOT
    assert config.storage.app_folder == "pics"
    assert config.html.gallery is False
    assert config.html.use_temp is True
    assert config.logging.level == "DEBUG"
    assert config.logging.format == "json"


def test_environment_overrides(tmp_path, monkeypatch):
    config_path = tmp_path / "config.yaml"
    config_path.write_text("gemini:\n  api_key: from-file\n", encoding="utf-8")
    monkeypatch.setenv("GEMINI_API_KEY", "from-env")
    monkeypatch.setenv("IMAGEGEN_STORAGE_STRATEGY", "explicit")
    monkeypatch.setenv("IMAGEGEN_STORAGE_PATH", str(tmp_path / "out"))
    monkeypatch.setenv("LOG_LEVEL", "WARNING")

    config = load_settings(config_path)

    assert config.gemini.api_key == "from-env"
    assert config.storage.strategy is StorageStrategy.EXPLICIT
    assert config.storage.path == str(tmp_path / "out")
    assert config.logging.level == "WARNING"


def test_explicit_strategy_requires_path(tmp_path):
    config_path = tmp_path / "config.yaml"
    config_path.write_text("storage:\n  strategy: explicit\n", encoding="utf-8")

    with pytest.raises(ConfigError):
        load_settings(config_path)


def test_unknown_strategy(tmp_path):
    config_path = tmp_path / "config.yaml"
    config_path.write_text("storage:\n  strategy: cloud\n", encoding="utf-8")

    with pytest.raises(ConfigError, match="cloud"):
        load_settings(config_path)


def test_empty_sections_use_defaults(tmp_path):
    config_path = tmp_path / "config.yaml"
    config_path.write_text(
        "server:\n"
        "gemini:\n"
        "storage:\n"
        "html:\n"
        "logging:\n",
        encoding="utf-8",
    )

    config = load_settings(config_path)

    assert config.server.name == "gemini-image-gen"
    assert config.storage.strategy is StorageStrategy.DESKTOP
    assert config.html.width == 512
    assert config.logging.level == "INFO"


def test_top_level_must_be_mapping(tmp_path):
    config_path = tmp_path / "config.yaml"
    config_path.write_text("- storage\n- html\n", encoding="utf-8")

    with pytest.raises(ConfigError, match="mapping"):
        load_settings(config_path)
