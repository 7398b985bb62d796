"""Unit tests for configuration management."""

from pathlib import Path

import pytest

from fileman.config import (
    DEFAULT_CONFIG_PATH,
    ConfigError,
    ConfigManager,
    FilemanConfig,
    resolve_with_precedence,
)


def _fresh_manager(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> ConfigManager:
    monkeypatch.setenv("HOME", str(tmp_path))
    return ConfigManager(env={})


def test_default_path_is_under_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    manager = _fresh_manager(tmp_path, monkeypatch)

    assert manager.config_path == DEFAULT_CONFIG_PATH.expanduser()
    assert manager.config_path == tmp_path / ".fileman" / "config.yaml"


def test_ensure_exists_creates_default_file(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    manager = _fresh_manager(tmp_path, monkeypatch)

    path = manager.ensure_exists()

    assert path.exists()
    text = path.read_text(encoding="utf-8")
    assert "fileman configuration file" in text
    assert "Last updated:" in text

    config = manager.load(include_env=False)
    assert config == FilemanConfig()
    assert config.clustering.time_interval_sec == pytest.approx(600.0)
    assert config.clustering.min_cluster_size == 3
    assert config.output.tag_prefix == "cluster"


def test_resolve_with_precedence_respects_order(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    manager = _fresh_manager(tmp_path, monkeypatch)
    manager.save({"clustering": {"time_interval_sec": 120, "min_cluster_size": 5}})

    env = {"FILEMAN__CLUSTERING__MIN_CLUSTER_SIZE": "4", "FILEMAN__OUTPUT__TAG_PREFIX": "env"}
    cli = {"output.tag_prefix": "shoot"}

    config = manager.load(cli_overrides=cli, env_overrides=env)

    assert config.clustering.time_interval_sec == pytest.approx(120.0)
    # environment beats the file, CLI beats the environment
    assert config.clustering.min_cluster_size == 4
    assert config.output.tag_prefix == "shoot"


def test_empty_prefix_override_is_kept(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    manager = _fresh_manager(tmp_path, monkeypatch)

    config = manager.load(cli_overrides={"output.tag_prefix": ""})

    assert config.output.tag_prefix == ""


def test_invalid_yaml_raises_config_error(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    manager = _fresh_manager(tmp_path, monkeypatch)
    manager.ensure_exists()

    manager.config_path.write_text("- not-a-mapping", encoding="utf-8")

    with pytest.raises(ConfigError):
        manager.load()


def test_unknown_keys_are_rejected() -> None:
    with pytest.raises(ConfigError):
        resolve_with_precedence(
            defaults=FilemanConfig(), file_overrides={"clustering": {"radius": 10}}
        )


@pytest.mark.parametrize(
    "overrides",
    [
        {"clustering.time_interval_sec": 0},
        {"clustering.time_interval_sec": "soon"},
        {"clustering.min_cluster_size": -1},
    ],
)
def test_invalid_clustering_values_raise(overrides: dict) -> None:
    with pytest.raises(ConfigError):
        resolve_with_precedence(defaults=FilemanConfig(), cli_overrides=overrides)


def test_unknown_logging_level_raises() -> None:
    with pytest.raises(ConfigError):
        resolve_with_precedence(defaults=FilemanConfig(), cli_overrides={"logging.level": "loud"})
