from __future__ import annotations

import json
from pathlib import Path

import pytest

from pycloc import config
from pycloc.config import ConfigLoader


def test_missing_config_file_is_empty(tmp_path: Path) -> None:
    loader = ConfigLoader(config_file=tmp_path / "absent.json", environ={})
    assert loader.config == {}
    assert loader.get_executable() is None
    assert loader.get_transcript() is None
    assert loader.is_verbose() is False


def test_config_file_values(tmp_path: Path) -> None:
    cfg = tmp_path / config.DEFAULT_CONFIG_NAME
    cfg.write_text(
        json.dumps({"executable": "/opt/cloc", "transcript": str(tmp_path / "t.log"), "verbose": True}),
        encoding="utf-8",
    )
    loader = ConfigLoader(config_file=cfg, environ={})
    assert loader.get_executable() == "/opt/cloc"
    assert loader.get_transcript() == tmp_path / "t.log"
    assert loader.is_verbose() is True


def test_environment_overrides_file(tmp_path: Path) -> None:
    cfg = tmp_path / "pycloc.json"
    cfg.write_text(json.dumps({"executable": "/opt/cloc", "verbose": True}), encoding="utf-8")
    loader = ConfigLoader(
        config_file=cfg,
        environ={config.ENV_EXECUTABLE: "/env/cloc", config.ENV_VERBOSE: "off"},
    )
    assert loader.get_executable() == "/env/cloc"
    assert loader.is_verbose() is False


def test_config_path_from_environment(tmp_path: Path) -> None:
    cfg = tmp_path / "elsewhere.json"
    cfg.write_text(json.dumps({"executable": "/from/env/path"}), encoding="utf-8")
    loader = ConfigLoader(environ={config.ENV_CONFIG: str(cfg)})
    assert loader.config_file == cfg
    assert loader.get_executable() == "/from/env/path"


def test_blank_environment_value_is_ignored(tmp_path: Path) -> None:
    cfg = tmp_path / "pycloc.json"
    cfg.write_text(json.dumps({"executable": "/opt/cloc"}), encoding="utf-8")
    loader = ConfigLoader(config_file=cfg, environ={config.ENV_EXECUTABLE: "  "})
    assert loader.get_executable() == "/opt/cloc"


@pytest.mark.parametrize("content", ["{not json", "[1, 2]"])
def test_invalid_config_raises(tmp_path: Path, content: str) -> None:
    cfg = tmp_path / "pycloc.json"
    cfg.write_text(content, encoding="utf-8")
    with pytest.raises(ValueError):
        ConfigLoader(config_file=cfg, environ={})


def test_load_file_disabled_uses_environment_only(tmp_path: Path) -> None:
    cfg = tmp_path / "pycloc.json"
    cfg.write_text("{not json", encoding="utf-8")
    loader = ConfigLoader(config_file=cfg, environ={config.ENV_VERBOSE: "yes"}, load_file=False)
    assert loader.config == {}
    assert loader.is_verbose() is True


@pytest.mark.parametrize(
    ("value", "expected"),
    [(True, True), (0, False), (2, True), ("YES", True), ("nope", False), (None, False)],
)
def test_as_bool(value, expected: bool) -> None:
    assert config._as_bool(value) is expected
