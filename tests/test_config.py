from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from autoenv.configs import (
    AutoEnvConfig,
    dump_config,
    load_config,
    resolve_config,
    sample_config,
)
from autoenv.core.errors import ConfigError


def test_defaults() -> None:
    cfg = AutoEnvConfig()
    assert cfg.output == ".env"
    assert cfg.merge_existing is True
    assert cfg.ignore == []
    assert cfg.workers is None


def test_load_config_from_yaml(tmp_path: Path) -> None:
    fp = tmp_path / "autoenv.yaml"
    fp.write_text(
        "output: .env.development\nmerge_existing: false\nignore:\n  - DEBUG\n  - TEST_VAR\n",
        encoding="utf-8",
    )
    cfg = load_config(fp)
    assert cfg.output == ".env.development"
    assert cfg.merge_existing is False
    assert cfg.ignore == ["DEBUG", "TEST_VAR"]


def test_empty_file_means_defaults(tmp_path: Path) -> None:
    fp = tmp_path / "autoenv.yaml"
    fp.write_text("", encoding="utf-8")
    assert load_config(fp) == AutoEnvConfig()


@pytest.mark.parametrize(
    "content",
    [
        "output: [unclosed\n",
        "- just\n- a list\n",
        "merge_existing: notabool\n",
        "ignore: HOME\n",
        "unknown_key: 1\n",
        "workers: 0\n",
    ],
)
def test_malformed_config_is_an_error(tmp_path: Path, content: str) -> None:
    fp = tmp_path / "autoenv.yaml"
    fp.write_text(content, encoding="utf-8")
    with pytest.raises(ConfigError) as ei:
        load_config(fp)
    assert str(fp) in str(ei.value)


def test_missing_explicit_config_is_an_error(tmp_path: Path) -> None:
    with pytest.raises(ConfigError):
        resolve_config(tmp_path / "nope.yaml", tmp_path)


def test_resolve_config_priority(tmp_path: Path) -> None:
    assert resolve_config(None, tmp_path) == AutoEnvConfig()
    (tmp_path / "autoenv.yaml").write_text("output: .env.local\n", encoding="utf-8")
    assert resolve_config(None, tmp_path).output == ".env.local"
    explicit = tmp_path / "other.yaml"
    explicit.write_text("output: .env.other\n", encoding="utf-8")
    assert resolve_config(explicit, tmp_path).output == ".env.other"


def test_dump_and_sample_config(tmp_path: Path) -> None:
    assert yaml.safe_load(dump_config(AutoEnvConfig())) == {
        "output": ".env",
        "merge_existing": True,
        "ignore": [],
    }
    fp = tmp_path / "autoenv.yaml"
    fp.write_text(sample_config(), encoding="utf-8")
    assert load_config(fp).ignore == ["HOME", "PATH", "USER"]
