"""Unit tests for ConfigFileLoader."""

from pathlib import Path

import pytest

from thread_safety_linter.infrastructure.config_file_loader import ConfigFileLoader


def test_finds_nearest_pyproject_walking_up(tmp_path: Path) -> None:
    (tmp_path / "pyproject.toml").write_text("[tool.thread-safety-linter]\nseverity = \"error\"\n")
    nested = tmp_path / "a" / "b"
    nested.mkdir(parents=True)

    assert ConfigFileLoader.find_pyproject(nested) == (tmp_path / "pyproject.toml").resolve()
    assert ConfigFileLoader.load_config_from_fs(nested) == {"severity": "error"}


def test_defaults_to_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    (tmp_path / "pyproject.toml").write_text(
        "[tool.thread-safety-linter]\nenabled = false\nexclude = [\"vendor/\"]\n"
    )
    monkeypatch.chdir(tmp_path)
    assert ConfigFileLoader.load_config_from_fs() == {"enabled": False, "exclude": ["vendor/"]}


def test_missing_section_is_empty(tmp_path: Path) -> None:
    (tmp_path / "pyproject.toml").write_text("[project]\nname = \"x\"\n")
    assert ConfigFileLoader.load_config_from_fs(tmp_path) == {}


def test_invalid_toml_logs_warning(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    (tmp_path / "pyproject.toml").write_text("[tool.thread-safety-linter\n")
    with caplog.at_level("WARNING"):
        assert ConfigFileLoader.load_config_from_fs(tmp_path) == {}
    assert "Could not read" in caplog.text


def test_section_that_is_not_a_table(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    (tmp_path / "pyproject.toml").write_text("[tool]\nthread-safety-linter = 3\n")
    with caplog.at_level("WARNING"):
        assert ConfigFileLoader.load_config_from_fs(tmp_path) == {}
    assert "is not a table" in caplog.text
