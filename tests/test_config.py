"""Settings resolution from the environment, with per-field fallbacks."""
from pathlib import Path

import pytest

from takt.config import DEFAULT_HEAD, Settings, load_settings


def test_defaults(monkeypatch, tmp_path):
    monkeypatch.setenv("HOME", str(tmp_path))
    settings = Settings(_env_file=None)

    assert settings.ledger_path == tmp_path / "takt.csv"
    assert settings.target_hours == 8.0
    assert settings.TAKT_EDITOR == ""
    assert settings.TAKT_HEAD == DEFAULT_HEAD
    assert settings.TAKT_LOG_LEVEL == "WARNING"


def test_values_come_from_environment(monkeypatch, tmp_path):
    monkeypatch.setenv("TAKT_FILE", str(tmp_path / "hours.csv"))
    monkeypatch.setenv("TAKT_TARGET_HOURS", "7:30")
    monkeypatch.setenv("TAKT_EDITOR", "vim -n")
    monkeypatch.setenv("TAKT_HEAD", "3")
    monkeypatch.setenv("TAKT_LOG_LEVEL", "debug")

    settings = load_settings(_env_file=None)

    assert settings.ledger_path == tmp_path / "hours.csv"
    assert settings.target_hours == 7.5
    assert settings.TAKT_EDITOR == "vim -n"
    assert settings.TAKT_HEAD == 3
    assert settings.TAKT_LOG_LEVEL == "DEBUG"


def test_tilde_is_expanded(monkeypatch, tmp_path):
    monkeypatch.setenv("HOME", str(tmp_path))
    settings = Settings(_env_file=None, TAKT_FILE="~/ledgers/work.csv")
    assert settings.ledger_path == tmp_path / "ledgers" / "work.csv"


def test_blank_file_falls_back_to_default(monkeypatch, tmp_path):
    monkeypatch.setenv("HOME", str(tmp_path))
    assert Settings(_env_file=None, TAKT_FILE="  ").ledger_path == tmp_path / "takt.csv"


@pytest.mark.parametrize(
    "raw, expected",
    [("6", 6.0), ("7.5", 7.5), ("7:30", 7.5), ("7:99", 8.0), ("-2", 8.0), ("abc", 8.0), ("nan", 8.0)],
)
def test_target_hours(raw, expected):
    assert Settings(_env_file=None, TAKT_TARGET_HOURS=raw).target_hours == expected


@pytest.mark.parametrize("raw", ["abc", "", "1.5"])
def test_bad_head_falls_back(monkeypatch, raw):
    monkeypatch.setenv("TAKT_HEAD", raw)
    assert Settings(_env_file=None).TAKT_HEAD == DEFAULT_HEAD


@pytest.mark.parametrize("raw", ["loud", "", "trace"])
def test_bad_log_level_falls_back(monkeypatch, raw):
    monkeypatch.setenv("TAKT_LOG_LEVEL", raw)
    assert Settings(_env_file=None).TAKT_LOG_LEVEL == "WARNING"


def test_env_file_is_read(monkeypatch, tmp_path):
    (tmp_path / ".env").write_text("TAKT_HEAD=4\nTAKT_TARGET_HOURS=6\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)

    settings = load_settings()
    assert settings.TAKT_HEAD == 4
    assert settings.target_hours == 6.0


def test_ledger_path_is_a_path():
    assert isinstance(Settings(_env_file=None, TAKT_FILE="/tmp/x.csv").ledger_path, Path)
