"""Tests for configuration validation and the tagged console logger."""

import pytest

from gridpath import Config
from gridpath.logging_utils import (
    LOG_TAG_ERROR,
    LOG_TAG_INFO,
    LOG_TAG_STEP,
    LOG_TAG_SUCCESS,
    LOG_TAG_WARNING,
    Color,
    colored,
    log_error,
    log_info,
    log_step,
    log_success,
    log_warning,
)


def test_defaults_validate():
    Config.validate()


@pytest.mark.parametrize(
    "attribute, value",
    [
        ("DEFAULT_ROWS", 0),
        ("DEFAULT_COLS", -3),
        ("MIN_DELAY_MS", 0),
        ("MAX_DELAY_MS", 0),
        ("PATH_DELAY_MULTIPLIER", 0),
        ("OBSTACLE_DENSITY", 1.5),
        ("OBSTACLE_DENSITY", -0.2),
    ],
)
def test_validate_rejects_bad_values(monkeypatch, attribute, value):
    monkeypatch.setattr(Config, attribute, value)
    with pytest.raises(ValueError):
        Config.validate()


def test_clamp_delay(monkeypatch):
    monkeypatch.setattr(Config, "MIN_DELAY_MS", 5)
    monkeypatch.setattr(Config, "MAX_DELAY_MS", 200)

    assert Config.clamp_delay(1) == 5.0
    assert Config.clamp_delay(50) == 50.0
    assert Config.clamp_delay(500) == 200.0


def test_display_lists_settings():
    text = Config.display()
    assert text.startswith("Gridpath Configuration:")
    assert "Default Grid:" in text
    assert "Path Delay Multiplier:" in text


def test_colored_respects_no_color(monkeypatch):
    monkeypatch.setenv("GRIDPATH_NO_COLOR", "1")
    assert colored("hello", Color.RED, bold=True) == "hello"

    monkeypatch.delenv("GRIDPATH_NO_COLOR")
    text = colored("hello", Color.RED, bold=True)
    assert text.startswith(Color.BOLD.value + Color.RED.value)
    assert text.endswith(Color.RESET.value)


def test_log_helpers_prefix_tags(monkeypatch, capsys):
    monkeypatch.setenv("GRIDPATH_NO_COLOR", "1")

    log_warning("careful")
    log_error("broken")
    log_success("done")
    log_info("note")

    lines = capsys.readouterr().out.splitlines()
    assert lines == [
        f"{LOG_TAG_WARNING} careful",
        f"{LOG_TAG_ERROR} broken",
        f"{LOG_TAG_SUCCESS} done",
        f"{LOG_TAG_INFO} note",
    ]


def test_log_step_is_silent_unless_verbose(monkeypatch, capsys):
    monkeypatch.setenv("GRIDPATH_NO_COLOR", "1")
    monkeypatch.setattr(Config, "VERBOSE", False)

    log_step("hidden")
    assert capsys.readouterr().out == ""

    monkeypatch.setattr(Config, "VERBOSE", True)
    log_step("shown")
    assert capsys.readouterr().out == f"  {LOG_TAG_STEP} shown\n"
