# tests/test_logger.py
from __future__ import annotations

import logging
import sys
from types import SimpleNamespace

import pytest

from cinelaunch import logger as logger_mod


# ----------------------------------------------------------------------
# Tests para _ensure_configured
# ----------------------------------------------------------------------


def test_ensure_configured_initializes_logger(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(logger_mod, "_CONFIGURED", False)
    monkeypatch.setattr(logger_mod, "_LOGGER", None)

    log = logger_mod._ensure_configured()

    assert isinstance(log, logging.Logger)
    assert logger_mod._CONFIGURED is True
    assert logger_mod._LOGGER is log
    assert log.name == logger_mod.LOGGER_NAME


def test_ensure_configured_idempotent(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(logger_mod, "_CONFIGURED", False)
    monkeypatch.setattr(logger_mod, "_LOGGER", None)

    assert logger_mod._ensure_configured() is logger_mod._ensure_configured()


# ----------------------------------------------------------------------
# Tests para _should_log
# ----------------------------------------------------------------------


def test_should_log_when_silent_mode_false(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setitem(sys.modules, "cinelaunch.config", SimpleNamespace(SILENT_MODE=False))
    assert logger_mod._should_log() is True


def test_should_log_silent_mode_true(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setitem(sys.modules, "cinelaunch.config", SimpleNamespace(SILENT_MODE=True))
    assert logger_mod._should_log() is False
    assert logger_mod._should_log(always=True) is True


def test_should_log_without_config_module(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delitem(sys.modules, "cinelaunch.config", raising=False)
    assert logger_mod._should_log() is True


# ----------------------------------------------------------------------
# Fixture para capturar llamadas a logger
# ----------------------------------------------------------------------


@pytest.fixture
def capture_logger(monkeypatch: pytest.MonkeyPatch) -> dict[str, list[str]]:
    """Reemplaza el logger real por uno falso que guarda los mensajes."""
    messages: dict[str, list[str]] = {"info": [], "warning": [], "error": [], "debug": []}

    class FakeLogger:
        def info(self, msg: str) -> None:
            messages["info"].append(msg)

        def warning(self, msg: str) -> None:
            messages["warning"].append(msg)

        def error(self, msg: str) -> None:
            messages["error"].append(msg)

        def debug(self, msg: str) -> None:
            messages["debug"].append(msg)

    monkeypatch.setattr(logger_mod, "_LOGGER", FakeLogger())
    monkeypatch.setattr(logger_mod, "_CONFIGURED", True)
    return messages


def _silent(monkeypatch: pytest.MonkeyPatch, value: bool) -> None:
    monkeypatch.setitem(sys.modules, "cinelaunch.config", SimpleNamespace(SILENT_MODE=value))


# ----------------------------------------------------------------------
# Métodos públicos
# ----------------------------------------------------------------------


def test_info_and_warning_written_when_allowed(
    monkeypatch: pytest.MonkeyPatch, capture_logger: dict[str, list[str]]
) -> None:
    _silent(monkeypatch, False)
    logger_mod.info("Hello")
    logger_mod.warning("Warn")
    logger_mod.debug("DBG")
    assert capture_logger["info"] == ["Hello"]
    assert capture_logger["warning"] == ["Warn"]
    assert capture_logger["debug"] == ["DBG"]


def test_silent_mode_suppresses_all_but_errors(
    monkeypatch: pytest.MonkeyPatch, capture_logger: dict[str, list[str]]
) -> None:
    _silent(monkeypatch, True)
    logger_mod.info("Hello")
    logger_mod.warning("Warn")
    logger_mod.debug("DBG")
    logger_mod.error("ERR")
    assert capture_logger["info"] == []
    assert capture_logger["warning"] == []
    assert capture_logger["debug"] == []
    assert capture_logger["error"] == ["ERR"]


def test_always_forces_log_in_silent_mode(
    monkeypatch: pytest.MonkeyPatch, capture_logger: dict[str, list[str]]
) -> None:
    _silent(monkeypatch, True)
    logger_mod.info("Forced", always=True)
    assert capture_logger["info"] == ["Forced"]


@pytest.mark.parametrize(
    "value,expected",
    [(None, logging.INFO), ("debug", logging.DEBUG), (" WARNING ", logging.WARNING), ("loud", logging.INFO)],
)
def test_level_from_env(monkeypatch: pytest.MonkeyPatch, value: str | None, expected: int) -> None:
    if value is None:
        monkeypatch.delenv(logger_mod.LOG_LEVEL_ENV, raising=False)
    else:
        monkeypatch.setenv(logger_mod.LOG_LEVEL_ENV, value)
    assert logger_mod._level_from_env() == expected
