# cinelaunch/logger.py
from __future__ import annotations

import logging
import os
import sys
from typing import Any

# Nombre del logger principal (los tests lo usan explícitamente)
LOGGER_NAME: str = "cinelaunch"

LOG_FORMAT: str = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_LEVEL_ENV: str = "CINELAUNCH_LOG_LEVEL"

# logging.Logger real o un FakeLogger inyectado por los tests
_LOGGER: Any = None
_CONFIGURED: bool = False


def _level_from_env() -> int:
    """Nivel del logger raíz: CINELAUNCH_LOG_LEVEL (INFO si falta o no es válido)."""
    name = (os.getenv(LOG_LEVEL_ENV) or "INFO").strip().upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.INFO


def _ensure_configured() -> Any:
    """
    Configura logging una sola vez y devuelve el logger de la app.
    Si ya hay un `_LOGGER` (p. ej. un FakeLogger de tests) se respeta.
    """
    global _LOGGER, _CONFIGURED

    if _CONFIGURED and _LOGGER is not None:
        return _LOGGER

    # Streamlit ya instala handlers propios: no duplicar salida
    if not logging.getLogger().handlers:
        logging.basicConfig(level=_level_from_env(), format=LOG_FORMAT)

    _LOGGER = logging.getLogger(LOGGER_NAME)
    _CONFIGURED = True
    return _LOGGER


def _should_log(*, always: bool = False) -> bool:
    """False solo si cinelaunch.config está cargado con SILENT_MODE activo."""
    if always:
        return True
    cfg = sys.modules.get("cinelaunch.config")
    return cfg is None or not bool(getattr(cfg, "SILENT_MODE", False))


def get_logger() -> Any:
    return _ensure_configured()


def _emit(method: str, msg: str, *args: Any, **kwargs: Any) -> None:
    kwargs.pop("always", None)
    getattr(_ensure_configured(), method)(msg, *args, **kwargs)


# ============================================================
# API pública
# ============================================================


def debug(msg: str, *args: Any, always: bool = False, **kwargs: Any) -> None:
    if _should_log(always=always):
        _emit("debug", msg, *args, **kwargs)


def info(msg: str, *args: Any, always: bool = False, **kwargs: Any) -> None:
    if _should_log(always=always):
        _emit("info", msg, *args, **kwargs)


def warning(msg: str, *args: Any, always: bool = False, **kwargs: Any) -> None:
    if _should_log(always=always):
        _emit("warning", msg, *args, **kwargs)


def error(msg: str, *args: Any, always: bool = False, **kwargs: Any) -> None:
    """Los errores se escriben siempre, también en SILENT_MODE."""
    _emit("error", msg, *args, **kwargs)
