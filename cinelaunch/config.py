from __future__ import annotations

import os
from typing import Callable, TypeVar

from dotenv import load_dotenv

# Carga de variables de entorno desde .env
load_dotenv()

from cinelaunch import logger as _logger  # noqa: E402  (se importa tras load_dotenv)

# int | float
N = TypeVar("N", int, float)


def _get_env_str(name: str, default: str) -> str:
    v = os.getenv(name)
    if v is None or v.strip() == "":
        return default
    return v.strip()


def _get_env_number(name: str, default: N, cast: Callable[[str], N]) -> N:
    """Lee un número del entorno; vacío o no convertible → default (con aviso)."""
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        return cast(raw)
    except ValueError:
        _logger.warning(f"Valor no válido para {name!r}: {raw!r}; se usa {default}")
        return default


def _get_env_int(name: str, default: int) -> int:
    return _get_env_number(name, default, int)


def _get_env_float(name: str, default: float) -> float:
    return _get_env_number(name, default, float)


def _get_env_bool(name: str, default: bool) -> bool:
    raw = (os.getenv(name) or "").strip().lower()
    if not raw:
        return default
    return raw in ("1", "true", "yes", "on")


# ----------------------------------------------------
# Almacenamiento local
# ----------------------------------------------------
# Directorio donde viven los ficheros clave → valor (uno por clave)
DATA_DIR: str = _get_env_str("CINELAUNCH_DATA_DIR", "cinelaunch_data")

# ----------------------------------------------------
# Sincronización remota
# ----------------------------------------------------
# URL inicial si el dispositivo aún no tiene ninguna guardada
REMOTE_URL: str = _get_env_str("CINELAUNCH_REMOTE_URL", "")

SYNC_INTERVAL_MINUTES: float = _get_env_float("SYNC_INTERVAL_MINUTES", 5.0)
if SYNC_INTERVAL_MINUTES <= 0:
    _logger.warning(
        f"SYNC_INTERVAL_MINUTES must be > 0 (got {SYNC_INTERVAL_MINUTES}), using 5"
    )
    SYNC_INTERVAL_MINUTES = 5.0

# 0 = sin timeout (se espera a lo que decida la pila de red)
SYNC_TIMEOUT_SECONDS: float = _get_env_float("SYNC_TIMEOUT_SECONDS", 0.0)

# ----------------------------------------------------
# Modo admin (secreto compartido en claro, NO es seguridad real)
# ----------------------------------------------------
ADMIN_SECRET: str = _get_env_str("CINELAUNCH_ADMIN_SECRET", "cinelaunch-admin")

# ----------------------------------------------------
# Relleno automático de metadatos con IA
# ----------------------------------------------------
OPENAI_API_KEY: str | None = os.getenv("OPENAI_API_KEY") or None
AI_MODEL: str = _get_env_str("AI_MODEL", "gpt-4o-mini")
AI_TEMPERATURE: float = _get_env_float("AI_TEMPERATURE", 0.3)

SILENT_MODE: bool = _get_env_bool("SILENT_MODE", False)


# ----------------------------------------------------
# Logs de depuración de configuración
# ----------------------------------------------------
def _log_config_debug(label: str, value: object) -> None:
    _logger.debug(f"CONFIG {label}: {value}")


_log_config_debug("DATA_DIR", DATA_DIR)
_log_config_debug("REMOTE_URL", REMOTE_URL or None)
_log_config_debug("SYNC_INTERVAL_MINUTES", SYNC_INTERVAL_MINUTES)
_log_config_debug("SYNC_TIMEOUT_SECONDS", SYNC_TIMEOUT_SECONDS or None)
_log_config_debug("ADMIN_SECRET", "****" if ADMIN_SECRET else None)
_log_config_debug("OPENAI_API_KEY", "****" if OPENAI_API_KEY else None)
_log_config_debug("AI_MODEL", AI_MODEL)
_log_config_debug("SILENT_MODE", SILENT_MODE)
