from __future__ import annotations

"""
Estado de aplicación explícito.

La configuración de proceso (URL remota, modo admin, intervalo y última
sincronización) vive en un objeto que se inyecta en cada componente en lugar
de leerse de variables globales.
"""

from dataclasses import dataclass

from cinelaunch import config
from cinelaunch import logger as _logger
from cinelaunch.storage import ADMIN_KEY, REMOTE_URL_KEY, KeyValueStore


@dataclass(slots=True)
class SyncConfig:
    """
    - `remote_url` e `is_admin` se persisten en el almacén local.
    - `sync_interval_minutes` y `last_sync_epoch` son solo de sesión.
    """

    remote_url: str = ""
    is_admin: bool = False
    sync_interval_minutes: float = 5.0
    last_sync_epoch: int | None = None


class AppState:
    """Accesos de lectura/escritura a SyncConfig con escritura inmediata a disco."""

    def __init__(self, storage: KeyValueStore, sync_config: SyncConfig | None = None) -> None:
        self.storage = storage
        self._config = sync_config or SyncConfig()

    @classmethod
    def load(
        cls,
        storage: KeyValueStore,
        *,
        interval_minutes: float | None = None,
        default_remote_url: str | None = None,
    ) -> "AppState":
        stored_url = storage.load(REMOTE_URL_KEY)
        # "" guardado = sincronización desactivada a propósito; solo sin valor se usa el .env
        if isinstance(stored_url, str):
            remote_url = stored_url
        else:
            remote_url = config.REMOTE_URL if default_remote_url is None else default_remote_url

        stored_admin = storage.load(ADMIN_KEY)
        is_admin = stored_admin is True

        sync_config = SyncConfig(
            remote_url=remote_url,
            is_admin=is_admin,
            sync_interval_minutes=(
                config.SYNC_INTERVAL_MINUTES if interval_minutes is None else interval_minutes
            ),
        )
        _logger.debug(f"AppState cargado: admin={is_admin}, remote_url={remote_url or None}")
        return cls(storage, sync_config)

    @property
    def config(self) -> SyncConfig:
        return self._config

    # ---------------- URL remota ----------------

    @property
    def remote_url(self) -> str:
        return self._config.remote_url

    def set_remote_url(self, url: str) -> bool:
        self._config.remote_url = url
        return self.storage.save(REMOTE_URL_KEY, url)

    # ---------------- Modo admin ----------------

    @property
    def is_admin(self) -> bool:
        return self._config.is_admin

    def set_admin(self, value: bool) -> bool:
        self._config.is_admin = bool(value)
        return self.storage.save(ADMIN_KEY, bool(value))

    # ---------------- Sincronización ----------------

    @property
    def sync_interval_minutes(self) -> float:
        return self._config.sync_interval_minutes

    @property
    def last_sync_epoch(self) -> int | None:
        return self._config.last_sync_epoch

    def mark_synced(self, epoch_ms: int) -> None:
        self._config.last_sync_epoch = epoch_ms
