from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from cinelaunch import config
from cinelaunch import logger as _logger
from cinelaunch.app_state import AppState
from cinelaunch.catalog import CatalogService, CatalogStore
from cinelaunch.role_gate import RoleGate
from cinelaunch.storage import KeyValueStore
from cinelaunch.sync_client import PullFn, SyncScheduler, pull, validate_remote_url


@dataclass(slots=True)
class App:
    """Componentes cableados; la UI y la CLI reciben este objeto."""

    storage: KeyValueStore
    state: AppState
    store: CatalogStore
    gate: RoleGate
    service: CatalogService
    scheduler: SyncScheduler

    def set_remote_url(self, url: str) -> str:
        """
        Cambia la URL de sincronización (solo Admin).

        Lanza PermissionDeniedError o ValidationError; con error no se guarda nada.
        """
        self.gate.require_admin()
        cleaned = validate_remote_url(url)
        self.state.set_remote_url(cleaned)
        _logger.info(f"URL de sincronización: {cleaned or '(desactivada)'}")
        return cleaned


def build_app(
    data_dir: str | Path | None = None,
    *,
    secret: str | None = None,
    pull_fn: PullFn = pull,
) -> App:
    storage = KeyValueStore(config.DATA_DIR if data_dir is None else data_dir)
    state = AppState.load(storage)
    store = CatalogStore.load(storage)
    gate = RoleGate(state, secret=secret)
    return App(
        storage=storage,
        state=state,
        store=store,
        gate=gate,
        service=CatalogService(store, gate),
        scheduler=SyncScheduler(state, store, pull_fn=pull_fn),
    )
