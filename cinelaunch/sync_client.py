from __future__ import annotations

import json
from collections.abc import Callable, Iterable
from enum import Enum
from pathlib import Path
from typing import Final
from urllib.parse import parse_qsl, urlencode, urlparse, urlunparse

import requests

from cinelaunch import config
from cinelaunch import logger as _logger
from cinelaunch.app_state import AppState
from cinelaunch.catalog import CatalogStore
from cinelaunch.errors import EntryFormatError, ValidationError
from cinelaunch.models import Entry, entries_from_payload, entries_to_payload, now_ms

SYNC_PACKAGE_FILENAME: Final[str] = "cinelaunch_master_vault.json"

# Propiedades admitidas cuando el endpoint devuelve un objeto en vez de una lista
PAYLOAD_LIST_KEYS: Final[tuple[str, ...]] = ("entries", "movies")

CACHE_BUST_PARAM: Final[str] = "t"

INVALID_URL_MESSAGE: Final[str] = "La URL de sincronización debe ser http(s)://host/…"


# HTTP session compartida (sin reintentos: el temporizador ya reintenta)
_SESSION: requests.Session | None = None


def _get_session() -> requests.Session:
    global _SESSION
    if _SESSION is None:
        _SESSION = requests.Session()
    return _SESSION


# ============================================================
#                       URLS
# ============================================================


def validate_remote_url(url: str) -> str:
    """
    Normaliza la URL remota. Cadena vacía = sincronización desactivada.
    Lanza ValidationError si no es http/https con host.
    """
    cleaned = (url or "").strip()
    if not cleaned:
        return ""
    parsed = urlparse(cleaned)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ValidationError(INVALID_URL_MESSAGE)
    return cleaned


def cache_busted_url(url: str, token: int) -> str:
    """Añade `t=<token>` a la query (conservando el resto) para evitar cachés intermedias."""
    parsed = urlparse(url)
    query = [(k, v) for k, v in parse_qsl(parsed.query, keep_blank_values=True) if k != CACHE_BUST_PARAM]
    query.append((CACHE_BUST_PARAM, str(token)))
    return urlunparse(parsed._replace(query=urlencode(query)))


# ============================================================
#                       PULL
# ============================================================


def extract_entry_list(data: object) -> list[object] | None:
    """Lista de entradas del payload remoto, o None si la forma no es válida."""
    if isinstance(data, list):
        return data
    if isinstance(data, dict):
        for key in PAYLOAD_LIST_KEYS:
            value = data.get(key)
            if isinstance(value, list):
                return value
    return None


def pull(
    url: str,
    session: requests.Session | None = None,
    now: int | None = None,
) -> list[Entry] | None:
    """
    Descarga la colección remota.

    Devuelve None (sin propagar nada) ante error de red, estado no 2xx, JSON
    inválido, forma inesperada o entradas mal formadas: el llamador debe
    conservar su estado.
    """
    if not url:
        return None

    sess = session or _get_session()
    target = cache_busted_url(url, now_ms() if now is None else now)
    timeout = config.SYNC_TIMEOUT_SECONDS or None

    try:
        resp = sess.get(target, timeout=timeout)
    except requests.RequestException as exc:
        _logger.warning(f"Sync: error de red con {url}: {exc}")
        return None

    if not 200 <= resp.status_code < 300:
        _logger.warning(f"Sync: {url} respondió HTTP {resp.status_code}")
        return None

    try:
        data = resp.json()
    except ValueError as exc:
        _logger.warning(f"Sync: JSON inválido desde {url}: {exc}")
        return None

    items = extract_entry_list(data)
    if items is None:
        _logger.warning(f"Sync: forma de payload inesperada desde {url}")
        return None

    try:
        entries = entries_from_payload(items)
    except EntryFormatError as exc:
        _logger.warning(f"Sync: colección remota no válida: {exc}")
        return None

    _logger.info(f"Sync: {len(entries)} entrada(s) recibidas de {url}")
    return entries


# ============================================================
#                       EXPORT
# ============================================================


def build_sync_package(entries: Iterable[Entry]) -> bytes:
    """JSON indentado con la colección completa, listo para subir a un hosting estático."""
    payload = entries_to_payload(entries)
    return json.dumps(payload, indent=2, ensure_ascii=False).encode("utf-8")


def export_sync_package(entries: Iterable[Entry], directory: str | Path = ".") -> Path:
    """
    Escribe el paquete en `directory`. Exportar no implica que el remoto
    tenga ya esos datos: el admin tiene que subir el fichero a mano.
    """
    target = Path(directory) / SYNC_PACKAGE_FILENAME
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_bytes(build_sync_package(entries))
    _logger.info(f"Paquete de sincronización exportado en {target}")
    return target


# ============================================================
#                    SECUENCIA + PLANIFICADOR
# ============================================================


class SyncOutcome(str, Enum):
    SKIPPED = "skipped"
    FAILED = "failed"
    APPLIED = "applied"
    STALE = "stale"


class PullSequencer:
    """
    Tickets monótonos por petición. Una respuesta solo se aplica si su ticket
    es más nuevo que el último aplicado; así una respuesta lenta no pisa
    datos más recientes.
    """

    def __init__(self) -> None:
        self._issued = 0
        self._applied = 0

    def issue(self) -> int:
        self._issued += 1
        return self._issued

    def accept(self, ticket: int) -> bool:
        if ticket <= self._applied:
            return False
        self._applied = ticket
        return True


PullFn = Callable[[str], list[Entry] | None]


class SyncScheduler:
    """
    Pull al arrancar y después cada `sync_interval_minutes`.

    Solo los Viewer hacen pull; el Admin es el único escritor y nunca
    sobrescribe sus ediciones. Cada pull con éxito reemplaza la colección
    completa aunque no haya cambios.
    """

    def __init__(
        self,
        state: AppState,
        store: CatalogStore,
        pull_fn: PullFn = pull,
        clock: Callable[[], int] = now_ms,
    ) -> None:
        self.state = state
        self.store = store
        self.pull_fn = pull_fn
        self.clock = clock
        self.sequencer = PullSequencer()
        self.last_attempt: int | None = None
        self.last_outcome: SyncOutcome | None = None

    @property
    def interval_ms(self) -> int:
        return int(self.state.sync_interval_minutes * 60_000)

    def can_pull(self) -> bool:
        return not self.state.is_admin and bool(self.state.remote_url)

    def due(self, now: int | None = None) -> bool:
        if not self.can_pull():
            return False
        if self.last_attempt is None:
            return True
        current = self.clock() if now is None else now
        return current - self.last_attempt >= self.interval_ms

    def on_mount(self) -> SyncOutcome:
        return self.run()

    def tick(self, now: int | None = None) -> SyncOutcome:
        if not self.due(now):
            return SyncOutcome.SKIPPED
        return self.run()

    def begin(self) -> tuple[int, str] | None:
        """Reserva ticket para un pull; None si este dispositivo no debe hacer pull."""
        if not self.can_pull():
            return None
        self.last_attempt = self.clock()
        return self.sequencer.issue(), self.state.remote_url

    def complete(self, ticket: int, result: list[Entry] | None) -> SyncOutcome:
        if result is None:
            outcome = SyncOutcome.FAILED
        elif self.state.is_admin:
            # Se pasó a Admin mientras el pull estaba en vuelo
            outcome = SyncOutcome.SKIPPED
        elif not self.sequencer.accept(ticket):
            _logger.info(f"Sync: respuesta #{ticket} descartada por antigua")
            outcome = SyncOutcome.STALE
        else:
            self.store.replace_all(result)
            self.state.mark_synced(self.clock())
            outcome = SyncOutcome.APPLIED

        self.last_outcome = outcome
        return outcome

    def run(self) -> SyncOutcome:
        """
        Pull completo en línea: `begin`, petición y `complete` seguidos.

        Aquí no puede haber otro pull intercalado, así que nunca devuelve STALE;
        el descarte por ticket solo actúa cuando quien llama separa `begin` y
        `complete` (p. ej. lanzando la petición en segundo plano).
        """
        started = self.begin()
        if started is None:
            self.last_outcome = SyncOutcome.SKIPPED
            return SyncOutcome.SKIPPED
        ticket, url = started
        return self.complete(ticket, self.pull_fn(url))
