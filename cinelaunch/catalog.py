from __future__ import annotations

import webbrowser
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from typing import Final

from cinelaunch import logger as _logger
from cinelaunch.errors import ValidationError
from cinelaunch.models import Entry
from cinelaunch.role_gate import RoleGate
from cinelaunch.storage import (
    KeyValueStore,
    load_entries,
    load_genre_vocabulary,
    save_entries,
    save_genre_vocabulary,
)
from cinelaunch.taxonomy import (
    ALL,
    DEFAULT_LANGUAGE,
    FALLBACK_GENRE,
    all_genres,
    genres_for,
    is_root_language,
    remember_genres,
)

REQUIRED_FIELDS_MESSAGE: Final[str] = "El título y el enlace externo son obligatorios."


# ============================================================
#                       CATALOG STORE
# ============================================================


class CatalogStore:
    """
    Colección ordenada de entradas, fuente única de verdad de la UI.

    - Las altas se insertan al principio; las ediciones conservan posición.
    - Cada mutación se escribe inmediatamente en el almacén (sin batching).
    - Los géneros libres que entran en la colección quedan en el vocabulario
      aunque luego se borren las entradas o llegue un pull sin ellas.
    """

    def __init__(
        self,
        storage: KeyValueStore,
        entries: Iterable[Entry] = (),
        vocabulary: Mapping[str, Iterable[str]] | None = None,
    ) -> None:
        self.storage = storage
        self._entries: list[Entry] = list(entries)
        self._vocabulary: dict[str, list[str]] = {
            language: list(genres) for language, genres in (vocabulary or {}).items()
        }
        self._remember(self._entries)

    @classmethod
    def load(cls, storage: KeyValueStore) -> "CatalogStore":
        entries = load_entries(storage)
        _logger.info(f"Catálogo cargado con {len(entries)} entrada(s)")
        return cls(storage, entries, load_genre_vocabulary(storage))

    @property
    def entries(self) -> list[Entry]:
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, entry_id: str) -> Entry | None:
        for e in self._entries:
            if e.id == entry_id:
                return e
        return None

    # ---------------- Vocabulario de géneros ----------------

    @property
    def vocabulary(self) -> dict[str, list[str]]:
        return {language: list(genres) for language, genres in self._vocabulary.items()}

    def genres_for(self, language: str) -> list[str]:
        return genres_for(language, self._entries, self._vocabulary)

    def all_genres(self) -> list[str]:
        return all_genres(self._entries, self._vocabulary)

    def _remember(self, entries: Iterable[Entry]) -> None:
        if remember_genres(self._vocabulary, entries):
            save_genre_vocabulary(self.storage, self._vocabulary)

    def _persist(self) -> bool:
        ok = save_entries(self.storage, self._entries)
        if not ok:
            _logger.warning("Catálogo no persistido; los cambios solo duran esta sesión")
        return ok

    def upsert(self, entry: Entry) -> None:
        for idx, existing in enumerate(self._entries):
            if existing.id == entry.id:
                self._entries[idx] = entry
                break
        else:
            self._entries.insert(0, entry)
        self._persist()
        self._remember([entry])

    def remove(self, entry_id: str) -> bool:
        """Quita la entrada; si no existe no hace nada y devuelve False."""
        remaining = [e for e in self._entries if e.id != entry_id]
        if len(remaining) == len(self._entries):
            return False
        self._entries = remaining
        self._persist()
        return True

    def replace_all(self, entries: Iterable[Entry]) -> None:
        """Sobrescritura completa (solo tras un pull remoto válido)."""
        self._entries = list(entries)
        self._persist()
        self._remember(self._entries)

    def filter(self, language: str = ALL, genre: str = ALL, search: str = "") -> list[Entry]:
        """
        Subconjunto visible; no modifica la colección.

        `All` actúa de comodín para idioma y género. La búsqueda es una
        subcadena sin distinguir mayúsculas sobre título y descripción.
        """
        needle = search.strip()
        out: list[Entry] = []
        for e in self._entries:
            if language != ALL and e.language != language:
                continue
            if genre != ALL and e.genre != genre:
                continue
            if needle and not e.matches_text(needle):
                continue
            out.append(e)
        return out


# ============================================================
#                    FORMULARIO / VALIDACIÓN
# ============================================================


@dataclass(slots=True)
class EntryForm:
    """Valores tal y como llegan del formulario de alta/edición."""

    title: str = ""
    external_link: str = ""
    image_link: str = ""
    description: str = ""
    language: str = DEFAULT_LANGUAGE
    genre: str = FALLBACK_GENRE
    new_genre: bool = False
    custom_genre: str = ""

    @classmethod
    def from_entry(cls, entry: Entry) -> "EntryForm":
        return cls(
            title=entry.title,
            external_link=entry.external_link,
            image_link=entry.image_link,
            description=entry.description,
            language=entry.language,
            genre=entry.genre,
        )

    def final_genre(self) -> str:
        if self.new_genre:
            return self.custom_genre.strip() or FALLBACK_GENRE
        return self.genre.strip() or FALLBACK_GENRE


def build_entry(form: EntryForm, existing: Entry | None = None) -> Entry:
    """
    Valida el formulario y construye la Entry.

    Lanza ValidationError sin tocar nada si falta título o enlace o el idioma
    no es uno de los idiomas raíz. Al editar se conservan id y createdAt.
    """
    title = form.title.strip()
    link = form.external_link.strip()
    if not title or not link:
        raise ValidationError(REQUIRED_FIELDS_MESSAGE)
    if not is_root_language(form.language):
        raise ValidationError(f"Idioma no válido: {form.language!r}.")

    fields = {
        "title": title,
        "external_link": link,
        "image_link": form.image_link.strip(),
        "description": form.description.strip(),
        "language": form.language,
        "genre": form.final_genre(),
    }
    if existing is not None:
        return existing.with_changes(**fields)
    return Entry.create(**fields)


# ============================================================
#                  SERVICIO (con puerta de rol)
# ============================================================


class CatalogService:
    """Operaciones de escritura del catálogo, todas restringidas al modo Admin."""

    def __init__(self, store: CatalogStore, gate: RoleGate) -> None:
        self.store = store
        self.gate = gate

    def save(self, form: EntryForm, editing_id: str | None = None) -> Entry:
        """
        Alta (editing_id=None) o edición de una entrada.

        Lanza PermissionDeniedError en modo Viewer y ValidationError si el
        formulario no es válido; en ambos casos la colección no cambia.
        """
        self.gate.require_admin()

        existing = None
        if editing_id is not None:
            existing = self.store.get(editing_id)
            if existing is None:
                raise ValidationError("La entrada que se editaba ya no existe.")

        entry = build_entry(form, existing)
        self.store.upsert(entry)
        _logger.info(f"Entrada guardada: {entry.title!r} ({entry.id})")
        return entry

    def delete(self, entry_id: str) -> bool:
        self.gate.require_admin()
        removed = self.store.remove(entry_id)
        if removed:
            _logger.info(f"Entrada borrada: {entry_id}")
        return removed

    def launch(
        self,
        entry_id: str,
        opener: Callable[[str], object] = webbrowser.open,
    ) -> bool:
        """Abre el enlace externo con la facilidad del sistema. Permitido a cualquier rol."""
        entry = self.store.get(entry_id)
        if entry is None:
            return False
        opener(entry.external_link)
        return True
