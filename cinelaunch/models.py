from __future__ import annotations

"""
Entry: elemento del catálogo (enlace externo a un vídeo + metadatos).

La forma JSON (almacenamiento local, paquete de sincronización y endpoint
remoto) usa claves camelCase:

  id, title, externalLink, imageLink, description, language, genre, createdAt

También se aceptan payloads de la variante antigua, de un solo idioma
(youtubeUrl / photoUrl / category, sin language).
"""

import time
import uuid
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, replace
from typing import Final

from cinelaunch.errors import EntryFormatError
from cinelaunch.taxonomy import DEFAULT_LANGUAGE, is_root_language

PLACEHOLDER_IMAGE: Final[str] = "https://placehold.co/400x600/0f172a/94a3b8?text=No+Image"

# Clave nueva → claves antiguas admitidas al leer
_LEGACY_ALIASES: Final[dict[str, tuple[str, ...]]] = {
    "externalLink": ("youtubeUrl",),
    "imageLink": ("photoUrl",),
    "genre": ("category",),
}


def now_ms() -> int:
    """Epoch actual en milisegundos."""
    return int(time.time() * 1000)


def _pick(data: Mapping[str, object], key: str) -> object:
    if key in data:
        return data.get(key)
    for alias in _LEGACY_ALIASES.get(key, ()):
        if alias in data:
            return data.get(alias)
    return None


def _required_str(data: Mapping[str, object], key: str) -> str:
    value = _pick(data, key)
    if not isinstance(value, str) or not value.strip():
        raise EntryFormatError(f"campo {key!r} ausente o vacío")
    return value


def _optional_str(data: Mapping[str, object], key: str) -> str:
    value = _pick(data, key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise EntryFormatError(f"campo {key!r} debe ser texto")
    return value


@dataclass(frozen=True, slots=True)
class Entry:
    """
    Elemento del catálogo.

    - `id` y `created_at` se fijan al crear y no cambian nunca.
    - `image_link` vacío → se muestra PLACEHOLDER_IMAGE.
    - `genre` puede ser un género por defecto o un texto libre.
    """

    id: str
    title: str
    external_link: str
    image_link: str
    description: str
    language: str
    genre: str
    created_at: int

    @classmethod
    def create(
        cls,
        *,
        title: str,
        external_link: str,
        language: str,
        genre: str,
        image_link: str = "",
        description: str = "",
        created_at: int | None = None,
    ) -> "Entry":
        return cls(
            id=str(uuid.uuid4()),
            title=title,
            external_link=external_link,
            image_link=image_link,
            description=description,
            language=language,
            genre=genre,
            created_at=now_ms() if created_at is None else created_at,
        )

    def with_changes(self, **changes: object) -> "Entry":
        """Copia editada; `id` y `created_at` se ignoran si vienen en `changes`."""
        changes.pop("id", None)
        changes.pop("created_at", None)
        return replace(self, **changes)  # type: ignore[arg-type]

    def thumbnail(self) -> str:
        return self.image_link or PLACEHOLDER_IMAGE

    def matches_text(self, needle: str) -> bool:
        """Búsqueda insensible a mayúsculas en título y descripción."""
        n = needle.lower()
        return n in self.title.lower() or n in self.description.lower()

    def to_dict(self) -> dict[str, object]:
        return {
            "id": self.id,
            "title": self.title,
            "externalLink": self.external_link,
            "imageLink": self.image_link,
            "description": self.description,
            "language": self.language,
            "genre": self.genre,
            "createdAt": self.created_at,
        }

    @classmethod
    def from_dict(cls, data: object) -> "Entry":
        """
        Construye una Entry desde su forma JSON.

        Lanza EntryFormatError si el payload no es un objeto, faltan
        id/title/externalLink, algún campo tiene tipo incorrecto o el idioma
        no pertenece al conjunto raíz.
        """
        if not isinstance(data, Mapping):
            raise EntryFormatError(f"se esperaba un objeto, llegó {type(data).__name__}")

        entry_id = _required_str(data, "id")
        title = _required_str(data, "title")
        external_link = _required_str(data, "externalLink")
        image_link = _optional_str(data, "imageLink")
        description = _optional_str(data, "description")

        language_raw = data.get("language")
        if language_raw is None:
            language = DEFAULT_LANGUAGE
        elif is_root_language(language_raw):
            language = str(language_raw)
        else:
            raise EntryFormatError(f"idioma desconocido: {language_raw!r}")

        genre = _optional_str(data, "genre").strip() or "Other"

        created_raw = data.get("createdAt", 0)
        if isinstance(created_raw, bool) or not isinstance(created_raw, (int, float)):
            raise EntryFormatError(f"createdAt no numérico: {created_raw!r}")

        return cls(
            id=entry_id,
            title=title,
            external_link=external_link,
            image_link=image_link,
            description=description,
            language=language,
            genre=genre,
            created_at=int(created_raw),
        )


def entries_from_payload(payload: object) -> list[Entry]:
    """
    Convierte una lista JSON en entradas.

    Todo o nada: si un elemento es inválido se lanza EntryFormatError y no se
    devuelve una colección parcial.
    """
    if not isinstance(payload, list):
        raise EntryFormatError("se esperaba una lista de entradas")

    entries: list[Entry] = []
    for idx, item in enumerate(payload):
        try:
            entries.append(Entry.from_dict(item))
        except EntryFormatError as exc:
            raise EntryFormatError(f"entrada #{idx}: {exc}") from exc

    if not has_unique_ids(entries):
        raise EntryFormatError("ids duplicados en la colección")
    return entries


def entries_to_payload(entries: Iterable[Entry]) -> list[dict[str, object]]:
    return [e.to_dict() for e in entries]


def has_unique_ids(entries: Iterable[Entry]) -> bool:
    ids = [e.id for e in entries]
    return len(ids) == len(set(ids))
