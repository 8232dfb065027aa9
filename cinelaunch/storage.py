from __future__ import annotations

import json
import os
import re
import tempfile
from pathlib import Path
from typing import Final

from cinelaunch import logger as _logger
from cinelaunch.errors import EntryFormatError
from cinelaunch.models import Entry, entries_from_payload, entries_to_payload
from cinelaunch.taxonomy import DEFAULT_GENRES, DEFAULT_LANGUAGE, Vocabulary, is_root_language

# ============================================================
#                 CLAVES DE ALMACENAMIENTO
# ============================================================

ENTRIES_KEY: Final[str] = "cinelaunch_movies"
# Lista plana de la variante antigua (un solo idioma); solo se lee
CATEGORIES_KEY: Final[str] = "cinelaunch_categories"
# Vocabulario de géneros libres por idioma: {"Malay": ["Wuxia"], ...}
GENRES_KEY: Final[str] = "cinelaunch_genres"
REMOTE_URL_KEY: Final[str] = "cinelaunch_remote_url"
ADMIN_KEY: Final[str] = "cinelaunch_is_admin"

_KEY_RE = re.compile(r"^[A-Za-z0-9_.-]+$")


class KeyValueStore:
    """
    Almacén clave → valor JSON, un fichero por clave dentro de `base_dir`.

    - Cada escritura reemplaza el valor completo (sin merges parciales).
    - Las escrituras son atómicas (fichero temporal + os.replace).
    - Un valor corrupto se trata como ausente y se deja en disco tal cual.
    """

    def __init__(self, base_dir: str | os.PathLike[str]) -> None:
        self.base_dir = Path(base_dir)

    def path_for(self, key: str) -> Path:
        if not _KEY_RE.match(key):
            raise ValueError(f"clave de almacenamiento no válida: {key!r}")
        return self.base_dir / f"{key}.json"

    def load(self, key: str) -> object | None:
        """Devuelve el valor deserializado o None si no existe o no se puede leer."""
        path = self.path_for(key)
        if not path.exists():
            return None

        try:
            with path.open("r", encoding="utf-8") as f:
                return json.load(f)
        except Exception as exc:
            _logger.warning(f"Error leyendo {path}, se ignora el valor guardado: {exc}")
            return None

    def save(self, key: str, value: object) -> bool:
        """Escribe el valor de forma atómica. Devuelve False (y loguea) si falla."""
        path = self.path_for(key)
        try:
            self.base_dir.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                delete=False,
                dir=str(self.base_dir),
                prefix=f".{key}.",
                suffix=".tmp",
            ) as tf:
                json.dump(value, tf, ensure_ascii=False)
                temp_name = tf.name
            os.replace(temp_name, str(path))
            return True
        except Exception as exc:
            _logger.error(f"Error guardando {key!r} en {path}: {exc}")
            return False

    def delete(self, key: str) -> None:
        path = self.path_for(key)
        try:
            path.unlink()
        except FileNotFoundError:
            pass


# ============================================================
#                 COLECCIÓN DE ENTRADAS
# ============================================================


def load_entries(store: KeyValueStore) -> list[Entry]:
    """
    Lee la colección persistida.

    Sin datos, JSON roto o entradas mal formadas → lista vacía (logueado).
    """
    raw = store.load(ENTRIES_KEY)
    if raw is None:
        return []

    try:
        return entries_from_payload(raw)
    except EntryFormatError as exc:
        _logger.warning(f"Colección guardada no válida, se empieza vacía: {exc}")
        return []


def save_entries(store: KeyValueStore, entries: list[Entry]) -> bool:
    return store.save(ENTRIES_KEY, entries_to_payload(entries))


def load_legacy_categories(store: KeyValueStore) -> list[str]:
    """
    Categorías guardadas por la variante antigua, siempre detrás de las
    categorías por defecto y sin duplicados.
    """
    merged: list[str] = list(DEFAULT_GENRES)
    raw = store.load(CATEGORIES_KEY)
    if not isinstance(raw, list):
        return merged

    for item in raw:
        if isinstance(item, str) and item.strip() and item not in merged:
            merged.append(item)
    return merged


# ============================================================
#                 VOCABULARIO DE GÉNEROS
# ============================================================


def load_genre_vocabulary(store: KeyValueStore) -> dict[str, list[str]]:
    """
    Géneros libres conocidos por idioma.

    Las categorías de la variante antigua se asignan al idioma por defecto,
    que era el único que existía. Idiomas o valores no válidos se ignoran.
    """
    vocabulary: dict[str, list[str]] = {}
    raw = store.load(GENRES_KEY)
    if isinstance(raw, dict):
        for language, genres in raw.items():
            if not is_root_language(language) or not isinstance(genres, list):
                continue
            known: list[str] = []
            for g in genres:
                if isinstance(g, str) and g.strip() and g not in DEFAULT_GENRES and g not in known:
                    known.append(g)
            vocabulary[language] = known

    legacy = load_legacy_categories(store)[len(DEFAULT_GENRES):]
    if legacy:
        known = vocabulary.setdefault(DEFAULT_LANGUAGE, [])
        known.extend(g for g in legacy if g not in known)
    return vocabulary


def save_genre_vocabulary(store: KeyValueStore, vocabulary: Vocabulary) -> bool:
    return store.save(GENRES_KEY, {language: list(genres) for language, genres in vocabulary.items()})
