from __future__ import annotations

"""
Taxonomía de dos niveles: idioma raíz → género → etiqueta localizada.

Los géneros por defecto son los mismos para todos los idiomas. El vocabulario
crece con los géneros libres (escritos por el usuario o sugeridos por la IA):
una vez introducido, un género queda en el vocabulario de su idioma aunque se
borren todas las entradas que lo usan. Se guardan en inglés sin traducción.
"""

from collections.abc import Iterable, Mapping, MutableMapping, Sequence
from typing import TYPE_CHECKING, Final, Optional

if TYPE_CHECKING:
    from cinelaunch.models import Entry


ALL: Final[str] = "All"

# idioma → géneros libres en orden de alta
Vocabulary = Mapping[str, Sequence[str]]

ROOT_LANGUAGES: Final[tuple[str, ...]] = ("English", "Chinese", "Malay", "India")

DEFAULT_LANGUAGE: Final[str] = "English"

DEFAULT_GENRES: Final[tuple[str, ...]] = (
    "Action",
    "Comedy",
    "Drama",
    "Sci-Fi",
    "Horror",
    "Documentary",
    "Animation",
    "Other",
)

FALLBACK_GENRE: Final[str] = "Other"

GENRE_LABELS: Final[dict[str, dict[str, str]]] = {
    "English": {g: g for g in DEFAULT_GENRES},
    "Chinese": {
        "Action": "动作",
        "Comedy": "喜剧",
        "Drama": "剧情",
        "Sci-Fi": "科幻",
        "Horror": "恐怖",
        "Documentary": "纪录片",
        "Animation": "动画",
        "Other": "其他",
    },
    "Malay": {
        "Action": "Aksi",
        "Comedy": "Komedi",
        "Drama": "Drama",
        "Sci-Fi": "Sains Fiksyen",
        "Horror": "Seram",
        "Documentary": "Dokumentari",
        "Animation": "Animasi",
        "Other": "Lain-lain",
    },
    "India": {
        "Action": "एक्शन",
        "Comedy": "कॉमेडी",
        "Drama": "ड्रामा",
        "Sci-Fi": "साइंस फिक्शन",
        "Horror": "हॉरर",
        "Documentary": "डॉक्यूमेंट्री",
        "Animation": "एनिमेशन",
        "Other": "अन्य",
    },
}

LANGUAGE_LABELS: Final[dict[str, str]] = {
    "English": "English",
    "Chinese": "中文",
    "Malay": "Bahasa Melayu",
    "India": "हिन्दी",
}


def is_root_language(value: object) -> bool:
    return isinstance(value, str) and value in ROOT_LANGUAGES


def _merge_unique(base: Iterable[str], extra: Iterable[str]) -> list[str]:
    """Une dos secuencias respetando el orden de primera aparición."""
    seen: set[str] = set()
    out: list[str] = []
    for g in list(base) + list(extra):
        if not g or g in seen:
            continue
        seen.add(g)
        out.append(g)
    return out


def genres_for(
    language: str,
    entries: Iterable["Entry"],
    vocabulary: Optional[Vocabulary] = None,
) -> list[str]:
    """
    Géneros disponibles para un idioma.

    Orden: géneros por defecto, géneros ya conocidos del idioma (`vocabulary`)
    y, por último, géneros libres de las entradas que aún no estuvieran.
    """
    known = (vocabulary or {}).get(language, ())
    custom = (e.genre for e in entries if e.language == language)
    return _merge_unique(DEFAULT_GENRES, [*known, *custom])


def all_genres(
    entries: Iterable["Entry"],
    vocabulary: Optional[Vocabulary] = None,
) -> list[str]:
    """Vocabulario completo (todos los idiomas); se usa como pista para la IA."""
    known = [g for genres in (vocabulary or {}).values() for g in genres]
    return _merge_unique(DEFAULT_GENRES, [*known, *(e.genre for e in entries)])


def remember_genres(
    vocabulary: MutableMapping[str, list[str]],
    entries: Iterable["Entry"],
) -> bool:
    """
    Añade al vocabulario los géneros libres de `entries` (solo crece).
    Devuelve True si ha cambiado algo.
    """
    changed = False
    for e in entries:
        if not e.genre or e.genre in DEFAULT_GENRES:
            continue
        known = vocabulary.setdefault(e.language, [])
        if e.genre not in known:
            known.append(e.genre)
            changed = True
    return changed


def label(language: str, genre: str) -> str:
    """Etiqueta localizada del género; si no hay traducción devuelve la clave."""
    return GENRE_LABELS.get(language, {}).get(genre, genre)


def language_label(language: str) -> str:
    return LANGUAGE_LABELS.get(language, language)
