from __future__ import annotations

"""
Colaborador externo de IA: a partir de un enlace o un título propone
título, descripción, idioma y género.

La respuesta del modelo se valida de forma estricta; cualquier desviación de
la forma esperada se trata como "no disponible" (None). El alta manual nunca
depende de este módulo.
"""

import json
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Final

from cinelaunch import config
from cinelaunch import logger as _logger
from cinelaunch.catalog import EntryForm
from cinelaunch.taxonomy import ROOT_LANGUAGES, is_root_language

UNAVAILABLE_MESSAGE: Final[str] = "La IA no ha podido obtener los datos."
MISSING_INPUT_MESSAGE: Final[str] = "Indica un enlace o un título para la IA."

_FIELDS: Final[tuple[str, ...]] = ("title", "description", "language", "genre")


@dataclass(frozen=True, slots=True)
class AIGuess:
    title: str
    description: str
    language: str
    genre: str


def build_prompt(text: str, genres: Sequence[str]) -> str:
    return (
        f'Extract video details from this input: "{text}".\n'
        "If it is a URL, try to identify what the video is about. "
        "If it is just a title, write a short professional description.\n"
        f"Pick the language from: {', '.join(ROOT_LANGUAGES)}.\n"
        f"Suggest a genre. Prefer one of these if it fits: {', '.join(genres)}; "
        "otherwise suggest a new single-word genre in English.\n"
        'Answer only with a JSON object with the keys "title", "description", '
        '"language" and "genre".'
    )


def parse_ai_response(raw: object) -> AIGuess | None:
    """
    Valida la respuesta del modelo (texto JSON o dict ya parseado).

    Exige un objeto con las cuatro claves como texto no vacío y un idioma
    raíz válido. Nunca se acepta un payload parcial.
    """
    data: object = raw
    if isinstance(raw, (str, bytes)):
        try:
            data = json.loads(raw)
        except ValueError:
            return None

    if not isinstance(data, dict):
        return None

    values: dict[str, str] = {}
    for key in _FIELDS:
        value = data.get(key)
        if not isinstance(value, str) or not value.strip():
            return None
        values[key] = value.strip()

    if not is_root_language(values["language"]):
        return None

    return AIGuess(**values)


def _default_client() -> Any | None:
    if not config.OPENAI_API_KEY:
        _logger.info("OPENAI_API_KEY no definido; relleno con IA desactivado")
        return None
    from openai import OpenAI  # import local: el SDK solo hace falta si hay clave

    return OpenAI(api_key=config.OPENAI_API_KEY)


def suggest_metadata(
    text: str,
    genres: Sequence[str],
    client: Any | None = None,
) -> AIGuess | None:
    """Pide la sugerencia al modelo. Cualquier fallo → None (logueado)."""
    cleaned = (text or "").strip()
    if not cleaned:
        return None

    try:
        llm = client if client is not None else _default_client()
        if llm is None:
            return None

        response = llm.chat.completions.create(
            model=config.AI_MODEL,
            temperature=config.AI_TEMPERATURE,
            response_format={"type": "json_object"},
            messages=[
                {"role": "system", "content": "You catalogue videos for a personal library."},
                {"role": "user", "content": build_prompt(cleaned, genres)},
            ],
        )
        content = response.choices[0].message.content
    except Exception as exc:
        _logger.warning(f"IA: error obteniendo metadatos: {exc}")
        return None

    guess = parse_ai_response(content or "")
    if guess is None:
        _logger.warning("IA: respuesta con forma inesperada, se descarta")
    return guess


def merge_guess(form: EntryForm, guess: AIGuess, known_genres: Sequence[str]) -> EntryForm:
    """
    Vuelca la sugerencia sobre el formulario. Si el género no está en el
    vocabulario conocido, el formulario pasa a modo "género nuevo".
    """
    form.title = guess.title or form.title
    form.description = guess.description or form.description
    form.language = guess.language
    if guess.genre in known_genres:
        form.genre = guess.genre
        form.new_genre = False
        form.custom_genre = ""
    else:
        form.new_genre = True
        form.custom_genre = guess.genre
    return form
