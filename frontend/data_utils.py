from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime

import altair as alt
import pandas as pd

from cinelaunch.models import Entry
from cinelaunch.taxonomy import ROOT_LANGUAGES, label

# Columnas del DataFrame del catálogo, en orden de presentación
ENTRY_COLUMNS: tuple[str, ...] = (
    "title",
    "language",
    "genre",
    "genre_label",
    "added",
    "description",
    "external_link",
    "image_link",
    "id",
    "created_at",
)


# -------------------------------------------------------------------
# Entradas → DataFrame
# -------------------------------------------------------------------


def format_created_at(created_at_ms: object) -> str | None:
    """Epoch en ms → 'YYYY-MM-DD HH:MM' (hora local); None si no es válido o es 0."""
    try:
        value = int(created_at_ms)  # type: ignore[call-overload]
    except (TypeError, ValueError):
        return None
    if value <= 0:
        return None
    try:
        return datetime.fromtimestamp(value / 1000).strftime("%Y-%m-%d %H:%M")
    except (OverflowError, OSError, ValueError):
        return None


def entries_to_dataframe(entries: Iterable[Entry]) -> pd.DataFrame:
    """Convierte la colección en un DataFrame conservando el orden del catálogo."""
    rows = [
        {
            "title": e.title,
            "language": e.language,
            "genre": e.genre,
            "genre_label": label(e.language, e.genre),
            "added": format_created_at(e.created_at),
            "description": e.description,
            "external_link": e.external_link,
            "image_link": e.thumbnail(),
            "id": e.id,
            "created_at": e.created_at,
        }
        for e in entries
    ]
    return pd.DataFrame(rows, columns=list(ENTRY_COLUMNS))


# -------------------------------------------------------------------
# Agregados para gráficos
# -------------------------------------------------------------------


def count_by(df: pd.DataFrame, cols: list[str]) -> pd.DataFrame:
    """Número de entradas por combinación de columnas (columna `count`)."""
    if df.empty:
        return pd.DataFrame(columns=[*cols, "count"])
    return (
        df.groupby(cols, dropna=False)["id"]
        .count()
        .reset_index()
        .rename(columns={"id": "count"})
        .sort_values(by="count", ascending=False, ignore_index=True)
    )


def language_color(field: str = "language") -> alt.Color:
    """Escala de color fija por idioma raíz para que coincida entre gráficos."""
    palette = ["#38bdf8", "#f97316", "#22c55e", "#a855f7"]
    return alt.Color(
        f"{field}:N",
        title="Idioma",
        scale=alt.Scale(domain=list(ROOT_LANGUAGES), range=palette),
    )


def format_count(count: int, noun: str = "entrada") -> str:
    return f"{count:,} {noun}{'' if count == 1 else 's'}"
