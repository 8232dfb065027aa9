from __future__ import annotations

from typing import Final

import altair as alt
import pandas as pd
import streamlit as st

from frontend.data_utils import count_by, language_color

VIEW_OPTIONS: Final[list[str]] = [
    "Entradas por idioma",
    "Entradas por género",
    "Géneros por idioma",
]


def _chart(chart: alt.Chart) -> None:
    """Wrapper para mostrar gráficos siempre a ancho completo."""
    st.altair_chart(chart, width="stretch")


def build_chart(df: pd.DataFrame, view: str) -> alt.Chart | None:
    """Construye el gráfico de la vista elegida; None si no hay datos."""
    if df.empty:
        return None

    if view == "Entradas por idioma":
        agg = count_by(df, ["language"])
        return (
            alt.Chart(agg)
            .mark_bar()
            .encode(
                x=alt.X("language:N", title="Idioma", sort="-y"),
                y=alt.Y("count:Q", title="Entradas"),
                color=language_color(),
                tooltip=["language", "count"],
            )
        )

    if view == "Entradas por género":
        agg = count_by(df, ["genre"])
        return (
            alt.Chart(agg)
            .mark_bar()
            .encode(
                x=alt.X("count:Q", title="Entradas"),
                y=alt.Y("genre:N", title="Género", sort="-x"),
                tooltip=["genre", "count"],
            )
        )

    if view == "Géneros por idioma":
        agg = count_by(df, ["language", "genre"])
        return (
            alt.Chart(agg)
            .mark_bar()
            .encode(
                x=alt.X("genre:N", title="Género"),
                y=alt.Y("count:Q", title="Entradas", stack=True),
                color=language_color(),
                tooltip=["language", "genre", "count"],
            )
        )

    return None


def render(df_all: pd.DataFrame) -> None:
    """Pestaña 4: Gráficos."""
    st.write("### Gráficos")

    if df_all.empty:
        st.info("No hay datos para mostrar gráficos.")
        return

    view = st.selectbox("Vista", VIEW_OPTIONS)
    chart = build_chart(df_all, view)
    if chart is None:
        st.info("No hay datos para esta vista.")
        return
    _chart(chart)
