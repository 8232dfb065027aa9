from __future__ import annotations

from typing import Final

import streamlit as st

from cinelaunch.app import App
from cinelaunch.errors import CineLaunchError
from cinelaunch.catalog import CatalogStore
from cinelaunch.taxonomy import ALL, ROOT_LANGUAGES, label, language_label
from frontend.components import aggrid_with_row_click, render_detail_card
from frontend.data_utils import entries_to_dataframe, format_count

TITLE_TEXT: Final[str] = "### Biblioteca"


def genre_options(language: str, store: CatalogStore) -> list[str]:
    """Opciones del filtro de género: `All` + vocabulario del idioma (o de todos)."""
    if language == ALL:
        return [ALL, *store.all_genres()]
    return [ALL, *store.genres_for(language)]


def render(app: App) -> None:
    """Pestaña 1: catálogo filtrable con ficha de detalle."""
    st.write(TITLE_TEXT)

    entries = app.store.entries
    if not entries:
        st.info("El catálogo está vacío. Añade una entrada (modo Admin) o sincroniza.")
        return

    col_lang, col_genre, col_search = st.columns([1, 1, 2])
    with col_lang:
        language = st.selectbox(
            "Idioma",
            [ALL, *ROOT_LANGUAGES],
            format_func=lambda v: "Todos" if v == ALL else language_label(v),
            key="filter_language",
        )
    with col_genre:
        genre = st.selectbox(
            "Género",
            genre_options(language, app.store),
            format_func=lambda g: "Todos" if g == ALL else label(language, g),
            key="filter_genre",
        )
    with col_search:
        search = st.text_input("Buscar en título o descripción", key="filter_search")

    visible = app.store.filter(language=language, genre=genre, search=search)
    st.caption(format_count(len(visible)))

    if not visible:
        st.info("No hay nada con esos filtros.")
        return

    col_grid, col_detail = st.columns([2, 1])

    with col_grid:
        selected_row = aggrid_with_row_click(entries_to_dataframe(visible), "library")

    with col_detail:
        action = render_detail_card(selected_row, is_admin=app.gate.is_admin, key_prefix="library")

    if selected_row is None or action is None:
        return

    entry_id = str(selected_row.get("id"))
    if action == "edit":
        st.session_state["editing_id"] = entry_id
        st.info("Entrada cargada en la pestaña «Editor».")
    elif action == "delete":
        try:
            app.service.delete(entry_id)
        except CineLaunchError as exc:
            st.error(str(exc))
            return
        st.rerun()
