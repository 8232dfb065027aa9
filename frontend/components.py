from __future__ import annotations

from typing import Any, Dict, Literal, Mapping, Optional

import pandas as pd
import streamlit as st
from st_aggrid import AgGrid, GridOptionsBuilder

from cinelaunch.models import PLACEHOLDER_IMAGE
from cinelaunch.taxonomy import language_label

CardAction = Literal["edit", "delete"]


# -------------------------------------------------------------------
# Tabla principal con selección de fila
# -------------------------------------------------------------------


def _normalize_selected_rows(selected_raw: Any) -> list[Mapping[str, Any]]:
    """Normaliza el objeto devuelto por AgGrid a una lista de mappings."""
    if selected_raw is None:
        return []

    if isinstance(selected_raw, pd.DataFrame):
        return selected_raw.to_dict(orient="records")

    if isinstance(selected_raw, (list, tuple)):
        return [r for r in selected_raw if isinstance(r, Mapping)]

    if isinstance(selected_raw, Mapping):
        return [selected_raw]

    return []


def aggrid_with_row_click(df: pd.DataFrame, key_suffix: str) -> Optional[Dict[str, Any]]:
    """
    Muestra un AgGrid con selección de una sola fila.
    Devuelve un dict con los valores de la fila seleccionada o None.
    """
    if df.empty:
        st.info("No hay entradas para mostrar.")
        return None

    visible_cols = [c for c in ("title", "language", "genre_label", "added") if c in df.columns]

    gb = GridOptionsBuilder.from_dataframe(df)
    gb.configure_selection(selection_mode="single", use_checkbox=False)
    gb.configure_grid_options(domLayout="normal")
    gb.configure_column("title", header_name="Título")
    gb.configure_column("language", header_name="Idioma")
    gb.configure_column("genre_label", header_name="Género")
    gb.configure_column("added", header_name="Añadido")

    for col in df.columns:
        if col not in visible_cols:
            gb.configure_column(col, hide=True)

    grid_options = gb.build()
    grid_options["autoSizeStrategy"] = {"type": "fitGridWidth"}

    grid_response = AgGrid(
        df,
        gridOptions=grid_options,
        update_on=["selectionChanged"],
        enable_enterprise_modules=False,
        height=520,
        key=f"aggrid_{key_suffix}",
    )

    selected_rows = _normalize_selected_rows(grid_response.get("selected_rows"))
    if not selected_rows:
        return None
    return dict(selected_rows[0])


# -------------------------------------------------------------------
# Ficha de una entrada
# -------------------------------------------------------------------


def _is_nonempty_str(value: Any) -> bool:
    if value is None:
        return False
    s = str(value).strip()
    return bool(s) and s.lower() not in ("nan", "none")


def render_detail_card(
    row: Mapping[str, Any] | None,
    *,
    is_admin: bool,
    key_prefix: str = "detail",
) -> CardAction | None:
    """
    Ficha de la entrada seleccionada.

    El enlace externo lo abre el navegador (link_button); editar y borrar solo
    aparecen en modo Admin. Devuelve la acción pulsada, si la hay.
    """
    if row is None:
        st.info("Haz click en una fila para ver su detalle.")
        return None

    image = row.get("image_link")
    st.image(image if _is_nonempty_str(image) else PLACEHOLDER_IMAGE, width=280)

    st.markdown(f"### {row.get('title', '¿Sin título?')}")
    language = str(row.get("language") or "")
    st.write(f"**Idioma:** {language_label(language)}  ·  **Género:** {row.get('genre_label') or row.get('genre')}")
    if _is_nonempty_str(row.get("added")):
        st.caption(f"Añadido: {row.get('added')}")

    description = row.get("description")
    if _is_nonempty_str(description):
        st.write(str(description))

    link = row.get("external_link")
    if _is_nonempty_str(link):
        st.link_button("▶ Abrir", str(link))

    if not is_admin:
        return None

    entry_id = row.get("id")
    col_edit, col_delete = st.columns(2)
    with col_edit:
        if st.button("✏️ Editar", key=f"{key_prefix}_edit_{entry_id}"):
            return "edit"
    with col_delete:
        if st.button("🗑 Borrar", key=f"{key_prefix}_delete_{entry_id}"):
            return "delete"
    return None
