from __future__ import annotations

from datetime import timedelta
from typing import Any, MutableMapping

import streamlit as st

from cinelaunch import logger as _logger
from cinelaunch.app import App, build_app
from cinelaunch.sync_client import SyncOutcome
from frontend.data_utils import entries_to_dataframe
from frontend.tabs import charts, editor, library, sync

APP_KEY = "cinelaunch_app"
MOUNTED_KEY = "cinelaunch_mounted"


# ============================================================
# Helpers
# ============================================================


def _init_state(state: MutableMapping[str, Any]) -> None:
    """Inicializa claves de estado global de la sesión."""
    if "editing_id" not in state:
        state["editing_id"] = None


def get_app(state: MutableMapping[str, Any]) -> App:
    """Un App por sesión de Streamlit (se reconstruye solo si falta)."""
    app = state.get(APP_KEY)
    if app is None:
        app = build_app()
        state[APP_KEY] = app
    return app


def mount_sync(app: App, state: MutableMapping[str, Any]) -> SyncOutcome | None:
    """Pull inmediato la primera vez que se pinta la sesión."""
    if state.get(MOUNTED_KEY):
        return None
    state[MOUNTED_KEY] = True
    outcome = app.scheduler.on_mount()
    _logger.debug(f"Sync al arrancar: {outcome.value}")
    return outcome


def _hide_streamlit_chrome() -> None:
    """Esconde cabecera de Streamlit y ajusta padding superior."""
    st.markdown(
        """
        <style>
        header[data-testid="stHeader"],
        div[data-testid="stToolbar"] {
            display: none !important;
        }
        .block-container {
            padding-top: 0.5rem !important;
        }
        </style>
        """,
        unsafe_allow_html=True,
    )


def _render_summary(app: App) -> None:
    entries = app.store.entries
    col1, col2, col3, col4 = st.columns(4)
    col1.metric("Entradas", len(entries))
    col2.metric("Idiomas", len({e.language for e in entries}))
    col3.metric("Géneros", len(app.store.all_genres()))
    col4.metric("Modo", app.gate.role.value)


def _periodic_sync(app: App) -> None:
    """Fragmento con temporizador: pull cada intervalo (solo Viewer)."""
    interval = timedelta(minutes=app.state.sync_interval_minutes)

    @st.fragment(run_every=interval)
    def _tick() -> None:
        if app.scheduler.tick() is SyncOutcome.APPLIED:
            st.rerun(scope="app")

    _tick()


# ============================================================
# Página
# ============================================================


def main() -> None:
    st.set_page_config(page_title="CineLaunch TV", layout="wide")
    _hide_streamlit_chrome()

    state = st.session_state
    _init_state(state)
    app = get_app(state)

    mount_sync(app, state)
    _periodic_sync(app)

    st.title("🎬 CineLaunch TV")
    st.caption("Mi biblioteca personal")
    _render_summary(app)
    st.markdown("---")

    tab1, tab2, tab3, tab4 = st.tabs(
        [
            "📚 Biblioteca",
            "✏️ Editor",
            "🔄 Sincronización",
            "📊 Gráficos",
        ]
    )

    with tab1:
        library.render(app)

    with tab2:
        editor.render(app)

    with tab3:
        sync.render(app)

    with tab4:
        charts.render(entries_to_dataframe(app.store.entries))


if __name__ == "__main__":
    main()
