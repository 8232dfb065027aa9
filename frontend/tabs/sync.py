from __future__ import annotations

from typing import Final

import streamlit as st

from cinelaunch.app import App
from cinelaunch.errors import CineLaunchError
from cinelaunch.sync_client import SYNC_PACKAGE_FILENAME, SyncOutcome, build_sync_package
from frontend.data_utils import format_created_at

OUTCOME_MESSAGES: Final[dict[SyncOutcome, tuple[str, str]]] = {
    SyncOutcome.APPLIED: ("success", "Catálogo actualizado desde la URL remota."),
    SyncOutcome.FAILED: ("warning", "No se pudo sincronizar; se conserva el catálogo local."),
    SyncOutcome.STALE: ("info", "Respuesta antigua descartada; ya había datos más recientes."),
    SyncOutcome.SKIPPED: ("info", "Sincronización omitida (modo Admin o sin URL remota)."),
}


def describe_outcome(outcome: SyncOutcome) -> tuple[str, str]:
    return OUTCOME_MESSAGES[outcome]


def sync_status_text(app: App) -> str:
    """Texto de estado: última sincronización correcta o aviso de datos locales."""
    if not app.state.remote_url:
        return "Sin URL remota: solo datos locales."
    last = format_created_at(app.state.last_sync_epoch) if app.state.last_sync_epoch else None
    if last is None:
        return "Aún no sincronizado en esta sesión (datos locales)."
    return f"Última sincronización: {last}"


def _render_role_gate(app: App) -> None:
    st.write(f"**Modo actual:** {app.gate.role.value}")
    with st.form("role_gate_form", clear_on_submit=True):
        secret = st.text_input("Código de administrador", type="password")
        submitted = st.form_submit_button("Cambiar modo")
    if submitted:
        result = app.gate.verify(secret)
        if result.ok:
            st.success(result.message)
            st.rerun()
        else:
            st.error(result.message)


def _render_admin_tools(app: App) -> None:
    st.write("#### URL remota")
    with st.form("remote_url_form"):
        url = st.text_input("URL del JSON publicado", value=app.state.remote_url)
        submitted = st.form_submit_button("Guardar URL")
    if submitted:
        try:
            app.set_remote_url(url)
        except CineLaunchError as exc:
            st.error(str(exc))
        else:
            st.success("URL guardada.")

    st.write("#### Paquete de sincronización")
    st.caption(
        "Descarga el catálogo, súbelo a cualquier hosting de ficheros estáticos "
        "y pega la URL directa en los dispositivos Viewer."
    )
    st.download_button(
        "💾 Exportar catálogo",
        data=build_sync_package(app.store.entries),
        file_name=SYNC_PACKAGE_FILENAME,
        mime="application/json",
    )


def _render_viewer_tools(app: App) -> None:
    st.caption(sync_status_text(app))
    if st.button("🔄 Sincronizar ahora", disabled=not app.state.remote_url):
        level, text = describe_outcome(app.scheduler.run())
        getattr(st, level)(text)


def render(app: App) -> None:
    """Pestaña 3: modo Admin/Viewer y sincronización."""
    st.write("### Sincronización")
    _render_role_gate(app)
    st.markdown("---")
    if app.gate.is_admin:
        _render_admin_tools(app)
    else:
        _render_viewer_tools(app)
