from __future__ import annotations

from collections.abc import MutableMapping
from typing import Any, Final

import streamlit as st

from cinelaunch.ai_metadata import (
    MISSING_INPUT_MESSAGE,
    UNAVAILABLE_MESSAGE,
    merge_guess,
    suggest_metadata,
)
from cinelaunch.app import App
from cinelaunch.catalog import EntryForm
from cinelaunch.errors import CineLaunchError
from cinelaunch.taxonomy import ROOT_LANGUAGES, label, language_label

# Clave de session_state de cada campo del formulario
FORM_KEYS: Final[dict[str, str]] = {
    "title": "form_title",
    "external_link": "form_link",
    "image_link": "form_image",
    "description": "form_description",
    "language": "form_language",
    "genre": "form_genre",
    "new_genre": "form_new_genre",
    "custom_genre": "form_custom_genre",
}

MESSAGE_KEY: Final[str] = "form_message"
LOADED_KEY: Final[str] = "form_loaded_id"


def form_from_state(state: MutableMapping[str, Any]) -> EntryForm:
    """Lee los widgets del formulario desde session_state."""
    defaults = EntryForm()
    values = {
        field: state.get(key, getattr(defaults, field))
        for field, key in FORM_KEYS.items()
    }
    return EntryForm(**values)


def load_form_into_state(state: MutableMapping[str, Any], form: EntryForm) -> None:
    for field, key in FORM_KEYS.items():
        state[key] = getattr(form, field)


def _set_message(state: MutableMapping[str, Any], level: str, text: str) -> None:
    state[MESSAGE_KEY] = (level, text)


# -------------------------------------------------------------------
# Callbacks (se ejecutan antes de volver a pintar los widgets)
# -------------------------------------------------------------------


def on_autofill(app: App, state: MutableMapping[str, Any]) -> None:
    """Rellena el formulario con la sugerencia de la IA (enlace o, si no, título)."""
    form = form_from_state(state)
    text = form.external_link.strip() or form.title.strip()
    if not text:
        _set_message(state, "error", MISSING_INPUT_MESSAGE)
        return

    guess = suggest_metadata(text, app.store.all_genres())
    if guess is None:
        _set_message(state, "error", UNAVAILABLE_MESSAGE)
        return

    merge_guess(form, guess, app.store.genres_for(guess.language))
    load_form_into_state(state, form)
    _set_message(state, "success", "Datos sugeridos por la IA; revísalos antes de guardar.")


def on_save(app: App, state: MutableMapping[str, Any]) -> None:
    form = form_from_state(state)
    editing_id = state.get("editing_id")
    try:
        entry = app.service.save(form, editing_id=editing_id)
    except CineLaunchError as exc:
        _set_message(state, "error", str(exc))
        return

    load_form_into_state(state, EntryForm())
    state["editing_id"] = None
    state[LOADED_KEY] = None
    _set_message(state, "success", f"Guardado: {entry.title}")


def on_cancel(state: MutableMapping[str, Any]) -> None:
    load_form_into_state(state, EntryForm())
    state["editing_id"] = None
    state[LOADED_KEY] = None
    state.pop(MESSAGE_KEY, None)


# -------------------------------------------------------------------
# Render
# -------------------------------------------------------------------


def _sync_editing_entry(app: App, state: MutableMapping[str, Any]) -> None:
    """Carga en el formulario la entrada en edición cuando cambia la selección."""
    editing_id = state.get("editing_id")
    if editing_id == state.get(LOADED_KEY):
        return
    entry = app.store.get(editing_id) if editing_id else None
    if entry is None:
        state["editing_id"] = None
        state[LOADED_KEY] = None
        return
    load_form_into_state(state, EntryForm.from_entry(entry))
    state[LOADED_KEY] = editing_id


def render(app: App) -> None:
    """Pestaña 2: alta / edición de entradas (solo Admin)."""
    if not app.gate.is_admin:
        st.info("Activa el modo Admin en la pestaña «Sincronización» para añadir o editar.")
        return

    state = st.session_state
    _sync_editing_entry(app, state)
    editing = state.get("editing_id") is not None
    st.write("### Editar entrada" if editing else "### Añadir a la biblioteca")

    message = state.get(MESSAGE_KEY)
    if message:
        level, text = message
        (st.error if level == "error" else st.success)(text)

    st.text_input("Enlace externo", key=FORM_KEYS["external_link"], placeholder="Pega el enlace del vídeo…")
    st.text_input("Título", key=FORM_KEYS["title"])
    st.button("✨ Autocompletar con IA", on_click=on_autofill, args=(app, state))

    st.text_input("Imagen (URL, opcional)", key=FORM_KEYS["image_link"])
    st.text_area("Descripción", key=FORM_KEYS["description"])

    language = st.selectbox(
        "Idioma",
        list(ROOT_LANGUAGES),
        format_func=language_label,
        key=FORM_KEYS["language"],
    )

    new_genre = st.checkbox("Género nuevo", key=FORM_KEYS["new_genre"])
    if new_genre:
        st.text_input("Nombre del género (en inglés)", key=FORM_KEYS["custom_genre"])
    else:
        options = app.store.genres_for(language)
        if state.get(FORM_KEYS["genre"]) not in options:
            state[FORM_KEYS["genre"]] = options[0]
        st.selectbox(
            "Género",
            options,
            format_func=lambda g: label(language, g),
            key=FORM_KEYS["genre"],
        )

    col_save, col_cancel = st.columns(2)
    with col_save:
        st.button("💾 Guardar", on_click=on_save, args=(app, state), type="primary")
    with col_cancel:
        st.button("Cancelar", on_click=on_cancel, args=(state,))
