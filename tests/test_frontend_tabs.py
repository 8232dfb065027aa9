from __future__ import annotations

from pathlib import Path
from typing import Any

import altair as alt
import pandas as pd
import pytest

from cinelaunch.ai_metadata import MISSING_INPUT_MESSAGE, UNAVAILABLE_MESSAGE, AIGuess
from cinelaunch.app import App, build_app
from cinelaunch.catalog import EntryForm
from cinelaunch.sync_client import SyncOutcome
from cinelaunch.taxonomy import ALL, DEFAULT_GENRES
from frontend import components
from frontend.data_utils import entries_to_dataframe
from frontend.tabs import charts, editor, library, sync


@pytest.fixture
def app(tmp_path: Path) -> App:
    return build_app(tmp_path, secret="pw", pull_fn=lambda url: None)


# -------------------------------------------------------------------
# library
# -------------------------------------------------------------------


def test_genre_options_per_language(app: App, make_entry) -> None:
    app.store.upsert(make_entry(id="w", language="Malay", genre="Wuxia"))
    assert library.genre_options("Malay", app.store) == [ALL, *DEFAULT_GENRES, "Wuxia"]
    assert library.genre_options("English", app.store) == [ALL, *DEFAULT_GENRES]
    assert library.genre_options(ALL, app.store) == [ALL, *DEFAULT_GENRES, "Wuxia"]

    # El filtro conserva el género aunque ya no haya entradas que lo usen
    app.store.remove("w")
    assert library.genre_options("Malay", app.store) == [ALL, *DEFAULT_GENRES, "Wuxia"]


# -------------------------------------------------------------------
# components
# -------------------------------------------------------------------


def test_normalize_selected_rows_variants() -> None:
    norm = components._normalize_selected_rows
    assert norm(None) == []
    assert norm([{"id": 1}, "junk"]) == [{"id": 1}]
    assert norm({"id": 2}) == [{"id": 2}]
    assert norm(pd.DataFrame([{"id": 3}])) == [{"id": 3}]
    assert norm(42) == []


# -------------------------------------------------------------------
# editor (callbacks sobre un session_state falso)
# -------------------------------------------------------------------


def test_form_state_round_trip() -> None:
    state: dict[str, Any] = {}
    form = EntryForm(title="T", external_link="https://x", language="India", new_genre=True, custom_genre="Masala")
    editor.load_form_into_state(state, form)
    assert editor.form_from_state(state) == form


def test_form_from_empty_state_uses_defaults() -> None:
    assert editor.form_from_state({}) == EntryForm()


def test_on_save_viewer_shows_error(app: App) -> None:
    state: dict[str, Any] = {}
    editor.load_form_into_state(state, EntryForm(title="T", external_link="https://x"))

    editor.on_save(app, state)

    level, _ = state[editor.MESSAGE_KEY]
    assert level == "error"
    assert len(app.store) == 0


def test_on_save_admin_adds_and_clears_form(app: App) -> None:
    app.gate.verify("pw")
    state: dict[str, Any] = {"editing_id": None}
    editor.load_form_into_state(state, EntryForm(title="T", external_link="https://x"))

    editor.on_save(app, state)

    assert [e.title for e in app.store.entries] == ["T"]
    assert state[editor.FORM_KEYS["title"]] == ""
    assert state[editor.MESSAGE_KEY][0] == "success"


def test_on_save_validation_error_keeps_form(app: App) -> None:
    app.gate.verify("pw")
    state: dict[str, Any] = {}
    editor.load_form_into_state(state, EntryForm(title="", external_link="https://x"))

    editor.on_save(app, state)

    assert state[editor.MESSAGE_KEY][0] == "error"
    assert state[editor.FORM_KEYS["external_link"]] == "https://x"
    assert len(app.store) == 0


def test_on_save_edits_selected_entry(app: App) -> None:
    app.gate.verify("pw")
    created = app.service.save(EntryForm(title="Old", external_link="https://x"))
    state: dict[str, Any] = {"editing_id": created.id}
    editor.load_form_into_state(state, EntryForm(title="New", external_link="https://x"))

    editor.on_save(app, state)

    assert [(e.id, e.title) for e in app.store.entries] == [(created.id, "New")]
    assert state["editing_id"] is None


def test_on_autofill_requires_input(app: App) -> None:
    state: dict[str, Any] = {}
    editor.on_autofill(app, state)
    assert state[editor.MESSAGE_KEY] == ("error", MISSING_INPUT_MESSAGE)


def test_on_autofill_unavailable(app: App, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(editor, "suggest_metadata", lambda text, genres: None)
    state: dict[str, Any] = {editor.FORM_KEYS["title"]: "Hero"}
    editor.on_autofill(app, state)
    assert state[editor.MESSAGE_KEY] == ("error", UNAVAILABLE_MESSAGE)
    # El formulario sigue utilizable a mano
    assert state[editor.FORM_KEYS["title"]] == "Hero"


def test_on_autofill_fills_form(app: App, monkeypatch: pytest.MonkeyPatch) -> None:
    seen: dict[str, Any] = {}

    def fake_suggest(text: str, genres: list[str]) -> AIGuess:
        seen["text"] = text
        return AIGuess(title="Hero", description="Wuxia epic", language="Chinese", genre="Wuxia")

    monkeypatch.setattr(editor, "suggest_metadata", fake_suggest)
    state: dict[str, Any] = {editor.FORM_KEYS["external_link"]: "https://youtu.be/x", editor.FORM_KEYS["title"]: "h"}

    editor.on_autofill(app, state)

    assert seen["text"] == "https://youtu.be/x"
    assert state[editor.FORM_KEYS["title"]] == "Hero"
    assert state[editor.FORM_KEYS["language"]] == "Chinese"
    assert state[editor.FORM_KEYS["new_genre"]] is True
    assert state[editor.FORM_KEYS["custom_genre"]] == "Wuxia"


def test_on_cancel_resets(app: App) -> None:
    state: dict[str, Any] = {"editing_id": "x", editor.MESSAGE_KEY: ("error", "e")}
    editor.on_cancel(state)
    assert state["editing_id"] is None
    assert editor.MESSAGE_KEY not in state
    assert editor.form_from_state(state) == EntryForm()


# -------------------------------------------------------------------
# sync
# -------------------------------------------------------------------


def test_every_outcome_has_a_message() -> None:
    for outcome in SyncOutcome:
        level, text = sync.describe_outcome(outcome)
        assert level in ("success", "warning", "info")
        assert text


def test_sync_status_text(app: App) -> None:
    app.state.set_remote_url("")
    assert "Sin URL remota" in sync.sync_status_text(app)

    app.state.set_remote_url("https://host/v.json")
    assert "Aún no sincronizado" in sync.sync_status_text(app)

    app.state.mark_synced(1_700_000_000_000)
    assert sync.sync_status_text(app).startswith("Última sincronización: 2023-11-")


# -------------------------------------------------------------------
# charts
# -------------------------------------------------------------------


@pytest.mark.parametrize("view", charts.VIEW_OPTIONS)
def test_build_chart_for_every_view(view: str, make_entry) -> None:
    df = entries_to_dataframe(
        [make_entry(language="English", genre="Action"), make_entry(language="Malay", genre="Wuxia")]
    )
    chart = charts.build_chart(df, view)
    assert isinstance(chart, alt.Chart)
    assert chart.to_dict()["mark"] in ("bar", {"type": "bar"})


def test_build_chart_empty_or_unknown(make_entry) -> None:
    assert charts.build_chart(entries_to_dataframe([]), charts.VIEW_OPTIONS[0]) is None
    df = entries_to_dataframe([make_entry()])
    assert charts.build_chart(df, "nope") is None


def test_charts_render_empty_dataframe(monkeypatch: pytest.MonkeyPatch) -> None:
    import streamlit as st

    infos: list[str] = []
    monkeypatch.setattr(st, "write", lambda *a, **k: None)
    monkeypatch.setattr(st, "info", lambda msg, *a, **k: infos.append(msg))
    charts.render(entries_to_dataframe([]))
    assert infos == ["No hay datos para mostrar gráficos."]

