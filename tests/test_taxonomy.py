from __future__ import annotations

from cinelaunch import taxonomy
from cinelaunch.taxonomy import DEFAULT_GENRES, all_genres, genres_for, label, remember_genres


def test_genres_for_defaults_only_when_no_custom(make_entry) -> None:
    entries = [make_entry(genre="Action"), make_entry(genre="Comedy")]
    assert genres_for("English", entries) == list(DEFAULT_GENRES)


def test_custom_genre_appears_only_for_its_language(make_entry) -> None:
    entries = [
        make_entry(language="Malay", genre="Wuxia"),
        make_entry(language="English", genre="Drama"),
    ]

    assert genres_for("Malay", entries) == [*DEFAULT_GENRES, "Wuxia"]
    assert "Wuxia" not in genres_for("English", entries)
    assert "Wuxia" not in genres_for("Chinese", entries)


def test_custom_genres_first_seen_order_without_duplicates(make_entry) -> None:
    entries = [
        make_entry(language="Chinese", genre="Kungfu"),
        make_entry(language="Chinese", genre="Romance"),
        make_entry(language="Chinese", genre="Kungfu"),
        make_entry(language="Chinese", genre="Action"),
    ]
    assert genres_for("Chinese", entries)[len(DEFAULT_GENRES):] == ["Kungfu", "Romance"]


def test_known_genres_stay_without_entries(make_entry) -> None:
    vocabulary = {"India": ["Bollywood"]}
    assert genres_for("India", [], vocabulary) == [*DEFAULT_GENRES, "Bollywood"]
    # Conocidos primero, luego los nuevos de la colección
    entries = [make_entry(language="India", genre="Masala")]
    assert genres_for("India", entries, vocabulary)[len(DEFAULT_GENRES):] == ["Bollywood", "Masala"]
    assert genres_for("Malay", entries, vocabulary) == list(DEFAULT_GENRES)


def test_all_genres_unions_every_language(make_entry) -> None:
    entries = [
        make_entry(language="Malay", genre="Wuxia"),
        make_entry(language="India", genre="Bollywood"),
    ]
    assert all_genres(entries) == [*DEFAULT_GENRES, "Wuxia", "Bollywood"]
    assert all_genres([], {"English": ["Legacy"]}) == [*DEFAULT_GENRES, "Legacy"]


def test_remember_genres_only_grows(make_entry) -> None:
    vocabulary: dict[str, list[str]] = {}
    assert remember_genres(vocabulary, [make_entry(language="Malay", genre="Wuxia")]) is True
    # Repetidos y géneros por defecto no cambian nada
    assert remember_genres(vocabulary, [make_entry(language="Malay", genre="Wuxia"), make_entry(genre="Drama")]) is False
    assert remember_genres(vocabulary, [make_entry(language="Malay", genre="Silat")]) is True
    assert vocabulary == {"Malay": ["Wuxia", "Silat"]}


def test_label_localized_and_fallback() -> None:
    assert label("Chinese", "Action") == "动作"
    assert label("Malay", "Horror") == "Seram"
    assert label("English", "Drama") == "Drama"
    # Género libre sin traducción → clave tal cual
    assert label("Chinese", "Wuxia") == "Wuxia"
    # Idioma desconocido → clave tal cual
    assert label("Klingon", "Action") == "Action"


def test_every_language_has_every_default_label() -> None:
    for language in taxonomy.ROOT_LANGUAGES:
        labels = taxonomy.GENRE_LABELS[language]
        assert set(labels) == set(DEFAULT_GENRES)


def test_is_root_language() -> None:
    assert taxonomy.is_root_language("India")
    assert not taxonomy.is_root_language("Hindi")
    assert not taxonomy.is_root_language(None)
