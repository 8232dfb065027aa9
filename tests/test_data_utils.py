from __future__ import annotations

import pandas as pd

from cinelaunch.models import PLACEHOLDER_IMAGE
from frontend import data_utils
from frontend.data_utils import count_by, entries_to_dataframe, format_count, format_created_at


def test_entries_to_dataframe_columns_and_order(make_entry) -> None:
    entries = [
        make_entry(id="b", title="Beta", language="Chinese", genre="Comedy"),
        make_entry(id="a", title="Alpha", language="Malay", genre="Wuxia", image_link="https://img"),
    ]
    df = entries_to_dataframe(entries)

    assert list(df.columns) == list(data_utils.ENTRY_COLUMNS)
    assert df["id"].tolist() == ["b", "a"]
    assert df["genre_label"].tolist() == ["喜剧", "Wuxia"]
    assert df["image_link"].tolist() == [PLACEHOLDER_IMAGE, "https://img"]


def test_entries_to_dataframe_empty_keeps_columns() -> None:
    df = entries_to_dataframe([])
    assert df.empty
    assert list(df.columns) == list(data_utils.ENTRY_COLUMNS)


def test_format_created_at() -> None:
    assert format_created_at(0) is None
    assert format_created_at(None) is None
    assert format_created_at("abc") is None
    text = format_created_at(1_700_000_000_000)
    assert text is not None and text.startswith("2023-11-")


def test_count_by(make_entry) -> None:
    df = entries_to_dataframe(
        [
            make_entry(language="English"),
            make_entry(language="Chinese"),
            make_entry(language="Chinese"),
        ]
    )
    agg = count_by(df, ["language"])
    assert agg.to_dict(orient="records") == [
        {"language": "Chinese", "count": 2},
        {"language": "English", "count": 1},
    ]

    empty = count_by(pd.DataFrame(columns=["language", "id"]), ["language"])
    assert empty.empty
    assert list(empty.columns) == ["language", "count"]


def test_format_count() -> None:
    assert format_count(1) == "1 entrada"
    assert format_count(1200) == "1,200 entradas"
