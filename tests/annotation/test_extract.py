from __future__ import annotations

import pytest

from glossgen.annotation.extract import GLOSS_KEYS, pick_integer, pick_list, pick_string


def test_pick_string_returns_first_non_blank_trimmed_value() -> None:
    source = {"g": "   ", "gloss": 5, "meaning": "  鸣叫  ", "note": "later"}

    assert pick_string(source, GLOSS_KEYS) == "鸣叫"


def test_pick_string_missing_or_non_mapping_yields_empty() -> None:
    assert pick_string({"x": "y"}, ("a", "b")) == ""
    assert pick_string(None, ("a",)) == ""
    assert pick_string(["a"], ("a",)) == ""


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (3, 3),
        (-2, -2),
        (4.0, 4),
        (" 7 ", 7),
        ("2.0", 2),
        ("1e1", 10),
        (2.5, None),
        ("2.5", None),
        ("", None),
        ("abc", None),
        (True, None),
        (None, None),
        (float("nan"), None),
        ("inf", None),
        ([1], None),
    ],
)
def test_pick_integer_coerces_whole_numbers_only(value: object, expected: int | None) -> None:
    assert pick_integer({"i": value}, ("i",)) == expected


def test_pick_integer_falls_through_to_next_usable_key() -> None:
    assert pick_integer({"i": "x", "index": 4}, ("i", "index")) == 4
    assert pick_integer({}, ("i",)) is None
    assert pick_integer("i", ("i",)) is None


def test_pick_list_returns_first_list_field() -> None:
    chars = [{"i": 0}]

    assert pick_list({"chars": "oops", "characters": chars}, ("chars", "characters")) is chars
    assert pick_list({"chars": {}}, ("chars",)) is None
