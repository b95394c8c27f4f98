import math

import pytest

from a11ycore.models import SemanticNode
from a11ycore.rules.interaction import is_focusable
from a11ycore.rules.props import (
    booleanish,
    get_class_names,
    get_first,
    get_keyboard_handlers,
    get_tab_index,
    to_number,
)


@pytest.mark.parametrize(
    "value,expected",
    [(3, 3), (2.5, 2.5), ("4", 4), (" -1 ", -1), ("1.5", 1.5), ("", None), ("abc", None), (True, None), (None, None)],
)
def test_to_number(value, expected):
    assert to_number(value) == expected


@pytest.mark.parametrize("value", [math.inf, -math.inf, math.nan, "inf", "nan"])
def test_to_number_rejects_non_finite(value):
    assert to_number(value) is None


def test_get_tab_index_reads_both_spellings():
    assert get_tab_index({"tabIndex": 2}) == 2
    assert get_tab_index({"tabindex": "0"}) == 0
    assert get_tab_index({"tabIndex": None, "tabindex": 1}) == 1
    assert get_tab_index({}) is None


def test_get_first_skips_none():
    assert get_first({"a": None, "b": 0}, "a", "b") == 0
    assert get_first({}, "a") is None


@pytest.mark.parametrize("value,expected", [(True, "true"), (False, "false"), (" Mixed ", "mixed"), (1, None)])
def test_booleanish(value, expected):
    assert booleanish(value) == expected


def test_keyboard_handlers_normalize_keys():
    assert get_keyboard_handlers({"keyboardHandlers": ["Enter", " ", "Spacebar", 5]}) == frozenset({"enter", "space"})
    assert get_keyboard_handlers({"keyHandlers": "ArrowUp, ArrowDown"}) == frozenset({"arrowup", "arrowdown"})
    assert get_keyboard_handlers({"keyboardHandlers": {"enter": True}}) == frozenset()


def test_class_names_split_on_whitespace():
    assert get_class_names({"className": "a  b\tc"}) == ["a", "b", "c"]
    assert get_class_names({"class": 3}) == []


@pytest.mark.parametrize(
    "props,role,expected",
    [
        ({"disabled": True, "tabIndex": 0}, None, False),
        ({"aria-disabled": "true"}, "button", False),
        ({"tabIndex": -1}, "button", False),
        ({"tabIndex": 0}, None, True),
        ({"focusable": True}, None, True),
        ({"focusable": False}, "button", False),
        ({}, "button", True),
        ({}, None, False),
    ],
)
def test_is_focusable_resolution_order(props, role, expected):
    assert is_focusable(SemanticNode(type="div", role=role, props=props)) is expected
