import itertools

import pytest

from a11ycore.models import SemanticNode
from a11ycore.rules import contrast_ratio, parse_color, relative_luminance, validate_color_contrast
from a11ycore.rules.color_contrast import RGB, is_large_font


def _text(color: str, background: str, **props) -> SemanticNode:
    return SemanticNode(type="p", name="Body", props={"color": color, "backgroundColor": background, **props})


_COLORS = ["#000", "#ffffff", "#777777", "#ff0000", "rgb(0, 128, 0)", "#123456", "rgba(10, 20, 30, 0.5)"]


def test_black_on_white_is_21():
    ratio = contrast_ratio(parse_color("#000000"), parse_color("#ffffff"))
    assert f"{ratio:.2f}" == "21.00"
    assert validate_color_contrast(_text("#000000", "#ffffff")) == []


@pytest.mark.parametrize("a,b", list(itertools.combinations(_COLORS, 2)))
def test_contrast_ratio_is_symmetric_and_bounded(a, b):
    first, second = parse_color(a), parse_color(b)
    forward = contrast_ratio(first, second)
    assert forward == contrast_ratio(second, first)
    assert 1.0 <= forward <= 21.0


def test_identical_colors_have_ratio_one():
    color = parse_color("#abcdef")
    assert contrast_ratio(color, color) == 1.0


def test_gray_fails_normal_text_threshold():
    findings = validate_color_contrast(_text("#777777", "#ffffff"))
    assert len(findings) == 1
    assert findings[0].code == "COLOR_INSUFFICIENT_CONTRAST"
    assert "4.48:1" in findings[0].message
    assert "4.5:1" in findings[0].message


@pytest.mark.parametrize("props", [{"fontSize": 24}, {"fontSize": "24px"}, {"largeText": True}])
def test_gray_passes_large_text_threshold(props):
    assert validate_color_contrast(_text("#777777", "#ffffff", **props)) == []


def test_bold_text_is_large_from_18_66px():
    assert is_large_font("19px", "bold")
    assert is_large_font(19, 700)
    assert not is_large_font(19, 400)
    assert not is_large_font(None, "bold")


def test_non_text_uses_three_to_one():
    node = _text("#888888", "#ffffff", contrastType="non-text")
    assert validate_color_contrast(node) == []
    findings = validate_color_contrast(_text("#bbbbbb", "#ffffff", nonText=True))
    assert findings and findings[0].message.startswith("Non-text contrast ratio")


def test_aliases_for_color_props():
    node = SemanticNode(type="p", name="x", props={"textColor": "#777", "background": "#fff"})
    assert len(validate_color_contrast(node)) == 1


def test_nodes_without_both_colors_are_skipped():
    tree = SemanticNode(
        type="main",
        children=(
            SemanticNode(type="p", name="a", props={"color": "#777777"}),
            SemanticNode(type="p", name="b", props={"color": "blue", "backgroundColor": "#fff"}),
        ),
    )
    assert validate_color_contrast(tree) == []


@pytest.mark.parametrize(
    "value,expected",
    [
        ("#fff", RGB(255, 255, 255)),
        ("#FF0000", RGB(255, 0, 0)),
        ("rgb(0, 128, 0)", RGB(0, 128, 0)),
        ("rgba(1,2,3,0.4)", RGB(1, 2, 3)),
        ("rgb(300, -5, 0)", RGB(255, 0, 0)),
        ("red", None),
        ("#ggg", None),
        ("#12345", None),
        (None, None),
        (123, None),
    ],
)
def test_parse_color(value, expected):
    assert parse_color(value) == expected


def test_relative_luminance_extremes():
    assert relative_luminance(RGB(0, 0, 0)) == 0.0
    assert relative_luminance(RGB(255, 255, 255)) == pytest.approx(1.0)
