from a11ycore.models import SemanticNode, Severity
from a11ycore.rules import validate_screen_reader_content


def _node(type_: str, *children: SemanticNode, name: str | None = None, role: str | None = None, **props) -> SemanticNode:
    return SemanticNode(type=type_, name=name, role=role, props=props, children=children)


def _codes(findings):
    return sorted(f.code for f in findings)


def test_hidden_content_without_aria_hidden():
    for props in ({"hidden": True}, {"display": "none"}, {"visibility": "hidden"}):
        findings = validate_screen_reader_content(_node("div", name="Notice", **props))
        assert _codes(findings) == ["SR_CONTENT_HIDDEN"]


def test_hidden_with_explicit_aria_hidden_is_intentional():
    assert validate_screen_reader_content(_node("div", hidden=True, **{"aria-hidden": "true"})) == []


def test_hidden_flag_must_be_boolean_true():
    assert validate_screen_reader_content(_node("div", hidden="true")) == []


def test_hidden_interactive_element():
    findings = validate_screen_reader_content(_node("button", name="Buy", display="none"))
    assert _codes(findings) == ["SR_CONTENT_HIDDEN", "SR_INTERACTIVE_HIDDEN"]


def test_aria_hidden_focusable_element():
    findings = validate_screen_reader_content(_node("button", name="Menu", **{"aria-hidden": True}))
    assert _codes(findings) == ["SR_ARIA_HIDDEN_FOCUSABLE"]


def test_aria_hidden_on_unfocusable_element_is_fine():
    assert validate_screen_reader_content(_node("button", name="Menu", tabIndex=-1, **{"aria-hidden": True})) == []
    assert validate_screen_reader_content(_node("div", focusable=False, **{"aria-hidden": True})) == []


def test_aria_hidden_with_zero_tabindex_on_div():
    findings = validate_screen_reader_content(_node("div", tabIndex=0, **{"aria-hidden": "true"}))
    assert _codes(findings) == ["SR_ARIA_HIDDEN_FOCUSABLE"]


def test_visually_hidden_without_text_is_warned():
    findings = validate_screen_reader_content(_node("span", **{"class": "label sr-only"}))
    assert _codes(findings) == ["SR_ONLY_NO_TEXT"]
    assert findings[0].severity == Severity.WARNING


def test_visually_hidden_with_child_text_is_clean():
    node = _node("span", _node("text", name="Opens in a new tab"), className="visually-hidden")
    assert validate_screen_reader_content(node) == []
