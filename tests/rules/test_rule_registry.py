import pytest

from a11ycore.models import Finding, SemanticNode
from a11ycore.rules import Rule, RuleRegistry, default_registry

DEFAULT_NAMES = [
    "semantic-html",
    "aria-usage",
    "keyboard-accessible",
    "color-contrast",
    "text-alternatives",
    "screen-reader-content",
    "name-required",
]


class _RootMarker(Rule):
    name = "root-marker"

    def evaluate(self, root, path="$"):
        return [Finding(code="TEST_ROOT_MARKER", path=path, message="Remove the marker.")]


class _Nameless(Rule):
    def evaluate(self, root, path="$"):
        return []


def test_default_registry_holds_every_rule_in_order():
    assert default_registry().names() == DEFAULT_NAMES


def test_default_registry_is_fresh_each_call():
    first = default_registry()
    first.unregister("color-contrast")
    assert "color-contrast" in default_registry()
    assert len(first) == len(DEFAULT_NAMES) - 1


def test_register_duplicate_name_raises():
    registry = RuleRegistry([_RootMarker()])
    with pytest.raises(ValueError):
        registry.register(_RootMarker())


def test_register_nameless_rule_raises():
    with pytest.raises(ValueError):
        RuleRegistry().register(_Nameless())


def test_unregister_unknown_raises_key_error():
    with pytest.raises(KeyError):
        RuleRegistry().unregister("missing")


def test_get_returns_registered_rule_or_none():
    marker = _RootMarker()
    registry = RuleRegistry([marker])
    assert registry.get("root-marker") is marker
    assert registry.get("other") is None


def test_run_concatenates_in_registration_order():
    registry = default_registry()
    registry.register(_RootMarker())
    findings = registry.run(SemanticNode(type="main"))
    assert [f.code for f in findings] == ["TEST_ROOT_MARKER"]


def test_rule_is_callable_and_has_readable_repr():
    marker = _RootMarker()
    assert marker(SemanticNode(type="div"))[0].path == "$"
    assert repr(marker) == "_RootMarker(name='root-marker')"


def test_rule_base_cannot_be_instantiated():
    with pytest.raises(TypeError):
        Rule()
