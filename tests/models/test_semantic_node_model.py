import pytest
from pydantic import ValidationError

from a11ycore.models import SemanticNode, effective_role, heading_level_from_type


def test_minimal_node_has_empty_props_and_children():
    node = SemanticNode(type="div")
    assert node.name is None
    assert node.role is None
    assert node.props == {}
    assert node.children == ()


def test_name_is_trimmed():
    assert SemanticNode(type="button", name="  Save  ").name == "Save"


@pytest.mark.parametrize("name", ["", "   ", "\n\t"])
def test_blank_name_is_rejected(name):
    with pytest.raises(ValidationError):
        SemanticNode(type="button", name=name)


def test_name_longer_than_limit_is_rejected():
    with pytest.raises(ValidationError):
        SemanticNode(type="p", name="x" * 1001)


@pytest.mark.parametrize("node_type", ["", "1abc", "has space", "dot.ted", "x" * 101])
def test_invalid_type_is_rejected(node_type):
    with pytest.raises(ValidationError):
        SemanticNode(type=node_type)


@pytest.mark.parametrize("node_type", ["a", "h1", "custom-widget", "my_widget2"])
def test_valid_types_are_accepted(node_type):
    assert SemanticNode(type=node_type).type == node_type


def test_role_is_trimmed_and_blank_role_is_absent():
    assert SemanticNode(type="div", role=" button ").role == "button"
    assert SemanticNode(type="div", role="  ").role is None


def test_unknown_role_is_rejected():
    with pytest.raises(ValidationError):
        SemanticNode(type="div", role="not-a-role")


def test_props_accept_json_values():
    node = SemanticNode(
        type="div",
        props={"tabIndex": 0, "hidden": False, "class": "a b", "keys": ["Enter"], "meta": {"x": None}},
    )
    assert node.props["keys"] == ["Enter"]


def test_props_reject_non_json_values():
    with pytest.raises(ValidationError):
        SemanticNode(type="div", props={"callback": object()})


def test_children_are_validated_recursively_from_dicts():
    node = SemanticNode.model_validate(
        {"type": "ul", "children": [{"type": "li", "name": "One"}, {"type": "li", "name": "Two"}]}
    )
    assert [child.name for child in node.children] == ["One", "Two"]
    assert all(isinstance(child, SemanticNode) for child in node.children)


def test_nested_invalid_child_fails_whole_tree():
    with pytest.raises(ValidationError):
        SemanticNode.model_validate({"type": "ul", "children": [{"type": "li", "role": "bogus"}]})


def test_node_is_frozen():
    node = SemanticNode(type="div")
    with pytest.raises(ValidationError):
        node.type = "span"


@pytest.mark.parametrize(
    "node_type,expected",
    [("a", "link"), ("h3", "heading"), ("ol", "list"), ("li", "listitem"), ("th", "columnheader"), ("div", None)],
)
def test_effective_role_derives_from_type(node_type, expected):
    assert effective_role(SemanticNode(type=node_type)) == expected


def test_explicit_role_wins_over_type():
    assert effective_role(SemanticNode(type="a", role="button")) == "button"


@pytest.mark.parametrize("node_type,level", [("h1", 1), ("h6", 6), ("H2", 2), ("h7", None), ("header", None)])
def test_heading_level_from_type(node_type, level):
    assert heading_level_from_type(node_type) == level
