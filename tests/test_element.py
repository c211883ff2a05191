import json

import pytest

from tinyreact.core.element import ElementDescriptor, component, create_element
from tinyreact.html import div, span


def test_create_element_stores_children_in_order():
    el = create_element("ul", {"class_": "list"}, "a", 2, "c")
    assert el.kind == "ul"
    assert el.children == ("a", 2, "c")
    assert el.attributes == {"class_": "list"}
    assert not el.is_component


def test_single_child_in_props_is_coerced_to_sequence():
    el = create_element("p", {"children": "only"})
    assert el.children == ("only",)


def test_no_children():
    el = create_element("br")
    assert el.children == ()
    assert "children" not in el.props


def test_descriptor_is_immutable():
    el = create_element("div", {"style": {"color": "red"}}, "x")
    with pytest.raises(AttributeError):
        el.kind = "span"  # type: ignore[misc]
    with pytest.raises(TypeError):
        el.props["title"] = "nope"  # type: ignore[index]
    with pytest.raises(TypeError):
        el.style["color"] = "blue"  # type: ignore[index]


def test_caller_dict_mutation_does_not_leak():
    props = {"title": "a", "children": ["x"]}
    el = create_element("div", props)
    props["title"] = "b"
    props["children"].append("y")
    assert el.props["title"] == "a"
    assert el.children == ("x",)


def test_key_is_taken_out_of_props():
    el = create_element("li", {"key": "k1", "id": "i"})
    assert el.key == "k1"
    assert "key" not in el.props


def test_invalid_kind_rejected():
    with pytest.raises(TypeError):
        create_element(42)  # type: ignore[arg-type]


def test_component_decorator_returns_descriptor():
    @component
    def Greeting(name):
        return div("hi ", name)

    el = Greeting(name="ada", key="g")
    assert isinstance(el, ElementDescriptor)
    assert el.is_component
    assert el.kind.__name__ == "Greeting"
    assert el.key == "g"
    assert el.props == {"name": "ada"}


def test_component_positional_children():
    @component
    def Box(children=()):
        return div(*children)

    el = Box("a", "b")
    assert el.children == ("a", "b")


def test_to_dict_is_json_serializable():
    @component
    def Item():
        return span("x")

    el = div("hello", span("nested"), Item(), style={"color": "red"}, id="main")
    data = el.to_dict()
    json.dumps(data)
    assert data["kind"] == "div"
    assert data["props"]["style"] == {"color": "red"}
    assert data["props"]["children"][0] == "hello"
    assert data["props"]["children"][1]["kind"] == "span"
    assert data["props"]["children"][2]["kind"].endswith("Item")


def test_tag_factories():
    el = div("t", class_="x")
    assert el.kind == "div"
    assert el.attributes == {"class_": "x"}
    assert el.children == ("t",)
