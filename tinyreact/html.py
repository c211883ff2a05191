from typing import Any

from tinyreact.core.element import ElementDescriptor, create_element


def define_tag(name: str):
    """Factory for a host tag: ``div("text", style={...}, class_="x")``."""

    def make(*children: Any, **props: Any) -> ElementDescriptor:
        return create_element(name, props, *children)

    make.__name__ = name
    make.__qualname__ = name
    return make


TAGS = [
    "div",
    "span",
    "p",
    "h1",
    "h2",
    "h3",
    "button",
    "ul",
    "li",
    "section",
    "strong",
    "em",
]

div = define_tag("div")
span = define_tag("span")
p = define_tag("p")
h1 = define_tag("h1")
h2 = define_tag("h2")
h3 = define_tag("h3")
button = define_tag("button")
ul = define_tag("ul")
li = define_tag("li")
section = define_tag("section")
strong = define_tag("strong")
em = define_tag("em")

__all__ = ["define_tag", "TAGS", *TAGS]
