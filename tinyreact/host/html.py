# tinyreact/host/html.py
from typing import Any, Dict, Optional
import html as _htmllib

from .memory import MemoryNode, MemorySurface


def _escape(s: Any) -> str:
    return _htmllib.escape("" if s is None else str(s), quote=True)


def _style_to_str(v: Any) -> str:
    """Convert a style dict to a CSS string.

    Example: ``{"font_size":"14px","background-color":"#fff"} -> "font-size:14px;background-color:#fff"``
    """
    if hasattr(v, "items"):
        parts = []
        for k, val in v.items():
            k = k.replace("_", "-")
            parts.append(f"{k}:{val}")
        return ";".join(parts)
    return str(v)


def _attrs_to_str(props: Dict[str, Any]) -> str:
    """Convert node attributes into HTML attributes.

    Rules:
      - ``class_`` -> ``class``
      - ``data_xxx`` -> ``data-xxx``
      - ``aria_xxx`` -> ``aria-xxx``
      - style dict -> ``style="k:v;..."``
      - ``True`` values -> boolean attributes (e.g., ``disabled``)
      - lists/tuples -> ``' '.join(...)``
      - callables are skipped (event binding is not serialized)
    """
    if not props:
        return ""

    out = []
    for k, v in props.items():
        if v is None or callable(v):
            continue

        # normalizations
        if k == "class_":
            k = "class"
        elif k.startswith("data_"):
            k = "data-" + k[5:].replace("_", "-")
        elif k.startswith("aria_"):
            k = "aria-" + k[5:].replace("_", "-")

        # values
        if isinstance(v, (list, tuple)):
            v = " ".join(map(str, v))
        elif k == "style":
            v = _style_to_str(v)

        # booleans as valueless attributes
        if v is True:
            out.append(k)
            continue
        if v is False:
            continue

        out.append(f'{k}="{_escape(v)}"')

    return (" " + " ".join(out)) if out else ""


def node_to_html(node: Optional[MemoryNode]) -> str:
    if node is None:
        return ""
    attrs = dict(node.attributes)
    if node.style:
        attrs["style"] = node.style
    inner = "".join(_escape(c) for c in node.content)
    return f"<{node.tag}{_attrs_to_str(attrs)}>{inner}</{node.tag}>"


class HtmlSurface(MemorySurface):
    """Memory surface whose content serializes to an HTML fragment."""

    @property
    def html(self) -> str:
        return node_to_html(self.content)
