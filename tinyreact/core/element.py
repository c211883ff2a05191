# element.py -------------------------------------------------
from dataclasses import dataclass, field
from functools import wraps
from types import MappingProxyType
from typing import Any, Callable, Mapping, Optional, Tuple, Union

Kind = Union[str, Callable[..., Any]]

CHILDREN = "children"
STYLE = "style"


def _freeze(props: Optional[Mapping[str, Any]]) -> Mapping[str, Any]:
    data = dict(props or {})
    children = data.get(CHILDREN)
    if isinstance(children, list):
        data[CHILDREN] = tuple(children)
    if isinstance(data.get(STYLE), Mapping):
        data[STYLE] = MappingProxyType(dict(data[STYLE]))
    return MappingProxyType(data)


@dataclass(frozen=True)
class ElementDescriptor:
    """Immutable description of one node.

    ``kind`` is a host tag name or a component function. ``props`` is a
    read-only mapping; ``children`` and ``style`` are reserved keys, every
    other key passes through to the host untouched.
    """

    kind: Kind
    props: Mapping[str, Any] = field(default_factory=dict)
    key: Optional[Any] = None

    def __post_init__(self):
        object.__setattr__(self, "props", _freeze(self.props))

    @property
    def is_component(self) -> bool:
        return callable(self.kind)

    @property
    def children(self) -> Tuple[Any, ...]:
        if CHILDREN not in self.props:
            return ()
        value = self.props[CHILDREN]
        if isinstance(value, (list, tuple)):
            return tuple(value)
        # a single child is coerced into a one-element sequence
        return (value,)

    @property
    def style(self) -> Mapping[str, Any]:
        return self.props.get(STYLE) or {}

    @property
    def attributes(self) -> Mapping[str, Any]:
        return {k: v for k, v in self.props.items() if k not in (CHILDREN, STYLE)}

    @property
    def name(self) -> str:
        if isinstance(self.kind, str):
            return self.kind
        return getattr(self.kind, "__name__", type(self.kind).__name__)

    def to_dict(self) -> dict:
        """JSON-friendly form; component kinds are rendered by qualified name."""
        if isinstance(self.kind, str):
            kind = self.kind
        else:
            kind = getattr(self.kind, "__qualname__", self.name)
        out: dict = {"kind": kind, "props": {}}
        if self.key is not None:
            out["key"] = self.key
        for k, v in self.props.items():
            if k == CHILDREN:
                out["props"][k] = [_child_to_data(ch) for ch in self.children]
            elif k == STYLE:
                out["props"][k] = dict(v)
            else:
                out["props"][k] = v
        return out

    def __repr__(self) -> str:
        key = f" key={self.key!r}" if self.key is not None else ""
        return f"<{self.name}{key} props={sorted(self.props)}>"


def _child_to_data(child: Any) -> Any:
    if isinstance(child, ElementDescriptor):
        return child.to_dict()
    return child


def create_element(
    kind: Kind, props: Optional[Mapping[str, Any]] = None, *children: Any
) -> ElementDescriptor:
    """Build a descriptor. Positional children override ``props["children"]``."""
    if not isinstance(kind, str) and not callable(kind):
        raise TypeError(f"element kind must be a tag name or a callable, got {kind!r}")
    data = dict(props or {})
    key = data.pop("key", None)
    if children:
        data[CHILDREN] = tuple(children)
    return ElementDescriptor(kind, data, key)


def component(fn):
    """Calling the decorated function returns a descriptor instead of rendering.

    The engine invokes the undecorated ``fn(**props)`` when it resolves the
    descriptor during a render pass.
    """

    @wraps(fn)
    def wrapper(*children, key=None, **props):
        if children:
            props[CHILDREN] = tuple(children)
        return ElementDescriptor(fn, props, key)

    wrapper.__tinyreact_component__ = fn
    return wrapper
