from typing import Any, Mapping, Protocol, Union, runtime_checkable


@runtime_checkable
class HostSurface(Protocol):
    """Mutation capabilities the render engine consumes.

    The engine builds a fresh node each pass and hands it to
    ``replace_content``; it never patches a node that is already mounted.
    """

    def create_node(self, tag: str) -> Any: ...

    def set_style_properties(self, node: Any, styles: Mapping[str, Any]) -> None: ...

    def set_attribute(self, node: Any, key: str, value: Any) -> None: ...

    def append_text_content(self, node: Any, text: Union[str, int, float]) -> None: ...

    def replace_content(self, node: Any) -> None: ...
