import logging
from typing import Any, Callable, Dict, List, Mapping, Optional, Union

logger = logging.getLogger(__name__)


class MemoryNode:
    def __init__(self, tag: str) -> None:
        self.tag = tag
        self.style: Dict[str, Any] = {}
        self.attributes: Dict[str, Any] = {}
        self.content: List[Union[str, int, float]] = []
        self.parent: Optional["MemorySurface"] = None

    @property
    def text(self) -> str:
        return "".join(str(c) for c in self.content)

    @property
    def attached(self) -> bool:
        return self.parent is not None

    def __repr__(self) -> str:
        return f"<MemoryNode {self.tag} text={self.text!r}>"


class MemorySurface:
    """In-memory host surface.

    - ``content`` is the single mounted node (or ``None``)
    - ``replace_content`` detaches the previous node (``node.parent is None``)
    - ``subscribe(cb)``/``unsubscribe(cb)`` register callbacks invoked with the
      new node after each commit.
    """

    node_factory = MemoryNode

    def __init__(self, name: str = "root") -> None:
        self.name = name
        self.content: Optional[MemoryNode] = None
        self.commits: int = 0
        self._subs: List[Callable[[MemoryNode], None]] = []

    # ---------------- Host capabilities ----------------
    def create_node(self, tag: str) -> MemoryNode:
        return self.node_factory(tag)

    def set_style_properties(self, node: MemoryNode, styles: Mapping[str, Any]) -> None:
        node.style.update(styles)

    def set_attribute(self, node: MemoryNode, key: str, value: Any) -> None:
        node.attributes[key] = value

    def append_text_content(self, node: MemoryNode, text: Union[str, int, float]) -> None:
        node.content.append(text)

    def replace_content(self, node: MemoryNode) -> None:
        previous = self.content
        if previous is not None:
            previous.parent = None
        node.parent = self
        self.content = node
        self.commits += 1

        for cb in list(self._subs):
            try:
                cb(node)
            except Exception:
                logger.exception("surface %r subscriber failed", self.name)

    # ---------------- Public API ----------------
    @property
    def text(self) -> str:
        return self.content.text if self.content is not None else ""

    def subscribe(self, cb: Callable[[MemoryNode], None]) -> None:
        if cb not in self._subs:
            self._subs.append(cb)

    def unsubscribe(self, cb: Callable[[MemoryNode], None]) -> None:
        try:
            self._subs.remove(cb)
        except ValueError:
            pass

    def __repr__(self) -> str:
        return f"<MemorySurface {self.name} commits={self.commits} content={self.content!r}>"
