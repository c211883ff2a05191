from .base import HostSurface
from .html import HtmlSurface, node_to_html
from .memory import MemoryNode, MemorySurface

__all__ = ["HostSurface", "HtmlSurface", "node_to_html", "MemoryNode", "MemorySurface"]
