from __future__ import annotations

from dataclasses import dataclass, field

from tinyreact.core.engine import RenderEngine
from tinyreact.host.html import HtmlSurface
from .broadcast import InMemoryBroadcast


@dataclass
class PreviewState:
    engine: RenderEngine
    surface: HtmlSurface = field(default_factory=lambda: HtmlSurface("preview"))
    broadcast: InMemoryBroadcast = field(default_factory=InMemoryBroadcast)

    def snapshot(self) -> dict:
        return {
            "channel": "html",
            "type": "html",
            "html": self.surface.html,
            "commits": self.surface.commits,
        }
