from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Any, Callable, Optional

from fastapi import FastAPI, Response
from fastapi.responses import HTMLResponse, JSONResponse

from tinyreact.config import Settings
from tinyreact.core.engine import RenderEngine
from .state import PreviewState
from .templates import render_page
from .ws_endpoint import ChannelName, register_ws_routes

logger = logging.getLogger(__name__)


def create_app(
    root: Callable[[], Any],
    *,
    settings: Optional[Settings] = None,
    engine: Optional[RenderEngine] = None,
    title: str = "tinyreact",
) -> FastAPI:
    """Create the preview app. ``root`` is mounted into an ``HtmlSurface``
    during ``lifespan`` and every commit is pushed to ``/ws`` clients.
    """
    if settings is None:
        settings = Settings.from_env()
    state = PreviewState(engine=engine or RenderEngine.from_settings(settings))

    # ---------- lifespan (startup/shutdown) ----------
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        server_loop = asyncio.get_running_loop()

        def _on_commit(_node) -> None:
            message = state.snapshot()
            server_loop.call_soon_threadsafe(
                lambda: asyncio.ensure_future(
                    state.broadcast.publish(ChannelName.HTML, message)
                )
            )

        state.surface.subscribe(_on_commit)
        state.engine.render(root, state.surface)
        logger.info("preview mounted <%s>", getattr(root, "__name__", root))

        try:
            yield
        finally:
            state.surface.unsubscribe(_on_commit)
            state.engine.unmount()

    app = FastAPI(lifespan=lifespan)
    app.state.preview = state

    async def _handle_message(msg: dict) -> None:
        if msg.get("t") == "rerender":
            state.engine.render()
        else:
            logger.debug("ignoring message %r", msg)

    register_ws_routes(
        app,
        broadcast=state.broadcast,
        snapshot=state.snapshot,
        handle_message=_handle_message,
    )

    @app.get("/favicon.ico")
    async def favicon():
        return Response(status_code=204, media_type="image/x-icon")

    @app.get("/html")
    async def current_html():
        return JSONResponse(state.snapshot())

    @app.get("/")
    async def index():
        return HTMLResponse(render_page(state.surface.html, title=title))

    return app
