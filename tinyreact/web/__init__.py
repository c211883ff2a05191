from typing import Any, Callable, Optional

from tinyreact.config import Settings, configure_logging


def run_web(
    root: Callable[[], Any],
    *,
    host: Optional[str] = None,
    port: Optional[int] = None,
    settings: Optional[Settings] = None,
    **uvicorn_kwargs,
):
    import uvicorn
    from tinyreact.web.server import create_app

    settings = settings or Settings.from_env()
    configure_logging(settings)
    app = create_app(root, settings=settings)
    uvicorn.run(
        app,
        host=host or settings.host,
        port=port or settings.port,
        **uvicorn_kwargs,
    )


__all__ = ["run_web"]
