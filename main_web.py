import platform
import time

from tinyreact import component, use_effect, use_memo, use_state
from tinyreact.html import div
from tinyreact.web import run_web


@component
def Status():
    started = use_memo(lambda: time.strftime("%H:%M:%S"), [])
    host, set_host = use_state("…")

    use_effect(lambda: set_host(platform.node() or "unknown"), [])
    return div(
        "host ", host, ", up since ", started,
        style={"font_family": "monospace"},
        data_role="status",
    )


if __name__ == "__main__":
    run_web(Status)
