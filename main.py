from tinyreact import HtmlSurface, component, render, use_effect, use_state
from tinyreact.config import Settings, configure_logging
from tinyreact.core.debug import enable_tracing, print_last_trace
from tinyreact.html import div


@component
def Counter(log):
    count, set_count = use_state(0)

    def on_mount():
        log.append("mounted")
        set_count(1)

    use_effect(on_mount, [])
    use_effect(lambda: log.append(f"count: {count}"), [count])
    return div("count is ", count, style={"color": "red"}, class_="counter")


if __name__ == "__main__":
    configure_logging(Settings.from_env())
    enable_tracing()

    log: list = []
    surface = HtmlSurface()
    surface.subscribe(lambda _node: print(surface.html))
    render(lambda: Counter(log=log), surface)

    print(log)
    print_last_trace()
