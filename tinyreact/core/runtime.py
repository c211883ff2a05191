# runtime.py -------------------------------------------------
"""Process-wide entry points.

``render`` mounts into one shared default engine; the hook functions always
dispatch to the engine whose pass is currently running, so components work
unchanged under any engine.
"""
from typing import Any, Callable, Optional

from .engine import RenderEngine, current_engine

_default_engine: Optional[RenderEngine] = None


def get_default_engine() -> RenderEngine:
    global _default_engine
    if _default_engine is None:
        _default_engine = RenderEngine()
    return _default_engine


def set_default_engine(engine: Optional[RenderEngine]) -> None:
    """Replace the shared engine; ``None`` unmounts it and starts fresh on next use."""
    global _default_engine
    if _default_engine is not None and _default_engine is not engine:
        _default_engine.unmount()
    _default_engine = engine


def render(root: Optional[Callable[[], Any]] = None, surface: Any = None) -> None:
    get_default_engine().render(root, surface)


def unmount() -> None:
    get_default_engine().unmount()


class _HookProxy:

    def __getattr__(self, name):
        # resolve against the engine running the current pass
        engine = current_engine()
        if not name.startswith("use_"):
            raise AttributeError(name)
        return getattr(engine, name)


hooks = _HookProxy()


def use_state(initial):
    return current_engine().use_state(initial)


def use_effect(effect_fn, deps=None) -> None:
    current_engine().use_effect(effect_fn, deps)


def use_reducer(reducer, initial, *, init_fn=None):
    return current_engine().use_reducer(reducer, initial, init_fn=init_fn)


def use_memo(factory, deps=None):
    return current_engine().use_memo(factory, deps)


def use_callback(fn, deps=None):
    return current_engine().use_callback(fn, deps)
