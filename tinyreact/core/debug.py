"""Debug helpers: descriptor tree printing and render-pass tracing.

This module intentionally avoids importing from ``tinyreact.core.engine`` to
prevent circular imports. Trace functions accept any object as the engine
and keep per-engine state in plain attributes.
"""

import time
from collections import deque
from contextvars import ContextVar
from typing import Any, Deque, Dict, List, Optional

from .element import CHILDREN, ElementDescriptor

# ANSI constants (single source for this module)
RESET = "\x1b[0m"
BOLD = "\x1b[1m"
DIM = "\x1b[2m"
FG_GRAY = "\x1b[90m"
FG_YELLOW = "\x1b[33m"
FG_MAGENTA = "\x1b[35m"
FG_CYAN = "\x1b[36m"
FG_BLUE = "\x1b[34m"
FG_GREEN = "\x1b[32m"


def _fmt_val(v: Any, depth: int = 0) -> str:
    if depth > 1:
        return f"{DIM}…{RESET}"
    if v is None or isinstance(v, bool):
        return f"{FG_CYAN}{repr(v)}{RESET}"
    if isinstance(v, (int, float)):
        return f"{FG_BLUE}{repr(v)}{RESET}"
    if isinstance(v, str):
        s = v.replace("\n", "\\n")
        text = s if len(s) <= 60 else s[:57] + "…"
        return f"{FG_YELLOW}{repr(text)}{RESET}"
    if isinstance(v, (list, tuple)):
        return f"{FG_CYAN}[{len(v)}]{RESET}"
    if hasattr(v, "items"):
        items = []
        for i, (k, val) in enumerate(v.items()):
            if i >= 5:
                items.append(f"{DIM}…{RESET}")
                break
            items.append(f"{FG_CYAN}{k}{RESET}={_fmt_val(val, depth + 1)}")
        return "{" + ", ".join(items) + "}"
    if callable(v):
        name = getattr(v, "__name__", None) or type(v).__name__
        return f"{FG_GREEN}<fn {name}>{RESET}"
    return f"{FG_GREEN}<{type(v).__name__}>{RESET}"


def format_tree(node: Any, indent: int = 0) -> List[str]:
    """Lines describing ``node`` (a descriptor or a text child) and its children."""
    pad = "  " * indent
    if not isinstance(node, ElementDescriptor):
        return [f"{pad}{FG_GRAY}-{RESET} {_fmt_val(node)}"]

    name_col = f"{FG_MAGENTA}{node.name}{RESET}"
    key_part = ""
    if node.key is not None:
        key_part = f" {FG_GRAY}key={RESET}{FG_YELLOW}{node.key!r}{RESET}"
    props = {k: v for k, v in node.props.items() if k != CHILDREN}
    props_part = f" {FG_GRAY}props={RESET}{_fmt_val(props)}" if props else ""
    lines = [f"{pad}{FG_GRAY}-{RESET} {name_col}{key_part}{props_part}"]
    for ch in node.children:
        lines.extend(format_tree(ch, indent + 1))
    return lines


def render_tree(node: Any, indent: int = 0) -> None:
    """Pretty-print a descriptor tree to stdout."""
    print("\n".join(format_tree(node, indent)))


# ----------------------------------------------------------------------------
# Pass tracing
#
# Each render pass gets one trace: why it was scheduled (setter reasons
# collected on the engine since the previous pass), which components were
# invoked while resolving the tree, and a summary written at commit or abort.
# ----------------------------------------------------------------------------

_current_pass: ContextVar[Optional[Dict[str, Any]]] = ContextVar(
    "tinyreact_current_pass", default=None
)
_component_depth: ContextVar[int] = ContextVar("tinyreact_component_depth", default=0)
_tracing: bool = False

PASS_HISTORY = 50
_passes: Deque[Dict[str, Any]] = deque(maxlen=PASS_HISTORY)


def record_schedule(engine: Any, reason: Optional[str] = None) -> None:
    """Remember why ``engine`` will run another pass."""
    if not _tracing or not reason:
        return
    pending: List[str] = getattr(engine, "_debug_reasons", [])
    pending.append(reason)
    engine._debug_reasons = pending


def start_trace(engine: Any, root: Any) -> None:
    """Open the trace of the pass ``engine`` is about to run for ``root``."""
    if not _tracing:
        return
    reasons = getattr(engine, "_debug_reasons", [])
    engine._debug_reasons = []
    trace = {
        "engine_id": id(engine),
        "pass": getattr(engine, "pass_count", None),
        "root_name": getattr(root, "__name__", type(root).__name__),
        "reasons": list(reasons),
        "started": time.monotonic(),
        "events": [],
    }
    _passes.append(trace)
    _current_pass.set(trace)
    _component_depth.set(0)


def end_trace(**summary: Any) -> None:
    """Close the open pass trace; ``summary`` is e.g. ``cursor=3`` or ``aborted=True``."""
    trace = _current_pass.get()
    if trace is not None:
        trace.update(summary)
        trace["elapsed"] = time.monotonic() - trace["started"]
    _current_pass.set(None)
    _component_depth.set(0)


def enter_render(component: Any, key: Any = None) -> Any:
    trace = _current_pass.get() if _tracing else None
    if trace is None:
        return None
    depth = _component_depth.get()
    trace["events"].append(
        {
            "kind": "root" if depth == 0 else "nested",
            "depth": depth,
            "name": getattr(component, "__name__", type(component).__name__),
            "key": key,
        }
    )
    return _component_depth.set(depth + 1)


def exit_render(token: Any) -> None:
    if token is not None:
        _component_depth.reset(token)


def last_trace() -> Optional[Dict[str, Any]]:
    return _passes[-1] if _passes else None


def print_last_trace() -> None:
    trace = last_trace()
    if trace is None:
        print(f"{FG_GRAY}[debug]{RESET} no render trace available yet.")
        return
    status = "aborted" if trace.get("aborted") else f"{trace.get('cursor', '?')} hook calls"
    print(f"\n{BOLD}{FG_CYAN}=== pass {trace['pass']} ({status}) ==={RESET}")
    print(f"{FG_GRAY}root:{RESET} {FG_YELLOW}{trace['root_name']}{RESET}")
    for reason in trace["reasons"]:
        print(f"{FG_GRAY}scheduled by:{RESET} {FG_YELLOW}{reason}{RESET}")
    for ev in trace["events"]:
        pad = "  " * ev["depth"]
        key_part = f" key={ev['key']!r}" if ev["key"] is not None else ""
        print(f"{pad}- {FG_MAGENTA}{ev['name']}{RESET}{key_part}")


def enable_tracing() -> None:
    global _tracing
    _tracing = True


def disable_tracing() -> None:
    global _tracing
    _tracing = False


def is_tracing_enabled() -> bool:
    return _tracing


def clear_traces() -> None:
    _passes.clear()
