# engine.py --------------------------------------------------
import logging
from collections import deque
from contextvars import ContextVar
from dataclasses import dataclass
from typing import Any, Callable, Deque, List, Literal, Optional, Tuple

from .debug import enable_tracing, end_trace, enter_render, exit_render, record_schedule, start_trace
from .element import CHILDREN, STYLE, ElementDescriptor
from .errors import (
    ComponentInvocationError,
    DescriptorError,
    EffectCallbackError,
    HookError,
    MountError,
)

logger = logging.getLogger(__name__)

EffectErrorPolicy = Literal["isolate", "raise"]

# engine whose pass is currently invoking components (read by the hook proxy)
_active_engine: ContextVar[Optional["RenderEngine"]] = ContextVar(
    "tinyreact_active_engine", default=None
)

_MISSING: Any = object()


def current_engine() -> "RenderEngine":
    engine = _active_engine.get()
    if engine is None:
        raise HookError("hooks can only be called while a component is rendering.")
    return engine


def _same(a: Any, b: Any) -> bool:
    return a is b or bool(a == b)


def _deps_changed(old: Any, new: Optional[Tuple[Any, ...]]) -> bool:
    if old is _MISSING or old is None or new is None:
        return True
    # pairwise up to the shorter list; mismatched lengths are not validated
    return any(not _same(a, b) for a, b in zip(old, new))


def _is_text(value: Any) -> bool:
    return isinstance(value, (str, int, float)) and not isinstance(value, bool)


def text_content(node: Any) -> str:
    """Flattened text of a resolved child."""
    if _is_text(node):
        return str(node)
    if isinstance(node, ElementDescriptor):
        return "".join(text_content(ch) for ch in node.children)
    return ""


@dataclass(frozen=True)
class MountRecord:
    root: Callable[[], Any]
    surface: Any


@dataclass(frozen=True)
class _PassRequest:
    root: Optional[Callable[[], Any]]
    surface: Any
    reason: str


class RenderEngine:
    """Render session: hook store, cursor, effect queue and the active mount.

    Hooks are bound to slots by call order, so a component must call them in
    the same sequence on every pass. This is not checked.

    Passes run synchronously and never interleave: a state change made while
    a pass (or its effect flush) is running queues another full pass that
    starts once the current one has finished.
    """

    def __init__(self, *, on_effect_error: EffectErrorPolicy = "isolate") -> None:
        if on_effect_error not in ("isolate", "raise"):
            raise ValueError(
                f"on_effect_error must be 'isolate' or 'raise', got {on_effect_error!r}"
            )
        self.on_effect_error: EffectErrorPolicy = on_effect_error

        self.hooks: list = []
        self.cursor: int = 0
        self.effects: List[Tuple[int, Callable[[], Any], Any]] = []
        self.effect_errors: List[EffectCallbackError] = []
        self.pass_count: int = 0

        self._mount: Optional[MountRecord] = None
        self._pending: Deque[_PassRequest] = deque()
        self._rendering: bool = False
        self._effect_slots: set[int] = set()
        self._generation: int = 0

    @classmethod
    def from_settings(cls, settings) -> "RenderEngine":
        if settings.trace:
            enable_tracing()
        return cls(on_effect_error=settings.effect_errors)

    # ---------------- Introspection ----------------
    @property
    def mount(self) -> Optional[MountRecord]:
        return self._mount

    @property
    def mounted(self) -> bool:
        return self._mount is not None

    @property
    def rendering(self) -> bool:
        return self._rendering

    @property
    def slots(self) -> tuple:
        return tuple(self.hooks)

    # ---------------- Hooks ----------------
    def use_state(self, initial):
        idx = self.cursor
        if idx >= len(self.hooks):
            self.hooks.append(initial)
        generation = self._generation

        def set_state(val):
            if generation != self._generation:  # engine was unmounted
                return
            if callable(val):
                val = val(self.hooks[idx])
            if not _same(val, self.hooks[idx]):
                self.hooks[idx] = val
                self._schedule(f"use_state[{idx}] set -> {val!r}")

        self.cursor += 1
        return self.hooks[idx], set_state

    def use_reducer(self, reducer, initial, *, init_fn=None):
        """
        Semantics similar to React.useReducer:
        - reducer(state, action) -> new_state
        - initial: initial state, used only on the first pass
        - init_fn (optional): lazy initializer init_fn(initial) -> state
        """
        idx = self.cursor
        if idx >= len(self.hooks):
            state0 = init_fn(initial) if init_fn is not None else initial
            self.hooks.append((state0, reducer))
        else:
            state, old_reducer = self.hooks[idx]
            if old_reducer is not reducer:  # dispatch uses the latest reducer
                self.hooks[idx] = (state, reducer)
        generation = self._generation

        def dispatch(action):
            if generation != self._generation:
                return
            s, r = self.hooks[idx]
            new_state = r(s, action)
            if not _same(new_state, s):
                self.hooks[idx] = (new_state, r)
                self._schedule(f"use_reducer[{idx}] dispatch {action!r} -> {new_state!r}")

        self.cursor += 1
        return self.hooks[idx][0], dispatch

    def use_effect(self, effect_fn, deps=None):
        deps_key = None if deps is None else tuple(deps)
        idx = self.cursor

        if idx >= len(self.hooks):  # first registration
            self.hooks.append((None, _MISSING))
            self._effect_slots.add(idx)
        cleanup, old_deps = self.hooks[idx]
        if _deps_changed(old_deps, deps_key):
            self.hooks[idx] = (cleanup, deps_key)
            self.effects.append((idx, effect_fn, old_deps))

        self.cursor += 1

    def use_memo(self, factory, deps=None):
        deps_key = None if deps is None else tuple(deps)
        idx = self.cursor

        if idx >= len(self.hooks):
            self.hooks.append((factory(), deps_key))
        else:
            _value, old_deps = self.hooks[idx]
            if _deps_changed(old_deps, deps_key):
                self.hooks[idx] = (factory(), deps_key)

        self.cursor += 1
        return self.hooks[idx][0]

    def use_callback(self, fn, deps=None):
        return self.use_memo(lambda: fn, deps)

    # ---------------- Rendering ----------------
    def render(self, root: Optional[Callable[[], Any]] = None, surface: Any = None) -> None:
        """Render ``root`` into ``surface``; with no arguments re-render the mount."""
        if root is None and surface is None:
            if self._mount is None:
                raise MountError("render() without arguments needs an active mount.")
            request = _PassRequest(None, None, "render()")
        else:
            if not callable(root):
                raise MountError(f"root component must be callable, got {root!r}")
            if surface is None:
                raise MountError("render() needs a target surface.")
            request = _PassRequest(root, surface, "mount")

        record_schedule(self, request.reason)
        self._pending.append(request)
        if not self._rendering:
            self._drain()

    def _schedule(self, reason: str) -> None:
        if self._mount is None:
            return
        record_schedule(self, reason)
        self._pending.append(_PassRequest(None, None, reason))
        if not self._rendering:
            self._drain()

    def _drain(self) -> None:
        self._rendering = True
        try:
            while self._pending:
                self._run_pass(self._pending.popleft())
        except BaseException:
            self._pending.clear()
            raise
        finally:
            self._rendering = False

    def _run_pass(self, request: _PassRequest) -> None:
        self.cursor = 0
        if request.root is not None:
            new_mount = MountRecord(request.root, request.surface)
            if self._mount is not None and new_mount != self._mount:
                # a different root or surface starts a fresh hook store
                self._dispose_hooks()
            self._mount = new_mount
        mount = self._mount
        if mount is None:  # unmounted while the request was queued
            return
        self.pass_count += 1
        self.effects = []
        logger.debug("pass %d started (%s)", self.pass_count, request.reason)

        start_trace(self, mount.root)
        token = _active_engine.set(self)
        try:
            tree = self._resolve_root(mount.root)
            node = self._build(mount.surface, tree)
            mount.surface.replace_content(node)
        except BaseException:
            self._abort_pass()
            end_trace(aborted=True)
            raise
        finally:
            _active_engine.reset(token)

        end_trace(cursor=self.cursor, effects=len(self.effects))
        logger.debug("pass %d committed; %d hook calls", self.pass_count, self.cursor)

        self._flush_effects()

    def _abort_pass(self) -> None:
        self._restore_deps(self.effects)
        self.effects = []

    def _restore_deps(self, entries) -> None:
        # put back the dependency lists staged for effects that never ran,
        # so they fire on the next pass
        for idx, _fn, old_deps in reversed(entries):
            cleanup, _deps = self.hooks[idx]
            self.hooks[idx] = (cleanup, old_deps)

    def _call(self, fn: Callable[..., Any], props: dict) -> Any:
        try:
            return fn(**props)
        except ComponentInvocationError:
            raise
        except Exception as exc:
            raise ComponentInvocationError(fn, exc) from exc

    def _resolve_root(self, root: Callable[[], Any]) -> ElementDescriptor:
        depth_token = enter_render(root)
        try:
            return self._resolve_top(self._call(root, {}), root)
        finally:
            exit_render(depth_token)

    def _resolve_top(self, output: Any, owner: Any) -> ElementDescriptor:
        if isinstance(output, ElementDescriptor) and output.is_component:
            depth_token = enter_render(output.kind, output.key)
            try:
                rendered = self._call(output.kind, dict(output.props))
                return self._resolve_top(rendered, output.kind)
            finally:
                exit_render(depth_token)
        if not isinstance(output, ElementDescriptor):
            name = getattr(owner, "__name__", repr(owner))
            raise DescriptorError(
                f"<{name}> returned {type(output).__name__}; expected an ElementDescriptor"
            )
        return self._resolve_host(output)

    def _resolve_host(self, desc: ElementDescriptor) -> ElementDescriptor:
        if not isinstance(desc.kind, str):
            raise DescriptorError(
                f"element kind must be a tag name or a component, got {desc.kind!r}"
            )
        if CHILDREN not in desc.props:
            return desc
        children: list = []
        for child in desc.children:
            self._resolve_child(child, children)
        props = dict(desc.props)
        props[CHILDREN] = tuple(children)
        return ElementDescriptor(desc.kind, props, desc.key)

    def _resolve_child(self, child: Any, out: list) -> None:
        if child is None or isinstance(child, bool):
            return
        if _is_text(child):
            out.append(child)
        elif isinstance(child, (list, tuple)):
            for item in child:
                self._resolve_child(item, out)
        elif isinstance(child, ElementDescriptor):
            if child.is_component:
                depth_token = enter_render(child.kind, child.key)
                try:
                    self._resolve_child(self._call(child.kind, dict(child.props)), out)
                finally:
                    exit_render(depth_token)
            else:
                out.append(self._resolve_host(child))
        else:
            raise DescriptorError(f"cannot render child of type {type(child).__name__}")

    def _build(self, surface: Any, tree: ElementDescriptor) -> Any:
        node = surface.create_node(tree.kind)
        for key, value in tree.props.items():
            if key == STYLE:
                surface.set_style_properties(node, dict(value or {}))
            elif key == CHILDREN:
                for child in tree.children:
                    if isinstance(child, ElementDescriptor):
                        # nested elements are not mounted as separate host nodes
                        child = text_content(child)
                    surface.append_text_content(node, child)
            else:
                surface.set_attribute(node, key, value)
        return node

    def _flush_effects(self) -> None:
        queue, self.effects = self.effects, []
        generation = self._generation
        for pos, (idx, effect_fn, _old_deps) in enumerate(queue):
            if generation != self._generation:  # an effect unmounted the engine
                break
            try:
                self._run_effect(idx, effect_fn)
            except EffectCallbackError:
                if generation == self._generation:
                    self._restore_deps(queue[pos + 1 :])
                raise

    def _run_effect(self, idx: int, effect_fn: Callable[[], Any]) -> None:
        cleanup, deps = self.hooks[idx]
        try:
            if cleanup is not None:
                cleanup()
            result = effect_fn()
        except Exception as exc:
            self.hooks[idx] = (None, deps)
            error = EffectCallbackError(effect_fn, exc, slot=idx)
            if self.on_effect_error == "raise":
                raise error from exc
            logger.exception("%s", error)
            self.effect_errors.append(error)
            return
        self.hooks[idx] = (result if callable(result) else None, deps)

    # ---------------- Lifecycle ----------------
    def _dispose_hooks(self) -> None:
        for idx in sorted(self._effect_slots):
            cleanup, _deps = self.hooks[idx]
            if cleanup is None:
                continue
            try:
                cleanup()
            except Exception:
                logger.exception("effect cleanup for slot %d failed", idx)
        self.hooks.clear()
        self._effect_slots.clear()
        self._generation += 1  # setters captured before this point become no-ops

    def unmount(self) -> None:
        """Run effect cleanups and forget the mount; the surface is left as is."""
        self._dispose_hooks()
        self.effects = []
        self._pending.clear()
        self._mount = None
        self.cursor = 0
