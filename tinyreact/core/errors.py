from typing import Any, Optional


class TinyReactError(RuntimeError):
    pass


class HookError(TinyReactError):
    """A hook was called outside of a render pass."""


class MountError(TinyReactError):
    """No usable mount: missing root/surface, or nothing mounted yet."""


class DescriptorError(TinyReactError):
    """A component produced something the engine cannot build."""


class ComponentInvocationError(TinyReactError):
    def __init__(self, component: Any, cause: BaseException) -> None:
        name = getattr(component, "__qualname__", None) or repr(component)
        super().__init__(f"component <{name}> raised {type(cause).__name__}: {cause}")
        self.component = component
        self.cause = cause


class EffectCallbackError(TinyReactError):
    def __init__(
        self, callback: Any, cause: BaseException, *, slot: Optional[int] = None
    ) -> None:
        name = getattr(callback, "__qualname__", None) or repr(callback)
        where = f" (slot {slot})" if slot is not None else ""
        super().__init__(f"effect {name}{where} raised {type(cause).__name__}: {cause}")
        self.callback = callback
        self.cause = cause
        self.slot = slot
