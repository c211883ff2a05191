# tinyreact/core/__init__.py
from .element import ElementDescriptor, create_element, component
from .engine import MountRecord, RenderEngine, text_content
from .errors import (
    ComponentInvocationError,
    DescriptorError,
    EffectCallbackError,
    HookError,
    MountError,
    TinyReactError,
)
from .runtime import (
    get_default_engine,
    hooks,
    render,
    set_default_engine,
    unmount,
    use_callback,
    use_effect,
    use_memo,
    use_reducer,
    use_state,
)

__all__ = [
    "ElementDescriptor",
    "create_element",
    "component",
    "MountRecord",
    "RenderEngine",
    "text_content",
    "ComponentInvocationError",
    "DescriptorError",
    "EffectCallbackError",
    "HookError",
    "MountError",
    "TinyReactError",
    "get_default_engine",
    "hooks",
    "render",
    "set_default_engine",
    "unmount",
    "use_callback",
    "use_effect",
    "use_memo",
    "use_reducer",
    "use_state",
]
