from tinyreact.core import (
    ComponentInvocationError,
    DescriptorError,
    EffectCallbackError,
    ElementDescriptor,
    HookError,
    MountError,
    RenderEngine,
    TinyReactError,
    component,
    create_element,
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
from tinyreact.host import HtmlSurface, MemorySurface

__all__ = [
    "ComponentInvocationError",
    "DescriptorError",
    "EffectCallbackError",
    "ElementDescriptor",
    "HookError",
    "MountError",
    "RenderEngine",
    "TinyReactError",
    "component",
    "create_element",
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
    "HtmlSurface",
    "MemorySurface",
]
