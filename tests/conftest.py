import pytest

from tinyreact.core import debug
from tinyreact.core.engine import RenderEngine
from tinyreact.core.runtime import set_default_engine
from tinyreact.host.html import HtmlSurface
from tinyreact.host.memory import MemorySurface


@pytest.fixture
def engine():
    eng = RenderEngine()
    yield eng
    eng.unmount()


@pytest.fixture
def surface():
    return MemorySurface()


@pytest.fixture
def html_surface():
    return HtmlSurface()


@pytest.fixture(autouse=True)
def _isolate_globals():
    set_default_engine(None)
    debug.disable_tracing()
    debug.clear_traces()
    yield
    set_default_engine(None)
    debug.disable_tracing()
    debug.clear_traces()
