import logging

import pytest

from tinyreact.core.engine import RenderEngine
from tinyreact.core.errors import EffectCallbackError
from tinyreact.core.runtime import use_effect, use_state
from tinyreact.html import div


class Harness:
    def __init__(self, deps_fn):
        self.deps_fn = deps_fn
        self.runs = 0
        self.value = 0

    def __call__(self):
        def effect():
            self.runs += 1

        use_effect(effect, self.deps_fn(self.value))
        return div(self.value)


def test_empty_deps_runs_on_first_pass_only(engine, surface):
    h = Harness(lambda v: [])
    engine.render(h, surface)
    for v in range(1, 4):
        h.value = v
        engine.render()
    assert h.runs == 1


def test_deps_run_only_when_a_dependency_changes(engine, surface):
    h = Harness(lambda v: [v])
    engine.render(h, surface)
    assert h.runs == 1

    engine.render()
    assert h.runs == 1

    h.value = 1
    engine.render()
    assert h.runs == 2

    engine.render()
    assert h.runs == 2


def test_missing_deps_run_every_pass(engine, surface):
    h = Harness(lambda v: None)
    engine.render(h, surface)
    engine.render()
    engine.render()
    assert h.runs == 3


def test_deps_compared_pairwise_up_to_shorter_length(engine, surface):
    h = Harness(lambda v: [1] if v == 0 else [1, v])
    engine.render(h, surface)
    h.value = 5
    engine.render()
    assert h.runs == 1


def test_effects_run_after_commit_in_call_order(engine, surface):
    log = []

    def App():
        use_effect(lambda: log.append(("first", surface.text)), [])
        use_effect(lambda: log.append(("second", surface.text)), [])
        log.append(("render", surface.text))
        return div("painted")

    engine.render(App, surface)
    assert log == [("render", ""), ("first", "painted"), ("second", "painted")]
    assert engine.effects == []


def test_setter_in_effect_starts_new_pass_after_flush(engine, surface):
    log = []

    def App():
        value, set_value = use_state(0)

        def bump():
            log.append(f"bump from {value}")
            set_value(value + 1)
            log.append("bump done")

        use_effect(bump, [])
        use_effect(lambda: log.append(f"tail {value}"), [value])
        log.append(f"render {value}")
        return div(value)

    engine.render(App, surface)
    assert log == [
        "render 0",
        "bump from 0",
        "bump done",
        "tail 0",
        "render 1",
        "tail 1",
    ]
    assert engine.pass_count == 2


def test_each_distinct_set_in_one_flush_gets_its_own_pass(engine, surface):
    def App():
        a, set_a = use_state(0)
        b, set_b = use_state(0)

        def both():
            set_a(1)
            set_b(1)

        use_effect(both, [])
        return div(a, b)

    engine.render(App, surface)
    assert engine.pass_count == 3
    assert surface.text == "11"


def test_cleanup_runs_before_rerun_and_on_unmount(engine, surface):
    log = []
    value = {"v": 0}

    def App():
        v = value["v"]

        def effect():
            log.append(f"setup {v}")
            return lambda: log.append(f"cleanup {v}")

        use_effect(effect, [v])
        return div(v)

    engine.render(App, surface)
    value["v"] = 1
    engine.render()
    engine.unmount()
    assert log == ["setup 0", "cleanup 0", "setup 1", "cleanup 1"]


def test_effect_deps_of_aborted_pass_are_rolled_back(engine, surface):
    runs = []
    state = {"v": 0, "fail": False}

    def App():
        v = state["v"]
        use_effect(lambda: runs.append(v), [v])
        if state["fail"]:
            raise RuntimeError("after hooks")
        return div(v)

    engine.render(App, surface)
    state.update(v=1, fail=True)
    with pytest.raises(Exception):
        engine.render()
    assert runs == [0]

    state["fail"] = False
    engine.render()
    assert runs == [0, 1]


def test_isolated_effect_error_is_logged_and_flush_continues(engine, surface, caplog):
    log = []

    def broken():
        raise ValueError("effect failed")

    def App():
        use_effect(broken, [])
        use_effect(lambda: log.append("after"), [])
        return div("x")

    with caplog.at_level(logging.ERROR, logger="tinyreact.core.engine"):
        engine.render(App, surface)

    assert log == ["after"]
    assert len(engine.effect_errors) == 1
    err = engine.effect_errors[0]
    assert isinstance(err.cause, ValueError)
    assert err.slot == 0
    assert "effect failed" in caplog.text


def test_raise_policy_stops_flush_and_drops_pending_passes(surface):
    engine = RenderEngine(on_effect_error="raise")
    log = []

    def stop():
        raise ValueError("stop")

    def App():
        value, set_value = use_state(0)
        use_effect(lambda: set_value(1), [])
        use_effect(stop, [])
        use_effect(lambda: log.append("skipped?"), [])
        return div(value)

    with pytest.raises(EffectCallbackError) as info:
        engine.render(App, surface)

    assert isinstance(info.value.__cause__, ValueError)
    assert log == []
    assert engine.pass_count == 1
    assert surface.text == "0"
    assert not engine.rendering
    assert engine.effects == []


def test_invalid_policy_rejected():
    with pytest.raises(ValueError):
        RenderEngine(on_effect_error="ignore")  # type: ignore[arg-type]


def test_effects_skipped_by_raise_policy_run_on_a_later_pass(surface):
    engine = RenderEngine(on_effect_error="raise")
    log = []

    def stop():
        raise ValueError("stop")

    def App():
        use_effect(stop, [])
        use_effect(lambda: log.append("later"), [])
        return div("x")

    with pytest.raises(EffectCallbackError):
        engine.render(App, surface)
    assert log == []

    engine.render()
    engine.render()
    assert log == ["later"]
