from tinyreact import HtmlSurface, component, create_element, get_default_engine, render, use_effect, use_state


@component
def Counter(log):
    count, set_count = use_state(0)

    def on_mount():
        set_count(1)
        log.append("mounted")

    use_effect(on_mount, [])
    use_effect(lambda: log.append("count: " + str(count)), [count])
    return create_element("div", {"style": {"color": "red"}}, "count is ", count)


def test_mount_effect_drives_a_second_pass():
    log = []
    surface = HtmlSurface()

    render(lambda: Counter(log=log), surface)

    engine = get_default_engine()
    assert log == ["mounted", "count: 0", "count: 1"]
    assert engine.pass_count == 2
    assert engine.cursor == 3
    assert "1" in surface.text
    assert surface.html == '<div style="color:red">count is 1</div>'


def test_round_trip_from_spec_example():
    surface = HtmlSurface()
    render(lambda: create_element("div", {"style": {"color": "red"}}, "hello"), surface)
    old = surface.content

    render(lambda: create_element("div", {"style": {"color": "red"}}, "hello"), surface)
    assert surface.content.tag == "div"
    assert surface.content.style == {"color": "red"}
    assert surface.content.text == "hello"
    assert old.parent is None
