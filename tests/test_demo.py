from main_web import Status

from tinyreact.host.memory import MemorySurface


def test_status_demo_mounts(engine):
    surface = MemorySurface()
    engine.render(Status, surface)

    assert engine.pass_count == 2
    assert surface.content.tag == "div"
    assert surface.content.attributes == {"data_role": "status"}
    assert surface.text.startswith("host ")
    assert "…" not in surface.text
    assert ", up since " in surface.text
