import pytest
from PIL import Image

from pixview import config
from pixview.app import Application, format_title, show
from pixview.errors import UnsupportedFormat
from pixview.input_handler import InputHandler
from pixview.types import ViewerConfig
from pixview.viewport import ViewportEngine

from conftest import FakeDisplay, solid


def make_app(display, size=(4, 4), **options):
    cfg = ViewerConfig(**options)
    w, h = display.size()
    engine = ViewportEngine(solid(*size, 0xFF808080), w, h, cfg)
    return Application(display, engine, "img.png", cfg, InputHandler())


def test_format_title():
    assert format_title("a/b.png", solid(640, 480, 0), 75) == "a/b.png [640x480 75%]"


def test_quit_key_stops_and_closes():
    display = FakeDisplay(keys=[[], [config.KEY_Q]])
    app = make_app(display)
    app.run()
    assert not app.running
    assert display.closed == 1
    assert display.frame == 1


def test_zoom_updates_image_and_title():
    display = FakeDisplay(keys=[[config.KEY_EQUAL], [config.KEY_ESCAPE]])
    make_app(display).run()
    assert display.titles == ["img.png [4x4 100%]", "img.png [4x4 105%]"]
    assert len(display.images) == 2
    # the second image is centered in the 200x200 window
    image, x, y = display.images[1]
    assert image.size == (4, 4)
    assert (x, y) == (98, 98)


def test_pan_only_moves_image():
    display = FakeDisplay(keys=[[config.KEY_LEFT], [config.KEY_RIGHT], [config.KEY_Q]])
    make_app(display, size=(300, 100), scale=100).run()
    assert len(display.images) == 1
    assert display.moves == [(-40, 50), (-50, 50)]


def test_window_close_request():
    display = FakeDisplay()
    display.close_requested = True
    make_app(display).run()
    assert display.frame == 0
    assert display.closed == 1


def test_resize_replaces_image():
    display = FakeDisplay(keys=[[], [], [config.KEY_Q]], resizes={1: (100, 100)})
    app = make_app(display, size=(100, 100))
    app.run()
    assert app.engine.window.size == (100, 100)
    assert display.moves == [(0, 0)]


def test_exit_on_focus_loss():
    display = FakeDisplay(keys=[[]] * 10, focus=[False, True, True, False])
    make_app(display, exit_unfocus=True).run()
    assert display.frame == 3
    assert display.closed == 1


def test_focus_loss_ignored_by_default():
    display = FakeDisplay(keys=[[], [], [config.KEY_Q]], focus=[False, False, False])
    make_app(display).run()
    assert display.frame == 2


def test_display_closed_on_error():
    class Broken(FakeDisplay):
        def poll_keys(self):
            raise RuntimeError("input died")

    display = Broken()
    with pytest.raises(RuntimeError):
        make_app(display).run()
    assert display.closed == 1


def test_show_runs_viewer(tmp_path):
    path = tmp_path / "pic.png"
    Image.new("RGB", (20, 10), (1, 2, 3)).save(path)
    display = FakeDisplay(size=(800, 600), keys=[[config.KEY_Q]])

    show(str(path), lambda: display)

    assert display.opened
    assert display.titles[0] == "pixview - pic.png"
    assert display.titles[1] == f"{path} [20x10 100%]"
    assert display.closed == 1


def test_show_does_not_open_window_for_bad_file(tmp_path):
    path = tmp_path / "junk.png"
    path.write_bytes(b"definitely not an image")
    created = []

    with pytest.raises(UnsupportedFormat):
        show(str(path), lambda: created.append(1) or FakeDisplay())
    assert created == []
