import pytest

from cub3d.colors import PixelFormat
from cub3d.display import Display, DisplayError, MemoryBackend
from cub3d.events import Event, EventMask, EventType
from cub3d.xpm import XpmError

XK_ESCAPE = 0xFF1B
WIN_SIZE = 242


@pytest.fixture
def backend():
    return MemoryBackend(screen=(800, 600))


@pytest.fixture
def display(backend):
    return Display(backend)


def test_new_window_has_black_canvas(display, backend):
    win = display.new_window(WIN_SIZE, WIN_SIZE, "Title1")
    canvas = backend.canvases[win]
    assert (canvas.width, canvas.height) == (WIN_SIZE, WIN_SIZE)
    assert not any(canvas.data)


def test_windows_listed_newest_first(display):
    win1 = display.new_window(WIN_SIZE, WIN_SIZE, "Title1")
    win2 = display.new_window(WIN_SIZE, WIN_SIZE, "Title2")
    assert display.windows == (win2, win1)


def test_pixel_put_stores_colour(display, backend):
    win = display.new_window(WIN_SIZE, WIN_SIZE, "Title1")
    display.pixel_put(win, 0, 0, 0xFF0000)
    display.pixel_put(win, 241, 120, 0x00FF7F)
    canvas = backend.canvases[win]
    assert canvas.get_pixel(0, 0) == 0xFF0000
    assert canvas.get_pixel(241, 120) == 0x00FF7F


def test_pixel_put_outside_window_draws_nothing(display, backend):
    win = display.new_window(10, 10, "small")
    display.pixel_put(win, 10, 3, 0xFFFFFF)
    display.pixel_put(win, -1, 3, 0xFFFFFF)
    display.pixel_put(win, 9, 3, 0xABCDEF)
    canvas = backend.canvases[win]
    assert canvas.get_pixel(9, 3) == 0xABCDEF
    assert canvas.get_pixel(0, 4) == 0
    assert canvas.get_pixel(9, 2) == 0
    assert canvas.get_pixel(0, 3) == 0


def test_pixel_put_converts_to_16_bit_format(backend):
    fmt = PixelFormat.from_masks(16, 0xF800, 0x07E0, 0x001F)
    display = Display(backend, pixel_format=fmt)
    win = display.new_window(8, 8, "rgb565")
    display.pixel_put(win, 3, 4, 0xFFFFFF)
    assert backend.canvases[win].get_pixel(3, 4) == 0xFFFF
    assert display.color_value(0xFF0000) == 0xF800


def test_color_value_is_identity_at_depth_24(display):
    assert display.color_value(0x123456) == 0x123456


def test_clear_window_blackens_canvas(display, backend):
    win = display.new_window(WIN_SIZE, WIN_SIZE, "Title1")
    display.pixel_put(win, 5, 5, 0xABCDEF)
    display.string_put(win, 5, 121, 0xFF99FF, "String output")
    display.clear_window(win)
    assert not any(backend.canvases[win].data)
    assert backend.texts[win] == []


def test_new_image_layout(display):
    image = display.new_image(42, 42)
    assert image.bits_per_pixel == 32
    assert image.size_line == 168
    assert len(image.data) == 168 * 42


def test_put_image_at_offset(display, backend):
    win = display.new_window(WIN_SIZE, WIN_SIZE, "Title1")
    image = display.new_image(42, 42)
    image.fill(0x00FFFF)
    display.put_image(win, image, 20, 20)
    canvas = backend.canvases[win]
    assert canvas.get_pixel(20, 20) == 0x00FFFF
    assert canvas.get_pixel(61, 61) == 0x00FFFF
    assert canvas.get_pixel(19, 19) == 0
    assert canvas.get_pixel(62, 62) == 0


def test_put_image_is_clipped(display, backend):
    win = display.new_window(WIN_SIZE, WIN_SIZE, "Title1")
    image = display.new_image(WIN_SIZE, WIN_SIZE)
    image.fill(0x112233)
    display.put_image(win, image, 20, 20)
    canvas = backend.canvases[win]
    assert canvas.get_pixel(241, 241) == 0x112233
    assert canvas.get_pixel(19, 241) == 0


def test_string_put_records_text(display, backend):
    win = display.new_window(WIN_SIZE, WIN_SIZE, "Title1")
    display.string_put(win, 5, WIN_SIZE // 2, 0xFF99FF, "String output")
    display.string_put(win, 15, WIN_SIZE // 2 + 20, 0x00FFFF, "MinilibX test")
    assert backend.texts[win] == [
        (5, 121, 0xFF99FF, "String output"),
        (15, 141, 0x00FFFF, "MinilibX test"),
    ]


def test_xpm_to_image(display):
    image = display.xpm_to_image(["2 1 2 1", "a c #FF0000", "b c None", "ab"])
    assert (image.width, image.height) == (2, 1)
    assert image.get_pixel(0, 0) == 0xFF0000
    assert image.get_pixel(1, 0) == 0xFF000000


def test_xpm_file_to_image(display, tmp_path):
    path = tmp_path / "open.xpm"
    path.write_text(
        '/* XPM */\nstatic char *open[] = {\n"1 2 1 1",\n"x c blue",\n"x",\n"x"\n};\n'
    )
    image = display.xpm_file_to_image(path)
    assert (image.width, image.height) == (1, 2)
    assert image.get_pixel(0, 1) == 0x0000FF


def test_xpm_file_missing_raises(display, tmp_path):
    with pytest.raises(XpmError):
        display.xpm_file_to_image(tmp_path / "missing.xpm")


def test_expose_hook_runs_on_first_loop(display, backend):
    win = display.new_window(WIN_SIZE, WIN_SIZE, "Title1")
    image = display.new_image(42, 42)
    image.fill(0x00FF00)
    win.expose_hook(lambda param: display.put_image(win, image, 0, 0))
    display.loop_hook(lambda param: display.loop_end())
    display.loop()
    assert backend.canvases[win].get_pixel(41, 41) == 0x00FF00


def test_escape_in_third_window_destroys_it(display, backend):
    win1 = display.new_window(WIN_SIZE, WIN_SIZE, "Title1")
    win3 = display.new_window(WIN_SIZE, WIN_SIZE, "Title3")
    log = []

    def key_win1(key, param):
        log.append(("win1", key))
        display.loop_end()

    def key_win3(key, param):
        log.append(("win3", key))
        if key == XK_ESCAPE:
            display.destroy_window(win3)

    win1.key_hook(key_win1)
    win3.key_hook(key_win3)
    backend.post(Event(EventType.KEY_RELEASE, win3, keysym=XK_ESCAPE))
    backend.post(Event(EventType.KEY_RELEASE, win3, keysym=ord("a")))
    backend.post(Event(EventType.KEY_RELEASE, win1, keysym=XK_ESCAPE))
    display.loop()
    assert log == [("win3", XK_ESCAPE), ("win1", XK_ESCAPE)]
    assert display.windows == (win1,)
    assert win3 not in backend.canvases


def test_mouse_event_replaces_window(display, backend):
    state = {}
    win2 = display.new_window(600, 600, "win2")
    state["win1"] = display.new_window(300, 300, "win1")
    clicks = []

    def gere_mouse(button, x, y, param):
        clicks.append(button)
        display.destroy_window(state["win1"])
        state["win1"] = display.new_window(123, 45, "new win")
        state["win1"].mouse_hook(gere_mouse)

    first = state["win1"]
    first.mouse_hook(gere_mouse)
    win2.mouse_hook(gere_mouse)
    backend.post(Event(EventType.BUTTON_PRESS, first, button=1, x=3, y=4))
    display.loop_hook(lambda param: display.loop_end())
    display.loop()
    new_win = state["win1"]
    assert clicks == [1]
    assert first not in display.windows
    assert display.windows == (new_win, win2)
    assert (new_win.width, new_win.height, new_win.title) == (123, 45, "new win")
    assert new_win.event_mask() == EventMask.BUTTON_PRESS


def test_close_request_runs_destroy_hook(display, backend):
    win = display.new_window(50, 50, "closable")
    closed = []

    def on_close(param):
        closed.append(param)
        display.destroy_window(win)

    win.hook(EventType.DESTROY_NOTIFY, EventMask.STRUCTURE_NOTIFY, on_close, "bye")
    backend.post(Event(EventType.CLIENT_MESSAGE, win, delete_window=True))
    display.loop()
    assert closed == ["bye"]
    assert display.windows == ()


def test_loop_hook_receives_param(display):
    win = display.new_window(10, 10, "w")
    seen = []

    def tick(param):
        seen.append(param)
        if len(seen) == 3:
            display.loop_end()

    display.loop_hook(tick, "frame")
    display.loop()
    assert seen == ["frame", "frame", "frame"]
    assert display.windows == (win,)


def test_loop_end_before_loop_skips_events(display, backend):
    win = display.new_window(10, 10, "w")
    keys = []
    win.key_hook(lambda key, param: keys.append(key))
    backend.post(Event(EventType.KEY_RELEASE, win, keysym=97))
    display.loop_end()
    display.loop()
    assert keys == []


def test_flush_events_discards_pending(display, backend):
    win = display.new_window(10, 10, "w")
    keys = []
    win.key_hook(lambda key, param: keys.append(key))
    backend.post(Event(EventType.KEY_RELEASE, win, keysym=97))
    display.flush_events()
    display.loop_hook(lambda param: display.loop_end())
    display.loop()
    assert keys == []


def test_loop_without_windows_returns(display):
    calls = []
    display.loop_hook(lambda param: calls.append(param))
    display.loop()
    assert calls == []


def test_screen_size(display):
    assert display.screen_size() == (800, 600)


def test_destroy_unknown_window_raises(display, backend):
    other = Display(MemoryBackend()).new_window(10, 10, "other")
    with pytest.raises(DisplayError):
        display.destroy_window(other)


def test_drawing_to_closed_window_raises(display):
    win = display.new_window(10, 10, "w")
    display.destroy_window(win)
    with pytest.raises(DisplayError):
        display.pixel_put(win, 1, 1, 0xFFFFFF)


def test_close_shuts_backend_down(backend):
    with Display(backend) as display:
        display.new_window(10, 10, "w")
    assert backend.closed is True
    assert display.windows == ()
    assert backend.canvases == {}