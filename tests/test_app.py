import json
import pytest
from glidepath import Click, ClockReadError, MotionController, Quit, RenderError, VisualizerSettings
from glidepath import app
from glidepath.errors import InitializationError


class ScriptedInput:
    """Returns one pre-built event batch per poll, then empty batches."""

    def __init__(self, batches):
        self.batches = list(batches)

    def poll(self):
        return self.batches.pop(0) if self.batches else []


class StepClock:
    def __init__(self, step=0.1):
        self.step = step
        self.value = 0.0

    def now(self):
        self.value += self.step
        return self.value


class CountingRenderer:
    def __init__(self, fail_on_present=None):
        self.presents = 0
        self.fail_on_present = fail_on_present

    def clear(self, color):
        pass

    def fill_rect(self, rect, color):
        pass

    def draw_polyline(self, points, color):
        pass

    def present(self):
        if self.fail_on_present is not None and self.presents + 1 >= self.fail_on_present:
            raise RenderError("present failed: device lost")
        self.presents += 1


def make_controller():
    return MotionController((512.0, 360.0), start_time=0.0)


# --------------------- run_loop ---------------------

def test_quit_stops_before_rendering_that_frame():
    """A Quit drained in frame 3 means exactly two frames were presented."""
    renderer = CountingRenderer()
    source = ScriptedInput([[], [Click(100.0, 100.0)], [Quit()], [Click(5.0, 5.0)]])

    frames = app.run_loop(make_controller(), StepClock(), source, renderer, VisualizerSettings())

    assert frames == 2
    assert renderer.presents == 2


def test_loop_processes_clicks_before_rendering():
    ctl = make_controller()
    seen = []

    class Probe(CountingRenderer):
        def present(self):
            seen.append(tuple(ctl.target))
            super().present()

    source = ScriptedInput([[Click(100.0, 100.0)], [], [Quit()]])
    app.run_loop(ctl, StepClock(), source, Probe(), VisualizerSettings())

    assert seen == [(100.0, 100.0), (100.0, 100.0)]


def test_loop_propagates_clock_failure():
    class BrokenClock:
        def now(self):
            raise ClockReadError("Cannot read monotonic clock: gone")

    with pytest.raises(ClockReadError):
        app.run_loop(make_controller(), BrokenClock(), ScriptedInput([]), CountingRenderer(), VisualizerSettings())


def test_loop_propagates_render_failure():
    renderer = CountingRenderer(fail_on_present=3)

    with pytest.raises(RenderError):
        app.run_loop(make_controller(), StepClock(), ScriptedInput([]), renderer, VisualizerSettings())
    assert renderer.presents == 2


# --------------------- run ---------------------

def test_run_exits_zero_on_quit(mocker):
    backend = mocker.patch.object(app, "PygameBackend")
    backend.return_value.open.return_value = CountingRenderer()
    mocker.patch.object(app, "PygameInputSource", return_value=ScriptedInput([[], [Quit()]]))

    assert app.run(VisualizerSettings()) == 0
    backend.return_value.close.assert_called_once()


def test_run_exits_one_on_initialization_error(mocker):
    backend = mocker.patch.object(app, "PygameBackend")
    backend.return_value.open.side_effect = InitializationError("no display")
    loop = mocker.patch.object(app, "run_loop")

    assert app.run(VisualizerSettings()) == 1
    loop.assert_not_called()


def test_run_closes_backend_on_render_error(mocker):
    backend = mocker.patch.object(app, "PygameBackend")
    backend.return_value.open.return_value = CountingRenderer(fail_on_present=1)
    mocker.patch.object(app, "PygameInputSource", return_value=ScriptedInput([]))

    assert app.run(VisualizerSettings()) == 1
    backend.return_value.close.assert_called_once()


def test_run_closes_backend_on_clock_error_in_loop(mocker):
    backend = mocker.patch.object(app, "PygameBackend")
    backend.return_value.open.return_value = CountingRenderer()
    mocker.patch.object(app.MonotonicClock, "now", side_effect=[0.0, ClockReadError("gone")])

    assert app.run(VisualizerSettings()) == 1
    backend.return_value.close.assert_called_once()


def test_clock_unavailable_at_startup_is_initialization_error(mocker):
    """The window is never opened when the first clock reading fails."""
    backend = mocker.patch.object(app, "PygameBackend")
    mocker.patch.object(app.MonotonicClock, "now", side_effect=ClockReadError("gone"))
    loop = mocker.patch.object(app, "run_loop")
    error = mocker.spy(app.log, "error")

    assert app.run(VisualizerSettings()) == 1
    backend.return_value.open.assert_not_called()
    loop.assert_not_called()
    assert error.call_args.args[0].startswith("Initialization failed")


def test_read_start_time_wraps_clock_failure():
    class BrokenClock:
        def now(self):
            raise ClockReadError("Cannot read monotonic clock: gone")

    with pytest.raises(InitializationError, match="Clock unavailable at startup"):
        app.read_start_time(BrokenClock())


# --------------------- backend ---------------------

def test_backend_opens_dummy_display():
    settings = VisualizerSettings(window_width=320, window_height=200, title="test")
    backend = app.PygameBackend(settings)

    renderer = backend.open()
    try:
        assert renderer.surface.get_size() == (320, 200)
    finally:
        backend.close()


def test_backend_open_failure_is_initialization_error(mocker):
    import pygame
    mocker.patch("pygame.display.set_mode", side_effect=pygame.error("No available video device"))

    with pytest.raises(InitializationError, match="No available video device"):
        app.PygameBackend(VisualizerSettings()).open()


# --------------------- CLI ---------------------

def test_cli_overrides_preset(tmp_path):
    preset = tmp_path / "p.json"
    preset.write_text(json.dumps({"segment_duration": 3.0, "window_width": 800}))

    args = app.parse_args(["--preset", str(preset), "--width", "640", "--fps", "30"])
    settings = app.build_settings(args)

    assert settings.window_width == 640
    assert settings.segment_duration == 3.0
    assert settings.max_fps == 30


def test_main_rejects_bad_settings(mocker):
    run = mocker.patch.object(app, "run")

    assert app.main(["--duration", "-1"]) == 2
    run.assert_not_called()


def test_main_rejects_out_of_range_color_preset(tmp_path, mocker):
    """A color channel above 255 is a settings error, caught before the window opens."""
    preset = tmp_path / "p.json"
    preset.write_text(json.dumps({"path_color": [300, 0, 0, 255]}))
    run = mocker.patch.object(app, "run")

    assert app.main(["--preset", str(preset)]) == 2
    run.assert_not_called()


def test_main_runs_with_parsed_settings(mocker):
    run = mocker.patch.object(app, "run", return_value=0)

    assert app.main(["--resolution", "50"]) == 0
    assert run.call_args.args[0].path_resolution == 50
