"""Entry point: options, setup failures, logging and the tick loop."""

import curses
import logging
import threading

import pytest

from terminvaders import __main__ as entry
from terminvaders import config
from terminvaders.errors import SetupError
from terminvaders.game import Phase
from terminvaders.log import setup_logging

pytestmark = pytest.mark.unit


class FakeScreen:
    def __init__(self, height=40, width=120, error=False):
        self.size = (height, width)
        self.error = error

    def getmaxyx(self):
        if self.error:
            raise curses.error("no terminal")
        return self.size


class FakeRenderer:
    def __init__(self, stdscr):
        self.frames = []
        FakeRenderer.last = self

    def draw(self, frame):
        self.frames.append(frame)


class ScriptedInput:
    """Capture backend that queues a fixed key sequence when started"""

    def __init__(self, channel, keys):
        self.channel = channel
        self.keys = keys
        self.stopped = False

    def start(self):
        for key in self.keys:
            self.channel.put(key)

    def stop(self):
        self.stopped = True


class DetachedInput(ScriptedInput):
    """Backend with no stop(), like the stdin reader"""
    stop = None


# ---------------------------------------------------------------------------
# Options
# ---------------------------------------------------------------------------

def test_default_options():
    options = config.parse_args([])
    assert options.seed is None
    assert options.input == "stdin"
    assert options.log_file == config.DEFAULT_LOG_FILE
    assert options.log_level == "INFO"


def test_options():
    options = config.parse_args(["--seed", "3", "--input", "pynput", "--log-level", "DEBUG"])
    assert (options.seed, options.input, options.log_level) == (3, "pynput", "DEBUG")


def test_unknown_backend_rejected():
    with pytest.raises(SystemExit):
        config.parse_args(["--input", "joystick"])


# ---------------------------------------------------------------------------
# Terminal geometry
# ---------------------------------------------------------------------------

def test_terminal_size():
    assert entry.terminal_size(FakeScreen(24, 80)) == (80, 24)


@pytest.mark.parametrize("height, width", [(23, 80), (24, 79)])
def test_terminal_too_small(height, width):
    with pytest.raises(SetupError, match="at least 80x24"):
        entry.terminal_size(FakeScreen(height, width))


def test_terminal_size_unavailable():
    with pytest.raises(SetupError, match="Could not get terminal size"):
        entry.terminal_size(FakeScreen(error=True))


# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

def test_setup_logging_writes_to_file(tmp_path):
    path = tmp_path / "game.log"
    logger = setup_logging(str(path), "DEBUG")
    logging.getLogger("terminvaders.game").debug("wave %d", 3)
    for handler in logger.handlers:
        handler.flush()
    assert "terminvaders.game: wave 3" in path.read_text()


def test_setup_logging_replaces_handlers(tmp_path):
    setup_logging(str(tmp_path / "a.log"))
    logger = setup_logging(str(tmp_path / "b.log"))
    assert len(logger.handlers) == 1


# ---------------------------------------------------------------------------
# Tick loop and exit codes
# ---------------------------------------------------------------------------

def run_scripted(monkeypatch, keys, stop=None, backend=ScriptedInput):
    inputs = []

    def make_input(name, channel):
        inputs.append(backend(channel, keys))
        return inputs[0]

    monkeypatch.setattr(entry, "Renderer", FakeRenderer)
    monkeypatch.setattr(entry, "make_input", make_input)
    monkeypatch.setattr(config, "FRAME_TIME", 0.0)
    options = config.parse_args(["--seed", "1"])
    entry.run(FakeScreen(), options, stop or threading.Event())
    return FakeRenderer.last.frames, inputs[0]


def test_loop_runs_until_quit(monkeypatch):
    frames, capture = run_scripted(monkeypatch, b"sq")
    assert [f.phase for f in frames] == [Phase.PLAYING]
    assert capture.stopped is True


def test_loop_stops_on_signal(monkeypatch):
    stop = threading.Event()
    stop.set()
    frames, capture = run_scripted(monkeypatch, b"s", stop)
    assert frames == []
    assert capture.stopped is True


def test_backend_without_stop_is_left_running(monkeypatch):
    frames, capture = run_scripted(monkeypatch, b"sq", backend=DetachedInput)
    assert [f.phase for f in frames] == [Phase.PLAYING]
    assert capture.stopped is False


def test_missing_keyboard_backend_is_a_setup_error(monkeypatch):
    def make_input(backend, channel):
        raise ImportError("no display")

    monkeypatch.setattr(entry, "Renderer", FakeRenderer)
    monkeypatch.setattr(entry, "make_input", make_input)
    with pytest.raises(SetupError, match="Keyboard capture unavailable"):
        entry.run(FakeScreen(), config.parse_args([]), threading.Event())


def test_main_setup_failure_exits_1(monkeypatch, tmp_path, capsys):
    def wrapper(func, *args):
        raise SetupError("Could not get terminal size: boom")

    monkeypatch.setattr(entry, "watch_signals", lambda stop: None)
    monkeypatch.setattr(entry.curses, "wrapper", wrapper)
    assert entry.main(["--log-file", str(tmp_path / "t.log")]) == 1
    assert "Error: Could not get terminal size: boom" in capsys.readouterr().out


def test_main_quit_exits_0(monkeypatch, tmp_path, capsys):
    monkeypatch.setattr(entry, "watch_signals", lambda stop: None)
    monkeypatch.setattr(entry.curses, "wrapper", lambda func, *args: None)
    assert entry.main(["--log-file", str(tmp_path / "t.log")]) == 0
    assert "Thank you for playing!" in capsys.readouterr().out

