"""
Entry point: terminal setup, the tick loop, signal handling and exit codes
"""

import curses
import logging
import random
import signal
import sys
import threading
import time
from typing import List, Optional

from . import config
from .controls import InputChannel, make_input
from .errors import SetupError
from .game import Game
from .log import setup_logging
from .render import Renderer

logger = logging.getLogger("terminvaders")


def watch_signals(stop: threading.Event):
    """Turn SIGINT/SIGTERM into a stop request for the tick loop"""
    def handler(signum, frame):
        logger.info("Received signal %d", signum)
        stop.set()

    signal.signal(signal.SIGINT, handler)
    signal.signal(signal.SIGTERM, handler)


def terminal_size(stdscr):
    """Width and height of the terminal in cells, checked against the minimum"""
    try:
        height, width = stdscr.getmaxyx()
    except curses.error as e:
        raise SetupError(f"Could not get terminal size: {e}") from e
    if width < config.MIN_WIDTH or height < config.MIN_HEIGHT:
        raise SetupError(
            f"Terminal size must be at least {config.MIN_WIDTH}x{config.MIN_HEIGHT}.\n"
            f"Current size: {width}x{height}")
    return width, height


def run(stdscr, options, stop: threading.Event):
    """Game loop, called by curses.wrapper"""
    width, height = terminal_size(stdscr)
    logger.info("Terminal is %dx%d", width, height)

    renderer = Renderer(stdscr)
    channel = InputChannel()
    try:
        capture = make_input(options.input, channel)
    except ImportError as e:
        raise SetupError(f"Keyboard capture unavailable: {e}") from e
    capture.start()

    game = Game(width, height, random.Random(options.seed))
    try:
        while not stop.is_set():
            start_time = time.time()

            frame = game.tick(channel.poll())
            if frame.quit:
                break
            renderer.draw(frame)

            # Maintain frame rate
            elapsed = time.time() - start_time
            sleep_time = config.FRAME_TIME - elapsed
            if sleep_time > 0:
                time.sleep(sleep_time)
    finally:
        stop_capture = getattr(capture, "stop", None)
        if stop_capture is not None:
            stop_capture()


def main(argv: Optional[List[str]] = None) -> int:
    options = config.parse_args(argv)
    setup_logging(options.log_file, options.log_level)
    logger.info("Starting terminvaders (input=%s, seed=%s)", options.input, options.seed)

    stop = threading.Event()
    watch_signals(stop)

    try:
        curses.wrapper(run, options, stop)
    except (SetupError, curses.error) as e:
        logger.error("Setup failed: %s", e)
        print(f"Error: {e}")
        return 1
    except Exception:
        logger.exception("Unhandled error in game loop")
        raise
    finally:
        logger.info("Game shutting down")

    print("Thank you for playing!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
