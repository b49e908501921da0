"""
Keyboard input: byte decoding, the input channel and the capture threads
"""

import logging
import os
import queue
import threading
from enum import Enum
from typing import Optional

from . import config

logger = logging.getLogger(__name__)


class Action(Enum):
    """Decoded player input"""
    NONE = 0
    LEFT = 1
    RIGHT = 2
    FIRE = 3
    START = 4
    QUIT = 5
    UNKNOWN = 6


KEYMAP = {
    config.KEY_LEFT: Action.LEFT,
    config.KEY_RIGHT: Action.RIGHT,
    config.KEY_FIRE: Action.FIRE,
    config.KEY_START: Action.START,
    config.KEY_QUIT: Action.QUIT,
    config.KEY_CTRL_C: Action.QUIT,
}


def decode(byte: int) -> Action:
    """Map a key byte to an action; unmapped bytes decode to UNKNOWN"""
    return KEYMAP.get(byte, Action.UNKNOWN)


class InputChannel:
    """One-way queue of key bytes from a capture thread to the tick loop"""

    _CLOSED = object()

    def __init__(self):
        self._queue: "queue.Queue" = queue.Queue()
        self.closed = False

    def put(self, byte: int):
        self._queue.put(byte)

    def close(self):
        """Mark end of input. Bytes already queued are still delivered."""
        self._queue.put(self._CLOSED)

    def poll(self) -> Action:
        """Return the next queued action without blocking (NONE if nothing is waiting)"""
        if self.closed:
            return Action.NONE
        try:
            item = self._queue.get_nowait()
        except queue.Empty:
            return Action.NONE
        if item is self._CLOSED:
            self.closed = True
            logger.info("Input stream closed, no further actions")
            return Action.NONE
        return decode(item)


class StdinReader:
    """Daemon thread that blocks on the terminal and forwards every byte read.

    There is no stop(): the blocking read can't be interrupted, so the thread
    is left to die with the process.
    """

    def __init__(self, channel: InputChannel, fd: Optional[int] = None):
        self.channel = channel
        self.fd = fd if fd is not None else 0
        self.thread = threading.Thread(target=self._run, name="stdin-reader", daemon=True)

    def start(self):
        self.thread.start()

    def _run(self):
        while True:
            try:
                data = os.read(self.fd, 1)
            except OSError as e:
                logger.warning("Input read failed: %s", e)
                break
            if not data:
                break
            self.channel.put(data[0])
        self.channel.close()


class KeyboardListener:
    """pynput listener forwarding character keys as bytes"""

    def __init__(self, channel: InputChannel):
        # pynput connects to the display server on import
        from pynput import keyboard
        self.keys = keyboard.Key
        self.channel = channel
        self.listener = keyboard.Listener(on_press=self._on_key_press)

    def start(self):
        self.listener.start()

    def stop(self):
        self.listener.stop()
        self.channel.close()

    def _on_key_press(self, key):
        """Callback for key press events from pynput"""
        char = getattr(key, "char", None)
        if char and len(char) == 1:
            self.channel.put(ord(char))
        elif key == self.keys.left:
            self.channel.put(config.KEY_LEFT)
        elif key == self.keys.right:
            self.channel.put(config.KEY_RIGHT)
        elif key == self.keys.space:
            self.channel.put(config.KEY_FIRE)
        elif key == self.keys.esc:
            self.channel.put(config.KEY_QUIT)


def make_input(backend: str, channel: InputChannel):
    """Build the capture thread for the chosen backend"""
    if backend == "pynput":
        return KeyboardListener(channel)
    return StdinReader(channel)
