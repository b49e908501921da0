"""Key decoding and the input channel between capture thread and tick loop."""

import os
import types

import pytest

from terminvaders.controls import (Action, InputChannel, KeyboardListener, StdinReader, decode,
                                   make_input)

pytestmark = pytest.mark.unit


@pytest.mark.parametrize("key, action", [
    (b"a", Action.LEFT),
    (b"d", Action.RIGHT),
    (b"w", Action.FIRE),
    (b"s", Action.START),
    (b"q", Action.QUIT),
    (b"\x03", Action.QUIT),
    (b"x", Action.UNKNOWN),
    (b"A", Action.UNKNOWN),
    (b"\x1b", Action.UNKNOWN),
])
def test_decode(key, action):
    assert decode(key[0]) is action


def test_poll_without_input_returns_none():
    assert InputChannel().poll() is Action.NONE


def test_one_action_per_poll_in_arrival_order():
    channel = InputChannel()
    for key in b"adw":
        channel.put(key)
    assert [channel.poll() for _ in range(4)] == [Action.LEFT, Action.RIGHT, Action.FIRE, Action.NONE]


def test_unknown_bytes_still_take_a_poll():
    channel = InputChannel()
    channel.put(ord("z"))
    channel.put(ord("s"))
    assert channel.poll() is Action.UNKNOWN
    assert channel.poll() is Action.START
    assert channel.poll() is Action.NONE


def test_close_delivers_pending_input_first():
    channel = InputChannel()
    channel.put(ord("s"))
    channel.close()
    channel.put(ord("q"))

    assert channel.poll() is Action.START
    assert channel.closed is False
    assert channel.poll() is Action.NONE
    assert channel.closed is True
    # Nothing is read after the end of the stream
    assert channel.poll() is Action.NONE


def test_stdin_reader_forwards_bytes_then_closes():
    read_fd, write_fd = os.pipe()
    os.write(write_fd, b"sdq")
    os.close(write_fd)

    channel = InputChannel()
    reader = StdinReader(channel, fd=read_fd)
    reader.start()
    reader.thread.join(timeout=5)
    os.close(read_fd)

    assert not reader.thread.is_alive()
    assert [channel.poll() for _ in range(4)] == [Action.START, Action.RIGHT, Action.QUIT, Action.NONE]
    assert channel.closed is True


def test_stdin_is_the_default_backend():
    assert isinstance(make_input("stdin", InputChannel()), StdinReader)


def test_listener_maps_special_keys_to_bytes():
    listener = KeyboardListener.__new__(KeyboardListener)
    listener.keys = types.SimpleNamespace(left="left", right="right", space="space", esc="esc")
    listener.channel = InputChannel()

    for key in [types.SimpleNamespace(char="w"), "left", "right", "space", "esc", "shift"]:
        listener._on_key_press(key)

    assert [listener.channel.poll() for _ in range(6)] == [
        Action.FIRE, Action.LEFT, Action.RIGHT, Action.FIRE, Action.QUIT, Action.NONE]
