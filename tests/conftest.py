# tests/conftest.py
import signal
from collections import deque

import mido
import pytest


class ScriptedInput:
    """Stands in for MidiInputPort: hands out queued messages, then None.

    Items may be callables, evaluated when polled, so a test can answer with
    the pitch the session has just picked.
    """
    def __init__(self, script=(), when_empty=None):
        self.script = deque(script)
        self.when_empty = when_empty
        self.polls = 0

    def poll_message(self):
        self.polls += 1
        if not self.script:
            if self.when_empty:
                self.when_empty()
            return None
        item = self.script.popleft()
        return item() if callable(item) else item


class RecordingOutput:
    def __init__(self, fail=False):
        self.sent = []
        self.fail = fail

    def send(self, data):
        if self.fail:
            raise IOError("device unplugged")
        self.sent.append(list(data))


class FakeMidoPort:
    def __init__(self, name, messages=()):
        self.name = name
        self.messages = deque(messages)
        self.sent = []
        self.closed = False
        self.on_empty = None

    def poll(self):
        if self.messages:
            return self.messages.popleft()
        if self.on_empty:
            self.on_empty()
        return None

    def send(self, msg):
        self.sent.append(msg)

    def close(self):
        self.closed = True


class FakeBackend:
    """Same surface as mido.Backend, backed by in-memory ports."""
    def __init__(self, inputs=(), outputs=(), fail_list=False, fail_open=False):
        self.inputs = list(inputs)
        self.outputs = list(outputs)
        self.fail_list = fail_list
        self.fail_open = fail_open
        self.opened = []
        self.pending = {}
        self.on_empty = None

    def get_input_names(self):
        if self.fail_list:
            raise OSError("no MIDI subsystem")
        return self.inputs

    def get_output_names(self):
        if self.fail_list:
            raise OSError("no MIDI subsystem")
        return self.outputs

    def _open(self, name):
        if self.fail_open:
            raise OSError("port busy")
        port = FakeMidoPort(name, self.pending.get(name, ()))
        port.on_empty = self.on_empty
        self.opened.append(port)
        return port

    def open_input(self, name):
        return self._open(name)

    def open_output(self, name):
        return self._open(name)


def msg(*data):
    return mido.Message.from_bytes(list(data))


def raise_sigint():
    signal.raise_signal(signal.SIGINT)


@pytest.fixture
def log_dir(tmp_path, monkeypatch):
    monkeypatch.setenv("NOTES_TUTOR_LOG_DIR", str(tmp_path))
    return tmp_path
