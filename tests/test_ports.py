# tests/test_ports.py
import mido
import pytest

from notes_tutor.errors import DeviceEnumerationError, DeviceOpenError
from notes_tutor.midi.ports import MidiInputPort, MidiOutputPort

from conftest import FakeBackend, msg


def test_list_ports():
    backend = FakeBackend(inputs=["Keystation 49"], outputs=["Synth A", "Synth B"])
    assert MidiInputPort(backend).list_ports() == ["Keystation 49"]
    assert MidiOutputPort(backend).list_ports() == ["Synth A", "Synth B"]


def test_list_failure_is_enumeration_error():
    with pytest.raises(DeviceEnumerationError):
        MidiInputPort(FakeBackend(fail_list=True)).list_ports()


def test_open_bad_index():
    port = MidiInputPort(FakeBackend(inputs=["A"]))
    with pytest.raises(DeviceOpenError):
        port.open(1)
    assert not port.is_open


def test_open_failure_is_open_error():
    with pytest.raises(DeviceOpenError):
        MidiOutputPort(FakeBackend(outputs=["A"], fail_open=True)).open(0)


def test_context_manager_closes():
    backend = FakeBackend(inputs=["A"])
    with MidiInputPort(backend) as port:
        port.open(0)
        assert port.name == "A"
    assert backend.opened[0].closed
    assert not port.is_open


def test_closed_even_on_error():
    backend = FakeBackend(inputs=["A"])
    with pytest.raises(RuntimeError):
        with MidiInputPort(backend) as port:
            port.open(0)
            raise RuntimeError("boom")
    assert backend.opened[0].closed


def test_poll_returns_raw_bytes():
    backend = FakeBackend(inputs=["A"])
    backend.pending["A"] = [msg(0x90, 60, 64), msg(0x80, 60, 0)]
    port = MidiInputPort(backend).open(0)

    assert port.poll_message() == [0x90, 60, 64]
    assert port.poll_message() == [0x80, 60, 0]
    assert port.poll_message() is None


def test_nothing_filtered_by_default():
    backend = FakeBackend(inputs=["A"])
    backend.pending["A"] = [mido.Message("clock"), mido.Message("active_sensing")]
    port = MidiInputPort(backend).open(0)

    assert port.poll_message() == [0xF8]
    assert port.poll_message() == [0xFE]


def test_filters_drop_message_kinds():
    backend = FakeBackend(inputs=["A"])
    backend.pending["A"] = [
        mido.Message("clock"),
        mido.Message("sysex", data=[1, 2, 3]),
        mido.Message("active_sensing"),
        msg(0x90, 64, 10),
    ]
    port = MidiInputPort(backend).open(0)
    port.set_filters(sysex=True, timing=True, active_sensing=True)

    assert port.poll_message() == [0x90, 64, 10]
    assert port.poll_message() is None


def test_send_parses_bytes():
    backend = FakeBackend(outputs=["Synth"])
    port = MidiOutputPort(backend).open(0)

    port.send([0x90, 60, 64])

    sent = backend.opened[0].sent
    assert len(sent) == 1
    assert sent[0].type == "note_on" and sent[0].note == 60 and sent[0].velocity == 64
