# notes_tutor/midi/select.py
from typing import Callable

from notes_tutor.errors import DeviceEnumerationError, InvalidDeviceSelection
from notes_tutor.midi.ports import MidiPort

PROMPTS = {
    "input": "Which MIDI device to read from? ",
    "output": "Which MIDI device to output to? ",
}


def choose_port(port: MidiPort, read: Callable[[str], str] = input,
                write: Callable[[str], None] = print) -> int:
    """List the ports of ``port`` and return the 0-based index picked by the user.

    The user types a 1-based number. A single port is picked without asking.
    """
    names = port.list_ports()
    write(f"{len(names)} MIDI {port.kind} sources available")
    for i, name in enumerate(names, 1):
        write(f" - {port.kind.capitalize()} Port #{i}: {name}")

    if not names:
        raise DeviceEnumerationError(f"No MIDI {port.kind} ports available")
    if len(names) == 1:
        return 0

    answer = read(PROMPTS[port.kind])
    try:
        choice = int(str(answer).strip())
    except ValueError:
        raise InvalidDeviceSelection(f"Invalid MIDI device selected: {answer!r}") from None
    if not 1 <= choice <= len(names):
        raise InvalidDeviceSelection(f"Invalid MIDI device selected: {choice}")
    return choice - 1


def open_selected(port: MidiPort, read: Callable[[str], str] = input,
                  write: Callable[[str], None] = print) -> MidiPort:
    return port.open(choose_port(port, read=read, write=write))
