# notes_tutor/midi/ports.py
import logging
from typing import List, Optional, Sequence

import mido

from notes_tutor.config import DEFAULT_BACKEND
from notes_tutor.errors import DeviceEnumerationError, DeviceOpenError

log = logging.getLogger(__name__)

# message types dropped by each filter, mirroring RtMidi's ignoreTypes()
FILTER_TYPES = {
    "sysex": {"sysex"},
    "timing": {"clock", "quarter_frame"},
    "active_sensing": {"active_sensing"},
}


class MidiPort:
    """Owns one mido port. Use as a context manager so it is always closed."""
    kind = "?"

    def __init__(self, backend=DEFAULT_BACKEND):
        # backend may be a module name or anything with mido.Backend's interface
        self.backend = mido.Backend(backend) if isinstance(backend, str) else backend
        self.port = None
        self.name: Optional[str] = None

    def _names(self) -> List[str]:
        raise NotImplementedError

    def _open(self, name: str):
        raise NotImplementedError

    def list_ports(self) -> List[str]:
        try:
            return list(self._names())
        except Exception as e:
            raise DeviceEnumerationError(f"Unable to list MIDI {self.kind} ports: {e}") from e

    def open(self, index: int):
        names = self.list_ports()
        if not 0 <= index < len(names):
            raise DeviceOpenError(f"No MIDI {self.kind} port #{index + 1} ({len(names)} available)")
        name = names[index]
        try:
            self.port = self._open(name)
        except Exception as e:
            raise DeviceOpenError(f"Unable to open MIDI {self.kind} port '{name}': {e}") from e
        self.name = name
        log.info("Opened MIDI %s port '%s'", self.kind, name)
        return self

    @property
    def is_open(self) -> bool:
        return self.port is not None

    def close(self):
        if self.port is None:
            return
        try:
            self.port.close()
            log.info("Closed MIDI %s port '%s'", self.kind, self.name)
        finally:
            self.port = None

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
        return False


class MidiInputPort(MidiPort):
    kind = "input"

    def __init__(self, backend=DEFAULT_BACKEND):
        super().__init__(backend)
        self.ignored: set = set()

    def _names(self):
        return self.backend.get_input_names()

    def _open(self, name):
        return self.backend.open_input(name)

    def set_filters(self, sysex: bool = False, timing: bool = False, active_sensing: bool = False):
        """Which message kinds to drop. Nothing is dropped by default."""
        flags = {"sysex": sysex, "timing": timing, "active_sensing": active_sensing}
        self.ignored = set().union(*(FILTER_TYPES[k] for k, on in flags.items() if on))

    def poll_message(self) -> Optional[List[int]]:
        """Raw bytes of the next pending message, or None. Never blocks."""
        while True:
            msg = self.port.poll()
            if msg is None:
                return None
            if msg.type in self.ignored:
                continue
            return msg.bytes()


class MidiOutputPort(MidiPort):
    kind = "output"

    def _names(self):
        return self.backend.get_output_names()

    def _open(self, name):
        return self.backend.open_output(name)

    def send(self, data: Sequence[int]):
        self.port.send(mido.Message.from_bytes(list(data)))
