# notes_tutor/midi/classifier.py
from dataclasses import dataclass
from typing import Sequence, Union

NOTE_ON = 0x90  # channel 1; channel n is NOTE_ON + (n - 1)


@dataclass(frozen=True)
class NoteOnPressed:
    pitch: int
    velocity: int


@dataclass(frozen=True)
class Other:
    pass


OTHER = Other()

MidiEvent = Union[NoteOnPressed, Other]


def note_on_status(channel: int) -> int:
    return NOTE_ON + (int(channel) - 1)


def classify(data: Sequence[int], channel: int = 1) -> MidiEvent:
    """Judge one raw message on its own.

    Only a 3-byte Note-On for ``channel`` with a non-zero velocity is a press;
    many keyboards send Note-On with velocity 0 instead of Note-Off.
    """
    if len(data) != 3:
        return OTHER
    status, pitch, velocity = data
    if status != note_on_status(channel) or velocity == 0:
        return OTHER
    return NoteOnPressed(pitch=int(pitch), velocity=int(velocity))
