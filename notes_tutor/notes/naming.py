# notes_tutor/notes/naming.py
from typing import Union

from notes_tutor.config import Notation
from notes_tutor.notes.model import octave_of, pitch_class

NAMES_ENGLISH = ["C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B"]
NAMES_SOLFEGE = ["Do", "Do#", "Re", "Re#", "Mi", "Fa", "Fa#", "Sol", "Sol#", "La", "La#", "Ti"]

SUBSCRIPT_ZERO = 0x2080  # '₀'


def subscript(n: int) -> str:
    return "".join(chr(SUBSCRIPT_ZERO + int(d)) for d in str(n))


def pitch_name(pitch: int, notation: Union[Notation, str] = Notation.ENGLISH) -> str:
    """60 -> 'C₄' (english) or 'Do₄' (solfege). Unknown notations read as english."""
    if not isinstance(notation, Notation):
        notation = Notation.from_name(notation)
    table = NAMES_SOLFEGE if notation is Notation.SOLFEGE else NAMES_ENGLISH
    return table[pitch_class(pitch)] + subscript(octave_of(pitch))
