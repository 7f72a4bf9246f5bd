# notes_tutor/notes/model.py
LOWEST_PITCH = 21    # A0
HIGHEST_PITCH = 108  # C8
REFERENCE_OCTAVE = 4

BLACK_SET = {1, 3, 6, 8, 10}


def pitch_class(pitch: int) -> int:
    return (pitch - 12) % 12


def octave_of(pitch: int) -> int:
    return (pitch - 12) // 12


def is_black(pitch: int) -> bool:
    return pitch_class(pitch) in BLACK_SET
