# notes_tutor/notes/sampler.py
import random
from typing import List, Optional

from notes_tutor.config import Difficulty
from notes_tutor.notes.model import (
    LOWEST_PITCH, HIGHEST_PITCH, REFERENCE_OCTAVE, is_black, pitch_class,
)

ALL_KEYS: List[int] = list(range(LOWEST_PITCH, HIGHEST_PITCH + 1))
WHITE_KEYS: List[int] = [p for p in ALL_KEYS if not is_black(p)]


class PitchSampler:
    """Picks the pitch the player is asked for.

    White keys are drawn straight from a precomputed pool, which is uniform
    over the white keys of the 88-key range and needs no retry loop.
    Easy keeps the pitch class of that draw and moves it into the reference
    octave, so only C4..B4 come out.
    """
    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    def sample(self, difficulty: Difficulty) -> int:
        if difficulty is Difficulty.HARD:
            return self.rng.choice(ALL_KEYS)

        pitch = self.rng.choice(WHITE_KEYS)
        if difficulty is Difficulty.EASY:
            pitch = pitch_class(pitch) + 12 + 12 * REFERENCE_OCTAVE
        return pitch
