# ========================= notes_tutor/config.py =========================
import enum
from dataclasses import dataclass, field


class Difficulty(enum.Enum):
    EASY = "easy"   # white keys, 4th octave only
    MEDIUM = "med"  # white keys, any octave
    HARD = "hard"   # any key

    @classmethod
    def from_name(cls, name: str) -> "Difficulty":
        for d in cls:
            if d.value == (name or "").strip().lower():
                return d
        return cls.EASY


class Notation(enum.Enum):
    ENGLISH = "english"
    SOLFEGE = "solfege"

    @classmethod
    def from_name(cls, name: str) -> "Notation":
        for n in cls:
            if n.value == (name or "").strip().lower():
                return n
        return cls.ENGLISH


DEFAULT_BACKEND = "mido.backends.pygame"


@dataclass
class QuizConfig:
    difficulty: Difficulty = Difficulty.EASY
    notation: Notation = Notation.ENGLISH


@dataclass
class MidiConfig:
    channel: int = 1
    forward: bool = False
    backend: str = DEFAULT_BACKEND
    poll_interval: float = 0.001  # seconds between empty polls

    def __post_init__(self):
        if not 1 <= int(self.channel) <= 16:
            raise ValueError(f"MIDI channel must be within 1..16, got {self.channel}")
        if self.poll_interval < 0:
            raise ValueError(f"poll interval must not be negative, got {self.poll_interval}")


@dataclass
class AppConfig:
    quiz: QuizConfig = field(default_factory=QuizConfig)
    midi: MidiConfig = field(default_factory=MidiConfig)
