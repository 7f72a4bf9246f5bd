# notes_tutor/app.py
import enum
import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional, Sequence

from notes_tutor.config import Difficulty, Notation
from notes_tutor.errors import NoAccuracyData
from notes_tutor.midi.classifier import NoteOnPressed, classify
from notes_tutor.notes.naming import pitch_name
from notes_tutor.notes.sampler import PitchSampler

log = logging.getLogger(__name__)


class CancelToken:
    """Stop flag for the quiz loop. set() is a plain attribute write, so a signal handler may call it."""
    def __init__(self):
        self.cancelled = False

    def set(self):
        self.cancelled = True

    def is_set(self) -> bool:
        return self.cancelled


class RoundState(enum.Enum):
    AWAITING_PRESS = "awaiting_press"
    ROUND_COMPLETE = "round_complete"


@dataclass
class SessionStats:
    asked: int = 0
    correct: int = 0

    def record(self, correct: bool):
        self.asked += 1
        if correct:
            self.correct += 1

    def accuracy(self) -> float:
        if self.asked == 0:
            raise NoAccuracyData("no rounds completed")
        return 100.0 * self.correct / self.asked


@dataclass(frozen=True)
class RoundResult:
    target: int
    pressed: int

    @property
    def correct(self) -> bool:
        return self.pressed == self.target


class QuizSession:
    """Ask for a pitch, wait for the player to press a key, score it, repeat.

    ``midi_in`` needs ``poll_message() -> list[int] | None``; ``midi_out``
    (optional) needs ``send(bytes)`` and gets every incoming message as is.
    The loop runs until ``cancel`` is set; a round cut short that way is not counted.
    """
    def __init__(self, midi_in, channel: int = 1,
                 difficulty: Difficulty = Difficulty.EASY,
                 notation: Notation = Notation.ENGLISH, *,
                 midi_out=None,
                 sampler: Optional[PitchSampler] = None,
                 cancel: Optional[CancelToken] = None,
                 poll_interval: float = 0.001,
                 on_prompt: Optional[Callable[[str], None]] = None,
                 on_result: Optional[Callable[[RoundResult], None]] = None):
        self.midi_in = midi_in
        self.midi_out = midi_out
        self.channel = channel
        self.difficulty = difficulty
        self.notation = notation
        self.sampler = sampler or PitchSampler()
        self.cancel = cancel if cancel is not None else CancelToken()
        self.poll_interval = poll_interval
        self.on_prompt = on_prompt
        self.on_result = on_result

        self.stats = SessionStats()
        self.state = RoundState.AWAITING_PRESS
        self.target: Optional[int] = None

    def stop(self):
        self.cancel.set()

    # ---------- Forwarding ----------
    def _forward(self, data: Sequence[int]):
        if self.midi_out is None:
            return
        try:
            self.midi_out.send(data)
        except Exception as e:
            log.warning("Forwarding %s failed: %s", list(data), e)

    # ---------- One round ----------
    def _wait_for_press(self) -> Optional[int]:
        # stale presses from the previous round must not answer this one
        self.midi_in.poll_message()

        self.state = RoundState.AWAITING_PRESS
        while not self.cancel.is_set():
            data = self.midi_in.poll_message()
            if not data:
                time.sleep(self.poll_interval)
                continue
            self._forward(data)
            event = classify(data, self.channel)
            if isinstance(event, NoteOnPressed):
                self.state = RoundState.ROUND_COMPLETE
                return event.pitch
        return None

    def play_round(self) -> Optional[RoundResult]:
        """Run one round. None means it was cancelled before a key was pressed."""
        self.target = self.sampler.sample(self.difficulty)
        name = pitch_name(self.target, self.notation)
        log.debug("Round %d: asking for %s (%d)", self.stats.asked + 1, name, self.target)
        if self.on_prompt:
            self.on_prompt(name)

        pressed = self._wait_for_press()
        if pressed is None:
            log.debug("Round abandoned")
            return None

        result = RoundResult(target=self.target, pressed=pressed)
        self.stats.record(result.correct)
        log.debug("Pressed %d, target %d -> %s", pressed, self.target,
                  "correct" if result.correct else "wrong")
        if self.on_result:
            self.on_result(result)
        return result

    # ---------- Main loop ----------
    def run(self) -> SessionStats:
        log.info("Quiz started: difficulty=%s notation=%s channel=%d forward=%s",
                 self.difficulty.value, self.notation.value, self.channel, self.midi_out is not None)
        while not self.cancel.is_set():
            self.play_round()
        log.info("Quiz finished: %d asked, %d correct", self.stats.asked, self.stats.correct)
        return self.stats
