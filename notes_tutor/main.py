# notes_tutor/main.py
import argparse
import logging
import os
import signal
import sys
from contextlib import ExitStack, contextmanager
from logging.handlers import RotatingFileHandler

from notes_tutor import __version__
from notes_tutor.app import CancelToken, QuizSession, RoundResult, SessionStats
from notes_tutor.config import (
    AppConfig, QuizConfig, MidiConfig, Difficulty, Notation, DEFAULT_BACKEND,
)
from notes_tutor.errors import DeviceError, NoAccuracyData
from notes_tutor.midi.ports import MidiInputPort, MidiOutputPort
from notes_tutor.midi.select import open_selected
from notes_tutor.utils.crashlog import setup_crashlog, log_exception, log_dir

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

GLYPH_CORRECT = "\U0001F44D"  # thumbs up
GLYPH_WRONG = "\U0001F525"    # fire


def _init_logging(console_level: str = "WARNING"):
    root = logging.getLogger()
    if root.handlers:
        return

    # root passes everything; each handler filters for itself
    root.setLevel(logging.DEBUG)
    console = logging.StreamHandler()
    console.setLevel(console_level.upper())
    console.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(console)
    try:
        fh = RotatingFileHandler(os.path.join(log_dir(), "notes_tutor.log"),
                                 maxBytes=2*1024*1024, backupCount=3, encoding="utf-8")
    except OSError as e:
        logging.warning("File logging disabled: %s", e)
        return
    fh.setLevel(logging.DEBUG)
    fh.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(fh)


def _channel(value: str) -> int:
    ch = int(value)
    if not 1 <= ch <= 16:
        raise argparse.ArgumentTypeError(f"channel must be within 1..16, got {ch}")
    return ch


def _poll_interval(value: str) -> float:
    seconds = float(value)
    if seconds < 0:
        raise argparse.ArgumentTypeError(f"poll interval must not be negative, got {seconds}")
    return seconds


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="notes-tutor",
                                 description="Play the note you are asked for on a MIDI instrument.")
    ap.add_argument('--difficulty', default='easy', choices=[d.value for d in Difficulty],
                    help="'easy' is only 4th octave, no black keys. 'med' is no black keys. 'hard' is any key.")
    ap.add_argument('--forward', action='store_true',
                    help="Forward MIDI input to another MIDI device, selected interactively.")
    ap.add_argument('--notation', default='english', choices=[n.value for n in Notation],
                    help="Musical note notation.")
    ap.add_argument('--channel', type=_channel, default=1, help="MIDI input channel number (1-16).")
    ap.add_argument('--backend', default=DEFAULT_BACKEND, help="mido backend module.")
    ap.add_argument('--poll-interval', type=_poll_interval, default=0.001,
                    help="Seconds to wait when no MIDI message is pending.")
    ap.add_argument('--log-level', default='WARNING',
                    choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'])
    ap.add_argument('--version', action='version', version=f"%(prog)s {__version__}")
    return ap


def config_from_args(args) -> AppConfig:
    return AppConfig(
        quiz=QuizConfig(difficulty=Difficulty.from_name(args.difficulty),
                        notation=Notation.from_name(args.notation)),
        midi=MidiConfig(channel=args.channel, forward=args.forward,
                        backend=args.backend, poll_interval=args.poll_interval),
    )


@contextmanager
def sigint_cancels(cancel: CancelToken):
    """Ctrl+C sets ``cancel`` instead of raising KeyboardInterrupt.

    The handler runs on the loop thread between bytecodes, so it must not take
    any lock; CancelToken.set() is a single attribute write.
    """
    def _handler(signum, frame):
        cancel.set()
    try:
        previous = signal.signal(signal.SIGINT, _handler)
    except ValueError:  # not on the main thread
        previous = None
    try:
        yield cancel
    finally:
        if previous is not None:
            signal.signal(signal.SIGINT, previous)


# ---------- Console output ----------
def print_prompt(name: str):
    print(f"Give me a {name}... ", end="", flush=True)


def print_result(result: RoundResult):
    print(GLYPH_CORRECT if result.correct else GLYPH_WRONG, flush=True)


def accuracy_text(stats: SessionStats) -> str:
    try:
        return f"Accuracy rate: {stats.accuracy():.2f}%"
    except NoAccuracyData:
        return "Accuracy rate: no data (no rounds completed)"


def run_quiz(cfg: AppConfig, cancel: CancelToken, read=input) -> SessionStats:
    with ExitStack() as stack:
        midi_in = stack.enter_context(MidiInputPort(cfg.midi.backend))
        open_selected(midi_in, read=read)
        midi_in.set_filters(sysex=False, timing=False, active_sensing=False)

        midi_out = None
        if cfg.midi.forward:
            midi_out = stack.enter_context(MidiOutputPort(cfg.midi.backend))
            open_selected(midi_out, read=read)

        session = QuizSession(
            midi_in, cfg.midi.channel, cfg.quiz.difficulty, cfg.quiz.notation,
            midi_out=midi_out, cancel=cancel, poll_interval=cfg.midi.poll_interval,
            on_prompt=print_prompt, on_result=print_result,
        )
        with sigint_cancels(cancel):
            return session.run()


def main(argv=None, read=input) -> int:
    args = build_parser().parse_args(argv)
    _init_logging(args.log_level)
    cfg = config_from_args(args)
    logging.info("notes_tutor %s starting", __version__)

    try:
        stats = run_quiz(cfg, CancelToken(), read=read)
    except DeviceError as e:
        logging.error("%s", e)
        log_exception("MIDI device", e)
        print(e, file=sys.stderr)
        return 1
    except (KeyboardInterrupt, EOFError):
        logging.info("Interrupted before the quiz started")
        print(file=sys.stderr)
        return 1

    print()
    print()
    print(accuracy_text(stats))
    return 0


def run():
    setup_crashlog()
    sys.exit(main())


if __name__ == '__main__':
    run()
