# notes_tutor/utils/crashlog.py
import datetime
import faulthandler
import os
import sys
import traceback

APP_NAME = "notes_tutor"
LOG_DIR_ENV = "NOTES_TUTOR_LOG_DIR"

_fault_file = None


def log_dir() -> str:
    d = os.environ.get(LOG_DIR_ENV) or os.path.join(os.getcwd(), "logs")
    os.makedirs(d, exist_ok=True)
    return d


def report_path(kind: str) -> str:
    """logs/notes_tutor-<kind>-<timestamp>.txt; microseconds keep reports from one run apart."""
    stamp = datetime.datetime.now().strftime("%Y%m%d-%H%M%S-%f")
    return os.path.join(log_dir(), f"{APP_NAME}-{kind}-{stamp}.txt")


def _write_report(kind: str, headline: str, exc: BaseException) -> str:
    path = report_path(kind)
    with open(path, "w", encoding="utf-8") as out:
        out.write(f"{APP_NAME} {headline}\n")
        out.write(f"{type(exc).__name__}: {exc}\n")
        out.write("-" * 60 + "\n")
        traceback.print_exception(type(exc), exc, exc.__traceback__, file=out)
    return path


def setup_crashlog():
    """Native faults go to a faulthandler file, uncaught exceptions to a crash report."""
    global _fault_file
    if _fault_file is None:
        try:
            _fault_file = open(report_path("native"), "w", encoding="utf-8")
        except OSError:
            _fault_file = None
    if _fault_file is not None:
        faulthandler.enable(_fault_file)

    def _hook(exc_type, exc, tb):
        # Ctrl+C outside the quiz loop is not a crash
        if not issubclass(exc_type, KeyboardInterrupt):
            try:
                _write_report("crash", "crashed", exc.with_traceback(tb))
            except OSError:
                pass
        sys.__excepthook__(exc_type, exc, tb)
    sys.excepthook = _hook


def log_exception(title: str, exc: BaseException) -> str:
    return _write_report("error", f"error [{title}]", exc)
