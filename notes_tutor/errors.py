# notes_tutor/errors.py


class TutorError(Exception):
    """Base class for everything notes_tutor raises on purpose."""


class DeviceError(TutorError):
    pass


class DeviceEnumerationError(DeviceError):
    pass


class DeviceOpenError(DeviceError):
    pass


class InvalidDeviceSelection(DeviceError):
    pass


class NoAccuracyData(TutorError):
    """Raised when accuracy is asked for before any round was completed."""
