"""
errors.py — Exception taxonomy for doctor rotation

Every failure aborts the current assignment attempt; nothing here is
retried or swallowed. Storage and directory I/O errors are not wrapped
and reach the caller as raised by the backend.
"""

from typing import Any, Optional


class RotationError(Exception):
    """Base class for rotation failures the intake workflow should surface."""


class NoActiveDoctorsError(RotationError):
    """The doctor directory returned no active doctors."""

    def __init__(self, message: str = "No active doctors found with schedules."):
        super().__init__(message)


class InvalidScheduleError(RotationError, ValueError):
    """A schedule entry is not one of the seven weekday names."""

    def __init__(self, value: Any, doctor_id: Optional[Any] = None):
        self.value = value
        self.doctor_id = doctor_id
        where = f" (doctor {doctor_id})" if doctor_id is not None else ""
        super().__init__(f"Invalid day in schedule: {value!r}{where}")


class EmptySequenceError(RotationError):
    """Active doctors exist but none is available on any weekday."""

    def __init__(self, roster_size: int = 0):
        self.roster_size = roster_size
        super().__init__(
            f"Rotation sequence is empty: {roster_size} active doctor(s), "
            "none with an available weekday."
        )
