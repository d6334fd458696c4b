"""
Clinic Doctor Rotation

Modules:
- config: File locations, cursor key, weekday code table
- directory / directory_client: Doctor directory sources (CSV, in-memory, HTTP)
- roster: Active roster loading, weekday name parsing
- sequence: Fair weekly rotation sequence, fairness metrics
- cursor_store: Persisted rotation cursor (JSON file, in-memory)
- assigner: assign_doctor() entry point for patient intake
- exporter / preview: Review outputs and CLI
"""

from .errors import (
    RotationError,
    NoActiveDoctorsError,
    InvalidScheduleError,
    EmptySequenceError,
)

from .config import (
    CURSOR_KEY,
    DAY_MAPPING,
    WEEKDAY_NAMES,
    get_config,
)

from .directory import StaticDoctorDirectory, CsvDoctorDirectory
from .roster import load_roster, parse_schedule, parse_weekday
from .sequence import build_day_slots, build_sequence, calculate_sequence_metrics
from .cursor_store import (
    CursorStore,
    MemoryCursorStore,
    JsonCursorStore,
    read_cursor,
    write_cursor,
)
from .assigner import assign_doctor, peek_next_doctor, preview_assignments

__all__ = [
    "RotationError",
    "NoActiveDoctorsError",
    "InvalidScheduleError",
    "EmptySequenceError",
    "CURSOR_KEY",
    "DAY_MAPPING",
    "WEEKDAY_NAMES",
    "get_config",
    "StaticDoctorDirectory",
    "CsvDoctorDirectory",
    "load_roster",
    "parse_schedule",
    "parse_weekday",
    "build_day_slots",
    "build_sequence",
    "calculate_sequence_metrics",
    "CursorStore",
    "MemoryCursorStore",
    "JsonCursorStore",
    "read_cursor",
    "write_cursor",
    "assign_doctor",
    "peek_next_doctor",
    "preview_assignments",
]
