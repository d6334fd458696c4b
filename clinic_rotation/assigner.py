"""
assigner.py — Doctor assignment entry point

assign_doctor() is the one call the patient-intake workflow makes:

  roster   = load_roster(directory)
  sequence = build_sequence(roster)
  idx      = cursor % len(sequence)
  cursor   = (idx + 1) % len(sequence)
  return sequence[idx]

The roster and sequence are rebuilt on every call, so schedule or status
changes take effect on the next request. Only the cursor is persisted.
Roster and sequence errors propagate before anything is written.
"""

import logging
from typing import Any, List, Optional

from clinic_rotation.config import CURSOR_KEY
from clinic_rotation.cursor_store import CursorStore, JsonCursorStore, read_cursor, write_cursor
from clinic_rotation.directory import CsvDoctorDirectory
from clinic_rotation.roster import load_roster
from clinic_rotation.sequence import Sequence, build_sequence

logger = logging.getLogger(__name__)


def _resolve(directory: Optional[Any], store: Optional[CursorStore]):
    if directory is None:
        directory = CsvDoctorDirectory()
    if store is None:
        store = JsonCursorStore()
    return directory, store


def _current_sequence(directory: Any) -> Sequence:
    return build_sequence(load_roster(directory))


def assign_doctor(
    directory: Optional[Any] = None,
    store: Optional[CursorStore] = None,
    atomic: bool = True,
) -> Any:
    """
    Return the next doctor id in the rotation and advance the cursor.

    Args:
        directory: Doctor directory (default: config/doctors.csv).
        store:     Cursor store (default: config/cursor_state.json).
        atomic:    If True, read and advance the cursor in one store call.
                   If False, read then write as two separate calls; two
                   concurrent callers can then get the same doctor.

    Raises:
        NoActiveDoctorsError, InvalidScheduleError, EmptySequenceError,
        and any storage error, unchanged.
    """
    directory, store = _resolve(directory, store)
    sequence = _current_sequence(directory)
    n = len(sequence)

    if atomic:
        idx = store.fetch_and_advance(CURSOR_KEY, n)
    else:
        idx = read_cursor(store)
        if idx >= n:
            # roster shrank since the last write
            idx %= n
        write_cursor(store, (idx + 1) % n)

    assigned = sequence[idx]
    logger.info(f"Assigned doctor {assigned} (slot {idx + 1}/{n})")
    return assigned


def peek_next_doctor(
    directory: Optional[Any] = None,
    store: Optional[CursorStore] = None,
) -> Any:
    """Doctor the next assign_doctor() call would return. Writes nothing."""
    return preview_assignments(1, directory, store)[0]


def preview_assignments(
    count: int,
    directory: Optional[Any] = None,
    store: Optional[CursorStore] = None,
) -> List[Any]:
    """Next ``count`` doctors from the current cursor, without advancing it."""
    if count < 0:
        raise ValueError(f"count must be >= 0, got {count}")
    directory, store = _resolve(directory, store)
    sequence = _current_sequence(directory)
    start = read_cursor(store) % len(sequence)
    return [sequence[(start + offset) % len(sequence)] for offset in range(count)]
