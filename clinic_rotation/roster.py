"""
roster.py — Roster Loader

Reads active doctors from a doctor directory and converts each weekly
schedule from weekday names to weekday codes (1=Monday .. 7=Sunday).

Any unrecognized day name fails the whole load; there is no partial roster.
"""

import logging
import re
from typing import Any, Dict, List, Optional

from clinic_rotation.config import DAY_MAPPING
from clinic_rotation.errors import InvalidScheduleError, NoActiveDoctorsError

logger = logging.getLogger(__name__)


def parse_weekday(value: Any, doctor_id: Optional[Any] = None) -> int:
    """Map a full weekday name (any case) to its code."""
    if not isinstance(value, str):
        raise InvalidScheduleError(value, doctor_id)
    code = DAY_MAPPING.get(value.strip().lower())
    if code is None:
        raise InvalidScheduleError(value, doctor_id)
    return code


def parse_schedule(raw: Any, doctor_id: Optional[Any] = None) -> List[int]:
    """
    Parse a doctor's schedule field into sorted, distinct weekday codes.

    Handles:
      - list/tuple/set of names: ["Monday", "wednesday"]
      - delimited string:        "Monday;Wednesday" (also ',' or '|')
      - None / empty:            []
    """
    if raw is None:
        return []
    if isinstance(raw, str):
        parts = [p.strip() for p in re.split(r"[;,|]", raw)]
        names: List[Any] = [p for p in parts if p]
    elif isinstance(raw, (list, tuple, set, frozenset)):
        names = list(raw)
    else:
        raise InvalidScheduleError(raw, doctor_id)

    codes = {parse_weekday(name, doctor_id) for name in names}
    return sorted(codes)


def load_roster(directory: Any) -> List[Dict[str, Any]]:
    """
    Load the active roster from ``directory.list_active_doctors()``.

    Returns list of {"id", "name", "weekdays"} in directory order.
    Directory order is the within-day tie-break for the sequence builder.

    Raises:
        NoActiveDoctorsError: directory returned no doctors.
        InvalidScheduleError: a schedule entry is not a weekday name.
        ValueError: a record has no id.
    """
    doctors = directory.list_active_doctors()
    if not doctors:
        raise NoActiveDoctorsError()

    roster: List[Dict[str, Any]] = []
    for doctor in doctors:
        doctor_id = doctor.get("id")
        if doctor_id is None or doctor_id == "":
            raise ValueError(f"Doctor record has no id: {doctor!r}")
        roster.append({
            "id":       doctor_id,
            "name":     str(doctor.get("name") or doctor_id),
            "weekdays": parse_schedule(doctor.get("schedule"), doctor_id),
        })

    logger.info(f"Loaded {len(roster)} active doctors")
    return roster
