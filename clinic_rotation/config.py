"""
config.py — Configuration for the clinic doctor rotation

Default file locations, the cursor key, and the weekday code table shared
by the roster loader and the sequence builder.

Weekday codes: 1=Monday .. 7=Sunday. The builder walks codes 1..7 in
order, so Monday is always the first day of a fairness cycle.
"""

from pathlib import Path
from typing import Any, Dict

PROJECT_ROOT = Path(__file__).resolve().parent.parent
DEFAULT_CONFIG_DIR   = PROJECT_ROOT / "config"
DEFAULT_DOCTORS_PATH = DEFAULT_CONFIG_DIR / "doctors.csv"
DEFAULT_CURSOR_PATH  = DEFAULT_CONFIG_DIR / "cursor_state.json"
OUTPUTS_DIR          = PROJECT_ROOT / "outputs"

CURSOR_KEY = "currentDoctorIndex"

ACTIVE_STATUS = "active"
DOCTOR_ROLE   = "doctor"

DAY_MAPPING: Dict[str, int] = {
    "monday":    1,
    "tuesday":   2,
    "wednesday": 3,
    "thursday":  4,
    "friday":    5,
    "saturday":  6,
    "sunday":    7,
}

WEEKDAY_NAMES: Dict[int, str] = {code: name.capitalize() for name, code in DAY_MAPPING.items()}

WEEK_CODES = tuple(range(1, 8))

# Keys in the cursor JSON file that are metadata, not counters
CURSOR_METADATA_KEYS = ("last_updated", "notes")


def get_config() -> Dict[str, Any]:
    return {
        "doctors_path":  str(DEFAULT_DOCTORS_PATH),
        "cursor_path":   str(DEFAULT_CURSOR_PATH),
        "outputs_dir":   str(OUTPUTS_DIR),
        "cursor_key":    CURSOR_KEY,
        "active_status": ACTIVE_STATUS,
        "doctor_role":   DOCTOR_ROLE,
        "day_mapping":   DAY_MAPPING.copy(),
    }
