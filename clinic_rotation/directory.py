"""
directory.py — Doctor directory sources

A directory is anything with ``list_active_doctors() -> List[Dict]``.
Each record carries at least ``id`` and ``schedule`` (weekday names);
``status`` and ``role`` are used for filtering: only records with
status "active" and role "doctor" take part; a missing value excludes.

Shipped sources:
  - StaticDoctorDirectory: in-memory list (tests, embedding callers)
  - CsvDoctorDirectory:    flat file config/doctors.csv, read with pandas
  - DoctorDirectoryClient: HTTP directory (see directory_client.py)
"""

import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from clinic_rotation.config import ACTIVE_STATUS, DEFAULT_DOCTORS_PATH, DOCTOR_ROLE

logger = logging.getLogger(__name__)

# Field aliases used by document-store exports of the user collection
FIELD_ALIASES: Dict[str, str] = {
    "_id": "id",
    "doctorSchedule": "schedule",
}


def normalize_doctor_record(raw: Dict[str, Any]) -> Dict[str, Any]:
    """Return a copy of ``raw`` with aliased field names mapped to ours."""
    record = dict(raw)
    for alias, field_name in FIELD_ALIASES.items():
        if alias in record and field_name not in record:
            record[field_name] = record.pop(alias)
    return record


def is_active_doctor(record: Dict[str, Any]) -> bool:
    status = str(record.get("status") or "").strip().lower()
    role = str(record.get("role") or "").strip().lower()
    return status == ACTIVE_STATUS and role == DOCTOR_ROLE


class StaticDoctorDirectory:
    """In-memory directory over a fixed list of doctor records."""

    def __init__(self, records: Iterable[Dict[str, Any]]):
        self.records = [normalize_doctor_record(r) for r in records]

    def list_active_doctors(self) -> List[Dict[str, Any]]:
        return [dict(r) for r in self.records if is_active_doctor(r)]


class CsvDoctorDirectory:
    """
    Doctor directory backed by a CSV file.

    Expected columns:
      id, name, email, role, status, schedule

    ``schedule`` holds weekday names separated by semicolons
    (e.g. ``Monday;Wednesday``); an empty cell means no available day.
    Row order in the file is the roster order.
    """

    def __init__(self, path: Optional[Path] = None):
        self.path = Path(path) if path is not None else DEFAULT_DOCTORS_PATH

    def list_active_doctors(self) -> List[Dict[str, Any]]:
        import pandas as pd

        if not self.path.exists():
            raise FileNotFoundError(f"Doctor directory not found: {self.path}")

        df = pd.read_csv(self.path, dtype=str, keep_default_na=False)
        if "id" not in df.columns:
            raise ValueError(f"Doctor directory {self.path} has no 'id' column")

        doctors: List[Dict[str, Any]] = []
        for _, row in df.iterrows():
            record = {
                "id":       str(row["id"]).strip(),
                "name":     str(row.get("name", "") or "").strip(),
                "email":    str(row.get("email", "") or "").strip(),
                "role":     str(row.get("role", "") or "").strip(),
                "status":   str(row.get("status", "") or "").strip(),
                "schedule": str(row.get("schedule", "") or "").strip(),
            }
            if not record["id"]:
                raise ValueError(
                    f"Doctor directory {self.path} has a row with an empty id: {dict(row)}"
                )
            if is_active_doctor(record):
                doctors.append(record)

        logger.info(f"Read {len(doctors)} active doctors from {self.path} ({len(df)} rows)")
        return doctors
