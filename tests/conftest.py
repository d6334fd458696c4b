import sys
from pathlib import Path

import pytest

# Add project root
PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from clinic_rotation.cursor_store import MemoryCursorStore
from clinic_rotation.directory import StaticDoctorDirectory


@pytest.fixture
def two_doctor_directory():
    """A works Mon+Wed, B works Mon → sequence [A, B, A]."""
    return StaticDoctorDirectory([
        {"id": "A", "status": "active", "role": "doctor", "name": "Alice", "schedule": ["Monday", "Wednesday"]},
        {"id": "B", "status": "active", "role": "doctor", "name": "Bob", "schedule": ["Monday"]},
    ])


@pytest.fixture
def memory_store():
    return MemoryCursorStore()


@pytest.fixture
def doctors_csv(tmp_path):
    path = tmp_path / "doctors.csv"
    path.write_text(
        "id,name,email,role,status,schedule\n"
        "d1,Alice Johnson,alice@example.com,doctor,active,Monday;Wednesday\n"
        "d2,Charlie Brown,charlie@example.com,doctor,active,monday\n"
        "d3,Evan Moreno,evan@example.com,doctor,not available,Tuesday\n"
        "r1,Bob Smith,bob@example.com,receptionist,active,\n"
    )
    return path
