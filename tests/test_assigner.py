"""
Tests for assign_doctor (full cycle, wraparound, stale cursor, no write on failure)
"""

import threading
import time
from collections import Counter

import pytest

from clinic_rotation.assigner import assign_doctor, peek_next_doctor, preview_assignments
from clinic_rotation.config import CURSOR_KEY
from clinic_rotation import cursor_store
from clinic_rotation.cursor_store import JsonCursorStore, MemoryCursorStore, read_cursor, write_cursor
from clinic_rotation.directory import StaticDoctorDirectory
from clinic_rotation.errors import EmptySequenceError, InvalidScheduleError, NoActiveDoctorsError
from clinic_rotation.roster import load_roster
from clinic_rotation.sequence import build_sequence


class TestAssignDoctor:

    @pytest.mark.parametrize("atomic", [True, False])
    def test_two_doctor_scenario(self, two_doctor_directory, memory_store, atomic):
        """Sequence [A, B, A]: three calls from 0 return A, B, A and end at 0."""
        picks = [assign_doctor(two_doctor_directory, memory_store, atomic=atomic) for _ in range(3)]
        assert picks == ["A", "B", "A"]
        assert read_cursor(memory_store) == 0

    @pytest.mark.parametrize("atomic", [True, False])
    def test_full_cycle_then_wraparound(self, memory_store, atomic):
        directory = StaticDoctorDirectory([
            {"id": "A", "status": "active", "role": "doctor", "schedule": ["Monday", "Tuesday"]},
            {"id": "B", "status": "active", "role": "doctor", "schedule": ["Tuesday"]},
            {"id": "C", "status": "active", "role": "doctor", "schedule": ["Monday", "Tuesday", "Friday"]},
        ])
        sequence = build_sequence(load_roster(directory))
        write_cursor(memory_store, 0)

        picks = [assign_doctor(directory, memory_store, atomic=atomic) for _ in range(len(sequence))]
        assert picks == sequence
        assert read_cursor(memory_store) == 0
        assert assign_doctor(directory, memory_store, atomic=atomic) == sequence[0]

    @pytest.mark.parametrize("atomic", [True, False])
    def test_stale_cursor_wraps(self, two_doctor_directory, memory_store, atomic):
        """Cursor left past the end by a larger roster wraps modulo."""
        write_cursor(memory_store, 10)
        assert assign_doctor(two_doctor_directory, memory_store, atomic=atomic) == "B"
        assert read_cursor(memory_store) == 2

    def test_atomic_and_two_step_agree(self, two_doctor_directory):
        a, b = MemoryCursorStore(), MemoryCursorStore()
        for _ in range(7):
            assert assign_doctor(two_doctor_directory, a, atomic=True) == \
                assign_doctor(two_doctor_directory, b, atomic=False)
        assert read_cursor(a) == read_cursor(b)

    def test_roster_change_takes_effect_next_call(self, memory_store):
        directory = StaticDoctorDirectory([
            {"id": "A", "status": "active", "role": "doctor", "schedule": ["Monday"]},
            {"id": "B", "status": "active", "role": "doctor", "schedule": ["Monday"]},
        ])
        assert assign_doctor(directory, memory_store) == "A"
        directory.records.append({"id": "C", "status": "active", "role": "doctor", "schedule": ["Monday"]})
        assert assign_doctor(directory, memory_store) == "B"
        assert assign_doctor(directory, memory_store) == "C"

    def test_persists_across_store_instances(self, two_doctor_directory, tmp_path):
        path = tmp_path / "cursor_state.json"
        assert assign_doctor(two_doctor_directory, JsonCursorStore(path)) == "A"
        assert assign_doctor(two_doctor_directory, JsonCursorStore(path)) == "B"
        assert read_cursor(JsonCursorStore(path)) == 2

    def test_concurrent_atomic_assignments_cover_cycle(self):
        directory = StaticDoctorDirectory([
            {"id": "A", "status": "active", "role": "doctor", "schedule": ["Monday"]},
            {"id": "B", "status": "active", "role": "doctor", "schedule": ["Monday"]},
            {"id": "C", "status": "active", "role": "doctor", "schedule": ["Monday"]},
        ])
        store = MemoryCursorStore()
        picks = []
        picks_lock = threading.Lock()

        def worker():
            for _ in range(10):
                doctor_id = assign_doctor(directory, store)
                with picks_lock:
                    picks.append(doctor_id)

        threads = [threading.Thread(target=worker) for _ in range(3)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert Counter(picks) == {"A": 10, "B": 10, "C": 10}
        assert read_cursor(store) == 0


    def test_concurrent_default_store_calls_cover_cycle(self, tmp_path, monkeypatch):
        """Calls without a store argument share the cursor file lock."""
        path = tmp_path / "cursor_state.json"
        monkeypatch.setattr(cursor_store, "DEFAULT_CURSOR_PATH", path)

        original_load = JsonCursorStore._load

        def slow_load(self):
            data = original_load(self)
            time.sleep(0.002)
            return data

        monkeypatch.setattr(JsonCursorStore, "_load", slow_load)

        directory = StaticDoctorDirectory([
            {"id": "A", "status": "active", "role": "doctor", "schedule": ["Monday"]},
            {"id": "B", "status": "active", "role": "doctor", "schedule": ["Monday"]},
            {"id": "C", "status": "active", "role": "doctor", "schedule": ["Monday"]},
        ])
        picks = []
        picks_lock = threading.Lock()

        def worker():
            for _ in range(10):
                doctor_id = assign_doctor(directory)
                with picks_lock:
                    picks.append(doctor_id)

        threads = [threading.Thread(target=worker) for _ in range(3)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert Counter(picks) == {"A": 10, "B": 10, "C": 10}
        assert read_cursor(JsonCursorStore(path)) == 0

    def test_stores_on_same_file_share_lock(self, tmp_path):
        path = tmp_path / "cursor_state.json"
        assert JsonCursorStore(path)._lock is JsonCursorStore(tmp_path / "." / "cursor_state.json")._lock
        assert JsonCursorStore(path)._lock is not JsonCursorStore(tmp_path / "other.json")._lock


class TestAssignDoctorFailures:

    def test_empty_roster_leaves_store_untouched(self, memory_store):
        with pytest.raises(NoActiveDoctorsError):
            assign_doctor(StaticDoctorDirectory([]), memory_store)
        assert memory_store.get(CURSOR_KEY) is None

    def test_empty_roster_writes_no_file(self, tmp_path):
        path = tmp_path / "cursor_state.json"
        with pytest.raises(NoActiveDoctorsError):
            assign_doctor(StaticDoctorDirectory([]), JsonCursorStore(path))
        assert not path.exists()

    @pytest.mark.parametrize("atomic", [True, False])
    def test_invalid_schedule_keeps_cursor(self, memory_store, atomic):
        write_cursor(memory_store, 1)
        directory = StaticDoctorDirectory([
            {"id": "A", "status": "active", "role": "doctor", "schedule": ["Monday"]},
            {"id": "B", "status": "active", "role": "doctor", "schedule": ["funday"]},
        ])
        with pytest.raises(InvalidScheduleError):
            assign_doctor(directory, memory_store, atomic=atomic)
        assert read_cursor(memory_store) == 1

    def test_nobody_available(self, memory_store):
        directory = StaticDoctorDirectory([{"id": "A", "status": "active", "role": "doctor", "schedule": []}])
        with pytest.raises(EmptySequenceError):
            assign_doctor(directory, memory_store)
        assert memory_store.get(CURSOR_KEY) is None


class TestPreview:

    def test_peek_does_not_advance(self, two_doctor_directory, memory_store):
        write_cursor(memory_store, 1)
        assert peek_next_doctor(two_doctor_directory, memory_store) == "B"
        assert peek_next_doctor(two_doctor_directory, memory_store) == "B"
        assert read_cursor(memory_store) == 1

    def test_peek_matches_next_assignment(self, two_doctor_directory, memory_store):
        for _ in range(4):
            expected = peek_next_doctor(two_doctor_directory, memory_store)
            assert assign_doctor(two_doctor_directory, memory_store) == expected

    def test_preview_wraps(self, two_doctor_directory, memory_store):
        write_cursor(memory_store, 2)
        assert preview_assignments(4, two_doctor_directory, memory_store) == ["A", "A", "B", "A"]
        assert read_cursor(memory_store) == 2

    def test_preview_zero_and_negative(self, two_doctor_directory, memory_store):
        assert preview_assignments(0, two_doctor_directory, memory_store) == []
        with pytest.raises(ValueError):
            preview_assignments(-1, two_doctor_directory, memory_store)
