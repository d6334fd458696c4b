"""
preview.py — Rotation preview and manual assignment

Orchestration:
  1. Load roster from the doctor directory
  2. Build the weekly rotation sequence
  3. Read the cursor, show upcoming doctors (or assign with --assign)
  4. Optionally export CSV, Excel, fairness report

Usage:
  python -m clinic_rotation.preview
  python -m clinic_rotation.preview --count 5
  python -m clinic_rotation.preview --assign 2
  python -m clinic_rotation.preview --export --output-dir outputs/
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, Dict, Optional

PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from clinic_rotation.assigner import assign_doctor, preview_assignments
from clinic_rotation.config import (
    DEFAULT_CURSOR_PATH,
    DEFAULT_DOCTORS_PATH,
    OUTPUTS_DIR,
    WEEKDAY_NAMES,
)
from clinic_rotation.cursor_store import JsonCursorStore, read_cursor
from clinic_rotation.directory import CsvDoctorDirectory
from clinic_rotation.errors import RotationError
from clinic_rotation.exporter import (
    export_fairness_report,
    export_sequence_to_csv,
    export_sequence_to_excel,
)
from clinic_rotation.roster import load_roster
from clinic_rotation.sequence import build_day_slots, calculate_sequence_metrics, sequence_from_day_slots

logger = logging.getLogger(__name__)


def run_preview(
    doctors_path: Path = DEFAULT_DOCTORS_PATH,
    cursor_path: Path = DEFAULT_CURSOR_PATH,
    count: Optional[int] = None,
    assign: int = 0,
    export: bool = False,
    output_dir: Path = OUTPUTS_DIR,
) -> Dict[str, Any]:
    """
    Show the rotation for a doctor directory file and cursor file.

    Args:
        doctors_path: CSV doctor directory
        cursor_path:  JSON cursor state
        count:        Upcoming doctors to preview (default: one full cycle)
        assign:       Real assignments to perform (advances the cursor)
        export:       If True, write CSV/Excel/report to output_dir

    Returns:
        Dict with sequence, metrics, cursor, upcoming, assigned, outputs
    """
    directory = CsvDoctorDirectory(Path(doctors_path))
    store = JsonCursorStore(Path(cursor_path))
    sep = "=" * 70

    print(f"\n{sep}")
    print(f"  ROTATION PREVIEW{'' if assign else ' — cursor is not advanced'}")
    print(f"  Directory: {doctors_path}")
    print(f"{sep}\n")

    # ── 1. Roster ──────────────────────────────────────────────────────────
    print("Step 1/4: Loading roster...")
    roster = load_roster(directory)
    names = {d["id"]: d["name"] for d in roster}
    print(f"  ✓ {len(roster)} active doctors")

    # ── 2. Sequence ────────────────────────────────────────────────────────
    print("\nStep 2/4: Building rotation sequence...")
    day_slots = build_day_slots(roster)
    sequence = sequence_from_day_slots(day_slots, len(roster))
    metrics = calculate_sequence_metrics(sequence, roster)
    for day, slots in day_slots.items():
        shown = ", ".join(names[d] for d in slots) or "—"
        print(f"    {WEEKDAY_NAMES[day]:<10} {shown}")
    print(f"  ✓ {len(sequence)} slots per cycle | CV {metrics['cv']:.1f}%")

    # ── 3. Cursor ──────────────────────────────────────────────────────────
    print("\nStep 3/4: Cursor...")
    cursor = read_cursor(store)
    print(f"  ✓ cursor = {cursor} (slot {cursor % len(sequence) + 1} of {len(sequence)})")

    assigned = []
    for _ in range(assign):
        doctor_id = assign_doctor(directory=directory, store=store)
        assigned.append(doctor_id)
        print(f"  → assigned {names.get(doctor_id, doctor_id)}")

    upcoming = preview_assignments(
        len(sequence) if count is None else count,
        directory=directory,
        store=store,
    )
    print("  Upcoming:")
    for i, doctor_id in enumerate(upcoming, start=1):
        print(f"    {i:>3}. {names.get(doctor_id, doctor_id)}")

    # ── 4. Export ──────────────────────────────────────────────────────────
    outputs: Dict[str, Path] = {}
    if export:
        print("\nStep 4/4: Exporting outputs...")
        output_dir = Path(output_dir)
        outputs = {
            "csv":    output_dir / "rotation_sequence.csv",
            "excel":  output_dir / "rotation_sequence.xlsx",
            "report": output_dir / "rotation_fairness_report.txt",
        }
        export_sequence_to_csv(day_slots, outputs["csv"], names=names)
        export_sequence_to_excel(day_slots, outputs["excel"], names=names)
        export_fairness_report(metrics, outputs["report"], names=names, label=Path(doctors_path).name)
        for kind, path in outputs.items():
            print(f"  ✓ {kind:<7} {path.name}")
    else:
        print("\nStep 4/4: Export skipped (use --export)")

    print(f"\n{sep}\n")

    return {
        "sequence": sequence,
        "metrics":  metrics,
        "cursor":   read_cursor(store),
        "upcoming": upcoming,
        "assigned": assigned,
        "outputs":  outputs,
    }


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------

def main(argv=None):
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    parser = argparse.ArgumentParser(description="Preview the doctor rotation")
    parser.add_argument("--doctors",    default=None, help="Doctor directory CSV (default: config/doctors.csv)")
    parser.add_argument("--cursor",     default=None, help="Cursor state JSON (default: config/cursor_state.json)")
    parser.add_argument("--count",      type=int, default=None, help="Upcoming doctors to show (default: one cycle)")
    parser.add_argument("--assign",     type=int, default=0, help="Perform N real assignments (advances cursor)")
    parser.add_argument("--export",     action="store_true", help="Write CSV, Excel and fairness report")
    parser.add_argument("--output-dir", default=None, help="Output directory (default: outputs/)")
    args = parser.parse_args(argv)

    if args.assign < 0 or (args.count is not None and args.count < 0):
        print("Error: --assign and --count must be >= 0")
        sys.exit(1)

    try:
        run_preview(
            doctors_path=Path(args.doctors) if args.doctors else DEFAULT_DOCTORS_PATH,
            cursor_path=Path(args.cursor) if args.cursor else DEFAULT_CURSOR_PATH,
            count=args.count,
            assign=args.assign,
            export=args.export,
            output_dir=Path(args.output_dir) if args.output_dir else OUTPUTS_DIR,
        )
    except RotationError as e:
        print(f"Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
