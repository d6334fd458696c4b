"""
exporter.py — Export Layer for the doctor rotation

Outputs:
  - CSV: flat (position, weekday, doctor_id, doctor_name) for review
  - Excel (.xlsx): weekday × slot grid with doctor names
  - Fairness report (.txt): per-doctor slot counts, share of cycle, CV

Usage:
  from clinic_rotation.exporter import export_sequence_to_csv, export_sequence_to_excel
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from clinic_rotation.config import WEEK_CODES, WEEKDAY_NAMES
from clinic_rotation.sequence import DaySlots

logger = logging.getLogger(__name__)

# Excel styling for the weekday grid
HEADER_FILL    = "2F5D50"
WEEKEND_FILL   = "F3EFE0"
OFF_DAY_FILL   = "D9D9D9"
OFF_DAY_LABEL  = "no doctor"


def _sequence_rows(day_slots: DaySlots, names: Optional[Dict[Any, str]]) -> List[Dict[str, Any]]:
    name_map = names or {}
    rows = []
    position = 0
    for day in WEEK_CODES:
        for doctor_id in day_slots.get(day, []):
            rows.append({
                "position":    position,
                "weekday":     WEEKDAY_NAMES[day],
                "doctor_id":   doctor_id,
                "doctor_name": name_map.get(doctor_id, str(doctor_id)),
            })
            position += 1
    return rows


# ---------------------------------------------------------------------------
# CSV Export
# ---------------------------------------------------------------------------

def export_sequence_to_csv(
    day_slots: DaySlots,
    output_path: Path,
    names: Optional[Dict[Any, str]] = None,
) -> None:
    """
    Export the rotation sequence to flat CSV.

    Args:
        day_slots:   {weekday_code: [doctor_id, ...]} from build_day_slots()
        output_path: .csv file path
        names:       Optional {doctor_id: display name}
    """
    import csv
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, "w", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=["position", "weekday", "doctor_id", "doctor_name"])
        writer.writeheader()
        for row in _sequence_rows(day_slots, names):
            writer.writerow(row)

    logger.info(f"CSV exported → {output_path}")


# ---------------------------------------------------------------------------
# Excel Export
# ---------------------------------------------------------------------------

def export_sequence_to_excel(
    day_slots: DaySlots,
    output_path: Path,
    names: Optional[Dict[Any, str]] = None,
) -> None:
    """
    Export the rotation as a weekday × slot grid.

    Rows are Monday..Sunday, columns "Slot 1".."Slot k", cells hold the
    doctor's name. Days nobody works are greyed and read "no doctor".
    """
    import pandas as pd

    output_path.parent.mkdir(parents=True, exist_ok=True)
    name_map = names or {}

    width = max((len(day_slots.get(day, [])) for day in WEEK_CODES), default=0)
    columns = [f"Slot {i + 1}" for i in range(width)]
    grid = pd.DataFrame(
        [
            [name_map.get(d, str(d)) for d in day_slots.get(day, [])]
            + [""] * (width - len(day_slots.get(day, [])))
            for day in WEEK_CODES
        ],
        index=[WEEKDAY_NAMES[day] for day in WEEK_CODES],
        columns=columns,
    )
    grid.index.name = "Weekday"

    with pd.ExcelWriter(output_path, engine="openpyxl") as writer:
        grid.to_excel(writer, sheet_name="Rotation")
        _format_excel_grid(writer, "Rotation", day_slots)

    logger.info(f"Excel exported → {output_path}")


def _format_excel_grid(writer: Any, sheet_name: str, day_slots: DaySlots) -> None:
    """
    Style the weekday grid: header band, weekend rows tinted, days with
    no available doctor greyed and labelled in the first slot column.
    """
    from openpyxl.styles import Alignment, Font, PatternFill

    ws = writer.sheets[sheet_name]

    for cell in ws[1]:
        cell.fill = PatternFill("solid", fgColor=HEADER_FILL)
        cell.font = Font(bold=True, color="FFFFFF")
        cell.alignment = Alignment(horizontal="center")

    # Row 2 is Monday (code 1) .. row 8 is Sunday (code 7)
    for day in WEEK_CODES:
        row = ws[day + 1]
        if not day_slots.get(day):
            for cell in row:
                cell.fill = PatternFill("solid", fgColor=OFF_DAY_FILL)
                cell.font = Font(italic=True, color="595959")
            if len(row) > 1:
                row[1].value = OFF_DAY_LABEL
        elif day >= 6:
            for cell in row:
                cell.fill = PatternFill("solid", fgColor=WEEKEND_FILL)

    for col in ws.columns:
        max_len = max((len(str(c.value)) for c in col if c.value), default=10)
        ws.column_dimensions[col[0].column_letter].width = min(max_len + 2, 28)
    ws.freeze_panes = "B2"


# ---------------------------------------------------------------------------
# Fairness Report
# ---------------------------------------------------------------------------

def export_fairness_report(
    metrics: Dict[str, Any],
    output_path: Path,
    names: Optional[Dict[Any, str]] = None,
    label: str = "",
) -> str:
    """
    Export the rotation fairness report (text format).

    Args:
        metrics:     Output of sequence.calculate_sequence_metrics()
        output_path: .txt file path
        names:       Optional {doctor_id: display name}
        label:       Heading suffix (e.g. the directory file name)

    Returns:
        The report text.
    """
    output_path.parent.mkdir(parents=True, exist_ok=True)
    name_map = names or {}

    counts = metrics.get("counts", {})
    share = metrics.get("share", {})
    mean_val = metrics.get("mean", 0)
    sorted_ids = sorted(counts.keys(), key=lambda k: counts.get(k, 0), reverse=True)

    sep = "=" * 70
    lines = [
        sep,
        f"  ROTATION FAIRNESS REPORT{(' — ' + label) if label else ''}",
        sep,
        "",
        f"  Cycle length:          {metrics.get('length', 0)} slots",
        f"  Mean slots per doctor: {mean_val:.2f}",
        f"  Std Dev:               {metrics.get('std', 0):.2f}",
        f"  CV:                    {metrics.get('cv', 0):.2f}%",
        f"  Min / Max:             {metrics.get('min', 0)} / {metrics.get('max', 0)}",
        "",
        "─" * 70,
        "  Per-Doctor Slots",
        "─" * 70,
        f"  {'Doctor':<28} {'Slots':>6} {'Share':>8} {'Δ Mean':>8}",
    ]

    for doctor_id in sorted_ids:
        n = counts.get(doctor_id, 0)
        label_name = name_map.get(doctor_id, str(doctor_id))
        flag = "  ← never assigned" if n == 0 else ""
        lines.append(
            f"  {label_name:<28} {n:>6d} {share.get(doctor_id, 0) * 100:>7.1f}% {n - mean_val:>+8.2f}{flag}"
        )

    lines.append("")
    lines.append(sep)

    report_text = "\n".join(lines)
    with open(output_path, "w") as f:
        f.write(report_text)

    logger.info(f"Fairness report exported → {output_path}")
    return report_text
