"""
sequence.py — Fair Sequence Builder

Builds one fairness cycle (a week) of doctor ids from the roster.

Algorithm:
  usage = {doctor: 0}
  For each weekday code 1..7:
    available = doctors working that day, in roster order
    sort available by usage (stable, once, before the day's appends)
    append each, usage[doctor] += 1 right after

A doctor appears once per distinct available weekday. Within a day the
less-used doctors come first; equal usage keeps roster order.
"""

import logging
import math
from typing import Any, Dict, List

from clinic_rotation.config import WEEK_CODES, WEEKDAY_NAMES
from clinic_rotation.errors import EmptySequenceError

logger = logging.getLogger(__name__)

Sequence = List[Any]                 # [doctor_id, ...]
DaySlots = Dict[int, List[Any]]      # weekday code → [doctor_id, ...]


def build_day_slots(roster: List[Dict[str, Any]]) -> DaySlots:
    """
    Run the fair build and keep the result grouped by weekday code.

    Every code 1..7 is present; days nobody works map to [].
    """
    usage: Dict[Any, int] = {doctor["id"]: 0 for doctor in roster}
    day_slots: DaySlots = {}

    for day in WEEK_CODES:
        available = [doctor for doctor in roster if day in doctor["weekdays"]]
        # sorted() is stable: equal usage keeps roster order
        available = sorted(available, key=lambda doctor: usage[doctor["id"]])

        slots: List[Any] = []
        for doctor in available:
            slots.append(doctor["id"])
            usage[doctor["id"]] += 1
        day_slots[day] = slots
        logger.debug(f"{WEEKDAY_NAMES[day]}: {slots}")

    return day_slots


def flatten_day_slots(day_slots: DaySlots) -> Sequence:
    sequence: Sequence = []
    for day in WEEK_CODES:
        sequence.extend(day_slots.get(day, []))
    return sequence


def sequence_from_day_slots(day_slots: DaySlots, roster_size: int) -> Sequence:
    """Flatten an already built week; raises EmptySequenceError if it is empty."""
    sequence = flatten_day_slots(day_slots)
    if not sequence:
        raise EmptySequenceError(roster_size)
    return sequence


def build_sequence(roster: List[Dict[str, Any]]) -> Sequence:
    """
    Build the ordered rotation sequence for one week.

    Raises:
        EmptySequenceError: nobody on the roster has an available weekday.
    """
    sequence = sequence_from_day_slots(build_day_slots(roster), len(roster))
    logger.debug(f"Built rotation sequence of {len(sequence)} slots for {len(roster)} doctors")
    return sequence


# ---------------------------------------------------------------------------
# Fairness metrics
# ---------------------------------------------------------------------------

def calculate_sequence_metrics(
    sequence: Sequence,
    roster: List[Dict[str, Any]],
) -> Dict[str, Any]:
    """
    Per-doctor slot counts and spread over one cycle.

    Returns:
        {
          length, mean, std, cv, min, max,
          counts: {doctor_id: int},
          share:  {doctor_id: float},   # fraction of the cycle
        }
    """
    counts: Dict[Any, int] = {doctor["id"]: 0 for doctor in roster}
    for doctor_id in sequence:
        if doctor_id in counts:
            counts[doctor_id] += 1

    length = len(sequence)
    values = list(counts.values())
    mean_val = sum(values) / len(values) if values else 0.0
    variance = sum((v - mean_val) ** 2 for v in values) / len(values) if values else 0.0
    std_val = math.sqrt(variance)
    cv = (std_val / mean_val * 100) if mean_val > 0 else 0.0

    return {
        "length": length,
        "mean":   mean_val,
        "std":    std_val,
        "cv":     cv,
        "min":    min(values) if values else 0,
        "max":    max(values) if values else 0,
        "counts": counts,
        "share":  {k: (v / length if length else 0.0) for k, v in counts.items()},
    }
