"""
Per-field clinical risk evaluators.

Each evaluator turns one raw field into a small integer score. A score of 0
means the field could not be evaluated *or*, for temperature, a normal
reading; the data quality detector is what tells the two apart.
"""

from __future__ import annotations

from typing import Any

from risk_alerts.scoring.parsing import (
    coerce_decimal,
    coerce_integer,
    is_number,
    parse_positive_int,
)

BP_NOT_EVALUATED = 0
BP_NORMAL = 1
BP_ELEVATED = 2
BP_STAGE_1 = 3
BP_STAGE_2 = 4

FEVER_THRESHOLD = 99.6
HIGH_FEVER_THRESHOLD = 101.0


def split_blood_pressure(value: Any) -> tuple[int | float, int | float] | None:
    """Return (systolic, diastolic) for a well-formed ``"S/D"`` string."""
    if not value or not isinstance(value, str):
        return None
    parts = value.split("/")
    if len(parts) != 2:
        return None
    systolic = parse_positive_int(parts[0])
    diastolic = parse_positive_int(parts[1])
    if systolic is None or diastolic is None:
        return None
    return systolic, diastolic


def blood_pressure_risk(value: Any) -> int:
    """
    Score a blood pressure reading from 1 (normal) to 4 (stage 2).

    Categories overlap, so the first matching rule wins.
    """
    readings = split_blood_pressure(value)
    if readings is None:
        return BP_NOT_EVALUATED
    systolic, diastolic = readings

    if systolic < 120 and diastolic < 80:
        return BP_NORMAL
    if 120 <= systolic <= 129 and diastolic < 80:
        return BP_ELEVATED
    if 130 <= systolic <= 139 or 80 <= diastolic <= 89:
        return BP_STAGE_1
    if systolic >= 140 or diastolic >= 90:
        return BP_STAGE_2

    # Not reachable with the rules above
    return BP_NORMAL


def temperature_risk(value: Any) -> int:
    """0 normal, 1 low fever, 2 high fever (degrees Fahrenheit)."""
    if not value or not (isinstance(value, str) or is_number(value)):
        return 0
    temperature = coerce_decimal(value)
    if temperature is None:
        return 0

    if temperature <= 99.5:
        return 0
    elif FEVER_THRESHOLD <= temperature <= 100.9:
        return 1
    elif temperature >= HIGH_FEVER_THRESHOLD:
        return 2
    return 0


def age_risk(value: Any) -> int:
    if not value or not (isinstance(value, str) or is_number(value)):
        return 0
    age = coerce_integer(value)
    if age is None:
        return 0

    if age < 40:
        return 1
    elif 40 <= age <= 65:
        return 1
    elif age > 65:
        return 2
    return 0
