"""
Data quality detection for raw patient records.

Tags describe whether each clinical field is present and parseable. They are
computed from the raw values only and never from the risk scores, so a record
can be low risk and still carry tags.
"""

from __future__ import annotations

import math
from typing import Any, Mapping

from risk_alerts.scoring.models import DataQualityTag
from risk_alerts.scoring.parsing import coerce_decimal, coerce_integer, parse_positive_int


def _blood_pressure_issue(value: Any) -> DataQualityTag | None:
    if not value or not isinstance(value, str):
        return DataQualityTag.BP_MISSING
    parts = value.split("/")
    if len(parts) != 2:
        return DataQualityTag.BP_MALFORMED
    if parse_positive_int(parts[0]) is None or parse_positive_int(parts[1]) is None:
        return DataQualityTag.BP_INVALID
    return None


def _is_missing(value: Any) -> bool:
    """Falsy values and NaN both count as absent."""
    return not value or (isinstance(value, float) and math.isnan(value))


def _temperature_issue(value: Any) -> DataQualityTag | None:
    if _is_missing(value):
        return DataQualityTag.TEMP_MISSING
    # true coerces to 1: present and numeric
    if value is True:
        return None
    if coerce_decimal(value) is None:
        return DataQualityTag.TEMP_INVALID
    return None


def _age_issue(value: Any) -> DataQualityTag | None:
    if _is_missing(value):
        return DataQualityTag.AGE_MISSING
    if value is True:
        return None
    if coerce_integer(value) is None:
        return DataQualityTag.AGE_INVALID
    return None


def detect_data_quality_issues(record: Mapping[str, Any]) -> list[DataQualityTag]:
    """
    Return the data quality tags for a record, in BP, temperature, age order.

    An empty list means no issues were detected.
    """
    checks = (
        _blood_pressure_issue(record.get("blood_pressure")),
        _temperature_issue(record.get("temperature")),
        _age_issue(record.get("age")),
    )
    return [tag for tag in checks if tag is not None]
