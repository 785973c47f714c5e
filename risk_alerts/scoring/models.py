"""
Value types produced by the risk scoring core.

Assessments and alert buckets are frozen dataclasses: they are created once
per record / per batch and never mutated afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping


class RiskLevel(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class DataQualityTag(str, Enum):
    BP_MISSING = "BP_MISSING"
    BP_MALFORMED = "BP_MALFORMED"
    BP_INVALID = "BP_INVALID"
    TEMP_MISSING = "TEMP_MISSING"
    TEMP_INVALID = "TEMP_INVALID"
    AGE_MISSING = "AGE_MISSING"
    AGE_INVALID = "AGE_INVALID"


@dataclass(frozen=True)
class PatientAssessment:
    """Risk classification of a single patient record."""

    patient_id: str | None
    name: str | None
    blood_pressure_risk: int
    temperature_risk: int
    age_risk: int
    total_risk_score: int
    risk_level: RiskLevel
    data_quality_tags: tuple[DataQualityTag, ...] = ()
    # Raw clinical values exactly as received, kept for later inspection
    original_data: Mapping[str, Any] = field(
        default_factory=lambda: MappingProxyType({}), hash=False
    )

    @property
    def has_data_issues(self) -> bool:
        return bool(self.data_quality_tags)

    def to_dict(self) -> dict[str, Any]:
        return {
            "patient_id": self.patient_id,
            "name": self.name,
            "blood_pressure_risk": self.blood_pressure_risk,
            "temperature_risk": self.temperature_risk,
            "age_risk": self.age_risk,
            "total_risk_score": self.total_risk_score,
            "risk_level": self.risk_level.value,
            "data_quality_tags": [tag.value for tag in self.data_quality_tags],
            "original_data": dict(self.original_data),
        }


@dataclass(frozen=True)
class AlertBuckets:
    """Patient ids grouped by alert type. A patient may sit in several buckets."""

    high_risk: tuple[str | None, ...] = ()
    fever: tuple[str | None, ...] = ()
    data_quality_issues: tuple[str | None, ...] = ()

    def to_submission(self) -> dict[str, list[str | None]]:
        """Shape expected by the remote submit-assessment endpoint."""
        return {
            "high_risk_patients": list(self.high_risk),
            "fever_patients": list(self.fever),
            "data_quality_issues": list(self.data_quality_issues),
        }
