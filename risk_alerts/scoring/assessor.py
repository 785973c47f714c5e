"""Combines field risks and data quality tags into one assessment per patient."""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, Iterable

from risk_alerts.scoring.evaluators import age_risk, blood_pressure_risk, temperature_risk
from risk_alerts.scoring.models import PatientAssessment, RiskLevel
from risk_alerts.scoring.quality import detect_data_quality_issues

CLINICAL_FIELDS = ("blood_pressure", "temperature", "age")


def risk_level_for(total_risk_score: int) -> RiskLevel:
    if total_risk_score <= 2:
        return RiskLevel.LOW
    if total_risk_score <= 4:
        return RiskLevel.MEDIUM
    return RiskLevel.HIGH


def assess_patient(record: Mapping[str, Any]) -> PatientAssessment:
    """
    Score a single raw patient record.

    Never raises on field content: anything unparseable scores 0 for that
    field and is reported through ``data_quality_tags`` instead.
    """
    if not isinstance(record, Mapping):
        record = {}

    bp_risk = blood_pressure_risk(record.get("blood_pressure"))
    temp_risk = temperature_risk(record.get("temperature"))
    age_score = age_risk(record.get("age"))
    total = bp_risk + temp_risk + age_score

    return PatientAssessment(
        patient_id=record.get("patient_id"),
        name=record.get("name"),
        blood_pressure_risk=bp_risk,
        temperature_risk=temp_risk,
        age_risk=age_score,
        total_risk_score=total,
        risk_level=risk_level_for(total),
        data_quality_tags=tuple(detect_data_quality_issues(record)),
        original_data=MappingProxyType({name: record.get(name) for name in CLINICAL_FIELDS}),
    )


def assess_patients(records: Iterable[Mapping[str, Any]]) -> list[PatientAssessment]:
    return [assess_patient(record) for record in records]
