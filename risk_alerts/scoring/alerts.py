"""
Alert bucket partitioning.

Each bucket has its own predicate and every assessment is checked against all
three, so one patient can land in several buckets.

The high-risk alert fires at a total score of 4, one point below where the
``High`` risk level starts. Both cut points are part of the contract.
"""

from __future__ import annotations

from typing import Iterable

from risk_alerts.scoring.evaluators import FEVER_THRESHOLD
from risk_alerts.scoring.models import AlertBuckets, PatientAssessment
from risk_alerts.scoring.parsing import coerce_decimal

HIGH_RISK_ALERT_THRESHOLD = 4


def is_high_risk(assessment: PatientAssessment) -> bool:
    return assessment.total_risk_score >= HIGH_RISK_ALERT_THRESHOLD


def has_fever(assessment: PatientAssessment) -> bool:
    """Checked against the raw temperature, not the temperature risk score."""
    temperature = coerce_decimal(assessment.original_data.get("temperature"))
    return temperature is not None and temperature >= FEVER_THRESHOLD


def has_data_quality_issue(assessment: PatientAssessment) -> bool:
    return assessment.has_data_issues


def partition_alerts(assessments: Iterable[PatientAssessment]) -> AlertBuckets:
    high_risk: list[str | None] = []
    fever: list[str | None] = []
    data_quality_issues: list[str | None] = []

    for assessment in assessments:
        if is_high_risk(assessment):
            high_risk.append(assessment.patient_id)
        if has_fever(assessment):
            fever.append(assessment.patient_id)
        if has_data_quality_issue(assessment):
            data_quality_issues.append(assessment.patient_id)

    return AlertBuckets(
        high_risk=tuple(high_risk),
        fever=tuple(fever),
        data_quality_issues=tuple(data_quality_issues),
    )
