"""Log-based reporting of assessment results for manual review."""

from __future__ import annotations

import json
import logging
from collections import Counter
from dataclasses import dataclass
from typing import Any, Sequence

from risk_alerts.scoring.alerts import has_data_quality_issue, has_fever, is_high_risk
from risk_alerts.scoring.models import AlertBuckets, PatientAssessment

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AlertSummary:
    total_patients: int
    high_risk: int
    fever: int
    data_quality_issues: int

    def to_dict(self) -> dict[str, int]:
        return {
            "total_patients": self.total_patients,
            "high_risk": self.high_risk,
            "fever": self.fever,
            "data_quality_issues": self.data_quality_issues,
        }


def risk_distribution(assessments: Sequence[PatientAssessment]) -> dict[int, int]:
    """Number of patients per total risk score, ordered by score."""
    counts = Counter(a.total_risk_score for a in assessments)
    return dict(sorted(counts.items()))


def summarize(
    records: Sequence[Any],
    assessments: Sequence[PatientAssessment],
    alerts: AlertBuckets,
) -> AlertSummary:
    return AlertSummary(
        total_patients=len(records),
        high_risk=len(alerts.high_risk),
        fever=len(alerts.fever),
        data_quality_issues=len(alerts.data_quality_issues),
    )


def log_detailed_analysis(assessments: Sequence[PatientAssessment]) -> int:
    """Log one line per flagged patient. Returns how many lines were logged."""
    logged = 0
    for a in assessments:
        flags = [
            label
            for label, hit in (
                ("HIGH-RISK", is_high_risk(a)),
                ("FEVER", has_fever(a)),
                ("DATA-ISSUES", has_data_quality_issue(a)),
            )
            if hit
        ]
        if not flags:
            continue
        logger.info(
            "%s: BP=%d Temp=%d Age=%d Total=%d %s",
            a.patient_id, a.blood_pressure_risk, a.temperature_risk, a.age_risk,
            a.total_risk_score, " ".join(flags),
        )
        logged += 1
    return logged


def log_summary(
    summary: AlertSummary, alerts: AlertBuckets, distribution: dict[int, int]
) -> None:
    for key, ids in alerts.to_submission().items():
        logger.info("%s: %s", key, json.dumps(ids))
    logger.info(
        "Total Patients: %d | High-Risk: %d | Fever: %d | Data Issues: %d",
        summary.total_patients, summary.high_risk, summary.fever, summary.data_quality_issues,
    )
    for score, count in distribution.items():
        logger.info("Score %d: %d patients", score, count)
