"""
Patient risk alert pipeline.

fetch -> assess -> partition -> report -> submit

Each step receives the shared context dict and returns the keys it adds.
"""

from __future__ import annotations

import logging
from typing import Any

from risk_alerts.etl.dag import DAG
from risk_alerts.scoring.alerts import partition_alerts
from risk_alerts.scoring.assessor import assess_patients
from risk_alerts.services.patient_api import PatientApiClient
from risk_alerts.services.reporting import (
    log_detailed_analysis,
    log_summary,
    risk_distribution,
    summarize,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Pipeline steps
# ---------------------------------------------------------------------------


def assess(context: dict[str, Any]) -> dict[str, Any]:
    records = context.get("raw_records", [])
    assessments = assess_patients(records)
    logger.info("Assessed %d patients", len(assessments))
    return {"assessments": assessments, "assessed_count": len(assessments)}


def partition(context: dict[str, Any]) -> dict[str, Any]:
    alerts = partition_alerts(context.get("assessments", []))
    return {
        "alerts": alerts,
        "high_risk_count": len(alerts.high_risk),
        "fever_count": len(alerts.fever),
        "data_quality_count": len(alerts.data_quality_issues),
    }


def report(context: dict[str, Any]) -> dict[str, Any]:
    assessments = context["assessments"]
    alerts = context["alerts"]
    summary = summarize(context.get("raw_records", []), assessments, alerts)
    distribution = risk_distribution(assessments)
    log_detailed_analysis(assessments)
    log_summary(summary, alerts, distribution)
    return {"summary": summary, "risk_distribution": distribution}


def make_fetch_step(client: PatientApiClient | None):
    def fetch(context: dict[str, Any]) -> dict[str, Any]:
        """Use records already in the context, otherwise pull every page."""
        if "raw_records" in context:
            records = list(context["raw_records"])
        elif client is None:
            raise RuntimeError("No raw_records supplied and no API client configured")
        else:
            records = client.fetch_all_patients(context.get("page_limit"))
        logger.info("Fetched %d raw records", len(records))
        return {"raw_records": records, "fetched_count": len(records)}

    return fetch


def make_submit_step(client: PatientApiClient | None):
    def submit(context: dict[str, Any]) -> dict[str, Any]:
        if not context.get("submit"):
            logger.info("Submission disabled, results kept for manual review")
            return {"submitted": False, "submission_response": None}
        if client is None:
            raise RuntimeError("Submission requested but no API client configured")
        response = client.submit_assessment(context["alerts"].to_submission())
        return {"submitted": True, "submission_response": response}

    return submit


# ---------------------------------------------------------------------------
# Pipeline factory
# ---------------------------------------------------------------------------

def build_risk_alert_pipeline(client: PatientApiClient | None = None) -> DAG:
    dag = DAG("patient_risk_alerts")
    dag.add_task("fetch", make_fetch_step(client))
    dag.add_task("assess", assess, depends_on=["fetch"])
    dag.add_task("partition", partition, depends_on=["assess"])
    dag.add_task("report", report, depends_on=["partition"])
    dag.add_task("submit", make_submit_step(client), depends_on=["partition"])
    return dag
