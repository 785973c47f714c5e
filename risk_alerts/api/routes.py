"""
FastAPI routes.

``/assess`` scores records posted in the request body and does no I/O.
``/run`` drives the full fetch -> assess -> partition -> submit pipeline
against the remote patient API.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException

from risk_alerts.config import settings
from risk_alerts.etl.pipeline import build_risk_alert_pipeline
from risk_alerts.schemas.api import (
    AlertBucketsResponse,
    AssessmentRequest,
    AssessmentResponse,
    HealthResponse,
    PatientAssessmentResponse,
    PipelineResult,
    RunRequest,
    TaskSummary,
)
from risk_alerts.scoring.alerts import partition_alerts
from risk_alerts.scoring.assessor import assess_patients
from risk_alerts.services.patient_api import PatientApiClient
from risk_alerts.services.reporting import risk_distribution

logger = logging.getLogger(__name__)

router = APIRouter()


def get_patient_client():
    """FastAPI dependency that yields a patient API client."""
    client = PatientApiClient()
    try:
        yield client
    finally:
        client.session.close()


@router.get("/health", response_model=HealthResponse)
def health_check():
    return HealthResponse(
        status="healthy",
        environment=settings.ENVIRONMENT,
        api_key_configured=bool(settings.PATIENT_API_KEY),
    )


@router.post("/assess", response_model=AssessmentResponse)
def assess_records(request: AssessmentRequest):
    """Score a batch of raw patient records and bucket them into alerts."""
    raw_records = [r.model_dump() for r in request.records]
    assessments = assess_patients(raw_records)
    alerts = partition_alerts(assessments)

    return AssessmentResponse(
        assessments=[PatientAssessmentResponse(**a.to_dict()) for a in assessments],
        alerts=AlertBucketsResponse(**alerts.to_submission()),
        risk_distribution=risk_distribution(assessments),
    )


@router.post("/run", response_model=PipelineResult)
def run_pipeline(request: RunRequest, client: PatientApiClient = Depends(get_patient_client)):
    """Fetch every patient page, score, and optionally submit the alert lists."""
    pipeline = build_risk_alert_pipeline(client)
    initial = {"submit": request.submit}
    if request.page_limit is not None:
        initial["page_limit"] = request.page_limit
    result = pipeline.run(initial_context=initial)

    if result["status"] != "completed":
        logger.error("Pipeline '%s' failed: %s", pipeline.name, result["tasks"])
        raise HTTPException(status_code=502, detail=result)

    context = pipeline.context
    record_counts = {
        key: value
        for key, value in context.items()
        if key.endswith("_count") and isinstance(value, int)
    }
    return PipelineResult(
        pipeline=result["pipeline"],
        status=result["status"],
        tasks={name: TaskSummary(**info) for name, info in result["tasks"].items()},
        alerts=AlertBucketsResponse(**context["alerts"].to_submission()),
        record_counts=record_counts,
        submitted=context.get("submitted", False),
        submission_response=context.get("submission_response"),
    )
