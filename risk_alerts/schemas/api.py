"""Pydantic models for API request/response serialization."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# ---------------------------------------------------------------------------
# Assessment
# ---------------------------------------------------------------------------

class RawPatientRecord(BaseModel):
    """
    Patient record as delivered by the patient API.

    Clinical fields are deliberately untyped: malformed values must reach the
    scoring core so they can be flagged rather than rejected here.
    """
    model_config = ConfigDict(extra="allow")

    patient_id: str | None = None
    name: str | None = None
    age: Any = None
    blood_pressure: Any = None
    temperature: Any = None


class AssessmentRequest(BaseModel):
    records: list[RawPatientRecord] = Field(..., min_length=1, max_length=1000)


class PatientAssessmentResponse(BaseModel):
    patient_id: str | None
    name: str | None
    blood_pressure_risk: int
    temperature_risk: int
    age_risk: int
    total_risk_score: int
    risk_level: str
    data_quality_tags: list[str]
    original_data: dict[str, Any]


class AlertBucketsResponse(BaseModel):
    """Records without a patient_id still get bucketed; their entry is null."""
    high_risk_patients: list[str | None]
    fever_patients: list[str | None]
    data_quality_issues: list[str | None]


class AssessmentResponse(BaseModel):
    assessments: list[PatientAssessmentResponse]
    alerts: AlertBucketsResponse
    risk_distribution: dict[int, int] = {}


# ---------------------------------------------------------------------------
# Pipeline run
# ---------------------------------------------------------------------------

class RunRequest(BaseModel):
    submit: bool = False
    page_limit: int | None = Field(default=None, ge=1, le=100)


class TaskSummary(BaseModel):
    status: str
    duration_ms: float | None = None
    error: str | None = None


class PipelineResult(BaseModel):
    pipeline: str
    status: str
    tasks: dict[str, TaskSummary]
    alerts: AlertBucketsResponse | None = None
    record_counts: dict[str, int] = {}
    submitted: bool = False
    submission_response: dict[str, Any] | None = None


# ---------------------------------------------------------------------------
# Health check
# ---------------------------------------------------------------------------

class HealthResponse(BaseModel):
    status: str = "healthy"
    environment: str
    api_key_configured: bool
