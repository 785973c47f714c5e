"""Tests for JSON schema validation of API payloads."""

from risk_alerts.schemas.patient_api import PATIENT_PAGE_SCHEMA, SUBMISSION_SCHEMA
from risk_alerts.services.validation import validate_against_schema


def test_valid_page():
    page = {
        "data": [{"patient_id": "DEMO001", "blood_pressure": "120/80", "temperature": 98.6, "age": 45}],
        "pagination": {"page": 1, "limit": 5, "total": 50, "totalPages": 10, "hasNext": True, "hasPrevious": False},
        "metadata": {"timestamp": "2025-07-15T23:01:05.059Z", "version": "v1.0", "requestId": "123"},
    }
    assert validate_against_schema(page, PATIENT_PAGE_SCHEMA) == []


def test_page_without_data():
    errors = validate_against_schema({"pagination": {}}, PATIENT_PAGE_SCHEMA)
    assert any("data" in e for e in errors)


def test_page_with_bad_has_next_reports_path():
    errors = validate_against_schema({"data": [], "pagination": {"hasNext": "yes"}}, PATIENT_PAGE_SCHEMA)
    assert errors == ["pagination/hasNext: 'yes' is not of type 'boolean'"]


def test_page_clinical_values_are_not_checked():
    page = {"data": [{"patient_id": "X", "blood_pressure": 12080, "age": "oops", "temperature": None}]}
    assert validate_against_schema(page, PATIENT_PAGE_SCHEMA) == []


def test_non_object_page():
    assert validate_against_schema(["P1"], PATIENT_PAGE_SCHEMA)


def test_submission_requires_all_three_lists():
    errors = validate_against_schema({"high_risk_patients": []}, SUBMISSION_SCHEMA)
    assert any("fever_patients" in e for e in errors)
    assert any("data_quality_issues" in e for e in errors)


def test_submission_rejects_extra_keys():
    payload = {"high_risk_patients": [], "fever_patients": [], "data_quality_issues": [], "notes": "x"}
    assert validate_against_schema(payload, SUBMISSION_SCHEMA)
