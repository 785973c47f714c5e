"""Tests for the risk alert pipeline with a stubbed API client."""

from unittest.mock import Mock

from risk_alerts.etl.dag import TaskStatus
from risk_alerts.etl.pipeline import build_risk_alert_pipeline
from risk_alerts.services.patient_api import PatientApiClient, SubmissionError


def _records():
    return [
        {"patient_id": "DEMO001", "name": "A", "blood_pressure": "150/95", "temperature": 101.2, "age": 70},
        {"patient_id": "DEMO002", "name": "B", "blood_pressure": "110/70", "temperature": 98.0, "age": 30},
        {"patient_id": "DEMO003", "name": "C", "blood_pressure": "INVALID", "temperature": 99.8, "age": None},
    ]


def _client(records=None):
    client = Mock(spec=PatientApiClient)
    client.fetch_all_patients.return_value = records if records is not None else _records()
    client.submit_assessment.return_value = {"success": True}
    return client


def test_pipeline_with_supplied_records():
    """Records already in the context skip the fetch and no client is needed."""
    pipeline = build_risk_alert_pipeline()
    result = pipeline.run({"raw_records": _records()})

    assert result["status"] == "completed"
    alerts = pipeline.context["alerts"]
    assert alerts.high_risk == ("DEMO001",)
    assert alerts.fever == ("DEMO001", "DEMO003")
    assert alerts.data_quality_issues == ("DEMO003",)
    assert pipeline.context["submitted"] is False
    assert pipeline.context["summary"].total_patients == 3


def test_pipeline_fetches_from_client():
    client = _client()
    pipeline = build_risk_alert_pipeline(client)
    result = pipeline.run({"page_limit": 5})

    assert result["status"] == "completed"
    client.fetch_all_patients.assert_called_once_with(5)
    client.submit_assessment.assert_not_called()
    assert pipeline.context["fetched_count"] == 3
    assert pipeline.context["assessed_count"] == 3


def test_pipeline_submits_when_requested():
    client = _client()
    pipeline = build_risk_alert_pipeline(client)
    result = pipeline.run({"submit": True})

    assert result["status"] == "completed"
    client.submit_assessment.assert_called_once_with(
        {
            "high_risk_patients": ["DEMO001"],
            "fever_patients": ["DEMO001", "DEMO003"],
            "data_quality_issues": ["DEMO003"],
        }
    )
    assert pipeline.context["submission_response"] == {"success": True}


def test_failed_submission_only_fails_submit():
    client = _client()
    client.submit_assessment.side_effect = SubmissionError("Failed to submit assessment: 401")
    pipeline = build_risk_alert_pipeline(client)
    result = pipeline.run({"submit": True})

    assert result["status"] == "failed"
    assert pipeline.tasks["submit"].status == TaskStatus.FAILED
    assert pipeline.tasks["report"].status == TaskStatus.SUCCESS
    assert pipeline.context["alerts"].high_risk == ("DEMO001",)


def test_no_records_and_no_client_fails_fetch():
    pipeline = build_risk_alert_pipeline()
    result = pipeline.run()

    assert result["status"] == "failed"
    assert pipeline.tasks["fetch"].status == TaskStatus.FAILED
    assert pipeline.tasks["submit"].status == TaskStatus.SKIPPED


def test_empty_fetch_yields_empty_buckets():
    pipeline = build_risk_alert_pipeline(_client(records=[]))
    result = pipeline.run()

    assert result["status"] == "completed"
    assert pipeline.context["alerts"].to_submission() == {
        "high_risk_patients": [],
        "fever_patients": [],
        "data_quality_issues": [],
    }
    assert pipeline.context["risk_distribution"] == {}
