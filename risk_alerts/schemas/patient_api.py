"""
JSON schemas for the remote patient assessment API.

Only the envelope is checked here. Individual patient records are left
untouched so that malformed clinical values reach the scoring core and get
flagged as data quality issues instead of being dropped.
"""

PATIENT_PAGE_SCHEMA: dict = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "title": "Patient page",
    "description": "One page of GET /patients.",
    "type": "object",
    "required": ["data"],
    "properties": {
        "data": {
            "type": "array",
            "items": {"type": "object"},
        },
        "pagination": {
            "type": "object",
            "properties": {
                "page": {"type": "integer"},
                "limit": {"type": "integer"},
                "total": {"type": "integer"},
                "totalPages": {"type": "integer"},
                "hasNext": {"type": "boolean"},
                "hasPrevious": {"type": "boolean"},
            },
        },
        "metadata": {"type": "object"},
    },
}


SUBMISSION_SCHEMA: dict = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "title": "Assessment submission",
    "type": "object",
    "required": ["high_risk_patients", "fever_patients", "data_quality_issues"],
    "properties": {
        "high_risk_patients": {"type": "array", "items": {"type": "string"}},
        "fever_patients": {"type": "array", "items": {"type": "string"}},
        "data_quality_issues": {"type": "array", "items": {"type": "string"}},
    },
    "additionalProperties": False,
}
