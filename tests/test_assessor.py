"""Tests for per-patient assessment and risk level derivation."""

import itertools

import pytest

from risk_alerts.scoring.assessor import assess_patient, assess_patients, risk_level_for
from risk_alerts.scoring.models import DataQualityTag, RiskLevel


def _patient(patient_id="DEMO001", blood_pressure="120/80", temperature=98.6, age=45, **extra):
    record = {
        "patient_id": patient_id,
        "name": "TestPatient, John",
        "age": age,
        "gender": "M",
        "blood_pressure": blood_pressure,
        "temperature": temperature,
        "visit_date": "2024-01-15",
        "diagnosis": "Sample_Hypertension",
        "medications": "DemoMed_A 10mg",
    }
    record.update(extra)
    return record


def test_high_risk_patient():
    a = assess_patient(_patient(blood_pressure="150/95", temperature=101.2, age=70))
    assert (a.blood_pressure_risk, a.temperature_risk, a.age_risk) == (4, 2, 2)
    assert a.total_risk_score == 8
    assert a.risk_level == RiskLevel.HIGH
    assert a.data_quality_tags == ()


def test_low_risk_patient():
    a = assess_patient(_patient(blood_pressure="110/70", temperature=98.0, age=30))
    assert (a.blood_pressure_risk, a.temperature_risk, a.age_risk) == (1, 0, 1)
    assert a.total_risk_score == 2
    assert a.risk_level == RiskLevel.LOW


def test_all_fields_unparseable_still_assessed():
    a = assess_patient(_patient(blood_pressure="not-a-bp", temperature=None, age="oops"))
    assert (a.blood_pressure_risk, a.temperature_risk, a.age_risk) == (0, 0, 0)
    assert a.total_risk_score == 0
    assert a.risk_level == RiskLevel.LOW
    assert a.data_quality_tags == (
        DataQualityTag.BP_MALFORMED,
        DataQualityTag.TEMP_MISSING,
        DataQualityTag.AGE_INVALID,
    )


def test_non_string_blood_pressure_is_missing_not_malformed():
    a = assess_patient(_patient(blood_pressure=12080, temperature=None, age="oops"))
    assert a.data_quality_tags[0] == DataQualityTag.BP_MISSING


def test_quality_tags_independent_of_risk():
    """A high-risk patient can still carry a data quality tag."""
    a = assess_patient(_patient(blood_pressure="145/92", temperature="TEMP_ERROR", age=50))
    assert a.total_risk_score == 5
    assert a.risk_level == RiskLevel.HIGH
    assert a.data_quality_tags == (DataQualityTag.TEMP_INVALID,)


def test_original_values_retained():
    a = assess_patient(_patient(blood_pressure=" 118/76", temperature="99.8", age="41"))
    assert a.original_data == {"blood_pressure": " 118/76", "temperature": "99.8", "age": "41"}
    assert a.patient_id == "DEMO001"
    assert a.name == "TestPatient, John"


@pytest.mark.parametrize(
    "total, level",
    [(0, RiskLevel.LOW), (2, RiskLevel.LOW), (3, RiskLevel.MEDIUM), (4, RiskLevel.MEDIUM),
     (5, RiskLevel.HIGH), (8, RiskLevel.HIGH)],
)
def test_risk_level_boundaries(total, level):
    assert risk_level_for(total) == level


def test_total_is_sum_for_every_combination():
    bp_inputs = {0: "garbage", 1: "110/70", 2: "125/75", 3: "135/70", 4: "150/95"}
    temp_inputs = {0: 98.6, 1: 100.1, 2: 102.5}
    age_inputs = {0: None, 1: 30, 2: 80}

    for bp, temp, age in itertools.product(bp_inputs, temp_inputs, age_inputs):
        a = assess_patient(
            _patient(
                blood_pressure=bp_inputs[bp], temperature=temp_inputs[temp], age=age_inputs[age]
            )
        )
        assert (a.blood_pressure_risk, a.temperature_risk, a.age_risk) == (bp, temp, age)
        assert a.total_risk_score == bp + temp + age
        assert 0 <= a.total_risk_score <= 8
        assert a.risk_level == risk_level_for(a.total_risk_score)


def test_assessment_is_deterministic():
    record = _patient(blood_pressure="N/A", temperature="101.4", age=67)
    assert assess_patient(record) == assess_patient(record)


def test_assessment_is_immutable():
    a = assess_patient(_patient())
    with pytest.raises(AttributeError):
        a.total_risk_score = 99


def test_non_mapping_record_degrades():
    a = assess_patient(None)
    assert a.patient_id is None
    assert a.total_risk_score == 0
    assert len(a.data_quality_tags) == 3


def test_assess_patients_preserves_order():
    records = [_patient(patient_id=f"P{i}") for i in range(5)]
    assert [a.patient_id for a in assess_patients(records)] == ["P0", "P1", "P2", "P3", "P4"]


def test_to_dict_uses_plain_values():
    d = assess_patient(_patient(temperature=None)).to_dict()
    assert d["risk_level"] == "Medium"
    assert d["data_quality_tags"] == ["TEMP_MISSING"]


def test_oversized_numeric_strings_still_assessed():
    a = assess_patient(_patient(blood_pressure="1" * 5000 + "/70", temperature=98.6, age="7" * 5000))
    assert (a.blood_pressure_risk, a.temperature_risk, a.age_risk) == (4, 0, 2)
    assert a.risk_level == RiskLevel.HIGH
    assert a.data_quality_tags == ()


def test_original_data_is_read_only():
    a = assess_patient(_patient())
    with pytest.raises(TypeError):
        a.original_data["temperature"] = 104.0
    assert a.original_data["temperature"] == 98.6


def test_assessment_is_hashable():
    record = _patient(blood_pressure=["120", "80"])
    assert hash(assess_patient(record)) == hash(assess_patient(record))
    assert len({assess_patient(record), assess_patient(record)}) == 1
