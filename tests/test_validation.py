import pytest

from radiograph_registry.core.errors import ValidationError
from radiograph_registry.models.patient import ExamType, RadiographStatus
from radiograph_registry.utils.validation import (
    validate_patient_create,
    validate_status,
    validate_status_update,
)


def test_validate_patient_create_defaults():
    data = validate_patient_create(
        {
            "idPaciente": " PAC-001 ",
            "nombre": "Ana Pérez",
            "radiografias": [{"idRadiografia": "R1", "tipo": "torax"}],
        }
    )
    assert data.patient_code == "PAC-001"
    assert data.radiographs[0].exam_type is ExamType.CHEST
    assert data.radiographs[0].status is RadiographStatus.PENDING


def test_validate_patient_create_without_radiographs():
    data = validate_patient_create({"idPaciente": "PAC-002", "nombre": "Luis"})
    assert data.radiographs == []


@pytest.mark.parametrize(
    "payload",
    [
        {"nombre": "Ana"},
        {"idPaciente": "PAC-001"},
        {"idPaciente": "PAC-001", "nombre": "   "},
        {"idPaciente": 42, "nombre": "Ana"},
    ],
)
def test_validate_patient_create_missing_fields(payload):
    with pytest.raises(ValidationError):
        validate_patient_create(payload)


def test_validate_patient_create_unknown_exam_type():
    with pytest.raises(ValidationError) as exc_info:
        validate_patient_create(
            {
                "idPaciente": "PAC-001",
                "nombre": "Ana",
                "radiografias": [{"idRadiografia": "R1", "tipo": "rodilla"}],
            }
        )
    assert exc_info.value.field == "radiografias[0].tipo"


def test_validate_patient_create_duplicate_radiograph_ids():
    with pytest.raises(ValidationError):
        validate_patient_create(
            {
                "idPaciente": "PAC-001",
                "nombre": "Ana",
                "radiografias": [
                    {"idRadiografia": "R1", "tipo": "torax"},
                    {"idRadiografia": "R1", "tipo": "craneo"},
                ],
            }
        )


def test_validate_status():
    assert validate_status("lista") is RadiographStatus.READY


def test_validate_status_rejects_unknown_value():
    with pytest.raises(ValidationError):
        validate_status("archivada")


def test_validate_status_update_requires_estado():
    with pytest.raises(ValidationError):
        validate_status_update({})
