from __future__ import annotations

from fastapi import APIRouter, Depends, status

from radiograph_registry.core.deps import get_store
from radiograph_registry.core.errors import DuplicateKeyError
from radiograph_registry.core.logger import log_event
from radiograph_registry.core.store import PatientStore
from radiograph_registry.models.patient import Patient
from radiograph_registry.utils.validation import (
    validate_patient_create,
    validate_status_update,
)

router = APIRouter()


def _serialize(document: dict) -> dict:
    return Patient.from_document(document).to_response()


@router.post("/pacientes", status_code=status.HTTP_201_CREATED)
def create_patient(payload: dict, store: PatientStore = Depends(get_store)) -> dict:
    """환자 생성

    Args:
        payload: idPaciente, nombre, radiografias(선택)
        store: 환자 저장소

    Returns:
        생성된 환자 응답
    """
    data = validate_patient_create(payload)
    try:
        document = store.create_patient(data)
    except DuplicateKeyError:
        log_event(
            "patient_duplicate", "WARNING", "idPaciente 중복", patient_id=data.patient_code
        )
        raise
    log_event("patient_created", "INFO", "환자 생성", patient_id=data.patient_code)
    return {
        "success": True,
        "data": _serialize(document),
        "message": "Paciente creado exitosamente",
    }


@router.get("/pacientes")
def list_patients(store: PatientStore = Depends(get_store)) -> dict:
    """생성 시각 내림차순 환자 목록"""
    patients = [_serialize(document) for document in store.list_patients()]
    return {"success": True, "count": len(patients), "data": patients}


@router.get("/pacientes/{patient_id}")
def get_patient(patient_id: str, store: PatientStore = Depends(get_store)) -> dict:
    """내부 id 또는 idPaciente로 환자 조회"""
    document = store.find_patient(patient_id)
    return {"success": True, "data": _serialize(document)}


@router.put("/pacientes/{patient_id}/radiografias/{radiograph_id}")
def update_radiograph_status(
    patient_id: str,
    radiograph_id: str,
    payload: dict,
    store: PatientStore = Depends(get_store),
) -> dict:
    """방사선 사진 상태 변경

    Args:
        patient_id: 환자 id 또는 idPaciente
        radiograph_id: 방사선 사진 식별자
        payload: estado
        store: 환자 저장소

    Returns:
        갱신된 환자 응답
    """
    new_status = validate_status_update(payload)
    document = store.update_radiograph_status(patient_id, radiograph_id, new_status)
    log_event(
        "radiograph_status_updated",
        "INFO",
        f"{radiograph_id} -> {new_status.value}",
        patient_id=document.get("idPaciente"),
    )
    return {
        "success": True,
        "data": _serialize(document),
        "message": "Estado actualizado correctamente",
    }
