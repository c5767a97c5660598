from __future__ import annotations

from radiograph_registry.core.errors import ValidationError
from radiograph_registry.models.patient import (
    ExamType,
    PatientCreate,
    RadiographCreate,
    RadiographStatus,
)

STATUS_VALUES = [status.value for status in RadiographStatus]
EXAM_TYPE_VALUES = [exam.value for exam in ExamType]


def require_text(value: object, field: str) -> str:
    """공백이 아닌 문자열 필드 검증

    Args:
        value: 원본 값
        field: 에러 메시지에 사용할 필드명

    Returns:
        앞뒤 공백을 제거한 문자열

    Raises:
        ValidationError: 값이 없거나 문자열이 아닐 때
    """
    if value is None:
        raise ValidationError(field, "Faltan campos obligatorios")
    if not isinstance(value, str):
        raise ValidationError(field, f"{field} debe ser texto")
    text = value.strip()
    if text == "":
        raise ValidationError(field, "Faltan campos obligatorios")
    return text


def validate_status(value: object, field: str = "estado") -> RadiographStatus:
    """상태 값을 허용 목록과 대조

    Raises:
        ValidationError: 허용되지 않은 상태일 때
    """
    text = require_text(value, field)
    try:
        return RadiographStatus(text)
    except ValueError as exc:
        raise ValidationError(
            field, f"Estado inválido: {text}. Valores permitidos: {', '.join(STATUS_VALUES)}"
        ) from exc


def validate_exam_type(value: object, field: str = "tipo") -> ExamType:
    text = require_text(value, field)
    try:
        return ExamType(text)
    except ValueError as exc:
        raise ValidationError(
            field,
            f"Tipo de examen inválido: {text}. Valores permitidos: {', '.join(EXAM_TYPE_VALUES)}",
        ) from exc


def validate_radiograph(item: object, index: int) -> RadiographCreate:
    """radiografias 항목 하나를 검증

    Args:
        item: 원본 항목
        index: 목록 내 위치

    Returns:
        방사선 사진 생성 모델
    """
    prefix = f"radiografias[{index}]"
    if not isinstance(item, dict):
        raise ValidationError(prefix, f"{prefix} debe ser un objeto")
    radiograph_id = require_text(item.get("idRadiografia"), f"{prefix}.idRadiografia")
    exam_type = validate_exam_type(item.get("tipo"), f"{prefix}.tipo")
    status = RadiographStatus.PENDING
    if item.get("estado") is not None:
        status = validate_status(item.get("estado"), f"{prefix}.estado")
    return RadiographCreate(
        radiograph_id=radiograph_id, exam_type=exam_type, status=status
    )


def validate_patient_create(payload: object) -> PatientCreate:
    """환자 생성 페이로드 검증

    필수 필드 검사는 저장소 호출(중복 검사) 이전에 수행된다.

    Args:
        payload: 요청 본문

    Returns:
        환자 생성 모델

    Raises:
        ValidationError: 필수 필드 누락, 형식 오류, 허용되지 않은 값
    """
    if not isinstance(payload, dict):
        raise ValidationError("body", "El cuerpo debe ser un objeto JSON")
    patient_code = require_text(payload.get("idPaciente"), "idPaciente")
    name = require_text(payload.get("nombre"), "nombre")

    raw_radiographs = payload.get("radiografias")
    if raw_radiographs is None:
        raw_radiographs = []
    if not isinstance(raw_radiographs, list):
        raise ValidationError("radiografias", "radiografias debe ser una lista")

    radiographs: list[RadiographCreate] = []
    seen: set[str] = set()
    for index, item in enumerate(raw_radiographs):
        radiograph = validate_radiograph(item, index)
        if radiograph.radiograph_id in seen:
            raise ValidationError(
                f"radiografias[{index}].idRadiografia",
                f"idRadiografia duplicado: {radiograph.radiograph_id}",
            )
        seen.add(radiograph.radiograph_id)
        radiographs.append(radiograph)

    return PatientCreate(patient_code=patient_code, name=name, radiographs=radiographs)


def validate_status_update(payload: object) -> RadiographStatus:
    """상태 변경 페이로드에서 estado 검증"""
    if not isinstance(payload, dict):
        raise ValidationError("body", "El cuerpo debe ser un objeto JSON")
    return validate_status(payload.get("estado"))
