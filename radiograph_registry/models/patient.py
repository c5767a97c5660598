from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_serializer


def utc_isoformat(value: datetime | None) -> str | None:
    """저장소의 naive UTC 시각을 Z 접미사가 붙은 ISO 문자열로 변환

    Args:
        value: 시각(선택)

    Returns:
        ISO8601 문자열 또는 None
    """
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


class RadiographStatus(str, Enum):
    """방사선 사진 처리 상태"""

    PENDING = "pendiente"
    READY = "lista"
    REVIEWED = "revisada"


class ExamType(str, Enum):
    """검사 부위"""

    CHEST = "torax"
    LUMBAR_SPINE = "columna_lumbar"
    SKULL = "craneo"
    ABDOMEN = "abdomen"
    PELVIS = "pelvis"
    EXTREMITIES = "extremidades"


class RadiographCreate(BaseModel):
    """환자 생성 시 함께 등록되는 방사선 사진"""

    model_config = ConfigDict(populate_by_name=True)

    radiograph_id: str = Field(..., alias="idRadiografia", description="방사선 사진 식별자")
    exam_type: ExamType = Field(..., alias="tipo", description="검사 부위")
    status: RadiographStatus = Field(
        default=RadiographStatus.PENDING, alias="estado", description="처리 상태"
    )


class PatientCreate(BaseModel):
    """환자 생성 요청"""

    model_config = ConfigDict(populate_by_name=True)

    patient_code: str = Field(..., alias="idPaciente", description="외부 환자 식별자")
    name: str = Field(..., alias="nombre", description="환자 이름")
    radiographs: list[RadiographCreate] = Field(
        default_factory=list, alias="radiografias", description="방사선 사진 목록"
    )


class Radiograph(BaseModel):
    """저장된 방사선 사진"""

    model_config = ConfigDict(populate_by_name=True)

    radiograph_id: str = Field(..., alias="idRadiografia")
    exam_type: ExamType = Field(..., alias="tipo")
    status: RadiographStatus = Field(default=RadiographStatus.PENDING, alias="estado")
    notified_at: datetime | None = Field(default=None, alias="fechaNotificacion")

    @field_serializer("notified_at")
    def _serialize_notified_at(self, value: datetime | None) -> str | None:
        return utc_isoformat(value)


class Patient(BaseModel):
    """저장된 환자 문서"""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., description="저장소가 부여한 식별자")
    patient_code: str = Field(..., alias="idPaciente")
    name: str = Field(..., alias="nombre")
    radiographs: list[Radiograph] = Field(default_factory=list, alias="radiografias")
    created_at: datetime = Field(..., alias="createdAt")
    updated_at: datetime = Field(..., alias="updatedAt")

    @field_serializer("created_at", "updated_at")
    def _serialize_timestamps(self, value: datetime) -> str | None:
        return utc_isoformat(value)

    @classmethod
    def from_document(cls, document: dict) -> "Patient":
        """MongoDB 문서를 모델로 변환

        Args:
            document: 저장소 문서

        Returns:
            환자 모델
        """
        data = dict(document)
        data["id"] = str(data.pop("_id"))
        return cls.model_validate(data)

    def to_response(self) -> dict:
        """응답용 JSON 딕셔너리"""
        return self.model_dump(mode="json", by_alias=True)
