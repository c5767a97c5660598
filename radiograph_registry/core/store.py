from __future__ import annotations

from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Iterator

from bson import ObjectId
from pymongo import DESCENDING, ReturnDocument
from pymongo.collection import Collection
from pymongo.errors import DuplicateKeyError as MongoDuplicateKeyError
from pymongo.errors import PyMongoError

from radiograph_registry.core.errors import DuplicateKeyError, NotFoundError, StoreError
from radiograph_registry.models.patient import PatientCreate, RadiographStatus
from radiograph_registry.utils.validation import validate_status

PATIENT_NOT_FOUND = "Paciente no encontrado"
RADIOGRAPH_NOT_FOUND = "Radiografía no encontrada"


def _now() -> datetime:
    """BSON 정밀도(밀리초)에 맞춘 현재 UTC 시각"""
    now = datetime.now(timezone.utc).replace(tzinfo=None)
    return now.replace(microsecond=now.microsecond // 1000 * 1000)


@contextmanager
def _store_errors() -> Iterator[None]:
    """드라이버 예외를 StoreError로 변환"""
    try:
        yield
    except PyMongoError as exc:
        raise StoreError(str(exc)) from exc


class PatientStore:
    """환자 문서 저장소

    환자와 소속 방사선 사진은 하나의 문서로 저장되어 함께 원자적으로 갱신된다.
    """

    def __init__(self, collection: Collection) -> None:
        self._collection = collection

    def ensure_indexes(self) -> None:
        """idPaciente 유니크 인덱스와 정렬용 인덱스 생성"""
        with _store_errors():
            self._collection.create_index("idPaciente", unique=True)
            self._collection.create_index([("createdAt", DESCENDING)])

    def ping(self) -> bool:
        """저장소 연결 여부

        Returns:
            서버 응답 시 True
        """
        try:
            self._collection.database.client.admin.command("ping")
        except PyMongoError:
            return False
        return True

    def create_patient(self, data: PatientCreate) -> dict:
        """환자 생성

        Args:
            data: 검증된 환자 생성 모델

        Returns:
            저장된 환자 문서

        Raises:
            DuplicateKeyError: idPaciente 중복 시
            StoreError: 그 밖의 저장소 실패
        """
        now = _now()
        document = {
            "idPaciente": data.patient_code,
            "nombre": data.name,
            "radiografias": [
                {
                    "idRadiografia": radiograph.radiograph_id,
                    "tipo": radiograph.exam_type.value,
                    "estado": radiograph.status.value,
                    "fechaNotificacion": (
                        now if radiograph.status is RadiographStatus.READY else None
                    ),
                }
                for radiograph in data.radiographs
            ],
            "createdAt": now,
            "updatedAt": now,
        }
        try:
            result = self._collection.insert_one(document)
        except MongoDuplicateKeyError as exc:
            raise DuplicateKeyError(data.patient_code) from exc
        except PyMongoError as exc:
            raise StoreError(str(exc)) from exc
        document["_id"] = result.inserted_id
        return document

    def list_patients(self) -> list[dict]:
        """생성 시각 내림차순 환자 목록"""
        with _store_errors():
            cursor = self._collection.find().sort(
                [("createdAt", DESCENDING), ("_id", DESCENDING)]
            )
            return list(cursor)

    def find_patient(self, id_or_code: str) -> dict:
        """내부 id, 이어서 idPaciente 순으로 환자 조회

        Args:
            id_or_code: ObjectId 문자열 또는 idPaciente

        Returns:
            환자 문서

        Raises:
            NotFoundError: 둘 다 일치하지 않을 때
        """
        document = None
        with _store_errors():
            if ObjectId.is_valid(id_or_code):
                document = self._collection.find_one({"_id": ObjectId(id_or_code)})
            if document is None:
                document = self._collection.find_one({"idPaciente": id_or_code})
        if document is None:
            raise NotFoundError(PATIENT_NOT_FOUND)
        return document

    def update_radiograph_status(
        self,
        patient_id: str,
        radiograph_id: str,
        status: RadiographStatus | str,
    ) -> dict:
        """방사선 사진 상태 변경

        환자 id와 idRadiografia로 지정한 배열 요소만 갱신한다. 상태가 lista이면
        fechaNotificacion을 현재 시각으로 설정하며, 이미 lista여도 다시 갱신된다.

        Args:
            patient_id: 환자 ObjectId 문자열 또는 idPaciente
            radiograph_id: 방사선 사진 식별자
            status: 새 상태

        Returns:
            갱신된 환자 문서

        Raises:
            ValidationError: 허용되지 않은 상태
            NotFoundError: 환자 또는 방사선 사진이 없을 때
        """
        if not isinstance(status, RadiographStatus):
            status = validate_status(status)
        patient = self.find_patient(patient_id)
        radiographs = patient.get("radiografias") or []
        if not any(item.get("idRadiografia") == radiograph_id for item in radiographs):
            raise NotFoundError(RADIOGRAPH_NOT_FOUND)

        now = _now()
        changes: dict = {"radiografias.$.estado": status.value, "updatedAt": now}
        if status is RadiographStatus.READY:
            changes["radiografias.$.fechaNotificacion"] = now

        with _store_errors():
            updated = self._collection.find_one_and_update(
                {"_id": patient["_id"], "radiografias.idRadiografia": radiograph_id},
                {"$set": changes},
                return_document=ReturnDocument.AFTER,
            )
        if updated is None:
            raise NotFoundError(RADIOGRAPH_NOT_FOUND)
        return updated
