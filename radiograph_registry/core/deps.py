from fastapi import Request

from radiograph_registry.core.store import PatientStore


def get_store(request: Request) -> PatientStore:
    """애플리케이션에 주입된 환자 저장소 반환

    Args:
        request: FastAPI 요청 객체

    Returns:
        환자 저장소
    """
    return request.app.state.store
