import time
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Request

from radiograph_registry.core.deps import get_store
from radiograph_registry.core.store import PatientStore

router = APIRouter()


@router.get("/health")
def health_check(request: Request, store: PatientStore = Depends(get_store)) -> dict:
    """서비스 헬스 상태를 반환

    저장소 연결 상태와 프로세스 가동 시간만 보고한다.
    """
    return {
        "status": "OK",
        "dbStatus": "Conectado" if store.ping() else "Desconectado",
        "uptime": round(time.monotonic() - request.app.state.started_at, 3),
        "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
    }
