from __future__ import annotations

import time
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from radiograph_registry.api.handlers import register_exception_handlers
from radiograph_registry.api.routes import router as api_router
from radiograph_registry.core.config import get_settings
from radiograph_registry.core.db import create_client, patient_collection
from radiograph_registry.core.errors import StoreError
from radiograph_registry.core.logger import log_event
from radiograph_registry.core.logging import configure_logging
from radiograph_registry.core.store import PatientStore


def create_app(store: PatientStore | None = None) -> FastAPI:
    """애플리케이션을 생성하고 FastAPI를 설정

    Args:
        store: 주입할 환자 저장소(없으면 설정의 MongoDB 사용)

    Returns:
        FastAPI 애플리케이션
    """
    settings = get_settings()
    configure_logging(settings.log_level)

    client = None
    if store is None:
        client = create_client(settings)
        store = PatientStore(patient_collection(client, settings))

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # 저장소 연결 실패는 재시도 없이 프로세스를 종료
        if not store.ping():
            log_event("store_connect_failed", "CRITICAL", "MongoDB 연결 실패")
            raise SystemExit(1)
        try:
            store.ensure_indexes()
        except StoreError as exc:
            log_event("store_connect_failed", "CRITICAL", exc.message, error_code=exc.code)
            raise SystemExit(1) from exc
        log_event("store_connected", "INFO", "MongoDB 연결됨")
        yield
        if client is not None:
            client.close()

    app = FastAPI(title="Radiograph Registry", version=settings.version, lifespan=lifespan)
    app.state.store = store
    app.state.started_at = time.monotonic()
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)
    app.include_router(api_router)
    return app
