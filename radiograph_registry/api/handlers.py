from __future__ import annotations

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from radiograph_registry.core.errors import RegistryError, StoreError
from radiograph_registry.core.logger import log_event


def _envelope(status_code: int, error: str, message: str | None = None) -> JSONResponse:
    body: dict = {"success": False, "error": error}
    if message:
        body["message"] = message
    return JSONResponse(status_code=status_code, content=body)


async def registry_error_handler(request: Request, exc: RegistryError) -> JSONResponse:
    """레지스트리 예외를 응답 봉투로 변환

    StoreError는 내부 메시지를 그대로 노출한다(내부 관리용 도구).
    """
    if isinstance(exc, StoreError):
        log_event("store_error", "ERROR", exc.message, error_code=exc.code)
    return _envelope(exc.status_code, exc.message)


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """본문이 JSON 객체가 아닐 때 400 반환"""
    return _envelope(
        status.HTTP_400_BAD_REQUEST,
        "Cuerpo de la solicitud inválido",
        "; ".join(str(error.get("msg", "")) for error in exc.errors()),
    )


async def http_error_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """매칭되지 않은 경로 등 HTTP 예외 처리

    등록되지 않은 메서드(405)도 매칭되지 않은 경로로 보고 404를 반환한다.
    """
    if exc.status_code in {
        status.HTTP_404_NOT_FOUND,
        status.HTTP_405_METHOD_NOT_ALLOWED,
    }:
        return _envelope(status.HTTP_404_NOT_FOUND, "Ruta no encontrada")
    return _envelope(exc.status_code, str(exc.detail))


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    log_event("unhandled_error", "ERROR", repr(exc))
    return _envelope(status.HTTP_500_INTERNAL_SERVER_ERROR, "Algo salió mal!")


def register_exception_handlers(app: FastAPI) -> None:
    """예외 처리기를 애플리케이션에 등록

    Args:
        app: FastAPI 애플리케이션
    """
    app.add_exception_handler(RegistryError, registry_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
