from __future__ import annotations

from pathlib import Path

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates
from pydantic import ValidationError as PydanticValidationError

from radiograph_registry.core.deps import get_store
from radiograph_registry.core.errors import NotFoundError, RegistryError
from radiograph_registry.core.logger import log_event
from radiograph_registry.core.store import PatientStore
from radiograph_registry.models.patient import Patient

router = APIRouter()

templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent.parent / "templates"))


@router.get("/", response_class=HTMLResponse)
def index(
    request: Request,
    id: str | None = None,
    store: PatientStore = Depends(get_store),
) -> HTMLResponse:
    """검색 폼 또는 환자 조회 결과 페이지 렌더링

    Args:
        request: FastAPI 요청 객체
        id: idPaciente 또는 내부 id(선택)
        store: 환자 저장소

    Returns:
        HTML 응답
    """
    query = (id or "").strip()
    if not query:
        return templates.TemplateResponse(request, "index.html", {})

    try:
        patient = Patient.from_document(store.find_patient(query))
    except NotFoundError:
        return templates.TemplateResponse(request, "not_found.html", {"query": query})
    except RegistryError as exc:
        return templates.TemplateResponse(request, "error.html", {"message": exc.message})
    except PydanticValidationError as exc:
        log_event("unhandled_error", "ERROR", repr(exc), patient_id=query)
        return templates.TemplateResponse(
            request, "error.html", {"message": "Registro de paciente inválido"}
        )

    return templates.TemplateResponse(request, "patient.html", {"patient": patient})
