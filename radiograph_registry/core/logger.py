from __future__ import annotations

import logging


def log_event(
    event: str,
    level: str,
    message: str,
    patient_id: str | None = None,
    error_code: str | None = None,
) -> None:
    """이벤트를 표준 로깅으로 기록

    Args:
        event: 이벤트 이름
        level: 로깅 레벨 문자열
        message: 로그 메시지
        patient_id: 환자 식별자(선택)
        error_code: 에러 코드(선택)
    """
    logger = logging.getLogger("radiograph-registry")
    extra = {
        "event": event,
        "patient_id": patient_id or "-",
    }
    if error_code:
        message = f"{message} error_code={error_code}"
    logger.log(getattr(logging, level.upper(), logging.INFO), message, extra=extra)
