import uvicorn

from radiograph_registry.core.config import get_settings
from radiograph_registry.core.logger import log_event
from radiograph_registry.core.logging import configure_logging


def main() -> None:
    """uvicorn으로 서버 실행"""
    settings = get_settings()
    configure_logging(settings.log_level)
    log_event("server_start", "INFO", f"http://{settings.host}:{settings.port}")
    uvicorn.run(
        "radiograph_registry.main:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
