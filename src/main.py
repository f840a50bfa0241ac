"""FastAPI application entrypoint."""

from contextlib import asynccontextmanager
from http import HTTPStatus
from typing import AsyncGenerator

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse

from src.api.health import router as health_router
from src.api.schemas import ErrorResponse
from src.api.tarokka import router as tarokka_router
from src.config import Settings, settings
from src.core.logging import get_logger, setup_logging
from src.core.tarokka import TarokkaReader

setup_logging(settings.LOG_LEVEL, settings.TAROKKA_LOG_LEVEL)
logger = get_logger(__name__)


def build_reader(config: Settings = settings) -> TarokkaReader:
    """설정값으로 TarokkaReader 생성"""
    return TarokkaReader(
        config.TAROKKA_DATA_DIR,
        deck_file=config.TAROKKA_DECK_FILE,
        config_file=config.TAROKKA_CONFIG_FILE,
        tome_own_description=config.TAROKKA_TOME_OWN_DESCRIPTION,
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup and shutdown events."""
    logger.info("Initializing Tarokka reader from %s...", settings.TAROKKA_DATA_DIR)
    reader = build_reader()

    # 캐시 예열. 실패해도 기동은 계속하고 /health가 상태를 알린다.
    deck = reader.load_deck()
    config = reader.load_config()
    if deck.success and config.success:
        logger.info("Tarokka reader initialized (%d cards).", len(deck.data))
    else:
        logger.error(
            "Tarokka data unavailable: %s", deck.error or config.error
        )
    app.state.tarokka_reader = reader

    yield

    logger.info("Shutting down...")
    app.state.tarokka_reader = None


app = FastAPI(title="Tarokka Reader", debug=settings.DEBUG, lifespan=lifespan)


@app.exception_handler(HTTPException)
async def http_error_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Render HTTPException bodies as ErrorResponse."""
    body = ErrorResponse(error=HTTPStatus(exc.status_code).phrase, detail=str(exc.detail))
    return JSONResponse(status_code=exc.status_code, content=body.model_dump())


app.include_router(health_router)
app.include_router(tarokka_router)
