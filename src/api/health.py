"""Health check endpoint."""

from fastapi import APIRouter, Depends

from src.api.tarokka import get_reader
from src.core.tarokka import TarokkaReader

router = APIRouter()


@router.get("/health")
def health_check(reader: TarokkaReader = Depends(get_reader)) -> dict[str, str]:
    """Return application and Tarokka data health status."""
    deck = reader.load_deck()
    config = reader.load_config()
    if deck.success and config.success:
        return {"status": "ok", "deck": "loaded", "config": "loaded"}
    return {
        "status": "error",
        "deck": "loaded" if deck.success else "unavailable",
        "config": "loaded" if config.success else "unavailable",
    }
