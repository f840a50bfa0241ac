"""Tarokka API endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Request

from src.api.schemas import (
    CardResponse,
    ErrorResponse,
    OutcomeResponse,
    ReadingRequest,
    ReadingResponse,
)
from src.core.logging import get_logger
from src.core.tarokka import TarokkaReader

logger = get_logger(__name__)

router = APIRouter(prefix="/tarokka", tags=["tarokka"])


def get_reader(request: Request) -> TarokkaReader:
    """TarokkaReader 인스턴스 반환 (의존성 주입)"""
    reader: TarokkaReader = request.app.state.tarokka_reader
    return reader


@router.post(
    "/reading",
    response_model=ReadingResponse,
    responses={503: {"model": ErrorResponse}},
)
def perform_reading(
    request: ReadingRequest,
    reader: TarokkaReader = Depends(get_reader),
) -> ReadingResponse:
    """
    5장 리딩 수행

    같은 seed는 항상 같은 카드와 결과를 반환합니다 (timestamp 제외).
    """
    result = reader.perform_full_reading(request.seed)
    if not result.success:
        logger.error("Reading failed: %s", result.error)
        raise HTTPException(status_code=503, detail=result.error)

    return ReadingResponse(success=True, reading=result.data.to_dict())


@router.get(
    "/cards/{card_id}",
    response_model=CardResponse,
    responses={404: {"model": ErrorResponse}, 503: {"model": ErrorResponse}},
)
def get_card(
    card_id: str,
    reader: TarokkaReader = Depends(get_reader),
) -> CardResponse:
    """카드 직접 조회 (셔플 무관)"""
    deck_result = reader.load_deck()
    if not deck_result.success:
        raise HTTPException(status_code=503, detail=deck_result.error)

    result = reader.get_card_by_id(card_id)
    if not result.success:
        raise HTTPException(status_code=404, detail=result.error)

    return CardResponse(success=True, card=result.data.to_dict())


@router.get(
    "/resolve/{category}/{card_id}",
    response_model=OutcomeResponse,
    responses={503: {"model": ErrorResponse}},
)
def resolve_card(
    category: str,
    card_id: str,
    reader: TarokkaReader = Depends(get_reader),
) -> OutcomeResponse:
    """
    카테고리 하나에 대해 카드 해석

    내레이터가 카드를 직접 지정할 때 사용합니다.
    알 수 없는 카테고리는 outcome.error 필드로 반환됩니다.
    """
    result = reader.resolve_category(category, card_id)
    if not result.success:
        raise HTTPException(status_code=503, detail=result.error)

    return OutcomeResponse(
        success=True,
        category=category,
        card_id=card_id,
        outcome=result.data.to_dict(),
    )
