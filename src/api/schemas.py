"""API request/response schemas."""

from typing import Any, Optional

from pydantic import BaseModel, Field


# === Request Schemas ===


class ReadingRequest(BaseModel):
    """타로카 리딩 요청"""

    seed: Optional[int] = Field(
        default=None, description="결정적 셔플 시드. 생략 시 현재 시각 사용"
    )


# === Response Schemas ===


class ReadingResponse(BaseModel):
    """리딩 결과 응답"""

    success: bool
    reading: dict[str, Any]


class CardResponse(BaseModel):
    """카드 단건 조회 응답"""

    success: bool
    card: dict[str, Any]


class OutcomeResponse(BaseModel):
    """카테고리 단건 해석 응답. 잘못된 카테고리는 outcome.error로 전달"""

    success: bool
    category: str
    card_id: str
    outcome: dict[str, Any]


class ErrorResponse(BaseModel):
    """에러 응답"""

    success: bool = False
    error: str
    detail: Optional[str] = None
