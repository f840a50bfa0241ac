"""타로카 관련 열거형"""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional


class Suit(str, Enum):
    HIGH_DECK = "high_deck"
    SWORDS = "swords"
    COINS = "coins"
    GLYPHS = "glyphs"
    STARS = "stars"


class CardCategory(str, Enum):
    MAJOR = "major"
    MINOR = "minor"


class ReadingCategory(str, Enum):
    """리딩 슬롯 (= 결과 테이블 카테고리)"""

    SUNSWORD = "sunsword"
    HOLY_SYMBOL = "holySymbol"
    TOME = "tome"
    ALLY = "ally"
    ENEMY = "enemy"

    @property
    def is_artifact(self) -> bool:
        return self in ARTIFACT_CATEGORIES

    @property
    def outcome_key(self) -> str:
        """리딩 dict에서 결과가 들어가는 키. ally만 "ally", 나머지는 "location"."""
        return "ally" if self is ReadingCategory.ALLY else "location"

    @classmethod
    def parse(cls, key: Any) -> Optional[ReadingCategory]:
        """외부 입력 문자열 → 카테고리. 알 수 없는 값이면 None (예외 없음)."""
        try:
            return cls(key)
        except (ValueError, TypeError):
            return None


ARTIFACT_CATEGORIES: tuple[ReadingCategory, ...] = (
    ReadingCategory.SUNSWORD,
    ReadingCategory.HOLY_SYMBOL,
    ReadingCategory.TOME,
)

# 드로우 순서 = 셔플된 덱의 위치 0~4. 저장된 리딩(시드만 기록)의 재현이 이 순서에 의존한다.
DRAW_ORDER: tuple[ReadingCategory, ...] = (
    ReadingCategory.SUNSWORD,
    ReadingCategory.HOLY_SYMBOL,
    ReadingCategory.TOME,
    ReadingCategory.ALLY,
    ReadingCategory.ENEMY,
)
