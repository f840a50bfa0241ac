"""타로카 도메인 모델 (저장 포맷 무관)

모든 모델은 frozen. to_dict()는 호출자가 저장/전송에 쓰는 camelCase plain data를 만든다.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional, Union

from .enums import CardCategory, ReadingCategory, Suit


# === 카드 ===


@dataclass(frozen=True)
class FortuneTelling:
    general: str
    light: str
    dark: str
    advice: str

    def to_dict(self) -> dict[str, str]:
        return {
            "general": self.general,
            "light": self.light,
            "dark": self.dark,
            "advice": self.advice,
        }


@dataclass(frozen=True)
class Card:
    """타로카 카드 한 장"""

    id: str
    suit: Suit
    name: str
    rank: int
    category: CardCategory
    description: str
    fortune_telling: FortuneTelling

    def snapshot(self, description: Optional[str] = None) -> CardSnapshot:
        """리딩에 기록할 카드 스냅샷. description을 넘기면 그 값으로 대체."""
        return CardSnapshot(
            id=self.id,
            name=self.name,
            suit=self.suit,
            description=self.description if description is None else description,
            fortune_telling=self.fortune_telling,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "suit": self.suit.value,
            "name": self.name,
            "rank": self.rank,
            "category": self.category.value,
            "description": self.description,
            "fortuneTelling": self.fortune_telling.to_dict(),
        }


@dataclass(frozen=True)
class CardSnapshot:
    """리딩 시점의 카드 정보"""

    id: str
    name: str
    suit: Suit
    description: str
    fortune_telling: FortuneTelling

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "suit": self.suit.value,
            "description": self.description,
            "fortuneTelling": self.fortune_telling.to_dict(),
        }


# === 리딩 설정 테이블 ===


@dataclass(frozen=True)
class ArtifactLocation:
    card_id: str
    location_id: str
    location_name: str = ""
    description: str = ""
    dm_guidance: str = ""


@dataclass(frozen=True)
class AllyEntry:
    card_id: str
    ally_id: str
    ally_name: str = ""
    description: str = ""
    mechanical_benefit: str = ""
    dm_guidance: str = ""
    when_they_appear: str = ""


@dataclass(frozen=True)
class EnemyLocation:
    card_id: str
    location_id: str
    location_name: str = ""
    description: str = ""
    tactical_notes: str = ""
    lair_actions: tuple[str, ...] = ()
    dm_guidance: str = ""


TableEntry = Union[ArtifactLocation, AllyEntry, EnemyLocation]


@dataclass(frozen=True)
class OutcomeTable:
    """card_id로 찾는 결과 테이블.

    테이블 순서상 첫 항목이 우선(first match wins). 중복 card_id는 허용하지만
    뒤쪽 항목은 조회되지 않는다.
    """

    entries: tuple[TableEntry, ...]
    _by_card: dict[str, TableEntry] = field(
        init=False, repr=False, compare=False, default_factory=dict
    )

    def __post_init__(self) -> None:
        index: dict[str, TableEntry] = {}
        for entry in self.entries:
            index.setdefault(entry.card_id, entry)
        object.__setattr__(self, "_by_card", index)

    def find(self, card_id: str) -> Optional[TableEntry]:
        return self._by_card.get(card_id)

    def __len__(self) -> int:
        return len(self.entries)


@dataclass(frozen=True)
class ArtifactReading:
    """아티팩트 하나의 위치 테이블"""

    category: ReadingCategory
    name: str
    possible_locations: OutcomeTable


@dataclass(frozen=True)
class FallbackDefault:
    """매핑되지 않은 카드용 기본값. outcome_id = locationId 또는 allyId."""

    outcome_id: str
    reason: str = ""


@dataclass(frozen=True)
class ReadingConfiguration:
    artifact_readings: dict[ReadingCategory, ArtifactReading]
    possible_allies: OutcomeTable
    enemy_locations: OutcomeTable
    fallback_defaults: dict[ReadingCategory, FallbackDefault]


# === 해석 결과 ===


@dataclass(frozen=True)
class ArtifactOutcome:
    artifact: str
    card_id: str
    location_id: str
    location_name: str
    description: str
    dm_guidance: str
    is_fallback: bool = False

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "artifact": self.artifact,
            "cardId": self.card_id,
            "locationId": self.location_id,
            "locationName": self.location_name,
            "description": self.description,
            "dmGuidance": self.dm_guidance,
        }
        if self.is_fallback:
            result["isFallback"] = True
        return result


@dataclass(frozen=True)
class AllyOutcome:
    card_id: str
    ally_id: str
    ally_name: str
    description: str
    dm_guidance: str
    mechanical_benefit: Optional[str] = None
    when_they_appear: Optional[str] = None
    is_fallback: bool = False

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "cardId": self.card_id,
            "allyId": self.ally_id,
            "allyName": self.ally_name,
            "description": self.description,
            "dmGuidance": self.dm_guidance,
        }
        if self.is_fallback:
            result["isFallback"] = True
        else:
            result["mechanicalBenefit"] = self.mechanical_benefit
            result["whenTheyAppear"] = self.when_they_appear
        return result


@dataclass(frozen=True)
class EnemyOutcome:
    card_id: str
    location_id: str
    location_name: str
    description: str
    dm_guidance: str
    tactical_notes: Optional[str] = None
    lair_actions: tuple[str, ...] = ()
    is_fallback: bool = False

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "cardId": self.card_id,
            "locationId": self.location_id,
            "locationName": self.location_name,
            "description": self.description,
            "dmGuidance": self.dm_guidance,
        }
        if self.is_fallback:
            result["isFallback"] = True
        else:
            result["tacticalNotes"] = self.tactical_notes
            result["lairActions"] = list(self.lair_actions)
        return result


@dataclass(frozen=True)
class ErrorOutcome:
    """잘못된 카테고리 요청. 예외 대신 이 값을 반환해 해당 슬롯만 실패시킨다."""

    error: str

    def to_dict(self) -> dict[str, Any]:
        return {"error": self.error}


Outcome = Union[ArtifactOutcome, AllyOutcome, EnemyOutcome, ErrorOutcome]


# === 리딩 ===


@dataclass(frozen=True)
class ReadingSlot:
    category: ReadingCategory
    card: CardSnapshot
    outcome: Outcome

    def to_dict(self) -> dict[str, Any]:
        return {
            "card": self.card.to_dict(),
            self.category.outcome_key: self.outcome.to_dict(),
        }


@dataclass(frozen=True)
class Reading:
    """5장 리딩 결과. 생성 후 불변, 저장은 호출자 책임."""

    seed: int
    timestamp: str
    slots: tuple[ReadingSlot, ...]

    @property
    def cards(self) -> dict[str, ReadingSlot]:
        return {slot.category.value: slot for slot in self.slots}

    def slot(self, category: ReadingCategory) -> ReadingSlot:
        for slot in self.slots:
            if slot.category is category:
                return slot
        raise KeyError(category.value)

    def to_dict(self) -> dict[str, Any]:
        return {
            "seed": self.seed,
            "timestamp": self.timestamp,
            "cards": {key: slot.to_dict() for key, slot in self.cards.items()},
        }


@dataclass(frozen=True)
class LoadResult:
    """success/data/error 결과 래퍼"""

    success: bool
    data: Any = None
    error: Optional[str] = None

    @classmethod
    def ok(cls, data: Any) -> LoadResult:
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, error: str) -> LoadResult:
        return cls(success=False, error=error)
