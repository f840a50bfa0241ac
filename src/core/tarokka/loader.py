"""덱 / 리딩 설정 로더 — 검증 + 단일 로드(single-flight) 캐시

원본 데이터의 위치와 포맷은 Source 콜러블이 소유한다.
기본 구현은 JSON 파일(json_file_source).
"""

from __future__ import annotations

import json
import logging
import threading
from pathlib import Path
from typing import Any, Callable, Generic, Optional, TypeVar

from .enums import ARTIFACT_CATEGORIES, CardCategory, ReadingCategory, Suit
from .models import (
    AllyEntry,
    ArtifactLocation,
    ArtifactReading,
    Card,
    EnemyLocation,
    FallbackDefault,
    FortuneTelling,
    OutcomeTable,
    ReadingConfiguration,
)

logger = logging.getLogger(__name__)

DECK_SIZE = 54
DECK_GROUPS: tuple[str, ...] = ("highDeck", "swords", "coins", "glyphs", "stars")
# 그룹 키 -> (수트, 장수). high deck 14장(major) + 수트별 10장(minor)
DECK_COMPOSITION: dict[str, tuple[Suit, int]] = {
    "highDeck": (Suit.HIGH_DECK, 14),
    "swords": (Suit.SWORDS, 10),
    "coins": (Suit.COINS, 10),
    "glyphs": (Suit.GLYPHS, 10),
    "stars": (Suit.STARS, 10),
}

Source = Callable[[], Any]
T = TypeVar("T")


class LoadError(Exception):
    """덱/설정 원본을 읽을 수 없거나 구조가 잘못됨. 항상 호출자에게 전달된다."""


def json_file_source(path: str | Path) -> Source:
    """JSON 파일을 읽어 dict로 반환하는 Source."""
    path = Path(path)

    def _read() -> Any:
        with path.open("r", encoding="utf-8") as f:
            return json.load(f)

    return _read


class _CachedLoader(Generic[T]):
    """첫 성공 결과를 인스턴스 수명 동안 보관.

    첫 로드는 lock으로 직렬화된다. 동시에 들어온 호출자는 진행 중인 로드를
    기다렸다가 그 결과를 재사용한다. 실패는 캐시하지 않는다.
    """

    label = "data"

    def __init__(self, source: Source) -> None:
        self._source = source
        self._value: Optional[T] = None
        self._lock = threading.Lock()

    @property
    def is_loaded(self) -> bool:
        return self._value is not None

    def load(self) -> T:
        value = self._value
        if value is not None:
            return value

        with self._lock:
            if self._value is None:
                self._value = self._fetch()
            return self._value

    def invalidate(self) -> None:
        """캐시 폐기. 다음 load()에서 원본을 다시 읽는다."""
        with self._lock:
            self._value = None

    def _fetch(self) -> T:
        try:
            raw = self._source()
        except (OSError, ValueError) as e:
            logger.warning("Failed to read %s: %s", self.label, e)
            raise LoadError(f"Failed to load {self.label}: {e}") from e

        try:
            value = self._parse(raw)
        except LoadError as e:
            logger.warning("Invalid %s: %s", self.label, e)
            raise
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            logger.warning("Malformed %s: %r", self.label, e)
            raise LoadError(f"Failed to load {self.label}: malformed data ({e!r})") from e

        logger.info("Loaded %s", self.label)
        return value

    def _parse(self, raw: Any) -> T:
        raise NotImplementedError


# === 덱 ===


def _parse_card(raw: dict) -> Card:
    ft = raw["fortuneTelling"]
    return Card(
        id=str(raw["id"]),
        suit=Suit(raw["suit"]),
        name=raw["name"],
        rank=int(raw["rank"]),
        category=CardCategory(raw["category"]),
        description=raw["description"],
        fortune_telling=FortuneTelling(
            general=ft["general"],
            light=ft["light"],
            dark=ft["dark"],
            advice=ft["advice"],
        ),
    )


def parse_deck(raw: Any) -> tuple[Card, ...]:
    """카드 그룹 5개를 이어 붙여 54장 덱으로 변환."""
    if not isinstance(raw, dict):
        raise LoadError("Invalid deck data: expected a mapping of card groups")

    raw_cards: list[dict] = []
    for group in DECK_GROUPS:
        raw_cards.extend(raw.get(group) or [])

    if len(raw_cards) != DECK_SIZE:
        raise LoadError(
            f"Invalid deck size: expected {DECK_SIZE} cards, got {len(raw_cards)}"
        )

    for group, (_, expected) in DECK_COMPOSITION.items():
        count = len(raw.get(group) or [])
        if count != expected:
            raise LoadError(
                f"Invalid deck: group {group} expected {expected} cards, got {count}"
            )

    cards = tuple(_parse_card(c) for c in raw_cards)

    groups = [g for g in DECK_GROUPS for _ in range(DECK_COMPOSITION[g][1])]
    for group, card in zip(groups, cards):
        suit = DECK_COMPOSITION[group][0]
        category = CardCategory.MAJOR if suit is Suit.HIGH_DECK else CardCategory.MINOR
        if card.suit is not suit or card.category is not category:
            raise LoadError(
                f"Invalid deck: card {card.id} in {group} must be "
                f"{suit.value}/{category.value}"
            )

    seen: set[str] = set()
    for card in cards:
        if card.id in seen:
            raise LoadError(f"Invalid deck: duplicate card id {card.id}")
        seen.add(card.id)

    return cards


class DeckLoader(_CachedLoader[tuple[Card, ...]]):
    """54장 타로카 덱 로더"""

    label = "Tarokka deck"

    def _parse(self, raw: Any) -> tuple[Card, ...]:
        return parse_deck(raw)


# === 리딩 설정 ===


def _parse_artifact_location(raw: dict) -> ArtifactLocation:
    return ArtifactLocation(
        card_id=raw["cardId"],
        location_id=raw["locationId"],
        location_name=raw.get("locationName", ""),
        description=raw.get("description", ""),
        dm_guidance=raw.get("dmGuidance", ""),
    )


def _parse_ally(raw: dict) -> AllyEntry:
    return AllyEntry(
        card_id=raw["cardId"],
        ally_id=raw["allyId"],
        ally_name=raw.get("allyName", ""),
        description=raw.get("description", ""),
        mechanical_benefit=raw.get("mechanicalBenefit", ""),
        dm_guidance=raw.get("dmGuidance", ""),
        when_they_appear=raw.get("whenTheyAppear", ""),
    )


def _parse_enemy_location(raw: dict) -> EnemyLocation:
    return EnemyLocation(
        card_id=raw["cardId"],
        location_id=raw["locationId"],
        location_name=raw.get("locationName", ""),
        description=raw.get("description", ""),
        tactical_notes=raw.get("tacticalNotes", ""),
        lair_actions=tuple(raw.get("lairActions") or ()),
        dm_guidance=raw.get("dmGuidance", ""),
    )


def _parse_fallback(category: ReadingCategory, raw: dict) -> FallbackDefault:
    id_key = "allyId" if category is ReadingCategory.ALLY else "locationId"
    return FallbackDefault(outcome_id=raw[id_key], reason=raw.get("reason", ""))


def _require(raw: dict, key: str, where: str) -> Any:
    value = raw.get(key)
    if value is None:
        raise LoadError(f"Invalid reading config: missing {where}.{key}")
    return value


def parse_config(raw: Any) -> ReadingConfiguration:
    """리딩 설정 dict → ReadingConfiguration.

    카테고리 테이블/기본값 누락은 LoadError.
    덱에 없는 cardId를 가리키는 항목은 허용한다 (fallback으로 처리).
    """
    if not isinstance(raw, dict):
        raise LoadError("Invalid reading config: expected a mapping")

    artifact_root = _require(raw, "artifactReadings", "root")
    artifact_readings: dict[ReadingCategory, ArtifactReading] = {}
    for category in ARTIFACT_CATEGORIES:
        table = _require(artifact_root, category.value, "artifactReadings")
        locations = _require(
            table, "possibleLocations", f"artifactReadings.{category.value}"
        )
        artifact_readings[category] = ArtifactReading(
            category=category,
            name=table.get("name", category.value),
            possible_locations=OutcomeTable(
                tuple(_parse_artifact_location(loc) for loc in locations)
            ),
        )

    allies = _require(
        _require(raw, "allyReading", "root"), "possibleAllies", "allyReading"
    )
    enemies = _require(
        _require(raw, "enemyReading", "root"), "possibleLocations", "enemyReading"
    )

    fallback_root = _require(raw, "fallbackDefaults", "root")
    fallback_defaults = {
        category: _parse_fallback(
            category, _require(fallback_root, category.value, "fallbackDefaults")
        )
        for category in ReadingCategory
    }

    return ReadingConfiguration(
        artifact_readings=artifact_readings,
        possible_allies=OutcomeTable(tuple(_parse_ally(a) for a in allies)),
        enemy_locations=OutcomeTable(
            tuple(_parse_enemy_location(loc) for loc in enemies)
        ),
        fallback_defaults=fallback_defaults,
    )


class ConfigLoader(_CachedLoader[ReadingConfiguration]):
    """리딩 설정 로더"""

    label = "reading config"

    def _parse(self, raw: Any) -> ReadingConfiguration:
        return parse_config(raw)
