"""TarokkaReader — 5장 타로카 리딩 오케스트레이터

같은 시드는 언제나 같은 카드/결과를 만든다 (timestamp 제외).
덱/설정 캐시는 인스턴스가 소유하며, 장수명 인스턴스 하나를 공유해 쓰는 것을 전제로 한다.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional, Sequence

from .enums import DRAW_ORDER, ReadingCategory
from .loader import ConfigLoader, DeckLoader, LoadError, json_file_source
from .models import Card, LoadResult, Reading, ReadingSlot
from .resolver import resolve
from .rng import timestamp_seed
from .shuffle import draw_card, shuffle_deck

logger = logging.getLogger(__name__)

DEFAULT_DATA_DIR = Path("src/data/tarokka")
DECK_FILE = "tarokka_deck.json"
CONFIG_FILE = "reading_config.json"


def _iso_timestamp() -> str:
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class TarokkaReader:
    """타로카 리딩 수행자

    사용 패턴:
        reader = TarokkaReader("src/data/tarokka")
        result = reader.perform_full_reading(12345)
        if result.success:
            reading: Reading = result.data
    """

    def __init__(
        self,
        data_dir: str | Path | None = None,
        *,
        deck_file: str = DECK_FILE,
        config_file: str = CONFIG_FILE,
        deck_loader: Optional[DeckLoader] = None,
        config_loader: Optional[ConfigLoader] = None,
        tome_own_description: bool = False,
    ) -> None:
        data_dir = Path(data_dir) if data_dir is not None else DEFAULT_DATA_DIR
        self._deck_loader = deck_loader or DeckLoader(
            json_file_source(data_dir / deck_file)
        )
        self._config_loader = config_loader or ConfigLoader(
            json_file_source(data_dir / config_file)
        )
        self._tome_own_description = tome_own_description

    # === 데이터 로드 ===

    def load_deck(self) -> LoadResult:
        """덱 로드 (캐시). data = tuple[Card, ...]"""
        try:
            return LoadResult.ok(self._deck_loader.load())
        except LoadError as e:
            return LoadResult.fail(str(e))

    def load_config(self) -> LoadResult:
        """리딩 설정 로드 (캐시). data = ReadingConfiguration"""
        try:
            return LoadResult.ok(self._config_loader.load())
        except LoadError as e:
            return LoadResult.fail(str(e))

    def reload(self) -> None:
        """덱/설정 캐시 폐기. 원본 데이터 수정 후 다음 호출에서 다시 읽는다."""
        self._deck_loader.invalidate()
        self._config_loader.invalidate()
        logger.info("Tarokka data caches invalidated")

    # === 셔플 / 드로우 ===

    @staticmethod
    def shuffle_deck(deck: Sequence[Card], seed: Optional[int]) -> list[Card]:
        return shuffle_deck(deck, seed)

    @staticmethod
    def draw_card(deck: Sequence[Card], index: int) -> Optional[Card]:
        return draw_card(deck, index)

    # === 리딩 ===

    def perform_full_reading(self, seed: Optional[int] = None) -> LoadResult:
        """5장 리딩 수행.

        1. 시드 결정 (None이면 현재 시각)
        2. 덱 + 설정 로드. 실패 시 드로우 없이 즉시 실패 반환
        3. 시드로 셔플
        4. 위치 0~4를 DRAW_ORDER 순서로 드로우
        5. 카드별 카테고리 해석
        """
        actual_seed = seed if seed is not None else timestamp_seed()

        try:
            deck = self._deck_loader.load()
            config = self._config_loader.load()
        except LoadError as e:
            logger.warning("Tarokka reading aborted: %s", e)
            return LoadResult.fail(str(e))

        shuffled = shuffle_deck(deck, actual_seed)
        drawn = {
            category: draw_card(shuffled, position)
            for position, category in enumerate(DRAW_ORDER)
        }

        slots = []
        for category in DRAW_ORDER:
            card = drawn[category]
            slots.append(
                ReadingSlot(
                    category=category,
                    card=card.snapshot(self._snapshot_description(category, drawn)),
                    outcome=resolve(category, card.id, config),
                )
            )

        reading = Reading(
            seed=actual_seed,
            timestamp=_iso_timestamp(),
            slots=tuple(slots),
        )
        logger.info(
            "Tarokka reading performed: seed=%s, cards=%s",
            actual_seed,
            [slot.card.id for slot in reading.slots],
        )
        return LoadResult.ok(reading)

    def _snapshot_description(
        self, category: ReadingCategory, drawn: dict[ReadingCategory, Card]
    ) -> Optional[str]:
        # tome 슬롯은 기존 저장 리딩과의 호환을 위해 holy symbol 카드 설명을 기록한다.
        if category is ReadingCategory.TOME and not self._tome_own_description:
            return drawn[ReadingCategory.HOLY_SYMBOL].description
        return None

    # === 단일 조회 ===

    def get_card_by_id(self, card_id: str) -> LoadResult:
        """셔플과 무관한 카드 직접 조회 (내레이터 수동 지정 등)."""
        deck_result = self.load_deck()
        if not deck_result.success:
            return deck_result

        for card in deck_result.data:
            if card.id == card_id:
                return LoadResult.ok(card)
        return LoadResult.fail(f"Card not found: {card_id}")

    def resolve_category(self, category: Any, card_id: str) -> LoadResult:
        """카테고리 하나만 해석. 잘못된 카테고리는 error 필드를 가진 결과로 성공 반환."""
        config_result = self.load_config()
        if not config_result.success:
            return config_result
        return LoadResult.ok(resolve(category, card_id, config_result.data))
