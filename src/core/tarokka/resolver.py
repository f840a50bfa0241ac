"""카드 → 서사 결과 해석

카드가 테이블에 없으면 카테고리 기본값으로 대체한다 (에러 아님).
카테고리 키 자체가 잘못되면 ErrorOutcome을 반환하고 예외는 던지지 않는다.
"""

import logging
from typing import Any

from .enums import ReadingCategory
from .models import (
    AllyOutcome,
    ArtifactOutcome,
    EnemyOutcome,
    ErrorOutcome,
    Outcome,
    ReadingConfiguration,
)

logger = logging.getLogger(__name__)

UNKNOWN_LOCATION = "Unknown Location"
UNKNOWN_ALLY = "Unknown Ally"
FALLBACK_LOCATION_GUIDANCE = "Card not mapped - using default location"
FALLBACK_ALLY_GUIDANCE = "Card not mapped - using default ally"


def resolve_artifact_location(
    card_id: str, artifact: Any, config: ReadingConfiguration
) -> ArtifactOutcome | ErrorOutcome:
    """아티팩트(sunsword / holySymbol / tome) 위치 해석."""
    category = ReadingCategory.parse(artifact)
    reading = config.artifact_readings.get(category) if category is not None else None
    if reading is None:
        key = getattr(artifact, "value", artifact)
        return ErrorOutcome(error=f"Unknown artifact: {key}")

    location = reading.possible_locations.find(card_id)
    if location is not None:
        return ArtifactOutcome(
            artifact=reading.name,
            card_id=card_id,
            location_id=location.location_id,
            location_name=location.location_name,
            description=location.description,
            dm_guidance=location.dm_guidance,
        )

    fallback = config.fallback_defaults[reading.category]
    logger.debug(
        "Unmapped card for %s: card=%s -> %s",
        reading.category.value,
        card_id,
        fallback.outcome_id,
    )
    return ArtifactOutcome(
        artifact=reading.name,
        card_id=card_id,
        location_id=fallback.outcome_id,
        location_name=UNKNOWN_LOCATION,
        description=fallback.reason,
        dm_guidance=FALLBACK_LOCATION_GUIDANCE,
        is_fallback=True,
    )


def resolve_ally(card_id: str, config: ReadingConfiguration) -> AllyOutcome:
    """조력자 해석."""
    ally = config.possible_allies.find(card_id)
    if ally is not None:
        return AllyOutcome(
            card_id=card_id,
            ally_id=ally.ally_id,
            ally_name=ally.ally_name,
            description=ally.description,
            dm_guidance=ally.dm_guidance,
            mechanical_benefit=ally.mechanical_benefit,
            when_they_appear=ally.when_they_appear,
        )

    fallback = config.fallback_defaults[ReadingCategory.ALLY]
    logger.debug("Unmapped card for ally: card=%s -> %s", card_id, fallback.outcome_id)
    return AllyOutcome(
        card_id=card_id,
        ally_id=fallback.outcome_id,
        ally_name=UNKNOWN_ALLY,
        description=fallback.reason,
        dm_guidance=FALLBACK_ALLY_GUIDANCE,
        is_fallback=True,
    )


def resolve_enemy_location(card_id: str, config: ReadingConfiguration) -> EnemyOutcome:
    """최종 대결 장소 해석."""
    location = config.enemy_locations.find(card_id)
    if location is not None:
        return EnemyOutcome(
            card_id=card_id,
            location_id=location.location_id,
            location_name=location.location_name,
            description=location.description,
            dm_guidance=location.dm_guidance,
            tactical_notes=location.tactical_notes,
            lair_actions=location.lair_actions,
        )

    fallback = config.fallback_defaults[ReadingCategory.ENEMY]
    logger.debug("Unmapped card for enemy: card=%s -> %s", card_id, fallback.outcome_id)
    return EnemyOutcome(
        card_id=card_id,
        location_id=fallback.outcome_id,
        location_name=UNKNOWN_LOCATION,
        description=fallback.reason,
        dm_guidance=FALLBACK_LOCATION_GUIDANCE,
        is_fallback=True,
    )


def resolve(category: Any, card_id: str, config: ReadingConfiguration) -> Outcome:
    """카테고리 키(문자열 또는 ReadingCategory)로 분기."""
    parsed = ReadingCategory.parse(category)
    if parsed is None:
        return ErrorOutcome(error=f"Unknown category: {category}")

    if parsed.is_artifact:
        return resolve_artifact_location(card_id, parsed, config)
    if parsed is ReadingCategory.ALLY:
        return resolve_ally(card_id, config)
    return resolve_enemy_location(card_id, config)
