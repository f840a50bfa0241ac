"""타로카 리딩 Core 패키지"""

from src.core.tarokka.enums import (
    ARTIFACT_CATEGORIES,
    DRAW_ORDER,
    CardCategory,
    ReadingCategory,
    Suit,
)
from src.core.tarokka.loader import (
    DECK_SIZE,
    ConfigLoader,
    DeckLoader,
    LoadError,
    json_file_source,
)
from src.core.tarokka.models import (
    AllyOutcome,
    ArtifactOutcome,
    Card,
    CardSnapshot,
    EnemyOutcome,
    ErrorOutcome,
    FortuneTelling,
    LoadResult,
    Reading,
    ReadingConfiguration,
    ReadingSlot,
)
from src.core.tarokka.reader import TarokkaReader
from src.core.tarokka.resolver import (
    resolve,
    resolve_ally,
    resolve_artifact_location,
    resolve_enemy_location,
)
from src.core.tarokka.rng import create_seeded_rng
from src.core.tarokka.shuffle import draw_card, shuffle_deck

__all__ = [
    # enums
    "Suit",
    "CardCategory",
    "ReadingCategory",
    "ARTIFACT_CATEGORIES",
    "DRAW_ORDER",
    # models
    "Card",
    "CardSnapshot",
    "FortuneTelling",
    "ReadingConfiguration",
    "ArtifactOutcome",
    "AllyOutcome",
    "EnemyOutcome",
    "ErrorOutcome",
    "ReadingSlot",
    "Reading",
    "LoadResult",
    # loading
    "DECK_SIZE",
    "LoadError",
    "DeckLoader",
    "ConfigLoader",
    "json_file_source",
    # rng / shuffle
    "create_seeded_rng",
    "shuffle_deck",
    "draw_card",
    # resolution
    "resolve",
    "resolve_artifact_location",
    "resolve_ally",
    "resolve_enemy_location",
    # orchestration
    "TarokkaReader",
]
