"""시드 셔플 + 드로우"""

import math
from typing import Optional, Sequence, TypeVar

from .rng import create_seeded_rng

T = TypeVar("T")


def shuffle_deck(deck: Sequence[T], seed: Optional[int]) -> list[T]:
    """Fisher-Yates 셔플. 입력은 건드리지 않고 새 리스트를 반환.

    i = len-1 .. 1 에 대해 j = floor(rng() * (i + 1)), i <-> j 교환.
    호출마다 새 RNG를 만들므로 같은 (deck, seed)는 항상 같은 순서가 된다.
    """
    shuffled = list(deck)
    rng = create_seeded_rng(seed)

    for i in range(len(shuffled) - 1, 0, -1):
        j = math.floor(rng() * (i + 1))
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]

    return shuffled


def draw_card(deck: Sequence[T], index: int) -> Optional[T]:
    """index 위치의 카드. 범위 밖이면 None (음수 인덱싱 없음)."""
    if index < 0 or index >= len(deck):
        return None
    return deck[index]
