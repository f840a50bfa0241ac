"""시드 기반 난수열 — 선형 합동 생성기(LCG), 외부 의존 없음

저장된 리딩은 시드만으로 재현되므로 상수와 연산 순서를 바꾸면 안 된다.
상태는 IEEE-754 double로 계산한다. a * state가 2**53을 넘으면 반올림이 일어나며
(타임스탬프 시드), 기존 저장 리딩이 이 반올림된 수열로 만들어졌다.
"""

import math
import time
from typing import Callable, Optional

# Numerical Recipes LCG 파라미터
LCG_MULTIPLIER = 1664525
LCG_INCREMENT = 1013904223
LCG_MODULUS = 2**32


def timestamp_seed() -> int:
    """현재 시각(ms)을 시드로 사용. 재현성이 필요하면 시드를 직접 넘길 것."""
    return int(time.time() * 1000)


def create_seeded_rng(seed: Optional[int] = None) -> Callable[[], float]:
    """[0, 1) 범위 값을 반환하는 결정적 RNG 생성.

    state = fmod(a * state + c, m), 반환값 = state / m. 모두 float 연산.
    seed가 None이면 현재 시각을 사용한다.
    """
    state = float(timestamp_seed() if seed is None else seed)

    def rng() -> float:
        nonlocal state
        state = math.fmod(float(LCG_MULTIPLIER) * state + LCG_INCREMENT, float(LCG_MODULUS))
        return state / LCG_MODULUS

    return rng
