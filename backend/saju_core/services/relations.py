"""
천간합/천간충, 지지 육충/육합 판정
- 고정 테이블 기반 (합 5쌍, 충 4쌍, 육충 6쌍, 육합 6쌍)
"""
from typing import Dict, FrozenSet, Optional, Tuple

from saju_core.services.cycle import Element, branch_of, stem_of

# 천간합: 갑기합토, 을경합금, 병신합수, 정임합목, 무계합화
# 키는 쌍 중 앞 천간 (0~4)
STEM_COMBINATION_ELEMENT: Tuple[Element, ...] = (
    Element.EARTH,   # 甲己
    Element.METAL,   # 乙庚
    Element.WATER,   # 丙辛
    Element.WOOD,    # 丁壬
    Element.FIRE,    # 戊癸
)

# 천간충: 갑경, 을신, 병임, 정계
STEM_CLASH_PAIRS: FrozenSet[FrozenSet[int]] = frozenset({
    frozenset({0, 6}),
    frozenset({1, 7}),
    frozenset({2, 8}),
    frozenset({3, 9}),
})

# 지지 육합: 자축, 인해, 묘술, 진유, 사신, 오미
BRANCH_COMBINATION_PARTNER: Dict[int, int] = {
    0: 1, 1: 0,
    2: 11, 11: 2,
    3: 10, 10: 3,
    4: 9, 9: 4,
    5: 8, 8: 5,
    6: 7, 7: 6,
}


def stem_combination_partner(stem: int) -> int:
    """합하는 상대 천간 (다섯 칸 건너)"""
    return stem_of(stem + 5)


def is_stem_combination(a: int, b: int) -> bool:
    return stem_combination_partner(a) == stem_of(b)


def stem_combination_element(a: int, b: int) -> Optional[Element]:
    """천간합 화(化) 오행. 합이 아니면 None"""
    if not is_stem_combination(a, b):
        return None
    return STEM_COMBINATION_ELEMENT[min(stem_of(a), stem_of(b))]


def is_stem_clash(a: int, b: int) -> bool:
    return frozenset({stem_of(a), stem_of(b)}) in STEM_CLASH_PAIRS


def branch_clash_partner(branch: int) -> int:
    """육충 상대 지지 (여섯 칸 건너)"""
    return branch_of(branch + 6)


def is_branch_clash(a: int, b: int) -> bool:
    return branch_clash_partner(a) == branch_of(b)


def is_branch_combination(a: int, b: int) -> bool:
    return BRANCH_COMBINATION_PARTNER[branch_of(a)] == branch_of(b)
