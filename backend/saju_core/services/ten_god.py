"""
십성(十星) 판별 모듈
- 기준 천간(일간)과 대상 천간의 오행 거리 + 음양 일치 여부로 10가지 관계 결정
- 월령 십성, 대운 십성, 태원/태식 십성 모두 이 함수 하나를 사용
"""
from enum import Enum
from typing import Dict, Tuple

from saju_core.services.cycle import (
    Element,
    cyclic_mod,
    element_index,
    element_shift,
    stem_element,
    stem_polarity,
)


class TenGod(str, Enum):
    BI_GYEON = "비견"
    GEOB_JAE = "겁재"
    SIK_SHIN = "식신"
    SANG_GWAN = "상관"
    PYEON_JAE = "편재"
    JEONG_JAE = "정재"
    PYEON_GWAN = "편관"
    JEONG_GWAN = "정관"
    PYEON_IN = "편인"
    JEONG_IN = "정인"


class TenGodGroup(str, Enum):
    BIGEOP = "비겁"
    SIKSANG = "식상"
    JAESEONG = "재성"
    GWANSEONG = "관성"
    INSEONG = "인성"


# 오행 거리별 (같은 음양, 다른 음양)
# 0=같은 오행, 1=내가 생함, 2=내가 극함, 3=나를 극함, 4=나를 생함
TEN_GOD_BY_OFFSET: Tuple[Tuple[TenGod, TenGod], ...] = (
    (TenGod.BI_GYEON, TenGod.GEOB_JAE),
    (TenGod.SIK_SHIN, TenGod.SANG_GWAN),
    (TenGod.PYEON_JAE, TenGod.JEONG_JAE),
    (TenGod.PYEON_GWAN, TenGod.JEONG_GWAN),
    (TenGod.PYEON_IN, TenGod.JEONG_IN),
)

# 십성 → 그룹 매핑
TEN_GOD_TO_GROUP: Dict[TenGod, TenGodGroup] = {
    TenGod.BI_GYEON: TenGodGroup.BIGEOP, TenGod.GEOB_JAE: TenGodGroup.BIGEOP,
    TenGod.SIK_SHIN: TenGodGroup.SIKSANG, TenGod.SANG_GWAN: TenGodGroup.SIKSANG,
    TenGod.PYEON_JAE: TenGodGroup.JAESEONG, TenGod.JEONG_JAE: TenGodGroup.JAESEONG,
    TenGod.PYEON_GWAN: TenGodGroup.GWANSEONG, TenGod.JEONG_GWAN: TenGodGroup.GWANSEONG,
    TenGod.PYEON_IN: TenGodGroup.INSEONG, TenGod.JEONG_IN: TenGodGroup.INSEONG,
}

# 그룹의 일간 기준 오행 거리 (비겁=0 ... 인성=4)
GROUP_OFFSET: Dict[TenGodGroup, int] = {
    TenGodGroup.BIGEOP: 0,
    TenGodGroup.SIKSANG: 1,
    TenGodGroup.JAESEONG: 2,
    TenGodGroup.GWANSEONG: 3,
    TenGodGroup.INSEONG: 4,
}


def element_offset(reference: int, target: int) -> int:
    """기준 천간 → 대상 천간 오행 거리 (0~4)"""
    return cyclic_mod(
        element_index(stem_element(target)) - element_index(stem_element(reference)), 5
    )


def ten_god(reference: int, target: int) -> TenGod:
    """
    기준 천간 대비 대상 천간의 십성

    Args:
        reference: 기준 천간 인덱스 (보통 일간)
        target: 대상 천간 인덱스

    Returns:
        TenGod (10가지 중 하나, 예외 없음)
    """
    same_polarity = stem_polarity(reference) == stem_polarity(target)
    same_camp, cross_camp = TEN_GOD_BY_OFFSET[element_offset(reference, target)]
    return same_camp if same_polarity else cross_camp


def inverse_ten_god(reference: int, target: int) -> TenGod:
    """
    관계를 뒤집어 본 십성 (대상 천간 입장에서 기준 천간)

    오행 거리는 (5 - offset) % 5, 음양 일치 여부는 그대로이므로
    ten_god(target, reference)와 항상 같다.
    """
    same_polarity = stem_polarity(reference) == stem_polarity(target)
    offset = cyclic_mod(5 - element_offset(reference, target), 5)
    same_camp, cross_camp = TEN_GOD_BY_OFFSET[offset]
    return same_camp if same_polarity else cross_camp


def ten_god_group(tg: TenGod) -> TenGodGroup:
    return TEN_GOD_TO_GROUP[tg]


def group_element(reference: int, group: TenGodGroup) -> Element:
    """일간 기준 십성 그룹이 가리키는 오행 (예: 갑 일간의 재성 → 토)"""
    return element_shift(stem_element(reference), GROUP_OFFSET[group])
