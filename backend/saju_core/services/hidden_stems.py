"""
지장간(支藏干) / 월령(月令) 사령 모듈
━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
- 지지별 지장간 (여기 → 중기 → 본기 순서, 사령 일수 합계 30일)
- 절입 후 경과 일수로 현재 사령하는 지장간 결정
- 통근(通根) 강도, 투출(透出) 판정
━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
"""
import logging
from dataclasses import dataclass, asdict
from enum import Enum
from typing import Any, Dict, Iterable, List, Tuple

from saju_core.services.cycle import branch_of, stem_element, stem_name, stem_of
from saju_core.services.ten_god import TenGod, ten_god

logger = logging.getLogger(__name__)


class HiddenStemRole(str, Enum):
    RESIDUAL = "여기"
    MIDDLE = "중기"
    MAIN = "본기"


class RootStrength(str, Enum):
    STRONG = "강근"
    WEAK = "약근"
    NONE = "무근"


MONTH_CYCLE_DAYS = 30

# 투출 판정 순위 (본기 → 중기 → 여기, 천간 인덱스)
# 사고지(丑辰未戌)는 격국용 중기/여기가 사령 순서와 반대: 辰은 乙(중기) > 癸(여기)
TRANSPARENCY_ORDER: Tuple[Tuple[int, ...], ...] = (
    (9,),          # 子: 癸
    (5, 9, 7),     # 丑: 己 癸 辛
    (0, 2, 4),     # 寅: 甲 丙 戊
    (1,),          # 卯: 乙
    (4, 1, 9),     # 辰: 戊 乙 癸
    (2, 6, 4),     # 巳: 丙 庚 戊
    (3, 5),        # 午: 丁 己
    (5, 3, 1),     # 未: 己 丁 乙
    (6, 8, 4),     # 申: 庚 壬 戊
    (7,),          # 酉: 辛
    (4, 7, 3),     # 戌: 戊 辛 丁
    (8, 0),        # 亥: 壬 甲
)


@dataclass(frozen=True)
class HiddenStem:
    """지장간 한 항목"""
    stem: int                 # 천간 인덱스
    role: HiddenStemRole      # 여기/중기/본기
    days: int                 # 사령 일수

    @property
    def name(self) -> str:
        return stem_name(self.stem)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _hs(stem: int, role: HiddenStemRole, days: int) -> HiddenStem:
    return HiddenStem(stem=stem, role=role, days=days)


_R, _M, _B = HiddenStemRole.RESIDUAL, HiddenStemRole.MIDDLE, HiddenStemRole.MAIN

# 월령 분일용 지장간 (자평진전 계열 30일 배분)
HIDDEN_STEM_TABLE: Tuple[Tuple[HiddenStem, ...], ...] = (
    (_hs(9, _B, 30),),                                   # 子: 癸
    (_hs(9, _R, 9), _hs(7, _M, 3), _hs(5, _B, 18)),      # 丑: 癸 辛 己
    (_hs(4, _R, 7), _hs(2, _M, 7), _hs(0, _B, 16)),      # 寅: 戊 丙 甲
    (_hs(1, _B, 30),),                                   # 卯: 乙
    (_hs(1, _R, 9), _hs(9, _M, 3), _hs(4, _B, 18)),      # 辰: 乙 癸 戊
    (_hs(4, _R, 7), _hs(6, _M, 7), _hs(2, _B, 16)),      # 巳: 戊 庚 丙
    (_hs(5, _R, 9), _hs(3, _B, 21)),                     # 午: 己 丁
    (_hs(3, _R, 9), _hs(1, _M, 3), _hs(5, _B, 18)),      # 未: 丁 乙 己
    (_hs(4, _R, 7), _hs(8, _M, 7), _hs(6, _B, 16)),      # 申: 戊 壬 庚
    (_hs(7, _B, 30),),                                   # 酉: 辛
    (_hs(7, _R, 9), _hs(3, _M, 3), _hs(4, _B, 18)),      # 戌: 辛 丁 戊
    (_hs(0, _R, 7), _hs(8, _B, 23)),                     # 亥: 甲 壬
)


def hidden_stems(branch: int) -> Tuple[HiddenStem, ...]:
    """지지의 지장간 목록 (여기 → 중기 → 본기)"""
    return HIDDEN_STEM_TABLE[branch_of(branch)]


def main_entry(branch: int) -> HiddenStem:
    """본기(本氣) 항목"""
    for entry in hidden_stems(branch):
        if entry.role == HiddenStemRole.MAIN:
            return entry
    # 테이블상 도달 불가 (모든 지지는 본기 1개)
    raise LookupError(f"본기 없음: branch={branch}")


def governing_stem(branch: int, elapsed_days: int) -> HiddenStem:
    """
    월령 사령 지장간

    절입 후 경과 일수를 누적 사령 일수와 비교해서
    누적값이 경과 일수 이상이 되는 첫 항목을 반환.
    합계(30일)를 넘으면 본기로 고정.

    Args:
        branch: 월지 인덱스
        elapsed_days: 절입일로부터 경과 일수

    Returns:
        HiddenStem
    """
    entries = hidden_stems(branch)
    cumulative = 0
    for entry in entries:
        cumulative += entry.days
        if elapsed_days <= cumulative:
            return entry

    logger.debug(f"[Wollyeong] 경과 {elapsed_days}일 > 합계 {cumulative}일 → 본기 고정")
    return entries[-1]


def main_qi_ten_god(reference: int, branch: int) -> TenGod:
    """기준 천간 대비 지지 본기의 십성"""
    return ten_god(reference, main_entry(branch).stem)


def governing_ten_god(reference: int, branch: int, elapsed_days: int) -> TenGod:
    """기준 천간 대비 현재 사령 지장간의 십성"""
    return ten_god(reference, governing_stem(branch, elapsed_days).stem)


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# 통근 / 투출
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

def root_strength(stem: int, branch: int) -> RootStrength:
    """
    천간의 지지 통근 강도

    - 강근: 같은 천간이 본기
    - 약근: 같은 천간이 중기/여기, 또는 같은 오행의 음양 짝 천간이 있음
    - 무근: 해당 없음
    """
    s = stem_of(stem)
    entries = hidden_stems(branch)

    for entry in entries:
        if entry.stem == s:
            return RootStrength.STRONG if entry.role == HiddenStemRole.MAIN else RootStrength.WEAK

    element = stem_element(s)
    for entry in entries:
        if stem_element(entry.stem) == element:
            return RootStrength.WEAK

    return RootStrength.NONE


def has_root(stem: int, branch: int) -> bool:
    return root_strength(stem, branch) != RootStrength.NONE


def transparent_entries(branch: int, visible_stems: Iterable[int]) -> List[HiddenStem]:
    """
    투출된 지장간 목록

    지지의 지장간 중 visible_stems(다른 천간들)에 그대로 나타난 것을
    TRANSPARENCY_ORDER 순으로 정렬해서 반환.
    """
    visible = {stem_of(s) for s in visible_stems}
    found = [entry for entry in hidden_stems(branch) if entry.stem in visible]
    order = TRANSPARENCY_ORDER[branch_of(branch)]
    return sorted(found, key=lambda e: order.index(e.stem))
