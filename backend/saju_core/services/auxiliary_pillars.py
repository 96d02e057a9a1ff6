"""
━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
보조 기둥 - 태원(胎元) / 태식(胎息) / 명궁(命宮)
━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
- 태원 = 월주 천간 +4, 지지 +1
- 태식 = 일주 천간 +4, 지지 +1
- 명궁 지지 = (14 - 출생월 번호 - 출생시 지지) mod 12,
  명궁 천간 = 연두법 (연간 + 명궁 지지의 월 번호)
- 일주 대비 천간합/천간충/육충/육합, 공망 여부
━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
"""
import logging
from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional, Tuple

from saju_core.services.cycle import (
    ChartPillars,
    Element,
    GanjiPillar,
    branch_of,
    branch_to_month_number,
    cyclic_mod,
    month_stem,
    stem_element,
    stem_of,
)
from saju_core.services.relations import (
    is_branch_clash,
    is_branch_combination,
    is_stem_clash,
    stem_combination_element,
)
from saju_core.services.ten_god import TenGod, ten_god

logger = logging.getLogger(__name__)

# 태원/태식 오프셋 (천간, 지지)
CONCEPTION_OFFSET = (4, 1)


@dataclass(frozen=True)
class PillarRelation:
    """보조 기둥 ↔ 일주 관계"""
    stem_combination: bool                   # 천간합
    combination_element: Optional[Element]   # 합화 오행
    stem_clash: bool                         # 천간충
    branch_clash: bool                       # 지지 육충
    branch_combination: bool                 # 지지 육합
    ten_god: TenGod                          # 일간 기준 천간 십성
    gongmang: bool                           # 일주 기준 공망

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class AuxiliaryPillar:
    pillar: GanjiPillar
    relation: PillarRelation

    def to_dict(self) -> Dict[str, Any]:
        return {**self.pillar.to_dict(), "relation": self.relation.to_dict()}


@dataclass(frozen=True)
class AuxiliaryPillars:
    taewon: AuxiliaryPillar
    taesik: AuxiliaryPillar
    myeonggung: AuxiliaryPillar
    taewon_taesik_same_element: bool     # 태원/태식 천간 오행 동일

    def to_dict(self) -> Dict[str, Any]:
        return {
            "taewon": self.taewon.to_dict(),
            "taesik": self.taesik.to_dict(),
            "myeonggung": self.myeonggung.to_dict(),
            "taewon_taesik_same_element": self.taewon_taesik_same_element,
        }


def calc_taewon(month_stem_idx: int, month_branch: int) -> GanjiPillar:
    """태원: 월주 천간 +4, 지지 +1 (예: 丙寅 → 庚卯)"""
    return GanjiPillar(month_stem_idx + CONCEPTION_OFFSET[0], month_branch + CONCEPTION_OFFSET[1])


def calc_taesik(day_stem: int, day_branch: int) -> GanjiPillar:
    """태식: 일주 천간 +4, 지지 +1 (예: 甲子 → 戊丑)"""
    return GanjiPillar(day_stem + CONCEPTION_OFFSET[0], day_branch + CONCEPTION_OFFSET[1])


def calc_myeonggung(month_number: int, hour_branch: int, year_stem: int) -> GanjiPillar:
    """
    명궁

    Args:
        month_number: 절기 기준 출생월 번호 (1=인월 ... 12=축월)
        hour_branch: 출생시 지지 인덱스
        year_stem: 연간 인덱스 (명궁 천간의 연두법 기준)
    """
    branch = branch_of(14 - month_number - hour_branch)
    stem = month_stem(year_stem, branch_to_month_number(branch))
    return GanjiPillar(stem, branch)


def gongmang_branches(day_stem: int, day_branch: int) -> Tuple[int, int]:
    """일주가 속한 순(旬)의 공망 지지 두 개"""
    start = cyclic_mod(branch_of(day_branch) - stem_of(day_stem), 12)
    return branch_of(start + 10), branch_of(start + 11)


def is_gongmang(day_stem: int, day_branch: int, branch: int) -> bool:
    return branch_of(branch) in gongmang_branches(day_stem, day_branch)


def analyze_relation(pillar: GanjiPillar, day_stem: int, day_branch: int) -> PillarRelation:
    """보조 기둥과 일주 사이 합/충 관계"""
    element = stem_combination_element(pillar.stem, day_stem)
    return PillarRelation(
        stem_combination=element is not None,
        combination_element=element,
        stem_clash=is_stem_clash(pillar.stem, day_stem),
        branch_clash=is_branch_clash(pillar.branch, day_branch),
        branch_combination=is_branch_combination(pillar.branch, day_branch),
        ten_god=ten_god(day_stem, pillar.stem),
        gongmang=is_gongmang(day_stem, day_branch, pillar.branch),
    )


def calc_auxiliary_pillars(
    chart: ChartPillars,
    month_number: int,
    hour_branch: Optional[int] = None,
) -> AuxiliaryPillars:
    """
    태원/태식/명궁 + 일주 대비 관계 플래그

    Args:
        chart: 사주 원국
        month_number: 절기 기준 출생월 번호
        hour_branch: 출생시 지지 (없으면 시주 지지 사용)
    """
    if hour_branch is None:
        hour_branch = chart.hour.branch

    ds, db = chart.day.stem, chart.day.branch
    taewon = calc_taewon(chart.month.stem, chart.month.branch)
    taesik = calc_taesik(ds, db)
    myeonggung = calc_myeonggung(month_number, hour_branch, chart.year.stem)

    result = AuxiliaryPillars(
        taewon=AuxiliaryPillar(taewon, analyze_relation(taewon, ds, db)),
        taesik=AuxiliaryPillar(taesik, analyze_relation(taesik, ds, db)),
        myeonggung=AuxiliaryPillar(myeonggung, analyze_relation(myeonggung, ds, db)),
        taewon_taesik_same_element=stem_element(taewon.stem) == stem_element(taesik.stem),
    )
    logger.debug(
        f"[Taewon] 태원={taewon.hanja} 태식={taesik.hanja} 명궁={myeonggung.hanja} "
        f"| 태원 천간합={result.taewon.relation.stem_combination} "
        f"육충={result.taewon.relation.branch_clash}"
    )
    return result
