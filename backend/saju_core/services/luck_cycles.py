"""
━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
운(運) 생성 모듈 - 대운 / 소운 / 세운 / 월운
━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
- 대운: 월주에서 순행(+1)/역행(-1)으로 한 칸씩, 10년 단위
- 소운: 대운 시작 전 나이 (1세 ~ 대운수-1)
- 세운: 서기 4년 = 갑자 기준 (방향 무관)
- 월운: 연두법 (세운 천간 → 인월 천간)
- 대운수: 절입일까지 일수 ÷ 3
━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
"""
import logging
from dataclasses import dataclass, asdict
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Union

from saju_core.config import get_settings
from saju_core.services.cycle import (
    GanjiPillar,
    ganji_name,
    month_number_to_branch,
    month_stem,
    stem_of,
    branch_of,
)
from saju_core.services.direction import Direction, Gender, luck_direction
from saju_core.services.hidden_stems import main_qi_ten_god
from saju_core.services.ten_god import TenGod, TenGodGroup, ten_god, ten_god_group

logger = logging.getLogger(__name__)


class DaewunHalf(str, Enum):
    JEONBAN = "JEONBAN"   # 전반 5년 (천간 위주)
    HUBAN = "HUBAN"       # 후반 5년 (지지 위주)


@dataclass(frozen=True)
class DaewunPillar:
    """대운 기둥"""
    index: int
    stem: int
    branch: int
    start_age: int
    end_age: int

    @property
    def ganji(self) -> str:
        return ganji_name(self.stem, self.branch)

    def contains_age(self, age: int) -> bool:
        return self.start_age <= age <= self.end_age

    def to_dict(self) -> Dict[str, Any]:
        return {**asdict(self), "ganji": self.ganji}


@dataclass(frozen=True)
class SowunPillar:
    """소운 기둥 (대운 시작 전)"""
    age: int
    stem: int
    branch: int

    @property
    def ganji(self) -> str:
        return ganji_name(self.stem, self.branch)

    def to_dict(self) -> Dict[str, Any]:
        return {**asdict(self), "ganji": self.ganji}


@dataclass(frozen=True)
class SewunPillar:
    """세운 (연운)"""
    year: int
    stem: int
    branch: int

    @property
    def ganji(self) -> str:
        return ganji_name(self.stem, self.branch)

    def to_dict(self) -> Dict[str, Any]:
        return {**asdict(self), "ganji": self.ganji}


@dataclass(frozen=True)
class WolwunPillar:
    """월운 (month = 절기 기준 월 번호, 1=인월)"""
    year: int
    month: int
    stem: int
    branch: int

    @property
    def ganji(self) -> str:
        return ganji_name(self.stem, self.branch)

    def to_dict(self) -> Dict[str, Any]:
        return {**asdict(self), "ganji": self.ganji}


@dataclass(frozen=True)
class DaewunTenGods:
    """대운 천간/지지(본기)의 일간 기준 십성"""
    stem_ten_god: TenGod
    stem_group: TenGodGroup
    branch_ten_god: TenGod
    branch_group: TenGodGroup

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class DaewunResult:
    """대운 계산 결과 묶음"""
    direction: Direction
    start_age: int
    start_years: int
    start_months: int
    sowun: Tuple[SowunPillar, ...]
    daewun: Tuple[DaewunPillar, ...]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "direction": self.direction.value,
            "start_age": self.start_age,
            "start_years": self.start_years,
            "start_months": self.start_months,
            "sowun": [p.to_dict() for p in self.sowun],
            "daewun": [p.to_dict() for p in self.daewun],
        }


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# 대운수 (시작 나이)
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

def calc_start_age(days_to_solar_term: int) -> int:
    """
    대운수 = 절입일까지 일수 ÷ 3 (반올림, 최소 1)

    순행이면 다음 절입, 역행이면 이전 절입까지의 일수를 넣는다.
    """
    return max(1, round(days_to_solar_term / 3))


def calc_start_age_detail(days_to_solar_term: int) -> Tuple[int, int]:
    """
    대운수 상세 (년, 개월)

    3일 = 1년, 1일 = 4개월. 둘 다 0이면 (1, 0).
    """
    years = days_to_solar_term // 3
    months = (days_to_solar_term % 3) * 4
    if years == 0 and months == 0:
        return 1, 0
    return years, months


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# 대운 / 소운
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

def daewun_pillar(
    month_stem_idx: int,
    month_branch: int,
    direction: Direction,
    start_age: int,
    index: int,
) -> DaewunPillar:
    """index번째(0부터) 대운 기둥 하나"""
    offset = (index + 1) * direction.step
    first = start_age + index * 10
    return DaewunPillar(
        index=index,
        stem=stem_of(month_stem_idx + offset),
        branch=branch_of(month_branch + offset),
        start_age=first,
        end_age=first + 9,
    )


def build_daewun_list(
    month_stem_idx: int,
    month_branch: int,
    direction: Direction,
    start_age: int,
    count: Optional[int] = None,
) -> List[DaewunPillar]:
    """
    🔥 월주 기준 대운 리스트 생성
    - forward(순행): 다음 간지부터
    - backward(역행): 이전 간지부터
    """
    if count is None:
        count = get_settings().daewun_count

    out = [
        daewun_pillar(month_stem_idx, month_branch, direction, start_age, i)
        for i in range(count)
    ]

    logger.debug(
        f"[Daewun] month={ganji_name(month_stem_idx, month_branch)} | direction={direction.value} "
        f"| start_age={start_age} | list[:3]={[p.ganji for p in out[:3]]}"
    )
    return out


def build_sowun_list(
    month_stem_idx: int,
    month_branch: int,
    direction: Direction,
    start_age: int,
) -> List[SowunPillar]:
    """소운: 1세 ~ (대운수 - 1)세, 나이 한 살마다 한 칸"""
    out = []
    for age in range(1, start_age):
        offset = age * direction.step
        out.append(SowunPillar(
            age=age,
            stem=stem_of(month_stem_idx + offset),
            branch=branch_of(month_branch + offset),
        ))
    return out


def find_daewun_at_age(pillars: List[DaewunPillar], age: int) -> Optional[DaewunPillar]:
    """해당 나이가 속한 대운 (대운 시작 전이거나 범위 밖이면 None)"""
    for pillar in pillars:
        if pillar.contains_age(age):
            return pillar
    return None


def is_gyowungi(age: int, daewun_start_age: int, range_years: Optional[int] = None) -> bool:
    """
    교운기 여부

    대운은 시작 나이에서 10년마다 바뀌며, 바뀐 직후 range_years년과
    바뀌기 직전 range_years년을 교운기로 본다. 첫 대운 시작도 포함.
    """
    if range_years is None:
        range_years = get_settings().gyowungi_range
    if age < daewun_start_age:
        return False
    position = (age - daewun_start_age) % 10
    return position < range_years or position >= 10 - range_years


def daewun_half(age: int, daewun_start_age: int) -> DaewunHalf:
    """해당 대운 안에서 전반 5년 / 후반 5년"""
    return DaewunHalf.JEONBAN if age - daewun_start_age < 5 else DaewunHalf.HUBAN


def daewun_ten_gods(day_stem: int, pillar: Union[DaewunPillar, GanjiPillar]) -> DaewunTenGods:
    """대운 천간 십성 + 대운 지지 본기 십성"""
    stem_tg = ten_god(day_stem, pillar.stem)
    branch_tg = main_qi_ten_god(day_stem, pillar.branch)
    return DaewunTenGods(
        stem_ten_god=stem_tg,
        stem_group=ten_god_group(stem_tg),
        branch_ten_god=branch_tg,
        branch_group=ten_god_group(branch_tg),
    )


def calc_daewun_result(
    month_pillar: GanjiPillar,
    year_stem: int,
    sex: Union[Gender, str],
    days_to_solar_term: int,
    count: Optional[int] = None,
    include_sowun: Optional[bool] = None,
) -> DaewunResult:
    """방향 → 대운수 → 소운 → 대운 순서로 한 번에 계산"""
    settings = get_settings()
    if include_sowun is None:
        include_sowun = settings.include_sowun

    direction = luck_direction(year_stem, sex)
    start_age = calc_start_age(days_to_solar_term)
    years, months = calc_start_age_detail(days_to_solar_term)

    sowun = (
        build_sowun_list(month_pillar.stem, month_pillar.branch, direction, start_age)
        if include_sowun else []
    )
    daewun = build_daewun_list(month_pillar.stem, month_pillar.branch, direction, start_age, count)

    logger.info(
        f"[Daewun] direction={direction.value} | start_age={start_age} ({years}년 {months}개월) "
        f"| sowun={len(sowun)} | daewun={[p.ganji for p in daewun[:3]]}..."
    )
    return DaewunResult(
        direction=direction,
        start_age=start_age,
        start_years=years,
        start_months=months,
        sowun=tuple(sowun),
        daewun=tuple(daewun),
    )


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# 세운 / 월운
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

def get_sewun(year: int) -> SewunPillar:
    """세운 (1984년 = 갑자년, 서기 4년 = 갑자 기준)"""
    return SewunPillar(year=year, stem=stem_of(year - 4), branch=branch_of(year - 4))


def build_sewun_list(start_year: int, count: Optional[int] = None) -> List[SewunPillar]:
    if count is None:
        count = get_settings().sewun_count
    return [get_sewun(start_year + i) for i in range(count)]


def get_wolwun(year: int, month_number: int) -> WolwunPillar:
    """
    월운

    Args:
        year: 세운 연도 (입춘 기준)
        month_number: 절기 기준 월 번호 (1=인월 ... 12=축월)
    """
    year_stem = stem_of(year - 4)
    return WolwunPillar(
        year=year,
        month=month_number,
        stem=month_stem(year_stem, month_number),
        branch=month_number_to_branch(month_number),
    )


def build_wolwun_list(year: int) -> List[WolwunPillar]:
    """인월(1) ~ 축월(12) 12개월"""
    return [get_wolwun(year, m) for m in range(1, 13)]
