"""
음양 / 대운 순역(順逆) 판정
- 양남음녀 순행, 음남양녀 역행
- 기준은 연간(年干) 음양 (일간 기준 유파는 사용하지 않음)
"""
from enum import Enum
from typing import Union

from saju_core.services.cycle import stem_of


class Gender(str, Enum):
    MALE = "male"
    FEMALE = "female"


class Direction(str, Enum):
    FORWARD = "forward"     # 순행
    BACKWARD = "backward"   # 역행

    @property
    def step(self) -> int:
        return 1 if self is Direction.FORWARD else -1

    @property
    def hangul(self) -> str:
        return "순행" if self is Direction.FORWARD else "역행"


MALE_ALIASES = ("male", "m", "남", "남성", "남자")
FEMALE_ALIASES = ("female", "f", "여", "여성", "여자")


def is_yang_stem(stem: int) -> bool:
    """甲丙戊庚壬 = 양"""
    return stem_of(stem) % 2 == 0


def parse_gender(sex: Union[Gender, str]) -> Gender:
    """Gender 또는 문자열(male/m/남/남성 ...) → Gender"""
    if isinstance(sex, Gender):
        return sex
    key = str(sex).strip().lower()
    if key in MALE_ALIASES:
        return Gender.MALE
    if key in FEMALE_ALIASES:
        return Gender.FEMALE
    raise ValueError(f"알 수 없는 성별 값: {sex!r}")


def is_male(sex: Union[Gender, str]) -> bool:
    return parse_gender(sex) == Gender.MALE


def luck_direction(year_stem: int, sex: Union[Gender, str]) -> Direction:
    """
    대운 방향

    양년생 남자 / 음년생 여자 → 순행
    음년생 남자 / 양년생 여자 → 역행
    """
    if is_yang_stem(year_stem) == is_male(sex):
        return Direction.FORWARD
    return Direction.BACKWARD
