"""
천간/지지 순환 기본 모듈
━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
- 천간(10개), 지지(12개) 인덱스 정규화 (음수/범위 밖 정수 허용)
- 오행/음양 속성 테이블
- 연두법(월간 계산), 월 번호 ↔ 월지 변환
━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Tuple


class Element(str, Enum):
    WOOD = "목"
    FIRE = "화"
    EARTH = "토"
    METAL = "금"
    WATER = "수"


class Polarity(str, Enum):
    YANG = "양"
    YIN = "음"


# 상생 순서 (목 → 화 → 토 → 금 → 수)
ELEMENTS: Tuple[Element, ...] = (
    Element.WOOD, Element.FIRE, Element.EARTH, Element.METAL, Element.WATER,
)

# 천간 (10개)
CHEONGAN = ("갑", "을", "병", "정", "무", "기", "경", "신", "임", "계")
CHEONGAN_HANJA = ("甲", "乙", "丙", "丁", "戊", "己", "庚", "辛", "壬", "癸")

# 지지 (12개)
JIJI = ("자", "축", "인", "묘", "진", "사", "오", "미", "신", "유", "술", "해")
JIJI_HANJA = ("子", "丑", "寅", "卯", "辰", "巳", "午", "未", "申", "酉", "戌", "亥")

# 지지 오행 (子=수 ... 亥=수)
BRANCH_ELEMENT: Tuple[Element, ...] = (
    Element.WATER, Element.EARTH, Element.WOOD, Element.WOOD,
    Element.EARTH, Element.FIRE, Element.FIRE, Element.EARTH,
    Element.METAL, Element.METAL, Element.EARTH, Element.WATER,
)

STEM_COUNT = 10
BRANCH_COUNT = 12


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# 정규화
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

def cyclic_mod(n: int, m: int) -> int:
    """음수에도 항상 0 ~ m-1 범위를 반환하는 나머지"""
    return ((n % m) + m) % m


def stem_of(n: int) -> int:
    """임의 정수 → 천간 인덱스 (0=갑 ~ 9=계)"""
    return cyclic_mod(n, STEM_COUNT)


def branch_of(n: int) -> int:
    """임의 정수 → 지지 인덱스 (0=자 ~ 11=해)"""
    return cyclic_mod(n, BRANCH_COUNT)


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# 오행 / 음양
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

def stem_element(stem: int) -> Element:
    return ELEMENTS[stem_of(stem) // 2]


def branch_element(branch: int) -> Element:
    return BRANCH_ELEMENT[branch_of(branch)]


def stem_polarity(stem: int) -> Polarity:
    return Polarity.YANG if stem_of(stem) % 2 == 0 else Polarity.YIN


def branch_polarity(branch: int) -> Polarity:
    return Polarity.YANG if branch_of(branch) % 2 == 0 else Polarity.YIN


def element_index(element: Element) -> int:
    return ELEMENTS.index(element)


def element_shift(element: Element, steps: int) -> Element:
    """상생 순서로 steps칸 이동한 오행"""
    return ELEMENTS[cyclic_mod(element_index(element) + steps, 5)]


def element_generates(element: Element) -> Element:
    """내가 생하는 오행 (목 → 화)"""
    return element_shift(element, 1)


def element_controls(element: Element) -> Element:
    """내가 극하는 오행 (목 → 토)"""
    return element_shift(element, 2)


def element_controlled_by(element: Element) -> Element:
    """나를 극하는 오행 (목 ← 금)"""
    return element_shift(element, 3)


def element_generated_by(element: Element) -> Element:
    """나를 생하는 오행 (목 ← 수)"""
    return element_shift(element, 4)


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# 이름
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

def stem_name(stem: int) -> str:
    return CHEONGAN[stem_of(stem)]


def branch_name(branch: int) -> str:
    return JIJI[branch_of(branch)]


def ganji_name(stem: int, branch: int) -> str:
    """간지 한글 표기 (예: 갑자)"""
    return f"{stem_name(stem)}{branch_name(branch)}"


def ganji_hanja(stem: int, branch: int) -> str:
    """간지 한자 표기 (예: 甲子)"""
    return f"{CHEONGAN_HANJA[stem_of(stem)]}{JIJI_HANJA[branch_of(branch)]}"


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# 월 번호 / 연두법
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

def month_number_to_branch(month_number: int) -> int:
    """절기 기준 월 번호 → 월지 (1월=인 ... 11월=자, 12월=축)"""
    return branch_of(month_number + 1)


def branch_to_month_number(branch: int) -> int:
    """월지 → 절기 기준 월 번호 (인=1 ... 축=12)"""
    return cyclic_mod(branch_of(branch) - 2, BRANCH_COUNT) + 1


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# 기둥 (간지 쌍) / 사주 원국
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

@dataclass(frozen=True)
class GanjiPillar:
    """간지 한 기둥 (생성 시 인덱스 정규화)"""
    stem: int
    branch: int

    def __post_init__(self):
        object.__setattr__(self, "stem", stem_of(self.stem))
        object.__setattr__(self, "branch", branch_of(self.branch))

    @property
    def ganji(self) -> str:
        return ganji_name(self.stem, self.branch)

    @property
    def hanja(self) -> str:
        return ganji_hanja(self.stem, self.branch)

    def shifted(self, offset: int) -> "GanjiPillar":
        """천간/지지를 같은 칸수만큼 이동한 기둥"""
        return GanjiPillar(self.stem + offset, self.branch + offset)

    def to_dict(self) -> Dict[str, Any]:
        return {"stem": self.stem, "branch": self.branch, "ganji": self.ganji, "hanja": self.hanja}


@dataclass(frozen=True)
class ChartPillars:
    """사주 원국 4기둥 (일간 = 기준점)"""
    year: GanjiPillar
    month: GanjiPillar
    day: GanjiPillar
    hour: GanjiPillar

    @property
    def day_master(self) -> int:
        return self.day.stem

    @property
    def branches(self) -> Tuple[int, int, int, int]:
        return (self.year.branch, self.month.branch, self.day.branch, self.hour.branch)

    @property
    def other_stems(self) -> Tuple[int, int, int]:
        """일간을 제외한 연간/월간/시간"""
        return (self.year.stem, self.month.stem, self.hour.stem)

    @classmethod
    def from_indices(
        cls,
        year_stem: int, year_branch: int,
        month_stem: int, month_branch: int,
        day_stem: int, day_branch: int,
        hour_stem: int, hour_branch: int,
    ) -> "ChartPillars":
        return cls(
            year=GanjiPillar(year_stem, year_branch),
            month=GanjiPillar(month_stem, month_branch),
            day=GanjiPillar(day_stem, day_branch),
            hour=GanjiPillar(hour_stem, hour_branch),
        )


def month_stem(year_stem: int, month_number: int) -> int:
    """
    연두법 월간 계산

    갑기년 → 병인월, 을경년 → 무인월, 병신년 → 경인월,
    정임년 → 임인월, 무계년 → 갑인월 로 시작해 한 달에 한 칸씩 진행.
    """
    base = (stem_of(year_stem) % 5) * 2 + 2
    return stem_of(base + (month_number - 1))
