"""
Pydantic 스키마 정의
사주 원국 입력 / 분석 결과 모델
"""
from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional, List, Literal

from saju_core.services.cycle import Element, Polarity, branch_of, stem_of
from saju_core.services.direction import Direction, Gender, parse_gender
from saju_core.services.gyeokguk import GyeokgukCategory
from saju_core.services.hidden_stems import HiddenStemRole
from saju_core.services.luck_cycles import DaewunHalf
from saju_core.services.ten_god import TenGod, TenGodGroup


PillarPosition = Literal["year", "month", "day", "hour"]


# ============ 입력 ============

class ChartInput(BaseModel):
    """사주 원국 분석 요청 (천간/지지 인덱스는 범위 밖 정수도 정규화해서 받음)"""
    year_stem: int = Field(..., description="연간 인덱스 (0=갑 ~ 9=계)")
    year_branch: int = Field(..., description="연지 인덱스 (0=자 ~ 11=해)")
    month_stem: int = Field(..., description="월간 인덱스")
    month_branch: int = Field(..., description="월지 인덱스")
    day_stem: int = Field(..., description="일간 인덱스 (일간=나)")
    day_branch: int = Field(..., description="일지 인덱스")
    hour_stem: int = Field(..., description="시간 인덱스")
    hour_branch: int = Field(..., description="시지 인덱스")

    gender: Gender = Field(..., description="성별 (male/female, 남/여)")
    days_to_solar_term: int = Field(
        ..., ge=0, description="대운수 계산용 절입일까지 일수 (순행=다음 절입, 역행=이전 절입)"
    )
    birth_month_number: int = Field(..., ge=1, le=12, description="절기 기준 출생월 번호 (1=인월)")
    birth_hour_branch: Optional[int] = Field(None, description="명궁용 출생시 지지 (없으면 시지)")
    elapsed_days_in_month: Optional[int] = Field(
        None, ge=0, description="월령 사령 판단용 월 절입 후 경과 일수"
    )
    target_year: Optional[int] = Field(None, description="세운/월운 기준 연도")
    current_age: Optional[int] = Field(None, ge=0, description="현재 대운 판단용 나이")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "year_stem": 4, "year_branch": 6,
                "month_stem": 3, "month_branch": 5,
                "day_stem": 4, "day_branch": 2,
                "hour_stem": 3, "hour_branch": 5,
                "gender": "male",
                "days_to_solar_term": 20,
                "birth_month_number": 4,
                "target_year": 2026,
            }
        }
    )

    @field_validator("year_stem", "month_stem", "day_stem", "hour_stem")
    @classmethod
    def _normalize_stem(cls, v: int) -> int:
        return stem_of(v)

    @field_validator("year_branch", "month_branch", "day_branch", "hour_branch")
    @classmethod
    def _normalize_branch(cls, v: int) -> int:
        return branch_of(v)

    @field_validator("birth_hour_branch")
    @classmethod
    def _normalize_hour_branch(cls, v: Optional[int]) -> Optional[int]:
        return None if v is None else branch_of(v)

    @field_validator("gender", mode="before")
    @classmethod
    def _parse_gender(cls, v):
        return parse_gender(v)


# ============ 결과 ============

class TenGodCell(BaseModel):
    """십성표 한 칸"""
    ten_god: Optional[TenGod] = Field(None, description="십성 (일간 자리는 None)")
    group: Optional[TenGodGroup] = Field(None, description="십성 그룹")


class HiddenStemInfo(BaseModel):
    stem: int
    name: str = Field(..., description="지장간 천간 (한글)")
    role: HiddenStemRole
    days: int
    ten_god: TenGod = Field(..., description="일간 기준 십성")


class PillarInfo(BaseModel):
    """사주 기둥 + 십성"""
    position: PillarPosition
    stem: int
    branch: int
    ganji: str = Field(..., description="간지 (예: 갑자)")
    hanja: str = Field(..., description="간지 한자 (예: 甲子)")
    stem_element: Element
    branch_element: Element
    stem_polarity: Polarity
    branch_polarity: Polarity
    is_day_master: bool = False
    stem_ten_god: TenGodCell
    branch_ten_god: TenGodCell = Field(..., description="지지 본기 기준 십성")
    hidden_stems: List[HiddenStemInfo] = Field(default_factory=list)


class MonthAuthority(BaseModel):
    """월령 사령 지장간"""
    stem: int
    name: str
    role: HiddenStemRole
    days: int
    ten_god: TenGod


class GyeokgukOut(BaseModel):
    name: str = Field(..., description="격 식별자 (예: JEONGGWAN_GYEOK)")
    hangul: str
    hanja: str
    category: GyeokgukCategory
    basis: str = Field(..., description="판별 근거")
    step: int = Field(..., ge=1, le=7, description="결정 단계")
    supporting_groups: List[TenGodGroup] = Field(default_factory=list)
    opposing_groups: List[TenGodGroup] = Field(default_factory=list)
    supporting_elements: List[Element] = Field(default_factory=list)
    opposing_elements: List[Element] = Field(default_factory=list)
    invariant_violation: bool = False


class LuckPillarOut(BaseModel):
    """운 기둥 (대운/소운/세운/월운 공용)"""
    stem: int
    branch: int
    ganji: str
    index: Optional[int] = None
    start_age: Optional[int] = None
    end_age: Optional[int] = None
    age: Optional[int] = None
    year: Optional[int] = None
    month: Optional[int] = None
    stem_ten_god: Optional[TenGod] = None
    branch_ten_god: Optional[TenGod] = None


class CurrentDaewun(BaseModel):
    age: int
    pillar: Optional[LuckPillarOut] = Field(None, description="현재 대운 (대운 시작 전이면 None)")
    is_gyowungi: bool = False
    half: Optional[DaewunHalf] = None


class LuckCycles(BaseModel):
    direction: Direction
    start_age: int
    start_years: int
    start_months: int
    sowun: List[LuckPillarOut] = Field(default_factory=list)
    daewun: List[LuckPillarOut] = Field(default_factory=list)
    sewun: List[LuckPillarOut] = Field(default_factory=list)
    wolwun: List[LuckPillarOut] = Field(default_factory=list)
    current: Optional[CurrentDaewun] = None


class AuxiliaryPillarOut(BaseModel):
    stem: int
    branch: int
    ganji: str
    hanja: str
    stem_combination: bool
    combination_element: Optional[Element] = None
    stem_clash: bool
    branch_clash: bool
    branch_combination: bool
    ten_god: TenGod
    gongmang: bool


class AuxiliaryOut(BaseModel):
    taewon: AuxiliaryPillarOut
    taesik: AuxiliaryPillarOut
    myeonggung: AuxiliaryPillarOut
    taewon_taesik_same_element: bool


class ChartAnalysis(BaseModel):
    """사주 원국 분석 결과"""
    day_master: int
    day_master_element: Element
    pillars: List[PillarInfo]
    month_authority: Optional[MonthAuthority] = None
    gyeokguk: GyeokgukOut
    luck: LuckCycles
    auxiliary: AuxiliaryOut
