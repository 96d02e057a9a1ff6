"""
━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
격국(格局) 판별 모듈
━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
7단계 순서 고정 판별 (먼저 걸린 단계가 최종, 뒤 단계가 덮어쓰지 않음):
1. 종격 (일간 무근 + 한 세력 독점 / 억제 세력 전무)
2. 화기격 (일간 천간합 + 월지가 화(化) 오행 지원)
3. 건록격 / 양인격 (월지 직접 대조)
4. 월겁격 (월지 본기 = 겁재)
5. 투출 (월지 지장간 중 연/월/시간에 드러난 것, 본기 > 중기 > 여기)
6. 투출 없음 → 월지 본기 십신으로 격 결정
7. 잡격 폴백 (도달하면 로직 결함, ERROR 로그)
━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
"""
import logging
from collections import Counter
from dataclasses import dataclass, asdict, field
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from saju_core.config import EngineSettings, get_settings
from saju_core.services.cycle import (
    ChartPillars,
    Element,
    branch_element,
    branch_name,
    branch_of,
    element_shift,
    stem_element,
    stem_name,
    stem_of,
)
from saju_core.services.hidden_stems import (
    has_root,
    main_entry,
    main_qi_ten_god,
    transparent_entries,
)
from saju_core.services.relations import stem_combination_element
from saju_core.services.ten_god import (
    GROUP_OFFSET,
    TenGod,
    TenGodGroup,
    ten_god,
    ten_god_group,
)

logger = logging.getLogger(__name__)


class CalculationError(Exception):
    """계산 오류"""
    pass


class GyeokgukInvariantError(CalculationError):
    """격국 판별 7단계 도달 (1~6단계 로직 결함)"""
    pass


class GyeokgukCategory(str, Enum):
    PALMJEONG = "PALMJEONG"    # 팔정격
    OEGYEOK = "OEGYEOK"        # 외격 (건록/월겁/양인)
    JONGGUK = "JONGGUK"        # 종격
    HWAGI = "HWAGI"            # 화기격
    JEONWANG = "JEONWANG"      # 전왕격
    JAPGYEOK = "JAPGYEOK"      # 잡격


@dataclass(frozen=True)
class GyeokgukInfo:
    """격국 정의 (희신/기신은 기준 오행 대비 십성 그룹)"""
    name: str
    hangul: str
    hanja: str
    category: GyeokgukCategory
    supporting: Tuple[TenGodGroup, ...]
    opposing: Tuple[TenGodGroup, ...]


_BI, _SIK, _JAE, _GWAN, _IN = (
    TenGodGroup.BIGEOP,
    TenGodGroup.SIKSANG,
    TenGodGroup.JAESEONG,
    TenGodGroup.GWANSEONG,
    TenGodGroup.INSEONG,
)


def _info(name, hangul, hanja, category, supporting, opposing) -> GyeokgukInfo:
    return GyeokgukInfo(name, hangul, hanja, category, tuple(supporting), tuple(opposing))


_P, _O, _J, _H, _W, _X = (
    GyeokgukCategory.PALMJEONG,
    GyeokgukCategory.OEGYEOK,
    GyeokgukCategory.JONGGUK,
    GyeokgukCategory.HWAGI,
    GyeokgukCategory.JEONWANG,
    GyeokgukCategory.JAPGYEOK,
)

# 화기격/전왕격의 희기는 화(化) 오행 또는 일간 오행 기준
_ELEMENT_SUPPORT = (_BI, _IN)
_ELEMENT_OPPOSE = (_GWAN, _SIK)

GYEOKGUK_TABLE: Dict[str, GyeokgukInfo] = {info.name: info for info in (
    # 팔정격
    _info("JEONGGWAN_GYEOK", "정관격", "正官格", _P, (_JAE, _IN, _BI), (_SIK,)),
    _info("PYEONGWAN_GYEOK", "편관격", "偏官格", _P, (_SIK, _IN), (_JAE,)),
    _info("JEONGIN_GYEOK", "정인격", "正印格", _P, (_GWAN, _BI), (_JAE,)),
    _info("PYEONIN_GYEOK", "편인격", "偏印格", _P, (_GWAN, _BI), (_JAE,)),
    _info("SIKSIN_GYEOK", "식신격", "食神格", _P, (_JAE, _BI), (_IN,)),
    _info("SANG_GWAN_GYEOK", "상관격", "傷官格", _P, (_JAE, _IN), (_GWAN,)),
    _info("JEONGJAE_GYEOK", "정재격", "正財格", _P, (_SIK, _GWAN), (_BI,)),
    _info("PYEONJAE_GYEOK", "편재격", "偏財格", _P, (_SIK, _GWAN), (_BI,)),
    # 외격
    _info("GEON_ROK_GYEOK", "건록격", "建祿格", _O, (_GWAN, _JAE, _SIK), (_BI, _IN)),
    _info("WOL_GEOP_GYEOK", "월겁격", "月劫格", _O, (_GWAN, _JAE), (_BI, _IN)),
    _info("YANG_IN_GYEOK", "양인격", "羊刃格", _O, (_GWAN, _IN), (_BI,)),
    # 종격
    _info("JONG_JAE_GYEOK", "종재격", "從財格", _J, (_JAE, _SIK, _GWAN), (_IN, _BI)),
    _info("JONG_SAL_GYEOK", "종살격", "從殺格", _J, (_GWAN, _JAE), (_SIK, _BI)),
    _info("JONG_A_GYEOK", "종아격", "從兒格", _J, (_SIK, _JAE), (_IN, _GWAN)),
    _info("JONG_GANG_GYEOK", "종강격", "從强格", _J, (_BI, _IN), (_GWAN, _JAE, _SIK)),
    _info("JONG_WANG_GYEOK", "종왕격", "從旺格", _J, (_BI, _SIK), (_GWAN, _JAE)),
    # 화기격
    _info("HWA_TO_GYEOK", "화토격", "化土格", _H, _ELEMENT_SUPPORT, _ELEMENT_OPPOSE),
    _info("HWA_GEUM_GYEOK", "화금격", "化金格", _H, _ELEMENT_SUPPORT, _ELEMENT_OPPOSE),
    _info("HWA_SU_GYEOK", "화수격", "化水格", _H, _ELEMENT_SUPPORT, _ELEMENT_OPPOSE),
    _info("HWA_MOK_GYEOK", "화목격", "化木格", _H, _ELEMENT_SUPPORT, _ELEMENT_OPPOSE),
    _info("HWA_HWA_GYEOK", "화화격", "化火格", _H, _ELEMENT_SUPPORT, _ELEMENT_OPPOSE),
    # 전왕격
    _info("GOK_JIK_GYEOK", "곡직격", "曲直格", _W, _ELEMENT_SUPPORT, _ELEMENT_OPPOSE),
    _info("YEOM_SANG_GYEOK", "염상격", "炎上格", _W, _ELEMENT_SUPPORT, _ELEMENT_OPPOSE),
    _info("GA_SAEK_GYEOK", "가색격", "稼穡格", _W, _ELEMENT_SUPPORT, _ELEMENT_OPPOSE),
    _info("JONG_HYEOK_GYEOK", "종혁격", "從革格", _W, _ELEMENT_SUPPORT, _ELEMENT_OPPOSE),
    _info("YUN_HA_GYEOK", "윤하격", "潤下格", _W, _ELEMENT_SUPPORT, _ELEMENT_OPPOSE),
    # 잡격
    _info("IL_HAENG_DEUK_GI_GYEOK", "일행득기격", "一行得氣格", _X, (_BI, _IN), (_GWAN,)),
    _info("YANG_SIN_SEONG_SANG_GYEOK", "양신성상격", "兩神成象格", _X, (), ()),
    _info("JAPGYEOK", "잡격", "雜格", _X, (), ()),
)}

# 월지 십신 → 격 이름
TENGOD_TO_GYEOK: Dict[TenGod, str] = {
    TenGod.JEONG_GWAN: "JEONGGWAN_GYEOK",
    TenGod.PYEON_GWAN: "PYEONGWAN_GYEOK",
    TenGod.JEONG_IN: "JEONGIN_GYEOK",
    TenGod.PYEON_IN: "PYEONIN_GYEOK",
    TenGod.SIK_SHIN: "SIKSIN_GYEOK",
    TenGod.SANG_GWAN: "SANG_GWAN_GYEOK",
    TenGod.JEONG_JAE: "JEONGJAE_GYEOK",
    TenGod.PYEON_JAE: "PYEONJAE_GYEOK",
    TenGod.BI_GYEON: "GEON_ROK_GYEOK",
    TenGod.GEOB_JAE: "WOL_GEOP_GYEOK",
}

# 화(化) 오행 → 화기격
HWAGI_BY_ELEMENT: Dict[Element, str] = {
    Element.EARTH: "HWA_TO_GYEOK",
    Element.METAL: "HWA_GEUM_GYEOK",
    Element.WATER: "HWA_SU_GYEOK",
    Element.WOOD: "HWA_MOK_GYEOK",
    Element.FIRE: "HWA_HWA_GYEOK",
}

# 종격: 독점 세력 → 격 (판정 순서 = 튜플 순서)
FOLLOWING_BY_GROUP: Tuple[Tuple[TenGodGroup, str], ...] = (
    (TenGodGroup.JAESEONG, "JONG_JAE_GYEOK"),
    (TenGodGroup.GWANSEONG, "JONG_SAL_GYEOK"),
    (TenGodGroup.SIKSANG, "JONG_A_GYEOK"),
)

# 일간별 건록지: 甲寅 乙卯 丙巳 丁午 戊巳 己午 庚申 辛酉 壬亥 癸子
GEON_ROK_TABLE: Tuple[int, ...] = (2, 3, 5, 6, 5, 6, 8, 9, 11, 0)

# 양간 전용 양인지 (음간은 -1 = 해당 없음): 甲卯 丙午 戊午 庚酉 壬子
YANG_IN_TABLE: Tuple[int, ...] = (3, -1, 6, -1, 6, -1, 9, -1, 0, -1)

_SUPPORT_GROUPS = (TenGodGroup.BIGEOP, TenGodGroup.INSEONG)


def is_geon_rok(stem: int, branch: int) -> bool:
    """월지가 일간의 건록지인가"""
    return GEON_ROK_TABLE[stem_of(stem)] == branch_of(branch)


def is_yang_in(stem: int, branch: int) -> bool:
    """월지가 양간 일간의 양인지인가 (음간은 항상 False)"""
    target = YANG_IN_TABLE[stem_of(stem)]
    return target >= 0 and target == branch_of(branch)


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# 결과
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

@dataclass(frozen=True)
class GyeokgukResult:
    """격국 판별 결과"""
    name: str                                   # 격 식별자 (예: JEONGGWAN_GYEOK)
    hangul: str                                 # 정관격
    hanja: str                                  # 正官格
    category: GyeokgukCategory
    basis: str                                  # 판별 근거 (어느 규칙이 걸렸는지)
    step: int                                   # 결정된 단계 (1~7)
    supporting_groups: Tuple[TenGodGroup, ...] = ()
    opposing_groups: Tuple[TenGodGroup, ...] = ()
    supporting_elements: Tuple[Element, ...] = ()
    opposing_elements: Tuple[Element, ...] = ()
    invariant_violation: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class GyeokgukContext:
    """판별 입력 (인덱스는 정규화된 값)"""
    day_stem: int
    month_branch: int
    other_stems: Tuple[int, ...]                # 연간/월간/시간 (일간 제외)
    branches: Tuple[int, ...] = ()              # 연지/월지/일지/시지 (종격 판단용)
    month_stem: Optional[int] = None            # 화기격 판단용
    hour_stem: Optional[int] = None
    settings: EngineSettings = field(default_factory=get_settings, compare=False)


def _build_result(
    name: str,
    basis: str,
    step: int,
    reference_element: Element,
    category: Optional[GyeokgukCategory] = None,
    invariant_violation: bool = False,
) -> GyeokgukResult:
    info = GYEOKGUK_TABLE[name]
    return GyeokgukResult(
        name=info.name,
        hangul=info.hangul,
        hanja=info.hanja,
        category=category or info.category,
        basis=basis,
        step=step,
        supporting_groups=info.supporting,
        opposing_groups=info.opposing,
        supporting_elements=tuple(element_shift(reference_element, GROUP_OFFSET[g]) for g in info.supporting),
        opposing_elements=tuple(element_shift(reference_element, GROUP_OFFSET[g]) for g in info.opposing),
        invariant_violation=invariant_violation,
    )


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# 단계별 판별 함수 (결과 또는 None)
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

GyeokgukStep = Callable[[GyeokgukContext], Optional[GyeokgukResult]]


def _position_groups(ctx: GyeokgukContext) -> Counter:
    """연/월/시간 + 네 지지 본기의 십성 그룹 개수"""
    counts: Counter = Counter()
    for s in ctx.other_stems:
        counts[ten_god_group(ten_god(ctx.day_stem, s))] += 1
    for b in ctx.branches:
        counts[ten_god_group(main_qi_ten_god(ctx.day_stem, b))] += 1
    return counts


def step_following(ctx: GyeokgukContext) -> Optional[GyeokgukResult]:
    """1단계: 종격 (일간 무근일 때만)"""
    if not ctx.branches:
        return None

    dm = ctx.day_stem
    if any(has_root(dm, b) for b in ctx.branches):
        return None

    counts = _position_groups(ctx)
    support = sum(counts[g] for g in _SUPPORT_GROUPS)
    opposing = sum(counts.values()) - support

    # 억제 세력 독점 (비겁/인성 전무)
    if support == 0:
        for group, name in FOLLOWING_BY_GROUP:
            if counts[group] >= ctx.settings.following_min_positions:
                basis = (
                    f"일간 {stem_name(dm)}이(가) 네 지지 어디에도 통근하지 못하고 비겁/인성이 없으며, "
                    f"{group.value}이(가) {counts[group]}자리를 차지한다."
                )
                return _build_result(name, basis, 1, stem_element(dm))

    # 생조 세력 독점 (식상/재성/관성 전무). 무근이면 지지는 모두 인성이므로 천간으로 구분
    if opposing == 0:
        stem_groups = [ten_god_group(ten_god(dm, s)) for s in ctx.other_stems]
        if stem_groups and all(g == TenGodGroup.BIGEOP for g in stem_groups):
            basis = "일간이 무근이고 식상/재성/관성이 없으며, 연/월/시간이 모두 비겁이다."
            return _build_result("JONG_WANG_GYEOK", basis, 1, stem_element(dm))
        basis = (
            f"일간이 무근이고 식상/재성/관성이 없으며, 비겁 {counts[TenGodGroup.BIGEOP]}자리, "
            f"인성 {counts[TenGodGroup.INSEONG]}자리가 사주를 채운다."
        )
        return _build_result("JONG_GANG_GYEOK", basis, 1, stem_element(dm))

    return None


def step_transformation(ctx: GyeokgukContext) -> Optional[GyeokgukResult]:
    """2단계: 화기격 (월간 → 시간 순서로 합 확인)"""
    month_element = branch_element(ctx.month_branch)
    for label, partner in (("월간", ctx.month_stem), ("시간", ctx.hour_stem)):
        if partner is None:
            continue
        element = stem_combination_element(ctx.day_stem, partner)
        if element is None:
            continue
        if month_element == element:
            basis = (
                f"일간 {stem_name(ctx.day_stem)}과(와) {label} {stem_name(partner)}이(가) 합하여 "
                f"{element.value}(으)로 화(化)하고, 월지 {branch_name(ctx.month_branch)}이(가) "
                f"{element.value}을(를) 돕는다."
            )
            return _build_result(HWAGI_BY_ELEMENT[element], basis, 2, element)
        logger.debug(
            f"[Gyeokguk] 천간합 {stem_name(ctx.day_stem)}{stem_name(partner)} 성립, "
            f"월지 {branch_name(ctx.month_branch)}({month_element.value}) 불지원 → 화기격 아님"
        )
    return None


def step_month_office(ctx: GyeokgukContext) -> Optional[GyeokgukResult]:
    """3단계: 건록격 / 양인격"""
    if is_geon_rok(ctx.day_stem, ctx.month_branch):
        basis = "월지가 일간의 건록지(建祿地)에 해당한다."
        return _build_result("GEON_ROK_GYEOK", basis, 3, stem_element(ctx.day_stem))
    if is_yang_in(ctx.day_stem, ctx.month_branch):
        basis = "월지가 양간 일간의 양인지(羊刃地)에 해당한다."
        return _build_result("YANG_IN_GYEOK", basis, 3, stem_element(ctx.day_stem))
    return None


def step_rival(ctx: GyeokgukContext) -> Optional[GyeokgukResult]:
    """4단계: 월겁격"""
    if main_qi_ten_god(ctx.day_stem, ctx.month_branch) == TenGod.GEOB_JAE:
        basis = "월지 본기가 일간에 대해 겁재(劫財)에 해당한다."
        return _build_result("WOL_GEOP_GYEOK", basis, 4, stem_element(ctx.day_stem))
    return None


def step_transparency(ctx: GyeokgukContext) -> Optional[GyeokgukResult]:
    """5단계: 지장간 투출"""
    for entry in transparent_entries(ctx.month_branch, ctx.other_stems):
        tg = ten_god(ctx.day_stem, entry.stem)
        if tg in (TenGod.BI_GYEON, TenGod.GEOB_JAE):
            continue
        basis = f"월지 지장간({entry.role.value} {stem_name(entry.stem)}) 투출: {tg.value}."
        return _build_result(
            TENGOD_TO_GYEOK[tg], basis, 5, stem_element(ctx.day_stem),
            category=GyeokgukCategory.PALMJEONG,
        )
    return None


def step_main_qi(ctx: GyeokgukContext) -> Optional[GyeokgukResult]:
    """6단계: 투출 없음 → 월지 본기 십신"""
    tg = main_qi_ten_god(ctx.day_stem, ctx.month_branch)
    category = GyeokgukCategory.OEGYEOK if tg in (TenGod.BI_GYEON, TenGod.GEOB_JAE) else GyeokgukCategory.PALMJEONG
    basis = (
        f"지장간 투출 없음. 월지 본기 {stem_name(main_entry(ctx.month_branch).stem)}의 "
        f"십신({tg.value})으로 격을 취한다."
    )
    return _build_result(TENGOD_TO_GYEOK[tg], basis, 6, stem_element(ctx.day_stem), category=category)


GYEOKGUK_STEPS: Tuple[GyeokgukStep, ...] = (
    step_following,
    step_transformation,
    step_month_office,
    step_rival,
    step_transparency,
    step_main_qi,
)

# 월령 기반 정격 판별 (3~6단계)
JEONG_GYEOK_STEPS: Tuple[GyeokgukStep, ...] = GYEOKGUK_STEPS[2:]


def _residual(ctx: GyeokgukContext, steps: Sequence[GyeokgukStep]) -> GyeokgukResult:
    """7단계: 앞 단계가 모두 None (로직 결함)"""
    reason = (
        f"{len(steps)}개 판별 단계가 모두 결과를 내지 못함 "
        f"(일간={stem_name(ctx.day_stem)}, 월지={branch_name(ctx.month_branch)})"
    )
    logger.error(f"[Gyeokguk] 불변식 위반: {reason}")
    if ctx.settings.strict_invariants:
        raise GyeokgukInvariantError(reason)
    return _build_result(
        "JAPGYEOK", f"잡격 폴백: {reason}", 7, stem_element(ctx.day_stem),
        invariant_violation=True,
    )


def run_gyeokguk_steps(ctx: GyeokgukContext, steps: Sequence[GyeokgukStep]) -> GyeokgukResult:
    """단계 목록을 순서대로 평가, 첫 결과에서 중단"""
    for step in steps:
        result = step(ctx)
        if result is not None:
            logger.debug(f"[Gyeokguk] {step.__name__} → {result.name}")
            return result
        logger.debug(f"[Gyeokguk] {step.__name__} → 해당 없음")
    return _residual(ctx, steps)


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# 공개 API
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

def determine_jeong_gyeok(
    day_stem: int,
    month_branch: int,
    other_stems: Sequence[int],
    settings: Optional[EngineSettings] = None,
) -> GyeokgukResult:
    """
    월령 기반 정격 판별 (건록/양인 → 월겁 → 투출 → 본기)

    Args:
        day_stem: 일간 인덱스
        month_branch: 월지 인덱스
        other_stems: 연간/월간/시간 인덱스 (일간 제외)

    Example:
        甲일간, 酉월(辛본기=정관), 연간=壬, 월간=辛, 시간=丙
        determine_jeong_gyeok(0, 9, [8, 7, 2]) → JEONGGWAN_GYEOK / PALMJEONG
    """
    ctx = GyeokgukContext(
        day_stem=stem_of(day_stem),
        month_branch=branch_of(month_branch),
        other_stems=tuple(stem_of(s) for s in other_stems),
        settings=settings or get_settings(),
    )
    return run_gyeokguk_steps(ctx, JEONG_GYEOK_STEPS)


def classify_gyeokguk(
    chart: ChartPillars,
    settings: Optional[EngineSettings] = None,
) -> GyeokgukResult:
    """사주 원국 전체로 7단계 격국 판별"""
    ctx = GyeokgukContext(
        day_stem=chart.day_master,
        month_branch=chart.month.branch,
        other_stems=chart.other_stems,
        branches=chart.branches,
        month_stem=chart.month.stem,
        hour_stem=chart.hour.stem,
        settings=settings or get_settings(),
    )
    result = run_gyeokguk_steps(ctx, GYEOKGUK_STEPS)
    logger.info(
        f"[Gyeokguk] 일간={stem_name(ctx.day_stem)} 월지={branch_name(ctx.month_branch)} "
        f"→ {result.hangul}({result.category.value}, step={result.step})"
    )
    return result


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# 격국 정의 조회
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

def get_gyeokguk_info(name: str) -> Optional[GyeokgukInfo]:
    return GYEOKGUK_TABLE.get(name)


def find_gyeokguk_by_hangul(hangul: str) -> Optional[GyeokgukInfo]:
    for info in GYEOKGUK_TABLE.values():
        if info.hangul == hangul:
            return info
    return None


def list_gyeokguk_by_category(category: GyeokgukCategory) -> List[GyeokgukInfo]:
    return [info for info in GYEOKGUK_TABLE.values() if info.category == category]
