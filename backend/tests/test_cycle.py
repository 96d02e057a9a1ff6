"""
천간/지지 기본 연산 + 십성 + 지장간 테스트
"""
import pytest

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

from saju_core.services.cycle import (
    Element,
    GanjiPillar,
    Polarity,
    branch_element,
    branch_of,
    branch_polarity,
    branch_to_month_number,
    element_controlled_by,
    element_controls,
    element_generated_by,
    element_generates,
    ganji_hanja,
    ganji_name,
    month_number_to_branch,
    month_stem,
    stem_element,
    stem_of,
    stem_polarity,
)
from saju_core.services.hidden_stems import (
    MONTH_CYCLE_DAYS,
    HiddenStemRole,
    RootStrength,
    governing_stem,
    governing_ten_god,
    hidden_stems,
    main_entry,
    main_qi_ten_god,
    root_strength,
    transparent_entries,
)
from saju_core.services.relations import (
    is_branch_clash,
    is_branch_combination,
    is_stem_clash,
    is_stem_combination,
    stem_combination_element,
)
from saju_core.services.ten_god import (
    GROUP_OFFSET,
    TenGod,
    TenGodGroup,
    group_element,
    inverse_ten_god,
    ten_god,
    ten_god_group,
)


class TestCycleBase:
    """정규화 / 오행 / 음양"""

    @pytest.mark.parametrize("n", [-23, -1, 0, 7, 19, 123])
    @pytest.mark.parametrize("k", [-3, 1, 5])
    def test_cyclic_idempotence(self, n, k):
        assert stem_of(n) == stem_of(n + 10 * k)
        assert branch_of(n) == branch_of(n + 12 * k)

    def test_negative_normalization(self):
        assert stem_of(-1) == 9
        assert branch_of(-1) == 11
        assert stem_of(10) == 0
        assert branch_of(12) == 0

    def test_stem_element_and_polarity(self):
        assert stem_element(0) == Element.WOOD
        assert stem_element(5) == Element.EARTH
        assert stem_element(9) == Element.WATER
        assert stem_polarity(0) == Polarity.YANG
        assert stem_polarity(7) == Polarity.YIN

    def test_branch_element_and_polarity(self):
        expected = ["수", "토", "목", "목", "토", "화", "화", "토", "금", "금", "토", "수"]
        assert [branch_element(b).value for b in range(12)] == expected
        assert branch_polarity(0) == Polarity.YANG
        assert branch_polarity(11) == Polarity.YIN

    def test_element_cycle(self):
        assert element_generates(Element.WOOD) == Element.FIRE
        assert element_controls(Element.WOOD) == Element.EARTH
        assert element_controlled_by(Element.WOOD) == Element.METAL
        assert element_generated_by(Element.WOOD) == Element.WATER
        assert element_generated_by(element_generates(Element.METAL)) == Element.METAL

    def test_names(self):
        assert ganji_name(0, 0) == "갑자"
        assert ganji_hanja(2, 2) == "丙寅"
        assert ganji_name(-1, -1) == "계해"

    def test_month_number_branch_round_trip(self):
        assert month_number_to_branch(1) == 2    # 인월
        assert month_number_to_branch(11) == 0   # 자월
        assert month_number_to_branch(12) == 1   # 축월
        for m in range(1, 13):
            assert branch_to_month_number(month_number_to_branch(m)) == m

    @pytest.mark.parametrize("case", [
        {"year_stem": 0, "month": 1, "expected": 2},    # 갑년 → 병인월
        {"year_stem": 1, "month": 1, "expected": 4},    # 을년 → 무인월
        {"year_stem": 2, "month": 1, "expected": 6},    # 병년 → 경인월
        {"year_stem": 3, "month": 1, "expected": 8},    # 정년 → 임인월
        {"year_stem": 4, "month": 1, "expected": 0},    # 무년 → 갑인월
        {"year_stem": 5, "month": 1, "expected": 2},    # 기년 → 병인월
        {"year_stem": 0, "month": 12, "expected": 3},   # 갑년 축월 → 정축
    ])
    def test_month_stem(self, case):
        result = month_stem(case["year_stem"], case["month"])
        assert result == case["expected"], f"Expected {case['expected']}, got {result}"

    def test_pillar_normalizes(self):
        p = GanjiPillar(-1, 13)
        assert (p.stem, p.branch) == (9, 1)
        assert p.ganji == "계축"
        assert p.shifted(1) == GanjiPillar(0, 2)


class TestTenGod:
    """십성 판별"""

    @pytest.mark.parametrize("s", range(10))
    def test_self_is_bi_gyeon(self, s):
        assert ten_god(s, s) == TenGod.BI_GYEON

    @pytest.mark.parametrize("target,expected", [
        (1, TenGod.GEOB_JAE),
        (2, TenGod.SIK_SHIN),
        (3, TenGod.SANG_GWAN),
        (4, TenGod.PYEON_JAE),
        (5, TenGod.JEONG_JAE),
        (6, TenGod.PYEON_GWAN),
        (7, TenGod.JEONG_GWAN),
        (8, TenGod.PYEON_IN),
        (9, TenGod.JEONG_IN),
    ])
    def test_gap_day_master_table(self, target, expected):
        """갑목 일간 기준 10간"""
        assert ten_god(0, target) == expected

    def test_yin_day_master(self):
        assert ten_god(1, 0) == TenGod.GEOB_JAE
        assert ten_god(1, 6) == TenGod.JEONG_GWAN
        assert ten_god(1, 7) == TenGod.PYEON_GWAN

    def test_inverse_matches_swapped_arguments(self):
        for a in range(10):
            for b in range(10):
                assert inverse_ten_god(a, b) == ten_god(b, a)

    def test_inverse_offsets_sum_to_cycle(self):
        """(a,b) 관계와 (b,a) 관계의 오행 거리 합은 5의 배수"""
        for a in range(10):
            for b in range(10):
                forward = GROUP_OFFSET[ten_god_group(ten_god(a, b))]
                backward = GROUP_OFFSET[ten_god_group(ten_god(b, a))]
                assert (forward + backward) % 5 == 0

    def test_group_element(self):
        assert group_element(0, TenGodGroup.JAESEONG) == Element.EARTH
        assert group_element(0, TenGodGroup.INSEONG) == Element.WATER
        assert group_element(6, TenGodGroup.GWANSEONG) == Element.FIRE


class TestHiddenStems:
    """지장간 테이블 / 월령"""

    @pytest.mark.parametrize("b", range(12))
    def test_days_sum_and_single_main(self, b):
        entries = hidden_stems(b)
        assert sum(e.days for e in entries) == MONTH_CYCLE_DAYS
        assert [e.role for e in entries].count(HiddenStemRole.MAIN) == 1
        assert entries[-1].role == HiddenStemRole.MAIN

    @pytest.mark.parametrize("b", range(12))
    def test_role_order(self, b):
        order = [HiddenStemRole.RESIDUAL, HiddenStemRole.MIDDLE, HiddenStemRole.MAIN]
        roles = [order.index(e.role) for e in hidden_stems(b)]
        assert roles == sorted(roles)

    @pytest.mark.parametrize("case", [
        {"branch": 2, "days": 5, "stem": 4},     # 인월 5일 → 戊
        {"branch": 2, "days": 7, "stem": 4},     # 경계값 → 戊
        {"branch": 2, "days": 8, "stem": 2},     # → 丙
        {"branch": 2, "days": 10, "stem": 2},
        {"branch": 2, "days": 20, "stem": 0},    # → 甲
        {"branch": 2, "days": 99, "stem": 0},    # 초과 → 본기 고정
        {"branch": 0, "days": 45, "stem": 9},
        {"branch": 10, "days": 11, "stem": 3},   # 술월 11일 → 丁
    ])
    def test_governing_stem(self, case):
        entry = governing_stem(case["branch"], case["days"])
        assert entry.stem == case["stem"], f"Expected {case['stem']}, got {entry.stem}"

    def test_governing_ten_god(self):
        """甲일간 寅월 10일 → 丙 사령 = 식신"""
        assert governing_ten_god(0, 2, 10) == TenGod.SIK_SHIN
        assert governing_ten_god(0, 2, 99) == TenGod.BI_GYEON

    def test_main_entry(self):
        assert main_entry(9).stem == 7
        assert main_entry(11).stem == 8
        assert main_qi_ten_god(0, 9) == TenGod.JEONG_GWAN

    @pytest.mark.parametrize("stem,branch,expected", [
        (0, 2, RootStrength.STRONG),
        (0, 11, RootStrength.WEAK),
        (0, 9, RootStrength.NONE),
        (2, 5, RootStrength.STRONG),
        (8, 8, RootStrength.WEAK),
        (1, 2, RootStrength.WEAK),     # 乙 → 寅 (甲 동일 오행)
    ])
    def test_root_strength(self, stem, branch, expected):
        assert root_strength(stem, branch) == expected

    def test_transparent_entries_sorted_by_role(self):
        found = transparent_entries(2, [4, 2, 0])
        assert [e.stem for e in found] == [0, 2, 4]
        assert transparent_entries(2, [1, 3]) == []

    @pytest.mark.parametrize("branch,visible,expected", [
        (4, [9, 1], [1, 9]),         # 辰: 乙 > 癸
        (1, [7, 9], [9, 7]),         # 丑: 癸 > 辛
        (7, [1, 3, 5], [5, 3, 1]),   # 未: 己 > 丁 > 乙
        (10, [3, 7], [7, 3]),        # 戌: 辛 > 丁
    ])
    def test_transparent_entries_tomb_branches(self, branch, visible, expected):
        assert [e.stem for e in transparent_entries(branch, visible)] == expected


class TestRelations:
    """천간합/충, 육충/육합"""

    def test_stem_combination(self):
        assert is_stem_combination(0, 5)
        assert is_stem_combination(5, 0)
        assert stem_combination_element(0, 5) == Element.EARTH
        assert stem_combination_element(8, 3) == Element.WOOD
        assert stem_combination_element(4, 9) == Element.FIRE
        assert stem_combination_element(0, 1) is None

    def test_stem_clash(self):
        assert is_stem_clash(0, 6)
        assert is_stem_clash(9, 3)
        assert not is_stem_clash(0, 4)

    def test_branch_relations(self):
        assert is_branch_clash(0, 6)
        assert is_branch_clash(11, 5)
        assert is_branch_combination(2, 11)
        assert is_branch_combination(7, 6)
        assert not is_branch_combination(0, 2)
