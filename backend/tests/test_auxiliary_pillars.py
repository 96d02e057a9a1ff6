"""
태원 / 태식 / 명궁 + 일주 관계 테스트
"""
import pytest

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

from saju_core.services.auxiliary_pillars import (
    analyze_relation,
    calc_auxiliary_pillars,
    calc_myeonggung,
    calc_taesik,
    calc_taewon,
    gongmang_branches,
    is_gongmang,
)
from saju_core.services.cycle import ChartPillars, Element, GanjiPillar
from saju_core.services.ten_god import TenGod


class TestConceptionPillars:
    """태원 / 태식"""

    def test_taewon(self):
        """丙寅월 → 庚卯"""
        assert calc_taewon(2, 2).hanja == "庚卯"

    def test_taesik(self):
        """甲子일 → 戊丑"""
        assert calc_taesik(0, 0).hanja == "戊丑"

    def test_wraps_around(self):
        p = calc_taewon(8, 11)
        assert (p.stem, p.branch) == (2, 0)


class TestMyeonggung:
    """명궁"""

    @pytest.mark.parametrize("case", [
        {"month": 1, "hour": 0, "year_stem": 0, "expected": "丁丑"},
        {"month": 4, "hour": 5, "year_stem": 4, "expected": "丁巳"},
        {"month": 1, "hour": 5, "year_stem": 0, "expected": "壬申"},
    ])
    def test_myeonggung(self, case):
        result = calc_myeonggung(case["month"], case["hour"], case["year_stem"])
        assert result.hanja == case["expected"], f"Expected {case['expected']}, got {result.hanja}"


class TestGongmang:
    """일주 기준 공망"""

    @pytest.mark.parametrize("day_stem,day_branch,expected", [
        (0, 0, (10, 11)),    # 甲子순 → 戌亥
        (1, 1, (10, 11)),    # 乙丑도 甲子순
        (0, 10, (8, 9)),     # 甲戌순 → 申酉
        (9, 11, (0, 1)),     # 癸亥 = 甲寅순 → 子丑
    ])
    def test_void_branches(self, day_stem, day_branch, expected):
        assert gongmang_branches(day_stem, day_branch) == expected

    def test_is_gongmang(self):
        assert is_gongmang(0, 0, 11)
        assert not is_gongmang(0, 0, 9)


class TestRelation:
    """보조 기둥 ↔ 일주 합충"""

    def test_combination(self):
        rel = analyze_relation(GanjiPillar(5, 1), 0, 0)
        assert rel.stem_combination is True
        assert rel.combination_element == Element.EARTH
        assert rel.branch_combination is True
        assert rel.branch_clash is False
        assert rel.ten_god == TenGod.JEONG_JAE

    def test_clash(self):
        rel = analyze_relation(GanjiPillar(6, 6), 0, 0)
        assert rel.stem_clash is True
        assert rel.branch_clash is True
        assert rel.stem_combination is False
        assert rel.combination_element is None
        assert rel.ten_god == TenGod.PYEON_GWAN


class TestAuxiliaryBundle:
    def _chart(self) -> ChartPillars:
        # 甲子년 丙寅월 甲子일 甲子시
        return ChartPillars.from_indices(0, 0, 2, 2, 0, 0, 0, 0)

    def test_bundle(self):
        aux = calc_auxiliary_pillars(self._chart(), month_number=1)
        assert aux.taewon.pillar.hanja == "庚卯"
        assert aux.taesik.pillar.hanja == "戊丑"
        assert aux.myeonggung.pillar.hanja == "丁丑"

        assert aux.taewon.relation.ten_god == TenGod.PYEON_GWAN
        assert aux.taewon.relation.stem_clash is True
        assert aux.taewon.relation.branch_clash is False
        assert aux.taesik.relation.branch_combination is True
        assert aux.taewon_taesik_same_element is False

    def test_hour_branch_override(self):
        aux = calc_auxiliary_pillars(self._chart(), month_number=1, hour_branch=5)
        assert aux.myeonggung.pillar.hanja == "壬申"

    def test_to_dict(self):
        data = calc_auxiliary_pillars(self._chart(), month_number=1).to_dict()
        assert data["taewon"]["ganji"] == "경묘"
        assert data["taewon"]["relation"]["stem_clash"] is True
