"""
대운 방향 / 대운수 / 대운·소운·세운·월운 테스트
"""
import pytest

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

from saju_core.config import EngineSettings
from saju_core.services.cycle import GanjiPillar, stem_of
from saju_core.services.direction import (
    Direction,
    Gender,
    is_male,
    is_yang_stem,
    luck_direction,
    parse_gender,
)
from saju_core.services.luck_cycles import (
    DaewunHalf,
    DaewunPillar,
    build_daewun_list,
    build_sewun_list,
    build_sowun_list,
    build_wolwun_list,
    calc_daewun_result,
    calc_start_age,
    calc_start_age_detail,
    daewun_half,
    daewun_pillar,
    daewun_ten_gods,
    find_daewun_at_age,
    get_sewun,
    get_wolwun,
    is_gyowungi,
)
from saju_core.services.ten_god import TenGod, TenGodGroup


class TestDirection:
    """양남음녀 순행, 음남양녀 역행"""

    @pytest.mark.parametrize("year_stem", range(10))
    @pytest.mark.parametrize("sex", [Gender.MALE, Gender.FEMALE])
    def test_direction_rule(self, year_stem, sex):
        expected = Direction.FORWARD if is_yang_stem(year_stem) == is_male(sex) else Direction.BACKWARD
        assert luck_direction(year_stem, sex) == expected

    def test_examples(self):
        assert luck_direction(0, "male") == Direction.FORWARD      # 갑년 남
        assert luck_direction(0, "female") == Direction.BACKWARD   # 갑년 여
        assert luck_direction(1, "남") == Direction.BACKWARD       # 을년 남
        assert luck_direction(1, "여성") == Direction.FORWARD      # 을년 여

    def test_gender_aliases(self):
        assert parse_gender("M") == Gender.MALE
        assert parse_gender(" 남성 ") == Gender.MALE
        assert parse_gender("f") == Gender.FEMALE
        with pytest.raises(ValueError):
            parse_gender("unknown")


class TestStartAge:
    """대운수 = 일수 ÷ 3"""

    @pytest.mark.parametrize("days,expected", [
        (0, 1), (1, 1), (2, 1), (4, 1), (5, 2), (20, 7), (30, 10),
    ])
    def test_start_age(self, days, expected):
        assert calc_start_age(days) == expected

    @pytest.mark.parametrize("days,expected", [
        (0, (1, 0)), (1, (0, 4)), (2, (0, 8)), (7, (2, 4)), (30, (10, 0)),
    ])
    def test_start_age_detail(self, days, expected):
        assert calc_start_age_detail(days) == expected


class TestDaewun:
    """대운 기둥"""

    def test_forward_from_byeong_in(self):
        """丙寅월 순행 → 丁卯, 戊辰 ..."""
        pillars = build_daewun_list(2, 2, Direction.FORWARD, 3, count=3)
        assert [p.ganji for p in pillars] == ["정묘", "무진", "기사"]
        assert (pillars[0].start_age, pillars[0].end_age) == (3, 12)
        assert (pillars[2].start_age, pillars[2].end_age) == (23, 32)

    def test_backward_from_byeong_in(self):
        pillars = build_daewun_list(2, 2, Direction.BACKWARD, 3, count=2)
        assert [p.ganji for p in pillars] == ["을축", "갑자"]

    @pytest.mark.parametrize("direction", [Direction.FORWARD, Direction.BACKWARD])
    def test_stepping(self, direction):
        ms, mb = 7, 9
        pillars = build_daewun_list(ms, mb, direction, 5, count=8)
        for i in range(len(pillars) - 1):
            if direction == Direction.FORWARD:
                assert pillars[i + 1].stem == stem_of(ms + i + 2)
            else:
                assert pillars[i + 1].stem == stem_of(ms - i - 2)

    def test_default_count_from_settings(self):
        assert EngineSettings().daewun_count == 8
        pillars = build_daewun_list(2, 2, Direction.FORWARD, 3, count=EngineSettings().daewun_count)
        assert len(pillars) == 8

    def test_rederive_first_pillar(self):
        """8개 생성 후 0번 기둥을 다시 계산해도 동일"""
        pillars = build_daewun_list(3, 5, Direction.BACKWARD, 6, count=8)
        assert daewun_pillar(3, 5, Direction.BACKWARD, 6, 0) == pillars[0]

    def test_find_daewun_at_age(self):
        pillars = build_daewun_list(2, 2, Direction.FORWARD, 3, count=8)
        assert find_daewun_at_age(pillars, 2) is None
        assert find_daewun_at_age(pillars, 15).index == 1
        assert find_daewun_at_age(pillars, 200) is None

    @pytest.mark.parametrize("age,expected", [
        (2, False), (3, True), (4, False), (8, False), (12, True), (13, True),
    ])
    def test_gyowungi(self, age, expected):
        assert is_gyowungi(age, 3, 1) == expected

    def test_gyowungi_wider_range(self):
        assert is_gyowungi(4, 3, 2)
        assert is_gyowungi(11, 3, 2)
        assert not is_gyowungi(7, 3, 2)

    def test_half_period(self):
        assert daewun_half(3, 3) == DaewunHalf.JEONBAN
        assert daewun_half(7, 3) == DaewunHalf.JEONBAN
        assert daewun_half(8, 3) == DaewunHalf.HUBAN

    def test_daewun_ten_gods(self):
        pillar = DaewunPillar(index=0, stem=7, branch=9, start_age=3, end_age=12)
        tgs = daewun_ten_gods(0, pillar)
        assert tgs.stem_ten_god == TenGod.JEONG_GWAN
        assert tgs.branch_ten_god == TenGod.JEONG_GWAN
        assert tgs.stem_group == TenGodGroup.GWANSEONG


class TestSowun:
    """대운 시작 전 소운"""

    def test_ages_before_start(self):
        sowun = build_sowun_list(2, 2, Direction.FORWARD, 4)
        assert [p.age for p in sowun] == [1, 2, 3]
        assert sowun[0].stem == 3 and sowun[0].branch == 3
        assert sowun[2].ganji == "기사"

    def test_start_age_one_has_no_sowun(self):
        assert build_sowun_list(2, 2, Direction.FORWARD, 1) == []

    def test_backward(self):
        sowun = build_sowun_list(2, 2, Direction.BACKWARD, 3)
        assert [p.ganji for p in sowun] == ["을축", "갑자"]


class TestDaewunResult:
    def test_bundle(self):
        """戊년 남자 → 순행, 20일 → 7세 (6년 8개월)"""
        result = calc_daewun_result(GanjiPillar(3, 5), year_stem=4, sex="male", days_to_solar_term=20, count=8)
        assert result.direction == Direction.FORWARD
        assert result.start_age == 7
        assert (result.start_years, result.start_months) == (6, 8)
        assert len(result.sowun) == 6
        assert len(result.daewun) == 8
        assert result.daewun[0].ganji == "무오"
        assert result.to_dict()["direction"] == "forward"

    def test_without_sowun(self):
        result = calc_daewun_result(GanjiPillar(3, 5), 4, Gender.FEMALE, 20, count=4, include_sowun=False)
        assert result.direction == Direction.BACKWARD
        assert result.sowun == ()
        assert result.daewun[0].ganji == "병진"


class TestSewunWolwun:
    """세운 / 월운"""

    def test_sewun_2024(self):
        sewun = get_sewun(2024)
        assert sewun.stem == stem_of(2020)
        assert sewun.ganji == "갑진"

    @pytest.mark.parametrize("year,ganji", [
        (1984, "갑자"), (2025, "을사"), (2026, "병오"), (1978, "무오"),
    ])
    def test_sewun_examples(self, year, ganji):
        assert get_sewun(year).ganji == ganji

    def test_sewun_list(self):
        years = build_sewun_list(2024, 3)
        assert [p.ganji for p in years] == ["갑진", "을사", "병오"]

    def test_wolwun(self):
        assert get_wolwun(2024, 1).ganji == "병인"
        assert get_wolwun(2024, 12).ganji == "정축"
        assert get_wolwun(2026, 1).ganji == "경인"

    def test_wolwun_list(self):
        months = build_wolwun_list(2024)
        assert len(months) == 12
        assert [p.branch for p in months] == [2, 3, 4, 5, 6, 7, 8, 9, 10, 11, 0, 1]
        assert [p.month for p in months] == list(range(1, 13))
