"""
사주 원국 종합 분석 (라이브러리 진입점)
- 4기둥 인덱스 → 십성표, 월령, 격국, 대운/소운/세운/월운, 태원/태식/명궁
- 호출마다 새 결과를 만드는 순수 계산 (공유 상태 없음)
"""
import logging
from typing import List, Optional, Union

from saju_core.config import EngineSettings, get_settings
from saju_core.models.schemas import (
    AuxiliaryOut,
    AuxiliaryPillarOut,
    ChartAnalysis,
    ChartInput,
    CurrentDaewun,
    GyeokgukOut,
    HiddenStemInfo,
    LuckCycles,
    LuckPillarOut,
    MonthAuthority,
    PillarInfo,
    TenGodCell,
)
from saju_core.services.auxiliary_pillars import AuxiliaryPillar, calc_auxiliary_pillars
from saju_core.services.cycle import (
    ChartPillars,
    GanjiPillar,
    branch_element,
    branch_polarity,
    stem_element,
    stem_name,
    stem_polarity,
)
from saju_core.services.gyeokguk import GyeokgukResult, classify_gyeokguk
from saju_core.services.hidden_stems import governing_stem, governing_ten_god, hidden_stems, main_qi_ten_god
from saju_core.services.luck_cycles import (
    DaewunPillar,
    build_sewun_list,
    build_wolwun_list,
    calc_daewun_result,
    daewun_half,
    daewun_ten_gods,
    find_daewun_at_age,
    is_gyowungi,
)
from saju_core.services.ten_god import ten_god, ten_god_group

logger = logging.getLogger(__name__)

POSITIONS = ("year", "month", "day", "hour")


class ChartAnalyzer:
    """
    사주 원국 분석기

    Features:
    1. 십성표 (천간 + 지지 본기 + 지장간)
    2. 월령 사령 지장간
    3. 격국 7단계 판별
    4. 대운/소운 + 세운/월운
    5. 태원/태식/명궁
    """

    def __init__(self, settings: Optional[EngineSettings] = None):
        self.settings = settings or get_settings()

    def analyze(self, data: Union[ChartInput, dict]) -> ChartAnalysis:
        if not isinstance(data, ChartInput):
            data = ChartInput.model_validate(data)

        chart = ChartPillars.from_indices(
            data.year_stem, data.year_branch,
            data.month_stem, data.month_branch,
            data.day_stem, data.day_branch,
            data.hour_stem, data.hour_branch,
        )
        dm = chart.day_master

        pillars = [
            self._pillar_info(position, pillar, dm)
            for position, pillar in zip(POSITIONS, (chart.year, chart.month, chart.day, chart.hour))
        ]

        month_authority = None
        if data.elapsed_days_in_month is not None:
            entry = governing_stem(chart.month.branch, data.elapsed_days_in_month)
            month_authority = MonthAuthority(
                stem=entry.stem,
                name=entry.name,
                role=entry.role,
                days=entry.days,
                ten_god=governing_ten_god(dm, chart.month.branch, data.elapsed_days_in_month),
            )

        gyeokguk = classify_gyeokguk(chart, self.settings)
        luck = self._luck_cycles(chart, data)
        auxiliary = calc_auxiliary_pillars(chart, data.birth_month_number, data.birth_hour_branch)

        logger.info(
            f"[Chart] {' '.join(p.ganji for p in pillars)} | 일간={stem_name(dm)} "
            f"| 격국={gyeokguk.hangul} | 대운={luck.direction.value} {luck.start_age}세"
        )

        return ChartAnalysis(
            day_master=dm,
            day_master_element=stem_element(dm),
            pillars=pillars,
            month_authority=month_authority,
            gyeokguk=self._gyeokguk_out(gyeokguk),
            luck=luck,
            auxiliary=AuxiliaryOut(
                taewon=self._auxiliary_out(auxiliary.taewon),
                taesik=self._auxiliary_out(auxiliary.taesik),
                myeonggung=self._auxiliary_out(auxiliary.myeonggung),
                taewon_taesik_same_element=auxiliary.taewon_taesik_same_element,
            ),
        )

    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
    # 변환 헬퍼
    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

    @staticmethod
    def _pillar_info(position: str, pillar: GanjiPillar, dm: int) -> PillarInfo:
        is_dm = position == "day"
        if is_dm:
            stem_cell = TenGodCell()
        else:
            tg = ten_god(dm, pillar.stem)
            stem_cell = TenGodCell(ten_god=tg, group=ten_god_group(tg))
        branch_tg = main_qi_ten_god(dm, pillar.branch)

        return PillarInfo(
            position=position,
            stem=pillar.stem,
            branch=pillar.branch,
            ganji=pillar.ganji,
            hanja=pillar.hanja,
            stem_element=stem_element(pillar.stem),
            branch_element=branch_element(pillar.branch),
            stem_polarity=stem_polarity(pillar.stem),
            branch_polarity=branch_polarity(pillar.branch),
            is_day_master=is_dm,
            stem_ten_god=stem_cell,
            branch_ten_god=TenGodCell(ten_god=branch_tg, group=ten_god_group(branch_tg)),
            hidden_stems=[
                HiddenStemInfo(
                    stem=entry.stem,
                    name=entry.name,
                    role=entry.role,
                    days=entry.days,
                    ten_god=ten_god(dm, entry.stem),
                )
                for entry in hidden_stems(pillar.branch)
            ],
        )

    @staticmethod
    def _gyeokguk_out(result: GyeokgukResult) -> GyeokgukOut:
        return GyeokgukOut(
            name=result.name,
            hangul=result.hangul,
            hanja=result.hanja,
            category=result.category,
            basis=result.basis,
            step=result.step,
            supporting_groups=list(result.supporting_groups),
            opposing_groups=list(result.opposing_groups),
            supporting_elements=list(result.supporting_elements),
            opposing_elements=list(result.opposing_elements),
            invariant_violation=result.invariant_violation,
        )

    @staticmethod
    def _daewun_out(pillar: DaewunPillar, dm: int) -> LuckPillarOut:
        tgs = daewun_ten_gods(dm, pillar)
        return LuckPillarOut(
            stem=pillar.stem,
            branch=pillar.branch,
            ganji=pillar.ganji,
            index=pillar.index,
            start_age=pillar.start_age,
            end_age=pillar.end_age,
            stem_ten_god=tgs.stem_ten_god,
            branch_ten_god=tgs.branch_ten_god,
        )

    def _luck_cycles(self, chart: ChartPillars, data: ChartInput) -> LuckCycles:
        dm = chart.day_master
        result = calc_daewun_result(
            chart.month,
            chart.year.stem,
            data.gender,
            data.days_to_solar_term,
            count=self.settings.daewun_count,
            include_sowun=self.settings.include_sowun,
        )
        daewun = [self._daewun_out(p, dm) for p in result.daewun]

        sewun: List[LuckPillarOut] = []
        wolwun: List[LuckPillarOut] = []
        if data.target_year is not None:
            sewun = [
                LuckPillarOut(
                    stem=p.stem, branch=p.branch, ganji=p.ganji, year=p.year,
                    stem_ten_god=ten_god(dm, p.stem),
                    branch_ten_god=main_qi_ten_god(dm, p.branch),
                )
                for p in build_sewun_list(data.target_year, self.settings.sewun_count)
            ]
            wolwun = [
                LuckPillarOut(
                    stem=p.stem, branch=p.branch, ganji=p.ganji, year=p.year, month=p.month,
                    stem_ten_god=ten_god(dm, p.stem),
                    branch_ten_god=main_qi_ten_god(dm, p.branch),
                )
                for p in build_wolwun_list(data.target_year)
            ]

        current = None
        if data.current_age is not None:
            found = find_daewun_at_age(list(result.daewun), data.current_age)
            current = CurrentDaewun(
                age=data.current_age,
                pillar=self._daewun_out(found, dm) if found else None,
                is_gyowungi=is_gyowungi(data.current_age, result.start_age, self.settings.gyowungi_range),
                half=daewun_half(data.current_age, found.start_age) if found else None,
            )

        return LuckCycles(
            direction=result.direction,
            start_age=result.start_age,
            start_years=result.start_years,
            start_months=result.start_months,
            sowun=[
                LuckPillarOut(stem=p.stem, branch=p.branch, ganji=p.ganji, age=p.age)
                for p in result.sowun
            ],
            daewun=daewun,
            sewun=sewun,
            wolwun=wolwun,
            current=current,
        )

    @staticmethod
    def _auxiliary_out(aux: AuxiliaryPillar) -> AuxiliaryPillarOut:
        rel = aux.relation
        return AuxiliaryPillarOut(
            stem=aux.pillar.stem,
            branch=aux.pillar.branch,
            ganji=aux.pillar.ganji,
            hanja=aux.pillar.hanja,
            stem_combination=rel.stem_combination,
            combination_element=rel.combination_element,
            stem_clash=rel.stem_clash,
            branch_clash=rel.branch_clash,
            branch_combination=rel.branch_combination,
            ten_god=rel.ten_god,
            gongmang=rel.gongmang,
        )


def analyze_chart(
    data: Union[ChartInput, dict],
    settings: Optional[EngineSettings] = None,
) -> ChartAnalysis:
    """ChartAnalyzer(settings).analyze(data) 단축 함수"""
    return ChartAnalyzer(settings).analyze(data)
