# services package - chart_analyzer는 models.schemas를 import하므로 지연 로딩
from saju_core.services.gyeokguk import CalculationError, GyeokgukInvariantError


def analyze_chart(data, settings=None):
    from saju_core.services.chart_analyzer import analyze_chart as _analyze
    return _analyze(data, settings)
