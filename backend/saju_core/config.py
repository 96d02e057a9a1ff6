"""
Saju Core Engine Settings
━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
격국/운 계산 기본값:
- 대운/세운 생성 개수
- 교운기 판정 범위
- 종격 판정 기준
- 격국 판별 불변식 위반 처리
━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
"""
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional


class EngineSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="SAJU_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
    # 운(運) 생성
    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
    daewun_count: int = 8          # 대운 기둥 개수
    sewun_count: int = 10          # 세운 목록 길이 (기준 연도부터)
    include_sowun: bool = True     # 대운 시작 전 소운 포함

    # 교운기: 대운 경계 전후 몇 년까지 교운기로 볼지
    gyowungi_range: int = 1

    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
    # 격국 판별
    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
    # 종격: 7개 자리(연/월/시간 + 네 지지 본기) 중 한 세력이 차지해야 하는 최소 개수
    following_min_positions: int = 4

    # 7단계(잡격 폴백) 도달 시 예외 발생 여부 (False면 ERROR 로그 + 플래그)
    strict_invariants: bool = False


_settings: Optional[EngineSettings] = None


def get_settings() -> EngineSettings:
    global _settings
    if _settings is None:
        _settings = EngineSettings()
    return _settings


def reset_settings() -> None:
    """환경변수 변경 후 다시 읽도록 캐시 초기화 (테스트용)"""
    global _settings
    _settings = None
