"""
saju_core - 사주 격국/운 계산 코어
천간/지지 인덱스만 받아서 십성, 월령, 격국, 대운/세운/월운, 태원/태식/명궁을 계산한다.
"""
__version__ = "1.0.0"
