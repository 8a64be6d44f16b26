"""
Numeric Safety Helpers
업스트림 API의 조회수 값을 안전하게 숫자로 변환
"""

import math
from decimal import Decimal, ROUND_HALF_UP, localcontext
from typing import Any

NAN = float("nan")


def coerce_view_count(value: Any) -> float:
    """
    조회수 값을 float로 변환

    - None -> 0.0 (필드 누락은 0회로 취급)
    - bool -> NaN
    - int/float -> float (float 범위 초과 정수는 inf)
    - 숫자 문자열 -> float
    - 그 외 -> NaN

    예외를 던지지 않는다.
    """
    if value is None:
        return 0.0
    if isinstance(value, bool):
        return NAN
    if isinstance(value, (int, float)):
        try:
            return float(value)
        except OverflowError:
            # float 범위를 넘는 정수
            return float("inf")
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return 0.0
        try:
            return float(text)
        except ValueError:
            return NAN
    return NAN


def is_finite(value: Any) -> bool:
    """유한한 실수인지 확인"""
    return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)


def round_half_up(value: float, digits: int = 0) -> float:
    """
    0.5를 항상 올림하는 반올림 (파이썬 round()는 banker's rounding)

    float의 이진 값을 그대로 반올림한다 (1.005 -> 1.0, JS toFixed와 동일).

    Args:
        value: 반올림할 값
        digits: 소수점 자릿수

    Returns:
        digits == 0 이면 int, 아니면 float
    """
    if not is_finite(value):
        return value
    decimal_value = Decimal(value)
    quantum = Decimal(1).scaleb(-digits)
    with localcontext() as ctx:
        # 큰 값 (1e30 이상)도 정수부 자릿수를 모두 담을 수 있도록 정밀도 확장
        ctx.prec = max(ctx.prec, decimal_value.adjusted() + digits + 2)
        rounded = decimal_value.quantize(quantum, rounding=ROUND_HALF_UP)
    return int(rounded) if digits == 0 else float(rounded)


def safe_ratio(numerator: float, denominator: float) -> float:
    """분모가 0 이하이거나 유한하지 않으면 0.0"""
    if not is_finite(denominator) or denominator <= 0:
        return 0.0
    if not is_finite(numerator):
        return 0.0
    return numerator / denominator
