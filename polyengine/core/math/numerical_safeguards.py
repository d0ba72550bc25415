"""
Numerical Safeguards — Safe Math Primitives для полиномиальной алгебры

Модуль обеспечивает численную устойчивость всех операций над термами:
- Epsilon-порог для коэффициентов (терм с |coeff| < EPS_COEFF считается нулём)
- Валидация коэффициентов (NaN/Inf запрещены) и показателей (int >= 0)
- Epsilon-сравнения float с учётом машинной точности
- Возведение в целую степень повторным возведением в квадрат

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. NaN/Inf никогда не попадают в коэффициенты (ValueError при попытке)
2. Отрицательный показатель никогда не попадает в терм (ValueError)
3. Float сравнения всегда учитывают машинную точность
4. Все операции детерминированы и воспроизводимы
"""

import math
from typing import Final

# =============================================================================
# EPSILON-ПАРАМЕТРЫ
# =============================================================================

# Порог элиминации терма: коэффициент с abs() < EPS_COEFF считается нулём
# и удаляется из Term Store (включая результат сокращения подобных)
EPS_COEFF: Final[float] = 1e-9

# Epsilon для сравнения float (относительная толерантность)
# Используется в is_close и Polynomial.is_close
EPS_FLOAT_COMPARE_REL: Final[float] = 1e-9

# Epsilon для сравнения float (абсолютная толерантность)
EPS_FLOAT_COMPARE_ABS: Final[float] = 1e-12


# =============================================================================
# ПРОВЕРКИ FLOAT
# =============================================================================


def is_valid_float(value: float) -> bool:
    """
    Проверка, является ли float валидным (не NaN, не Inf).

    Args:
        value: Проверяемое значение

    Returns:
        True если значение валидное (finite), False если NaN или Inf
    """
    return math.isfinite(value)


def is_negligible(value: float, eps: float = EPS_COEFF) -> bool:
    """
    Проверка, пренебрежимо ли мал коэффициент.

    Граница строгая: abs(value) == eps НЕ считается нулём.

    Args:
        value: Коэффициент терма
        eps: Порог элиминации (default: EPS_COEFF)

    Returns:
        True если abs(value) < eps

    Examples:
        >>> is_negligible(1e-10)
        True
        >>> is_negligible(1e-9)
        False
        >>> is_negligible(-3.0)
        False
    """
    if eps <= 0:
        raise ValueError(f"eps must be positive, got {eps}")

    return abs(value) < eps


def is_close(
    a: float,
    b: float,
    rel_tol: float = EPS_FLOAT_COMPARE_REL,
    abs_tol: float = EPS_FLOAT_COMPARE_ABS,
) -> bool:
    """
    Сравнение float с учётом машинной точности.

    Алгоритм:
        abs(a - b) <= max(rel_tol * max(abs(a), abs(b)), abs_tol)

    Args:
        a: Первое значение
        b: Второе значение
        rel_tol: Относительная толерантность (default: 1e-9)
        abs_tol: Абсолютная толерантность (default: 1e-12)

    Returns:
        True если значения близки с учётом толерантности

    Examples:
        >>> is_close(1.0, 1.0 + 1e-10)
        True
        >>> is_close(1.0, 1.1)
        False
    """
    return math.isclose(a, b, rel_tol=rel_tol, abs_tol=abs_tol)


# =============================================================================
# ВАЛИДАЦИЯ
# =============================================================================


def validate_coefficient(value: float, name: str = "coefficient") -> float:
    """
    Валидация коэффициента терма.

    Args:
        value: Проверяемое значение (int или float)
        name: Имя параметра (для сообщения об ошибке)

    Returns:
        value, приведённое к float

    Raises:
        ValueError: Если value не число или NaN/Inf
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{name} must be a real number, got {value!r}")

    result = float(value)
    if not is_valid_float(result):
        raise ValueError(f"{name} must be a valid float (not NaN/Inf), got {value}")

    return result


def validate_exponent(value: int, name: str = "exponent") -> int:
    """
    Валидация показателя степени.

    bool формально является int, но показателем не считается.

    Args:
        value: Проверяемое значение
        name: Имя параметра (для сообщения об ошибке)

    Returns:
        value без изменений

    Raises:
        ValueError: Если value не int или value < 0
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name} must be an integer, got {value!r}")

    if value < 0:
        raise ValueError(f"{name} must be non-negative, got {value}")

    return value


# =============================================================================
# ВОЗВЕДЕНИЕ В СТЕПЕНЬ
# =============================================================================


def int_power(base: float, exponent: int) -> float:
    """
    Возведение в неотрицательную целую степень (exponentiation by squaring).

    O(log exponent) умножений вместо O(exponent) у наивного цикла.
    int_power(x, 0) == 1.0 для любого x, включая 0.0.

    Args:
        base: Основание
        exponent: Показатель (int >= 0)

    Returns:
        base ** exponent

    Raises:
        ValueError: Если exponent отрицательный или не int

    Examples:
        >>> int_power(2.0, 10)
        1024.0
        >>> int_power(0.0, 0)
        1.0
        >>> int_power(-1.5, 3)
        -3.375
    """
    validate_exponent(exponent)

    result = 1.0
    factor = float(base)
    n = exponent

    while n > 0:
        if n & 1:
            result *= factor
        n >>= 1
        if n:
            factor *= factor

    return result
