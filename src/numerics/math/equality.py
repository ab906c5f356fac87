"""
Approx Equality: сравнения с учётом толерантности

Модуль обеспечивает единственный способ нестрогого сравнения чисел в
библиотеке. Quantity, Rounded и Angle не реализуют собственных
approx-сравнений: они сводятся к обычным числам через протокол
NumericWrapper и сравниваются здесь.

- approx_equal(a, b): толерантность по умолчанию = бОльшая из двух
- approx_equal(a, b, tol): явная толерантность, b - tol <= a <= b + tol
- approx_0 / approx_1: близость к нулю / единице
- abs_approx_equal: сравнение модулей
- approx_equal_range: попарное сравнение последовательностей

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Границы включительные: a == b ± tol считается равным
2. Разность a - b не вычисляется (две проверки границ вместо |a - b|)
3. Более грубая толерантность всегда побеждает
4. Комплексные числа: вещественная и мнимая части сравниваются независимо
"""

from collections.abc import Iterable
from typing import Any

from src.numerics.math.numeric_traits import NumericWrapper, is_complex, tolerance


# =============================================================================
# ВСПОМОГАТЕЛЬНЫЕ ФУНКЦИИ
# =============================================================================


def _unwrap(x: Any) -> Any:
    if isinstance(x, NumericWrapper):
        return x._approx_value()
    return x


def _unwrap_pair(a: Any, b: Any) -> tuple[Any, Any]:
    if isinstance(a, NumericWrapper):
        return a._approx_operands(b)
    if isinstance(b, NumericWrapper):
        b_value, a_value = b._approx_operands(a)
        return a_value, b_value
    return a, b


def _is_complex_value(x: Any) -> bool:
    return is_complex(type(x))


def _within(a: Any, b: Any, tol: Any) -> bool:
    return (a >= (b - tol)) and (a <= (b + tol))


# =============================================================================
# СРАВНЕНИЯ
# =============================================================================


def approx_equal(a: Any, b: Any, tol: Any = None) -> bool:
    """
    Нестрогое равенство двух чисел (или декорированных чисел).

    Без tol используется бОльшая из толерантностей типов a и b, поэтому
    сравнение float32 с float64 не проваливается из-за более строгого
    epsilon float64.

    Args:
        a: Первое значение
        b: Второе значение
        tol: Абсолютная толерантность (optional)

    Returns:
        True если b - tol <= a <= b + tol

    Examples:
        >>> approx_equal(1.0, 1.0 + 1e-13)
        True
        >>> approx_equal(1.0, 1.5, 0.5)
        True
        >>> approx_equal(1.0, 1.5, 0.4)
        False
    """
    a, b = _unwrap_pair(a, b)

    if _is_complex_value(a) or _is_complex_value(b):
        return approx_equal(a.real, b.real, tol) and approx_equal(a.imag, b.imag, tol)

    if tol is not None:
        return _within(a, b, tol)

    tol_a = tolerance(type(a))
    tol_b = tolerance(type(b))
    if tol_a < tol_b:
        return _within(a, b, tol_b)
    return _within(b, a, tol_a)


def abs_approx_equal(a: Any, b: Any, tol: Any = None) -> bool:
    """Нестрогое равенство модулей: approx_equal(|a|, |b|)."""
    a, b = _unwrap_pair(a, b)
    return approx_equal(abs(a), abs(b), tol)


def approx_0(a: Any, tol: Any = None) -> bool:
    """
    Близко ли значение к нулю.

    Для комплексных чисел обе части должны быть близки к нулю.

    Args:
        a: Проверяемое значение
        tol: Абсолютная толерантность (default: tolerance(type(a)))

    Returns:
        True если -tol <= a <= tol
    """
    a = _unwrap(a)

    if _is_complex_value(a):
        return approx_0(a.real, tol) and approx_0(a.imag, tol)

    if tol is None:
        tol = tolerance(type(a))
    return _within(a, 0, tol)


def approx_1(a: Any, tol: Any = None) -> bool:
    """
    Близко ли значение к единице.

    Для комплексных чисел: вещественная часть близка к 1,
    мнимая к 0.

    Args:
        a: Проверяемое значение
        tol: Абсолютная толерантность (default: tolerance(type(a)))

    Returns:
        True если 1 - tol <= a <= 1 + tol
    """
    a = _unwrap(a)

    if _is_complex_value(a):
        return approx_1(a.real, tol) and approx_0(a.imag, tol)

    if tol is None:
        tol = tolerance(type(a))
    return _within(a, 1, tol)


def approx_equal_range(first: Iterable[Any], second: Iterable[Any], tol: Any) -> bool:
    """
    Попарное нестрогое сравнение двух последовательностей.

    Сравнение идёт по длине first; если second короче, результат
    определяется только по общей части (ответственность вызывающего).

    Args:
        first: Первая последовательность
        second: Вторая последовательность
        tol: Абсолютная толерантность для каждой пары

    Returns:
        True если |x - y| <= tol для всех пар
    """
    for x, y in zip(first, second):
        x, y = _unwrap_pair(x, y)
        if abs(x - y) > tol:
            return False
    return True
