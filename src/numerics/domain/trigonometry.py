"""
Тригонометрия над углами

Прямые функции принимают угол любой единицы и всегда вычисляются в
радианах. Обратные функции принимают обычные числа и возвращают угол
в радианах.

Вычисления выполняются в плавающем типе представления угла
(floating_point_type): float32 остаётся float32, целые градусы
вычисляются в float, Decimal в float.
"""

from typing import Any, Callable

import numpy as np

from src.numerics.domain.angle import RADIANS, Angle
from src.numerics.math.numeric_traits import common_numeric_type, floating_point_type


def _radians_value(a: Angle) -> Any:
    ft = floating_point_type(a.numeric_type)
    return type(a).rebind(ft)(a).as_turn(RADIANS.of(ft))


def _forward(fn: Callable[[Any], Any], a: Angle) -> Any:
    x = _radians_value(a)
    return type(x)(fn(x))


def _inverse(fn: Callable[..., Any], ft: Any, *args: Any) -> Angle:
    return Angle[RADIANS.of(ft)](ft(fn(*(ft(x) for x in args))))


# =============================================================================
# ПРЯМЫЕ ФУНКЦИИ
# =============================================================================


def sin(a: Angle) -> Any:
    """
    Синус угла.

    Examples:
        >>> sin(degrees(30))
        0.49999999999999994
    """
    return _forward(np.sin, a)


def cos(a: Angle) -> Any:
    return _forward(np.cos, a)


def tan(a: Angle) -> Any:
    return _forward(np.tan, a)


def sinh(a: Angle) -> Any:
    return _forward(np.sinh, a)


def cosh(a: Angle) -> Any:
    return _forward(np.cosh, a)


def tanh(a: Angle) -> Any:
    return _forward(np.tanh, a)


# =============================================================================
# ОБРАТНЫЕ ФУНКЦИИ (результат: радианы)
# =============================================================================


def rad_asin(x: Any) -> Angle:
    return _inverse(np.arcsin, floating_point_type(type(x)), x)


def rad_acos(x: Any) -> Angle:
    return _inverse(np.arccos, floating_point_type(type(x)), x)


def rad_atan(x: Any) -> Angle:
    return _inverse(np.arctan, floating_point_type(type(x)), x)


def rad_atan2(y: Any, x: Any) -> Angle:
    """
    Угол вектора (x, y) в радианах, в (-π, π].

    Порядок аргументов как у math.atan2: сначала y.

    Examples:
        >>> rad_atan2(1.0, 0.0).value == np.pi / 2
        True
    """
    ft = floating_point_type(common_numeric_type(type(y), type(x)))
    return _inverse(np.arctan2, ft, y, x)


def rad_asinh(x: Any) -> Angle:
    return _inverse(np.arcsinh, floating_point_type(type(x)), x)


def rad_acosh(x: Any) -> Angle:
    return _inverse(np.arccosh, floating_point_type(type(x)), x)


def rad_atanh(x: Any) -> Angle:
    return _inverse(np.arctanh, floating_point_type(type(x)), x)
