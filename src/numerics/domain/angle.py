"""
Angle: угол с единицей измерения

Угол хранит одно число в единицах своего Turn (величина полного оборота:
2π радиан, 360 градусов, 400 гон, ...). Перевод в другую единицу
выполняется при чтении и никогда не сохраняется:

    value * target.magnitude / source.magnitude

Умножение выполняется ДО деления, поэтому переводы между соизмеримыми
единицами (градусы ↔ минуты ↔ секунды, гоны ↔ centigons) точны в
целых и точных представлениях, а круговой перевод туда-обратно не
накапливает ошибку.

Правила арифметики:
- +, - только между углами одной единицы (иначе TypeError)
- *, / на скаляр; angle / angle → обычное отношение
- сравнения углов разных единиц переводят правый операнд в единицу левого
  в общем типе представлений обоих углов
- с обычными числами складывать нельзя, только масштабировать

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Тип представления: вещественный (int, float, Fraction, Decimal, numpy)
2. Целое представление допустимо только для единиц с целым оборотом
   (градусы, гоны, ...); радианы в целых не существуют
3. normalize() отображает значение в [0, turn)
"""

import math
from dataclasses import dataclass, replace
from decimal import Decimal
from fractions import Fraction
from typing import Any, ClassVar, Optional, TextIO

import numpy as np

from src.numerics.math.numeric_traits import (
    IncompatibleNumericTypes,
    NumericWrapper,
    common_numeric_type,
    floating_point_type,
    is_complex,
    is_integral,
    is_number,
    is_wrapper,
    specialize,
    type_name,
)


# =============================================================================
# TURN: ВЕЛИЧИНА ПОЛНОГО ОБОРОТА
# =============================================================================


@dataclass(frozen=True)
class Turn:
    """
    Единица измерения угла: сколько единиц в полном обороте.

    Attributes:
        name: Имя единицы ("degrees", "radians", ...)
        magnitude: Единиц в полном обороте (360, 2π, ...)
        suffix: Суффикс при выводе ("°", "rad", ...)
        numeric_type: Тип представления значений
    """

    name: str
    magnitude: Any
    suffix: str
    numeric_type: Any = float

    def of(self, numeric_type: Any) -> "Turn":
        """Та же единица над другим типом представления."""
        return replace(self, numeric_type=numeric_type)

    @property
    def value(self) -> Any:
        """Полный оборот в типе представления."""
        return self.numeric_type(self.magnitude)

    @property
    def is_integral_magnitude(self) -> bool:
        return float(self.magnitude).is_integer()

    def same_unit(self, other: "Turn") -> bool:
        return self.name == other.name


RADIANS = Turn("radians", 2 * math.pi, "rad")
DEGREES = Turn("degrees", 360, "°")
ARCMINS = Turn("arcmins", 21600, "'")
ARCSECS = Turn("arcsecs", 1296000, "''")
GONS = Turn("gons", 400, "gon")
GON_CS = Turn("gon_cs", 40000, "cs")
GON_CCS = Turn("gon_ccs", 4000000, "ccs")


def convert(value: Any, source: Turn, target: Turn) -> Any:
    """
    Перевод значения из единиц source в единицы target.

    Вычисление идёт в общем типе представлений обоих Turn; результат
    приводится к target.numeric_type. Целые представления переводятся
    через Fraction с усечением к нулю.

    Raises:
        IncompatibleNumericTypes: Если у представлений нет общего типа
    """
    if source.same_unit(target):
        return target.numeric_type(value)

    rep = common_numeric_type(source.numeric_type, target.numeric_type)
    if is_integral(rep):
        scaled = Fraction(value) * Fraction(target.magnitude) / Fraction(source.magnitude)
        return target.numeric_type(int(scaled))
    return target.numeric_type(rep(value) * rep(target.magnitude) / rep(source.magnitude))


# =============================================================================
# ANGLE
# =============================================================================


class Angle(NumericWrapper):
    """
    Угол в единицах своего Turn.

    Специализация: Angle[DEGREES], Angle[GONS.of(int)]. Неспециализированный
    Angle можно сконструировать только из другого угла (копия).

    Examples:
        >>> a = Angle[DEGREES](90)
        >>> a.as_turn(ARCMINS)
        5400.0
        >>> Angle[DEGREES](-90).normalize()
        Angle[degrees, float](270.0)
    """

    unit: ClassVar[Optional[Turn]] = None
    numeric_type: ClassVar[Any] = None

    def __class_getitem__(cls, turn: Turn) -> type:
        return cls.of_turn(turn)

    @classmethod
    def of_turn(cls, turn: Turn) -> type:
        if not isinstance(turn, Turn):
            raise TypeError(f"Angle must be parameterized by a Turn, got {turn!r}")

        rep = turn.numeric_type
        if not is_number(rep) or is_wrapper(rep) or is_complex(rep):
            raise TypeError(
                f"Angle representation must be a real primitive number type, got {type_name(rep)}"
            )
        if is_integral(rep) and not turn.is_integral_magnitude:
            raise TypeError(f"{turn.name} cannot be represented by integral type {type_name(rep)}")

        return specialize(Angle, f"{turn.name}, {type_name(rep)}", unit=turn, numeric_type=rep)

    @classmethod
    def rebind(cls, numeric_type: Any) -> type:
        return cls.of_turn(cls.unit.of(numeric_type))

    @classmethod
    def common_wrapper(cls, other: type) -> type:
        """Общий тип двух углов: только для одной единицы."""
        if not cls.unit.same_unit(other.unit):
            raise IncompatibleNumericTypes(
                f"angles in {cls.unit.name} and {other.unit.name} have no common type; "
                f"convert one of them explicitly"
            )
        return cls.rebind(common_numeric_type(cls.numeric_type, other.numeric_type))

    @classmethod
    def turn(cls) -> Any:
        """Полный оборот в единицах и типе этого угла."""
        return cls.unit.value

    def __new__(cls, value: Any = 0) -> "Angle":
        if cls.unit is None:
            if not isinstance(value, Angle):
                raise TypeError("Angle needs a unit: use Angle[turn](value)")
            cls = type(value)
        return super().__new__(cls)

    def __init__(self, value: Any = 0) -> None:
        if isinstance(value, Angle):
            self._v = value.as_turn(self.unit)
        elif is_wrapper(type(value)) or not is_number(type(value)):
            raise TypeError(f"{type(self).__name__} cannot be constructed from {type_name(type(value))}")
        else:
            self._v = self.numeric_type(value)

    # -------------------------------------------------------------------------
    # Доступ к значению и перевод единиц
    # -------------------------------------------------------------------------

    @property
    def value(self) -> Any:
        """Значение в собственных единицах."""
        return self._v

    def as_turn(self, target: Turn) -> Any:
        """Значение в единицах target (обычное число типа target.numeric_type)."""
        return convert(self._v, self.unit, target)

    def normalize(self) -> "Angle":
        """
        Отображение значения в [0, turn) на месте.

        Returns:
            self (для цепочек вызовов)
        """
        full = self.turn()
        r = self._v % full
        # Decimal: остаток со знаком делимого
        if r < 0:
            r += full
        # float: -tiny % turn == turn
        if r >= full:
            r -= full
        self._v = self.numeric_type(r)
        return self

    def _approx_value(self) -> Any:
        return self._v

    def _converted(self, other: "Angle") -> tuple[Any, Any]:
        """
        Пара значений в единице self и общем типе обоих представлений.

        Правый операнд не приводится к представлению левого: DegreesInt(90)
        и Degrees(90.5) сравниваются во float.
        """
        rep = common_numeric_type(self.numeric_type, other.numeric_type)
        return rep(self._v), other.as_turn(self.unit.of(rep))

    def _approx_operands(self, other: Any) -> tuple[Any, Any]:
        if isinstance(other, Angle):
            return self._converted(other)
        return super()._approx_operands(other)

    # -------------------------------------------------------------------------
    # Арифметика
    # -------------------------------------------------------------------------

    def _same_unit_type(self, other: Any) -> Optional[type]:
        """Общая специализация для +/-; None если операнд не угол."""
        if isinstance(other, Angle) or is_wrapper(type(other)):
            return common_numeric_type(type(self), type(other))
        return None

    @staticmethod
    def _is_scalar(other: Any) -> bool:
        return is_number(type(other)) and not is_wrapper(type(other))

    def __add__(self, other: Any) -> "Angle":
        result_type = self._same_unit_type(other)
        if result_type is None:
            return NotImplemented
        rep = result_type.numeric_type
        return result_type(rep(self._v) + rep(other._v))

    def __sub__(self, other: Any) -> "Angle":
        result_type = self._same_unit_type(other)
        if result_type is None:
            return NotImplemented
        rep = result_type.numeric_type
        return result_type(rep(self._v) - rep(other._v))

    def __mul__(self, other: Any) -> "Angle":
        if not self._is_scalar(other):
            return NotImplemented
        return type(self)(self._v * other)

    def __rmul__(self, other: Any) -> "Angle":
        if not self._is_scalar(other):
            return NotImplemented
        return type(self)(other * self._v)

    def __truediv__(self, other: Any) -> Any:
        if isinstance(other, Angle):
            lhs, rhs = self._converted(other)
            return lhs / rhs
        if not self._is_scalar(other):
            return NotImplemented
        return type(self)(self._v / other)

    def __iadd__(self, other: Any) -> "Angle":
        if self._same_unit_type(other) is None:
            return NotImplemented
        self._v = self.numeric_type(self._v + other._v)
        return self

    def __isub__(self, other: Any) -> "Angle":
        if self._same_unit_type(other) is None:
            return NotImplemented
        self._v = self.numeric_type(self._v - other._v)
        return self

    def __imul__(self, other: Any) -> "Angle":
        if not self._is_scalar(other):
            return NotImplemented
        self._v = self.numeric_type(self._v * other)
        return self

    def __itruediv__(self, other: Any) -> "Angle":
        if not self._is_scalar(other):
            return NotImplemented
        self._v = self.numeric_type(self._v / other)
        return self

    def increment(self) -> "Angle":
        """Прибавить одну единицу (аналог ++a)."""
        self._v = self.numeric_type(self._v + 1)
        return self

    def decrement(self) -> "Angle":
        """Вычесть одну единицу (аналог --a)."""
        self._v = self.numeric_type(self._v - 1)
        return self

    def __neg__(self) -> "Angle":
        if issubclass(self.numeric_type, np.unsignedinteger):
            raise TypeError(f"unary minus is undefined for unsigned {type(self).__name__}")
        return type(self)(-self._v)

    def __pos__(self) -> "Angle":
        return type(self)(self._v)

    def __abs__(self) -> "Angle":
        return type(self)(abs(self._v))

    # -------------------------------------------------------------------------
    # Округление (результат: угол той же единицы)
    # -------------------------------------------------------------------------

    def __floor__(self) -> "Angle":
        return type(self)(math.floor(self._v))

    def __ceil__(self) -> "Angle":
        return type(self)(math.ceil(self._v))

    def __trunc__(self) -> "Angle":
        return type(self)(math.trunc(self._v))

    def __round__(self, ndigits: Optional[int] = None) -> "Angle":
        return type(self)(round(self._v, ndigits))

    # -------------------------------------------------------------------------
    # Сравнения (правый операнд переводится в единицу левого)
    # -------------------------------------------------------------------------

    def _comparable(self, other: Any) -> Optional[tuple[Any, Any]]:
        if isinstance(other, Angle):
            return self._converted(other)
        if is_wrapper(type(other)):
            common_numeric_type(type(self), type(other))
        return None

    def __eq__(self, other: Any) -> bool:
        operands = self._comparable(other)
        return NotImplemented if operands is None else bool(operands[0] == operands[1])

    def __ne__(self, other: Any) -> bool:
        operands = self._comparable(other)
        return NotImplemented if operands is None else bool(operands[0] != operands[1])

    def __lt__(self, other: Any) -> bool:
        operands = self._comparable(other)
        return NotImplemented if operands is None else bool(operands[0] < operands[1])

    def __le__(self, other: Any) -> bool:
        operands = self._comparable(other)
        return NotImplemented if operands is None else bool(operands[0] <= operands[1])

    def __gt__(self, other: Any) -> bool:
        operands = self._comparable(other)
        return NotImplemented if operands is None else bool(operands[0] > operands[1])

    def __ge__(self, other: Any) -> bool:
        operands = self._comparable(other)
        return NotImplemented if operands is None else bool(operands[0] >= operands[1])

    __hash__ = None  # type: ignore[assignment]

    # -------------------------------------------------------------------------
    # Преобразования и вывод
    # -------------------------------------------------------------------------

    def __float__(self) -> float:
        return float(self._v)

    def __int__(self) -> int:
        return int(self._v)

    def __bool__(self) -> bool:
        return bool(self._v)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._v!r})"

    def __str__(self) -> str:
        return f"{self._v}{self.unit.suffix}"

    def print(self, stream: TextIO) -> TextIO:
        """Запись значения с суффиксом единицы (90°, 1.5rad, 100gon)."""
        stream.write(str(self))
        return stream


# =============================================================================
# СПЕЦИАЛИЗАЦИИ
# =============================================================================

Radians = Angle[RADIANS]
Degrees = Angle[DEGREES]
ArcMinutes = Angle[ARCMINS]
ArcSeconds = Angle[ARCSECS]
Gons = Angle[GONS]
GonCs = Angle[GON_CS]
GonCcs = Angle[GON_CCS]

DegreesInt = Angle[DEGREES.of(int)]
GonsInt = Angle[GONS.of(int)]


# =============================================================================
# ПЕРЕВОД ЕДИНИЦ
# =============================================================================


def _target_turn(turn: Turn, a: Angle, numeric_type: Any) -> Turn:
    rep = a.numeric_type if numeric_type is None else numeric_type
    if is_integral(rep) and not turn.is_integral_magnitude:
        rep = floating_point_type(rep)
    return turn.of(rep)


def angle_cast(turn: Turn, a: Angle) -> Any:
    """
    Значение угла a в единицах turn (обычное число).

    Examples:
        >>> angle_cast(DEGREES, Radians(math.pi))
        180.0
    """
    return a.as_turn(turn)


def radians_cast(a: Angle, numeric_type: Any = None) -> Any:
    return a.as_turn(_target_turn(RADIANS, a, numeric_type))


def degrees_cast(a: Angle, numeric_type: Any = None) -> Any:
    return a.as_turn(_target_turn(DEGREES, a, numeric_type))


def arcmins_cast(a: Angle, numeric_type: Any = None) -> Any:
    return a.as_turn(_target_turn(ARCMINS, a, numeric_type))


def arcsecs_cast(a: Angle, numeric_type: Any = None) -> Any:
    return a.as_turn(_target_turn(ARCSECS, a, numeric_type))


def gons_cast(a: Angle, numeric_type: Any = None) -> Any:
    return a.as_turn(_target_turn(GONS, a, numeric_type))


def gon_cs_cast(a: Angle, numeric_type: Any = None) -> Any:
    return a.as_turn(_target_turn(GON_CS, a, numeric_type))


def gon_ccs_cast(a: Angle, numeric_type: Any = None) -> Any:
    return a.as_turn(_target_turn(GON_CCS, a, numeric_type))


# =============================================================================
# ИМЕНОВАННЫЕ КОНСТРУКТОРЫ
# =============================================================================


def _make(turn: Turn, x: Any) -> Angle:
    """
    Угол в единицах turn из числа или из другого угла.

    Тип представления берётся у аргумента; целые типы для единиц с
    нецелым оборотом (радианы) продвигаются до плавающего типа.
    """
    if isinstance(x, Angle):
        rep = x.numeric_type
    elif is_number(type(x)) and not is_wrapper(type(x)):
        rep = type(x)
    else:
        raise TypeError(f"cannot make an angle from {type_name(type(x))}")

    if is_integral(rep) and not turn.is_integral_magnitude:
        rep = floating_point_type(rep)
    return Angle[turn.of(rep)](x)


def radians(x: Any) -> Angle:
    """
    Угол в радианах.

    Examples:
        >>> radians(1.5)
        Angle[radians, float](1.5)
        >>> radians(Degrees(180)).value == math.pi
        True
    """
    return _make(RADIANS, x)


def degrees(x: Any) -> Angle:
    """Угол в градусах (тип представления сохраняется: degrees(90) целый)."""
    return _make(DEGREES, x)


def arcmins(x: Any) -> Angle:
    return _make(ARCMINS, x)


def arcsecs(x: Any) -> Angle:
    return _make(ARCSECS, x)


def gons(x: Any) -> Angle:
    return _make(GONS, x)


def gon_cs(x: Any) -> Angle:
    return _make(GON_CS, x)


def gon_ccs(x: Any) -> Angle:
    return _make(GON_CCS, x)


# фабрики make_* принимают и числа, и углы другой единицы
make_radians = radians
make_degrees = degrees
make_gons = gons


# =============================================================================
# ФУНКЦИИ НАД УГЛАМИ
# =============================================================================


def _fmod(x: Any, y: Any) -> Any:
    """Остаток со знаком делимого (усечённое деление)."""
    if isinstance(x, Decimal):
        return x % y
    if isinstance(x, (float, np.floating)) or isinstance(y, (float, np.floating)):
        return math.fmod(x, y)
    r = abs(x) % abs(y)
    return -r if x < 0 else r


def _remainder(x: Any, y: Any) -> Any:
    """IEEE-остаток: частное округляется к ближайшему (ties-to-even)."""
    if isinstance(x, Decimal):
        return x.remainder_near(y)
    if isinstance(x, (float, np.floating)) or isinstance(y, (float, np.floating)):
        return math.remainder(x, y)
    return x - y * round(Fraction(x) / Fraction(y))


def fmod(numer: Angle, denom: Angle) -> Angle:
    """fmod в единицах numer (denom переводится, остаток в общем типе)."""
    return type(numer)(_fmod(*numer._converted(denom)))


def remainder(numer: Angle, denom: Angle) -> Angle:
    """IEEE remainder в единицах numer (denom переводится, остаток в общем типе)."""
    return type(numer)(_remainder(*numer._converted(denom)))


def nearbyint(a: Angle) -> Angle:
    """Округление значения к ближайшему целому (ties-to-even)."""
    v = a.value
    if isinstance(v, np.generic):
        return type(a)(np.rint(v))
    return type(a)(round(v))


def mod_turn(a: Angle) -> Angle:
    """Копия угла, отображённая в [0, turn)."""
    return type(a)(a).normalize()


def turn_remainder(a: Angle) -> Angle:
    """
    Дополнение угла до полного оборота: turn - mod_turn(a), в [0, turn).

    Examples:
        >>> turn_remainder(Degrees(90))
        Angle[degrees, float](270.0)
    """
    return type(a)(a.turn() - a.value).normalize()


def turn_multiple(a: Angle) -> Any:
    """Доля полного оборота: a / turn (обычное число)."""
    return a.value / a.turn()
