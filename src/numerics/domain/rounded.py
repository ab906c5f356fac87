"""
Rounded: число с инвариантом округления

Обёртка хранит значение и политику округления (callable T → T) и
повторно применяет политику после КАЖДОЙ мутации: конструирование,
+=, -=, *=, /=, %=, increment/decrement, присваивание через .value.

Чтение значения никогда не округляет повторно: хранимое значение всегда
уже каноническое.

Бинарная арифметика (a + b, a * 2, ...) выполняется над развёрнутыми
значениями и возвращает ОБЫЧНОЕ число общего типа. Округление является
свойством мутации через обёртку, а не каждого выражения.

Политики:
- RoundToNearestInt: к ближайшему целому (ties-to-even), no-op для целых типов
- RoundToNearest(unit): к ближайшему кратному unit, x - remainder(x, unit)

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Хранимое значение == policy(сырое значение) после каждой мутации
2. Неположительный unit заменяется шагом по умолчанию (1 или epsilon типа)
   при конструировании политики и никогда не доходит до деления
3. Rounded нельзя вложить в Rounded и в другие обёртки
"""

import logging
import math
import operator
from decimal import ROUND_HALF_EVEN, Decimal
from fractions import Fraction
from typing import Any, ClassVar, Optional, TextIO

import numpy as np
from pydantic import BaseModel, model_validator

from src.numerics.math.numeric_traits import (
    NumericWrapper,
    common_numeric_type,
    is_complex,
    is_integral,
    is_number,
    is_wrapper,
    numeric_epsilon,
    specialize,
    type_name,
)

logger = logging.getLogger(__name__)


# =============================================================================
# ПОЛИТИКИ ОКРУГЛЕНИЯ
# =============================================================================


class RoundingMethod(BaseModel):
    """
    Базовая политика округления.

    Immutable модель (frozen=True): политика копируется вместе с обёрткой
    и никогда не разделяется между экземплярами через мутацию.
    """

    model_config = {"frozen": True}

    @classmethod
    def for_type(cls, numeric_type: Any) -> "RoundingMethod":
        """Политика по умолчанию для типа представления."""
        return cls()

    def __call__(self, x: Any) -> Any:
        raise NotImplementedError


class RoundToNearestInt(RoundingMethod):
    """
    Округление к ближайшему целому (ties-to-even, как nearbyint).

    Целые значения не изменяются; inf/nan проходят без изменений.

    Examples:
        >>> RoundToNearestInt()(2.5)
        2.0
        >>> RoundToNearestInt()(3.5)
        4.0
    """

    def __call__(self, x: Any) -> Any:
        if is_integral(type(x)):
            return x
        if isinstance(x, np.floating):
            return np.rint(x)
        if isinstance(x, float):
            return x if not math.isfinite(x) else type(x)(round(x))
        if isinstance(x, Decimal):
            return x.to_integral_value(rounding=ROUND_HALF_EVEN)
        return type(x)(round(x))


class RoundToNearest(RoundingMethod):
    """
    Округление к ближайшему кратному unit: x - remainder(x, unit).

    remainder: IEEE-остаток (частное округляется к ближайшему, ties-to-even).
    Неположительный unit заменяется на 1 для целых типов и на машинный
    epsilon для плавающих.

    Examples:
        >>> RoundToNearest(unit=0.25)(1.3)
        1.25
        >>> RoundToNearest(unit=10, numeric_type=int)(17)
        20
    """

    unit: Any = 0
    numeric_type: Any = float

    @model_validator(mode="before")
    @classmethod
    def substitute_non_positive_unit(cls, data: Any) -> Any:
        """Замена неположительного unit шагом по умолчанию."""
        if not isinstance(data, dict):
            return data

        numeric_type = data.get("numeric_type", float)
        if not is_number(numeric_type) or is_wrapper(numeric_type) or is_complex(numeric_type):
            raise ValueError(
                f"numeric_type must be a real primitive number type, got {type_name(numeric_type)}"
            )

        unit = numeric_type(data.get("unit", 0))
        if unit <= 0:
            default_unit = numeric_epsilon(numeric_type)
            logger.debug(
                "Non-positive rounding unit %r replaced with %r for %s",
                unit,
                default_unit,
                type_name(numeric_type),
            )
            unit = default_unit

        return {**data, "unit": unit, "numeric_type": numeric_type}

    @classmethod
    def for_type(cls, numeric_type: Any) -> "RoundToNearest":
        return cls(numeric_type=numeric_type)

    def __call__(self, x: Any) -> Any:
        if isinstance(x, (float, np.floating)):
            if not math.isfinite(x):
                return x
            return x - math.remainder(x, self.unit)
        # точные типы: частное округляется в Fraction (round → ties-to-even)
        steps = round(Fraction(x) / Fraction(self.unit))
        return self.unit * steps


# =============================================================================
# ROUNDED
# =============================================================================


class Rounded(NumericWrapper):
    """
    Число, которое всегда хранится округлённым политикой.

    Специализация: Rounded[T] (политика RoundToNearestInt) или
    Rounded[T, RoundToNearest]. Неспециализированный Rounded выводит тип
    представления из значения, а класс политики из переданной политики.

    Examples:
        >>> r = Rounded(2.4)
        >>> r.value
        2.0
        >>> r += 0.7
        >>> r.value
        3.0
        >>> r + 0.7
        3.7
    """

    numeric_type: ClassVar[Any] = None
    rounding_method: ClassVar[type] = RoundToNearestInt

    def __class_getitem__(cls, params: Any) -> type:
        if isinstance(params, tuple):
            return cls.rebind(*params)
        return cls.rebind(params)

    @classmethod
    def rebind(cls, numeric_type: Any, rounding_method: Optional[type] = None) -> type:
        if rounding_method is None:
            rounding_method = cls.rounding_method
        if not is_number(numeric_type) or is_wrapper(numeric_type) or is_complex(numeric_type):
            raise TypeError(
                f"Rounded representation must be a real primitive number type, "
                f"got {type_name(numeric_type)}"
            )
        if not (isinstance(rounding_method, type) and issubclass(rounding_method, RoundingMethod)):
            raise TypeError(f"rounding_method must be a RoundingMethod subclass, got {rounding_method!r}")

        return specialize(
            Rounded,
            f"{type_name(numeric_type)}, {rounding_method.__name__}",
            numeric_type=numeric_type,
            rounding_method=rounding_method,
        )

    @classmethod
    def common_wrapper(cls, other: type) -> Any:
        """
        Общий тип двух Rounded.

        Одинаковые политики → Rounded над общим типом представлений;
        разные политики не совмещаются → общий тип представлений
        (декорация отбрасывается).
        """
        rep = common_numeric_type(cls.numeric_type, other.numeric_type)
        if cls.rounding_method is other.rounding_method:
            return cls.rebind(rep, cls.rounding_method)
        return rep

    def __new__(cls, value: Any = None, policy: Optional[RoundingMethod] = None) -> "Rounded":
        if cls.numeric_type is None:
            if isinstance(value, Rounded):
                numeric_type = value.numeric_type
                rounding_method = type(policy) if policy is not None else value.rounding_method
            else:
                numeric_type = float if value is None else type(value)
                rounding_method = type(policy) if policy is not None else cls.rounding_method
            cls = cls.rebind(numeric_type, rounding_method)
        return super().__new__(cls)

    def __init__(self, value: Any = None, policy: Optional[RoundingMethod] = None) -> None:
        if isinstance(value, Rounded):
            if policy is None and type(value.policy) is self.rounding_method:
                policy = value.policy
            value = value.value

        if policy is None:
            policy = self.rounding_method.for_type(self.numeric_type)
        elif not isinstance(policy, self.rounding_method):
            raise TypeError(
                f"{type(self).__name__} expects a {self.rounding_method.__name__} policy, "
                f"got {type(policy).__name__}"
            )

        self._policy = policy
        self._v = self._corrected(self.numeric_type(0) if value is None else value)

    def _corrected(self, raw: Any) -> Any:
        result = self._policy(raw)
        if is_integral(self.numeric_type) and not is_integral(type(result)):
            # нецелый результат политики над целым представлением: к ближайшему целому
            result = RoundToNearestInt()(result)
        return self.numeric_type(result)

    # -------------------------------------------------------------------------
    # Доступ к значению
    # -------------------------------------------------------------------------

    @property
    def value(self) -> Any:
        """Хранимое (уже округлённое) значение."""
        return self._v

    @value.setter
    def value(self, raw: Any) -> None:
        self._v = self._corrected(_raw(raw))

    @property
    def policy(self) -> RoundingMethod:
        return self._policy

    def _approx_value(self) -> Any:
        return self._v

    # -------------------------------------------------------------------------
    # Мутирующие операции (с округлением)
    # -------------------------------------------------------------------------

    def __iadd__(self, other: Any) -> "Rounded":
        operand = self._operand(other)
        if operand is NotImplemented:
            return NotImplemented
        self._v = self._corrected(self._v + operand)
        return self

    def __isub__(self, other: Any) -> "Rounded":
        operand = self._operand(other)
        if operand is NotImplemented:
            return NotImplemented
        self._v = self._corrected(self._v - operand)
        return self

    def __imul__(self, other: Any) -> "Rounded":
        operand = self._operand(other)
        if operand is NotImplemented:
            return NotImplemented
        self._v = self._corrected(self._v * operand)
        return self

    def __itruediv__(self, other: Any) -> "Rounded":
        operand = self._operand(other)
        if operand is NotImplemented:
            return NotImplemented
        self._v = self._corrected(self._v / operand)
        return self

    def __imod__(self, other: Any) -> "Rounded":
        operand = self._operand(other)
        if operand is NotImplemented:
            return NotImplemented
        self._v = self._corrected(self._v % operand)
        return self

    def increment(self) -> "Rounded":
        """Аналог ++x: прибавить единицу и округлить."""
        self._v = self._corrected(self._v + 1)
        return self

    def decrement(self) -> "Rounded":
        """Аналог --x: вычесть единицу и округлить."""
        self._v = self._corrected(self._v - 1)
        return self

    # -------------------------------------------------------------------------
    # Бинарная арифметика (результат: обычное число)
    # -------------------------------------------------------------------------

    def _operand(self, other: Any) -> Any:
        """
        Развёрнутое значение операнда.

        Другие Rounded и обычные числа допускаются; обёртки других
        семейств отвергаются резолвером общего типа.
        """
        if is_wrapper(type(other)):
            common_numeric_type(type(self), type(other))
            return other.value
        if is_number(type(other)):
            return other
        return NotImplemented

    def __add__(self, other: Any) -> Any:
        operand = self._operand(other)
        return operand if operand is NotImplemented else self._v + operand

    def __radd__(self, other: Any) -> Any:
        operand = self._operand(other)
        return operand if operand is NotImplemented else operand + self._v

    def __sub__(self, other: Any) -> Any:
        operand = self._operand(other)
        return operand if operand is NotImplemented else self._v - operand

    def __rsub__(self, other: Any) -> Any:
        operand = self._operand(other)
        return operand if operand is NotImplemented else operand - self._v

    def __mul__(self, other: Any) -> Any:
        operand = self._operand(other)
        return operand if operand is NotImplemented else self._v * operand

    def __rmul__(self, other: Any) -> Any:
        operand = self._operand(other)
        return operand if operand is NotImplemented else operand * self._v

    def __truediv__(self, other: Any) -> Any:
        operand = self._operand(other)
        return operand if operand is NotImplemented else self._v / operand

    def __rtruediv__(self, other: Any) -> Any:
        operand = self._operand(other)
        return operand if operand is NotImplemented else operand / self._v

    def __mod__(self, other: Any) -> Any:
        operand = self._operand(other)
        return operand if operand is NotImplemented else self._v % operand

    def __rmod__(self, other: Any) -> Any:
        operand = self._operand(other)
        return operand if operand is NotImplemented else operand % self._v

    def __neg__(self) -> "Rounded":
        return type(self)(-self._v, self._policy)

    def __pos__(self) -> "Rounded":
        return type(self)(self._v, self._policy)

    def __abs__(self) -> "Rounded":
        return type(self)(abs(self._v), self._policy)

    # -------------------------------------------------------------------------
    # Сравнения
    # -------------------------------------------------------------------------

    def __eq__(self, other: Any) -> bool:
        operand = self._operand(other)
        return operand if operand is NotImplemented else bool(self._v == operand)

    def __ne__(self, other: Any) -> bool:
        operand = self._operand(other)
        return operand if operand is NotImplemented else bool(self._v != operand)

    def __lt__(self, other: Any) -> bool:
        operand = self._operand(other)
        return operand if operand is NotImplemented else bool(self._v < operand)

    def __le__(self, other: Any) -> bool:
        operand = self._operand(other)
        return operand if operand is NotImplemented else bool(self._v <= operand)

    def __gt__(self, other: Any) -> bool:
        operand = self._operand(other)
        return operand if operand is NotImplemented else bool(self._v > operand)

    def __ge__(self, other: Any) -> bool:
        operand = self._operand(other)
        return operand if operand is NotImplemented else bool(self._v >= operand)

    __hash__ = None  # type: ignore[assignment]

    # -------------------------------------------------------------------------
    # Преобразования и ввод/вывод
    # -------------------------------------------------------------------------

    def __float__(self) -> float:
        return float(self._v)

    def __int__(self) -> int:
        return int(self._v)

    def __index__(self) -> int:
        return operator.index(self._v)

    def __complex__(self) -> complex:
        return complex(self._v)

    def __bool__(self) -> bool:
        return bool(self._v)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._v!r})"

    def __str__(self) -> str:
        return str(self._v)

    def print(self, stream: TextIO) -> TextIO:
        """Запись хранимого значения в поток."""
        stream.write(str(self._v))
        return stream

    def read(self, stream: TextIO) -> TextIO:
        """
        Чтение одного токена из потока и присваивание с округлением.

        Raises:
            ValueError: Если токен не разбирается как numeric_type
        """
        token = _next_token(stream)
        if not token:
            raise ValueError(f"{type(self).__name__}.read: no value in stream")
        self.value = self.numeric_type(token)
        return stream


# =============================================================================
# ВСПОМОГАТЕЛЬНЫЕ ФУНКЦИИ
# =============================================================================


def _raw(x: Any) -> Any:
    return x.value if isinstance(x, Rounded) else x


def _next_token(stream: TextIO) -> str:
    chars = []
    while True:
        ch = stream.read(1)
        if not ch:
            break
        if ch.isspace():
            if chars:
                break
            continue
        chars.append(ch)
    return "".join(chars)


# =============================================================================
# ФАБРИКИ И ФУНКЦИИ
# =============================================================================


def make_rounded_to_nearest(x: Any, unit: Any) -> Rounded:
    """
    Rounded с политикой RoundToNearest(unit).

    Тип представления: общий тип x и unit.

    Examples:
        >>> make_rounded_to_nearest(7, 5).value
        5
        >>> make_rounded_to_nearest(1.3, 0.5).value
        1.5
    """
    if is_wrapper(type(x)) or is_wrapper(type(unit)):
        raise TypeError("make_rounded_to_nearest expects plain numbers")
    rep = common_numeric_type(type(x), type(unit))
    policy = RoundToNearest(unit=unit, numeric_type=rep)
    return Rounded[rep, RoundToNearest](x, policy)


def isfinite(x: Rounded) -> bool:
    return bool(math.isfinite(x.value))


def isinf(x: Rounded) -> bool:
    return bool(math.isinf(x.value))


def isnan(x: Rounded) -> bool:
    return bool(math.isnan(x.value))
