"""
Quantity: расширенная насыщающаяся величина

Неотрицательная целая величина, которая может быть ровно бесконечной
(например, ёмкость неограниченного буфера). Арифметика обобщает
расширенные вещественные числа, но неопределённость 0 × ∞ разрешается
в пользу нуля (соглашение теории меры, а не IEEE).

Состояния: Finite(v), v >= 0, либо Infinite.

ТАБЛИЦА ОПЕРАЦИЙ:
    +   : Finite(a+b); если хотя бы один Infinite → Infinite
    -   : монус (усечённое вычитание), Finite(max(0, a-b));
          Finite - Infinite → 0; Infinite - Finite → Infinite;
          Infinite - Infinite → 0 (!)
    *   : Finite(a*b); 0 * Infinite → 0; n * Infinite → Infinite (n > 0)
    <,==: Infinite больше любого Finite; два Infinite равны

ВНИМАНИЕ: Infinite - Infinite == Finite(0). Это сознательное соглашение,
которое молча отбрасывает математическую неопределённость ∞ - ∞.
Вычитание не обратимо сложением: (a - b) + b != a при a < b.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Хранимое значение либо конечное >= 0, либо Infinite
2. Тип представления: целочисленный (int или целые типы numpy)
3. Переполнение конечного представления НЕ превращается в Infinite
   (поведение определяется типом представления)
"""

import math
import operator
from typing import Any, ClassVar, Optional, TextIO

from src.numerics.math.numeric_traits import (
    NumericWrapper,
    common_numeric_type,
    is_integral,
    is_number,
    is_wrapper,
    specialize,
    type_name,
)


# =============================================================================
# QUANTITY
# =============================================================================


class Quantity(NumericWrapper):
    """
    Неотрицательная величина с точной бесконечностью.

    Специализация по типу представления: Quantity[np.int32], Quantity[int].
    Неспециализированный Quantity выводит тип представления из аргумента.

    Examples:
        >>> Quantity.finite(0) * Quantity.infinity() == 0
        True
        >>> Quantity.finite(1) * Quantity.infinity() == Quantity.infinity()
        True
        >>> Quantity.finite(3) - Quantity.finite(5)
        Quantity[int](0)
    """

    numeric_type: ClassVar[Any] = int

    def __class_getitem__(cls, numeric_type: Any) -> type:
        return cls.rebind(numeric_type)

    @classmethod
    def rebind(cls, numeric_type: Any) -> type:
        if is_wrapper(numeric_type) or not is_integral(numeric_type):
            raise TypeError(
                f"Quantity representation must be an integral type, got {type_name(numeric_type)}"
            )
        return specialize(Quantity, type_name(numeric_type), numeric_type=numeric_type)

    def __new__(cls, value: Any = 0) -> "Quantity":
        if cls is Quantity:
            if isinstance(value, Quantity):
                cls = type(value)
            else:
                cls = Quantity.rebind(type(value))
        return super().__new__(cls)

    def __init__(self, value: Any = 0) -> None:
        if isinstance(value, Quantity):
            self._v = None if value._v is None else self.numeric_type(value._v)
            return

        raw = operator.index(value)
        if raw < 0:
            raise ValueError(f"Quantity must be non-negative, got {raw}")
        self._v: Optional[Any] = self.numeric_type(raw)

    # -------------------------------------------------------------------------
    # Фабрики
    # -------------------------------------------------------------------------

    @classmethod
    def finite(cls, value: Any) -> "Quantity":
        """Конечная величина; тип представления выводится из value."""
        return cls(value)

    @classmethod
    def infinity(cls) -> "Quantity":
        """Бесконечная величина (Quantity[int] у неспециализированного класса)."""
        q = cls(0)
        q._v = None
        return q

    @classmethod
    def _from_state(cls, state: Optional[Any]) -> "Quantity":
        q = cls(0)
        q._v = None if state is None else cls.numeric_type(state)
        return q

    # -------------------------------------------------------------------------
    # Доступ к значению
    # -------------------------------------------------------------------------

    @property
    def is_infinite(self) -> bool:
        return self._v is None

    @property
    def value(self) -> Any:
        """
        Конечное значение в типе представления.

        Raises:
            OverflowError: Если величина бесконечна
        """
        if self._v is None:
            raise OverflowError("infinite Quantity has no finite value")
        return self._v

    def _approx_value(self) -> Any:
        return math.inf if self._v is None else self._v

    # -------------------------------------------------------------------------
    # Приведение операндов
    # -------------------------------------------------------------------------

    def _coerce(self, other: Any) -> Optional[tuple[type, "Quantity", "Quantity"]]:
        """
        Приведение пары к общей специализации Quantity.

        Другие обёртки отвергаются резолвером общего типа
        (IncompatibleNumericTypes); нецелые числа → None (NotImplemented).
        """
        if isinstance(other, Quantity) or is_wrapper(type(other)):
            result_type = common_numeric_type(type(self), type(other))
        elif is_integral(type(other)):
            result_type = Quantity.rebind(common_numeric_type(type(self), type(other)))
        else:
            return None

        lhs = self if type(self) is result_type else result_type(self)
        rhs = other if type(other) is result_type else result_type(other)
        return result_type, lhs, rhs

    def _comparison_operands(self, other: Any) -> Optional[tuple[Any, Any]]:
        """
        Пара сравнимых значений (Infinite → math.inf).

        Нечисловые операнды → None (NotImplemented); обёртки других
        семейств отвергаются резолвером общего типа.
        """
        if not is_number(type(other)):
            return None
        common_numeric_type(type(self), type(other))
        other_value = other._approx_value() if isinstance(other, Quantity) else other
        return self._approx_value(), other_value

    # -------------------------------------------------------------------------
    # Арифметика
    # -------------------------------------------------------------------------

    def __add__(self, other: Any) -> "Quantity":
        coerced = self._coerce(other)
        if coerced is None:
            return NotImplemented
        result_type, lhs, rhs = coerced
        return result_type._from_state(_add(lhs._v, rhs._v))

    def __radd__(self, other: Any) -> "Quantity":
        return self.__add__(other)

    def __sub__(self, other: Any) -> "Quantity":
        coerced = self._coerce(other)
        if coerced is None:
            return NotImplemented
        result_type, lhs, rhs = coerced
        return result_type._from_state(_monus(lhs._v, rhs._v, result_type.numeric_type(0)))

    def __rsub__(self, other: Any) -> "Quantity":
        coerced = self._coerce(other)
        if coerced is None:
            return NotImplemented
        result_type, lhs, rhs = coerced
        return result_type._from_state(_monus(rhs._v, lhs._v, result_type.numeric_type(0)))

    def __mul__(self, other: Any) -> "Quantity":
        coerced = self._coerce(other)
        if coerced is None:
            return NotImplemented
        result_type, lhs, rhs = coerced
        return result_type._from_state(_mul(lhs._v, rhs._v, result_type.numeric_type(0)))

    def __rmul__(self, other: Any) -> "Quantity":
        return self.__mul__(other)

    def __iadd__(self, other: Any) -> "Quantity":
        return self._assign(self.__add__(other))

    def __isub__(self, other: Any) -> "Quantity":
        return self._assign(self.__sub__(other))

    def __imul__(self, other: Any) -> "Quantity":
        return self._assign(self.__mul__(other))

    def _assign(self, result: Any) -> Any:
        # тип представления self сохраняется, как у присваивания в целое
        if result is NotImplemented:
            return result
        self._v = None if result._v is None else self.numeric_type(result._v)
        return self

    # -------------------------------------------------------------------------
    # Сравнения
    # -------------------------------------------------------------------------

    def __eq__(self, other: Any) -> bool:
        operands = self._comparison_operands(other)
        if operands is None:
            return NotImplemented
        return bool(operands[0] == operands[1])

    def __ne__(self, other: Any) -> bool:
        operands = self._comparison_operands(other)
        if operands is None:
            return NotImplemented
        return bool(operands[0] != operands[1])

    def __lt__(self, other: Any) -> bool:
        operands = self._comparison_operands(other)
        if operands is None:
            return NotImplemented
        return bool(operands[0] < operands[1])

    def __le__(self, other: Any) -> bool:
        operands = self._comparison_operands(other)
        if operands is None:
            return NotImplemented
        return bool(operands[0] <= operands[1])

    def __gt__(self, other: Any) -> bool:
        operands = self._comparison_operands(other)
        if operands is None:
            return NotImplemented
        return bool(operands[0] > operands[1])

    def __ge__(self, other: Any) -> bool:
        operands = self._comparison_operands(other)
        if operands is None:
            return NotImplemented
        return bool(operands[0] >= operands[1])

    __hash__ = None  # type: ignore[assignment]

    # -------------------------------------------------------------------------
    # Преобразования и вывод
    # -------------------------------------------------------------------------

    def __int__(self) -> int:
        if self._v is None:
            raise OverflowError("cannot convert infinite Quantity to integer")
        return int(self._v)

    def __float__(self) -> float:
        return math.inf if self._v is None else float(self._v)

    def __bool__(self) -> bool:
        return self._v is None or bool(self._v != 0)

    def __repr__(self) -> str:
        if self._v is None:
            return f"{type(self).__name__}.infinity()"
        return f"{type(self).__name__}({self._v!r})"

    def __str__(self) -> str:
        return "inf" if self._v is None else str(self._v)

    def print(self, stream: TextIO) -> TextIO:
        """Запись значения ("inf" для бесконечной величины) в поток."""
        stream.write(str(self))
        return stream


# =============================================================================
# ОПЕРАЦИИ НАД СОСТОЯНИЯМИ (None = Infinite)
# =============================================================================


def _add(a: Optional[Any], b: Optional[Any]) -> Optional[Any]:
    if a is None or b is None:
        return None
    return a + b


def _monus(a: Optional[Any], b: Optional[Any], zero: Any) -> Optional[Any]:
    if b is None:
        # Finite - Infinite и Infinite - Infinite
        return zero
    if a is None:
        return None
    # сравнение до вычитания: беззнаковые представления не должны заворачиваться
    return a - b if a > b else zero


def _mul(a: Optional[Any], b: Optional[Any], zero: Any) -> Optional[Any]:
    # ноль поглощает бесконечность
    if (a is not None and a == 0) or (b is not None and b == 0):
        return zero
    if a is None or b is None:
        return None
    return a * b


# =============================================================================
# ФУНКЦИИ
# =============================================================================


def isinf(q: Quantity) -> bool:
    """Бесконечна ли величина."""
    return q.is_infinite


def isfinite(q: Quantity) -> bool:
    """Конечна ли величина."""
    return not q.is_infinite
