"""
Numeric Traits: классификация числовых типов и разрешение общего типа

Модуль задаёт "типовой уровень" всей библиотеки:
- предикаты is_number / is_integral / is_floating_point / is_complex
- tolerance(T): epsilon по умолчанию для approx-сравнений
- common_numeric_type(T1, T2): тип, в котором выполняется бинарная операция
- NumericWrapper: общий базовый класс декорированных чисел
  (Quantity, Rounded, Angle) и механизм их специализации Family[T]

Все функции работают с ТИПАМИ, а не со значениями. Результат
common_numeric_type мемоизируется: решение принимается один раз на пару
типов, дальше это просто поиск в кэше.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. common_numeric_type(T, T) == T
2. common_numeric_type(T1, T2) == common_numeric_type(T2, T1)
3. Обёртка + обычное число → общий тип представлений (декорация отбрасывается)
4. Две обёртки одного семейства → обёртка того же семейства над общим типом
5. Несовместимые типы → IncompatibleNumericTypes, никогда не тихая коэрсия
6. Общий тип не уже ни одного из операндов: int + uint8 → int64, float + float32 → float64
"""

import logging
import sys
from decimal import Decimal, getcontext
from fractions import Fraction
from functools import lru_cache
from typing import Any, ClassVar, Final

import numpy as np

logger = logging.getLogger(__name__)


# =============================================================================
# TOLERANCE-ПАРАМЕТРЫ
# =============================================================================

# Абсолютные толерантности для approx-сравнений по умолчанию.
# Подобраны так, чтобы пережить несколько арифметических операций
# над значениями порядка единиц-сотен.
TOLERANCE_FLOAT16: Final[float] = 1e-2
TOLERANCE_FLOAT32: Final[float] = 1e-4
TOLERANCE_FLOAT64: Final[float] = 1e-12
TOLERANCE_LONGDOUBLE: Final[float] = 1e-15

# Для Decimal толерантность зависит от текущей точности контекста:
# tolerance = 10 ** -(prec - DECIMAL_TOLERANCE_DIGITS)
DECIMAL_TOLERANCE_DIGITS: Final[int] = 3

_NUMPY_TOLERANCES: Final[dict] = {
    np.dtype(np.float16): TOLERANCE_FLOAT16,
    np.dtype(np.float32): TOLERANCE_FLOAT32,
    np.dtype(np.float64): TOLERANCE_FLOAT64,
    np.dtype(np.longdouble): TOLERANCE_LONGDOUBLE,
}


# =============================================================================
# EXCEPTIONS
# =============================================================================


class IncompatibleNumericTypes(TypeError):
    """
    Для пары типов не существует общего числового типа.

    Возникает при попытке сравнить или скомбинировать обёртки разных
    семейств (например, Quantity и Angle) или примитивы без общего
    представления (Decimal и float). Это ошибка программиста, а не
    runtime-состояние: результат никогда не подменяется молча.
    """

    pass


# =============================================================================
# БАЗОВЫЙ КЛАСС ОБЁРТОК
# =============================================================================

_SPECIALIZATIONS: dict = {}


class NumericWrapper:
    """
    Базовый класс декорированных числовых типов.

    Каждое прямое наследование (Quantity, Rounded, Angle) открывает
    отдельное "семейство". Специализации семейства (Quantity[np.int32],
    Angle[DEGREES]) создаются через specialize() и кэшируются, поэтому
    Family[T] is Family[T].

    Атрибуты класса:
        numeric_type: Тип представления (None у неспециализированной базы)
    """

    numeric_type: ClassVar[Any] = None
    _family: ClassVar[type]

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        if NumericWrapper in cls.__bases__:
            cls._family = cls

    @classmethod
    def family(cls) -> type:
        """Корневой класс семейства (Quantity, Rounded, Angle)."""
        return cls._family

    @classmethod
    def rebind(cls, numeric_type: Any) -> type:
        """Та же обёртка над другим типом представления."""
        raise NotImplementedError

    @classmethod
    def common_wrapper(cls, other: type) -> Any:
        """
        Общий тип двух обёрток одного семейства.

        По умолчанию: то же семейство над общим типом представлений.
        Семейства с дополнительными параметрами (политика, единица)
        переопределяют этот метод.
        """
        return cls.rebind(common_numeric_type(cls.numeric_type, other.numeric_type))

    # -------------------------------------------------------------------------
    # Протокол для approx-сравнений (используется модулем equality)
    # -------------------------------------------------------------------------

    def _approx_value(self) -> Any:
        """Обычное число, представляющее обёртку в approx-сравнениях."""
        raise NotImplementedError

    def _approx_operands(self, other: Any) -> tuple[Any, Any]:
        """Пара обычных чисел (self, other), приведённых к сравнимому виду."""
        if isinstance(other, NumericWrapper):
            common_numeric_type(type(self), type(other))
            return self._approx_value(), other._approx_value()
        return self._approx_value(), other


def specialize(family: type, label: str, **attrs: Any) -> type:
    """
    Создание (или получение из кэша) специализации семейства обёрток.

    Args:
        family: Корневой класс семейства
        label: Человекочитаемые параметры для имени класса
        **attrs: Атрибуты класса специализации (должны быть hashable)

    Returns:
        Подкласс family с заданными атрибутами, например Quantity[int32]
    """
    key = (family, *sorted(attrs.items(), key=lambda item: item[0]))
    cls = _SPECIALIZATIONS.get(key)
    if cls is None:
        name = f"{family.__name__}[{label}]"
        namespace = {"__module__": family.__module__, "__qualname__": name, **attrs}
        cls = _SPECIALIZATIONS.setdefault(key, type(family)(name, (family,), namespace))
        logger.debug("Created numeric specialization %s", name)
    return cls


def type_name(t: Any) -> str:
    """Короткое имя типа для сообщений об ошибках и имён специализаций."""
    return getattr(t, "__name__", repr(t))


def is_wrapper(t: Any) -> bool:
    """Является ли t классом декорированного числа."""
    return isinstance(t, type) and issubclass(t, NumericWrapper)


# =============================================================================
# ПРЕДИКАТЫ
# =============================================================================


def is_number(t: Any) -> bool:
    """
    Является ли тип числом.

    Числа: int, float, complex, Fraction, Decimal, числовые скаляры numpy,
    а также все обёртки (множество замкнуто относительно оборачивания).
    bool числом не считается.

    Examples:
        >>> is_number(float)
        True
        >>> is_number(bool)
        False
        >>> is_number(str)
        False
    """
    if not isinstance(t, type):
        return False
    if issubclass(t, (bool, np.bool_)):
        return False
    if issubclass(t, NumericWrapper):
        return True
    return issubclass(t, (int, float, complex, Fraction, Decimal, np.number))


def is_integral(t: Any) -> bool:
    """Целочисленный ли тип (для обёрток: тип представления)."""
    if is_wrapper(t):
        return is_integral(t.numeric_type)
    return is_number(t) and issubclass(t, (int, np.integer))


def is_floating_point(t: Any) -> bool:
    """
    Вещественный ли тип с плавающей точкой (для обёрток: тип представления).

    Decimal считается плавающим (десятичная плавающая точка),
    Fraction: нет (точный рациональный тип).
    """
    if is_wrapper(t):
        return is_floating_point(t.numeric_type)
    return is_number(t) and issubclass(t, (float, np.floating, Decimal))


def is_complex(t: Any) -> bool:
    """Комплексный ли тип (для обёрток: тип представления)."""
    if is_wrapper(t):
        return is_complex(t.numeric_type)
    return is_number(t) and issubclass(t, (complex, np.complexfloating))


# =============================================================================
# TOLERANCE И EPSILON
# =============================================================================


def tolerance(t: Any) -> Any:
    """
    Толерантность по умолчанию для approx-сравнений значений типа t.

    Для обёрток берётся толерантность типа представления. Для целых и
    Fraction толерантность равна нулю (точные типы). Для комплексных:
    толерантность их вещественной части.

    Args:
        t: Числовой тип

    Returns:
        Неотрицательная толерантность (значение вещественного типа)

    Raises:
        TypeError: Если t не является числовым типом

    Examples:
        >>> tolerance(float)
        1e-12
        >>> tolerance(int)
        0
    """
    if is_wrapper(t):
        return tolerance(t.numeric_type)
    if not is_number(t):
        raise TypeError(f"tolerance is not defined for {type_name(t)}")

    if issubclass(t, (np.floating, np.complexfloating)):
        real_dtype = np.finfo(t).dtype
        return real_dtype.type(_NUMPY_TOLERANCES[real_dtype])
    if issubclass(t, (float, complex)):
        return TOLERANCE_FLOAT64
    if issubclass(t, Decimal):
        return Decimal(10) ** -(getcontext().prec - DECIMAL_TOLERANCE_DIGITS)
    # int, numpy integer, Fraction: точные типы
    return t(0)


def numeric_epsilon(t: Any) -> Any:
    """
    Наименьший различимый шаг представления (около единицы).

    Целые и Fraction: 1. Плавающие: машинный epsilon типа.
    Используется как единица округления по умолчанию.
    """
    if is_wrapper(t):
        return numeric_epsilon(t.numeric_type)
    if issubclass(t, np.floating):
        return np.finfo(t).eps
    if issubclass(t, float):
        return t(sys.float_info.epsilon)
    if issubclass(t, Decimal):
        return Decimal(10) ** -(getcontext().prec - 1)
    return t(1)


def floating_point_type(t: Any) -> Any:
    """
    Плавающий тип, в котором вычисляются трансцендентные функции от t.

    numpy-типы с плавающей точкой сохраняются, целые numpy → float64,
    остальные вещественные → float, комплексные сохраняются.
    """
    if is_wrapper(t):
        return floating_point_type(t.numeric_type)
    if issubclass(t, (np.floating, np.complexfloating)):
        return t
    if issubclass(t, np.integer):
        return np.float64
    if issubclass(t, complex):
        return complex
    return float


# =============================================================================
# COMMON NUMERIC TYPE
# =============================================================================

_PYTHON_KINDS: Final[tuple] = (int, float, complex, Fraction, Decimal)

# Таблица правил для примитивов Python (ключ: неупорядоченная пара видов).
# Отсутствие пары в таблице означает отсутствие общего типа.
_PRIMITIVE_RULES: Final[dict] = {
    frozenset({int}): int,
    frozenset({float}): float,
    frozenset({complex}): complex,
    frozenset({Fraction}): Fraction,
    frozenset({Decimal}): Decimal,
    frozenset({int, float}): float,
    frozenset({int, complex}): complex,
    frozenset({int, Fraction}): Fraction,
    frozenset({int, Decimal}): Decimal,
    frozenset({float, complex}): complex,
    frozenset({float, Fraction}): float,
    frozenset({complex, Fraction}): complex,
}


def _python_kind(t: type) -> type:
    for kind in _PYTHON_KINDS:
        if issubclass(t, kind):
            return kind
    raise IncompatibleNumericTypes(f"{type_name(t)} is not a primitive numeric type")


# dtype, в который без потерь переводятся значения примитивов Python
_PYTHON_DTYPES: Final[dict] = {
    int: np.dtype(np.int64),
    float: np.dtype(np.float64),
    complex: np.dtype(np.complex128),
}


def _common_numpy_python(np_type: type, py_kind: type) -> type:
    """
    Общий тип numpy-скаляра и примитива Python.

    Примитив продвигается по своему dtype (int → int64, float → float64,
    complex → complex128), поэтому результат не уже ни одного из операндов:
    common(int, uint8) == int64, common(float, float32) == float64.
    """
    dtype = _PYTHON_DTYPES.get(py_kind)
    if dtype is not None:
        return np.promote_types(dtype, np_type).type
    if py_kind is Fraction:
        if issubclass(np_type, np.inexact):
            return np.promote_types(np.float64, np_type).type
        return Fraction
    raise IncompatibleNumericTypes(
        f"no common numeric type for {type_name(np_type)} and {type_name(py_kind)}"
    )


def _common_primitive(t1: type, t2: type) -> type:
    if t1 is t2:
        return t1

    np1 = issubclass(t1, np.generic)
    np2 = issubclass(t2, np.generic)
    if np1 and np2:
        return np.promote_types(t1, t2).type
    if np1:
        return _common_numpy_python(t1, _python_kind(t2))
    if np2:
        return _common_numpy_python(t2, _python_kind(t1))

    k1 = _python_kind(t1)
    k2 = _python_kind(t2)
    if k1 is k2:
        # подклассы одного вида (IntEnum и т.п.) сводятся к базовому виду
        return k1

    rule = _PRIMITIVE_RULES.get(frozenset({k1, k2}))
    if rule is None:
        raise IncompatibleNumericTypes(
            f"no common numeric type for {type_name(t1)} and {type_name(t2)}"
        )
    return rule


@lru_cache(maxsize=None)
def common_numeric_type(t1: Any, t2: Any) -> Any:
    """
    Тип, в котором выполняется бинарная операция над значениями t1 и t2.

    Правила:
    - два примитива → по таблице правил / правилам продвижения numpy
    - обёртка + примитив → common_numeric_type(представление, примитив)
    - две обёртки одного семейства → то же семейство над общим типом
      (решает само семейство через common_wrapper)
    - обёртки разных семейств → IncompatibleNumericTypes

    Args:
        t1: Первый числовой тип
        t2: Второй числовой тип

    Returns:
        Общий тип (примитив или специализация обёртки)

    Raises:
        IncompatibleNumericTypes: Если общего типа не существует

    Examples:
        >>> common_numeric_type(int, float)
        <class 'float'>
        >>> common_numeric_type(np.float32, np.float64)
        <class 'numpy.float64'>
    """
    if not is_number(t1) or not is_number(t2):
        raise IncompatibleNumericTypes(
            f"{type_name(t1)} and {type_name(t2)} are not both numeric types"
        )

    w1 = is_wrapper(t1)
    w2 = is_wrapper(t2)
    if w1 and w2:
        if t1.family() is not t2.family():
            raise IncompatibleNumericTypes(
                f"{type_name(t1)} and {type_name(t2)} belong to unrelated numeric families"
            )
        return t1.common_wrapper(t2)
    if w1:
        return common_numeric_type(t1.numeric_type, t2)
    if w2:
        return common_numeric_type(t1, t2.numeric_type)
    return _common_primitive(t1, t2)
