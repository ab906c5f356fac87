"""
Angle Distribution: случайные углы

Адаптер над распределением обычных чисел: каждое сгенерированное число
оборачивается в угол заданной специализации. Распределение значений
внедряется извне и должно поддерживать протокол ValueDistribution
(param / reset / min / max / __call__(urng[, param])).

Генератор случайных чисел (urng) любой объект с методом random() → [0, 1):
random.Random или numpy.random.Generator.

Интервалы оборота (turn_interval, half_turn_interval, ...) задают
типичные границы равномерных распределений углов.
"""

import logging
import math
from dataclasses import dataclass
from typing import Any, Optional, Protocol

from pydantic import BaseModel, model_validator

from src.numerics.domain.angle import DEGREES, GONS, RADIANS, Angle

logger = logging.getLogger(__name__)


# =============================================================================
# РАСПРЕДЕЛЕНИЕ ЗНАЧЕНИЙ
# =============================================================================


class RandomSource(Protocol):
    def random(self) -> float: ...


class ValueDistribution(Protocol):
    """Протокол распределения обычных чисел."""

    def param(self, params: Any = None) -> Any: ...

    def reset(self) -> None: ...

    def min(self) -> Any: ...

    def max(self) -> Any: ...

    def __call__(self, urng: RandomSource, params: Any = None) -> Any: ...


class UniformRealParams(BaseModel):
    """
    Параметры равномерного распределения на [a, b).

    Attributes:
        a: Нижняя граница (включительно)
        b: Верхняя граница
    """

    model_config = {"frozen": True}

    a: float = 0.0
    b: float = 1.0

    @model_validator(mode="after")
    def validate_bounds(self) -> "UniformRealParams":
        """Конечные границы, a <= b."""
        if not (math.isfinite(self.a) and math.isfinite(self.b)):
            raise ValueError(f"bounds must be finite, got a={self.a}, b={self.b}")
        if self.a > self.b:
            raise ValueError(f"a must be <= b, got a={self.a}, b={self.b}")
        return self


class UniformRealDistribution:
    """
    Равномерное распределение вещественных чисел на [a, b).

    Examples:
        >>> import random
        >>> d = UniformRealDistribution(UniformRealParams(a=10.0, b=20.0))
        >>> 10.0 <= d(random.Random(1)) < 20.0
        True
    """

    def __init__(self, params: Optional[UniformRealParams] = None) -> None:
        self._params = params if params is not None else UniformRealParams()

    def param(self, params: Optional[UniformRealParams] = None) -> UniformRealParams:
        """Текущие параметры; с аргументом: замена параметров."""
        if params is not None:
            logger.debug("Uniform distribution params changed: %s -> %s", self._params, params)
            self._params = params
        return self._params

    def reset(self) -> None:
        # состояния между вызовами нет
        pass

    def min(self) -> float:
        return self._params.a

    def max(self) -> float:
        return self._params.b

    def __call__(self, urng: RandomSource, params: Optional[UniformRealParams] = None) -> float:
        p = params if params is not None else self._params
        return p.a + (p.b - p.a) * urng.random()

    def __repr__(self) -> str:
        return f"UniformRealDistribution(a={self._params.a}, b={self._params.b})"


# =============================================================================
# РАСПРЕДЕЛЕНИЕ УГЛОВ
# =============================================================================


class AngleDistribution:
    """
    Адаптер: распределение значений → распределение углов.

    Args:
        angle_type: Специализация Angle для результатов
        distribution: Распределение значений в единицах angle_type
    """

    def __init__(self, angle_type: type, distribution: ValueDistribution) -> None:
        if not (isinstance(angle_type, type) and issubclass(angle_type, Angle) and angle_type.unit):
            raise TypeError(f"angle_type must be a specialized Angle, got {angle_type!r}")
        self._angle_type = angle_type
        self._distribution = distribution

    @property
    def angle_type(self) -> type:
        return self._angle_type

    def param(self, params: Any = None) -> Any:
        return self._distribution.param(params)

    def reset(self) -> None:
        self._distribution.reset()

    def min(self) -> Angle:
        return self._angle_type(self._distribution.min())

    def max(self) -> Angle:
        return self._angle_type(self._distribution.max())

    def __call__(self, urng: RandomSource, params: Any = None) -> Angle:
        return self._angle_type(self._distribution(urng, params))

    def __repr__(self) -> str:
        return f"AngleDistribution({self._angle_type.__name__}, {self._distribution!r})"


class UniformAngleDistribution(AngleDistribution):
    """
    Равномерное распределение углов на [min, max).

    Границы задаются числами в единицах angle_type или углами любой
    единицы (переводятся в единицы angle_type).

    Examples:
        >>> import random
        >>> from src.numerics.domain.angle import Degrees, Radians
        >>> d = UniformAngleDistribution(Degrees, 0, Radians(math.pi))
        >>> d.max()
        Angle[degrees, float](180.0)
    """

    def __init__(self, angle_type: type, min: Any = 0, max: Any = 1) -> None:
        params = UniformRealParams(a=_bound(angle_type, min), b=_bound(angle_type, max))
        super().__init__(angle_type, UniformRealDistribution(params))

    @classmethod
    def from_interval(cls, angle_type: type, interval: "AngleInterval") -> "UniformAngleDistribution":
        return cls(angle_type, interval.min, interval.max)


def _bound(angle_type: type, x: Any) -> float:
    if isinstance(x, Angle):
        return float(x.as_turn(angle_type.unit))
    return float(x)


def uniform_radian_distribution(min: Any = 0, max: Any = 1, numeric_type: Any = float) -> UniformAngleDistribution:
    return UniformAngleDistribution(Angle[RADIANS.of(numeric_type)], min, max)


def uniform_degree_distribution(min: Any = 0, max: Any = 1, numeric_type: Any = float) -> UniformAngleDistribution:
    return UniformAngleDistribution(Angle[DEGREES.of(numeric_type)], min, max)


def uniform_gon_distribution(min: Any = 0, max: Any = 1, numeric_type: Any = float) -> UniformAngleDistribution:
    return UniformAngleDistribution(Angle[GONS.of(numeric_type)], min, max)


# =============================================================================
# ИНТЕРВАЛЫ ОБОРОТА
# =============================================================================


@dataclass(frozen=True)
class AngleInterval:
    """Пара граничных углов [min, max]."""

    min: Angle
    max: Angle


def turn_interval(angle_type: type) -> AngleInterval:
    """[0, turn]"""
    return AngleInterval(angle_type(0), angle_type(angle_type.turn()))


def half_turn_interval(angle_type: type) -> AngleInterval:
    """[0, turn/2]"""
    return AngleInterval(angle_type(0), angle_type(angle_type.turn() / 2))


def quarter_turn_interval(angle_type: type) -> AngleInterval:
    """[0, turn/4]"""
    return AngleInterval(angle_type(0), angle_type(angle_type.turn() / 4))


def centered_turn_interval(angle_type: type) -> AngleInterval:
    """[-turn/2, turn/2]"""
    half = angle_type.turn() / 2
    return AngleInterval(angle_type(-half), angle_type(half))


def inclination_interval(angle_type: type) -> AngleInterval:
    """[-turn/4, turn/4]"""
    quarter = angle_type.turn() / 4
    return AngleInterval(angle_type(-quarter), angle_type(quarter))
