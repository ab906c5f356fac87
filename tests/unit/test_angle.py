"""
Тесты для Angle

Проверяет:
1. Специализацию и конструирование
2. Перевод единиц (точный для соизмеримых единиц, approx для радиан)
3. normalize и функции оборота
4. Арифметику одной единицы и масштабирование
5. Сравнения углов разных единиц
6. Округление, fmod/remainder/nearbyint
7. Именованные конструкторы, casts и вывод
"""

import io
import math
from decimal import Decimal
from fractions import Fraction

import numpy as np
import pytest

from src.numerics.domain.angle import (
    ARCMINS,
    ARCSECS,
    DEGREES,
    GON_CCS,
    GONS,
    RADIANS,
    Angle,
    ArcMinutes,
    ArcSeconds,
    Degrees,
    DegreesInt,
    GonCcs,
    GonCs,
    Gons,
    GonsInt,
    Radians,
    Turn,
    angle_cast,
    arcmins,
    arcmins_cast,
    arcsecs_cast,
    degrees,
    degrees_cast,
    fmod,
    gon_ccs_cast,
    gon_cs,
    gon_cs_cast,
    gons,
    gons_cast,
    make_degrees,
    make_radians,
    mod_turn,
    nearbyint,
    radians,
    radians_cast,
    remainder,
    turn_multiple,
    turn_remainder,
)
from src.numerics.domain.quantity import Quantity
from src.numerics.math.equality import approx_equal
from src.numerics.math.numeric_traits import IncompatibleNumericTypes

# =============================================================================
# TURN И СПЕЦИАЛИЗАЦИЯ
# =============================================================================


class TestTurn:
    """Тесты Turn"""

    def test_magnitudes(self) -> None:
        """Величины полного оборота"""
        assert DEGREES.magnitude == 360
        assert ARCMINS.magnitude == 21600
        assert ARCSECS.magnitude == 1296000
        assert GONS.magnitude == 400
        assert GON_CCS.magnitude == 4000000
        assert RADIANS.magnitude == pytest.approx(2 * math.pi)

    def test_of_rebinds_representation(self) -> None:
        """of() меняет только тип представления"""
        t = DEGREES.of(int)
        assert t.numeric_type is int
        assert t.same_unit(DEGREES)
        assert t != DEGREES

    def test_value_in_representation(self) -> None:
        """value: полный оборот в типе представления"""
        assert DEGREES.of(int).value == 360
        assert isinstance(DEGREES.of(np.float32).value, np.float32)

    def test_turn_accessor(self) -> None:
        """turn() у класса и экземпляра"""
        assert Degrees.turn() == 360.0
        assert Radians.turn() == pytest.approx(2 * math.pi)
        assert isinstance(DegreesInt.turn(), int)
        assert Gons(5).turn() == 400.0


class TestAngleSpecialization:
    """Тесты специализации Angle"""

    def test_named_specializations(self) -> None:
        """Удобные специализации совпадают с Angle[turn]"""
        assert Degrees is Angle[DEGREES]
        assert DegreesInt is Angle[DEGREES.of(int)]
        assert GonsInt is Angle[GONS.of(int)]
        assert Degrees.numeric_type is float

    def test_radians_cannot_be_integral(self) -> None:
        """Радианы в целом представлении не существуют"""
        with pytest.raises(TypeError, match="cannot be represented by integral type"):
            Angle[RADIANS.of(int)]

    def test_complex_representation_rejected(self) -> None:
        """Комплексное представление отвергается"""
        with pytest.raises(TypeError, match="real primitive number type"):
            Angle[DEGREES.of(complex)]

    def test_non_turn_parameter_rejected(self) -> None:
        """Параметр должен быть Turn"""
        with pytest.raises(TypeError, match="parameterized by a Turn"):
            Angle["degrees"]

    def test_custom_turn(self) -> None:
        """Пользовательская единица (обороты)"""
        revolutions = Turn("revolutions", 1, "rev")
        a = Angle[revolutions](0.25)
        assert a.as_turn(DEGREES) == 90.0


# =============================================================================
# КОНСТРУИРОВАНИЕ
# =============================================================================


class TestAngleConstruction:
    """Тесты конструирования"""

    def test_from_number(self) -> None:
        """Число в собственной единице"""
        a = Degrees(90)
        assert a.value == 90.0
        assert isinstance(a.value, float)

    def test_from_other_unit_converts(self) -> None:
        """Угол другой единицы переводится"""
        assert Degrees(Gons(100)).value == 90.0
        assert GonsInt(DegreesInt(180)).value == 200

    def test_unspecialized_requires_angle(self) -> None:
        """Angle без единицы нельзя построить из числа"""
        with pytest.raises(TypeError, match="needs a unit"):
            Angle(5)

    def test_unspecialized_copy(self) -> None:
        """Angle(angle) копирует специализацию"""
        copy = Angle(Gons(5))
        assert type(copy) is Gons
        assert copy.value == 5.0

    def test_non_number_rejected(self) -> None:
        """Строки и другие обёртки отвергаются"""
        with pytest.raises(TypeError, match="cannot be constructed"):
            Degrees("5")
        with pytest.raises(TypeError, match="cannot be constructed"):
            Degrees(Quantity.finite(1))


# =============================================================================
# ПЕРЕВОД ЕДИНИЦ
# =============================================================================


class TestAngleConversion:
    """Тесты перевода единиц"""

    def test_degrees_to_arcmins(self) -> None:
        """Градусы в минуты"""
        assert Degrees(90).as_turn(ARCMINS) == 5400.0

    def test_integral_conversion_is_exact(self) -> None:
        """Целые представления переводятся точно"""
        minutes = DegreesInt(90).as_turn(ARCMINS.of(int))
        assert minutes == 5400
        assert isinstance(minutes, int)

    def test_integral_conversion_truncates(self) -> None:
        """Нецелый результат в целом представлении усекается к нулю"""
        assert Angle[ARCMINS.of(int)](59).as_turn(DEGREES.of(int)) == 0
        assert Angle[ARCMINS.of(int)](-59).as_turn(DEGREES.of(int)) == 0

    @pytest.mark.parametrize("x", [0, 1, 37, 359, -720])
    def test_commensurable_round_trip_int(self, x: int) -> None:
        """градусы → секунды → градусы без потерь"""
        seconds = Angle[ARCSECS.of(int)](DegreesInt(x))
        assert DegreesInt(seconds).value == x

    @pytest.mark.parametrize("x", [0.0, 12.5, 33.25, -7.75])
    def test_commensurable_round_trip_float(self, x: float) -> None:
        """гоны → centi-centigons → гоны без потерь"""
        assert Gons(GonCcs(Gons(x))).value == x

    def test_decimal_and_fraction_exact(self) -> None:
        """Точные представления"""
        a = Angle[DEGREES.of(Decimal)](Decimal("1.5"))
        assert a.as_turn(ARCMINS.of(Decimal)) == Decimal(90)
        b = Angle[DEGREES.of(Fraction)](Fraction(1, 3))
        assert b.as_turn(ARCSECS.of(Fraction)) == Fraction(1200)

    def test_radians_approximate(self) -> None:
        """degrees(180) ≈ π rad"""
        assert approx_equal(degrees(180).as_turn(RADIANS), math.pi)
        assert approx_equal(Degrees(Radians(Degrees(33.3))).value, 33.3)

    def test_decimal_to_float_incompatible(self) -> None:
        """Decimal и float не имеют общего типа"""
        with pytest.raises(IncompatibleNumericTypes):
            Angle[DEGREES.of(Decimal)](Decimal(1)).as_turn(RADIANS)


# =============================================================================
# NORMALIZE И ОБОРОТ
# =============================================================================


class TestAngleNormalize:
    """Тесты normalize"""

    def test_full_turn_maps_to_zero(self) -> None:
        """degrees(360).normalize() == degrees(0)"""
        assert degrees(360).normalize() == degrees(0)

    def test_negative_maps_up(self) -> None:
        """degrees(-90).normalize() == degrees(270)"""
        assert degrees(-90).normalize() == degrees(270)

    @pytest.mark.parametrize("x,expected", [(720.5, 0.5), (-450.0, 270.0), (359.0, 359.0), (0.0, 0.0)])
    def test_float(self, x: float, expected: float) -> None:
        """Значения за пределами оборота"""
        assert Degrees(x).normalize().value == pytest.approx(expected)

    def test_tiny_negative_float(self) -> None:
        """-tiny не отображается в turn"""
        result = Degrees(-1e-20).normalize().value
        assert 0.0 <= result < 360.0

    def test_decimal_negative(self) -> None:
        """Decimal: остаток со знаком делимого исправляется"""
        a = Angle[DEGREES.of(Decimal)](Decimal(-90)).normalize()
        assert a.value == Decimal(270)

    def test_mutates_in_place(self) -> None:
        """normalize изменяет угол и возвращает его"""
        a = Degrees(370)
        assert a.normalize() is a
        assert a.value == 10.0


class TestTurnFunctions:
    """Тесты mod_turn / turn_remainder / turn_multiple"""

    def test_mod_turn_copies(self) -> None:
        """mod_turn не изменяет аргумент"""
        a = Degrees(-90)
        result = mod_turn(a)
        assert result.value == 270.0
        assert a.value == -90.0

    @pytest.mark.parametrize("x,expected", [(90, 270), (-90, 90), (0, 0), (360, 0)])
    def test_turn_remainder(self, x: int, expected: int) -> None:
        """Дополнение до полного оборота"""
        assert turn_remainder(DegreesInt(x)).value == expected

    def test_turn_multiple(self) -> None:
        """Доля полного оборота"""
        assert turn_multiple(Degrees(720)) == 2.0
        assert turn_multiple(Radians(math.pi)) == pytest.approx(0.5)
        assert turn_multiple(Gons(100)) == 0.25


# =============================================================================
# АРИФМЕТИКА
# =============================================================================


class TestAngleArithmetic:
    """Тесты арифметики"""

    def test_same_unit_addition(self) -> None:
        """Сложение и вычитание одной единицы"""
        assert (Degrees(10) + Degrees(20)).value == 30.0
        assert (Degrees(10) - Degrees(20)).value == -10.0

    def test_common_representation(self) -> None:
        """Одна единица, разные представления → общий тип"""
        result = DegreesInt(10) + Degrees(0.5)
        assert type(result) is Degrees
        assert result.value == 10.5

    def test_different_units_rejected(self) -> None:
        """+/- между разными единицами: TypeError"""
        with pytest.raises(TypeError, match="no common type"):
            Degrees(10) + Gons(10)
        with pytest.raises(IncompatibleNumericTypes):
            Degrees(10) - Radians(1)

    def test_bare_number_rejected(self) -> None:
        """С обычными числами не складывается"""
        with pytest.raises(TypeError):
            Degrees(10) + 5
        with pytest.raises(TypeError):
            5 - Degrees(10)

    def test_scaling(self) -> None:
        """Умножение и деление на скаляр"""
        assert (Degrees(10) * 2).value == 20.0
        assert (3 * Degrees(10)).value == 30.0
        assert (Degrees(10) / 4).value == 2.5
        assert type(DegreesInt(10) * 3) is DegreesInt

    def test_angle_ratio(self) -> None:
        """angle / angle → обычное отношение"""
        assert Degrees(90) / Degrees(45) == 2.0
        assert Degrees(90) / Gons(100) == pytest.approx(1.0)
        assert DegreesInt(90) / Radians(1.0) == pytest.approx(90 / math.degrees(1.0))
        assert DegreesInt(1) / ArcMinutes(30.0) == pytest.approx(2.0)

    def test_mixed_precision_sum_widens(self) -> None:
        """float + float16 той же единицы → float64, без потери точности"""
        result = Degrees(0.1234567891) + Angle[DEGREES.of(np.float16)](np.float16(1))
        assert result.numeric_type is np.float64
        assert result.value == pytest.approx(1.1234567891, abs=1e-12)

    def test_in_place(self) -> None:
        """Составное присваивание"""
        a = Degrees(10)
        alias = a
        a += Degrees(5)
        a *= 2
        a -= DegreesInt(10)
        a /= 4
        assert alias is a
        assert a.value == 5.0

    def test_in_place_different_unit_rejected(self) -> None:
        """+= между разными единицами"""
        a = Degrees(10)
        with pytest.raises(IncompatibleNumericTypes):
            a += Gons(1)

    def test_increment_decrement(self) -> None:
        """Шаг на одну единицу"""
        a = DegreesInt(10)
        a.increment().increment()
        assert a.value == 12
        a.decrement()
        assert a.value == 11

    def test_unary(self) -> None:
        """Унарные операции"""
        assert (-Degrees(10)).value == -10.0
        assert (+Degrees(10)).value == 10.0
        assert abs(Degrees(-10)).value == 10.0

    def test_unsigned_negation_rejected(self) -> None:
        """Унарный минус беззнакового представления"""
        with pytest.raises(TypeError, match="unsigned"):
            -Angle[DEGREES.of(np.uint16)](10)


# =============================================================================
# СРАВНЕНИЯ
# =============================================================================


class TestAngleComparison:
    """Тесты сравнений"""

    def test_same_unit(self) -> None:
        """Одна единица"""
        assert Degrees(10) < Degrees(20)
        assert Degrees(10) == DegreesInt(10)
        assert Degrees(20) >= Degrees(20)

    def test_right_operand_converted(self) -> None:
        """Правый операнд переводится в единицу левого"""
        assert Degrees(90) == Gons(100)
        assert Gons(100) == Degrees(90)
        assert Degrees(90) < Radians(2.0)
        assert Radians(2.0) > Degrees(90)
        assert ArcMinutes(60) == Degrees(1)
        assert Degrees(1) != ArcSeconds(3601)

    def test_mixed_representations_symmetric(self) -> None:
        """Целый и плавающий углы сравниваются в общем типе, симметрично"""
        assert DegreesInt(90) != Degrees(90.5)
        assert Degrees(90.5) != DegreesInt(90)
        assert DegreesInt(90) < Degrees(90.5)
        assert Degrees(90.5) > DegreesInt(90)
        assert not (DegreesInt(90) >= Degrees(90.5))
        assert GonsInt(100) < Degrees(90.25)
        assert Degrees(90.25) > GonsInt(100)

    def test_mixed_representations_approx(self) -> None:
        """approx_equal не усекает плавающий правый операнд"""
        assert not approx_equal(DegreesInt(90), Degrees(90.5))
        assert approx_equal(DegreesInt(90), Degrees(90.0))

    def test_bare_number_not_equal(self) -> None:
        """С обычным числом угол не равен"""
        assert Degrees(1) != 1
        with pytest.raises(TypeError):
            Degrees(1) < 1

    def test_unrelated_wrapper_rejected(self) -> None:
        """Angle и Quantity несовместимы"""
        with pytest.raises(IncompatibleNumericTypes):
            Degrees(1) == Quantity.finite(1)

    def test_unhashable(self) -> None:
        """Изменяемый угол не хэшируется"""
        with pytest.raises(TypeError):
            hash(Degrees(1))


# =============================================================================
# ОКРУГЛЕНИЕ
# =============================================================================


class TestAngleRounding:
    """Тесты floor/ceil/trunc/round и fmod/remainder/nearbyint"""

    def test_floor_ceil_trunc_round(self) -> None:
        """Результат: угол той же специализации"""
        assert math.floor(Degrees(10.7)) == Degrees(10)
        assert math.ceil(Degrees(10.2)) == Degrees(11)
        assert math.trunc(Degrees(-10.7)) == Degrees(-10)
        assert round(Degrees(10.5)) == Degrees(10)
        assert type(math.floor(Gons(1.5))) is Gons

    def test_fmod(self) -> None:
        """Остаток со знаком делимого"""
        assert fmod(Degrees(370), Degrees(360)).value == 10.0
        assert fmod(Degrees(-370), Degrees(360)).value == -10.0
        assert fmod(DegreesInt(-370), DegreesInt(360)).value == -10
        assert fmod(Degrees(190), Gons(200)).value == pytest.approx(10.0)

    def test_remainder(self) -> None:
        """IEEE-остаток"""
        assert remainder(Degrees(190), Degrees(360)).value == -170.0
        assert remainder(DegreesInt(190), DegreesInt(360)).value == -170
        assert remainder(Degrees(100), Degrees(360)).value == 100.0

    def test_fmod_mixed_representations(self) -> None:
        """Делитель не усекается до целого представления делимого"""
        assert fmod(DegreesInt(10), Degrees(3.5)).value == 3
        assert remainder(DegreesInt(10), Degrees(4.5)).value == 1

    def test_nearbyint(self) -> None:
        """Ближайшее целое, половины к чётному"""
        assert nearbyint(Degrees(2.5)).value == 2.0
        assert nearbyint(Degrees(2.6)).value == 3.0
        result = nearbyint(Angle[DEGREES.of(np.float32)](np.float32(3.5)))
        assert result.value == np.float32(4.0)


# =============================================================================
# CASTS И КОНСТРУКТОРЫ
# =============================================================================


class TestAngleCasts:
    """Тесты casts (результат: обычное число)"""

    def test_angle_cast(self) -> None:
        """angle_cast(turn, a)"""
        assert angle_cast(GONS, Degrees(180)) == 200.0
        assert angle_cast(DEGREES, Radians(math.pi)) == pytest.approx(180.0)

    def test_unit_casts(self) -> None:
        """Именованные casts"""
        a = Degrees(90)
        assert degrees_cast(a) == 90.0
        assert radians_cast(a) == pytest.approx(math.pi / 2)
        assert arcmins_cast(a) == 5400.0
        assert arcsecs_cast(a) == 324000.0
        assert gons_cast(a) == 100.0
        assert gon_cs_cast(a) == 10000.0
        assert gon_ccs_cast(a) == 1000000.0

    def test_cast_keeps_integral_representation(self) -> None:
        """Целые представления сохраняются для целых оборотов"""
        minutes = arcmins_cast(DegreesInt(2))
        assert minutes == 120
        assert isinstance(minutes, int)

    def test_radians_cast_of_integral_angle(self) -> None:
        """Радианы из целых градусов: плавающий результат"""
        result = radians_cast(DegreesInt(180))
        assert isinstance(result, float)
        assert result == pytest.approx(math.pi)

    def test_explicit_numeric_type(self) -> None:
        """Явный тип результата"""
        result = degrees_cast(Radians(math.pi), np.float32)
        assert isinstance(result, np.float32)


class TestNamedConstructors:
    """Тесты именованных конструкторов"""

    def test_representation_follows_argument(self) -> None:
        """Тип представления берётся у аргумента"""
        assert type(degrees(90)) is DegreesInt
        assert type(degrees(90.0)) is Degrees
        assert type(gons(np.float32(1))) is Angle[GONS.of(np.float32)]

    def test_radians_promote_integers(self) -> None:
        """radians(int) → плавающее представление"""
        assert type(radians(1)) is Radians
        assert type(radians(np.int32(1))) is Angle[RADIANS.of(np.float64)]

    def test_from_angle(self) -> None:
        """Конструирование из угла другой единицы"""
        assert gons(Degrees(90)).value == 100.0
        assert make_degrees(Radians(math.pi)).value == pytest.approx(180.0)
        assert make_radians(Degrees(180)).value == pytest.approx(math.pi)

    def test_other_units(self) -> None:
        """Минуты и centigons"""
        assert arcmins(30) == Degrees(0.5)
        assert type(gon_cs(1.0)) is GonCs

    def test_invalid_argument(self) -> None:
        """Нечисловой аргумент"""
        with pytest.raises(TypeError, match="cannot make an angle"):
            degrees("90")


# =============================================================================
# ВЫВОД
# =============================================================================


class TestAnglePrint:
    """Тесты вывода с суффиксами единиц"""

    @pytest.mark.parametrize(
        "angle,expected",
        [
            (Degrees(90), "90.0°"),
            (DegreesInt(90), "90°"),
            (Radians(1.5), "1.5rad"),
            (Gons(100), "100.0gon"),
            (ArcMinutes(30), "30.0'"),
            (ArcSeconds(5), "5.0''"),
            (GonCs(1), "1.0cs"),
            (GonCcs(1), "1.0ccs"),
        ],
    )
    def test_print(self, angle: Angle, expected: str) -> None:
        """Значение с суффиксом"""
        stream = io.StringIO()
        angle.print(stream)
        assert stream.getvalue() == expected

    def test_repr(self) -> None:
        """repr показывает единицу и представление"""
        assert repr(Degrees(90)) == "Angle[degrees, float](90.0)"
        assert repr(GonsInt(3)) == "Angle[gons, int](3)"

    def test_float_conversion(self) -> None:
        """float() и int() значения в собственной единице"""
        assert float(DegreesInt(90)) == 90.0
        assert int(Degrees(90.7)) == 90
