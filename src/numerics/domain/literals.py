"""
Короткие конструкторы углов с плавающим представлением.

    >>> deg(90)
    Angle[degrees, float](90.0)
    >>> pi_rad(0.5).value == math.pi / 2
    True
"""

import math
from typing import Any

from src.numerics.domain.angle import (
    Angle,
    ArcMinutes,
    ArcSeconds,
    Degrees,
    GonCcs,
    GonCs,
    Gons,
    Radians,
)


def deg(x: Any) -> Angle:
    return Degrees(float(x))


def rad(x: Any) -> Angle:
    return Radians(float(x))


def pi_rad(x: Any) -> Angle:
    """Радианы в долях π: pi_rad(2) == полный оборот."""
    return Radians(float(x) * math.pi)


def gon(x: Any) -> Angle:
    return Gons(float(x))


def arcmin(x: Any) -> Angle:
    return ArcMinutes(float(x))


def arcsec(x: Any) -> Angle:
    return ArcSeconds(float(x))


def goncs(x: Any) -> Angle:
    return GonCs(float(x))


def gonccs(x: Any) -> Angle:
    return GonCcs(float(x))
