"""
Domain value types.

Decorated numbers: Quantity, Rounded, Angle and angle helpers.
Module-level isinf/isfinite helpers live in their own modules
(quantity.isinf, rounded.isinf) and are not re-exported here.
"""

from src.numerics.domain.angle import (
    ARCMINS,
    ARCSECS,
    DEGREES,
    GON_CCS,
    GON_CS,
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
    arcsecs,
    arcsecs_cast,
    degrees,
    degrees_cast,
    fmod,
    gon_ccs,
    gon_ccs_cast,
    gon_cs,
    gon_cs_cast,
    gons,
    gons_cast,
    make_degrees,
    make_gons,
    make_radians,
    mod_turn,
    nearbyint,
    radians,
    radians_cast,
    remainder,
    turn_multiple,
    turn_remainder,
)
from src.numerics.domain.angle_distribution import (
    AngleDistribution,
    AngleInterval,
    UniformAngleDistribution,
    UniformRealDistribution,
    UniformRealParams,
    centered_turn_interval,
    half_turn_interval,
    inclination_interval,
    quarter_turn_interval,
    turn_interval,
    uniform_degree_distribution,
    uniform_gon_distribution,
    uniform_radian_distribution,
)
from src.numerics.domain.quantity import Quantity
from src.numerics.domain.rounded import (
    Rounded,
    RoundingMethod,
    RoundToNearest,
    RoundToNearestInt,
    make_rounded_to_nearest,
)

__all__ = [
    # Angle: Turns
    "ARCMINS",
    "ARCSECS",
    "DEGREES",
    "GON_CCS",
    "GON_CS",
    "GONS",
    "RADIANS",
    "Turn",
    # Angle: Types
    "Angle",
    "ArcMinutes",
    "ArcSeconds",
    "Degrees",
    "DegreesInt",
    "GonCcs",
    "GonCs",
    "Gons",
    "GonsInt",
    "Radians",
    # Angle: Casts
    "angle_cast",
    "arcmins_cast",
    "arcsecs_cast",
    "degrees_cast",
    "gon_ccs_cast",
    "gon_cs_cast",
    "gons_cast",
    "radians_cast",
    # Angle: Constructors
    "arcmins",
    "arcsecs",
    "degrees",
    "gon_ccs",
    "gon_cs",
    "gons",
    "make_degrees",
    "make_gons",
    "make_radians",
    "radians",
    # Angle: Functions
    "fmod",
    "mod_turn",
    "nearbyint",
    "remainder",
    "turn_multiple",
    "turn_remainder",
    # Angle Distribution
    "AngleDistribution",
    "AngleInterval",
    "UniformAngleDistribution",
    "UniformRealDistribution",
    "UniformRealParams",
    "centered_turn_interval",
    "half_turn_interval",
    "inclination_interval",
    "quarter_turn_interval",
    "turn_interval",
    "uniform_degree_distribution",
    "uniform_gon_distribution",
    "uniform_radian_distribution",
    # Quantity
    "Quantity",
    # Rounded
    "Rounded",
    "RoundingMethod",
    "RoundToNearest",
    "RoundToNearestInt",
    "make_rounded_to_nearest",
]
