# -*- coding: utf-8 -*-
""" Land use and season dependent surface resistance network for gases.

Implements the bulk surface resistance of [Wesely1989]_, with the revised
table values of [Walmsley1996]_. The canopy is represented as four parallel
branches:

1. the leaf stomata (with a mesophyll resistance in series),
2. the cuticles and outer surfaces of leaves in the upper canopy,
3. the lower canopy, reached through a buoyant-convection resistance,
4. the ground, reached through an in-canopy transfer resistance.

Resistances of the lower canopy and ground pathways are tabulated only for
SO2 and O3; every other species is served by interpolating between those two
endpoints using its effective Henry's law coefficient and reactivity factor.

References
----------

.. [Wesely1989] Wesely, M. L. "Parameterization of Surface Resistances to
   Gaseous Dry Deposition in Regional-Scale Numerical Models." Atmospheric
   Environment 23.6 (1989): 1293-1304.

.. [Walmsley1996] Walmsley, J. L., and M. L. Wesely. "Modification of Coded
   Parametrizations of Surface Resistances to Gaseous Dry Deposition."
   Atmospheric Environment 30.7 (1996): 1181-1188.

"""
from collections import namedtuple
from enum import IntEnum

import numpy as np

from .constants import RESISTANCE_SENTINEL, wesely_tables
from .util import DryDepError, conductance, parallel

__all__ = [
    "SeasonCategory",
    "LandUseCategory",
    "GasData",
    "GAS_DATA",
    "interpolate_resistance",
    "stomatal_resistance",
    "surface_resistance",
]

#: Surface temperatures (degrees C) outside which the stomata are shut
STOMATA_T_MIN = -1.0
STOMATA_T_MAX = 45.0

#: Lower bound on the bulk surface resistance, s/m
RC_MIN = 10.0


class SeasonCategory(IntEnum):
    """Seasonal categories of [Wesely1989]_."""

    Midsummer = 0  #: Midsummer with lush vegetation
    Autumn = 1  #: Autumn with unharvested cropland
    LateAutumn = 2  #: Late autumn after frost, no snow
    Winter = 3  #: Winter, snow on ground and subfreezing
    TransitionalSpring = 4  #: Transitional spring with partially green short annuals


class LandUseCategory(IntEnum):
    """Land use categories of [Wesely1989]_."""

    Urban = 0
    Agricultural = 1
    Range = 2
    Deciduous = 3
    Coniferous = 4
    MixedForest = 5  #: Mixed forest including wetland
    Water = 6  #: Water, both salt and fresh
    Barren = 7  #: Barren land, mostly desert
    Wetland = 8  #: Nonforested wetland
    RangeAgricultural = 9  #: Mixed agricultural and range land
    RockyShrubs = 10  #: Rocky open areas with low-growing shrubs


#: Properties of a gas from [Wesely1989]_ table 2: the ratio of the
#: diffusivity of water vapor to that of the gas, the effective Henry's law
#: coefficient (M/atm) and the reactivity factor (0, 0.1 or 1).
GasData = namedtuple("GasData", ["dh2o_per_dx", "hstar", "fo"])

GAS_DATA = {
    "SO2": GasData(1.9, 1.0e5, 0.0),
    "O3": GasData(1.6, 0.01, 1.0),
    "NO2": GasData(1.6, 0.01, 0.1),
    "NO": GasData(1.3, 2.0e-3, 0.0),
    "HNO3": GasData(1.9, 1.0e14, 0.0),
    "H2O2": GasData(1.4, 1.0e5, 1.0),
    "ALD": GasData(1.6, 15.0, 0.0),  # Acetaldehyde (aldehyde class)
    "HCHO": GasData(1.3, 6.0e3, 0.0),  # Formaldehyde
    "OP": GasData(1.6, 240.0, 0.1),  # Methyl hydroperoxide (organic peroxide class)
    "PAA": GasData(2.0, 540.0, 0.1),  # Peroxyacetic acid
    "ORA": GasData(1.6, 4.0e6, 0.0),  # Formic acid (organic acid class)
    "NH3": GasData(1.0, 2.0e4, 0.0),
    "PAN": GasData(2.6, 3.6, 0.1),  # Peroxyacetyl nitrate
    "HNO2": GasData(1.6, 1.0e5, 0.1),  # Nitrous acid
}


def _lookup(name, season, land_use):
    """Tabulated resistance with the sentinel mapped to an infinite value."""
    r = wesely_tables[name][int(season), int(land_use)]
    if r >= RESISTANCE_SENTINEL:
        return np.inf
    return r


def interpolate_resistance(hstar, fo, r_so2, r_o3):
    """Resistance of an arbitrary gas interpolated between the SO2 and O3
    endpoints ([Wesely1989]_ eqs. 6 and 7).

    .. math::
        \\begin{equation}
        r_x = \left(\\frac{H^*}{10^5 r_{SO_2}} + \\frac{f_0}{r_{O_3}}\\right)^{-1}
        \end{equation}

    Infinite endpoints contribute no conductance; zero endpoints short the
    pathway.

    Parameters
    ----------
    hstar : float
        effective Henry's law coefficient, M/atm
    fo : float
        reactivity factor
    r_so2, r_o3 : floats
        endpoint resistances for SO2 and O3, s/m

    Returns
    -------
    float
        interpolated resistance, s/m

    """
    g_so2 = hstar * 1e-5 * conductance(r_so2) if hstar > 0.0 else 0.0
    g_o3 = fo * conductance(r_o3) if fo > 0.0 else 0.0
    return conductance(g_so2 + g_o3)


def stomatal_resistance(G, Ts, season, land_use):
    """Bulk canopy stomatal resistance for water vapor ([Wesely1989]_ eq. 3).

    .. math::
        \\begin{equation}
        r_s = r_i\left(1 + \left(\\frac{200}{G + 0.1}\\right)^2\\right)
              \left(\\frac{400}{T_s(40 - T_s)}\\right)
        \end{equation}

    The stomata are shut (infinite resistance) at night (:math:`G \leq 0`),
    when the surface temperature is at or beyond the physiological limits
    :const:`STOMATA_T_MIN` and :const:`STOMATA_T_MAX`, wherever the temperature
    factor is not positive, and where :math:`r_i` is not defined.

    Parameters
    ----------
    G : float
        solar irradiation, W/m^2
    Ts : float
        surface air temperature, degrees C
    season : SeasonCategory
    land_use : LandUseCategory

    Returns
    -------
    float
        :math:`r_s` in s/m

    """
    r_i = _lookup("r_i", season, land_use)
    if G <= 0.0 or Ts <= STOMATA_T_MIN or Ts >= STOMATA_T_MAX or np.isinf(r_i):
        return np.inf
    t_denom = Ts * (40.0 - Ts)
    if t_denom <= 0.0:
        return np.inf
    return r_i * (1.0 + (200.0 / (G + 0.1)) ** 2) * (400.0 / t_denom)


def _upper_canopy_resistance(gas, season, land_use, rain, dew, is_so2, is_o3):
    """Resistance of the upper canopy leaf cuticles, with the wet-surface
    modifications of [Wesely1989]_ eqs. 8-13. Wetting does not apply under
    snow cover."""
    r_lu = _lookup("r_lu", season, land_use)
    dry = r_lu / (1e-5 * gas.hstar + gas.fo)
    if season == SeasonCategory.Winter or not (rain or dew):
        return dry

    # O3 endpoint for the wet surface
    r_wet_o3 = parallel(1000.0 if rain else 3000.0, 3.0 * r_lu)
    if is_o3:
        return r_wet_o3
    if is_so2:
        if dew:
            return 100.0
        return parallel(5000.0, 3.0 * r_lu)
    g_wet = (
        conductance(3.0 * dry)
        + 1e-7 * gas.hstar
        + gas.fo * conductance(r_wet_o3)
    )
    return conductance(g_wet)


def surface_resistance(
    gas,
    G,
    Ts,
    theta,
    season,
    land_use,
    rain=False,
    dew=False,
    is_so2=False,
    is_o3=False,
):
    """Bulk surface resistance to gaseous dry deposition ([Wesely1989]_ eq. 2).

    .. math::
        \\begin{equation}
        R_c = \left(\\frac{1}{r_s D_{H_2O}/D_x + r_m} + \\frac{1}{r_{lu}}
              + \\frac{1}{r_{dc} + r_{cl}} + \\frac{1}{r_{ac} + r_{gs}}\\right)^{-1}
        \end{equation}

    with the mesophyll resistance :math:`r_m = (H^*/3000 + 100f_0)^{-1}` and the
    buoyant-convection resistance
    :math:`r_{dc} = 100(1 + 1000/(G + 10))/(1 + 1000\\theta)`. Below freezing,
    :math:`1000\exp(-T_s - 4)` is added to the upper canopy, lower canopy and
    ground resistances.

    Parameters
    ----------
    gas : GasData
        properties of the gas
    G : float
        solar irradiation, W/m^2
    Ts : float
        surface air temperature, degrees C
    theta : float
        slope of the local terrain, radians
    season : SeasonCategory
    land_use : LandUseCategory
    rain, dew : booleans, optional (default=False)
        whether the surfaces are wet with rain or dew
    is_so2, is_o3 : booleans, optional (default=False)
        whether the gas is SO2 or O3, whose lower canopy and ground
        resistances are tabulated directly

    Returns
    -------
    float
        :math:`R_c` in s/m, within [:const:`RC_MIN`, 9999]

    Raises
    ------
    DryDepError
        If both ``rain`` and ``dew`` are set.

    """
    if rain and dew:
        raise DryDepError("Surface cannot be wet with both rain and dew")
    season = SeasonCategory(season)
    land_use = LandUseCategory(land_use)

    rs = stomatal_resistance(G, Ts, season, land_use)
    rmx = conductance(gas.hstar / 3000.0 + 100.0 * gas.fo)
    rsmx = rs * gas.dh2o_per_dx + rmx
    rdc = 100.0 * (1.0 + 1000.0 / (G + 10.0)) / (1.0 + 1000.0 * theta)
    rlux = _upper_canopy_resistance(gas, season, land_use, rain, dew, is_so2, is_o3)

    if is_so2:
        rclx = _lookup("r_clS", season, land_use)
        rgsx = _lookup("r_gsS", season, land_use)
    elif is_o3:
        rclx = _lookup("r_clO", season, land_use)
        rgsx = _lookup("r_gsO", season, land_use)
    else:
        rclx = interpolate_resistance(
            gas.hstar,
            gas.fo,
            _lookup("r_clS", season, land_use),
            _lookup("r_clO", season, land_use),
        )
        rgsx = interpolate_resistance(
            gas.hstar,
            gas.fo,
            _lookup("r_gsS", season, land_use),
            _lookup("r_gsO", season, land_use),
        )
    rac = _lookup("r_ac", season, land_use)

    # Cold surfaces
    if Ts < 0.0:
        correction = 1000.0 * np.exp(-Ts - 4.0)
        rlux += correction
        rclx += correction
        rgsx += correction

    r_c = parallel(rsmx, rlux, rdc + rclx, rac + rgsx)
    return min(max(r_c, RC_MIN), RESISTANCE_SENTINEL)
