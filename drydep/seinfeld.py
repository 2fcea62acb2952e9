# -*- coding: utf-8 -*-
""" Kinetic-theory resistance model for gas and particle dry deposition.

Follows the resistance formulation of Seinfeld and Pandis (2006), chapter 19:
the aerodynamic resistance is integrated from the Businger-Dyer similarity
profiles, the quasi-laminar resistance of gases follows from the Schmidt
number, the surface resistance of gases comes from the Wesely (1989) network
in :mod:`drydep.wesely`, and the surface collection of particles follows the
size-segregated scheme of Zhang et al. (2001).

"""
from enum import IntEnum

import numpy as np

from .constants import P_STD, g, vK, zhang_params
from .micromet import stability_regime
from .particles import (
    brownian_diffusivity,
    dv_cont,
    dynamic_viscosity_power_law,
    mean_free_path,
    settling_velocity,
    slip_correction,
)
from .wesely import surface_resistance

__all__ = [
    "ZhangSeason",
    "ZhangLandUse",
    "ra",
    "rb_gas",
    "rb_particle",
    "dry_dep_gas",
    "dry_dep_particle",
]

#: Empirical constant of the particle surface resistance [Zhang2001]_
EPSILON_0 = 3.0
#: Exponent of the impaction efficiency
BETA = 2.0


class ZhangSeason(IntEnum):
    """Seasonal categories of the particle scheme (Seinfeld and Pandis
    table 19.2)."""

    Midsummer = 1  #: Midsummer with lush vegetation
    Autumn = 2  #: Autumn with cropland not harvested
    LateAutumn = 3  #: Late autumn after frost, no snow
    Winter = 4  #: Winter, snow on ground
    TransitionalSpring = 5  #: Transitional spring with partially green short annuals


class ZhangLandUse(IntEnum):
    """Land use categories of the particle scheme (Seinfeld and Pandis
    table 19.2)."""

    EvergreenNeedleleaf = 1
    EvergreenBroadleaf = 2
    DeciduousNeedleleaf = 3
    DeciduousBroadleaf = 4
    MixedForest = 5
    Grass = 6
    Crops = 7  #: Crops, mixed farming
    Desert = 8
    Tundra = 9
    Shrubs = 10  #: Shrubs and interrupted woodlands
    Wetland = 11  #: Wetland with plants
    IceCap = 12  #: Ice cap and glacier
    InlandWater = 13
    Ocean = 14
    Urban = 15


def ra(z, z0, ustar, L):
    """Aerodynamic resistance from the integrated similarity profiles.

    .. math::
        \\begin{equation}
        R_a = \\frac{1}{\kappa u_*}\\begin{cases}
            \ln(z/z_0) & \\text{neutral} \\\\
            \ln(z/z_0) + 4.7(\zeta - \zeta_0) & \\text{stable} \\\\
            \ln\left[\\frac{(\eta_0^2 + 1)(\eta_0 + 1)^2}
                           {(\eta_r^2 + 1)(\eta_r + 1)^2}\\right]
            + 2(\\tan^{-1}\eta_r - \\tan^{-1}\eta_0) & \\text{unstable}
        \end{cases} \\tag{SP2006, 19.13-19.15}
        \end{equation}

    where :math:`\zeta = z/L`, :math:`\zeta_0 = z_0/L` and
    :math:`\eta = (1 - 15\zeta)^{1/4}`. An Obukhov length of zero is taken
    as neutral.

    Parameters
    ----------
    z : float
        reference height, m
    z0 : float
        roughness length, m
    ustar : float
        friction velocity, m/s
    L : float
        Monin-Obukhov length, m

    Returns
    -------
    float
        :math:`R_a` in s/m

    """
    if L == 0.0:
        zeta, zeta0 = 0.0, 0.0
    else:
        zeta, zeta0 = z / L, z0 / L

    regime = stability_regime(zeta)
    if regime == "stable":
        return (np.log(z / z0) + 4.7 * (zeta - zeta0)) / (vK * ustar)
    elif regime == "unstable":
        eta0 = (1.0 - 15.0 * zeta0) ** 0.25
        etar = (1.0 - 15.0 * zeta) ** 0.25
        return (
            np.log(
                ((eta0**2 + 1.0) * (eta0 + 1.0) ** 2)
                / ((etar**2 + 1.0) * (etar + 1.0) ** 2)
            )
            + 2.0 * (np.arctan(etar) - np.arctan(eta0))
        ) / (vK * ustar)
    return np.log(z / z0) / (vK * ustar)


def rb_gas(ustar, nu, Dg):
    """Quasi-laminar resistance of a gas, :math:`R_b = 5\,Sc^{2/3}/u_*` with
    :math:`Sc = \\nu/D_g` (SP2006, 19.17), in s/m."""
    Sc = nu / Dg
    return 5.0 * Sc ** (2.0 / 3.0) / ustar


def _collector_radius(season, land_use):
    """Characteristic collector radius in m, or NaN for smooth surfaces."""
    A_mm = zhang_params.loc[int(land_use), "A%d" % int(season)]
    return A_mm * 1e-3


def rb_particle(Dp, T, ustar, nu, Cc, mu, vs, season, land_use):
    """Surface resistance of particles after Zhang et al. (2001).

    .. math::
        \\begin{equation}
        R_b = \\frac{1}{\epsilon_0 u_* (E_B + E_{IM} + E_{IN}) R_1}
        \end{equation}

    with Brownian collection :math:`E_B = Sc^{-\gamma}`, impaction
    :math:`E_{IM} = (St/(\\alpha + St))^2`, interception
    :math:`E_{IN} = \\frac{1}{2}(D_p/A)^2` and the rebound correction
    :math:`R_1 = \exp(-St^{1/2})`. The Stokes number is
    :math:`v_s u_*/(gA)` over vegetated surfaces and :math:`v_s u_*^2/\\nu`
    over smooth surfaces, which have no collector radius :math:`A` and no
    interception.

    Parameters
    ----------
    Dp : float
        particle diameter, m
    T : float
        air temperature, K
    ustar : float
        friction velocity, m/s
    nu : float
        kinematic viscosity of air, m^2/s
    Cc : float
        slip correction factor
    mu : float
        dynamic viscosity of air, kg/m/s
    vs : float
        settling velocity, m/s
    season : ZhangSeason
    land_use : ZhangLandUse

    Returns
    -------
    float
        :math:`R_b` in s/m

    """
    params = zhang_params.loc[int(ZhangLandUse(land_use))]
    A = _collector_radius(ZhangSeason(season), land_use)

    Sc = nu / brownian_diffusivity(Dp, T, Cc, mu)
    E_B = Sc ** (-params["gamma"])

    if np.isnan(A):
        St = vs * ustar**2 / nu
        E_IN = 0.0
    else:
        St = vs * ustar / (g * A)
        E_IN = 0.5 * (Dp / A) ** 2
    E_IM = (St / (params["alpha"] + St)) ** BETA
    R1 = np.exp(-np.sqrt(St))

    return 1.0 / (EPSILON_0 * ustar * (E_B + E_IM + E_IN) * R1)


def dry_dep_gas(
    z,
    z0,
    ustar,
    L,
    T,
    rho_air,
    G,
    theta,
    gas,
    season,
    land_use,
    rain=False,
    dew=False,
    is_so2=False,
    is_o3=False,
    P=P_STD,
):
    """Gas dry deposition velocity, :math:`1/(R_a + R_b + R_c)`.

    Parameters
    ----------
    z : float
        reference height, m
    z0 : float
        roughness length, m
    ustar : float
        friction velocity, m/s
    L : float
        Monin-Obukhov length, m
    T : float
        air temperature, K
    rho_air : float
        air density, kg/m^3
    G : float
        solar irradiation, W/m^2
    theta : float
        local terrain slope, radians
    gas : :class:`drydep.wesely.GasData`
    season : :class:`drydep.wesely.SeasonCategory`
    land_use : :class:`drydep.wesely.LandUseCategory`
    rain, dew, is_so2, is_o3 : booleans, optional
        see :func:`drydep.wesely.surface_resistance`
    P : float, optional (default=101325.)
        air pressure, Pa

    Returns
    -------
    float
        deposition velocity in m/s

    """
    Ra = ra(z, z0, ustar, L)
    nu = dynamic_viscosity_power_law(T) / rho_air
    Dg = dv_cont(T, P) / gas.dh2o_per_dx
    Rb = rb_gas(ustar, nu, Dg)
    Rc = surface_resistance(
        gas, G, T - 273.15, theta, season, land_use, rain, dew, is_so2, is_o3
    )
    return 1.0 / (Ra + Rb + Rc)


def dry_dep_particle(z, z0, ustar, L, Dp, T, P, rho_p, rho_air, season, land_use):
    """Particle dry deposition velocity including gravitational settling.

    .. math::
        \\begin{equation}
        v_d = \\frac{1}{R_a + R_b + R_a R_b v_s} + v_s \\tag{SP2006, 19.7}
        \end{equation}

    Parameters
    ----------
    z : float
        reference height, m
    z0 : float
        roughness length, m
    ustar : float
        friction velocity, m/s
    L : float
        Monin-Obukhov length, m
    Dp : float
        particle diameter, m
    T : float
        air temperature, K
    P : float
        air pressure, Pa
    rho_p : float
        particle density, kg/m^3
    rho_air : float
        air density, kg/m^3
    season : ZhangSeason
    land_use : ZhangLandUse

    Returns
    -------
    float
        deposition velocity in m/s

    """
    Ra = ra(z, z0, ustar, L)
    mu = dynamic_viscosity_power_law(T)
    Cc = slip_correction(Dp, mean_free_path(T, P, mu))
    vs = settling_velocity(Dp, rho_p, Cc, mu)
    Rb = rb_particle(Dp, T, ustar, mu / rho_air, Cc, mu, vs, season, land_use)
    return 1.0 / (Ra + Rb + Ra * Rb * vs) + vs
