# -*- coding: utf-8 -*-
""" Simplified (GOCART) resistance model for gas and particle dry deposition.

Adapted from the WRF/Chem GOCART dry deposition and settling routines. The
surface is always assumed to be aerodynamically rough (Reynolds number above
10), so that

- the aerodynamic resistance follows the stability-corrected log profile at a
  fixed reference height (Walcek et al., 1986, eqs. 4, 5 and 13),
- the quasi-laminar resistance of gases scales with the ratio of the water
  vapor diffusivity to the diffusivity of the gas (eq. 12),
- the surface/sublayer resistance is diagnosed from a friction-velocity
  based deposition velocity with a convective enhancement.

The particle deposition velocity includes gravitational settling as a
parallel pathway in the manner of Seinfeld and Pandis eq. 19.7.

References
----------

.. [Walcek1986] Walcek, C. J., R. A. Brost, J. S. Chang, and M. L. Wesely.
   "SO2, Sulfate and HNO3 Deposition Velocities Computed Using Regional
   Landuse and Meteorological Data." Atmospheric Environment 20.5 (1986):
   949-964.

"""
import numpy as np

from .constants import RESISTANCE_SENTINEL, g, vK
from .micromet import psi_h
from .particles import dynamic_viscosity

__all__ = [
    "calc_ra",
    "calc_rb",
    "calc_rs",
    "gas_dry_dep",
    "particle_dry_dep",
    "settling_velocity",
    "DRATIO_FOR_RB",
]

#: Reference (surface layer) height for the aerodynamic resistance, m
Z_REF = 2.0

#: Minimum gas deposition velocity over land, m/s
GAS_VD_MIN = 3.0e-3
#: Minimum gas deposition velocity over ice, m/s
GAS_VD_MIN_ICE = 2.0e-3
#: Minimum particle deposition velocity, m/s
PARTICLE_VD_MIN = 1.0e-4

#: Ratio of H2O to gas diffusivities (Seinfeld and Pandis table 19.4)
DRATIO_FOR_RB = {
    "SO2": 1.89,
    "O3": 1.63,
    "NO2": 1.6,
    "NO": 1.29,
    "H2O2": 1.37,
    "NH3": 0.97,
    "HCHO": 1.29,
}


def calc_ra(obk, z0, ustar):
    """Aerodynamic resistance above a rough surface.

    .. math::
        \\begin{equation}
        R_a = \\frac{\ln(z_1/z_0) - \psi_h(z_1/L)}{\kappa u_*}
        \end{equation}

    with :math:`z_1` fixed at :const:`Z_REF`. An Obukhov length of zero is taken
    as neutral.

    Parameters
    ----------
    obk : float
        Monin-Obukhov length, m
    z0 : float
        surface roughness length, m (> 0)
    ustar : float
        friction velocity, m/s (> 0)

    Returns
    -------
    float
        :math:`R_a` in s/m

    """
    zeta = 0.0 if obk == 0.0 else Z_REF / obk
    return (np.log(Z_REF / z0) - psi_h(zeta)) / (vK * ustar)


def calc_rb(ustar, dratio):
    """Quasi-laminar resistance of a gas,
    :math:`R_b = 2/(\kappa u_*)\,(D_{H_2O}/D_x)^{2/3}`, in s/m."""
    return 2.0 / vK / ustar * dratio**0.66666667


def calc_rs(obk, ustar, pblz):
    """Surface/sublayer resistance.

    A sublayer deposition velocity of :math:`0.002u_*` is enhanced under
    unstable conditions by :math:`1 + (-300/L)^{2/3}`; for strongly convective
    boundary layers (:math:`z_i/L < -30`) it is replaced by
    :math:`0.0009u_*(-z_i/L)^{2/3}`. The velocity is capped at 2e-3 m/s (the
    VDSMAX entry of Walcek et al. table 2) and inverted. An Obukhov length of
    zero is taken as neutral.

    Parameters
    ----------
    obk : float
        Monin-Obukhov length, m
    ustar : float
        friction velocity, m/s
    pblz : float
        planetary boundary layer height, m

    Returns
    -------
    float
        :math:`R_s` in s/m, clamped to [1, 9999]; values at either bound are
        saturated rather than physically meaningful

    """
    vds = 0.002 * ustar
    if obk < 0.0:
        vds = vds * (1.0 + (-300.0 / obk) ** 0.6667)

    czh = 0.0 if obk == 0.0 else pblz / obk
    if czh < -30.0:
        vds = 0.0009 * ustar * (-czh) ** 0.6667

    rs = 1.0 / min(vds, 2.0e-3)
    return max(1.0, min(rs, RESISTANCE_SENTINEL))


def gas_dry_dep(obk, ustar, pblz, z0, dratio, over_ice=False):
    """Gas dry deposition velocity, :math:`1/(R_a + R_b + R_s)`.

    Parameters
    ----------
    obk : float
        Monin-Obukhov length, m
    ustar : float
        friction velocity, m/s
    pblz : float
        planetary boundary layer height, m
    z0 : float
        surface roughness length, m
    dratio : float
        ratio of the water vapor diffusivity to the gas diffusivity
    over_ice : boolean, optional (default=False)
        use the lower floor for ice surfaces

    Returns
    -------
    float
        deposition velocity in m/s, no smaller than :const:`GAS_VD_MIN`
        (:const:`GAS_VD_MIN_ICE` over ice)

    """
    ra = calc_ra(obk, z0, ustar)
    rb = calc_rb(ustar, dratio)
    rs = calc_rs(obk, ustar, pblz)

    vd_min = GAS_VD_MIN_ICE if over_ice else GAS_VD_MIN
    return max(1.0 / (ra + rb + rs), vd_min)


def particle_dry_dep(obk, ustar, T, pblz, z0, r, rho_p, P):
    """Particle dry deposition velocity including gravitational settling.

    .. math::
        \\begin{equation}
        v_d = \\frac{1}{R_a + R_s + R_a R_s v_s} + v_s
        \end{equation}

    For particles the quasi-laminar resistance is folded into :math:`R_s`.

    Parameters
    ----------
    obk : float
        Monin-Obukhov length, m
    ustar : float
        friction velocity, m/s
    T : float
        air temperature, K
    pblz : float
        planetary boundary layer height, m
    z0 : float
        surface roughness length, m
    r : float
        particle radius, m
    rho_p : float
        particle density, kg/m^3
    P : float
        air pressure, Pa

    Returns
    -------
    float
        deposition velocity in m/s, no smaller than :const:`PARTICLE_VD_MIN`

    """
    ra = calc_ra(obk, z0, ustar)
    rs = calc_rs(obk, ustar, pblz)
    vs = settling_velocity(r, rho_p, T, P)

    return max(1.0 / (ra + rs + ra * rs * vs) + vs, PARTICLE_VD_MIN)


def free_path(T, P):
    """Mean free path of air, :math:`1.1\\times 10^{-3}/(P\sqrt{T})` with
    :math:`P` in hPa; ``P`` is given in Pa and converted here."""
    P_hpa = P * 1e-2
    return 1.1e-3 / P_hpa / np.sqrt(T)


def settling_velocity(r_eff, rho_p, T, P):
    """Particle terminal settling velocity as in the GOCART settling routine.

    .. math::
        \\begin{equation}
        v_s = \\frac{2}{9}\\frac{g \\rho_p r^2 C_c}{\mu}
        \end{equation}

    with :math:`C_c = 1 + \lambda/r\,(1.257 + 0.4\exp(-1.1r/\lambda))`, the
    Sutherland viscosity and :func:`free_path`.

    Parameters
    ----------
    r_eff : float
        effective particle radius, m
    rho_p : float
        particle density, kg/m^3
    T : float
        air temperature, K
    P : float
        air pressure, Pa

    Returns
    -------
    float
        :math:`v_s` in m/s

    See Also
    --------
    drydep.particles.settling_velocity : diameter-based kinetic-theory form

    """
    c_stokes = dynamic_viscosity(T)
    lam = free_path(T, P)
    c_cun = 1.0 + lam / r_eff * (1.257 + 0.4 * np.exp(-1.1 * r_eff / lam))

    # Slip-corrected viscosity
    viscosity = c_stokes / c_cun

    return 2.0 / 9.0 * g * rho_p * r_eff**2 / viscosity
