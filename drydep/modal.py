# -*- coding: utf-8 -*-
""" Size-resolved dry deposition and sedimentation of a trimodal aerosol.

Adapted from the MADE/SOA-VBS modal aerosol deposition routine of WRF/Chem
(McKeen, 2008, after Binkowski and Shankar, 1995). Each lognormal mode is
averaged over its diameter distribution with Gauss-Hermite quadrature
(Abramowitz and Stegun, 1974, eq. 25.4.46), which allows a full
description of

- the Cunningham slip correction at every quadrature diameter,
- Brownian diffusion through the Schmidt number (Binkowski and Shankar),
- impaction through the Stokes number (Peters and Eiden, 1992),
- interception (McKeen, 2008, tuned against needleleaf forest observations),
- the rebound of large particles (Slinn, 1982), applied to the coarse mode.

Gravitational sedimentation velocities are the closed-form Binkowski and
Shankar (1995) moments of the slip-corrected Stokes velocity.

"""
from collections import namedtuple
from enum import IntEnum

import numpy as np
import pandas as pd
from scipy.special import roots_hermite

from .constants import g
from .distributions import Lognorm
from .particles import (
    brownian_diffusivity,
    knudsen_number,
    settling_velocity,
    slip_correction,
)

__all__ = [
    "ModeKind",
    "AerosolMode",
    "QuadratureRule",
    "gauss_hermite",
    "GAUSS_HERMITE_7",
    "FixedRebound",
    "SlinnRebound",
    "ModeScheme",
    "MODE_SCHEMES",
    "velocity_scale",
    "deposition_integrand",
    "mode_deposition",
    "mode_sedimentation",
    "modal_velocities",
]

#: Upper bound on the surface collection velocity, m/s
VDPLIM_MAX = 0.02
#: Binkowski-Shankar approximation constant of the slip correction
BHAT = 1.246
#: Collector diameter in the Stokes number (needleleaf forest), m
COLLECTOR_DIAMETER = 2.0e-3
#: Reference diameter of the interception fit, m
INTERCEPTION_DIAMETER = 1.414e-7
#: Order of the default quadrature rule
N_GAUSS = 7


class ModeKind(IntEnum):
    """The three modes of the aerosol distribution."""

    NUCLEATION = 0
    ACCUMULATION = 1
    COARSE = 2


class AerosolMode(namedtuple("AerosolMode", ["dg", "sigma_g", "density"])):
    """A lognormal aerosol mode.

    Parameters
    ----------
    dg : float
        geometric mean diameter, m
    sigma_g : float
        geometric standard deviation (> 1)
    density : float
        average particle density of the mode, kg/m^3

    """

    __slots__ = ()

    def __new__(cls, dg, sigma_g, density):
        if dg <= 0.0 or density <= 0.0:
            raise ValueError("Mode diameter and density must be positive")
        if sigma_g <= 1.0:
            raise ValueError("Geometric standard deviation must exceed 1")
        return super().__new__(cls, dg, sigma_g, density)

    @classmethod
    def from_lognorm(cls, dist, density):
        """Build a mode from a :class:`drydep.distributions.Lognorm`."""
        return cls(dist.mu, dist.sigma, density)

    @property
    def log_sigma(self):
        return np.log(self.sigma_g)

    def knudsen(self, mfp):
        """Knudsen number at the geometric mean diameter."""
        return knudsen_number(self.dg, mfp)

    def distribution(self):
        """Unit-number :class:`drydep.distributions.Lognorm` of this mode."""
        return Lognorm(self.dg, self.sigma_g)


#: Abscissae and weights of a Gauss-Hermite rule; the weights sum to sqrt(pi)
QuadratureRule = namedtuple("QuadratureRule", ["abscissae", "weights"])


def gauss_hermite(order):
    """Gauss-Hermite quadrature rule of the given order, as read-only arrays."""
    y, w = roots_hermite(order)
    y.setflags(write=False)
    w.setflags(write=False)
    return QuadratureRule(y, w)


GAUSS_HERMITE_7 = gauss_hermite(N_GAUSS)


class FixedRebound(object):
    """Rebound correction that is constant in the Stokes number."""

    def __init__(self, value=1.0):
        self.value = value

    def __call__(self, St):
        return self.value

    def __repr__(self):
        return "FixedRebound(%r)" % self.value


class SlinnRebound(object):
    """Rebound correction of Slinn (1982), :math:`\exp(-2St^{1/2})`."""

    def __call__(self, St):
        return np.exp(-2.0 * np.sqrt(St))

    def __repr__(self):
        return "SlinnRebound()"


#: Per-mode treatment of rebound, and whether the interception efficiency is
#: capped at 1
ModeScheme = namedtuple("ModeScheme", ["rebound", "cap_interception"])

MODE_SCHEMES = {
    ModeKind.NUCLEATION: ModeScheme(FixedRebound(1.0), False),
    ModeKind.ACCUMULATION: ModeScheme(FixedRebound(1.0), False),
    ModeKind.COARSE: ModeScheme(SlinnRebound(), True),
}


def velocity_scale(ustar, pblh=None, rmol=None, wesely_correction=False):
    """Velocity scale of surface collection.

    Without correction this is the friction velocity. With the Wesely (1985)
    convective correction and an unstable surface layer
    (:math:`1/L < 0`), it is multiplied by :math:`0.45(-z_i/L)^{2/3}` when
    :math:`-z_i/L > 30` and by :math:`1 + (-300/L)^{2/3}` otherwise.

    Parameters
    ----------
    ustar : float
        friction velocity, m/s
    pblh : float, optional
        boundary layer height, m
    rmol : float, optional
        inverse Monin-Obukhov length, 1/m
    wesely_correction : boolean, optional (default=False)
        apply the convective correction

    Returns
    -------
    float
        velocity scale in m/s

    """
    utscale = 1.0
    if wesely_correction and rmol is not None and rmol < 0.0:
        czh = -1.0 * pblh * rmol
        if czh > 30.0:
            utscale = 0.45 * czh**0.6667
        else:
            utscale = 1.0 + (-300.0 * rmol) ** 0.6667
    return ustar * utscale


def deposition_integrand(
    dq, density, T, nu, mu, mfp, ustar, utscale, z0, ra, scheme
):
    """Deposition plus sedimentation velocity of particles of one diameter.

    This is the function averaged over each mode by :func:`mode_deposition`;
    ``dq`` may be an array of diameters.

    Parameters
    ----------
    dq : float or array
        particle diameter, m
    density : float
        particle density, kg/m^3
    T : float
        air temperature, K
    nu : float
        kinematic viscosity of air, m^2/s
    mu : float
        dynamic viscosity of air, kg/m/s
    mfp : float
        mean free path of air, m
    ustar : float
        friction velocity, m/s
    utscale : float
        velocity scale of surface collection (see :func:`velocity_scale`), m/s
    z0 : float
        roughness length, m
    ra : float
        aerodynamic resistance, s/m
    scheme : ModeScheme
        rebound correction and interception treatment of the mode

    Returns
    -------
    float or array
        velocity in m/s

    """
    cunq = slip_correction(dq, mfp)
    vsedq = settling_velocity(dq, density, cunq, mu)

    scq = nu / brownian_diffusivity(dq, T, cunq, mu)
    eff_dif = scq ** (-2.0 / 3.0)

    stq = ustar / (9.0 * mu * COLLECTOR_DIAMETER) * density * dq**2
    eff_imp = (stq / (0.8 + stq)) ** 2

    eff_int = (0.00116 + 0.0061 * z0) * dq / INTERCEPTION_DIAMETER
    if scheme.cap_interception:
        eff_int = np.minimum(1.0, eff_int)

    vdplim = utscale * (eff_dif + eff_imp + eff_int) * scheme.rebound(stq)
    vdplim = np.minimum(vdplim, VDPLIM_MAX)
    rsurfq = ra + 1.0 / vdplim
    return vsedq + 1.0 / rsurfq


def mode_deposition(
    mode,
    kind,
    T,
    rho_air,
    ra,
    ustar,
    z0,
    mu,
    mfp,
    pblh=None,
    rmol=None,
    wesely_correction=False,
    rule=GAUSS_HERMITE_7,
):
    """Number- and mass-averaged deposition velocities of one mode.

    With quadrature diameters :math:`D_n = D_g\exp(\sqrt{2}y_n\ln\sigma_g)`
    and weights :math:`w_n`,

    .. math::
        \\begin{equation}
        v_{d,0} = \\frac{1}{\sqrt{\pi}}\sum_n w_n v(D_n), \qquad
        v_{d,3} = \\frac{\sum_n w_n v(D_n) D_n^3}
                       {\sqrt{\pi}\exp\left((1.5\sqrt{2}\ln\sigma_g)^2\\right) D_g^3}
        \end{equation}

    where the exponential is the analytic third moment of the lognormal.

    Parameters
    ----------
    mode : AerosolMode
    kind : ModeKind
        selects the rebound and interception treatment
    T : float
        air temperature, K
    rho_air : float
        air density, kg/m^3
    ra : float
        aerodynamic resistance, s/m
    ustar : float
        friction velocity, m/s
    z0 : float
        roughness length, m
    mu : float
        dynamic viscosity of air, kg/m/s
    mfp : float
        mean free path of air, m
    pblh, rmol, wesely_correction : optional
        see :func:`velocity_scale`
    rule : QuadratureRule, optional
        defaults to the 7-point Gauss-Hermite rule

    Returns
    -------
    (vd_number, vd_mass) : tuple of floats
        mode-averaged deposition velocities, m/s

    """
    scheme = MODE_SCHEMES[ModeKind(kind)]
    utscale = velocity_scale(ustar, pblh, rmol, wesely_correction)
    nu = mu / rho_air

    xxlsg = mode.log_sigma
    dq = mode.dg * np.exp(rule.abscissae * np.sqrt(2.0) * xxlsg)
    v = deposition_integrand(
        dq, mode.density, T, nu, mu, mfp, ustar, utscale, z0, ra, scheme
    )

    sum0 = np.sum(rule.weights * v)
    sum3 = np.sum(rule.weights * v * dq**3)

    sqrtpi = np.sqrt(np.pi)
    vd_number = sum0 / sqrtpi
    vd_mass = sum3 / (sqrtpi * np.exp((1.5 * np.sqrt(2.0) * xxlsg) ** 2) * mode.dg**3)
    return vd_number, vd_mass


def mode_sedimentation(mode, mu, mfp):
    """Number- and mass-averaged sedimentation velocities of one mode
    (Binkowski and Shankar, 1995).

    .. math::
        \\begin{equation}
        v_{s,0} = \\frac{g\\rho_p D_g^2}{18\mu}\left(E_{16} + \hat{B}Kn\,E_4\\right),
        \qquad
        v_{s,3} = \\frac{g\\rho_p D_g^2}{18\mu}\left(E_{64} + \hat{B}Kn\,E_{28}\\right)
        \end{equation}

    with :math:`E_n = \exp(n\ln^2\sigma_g/8)` and the Knudsen number
    :math:`Kn` at the geometric mean diameter.

    Parameters
    ----------
    mode : AerosolMode
    mu : float
        dynamic viscosity of air, kg/m/s
    mfp : float
        mean free path of air, m

    Returns
    -------
    (vs_number, vs_mass) : tuple of floats
        mode-averaged sedimentation velocities, m/s

    """
    l2sg = mode.log_sigma**2

    def es(n):
        return np.exp(n / 8.0 * l2sg)

    dconst3 = g / (18.0 * mu) * mode.density * mode.dg**2
    kn = mode.knudsen(mfp)
    vs_number = dconst3 * (es(16) + BHAT * kn * es(4))
    vs_mass = dconst3 * (es(64) + BHAT * kn * es(28))
    return vs_number, vs_mass


def modal_velocities(
    modes,
    T,
    rho_air,
    ra,
    ustar,
    z0,
    mu,
    mfp,
    pblh=None,
    rmol=None,
    wesely_correction=False,
):
    """Deposition and sedimentation velocities of a trimodal aerosol.

    Parameters
    ----------
    modes : sequence of three AerosolMode
        nucleation, accumulation and coarse modes, in that order
    T, rho_air, ra, ustar, z0, mu, mfp, pblh, rmol, wesely_correction :
        see :func:`mode_deposition`

    Returns
    -------
    pandas.Series
        twelve velocities (m/s), keyed ``vd_number_<mode>``, ``vd_mass_<mode>``,
        ``vs_number_<mode>`` and ``vs_mass_<mode>``

    """
    if len(modes) != len(ModeKind):
        raise ValueError("Expected %d modes, got %d" % (len(ModeKind), len(modes)))

    out = {}
    for kind, mode in zip(ModeKind, modes):
        name = kind.name.lower()
        vdn, vdm = mode_deposition(
            mode, kind, T, rho_air, ra, ustar, z0, mu, mfp, pblh, rmol, wesely_correction
        )
        vsn, vsm = mode_sedimentation(mode, mu, mfp)
        out["vd_number_" + name] = vdn
        out["vd_mass_" + name] = vdm
        out["vs_number_" + name] = vsn
        out["vs_mass_" + name] = vsm
    return pd.Series(out)
