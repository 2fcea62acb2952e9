# -*- coding: utf-8 -*-
""" Surface-layer micrometeorology helpers.

Stability parameters shared by the resistance models: the Monin-Obukhov
length diagnosed from the surface sensible heat flux, and the stability
correction to the logarithmic profile for heat used by the simplified
aerodynamic resistance.

"""
import numpy as np

from .constants import HFLUX_MIN, OBK_NEUTRAL, Cp, g, vK


def obukhov_length(hflux, airden, Ts, ustar):
    """Monin-Obukhov length from the surface sensible heat flux.

    .. math::
        \\begin{equation}
        L = -\\frac{\\rho_a C_p T_s u_*^3}{\\kappa g H}
        \end{equation}

    When :math:`|H| \leq 10^{-5}` W/m^2 the surface layer is taken to be neutral
    and the large value :const:`constants.OBK_NEUTRAL` is returned instead of
    dividing by a vanishing flux.

    Parameters
    ----------
    hflux : float
        surface sensible heat flux, W/m^2
    airden : float
        air density, kg/m^3
    Ts : float
        surface air temperature, K
    ustar : float
        friction velocity, m/s

    Returns
    -------
    float
        :math:`L` in m; negative when unstable, positive when stable

    """
    if np.abs(hflux) <= HFLUX_MIN:
        return OBK_NEUTRAL
    return -airden * Cp * Ts * ustar**3 / (vK * g * hflux)


def stability_regime(zeta):
    """Classify the dimensionless stability parameter :math:`z/L`.

    Parameters
    ----------
    zeta : float
        ratio of reference height to Obukhov length

    Returns
    -------
    str
        one of ``"neutral"``, ``"stable"`` or ``"unstable"``

    """
    if zeta > 0.0:
        return "stable"
    elif zeta < 0.0:
        return "unstable"
    return "neutral"


def psi_h(zeta):
    """Stability correction for heat, following Walcek et al. (1986) eqs. 4-5.

    .. math::
        \\begin{equation}
        \psi_h = \\begin{cases}
            -5\zeta & 0 < \zeta \leq 1 \\\\
            \exp\\left(0.598 + 0.39\ln E - 0.09(\ln E)^2\\right) & \zeta < 0
        \end{cases}
        \end{equation}

    where :math:`E = \min(1, -\zeta)`. Values of :math:`\zeta` above 1 are
    capped at 1 and :math:`\zeta = 0` gives no correction.

    Parameters
    ----------
    zeta : float
        ratio of reference height to Obukhov length

    Returns
    -------
    float
        :math:`\psi_h`, unitless

    """
    zeta = min(zeta, 1.0)
    regime = stability_regime(zeta)
    if regime == "stable":
        return -5.0 * zeta
    elif regime == "unstable":
        log_e = np.log(min(1.0, -zeta))
        return np.exp(0.598 + 0.39 * log_e - 0.09 * log_e**2)
    return 0.0
