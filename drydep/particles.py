# -*- coding: utf-8 -*-
""" Continuous-regime particle and gas transport properties.

The following functions calculate the properties of air and of suspended
particles that enter the deposition resistances: the viscosity and mean free
path of air, the Cunningham slip correction, Stokes settling, and Brownian
and molecular diffusivities. Where possible, the source of the
parameterization for each function is documented.

"""
import numpy as np

from .constants import P_STD, Ma, R, g, k_B

# TRANSPORT PROPERTIES OF AIR


def dynamic_viscosity(T):
    """Dynamic viscosity of air from Sutherland's law.

    .. math::
        \\begin{equation}
        \mu = \\frac{1.458\\times 10^{-6}\, T^{3/2}}{T + 110.4}
        \end{equation}

    No range check is performed; the expression is finite for any positive
    temperature.

    Parameters
    ----------
    T : float
        ambient air temperature, K

    Returns
    -------
    float
        :math:`\mu(T)` in kg/m/s

    See Also
    --------
    dynamic_viscosity_power_law : power-law fit used by the kinetic-theory model

    """
    return 1.458e-6 * T**1.5 / (T + 110.4)


def dynamic_viscosity_power_law(T):
    """Dynamic viscosity of air from a power-law fit about 298 K.

    .. math::
        \\begin{equation}
        \mu = 1.8\\times 10^{-5}\\left(\\frac{T}{298}\\right)^{0.85}
              \\tag{J2005, 4.54}
        \end{equation}

    Parameters
    ----------
    T : float
        ambient air temperature, K

    Returns
    -------
    float
        :math:`\mu(T)` in kg/m/s

    References
    ----------

    .. [J2005] Jacobson, Mark Z. Fundamentals of Atmospheric Modeling. 2nd ed.
       Cambridge University Press, 2005.

    """
    return 1.8e-5 * (T / 298.0) ** 0.85


def mean_free_path(T, P, mu=None):
    """Mean free path of air molecules.

    .. math::
        \\begin{equation}
        \lambda = \\frac{2\mu}{P\left(8 M_a / \pi R T\\right)^{1/2}}
                  \\tag{SP2006, 9.6}
        \end{equation}

    Parameters
    ----------
    T : float
        ambient air temperature, K
    P : float
        ambient air pressure, Pa
    mu : float, optional
        dynamic viscosity of air, kg/m/s; if not given, computed with
        :func:`dynamic_viscosity_power_law`

    Returns
    -------
    float
        :math:`\lambda(T, P)` in m

    References
    ----------

    .. [SP2006] Seinfeld, John H, and Spyros N Pandis. Atmospheric Chemistry
       and Physics: From Air Pollution to Climate Change. Vol. 2nd. Wiley, 2006.

    """
    if mu is None:
        mu = dynamic_viscosity_power_law(T)
    return 2.0 * mu / (P * np.sqrt(8.0 * Ma / (np.pi * R * T)))


def dv_cont(T, P):
    """Diffusivity of water vapor in air, neglecting non-continuum effects.

    .. math::
        \\begin{equation}
        D_v = 10^{-4}\\frac{0.211}{P}\left(\\frac{T}{273}\\right)^{1.94}
              \\tag{SP2006, 17.61}
        \end{equation}

    where :math:`P` is in atm.

    Parameters
    ----------
    T : float
        ambient air temperature, K
    P : float
        ambient air pressure, Pa

    Returns
    -------
    float
        :math:`D_v(T, P)` in m^2/s

    """
    P_atm = P / P_STD
    return 1e-4 * (0.211 / P_atm) * ((T / 273.0) ** 1.94)


def rho_air(T, P):
    """Density of dry air from the ideal gas law, kg/m^3."""
    return P * Ma / (R * T)


# PARTICLE PROPERTIES


def knudsen_number(Dp, mfp):
    """Knudsen number :math:`Kn = 2\lambda / D_p` of a particle."""
    return 2.0 * mfp / Dp


def slip_correction(Dp, mfp):
    """Cunningham slip correction factor.

    .. math::
        \\begin{equation}
        C_c = 1 + \\frac{2\lambda}{D_p}\left(1.257 +
              0.4\exp\left(-\\frac{1.1 D_p}{2\lambda}\\right)\\right)
              \\tag{SP2006, 9.34}
        \end{equation}

    :math:`C_c` grows without bound as :math:`D_p \\rightarrow 0` and tends to 1
    for particles much larger than the mean free path.

    Parameters
    ----------
    Dp : float
        particle diameter, m
    mfp : float
        mean free path of air, m

    Returns
    -------
    float
        :math:`C_c`, unitless

    """
    return 1.0 + 2.0 * mfp / Dp * (1.257 + 0.4 * np.exp(-1.1 * Dp / (2.0 * mfp)))


def settling_velocity(Dp, rho_p, Cc, mu):
    """Terminal settling velocity of a particle in the Stokes regime.

    .. math::
        \\begin{equation}
        v_s = \\frac{D_p^2 \\rho_p g C_c}{18\mu} \\tag{SP2006, 9.42}
        \end{equation}

    Parameters
    ----------
    Dp : float
        particle diameter, m
    rho_p : float
        particle density, kg/m^3
    Cc : float
        Cunningham slip correction factor
    mu : float
        dynamic viscosity of air, kg/m/s

    Returns
    -------
    float
        :math:`v_s` in m/s

    See Also
    --------
    drydep.gocart.settling_velocity : radius-based form with a 2/9 prefactor

    """
    return Dp**2 * rho_p * g * Cc / (18.0 * mu)


def brownian_diffusivity(Dp, T, Cc, mu):
    """Brownian diffusivity of a particle.

    .. math::
        \\begin{equation}
        D = \\frac{k_B T C_c}{3\pi\mu D_p} \\tag{SP2006, 9.73}
        \end{equation}

    Returns
    -------
    float
        :math:`D` in m^2/s

    """
    return k_B * T * Cc / (3.0 * np.pi * mu * Dp)
