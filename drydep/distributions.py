""" Lognormal size distributions for the modal aerosol representation.

A modal aerosol is described by one :class:`Lognorm` per mode. Besides
evaluating the distribution, the classes here supply the analytic moments
that the modal deposition scheme relies on when it collapses a quadrature
sum back into a mode-averaged velocity.

"""
from abc import ABCMeta, abstractmethod
from operator import itemgetter

import numpy as np
from scipy.special import erf


class BaseDistribution(metaclass=ABCMeta):
    """Interface for distributions, to ensure that they contain a pdf method."""

    @abstractmethod
    def cdf(self, x):
        """Cumulative density function"""

    @abstractmethod
    def pdf(self, x):
        """Probability density function."""

    @abstractmethod
    def __repr__(self):
        """Representation function."""


class Lognorm(BaseDistribution):
    """Lognormal number size distribution.

    The parameters are invariant with respect to the length and concentration
    units chosen; the deposition routines use diameters in meters.

    Parameters
    ----------
    mu : float
        Median/geometric mean diameter, length unit.
    sigma : float
        Geometric standard deviation, unitless (> 1).
    N : float, optional (default=1.0)
        Total number concentration, concentration unit.

    Attributes
    ----------
    median, mean : float
        Pre-computed statistical quantities

    Methods
    -------
    pdf(x)
        Evaluate distribution at a particular value
    cdf(x)
        Evaluate cumulative distribution at a particular value.
    moment(k)
        Compute the *k*-th moment of the lognormal distribution.

    """

    def __init__(self, mu, sigma, N=1.0):
        if mu <= 0.0:
            raise ValueError("mu must be positive")
        if sigma <= 1.0:
            raise ValueError("sigma must be greater than 1")
        self.mu = mu
        self.sigma = sigma
        self.N = N

        self.median = self.mu
        self.mean = self.mu * np.exp(0.5 * np.log(self.sigma) ** 2)

    def cdf(self, x):
        """Cumulative density function

        .. math::
            \\text{CDF} = \\frac{N}{2}\\left(1.0 + \\text{erf}(\\frac{\log{x/\mu}}{\sqrt{2}\log{\sigma}}) \\right)

        """
        erf_arg = np.log(x / self.mu) / (np.sqrt(2.0) * np.log(self.sigma))
        return (self.N / 2.0) * (1.0 + erf(erf_arg))

    def pdf(self, x):
        """Probability density function

        .. math::
            \\text{PDF} = \\frac{N}{\sqrt{2\pi}\log\sigma x}\exp\\left( -\\frac{\log{x/\mu}^2}{2\log^2\sigma} \\right)

        """
        scaling = self.N / (np.sqrt(2.0 * np.pi) * np.log(self.sigma))
        exponent = (np.log(x / self.mu) ** 2) / (2.0 * np.log(self.sigma) ** 2)
        return (scaling / x) * np.exp(-exponent)

    def moment(self, k):
        """Compute the k-th moment of the lognormal distribution

        .. math::
            F(k) = N\mu^k\exp\\left( \\frac{k^2}{2} \ln^2 \sigma \\right)

        """
        scaling = (self.mu**k) * self.N
        exponent = ((k**2) / 2.0) * np.log(self.sigma) ** 2
        return scaling * np.exp(exponent)

    def __repr__(self):
        return "Lognorm | mu = {:2.2e}, sigma = {:2.2e}, Total = {:2.2e} |".format(
            self.mu, self.sigma, self.N
        )


class MultiModeLognorm(object):
    """Multimode lognormal distribution class.

    Container for multiple :class:`Lognorm` modes, sorted by median diameter
    so that the modes read nucleation, accumulation, coarse.
    """

    def __init__(self, mus, sigmas, Ns):
        dist_params = sorted(zip(mus, sigmas, Ns), key=itemgetter(0))
        self.mus, self.sigmas, self.Ns = list(zip(*dist_params))

        self.lognorms = [
            Lognorm(mu, sigma, N) for mu, sigma, N in zip(self.mus, self.sigmas, self.Ns)
        ]

    def __iter__(self):
        return iter(self.lognorms)

    def __len__(self):
        return len(self.lognorms)

    def __repr__(self):
        mus_str = "(" + ", ".join("%2.2e" % mu for mu in self.mus) + ")"
        sigmas_str = "(" + ", ".join("%2.2e" % sigma for sigma in self.sigmas) + ")"
        Ns_str = "(" + ", ".join("%2.2e" % N for N in self.Ns) + ")"
        return "MultiModeLognorm| mus = {}, sigmas = {}, Totals = {} |".format(
            mus_str, sigmas_str, Ns_str
        )


#: Trimodal number distributions from Whitby (1978),
#: [nucleation, accumulation, coarse]; mu = diameter in m, N = cm**-3
whitby_distributions = {
    "marine": MultiModeLognorm(
        mus=(0.01e-6, 0.07e-6, 0.62e-6),
        sigmas=(1.6, 2.0, 2.7),
        Ns=(340.0, 6.0, 3.1),
    ),
    "continental": MultiModeLognorm(
        mus=(0.016e-6, 0.068e-6, 0.92e-6),
        sigmas=(1.6, 2.1, 2.2),
        Ns=(1000.0, 800.0, 0.72),
    ),
    "background": MultiModeLognorm(
        mus=(0.01e-6, 0.076e-6, 1.02e-6),
        sigmas=(1.7, 2.0, 2.16),
        Ns=(6400.0, 2300.0, 3.2),
    ),
    "urban": MultiModeLognorm(
        mus=(0.014e-6, 0.054e-6, 0.86e-6),
        sigmas=(1.8, 2.16, 2.21),
        Ns=(10600.0, 32000.0, 5.4),
    ),
}
