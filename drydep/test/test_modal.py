""" Test cases for modal aerosol deposition and sedimentation.

The quadrature-based velocities are compared against direct numerical
integration over the lognormal size distribution.

"""
import unittest

import numpy as np
from numpy.testing import assert_allclose
from scipy.integrate import quad

from ..distributions import Lognorm, whitby_distributions
from ..modal import *
from ..modal import BHAT, VDPLIM_MAX
from ..particles import dynamic_viscosity, mean_free_path, rho_air

T = 298.0
P = 101325.0


def lognormal_average(func, dist, k=0, n_sigma=10.0):
    """Average of func(D) over the k-th moment of a lognormal distribution,
    integrated over ln D."""
    log_sigma = np.log(dist.sigma)
    lo = np.log(dist.mu) - n_sigma * log_sigma
    hi = np.log(dist.mu) + n_sigma * log_sigma
    coverage = (dist.cdf(np.exp(hi)) - dist.cdf(np.exp(lo))) / dist.N
    assert coverage >= 1.0 - 1e-9, "integration window misses part of the mode"

    def integrand(x):
        D = np.exp(x)
        return func(D) * D**k * dist.pdf(D) * D

    total, _ = quad(integrand, lo, hi, limit=200)
    return total / dist.moment(k)


class TestQuadratureRule(unittest.TestCase):
    def test_weights(self):
        self.assertEqual(len(GAUSS_HERMITE_7.abscissae), 7)
        assert_allclose(np.sum(GAUSS_HERMITE_7.weights), np.sqrt(np.pi))

    def test_read_only(self):
        with self.assertRaises(ValueError):
            GAUSS_HERMITE_7.weights[0] = 1.0


class TestLognorm(unittest.TestCase):
    def test_cdf(self):
        dist = Lognorm(2e-7, 1.6, 100.0)
        assert_allclose(dist.cdf(2e-7), 50.0)
        # One geometric standard deviation either side holds ~68% of particles
        within = dist.cdf(2e-7 * 1.6) - dist.cdf(2e-7 / 1.6)
        assert_allclose(within, 100.0 * 0.682689492, rtol=1e-8)

    def test_whitby_modes_ordered(self):
        for name, aerosol in whitby_distributions.items():
            self.assertEqual(len(aerosol), 3)
            mus = [dist.mu for dist in aerosol]
            self.assertEqual(mus, sorted(mus), name)


class TestAerosolMode(unittest.TestCase):
    def test_invalid(self):
        with self.assertRaises(ValueError):
            AerosolMode(1e-7, 1.0, 1500.0)
        with self.assertRaises(ValueError):
            AerosolMode(-1e-7, 1.6, 1500.0)

    def test_knudsen(self):
        mode = AerosolMode(2e-7, 1.6, 1500.0)
        assert_allclose(mode.knudsen(6.5e-8), 0.65)

    def test_from_lognorm(self):
        dist = Lognorm(2e-7, 1.6, 100.0)
        mode = AerosolMode.from_lognorm(dist, 1500.0)
        self.assertEqual(mode, AerosolMode(2e-7, 1.6, 1500.0))


class TestRebound(unittest.TestCase):
    def test_fixed(self):
        self.assertEqual(FixedRebound()(10.0), 1.0)

    def test_slinn(self):
        rebound = SlinnRebound()
        assert_allclose(rebound(0.0), 1.0)
        assert_allclose(rebound(1.0), np.exp(-2.0))
        self.assertLess(rebound(4.0), rebound(1.0))

    def test_schemes(self):
        self.assertIsInstance(MODE_SCHEMES[ModeKind.COARSE].rebound, SlinnRebound)
        self.assertTrue(MODE_SCHEMES[ModeKind.COARSE].cap_interception)
        for kind in [ModeKind.NUCLEATION, ModeKind.ACCUMULATION]:
            self.assertIsInstance(MODE_SCHEMES[kind].rebound, FixedRebound)
            self.assertFalse(MODE_SCHEMES[kind].cap_interception)


class TestVelocityScale(unittest.TestCase):
    def test_default(self):
        self.assertEqual(velocity_scale(0.3), 0.3)
        self.assertEqual(velocity_scale(0.3, 1000.0, -0.1), 0.3)
        self.assertEqual(velocity_scale(0.3, 1000.0, 0.01, True), 0.3)

    def test_convective(self):
        assert_allclose(
            velocity_scale(0.3, 1000.0, -0.01, True), 0.3 * (1.0 + 3.0**0.6667)
        )
        assert_allclose(velocity_scale(0.3, 1000.0, -0.1, True), 0.3 * 0.45 * 100.0**0.6667)


class TestModeDeposition(unittest.TestCase):
    def setUp(self):
        self.mu = dynamic_viscosity(T)
        self.mfp = mean_free_path(T, P, self.mu)
        self.rho_air = rho_air(T, P)
        self.nu = self.mu / self.rho_air
        self.ra = 50.0
        self.ustar = 0.2
        self.z0 = 0.01

    def _integrand(self, mode, kind):
        scheme = MODE_SCHEMES[kind]
        return lambda D: deposition_integrand(
            D, mode.density, T, self.nu, self.mu, self.mfp, self.ustar,
            self.ustar, self.z0, self.ra, scheme,
        )

    def _deposition(self, mode, kind):
        return mode_deposition(
            mode, kind, T, self.rho_air, self.ra, self.ustar, self.z0, self.mu,
            self.mfp,
        )

    def test_against_direct_integration(self):
        mode = AerosolMode(2e-7, 1.6, 1500.0)
        kind = ModeKind.ACCUMULATION
        vd_number, vd_mass = self._deposition(mode, kind)

        func = self._integrand(mode, kind)
        dist = mode.distribution()
        assert_allclose(vd_number, lognormal_average(func, dist, 0), rtol=1e-2)
        assert_allclose(vd_mass, lognormal_average(func, dist, 3), rtol=2e-2)

    def test_positive_and_ordered(self):
        """Brownian diffusion dominates collection in the nucleation mode, so
        the mass velocity is below the number velocity."""
        mode = AerosolMode(1e-8, 1.6, 1500.0)
        vd_number, vd_mass = self._deposition(mode, ModeKind.NUCLEATION)
        self.assertGreater(vd_number, 0.0)
        self.assertGreater(vd_mass, 0.0)
        self.assertLess(vd_mass, vd_number)

    def test_collection_cap(self):
        scheme = MODE_SCHEMES[ModeKind.ACCUMULATION]
        D = 1e-7
        v = deposition_integrand(
            D, 1500.0, T, self.nu, self.mu, self.mfp, 5.0, 100.0, self.z0, 0.0, scheme
        )
        Cc = 1.0 + 2.0 * self.mfp / D * (1.257 + 0.4 * np.exp(-1.1 * D / (2.0 * self.mfp)))
        vsed = 1500.0 * 9.81 / (18.0 * self.mu) * Cc * D**2
        assert_allclose(v, vsed + VDPLIM_MAX)

    def test_rebound_asymmetry(self):
        mode = AerosolMode(3e-6, 2.0, 2000.0)
        _, vd_accumulation = self._deposition(mode, ModeKind.ACCUMULATION)
        _, vd_coarse = self._deposition(mode, ModeKind.COARSE)
        self.assertLess(vd_coarse, vd_accumulation)

    def test_convective_correction(self):
        mode = AerosolMode(2e-7, 1.6, 1500.0)
        base = self._deposition(mode, ModeKind.ACCUMULATION)
        corrected = mode_deposition(
            mode, ModeKind.ACCUMULATION, T, self.rho_air, self.ra, self.ustar,
            self.z0, self.mu, self.mfp, pblh=1000.0, rmol=-0.02,
            wesely_correction=True,
        )
        self.assertGreater(corrected[0], base[0])
        self.assertGreater(corrected[1], base[1])


class TestModeSedimentation(unittest.TestCase):
    def setUp(self):
        self.mu = dynamic_viscosity(T)
        self.mfp = mean_free_path(T, P, self.mu)

    def test_against_direct_integration(self):
        for mode in [AerosolMode(2e-7, 1.6, 1500.0), AerosolMode(2e-6, 2.2, 2600.0)]:
            vs_number, vs_mass = mode_sedimentation(mode, self.mu, self.mfp)

            def stokes(D):
                Cc = 1.0 + BHAT * 2.0 * self.mfp / D
                return mode.density * 9.81 * D**2 * Cc / (18.0 * self.mu)

            dist = mode.distribution()
            assert_allclose(vs_number, lognormal_average(stokes, dist, 0), rtol=1e-6)
            assert_allclose(vs_mass, lognormal_average(stokes, dist, 3), rtol=1e-6)

    def test_monodisperse_limit(self):
        mode = AerosolMode(1e-5, 1.0001, 1000.0)
        vs_number, vs_mass = mode_sedimentation(mode, self.mu, self.mfp)
        assert_allclose(vs_number, vs_mass, rtol=1e-6)


class TestModalVelocities(unittest.TestCase):
    def setUp(self):
        self.modes = [
            AerosolMode.from_lognorm(dist, 1700.0)
            for dist in whitby_distributions["continental"]
        ]
        self.mu = dynamic_viscosity(T)
        self.kws = dict(
            T=T, rho_air=rho_air(T, P), ra=40.0, ustar=0.3, z0=0.1, mu=self.mu,
            mfp=mean_free_path(T, P, self.mu),
        )

    def test_outputs(self):
        out = modal_velocities(self.modes, **self.kws)
        self.assertEqual(len(out), 12)
        for kind in ModeKind:
            name = kind.name.lower()
            for key in ["vd_number_", "vd_mass_", "vs_number_", "vs_mass_"]:
                self.assertIn(key + name, out.index)
        self.assertTrue(np.all(out.values > 0))
        # Sedimentation grows with mode size
        self.assertLess(out["vs_mass_nucleation"], out["vs_mass_accumulation"])
        self.assertLess(out["vs_mass_accumulation"], out["vs_mass_coarse"])

    def test_wrong_number_of_modes(self):
        with self.assertRaises(ValueError):
            modal_velocities(self.modes[:2], **self.kws)


if __name__ == "__main__":
    unittest.main()
