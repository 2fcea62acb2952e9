""" Test cases for the kinetic-theory resistance model.

The end-to-end scenarios are compared with the order of magnitude of the
examples in Seinfeld and Pandis (2006), Table 19.1 and Figure 19.2.

"""
import unittest

import numpy as np
from numpy.testing import assert_allclose

from ..seinfeld import *
from ..wesely import GAS_DATA, LandUseCategory, SeasonCategory


class TestAerodynamicResistance(unittest.TestCase):
    def test_neutral(self):
        assert_allclose(ra(10.0, 0.1, 0.4, 0.0), np.log(100.0) / (0.4 * 0.4))

    def test_stability(self):
        neutral = ra(10.0, 0.1, 0.4, 0.0)
        self.assertGreater(ra(10.0, 0.1, 0.4, 50.0), neutral)
        self.assertLess(ra(10.0, 0.1, 0.4, -50.0), neutral)

    def test_stable_form(self):
        z, z0, ustar, L = 10.0, 0.1, 0.4, 100.0
        expected = (np.log(z / z0) + 4.7 * (z - z0) / L) / (0.4 * ustar)
        assert_allclose(ra(z, z0, ustar, L), expected)


class TestQuasiLaminarResistance(unittest.TestCase):
    def test_rb_gas(self):
        assert_allclose(rb_gas(0.5, 1.5e-5, 1.5e-5), 10.0)

    def test_rb_particle_smooth_surface(self):
        # Desert has no collector radius, so there is no interception
        Rb = rb_particle(
            1e-6, 298.0, 0.44, 1.5e-5, 1.17, 1.8e-5, 3.5e-5,
            ZhangSeason.Midsummer, ZhangLandUse.Desert,
        )
        self.assertTrue(np.isfinite(Rb))
        self.assertGreater(Rb, 0.0)

    def test_rb_particle_vegetated_surface(self):
        args = (1e-6, 298.0, 0.44, 1.5e-5, 1.17, 1.8e-5, 3.5e-5, ZhangSeason.Midsummer)
        forest = rb_particle(*args, ZhangLandUse.DeciduousBroadleaf)
        desert = rb_particle(*args, ZhangLandUse.Desert)
        self.assertLess(forest, desert)


class TestDryDep(unittest.TestCase):
    def test_gas(self):
        vd = dry_dep_gas(
            50.0, 0.04, 0.44, 0.0, 298.0, 1.2, 0.0, 0.0,
            GAS_DATA["NO2"], SeasonCategory.Midsummer, LandUseCategory.Urban,
        )
        # S&P Table 19.1 gives 0.1 cm/s for NO2
        self.assertGreater(vd, 0.0)
        self.assertLess(vd, 0.01)

    def test_gas_wet_surface(self):
        args = (
            10.0, 0.5, 0.3, 0.0, 290.0, 1.2, 0.0, 0.0,
            GAS_DATA["SO2"], SeasonCategory.Midsummer, LandUseCategory.Deciduous,
        )
        dry = dry_dep_gas(*args, is_so2=True)
        dew = dry_dep_gas(*args, dew=True, is_so2=True)
        self.assertGreater(dew, dry)

    def test_particle(self):
        z, z0, ustar, L = 20.0, 0.02, 0.44, 0.0
        T, P, rho_p, rho_air = 298.0, 101325.0, 1000.0, 1.2
        # S&P Figure 19.2, cm/s
        for Dp, reference in [(1e-8, 0.5), (1e-6, 0.02)]:
            vd = dry_dep_particle(
                z, z0, ustar, L, Dp, T, P, rho_p, rho_air,
                ZhangSeason.Midsummer, ZhangLandUse.Desert,
            )
            vd_cm = vd * 100.0
            self.assertGreater(vd_cm, 0.1 * reference)
            self.assertLess(vd_cm, 10.0 * reference)

    def test_particle_minimum(self):
        """Deposition is least efficient in the accumulation range."""
        args = (20.0, 0.02, 0.44, 0.0)
        rest = (298.0, 101325.0, 1000.0, 1.2, ZhangSeason.Midsummer, ZhangLandUse.Grass)
        vds = [dry_dep_particle(*args, Dp, *rest) for Dp in [1e-8, 5e-7, 2e-5]]
        self.assertLess(vds[1], vds[0])
        self.assertLess(vds[1], vds[2])


if __name__ == "__main__":
    unittest.main()
