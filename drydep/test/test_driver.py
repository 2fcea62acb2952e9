""" Test cases for the batch driver, namelist parsing and output. """
import os
import shutil
import tempfile
import unittest

import numpy as np
import pandas as pd
import xarray as xr
import yaml
from numpy.testing import assert_allclose

from .. import gocart
from ..config import load_namelist, parse_namelist
from ..driver import run_cell, run_grid
from ..micromet import obukhov_length
from ..modal import AerosolMode
from ..output import write_output
from ..particles import rho_air
from ..util import DryDepError

CELL = dict(
    T=293.15,
    P=100000.0,
    ustar=0.35,
    z0=0.5,
    pblh=800.0,
    hflux=120.0,
    G=600.0,
    season="Midsummer",
    land_use="Deciduous",
)

NAMELIST = {
    "meteorology": {
        "T": [293.15, 283.15, 273.15],
        "P": 100000.0,
        "ustar": [0.35, 0.2, 0.1],
        "z0": 0.5,
        "pblh": [800.0, 500.0, 200.0],
        "hflux": [120.0, 10.0, -15.0],
        "G": [600.0, 200.0, 0.0],
        "season": "Midsummer",
        "land_use": "Deciduous",
    },
    "gases": ["SO2", "O3", "HNO3"],
    "particles": [{"name": "dust", "diameter": 2e-6, "density": 2650.0}],
    "aerosol_modes": {"whitby": "continental", "density": 1700.0},
    "experiment_control": {"name": "test"},
}


class TestRunCell(unittest.TestCase):
    def test_derived_inputs(self):
        out = run_cell(CELL)
        airden = rho_air(CELL["T"], CELL["P"])
        assert_allclose(out["rho_air"], airden)
        assert_allclose(
            out["obk"], obukhov_length(CELL["hflux"], airden, CELL["T"], CELL["ustar"])
        )
        assert_allclose(out["ra"], gocart.calc_ra(out["obk"], CELL["z0"], CELL["ustar"]))

    def test_all_velocities(self):
        modes = [
            AerosolMode(1.5e-8, 1.6, 1500.0),
            AerosolMode(1.5e-7, 1.8, 1500.0),
            AerosolMode(2e-6, 2.2, 2600.0),
        ]
        particles = [{"name": "pm10", "diameter": 1e-5, "density": 2000.0}]
        out = run_cell(CELL, gases=["SO2", "NO2"], particles=particles, modes=modes)
        for key in [
            "vd_gocart_SO2", "vd_wesely_SO2", "vd_gocart_NO2", "vd_wesely_NO2",
            "vd_gocart_pm10", "vd_zhang_pm10", "vd_number_coarse", "vs_mass_nucleation",
        ]:
            self.assertIn(key, out)
            self.assertTrue(np.isfinite(out[key]))
            self.assertGreater(out[key], 0.0)

    def test_explicit_obukhov_length(self):
        cell = dict(CELL, obk=-50.0)
        del cell["hflux"]
        self.assertEqual(run_cell(cell)["obk"], -50.0)

    def test_errors(self):
        cell = dict(CELL)
        del cell["ustar"]
        with self.assertRaises(DryDepError):
            run_cell(cell)
        with self.assertRaises(DryDepError):
            run_cell(CELL, gases=["XYZ"])
        with self.assertRaises(DryDepError):
            run_cell(dict(CELL, season="Monsoon"))
        with self.assertRaises(DryDepError):
            run_cell(dict(CELL, rain=True, dew=True), gases=["O3"])


class TestRunGrid(unittest.TestCase):
    def test_failed_cell(self):
        cells = pd.DataFrame([CELL, dict(CELL, rain=True, dew=True), CELL])
        out = run_grid(cells, gases=["SO2"])
        self.assertEqual(len(out), 3)
        self.assertTrue(out.iloc[1].isnull().all())
        self.assertTrue(np.isfinite(out.iloc[0]["vd_wesely_SO2"]))
        assert_allclose(out.iloc[0].values, out.iloc[2].values)

    def test_neutral_obukhov_length(self):
        # A zero Obukhov length is read as neutral, not as a failed cell
        modes = [
            AerosolMode(1.5e-8, 1.6, 1500.0),
            AerosolMode(1.5e-7, 1.8, 1500.0),
            AerosolMode(2e-6, 2.2, 2600.0),
        ]
        particles = [{"name": "dust", "diameter": 2e-6, "density": 2650.0}]
        cells = pd.DataFrame([CELL, dict(CELL, obk=0.0)])
        out = run_grid(cells, gases=["SO2"], particles=particles, modes=modes)
        self.assertEqual(out.iloc[1]["obk"], 0.0)
        self.assertTrue(np.isfinite(out.iloc[1]).all())
        assert_allclose(out.iloc[1]["ra"], gocart.calc_ra(0.0, CELL["z0"], CELL["ustar"]))


class TestNamelist(unittest.TestCase):
    def setUp(self):
        self.tmpdir = tempfile.mkdtemp()

    def tearDown(self):
        shutil.rmtree(self.tmpdir)

    def test_parse(self):
        config = parse_namelist(NAMELIST)
        self.assertEqual(len(config["cells"]), 3)
        assert_allclose(config["cells"]["P"], 100000.0)
        self.assertEqual(len(config["modes"]), 3)
        self.assertEqual(config["gases"], ["SO2", "O3", "HNO3"])
        self.assertEqual(config["experiment_control"]["name"], "test")
        self.assertEqual(config["experiment_control"]["output_format"], "nc")

    def test_explicit_modes(self):
        namelist = dict(NAMELIST)
        namelist["aerosol_modes"] = [
            {"dg": 1.5e-8, "sigma_g": 1.6, "density": 1500.0},
            {"dg": 1.5e-7, "sigma_g": 1.8, "density": 1500.0},
            {"dg": 2e-6, "sigma_g": 2.2, "density": 2600.0},
        ]
        config = parse_namelist(namelist)
        self.assertEqual(config["modes"][2], AerosolMode(2e-6, 2.2, 2600.0))

    def test_invalid(self):
        for key, value in [
            ("gases", ["XYZ"]),
            ("aerosol_modes", {"whitby": "martian"}),
            ("aerosol_modes", [{"dg": 1e-7, "sigma_g": 1.5, "density": 1000.0}]),
            ("particles", [{"name": "dust"}]),
        ]:
            namelist = dict(NAMELIST)
            namelist[key] = value
            with self.assertRaises(DryDepError):
                parse_namelist(namelist)

        with self.assertRaises(DryDepError):
            parse_namelist({"gases": ["SO2"]})

        met = dict(NAMELIST["meteorology"], ustar=[0.3, 0.2])
        with self.assertRaises(DryDepError):
            parse_namelist(dict(NAMELIST, meteorology=met))

    def test_load(self):
        fn = os.path.join(self.tmpdir, "namelist.yml")
        with open(fn, "w") as f:
            yaml.safe_dump(NAMELIST, f)
        config = load_namelist(fn)
        self.assertEqual(len(config["cells"]), 3)


class TestOutput(unittest.TestCase):
    def setUp(self):
        self.tmpdir = tempfile.mkdtemp()
        config = parse_namelist(NAMELIST)
        self.results = run_grid(
            config["cells"], config["gases"], config["particles"], config["modes"]
        )

    def tearDown(self):
        shutil.rmtree(self.tmpdir)

    def test_csv(self):
        fn = write_output(self.results, os.path.join(self.tmpdir, "out.csv"))
        df = pd.read_csv(fn, index_col="cell")
        assert_allclose(df["vd_wesely_O3"], self.results["vd_wesely_O3"])

    def test_netcdf(self):
        fn = write_output(self.results, os.path.join(self.tmpdir, "out"), format="nc")
        self.assertTrue(fn.endswith(".nc"))
        with xr.open_dataset(fn) as ds:
            self.assertEqual(ds["vd_gocart_dust"].attrs["units"], "m/s")
            self.assertEqual(ds["obk"].attrs["units"], "m")
            assert_allclose(ds["vs_mass_coarse"].values, self.results["vs_mass_coarse"])

    def test_bad_format(self):
        with self.assertRaises(DryDepError):
            write_output(self.results, os.path.join(self.tmpdir, "out.obj"))
        with self.assertRaises(DryDepError):
            write_output(self.results)


if __name__ == "__main__":
    unittest.main()
