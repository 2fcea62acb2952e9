""" Commonly used constants in surface-layer micrometeorology and particle
deposition equations, as well as the packaged resistance lookup tables.

================= ============= ============ ==========   ======================
Symbol            Variable      Value        Units        Description
================= ============= ============ ==========   ======================
:math:`g`         ``g``         9.81         m s**-2      gravitational constant
:math:`\\kappa`    ``vK``        0.4          unitless     von Karman's constant
:math:`C_p`       ``Cp``        1000.0       J/kg/K       specific heat of air
                                                          (Obukhov length closure)
:math:`R`         ``R``         8.314        J/mol/K      universal gas constant
:math:`M_a`       ``Ma``        0.02897      kg/mol       molecular weight of
                                                          dry air
:math:`k_B`       ``k_B``       1.380658e-23 J/K          Boltzmann constant
================= ============= ============ ==========   ======================

Additionally, two sets of lookup tables are read once from the package data
directory when this module is imported:

- ``wesely_tables``, a dict mapping each of the resistance table names in
  [Wesely1989]_ (``r_i``, ``r_lu``, ``r_ac``, ``r_gsS``, ``r_gsO``, ``r_clS``,
  ``r_clO``) to a read-only 5 x 11 array indexed by (season, land use), in s/m.
  The value :const:`RESISTANCE_SENTINEL` marks a pathway that does not exist.
- ``zhang_params``, a pandas DataFrame holding the particle collection
  parameters of [Zhang2001]_ (``alpha``, ``gamma`` and the collector radius
  ``A1`` ... ``A5`` in mm for each of the five seasons), indexed by land use
  category 1-15.

References
----------

.. [Wesely1989] Wesely, M. L. "Parameterization of Surface Resistances to
   Gaseous Dry Deposition in Regional-Scale Numerical Models." Atmospheric
   Environment 23.6 (1989): 1293-1304.

.. [Zhang2001] Zhang, L., S. Gong, J. Padro, and L. Barrie. "A Size-Segregated
   Particle Dry Deposition Scheme for an Atmospheric Aerosol Module."
   Atmospheric Environment 35.3 (2001): 549-560.

"""
from importlib import resources

import numpy as np
import pandas as pd

g = 9.81  #: Gravitational constant, m/s^2
vK = 0.4  #: von Karman's constant
Cp = 1000.0  #: Specific heat of air used in the Obukhov length closure, J/(kg K)
R = 8.314  #: Universal gas constant, J/(mol K)
Ma = 28.97e-3  #: Molecular weight of dry air, kg/mol
k_B = 1.380658e-23  #: Boltzmann constant, J/K

# Model parameters
RESISTANCE_SENTINEL = 9999.0  #: Resistance marking a closed pathway, s/m
OBK_NEUTRAL = 1.0e5  #: Obukhov length returned for vanishing heat flux, m
HFLUX_MIN = 1.0e-5  #: Smallest heat flux magnitude treated as non-zero, W/m^2
P_STD = 101325.0  #: Standard sea-level pressure, Pa

N_SEASONS = 5
N_LAND_USE = 11

WESELY_TABLES = ["r_i", "r_lu", "r_ac", "r_gsS", "r_gsO", "r_clS", "r_clO"]


def _read_table(fn):
    with (resources.files("drydep") / "data" / fn).open("r") as f:
        return pd.read_csv(f, sep=r"\s+")


def _load_wesely_tables():
    df = _read_table("wesely1989.csv")
    tables = {}
    for name in WESELY_TABLES:
        rows = df[df["table"] == name].sort_values("season")
        arr = rows.drop(columns=["table", "season"]).to_numpy(dtype=np.float64)
        if arr.shape != (N_SEASONS, N_LAND_USE):
            raise ValueError("Malformed Wesely table %s: shape %r" % (name, arr.shape))
        arr.setflags(write=False)
        tables[name] = arr
    return tables


# Read the packaged lookup tables
wesely_tables = _load_wesely_tables()
zhang_params = _read_table("zhang2001.csv").set_index("luc")
