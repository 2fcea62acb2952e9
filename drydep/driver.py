""" Utilities for driving the deposition models over sets of grid cells.

A grid cell is any mapping of scalar meteorological and surface inputs (a
dict, or a row of a :class:`pandas.DataFrame`). The workhorse function
:func:`run_cell` evaluates every configured deposition velocity for a single
cell, filling in the derived quantities (air density, Obukhov length, air
viscosity and mean free path) that the cell does not supply. :func:`run_grid`
maps it over a table of cells; because cells are independent, a cell whose
configuration is invalid only blanks its own row.

Recognized cell inputs
----------------------

========== ======== ===================================================
Key        Units    Description
========== ======== ===================================================
T          K        air temperature (required)
P          Pa       air pressure (required)
ustar      m/s      friction velocity (required)
z0         m        roughness length (required)
pblh       m        boundary layer height (required)
hflux      W/m^2    surface sensible heat flux, if ``obk`` is not given
obk        m        Monin-Obukhov length
rho_air    kg/m^3   air density
z          m        reference height of the kinetic model (default 10)
G          W/m^2    solar irradiation (default 0)
theta      radians  terrain slope (default 0)
season              :class:`drydep.wesely.SeasonCategory` (default 0)
land_use            :class:`drydep.wesely.LandUseCategory` (default 0)
rain, dew           wet surfaces (default False)
over_ice            ice surface floor of the simplified model
========== ======== ===================================================

"""
import numpy as np
from pandas import DataFrame

from .gocart import DRATIO_FOR_RB, calc_ra, gas_dry_dep, particle_dry_dep
from .micromet import obukhov_length
from .modal import AerosolMode, modal_velocities
from .particles import dynamic_viscosity, mean_free_path, rho_air
from .seinfeld import ZhangLandUse, ZhangSeason, dry_dep_gas, dry_dep_particle
from .util import DryDepError
from .wesely import GAS_DATA, LandUseCategory, SeasonCategory

__all__ = ["run_cell", "run_grid", "REQUIRED_INPUTS"]

#: Cell inputs without which no velocity can be computed
REQUIRED_INPUTS = ["T", "P", "ustar", "z0", "pblh"]

#: Default reference height of the kinetic-theory model, m
Z_DEFAULT = 10.0

#: Closest particle-scheme category for each gas-scheme land use
WESELY_TO_ZHANG_LAND_USE = {
    LandUseCategory.Urban: ZhangLandUse.Urban,
    LandUseCategory.Agricultural: ZhangLandUse.Crops,
    LandUseCategory.Range: ZhangLandUse.Grass,
    LandUseCategory.Deciduous: ZhangLandUse.DeciduousBroadleaf,
    LandUseCategory.Coniferous: ZhangLandUse.EvergreenNeedleleaf,
    LandUseCategory.MixedForest: ZhangLandUse.MixedForest,
    LandUseCategory.Water: ZhangLandUse.Ocean,
    LandUseCategory.Barren: ZhangLandUse.Desert,
    LandUseCategory.Wetland: ZhangLandUse.Wetland,
    LandUseCategory.RangeAgricultural: ZhangLandUse.Crops,
    LandUseCategory.RockyShrubs: ZhangLandUse.Shrubs,
}


def _category(enum_cls, value):
    """Coerce a category given by name or number."""
    try:
        if isinstance(value, str):
            return enum_cls[value]
        return enum_cls(int(value))
    except (KeyError, ValueError):
        raise DryDepError("Unknown %s '%s'" % (enum_cls.__name__, value))


def _gas_properties(name):
    if name not in GAS_DATA:
        raise DryDepError(
            "Unknown gas '%s'; choose from %r" % (name, sorted(GAS_DATA.keys()))
        )
    gas = GAS_DATA[name]
    dratio = DRATIO_FOR_RB.get(name, gas.dh2o_per_dx)
    return gas, dratio


def run_cell(cell, gases=(), particles=(), modes=None, console=False):
    """Evaluate every configured deposition velocity for one grid cell.

    Parameters
    ----------
    cell : mapping
        scalar inputs of the cell; see the module documentation for the keys
    gases : sequence of str, optional
        gas species, keys of :data:`drydep.wesely.GAS_DATA`
    particles : sequence of dicts, optional
        monodisperse particles, each with a ``name``, a ``diameter`` (m) and a
        ``density`` (kg/m^3)
    modes : sequence of three :class:`drydep.modal.AerosolMode`, optional
        nucleation, accumulation and coarse modes of a modal aerosol
    console : boolean, optional (default=False)
        print a summary of the derived inputs

    Returns
    -------
    dict
        flat mapping of output names to velocities in m/s:
        ``vd_gocart_<gas>``, ``vd_wesely_<gas>``, ``vd_gocart_<particle>``,
        ``vd_zhang_<particle>``, and the twelve modal velocities of
        :func:`drydep.modal.modal_velocities`, followed by the derived inputs
        ``obk``, ``rho_air`` and ``ra``

    Raises
    ------
    DryDepError
        If a required input is missing, a gas or category is unknown, or the
        surface is wet with both rain and dew.

    """
    missing = [key for key in REQUIRED_INPUTS if key not in cell]
    if missing:
        raise DryDepError("Cell is missing required inputs %r" % missing)

    T, P = cell["T"], cell["P"]
    ustar, z0, pblh = cell["ustar"], cell["z0"], cell["pblh"]

    airden = cell.get("rho_air", rho_air(T, P))
    if "obk" in cell:
        obk = cell["obk"]
    elif "hflux" in cell:
        obk = obukhov_length(cell["hflux"], airden, T, ustar)
    else:
        raise DryDepError("Cell needs either 'obk' or 'hflux'")

    z = cell.get("z", Z_DEFAULT)
    G = cell.get("G", 0.0)
    theta = cell.get("theta", 0.0)
    rain = bool(cell.get("rain", False))
    dew = bool(cell.get("dew", False))
    over_ice = bool(cell.get("over_ice", False))
    season = _category(SeasonCategory, cell.get("season", 0))
    land_use = _category(LandUseCategory, cell.get("land_use", 0))
    zhang_season = _category(ZhangSeason, cell.get("zhang_season", int(season) + 1))
    zhang_land_use = _category(
        ZhangLandUse, cell.get("zhang_land_use", WESELY_TO_ZHANG_LAND_USE[land_use])
    )

    ra = calc_ra(obk, z0, ustar)

    if console:
        print("Cell: T = %6.2f K, P = %8.1f Pa, u* = %5.3f m/s" % (T, P, ustar))
        print("      L = %10.3e m, rho_air = %5.3f kg/m3, Ra = %8.2f s/m" % (obk, airden, ra))
        print("      %s / %s" % (season.name, land_use.name))

    out = {}
    for name in gases:
        gas, dratio = _gas_properties(name)
        out["vd_gocart_" + name] = gas_dry_dep(obk, ustar, pblh, z0, dratio, over_ice)
        out["vd_wesely_" + name] = dry_dep_gas(
            z,
            z0,
            ustar,
            obk,
            T,
            airden,
            G,
            theta,
            gas,
            season,
            land_use,
            rain=rain,
            dew=dew,
            is_so2=(name == "SO2"),
            is_o3=(name == "O3"),
            P=P,
        )

    for particle in particles:
        name, Dp, rho_p = particle["name"], particle["diameter"], particle["density"]
        out["vd_gocart_" + name] = particle_dry_dep(
            obk, ustar, T, pblh, z0, 0.5 * Dp, rho_p, P
        )
        out["vd_zhang_" + name] = dry_dep_particle(
            z, z0, ustar, obk, Dp, T, P, rho_p, airden, zhang_season, zhang_land_use
        )

    if modes is not None:
        mu = cell.get("mu", dynamic_viscosity(T))
        mfp = cell.get("mfp", mean_free_path(T, P, mu))
        modal = modal_velocities(
            modes,
            T,
            airden,
            ra,
            ustar,
            z0,
            mu,
            mfp,
            pblh=pblh,
            rmol=0.0 if obk == 0.0 else 1.0 / obk,
            wesely_correction=bool(cell.get("wesely_correction", False)),
        )
        out.update(modal.to_dict())

    out["obk"] = obk
    out["rho_air"] = airden
    out["ra"] = ra

    if console:
        for key, value in out.items():
            print("   {:>28s} = {:12.5e}".format(key, value))

    return out


def run_grid(cells_df, gases=(), particles=(), modes=None, console=False):
    """Evaluate :func:`run_cell` for every row of a table of grid cells.

    Parameters
    ----------
    cells_df : DataFrame
        one row per grid cell, columns named as the inputs of :func:`run_cell`
    gases, particles, modes, console :
        see :func:`run_cell`

    Returns
    -------
    DataFrame
        one row per cell, sharing the index of ``cells_df``; cells whose
        configuration raised a :class:`DryDepError` hold NaN

    """
    results = []
    n_failed = 0
    for idx, row in cells_df.iterrows():
        cell = row.dropna().to_dict()
        try:
            results.append(run_cell(cell, gases, particles, modes, console))
        except DryDepError as e:
            n_failed += 1
            if console:
                print("Cell %r failed: %s" % (idx, e.error_str))
            results.append({})

    if console and n_failed:
        print("%d of %d cells failed" % (n_failed, len(cells_df)))

    out = DataFrame(results, index=cells_df.index)
    return out.astype(np.float64)
