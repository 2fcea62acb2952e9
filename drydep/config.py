""" Reading and validating YAML namelists for batch deposition runs.

A namelist has up to five sections::

    meteorology:            # scalars, or equal-length lists (one per cell)
      T: [288.15, 298.15]
      P: 101325.
      ustar: [0.2, 0.4]
      z0: 0.1
      pblh: 1000.
      hflux: [-20., 150.]
      season: Midsummer
      land_use: Deciduous
    gases: [SO2, O3, NO2]
    particles:
      - {name: dust, diameter: 2.0e-6, density: 2650.}
    aerosol_modes:          # either three modes, or a Whitby (1978) aerosol
      whitby: continental
      density: 1700.
    experiment_control:
      name: test_run
      output_dir: output
      output_format: nc

"""
import warnings

import pandas as pd
import yaml

from .distributions import whitby_distributions
from .driver import REQUIRED_INPUTS
from .modal import AerosolMode, ModeKind
from .util import DryDepError
from .wesely import GAS_DATA

__all__ = ["load_namelist", "parse_namelist"]

#: Recognized top-level sections
SECTIONS = ["meteorology", "gases", "particles", "aerosol_modes", "experiment_control"]

#: Defaults for the experiment control section
EXPERIMENT_DEFAULTS = {"name": "drydep", "output_dir": ".", "output_format": "nc"}


def load_namelist(path):
    """Read a YAML namelist from disk and validate it.

    Parameters
    ----------
    path : str
        path to the namelist file

    Returns
    -------
    dict
        see :func:`parse_namelist`

    Raises
    ------
    DryDepError
        If the file cannot be parsed or fails validation.

    """
    with open(path, "rb") as f:
        try:
            y = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise DryDepError("Could not parse namelist %s: %s" % (path, e))
    return parse_namelist(y)


def _parse_meteorology(met):
    if not isinstance(met, dict):
        raise DryDepError("'meteorology' must be a mapping of inputs")
    missing = [key for key in REQUIRED_INPUTS if key not in met]
    if missing:
        raise DryDepError("'meteorology' is missing required inputs %r" % missing)
    if ("obk" not in met) and ("hflux" not in met):
        raise DryDepError("'meteorology' needs either 'obk' or 'hflux'")

    lengths = {len(v) for v in met.values() if isinstance(v, (list, tuple))}
    if len(lengths) > 1:
        raise DryDepError("'meteorology' lists have unequal lengths %r" % sorted(lengths))
    n_cells = lengths.pop() if lengths else 1

    return pd.DataFrame(
        {
            key: (list(v) if isinstance(v, (list, tuple)) else [v] * n_cells)
            for key, v in met.items()
        }
    )


def _parse_particles(particles):
    out = []
    for i, p in enumerate(particles):
        try:
            name, diameter, density = p["name"], float(p["diameter"]), float(p["density"])
        except (KeyError, TypeError, ValueError):
            raise DryDepError(
                "Particle %d needs a 'name', 'diameter' (m) and 'density' (kg/m3)" % i
            )
        if diameter <= 0.0 or density <= 0.0:
            raise DryDepError("Particle '%s' needs a positive diameter and density" % name)
        if diameter > 1e-3:
            warnings.warn(
                "Particle '%s' has a diameter of %g m; diameters are in meters"
                % (name, diameter)
            )
        out.append(dict(name=name, diameter=diameter, density=density))
    return out


def _parse_modes(modes):
    if isinstance(modes, dict):
        if "whitby" not in modes:
            raise DryDepError("'aerosol_modes' mapping must name a 'whitby' aerosol")
        name = modes["whitby"]
        if name not in whitby_distributions:
            raise DryDepError(
                "Unknown Whitby aerosol '%s'; choose from %r"
                % (name, sorted(whitby_distributions.keys()))
            )
        density = float(modes.get("density", 1000.0))
        return [
            AerosolMode.from_lognorm(dist, density) for dist in whitby_distributions[name]
        ]

    if len(modes) != len(ModeKind):
        raise DryDepError(
            "'aerosol_modes' needs %d modes (nucleation, accumulation, coarse)"
            % len(ModeKind)
        )
    try:
        return [
            AerosolMode(float(m["dg"]), float(m["sigma_g"]), float(m["density"]))
            for m in modes
        ]
    except (KeyError, TypeError) as e:
        raise DryDepError("Aerosol modes need 'dg', 'sigma_g' and 'density': %s" % e)
    except ValueError as e:
        raise DryDepError("Invalid aerosol mode: %s" % e)


def parse_namelist(y):
    """Validate an in-memory namelist.

    Parameters
    ----------
    y : dict
        namelist, as read from YAML

    Returns
    -------
    dict
        with keys ``cells`` (a DataFrame with one row per grid cell),
        ``gases`` (list of str), ``particles`` (list of dicts), ``modes``
        (list of three :class:`drydep.modal.AerosolMode`, or None) and
        ``experiment_control`` (dict, with defaults filled in)

    Raises
    ------
    DryDepError
        If any section is missing or invalid.

    """
    if not isinstance(y, dict):
        raise DryDepError("Namelist must be a mapping of sections")
    unknown = [key for key in y if key not in SECTIONS]
    if unknown:
        warnings.warn("Ignoring unknown namelist sections %r" % unknown)
    if "meteorology" not in y:
        raise DryDepError("Namelist has no 'meteorology' section")

    gases = list(y.get("gases") or [])
    bad_gases = [gas for gas in gases if gas not in GAS_DATA]
    if bad_gases:
        raise DryDepError(
            "Unknown gases %r; choose from %r" % (bad_gases, sorted(GAS_DATA.keys()))
        )

    modes = y.get("aerosol_modes")
    ec = dict(EXPERIMENT_DEFAULTS)
    ec.update(y.get("experiment_control") or {})

    return dict(
        cells=_parse_meteorology(y["meteorology"]),
        gases=gases,
        particles=_parse_particles(y.get("particles") or []),
        modes=_parse_modes(modes) if modes else None,
        experiment_control=ec,
    )
