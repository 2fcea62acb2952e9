import os.path
from datetime import datetime as ddt

import numpy as np
import xarray as xr

from . import __version__ as ver
from .util import DryDepError

#: Acceptable output formats
OUTPUT_FORMATS = ["nc", "csv"]

#: Units and long names of the derived columns written by the driver
_ATTRS = {
    "obk": {"units": "m", "long_name": "Monin-Obukhov length"},
    "rho_air": {"units": "kg/m3", "long_name": "Air density"},
    "ra": {"units": "s/m", "long_name": "Aerodynamic resistance"},
    "T": {"units": "K", "long_name": "Air temperature"},
    "P": {"units": "Pa", "long_name": "Air pressure"},
    "ustar": {"units": "m/s", "long_name": "Friction velocity"},
    "z0": {"units": "m", "long_name": "Roughness length"},
    "pblh": {"units": "m", "long_name": "Boundary layer height"},
    "hflux": {"units": "W/m2", "long_name": "Surface sensible heat flux"},
    "G": {"units": "W/m2", "long_name": "Solar irradiation"},
}

_LONG_NAMES = {
    "vd_gocart": "%s dry deposition velocity, simplified resistance model",
    "vd_wesely": "%s dry deposition velocity, Wesely surface resistance",
    "vd_zhang": "%s dry deposition velocity, Zhang particle collection",
    "vd_number": "%s mode number-weighted deposition velocity",
    "vd_mass": "%s mode mass-weighted deposition velocity",
    "vs_number": "%s mode number-weighted sedimentation velocity",
    "vs_mass": "%s mode mass-weighted sedimentation velocity",
}


def get_timestamp(fmt="%m%d%y_%H%M%S"):
    """Get current timestamp in MMDDYY_hhmmss format."""
    return ddt.now().strftime(fmt)


def _variable_attrs(name):
    if name in _ATTRS:
        return _ATTRS[name]
    for prefix, long_name in _LONG_NAMES.items():
        if name.startswith(prefix + "_"):
            return {"units": "m/s", "long_name": long_name % name[len(prefix) + 1 :]}
    return {}


def write_output(df, filename=None, format=None, console=False):
    """Write a table of deposition velocities to disk.

    Parameters
    ----------
    df : DataFrame
        output of :func:`drydep.driver.run_grid`, one row per cell
    filename : str, optional
        full filename to write output; if not supplied, will default
        to the current timestamp
    format : str, optional
        format to use from ``OUTPUT_FORMATS``; must be supplied if no
        filename is provided, and otherwise overrides the extension
    console : boolean, optional (default=False)
        print the name of the file being written

    Returns
    -------
    str
        the name of the file written

    Raises
    ------
    DryDepError
        If no format can be determined, or it is not one of ``OUTPUT_FORMATS``.

    """
    if not filename:
        if not format:
            raise DryDepError("Must supply either a filename or format.")
        basename = get_timestamp()
    else:
        basename, extension = os.path.splitext(filename)
        if not format:
            format = extension[1:]  # strip '.'
    if format not in OUTPUT_FORMATS:
        raise DryDepError("Please supply a format from %r" % OUTPUT_FORMATS)

    out_fn = "%s.%s" % (basename, format)
    if console:
        print("Saving output to %s" % out_fn)

    # 1) csv
    if format == "csv":
        df.to_csv(out_fn, index_label="cell")

    # 2) nc
    else:
        ds = xr.Dataset(attrs={"Conventions": "CF-1.0", "source": "drydep v%s" % ver})
        ds.coords["cell"] = (
            "cell",
            np.arange(len(df), dtype=np.int32),
            {"long_name": "grid cell number"},
        )
        for name in df.columns:
            ds[name] = (("cell",), df[name].values, _variable_attrs(name))
        ds.to_netcdf(out_fn)

    return out_fn
