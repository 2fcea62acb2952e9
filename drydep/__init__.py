"""
Dry Deposition of Gases and Particles
-------------------------------------

This package implements the surface-layer resistance models used by
atmospheric chemistry and transport models to compute dry deposition
velocities of trace gases and aerosol particles, from simple
friction-velocity based schemes to land-use and season resolved surface
resistance networks and size-resolved deposition of modal aerosols.

"""

from importlib.metadata import version as _version

try:
    __version__ = _version("drydep")
except Exception:
    # This is a local copy, or a copy that was not installed via setuptools
    __version__ = "local"

__author__ = "Daniel Rothenberg <daniel@danielrothenberg.com>"

# The simplified and kinetic-theory models share function names, so they are
# only reachable as submodules (drydep.gocart, drydep.seinfeld)
from . import gocart, seinfeld
from .distributions import *
from .driver import *
from .micromet import *
from .modal import *
from .particles import *
from .util import DryDepError
from .wesely import *
