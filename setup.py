#! /usr/bin/env python

import os
from textwrap import dedent

from setuptools import setup

MAJOR, MINOR, MICRO = 0, 1, 0
DEV_ITER = 0
DEV = True

if DEV:
    VERSION = "{}.{}.dev{}".format(MAJOR, MINOR, DEV_ITER)
else:
    VERSION = "{}.{}.{}".format(MAJOR, MINOR, MICRO)


def _write_version_file():
    fn = os.path.join(os.path.dirname(__file__), "drydep", "version.py")

    version_str = dedent(
        """
        __version__ = '{}'
        """
    )

    # Write version file
    with open(fn, "w") as version_file:
        version_file.write(version_str.format(VERSION))


# Write version and install
_write_version_file()

setup(
    name="drydep",
    author="Daniel Rothenberg",
    author_email="daniel@danielrothenberg.com",
    maintainer="Daniel Rothenberg",
    maintainer_email="daniel@danielrothenberg.com",
    description="drydep: dry deposition velocities of gases and aerosols",
    long_description="""
        This code implements the surface-layer resistance models used by atmospheric
        chemistry and transport models to compute dry deposition velocities: a simplified
        friction-velocity based scheme, the land use and season resolved surface resistance
        network of Wesely (1989), a kinetic-theory particle scheme, and size-resolved
        deposition and sedimentation of lognormal aerosol modes.
    """,
    license="New BSD (3-clause)",
    version=VERSION,
    install_requires=[
        "numpy",
        "pandas",
        "pyyaml",
        "scipy",
        "setuptools",
        "xarray",
    ],
    extras_require={"test": ["pytest"]},
    packages=["drydep", "drydep.test"],
    package_data={"drydep": ["data/*.csv"]},
    scripts=["scripts/run_drydep.py"],
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Environment :: Console",
        "Intended Audience :: Science/Research",
        "License :: OSI Approved :: BSD License",
        "Natural Language :: English",
        "Operating System :: Unix",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Topic :: Scientific/Engineering :: Atmospheric Science",
    ],
)
