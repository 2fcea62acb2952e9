#!/usr/bin/env python
"""
CLI interface to compute dry deposition velocities over a set of grid cells.

"""
import os
import sys
from argparse import ArgumentParser, RawDescriptionHelpFormatter

import pandas as pd

import drydep as dd
import drydep.config
import drydep.output

parser = ArgumentParser(
    description=__doc__, formatter_class=RawDescriptionHelpFormatter
)
parser.add_argument(
    "namelist",
    type=str,
    metavar="config.yml",
    help="YAML namelist controlling the deposition calculation",
)
parser.add_argument(
    "-q", "--quiet", action="store_true", help="suppress per-cell console output"
)


def run_drydep():
    # Read command-line arguments
    args = parser.parse_args()

    # Convert the namelist file into an in-memory configuration
    try:
        print("Attempting to read namelist {}".format(args.namelist))
        config = drydep.config.load_namelist(args.namelist)
    except IOError:
        print("Couldn't read file {}".format(args.namelist))
        sys.exit(1)
    except dd.DryDepError as e:
        print("Invalid namelist: {}".format(e.error_str))
        sys.exit(1)

    cells = config["cells"]
    print("Computing deposition velocities for {:d} cells".format(len(cells)))
    if config["modes"] is not None:
        print("Aerosol modes")
        for i, mode in enumerate(config["modes"], start=1):
            print("   {:2d})".format(i), mode)

    results = dd.run_grid(
        cells,
        gases=config["gases"],
        particles=config["particles"],
        modes=config["modes"],
        console=not args.quiet,
    )
    inputs = cells.select_dtypes("number").drop(columns=results.columns, errors="ignore")
    results = pd.concat([inputs, results], axis=1)

    # Output
    ec = config["experiment_control"]

    # Make output directory if it doesn't exist
    if not os.path.exists(ec["output_dir"]):
        os.makedirs(ec["output_dir"])

    out_file = os.path.join(ec["output_dir"], ec["name"]) + "." + ec["output_format"]
    try:
        drydep.output.write_output(results, out_file, console=True)
    except dd.DryDepError as e:
        print("Couldn't save output: {}".format(e.error_str))
        sys.exit(1)
    except (IOError, RuntimeError):
        print("Something went wrong saving to {}".format(out_file))
        sys.exit(1)

    # Succesful completion
    print("Done!")


if __name__ == "__main__":
    run_drydep()
