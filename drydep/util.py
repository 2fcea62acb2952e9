"""
Software utilities

"""
import numpy as np


class DryDepError(Exception):
    """Custom exception to throw when a deposition calculation is misconfigured."""

    def __init__(self, error_str):
        self.error_str = error_str

    def __str__(self):
        return repr(self.error_str)


def conductance(r):
    """Inverse of a resistance, treating 0 as a short circuit and inf as open."""
    if r == 0.0:
        return np.inf
    return 1.0 / r


def parallel(*resistances):
    """Combine resistances in parallel; an all-open network is infinite."""
    total = sum(conductance(r) for r in resistances)
    if total == 0.0:
        return np.inf
    return 1.0 / total
