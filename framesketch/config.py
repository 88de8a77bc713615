"""
Solver configuration and defaults.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class SolverConfig:
    """Numerical settings for one analysis run."""

    # Boundary conditions
    penalty: float = 1e15  # must dwarf every physical stiffness term

    # Linear solve sanity limit on |u|
    displacement_limit: float = 1e10

    # Post-processing
    n_samples: int = 11  # section-force samples per member (ends included)

    # Geometry tolerances
    zero_length_tol: float = 1e-6    # validation: member treated as zero length
    degenerate_length: float = 1e-10  # assembly: member skipped

    # Validation heuristic: pin=2, roller=1, fix=3 must sum to at least this
    min_constraints: int = 3


# Global config instance
CONFIG = SolverConfig()
