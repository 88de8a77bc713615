# framesketch/kernel/solve.py
"""Dense linear solve with singular and unstable (mechanism) detection."""

import logging

import numpy as np

logger = logging.getLogger(__name__)


class MechanismError(RuntimeError):
    """Raised when structure is unstable or ill-conditioned."""
    pass


class SingularSystemError(MechanismError):
    """The stiffness matrix could not be factorized."""
    pass


class UnstableSystemError(MechanismError):
    """A solution was produced but it is non-finite or implausibly large."""
    pass


def solve_linear(
    K: np.ndarray,
    F: np.ndarray,
    displacement_limit: float = 1e10
) -> np.ndarray:
    """
    Solve K·u = F for a system whose supports are already applied (penalty).

    Args:
        K: Global stiffness matrix with support penalties (ndof x ndof)
        F: Global load vector (ndof,)
        displacement_limit: Largest |u| accepted as physical

    Returns:
        u: Displacement vector (ndof,)

    Raises:
        SingularSystemError: If K is numerically singular
        UnstableSystemError: If u has non-finite entries or max|u| > displacement_limit
    """
    try:
        u = np.linalg.solve(K, F)
    except np.linalg.LinAlgError as e:
        raise SingularSystemError(
            f"Stiffness matrix is singular ({e}). The structure may be a mechanism."
        ) from e

    if u.size == 0:
        return u

    max_disp = float(np.max(np.abs(u)))
    logger.debug("Linear solve: ndof=%d, max|u|=%.3e", u.size, max_disp)

    if not np.isfinite(max_disp) or max_disp > displacement_limit:
        raise UnstableSystemError(
            f"Unstable system (max|u|={max_disp:.2e} > {displacement_limit:.0e}). Check supports."
        )

    return u
