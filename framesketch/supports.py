# framesketch/supports.py
"""
SUPPORTS: Penalty-Method Boundary Conditions
============================================

A constrained DOF is enforced by adding a very large stiffness (the
penalty) to K instead of eliminating its row and column. The system keeps
its size and DOF numbering, the load vector is untouched, and the solved
displacement at a restrained DOF is ~F/penalty ≈ 0.

    fix     ux, uy and rotation restrained
    pin     ux, uy restrained, rotation free
    roller  translation restrained along one direction only

Roller direction (screen axes, y down):
    angle 0°  → n = (0, 1)  restrains y, slides along x
    angle 90° → n = (1, 0)  restrains x, slides along y

The roller adds penalty·n·nᵀ to the ux/uy block, so only the component
of displacement along n is resisted.
"""

import logging
from typing import Sequence, Tuple

import numpy as np

from .kernel.dof import DOFMap
from .model import Support

logger = logging.getLogger(__name__)

# Constraint count used by the validator's stability heuristic
CONSTRAINT_COUNT = {"pin": 2, "roller": 1, "fix": 3}


def roller_constraint_vector(angle_deg: float) -> Tuple[float, float]:
    """Unit vector (nx, ny) of the restrained direction of a roller."""
    rad = np.deg2rad(angle_deg)
    return float(np.sin(rad)), float(np.cos(rad))


def apply_supports(
    K: np.ndarray,
    supports: Sequence[Support],
    dof_map: DOFMap,
    penalty: float = 1e15,
) -> np.ndarray:
    """
    Return a copy of K with support penalties added.

    Parameters:
    -----------
    K : np.ndarray
        Assembled global stiffness (left unmodified)
    supports : Sequence[Support]
    dof_map : DOFMap
    penalty : float
        Penalty stiffness, far above any physical stiffness term

    Returns:
    --------
    np.ndarray
        Penalized stiffness matrix
    """
    K_bc = K.copy()

    for sup in supports:
        dofs = dof_map.node_dofs.get(sup.node_id)
        if dofs is None:
            continue
        ux, uy, rz = dofs

        if sup.type == "fix":
            K_bc[ux, ux] += penalty
            K_bc[uy, uy] += penalty
            if rz is not None:
                K_bc[rz, rz] += penalty
            # A fixed hinge node: lock every member end rotation there too
            for hd in dof_map.hinge_dofs_at(sup.node_id):
                K_bc[hd, hd] += penalty

        elif sup.type == "pin":
            K_bc[ux, ux] += penalty
            K_bc[uy, uy] += penalty

        elif sup.type == "roller":
            nx, ny = roller_constraint_vector(sup.angle_deg)
            K_bc[ux, ux] += penalty * nx * nx
            K_bc[ux, uy] += penalty * nx * ny
            K_bc[uy, ux] += penalty * ny * nx
            K_bc[uy, uy] += penalty * ny * ny

        else:
            raise ValueError(f"Unknown support type {sup.type!r} on support {sup.id}")

    logger.debug("Penalty supports applied at %d node(s)", len(supports))
    return K_bc
