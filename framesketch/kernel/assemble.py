# framesketch/kernel/assemble.py
"""
ASSEMBLY: Global Matrix Scatter-Add
===================================

PURPOSE:
--------
Scatter element-level stiffness matrices and load vectors into the global
K and F. Assembly does not care what the element is; it only needs, for
each element, its DOF map and its matrix (or vector) in global axes.

Hinge handling lives entirely in the DOF map: a member end at a hinge
simply maps its rotation to that member's private rotation index.

USAGE:
------
    contributions = []
    for member in members:
        dofs = dof_map.element_dofs(member)
        ke = frame2d_global_stiffness(EA, EI, L, c, s)
        contributions.append((dofs, ke))

    K = assemble_global_K(dof_map.ndof, contributions)
"""

import numpy as np
from typing import List, Sequence, Tuple


def assemble_global_K(
    ndof: int,
    contributions: Sequence[Tuple[Sequence[int], np.ndarray]]
) -> np.ndarray:
    """
    Assemble the global stiffness matrix from element contributions.

    ALGORITHM:
    ----------
    K = zeros(ndof × ndof)
    for each element:
        for each (a, b) in ke:
            K[dofs[a], dofs[b]] += ke[a, b]

    Parameters:
    -----------
    ndof : int
        Total number of DOFs in the system
    contributions : Sequence[Tuple[Sequence[int], np.ndarray]]
        (dofs, ke) per element; ke has shape (len(dofs), len(dofs))

    Returns:
    --------
    np.ndarray
        Global stiffness matrix K, shape (ndof, ndof), symmetric
    """
    K = np.zeros((ndof, ndof), dtype=float)

    for dofs, ke in contributions:
        n_element_dofs = len(dofs)

        assert ke.shape == (n_element_dofs, n_element_dofs), \
            f"Element ke shape {ke.shape} doesn't match dof map length {n_element_dofs}"

        idx = np.asarray(dofs, dtype=int)
        # np.add.at accumulates repeated indices correctly
        np.add.at(K, np.ix_(idx, idx), ke)

    return K


def assemble_global_F(
    ndof: int,
    contributions: Sequence[Tuple[Sequence[int], np.ndarray]]
) -> np.ndarray:
    """
    Assemble the global load vector from element contributions.

    Same scatter-add as assemble_global_K, for vectors. Used for the
    equivalent nodal loads of distributed loads.
    """
    F = np.zeros(ndof, dtype=float)

    for dofs, fe in contributions:
        n_element_dofs = len(dofs)

        assert fe.shape == (n_element_dofs,), \
            f"Element fe shape {fe.shape} doesn't match dof map length {n_element_dofs}"

        np.add.at(F, np.asarray(dofs, dtype=int), fe)

    return F


def add_nodal_load(F: np.ndarray, dofs: List[int], load_vector: Sequence[float]) -> None:
    """
    Add a nodal load to the global load vector (in-place).

    Parameters:
    -----------
    F : np.ndarray
        Global load vector (modified in-place)
    dofs : List[int]
        Global indices receiving the components, e.g. [ux, uy]
    load_vector : Sequence[float]
        Components in the same order as `dofs`, e.g. [Fx, Fy]

    Example:
    --------
    >>> F = np.zeros(6)
    >>> add_nodal_load(F, [3, 4], [0.0, 10.0])
    >>> F[4]
    10.0
    """
    for dof, val in zip(dofs, load_vector):
        F[dof] += val
