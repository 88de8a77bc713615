# loads.py - Nodal, distributed and moment loads → global load vector

import logging
from typing import Dict, List, Sequence, Tuple

import numpy as np

from .elements import frame2d_transform
from .kernel.assemble import add_nodal_load, assemble_global_F
from .kernel.dof import DOFMap
from .model import DistLoad, FemInput, MomentLoad

logger = logging.getLogger(__name__)


def load_vector(angle_deg: float, magnitude: float) -> Tuple[float, float]:
    """
    Global (fx, fy) of a load given by angle and magnitude.

    Angle convention (screen axes, y down):
        0° → (0, +P)   down
        90° → (-P, 0)  left
        -90° → (+P, 0) right
        180° → (0, -P) up
    """
    rad = np.deg2rad(angle_deg)
    return float(-magnitude * np.sin(rad)), float(magnitude * np.cos(rad))


def udl_local_intensity(angle_deg: float, magnitude: float, c: float, s: float) -> Tuple[float, float]:
    """
    Split a uniform load into local axial (qu) and transverse (qv) intensity
    for a member with direction cosines (c, s).
    """
    wx, wy = load_vector(angle_deg, magnitude)
    qu = wx * c + wy * s
    qv = -wx * s + wy * c
    return qu, qv


def frame2d_equiv_nodal_load_udl(L: float, qu: float, qv: float) -> np.ndarray:
    """
    Equivalent nodal loads of a uniform load in LOCAL member coordinates.

    A uniform load over a fixed-fixed member is carried half to each end;
    the transverse part also produces end moments ±qv·L²/12.

    Parameters:
    -----------
    L : float
        Member length
    qu : float
        Axial intensity per unit length (local +x, from a toward b)
    qv : float
        Transverse intensity per unit length (local +y)

    Returns:
    --------
    np.ndarray
        Shape (6,): [Fu_a, Fv_a, M_a, Fu_b, Fv_b, M_b]

    Examples:
    --------
    >>> frame2d_equiv_nodal_load_udl(4.0, 0.0, 10.0)
    array([ 0.        , 20.        , 13.33333333,  0.        , 20.        , -13.33333333])
    """
    moment = qv * L * L / 12.0
    return np.array([
        qu * L / 2.0,
        qv * L / 2.0,
        moment,
        qu * L / 2.0,
        qv * L / 2.0,
        -moment,
    ], dtype=float)


def group_dist_loads(dist_loads: Sequence[DistLoad]) -> Dict[str, List[DistLoad]]:
    """Collect distributed loads by member id, preserving input order."""
    grouped: Dict[str, List[DistLoad]] = {}
    for dl in dist_loads:
        grouped.setdefault(dl.member_id, []).append(dl)
    return grouped


def member_fixed_end_forces(L: float, c: float, s: float, loads: Sequence[DistLoad]) -> Tuple[np.ndarray, float, float]:
    """
    Summed local equivalent nodal loads of every distributed load on one member.

    Returns:
    --------
    (f_local, qu_total, qv_total)
        f_local is the (6,) local vector; the totals are the member's
        combined axial and transverse intensities.
    """
    f_local = np.zeros(6, dtype=float)
    qu_total = 0.0
    qv_total = 0.0
    for dl in loads:
        qu, qv = udl_local_intensity(dl.angle_deg, dl.magnitude, c, s)
        f_local += frame2d_equiv_nodal_load_udl(L, qu, qv)
        qu_total += qu
        qv_total += qv
    return f_local, qu_total, qv_total


def signed_moment(load: MomentLoad) -> float:
    """
    Moment load as a value on the rotation DOF.

    With y pointing down the positive rotation sense (x toward y) is
    clockwise on screen, so clockwise loads are positive.
    """
    return load.magnitude if load.clockwise else -load.magnitude


def moment_load_dof(model: FemInput, dof_map: DOFMap, node_id: str) -> int:
    """
    Rotation DOF that receives a nodal moment.

    A hinge node has no shared rotation; the moment goes to the end rotation
    of the first member (in model order) meeting the node.
    """
    rz = dof_map.node_dofs[node_id][2]
    if rz is not None:
        return rz
    for m in model.members:
        if node_id in (m.a, m.b):
            return dof_map.rotation_dof(m.id, node_id)
    raise KeyError(f"Hinge node {node_id} has no member to carry a moment load.")


def assemble_load_vector(
    model: FemInput,
    dof_map: DOFMap,
    geometry: Dict[str, Tuple[float, float, float]],
) -> np.ndarray:
    """
    Build the global load vector F from point, distributed and moment loads.

    Parameters:
    -----------
    model : FemInput
        Model snapshot
    dof_map : DOFMap
        Hinge-aware DOF numbering for this model
    geometry : Dict[str, (L, c, s)]
        Member geometry keyed by member id (degenerate members omitted)

    Returns:
    --------
    np.ndarray
        Global load vector, shape (dof_map.ndof,)
    """
    members = model.member_map()

    # Distributed loads: equivalent nodal loads, rotated back to global axes
    contributions = []
    for member_id, loads in group_dist_loads(model.dist_loads).items():
        if member_id not in members or member_id not in geometry:
            continue
        L, c, s = geometry[member_id]
        f_local, _, _ = member_fixed_end_forces(L, c, s, loads)
        T = frame2d_transform(c, s)
        f_global = T.T @ f_local
        contributions.append((dof_map.element_dofs(members[member_id]), f_global))

    F = assemble_global_F(dof_map.ndof, contributions)

    for pl in model.point_loads:
        if pl.node_id not in dof_map.node_dofs:
            continue
        ux, uy, _ = dof_map.node_dofs[pl.node_id]
        add_nodal_load(F, [ux, uy], load_vector(pl.angle_deg, pl.magnitude))

    for ml in model.moment_loads:
        if ml.node_id not in dof_map.node_dofs:
            continue
        F[moment_load_dof(model, dof_map, ml.node_id)] += signed_moment(ml)

    logger.debug(
        "Loads assembled: %d point, %d distributed, %d moment",
        len(model.point_loads), len(model.dist_loads), len(model.moment_loads),
    )
    return F
