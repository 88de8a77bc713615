# element end forces, section-force samples, reactions, displacements

import numpy as np
from typing import Dict, List, Sequence, Tuple

from .elements import frame2d_local_stiffness, frame2d_transform
from .kernel.dof import DOFMap
from .loads import member_fixed_end_forces
from .model import DistLoad, FemInput, Member, SectionProps
from .results import DisplacementResult, ElementResult, ReactionResult, SectionPoint


def element_local_displacements(
    member: Member,
    geometry: Tuple[float, float, float],
    u: np.ndarray,
    dof_map: DOFMap,
) -> np.ndarray:
    """Member end displacements in local axes: [ua, va, θa, ub, vb, θb]."""
    _, c, s = geometry
    d_elem_global = u[dof_map.element_dofs(member)]
    T = frame2d_transform(c, s)
    return T @ d_elem_global


def element_forces(
    member: Member,
    geometry: Tuple[float, float, float],
    u: np.ndarray,
    dof_map: DOFMap,
    section: SectionProps,
    dist_loads: Sequence[DistLoad] = (),
    n_samples: int = 11,
) -> ElementResult:
    """
    Section forces of one member from the solved displacement vector.

    The process:
    1. Gather the member's global displacements (hinge-aware rotations)
    2. Transform to local coordinates
    3. Local end forces f = k × q
    4. Subtract the equivalent nodal loads of the member's own distributed
       loads, so the result reflects the real internal forces
    5. Convert to section-force signs and sample along the member

    Sign convention from the local end-force vector f (tension positive):
        Na = -f[0]   Qa = -f[1]   Ma =  f[2]
        Nb =  f[3]   Qb = -f[4]   Mb = -f[5]

    Along the member (x from end a):
        N(x) = Na - qu·x
        Q(x) = Qa - qv·x
        M(x) = Ma + Qa·x - qv·x²/2
    """
    L, c, s = geometry
    q_local = element_local_displacements(member, geometry, u, dof_map)

    k_local = frame2d_local_stiffness(section.EA, section.EI, L)
    f_local = k_local @ q_local

    qu, qv = 0.0, 0.0
    if dist_loads:
        f_fixed, qu, qv = member_fixed_end_forces(L, c, s, dist_loads)
        f_local = f_local - f_fixed

    Na = float(-f_local[0])
    Qa = float(-f_local[1])
    Ma = float(f_local[2])
    Nb = float(f_local[3])
    Qb = float(-f_local[4])
    Mb = float(-f_local[5])

    points = []
    for i in range(n_samples):
        t = i / (n_samples - 1)
        x = t * L
        points.append(SectionPoint(
            t=t,
            N=Na - qu * x,
            Q=Qa - qv * x,
            M=Ma + Qa * x - qv * x * x / 2.0,
        ))

    return ElementResult(
        member_id=member.id,
        Na=Na, Qa=Qa, Ma=Ma,
        Nb=Nb, Qb=Qb, Mb=Mb,
        points=tuple(points),
        length=L,
        local_displacements=tuple(float(v) for v in q_local),
    )


def support_reactions(
    model: FemInput,
    K: np.ndarray,
    F: np.ndarray,
    u: np.ndarray,
    dof_map: DOFMap,
) -> List[ReactionResult]:
    """
    Reaction of every support: R = K·u - F at its constrained DOFs.

    K must be the stiffness BEFORE support penalties. The penalized system
    is solved exactly, so its own residual is zero; the unpenalized residual
    is the force the penalty springs carry, i.e. the support reaction.

    A moment reaction is reported only for fix supports on nodes that own a
    rotation DOF (not hinges).
    """
    R = K @ u - F

    reactions = []
    for sup in model.supports:
        dofs = dof_map.node_dofs.get(sup.node_id)
        if dofs is None:
            continue
        ux, uy, rz = dofs
        m = float(R[rz]) if sup.type == "fix" and rz is not None else 0.0
        reactions.append(ReactionResult(
            support_id=sup.id,
            node_id=sup.node_id,
            fx=float(R[ux]),
            fy=float(R[uy]),
            m=m,
        ))
    return reactions


def nodal_displacements(
    model: FemInput,
    u: np.ndarray,
    dof_map: DOFMap,
) -> List[DisplacementResult]:
    """
    (ux, uy, rot) for every node. Hinge nodes report rot = 0 because their
    rotations belong to the individual member ends.
    """
    result = []
    for n in model.nodes:
        ux, uy, rz = dof_map.node_dofs[n.id]
        result.append(DisplacementResult(
            node_id=n.id,
            ux=float(u[ux]),
            uy=float(u[uy]),
            rot=float(u[rz]) if rz is not None else 0.0,
        ))
    return result


def compute_element_results(
    model: FemInput,
    geometry: Dict[str, Tuple[float, float, float]],
    u: np.ndarray,
    dof_map: DOFMap,
    section: SectionProps,
    dist_loads_by_member: Dict[str, List[DistLoad]],
    n_samples: int = 11,
) -> List[ElementResult]:
    """Element results for every non-degenerate member, in model order."""
    results = []
    for m in model.members:
        if m.id not in geometry:
            continue
        results.append(element_forces(
            m, geometry[m.id], u, dof_map, section,
            dist_loads_by_member.get(m.id, ()), n_samples,
        ))
    return results
