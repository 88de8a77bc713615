# framesketch/kernel/dof.py
"""
DOF MAP: Hinge-Aware Degree of Freedom Indexing
===============================================

PURPOSE:
--------
This module maps (node, local DOF) to global DOF indices for a 2D frame
where some nodes are moment releases (hinges).

    Ordinary node:  [ux, uy, rz]     3 DOF, rotation shared by all members
    Hinge node:     [ux, uy, None]   2 DOF, no shared rotation

Every member END that sits on a hinge node gets its OWN rotation DOF,
keyed by (member_id, node_id). Members meeting at a hinge therefore
rotate independently and no moment is transmitted through the node.

WHY NOT JUST RELEASE A SHARED ROTATION?
---------------------------------------
If a hinge node kept one rotation DOF and every member end were released
from it, that DOF would have zero stiffness and K would be singular.
Giving each member end its own rotation removes the orphan DOF entirely.

USAGE:
------
    dof_map = build_dof_map(model.nodes, model.members, model.joints)
    dof_map.ndof                          # size of K
    dof_map.element_dofs(member)          # 6 global indices for scatter
    dof_map.rotation_dof("m1", "n2")      # hinge-aware rotation lookup
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple

logger = logging.getLogger(__name__)

NodeDofs = Tuple[int, int, Optional[int]]


@dataclass
class DOFMap:
    """
    Global DOF numbering for one analysis run.

    Attributes:
    -----------
    node_dofs : Dict[str, NodeDofs]
        node_id → (ux, uy, rz); rz is None for hinge nodes
    hinge_dofs : Dict[Tuple[str, str], int]
        (member_id, node_id) → independent end rotation at a hinge
    ndof : int
        Total number of unknowns (size of K and F)

    Examples:
    ---------
    >>> dof_map = build_dof_map(nodes, members, joints=[Joint("j1", "n2")])
    >>> dof_map.node_dofs["n1"]
    (0, 1, 2)
    >>> dof_map.node_dofs["n2"]
    (3, 4, None)
    """
    node_dofs: Dict[str, NodeDofs] = field(default_factory=dict)
    hinge_dofs: Dict[Tuple[str, str], int] = field(default_factory=dict)
    ndof: int = 0

    def is_hinge(self, node_id: str) -> bool:
        return self.node_dofs[node_id][2] is None

    def rotation_dof(self, member_id: str, node_id: str) -> int:
        """
        Rotation DOF seen by `member_id` at `node_id`.

        Returns the member's own hinge rotation if the node is a hinge,
        otherwise the node's shared rotation.
        """
        rz = self.node_dofs[node_id][2]
        if rz is None:
            return self.hinge_dofs[(member_id, node_id)]
        return rz

    def element_dofs(self, member) -> List[int]:
        """
        Global indices for a member's 6 local DOFs.

        Order matches the element matrices:
        [a.ux, a.uy, rot_a, b.ux, b.uy, rot_b]
        """
        ux_a, uy_a, _ = self.node_dofs[member.a]
        ux_b, uy_b, _ = self.node_dofs[member.b]
        return [
            ux_a, uy_a, self.rotation_dof(member.id, member.a),
            ux_b, uy_b, self.rotation_dof(member.id, member.b),
        ]

    def hinge_dofs_at(self, node_id: str) -> List[int]:
        """All per-member hinge rotations attached to a node (empty if not a hinge)."""
        return [idx for (_, nid), idx in self.hinge_dofs.items() if nid == node_id]


def build_dof_map(nodes: Iterable, members: Iterable, joints: Iterable) -> DOFMap:
    """
    Number the unknowns of a model.

    Nodes are numbered first, in input order, then one extra rotation for
    every member end that lands on a hinge node, in member order.

    Parameters:
    -----------
    nodes : Iterable[Node]
    members : Iterable[Member]
    joints : Iterable[Joint]
        Hinge markers; a node listed here gets no shared rotation.

    Returns:
    --------
    DOFMap
    """
    hinge_nodes = {j.node_id for j in joints}
    dof_map = DOFMap()
    idx = 0

    for n in nodes:
        if n.id in hinge_nodes:
            dof_map.node_dofs[n.id] = (idx, idx + 1, None)
            idx += 2
        else:
            dof_map.node_dofs[n.id] = (idx, idx + 1, idx + 2)
            idx += 3

    for m in members:
        for nid in (m.a, m.b):
            if nid in hinge_nodes:
                dof_map.hinge_dofs[(m.id, nid)] = idx
                idx += 1

    dof_map.ndof = idx
    logger.debug(
        "DOF map: %d nodes, %d hinge ends, %d unknowns",
        len(dof_map.node_dofs), len(dof_map.hinge_dofs), idx,
    )
    return dof_map
