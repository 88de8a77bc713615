#global K assembly

import logging
from typing import Dict, Tuple

import numpy as np

from .config import CONFIG, SolverConfig
from .elements import frame2d_global_stiffness, member_geometry
from .kernel.assemble import assemble_global_K
from .kernel.dof import DOFMap
from .model import FemInput, SectionProps

logger = logging.getLogger(__name__)

Geometry = Tuple[float, float, float]  # (L, c, s)


def member_geometries(model: FemInput, config: SolverConfig = CONFIG) -> Dict[str, Geometry]:
    """
    (L, c, s) for every member long enough to assemble.

    Members shorter than config.degenerate_length are left out; they are
    already reported by validation.
    """
    nodes = model.node_map()
    geometry = {}
    for m in model.members:
        a = nodes[m.a]
        b = nodes[m.b]
        L = float(np.hypot(b.x - a.x, b.y - a.y))
        if L < config.degenerate_length:
            logger.debug("Skipping degenerate member %s (L=%.3e)", m.id, L)
            continue
        geometry[m.id] = member_geometry(a, b)
    return geometry


def assemble_stiffness(
    model: FemInput,
    dof_map: DOFMap,
    geometry: Dict[str, Geometry],
    section: SectionProps,
) -> np.ndarray:
    """Global stiffness matrix (no supports applied yet)."""
    contributions = []
    for m in model.members:
        if m.id not in geometry:
            continue
        L, c, s = geometry[m.id]
        ke = frame2d_global_stiffness(section.EA, section.EI, L, c, s)
        contributions.append((dof_map.element_dofs(m), ke))

    return assemble_global_K(dof_map.ndof, contributions)
