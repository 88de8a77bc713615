# framesketch/kernel - DOF numbering, assembly and linear solve
"""
KERNEL: THE NUMERICAL FOUNDATION
================================

Everything here is element-agnostic plumbing:
- A hinge-aware map from (node, local DOF) → global DOF index
- Scatter-add of element matrices and load vectors
- Dense solve with mechanism detection

The frame ELEMENT itself (stiffness, transform, fixed-end forces) lives in
the package modules that sit on top of the kernel.
"""

from .dof import DOFMap, build_dof_map
from .assemble import assemble_global_K, assemble_global_F, add_nodal_load
from .solve import solve_linear, MechanismError, SingularSystemError, UnstableSystemError

__all__ = [
    'DOFMap', 'build_dof_map',
    'assemble_global_K', 'assemble_global_F', 'add_nodal_load',
    'solve_linear', 'MechanismError', 'SingularSystemError', 'UnstableSystemError',
]
