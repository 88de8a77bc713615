# framesketch - 2D frame/truss analysis for a sketching editor
"""
FRAMESKETCH: Structural Solver for a 2D Frame Sketcher
======================================================

The editor draws nodes, members, supports, hinges and loads; this package
turns a snapshot of that drawing into section forces, reactions and
displacements.

ARCHITECTURE:
-------------
    kernel/         DOF numbering (hinge-aware), scatter-add, linear solve
    model.py        Immutable model snapshot (Node, Member, Support, ...)
    validate.py     Pre-analysis checks (errors block, warnings don't)
    elements.py     Frame element stiffness and transform
    assembly.py     Global stiffness assembly
    loads.py        Point, distributed and moment loads
    supports.py     Penalty-method boundary conditions
    post.py         Section forces, reactions, displacements
    solve.py        solve_fem / run_analysis entry points
    diagrams.py     Deflected shape, diagram scaling, summaries
    api/            FastAPI surface
"""

from .config import CONFIG, SolverConfig
from .kernel import MechanismError, SingularSystemError, UnstableSystemError
from .model import (
    DEFAULT_SECTION,
    DistLoad,
    FemInput,
    Joint,
    Member,
    ModelInputError,
    MomentLoad,
    Node,
    PointLoad,
    SectionProps,
    Support,
)
from .results import FemFailure, FemResult, FemSuccess
from .solve import AnalysisReport, run_analysis, solve_fem
from .validate import ValidationIssue, ValidationResult, validate_model

# Version
__version__ = "0.1.0"
