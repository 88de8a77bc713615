# framesketch/diagrams.py
"""
DIAGRAM HELPERS
===============

Numbers the editor needs to draw results, computed from a solved result:

1. Deflected shape - curved member shape by Hermite interpolation
2. Diagram scale   - factor that maps the largest N/Q/M to a pixel height
3. Summary         - maximum section forces and displacement of the model

Drawing itself (polylines, colours, labels) is the editor's job.

DEFLECTED SHAPE:
----------------
Axial displacement is interpolated linearly, transverse displacement with
Hermite cubics:

    v(t) = N1·va + N2·θa·L + N3·vb + N4·θb·L

θa and θb are the member's OWN end rotations (stored on ElementResult),
so a member ending at a hinge bends with its released rotation rather
than the node's.
"""

from dataclasses import dataclass
from typing import Dict, List, Literal, Optional, Sequence, Tuple

import numpy as np

from .model import FemInput
from .results import ElementResult, FemSuccess


DiagramMode = Literal["N", "Q", "M"]


@dataclass(frozen=True)
class DeflectedPoint:
    """A point on the deflected shape curve (global coordinates, deformed)."""
    x: float
    y: float


def hermite_shape_functions(t: float) -> Tuple[float, float, float, float]:
    """
    Hermite cubic shape functions at normalized position t (0 ≤ t ≤ 1).

    Returns:
    --------
    N1, N2, N3, N4 : float
        v(t) = N1*va + N2*θa*L + N3*vb + N4*θb*L
    """
    N1 = 1 - 3*t**2 + 2*t**3
    N2 = t - 2*t**2 + t**3
    N3 = 3*t**2 - 2*t**3
    N4 = -t**2 + t**3
    return N1, N2, N3, N4


def deflected_shape(
    model: FemInput,
    element: ElementResult,
    amplify: float = 1.0,
    n_points: int = 21,
) -> List[DeflectedPoint]:
    """
    Curved deflected shape of one member.

    Parameters:
    -----------
    model : FemInput
        Snapshot the result was computed from (for member end coordinates)
    element : ElementResult
        Solved member result carrying its local end displacements
    amplify : float
        Displacement magnification for display
    n_points : int
        Number of points along the member, ends included

    Returns:
    --------
    List[DeflectedPoint]
    """
    member = model.member_map()[element.member_id]
    nodes = model.node_map()
    a = nodes[member.a]
    b = nodes[member.b]
    L = float(np.hypot(b.x - a.x, b.y - a.y))
    c = (b.x - a.x) / L
    s = (b.y - a.y) / L

    ua, va, theta_a, ub, vb, theta_b = element.local_displacements

    points = []
    for i in range(n_points):
        t = i / (n_points - 1)

        u = ua + (ub - ua) * t
        N1, N2, N3, N4 = hermite_shape_functions(t)
        v = N1 * va + N2 * theta_a * L + N3 * vb + N4 * theta_b * L

        # local (u, v) → global (dx, dy)
        dx = u * c - v * s
        dy = u * s + v * c

        points.append(DeflectedPoint(
            x=a.x + t * L * c + amplify * dx,
            y=a.y + t * L * s + amplify * dy,
        ))
    return points


def diagram_scale(
    elements: Sequence[ElementResult],
    mode: DiagramMode,
    base_height: float,
    user_scale: float = 1.0,
) -> float:
    """
    Scale that draws the largest |value| of `mode` at base_height × user_scale.

    Returns 1.0 when every value is (numerically) zero.
    """
    max_val = 0.0
    for e in elements:
        for p in e.points:
            v = abs(getattr(p, mode))
            if v > max_val:
                max_val = v
    if max_val < 1e-10:
        return 1.0
    return (base_height / max_val) * user_scale


def result_summary(result: FemSuccess) -> Dict[str, Optional[object]]:
    """
    Summary statistics of a solved model.

    Returns:
    --------
    Dict with max_axial_force, max_shear_force, max_moment (absolute values,
    over all section-force samples), the member ids where they occur, and
    max_displacement (largest translational displacement magnitude) with
    its node id.
    """
    summary: Dict[str, Optional[object]] = {
        "max_axial_force": 0.0,
        "max_shear_force": 0.0,
        "max_moment": 0.0,
        "critical_member_N": None,
        "critical_member_Q": None,
        "critical_member_M": None,
        "max_displacement": 0.0,
        "critical_node": None,
    }

    for key, mode in (("axial_force", "N"), ("shear_force", "Q"), ("moment", "M")):
        for e in result.elements:
            peak = max((abs(getattr(p, mode)) for p in e.points), default=0.0)
            if summary["critical_member_" + mode] is None or peak > summary["max_" + key]:
                summary["max_" + key] = peak
                summary["critical_member_" + mode] = e.member_id

    for d in result.displacements:
        mag = float(np.hypot(d.ux, d.uy))
        if summary["critical_node"] is None or mag > summary["max_displacement"]:
            summary["max_displacement"] = mag
            summary["critical_node"] = d.node_id

    return summary
