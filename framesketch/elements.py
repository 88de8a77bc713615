# Frame2D element stiffness + transformation

import numpy as np
from .model import Node


def member_geometry(a: Node, b: Node):
    """Length and direction cosines (c, s) of the member a → b."""
    dx = b.x - a.x
    dy = b.y - a.y
    L = float(np.hypot(dx, dy))
    if L <= 0.0:
        raise ValueError(f"Member between {a.id} and {b.id} has zero length.")
    c = dx / L
    s = dy / L
    return L, c, s


def frame2d_local_stiffness(EA: float, EI: float, L: float) -> np.ndarray:
    """
    Local stiffness matrix in member local coords (x along member).
    DOF order: [ua, va, θa, ub, vb, θb]
    """
    EA_L = EA / L
    L2 = L * L
    L3 = L2 * L

    k = np.array([
        [ EA_L,      0.0,        0.0,    -EA_L,      0.0,        0.0],
        [  0.0,  12*EI/L3,   6*EI/L2,      0.0, -12*EI/L3,   6*EI/L2],
        [  0.0,   6*EI/L2,    4*EI/L,      0.0,  -6*EI/L2,    2*EI/L],
        [-EA_L,      0.0,        0.0,     EA_L,      0.0,        0.0],
        [  0.0, -12*EI/L3,  -6*EI/L2,      0.0,  12*EI/L3,  -6*EI/L2],
        [  0.0,   6*EI/L2,    2*EI/L,      0.0,  -6*EI/L2,    4*EI/L],
    ], dtype=float)
    return k


def frame2d_transform(c: float, s: float) -> np.ndarray:
    """
    6x6 transform from global DOFs to local DOFs: q_local = T @ q_global.
    """
    T = np.array([
        [ c,  s, 0,  0, 0, 0],
        [-s,  c, 0,  0, 0, 0],
        [ 0,  0, 1,  0, 0, 0],
        [ 0,  0, 0,  c, s, 0],
        [ 0,  0, 0, -s, c, 0],
        [ 0,  0, 0,  0, 0, 1],
    ], dtype=float)
    return T


def frame2d_global_stiffness(EA: float, EI: float, L: float, c: float, s: float) -> np.ndarray:
    k_local = frame2d_local_stiffness(EA, EI, L)
    T = frame2d_transform(c, s)
    k_global = T.T @ k_local @ T
    return k_global
