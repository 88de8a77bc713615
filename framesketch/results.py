# framesketch/results.py
"""
ANALYSIS RESULTS
================

The solver returns a discriminated result:

    FemSuccess(ok=True,  elements, reactions, displacements)
    FemFailure(ok=False, reason, message)

`to_dict()` on every result produces the camelCase shape the editor
renders from (memberId, supportId, nodeId, ...).

SIGN CONVENTIONS (member local axis runs from end a to end b):
-------------------------------------------------------------
- N: axial force, tension positive
- Q: shear force
- M: bending moment
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Literal, Tuple, Union


FailureReason = Literal["unstable", "unsupported", "no_members", "singular", "validation"]


@dataclass(frozen=True)
class SectionPoint:
    """Section forces at normalized position t (0 = end a, 1 = end b)."""
    t: float
    N: float
    Q: float
    M: float

    def to_dict(self) -> Dict[str, float]:
        return {"t": self.t, "N": self.N, "Q": self.Q, "M": self.M}


@dataclass(frozen=True)
class ElementResult:
    member_id: str
    Na: float
    Qa: float
    Ma: float
    Nb: float
    Qb: float
    Mb: float
    points: Tuple[SectionPoint, ...]
    length: float = 0.0
    # Local end displacements [ua, va, θa, ub, vb, θb]; θ is the member's own
    # end rotation, so hinge ends carry their released rotation here
    local_displacements: Tuple[float, ...] = (0.0,) * 6

    def to_dict(self) -> Dict[str, Any]:
        return {
            "memberId": self.member_id,
            "Na": self.Na, "Qa": self.Qa, "Ma": self.Ma,
            "Nb": self.Nb, "Qb": self.Qb, "Mb": self.Mb,
            "points": [p.to_dict() for p in self.points],
            "length": self.length,
            "localDisplacements": list(self.local_displacements),
        }


@dataclass(frozen=True)
class ReactionResult:
    support_id: str
    node_id: str
    fx: float
    fy: float
    m: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "supportId": self.support_id,
            "nodeId": self.node_id,
            "fx": self.fx,
            "fy": self.fy,
            "m": self.m,
        }


@dataclass(frozen=True)
class DisplacementResult:
    node_id: str
    ux: float
    uy: float
    rot: float

    def to_dict(self) -> Dict[str, Any]:
        return {"nodeId": self.node_id, "ux": self.ux, "uy": self.uy, "rot": self.rot}


@dataclass(frozen=True)
class FemSuccess:
    elements: Tuple[ElementResult, ...] = ()
    reactions: Tuple[ReactionResult, ...] = ()
    displacements: Tuple[DisplacementResult, ...] = ()
    ok: bool = field(default=True, init=False)

    def element(self, member_id: str) -> ElementResult:
        for e in self.elements:
            if e.member_id == member_id:
                return e
        raise KeyError(member_id)

    def reaction(self, support_id: str) -> ReactionResult:
        for r in self.reactions:
            if r.support_id == support_id:
                return r
        raise KeyError(support_id)

    def displacement(self, node_id: str) -> DisplacementResult:
        for d in self.displacements:
            if d.node_id == node_id:
                return d
        raise KeyError(node_id)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "ok": True,
            "elements": [e.to_dict() for e in self.elements],
            "reactions": [r.to_dict() for r in self.reactions],
            "displacements": [d.to_dict() for d in self.displacements],
        }


@dataclass(frozen=True)
class FemFailure:
    reason: FailureReason
    message: str
    ok: bool = field(default=False, init=False)

    def to_dict(self) -> Dict[str, Any]:
        return {"ok": False, "reason": self.reason, "message": self.message}


FemResult = Union[FemSuccess, FemFailure]


def reaction_totals(reactions: List[ReactionResult]) -> Dict[str, float]:
    """Sum of reaction components, handy for equilibrium checks."""
    return {
        "fx": float(sum(r.fx for r in reactions)),
        "fy": float(sum(r.fy for r in reactions)),
        "m": float(sum(r.m for r in reactions)),
    }
