# framesketch/validate.py
"""
MODEL VALIDATION
================

Checks a model snapshot before analysis. Every check runs independently
and ALL issues are collected, so the editor can show the whole list at
once. The only short-circuit is "no members": nothing else is meaningful
without them.

    level "error"    → analysis is refused
    level "warning"  → analysis runs, caller may display the warning

The constraint-count check (pin=2, roller=1, fix=3, total ≥ 3) is a
necessary-but-not-sufficient stability heuristic. Mechanisms that slip
through are caught by the linear solver as "singular" or "unstable".

ISSUE CODES:
------------
errors:   no_members, isolated_nodes, disconnected_structure, no_supports,
          support_not_on_member, insufficient_constraints,
          zero_length_member, unknown_node, dangling_reference, duplicate_ids,
          non_finite_coordinate, non_finite_load
warnings: no_loads, zero_magnitude_load, duplicate_nodes, moment_at_hinge
"""

from dataclasses import dataclass
from typing import Dict, List, Literal, Tuple

import numpy as np

from .config import CONFIG, SolverConfig
from .model import FemInput
from .supports import CONSTRAINT_COUNT


ValidationLevel = Literal["error", "warning"]


@dataclass(frozen=True)
class ValidationIssue:
    level: ValidationLevel
    code: str
    message: str
    related_ids: Tuple[str, ...] = ()

    def to_dict(self) -> Dict:
        d = {"level": self.level, "code": self.code, "message": self.message}
        if self.related_ids:
            d["ids"] = list(self.related_ids)
        return d


@dataclass(frozen=True)
class ValidationResult:
    ok: bool
    issues: Tuple[ValidationIssue, ...] = ()

    @property
    def errors(self) -> List[ValidationIssue]:
        return [i for i in self.issues if i.level == "error"]

    @property
    def warnings(self) -> List[ValidationIssue]:
        return [i for i in self.issues if i.level == "warning"]

    def codes(self) -> List[str]:
        return [i.code for i in self.issues]

    def error_message(self) -> str:
        """Newline-joined messages of every error-level issue."""
        return "\n".join(i.message for i in self.errors)

    def to_dict(self) -> Dict:
        return {"ok": self.ok, "issues": [i.to_dict() for i in self.issues]}


class _UnionFind:
    def __init__(self, items):
        self.parent = {x: x for x in items}

    def find(self, x):
        root = x
        while self.parent[root] != root:
            root = self.parent[root]
        # path compression
        while self.parent[x] != root:
            self.parent[x], x = root, self.parent[x]
        return root

    def union(self, x, y):
        self.parent[self.find(x)] = self.find(y)


def _error(code: str, message: str, ids=()) -> ValidationIssue:
    return ValidationIssue("error", code, message, tuple(ids))


def _warning(code: str, message: str, ids=()) -> ValidationIssue:
    return ValidationIssue("warning", code, message, tuple(ids))


def _duplicates(ids) -> List[str]:
    seen = set()
    dups = []
    for i in ids:
        if i in seen:
            dups.append(i)
        else:
            seen.add(i)
    return dups


def validate_model(model: FemInput, config: SolverConfig = CONFIG) -> ValidationResult:
    """
    Validate a model snapshot.

    Parameters:
    -----------
    model : FemInput
        Snapshot to check
    config : SolverConfig
        Tolerances (zero-length distance, minimum constraint count)

    Returns:
    --------
    ValidationResult
        ok is True iff no error-level issue was found
    """
    issues: List[ValidationIssue] = []

    # 1. No members: nothing else to check
    if not model.members:
        issues.append(_error("no_members", "The model has no members."))
        return ValidationResult(ok=False, issues=tuple(issues))

    node_map = model.node_map()
    member_ids = {m.id for m in model.members}
    joint_nodes = model.joint_node_ids()

    # Duplicate ids break every id-keyed lookup downstream
    dup_ids = _duplicates([n.id for n in model.nodes]) + _duplicates([m.id for m in model.members])
    if dup_ids:
        issues.append(_error(
            "duplicate_ids",
            f"{len(dup_ids)} node/member id(s) are used more than once.",
            dup_ids,
        ))

    # Members must reference existing nodes
    bad_members = [m.id for m in model.members if m.a not in node_map or m.b not in node_map]
    if bad_members:
        issues.append(_error(
            "unknown_node",
            f"{len(bad_members)} member(s) reference a node that does not exist.",
            bad_members,
        ))

    # 2. Isolated nodes
    used_node_ids = {nid for m in model.members for nid in (m.a, m.b) if nid in node_map}
    isolated = [n.id for n in model.nodes if n.id not in used_node_ids]
    if isolated:
        issues.append(_error(
            "isolated_nodes",
            f"{len(isolated)} node(s) are not connected to any member. Remove them.",
            isolated,
        ))

    # 3. Connectivity over nodes used by members
    if used_node_ids:
        uf = _UnionFind(used_node_ids)
        for m in model.members:
            if m.a in used_node_ids and m.b in used_node_ids:
                uf.union(m.a, m.b)
        n_components = len({uf.find(nid) for nid in used_node_ids})
        if n_components > 1:
            issues.append(_error(
                "disconnected_structure",
                f"The members form {n_components} separate groups. Connect them into one structure.",
            ))

    # 4-6. Supports
    if not model.supports:
        issues.append(_error(
            "no_supports",
            "No supports are defined. Place at least one pin, roller or fix support.",
        ))
    else:
        off_member = [s.id for s in model.supports if s.node_id not in used_node_ids]
        if off_member:
            issues.append(_error(
                "support_not_on_member",
                f"{len(off_member)} support(s) are not on a node connected to a member.",
                off_member,
            ))

        total_constraints = constraint_count(model)
        if total_constraints < config.min_constraints:
            issues.append(_error(
                "insufficient_constraints",
                f"Supports provide {total_constraints} constraint(s); at least "
                f"{config.min_constraints} are needed (e.g. pin + roller).",
            ))

    # References from joints, loads and supports
    dangling = (
        [j.id for j in model.joints if j.node_id not in node_map]
        + [s.id for s in model.supports if s.node_id not in node_map]
        + [p.id for p in model.point_loads if p.node_id not in node_map]
        + [ml.id for ml in model.moment_loads if ml.node_id not in node_map]
        + [d.id for d in model.dist_loads if d.member_id not in member_ids]
    )
    if dangling:
        issues.append(_error(
            "dangling_reference",
            f"{len(dangling)} item(s) reference a node or member that does not exist.",
            dangling,
        ))

    # 7. No loads
    if not (model.point_loads or model.dist_loads or model.moment_loads):
        issues.append(_warning(
            "no_loads",
            "No loads are defined. All section forces will be zero.",
        ))

    # 8. Zero-magnitude loads
    zero_loads = [
        l.id for l in (*model.point_loads, *model.dist_loads, *model.moment_loads)
        if l.magnitude == 0
    ]
    if zero_loads:
        issues.append(_warning(
            "zero_magnitude_load",
            f"{len(zero_loads)} load(s) have zero magnitude and contribute nothing.",
            zero_loads,
        ))

    # Non-finite numbers cannot be assembled
    bad_coords = [n.id for n in model.nodes if not (np.isfinite(n.x) and np.isfinite(n.y))]
    if bad_coords:
        issues.append(_error(
            "non_finite_coordinate",
            f"{len(bad_coords)} node(s) have a coordinate that is not a finite number.",
            bad_coords,
        ))

    bad_loads = [
        l.id for l in (*model.point_loads, *model.dist_loads, *model.moment_loads)
        if not np.isfinite(l.magnitude) or not np.isfinite(getattr(l, "angle_deg", 0.0))
    ]
    if bad_loads:
        issues.append(_error(
            "non_finite_load",
            f"{len(bad_loads)} load(s) have a magnitude or angle that is not a finite number.",
            bad_loads,
        ))

    # 9. Duplicate nodes at the same rounded coordinate
    seen_coords = set()
    dup_nodes = []
    for n in model.nodes:
        if n.id in bad_coords:
            continue
        key = (_js_round(n.x), _js_round(n.y))
        if key in seen_coords:
            dup_nodes.append(n.id)
        else:
            seen_coords.add(key)
    if dup_nodes:
        issues.append(_warning(
            "duplicate_nodes",
            f"{len(dup_nodes)} node(s) share coordinates with another node. Check if this is intended.",
            dup_nodes,
        ))

    # 10. Zero-length members
    zero_members = []
    for m in model.members:
        a = node_map.get(m.a)
        b = node_map.get(m.b)
        if a is None or b is None:
            continue
        if np.hypot(b.x - a.x, b.y - a.y) < config.zero_length_tol:
            zero_members.append(m.id)
    if zero_members:
        issues.append(_error(
            "zero_length_member",
            f"{len(zero_members)} member(s) have zero length.",
            zero_members,
        ))

    # Moment loads at hinges act on a single member end
    hinge_moments = [ml.id for ml in model.moment_loads if ml.node_id in joint_nodes]
    if hinge_moments:
        issues.append(_warning(
            "moment_at_hinge",
            f"{len(hinge_moments)} moment load(s) sit on a hinge; each is applied "
            "to the first member meeting that node.",
            hinge_moments,
        ))

    ok = not any(i.level == "error" for i in issues)
    return ValidationResult(ok=ok, issues=tuple(issues))


def _js_round(v: float) -> int:
    """Round half up, so 0.5 → 1 and -0.5 → 0 (Python's round() is half-even)."""
    return int(np.floor(v + 0.5))


def constraint_count(model: FemInput) -> int:
    """Total constraint count of the model's supports."""
    return sum(CONSTRAINT_COUNT.get(s.type, 0) for s in model.supports)
