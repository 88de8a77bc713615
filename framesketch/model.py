# framesketch/model.py
"""
MODEL SNAPSHOT: Nodes, Members, Supports, Joints and Loads
==========================================================

PURPOSE:
--------
The sketching editor owns the editable model. Whenever an analysis is
requested it hands the solver an immutable SNAPSHOT built from the
dataclasses below. The solver never mutates the snapshot and keeps no
reference to it after the call returns.

COORDINATES AND ANGLES:
-----------------------
Screen coordinates: x to the right, y DOWNWARD. All angles are in degrees.

    Load angle:   0° = down (+y), 90° = left (-x), -90° = right, 180° = up
    Roller angle: 0° = free along x (y restrained)
                  90° = free along y (x restrained)

Units are whatever the caller uses, as long as they are consistent.
"""

from dataclasses import dataclass
from typing import Any, Dict, Iterable, Literal, Tuple


SupportType = Literal["pin", "roller", "fix"]
SUPPORT_TYPES = ("pin", "roller", "fix")


class ModelInputError(ValueError):
    """Raised when a plain snapshot cannot be turned into a FemInput."""
    pass


@dataclass(frozen=True)
class Node:
    id: str
    x: float
    y: float


@dataclass(frozen=True)
class Member:
    """
    Straight 2-node frame member from node `a` to node `b`.

    Every member uses the single model-wide section (see SectionProps).
    """
    id: str
    a: str
    b: str


@dataclass(frozen=True)
class Support:
    id: str
    node_id: str
    type: SupportType
    angle_deg: float = 0.0  # only used by rollers


@dataclass(frozen=True)
class Joint:
    """Moment release (hinge): members meeting at node_id rotate independently."""
    id: str
    node_id: str


@dataclass(frozen=True)
class PointLoad:
    id: str
    node_id: str
    angle_deg: float
    magnitude: float


@dataclass(frozen=True)
class DistLoad:
    """Uniform load over the full member length, magnitude per unit length."""
    id: str
    member_id: str
    angle_deg: float
    magnitude: float


@dataclass(frozen=True)
class MomentLoad:
    id: str
    node_id: str
    clockwise: bool
    magnitude: float


@dataclass(frozen=True)
class SectionProps:
    """
    Section stiffness shared by every member of the model.

    Parameters:
    -----------
    EA : float
        Axial stiffness (modulus × area)
    EI : float
        Bending stiffness (modulus × second moment of area)
    """
    EA: float
    EI: float


DEFAULT_SECTION = SectionProps(EA=1e6, EI=1e4)


@dataclass(frozen=True)
class FemInput:
    """
    Complete structural model snapshot passed to the solver.

    All collections are tuples so a snapshot can be shared between
    independent solves without copying.
    """
    nodes: Tuple[Node, ...] = ()
    members: Tuple[Member, ...] = ()
    supports: Tuple[Support, ...] = ()
    joints: Tuple[Joint, ...] = ()
    point_loads: Tuple[PointLoad, ...] = ()
    dist_loads: Tuple[DistLoad, ...] = ()
    moment_loads: Tuple[MomentLoad, ...] = ()

    def __post_init__(self):
        # Accept lists from callers but store tuples
        for name in ("nodes", "members", "supports", "joints",
                     "point_loads", "dist_loads", "moment_loads"):
            value = getattr(self, name)
            if not isinstance(value, tuple):
                object.__setattr__(self, name, tuple(value))

    def node_map(self) -> Dict[str, Node]:
        return {n.id: n for n in self.nodes}

    def member_map(self) -> Dict[str, Member]:
        return {m.id: m for m in self.members}

    def joint_node_ids(self) -> set:
        return {j.node_id for j in self.joints}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FemInput":
        """
        Build a snapshot from the editor's plain dictionary form.

        Keys may be camelCase (``nodeId``, ``angleDeg``, ``pointLoads``) as
        produced by the editor, or snake_case. Missing collections are
        treated as empty.

        Raises:
        -------
        ModelInputError
            If a required field is missing, a support type is unknown or
            a clockwise flag is not a boolean.
        """
        try:
            nodes = [
                Node(str(n["id"]), float(n["x"]), float(n["y"]))
                for n in _items(data, "nodes")
            ]
            members = [
                Member(str(m["id"]), str(m["a"]), str(m["b"]))
                for m in _items(data, "members")
            ]
            supports = [
                Support(
                    str(s["id"]),
                    str(_field(s, "node_id", "nodeId")),
                    _support_type(s["type"]),
                    float(_field(s, "angle_deg", "angleDeg", default=0.0)),
                )
                for s in _items(data, "supports")
            ]
            joints = [
                Joint(str(j["id"]), str(_field(j, "node_id", "nodeId")))
                for j in _items(data, "joints")
            ]
            point_loads = [
                PointLoad(
                    str(p["id"]),
                    str(_field(p, "node_id", "nodeId")),
                    float(_field(p, "angle_deg", "angleDeg")),
                    float(p["magnitude"]),
                )
                for p in _items(data, "point_loads", "pointLoads")
            ]
            dist_loads = [
                DistLoad(
                    str(d["id"]),
                    str(_field(d, "member_id", "memberId")),
                    float(_field(d, "angle_deg", "angleDeg")),
                    float(d["magnitude"]),
                )
                for d in _items(data, "dist_loads", "distLoads")
            ]
            moment_loads = [
                MomentLoad(
                    str(ml["id"]),
                    str(_field(ml, "node_id", "nodeId")),
                    _clockwise(ml.get("clockwise", False)),
                    float(ml["magnitude"]),
                )
                for ml in _items(data, "moment_loads", "momentLoads")
            ]
        except ModelInputError:
            raise
        except KeyError as e:
            raise ModelInputError(f"Missing field {e} in model snapshot.") from e
        except (TypeError, ValueError) as e:
            raise ModelInputError(f"Malformed model snapshot: {e}") from e

        return cls(
            nodes=tuple(nodes),
            members=tuple(members),
            supports=tuple(supports),
            joints=tuple(joints),
            point_loads=tuple(point_loads),
            dist_loads=tuple(dist_loads),
            moment_loads=tuple(moment_loads),
        )


_MISSING = object()


def _items(data: Dict[str, Any], *keys: str) -> Iterable[Dict[str, Any]]:
    for key in keys:
        if key in data and data[key] is not None:
            return data[key]
    return ()


def _field(item: Dict[str, Any], *keys: str, default: Any = _MISSING) -> Any:
    for key in keys:
        if key in item:
            return item[key]
    if default is _MISSING:
        raise KeyError(keys[0])
    return default


def _clockwise(value: Any) -> bool:
    # only real booleans; bool("false") is True
    if not isinstance(value, bool):
        raise ModelInputError(f"clockwise must be true or false, got {value!r}.")
    return value


def _support_type(value: Any) -> SupportType:
    if value not in SUPPORT_TYPES:
        raise ModelInputError(
            f"Unknown support type {value!r}; expected one of {SUPPORT_TYPES}."
        )
    return value
