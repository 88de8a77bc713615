# File: tests/test_simply_supported_udl.py
"""
TEST: SIMPLY SUPPORTED BEAM WITH UNIFORM DISTRIBUTED LOAD (UDL)
================================================================

For a simply supported beam with uniform load q over length L:
- Each support reaction: R = qL/2
- Maximum moment (midspan): M_max = qL²/8
- Maximum deflection (midspan): δ_max = 5qL⁴/(384EI)

Because the member forces are corrected by the fixed-end forces of the
load, a SINGLE member already reproduces the exact moment diagram; no
meshing is needed for the section forces.
"""

import numpy as np
import pytest

from framesketch import DistLoad, FemInput, Member, Node, Support, solve_fem
from framesketch.model import DEFAULT_SECTION
from framesketch.results import reaction_totals


def _udl_beam(L, q, n_members=1, angle=0.0):
    xs = np.linspace(0.0, L, n_members + 1)
    nodes = [Node(f"n{i}", float(x), 0.0) for i, x in enumerate(xs)]
    members = [Member(f"m{i}", f"n{i}", f"n{i+1}") for i in range(n_members)]
    return FemInput(
        nodes=nodes,
        members=members,
        supports=[
            Support("sA", "n0", "pin"),
            Support("sB", f"n{n_members}", "roller", angle_deg=0.0),
        ],
        dist_loads=[DistLoad(f"q{i}", m.id, angle_deg=angle, magnitude=q) for i, m in enumerate(members)],
    )


@pytest.mark.parametrize("L, q", [(4.0, 1000.0), (10.0, 2.5), (7.5, 120.0)])
def test_udl_midspan_moment(L, q):
    """Midspan sample of a single loaded member equals qL²/8."""
    result = solve_fem(_udl_beam(L, q))
    assert result.ok, result

    e = result.element("m0")
    assert len(e.points) == 11

    mid = e.points[5]
    assert np.isclose(mid.t, 0.5)
    assert np.isclose(mid.M, q * L**2 / 8, rtol=1e-6)

    # Moment vanishes at both supports, shear is ±qL/2 at the ends
    assert np.isclose(e.Ma, 0.0, atol=1e-6 * q * L**2)
    assert np.isclose(e.Mb, 0.0, atol=1e-6 * q * L**2)
    assert np.isclose(e.Qa, q * L / 2, rtol=1e-6)
    assert np.isclose(e.points[-1].Q, -q * L / 2, rtol=1e-6)
    assert np.isclose(mid.Q, 0.0, atol=1e-6 * q * L)

    print(f"✓ M_mid = {mid.M:.3f} (expected {q * L**2 / 8:.3f})")


def test_udl_reactions():
    L, q = 4.0, 1000.0
    result = solve_fem(_udl_beam(L, q))

    assert np.isclose(result.reaction("sA").fy, -q * L / 2, rtol=1e-6)
    assert np.isclose(result.reaction("sB").fy, -q * L / 2, rtol=1e-6)
    assert np.isclose(reaction_totals(result.reactions)["fy"], -q * L, rtol=1e-6)


def test_udl_deflection_meshed():
    """
    Nodal deflections of Euler-Bernoulli elements with consistent UDL loads
    are exact, so the midspan node of an even mesh gives 5qL⁴/(384EI).
    """
    L, q = 4.0, 1000.0
    EI = DEFAULT_SECTION.EI
    result = solve_fem(_udl_beam(L, q, n_members=10))
    assert result.ok

    uy_mid = result.displacement("n5").uy
    assert np.isclose(uy_mid, 5 * q * L**4 / (384 * EI), rtol=1e-4)


def test_udl_moment_continuous_across_mesh():
    """End moments of adjacent members match at shared nodes."""
    result = solve_fem(_udl_beam(6.0, 50.0, n_members=4))
    for left, right in zip(result.elements[:-1], result.elements[1:]):
        assert np.isclose(left.Mb, right.Ma, rtol=1e-6, atol=1e-6)
        assert np.isclose(left.points[-1].M, left.Mb, rtol=1e-6, atol=1e-6)


def test_multiple_udls_on_one_member_superpose():
    """Two loads of q/2 on the same member behave as one load q."""
    L, q = 5.0, 80.0
    single = solve_fem(_udl_beam(L, q))
    doubled = FemInput(
        nodes=_udl_beam(L, q).nodes,
        members=_udl_beam(L, q).members,
        supports=_udl_beam(L, q).supports,
        dist_loads=[
            DistLoad("qa", "m0", angle_deg=0.0, magnitude=q / 2),
            DistLoad("qb", "m0", angle_deg=0.0, magnitude=q / 2),
        ],
    )
    split = solve_fem(doubled)
    assert split.ok

    for p_single, p_split in zip(single.element("m0").points, split.element("m0").points):
        assert np.isclose(p_single.M, p_split.M, rtol=1e-7, atol=1e-6)
        assert np.isclose(p_single.Q, p_split.Q, rtol=1e-7, atol=1e-6)


def test_axial_udl_on_horizontal_member():
    """
    A load along the member axis (angle -90° → +x) on a pin-roller beam
    is taken by the pin: tension falls linearly from qL at the pin to 0 at the roller.
    """
    L, q = 4.0, 10.0
    result = solve_fem(_udl_beam(L, q, angle=-90.0))
    assert result.ok

    e = result.element("m0")
    assert np.isclose(result.reaction("sA").fx, -q * L, rtol=1e-6)
    assert np.isclose(e.points[0].N, q * L, rtol=1e-6)
    assert np.isclose(e.points[-1].N, 0.0, atol=1e-6)
    assert np.isclose(e.points[5].M, 0.0, atol=1e-6)
