"""
Test the diagram helpers: Hermite shape functions, deflected shape,
diagram scaling and the result summary.
"""

import numpy as np
import pytest

from framesketch import FemInput, Member, Node, PointLoad, Support, solve_fem
from framesketch.diagrams import deflected_shape, diagram_scale, hermite_shape_functions, result_summary
from framesketch.model import DEFAULT_SECTION
from framesketch.results import ElementResult, SectionPoint


def _cantilever(L=3.0, P=1000.0):
    return FemInput(
        nodes=[Node("n1", 0.0, 0.0), Node("n2", L, 0.0)],
        members=[Member("m1", "n1", "n2")],
        supports=[Support("s1", "n1", "fix")],
        point_loads=[PointLoad("P1", "n2", angle_deg=0.0, magnitude=P)],
    )


@pytest.mark.parametrize("t", [0.0, 0.3, 0.5, 1.0])
def test_hermite_partition_of_unity(t):
    N1, _, N3, _ = hermite_shape_functions(t)
    assert np.isclose(N1 + N3, 1.0)


def test_hermite_end_values():
    assert hermite_shape_functions(0.0) == (1, 0, 0, 0)
    assert hermite_shape_functions(1.0) == (0, 0, 1, 0)


def test_deflected_shape_matches_cantilever_curve():
    """
    Hermite interpolation is exact for a cubic, so every point of the
    deflected cantilever matches v(x) = P x² (3L - x) / (6EI).
    """
    L, P = 3.0, 1000.0
    EI = DEFAULT_SECTION.EI
    model = _cantilever(L, P)
    result = solve_fem(model)

    points = deflected_shape(model, result.element("m1"), amplify=1.0, n_points=7)
    assert len(points) == 7
    assert np.isclose(points[0].x, 0.0) and np.isclose(points[0].y, 0.0, atol=1e-9)

    for i, p in enumerate(points):
        x = L * i / 6
        assert np.isclose(p.x, x, atol=1e-9)
        assert np.isclose(p.y, P * x**2 * (3 * L - x) / (6 * EI), rtol=1e-4, atol=1e-9)


def test_deflected_shape_amplify():
    model = _cantilever()
    e = solve_fem(model).element("m1")

    plain = deflected_shape(model, e, amplify=1.0)
    big = deflected_shape(model, e, amplify=50.0)
    assert np.isclose(big[-1].y, 50.0 * plain[-1].y)


def _element(values):
    points = tuple(SectionPoint(t=i / (len(values) - 1), N=0.0, Q=0.0, M=v) for i, v in enumerate(values))
    return ElementResult("m", 0.0, 0.0, values[0], 0.0, 0.0, values[-1], points)


def test_diagram_scale():
    elements = [_element([0.0, -250.0, 0.0]), _element([10.0, 100.0])]

    assert np.isclose(diagram_scale(elements, "M", base_height=50.0), 0.2)
    assert np.isclose(diagram_scale(elements, "M", base_height=50.0, user_scale=2.0), 0.4)
    # All-zero diagrams fall back to 1.0
    assert diagram_scale(elements, "N", base_height=50.0) == 1.0


def test_result_summary():
    L, P = 3.0, 1000.0
    EI = DEFAULT_SECTION.EI
    summary = result_summary(solve_fem(_cantilever(L, P)))

    assert np.isclose(summary["max_moment"], P * L, rtol=1e-6)
    assert np.isclose(summary["max_shear_force"], P, rtol=1e-6)
    assert summary["critical_member_M"] == "m1"
    assert summary["critical_node"] == "n2"
    assert np.isclose(summary["max_displacement"], P * L**3 / (3 * EI), rtol=1e-4)
