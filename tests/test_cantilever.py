import numpy as np

from framesketch import FemInput, Member, MomentLoad, Node, PointLoad, Support, solve_fem
from framesketch.model import DEFAULT_SECTION, SectionProps


def _cantilever(L, P=0.0, moment=None):
    loads = [PointLoad("P1", "n2", angle_deg=0.0, magnitude=P)] if P else []
    moments = [moment] if moment is not None else []
    return FemInput(
        nodes=[Node("n1", 0.0, 0.0), Node("n2", L, 0.0)],
        members=[Member("m1", "n1", "n2")],
        supports=[Support("s1", "n1", "fix")],
        point_loads=loads,
        moment_loads=moments,
    )


def test_cantilever_tip_load_deflection():
    L = 3.0
    P = 1000.0
    EI = DEFAULT_SECTION.EI

    result = solve_fem(_cantilever(L, P))
    assert result.ok, result

    tip = result.displacement("n2")

    # Load angle 0° points along +y (down on screen), so the tip moves +y
    uy_expected = P * L**3 / (3 * EI)
    rz_expected = P * L**2 / (2 * EI)

    assert np.isclose(tip.uy, uy_expected, rtol=1e-4)
    assert np.isclose(tip.rot, rz_expected, rtol=1e-4)
    assert abs(tip.ux) < 1e-9

    # Reaction pushes back against the load
    r = result.reaction("s1")
    assert np.isclose(r.fy, -P, rtol=1e-6)
    assert np.isclose(r.fx, 0.0, atol=1e-6)
    assert np.isclose(abs(r.m), P * L, rtol=1e-6)


def test_cantilever_deflection_scales_with_section():
    """Doubling EI halves the tip deflection."""
    L, P = 2.0, 50.0
    soft = solve_fem(_cantilever(L, P), section=SectionProps(EA=1e6, EI=1e4))
    stiff = solve_fem(_cantilever(L, P), section=SectionProps(EA=1e6, EI=2e4))

    assert np.isclose(
        soft.displacement("n2").uy, 2 * stiff.displacement("n2").uy, rtol=1e-6
    )
    assert np.isclose(stiff.displacement("n2").uy, P * L**3 / (3 * 2e4), rtol=1e-4)


def test_cantilever_end_forces():
    """
    Fixed end carries shear P and moment PL; the free tip carries no moment.
    """
    L, P = 3.0, 1000.0
    result = solve_fem(_cantilever(L, P))
    e = result.element("m1")

    assert np.isclose(e.Qa, P, rtol=1e-6)
    assert np.isclose(e.Qb, -P, rtol=1e-6)
    assert np.isclose(e.Ma, -P * L, rtol=1e-6)
    assert np.isclose(e.Mb, 0.0, atol=1e-6)
    assert np.isclose(e.Na, 0.0, atol=1e-6)
    assert np.isclose(e.Nb, 0.0, atol=1e-6)

    # Moment diagram is linear from -PL to 0
    for p in e.points:
        assert np.isclose(p.M, -P * L * (1 - p.t), atol=1e-6)
        assert np.isclose(p.Q, P, rtol=1e-6)


def test_cantilever_tip_moment():
    """
    A clockwise tip moment M rotates the tip by ML/EI in the positive
    (clockwise on screen) sense; the fixed end resists with -M.
    """
    L, M = 4.0, 250.0
    EI = DEFAULT_SECTION.EI

    cw = solve_fem(_cantilever(L, moment=MomentLoad("M1", "n2", clockwise=True, magnitude=M)))
    ccw = solve_fem(_cantilever(L, moment=MomentLoad("M1", "n2", clockwise=False, magnitude=M)))

    assert np.isclose(cw.displacement("n2").rot, M * L / EI, rtol=1e-4)
    assert np.isclose(ccw.displacement("n2").rot, -M * L / EI, rtol=1e-4)

    # Tip deflection under end moment: ML²/(2EI)
    assert np.isclose(cw.displacement("n2").uy, M * L**2 / (2 * EI), rtol=1e-4)

    assert np.isclose(cw.reaction("s1").m, -M, rtol=1e-6)
    assert np.isclose(cw.reaction("s1").fy, 0.0, atol=1e-6)

    # Uniform bending moment along the member
    e = cw.element("m1")
    for p in e.points:
        assert np.isclose(abs(p.M), M, rtol=1e-6)


def test_inclined_cantilever_axial_load():
    """
    A vertical cantilever (pointing down the screen) loaded along its axis
    only stretches: δ = PL/EA and the section force is pure tension.
    """
    L, P = 5.0, 200.0
    EA = DEFAULT_SECTION.EA
    model = FemInput(
        nodes=[Node("top", 0.0, 0.0), Node("tip", 0.0, L)],
        members=[Member("m1", "top", "tip")],
        supports=[Support("s1", "top", "fix")],
        point_loads=[PointLoad("P1", "tip", angle_deg=0.0, magnitude=P)],
    )
    result = solve_fem(model)
    assert result.ok

    assert np.isclose(result.displacement("tip").uy, P * L / EA, rtol=1e-4)
    assert np.isclose(result.displacement("tip").ux, 0.0, atol=1e-9)

    e = result.element("m1")
    assert np.isclose(e.Na, P, rtol=1e-6)
    assert np.isclose(e.Nb, P, rtol=1e-6)
    assert np.isclose(e.Ma, 0.0, atol=1e-6)
    print(f"✓ Axial cantilever: N = {e.Na:.2f}, δ = {result.displacement('tip').uy:.6f}")
