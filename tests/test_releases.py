"""
TEST: Member-End Releases (Hinges)
==================================

A released end carries no moment. We check:

1. The condensed stiffness matrix (zero rotation row/column, 3EI terms)
2. Propped-cantilever results produced by a release instead of a support
3. Pin-jointed trusses: zero moments, straight members, no false
   "unstable" flag for the unused joint rotations
4. A member hinged at both ends still carries its span load as a simply
   supported beam
"""

import numpy as np

from structmech.elements import frame2d_local_stiffness
from structmech.model import DistributedLoad, Frame2D, NodalForce, Node, PointLoad, Support
from structmech.solve import solve

E = 210e9
I = 8.0e-6
A = 0.01


def test_released_stiffness_matrix():
    """
    Released start: row/column of θ_i vanish, transverse stiffness 3EI/L³.
    Both released: axial link only.
    """
    L = 4.0
    k_full = frame2d_local_stiffness(E, A, I, L)
    k_start = frame2d_local_stiffness(E, A, I, L, release_start=True)
    k_end = frame2d_local_stiffness(E, A, I, L, release_end=True)
    k_both = frame2d_local_stiffness(E, A, I, L, True, True)

    assert np.isclose(k_full[1, 1], 12 * E * I / L**3)
    assert np.isclose(k_start[1, 1], 3 * E * I / L**3)
    assert np.isclose(k_start[5, 5], 3 * E * I / L)
    assert np.allclose(k_start[2, :], 0.0) and np.allclose(k_start[:, 2], 0.0)
    assert np.allclose(k_end[5, :], 0.0) and np.allclose(k_end[:, 5], 0.0)

    expected_both = np.zeros((6, 6))
    expected_both[np.ix_([0, 3], [0, 3])] = E * A / L * np.array([[1, -1], [-1, 1]])
    np.testing.assert_allclose(k_both, expected_both)

    for k in (k_start, k_end, k_both):
        np.testing.assert_allclose(k, k.T)
    print("✓ Released stiffness matrices are condensed correctly")


def test_propped_cantilever_by_support():
    """
    Fixed left end, roller right end, central point load P:
        R_fixed = 11P/16, R_roller = 5P/16, M_fixed = 3PL/16
    """
    L = 4.0
    P = 1000.0
    nodes = [Node(1, 0.0, 0.0, Support.FIXED.value), Node(2, L, 0.0, Support.ROLLER.value)]
    elements = [Frame2D(1, 1, 2, E, A, I)]
    result = solve(nodes, elements, [PointLoad("P", 1, -P, 0.5)])

    assert np.isclose(result.reaction(1).fy, 11 * P / 16, rtol=1e-6)
    assert np.isclose(result.reaction(2).fy, 5 * P / 16, rtol=1e-6)
    assert np.isclose(result.reaction(1).m, 3 * P * L / 16, rtol=1e-6)
    print("✓ Propped cantilever: 11P/16, 5P/16, 3PL/16")


def test_release_end_behaves_like_propped_cantilever():
    """
    Both supports fully fixed, but the member is hinged at its right end.
    Under a UDL q the member is a propped cantilever:
        R_left = 5qL/8, R_right = 3qL/8, M_left = qL²/8, M_right = 0
    Releasing the left end instead mirrors the result.
    """
    L = 4.0
    q = 1000.0
    nodes = [Node(1, 0.0, 0.0, Support.FIXED.value), Node(2, L, 0.0, Support.FIXED.value)]
    loads = [DistributedLoad("q", 1, -q)]

    result = solve(nodes, [Frame2D(1, 1, 2, E, A, I, release_end=True)], loads)
    assert np.isclose(result.reaction(1).fy, 5 * q * L / 8, rtol=1e-9)
    assert np.isclose(result.reaction(2).fy, 3 * q * L / 8, rtol=1e-9)
    assert np.isclose(result.reaction(1).m, q * L**2 / 8, rtol=1e-9)
    assert np.isclose(result.reaction(2).m, 0.0, atol=1e-9)
    beam = result.element(1)
    assert np.isclose(beam.stations[-1].moment, 0.0, atol=1e-9)
    assert np.isclose(beam.stations[0].moment, -q * L**2 / 8, rtol=1e-9)

    mirrored = solve(nodes, [Frame2D(1, 1, 2, E, A, I, release_start=True)], loads)
    assert np.isclose(mirrored.reaction(1).fy, 3 * q * L / 8, rtol=1e-9)
    assert np.isclose(mirrored.reaction(2).fy, 5 * q * L / 8, rtol=1e-9)
    assert np.isclose(mirrored.reaction(1).m, 0.0, atol=1e-9)
    assert np.isclose(mirrored.reaction(2).m, -q * L**2 / 8, rtol=1e-9)
    print("✓ End release redistributes fixed-end forces like a propped cantilever")


def test_pin_jointed_triangle():
    """
    Triangle truss, span 4 m, apex 2 m high, apex load P downward.

    Statics:
        reactions P/2 each
        rafters (45°): N = −P/(2·sin45°) (compression)
        tie: N = +P/2 (tension)
    All members are hinged at both ends: no moments, straight lines, and
    the joint rotations (which nothing resists) are not reported as
    instabilities.
    """
    P = 10_000.0
    nodes = [
        Node(1, 0.0, 0.0, Support.PINNED.value),
        Node(2, 4.0, 0.0, Support.ROLLER.value),
        Node(3, 2.0, 2.0),
    ]
    elements = [
        Frame2D(1, 1, 2, E, A, I, True, True),
        Frame2D(2, 2, 3, E, A, I, True, True),
        Frame2D(3, 1, 3, E, A, I, True, True),
    ]
    result = solve(nodes, elements, [NodalForce("P", 3, -P)])

    assert not result.is_degenerate, f"singular DOFs: {result.singular_dofs}"
    assert np.isclose(result.reaction(1).fy, P / 2, rtol=1e-9)
    assert np.isclose(result.reaction(2).fy, P / 2, rtol=1e-9)

    N_rafter = -P / (2 * np.sin(np.pi / 4))
    assert np.isclose(result.element(1).stations[0].axial, P / 2, rtol=1e-9)
    assert np.isclose(result.element(2).stations[0].axial, N_rafter, rtol=1e-9)
    assert np.isclose(result.element(3).stations[0].axial, N_rafter, rtol=1e-9)

    for er in result.elements:
        assert er.max_moment < 1e-9, f"Element {er.element_id} carries moment {er.max_moment}"
        assert abs(er.end_forces[2]) < 1e-9 and abs(er.end_forces[5]) < 1e-9

        # deflection is linear in x: the member stays a straight chord
        xs = np.array([st.x for st in er.stations])
        v = np.array([st.deflection for st in er.stations])
        chord = v[0] + (v[-1] - v[0]) * xs / er.length
        np.testing.assert_allclose(v, chord, atol=1e-12)
    print("✓ Truss: axial forces only, straight members, no false instability")


def test_doubly_released_member_with_span_load():
    """
    A single member hinged at both ends between a pin and a roller, under
    a UDL: reactions qL/2, zero end moments, M_max = qL²/8.
    """
    L = 5.0
    q = 800.0
    nodes = [Node(1, 0.0, 0.0, Support.PINNED.value), Node(2, L, 0.0, Support.ROLLER.value)]
    elements = [Frame2D(1, 1, 2, E, A, I, release_start=True, release_end=True)]
    result = solve(nodes, elements, [DistributedLoad("q", 1, -q)])

    assert not result.is_degenerate
    assert np.isclose(result.reaction(1).fy, q * L / 2, rtol=1e-9)
    assert np.isclose(result.reaction(2).fy, q * L / 2, rtol=1e-9)

    beam = result.element(1)
    assert abs(beam.end_forces[2]) < 1e-9 and abs(beam.end_forces[5]) < 1e-9
    assert np.isclose(max(st.moment for st in beam.stations), q * L**2 / 8, rtol=1e-9)
    print("✓ Hinged-hinged member carries its span load as a simple beam")
