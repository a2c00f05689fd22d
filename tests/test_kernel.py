"""
TEST: Kernel (DOF indexing, assembly, elimination, restraints)
"""

import pytest
import numpy as np

from structmech.kernel import DOFManager, apply_restraints, gaussian_elimination, solve_linear
from structmech.kernel.assemble import assemble_global_F, assemble_global_K
from structmech.kernel.solve import MechanismError, inactive_dofs


def test_dof_manager_uses_node_order():
    dof = DOFManager.from_node_ids([10, 20, 30])
    assert dof.ndof == 9
    assert dof.idx(20, 1) == 4
    assert dof.node_dofs(30) == [6, 7, 8]
    assert dof.element_dof_map([10, 30]) == [0, 1, 2, 6, 7, 8]
    assert dof.has_node(10) and not dof.has_node(40)


def test_dof_manager_ignores_duplicates():
    dof = DOFManager.from_node_ids([5, 5, 7])
    assert dof.ndof == 6
    assert dof.idx(7, 0) == 3


def test_assembly_is_order_independent():
    ke = np.array([[2.0, -1.0], [-1.0, 2.0]])
    contributions = [([0, 1], ke), ([1, 2], 3 * ke)]
    K1 = assemble_global_K(3, contributions)
    K2 = assemble_global_K(3, list(reversed(contributions)))
    np.testing.assert_allclose(K1, K2)
    assert K1[1, 1] == 2.0 + 6.0

    F = assemble_global_F(3, [([0, 1], np.array([1.0, 2.0])), ([1, 2], np.array([3.0, 4.0]))])
    np.testing.assert_allclose(F, [1.0, 5.0, 4.0])


def test_gaussian_elimination_matches_numpy():
    rng = np.random.default_rng(0)
    M = rng.normal(size=(8, 8))
    A = M @ M.T + 8 * np.eye(8)
    b = rng.normal(size=8)

    solution = gaussian_elimination(A, b)
    assert not solution.is_singular
    np.testing.assert_allclose(solution.x, np.linalg.solve(A, b), rtol=1e-10)


def test_gaussian_elimination_needs_pivoting():
    """A zero on the leading diagonal is handled by a row swap."""
    A = np.array([[0.0, 1.0], [1.0, 0.0]])
    b = np.array([2.0, 3.0])
    solution = gaussian_elimination(A, b)
    np.testing.assert_allclose(solution.x, [3.0, 2.0])
    assert solution.singular_rows == []


def test_gaussian_elimination_pins_singular_pivot():
    """
    Rank-deficient system: the dependent unknown is pinned to 0 and
    reported, the rest is still solved.
    """
    A = np.array([[1.0, 1.0], [1.0, 1.0]])
    b = np.array([2.0, 2.0])
    solution = gaussian_elimination(A, b)
    assert solution.singular_rows == [1]
    np.testing.assert_allclose(solution.x, [2.0, 0.0])


def test_apply_restraints_returns_copies():
    K = np.array([[4.0, -2.0], [-2.0, 4.0]])
    F = np.array([1.0, 1.0])
    K_mod, F_mod = apply_restraints(K, F, [0])

    np.testing.assert_allclose(K_mod, [[1.0, 0.0], [0.0, 4.0]])
    np.testing.assert_allclose(F_mod, [0.0, 1.0])
    assert K[0, 0] == 4.0 and F[0] == 1.0


def test_inactive_dofs():
    K = np.array([[1.0, 0.0, 0.0], [0.0, 0.0, 0.0], [0.0, 0.0, 0.0]])
    F = np.array([0.0, 0.0, 5.0])
    assert inactive_dofs(K, F, [0, 1, 2]) == [1]


def test_solve_linear_spring_chain():
    """
    Two springs in series (k1 = 100, k2 = 50), left end fixed, force 10 at
    the right end: u1 = 0.1, u2 = 0.3, reaction −10.
    """
    K = np.array([
        [100.0, -100.0, 0.0],
        [-100.0, 150.0, -50.0],
        [0.0, -50.0, 50.0],
    ])
    F = np.array([0.0, 0.0, 10.0])
    d, R, singular = solve_linear(K, F, [0])

    np.testing.assert_allclose(d, [0.0, 0.1, 0.3])
    np.testing.assert_allclose(R, [-10.0, 0.0, 0.0], atol=1e-12)
    assert singular == []


def test_solve_linear_strict():
    K = np.array([[1.0, -1.0], [-1.0, 1.0]])
    F = np.array([1.0, -1.0])
    d, R, singular = solve_linear(K, F, [])
    assert singular == [1]

    with pytest.raises(MechanismError):
        solve_linear(K, F, [], strict=True)


def test_stiff_system_does_not_report_restrained_dofs():
    """
    Spring stiffnesses of 1e12: the unit diagonal written for the fixed DOF
    is tiny next to them but is not a singular pivot.
    """
    k = 1e12
    K = np.array([
        [k, -k, 0.0],
        [-k, 2 * k, -k],
        [0.0, -k, k],
    ])
    F = np.array([0.0, 0.0, 10.0])
    d, R, singular = solve_linear(K, F, [0], strict=True)

    assert singular == []
    np.testing.assert_allclose(d, [0.0, 10.0 / k, 20.0 / k])
    assert np.isclose(R[0], -10.0)


def test_pivot_judged_against_own_diagonal():
    """
    Two decoupled unknowns of very different stiffness: the soft one is
    still a valid pivot.
    """
    A = np.diag([1e14, 1.0])
    b = np.array([1e14, 2.0])
    solution = gaussian_elimination(A, b)
    assert solution.singular_rows == []
    np.testing.assert_allclose(solution.x, [1.0, 2.0])

    # a common reference makes the soft pivot look singular
    pinned = gaussian_elimination(A, b, scale=1e14)
    assert pinned.singular_rows == [1]
