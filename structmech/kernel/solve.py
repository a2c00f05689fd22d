# structmech/kernel/solve.py
"""Boundary conditions, linear solve with singular-pivot pinning, reactions."""

import logging
from typing import Iterable, List, Tuple

import numpy as np

from .linalg import gaussian_elimination

logger = logging.getLogger(__name__)


class MechanismError(RuntimeError):
    """Raised (in strict mode) when the structure is unstable or disconnected."""
    pass


def apply_restraints(
    K: np.ndarray,
    F: np.ndarray,
    fixed_dofs: Iterable[int],
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Impose zero displacement on ``fixed_dofs`` by row/column substitution.

    Each fixed DOF gets a zero row and column, a unit diagonal and a zero
    load entry. The matrix keeps its size so global indexing is unchanged.
    Returns modified copies; K and F are untouched.
    """
    K_mod = np.array(K, dtype=float, copy=True)
    F_mod = np.array(F, dtype=float, copy=True)

    for k in fixed_dofs:
        K_mod[k, :] = 0.0
        K_mod[:, k] = 0.0
        K_mod[k, k] = 1.0
        F_mod[k] = 0.0

    return K_mod, F_mod


def inactive_dofs(K: np.ndarray, F: np.ndarray, candidates: Iterable[int]) -> List[int]:
    """
    DOFs with no stiffness and no load.

    Typical case: the rotation of a joint where every connected member is
    hinged. Such a DOF is simply not part of the structure and is pinned
    without being reported as singular.
    """
    empty_rows = ~np.any(K != 0.0, axis=1)
    return [i for i in candidates if empty_rows[i] and F[i] == 0.0]


def solve_linear(
    K: np.ndarray,
    F: np.ndarray,
    fixed_dofs: List[int],
    pivot_tolerance: float = 1e-10,
    strict: bool = False,
) -> Tuple[np.ndarray, np.ndarray, List[int]]:
    """
    Solve K·d = F with the fixed DOFs held at zero.

    Args:
        K: Global stiffness matrix (ndof x ndof), before restraints
        F: Global load vector (ndof,), before restraints
        fixed_dofs: Restrained DOF indices
        pivot_tolerance: Pivot threshold relative to each DOF's own diagonal
        strict: Raise MechanismError instead of pinning singular pivots

    Returns:
        d: Displacement vector (ndof,)
        R: Reaction vector (ndof,); K·d − F on fixed DOFs, 0 elsewhere
        singular: DOFs pinned to zero because their pivot vanished

    Raises:
        MechanismError: In strict mode, if any pivot is singular
    """
    ndof = K.shape[0]
    fixed = sorted(set(fixed_dofs))
    fixed_set = set(fixed)
    free = [i for i in range(ndof) if i not in fixed_set]

    inactive = inactive_dofs(K, F, free)
    if inactive:
        logger.debug("Pinning %d DOF(s) without stiffness: %s", len(inactive), inactive)

    pinned = set(fixed) | set(inactive)
    K_mod, F_mod = apply_restraints(K, F, sorted(pinned))

    # Each pivot is judged against its own diagonal; pinned DOFs keep a unit
    # diagonal and are never part of the singular report.
    solution = gaussian_elimination(K_mod, F_mod, pivot_tol=pivot_tolerance)
    singular = sorted(set(solution.singular_rows) - pinned)

    if singular:
        message = (
            f"Singular pivot at DOF(s) {singular}: structure is unstable or "
            f"insufficiently restrained. Those DOFs are pinned to zero."
        )
        if strict:
            raise MechanismError(message)
        logger.warning(message)

    d = solution.x

    R = np.zeros(ndof, dtype=float)
    if fixed:
        R_all = K @ d - F
        R[fixed] = R_all[fixed]

    return d, R, singular
