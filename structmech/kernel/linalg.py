# structmech/kernel/linalg.py
"""
GAUSSIAN ELIMINATION WITH SINGULAR-PIVOT PINNING
================================================

The global system of a planar frame is small (tens to a few hundred DOFs),
dense and solved once per call, so a direct elimination is sufficient.

What makes this solver different from ``np.linalg.solve`` is its behavior on
an under-constrained structure. Instead of failing, a pivot that is
numerically zero is *pinned*: its diagonal is set to 1, its right-hand side
and the rest of its row to 0, and elimination continues. The pinned unknown
comes out as exactly 0 and its index is reported, so the caller can decide
whether the result is meaningful.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Union

import numpy as np


@dataclass
class LinearSolution:
    """Solution vector plus the unknowns pinned to zero during elimination."""
    x: np.ndarray
    singular_rows: List[int] = field(default_factory=list)

    @property
    def is_singular(self) -> bool:
        return len(self.singular_rows) > 0


def gaussian_elimination(
    A: np.ndarray,
    b: np.ndarray,
    pivot_tol: float = 1e-10,
    scale: Optional[Union[float, np.ndarray]] = None,
) -> LinearSolution:
    """
    Solve A·x = b by Gaussian elimination with partial pivoting.

    Parameters:
    -----------
    A : np.ndarray
        Square coefficient matrix (n × n). Not modified.
    b : np.ndarray
        Right-hand side (n,). Not modified.
    pivot_tol : float
        The pivot of unknown k is treated as singular and pinned when its
        magnitude is below ``pivot_tol * scale[k]``.
    scale : float or np.ndarray, optional
        Magnitude reference for the pivot test, one value or one per
        unknown. Defaults to the absolute diagonal of A, so each pivot is
        judged against its own stiffness. Zero references fall back to the
        largest one (1.0 when every reference is zero).

    Returns:
    --------
    LinearSolution
        ``x`` with pinned unknowns equal to 0, and their indices in
        ``singular_rows``.
    """
    A = np.asarray(A, dtype=float)
    b = np.asarray(b, dtype=float)
    n = b.shape[0]
    if A.shape != (n, n):
        raise ValueError(f"Matrix shape {A.shape} does not match vector length {n}.")

    if scale is None:
        scale = np.abs(np.diag(A))
    reference = np.array(np.broadcast_to(np.asarray(scale, dtype=float), (n,)))
    fallback = float(reference.max()) if n and reference.max() > 0.0 else 1.0
    reference[reference <= 0.0] = fallback
    thresholds = pivot_tol * reference

    # Augmented copy [A | b]
    M = np.hstack([A, b.reshape(-1, 1)])
    singular = []

    for k in range(n):
        p = k + int(np.argmax(np.abs(M[k:, k])))
        if p != k:
            M[[k, p]] = M[[p, k]]

        if abs(M[k, k]) < thresholds[k]:
            M[k, k:] = 0.0
            M[k, k] = 1.0
            singular.append(k)
            continue

        factors = M[k + 1:, k] / M[k, k]
        M[k + 1:, k:] -= np.outer(factors, M[k, k:])
        M[k + 1:, k] = 0.0

    # Back substitution
    x = np.zeros(n, dtype=float)
    for i in range(n - 1, -1, -1):
        x[i] = (M[i, n] - M[i, i + 1:n] @ x[i + 1:]) / M[i, i]

    return LinearSolution(x=x, singular_rows=singular)
