# structmech/kernel/assemble.py
"""
ASSEMBLY: Global Matrix and Load Vector Scatter-Add
===================================================

Assembly is a fold over independent element contributions. Each element
supplies a DOF map and a matrix (or vector) already in global coordinates;
the kernel adds the entries into a freshly allocated global array.

Because every contribution is simply added, the result does not depend on
the order of the contributions.

USAGE:
------
    contributions = [(dof_map, ke_global) for each element]
    K = assemble_global_K(dof.ndof, contributions)
"""

from typing import Iterable, List, Tuple

import numpy as np


def assemble_global_K(
    ndof: int,
    contributions: Iterable[Tuple[List[int], np.ndarray]],
) -> np.ndarray:
    """
    Assemble the global stiffness matrix.

    ALGORITHM:
    ----------
    K = zeros(ndof × ndof)
    for each (dof_map, ke):
        K[dof_map[a], dof_map[b]] += ke[a, b]

    Parameters:
    -----------
    ndof : int
        Total number of DOFs in the system
    contributions : iterable of (dof_map, ke)
        ke is the element stiffness in global coordinates,
        shape (len(dof_map), len(dof_map))

    Returns:
    --------
    np.ndarray
        Global stiffness matrix, shape (ndof, ndof)
    """
    K = np.zeros((ndof, ndof), dtype=float)

    for dof_map, ke in contributions:
        n = len(dof_map)
        assert ke.shape == (n, n), \
            f"Element ke shape {ke.shape} doesn't match dof_map length {n}"
        idx = np.asarray(dof_map, dtype=int)
        # np.add.at accumulates repeated indices correctly
        np.add.at(K, np.ix_(idx, idx), ke)

    return K


def assemble_global_F(
    ndof: int,
    contributions: Iterable[Tuple[List[int], np.ndarray]],
) -> np.ndarray:
    """
    Assemble a global load vector from (dof_map, fe) contributions.

    Same scatter-add as ``assemble_global_K``; used for the equivalent nodal
    loads of element loads.
    """
    F = np.zeros(ndof, dtype=float)

    for dof_map, fe in contributions:
        n = len(dof_map)
        assert fe.shape == (n,), \
            f"Element fe shape {fe.shape} doesn't match dof_map length {n}"
        np.add.at(F, np.asarray(dof_map, dtype=int), fe)

    return F


def add_nodal_load(F: np.ndarray, dof_index: int, value: float) -> None:
    """Add a nodal force or moment to the global load vector (in-place)."""
    F[dof_index] += value
