# loads.py - Fixed-end forces and equivalent nodal loads
"""
Fixed-end forces for member loads.

All vectors here are in LOCAL element coordinates with the layout
[Fx_i, Fy_i, Mz_i, Fx_j, Fy_j, Mz_j]. A fixed-end force is what a fully
restrained end exerts ON the member under the load. The equivalent nodal
load applied to the structure is its negative.

Sign convention: local +x from node i to node j, local +y 90° counter-
clockwise from +x, moments counter-clockwise positive.
"""

from typing import Dict, Iterable, List, Tuple

import numpy as np

from .model import (
    DistributedLoad, ElementMoment, LoadDirection, NodalForce, NodalMoment,
    PointLoad, ELEMENT_LOAD_TYPES, NODAL_LOAD_TYPES,
)


# Condensation rows for a released end: f -= f[m] * ratio
def _release_start_ratio(L):
    return np.array([0.0, 1.5 / L, 1.0, 0.0, -1.5 / L, 0.5])


def _release_end_ratio(L, start_released=False):
    if start_released:
        return np.array([0.0, 1.0 / L, 0.0, 0.0, -1.0 / L, 1.0])
    return np.array([0.0, 1.5 / L, 0.5, 0.0, -1.5 / L, 1.0])


def resolve_components(magnitude: float, direction: LoadDirection, c: float, s: float) -> Tuple[float, float]:
    """
    Split a load magnitude into (axial, transverse) local components.

    X and Y are global axes and get projected by the direction cosines;
    PERPENDICULAR already acts along local +y.
    """
    if direction is LoadDirection.X:
        return magnitude * c, -magnitude * s
    if direction is LoadDirection.Y:
        return magnitude * s, magnitude * c
    return 0.0, magnitude


def frame2d_fixed_end_udl(L: float, wx: float, wy: float) -> np.ndarray:
    """
    Fixed-end forces for a uniform load spanning the whole member.

    wx, wy are the local axial / transverse intensities (force per length).
    Each end carries half of the total; the end moments are ∓wL²/12.
    A 4 m member under wy = −1000 N/m gets +2000 N and ±1333.3 N·m at
    each end (the supports push back up).
    """
    return np.array([
        -wx * L / 2.0,
        -wy * L / 2.0,
        -wy * L * L / 12.0,
        -wx * L / 2.0,
        -wy * L / 2.0,
        wy * L * L / 12.0,
    ], dtype=float)


def frame2d_fixed_end_point(L: float, a: float, px: float, py: float) -> np.ndarray:
    """
    Fixed-end forces for a concentrated force at distance ``a`` from node i.

    Uses the Hermite-consistent closed forms (b = L − a):
        Fy_i = −P b²(3a + b)/L³     Mz_i = −P a b²/L²
        Fy_j = −P a²(a + 3b)/L³     Mz_j = +P a² b/L²
    The axial component splits by lever rule.
    """
    b = L - a
    L2 = L * L
    L3 = L2 * L
    return np.array([
        -px * b / L,
        -py * b * b * (3 * a + b) / L3,
        -py * a * b * b / L2,
        -px * a / L,
        -py * a * a * (a + 3 * b) / L3,
        py * a * a * b / L2,
    ], dtype=float)


def frame2d_fixed_end_moment(L: float, a: float, M: float) -> np.ndarray:
    """
    Fixed-end forces for a counter-clockwise couple M at distance ``a``.

        Fy_i = +6 M a b/L³     Mz_i = M b(2a − b)/L²
        Fy_j = −6 M a b/L³     Mz_j = M a(2b − a)/L²
    """
    b = L - a
    L2 = L * L
    V = 6.0 * M * a * b / (L2 * L)
    return np.array([
        0.0,
        V,
        M * b * (2 * a - b) / L2,
        0.0,
        -V,
        M * a * (2 * b - a) / L2,
    ], dtype=float)


def release_fixed_end_forces(
    f: np.ndarray,
    L: float,
    release_start: bool = False,
    release_end: bool = False,
) -> np.ndarray:
    """
    Redistribute fixed-end forces for released (hinged) ends.

    Static condensation of the released rotation: the end moment there
    becomes zero, half of it carries over to the opposite end, and the
    shears change by 1.5·M/L. With both ends released the member reduces
    to a simply supported span: zero end moments and statically determined
    end shears. Axial components are unaffected by moment releases.
    """
    f = np.array(f, dtype=float, copy=True)
    if release_start:
        f = f - f[2] * _release_start_ratio(L)
    if release_end:
        f = f - f[5] * _release_end_ratio(L, start_released=release_start)
    return f


def element_fixed_end_forces(
    load,
    L: float,
    c: float,
    s: float,
    release_start: bool = False,
    release_end: bool = False,
) -> np.ndarray:
    """
    Local fixed-end force vector of one element load, releases included.

    Raises:
        TypeError: for anything that is not an element load variant
    """
    if isinstance(load, DistributedLoad):
        wx, wy = resolve_components(load.magnitude, load.direction, c, s)
        f = frame2d_fixed_end_udl(L, wx, wy)
    elif isinstance(load, PointLoad):
        px, py = resolve_components(load.magnitude, load.direction, c, s)
        f = frame2d_fixed_end_point(L, load.position * L, px, py)
    elif isinstance(load, ElementMoment):
        f = frame2d_fixed_end_moment(L, load.position * L, load.magnitude)
    else:
        raise TypeError(f"Not an element load: {load!r}")

    return release_fixed_end_forces(f, L, release_start, release_end)


def nodal_load_component(load) -> Tuple[int, float]:
    """
    (local_dof, value) of a nodal load in global axes.

    Raises:
        TypeError: for anything that is not a nodal load variant
    """
    if isinstance(load, NodalMoment):
        return 2, load.magnitude
    if isinstance(load, NodalForce):
        local_dof = 0 if load.direction is LoadDirection.X else 1
        return local_dof, load.magnitude
    raise TypeError(f"Not a nodal load: {load!r}")


def split_loads(loads: Iterable) -> Tuple[List, Dict[int, List]]:
    """
    Separate nodal loads from element loads.

    Returns the nodal loads as a list and the element loads grouped by
    element id (input order preserved).
    """
    nodal = []
    by_element: Dict[int, List] = {}
    for load in loads:
        if isinstance(load, NODAL_LOAD_TYPES):
            nodal.append(load)
        elif isinstance(load, ELEMENT_LOAD_TYPES):
            by_element.setdefault(load.element, []).append(load)
        else:
            raise TypeError(f"Unknown load type: {type(load).__name__}")
    return nodal, by_element
