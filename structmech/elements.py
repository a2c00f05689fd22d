# Frame2D element stiffness (with end releases) + transformation

from typing import Dict, Optional, Tuple

import numpy as np

from .config import CONFIG, SolverConfig
from .model import Frame2D, Node, StiffnessMode


def element_geometry(
    nodes: Dict[int, Node],
    e: Frame2D,
    min_length: float = 0.0,
) -> Tuple[float, float, float]:
    """
    Length and direction cosines (c, s) of an element.

    Raises ValueError for a length of zero or below ``min_length``.
    """
    ni = nodes[e.ni]
    nj = nodes[e.nj]
    dx = nj.x - ni.x
    dy = nj.y - ni.y
    L = float(np.hypot(dx, dy))
    if L <= 0.0 or L < min_length:
        raise ValueError(f"Element {e.id}: length {L:.3g} is degenerate.")
    c = dx / L
    s = dy / L
    return L, c, s


def effective_properties(
    e: Frame2D,
    mode: StiffnessMode = StiffnessMode.ELASTIC,
    config: Optional[SolverConfig] = None,
) -> Tuple[float, float, float]:
    """
    (E, A, I) used for the stiffness matrix.

    Unit scales from the config are applied first. RIGID_BODY then
    multiplies E (so both EA and EI grow); AXIALLY_RIGID multiplies A only.
    """
    config = config or CONFIG
    E = e.E * config.modulus_scale
    A = e.A * config.area_scale
    I = e.I * config.inertia_scale

    if mode is StiffnessMode.RIGID_BODY:
        E *= config.rigid_multiplier
    elif mode is StiffnessMode.AXIALLY_RIGID:
        A *= config.rigid_multiplier
    return E, A, I


def frame2d_local_stiffness(
    E: float,
    A: float,
    I: float,
    L: float,
    release_start: bool = False,
    release_end: bool = False,
) -> np.ndarray:
    """
    Local stiffness matrix in element local coords (x along member).
    DOF order: [uix, uiy, rzi, ujx, ujy, rzj]

    A released end has its rotation condensed out: the row and column of
    that rotation are zero and the remaining bending terms drop to the
    3EI family. With both ends released only the axial link remains.
    """
    EA_L = E * A / L
    EI = E * I
    L2 = L * L
    L3 = L2 * L

    k = np.zeros((6, 6), dtype=float)
    k[0, 0] = k[3, 3] = EA_L
    k[0, 3] = k[3, 0] = -EA_L

    if release_start and release_end:
        return k

    if release_start:
        k3, k2, k1 = 3*EI/L3, 3*EI/L2, 3*EI/L
        k[np.ix_([1, 4, 5], [1, 4, 5])] = [
            [ k3, -k3,  k2],
            [-k3,  k3, -k2],
            [ k2, -k2,  k1],
        ]
    elif release_end:
        k3, k2, k1 = 3*EI/L3, 3*EI/L2, 3*EI/L
        k[np.ix_([1, 2, 4], [1, 2, 4])] = [
            [ k3,  k2, -k3],
            [ k2,  k1, -k2],
            [-k3, -k2,  k3],
        ]
    else:
        k[np.ix_([1, 2, 4, 5], [1, 2, 4, 5])] = [
            [ 12*EI/L3,  6*EI/L2, -12*EI/L3,  6*EI/L2],
            [  6*EI/L2,   4*EI/L,  -6*EI/L2,   2*EI/L],
            [-12*EI/L3, -6*EI/L2,  12*EI/L3, -6*EI/L2],
            [  6*EI/L2,   2*EI/L,  -6*EI/L2,   4*EI/L],
        ]
    return k


def frame2d_transform(c: float, s: float) -> np.ndarray:
    """
    6x6 transform from global DOFs to local DOFs.
    """
    T = np.array([
        [ c,  s, 0,  0, 0, 0],
        [-s,  c, 0,  0, 0, 0],
        [ 0,  0, 1,  0, 0, 0],
        [ 0,  0, 0,  c, s, 0],
        [ 0,  0, 0, -s, c, 0],
        [ 0,  0, 0,  0, 0, 1],
    ], dtype=float)
    return T


def member_end_displacement(
    d_local: np.ndarray,
    L: float,
    release_start: bool = False,
    release_end: bool = False,
) -> np.ndarray:
    """
    Local displacement vector with the member's own end rotations.

    At a released end the member rotation differs from the node rotation.
    It is recovered from the condensed (moment-free) condition, so a member
    hinged at both ends rotates with its chord.
    """
    u = np.array(d_local, dtype=float, copy=True)
    chord = (u[4] - u[1]) / L

    if release_start and release_end:
        u[2] = chord
        u[5] = chord
    elif release_start:
        u[2] = 1.5 * chord - 0.5 * u[5]
    elif release_end:
        u[5] = 1.5 * chord - 0.5 * u[2]
    return u
