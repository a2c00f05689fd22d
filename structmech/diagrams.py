# structmech/diagrams.py
"""
INTERNAL FORCE RECOVERY
=======================

Exact axial force, shear, moment and deflection along a member.

The member-end forces from the stiffness solution fix the state at the
start of the member. Walking forward from there, every load on the member
adds its direct static effect:

- uniform load w:   V(x) += w·x          M(x) += w·x²/2
- point load P@a:   V(x) += P            M(x) += P·(x − a)     for x past a
- couple M0@a:                           M(x) −= M0            for x past a

so shear and moment are exact, not interpolated. Deflection uses the cubic
Hermite shape functions of the four bending DOFs.

SIGN CONVENTIONS:
-----------------
- N (axial): tension positive
- V (shear): resultant of the transverse forces left of the section,
  positive along local +y
- M (moment): sagging positive (compression on the local +y fiber)

With these, x = 0 gives (N, V, M) = (−Fx_i, Fy_i, −Mz_i) and x = L gives
(Fx_j, −Fy_j, Mz_j) for end forces [Fx_i, Fy_i, Mz_i, Fx_j, Fy_j, Mz_j].
"""

from dataclasses import dataclass
from typing import Iterable, List, NamedTuple, Optional, Sequence, Tuple

import numpy as np

from .config import CONFIG, SolverConfig
from .loads import resolve_components
from .model import DistributedLoad, ElementMoment, PointLoad


class EndForces(NamedTuple):
    """Local forces the start node exerts on the member."""
    fx: float
    fy: float
    m: float


class SectionForces(NamedTuple):
    axial: float
    shear: float
    moment: float
    deflection: float


@dataclass
class Station:
    """A sampled position along a member."""
    x: float            # Position along element (0 to L)
    axial: float
    shear: float
    moment: float
    deflection: float   # Transverse deflection, scaled by config.deflection_scale
    global_x: float     # Deflected position of the member axis
    global_y: float


def clean_value(val: float) -> float:
    """
    Snap report values: |v| < 1e-4 → 0, values within 0.02 of an integer
    or half-integer → that value, otherwise 4 decimals.

    Presentation only. Never feed cleaned values back into a computation.
    """
    val = float(val)
    if abs(val) < 1e-4:
        return 0.0
    rounded = round(val)
    if abs(val - rounded) < 0.02:
        return float(rounded)
    doubled = round(val * 2)
    if abs(val * 2 - doubled) < 0.02:
        return doubled / 2.0
    return round(val, 4)


def hermite_shape_functions(xi: float) -> Tuple[float, float, float, float]:
    """
    Hermite cubic shape functions for beam deflection interpolation.

    v(xi) = N1*v_i + N2*theta_i*L + N3*v_j + N4*theta_j*L,  0 ≤ xi ≤ 1
    """
    N1 = 1 - 3*xi**2 + 2*xi**3           # v_i contribution
    N2 = xi - 2*xi**2 + xi**3             # theta_i contribution (needs *L)
    N3 = 3*xi**2 - 2*xi**3                # v_j contribution
    N4 = -xi**2 + xi**3                   # theta_j contribution (needs *L)

    return N1, N2, N3, N4


def evaluate_at(
    position: float,
    length: float,
    direction_cosines: Tuple[float, float],
    local_displacement: Sequence[float],
    start_forces: Sequence[float],
    element_loads: Iterable = (),
    config: Optional[SolverConfig] = None,
) -> SectionForces:
    """
    Internal forces and deflection at one position along a member.

    Parameters:
    -----------
    position : float
        Distance from the start node; clamped to [0, L]
    length : float
        Member length L
    direction_cosines : (c, s)
        Used to resolve global-axis loads into member axes
    local_displacement : sequence of 6
        [u_i, v_i, theta_i, u_j, v_j, theta_j] with the member's own end
        rotations (see elements.member_end_displacement)
    start_forces : (fx, fy, m)
        Local forces the start node exerts on the member
    element_loads : iterable
        PointLoad / ElementMoment / DistributedLoad acting on this member

    Returns:
    --------
    SectionForces
        axial, shear, moment and deflection (model length units)
    """
    config = config or CONFIG
    L = float(length)
    c, s = direction_cosines
    tol = config.position_tolerance * L

    x = min(max(float(position), 0.0), L)
    if x < tol:
        x = 0.0
    if L - x < tol:
        x = L
    at_end = x >= L

    xi = x / L if L > 0.0 else 0.0
    N1, N2, N3, N4 = hermite_shape_functions(xi)
    u = local_displacement
    deflection = N1*u[1] + N2*L*u[2] + N3*u[4] + N4*L*u[5]

    fx, fy, m = start_forces
    axial = -fx
    shear = fy
    moment = -m + fy * x

    for load in element_loads:
        if isinstance(load, DistributedLoad):
            wx, wy = resolve_components(load.magnitude, load.direction, c, s)
            axial -= wx * x
            shear += wy * x
            moment += wy * x * x / 2.0
            continue

        a = load.position * L
        if not (at_end or x > a + tol):
            continue
        if isinstance(load, PointLoad):
            px, py = resolve_components(load.magnitude, load.direction, c, s)
            axial -= px
            shear += py
            moment += py * (x - a)
        elif isinstance(load, ElementMoment):
            moment -= load.magnitude
        else:
            raise TypeError(f"Not an element load: {load!r}")

    return SectionForces(axial, shear, moment, deflection)


def station_positions(
    length: float,
    element_loads: Iterable = (),
    config: Optional[SolverConfig] = None,
) -> List[float]:
    """
    Sorted sampling positions for one member.

    Both ends, a uniform grid of ``config.n_stations`` intervals, and every
    interior point-load / couple position with one sample just before and
    one just after it, so each jump is bracketed.
    """
    config = config or CONFIG
    L = float(length)
    offset = config.discontinuity_offset * L
    xs = set(np.linspace(0.0, L, config.n_stations + 1).tolist())
    xs.update((0.0, L))

    for load in element_loads:
        if isinstance(load, DistributedLoad):
            continue
        a = load.position * L
        if 0.0 < a < L:
            xs.add(a)
            xs.add(max(0.0, a - offset))
            xs.add(min(L, a + offset))

    return sorted(xs)


def sample_element(
    length: float,
    direction_cosines: Tuple[float, float],
    origin: Tuple[float, float],
    local_displacement: Sequence[float],
    start_forces: Sequence[float],
    element_loads: Sequence = (),
    config: Optional[SolverConfig] = None,
) -> List[Station]:
    """
    Station table of one member.

    ``origin`` is the start node position. Global coordinates follow the
    deflected member axis: axial displacement interpolated linearly,
    transverse deflection from the Hermite curve.
    """
    config = config or CONFIG
    L = float(length)
    c, s = direction_cosines
    x0, y0 = origin
    u = local_displacement

    stations = []
    for x in station_positions(L, element_loads, config):
        values = evaluate_at(x, L, (c, s), u, start_forces, element_loads, config)
        xi = x / L
        u_axial = u[0] + xi * (u[3] - u[0])
        v = values.deflection
        stations.append(Station(
            x=x,
            axial=values.axial,
            shear=values.shear,
            moment=values.moment,
            deflection=v * config.deflection_scale,
            global_x=x0 + x * c + u_axial * c - v * s,
            global_y=y0 + x * s + u_axial * s + v * c,
        ))
    return stations
