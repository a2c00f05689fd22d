# structmech/config.py
"""
Solver configuration and defaults.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class SolverConfig:
    """Numerical settings shared by one solve call."""

    # Stiffness modes: factor applied to E (RIGID_BODY) or A (AXIALLY_RIGID)
    rigid_multiplier: float = 1e4

    # Elements shorter than this are skipped
    min_length: float = 1e-6

    # Pivot pinning threshold, relative to the largest diagonal of K
    pivot_tolerance: float = 1e-10

    # Recovery sampling
    n_stations: int = 100
    discontinuity_offset: float = 1e-3   # fraction of L either side of a load
    position_tolerance: float = 1e-6     # fraction of L snapped to the ends

    # Unit scaling applied to element properties before formulation
    modulus_scale: float = 1.0
    area_scale: float = 1.0
    inertia_scale: float = 1.0

    # Factor applied to station deflections (1.0 = model length units)
    deflection_scale: float = 1.0


# Global config instance
CONFIG = SolverConfig()

# Input convention of the interactive editor: E in GPa with forces in kN,
# A in cm^2, I scaled by 1e-6, deflections reported in mm.
ENGINEERING_UNITS = SolverConfig(
    modulus_scale=1e6,
    area_scale=1e-4,
    inertia_scale=1e-6,
    deflection_scale=1000.0,
)
