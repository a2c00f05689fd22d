# Node, Element, Load variants, stiffness mode (dataclasses)

from dataclasses import dataclass
from enum import Enum
from typing import Tuple, Union

Restraints = Tuple[bool, bool, bool]


class ModelDefinitionError(ValueError):
    """Raised when a node, element, load or record is malformed."""
    pass


class Support(Enum):
    """Restraint presets (ux, uy, rz)."""
    FIXED = (True, True, True)
    PINNED = (True, True, False)
    ROLLER = (False, True, False)
    ROLLER_X = (True, False, False)
    FREE = (False, False, False)


def support_type(restraints: Restraints) -> str:
    """Name of the preset matching a restraint triple, or 'Custom'."""
    for support in Support:
        if tuple(bool(r) for r in restraints) == support.value:
            return support.name
    return "Custom"


class StiffnessMode(Enum):
    ELASTIC = "Elastic"
    AXIALLY_RIGID = "AxiallyRigid"
    RIGID_BODY = "Rigid"


@dataclass(frozen=True)
class Node:
    id: int
    x: float
    y: float
    restraints: Restraints = (False, False, False)

    @property
    def is_support(self) -> bool:
        return any(self.restraints)


@dataclass(frozen=True)
class Frame2D:
    """
    2D frame element (Euler–Bernoulli): 2 nodes, 3 DOF per node: (ux, uy, rz).
    A released end transmits no moment (hinge).
    """
    id: int
    ni: int
    nj: int
    E: float
    A: float
    I: float
    release_start: bool = False
    release_end: bool = False


# ---------------------------------------------------------------------------
# Loads: one variant per kind, each with only the fields it needs
# ---------------------------------------------------------------------------

class LoadKind(Enum):
    POINT = "point"
    DISTRIBUTED = "distributed"
    MOMENT = "moment"


class LoadDirection(Enum):
    X = "x"                          # global X
    Y = "y"                          # global Y
    PERPENDICULAR = "perpendicular"  # member-local transverse axis


def _check_position(load_id, position: float) -> None:
    if not 0.0 <= position <= 1.0:
        raise ModelDefinitionError(f"Load {load_id}: position {position} outside [0, 1].")


@dataclass(frozen=True)
class NodalForce:
    id: str
    node: int
    magnitude: float
    direction: LoadDirection = LoadDirection.Y

    kind = LoadKind.POINT

    def __post_init__(self):
        if self.direction is LoadDirection.PERPENDICULAR:
            raise ModelDefinitionError(f"Load {self.id}: nodal forces act along X or Y only.")


@dataclass(frozen=True)
class NodalMoment:
    id: str
    node: int
    magnitude: float  # counter-clockwise positive

    kind = LoadKind.MOMENT


@dataclass(frozen=True)
class PointLoad:
    id: str
    element: int
    magnitude: float
    position: float = 0.5
    direction: LoadDirection = LoadDirection.Y

    kind = LoadKind.POINT

    def __post_init__(self):
        _check_position(self.id, self.position)


@dataclass(frozen=True)
class ElementMoment:
    id: str
    element: int
    magnitude: float  # counter-clockwise positive
    position: float = 0.5

    kind = LoadKind.MOMENT

    def __post_init__(self):
        _check_position(self.id, self.position)


@dataclass(frozen=True)
class DistributedLoad:
    """Uniform load over the full element, force per unit member length."""
    id: str
    element: int
    magnitude: float
    direction: LoadDirection = LoadDirection.Y

    kind = LoadKind.DISTRIBUTED


NodalLoad = Union[NodalForce, NodalMoment]
ElementLoad = Union[PointLoad, ElementMoment, DistributedLoad]
Load = Union[NodalForce, NodalMoment, PointLoad, ElementMoment, DistributedLoad]

NODAL_LOAD_TYPES = (NodalForce, NodalMoment)
ELEMENT_LOAD_TYPES = (PointLoad, ElementMoment, DistributedLoad)
