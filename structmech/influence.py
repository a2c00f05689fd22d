# structmech/influence.py
"""
INFLUENCE LINES
===============

Value of one response quantity as a unit downward load travels along a
path of members. Each load position is a separate static solve:

    path = load_path([1, 2], n_points=41)
    table = influence_line(nodes, elements, "fy", 1, path)          # reaction
    table = influence_line(nodes, elements, "moment", (1, 2.5), path)  # section

Reaction quantities (fx, fy, m) target a support node id. Section
quantities (axial, shear, moment, deflection) target ``(element_id, x)``
with x the distance from the element's start node. Signs follow the
reactions and the section conventions of ``diagrams``.
"""

import logging
from typing import Iterable, List, Optional, Sequence, Tuple, Union

import numpy as np
import pandas as pd

from .config import CONFIG, SolverConfig
from .model import Frame2D, Node, PointLoad, StiffnessMode
from .solve import solve

logger = logging.getLogger(__name__)

REACTION_QUANTITIES = ("fx", "fy", "m")
SECTION_QUANTITIES = ("axial", "shear", "moment", "deflection")
INFLUENCE_COLUMNS = ["element", "position", "value"]

UNIT_LOAD_ID = "unit"


def load_path(element_ids: Iterable[int], n_points: int = 21) -> List[Tuple[int, float]]:
    """
    Evenly spaced unit-load positions (element_id, fraction) along a chain
    of elements. The shared joint of consecutive elements is visited once.
    """
    if n_points < 2:
        raise ValueError("A load path needs at least 2 points per element.")
    fractions = np.linspace(0.0, 1.0, n_points)
    path = []
    for k, element_id in enumerate(element_ids):
        for t in (fractions if k == 0 else fractions[1:]):
            path.append((element_id, float(t)))
    return path


def _check_target(quantity, target, nodes, elements):
    if quantity in REACTION_QUANTITIES:
        supports = {n.id for n in nodes if n.is_support}
        if target not in supports:
            raise ValueError(f"Node {target} is not a support.")
    elif quantity in SECTION_QUANTITIES:
        element_id, _ = target
        if element_id not in {e.id for e in elements}:
            raise ValueError(f"Unknown element {element_id}.")
    else:
        raise ValueError(
            f"Unknown quantity {quantity!r}; expected one of "
            f"{REACTION_QUANTITIES + SECTION_QUANTITIES}"
        )


def influence_line(
    nodes: Sequence[Node],
    elements: Sequence[Frame2D],
    quantity: str,
    target: Union[int, Tuple[int, float]],
    positions: Iterable[Tuple[int, float]],
    stiffness_mode: Union[StiffnessMode, str] = StiffnessMode.ELASTIC,
    *,
    config: Optional[SolverConfig] = None,
) -> pd.DataFrame:
    """
    Sweep a unit load and record one quantity.

    Parameters:
    -----------
    nodes, elements : model
        The structure; it must be stable, a mechanism raises MechanismError.
    quantity : str
        "fx", "fy", "m" (reaction) or "axial", "shear", "moment",
        "deflection" (section).
    target : int or (element_id, x)
        Support node id for a reaction, element and distance for a section.
    positions : iterable of (element_id, fraction)
        Unit-load positions, e.g. from ``load_path``.

    Returns:
    --------
    pd.DataFrame
        Columns element, position (fraction), value; one row per position.
    """
    config = config or CONFIG
    nodes = list(nodes)
    elements = list(elements)
    _check_target(quantity, target, nodes, elements)

    element_ids = {e.id for e in elements}
    rows = []
    for element_id, t in positions:
        if element_id not in element_ids:
            raise ValueError(f"Load path references unknown element {element_id}.")
        unit = PointLoad(UNIT_LOAD_ID, element_id, -1.0, t)
        result = solve(nodes, elements, [unit], stiffness_mode, config=config, strict=True)

        if quantity in REACTION_QUANTITIES:
            value = getattr(result.reaction(target), quantity)
        else:
            section_element, x = target
            value = getattr(result.element(section_element).section(x, config), quantity)
        rows.append({"element": element_id, "position": t, "value": float(value)})

    logger.debug("Influence line of %s at %s: %d positions.", quantity, target, len(rows))
    return pd.DataFrame(rows, columns=INFLUENCE_COLUMNS)
