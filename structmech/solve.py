# structmech/solve.py
"""
One-call static analysis: formulation → assembly → solution → recovery.

    result = solve(nodes, elements, loads, StiffnessMode.ELASTIC)

Each call builds its own global matrix and vector and returns a fresh
``AnalysisResult``; nothing is shared between calls.
"""

import logging
from typing import Iterable, Optional, Sequence, Union

from .assembly import assemble_system, formulate_elements, restrained_dofs
from .config import CONFIG, SolverConfig
from .kernel.dof import DOFManager
from .kernel.solve import MechanismError, solve_linear
from .loads import split_loads
from .model import Frame2D, Node, StiffnessMode
from .post import AnalysisResult, compute_reactions, recover_element

logger = logging.getLogger(__name__)

__all__ = ['solve', 'solve_linear', 'MechanismError']


def solve(
    nodes: Sequence[Node],
    elements: Iterable[Frame2D],
    loads: Iterable = (),
    stiffness_mode: Union[StiffnessMode, str] = StiffnessMode.ELASTIC,
    *,
    config: Optional[SolverConfig] = None,
    strict: bool = False,
) -> AnalysisResult:
    """
    Analyze one planar structure.

    Parameters:
    -----------
    nodes : sequence of Node
        Order defines DOF numbering only.
    elements : iterable of Frame2D
        Elements with a missing node or (near) zero length are skipped.
    loads : iterable of load variants
        Loads on missing nodes / skipped elements are ignored. Keeping load
        references valid is the caller's job (see records.filter_loads).
    stiffness_mode : StiffnessMode or its value ("Elastic", "AxiallyRigid", "Rigid")
        Applied to every element.
    config : SolverConfig, optional
        Defaults to ``config.CONFIG``.
    strict : bool
        Raise MechanismError on a singular system instead of returning a
        result flagged ``is_degenerate``.

    Returns:
    --------
    AnalysisResult
        Zeroed result for fewer than 2 nodes or no elements.
    """
    config = config or CONFIG
    mode = StiffnessMode(stiffness_mode)

    node_map = {n.id: n for n in nodes}
    elements = list(elements)
    if len(node_map) < 2 or not elements:
        logger.debug("Nothing to solve (%d nodes, %d elements).", len(node_map), len(elements))
        return AnalysisResult.empty(node_map)

    dof = DOFManager.from_node_ids(node_map)
    nodal_loads, element_loads = split_loads(loads)

    formulations = formulate_elements(node_map, elements, dof, element_loads, mode, config)
    logger.debug("Formulated %d of %d elements (%s).", len(formulations), len(elements), mode.value)

    K, F = assemble_system(dof, formulations, nodal_loads)
    fixed = restrained_dofs(node_map.values(), dof)

    d, R, singular = solve_linear(
        K, F, fixed, pivot_tolerance=config.pivot_tolerance, strict=strict
    )

    element_results = [recover_element(form, node_map, d, config) for form in formulations]

    return AnalysisResult(
        elements=element_results,
        reactions=compute_reactions(node_map, dof, R),
        max_deflection=max((er.max_deflection for er in element_results), default=0.0),
        displacements=d,
        node_index=dict(dof.node_index),
        singular_dofs=singular,
    )
