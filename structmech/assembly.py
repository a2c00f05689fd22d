# per-element formulation + global K / F assembly

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple

import numpy as np

from .config import CONFIG, SolverConfig
from .elements import (
    effective_properties, element_geometry, frame2d_local_stiffness, frame2d_transform,
)
from .kernel.assemble import add_nodal_load, assemble_global_F, assemble_global_K
from .kernel.dof import DOFManager
from .loads import element_fixed_end_forces, nodal_load_component
from .model import Frame2D, Node, StiffnessMode

logger = logging.getLogger(__name__)

DOF_PER_NODE = 3  # ux, uy, rz


@dataclass
class ElementFormulation:
    """
    Everything one element contributes, computed once per solve.

    ``fixed_end_local`` is the sum of the fixed-end force vectors of all
    loads on the element, releases included.
    """
    element: Frame2D
    length: float
    c: float
    s: float
    k_local: np.ndarray
    dof_map: List[int]
    loads: List = field(default_factory=list)
    fixed_end_local: np.ndarray = field(default_factory=lambda: np.zeros(6))

    @property
    def T(self) -> np.ndarray:
        return frame2d_transform(self.c, self.s)

    @property
    def k_global(self) -> np.ndarray:
        T = self.T
        return T.T @ self.k_local @ T

    @property
    def equivalent_nodal_loads(self) -> np.ndarray:
        """Fixed-end forces reversed and rotated into global axes."""
        return -(self.T.T @ self.fixed_end_local)


def formulate_element(
    nodes: Dict[int, Node],
    element: Frame2D,
    dof: DOFManager,
    element_loads: Iterable = (),
    mode: StiffnessMode = StiffnessMode.ELASTIC,
    config: Optional[SolverConfig] = None,
) -> Optional[ElementFormulation]:
    """
    Stiffness and fixed-end forces of one element.

    Returns None for an element that cannot be solved: unknown end node or
    length below ``config.min_length``.
    """
    config = config or CONFIG
    if element.ni not in nodes or element.nj not in nodes:
        logger.warning("Skipping element %s: references a missing node.", element.id)
        return None

    try:
        L, c, s = element_geometry(nodes, element, config.min_length)
    except ValueError as exc:
        logger.warning("Skipping element: %s", exc)
        return None

    E, A, I = effective_properties(element, mode, config)
    k_local = frame2d_local_stiffness(E, A, I, L, element.release_start, element.release_end)

    loads = list(element_loads)
    fixed_end = np.zeros(6, dtype=float)
    for load in loads:
        fixed_end += element_fixed_end_forces(
            load, L, c, s, element.release_start, element.release_end
        )

    return ElementFormulation(
        element=element,
        length=L,
        c=c,
        s=s,
        k_local=k_local,
        dof_map=dof.element_dof_map([element.ni, element.nj]),
        loads=loads,
        fixed_end_local=fixed_end,
    )


def formulate_elements(
    nodes: Dict[int, Node],
    elements: Iterable[Frame2D],
    dof: DOFManager,
    element_loads: Optional[Dict[int, List]] = None,
    mode: StiffnessMode = StiffnessMode.ELASTIC,
    config: Optional[SolverConfig] = None,
) -> List[ElementFormulation]:
    """Formulate every solvable element; degenerate ones are left out."""
    element_loads = element_loads or {}
    formulations = []
    for element in elements:
        form = formulate_element(
            nodes, element, dof, element_loads.get(element.id, ()), mode, config
        )
        if form is not None:
            formulations.append(form)
    return formulations


def assemble_system(
    dof: DOFManager,
    formulations: List[ElementFormulation],
    nodal_loads: Iterable = (),
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Global stiffness matrix and load vector.

    Element stiffness and equivalent nodal loads are scattered by their DOF
    maps; nodal loads are already in global axes and are added directly.
    Nodal loads on unknown nodes are ignored.
    """
    ndof = dof.ndof
    K = assemble_global_K(ndof, [(f.dof_map, f.k_global) for f in formulations])
    F = assemble_global_F(
        ndof,
        [(f.dof_map, f.equivalent_nodal_loads) for f in formulations if f.loads],
    )

    for load in nodal_loads:
        if not dof.has_node(load.node):
            logger.debug("Ignoring load %s: node %s not in model.", load.id, load.node)
            continue
        local_dof, value = nodal_load_component(load)
        add_nodal_load(F, dof.idx(load.node, local_dof), value)

    return K, F


def restrained_dofs(nodes: Iterable[Node], dof: DOFManager) -> List[int]:
    """Global indices of every restrained DOF, in node order."""
    fixed = []
    for node in nodes:
        for local_dof, restrained in enumerate(node.restraints):
            if restrained:
                fixed.append(dof.idx(node.id, local_dof))
    return fixed
