# element end forces, station tables, reactions, result containers

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

import numpy as np

from .assembly import ElementFormulation
from .config import CONFIG, SolverConfig
from .diagrams import EndForces, SectionForces, Station, evaluate_at, sample_element
from .elements import member_end_displacement
from .kernel.dof import DOFManager, RZ, UX, UY
from .model import Node


@dataclass
class ElementResult:
    """Recovered response of one member."""
    element_id: int
    length: float
    c: float
    s: float
    local_displacement: np.ndarray   # member-end displacements, local axes
    end_forces: np.ndarray           # [Fx_i, Fy_i, Mz_i, Fx_j, Fy_j, Mz_j], local
    stations: List[Station]
    loads: List = field(default_factory=list)
    max_axial: float = 0.0
    max_shear: float = 0.0
    max_moment: float = 0.0
    max_deflection: float = 0.0

    @property
    def start_forces(self) -> EndForces:
        return EndForces(*(float(v) for v in self.end_forces[:3]))

    @property
    def end_forces_j(self) -> EndForces:
        return EndForces(*(float(v) for v in self.end_forces[3:]))

    def section(self, position: float, config: Optional[SolverConfig] = None) -> SectionForces:
        """Section forces at a distance ``position`` from the start node."""
        return evaluate_at(
            position, self.length, (self.c, self.s),
            self.local_displacement, self.start_forces, self.loads, config,
        )


@dataclass
class Reaction:
    """Forces and moment a support exerts on the structure (global axes)."""
    node_id: int
    fx: float
    fy: float
    m: float


@dataclass
class AnalysisResult:
    elements: List[ElementResult] = field(default_factory=list)
    reactions: List[Reaction] = field(default_factory=list)
    max_deflection: float = 0.0
    displacements: np.ndarray = field(default_factory=lambda: np.zeros(0))
    node_index: Dict[int, int] = field(default_factory=dict)
    singular_dofs: List[int] = field(default_factory=list)

    @property
    def is_degenerate(self) -> bool:
        """
        True when a singular pivot was pinned: the structure is unstable or
        disconnected and the pinned response is not physical.
        """
        return len(self.singular_dofs) > 0

    @property
    def is_empty(self) -> bool:
        return not self.elements

    def element(self, element_id: int) -> ElementResult:
        for result in self.elements:
            if result.element_id == element_id:
                return result
        raise KeyError(f"No result for element {element_id}")

    def reaction(self, node_id: int) -> Reaction:
        for reaction in self.reactions:
            if reaction.node_id == node_id:
                return reaction
        raise KeyError(f"Node {node_id} is not a support")

    def node_displacement(self, node_id: int) -> Tuple[float, float, float]:
        """(ux, uy, rz) of a node in global axes."""
        base = 3 * self.node_index[node_id]
        ux, uy, rz = self.displacements[base:base + 3]
        return float(ux), float(uy), float(rz)

    @classmethod
    def empty(cls, nodes: Optional[Dict[int, Node]] = None) -> "AnalysisResult":
        """Zeroed result: zero displacements, zero reactions at supports."""
        nodes = nodes or {}
        dof = DOFManager.from_node_ids(nodes)
        return cls(
            displacements=np.zeros(dof.ndof),
            node_index=dict(dof.node_index),
            reactions=[Reaction(n.id, 0.0, 0.0, 0.0) for n in nodes.values() if n.is_support],
        )


def element_local_displacement(form: ElementFormulation, d_global: np.ndarray) -> np.ndarray:
    """Global displacements of the element's nodes rotated into local axes."""
    d_elem_global = d_global[form.dof_map]
    return form.T @ d_elem_global


def element_end_forces_local(form: ElementFormulation, d_local: np.ndarray) -> np.ndarray:
    """
    Member-end forces in LOCAL coordinates: f = k·d + f_fixed_end.

    Returns [Ni, Vi, Mi, Nj, Vj, Mj], the forces the nodes exert on the
    member. Released ends carry zero moment.
    """
    return form.k_local @ d_local + form.fixed_end_local


def recover_element(
    form: ElementFormulation,
    nodes: Dict[int, Node],
    d_global: np.ndarray,
    config: Optional[SolverConfig] = None,
) -> ElementResult:
    """End forces, station table and maxima of one element."""
    config = config or CONFIG
    e = form.element
    d_local = element_local_displacement(form, d_global)
    f_local = element_end_forces_local(form, d_local)
    u_member = member_end_displacement(d_local, form.length, e.release_start, e.release_end)

    start = nodes[e.ni]
    stations = sample_element(
        form.length, (form.c, form.s), (start.x, start.y),
        u_member, f_local[:3], form.loads, config,
    )

    return ElementResult(
        element_id=e.id,
        length=form.length,
        c=form.c,
        s=form.s,
        local_displacement=u_member,
        end_forces=f_local,
        stations=stations,
        loads=list(form.loads),
        max_axial=max(abs(st.axial) for st in stations),
        max_shear=max(abs(st.shear) for st in stations),
        max_moment=max(abs(st.moment) for st in stations),
        max_deflection=max(abs(st.deflection) for st in stations),
    )


def compute_reactions(
    nodes: Dict[int, Node],
    dof: DOFManager,
    R: np.ndarray,
) -> List[Reaction]:
    """
    One reaction record per node with at least one restraint.
    Unrestrained components are reported as zero.
    """
    result = []
    for node in nodes.values():
        if not node.is_support:
            continue
        rx, ry, rm = node.restraints
        result.append(Reaction(
            node_id=node.id,
            fx=float(R[dof.idx(node.id, UX)]) if rx else 0.0,
            fy=float(R[dof.idx(node.id, UY)]) if ry else 0.0,
            m=float(R[dof.idx(node.id, RZ)]) if rm else 0.0,
        ))
    return result
