# structmech/kernel/dof.py
"""
DOF MANAGER: Degree of Freedom Indexing
=======================================

Maps (node_id, local_dof) to a global DOF index.

Node ids are arbitrary integers chosen by the caller, so the manager keeps
the node order it was built from: the n-th node supplied owns global DOFs
[3n, 3n+1, 3n+2] for a planar frame (ux, uy, rz). Order carries no other
meaning.

USAGE:
------
    dof = DOFManager.from_node_ids([10, 20, 30])
    dof.idx(20, 1)        # → 4  (second node, uy)
    dof.element_dof_map([10, 30])
    # → [0, 1, 2, 6, 7, 8]
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List

UX, UY, RZ = 0, 1, 2


@dataclass
class DOFManager:
    """
    Degree-of-freedom indexing for one structure.

    Attributes:
    -----------
    dof_per_node : int
        3 for a 2D frame (ux, uy, rz)
    node_index : Dict[int, int]
        Node id → position in the node sequence
    """
    dof_per_node: int = 3
    node_index: Dict[int, int] = field(default_factory=dict)

    @classmethod
    def from_node_ids(cls, node_ids: Iterable[int], dof_per_node: int = 3) -> "DOFManager":
        index = {}
        for node_id in node_ids:
            if node_id not in index:
                index[node_id] = len(index)
        return cls(dof_per_node=dof_per_node, node_index=index)

    @property
    def ndof(self) -> int:
        """Total number of DOFs (size of K)."""
        return self.dof_per_node * len(self.node_index)

    def has_node(self, node_id: int) -> bool:
        return node_id in self.node_index

    def idx(self, node_id: int, local_dof: int) -> int:
        """Global DOF index for a node's local DOF (0=ux, 1=uy, 2=rz)."""
        return self.dof_per_node * self.node_index[node_id] + local_dof

    def node_dofs(self, node_id: int) -> List[int]:
        """
        All global DOF indices of a single node.

        >>> DOFManager.from_node_ids([5, 7]).node_dofs(7)
        [3, 4, 5]
        """
        base = self.dof_per_node * self.node_index[node_id]
        return list(range(base, base + self.dof_per_node))

    def element_dof_map(self, node_ids: List[int]) -> List[int]:
        """
        Flattened DOF indices for an element connecting ``node_ids``.
        Used to scatter element matrices into, and gather from, the global
        system.
        """
        result = []
        for node_id in node_ids:
            result.extend(self.node_dofs(node_id))
        return result
