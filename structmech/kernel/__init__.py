# structmech/kernel - element-independent core
"""
KERNEL: DOF INDEXING, ASSEMBLY AND SOLUTION
===========================================

Assembly and solving do not care what kind of element produced a stiffness
matrix. They only need:
- a map (node_id, local_dof) → global DOF index
- element matrices / load vectors in global coordinates with their DOF maps
- the restrained DOFs

The element formulation (frame with releases, loads, transformations) lives
one level up in the package.
"""

from .dof import DOFManager
from .linalg import gaussian_elimination, LinearSolution
from .solve import solve_linear, apply_restraints, MechanismError

__all__ = [
    'DOFManager',
    'gaussian_elimination',
    'LinearSolution',
    'solve_linear',
    'apply_restraints',
    'MechanismError',
]
