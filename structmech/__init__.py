# structmech - Planar Frame Analysis
"""
STRUCTMECH: Direct-Stiffness Analysis of Planar Frames
======================================================

This package provides:
- 2D frame/truss analysis with member-end releases (hinges)
- Nodal loads and in-span point, couple and uniform loads
- Exact axial / shear / moment diagrams and Hermite deflections
- Standard structure generators, result tables, plots and an HTTP API

ARCHITECTURE:
-------------
    kernel/         Numeric core (DOF numbering, assembly, restraints, elimination)
    model.py        Nodes, elements, load variants
    elements.py     Element stiffness, releases, stiffness modes
    loads.py        Fixed-end forces of element loads
    assembly.py     Element formulation and global assembly
    solve.py        One-call analysis: solve(nodes, elements, loads)
    diagrams.py     Internal-force recovery along members
    post.py         End forces, reactions, result containers
    influence.py    Influence lines by a moving unit load
    records.py      Flat dict records ⇄ model objects
    tables.py       pandas result tables
    viz.py          matplotlib diagrams
    generative/     Standard structure generators
"""

from .config import CONFIG, ENGINEERING_UNITS, SolverConfig
from .model import (
    DistributedLoad, ElementMoment, Frame2D, LoadDirection, LoadKind,
    ModelDefinitionError, NodalForce, NodalMoment, Node, PointLoad,
    StiffnessMode, Support,
)
from .kernel import DOFManager, MechanismError, solve_linear
from .solve import solve
from .diagrams import evaluate_at
from .post import AnalysisResult
from .influence import influence_line, load_path

__version__ = "0.1.0"
