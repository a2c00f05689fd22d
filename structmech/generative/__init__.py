# structmech/generative - Parametric Geometry Generators
"""
GENERATIVE: Standard Structure Layouts
======================================

USAGE:
------
    from structmech.generative import generate_geometry, GeometryParams

    nodes, elements = generate_geometry(
        "PortalFrame", GeometryParams(width=6.0, height=3.0)
    )
"""

from .structures import (
    GeometryParams,
    StructureType,
    auto_connect_nodes,
    generate_geometry,
)

__all__ = ['GeometryParams', 'StructureType', 'auto_connect_nodes', 'generate_geometry']
