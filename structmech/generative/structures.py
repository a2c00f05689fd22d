# structmech/generative/structures.py
"""
STRUCTURE GENERATORS: Standard Planar Layouts
=============================================

Turn a handful of parameters into nodes (with supports) and elements for
the common teaching structures:

- 'Beam':            two-element simply supported beam
- 'MultiSpanBeam':   continuous beam over ``num_spans`` equal spans
- 'PortalFrame':     fixed-base single-bay portal
- 'MultiStoryFrame': ``num_bays`` × ``num_stories`` rigid frame
- 'GableFrame':      pinned-base portal with a ridge
- 'Truss':           Warren-type truss with ``num_spans`` panels, all
                     members hinged at both ends
- 'Cantilever':      fixed-base column with a horizontal arm

Node and element ids start at 1.

Also here: ``auto_connect_nodes``, which splits elements at nodes lying on
them so the structure is actually connected there.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import List, Tuple

import numpy as np

from ..model import Frame2D, Node, Support, ELEMENT_LOAD_TYPES, DistributedLoad


class StructureType(Enum):
    BEAM = "Beam"
    MULTI_SPAN_BEAM = "MultiSpanBeam"
    PORTAL_FRAME = "PortalFrame"
    MULTI_STORY_FRAME = "MultiStoryFrame"
    GABLE_FRAME = "GableFrame"
    TRUSS = "Truss"
    CANTILEVER = "Cantilever"


@dataclass
class GeometryParams:
    """
    Parameters of a generated structure.

    width : overall span (m)
    height : column / truss depth (m)
    roof_height : ridge rise above the eaves (GableFrame only)
    E, A, I : section properties given to every element
    num_spans : spans (MultiSpanBeam) or panels (Truss, at least 2)
    num_stories, num_bays : MultiStoryFrame grid
    """
    width: float = 10.0
    height: float = 5.0
    roof_height: float = 2.0
    E: float = 210e9
    A: float = 0.01
    I: float = 8.0e-6
    num_spans: int = 2
    num_stories: int = 2
    num_bays: int = 2


class _Builder:
    """Sequential id allocation shared by all layouts."""

    def __init__(self, params: GeometryParams):
        self.params = params
        self.nodes: List[Node] = []
        self.elements: List[Frame2D] = []

    def node(self, x: float, y: float, support: Support = Support.FREE) -> int:
        node_id = len(self.nodes) + 1
        self.nodes.append(Node(node_id, float(x), float(y), support.value))
        return node_id

    def element(self, ni: int, nj: int, hinged: bool = False) -> int:
        p = self.params
        element_id = len(self.elements) + 1
        self.elements.append(Frame2D(
            element_id, ni, nj, E=p.E, A=p.A, I=p.I,
            release_start=hinged, release_end=hinged,
        ))
        return element_id


def generate_geometry(
    structure_type,
    params: GeometryParams = None,
) -> Tuple[List[Node], List[Frame2D]]:
    """
    Nodes and elements of a standard structure.

    Parameters:
    -----------
    structure_type : StructureType or its value (e.g. "PortalFrame")
    params : GeometryParams, optional

    Returns:
    --------
    (nodes, elements)
    """
    structure_type = StructureType(structure_type)
    p = params or GeometryParams()
    b = _Builder(p)
    W, H = p.width, p.height

    if structure_type is StructureType.BEAM:
        n1 = b.node(0.0, 0.0, Support.PINNED)
        n2 = b.node(W / 2, 0.0, Support.ROLLER)
        n3 = b.node(W, 0.0, Support.ROLLER)
        b.element(n1, n2)
        b.element(n2, n3)

    elif structure_type is StructureType.MULTI_SPAN_BEAM:
        spans = max(1, int(p.num_spans))
        prev = b.node(0.0, 0.0, Support.PINNED)
        for i in range(1, spans + 1):
            current = b.node(i * W / spans, 0.0, Support.ROLLER)
            b.element(prev, current)
            prev = current

    elif structure_type is StructureType.PORTAL_FRAME:
        n1 = b.node(0.0, 0.0, Support.FIXED)
        n2 = b.node(0.0, H)
        n3 = b.node(W, H)
        n4 = b.node(W, 0.0, Support.FIXED)
        b.element(n1, n2)
        b.element(n2, n3)
        b.element(n3, n4)

    elif structure_type is StructureType.MULTI_STORY_FRAME:
        bays = max(1, int(p.num_bays))
        stories = max(1, int(p.num_stories))
        grid = {}
        for level in range(stories + 1):
            for bay in range(bays + 1):
                support = Support.FIXED if level == 0 else Support.FREE
                grid[level, bay] = b.node(bay * W / bays, level * H / stories, support)
        for level in range(stories + 1):
            for bay in range(bays + 1):
                if level > 0 and bay < bays:
                    b.element(grid[level, bay], grid[level, bay + 1])
                if level < stories:
                    b.element(grid[level, bay], grid[level + 1, bay])

    elif structure_type is StructureType.GABLE_FRAME:
        n1 = b.node(0.0, 0.0, Support.PINNED)
        n2 = b.node(0.0, H)
        n3 = b.node(W / 2, H + p.roof_height)
        n4 = b.node(W, H)
        n5 = b.node(W, 0.0, Support.PINNED)
        b.element(n1, n2)
        b.element(n2, n3)
        b.element(n3, n4)
        b.element(n4, n5)

    elif structure_type is StructureType.TRUSS:
        panels = max(2, int(p.num_spans))
        bottom = []
        for i in range(panels + 1):
            if i == 0:
                support = Support.PINNED
            elif i == panels:
                support = Support.ROLLER
            else:
                support = Support.FREE
            bottom.append(b.node(i * W / panels, 0.0, support))
        top = [b.node(i * W / panels, H) for i in range(panels + 1)]
        for i in range(panels):
            b.element(bottom[i], bottom[i + 1], hinged=True)
            b.element(top[i], top[i + 1], hinged=True)
            b.element(bottom[i], top[i], hinged=True)
            b.element(bottom[i], top[i + 1], hinged=True)
        b.element(bottom[panels], top[panels], hinged=True)

    elif structure_type is StructureType.CANTILEVER:
        n1 = b.node(0.0, 0.0, Support.FIXED)
        n2 = b.node(0.0, H)
        n3 = b.node(W, H)
        b.element(n1, n2)
        b.element(n2, n3)

    return b.nodes, b.elements


def _project(px, py, x1, y1, x2, y2) -> Tuple[float, float]:
    """(distance to segment, normalized parameter t along it)"""
    d = np.array([x2 - x1, y2 - y1])
    len_sq = float(d @ d)
    t = float(np.dot([px - x1, py - y1], d) / len_sq) if len_sq > 0.0 else -1.0
    t_clamped = min(max(t, 0.0), 1.0)
    cx = x1 + t_clamped * d[0]
    cy = y1 + t_clamped * d[1]
    return float(np.hypot(px - cx, py - cy)), t


def auto_connect_nodes(
    nodes: List[Node],
    elements: List[Frame2D],
    loads: List,
    snap_distance: float = 0.05,
) -> Tuple[List[Node], List[Frame2D], List]:
    """
    Split every element at the nodes lying on it.

    A node counts as lying on an element when it is within ``snap_distance``
    of it and strictly inside (1%–99% of the length). The pieces keep the
    element's properties; the original start release stays on the first
    piece and the end release on the last. Element loads follow:
    distributed loads are copied to every piece, point loads and couples
    move to the piece containing them with their position rescaled.
    New ids continue after the largest existing element id.
    """
    node_map = {n.id: n for n in nodes}
    next_id = max((e.id for e in elements), default=0) + 1

    new_elements = []
    new_loads = [l for l in loads if not isinstance(l, ELEMENT_LOAD_TYPES)]
    element_loads = [l for l in loads if isinstance(l, ELEMENT_LOAD_TYPES)]

    for el in elements:
        own_loads = [l for l in element_loads if l.element == el.id]
        n1 = node_map.get(el.ni)
        n2 = node_map.get(el.nj)
        if n1 is None or n2 is None:
            new_elements.append(el)
            new_loads.extend(own_loads)
            continue

        splits = []
        for n in nodes:
            if n.id in (n1.id, n2.id):
                continue
            dist, t = _project(n.x, n.y, n1.x, n1.y, n2.x, n2.y)
            if dist < snap_distance and 0.01 < t < 0.99:
                splits.append((t, n))

        if not splits:
            new_elements.append(el)
            new_loads.extend(own_loads)
            continue

        splits.sort(key=lambda item: item[0])
        points = splits + [(1.0, n2)]
        assigned = set()

        start, prev_t = n1, 0.0
        for k, (t, end_node) in enumerate(points):
            piece_id = next_id
            next_id += 1
            new_elements.append(replace(
                el,
                id=piece_id,
                ni=start.id,
                nj=end_node.id,
                release_start=el.release_start if k == 0 else False,
                release_end=el.release_end if k == len(points) - 1 else False,
            ))

            for load in own_loads:
                if isinstance(load, DistributedLoad):
                    new_loads.append(replace(load, id=f"{load.id}-{piece_id}", element=piece_id))
                    continue
                if load.id in assigned or not (prev_t - 1e-4 <= load.position <= t + 1e-4):
                    continue
                span = t - prev_t
                local = (load.position - prev_t) / span if span > 1e-6 else 0.0
                new_loads.append(replace(
                    load,
                    id=f"{load.id}-{piece_id}",
                    element=piece_id,
                    position=min(max(local, 0.0), 1.0),
                ))
                assigned.add(load.id)

            start, prev_t = end_node, t

    return nodes, new_elements, new_loads
