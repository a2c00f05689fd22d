# structmech/records.py
"""
Flat record ⇄ model conversion.

Editors and HTTP clients describe a structure with plain dictionaries:

    {"id": 1, "x": 0.0, "y": 0.0, "restraints": [true, true, false]}
    {"id": 1, "startNode": 1, "endNode": 2, "E": 210e9, "A": 0.01, "I": 8e-6,
     "releaseStart": false, "releaseEnd": true}
    {"id": "L1", "type": "point", "magnitude": -10, "elementId": 1,
     "location": 0.25, "direction": "y"}

Loads arrive with a type tag and optional node / element references. They
are turned into the matching load variant here, so the engine never sees a
load with a missing field. snake_case keys are accepted as well.
"""

from typing import Any, Dict, Iterable, List, Mapping

from .model import (
    DistributedLoad, ElementMoment, Frame2D, LoadDirection, LoadKind,
    ModelDefinitionError, NodalForce, NodalMoment, Node, PointLoad,
    ELEMENT_LOAD_TYPES, NODAL_LOAD_TYPES,
)


def _get(record: Mapping[str, Any], *keys, default=None):
    for key in keys:
        if key in record and record[key] is not None:
            return record[key]
    return default


def _require(record: Mapping[str, Any], *keys):
    value = _get(record, *keys)
    if value is None:
        raise ModelDefinitionError(f"Record {dict(record)} is missing '{keys[0]}'.")
    return value


def node_from_record(record: Mapping[str, Any]) -> Node:
    restraints = tuple(bool(r) for r in _get(record, "restraints", default=(False, False, False)))
    if len(restraints) != 3:
        raise ModelDefinitionError(f"Node {record.get('id')}: restraints need 3 flags.")
    return Node(
        id=int(_require(record, "id")),
        x=float(_require(record, "x")),
        y=float(_require(record, "y")),
        restraints=restraints,
    )


def element_from_record(record: Mapping[str, Any]) -> Frame2D:
    return Frame2D(
        id=int(_require(record, "id")),
        ni=int(_require(record, "startNode", "start_node", "ni")),
        nj=int(_require(record, "endNode", "end_node", "nj")),
        E=float(_require(record, "E")),
        A=float(_require(record, "A")),
        I=float(_require(record, "I")),
        release_start=bool(_get(record, "releaseStart", "release_start", default=False)),
        release_end=bool(_get(record, "releaseEnd", "release_end", default=False)),
    )


def load_from_record(record: Mapping[str, Any]):
    """
    Build the load variant described by a flat record.

    Raises:
        ModelDefinitionError: unknown type or direction, both or neither of
            node / element reference set, distributed load on a node,
            position outside [0, 1]
    """
    load_id = str(_require(record, "id"))
    try:
        kind = LoadKind(str(_require(record, "type", "kind")).lower())
    except ValueError as exc:
        raise ModelDefinitionError(f"Load {load_id}: unknown type {record.get('type')!r}.") from exc

    magnitude = float(_require(record, "magnitude"))
    node_id = _get(record, "nodeId", "node_id", "node")
    element_id = _get(record, "elementId", "element_id", "element")
    if (node_id is None) == (element_id is None):
        raise ModelDefinitionError(
            f"Load {load_id}: exactly one of node or element reference is required."
        )

    try:
        direction = LoadDirection(str(_get(record, "direction", default="y")).lower())
    except ValueError as exc:
        raise ModelDefinitionError(
            f"Load {load_id}: unknown direction {record.get('direction')!r}."
        ) from exc
    position = float(_get(record, "location", "position", default=0.5))

    if node_id is not None:
        if kind is LoadKind.MOMENT:
            return NodalMoment(load_id, int(node_id), magnitude)
        if kind is LoadKind.POINT:
            return NodalForce(load_id, int(node_id), magnitude, direction)
        raise ModelDefinitionError(f"Load {load_id}: distributed loads need an element.")

    if kind is LoadKind.DISTRIBUTED:
        return DistributedLoad(load_id, int(element_id), magnitude, direction)
    if kind is LoadKind.POINT:
        return PointLoad(load_id, int(element_id), magnitude, position, direction)
    return ElementMoment(load_id, int(element_id), magnitude, position)


def load_to_record(load) -> Dict[str, Any]:
    """Inverse of ``load_from_record`` (camelCase keys)."""
    record: Dict[str, Any] = {"id": load.id, "type": load.kind.value, "magnitude": load.magnitude}
    if isinstance(load, NODAL_LOAD_TYPES):
        record["nodeId"] = load.node
    elif isinstance(load, ELEMENT_LOAD_TYPES):
        record["elementId"] = load.element
    else:
        raise TypeError(f"Unknown load type: {type(load).__name__}")
    if hasattr(load, "direction"):
        record["direction"] = load.direction.value
    if hasattr(load, "position"):
        record["location"] = load.position
    return record


def filter_loads(loads: Iterable, nodes: Iterable[Node], elements: Iterable[Frame2D]) -> List:
    """
    Drop loads whose node or element no longer exists.

    The solver assumes valid references; editors call this after deleting
    nodes or elements.
    """
    node_ids = {n.id for n in nodes}
    element_ids = {e.id for e in elements}
    kept = []
    for load in loads:
        if isinstance(load, NODAL_LOAD_TYPES):
            if load.node in node_ids:
                kept.append(load)
        elif load.element in element_ids:
            kept.append(load)
    return kept
