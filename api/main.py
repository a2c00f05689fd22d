# api/main.py
"""
FastAPI backend for StructMech - exposes the structmech engine as REST API.
"""

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import Dict, List, Optional, Any
import logging
import sys
from pathlib import Path

# Add project root to path to import structmech
sys.path.insert(0, str(Path(__file__).parent.parent))

from structmech.config import CONFIG, ENGINEERING_UNITS
from structmech.diagrams import clean_value
from structmech.generative import GeometryParams, StructureType, generate_geometry
from structmech.model import ModelDefinitionError, StiffnessMode, support_type
from structmech.records import element_from_record, filter_loads, load_from_record, node_from_record
from structmech.solve import solve

logger = logging.getLogger(__name__)

app = FastAPI(
    title="StructMech API",
    description="Planar Frame Analysis Engine",
    version="0.1.0"
)

# CORS for frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:3000", "http://127.0.0.1:3000"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Request/Response Models
# =============================================================================

class _CamelModel(BaseModel):
    """Accepts both snake_case and camelCase keys."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class NodeData(_CamelModel):
    """Node geometry and restraints (ux, uy, rz)."""
    id: int
    x: float
    y: float
    restraints: List[bool] = Field(default_factory=lambda: [False, False, False])


class ElementData(_CamelModel):
    """Frame element between two nodes."""
    id: int
    start_node: int
    end_node: int
    E: float = Field(210e9, alias="E")
    A: float = Field(0.01, alias="A")
    I: float = Field(8.0e-6, alias="I")
    release_start: bool = False
    release_end: bool = False


class LoadData(_CamelModel):
    """Load record: exactly one of node_id / element_id."""
    id: str
    type: str = Field(..., description="point, distributed or moment")
    magnitude: float
    node_id: Optional[int] = None
    element_id: Optional[int] = None
    location: float = Field(0.5, description="Fraction of the element length")
    direction: str = Field("y", description="x, y or perpendicular")


class SolveRequest(_CamelModel):
    nodes: List[NodeData]
    elements: List[ElementData]
    loads: List[LoadData] = Field(default_factory=list)
    stiffness_mode: str = Field("Elastic", description="Elastic, AxiallyRigid or Rigid")
    engineering_units: bool = Field(
        False, description="E in GPa, A in cm², I ×1e-6, deflections in mm"
    )


class EvaluateRequest(SolveRequest):
    element_id: int
    position: float = Field(..., description="Distance from the start node")


class GenerateRequest(_CamelModel):
    structure_type: str = Field("PortalFrame", description="Beam, MultiSpanBeam, PortalFrame, ...")
    width: float = Field(10.0, gt=0.0)
    height: float = Field(5.0, gt=0.0)
    roof_height: float = Field(2.0, ge=0.0)
    E: float = Field(210e9, alias="E")
    A: float = Field(0.01, alias="A")
    I: float = Field(8.0e-6, alias="I")
    num_spans: int = Field(2, ge=1, le=20)
    num_stories: int = Field(2, ge=1, le=20)
    num_bays: int = Field(2, ge=1, le=20)


class StationData(BaseModel):
    x: float
    axial: float
    shear: float
    moment: float
    deflection: float
    global_x: float
    global_y: float


class ElementResultData(BaseModel):
    element_id: int
    length: float
    end_forces: List[float]
    max_axial: float
    max_shear: float
    max_moment: float
    max_deflection: float
    stations: List[StationData]


class ReactionData(BaseModel):
    node_id: int
    fx: float
    fy: float
    m: float


class SolveResult(BaseModel):
    """Complete analysis result."""
    success: bool
    error: Optional[str] = None
    degenerate: bool = False
    singular_dofs: List[int] = Field(default_factory=list)
    max_deflection: float = 0.0
    elements: List[ElementResultData] = Field(default_factory=list)
    reactions: List[ReactionData] = Field(default_factory=list)


class SectionData(BaseModel):
    element_id: int
    position: float
    axial: float
    shear: float
    moment: float
    deflection: float


class GeometryResult(BaseModel):
    structure_type: str
    nodes: List[Dict[str, Any]]
    elements: List[Dict[str, Any]]


# =============================================================================
# Analysis
# =============================================================================

def build_model(request: SolveRequest):
    """Request → (nodes, elements, loads). Raises ModelDefinitionError."""
    nodes = [node_from_record(n.model_dump()) for n in request.nodes]
    elements = [element_from_record(e.model_dump()) for e in request.elements]
    loads = [load_from_record(l.model_dump()) for l in request.loads]
    return nodes, elements, filter_loads(loads, nodes, elements)


def run_analysis(request: SolveRequest):
    config = ENGINEERING_UNITS if request.engineering_units else CONFIG
    try:
        nodes, elements, loads = build_model(request)
        mode = StiffnessMode(request.stiffness_mode)
    except ValueError as e:
        # ModelDefinitionError and unknown stiffness modes
        raise HTTPException(status_code=400, detail=str(e))
    return solve(nodes, elements, loads, mode, config=config), config


def to_solve_result(result) -> SolveResult:
    elements = []
    for er in result.elements:
        elements.append(ElementResultData(
            element_id=er.element_id,
            length=clean_value(er.length),
            end_forces=[clean_value(v) for v in er.end_forces],
            max_axial=clean_value(er.max_axial),
            max_shear=clean_value(er.max_shear),
            max_moment=clean_value(er.max_moment),
            max_deflection=clean_value(er.max_deflection),
            stations=[
                StationData(
                    x=clean_value(st.x),
                    axial=clean_value(st.axial),
                    shear=clean_value(st.shear),
                    moment=clean_value(st.moment),
                    deflection=clean_value(st.deflection),
                    global_x=round(st.global_x, 6),
                    global_y=round(st.global_y, 6),
                )
                for st in er.stations
            ],
        ))

    return SolveResult(
        success=not result.is_degenerate,
        error="Structure unstable: singular stiffness matrix" if result.is_degenerate else None,
        degenerate=result.is_degenerate,
        singular_dofs=list(result.singular_dofs),
        max_deflection=clean_value(result.max_deflection),
        elements=elements,
        reactions=[
            ReactionData(node_id=r.node_id, fx=clean_value(r.fx), fy=clean_value(r.fy), m=clean_value(r.m))
            for r in result.reactions
        ],
    )


# =============================================================================
# API Endpoints
# =============================================================================

@app.get("/")
async def root():
    """Health check."""
    return {"status": "ok", "service": "StructMech API"}


@app.post("/api/solve", response_model=SolveResult)
async def solve_structure(request: SolveRequest):
    """Analyze a structure and return diagrams and reactions."""
    result, _ = run_analysis(request)
    return to_solve_result(result)


@app.post("/api/evaluate", response_model=SectionData)
async def evaluate_section(request: EvaluateRequest):
    """Section forces and deflection at one position of one element."""
    result, config = run_analysis(request)
    try:
        er = result.element(request.element_id)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Element {request.element_id} not analysed")

    values = er.section(request.position, config)
    return SectionData(
        element_id=er.element_id,
        position=clean_value(min(max(request.position, 0.0), er.length)),
        axial=clean_value(values.axial),
        shear=clean_value(values.shear),
        moment=clean_value(values.moment),
        deflection=clean_value(values.deflection * config.deflection_scale),
    )


@app.post("/api/generate", response_model=GeometryResult)
async def generate_structure(request: GenerateRequest):
    """Nodes and elements of a standard structure."""
    try:
        structure_type = StructureType(request.structure_type)
    except ValueError:
        raise HTTPException(
            status_code=400,
            detail=f"Unknown structure type {request.structure_type!r}",
        )

    params = GeometryParams(**request.model_dump(exclude={"structure_type"}))
    nodes, elements = generate_geometry(structure_type, params)
    logger.debug("Generated %s: %d nodes, %d elements", structure_type.value, len(nodes), len(elements))

    return GeometryResult(
        structure_type=structure_type.value,
        nodes=[
            {"id": n.id, "x": n.x, "y": n.y, "restraints": list(n.restraints),
             "support": support_type(n.restraints)}
            for n in nodes
        ],
        elements=[
            {"id": e.id, "startNode": e.ni, "endNode": e.nj, "E": e.E, "A": e.A, "I": e.I,
             "releaseStart": e.release_start, "releaseEnd": e.release_end}
            for e in elements
        ],
    )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
