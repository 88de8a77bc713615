"""
FastAPI backend for the frame sketcher - exposes the framesketch solver as REST API.
"""

from typing import List, Literal, Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, ConfigDict, Field

from framesketch.diagrams import result_summary
from framesketch.model import DEFAULT_SECTION, FemInput, ModelInputError, SectionProps
from framesketch.solve import run_analysis
from framesketch.validate import validate_model


app = FastAPI(
    title="FrameSketch API",
    description="2D frame/truss analysis engine",
    version="0.1.0"
)

# CORS for the editor
app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:5173", "http://127.0.0.1:5173"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Request Models (mirror the editor's camelCase snapshot)
# =============================================================================

class _EditorModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class NodeData(_EditorModel):
    id: str
    x: float
    y: float


class MemberData(_EditorModel):
    id: str
    a: str
    b: str


class SupportData(_EditorModel):
    id: str
    node_id: str = Field(alias="nodeId")
    type: Literal["pin", "roller", "fix"]
    angle_deg: float = Field(0.0, alias="angleDeg")


class JointData(_EditorModel):
    id: str
    node_id: str = Field(alias="nodeId")


class PointLoadData(_EditorModel):
    id: str
    node_id: str = Field(alias="nodeId")
    angle_deg: float = Field(alias="angleDeg")
    magnitude: float


class DistLoadData(_EditorModel):
    id: str
    member_id: str = Field(alias="memberId")
    angle_deg: float = Field(alias="angleDeg")
    magnitude: float


class MomentLoadData(_EditorModel):
    id: str
    node_id: str = Field(alias="nodeId")
    clockwise: bool = False
    magnitude: float


class SectionData(_EditorModel):
    EA: float = Field(DEFAULT_SECTION.EA, gt=0, description="Axial stiffness")
    EI: float = Field(DEFAULT_SECTION.EI, gt=0, description="Bending stiffness")


class ModelData(_EditorModel):
    """Structural model snapshot sent by the editor."""
    nodes: List[NodeData] = []
    members: List[MemberData] = []
    supports: List[SupportData] = []
    joints: List[JointData] = []
    point_loads: List[PointLoadData] = Field([], alias="pointLoads")
    dist_loads: List[DistLoadData] = Field([], alias="distLoads")
    moment_loads: List[MomentLoadData] = Field([], alias="momentLoads")
    section: Optional[SectionData] = None

    def to_fem_input(self) -> FemInput:
        try:
            return FemInput.from_dict(self.model_dump(exclude={"section"}))
        except ModelInputError as e:
            raise HTTPException(status_code=422, detail=str(e))

    def section_props(self) -> SectionProps:
        if self.section is None:
            return DEFAULT_SECTION
        return SectionProps(EA=self.section.EA, EI=self.section.EI)


# =============================================================================
# API Endpoints
# =============================================================================

@app.get("/")
async def root():
    """Health check."""
    return {"status": "ok", "service": "FrameSketch API"}


@app.post("/api/validate")
async def validate(model: ModelData):
    """Validate a model without solving it."""
    return validate_model(model.to_fem_input()).to_dict()


@app.post("/api/analyze")
async def analyze(model: ModelData):
    """Validate and solve a model. Solver failures are returned, not raised."""
    report = run_analysis(model.to_fem_input(), section=model.section_props())
    payload = report.to_dict()
    if report.result.ok:
        payload["summary"] = result_summary(report.result)
    return payload


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
