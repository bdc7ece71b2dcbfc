import logging
from typing import Literal, Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from backend.app.solver import solve_grid
from solver import SolverError
from solver import settings as settings_store

LOG = logging.getLogger(__name__)

app = FastAPI(title="GaussSolver API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class SolveRequest(BaseModel):
    matrix: list[list[str]]
    vector: list[str]
    reduce_to_normal_form: Optional[bool] = None
    strict: Optional[bool] = None
    display: Optional[Literal["exact", "decimal"]] = None


class StepInfo(BaseModel):
    step_number: int
    description: str
    explanation: str
    matrix: list[list[str]]
    latex: str
    highlight_row: Optional[int] = None
    highlight_col: Optional[int] = None


class VerificationInfo(BaseModel):
    step_number: int
    description: str
    expression: str
    explanation: str


class Summary(BaseModel):
    runtime_ms: float
    total_steps: int
    verification_steps: int
    validation_status: str
    reduced: bool
    consistent: bool
    residual: Optional[float] = None
    timestamp: str
    library: str


class SolveResponse(BaseModel):
    size: int
    steps: list[StepInfo]
    solution_type: str
    solution_text: list[str]
    parameters: list[str]
    rank_a: int
    rank_aug: int
    final_matrix: list[list[str]]
    verification_steps: list[VerificationInfo]
    summary: Summary


class SettingsModel(BaseModel):
    reduce_to_normal_form: bool
    max_size: int
    strict_parsing: bool
    display: Literal["exact", "decimal"]


class SettingsUpdate(BaseModel):
    reduce_to_normal_form: Optional[bool] = None
    max_size: Optional[int] = None
    strict_parsing: Optional[bool] = None
    display: Optional[Literal["exact", "decimal"]] = None


@app.post("/api/solve", response_model=SolveResponse)
def solve(req: SolveRequest):
    if not req.matrix:
        raise HTTPException(status_code=400, detail="Matrix cannot be empty.")

    defaults = settings_store.get_settings()
    options = {
        "reduce_to_normal_form": (
            defaults["reduce_to_normal_form"]
            if req.reduce_to_normal_form is None else req.reduce_to_normal_form
        ),
        "strict": defaults["strict_parsing"] if req.strict is None else req.strict,
        "display": defaults["display"] if req.display is None else req.display,
        "max_size": defaults["max_size"],
    }

    try:
        result = solve_grid(req.matrix, req.vector, **options)
    except SolverError as e:
        raise HTTPException(status_code=400, detail=f"Invalid input: {e}")
    except Exception as e:
        LOG.exception("Solver failed")
        raise HTTPException(status_code=500, detail=f"Solver error: {str(e)}")

    return result


@app.get("/api/settings", response_model=SettingsModel)
def read_settings():
    return settings_store.get_settings()


@app.put("/api/settings", response_model=SettingsModel)
def update_settings(update: SettingsUpdate):
    changes = {k: v for k, v in update.model_dump().items() if v is not None}
    try:
        return settings_store.save_settings(changes)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
