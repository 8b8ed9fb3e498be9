"""
API routes for bracket building and manual overrides.
"""

from fastapi import APIRouter, HTTPException, Depends
from pydantic import BaseModel
from typing import List, Dict, Any, Optional
from datetime import datetime
from celery.result import AsyncResult

from app.models import Entrant, BracketSettings, Gender, Belt, Discipline
from app.services.workspace import BracketWorkspace, EntrantNotFoundError, BracketNotFoundError
from app.core.celery_app import celery_app
from app.core.config import (
    DEFAULT_TARGET_BRACKET_SIZE, DEFAULT_KIDS_MAX_WEIGHT_DIFF_PERCENT,
    DEFAULT_ADULTS_MAX_WEIGHT_DIFF_PERCENT, DEFAULT_ADULTS_IGNORE_AGE_GAP,
    DEFAULT_MAX_WEIGHT_DIFF_ABSOLUTE_CAP, DEFAULT_ULTRA_HEAVY_IGNORE
)
from app.core.logging_config import get_logger
from app.tasks.bracket_tasks import generate_brackets_task

logger = get_logger(__name__)

router = APIRouter(prefix="/api", tags=["brackets"])

_workspace = BracketWorkspace()


def get_workspace() -> BracketWorkspace:
    """Process-wide workspace. Overridden in tests."""
    return _workspace


class EntrantModel(BaseModel):
    """Request/response model for a single entrant."""
    id: str
    name: str
    academy: str = ""
    gender: Gender
    age: int
    weight: float
    belt: Belt
    discipline: Discipline = Discipline.GI
    email: str = ""
    phone: str = ""
    notes: str = ""

    def to_entrant(self) -> Entrant:
        return Entrant(**self.model_dump())


class EntrantUpdate(BaseModel):
    """Partial entrant edit. The id cannot be changed."""
    name: Optional[str] = None
    academy: Optional[str] = None
    gender: Optional[Gender] = None
    age: Optional[int] = None
    weight: Optional[float] = None
    belt: Optional[Belt] = None
    discipline: Optional[Discipline] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    notes: Optional[str] = None


class SettingsModel(BaseModel):
    """Bracket settings. Values are not range-checked."""
    target_bracket_size: int = DEFAULT_TARGET_BRACKET_SIZE
    kids_max_weight_diff_percent: float = DEFAULT_KIDS_MAX_WEIGHT_DIFF_PERCENT
    adults_max_weight_diff_percent: float = DEFAULT_ADULTS_MAX_WEIGHT_DIFF_PERCENT
    adults_ignore_age_gap: bool = DEFAULT_ADULTS_IGNORE_AGE_GAP
    max_weight_diff_absolute_cap: float = DEFAULT_MAX_WEIGHT_DIFF_ABSOLUTE_CAP
    ultra_heavy_ignore: bool = DEFAULT_ULTRA_HEAVY_IGNORE


class GenerateRequest(BaseModel):
    count: int = 100
    seed: int = 0


class MoveRequest(BaseModel):
    """target: "outliers" (or null), "new", or an existing bracket id."""
    entrant_id: str
    target: Optional[str] = None


class RenameRequest(BaseModel):
    name: str


class MoveResponse(BaseModel):
    entrant_id: str
    moved: bool
    source: Optional[str] = None
    target: Optional[str] = None
    evicted_id: Optional[str] = None


@router.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "timestamp": datetime.now().isoformat()}


@router.get("/brackets")
def get_brackets(workspace: BracketWorkspace = Depends(get_workspace)):
    """Current result: brackets in display order and outliers."""
    return workspace.snapshot()


@router.get("/brackets/audit")
def audit_brackets(workspace: BracketWorkspace = Depends(get_workspace)):
    audit = workspace.audit()
    return {
        "is_valid": audit.is_valid,
        "violations": [vars(v) for v in audit.violations],
        "warnings": [vars(v) for v in audit.warnings],
    }


@router.put("/entrants")
def replace_entrants(entrants: List[EntrantModel], workspace: BracketWorkspace = Depends(get_workspace)):
    """Replace the roster and rebuild. Discards manual overrides."""
    workspace.set_entrants([model.to_entrant() for model in entrants])
    return workspace.snapshot()


@router.post("/entrants/generate")
def generate_entrants(request: GenerateRequest, workspace: BracketWorkspace = Depends(get_workspace)):
    workspace.generate_entrants(request.count, request.seed)
    return workspace.snapshot()


@router.patch("/entrants/{entrant_id}")
def update_entrant(entrant_id: str, request: EntrantUpdate,
                   workspace: BracketWorkspace = Depends(get_workspace)):
    """Edit an entrant and rebuild. Discards manual overrides."""
    try:
        updated = workspace.update_entrant(entrant_id, request.model_dump(exclude_none=True))
    except EntrantNotFoundError:
        raise HTTPException(status_code=404, detail=f"Entrant {entrant_id} not found")
    return {"entrant": updated.to_dict(), "result": workspace.snapshot()}


@router.post("/entrants/{entrant_id}/duplicate")
def duplicate_entrant(entrant_id: str, workspace: BracketWorkspace = Depends(get_workspace)):
    """Clone an entrant under a new id and rebuild."""
    try:
        clone = workspace.duplicate_entrant(entrant_id)
    except EntrantNotFoundError:
        raise HTTPException(status_code=404, detail=f"Entrant {entrant_id} not found")
    return {"entrant": clone.to_dict(), "result": workspace.snapshot()}


@router.get("/settings", response_model=SettingsModel)
def get_settings(workspace: BracketWorkspace = Depends(get_workspace)):
    return SettingsModel(**workspace.settings.to_dict())


@router.put("/settings")
def replace_settings(settings: SettingsModel, workspace: BracketWorkspace = Depends(get_workspace)):
    """Replace settings and rebuild. Discards manual overrides."""
    workspace.set_settings(BracketSettings(**settings.model_dump()))
    return workspace.snapshot()


@router.post("/brackets/move", response_model=MoveResponse)
def move_entrant(request: MoveRequest, workspace: BracketWorkspace = Depends(get_workspace)):
    """
    Move an entrant. Unknown entrants are a no-op (moved=false), not an error.
    """
    outcome = workspace.move(request.entrant_id, request.target)
    return MoveResponse(**vars(outcome))


@router.post("/brackets/{bracket_id}/rename")
def rename_bracket(bracket_id: str, request: RenameRequest,
                   workspace: BracketWorkspace = Depends(get_workspace)):
    if not workspace.rename(bracket_id, request.name):
        raise HTTPException(status_code=404, detail=f"Bracket {bracket_id} not found")
    return {"id": bracket_id, "name": request.name}


@router.post("/brackets")
def create_bracket(workspace: BracketWorkspace = Depends(get_workspace)):
    """Create an empty bracket at the front of the list."""
    bracket = workspace.create_empty_bracket()
    return bracket.to_dict()


@router.get("/brackets/{bracket_id}/can-drop/{entrant_id}")
def check_drop(bracket_id: str, entrant_id: str, workspace: BracketWorkspace = Depends(get_workspace)):
    try:
        allowed = workspace.can_drop(bracket_id, entrant_id)
    except BracketNotFoundError:
        raise HTTPException(status_code=404, detail=f"Bracket {bracket_id} not found")
    except EntrantNotFoundError:
        raise HTTPException(status_code=404, detail=f"Entrant {entrant_id} not found")
    return {"bracket_id": bracket_id, "entrant_id": entrant_id, "allowed": allowed}


@router.get("/outliers/advisory-payload")
def outlier_payload(workspace: BracketWorkspace = Depends(get_workspace)) -> List[Dict[str, Any]]:
    """Outlier fields for an external advisory service."""
    return workspace.outlier_payload()


@router.post("/brackets/async")
async def generate_brackets_async(workspace: BracketWorkspace = Depends(get_workspace)):
    """
    Start async bracket building for the current roster and settings.

    Returns:
        dict: Task ID for polling status
    """
    entrants, settings = workspace.roster_payload()
    try:
        task = generate_brackets_task.delay(entrants, settings)
    except Exception as e:
        logger.error("Failed to start bracket task: %s", e)
        raise HTTPException(status_code=500, detail=f"Failed to start task: {str(e)}")

    return {
        "task_id": task.id,
        "status": "PENDING",
        "message": "Bracket generation started"
    }


@router.get("/brackets/status/{task_id}")
async def get_brackets_status(task_id: str):
    """
    Get status of an async bracket building task.

    Args:
        task_id: Celery task ID
    """
    try:
        task_result = AsyncResult(task_id, app=celery_app)

        if task_result.state == "PENDING":
            response = {
                "task_id": task_id,
                "status": "PENDING",
                "message": "Task is waiting to start..."
            }
        elif task_result.state == "PROGRESS":
            response = {
                "task_id": task_id,
                "status": "PROGRESS",
                "message": task_result.info.get("status", "Processing...")
            }
        elif task_result.state == "SUCCESS":
            response = {
                "task_id": task_id,
                "status": "SUCCESS",
                "result": task_result.result
            }
        elif task_result.state == "FAILURE":
            response = {
                "task_id": task_id,
                "status": "FAILURE",
                "message": str(task_result.info)
            }
        else:
            response = {
                "task_id": task_id,
                "status": task_result.state,
                "message": f"Task state: {task_result.state}"
            }

        return response
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to get task status: {str(e)}")
