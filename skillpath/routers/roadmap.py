from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Path, Query, status
from pydantic import ValidationError

from skillpath.clients.analysis_api import AnalysisApiClient, AnalysisApiError, get_analysis_client
from skillpath.errors import REMEDY_BACK_TO_RECOMMENDATIONS, to_http_exception
from skillpath.routers.dependencies import get_progress_storage, get_token_data, oauth2_scheme
from skillpath.schemas.roadmap import ProgressStateResponse, Roadmap, RoadmapResponse
from skillpath.schemas.user import TokenData
from skillpath.services.progress_storage import ProgressStorage
from skillpath.services.roadmap_progress import RoadmapProgressTracker, build_roadmap_view


router = APIRouter(prefix="/careers", tags=["roadmap"])


def _progress_state(tracker: RoadmapProgressTracker) -> ProgressStateResponse:
    return ProgressStateResponse(
        career_name=tracker.career_name,
        completed_steps=sorted(tracker.completed_steps),
        total_steps=tracker.total_steps,
        percent_complete=tracker.percent_complete() if tracker.total_steps else None,
    )


@router.get("/{career_name}/roadmap", response_model=RoadmapResponse)
def get_roadmap(
    career_name: str,
    token: str = Depends(oauth2_scheme),
    token_data: TokenData = Depends(get_token_data),
    client: AnalysisApiClient = Depends(get_analysis_client),
    storage: ProgressStorage = Depends(get_progress_storage),
) -> RoadmapResponse:
    try:
        raw = client.get_roadmap(career_name, token)
    except AnalysisApiError as exc:
        raise to_http_exception(exc) from exc

    try:
        roadmap = Roadmap.model_validate(raw)
    except ValidationError as exc:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail={"message": "Invalid roadmap payload", "remedy": REMEDY_BACK_TO_RECOMMENDATIONS},
        ) from exc

    # Progress is keyed by the career name in the URL, matching how it is toggled.
    tracker = RoadmapProgressTracker(storage, token_data.user_id, career_name, total_steps=len(roadmap.roadmap))
    tracker.load()
    return RoadmapResponse(roadmap=roadmap, progress=build_roadmap_view(roadmap, tracker))


@router.get("/{career_name}/progress", response_model=ProgressStateResponse)
def read_progress(
    career_name: str,
    total_steps: int | None = Query(default=None, ge=1),
    token_data: TokenData = Depends(get_token_data),
    storage: ProgressStorage = Depends(get_progress_storage),
) -> ProgressStateResponse:
    tracker = RoadmapProgressTracker(storage, token_data.user_id, career_name, total_steps=total_steps)
    tracker.load()
    return _progress_state(tracker)


@router.post("/{career_name}/progress/steps/{step_number}/toggle", response_model=ProgressStateResponse)
def toggle_step(
    career_name: str,
    step_number: int = Path(ge=1),
    total_steps: int | None = Query(default=None, ge=1),
    token_data: TokenData = Depends(get_token_data),
    storage: ProgressStorage = Depends(get_progress_storage),
) -> ProgressStateResponse:
    if total_steps is not None and step_number > total_steps:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"step_number {step_number} is outside a roadmap of {total_steps} steps",
        )
    tracker = RoadmapProgressTracker(storage, token_data.user_id, career_name, total_steps=total_steps)
    tracker.load()
    tracker.toggle_step(step_number)
    return _progress_state(tracker)


@router.delete("/{career_name}/progress", response_model=ProgressStateResponse)
def reset_progress(
    career_name: str,
    token_data: TokenData = Depends(get_token_data),
    storage: ProgressStorage = Depends(get_progress_storage),
) -> ProgressStateResponse:
    tracker = RoadmapProgressTracker(storage, token_data.user_id, career_name)
    tracker.reset()
    return _progress_state(tracker)
