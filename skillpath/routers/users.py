# users.py
from fastapi import APIRouter, Depends
from skillpath.routers.dependencies import get_current_user
from skillpath.schemas.user import DashboardResponse, UserIdentity
from skillpath.services.scoring import resume_score_color


router = APIRouter()

DASHBOARD_SKILL_LIMIT = 8


@router.get("/me", response_model=DashboardResponse)
def read_current_user(current_user: UserIdentity = Depends(get_current_user)) -> DashboardResponse:
    return DashboardResponse(
        id=current_user.id,
        name=current_user.name,
        resume_score=current_user.resume_score,
        resume_score_color=resume_score_color(current_user.resume_score),
        skills=current_user.skills,
        top_skills=current_user.skills[:DASHBOARD_SKILL_LIMIT],
    )
