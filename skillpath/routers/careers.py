from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import ValidationError

from skillpath.clients.analysis_api import AnalysisApiClient, AnalysisApiError, get_analysis_client
from skillpath.errors import NOT_ANALYZED_RECOMMENDATIONS_MESSAGE, REMEDY_BACK_TO_RECOMMENDATIONS, to_http_exception
from skillpath.routers.dependencies import get_token_data, oauth2_scheme
from skillpath.schemas.career import CareerSuggestion, CareerSuggestionOut, MatchTierOut
from skillpath.schemas.skill_gap import SkillGapResponse, SkillGapResult
from skillpath.schemas.user import TokenData
from skillpath.services.scoring import classify_match
from skillpath.services.skill_matcher import build_skill_gap_report


router = APIRouter(prefix="/careers", tags=["careers"])

logger = logging.getLogger(__name__)


@router.get("/suggestions", response_model=list[CareerSuggestionOut])
def list_career_suggestions(
    token: str = Depends(oauth2_scheme),
    token_data: TokenData = Depends(get_token_data),
    client: AnalysisApiClient = Depends(get_analysis_client),
) -> list[CareerSuggestionOut]:
    try:
        raw_items = client.get_career_suggestions(token)
    except AnalysisApiError as exc:
        raise to_http_exception(exc, not_analyzed_message=NOT_ANALYZED_RECOMMENDATIONS_MESSAGE) from exc

    out: list[CareerSuggestionOut] = []
    for raw in raw_items:
        try:
            item = CareerSuggestion.model_validate(raw)
        except ValidationError:
            logger.info("careers.suggestion skipped invalid item user=%s", token_data.user_id)
            continue
        tier = classify_match(item.match_percentage)
        out.append(
            CareerSuggestionOut(
                career_name=item.career_name,
                description=item.description,
                match_percentage=item.match_percentage,
                required_skills=item.required_skills,
                match=MatchTierOut(color=tier.color, label=tier.label),
            )
        )
    return out


@router.get("/{career_name}/skill-gaps", response_model=SkillGapResponse)
def get_skill_gaps(
    career_name: str,
    token: str = Depends(oauth2_scheme),
    token_data: TokenData = Depends(get_token_data),
    client: AnalysisApiClient = Depends(get_analysis_client),
) -> SkillGapResponse:
    try:
        raw = client.get_skill_gaps(career_name, token)
    except AnalysisApiError as exc:
        raise to_http_exception(exc) from exc

    try:
        result = SkillGapResult.model_validate(raw)
    except ValidationError as exc:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail={"message": "Invalid skill gap payload", "remedy": REMEDY_BACK_TO_RECOMMENDATIONS},
        ) from exc

    return SkillGapResponse(skill_gap=result, report=build_skill_gap_report(result))
