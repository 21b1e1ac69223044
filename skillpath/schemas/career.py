from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class CareerSuggestion(BaseModel):
    career_name: str = Field(min_length=1, alias="careerName")
    description: str | None = None
    match_percentage: float = Field(default=0, ge=0, le=100, alias="matchPercentage")
    required_skills: list[str] = Field(default_factory=list, alias="requiredSkills")

    model_config = ConfigDict(populate_by_name=True, extra="allow")


class MatchTierOut(BaseModel):
    color: str
    label: str


class CareerSuggestionOut(BaseModel):
    career_name: str
    description: str | None = None
    match_percentage: float
    required_skills: list[str] = Field(default_factory=list)
    match: MatchTierOut
