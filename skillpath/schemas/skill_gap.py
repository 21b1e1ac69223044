from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class SkillGapResult(BaseModel):
    """Skill-gap snapshot as returned by the analysis service."""

    career_name: str = Field(min_length=1, alias="careerName")
    user_skills: list[str] = Field(default_factory=list, alias="userSkills")
    required_skills: list[str] = Field(default_factory=list, alias="requiredSkills")
    missing_skills: list[str] = Field(default_factory=list, alias="missingSkills")
    skill_gap_percentage: float = Field(ge=0, le=100, alias="skillGapPercentage")

    model_config = ConfigDict(populate_by_name=True)


class SeverityOut(BaseModel):
    level: str
    color: str
    label: str


class PrioritizedSkill(BaseModel):
    name: str
    priority: str
    rank: int = Field(ge=1)


class SkillGapReport(BaseModel):
    career_name: str
    matched_skills: list[str] = Field(default_factory=list)
    missing_skills: list[PrioritizedSkill] = Field(default_factory=list)
    priority_skills: list[str] = Field(default_factory=list)
    matched_count: int
    missing_count: int
    required_count: int
    skill_gap_percentage: float
    match_percentage: float
    skill_progress_percentage: int
    severity: SeverityOut
    readiness_message: str


class SkillGapResponse(BaseModel):
    skill_gap: SkillGapResult
    report: SkillGapReport

    model_config = ConfigDict(populate_by_name=True)
