# user.py
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class UserIdentity(BaseModel):
    """Authenticated user as described by the analysis service profile endpoint."""

    id: str
    name: Optional[str] = None
    skills: list[str] = Field(default_factory=list)
    resume_score: float = Field(default=0, ge=0, le=100, alias="resumeScore")

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, v):
        if v is None or str(v).strip() == "":
            raise ValueError("id is required")
        return str(v).strip()

    @field_validator("resume_score", mode="before")
    @classmethod
    def _coerce_score(cls, v):
        return 0 if v is None else v


class DashboardResponse(BaseModel):
    id: str
    name: Optional[str] = None
    resume_score: float
    resume_score_color: str
    skills: list[str] = Field(default_factory=list)
    top_skills: list[str] = Field(default_factory=list)


class TokenData(BaseModel):
    user_id: str = Field(min_length=1)
