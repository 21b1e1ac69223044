from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator


class RoadmapStep(BaseModel):
    step: int = Field(ge=1)
    title: str = ""
    description: str = ""
    resources: list[str] = Field(default_factory=list)


class Roadmap(BaseModel):
    """Learning roadmap snapshot as returned by the analysis service."""

    career_name: str = Field(min_length=1, alias="careerName")
    description: str = ""
    estimated_time_to_complete: str | None = Field(default=None, alias="estimatedTimeToComplete")
    missing_skills: list[str] = Field(default_factory=list, alias="missingSkills")
    roadmap: list[RoadmapStep] = Field(default_factory=list)

    model_config = ConfigDict(populate_by_name=True)

    @model_validator(mode="after")
    def _check_contiguous_steps(self) -> "Roadmap":
        self.roadmap.sort(key=lambda item: item.step)
        numbers = [item.step for item in self.roadmap]
        if numbers != list(range(1, len(numbers) + 1)):
            raise ValueError("roadmap steps must be numbered 1..N without gaps or duplicates")
        return self

    @property
    def step_numbers(self) -> list[int]:
        return [item.step for item in self.roadmap]


class RoadmapStepView(BaseModel):
    step: int
    title: str
    description: str
    resources: list[str] = Field(default_factory=list)
    status: str
    action_label: str | None = None


class RoadmapProgressView(BaseModel):
    career_name: str
    steps: list[RoadmapStepView] = Field(default_factory=list)
    completed_steps: list[int] = Field(default_factory=list)
    completed_count: int
    remaining_count: int
    percent_complete: int
    is_complete: bool


class RoadmapResponse(BaseModel):
    roadmap: Roadmap
    progress: RoadmapProgressView


class ProgressStateResponse(BaseModel):
    career_name: str
    completed_steps: list[int] = Field(default_factory=list)
    total_steps: int | None = None
    percent_complete: int | None = None
