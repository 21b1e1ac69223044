# __init__.py
from skillpath.schemas.career import CareerSuggestion, CareerSuggestionOut, MatchTierOut
from skillpath.schemas.roadmap import ProgressStateResponse, Roadmap, RoadmapProgressView, RoadmapResponse, RoadmapStep, RoadmapStepView
from skillpath.schemas.skill_gap import PrioritizedSkill, SeverityOut, SkillGapReport, SkillGapResponse, SkillGapResult
from skillpath.schemas.user import DashboardResponse, TokenData, UserIdentity

__all__ = [
	"CareerSuggestion",
	"CareerSuggestionOut",
	"MatchTierOut",
	"ProgressStateResponse",
	"Roadmap",
	"RoadmapProgressView",
	"RoadmapResponse",
	"RoadmapStep",
	"RoadmapStepView",
	"PrioritizedSkill",
	"SeverityOut",
	"SkillGapReport",
	"SkillGapResponse",
	"SkillGapResult",
	"DashboardResponse",
	"TokenData",
	"UserIdentity",
]
