# skill_matcher.py
from __future__ import annotations

from enum import Enum
from typing import Iterable, Sequence

from skillpath.schemas.skill_gap import PrioritizedSkill, SkillGapReport, SkillGapResult, SeverityOut
from skillpath.services.scoring import classify_severity, round_percent


class SkillPriority(str, Enum):
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


PRIORITY_SKILL_LIMIT = 3


def _skill_text(value: str) -> str:
    # Lowercase only; whitespace is significant and a blank skill is contained in every name.
    return (value or "").lower()


def is_satisfied(required_skill: str, user_skills: Iterable[str]) -> bool:
    """Return True if any user skill contains the required skill or is contained by it.

    Comparison is case-insensitive substring containment in either direction, so
    "Data Analysis" is satisfied by "analysis" as well as "advanced data analysis skills".
    """

    required = _skill_text(required_skill)
    for user_skill in user_skills:
        candidate = _skill_text(user_skill)
        if candidate in required or required in candidate:
            return True
    return False


def matched_skills(required_skills: Sequence[str], user_skills: Iterable[str]) -> list[str]:
    user_list = list(user_skills)
    return [skill for skill in required_skills if is_satisfied(skill, user_list)]


def missing_skills(required_skills: Sequence[str], user_skills: Iterable[str]) -> list[str]:
    user_list = list(user_skills)
    return [skill for skill in required_skills if not is_satisfied(skill, user_list)]


def priority_of(missing_skill: str, index: int) -> SkillPriority:
    # Positional only: the missing list already arrives in learning order.
    if index < 3:
        return SkillPriority.HIGH
    if index < 6:
        return SkillPriority.MEDIUM
    return SkillPriority.LOW


def prioritize_missing_skills(missing: Sequence[str]) -> list[PrioritizedSkill]:
    return [
        PrioritizedSkill(name=skill, priority=priority_of(skill, index).value, rank=index + 1)
        for index, skill in enumerate(missing)
    ]


def priority_skills(missing: Sequence[str], limit: int = PRIORITY_SKILL_LIMIT) -> list[str]:
    return list(missing[:limit])


def readiness_message(missing_count: int) -> str:
    if missing_count == 0:
        return "You're ready for this career path!"
    return f"{missing_count} more skills to go!"


def build_skill_gap_report(result: SkillGapResult) -> SkillGapReport:
    matched = matched_skills(result.required_skills, result.user_skills)
    # The server's missing list is authoritative for what to learn next.
    missing = list(result.missing_skills)
    severity = classify_severity(result.skill_gap_percentage)

    return SkillGapReport(
        career_name=result.career_name,
        matched_skills=matched,
        missing_skills=prioritize_missing_skills(missing),
        priority_skills=priority_skills(missing),
        matched_count=len(matched),
        missing_count=len(missing),
        required_count=len(result.required_skills),
        skill_gap_percentage=result.skill_gap_percentage,
        match_percentage=100 - result.skill_gap_percentage,
        skill_progress_percentage=round_percent(len(matched), len(result.required_skills)),
        severity=SeverityOut(level=severity.level, color=severity.color, label=severity.label),
        readiness_message=readiness_message(len(missing)),
    )
