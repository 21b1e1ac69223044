from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class GapSeverity:
    level: str
    color: str
    label: str


GAP_LOW = GapSeverity(level="low", color="#22C55E", label="Minor Gap")
GAP_MEDIUM = GapSeverity(level="medium", color="#F59E0B", label="Moderate Gap")
GAP_HIGH = GapSeverity(level="high", color="#EF4444", label="Significant Gap")


@dataclass(frozen=True)
class MatchTier:
    color: str
    label: str


MATCH_EXCELLENT = MatchTier(color="#22C55E", label="Excellent Match")
MATCH_GOOD = MatchTier(color="#F59E0B", label="Good Match")
MATCH_FAIR = MatchTier(color="#EF4444", label="Fair Match")
MATCH_LOW = MatchTier(color="#6B7280", label="Low Match")


def classify_severity(gap_percentage: float) -> GapSeverity:
    """Bucket a skill-gap percentage; each threshold is inclusive of its upper bound."""

    if gap_percentage <= 20:
        return GAP_LOW
    if gap_percentage <= 50:
        return GAP_MEDIUM
    return GAP_HIGH


def classify_match(match_percentage: float) -> MatchTier:
    if match_percentage >= 80:
        return MATCH_EXCELLENT
    if match_percentage >= 60:
        return MATCH_GOOD
    if match_percentage >= 40:
        return MATCH_FAIR
    return MATCH_LOW


def resume_score_color(score: float) -> str:
    if score >= 80:
        return "#22C55E"
    if score >= 60:
        return "#F59E0B"
    return "#EF4444"


def round_percent(numerator: float, denominator: float) -> int:
    # Half-up, so 2 of 3 -> 67 and 1 of 8 -> 13 (Python's round() is half-to-even).
    if not denominator:
        return 0
    return int(math.floor(100 * numerator / denominator + 0.5))
