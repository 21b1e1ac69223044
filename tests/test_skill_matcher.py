from __future__ import annotations

from skillpath.schemas.skill_gap import SkillGapResult
from skillpath.services.skill_matcher import (
    SkillPriority,
    build_skill_gap_report,
    is_satisfied,
    matched_skills,
    missing_skills,
    priority_of,
    prioritize_missing_skills,
    priority_skills,
)


def test_required_skill_satisfied_by_longer_user_skill() -> None:
    assert is_satisfied("Python", ["experienced python developer"])


def test_required_skill_satisfied_by_shorter_user_skill() -> None:
    assert is_satisfied("Data Analysis", ["analysis"])
    assert is_satisfied("Data Analysis", ["advanced data analysis skills"])


def test_no_fuzziness_beyond_containment() -> None:
    assert not is_satisfied("Kubernetes", ["kubernetis", "docker"])
    assert not is_satisfied("Machine Learning", ["learning machines"])
    assert not is_satisfied("Data Visualization", ["data analysis"])


def test_no_user_skills_satisfy_nothing() -> None:
    assert not is_satisfied("SQL", [])


def test_blank_user_skill_is_contained_in_every_required_skill() -> None:
    assert is_satisfied("SQL", [""])
    assert matched_skills(["SQL", "Python"], [""]) == ["SQL", "Python"]


def test_whitespace_is_not_stripped() -> None:
    assert not is_satisfied("Java Script", [" java"])
    assert not is_satisfied("SQL", ["   "])
    assert is_satisfied("Java Script", ["java"])


def test_matched_and_missing_partition_required_in_order() -> None:
    required = ["SQL", "Python", "Tableau", "Statistics", "Excel"]
    user = ["python scripting", "excel", "sql"]

    matched = matched_skills(required, user)
    missing = missing_skills(required, user)

    assert matched == ["SQL", "Python", "Excel"]
    assert missing == ["Tableau", "Statistics"]
    assert sorted(matched + missing, key=required.index) == required
    assert not set(matched) & set(missing)


def test_priority_is_positional() -> None:
    assert [priority_of("x", i) for i in range(8)] == [
        SkillPriority.HIGH,
        SkillPriority.HIGH,
        SkillPriority.HIGH,
        SkillPriority.MEDIUM,
        SkillPriority.MEDIUM,
        SkillPriority.MEDIUM,
        SkillPriority.LOW,
        SkillPriority.LOW,
    ]


def test_prioritized_missing_skills_and_top_three() -> None:
    missing = ["Docker", "AWS", "Terraform", "Go"]
    items = prioritize_missing_skills(missing)
    assert [(i.name, i.priority, i.rank) for i in items] == [
        ("Docker", "High", 1),
        ("AWS", "High", 2),
        ("Terraform", "High", 3),
        ("Go", "Medium", 4),
    ]
    assert priority_skills(missing) == ["Docker", "AWS", "Terraform"]


def test_build_skill_gap_report() -> None:
    result = SkillGapResult.model_validate(
        {
            "careerName": "Data Analyst",
            "userSkills": ["SQL", "python programming"],
            "requiredSkills": ["SQL", "Python", "Tableau"],
            "missingSkills": ["Tableau"],
            "skillGapPercentage": 33,
        }
    )

    report = build_skill_gap_report(result)

    assert report.matched_skills == ["SQL", "Python"]
    assert [s.name for s in report.missing_skills] == ["Tableau"]
    assert report.matched_count == 2
    assert report.missing_count == 1
    assert report.required_count == 3
    assert report.match_percentage == 67
    assert report.skill_progress_percentage == 67
    assert report.severity.level == "medium"
    assert report.severity.label == "Moderate Gap"
    assert report.readiness_message == "1 more skills to go!"


def test_build_skill_gap_report_without_requirements() -> None:
    result = SkillGapResult(career_name="Anything", skill_gap_percentage=0)
    report = build_skill_gap_report(result)
    assert report.skill_progress_percentage == 0
    assert report.severity.level == "low"
    assert report.readiness_message == "You're ready for this career path!"
