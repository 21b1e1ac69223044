from __future__ import annotations

import pytest

from skillpath.schemas.roadmap import Roadmap
from skillpath.services.progress_storage import (
    InMemoryProgressStorage,
    ProgressStorageError,
    progress_storage_key,
)
from skillpath.services.roadmap_progress import (
    RoadmapProgressTracker,
    StepStatus,
    build_roadmap_view,
    derive_status,
)


L, A, C = StepStatus.LOCKED, StepStatus.AVAILABLE, StepStatus.COMPLETED


class BrokenStorage:
    def get(self, key):
        raise ProgressStorageError("storage offline")

    def set(self, key, steps):
        raise ProgressStorageError("storage offline")

    def remove(self, key):
        raise ProgressStorageError("storage offline")


@pytest.mark.parametrize(
    "completed, expected",
    [
        (set(), [A, L, L]),
        ({1}, [C, A, L]),
        ({1, 3}, [C, A, C]),
        ({3}, [A, L, C]),
        ({1, 2, 3}, [C, C, C]),
    ],
)
def test_derive_status(completed, expected) -> None:
    assert [derive_status(n, completed) for n in (1, 2, 3)] == expected


def test_toggle_is_its_own_inverse() -> None:
    storage = InMemoryProgressStorage()
    tracker = RoadmapProgressTracker(storage, "u1", "Data Analyst", total_steps=3)
    tracker.toggle_step(1)

    assert tracker.toggle_step(2) == {1, 2}
    assert tracker.toggle_step(2) == {1}
    assert storage.get(progress_storage_key("Data Analyst", "u1")) == {1}


def test_locked_step_can_be_toggled() -> None:
    tracker = RoadmapProgressTracker(InMemoryProgressStorage(), "u1", "Data Analyst", total_steps=3)
    assert tracker.status_of(3) is StepStatus.LOCKED
    tracker.toggle_step(3)
    assert tracker.status_of(3) is StepStatus.COMPLETED


def test_uncompleting_previous_step_keeps_later_step_completed() -> None:
    tracker = RoadmapProgressTracker(InMemoryProgressStorage(), "u1", "DevOps", total_steps=3)
    tracker.toggle_step(1)
    tracker.toggle_step(2)
    tracker.toggle_step(1)
    assert tracker.statuses([1, 2, 3]) == [A, C, A]


def test_percent_complete() -> None:
    tracker = RoadmapProgressTracker(InMemoryProgressStorage(), "u1", "DevOps", total_steps=3)
    assert tracker.percent_complete() == 0
    tracker.toggle_step(1)
    tracker.toggle_step(2)
    assert tracker.percent_complete() == 67
    assert tracker.steps_remaining() == 1
    tracker.toggle_step(3)
    assert tracker.is_complete()


def test_percent_complete_without_steps() -> None:
    tracker = RoadmapProgressTracker(InMemoryProgressStorage(), "u1", "DevOps", total_steps=0)
    assert tracker.percent_complete() == 0
    assert not tracker.is_complete()


def test_steps_beyond_the_roadmap_are_not_counted() -> None:
    tracker = RoadmapProgressTracker(InMemoryProgressStorage(), "u1", "DevOps", total_steps=3)
    for step in (1, 2, 3, 9):
        tracker.toggle_step(step)

    assert tracker.completed_steps == {1, 2, 3, 9}
    assert tracker.counted_steps() == {1, 2, 3}
    assert tracker.percent_complete() == 100
    assert tracker.steps_remaining() == 0
    assert tracker.is_complete()


def test_is_complete_is_not_fooled_by_rounding() -> None:
    tracker = RoadmapProgressTracker(InMemoryProgressStorage(), "u1", "DevOps", total_steps=200)
    for step in range(1, 200):
        tracker.toggle_step(step)

    assert tracker.percent_complete() == 100
    assert not tracker.is_complete()


def test_progress_survives_a_new_tracker() -> None:
    storage = InMemoryProgressStorage()
    RoadmapProgressTracker(storage, "u1", "DevOps").toggle_step(1)

    again = RoadmapProgressTracker(storage, "u1", "DevOps")
    assert again.load() == {1}


def test_reset_only_clears_its_own_key() -> None:
    storage = InMemoryProgressStorage()
    mine = RoadmapProgressTracker(storage, "u1", "DevOps")
    other_career = RoadmapProgressTracker(storage, "u1", "Data Analyst")
    other_user = RoadmapProgressTracker(storage, "u2", "DevOps")
    for tracker in (mine, other_career, other_user):
        tracker.toggle_step(1)

    mine.reset()

    assert mine.completed_steps == set()
    assert storage.get("roadmap_DevOps_u1") is None
    assert storage.get("roadmap_Data Analyst_u1") == {1}
    assert storage.get("roadmap_DevOps_u2") == {1}


def test_corrupt_snapshot_reads_as_empty() -> None:
    storage = InMemoryProgressStorage()
    storage.set_raw("roadmap_DevOps_u1", "{not json")
    tracker = RoadmapProgressTracker(storage, "u1", "DevOps", total_steps=3)
    assert tracker.load() == set()
    assert tracker.statuses([1, 2, 3]) == [A, L, L]


def test_unavailable_storage_is_not_surfaced() -> None:
    tracker = RoadmapProgressTracker(BrokenStorage(), "u1", "DevOps", total_steps=2)
    assert tracker.load() == set()
    assert tracker.toggle_step(1) == {1}
    tracker.reset()
    assert tracker.completed_steps == set()


def test_build_roadmap_view() -> None:
    roadmap = Roadmap.model_validate(
        {
            "careerName": "DevOps",
            "description": "Ship things",
            "estimatedTimeToComplete": "6 months",
            "roadmap": [
                {"step": 2, "title": "Docker", "description": "Containers", "resources": ["docs.docker.com"]},
                {"step": 1, "title": "Linux", "description": "Shell basics"},
                {"step": 3, "title": "CI/CD", "description": "Pipelines"},
            ],
        }
    )
    tracker = RoadmapProgressTracker(InMemoryProgressStorage(), "u1", "DevOps")
    tracker.toggle_step(1)

    view = build_roadmap_view(roadmap, tracker)

    assert [s.step for s in view.steps] == [1, 2, 3]
    assert [s.status for s in view.steps] == ["completed", "available", "locked"]
    assert [s.action_label for s in view.steps] == ["Completed", "Mark Complete", None]
    assert view.steps[1].resources == ["docs.docker.com"]
    assert view.percent_complete == 33
    assert view.completed_count == 1
    assert view.remaining_count == 2
    assert view.is_complete is False


def test_roadmap_rejects_non_contiguous_steps() -> None:
    with pytest.raises(ValueError):
        Roadmap.model_validate({"careerName": "DevOps", "roadmap": [{"step": 1}, {"step": 3}]})
    with pytest.raises(ValueError):
        Roadmap.model_validate({"careerName": "DevOps", "roadmap": [{"step": 1}, {"step": 1}]})


def test_build_roadmap_view_ignores_steps_not_on_the_roadmap() -> None:
    roadmap = Roadmap.model_validate(
        {
            "careerName": "DevOps",
            "roadmap": [{"step": 1, "title": "Linux"}, {"step": 2, "title": "Docker"}, {"step": 3, "title": "CI/CD"}],
        }
    )
    tracker = RoadmapProgressTracker(InMemoryProgressStorage(), "u1", "DevOps")
    for step in (1, 2, 3, 9):
        tracker.toggle_step(step)

    view = build_roadmap_view(roadmap, tracker)

    assert view.completed_steps == [1, 2, 3]
    assert view.completed_count == 3
    assert view.remaining_count == 0
    assert view.percent_complete == 100
    assert view.is_complete is True
