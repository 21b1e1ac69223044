from __future__ import annotations

import logging
from enum import Enum
from typing import AbstractSet, Iterable

from skillpath.schemas.roadmap import Roadmap, RoadmapProgressView, RoadmapStepView
from skillpath.services.progress_storage import ProgressStorage, ProgressStorageError, progress_storage_key
from skillpath.services.scoring import round_percent


logger = logging.getLogger(__name__)


class StepStatus(str, Enum):
    LOCKED = "locked"
    AVAILABLE = "available"
    COMPLETED = "completed"


def derive_status(step_number: int, completed: AbstractSet[int]) -> StepStatus:
    """Status of one step, computed from the completed set alone.

    Only the ``available`` state is gated on the previous step: un-completing step n-1
    leaves a completed step n completed.
    """

    if step_number in completed:
        return StepStatus.COMPLETED
    if step_number == 1 or (step_number - 1) in completed:
        return StepStatus.AVAILABLE
    return StepStatus.LOCKED


def action_label(status: StepStatus) -> str | None:
    if status is StepStatus.COMPLETED:
        return "Completed"
    if status is StepStatus.AVAILABLE:
        return "Mark Complete"
    return None


class RoadmapProgressTracker:
    """Completed-step set for one (user, career) pair, backed by durable storage."""

    def __init__(
        self,
        storage: ProgressStorage,
        user_id: int | str,
        career_name: str,
        total_steps: int | None = None,
    ) -> None:
        self.storage = storage
        self.user_id = user_id
        self.career_name = career_name
        self.total_steps = total_steps
        self.key = progress_storage_key(career_name, user_id)
        self._completed: set[int] | None = None

    def load(self) -> set[int]:
        try:
            stored = self.storage.get(self.key)
        except ProgressStorageError as exc:
            logger.warning("roadmap.progress unreadable key=%s error=%s; treating as empty", self.key, exc)
            stored = None
        self._completed = set(stored) if stored else set()
        return set(self._completed)

    @property
    def completed_steps(self) -> set[int]:
        if self._completed is None:
            self.load()
        return set(self._completed)

    def _persist(self, completed: set[int]) -> None:
        try:
            self.storage.set(self.key, completed)
        except ProgressStorageError as exc:
            logger.warning("roadmap.progress write failed key=%s error=%s", self.key, exc)

    def toggle_step(self, step_number: int) -> set[int]:
        # Locked steps are not rejected here; the UI hides their toggle.
        completed = self.completed_steps
        if step_number in completed:
            completed.discard(step_number)
        else:
            completed.add(step_number)
        self._completed = completed
        self._persist(completed)
        return set(completed)

    def reset(self) -> None:
        self._completed = set()
        try:
            self.storage.remove(self.key)
        except ProgressStorageError as exc:
            logger.warning("roadmap.progress reset failed key=%s error=%s", self.key, exc)

    def status_of(self, step_number: int) -> StepStatus:
        return derive_status(step_number, self.completed_steps)

    def statuses(self, step_numbers: Iterable[int]) -> list[StepStatus]:
        completed = self.completed_steps
        return [derive_status(number, completed) for number in step_numbers]

    def counted_steps(self) -> set[int]:
        """Completed steps that exist on a roadmap of ``total_steps`` steps."""
        if not self.total_steps:
            return set()
        return {n for n in self.completed_steps if 1 <= n <= self.total_steps}

    def percent_complete(self) -> int:
        if not self.total_steps:
            return 0
        return round_percent(len(self.counted_steps()), self.total_steps)

    def steps_remaining(self) -> int:
        return (self.total_steps or 0) - len(self.counted_steps())

    def is_complete(self) -> bool:
        return bool(self.total_steps) and len(self.counted_steps()) == self.total_steps


def build_roadmap_view(roadmap: Roadmap, tracker: RoadmapProgressTracker) -> RoadmapProgressView:
    tracker.total_steps = len(roadmap.roadmap)
    completed = tracker.completed_steps & set(roadmap.step_numbers)

    steps: list[RoadmapStepView] = []
    for item in roadmap.roadmap:
        status = derive_status(item.step, completed)
        steps.append(
            RoadmapStepView(
                step=item.step,
                title=item.title,
                description=item.description,
                resources=list(item.resources),
                status=status.value,
                action_label=action_label(status),
            )
        )

    return RoadmapProgressView(
        career_name=roadmap.career_name,
        steps=steps,
        completed_steps=sorted(completed),
        completed_count=len(completed),
        remaining_count=len(roadmap.roadmap) - len(completed),
        percent_complete=round_percent(len(completed), len(roadmap.roadmap)),
        is_complete=bool(roadmap.roadmap) and len(completed) == len(roadmap.roadmap),
    )
