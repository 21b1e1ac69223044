from __future__ import annotations

import json
from typing import Iterable, Protocol

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from skillpath.models.roadmap_progress import RoadmapProgress


class ProgressStorageError(RuntimeError):
    pass


class CorruptSnapshotError(ProgressStorageError):
    pass


def progress_storage_key(career_name: str, user_id: int | str) -> str:
    return f"roadmap_{career_name}_{user_id}"


def dump_snapshot(steps: Iterable[int]) -> str:
    return json.dumps(sorted(set(int(s) for s in steps)))


def load_snapshot(raw: str) -> set[int]:
    try:
        value = json.loads(raw)
    except (TypeError, ValueError) as exc:
        raise CorruptSnapshotError(f"unparseable snapshot: {raw!r}") from exc
    if not isinstance(value, list):
        raise CorruptSnapshotError("snapshot must be a JSON list")
    steps: set[int] = set()
    for item in value:
        # bool is an int subclass; true/false never name a step.
        if isinstance(item, bool) or not isinstance(item, int):
            raise CorruptSnapshotError(f"invalid step number in snapshot: {item!r}")
        steps.add(item)
    return steps


class ProgressStorage(Protocol):
    def get(self, key: str) -> set[int] | None: ...

    def set(self, key: str, steps: Iterable[int]) -> None: ...

    def remove(self, key: str) -> None: ...


class InMemoryProgressStorage:
    """Dict-backed storage; snapshots are kept serialized like the SQL store."""

    def __init__(self) -> None:
        self._items: dict[str, str] = {}

    def get(self, key: str) -> set[int] | None:
        raw = self._items.get(key)
        if raw is None:
            return None
        return load_snapshot(raw)

    def set(self, key: str, steps: Iterable[int]) -> None:
        self._items[key] = dump_snapshot(steps)

    def remove(self, key: str) -> None:
        self._items.pop(key, None)

    def set_raw(self, key: str, raw: str) -> None:
        self._items[key] = raw

    def keys(self) -> list[str]:
        return sorted(self._items)


class SqlProgressStorage:
    def __init__(self, db: Session) -> None:
        self.db = db

    def _record(self, key: str) -> RoadmapProgress | None:
        return self.db.query(RoadmapProgress).filter(RoadmapProgress.storage_key == key).one_or_none()

    def get(self, key: str) -> set[int] | None:
        try:
            record = self._record(key)
        except SQLAlchemyError as exc:
            raise ProgressStorageError(f"failed to read progress for {key}") from exc
        if record is None or record.snapshot_json is None:
            return None
        return load_snapshot(record.snapshot_json)

    def set(self, key: str, steps: Iterable[int]) -> None:
        payload = dump_snapshot(steps)
        try:
            record = self._record(key)
            if record is None:
                self.db.add(RoadmapProgress(storage_key=key, snapshot_json=payload))
            else:
                record.snapshot_json = payload
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise ProgressStorageError(f"failed to write progress for {key}") from exc

    def remove(self, key: str) -> None:
        try:
            self.db.query(RoadmapProgress).filter(RoadmapProgress.storage_key == key).delete(
                synchronize_session=False
            )
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise ProgressStorageError(f"failed to remove progress for {key}") from exc
