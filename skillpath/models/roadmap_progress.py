from __future__ import annotations

from sqlalchemy import Column, DateTime, Integer, String, Text, UniqueConstraint
from sqlalchemy.sql import func

from skillpath.database import Base


class RoadmapProgress(Base):
    __tablename__ = "roadmap_progress"

    id = Column(Integer, primary_key=True, index=True)

    # "roadmap_{career_name}_{user_id}"; see services.progress_storage.progress_storage_key.
    storage_key = Column(String(512), nullable=False, index=True)

    # JSON list of completed step numbers.
    snapshot_json = Column(Text, nullable=True)

    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    __table_args__ = (
        UniqueConstraint("storage_key", name="uq_roadmap_progress_storage_key"),
    )
