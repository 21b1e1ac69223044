from __future__ import annotations

import argparse
import sys
from pathlib import Path


def _bootstrap_import_path() -> None:
    root = Path(__file__).resolve().parents[1]
    if str(root) not in sys.path:
        sys.path.insert(0, str(root))


_bootstrap_import_path()

from skillpath.config import build_sqlalchemy_db_url, settings  # noqa: E402
from skillpath.database import SessionLocal, mask_db_url  # noqa: E402
from skillpath.models.roadmap_progress import RoadmapProgress  # noqa: E402
from skillpath.services.progress_storage import CorruptSnapshotError, load_snapshot  # noqa: E402


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Print stored roadmap progress snapshots.")
    parser.add_argument("--user-id", default=None, help="Only show keys ending with this user id.")
    parser.add_argument("--limit", type=int, default=50)
    args = parser.parse_args(argv)

    print("orm_db_url:", mask_db_url(build_sqlalchemy_db_url(settings)))

    # SessionLocal is bound to the engine built from settings; set ORM_DB_URL to switch DBs.
    with SessionLocal() as db:
        q = db.query(RoadmapProgress).order_by(RoadmapProgress.updated_at.desc())
        if args.user_id:
            q = q.filter(RoadmapProgress.storage_key.like(f"%\\_{args.user_id}", escape="\\"))
        rows = q.limit(args.limit).all()

    print("roadmap_progress rows:", len(rows))
    for row in rows:
        try:
            steps = sorted(load_snapshot(row.snapshot_json or "[]"))
            shown = ",".join(str(s) for s in steps) or "-"
        except CorruptSnapshotError:
            shown = "<corrupt>"
        print(f"  {row.storage_key}: {shown}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
