from __future__ import annotations

import argparse
import sys
from pathlib import Path


def _bootstrap_import_path() -> None:
    root = Path(__file__).resolve().parents[1]
    if str(root) not in sys.path:
        sys.path.insert(0, str(root))


_bootstrap_import_path()

from sqlalchemy import create_engine, inspect  # noqa: E402

from skillpath.config import build_sqlalchemy_db_url, settings  # noqa: E402
from skillpath.database import Base, mask_db_url  # noqa: E402
import skillpath.models  # noqa: F401,E402  # ensure all models are registered


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Create the roadmap progress tables in the configured ORM DB."
    )
    parser.add_argument(
        "--db-url",
        default=None,
        help="Target DB URL (defaults to build_sqlalchemy_db_url(settings) from .env/env vars).",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Only report which tables are missing.",
    )
    args = parser.parse_args(argv)

    url = args.db_url or build_sqlalchemy_db_url(settings)
    print("target:", mask_db_url(url))

    connect_args = {"check_same_thread": False} if str(url).startswith("sqlite") else {}
    engine = create_engine(url, pool_pre_ping=True, future=True, connect_args=connect_args)

    existing = set(inspect(engine).get_table_names())
    missing = [name for name in Base.metadata.tables if name not in existing]
    for name in Base.metadata.tables:
        print(f"  {name}: {'missing' if name in missing else 'present'}")

    if args.dry_run or not missing:
        return 0

    Base.metadata.create_all(bind=engine)
    print("created:", ", ".join(missing))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
