# main.py
from pathlib import Path

from dotenv import load_dotenv

from skillpath.config import _IN_TEST

# Ensure repo-root .env is loaded for the running server process.
# This avoids confusing situations where scripts see .env but uvicorn doesn't.
if not _IN_TEST:
    load_dotenv(dotenv_path=Path(__file__).resolve().parents[1] / ".env", override=True)

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from skillpath.config import settings
from skillpath.config import build_sqlalchemy_db_url
from skillpath.database import Base, engine
from skillpath.models import RoadmapProgress  # noqa: F401  # register ORM tables
from skillpath.routers import careers, roadmap, users
from skillpath.routers.health import router as health_router


def create_app() -> FastAPI:
    application = FastAPI(
        title=settings.app_name,
        version=settings.version,
        debug=settings.debug,
    )
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Health endpoints (do not depend on API_PREFIX)
    application.include_router(health_router)

    application.include_router(users.router, prefix="/users", tags=["users"])
    application.include_router(careers.router, prefix=settings.api_prefix)
    application.include_router(roadmap.router, prefix=settings.api_prefix)

    # Local/test sqlite gets its tables on startup; other DBs use scripts/create_orm_tables.py.
    db_url = build_sqlalchemy_db_url(settings)
    if db_url.startswith("sqlite"):
        Base.metadata.create_all(bind=engine)
    return application


app = create_app()
