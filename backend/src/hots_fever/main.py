"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from hots_fever.config import settings
from hots_fever.api.routes.draft import router as draft_router
from hots_fever.api.routes.mawp import router as mawp_router
from hots_fever.repositories.draft_data_repository import DraftDataRepository

logger = logging.getLogger(__name__)


def get_database_path() -> Path:
    """Resolve the database path; relative paths are taken from the repo root."""
    db_path = Path(settings.database_path)
    if db_path.is_absolute():
        return db_path
    repo_root = Path(__file__).parent.parent.parent.parent
    return repo_root / db_path


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown events."""
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if not hasattr(app.state, "repository"):
        db_path = get_database_path()
        try:
            app.state.repository = DraftDataRepository(db_path)
        except FileNotFoundError as e:
            logger.warning(f"Recommendations disabled: {e}")
            app.state.repository = None
    yield


app = FastAPI(
    title="HotS Fever",
    description="Heroes of the Storm draft companion - MAWP and draft recommendations",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "service": "hots-fever",
        "database": getattr(app.state, "repository", None) is not None,
    }


app.include_router(draft_router)
app.include_router(mawp_router)
