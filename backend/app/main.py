"""FastAPI application entry point."""
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from app.config import settings
from app.database import Base, engine
from app.exceptions import ValidationFailed

# Import routers
from app.routers import users, categories, wishes

# Import all models so Base.metadata knows about them
from app.models.user import User          # noqa: F401
from app.models.category import Category  # noqa: F401
from app.models.wish import Wish          # noqa: F401

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Wish Tracker",
    description="Personal goal tracking: wishes move across a Wish / In Progress / Achieved board",
    version="0.1.0",
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS.split(","),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register routers
app.include_router(users.router, prefix="/api/users", tags=["Users"])
app.include_router(categories.router, prefix="/api/categories", tags=["Categories"])
app.include_router(wishes.router, prefix="/api/wishes", tags=["Wishes"])

_REQUEST_PARTS = ("body", "query", "path", "header")


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Render schema rejections in the same ``detail`` shape as ``ValidationFailed``."""
    error = exc.errors()[0]
    field = ".".join(str(part) for part in error.get("loc", ()) if part not in _REQUEST_PARTS) or "body"
    failure = ValidationFailed(field, error.get("msg", "Invalid input"))
    logger.warning("Rejected %s %s: %s (%s)", request.method, request.url.path, failure.message, field)
    return JSONResponse(status_code=failure.status_code, content={"detail": failure.detail})


@app.on_event("startup")
def on_startup():
    """Create database tables on startup (for SQLite dev mode)."""
    if settings.DATABASE_URL.startswith("sqlite"):
        Base.metadata.create_all(bind=engine)


@app.get("/api/health")
def health_check():
    return {"status": "ok"}
