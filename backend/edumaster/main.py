import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from edumaster.config import settings
from edumaster.core.errors import register_error_handlers
from edumaster.core.middleware import AccessLogMiddleware, RequestIDMiddleware
from edumaster.routers import admin, auth, instructor

API_PREFIX = "/api"
VERSION = "0.1.0"

logger = logging.getLogger("edumaster")


@asynccontextmanager
async def lifespan(application: FastAPI):
    """Create database tables on startup if they don't exist."""
    import edumaster.models  # noqa: F401  populates Base.metadata
    from edumaster.dependencies import engine
    from edumaster.models.base import Base

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables verified/created")
    yield
    await engine.dispose()


app = FastAPI(
    title=settings.app_name,
    version=VERSION,
    docs_url="/docs" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
    lifespan=lifespan,
)

# Last added = outermost; CORS outermost so error responses carry CORS headers too
app.add_middleware(RequestIDMiddleware)
app.add_middleware(AccessLogMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["x-request-id"],
)

register_error_handlers(app)

app.include_router(auth.router, prefix=API_PREFIX)
app.include_router(admin.router, prefix=API_PREFIX)
app.include_router(instructor.router, prefix=API_PREFIX)


@app.get("/health")
async def health_check():
    return {"status": "ok", "app": settings.app_name, "version": VERSION}
