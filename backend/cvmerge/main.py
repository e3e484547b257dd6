from contextlib import asynccontextmanager
from typing import Optional
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import Settings, get_settings
from .database import create_engine, create_session_factory, init_db
from .logging_config import configure_logging
from .routers import profile_router
from .services import ProfileMergeService


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Startup
        configure_logging(settings.log_level)
        engine = create_engine(settings)
        await init_db(engine)
        app.state.merge_service = ProfileMergeService(create_session_factory(engine), settings)
        yield
        # Shutdown
        await engine.dispose()

    app = FastAPI(
        title=settings.app_name,
        description="Merges extracted CV data into candidate profiles",
        version="1.0.0",
        lifespan=lifespan,
        docs_url="/docs" if settings.debug else None,  # Disable docs in production
        redoc_url="/redoc" if settings.debug else None,
    )

    # CORS middleware - uses origins from environment variable
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.get_cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(profile_router)

    @app.get("/")
    async def root():
        return {"message": settings.app_name, "status": "running", "version": "1.0.0"}

    @app.get("/health")
    async def health_check():
        """Health check endpoint for load balancer"""
        return {"status": "healthy"}

    return app


app = create_app()
