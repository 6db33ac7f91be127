# ============================================================================
# FILE: social_api/main.py
# ============================================================================
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from typing import Optional
from social_api.api.router import api_router
from social_api.config import Settings, get_settings
from social_api.core.exceptions import register_exception_handlers
from social_api.core.logging import setup_logging
from social_api.core.security import PasswordHasher, TokenService
from social_api.db.base import Base
from social_api.db.session import build_engine, build_session_factory
import social_api.db.models  # noqa: F401  registers tables on Base.metadata
import logging

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the application with its own engine, session factory and auth services"""
    settings = settings or get_settings()
    setup_logging(settings.LOG_LEVEL)

    engine = build_engine(settings.DATABASE_URL, echo=settings.DATABASE_ECHO)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Create database tables on startup, release pooled connections on shutdown"""
        logger.info(f"Starting {settings.APP_NAME}")
        Base.metadata.create_all(bind=engine)
        yield
        logger.info(f"Shutting down {settings.APP_NAME}")
        engine.dispose()

    app = FastAPI(
        title=settings.APP_NAME,
        description="Social platform backend: users, authentication and posts",
        version=settings.VERSION,
        debug=settings.DEBUG,
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)
    app.state.password_hasher = PasswordHasher(settings.BCRYPT_ROUNDS)
    app.state.token_service = TokenService(
        settings.SECRET_KEY,
        algorithm=settings.ALGORITHM,
        expire_minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Include API router
    app.include_router(api_router, prefix=settings.API_PREFIX)

    @app.get("/health")
    async def health_check():
        return {"status": "ОК"}

    @app.get("/")
    async def root():
        return {"message": "API социальной платформы", "version": settings.VERSION}

    return app


app = create_app()
