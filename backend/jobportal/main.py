"""
Application factory. Run with:

    uvicorn jobportal.main:create_app --factory
"""
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.sessions import SessionMiddleware

from . import models  # noqa: F401  registers tables on Base.metadata
from .ai_service import AIService
from .auth import seed_demo_users
from .billing import BillingService
from .config import Settings, setup_logging
from .database import Base, make_engine, make_session_factory
from .gmail_service import GmailService
from .ingestion import IngestionScheduler, TwitterJobProcessor
from .routes import admin, ai, applications, auth, insights, jobs, resumes, subscriptions
from .twitter_service import TwitterService

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = app.state.settings
    scheduler = None
    if settings.ingestion_enabled and settings.twitter_bearer_token:
        scheduler = IngestionScheduler(
            app.state.twitter_processor,
            app.state.session_factory,
            interval_seconds=settings.ingestion_interval_seconds,
        )
        scheduler.start()
    app.state.scheduler = scheduler
    yield
    if scheduler:
        scheduler.stop()


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or Settings()
    setup_logging(settings.log_level)

    engine = make_engine(settings.database_url)
    session_factory = make_session_factory(engine)

    # Create database tables
    Base.metadata.create_all(bind=engine)

    if settings.seed_demo_users:
        db = session_factory()
        try:
            seed_demo_users(db)
        finally:
            db.close()

    app = FastAPI(title="Job Portal API", version="1.0.0", lifespan=lifespan)

    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = session_factory
    app.state.mailer = GmailService(
        token_file=settings.gmail_token_file,
        credentials_file=settings.gmail_credentials_file,
        sender=settings.email_sender,
        enabled=settings.email_enabled,
    )
    app.state.ai_service = AIService(
        api_key=settings.ai_api_key,
        base_url=settings.ai_base_url,
        model=settings.ai_model,
        timeout=settings.ai_timeout,
    )
    app.state.billing = BillingService(settings.stripe_secret_key, settings.stripe_prices)
    app.state.twitter_processor = TwitterJobProcessor(
        TwitterService(settings.twitter_bearer_token),
        app.state.ai_service,
    )

    # Include the API routes
    for module in (auth, resumes, jobs, applications, subscriptions, insights, ai, admin):
        app.include_router(module.router, prefix="/api")

    app.add_middleware(
        SessionMiddleware,
        secret_key=settings.session_secret,
        max_age=settings.session_max_age,
        same_site="lax",
        https_only=False,
    )
    # Allow frontend to connect
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(status_code=400, content={"detail": jsonable_encoder(exc.errors())})

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content={"detail": str(exc)})

    @app.get("/")
    async def root():
        return {"message": "Job Portal API"}

    @app.get("/health")
    async def health_check():
        return {"status": "healthy"}

    return app

