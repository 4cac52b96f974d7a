"""FastAPI main application."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from cashsaver.api.v1 import saving_goals
from cashsaver.config import settings
from cashsaver.core.database import AsyncSessionLocal, close_db, init_db
from cashsaver.core.logging_config import setup_logging
from cashsaver.middleware.error_handler import ErrorHandlerMiddleware
from cashsaver.middleware.request_logging import RequestLoggingMiddleware
from cashsaver.services.goal_ledger import GoalLedger, SqlAlchemyGoalStore
from cashsaver.services.reminder_service import InMemoryReminderScheduler

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    setup_logging()
    logger.info(f"Starting {settings.APP_NAME} {settings.APP_VERSION} ({settings.ENVIRONMENT})")

    await init_db()

    reminders = InMemoryReminderScheduler()
    ledger = await GoalLedger.load(SqlAlchemyGoalStore(AsyncSessionLocal), reminders=reminders)

    # Reminders live in memory, so re-register the enabled ones from committed goals
    for goal in ledger.list_goals():
        if goal.reminder_enabled and goal.reminder_time is not None:
            await reminders.schedule(goal, goal.reminder_time)

    app.state.reminders = reminders
    app.state.ledger = ledger
    logger.info(f"{settings.APP_NAME} started with {len(ledger.list_goals())} goals")

    yield

    logger.info(f"Shutting down {settings.APP_NAME}")
    await close_db()


# Create FastAPI application
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    lifespan=lifespan,
    docs_url="/docs" if settings.DEBUG else None,
    redoc_url="/redoc" if settings.DEBUG else None,
    openapi_url="/openapi.json" if settings.DEBUG else None,
)

# Error handler - Catch uncaught exceptions
app.add_middleware(ErrorHandlerMiddleware)

# Request logging
app.add_middleware(RequestLoggingMiddleware)

app.include_router(saving_goals.router, prefix="/api/v1/goals", tags=["Saving Goals"])


@app.get("/health")
async def health_check():
    """Liveness probe."""
    return {"status": "healthy", "app": settings.APP_NAME, "version": settings.APP_VERSION}
