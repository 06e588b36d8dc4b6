import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from api.day_views import router as day_views_router
from api.reminders import router as reminders_router
from config import Settings, settings as default_settings
from services.day_view import DayViewRegistry
from services.habits_api import HabitsApiClient
from services.notifications import NotificationHandler, ReminderScheduler

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, (level or "INFO").upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def create_app(
    settings: Settings | None = None,
    habits_api: HabitsApiClient | None = None,
    scheduler: ReminderScheduler | None = None,
) -> FastAPI:
    settings = settings or default_settings
    settings.validate_runtime_configuration()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        api = habits_api or HabitsApiClient(settings)
        reminders = scheduler or ReminderScheduler(NotificationHandler.from_settings(settings), settings)
        reminders.start()
        app.state.habits_api = api
        app.state.reminders = reminders
        app.state.day_views = DayViewRegistry(api, settings)
        logger.info("%s started against %s", settings.APP_NAME, settings.HABITS_API_URL)
        try:
            yield
        finally:
            # In-flight requests are not cancelled; closed views drop late results.
            app.state.day_views.close_all()
            reminders.shutdown()
            await api.aclose()

    app = FastAPI(title=settings.APP_NAME, version="1.0.0", lifespan=lifespan)
    app.include_router(day_views_router, prefix="/api")
    app.include_router(reminders_router, prefix="/api")

    @app.get("/api/health")
    def health_check():
        return {"status": "ok", "app": settings.APP_NAME}

    return app


configure_logging(default_settings.LOG_LEVEL)
app = create_app()
