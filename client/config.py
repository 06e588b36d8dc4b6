from pydantic_settings import BaseSettings


SUPPORTED_LOCALES = ("en", "pt-br")


class Settings(BaseSettings):
    ENVIRONMENT: str = "development"  # development | test | staging | production
    APP_NAME: str = "Habits"
    HABITS_API_URL: str = "http://localhost:3333"
    HABITS_API_TIMEOUT_SECONDS: float = 10.0
    DISPLAY_LOCALE: str = "en"  # en | pt-br
    LOCAL_TIMEZONE: str | None = None
    REMINDER_TITLE: str = "Habits 🤩"
    REMINDER_BODY: str = "Did you practice your habits today?"
    REMINDER_DELAY_MINUTES: int = 1
    DAY_VIEW_MAX_OPEN: int = 32
    NOTIFY_SHOW_ALERT: bool = True
    NOTIFY_PLAY_SOUND: bool = False
    NOTIFY_SET_BADGE: bool = False
    LOG_LEVEL: str = "INFO"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    @property
    def is_production_like(self) -> bool:
        return (self.ENVIRONMENT or "").strip().lower() in {"production", "prod", "staging"}

    def validate_runtime_configuration(self) -> None:
        errors: list[str] = []
        if self.HABITS_API_TIMEOUT_SECONDS <= 0:
            errors.append("HABITS_API_TIMEOUT_SECONDS must be positive")
        if self.REMINDER_DELAY_MINUTES <= 0:
            errors.append("REMINDER_DELAY_MINUTES must be positive")
        if self.DAY_VIEW_MAX_OPEN <= 0:
            errors.append("DAY_VIEW_MAX_OPEN must be positive")
        if (self.DISPLAY_LOCALE or "").strip().lower() not in SUPPORTED_LOCALES:
            errors.append(f"DISPLAY_LOCALE must be one of: {', '.join(SUPPORTED_LOCALES)}")
        if self.is_production_like and not (self.HABITS_API_URL or "").startswith("https://"):
            errors.append("HABITS_API_URL must use https in production-like environments")
        if errors:
            joined = "; ".join(errors)
            raise RuntimeError(f"Invalid configuration: {joined}")


settings = Settings()
