from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Scheduling defaults for candidates that omit them
    DEFAULT_TASK_TIME: str = "09:00"
    DEFAULT_INTERVAL_DAYS: int = 1
    DEFAULT_TOTAL_DAYS: int = 7

    # Reminders
    REMINDER_LOOKAHEAD_DAYS: int = 1

    # App
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"
    ALLOWED_ORIGINS: str = "http://localhost:3000,http://localhost:9002"

    @property
    def origins(self) -> List[str]:
        return [o.strip() for o in self.ALLOWED_ORIGINS.split(",")]


settings = Settings()
