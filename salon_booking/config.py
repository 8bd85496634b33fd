# salon_booking/config.py

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    PROJECT_NAME: str = "Salon Booking API"

    # Server
    PORT: int = 8000
    ENVIRONMENT: str = "development"

    # Database
    DATABASE_URL: str = "sqlite:///./salon.db"
    DATABASE_ECHO: bool = False

    # Seats are numbered 1..SEAT_COUNT
    SEAT_COUNT: int = 10

    # Dashboard windows use this fixed offset (IST = UTC+5:30)
    CIVIL_UTC_OFFSET_MINUTES: int = 330

    RECENT_BOOKINGS_LIMIT: int = 10
    SEED_DEFAULT_SERVICES: bool = True

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FILE: str = "logs/errors.log"

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")


settings = Settings()
