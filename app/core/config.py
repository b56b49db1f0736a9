from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    AVAILABILITY_URL: str = "https://brickface.app.n8n.cloud/webhook/availability"
    BOOKING_URL: str = "https://brickface.app.n8n.cloud/webhook/book-appointment"
    SCHEDULING_PROVIDER: str | None = None  # "webhook" or "mock"; unset picks by ENV
    HTTP_TIMEOUT_SECONDS: float = 10.0

    BUSINESS_NAME: str = "Garden State Brickface & Siding"
    SUPPORT_PHONE: str = "(908) 290-5611"
    CLIENT_TIMEZONE: str = "America/New_York"
    DISPLAY_TIMEZONE: str = "America/New_York"
    AVAILABILITY_WINDOW_DAYS: int = 14

    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"


settings = Settings()
