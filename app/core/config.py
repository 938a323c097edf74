from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    DISCORD_PUBLIC_KEY: str | None = None
    DISCORD_APPLICATION_ID: str | None = None
    DISCORD_BOT_TOKEN: str | None = None
    DISCORD_API_BASE_URL: str = "https://discord.com/api/v10"

    RECORDER_WEBHOOK_URL: str | None = None
    # Unset values fall back to the defaults of the ENV tier.
    RECORDER_TIMEOUT_SECONDS: float | None = None
    SKIP_INTERMEDIATE_CLEANUP: bool | None = None
    DEFERRED_FORWARDING: bool | None = None

    HOLIDAY_API_URL_TEMPLATE: str = "https://holidays-jp.github.io/api/v1/{year}/date.json"
    HOLIDAY_TIMEOUT_SECONDS: float = 2.0

    STAGE_STORE: str = "token"  # "token" | "memory"
    STAGE_TTL_SECONDS: float = 900.0

    BUSINESS_TIMEZONE: str = "Asia/Tokyo"
    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"

    @property
    def is_dev(self) -> bool:
        return self.ENV.lower() in {"dev", "local"}


settings = Settings()
