from functools import lru_cache
import logging

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from oauthkit.core.logger import init_sentry, setup_logger


class Settings(BaseSettings):
    # Application settings
    ENVIRONMENT: str = "development"  # Options: development, test, production
    APP_NAME: str = "oauthkit"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    LOG_DIR: str = "logs"

    # OAuth 1.0a handshake settings
    OAUTH_SIGNATURE_METHOD: str = "HMAC-SHA1"
    OAUTH_CALLBACK_URL: str = "oob"
    OAUTH_HTTP_TIMEOUT: float = 30.0  # seconds
    OAUTH_RSA_PRIVATE_KEY: str = ""
    OAUTH_ENABLED_PROVIDERS: list[str] = []

    # Consumer credentials, one pair per built-in provider
    DROPBOX_CONSUMER_KEY: str = ""
    DROPBOX_CONSUMER_SECRET: str = ""
    TWITTER_CONSUMER_KEY: str = ""
    TWITTER_CONSUMER_SECRET: str = ""
    LINKEDIN_CONSUMER_KEY: str = ""
    LINKEDIN_CONSUMER_SECRET: str = ""
    GOOGLE_CONSUMER_KEY: str = ""
    GOOGLE_CONSUMER_SECRET: str = ""
    TUMBLR_CONSUMER_KEY: str = ""
    TUMBLR_CONSUMER_SECRET: str = ""

    # Sentry settings
    SENTRY_DSN: str = ""
    SENTRY_ENVIRONMENT: str = "development"
    SENTRY_TRACES_SAMPLE_RATE: float = 0.1

    model_config: SettingsConfigDict = SettingsConfigDict(  # type: ignore
        env_file=".env",
        extra="ignore",
    )

    def consumer_credentials(self, provider_name: str) -> tuple[str, str]:
        """Return the ``(key, secret)`` pair configured for a provider."""
        prefix = provider_name.upper()
        return (
            getattr(self, f"{prefix}_CONSUMER_KEY", ""),
            getattr(self, f"{prefix}_CONSUMER_SECRET", ""),
        )

    @model_validator(mode="after")
    def _validate_enabled_providers(self) -> "Settings":
        """Ensure every enabled provider has consumer credentials."""
        missing = [
            name
            for name in self.OAUTH_ENABLED_PROVIDERS
            if not all(self.consumer_credentials(name))
        ]
        if missing:
            raise ValueError(
                f"The following enabled providers have no consumer key/secret: "
                f"{', '.join(missing)}. Set <PROVIDER>_CONSUMER_KEY and "
                f"<PROVIDER>_CONSUMER_SECRET via environment variables or .env file."
            )

        if self.ENVIRONMENT == "production" and self.OAUTH_CALLBACK_URL == "oob":
            raise ValueError(
                "ENVIRONMENT is 'production' but OAUTH_CALLBACK_URL is still "
                "the out-of-band value 'oob'."
            )

        return self


@lru_cache()
def get_settings() -> Settings:
    return Settings()  # type: ignore


settings = get_settings()

if not settings.DEBUG:
    init_sentry(
        dsn=settings.SENTRY_DSN,
        environment=settings.SENTRY_ENVIRONMENT,
        traces_sample_rate=settings.SENTRY_TRACES_SAMPLE_RATE,
    )

app_logger = setup_logger(
    name="app_logger",
    log_file=f"{settings.LOG_DIR}/app.log",
    level=logging.INFO,
    sentry_tag="app",
)
auth_logger = setup_logger(
    name="auth_logger",
    log_file=f"{settings.LOG_DIR}/auth.log",
    level=logging.INFO,
    sentry_tag="auth",
)
http_logger = setup_logger(
    name="http_logger",
    log_file=f"{settings.LOG_DIR}/http.log",
    level=logging.INFO,
    sentry_tag="http",
)

__all__ = [
    "Settings",
    "get_settings",
    "settings",
    "app_logger",
    "auth_logger",
    "http_logger",
]
