from pydantic import Field, PositiveFloat, PositiveInt
from pydantic_settings import BaseSettings


class HttpConfig(BaseSettings):
    """
    HTTP request configurations for the engine and dispatcher
    """

    HTTP_DEFAULT_TIMEOUT: PositiveInt = Field(
        description="Timeout in seconds applied when a request sets no timeout (or zero)",
        default=30,
    )

    HTTP_PROGRESS_POLL_INTERVAL: PositiveFloat = Field(
        description="Seconds between two progress reads while a download is in flight",
        default=0.05,
    )

    HTTP_USER_AGENT: str = Field(
        description="User-Agent sent by the engine's HTTP client unless a request overrides it",
        default="fluent-http/0.1.0",
    )

    HTTP_FOLLOW_REDIRECTS: bool = Field(
        description="Follow redirects on the engine's HTTP client",
        default=True,
    )


class LoggingConfig(BaseSettings):
    """
    Configuration for application logging
    """

    LOG_LEVEL: str = Field(
        description="Logging level, default to INFO. Set to ERROR for production environments.",
        default="INFO",
    )

    LOG_FILE: str | None = Field(
        description="File path for log output.",
        default=None,
    )

    LOG_FILE_MAX_SIZE: PositiveInt = Field(
        description="Maximum file size for file rotation retention, the unit is megabytes (MB)",
        default=20,
    )

    LOG_FILE_BACKUP_COUNT: PositiveInt = Field(
        description="Maximum file backup count file rotation retention",
        default=5,
    )

    LOG_FORMAT: str = Field(
        description="Format string for log messages",
        default=(
            "%(asctime)s.%(msecs)03d %(levelname)s [%(threadName)s] "
            "[%(filename)s:%(lineno)d] %(trace_id)s - %(message)s"
        ),
    )

    LOG_DATEFORMAT: str | None = Field(
        description="Date format string for log timestamps",
        default=None,
    )

    LOG_TZ: str | None = Field(
        description="Timezone for log timestamps (e.g., 'America/New_York')",
        default="UTC",
    )


class FeatureConfig(
    HttpConfig,
    LoggingConfig,
):
    pass
