"""
Configuration management for Ads Monitor
"""
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional, Tuple

import pytz
from pydantic_settings import BaseSettings


DEFAULT_CONVERSION_ACTION = "onsite_conversion.messaging_conversation_started_7d"


class ConfigurationError(ValueError):
    """Raised when the monitor cannot run a refresh cycle with the given configuration"""


class Settings(BaseSettings):
    """Application settings"""

    # Application
    app_name: str = "Ads Monitor"
    environment: str = "development"
    debug: bool = False
    log_level: str = "INFO"
    log_dir: str = "logs"

    # API
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    cors_origins: str = ""  # comma-separated, empty = allow all

    # Meta Graph API
    facebook_access_token: Optional[str] = None
    fb_account_id_1: Optional[str] = None
    fb_account_id_2: Optional[str] = None
    fb_account_id_3: Optional[str] = None
    fb_account_id_4: Optional[str] = None
    fb_account_ids: str = ""  # extra accounts, comma-separated
    graph_base_url: str = "https://graph.facebook.com"
    graph_api_version: str = "v19.0"
    insights_limit: int = 500
    request_timeout_seconds: Optional[float] = None

    # Dashboard clock, e.g. "America/Lima"; empty = server local time
    report_timezone: str = ""

    # Metrics
    conversion_action_type: str = DEFAULT_CONVERSION_ACTION

    class Config:
        env_file = ".env"
        case_sensitive = False
        extra = "ignore"

    def account_ids(self) -> Tuple[str, ...]:
        """Configured account ids in order, blanks and duplicates dropped"""
        numbered = [
            self.fb_account_id_1,
            self.fb_account_id_2,
            self.fb_account_id_3,
            self.fb_account_id_4,
        ]
        extra = self.fb_account_ids.split(",") if self.fb_account_ids else []

        ids = []
        for raw in numbered + extra:
            account_id = (raw or "").strip()
            if account_id and account_id not in ids:
                ids.append(account_id)
        return tuple(ids)

    def monitor_config(self) -> "MonitorConfig":
        return MonitorConfig(
            access_token=(self.facebook_access_token or "").strip(),
            account_ids=self.account_ids(),
            graph_base_url=self.graph_base_url.rstrip("/"),
            graph_api_version=self.graph_api_version,
            conversion_action_type=self.conversion_action_type,
            insights_limit=self.insights_limit,
            request_timeout_seconds=self.request_timeout_seconds,
            report_timezone=self.report_timezone.strip(),
        )


@dataclass(frozen=True)
class MonitorConfig:
    """
    Everything a refresh cycle needs, resolved once at startup.

    The connector and the metrics service receive this object explicitly
    and never look at the environment themselves.
    """
    access_token: str
    account_ids: Tuple[str, ...]
    graph_base_url: str = "https://graph.facebook.com"
    graph_api_version: str = "v19.0"
    conversion_action_type: str = DEFAULT_CONVERSION_ACTION
    insights_limit: int = 500
    request_timeout_seconds: Optional[float] = None
    report_timezone: str = ""

    def validate(self) -> "MonitorConfig":
        """
        Raise ConfigurationError unless a token and at least one account are
        present and REPORT_TIMEZONE, when set, names a known zone
        """
        missing = []
        if not self.access_token:
            missing.append("FACEBOOK_ACCESS_TOKEN")
        if not self.account_ids:
            missing.append("FB_ACCOUNT_ID_1..4")

        if missing:
            raise ConfigurationError(f"Missing credentials: {', '.join(missing)}")

        if self.report_timezone:
            try:
                pytz.timezone(self.report_timezone)
            except pytz.UnknownTimeZoneError:
                raise ConfigurationError(f"Unknown REPORT_TIMEZONE: {self.report_timezone!r}")

        return self


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()
