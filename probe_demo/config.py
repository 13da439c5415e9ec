from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    host: str = "0.0.0.0"
    port: int = 3000

    # Seconds before the startup timer forces both probe flags back to true
    startup_delay: float = 20.0

    # Variant toggles: the stable build counts requests and serves /readyz,
    # the lean build relies on "/" alone for readiness.
    count_requests: bool = True
    expose_readyz: bool = True

    page_title: str = "Notes - Canary"
    page_footer: str = "Canary Notes v1.0"

    log_level: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", env_prefix="PROBE_DEMO_", extra="ignore")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


def reset_settings_cache() -> None:
    get_settings.cache_clear()
