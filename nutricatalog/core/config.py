import os
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Optional

from dotenv import load_dotenv

from nutricatalog.core.logging_config import get_logger

logger = get_logger(__name__)

DEFAULT_BASE_URL = "https://besindegerim.com"
ENV_DEVELOPMENT = "development"
ENV_PRODUCTION = "production"


@dataclass(frozen=True)
class Settings:
    base_url: str = DEFAULT_BASE_URL
    site_name: str = "besindegerim.com"
    environment: str = ENV_PRODUCTION
    foods_data_path: str = "data/foods.json"
    cache_default_ttl_seconds: int = 3600
    cache_sweep_enabled: bool = True
    cache_sweep_interval_seconds: int = 600
    category_cache_ttl_seconds: int = 3 * 3600
    listing_cache_ttl_seconds: int = 3600
    popular_cache_ttl_seconds: int = 600
    page_size: int = 30
    html_lang: str = "en"
    og_locale: str = "en_US"
    client_entry: str = "/src/main.tsx"
    admin_token: Optional[str] = None
    log_level: str = "INFO"
    copyright_year: int = field(default_factory=lambda: date.today().year)

    @property
    def is_development(self) -> bool:
        return self.environment == ENV_DEVELOPMENT

    def absolute_url(self, path: str = "") -> str:
        """Join the configured base URL with a site path ("/" or "" is the home page)."""
        if not path or path == "/":
            return self.base_url
        if not path.startswith("/"):
            path = f"/{path}"
        return f"{self.base_url}{path}"


def _as_bool(value: Any, default: bool) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "on"}
    return default


def _as_int(value: Any, default: int) -> int:
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            logger.warning(f"Ignoring non-integer config value {value!r}, using {default}")
            return default
    return default


def _as_environment(value: Optional[str]) -> str:
    if not value:
        return ENV_PRODUCTION
    normalized = value.strip().lower()
    if normalized in {"dev", ENV_DEVELOPMENT}:
        return ENV_DEVELOPMENT
    if normalized not in {"prod", ENV_PRODUCTION}:
        logger.warning(f"Unknown ENVIRONMENT {value!r}, assuming production")
    return ENV_PRODUCTION


def load_settings(env_file: Optional[str] = ".env") -> Settings:
    """Build Settings from environment variables (optionally seeded from a .env file)."""
    if env_file:
        load_dotenv(env_file)

    defaults = Settings()
    base_url = (os.getenv("BASE_URL") or defaults.base_url).strip().rstrip("/")

    return Settings(
        base_url=base_url or DEFAULT_BASE_URL,
        site_name=os.getenv("SITE_NAME") or defaults.site_name,
        environment=_as_environment(os.getenv("ENVIRONMENT")),
        foods_data_path=os.getenv("FOODS_DATA_PATH") or defaults.foods_data_path,
        cache_default_ttl_seconds=_as_int(os.getenv("CACHE_DEFAULT_TTL_SECONDS"), defaults.cache_default_ttl_seconds),
        cache_sweep_enabled=_as_bool(os.getenv("CACHE_SWEEP_ENABLED"), defaults.cache_sweep_enabled),
        cache_sweep_interval_seconds=_as_int(os.getenv("CACHE_SWEEP_INTERVAL_SECONDS"), defaults.cache_sweep_interval_seconds),
        category_cache_ttl_seconds=_as_int(os.getenv("CATEGORY_CACHE_TTL_SECONDS"), defaults.category_cache_ttl_seconds),
        listing_cache_ttl_seconds=_as_int(os.getenv("LISTING_CACHE_TTL_SECONDS"), defaults.listing_cache_ttl_seconds),
        popular_cache_ttl_seconds=_as_int(os.getenv("POPULAR_CACHE_TTL_SECONDS"), defaults.popular_cache_ttl_seconds),
        page_size=max(1, _as_int(os.getenv("PAGE_SIZE"), defaults.page_size)),
        html_lang=os.getenv("HTML_LANG") or defaults.html_lang,
        og_locale=os.getenv("OG_LOCALE") or defaults.og_locale,
        client_entry=os.getenv("CLIENT_ENTRY") or defaults.client_entry,
        admin_token=os.getenv("ADMIN_TOKEN") or None,
        log_level=os.getenv("LOG_LEVEL") or defaults.log_level,
    )
