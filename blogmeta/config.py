"""Environment-driven settings, loaded once at process start."""

import logging
import logging.config
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://superproductive.magic-patterns.com"
DEFAULT_DATASET = "production"
DEFAULT_API_VERSION = "2023-12-01"
DEFAULT_TIMEOUT = 10.0

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}

LOGGING_CONFIG = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "json": {
            "format": '{"time": "%(asctime)s", "level": "%(levelname)s", "logger": "%(name)s", "message": "%(message)s"}',
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "json",
        },
    },
    "root": {"level": "INFO", "handlers": ["console"]},
}


def configure_logging(level: str = "INFO") -> None:
    config = dict(LOGGING_CONFIG)
    config["root"] = {**LOGGING_CONFIG["root"], "level": level}
    logging.config.dictConfig(config)


@dataclass(frozen=True)
class ContentStoreConfig:
    """Connection details for the remote content store."""

    project_id: str = ""
    dataset: str = DEFAULT_DATASET
    api_version: str = DEFAULT_API_VERSION
    use_cdn: bool = True
    token: Optional[str] = None
    timeout: float = DEFAULT_TIMEOUT

    @property
    def query_url(self) -> str:
        host = "apicdn.sanity.io" if self.use_cdn else "api.sanity.io"
        return f"https://{self.project_id}.{host}/v{self.api_version}/data/query/{self.dataset}"


@dataclass(frozen=True)
class Settings:
    content_store: ContentStoreConfig
    base_url: str = DEFAULT_BASE_URL
    facebook_app_id: Optional[str] = None
    dist_dir: str = "dist"
    sitemap_path: str = "public/sitemap.xml"


def _float_from_env(key: str, default: float) -> float:
    raw = os.getenv(key)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning("Invalid number for %s=%s; using default %s", key, raw, default)
        return default
    return value if value > 0 else default


def _bool_from_env(key: str, default: bool) -> bool:
    raw = os.getenv(key)
    if raw is None or raw.strip() == "":
        return default
    token = raw.strip().lower()
    if token in _TRUE_VALUES:
        return True
    if token in _FALSE_VALUES:
        return False
    logger.warning("Invalid boolean for %s=%s; using default %s", key, raw, default)
    return default


def load_settings(env_file: Optional[str] = None) -> Settings:
    """Build :class:`Settings` from the environment.

    Values from *env_file* (or a ``.env`` in the working directory) are
    loaded first but never override variables that are already set.
    """
    load_dotenv(env_file)

    store = ContentStoreConfig(
        project_id=os.getenv("SANITY_PROJECT_ID", "").strip(),
        dataset=os.getenv("SANITY_DATASET", "").strip() or DEFAULT_DATASET,
        api_version=os.getenv("SANITY_API_VERSION", "").strip() or DEFAULT_API_VERSION,
        use_cdn=_bool_from_env("SANITY_USE_CDN", True),
        token=os.getenv("SANITY_TOKEN") or None,
        timeout=_float_from_env("CONTENT_STORE_TIMEOUT", DEFAULT_TIMEOUT),
    )
    return Settings(
        content_store=store,
        base_url=(os.getenv("SITE_BASE_URL", "").strip() or DEFAULT_BASE_URL).rstrip("/"),
        facebook_app_id=os.getenv("FACEBOOK_APP_ID") or None,
        dist_dir=os.getenv("DIST_DIR", "").strip() or "dist",
        sitemap_path=os.getenv("SITEMAP_PATH", "").strip() or "public/sitemap.xml",
    )
