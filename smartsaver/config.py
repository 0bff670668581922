import os
import logging
from dataclasses import dataclass

import streamlit as st
from dotenv import load_dotenv, find_dotenv

DEFAULT_API_URL = "https://smart-saver-backend-hv6p5zke2-miralivaghasiyas-projects.vercel.app"
LOG_FORMAT = "%(asctime)s %(levelname)s %(message)s"


@dataclass(frozen=True)
class Settings:
    api_url: str = DEFAULT_API_URL
    timeout: float = 30.0
    log_level: str = "INFO"
    google_client_id: str = ""


def _secret(name: str) -> str | None:
    """Read one value from .streamlit/secrets.toml; None when there is no secrets file."""
    try:
        value = st.secrets.get(name, None)
    except FileNotFoundError:
        return None
    return str(value) if value is not None else None


def _lookup(name: str, default: str) -> str:
    return _secret(name) or os.getenv(name, "") or default


def load_settings() -> Settings:
    """Prefer Streamlit secrets. Fallback to .env / environment."""
    # searches up the tree, never overrides real env vars
    load_dotenv(find_dotenv(usecwd=True), override=False)
    timeout_raw = _lookup("SMARTSAVER_TIMEOUT", "30")
    try:
        timeout = float(timeout_raw)
    except ValueError:
        logging.getLogger(__name__).warning("Bad SMARTSAVER_TIMEOUT %r, using 30s", timeout_raw)
        timeout = 30.0
    return Settings(
        api_url=_lookup("SMARTSAVER_API_URL", DEFAULT_API_URL).rstrip("/"),
        timeout=timeout,
        log_level=_lookup("SMARTSAVER_LOG_LEVEL", "INFO").upper(),
        google_client_id=_lookup("GOOGLE_CLIENT_ID", ""),
    )


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(level=settings.log_level, format=LOG_FORMAT)
