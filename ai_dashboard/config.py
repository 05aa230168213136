"""
Application-wide configuration constants and helper utilities.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Optional

import pandas as pd
import streamlit as st

logger = logging.getLogger(__name__)

APP_TITLE = "AI Tool Performance Dashboard"

# Reserved role selection meaning "apply no role filter"
ALL_ROLES = "All"

# Keys of the raw JSON payload objects
FIELD_TIMESTAMP = "Date and Time"
FIELD_EDITS = "Number of Edits"
FIELD_SATISFACTION = "User Satisfaction Rating"
FIELD_ROLE = "Grouped User Role"

DEFAULT_DATA_SOURCE = "data/data.json"
DEFAULT_TIMEZONE = "UTC"
CACHE_TTL_SECONDS = 600
DEFAULT_FETCH_TIMEOUT = 30.0
DEFAULT_LOG_LEVEL = "INFO"

SATISFACTION_SCALE = (0, 5)
SATISFACTION_COLOR = "#8884d8"
EDITS_COLOR = "#82ca9d"
DATE_TICK_FORMAT = "%m/%d/%Y"

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


@dataclass(frozen=True)
class Settings:
    data_source: str = DEFAULT_DATA_SOURCE
    timezone: str = DEFAULT_TIMEZONE
    fetch_timeout: float = DEFAULT_FETCH_TIMEOUT
    log_level: str = DEFAULT_LOG_LEVEL


def _get_secret(name: str, default: Optional[str] = None) -> Optional[str]:
    """Try env first, then st.secrets (if available)."""
    val = os.getenv(name)
    if val:
        return val
    try:
        sec = getattr(st, "secrets", None)
        if sec:
            v = sec.get(name)  # type: ignore[index]
            return str(v) if v is not None else default
    except Exception:
        # st.secrets raises FileNotFoundError-like errors without secrets.toml
        pass
    return default


def _get_number(name: str, default, cast):
    raw = _get_secret(name)
    if raw is None:
        return default
    try:
        value = cast(raw)
    except (TypeError, ValueError):
        logger.warning("Ignoring invalid %s=%r, using %s", name, raw, default)
        return default
    if value <= 0:
        logger.warning("Ignoring non-positive %s=%r, using %s", name, raw, default)
        return default
    return value


def _get_timezone(name: str, default: str) -> str:
    raw = _get_secret(name, default) or default
    try:
        pd.Timestamp.now(tz=raw)
    except Exception:
        # pytz and zoneinfo raise different lookup errors for unknown names
        logger.warning("Ignoring unknown %s=%r, using %s", name, raw, default)
        return default
    return raw


def load_settings() -> Settings:
    """Resolve runtime settings from env vars, .env and Streamlit secrets."""
    return Settings(
        data_source=_get_secret("DATA_SOURCE", DEFAULT_DATA_SOURCE) or DEFAULT_DATA_SOURCE,
        timezone=_get_timezone("DASHBOARD_TIMEZONE", DEFAULT_TIMEZONE),
        fetch_timeout=_get_number("DATA_FETCH_TIMEOUT", DEFAULT_FETCH_TIMEOUT, float),
        log_level=(_get_secret("LOG_LEVEL", DEFAULT_LOG_LEVEL) or DEFAULT_LOG_LEVEL).upper(),
    )


def configure_logging(level: str = DEFAULT_LOG_LEVEL) -> None:
    if not isinstance(logging.getLevelName(level), int):
        level = DEFAULT_LOG_LEVEL
    # basicConfig is a no-op once the root logger has handlers (Streamlit reruns)
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger("ai_dashboard").setLevel(level)
