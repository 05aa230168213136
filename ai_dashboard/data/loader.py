import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple
from urllib.parse import urlparse

import httpx
import pandas as pd
import streamlit as st

from ai_dashboard.config import CACHE_TTL_SECONDS, DEFAULT_FETCH_TIMEOUT, DEFAULT_TIMEZONE, Settings, load_settings
from ai_dashboard.data.schema import RawRecord, empty_records_frame, records_to_frame

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parents[2]


class DataSourceError(RuntimeError):
    """The data source answered, but not with a JSON array of objects."""


def _is_url(source: str) -> bool:
    return urlparse(source).scheme in ("http", "https")


def _resolve_path(source: str) -> Path:
    path = Path(source)
    if not path.is_absolute() and not path.exists():
        # Fall back to the repository root so `streamlit run` works from anywhere
        path = PROJECT_ROOT / path
    return path


def fetch_payload(
    source: str,
    timeout: float = DEFAULT_FETCH_TIMEOUT,
    client: Optional[httpx.Client] = None,
) -> Any:
    """Read the whole JSON payload from an HTTP(S) URL or a local file path."""
    if _is_url(source):
        if client is None:
            response = httpx.get(source, timeout=timeout)
        else:
            response = client.get(source, timeout=timeout)
        response.raise_for_status()
        return response.json()
    with open(_resolve_path(source), "r", encoding="utf-8") as f:
        return json.load(f)


def parse_payload(payload: Any, timezone: str = DEFAULT_TIMEZONE) -> Tuple[pd.DataFrame, Dict[str, Any]]:
    """Validate the payload once and return the typed records frame plus diagnostics.

    Non-object items are skipped and records without a usable timestamp are
    dropped; both are counted rather than treated as fatal.
    """
    if not isinstance(payload, list):
        raise DataSourceError(f"Expected a JSON array, got {type(payload).__name__}")

    records: List[RawRecord] = []
    skipped = 0
    dropped = 0
    for item in payload:
        if not isinstance(item, dict):
            skipped += 1
            continue
        try:
            records.append(RawRecord.from_payload(item, timezone))
        except ValueError:
            dropped += 1

    frame = records_to_frame(records)
    diagnostics = {
        "payload_items": len(payload),
        "records_loaded": len(records),
        "records_without_timestamp": dropped,
        "non_object_items": skipped,
        "edit_count_non_null": int(frame["edit_count"].notna().sum()),
        "satisfaction_non_null": int(frame["satisfaction_rating"].notna().sum()),
    }
    if dropped or skipped:
        logger.warning("Ignored %d items without timestamp and %d non-object items", dropped, skipped)
    return frame, diagnostics


@st.cache_data(show_spinner=False, ttl=CACHE_TTL_SECONDS)
def _load_records_impl(source: str, timezone: str, timeout: float) -> Tuple[pd.DataFrame, Dict[str, Any]]:
    """Fetch and parse the records. Cached by source, timezone and timeout."""
    payload = fetch_payload(source, timeout=timeout)
    logger.debug("Fetched payload from %s: %d items", source, len(payload) if isinstance(payload, list) else -1)
    return parse_payload(payload, timezone)


def load_records(settings: Optional[Settings] = None) -> Tuple[pd.DataFrame, Dict[str, Any]]:
    """Wrapper that resolves config and calls the cached implementation.

    A failed fetch is logged and yields an empty frame so the dashboard can
    still render; there is no retry.
    """
    settings = settings or load_settings()
    try:
        frame, diagnostics = _load_records_impl(settings.data_source, settings.timezone, settings.fetch_timeout)
    except (httpx.HTTPError, OSError, ValueError, DataSourceError) as exc:
        logger.exception("Error fetching data from %s", settings.data_source)
        return empty_records_frame(), {"source": settings.data_source, "records_loaded": 0, "error": str(exc)}

    logger.info("Loaded %d records from %s", diagnostics["records_loaded"], settings.data_source)
    return frame, {"source": settings.data_source, **diagnostics}


def clear_cache() -> None:
    _load_records_impl.clear()
