from __future__ import annotations

import json
import logging

import httpx
import pytest

from ai_dashboard.config import Settings
from ai_dashboard.data import loader
from ai_dashboard.data.loader import DataSourceError, fetch_payload, load_records, parse_payload
from conftest import event


def _client(handler) -> httpx.Client:
    return httpx.Client(transport=httpx.MockTransport(handler))


def test_fetch_payload_reads_local_file(tmp_path, example_payload):
    path = tmp_path / "data.json"
    path.write_text(json.dumps(example_payload), encoding="utf-8")

    assert fetch_payload(str(path)) == example_payload


def test_fetch_payload_reads_bundled_sample():
    payload = fetch_payload("data/data.json")
    records, diagnostics = parse_payload(payload)

    assert diagnostics["records_loaded"] == len(payload) == len(records)
    assert diagnostics["records_without_timestamp"] == 0


def test_fetch_payload_over_http(example_payload):
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=example_payload)

    with _client(handler) as client:
        payload = fetch_payload("https://dashboard.example/data.json", client=client)

    assert payload == example_payload
    assert seen[0].method == "GET"
    assert seen[0].url.path == "/data.json"


def test_fetch_payload_raises_on_http_error():
    with _client(lambda request: httpx.Response(500, text="boom")) as client:
        with pytest.raises(httpx.HTTPStatusError):
            fetch_payload("https://dashboard.example/data.json", client=client)


def test_fetch_payload_raises_on_non_json_body():
    with _client(lambda request: httpx.Response(200, text="<html>")) as client:
        with pytest.raises(ValueError):
            fetch_payload("https://dashboard.example/data.json", client=client)


def test_parse_payload_rejects_non_array():
    with pytest.raises(DataSourceError):
        parse_payload({"Date and Time": "2024-01-01T10:00"})


def test_parse_payload_counts_unusable_items():
    payload = [
        event("2024-01-01T10:00", edits=1, rating=5),
        event("not a date", edits=2, rating=4),
        {"Number of Edits": 3},
        "garbage",
        event("2024-01-02T10:00", edits="n/a", rating=None),
    ]

    records, diagnostics = parse_payload(payload)

    assert len(records) == 2
    assert diagnostics == {
        "payload_items": 5,
        "records_loaded": 2,
        "records_without_timestamp": 2,
        "non_object_items": 1,
        "edit_count_non_null": 1,
        "satisfaction_non_null": 1,
    }


def test_load_records_returns_parsed_frame(monkeypatch, example_payload):
    calls = []

    def fake_impl(source, timezone, timeout):
        calls.append((source, timezone, timeout))
        return parse_payload(example_payload, timezone)

    monkeypatch.setattr(loader, "_load_records_impl", fake_impl)
    settings = Settings(data_source="https://dashboard.example/data.json", timezone="UTC", fetch_timeout=5.0)

    records, diagnostics = load_records(settings)

    assert calls == [("https://dashboard.example/data.json", "UTC", 5.0)]
    assert len(records) == 2
    assert diagnostics["source"] == "https://dashboard.example/data.json"
    assert "error" not in diagnostics


@pytest.mark.parametrize(
    "error",
    [
        httpx.ConnectError("connection refused"),
        FileNotFoundError("data.json"),
        json.JSONDecodeError("Expecting value", "<html>", 0),
        DataSourceError("Expected a JSON array, got dict"),
    ],
)
def test_load_records_logs_failure_and_returns_empty(monkeypatch, caplog, error):
    def failing_impl(source, timezone, timeout):
        raise error

    monkeypatch.setattr(loader, "_load_records_impl", failing_impl)

    with caplog.at_level(logging.ERROR, logger="ai_dashboard.data.loader"):
        records, diagnostics = load_records(Settings(data_source="data/missing.json"))

    assert records.empty
    assert list(records.columns) == ["timestamp", "edit_count", "satisfaction_rating", "role"]
    assert diagnostics["records_loaded"] == 0
    assert diagnostics["error"] == str(error)
    assert "Error fetching data from data/missing.json" in caplog.text


def test_parse_payload_treats_oversized_numbers_as_missing():
    records, diagnostics = parse_payload(
        [
            event("2024-01-01T10:00", edits=10**400, rating=4),
            event("2024-01-01T12:00", edits=2, rating=5),
        ]
    )

    assert diagnostics["records_loaded"] == 2
    assert diagnostics["edit_count_non_null"] == 1
    assert list(records["satisfaction_rating"]) == [4.0, 5.0]
