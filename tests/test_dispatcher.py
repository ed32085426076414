import asyncio
import json

import httpx
import pytest

from app.services import dispatcher
from app.services.dispatcher import build_batch_metadata, dispatch_companies, post_company

URL = "https://hooks.example.com/clay/1"


def _companies(count):
    return [{"id": f"company-{i}", "company_name": f"Company {i}"} for i in range(count)]


def _run(handler, coro_factory):
    async def runner():
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            return await coro_factory(client)
    return asyncio.run(runner())


@pytest.fixture
def sleeps(monkeypatch):
    recorded = []

    async def fake_sleep(seconds):
        recorded.append(seconds)

    monkeypatch.setattr(dispatcher.asyncio, "sleep", fake_sleep)
    return recorded


def test_batch_metadata_carries_source_tag():
    metadata = build_batch_metadata("batch-1", "2026-01-01T00:00:00+00:00", "11-50", "Clay 1")

    assert metadata == {
        "batch_id": "batch-1",
        "batch_timestamp": "2026-01-01T00:00:00+00:00",
        "employee_range": "11-50",
        "webhook_name": "Clay 1",
        "source": "hq-data-warehouse",
    }


def test_post_company_sends_company_with_metadata():
    received = []

    def handler(request):
        received.append(json.loads(request.content))
        return httpx.Response(200, text="queued")

    metadata = {"batch_id": "batch-1"}
    ok = _run(handler, lambda client: post_company(client, URL, {"id": "c1", "company_name": "Acme"}, metadata))

    assert ok is True
    assert received == [{"id": "c1", "company_name": "Acme", "_batch_metadata": {"batch_id": "batch-1"}}]


@pytest.mark.parametrize("status_code", [400, 404, 500, 503])
def test_post_company_non_2xx_is_failure(status_code):
    ok = _run(lambda request: httpx.Response(status_code), lambda client: post_company(client, URL, {"id": "c1"}, {}))
    assert ok is False


def test_post_company_transport_error_is_failure():
    def handler(request):
        raise httpx.ConnectTimeout("timed out", request=request)

    ok = _run(handler, lambda client: post_company(client, URL, {"id": "c1"}, {}))
    assert ok is False


def test_post_company_unserializable_payload_is_failure():
    ok = _run(lambda request: httpx.Response(200), lambda client: post_company(client, URL, {"id": object()}, {}))
    assert ok is False


def test_dispatch_paces_sub_batches(sleeps):
    calls = []

    def handler(request):
        calls.append(json.loads(request.content)["id"])
        return httpx.Response(200)

    companies = _companies(25)
    outcomes = _run(handler, lambda client: dispatch_companies(client, URL, companies, {}, 10, 1000))

    assert outcomes == [True] * 25
    assert sorted(calls) == sorted(company["id"] for company in companies)
    # three sub-batches, pauses only between them
    assert sleeps == [1.0, 1.0]


def test_dispatch_single_sub_batch_does_not_sleep(sleeps):
    outcomes = _run(lambda request: httpx.Response(200), lambda client: dispatch_companies(client, URL, _companies(10), {}, 10, 1000))

    assert outcomes == [True] * 10
    assert sleeps == []


def test_dispatch_continues_after_failures(sleeps):
    def handler(request):
        company_id = json.loads(request.content)["id"]
        if company_id in ("company-1", "company-12"):
            raise httpx.ConnectError("refused", request=request)
        if company_id == "company-3":
            return httpx.Response(502)
        return httpx.Response(201)

    outcomes = _run(handler, lambda client: dispatch_companies(client, URL, _companies(15), {}, 10, 500))

    assert len(outcomes) == 15
    assert [i for i, ok in enumerate(outcomes) if not ok] == [1, 3, 12]
    assert sleeps == [0.5]


def test_dispatch_empty_slice():
    outcomes = _run(lambda request: httpx.Response(200), lambda client: dispatch_companies(client, URL, [], {}))
    assert outcomes == []


def test_post_company_malformed_url_is_failure():
    ok = _run(
        lambda request: httpx.Response(200),
        lambda client: post_company(client, "http://hooks.example.com:80a/hook", {"id": "c1"}, {}),
    )
    assert ok is False


def test_dispatch_uses_configured_rate_limit(sleeps, monkeypatch):
    monkeypatch.setattr(dispatcher.settings, "SEND_RATE_LIMIT", 4)
    monkeypatch.setattr(dispatcher.settings, "SEND_RATE_INTERVAL_MS", 250)

    outcomes = _run(lambda request: httpx.Response(200), lambda client: dispatch_companies(client, URL, _companies(9), {}))

    assert outcomes == [True] * 9
    assert sleeps == [0.25, 0.25]
