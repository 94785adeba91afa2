import asyncio
from datetime import date
from unittest.mock import AsyncMock

import httpx

from app.config import settings
from app.main import refresh_exchange_rates_job
from app.services.cache_service import cache_service
from app.services.exchange_rate_service import exchange_rate_service

PROVIDER_RATES = {"CAD": 1.3621, "USD": 1.0, "EUR": 0.9134}


def _with_provider(monkeypatch, rates=PROVIDER_RATES):
    monkeypatch.setattr(settings, "exchange_rate_api_key", "test-key")
    mock = AsyncMock(return_value=rates)
    monkeypatch.setattr(exchange_rate_service, "fetch_latest_rates", mock)
    return mock


def test_list_currencies(client):
    currencies = client.get("/api/exchange-rates/currencies").json()["currencies"]
    assert currencies[0] == {"code": "CAD", "symbol": "CA$"}
    assert len(currencies) == 16


def test_fallback_rate_without_provider(client):
    resp = client.get("/api/exchange-rates/rate", params={"from_currency": "EUR", "to_currency": "CAD"})
    assert resp.status_code == 200
    body = resp.json()
    assert body["rate"] == "1.50000000"
    assert body["source"] == "fallback"
    assert body["rate_date"] == date.today().isoformat()


def test_identity_and_unsupported(client):
    same = client.get("/api/exchange-rates/rate", params={"from_currency": "cad", "to_currency": "CAD"}).json()
    assert same == {
        "from_currency": "CAD",
        "to_currency": "CAD",
        "rate": "1.00000000",
        "rate_date": date.today().isoformat(),
        "source": "identity",
    }

    resp = client.get("/api/exchange-rates/rate", params={"from_currency": "XYZ", "to_currency": "CAD"})
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Unsupported currency pair: XYZ to CAD"


def test_convert(client):
    resp = client.post("/api/exchange-rates/convert", json={
        "amount_cents": 10000, "from_currency": "EUR", "to_currency": "CAD", "date": "2026-03-01",
    })
    body = resp.json()
    assert body["converted_amount_cents"] == 15000
    assert body["original_amount_cents"] == 10000
    assert body["rate_date"] == "2026-03-01"

    negative = client.post("/api/exchange-rates/convert", json={
        "amount_cents": -1, "from_currency": "EUR", "to_currency": "CAD",
    })
    assert negative.status_code == 400


def test_live_rate_is_stored_then_reused(client, monkeypatch):
    provider = _with_provider(monkeypatch)

    live = client.get("/api/exchange-rates/rate", params={"from_currency": "USD", "to_currency": "CAD"}).json()
    assert live["source"] == "api"
    assert live["rate"] == "1.36210000"

    stored = client.get("/api/exchange-rates/rate", params={"from_currency": "USD", "to_currency": "CAD"}).json()
    assert stored["source"] == "stored"
    assert stored["rate"] == "1.36210000"
    assert provider.await_count == 1


def test_refresh_requires_api_key(client):
    resp = client.post("/api/exchange-rates/refresh")
    assert resp.status_code == 503
    assert resp.json()["detail"] == "Exchange rate API key is not configured"


def test_refresh_stores_every_base_pair(client, monkeypatch):
    _with_provider(monkeypatch)
    resp = client.post("/api/exchange-rates/refresh")
    assert resp.json() == {"stored": 9, "rate_date": date.today().isoformat()}

    quote = client.get("/api/exchange-rates/rate", params={"from_currency": "GBP", "to_currency": "EUR"}).json()
    assert quote["source"] == "stored"
    assert quote["rate"] == "0.91340000"


def test_scheduled_refresh_job(client, monkeypatch):
    asyncio.run(refresh_exchange_rates_job())

    _with_provider(monkeypatch)
    asyncio.run(refresh_exchange_rates_job())
    quote = client.get("/api/exchange-rates/rate", params={"from_currency": "CAD", "to_currency": "USD"}).json()
    assert quote["source"] == "stored"


def test_provider_payload_parsing(monkeypatch):
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path.endswith("/test-key/latest/CAD")
        return httpx.Response(200, json={"result": "success", "conversion_rates": {"USD": 0.73}})

    monkeypatch.setattr(settings, "exchange_rate_api_key", "test-key")
    monkeypatch.setattr(cache_service, "get_latest_rates", AsyncMock(return_value=None))
    cache_set = AsyncMock()
    monkeypatch.setattr(cache_service, "set_latest_rates", cache_set)

    async def run():
        client = httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url="https://rates.test/v6")
        monkeypatch.setattr(exchange_rate_service, "_client", client)
        try:
            return await exchange_rate_service.fetch_latest_rates("CAD")
        finally:
            await client.aclose()

    assert asyncio.run(run()) == {"USD": 0.73}
    cache_set.assert_awaited_once_with("CAD", {"USD": 0.73})


def test_provider_error_returns_none(monkeypatch):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"result": "error", "error-type": "invalid-key"})

    monkeypatch.setattr(settings, "exchange_rate_api_key", "test-key")
    monkeypatch.setattr(cache_service, "get_latest_rates", AsyncMock(return_value=None))

    async def run():
        client = httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url="https://rates.test/v6")
        monkeypatch.setattr(exchange_rate_service, "_client", client)
        try:
            return await exchange_rate_service.fetch_latest_rates("USD")
        finally:
            await client.aclose()

    assert asyncio.run(run()) is None


def test_exchange_rates_require_auth(anon_client):
    assert anon_client.get("/api/exchange-rates/currencies").status_code == 401
