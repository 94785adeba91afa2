"""Exchange rate service — stored, live and fallback currency rates."""

import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal

import httpx
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.data.currency import (
    DAILY_REFRESH_BASES,
    SUPPORTED_CURRENCIES,
    convert_cents,
    fallback_rate,
    is_supported,
    quantize_rate,
)
from app.exceptions import ConfigurationError, ServiceError
from app.models.finance import ExchangeRate
from app.services.cache_service import cache_service

logger = logging.getLogger(__name__)


@dataclass
class RateQuote:
    from_currency: str
    to_currency: str
    rate: Decimal
    rate_date: date
    source: str  # identity | stored | api | fallback

    def to_dict(self) -> dict:
        return {
            "from_currency": self.from_currency,
            "to_currency": self.to_currency,
            "rate": f"{self.rate:.8f}",
            "rate_date": self.rate_date,
            "source": self.source,
        }


@dataclass
class Conversion:
    original_amount_cents: int
    converted_amount_cents: int
    quote: RateQuote

    def to_dict(self) -> dict:
        return {
            "original_amount_cents": self.original_amount_cents,
            "converted_amount_cents": self.converted_amount_cents,
            **self.quote.to_dict(),
        }


class ExchangeRateService:
    """Resolves rates: stored row for the date (or earlier), then live provider, then static fallback."""

    def __init__(self):
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=settings.exchange_rate_api_base_url,
                timeout=settings.exchange_rate_timeout_seconds,
            )
        return self._client

    async def fetch_latest_rates(self, base_currency: str, use_cache: bool = True) -> dict[str, float] | None:
        """Latest provider rates for a base currency, or None when unavailable."""
        if not settings.exchange_rate_api_key:
            return None

        if use_cache:
            cached = await cache_service.get_latest_rates(base_currency)
            if cached:
                return cached

        try:
            client = await self._get_client()
            resp = await client.get(f"/{settings.exchange_rate_api_key}/latest/{base_currency}")
            resp.raise_for_status()
            data = resp.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.warning(f"Exchange rate API request failed for {base_currency}: {e}")
            return None

        if data.get("result") != "success":
            logger.warning(f"Exchange rate API error for {base_currency}: {data.get('error-type', 'unknown')}")
            return None

        rates = data.get("conversion_rates") or {}
        await cache_service.set_latest_rates(base_currency, rates)
        return rates

    async def _stored_rate(
        self, db: AsyncSession, from_currency: str, to_currency: str, on_date: date
    ) -> ExchangeRate | None:
        result = await db.execute(
            select(ExchangeRate)
            .where(
                ExchangeRate.from_currency == from_currency,
                ExchangeRate.to_currency == to_currency,
                ExchangeRate.rate_date <= on_date,
            )
            .order_by(ExchangeRate.rate_date.desc())
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def _store_rate(
        self, db: AsyncSession, from_currency: str, to_currency: str,
        rate: Decimal, rate_date: date, source: str = "api",
    ) -> ExchangeRate:
        result = await db.execute(
            select(ExchangeRate).where(
                ExchangeRate.from_currency == from_currency,
                ExchangeRate.to_currency == to_currency,
                ExchangeRate.rate_date == rate_date,
            )
        )
        row = result.scalar_one_or_none()
        if row:
            row.rate = rate
            row.source = source
        else:
            row = ExchangeRate(
                from_currency=from_currency,
                to_currency=to_currency,
                rate=rate,
                rate_date=rate_date,
                source=source,
            )
            db.add(row)
        await db.flush()
        return row

    async def get_rate(
        self, db: AsyncSession, from_currency: str, to_currency: str, on_date: date | None = None
    ) -> RateQuote:
        from_currency = from_currency.upper()
        to_currency = to_currency.upper()
        on_date = on_date or date.today()

        if not is_supported(from_currency) or not is_supported(to_currency):
            raise ServiceError(f"Unsupported currency pair: {from_currency} to {to_currency}")

        if from_currency == to_currency:
            return RateQuote(from_currency, to_currency, Decimal("1.00000000"), on_date, "identity")

        stored = await self._stored_rate(db, from_currency, to_currency, on_date)
        if stored:
            return RateQuote(
                from_currency, to_currency, quantize_rate(Decimal(stored.rate)), stored.rate_date, "stored"
            )

        live = await self.fetch_latest_rates(from_currency)
        if live and to_currency in live:
            rate = quantize_rate(Decimal(str(live[to_currency])))
            today = date.today()
            await self._store_rate(db, from_currency, to_currency, rate, today)
            return RateQuote(from_currency, to_currency, rate, today, "api")

        rate = fallback_rate(from_currency, to_currency)
        if rate is None:
            raise ServiceError(f"No exchange rate available for {from_currency} to {to_currency}")
        logger.info(f"Using fallback rate {from_currency}->{to_currency}: {rate}")
        return RateQuote(from_currency, to_currency, rate, on_date, "fallback")

    async def convert(
        self, db: AsyncSession, amount_cents: int, from_currency: str, to_currency: str,
        on_date: date | None = None,
    ) -> Conversion:
        if amount_cents < 0:
            raise ServiceError("Amount must be a non-negative number of cents")
        quote = await self.get_rate(db, from_currency, to_currency, on_date)
        return Conversion(amount_cents, convert_cents(amount_cents, quote.rate), quote)

    async def refresh_daily_rates(self, db: AsyncSession) -> int:
        """Store today's provider rates for every base/target pair. Returns rows written."""
        if not settings.exchange_rate_api_key:
            raise ConfigurationError("Exchange rate API key is not configured")

        today = date.today()
        stored = 0
        for base in DAILY_REFRESH_BASES:
            rates = await self.fetch_latest_rates(base, use_cache=False)
            if not rates:
                logger.warning(f"Daily rate refresh skipped {base}: provider returned nothing")
                continue
            for target in SUPPORTED_CURRENCIES:
                if target == base or target not in rates:
                    continue
                await self._store_rate(db, base, target, quantize_rate(Decimal(str(rates[target]))), today)
                stored += 1

        logger.info(f"Daily exchange rate refresh stored {stored} rates")
        return stored

    async def close(self):
        if self._client:
            await self._client.aclose()
            self._client = None


exchange_rate_service = ExchangeRateService()
