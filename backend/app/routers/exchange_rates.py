"""Exchange rates router — supported currencies, rate lookups, conversion and refresh."""

from datetime import date

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.data.currency import CURRENCY_SYMBOLS, SUPPORTED_CURRENCIES
from app.database import get_db
from app.dependencies import get_current_user
from app.schemas.finance import ConvertRequest, ConvertResponse, ExchangeRateResponse
from app.services.exchange_rate_service import exchange_rate_service

router = APIRouter(dependencies=[Depends(get_current_user)])


@router.get("/currencies")
async def list_currencies():
    return {
        "currencies": [
            {"code": code, "symbol": CURRENCY_SYMBOLS.get(code, code)}
            for code in SUPPORTED_CURRENCIES
        ]
    }


@router.get("/rate", response_model=ExchangeRateResponse)
async def get_rate(
    from_currency: str = Query(..., min_length=3, max_length=3),
    to_currency: str = Query(..., min_length=3, max_length=3),
    on_date: date | None = Query(None, alias="date"),
    db: AsyncSession = Depends(get_db),
):
    """Stored rate for the date (or the latest before it), else live, else fallback."""
    quote = await exchange_rate_service.get_rate(db, from_currency, to_currency, on_date)
    # A live fetch stores the rate
    await db.commit()
    return quote.to_dict()


@router.post("/convert", response_model=ConvertResponse)
async def convert(
    req: ConvertRequest,
    db: AsyncSession = Depends(get_db),
):
    conversion = await exchange_rate_service.convert(
        db, req.amount_cents, req.from_currency, req.to_currency, req.date
    )
    await db.commit()
    return conversion.to_dict()


@router.post("/refresh")
async def refresh_rates(db: AsyncSession = Depends(get_db)):
    """Fetch and store today's rates for the base currencies now."""
    stored = await exchange_rate_service.refresh_daily_rates(db)
    await db.commit()
    return {"stored": stored, "rate_date": date.today()}
