"""Reference data router — airline and airport lookups for activity forms."""

from fastapi import APIRouter, Depends, HTTPException, Query

from app.data.airlines import format_airline_display, get_airline_by_code, search_airlines
from app.data.airports import format_airport_display, search_airports
from app.dependencies import get_current_user

router = APIRouter(dependencies=[Depends(get_current_user)])


@router.get("/airlines")
async def list_airlines(
    q: str = Query("", description="Airline code or name"),
    limit: int = Query(10, ge=1, le=50),
):
    return {
        "airlines": [
            {**a, "display": format_airline_display(a)} for a in search_airlines(q, limit)
        ]
    }


@router.get("/airlines/{code}")
async def get_airline(code: str):
    airline = get_airline_by_code(code)
    if not airline:
        raise HTTPException(status_code=404, detail="Airline not found")
    return {**airline, "display": format_airline_display(airline)}


@router.get("/airports")
async def list_airports(
    q: str = Query("", description="Airport code, city or name"),
    limit: int = Query(15, ge=1, le=50),
):
    return {
        "airports": [
            {**a, "display": format_airport_display(a["code"])} for a in search_airports(q, limit)
        ]
    }
