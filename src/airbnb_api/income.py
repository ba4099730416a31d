"""
Airbnb Income Estimates - Calendar Aggregation
==============================================

Turns the ``calendar_months`` section of an availability response into
one income estimate per month:

- Average nightly price over the days that carry a price
- Days available / reserved / blocked by the host
- Estimated income (reserved nights) and opportunity income
  (nights still open)
"""

import logging
from dataclasses import dataclass, asdict, field
from typing import List, Dict, Optional, Any, Iterable

logger = logging.getLogger(__name__)

DAY_TYPE_RESERVATION = "reservation"
DAY_TYPE_BUSY = "busy"
DAY_SUBTYPE_HOST_BUSY = "host_busy"


@dataclass
class CalendarDay:
    """Single day in a listing's calendar."""
    date: str  # YYYY-MM-DD
    available: bool
    type: Optional[str] = None
    subtype: Optional[str] = None
    price: Optional[float] = None  # local_price, None when the day is unpriced

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CalendarDay":
        price_data = data.get("price")
        price = None
        # A null local_price counts as an unpriced day
        if price_data is not None and price_data.get("local_price") is not None:
            price = float(price_data["local_price"])

        return cls(
            date=data.get("date", ""),
            available=bool(data.get("available", False)),
            type=data.get("type"),
            subtype=data.get("subtype"),
            price=price,
        )

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class CalendarMonth:
    """One month of a listing's calendar."""
    month: int
    year: int
    days: List[CalendarDay] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CalendarMonth":
        return cls(
            month=data["month"],
            year=data["year"],
            days=[CalendarDay.from_dict(d) for d in data.get("days") or []],
        )


@dataclass(frozen=True)
class MonthlyIncomeEstimate:
    month: int
    year: int
    days_available: int
    days_host_busy: int
    days_reserved: int
    avg_price: float
    est_income: float
    est_opportunity_income: float

    def to_dict(self) -> dict:
        return asdict(self)


# Day predicates

def has_price(day: CalendarDay) -> bool:
    return day.price is not None


def is_available(day: CalendarDay) -> bool:
    return day.available


def is_host_busy(day: CalendarDay) -> bool:
    """Blocked by the host rather than booked by a guest."""
    return (
        not day.available
        and day.type == DAY_TYPE_BUSY
        and day.subtype == DAY_SUBTYPE_HOST_BUSY
    )


def is_reserved(day: CalendarDay) -> bool:
    return not day.available and day.type == DAY_TYPE_RESERVATION


def estimate_month(calendar_month: CalendarMonth) -> MonthlyIncomeEstimate:
    days = calendar_month.days
    prices = [d.price for d in days if has_price(d)]
    days_available = sum(1 for d in days if is_available(d))
    days_host_busy = sum(1 for d in days if is_host_busy(d))
    days_reserved = sum(1 for d in days if is_reserved(d))

    avg_price = sum(prices) / len(prices) if prices else 0

    return MonthlyIncomeEstimate(
        month=calendar_month.month,
        year=calendar_month.year,
        days_available=days_available,
        days_host_busy=days_host_busy,
        days_reserved=days_reserved,
        avg_price=avg_price,
        est_income=avg_price * days_reserved,
        est_opportunity_income=avg_price * days_available,
    )


def estimate_income(calendar_months: Iterable[CalendarMonth]) -> List[MonthlyIncomeEstimate]:
    """
    Estimate income for each calendar month, in input order.

    Args:
        calendar_months: Parsed months from an availability response

    Returns:
        One MonthlyIncomeEstimate per month
    """
    return [estimate_month(m) for m in calendar_months]


def parse_calendar_months(availability: Dict[str, Any]) -> List[CalendarMonth]:
    """Parse the ``calendar_months`` list out of an availability response."""
    months = availability["calendar_months"]
    parsed = [CalendarMonth.from_dict(m) for m in months]
    logger.debug(f"[INCOME] Parsed {len(parsed)} calendar months")
    return parsed
