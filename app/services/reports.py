# backend/app/services/reports.py
import logging
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from math import fsum
from typing import Callable, Dict, Iterable, List, Optional, Union

logger = logging.getLogger(__name__)

MONTHS_IN_REPORT = 12

# Fixed English abbreviations; strftime("%b") follows the process locale
MONTH_ABBR = ("Jan", "Feb", "Mar", "Apr", "May", "Jun",
              "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")

# --------------------------------------------------
# Types
# --------------------------------------------------

class ReportPeriod(str, Enum):
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"


REPORT_TITLES = {
    ReportPeriod.WEEKLY: "Weekly Carbon Emissions Report",
    ReportPeriod.MONTHLY: "Monthly Carbon Emissions Report",
    ReportPeriod.YEARLY: "Yearly Carbon Emissions Report",
}


@dataclass(frozen=True)
class EmissionRecord:
    date: date
    total_emissions: float


@dataclass(frozen=True, order=True)
class MonthKey:
    year: int
    month: int

    @classmethod
    def from_date(cls, d: date) -> "MonthKey":
        return cls(d.year, d.month)

    @property
    def label(self) -> str:
        return f"{MONTH_ABBR[self.month - 1]} {self.year:04d}"


@dataclass(frozen=True, order=True)
class YearKey:
    year: int

    @classmethod
    def from_date(cls, d: date) -> "YearKey":
        return cls(d.year)

    @property
    def label(self) -> str:
        return str(self.year)


@dataclass(frozen=True, order=True)
class WeekKey:
    iso_year: int
    week: int

    @classmethod
    def from_date(cls, d: date) -> "WeekKey":
        iso_year, week, _ = d.isocalendar()
        return cls(iso_year, week)

    @property
    def label(self) -> str:
        return f"Week {self.week} ({self.iso_year})"


PeriodKey = Union[MonthKey, YearKey, WeekKey]


@dataclass(frozen=True)
class PeriodSeries:
    labels: List[str] = field(default_factory=list)
    data: List[float] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.data)


@dataclass(frozen=True)
class ReportSummary:
    labels: List[str]
    data: List[float]
    average: float
    latest_value: float
    prev_value: float
    title: str

# --------------------------------------------------
# Grouping
# --------------------------------------------------

def _totals_by(records: Iterable[EmissionRecord],
               key_fn: Callable[[date], PeriodKey]) -> Dict[PeriodKey, float]:
    """Sum emissions per period key."""
    buckets: Dict[PeriodKey, List[float]] = defaultdict(list)
    for r in records:
        buckets[key_fn(r.date)].append(float(r.total_emissions))
    return {k: fsum(v) for k, v in buckets.items()}


def _series(keys: Iterable[PeriodKey], totals: Dict[PeriodKey, float]) -> PeriodSeries:
    keys = list(keys)
    return PeriodSeries(labels=[k.label for k in keys], data=[totals[k] for k in keys])


def group_by_month(records: Iterable[EmissionRecord]) -> PeriodSeries:
    """
    Monthly totals for the 12 most recent months present, oldest first.
    Older months are dropped without notice.
    """
    totals = _totals_by(records, MonthKey.from_date)
    recent = sorted(totals, reverse=True)[:MONTHS_IN_REPORT]
    recent.reverse()
    return _series(recent, totals)


def group_by_year(records: Iterable[EmissionRecord]) -> PeriodSeries:
    """Yearly totals by calendar year, ascending."""
    totals = _totals_by(records, YearKey.from_date)
    return _series(sorted(totals), totals)


def group_by_week(records: Iterable[EmissionRecord]) -> PeriodSeries:
    """
    Weekly totals keyed by ISO week and ISO week-based year.

    Ordered by label text, not by (iso_year, week): "Week 10 (2024)" comes
    before "Week 2 (2024)".
    """
    totals = _totals_by(records, WeekKey.from_date)
    return _series(sorted(totals, key=lambda k: k.label), totals)

# --------------------------------------------------
# Statistics
# --------------------------------------------------

def summarize(series: PeriodSeries, title: str) -> ReportSummary:
    data = list(series.data)
    average = fsum(data) / len(data) if data else 0.0
    latest = data[-1] if data else 0.0
    prev = data[-2] if len(data) > 1 else 0.0

    return ReportSummary(
        labels=list(series.labels),
        data=data,
        average=average,
        latest_value=latest,
        prev_value=prev,
        title=title,
    )

# --------------------------------------------------
# Main Entry
# --------------------------------------------------

_GROUPERS = {
    ReportPeriod.WEEKLY: group_by_week,
    ReportPeriod.MONTHLY: group_by_month,
    ReportPeriod.YEARLY: group_by_year,
}


def resolve_period(period: Optional[str]) -> ReportPeriod:
    """Map a requested period onto a ReportPeriod; anything unknown is monthly."""
    try:
        return ReportPeriod(period)
    except ValueError:
        return ReportPeriod.MONTHLY


def generate_report(period: Optional[str], records: Iterable[EmissionRecord]) -> ReportSummary:
    resolved = resolve_period(period)
    if resolved.value != period:
        logger.debug("Unknown report period %r, using %s", period, resolved.value)

    series = _GROUPERS[resolved](records)
    return summarize(series, REPORT_TITLES[resolved])
