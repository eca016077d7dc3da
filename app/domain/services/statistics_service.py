"""Statistics service for the dashboard.
Aggregates invoice summaries into revenue figures.
"""

from collections import Counter, defaultdict
from dataclasses import dataclass
from datetime import date, timedelta
from decimal import Decimal
from typing import Dict, Iterable, List, Tuple

from app.domain.models.base import ValidationError
from app.domain.models.invoice import InvoiceStatus, InvoiceSummary


DAILY_REVENUE_DAYS = 30

ZERO = Decimal("0.00")


@dataclass(frozen=True)
class DailyRevenue:
    date: date
    total: Decimal


@dataclass(frozen=True)
class StatusCount:
    name: str
    value: int


@dataclass(frozen=True)
class DashboardStatistics:
    total_invoices: int
    paid_amount: Decimal
    unpaid_amount: Decimal
    overdue_amount: Decimal
    daily_revenue: List[DailyRevenue]
    current_month: Decimal
    last_month: Decimal
    status_distribution: List[StatusCount]


def month_bounds(day: date) -> Tuple[date, date]:
    """First and last day of the month containing `day`."""
    start = day.replace(day=1)
    next_month = (start + timedelta(days=32)).replace(day=1)
    return start, next_month - timedelta(days=1)


class StatisticsService:
    """Domain service computing dashboard figures for one tenant."""

    def dashboard(self, summaries: Iterable[InvoiceSummary], today: date) -> DashboardStatistics:
        summaries = list(summaries)
        totals_by_status: Dict[InvoiceStatus, Decimal] = defaultdict(lambda: ZERO)
        counts = Counter()

        for summary in summaries:
            totals_by_status[summary.status] += summary.total
            counts[summary.status.value] += 1

        paid = [s for s in summaries if s.status == InvoiceStatus.PAID]

        current_start, current_end = month_bounds(today)
        last_start, last_end = month_bounds(current_start - timedelta(days=1))

        return DashboardStatistics(
            total_invoices=len(summaries),
            paid_amount=totals_by_status[InvoiceStatus.PAID],
            unpaid_amount=totals_by_status[InvoiceStatus.UNPAID],
            overdue_amount=totals_by_status[InvoiceStatus.OVERDUE],
            daily_revenue=self.daily_revenue(
                paid, today - timedelta(days=DAILY_REVENUE_DAYS), today
            ),
            current_month=self._sum_between(paid, current_start, current_end),
            last_month=self._sum_between(paid, last_start, last_end),
            status_distribution=[
                StatusCount(name=name, value=counts[name]) for name in sorted(counts)
            ],
        )

    def daily_revenue(
        self,
        summaries: Iterable[InvoiceSummary],
        start: date,
        end: date,
        fill_missing: bool = True
    ) -> List[DailyRevenue]:
        """
        PAID totals grouped by issue date between start and end inclusive.

        With fill_missing every day in the range is present, zero when idle.
        """
        if start > end:
            raise ValidationError("Start date must not be after end date", "start_date")

        per_day: Dict[date, Decimal] = defaultdict(lambda: ZERO)
        for summary in summaries:
            if summary.status == InvoiceStatus.PAID and start <= summary.issue_date <= end:
                per_day[summary.issue_date] += summary.total

        if not fill_missing:
            return [DailyRevenue(date=day, total=per_day[day]) for day in sorted(per_day)]

        days = (end - start).days + 1
        return [
            DailyRevenue(date=day, total=per_day.get(day, ZERO))
            for day in (start + timedelta(days=offset) for offset in range(days))
        ]

    def _sum_between(self, summaries: List[InvoiceSummary], start: date, end: date) -> Decimal:
        return sum(
            (s.total for s in summaries if start <= s.issue_date <= end),
            ZERO
        )
