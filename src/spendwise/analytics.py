"""Spending analytics over a user's transactions."""

import calendar
import logging
from collections.abc import Mapping, Sequence
from datetime import date, timedelta
from decimal import ROUND_FLOOR, Decimal

from .models import (
    CategoryShare,
    DailySpend,
    MonthlySpend,
    SpendingInsights,
    Transaction,
    WeeklySummary,
)

logger = logging.getLogger(__name__)

NO_CATEGORY = "N/A"


def round_percent(value: Decimal) -> int:
    """Round to a whole number with halves going up (-2.5 -> -2, 2.5 -> 3)."""
    return int((value + Decimal("0.5")).to_integral_value(rounding=ROUND_FLOOR))


def shift_month(year: int, month: int, delta: int) -> tuple[int, int]:
    """Move a (year, month) pair by delta months."""
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


def days_in_month(day: date) -> int:
    """Number of days in the month containing day."""
    return calendar.monthrange(day.year, day.month)[1]


def compute_insights(
    transactions: Sequence[Transaction],
    today: date,
    trend_months: int = 6,
) -> SpendingInsights:
    """
    Summarize this month's spending against last month.

    Args:
        transactions: All of the user's transactions
        today: Reference day that defines "this month"
        trend_months: Number of months in the trend, ending with this month

    Returns:
        Spending insights for the month containing today
    """
    current = (today.year, today.month)
    previous = shift_month(today.year, today.month, -1)

    spent_this_month = Decimal("0")
    spent_last_month = Decimal("0")
    income_this_month = Decimal("0")
    category_totals: dict[str, Decimal] = {}

    for transaction in transactions:
        period = (transaction.date.year, transaction.date.month)

        if transaction.type == "debit":
            if period == current:
                spent_this_month += transaction.amount
                category_totals[transaction.category] = (
                    category_totals.get(transaction.category, Decimal("0"))
                    + transaction.amount
                )
            elif period == previous:
                spent_last_month += transaction.amount
        elif transaction.type == "credit" and period == current:
            income_this_month += transaction.amount

    # Ties go to the category seen later
    top_category = NO_CATEGORY
    top_category_amount = Decimal("0")
    if spent_this_month > 0:
        for name, total in category_totals.items():
            if top_category == NO_CATEGORY or total >= top_category_amount:
                top_category = name
                top_category_amount = total

    avg_daily_spend = Decimal("0")
    if spent_this_month > 0:
        avg_daily_spend = spent_this_month / days_in_month(today)

    distribution = []
    if spent_this_month > 0:
        for name, total in category_totals.items():
            percent = round_percent(total / spent_this_month * 100)
            if percent > 0:
                distribution.append(CategoryShare(name=name, percent=percent))

    if spent_last_month > 0:
        spending_change = round_percent(
            (spent_this_month - spent_last_month) / spent_last_month * 100
        )
    elif spent_this_month > 0:
        # Any spending after an empty month counts as a full increase
        spending_change = 100
    else:
        spending_change = 0

    return SpendingInsights(
        total_spent_this_month=spent_this_month,
        total_spent_last_month=spent_last_month,
        total_income_this_month=income_this_month,
        net_balance=income_this_month - spent_this_month,
        spending_change=spending_change,
        top_category=top_category,
        top_category_amount=top_category_amount,
        avg_daily_spend=avg_daily_spend,
        category_totals=category_totals,
        distribution=distribution,
        trend=spending_trend(transactions, today, trend_months),
    )


def spending_trend(
    transactions: Sequence[Transaction], today: date, months: int = 6
) -> list[MonthlySpend]:
    """Debit totals for the last `months` months, oldest first."""
    totals: dict[tuple[int, int], Decimal] = {}
    for offset in range(months - 1, -1, -1):
        totals[shift_month(today.year, today.month, -offset)] = Decimal("0")

    for transaction in transactions:
        if transaction.type != "debit":
            continue
        key = (transaction.date.year, transaction.date.month)
        if key in totals:
            totals[key] += transaction.amount

    return [
        MonthlySpend(year=year, month=month, amount=amount)
        for (year, month), amount in totals.items()
    ]


def compute_weekly_summary(
    transactions: Sequence[Transaction],
    budget_limits: Mapping[str, Decimal],
    today: date,
) -> WeeklySummary:
    """
    Compare this week's spending against the pro-rated monthly budget.

    The weekly budget is the sum of all monthly limits spread evenly over the
    days of the current month, times seven. The week runs Monday to Sunday.
    """
    window = [today - timedelta(days=6 - i) for i in range(7)]
    daily_totals = {day: Decimal("0") for day in window}

    week_start = today - timedelta(days=today.weekday())
    week_end = week_start + timedelta(days=6)

    today_spend = Decimal("0")
    week_spend = Decimal("0")

    for transaction in transactions:
        if transaction.type != "debit":
            continue
        if transaction.date == today:
            today_spend += transaction.amount
        if transaction.date in daily_totals:
            daily_totals[transaction.date] += transaction.amount
        if week_start <= transaction.date <= week_end:
            week_spend += transaction.amount

    weekly_budget = Decimal("0")
    budget_difference = 0
    is_over_budget = False

    if budget_limits:
        total_monthly_budget = sum(
            (Decimal(str(limit)) for limit in budget_limits.values()), Decimal("0")
        )
        weekly_budget = total_monthly_budget / days_in_month(today) * 7
        if weekly_budget > 0:
            budget_difference = round_percent(
                (week_spend - weekly_budget) / weekly_budget * 100
            )
            is_over_budget = week_spend > weekly_budget

    logger.debug(
        f"Week of {week_start}: spent {week_spend} against {weekly_budget:.2f}"
    )

    return WeeklySummary(
        today_spend=today_spend,
        daily=[DailySpend(day=day, amount=daily_totals[day]) for day in window],
        week_spend=week_spend,
        weekly_budget=weekly_budget,
        budget_difference=budget_difference,
        is_over_budget=is_over_budget,
    )
