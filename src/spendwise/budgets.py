"""Budget evaluation: spend aggregation and threshold alerts."""

import logging
from collections.abc import Iterable, Mapping, Sequence
from decimal import ROUND_HALF_UP, Decimal

from .models import BudgetAlertState, Category, CategoryBudget, Transaction

logger = logging.getLogger(__name__)

DEFAULT_THRESHOLD = Decimal("0.8")
UNKNOWN_CATEGORY = "Unknown"


def to_decimal(value: Decimal | float | int) -> Decimal:
    """
    Convert a number to Decimal through its string form.

    Going through str() keeps 0.8 as Decimal("0.8") instead of the binary
    float expansion, so a ratio of exactly 0.8 compares equal to it.
    """
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def find_alert_candidate(
    budgets: Sequence[CategoryBudget],
    spend_by_category: Mapping[str, Decimal | float | int],
    dismissed_category_names: Iterable[str] = (),
    threshold: Decimal | float = DEFAULT_THRESHOLD,
) -> BudgetAlertState | None:
    """
    Find the budget alert to surface, if any.

    A budget is a candidate when spent / limit reaches the threshold
    (inclusive) and its category name has not been dismissed. The first
    candidate in budget order wins; there is no ranking by overage.

    Budgets with a non-positive limit are ignored. Categories missing from
    spend_by_category count as zero spend.

    Args:
        budgets: Resolved category budgets, in display order
        spend_by_category: Spend per category id
        dismissed_category_names: Names the user has already dismissed
        threshold: Alert ratio in (0, 1]

    Returns:
        The alert to show, or None
    """
    limit_ratio = to_decimal(threshold)
    dismissed = set(dismissed_category_names)

    for budget in budgets:
        if budget.limit <= 0:
            logger.debug(
                f"Ignoring budget {budget.category_id} with limit {budget.limit}"
            )
            continue

        spent = to_decimal(spend_by_category.get(budget.category_id, Decimal("0")))
        ratio = spent / budget.limit

        if ratio >= limit_ratio and budget.category_name not in dismissed:
            return BudgetAlertState(
                category_name=budget.category_name,
                limit=budget.limit,
                spent=spent,
            )

    return None


def resolve_category_budgets(
    budget_limits: Mapping[str, Decimal],
    categories: Sequence[Category],
) -> list[CategoryBudget]:
    """
    Turn a {category_id: limit} budget record into named category budgets.

    Record order is kept. A category id with no matching category, or a
    non-positive limit, resolves to the name "Unknown".
    """
    by_id = {str(category.id): category for category in categories}

    budgets = []
    for category_id, limit in budget_limits.items():
        category = by_id.get(str(category_id))
        limit = to_decimal(limit)

        if category is None or limit <= 0:
            name = UNKNOWN_CATEGORY
        else:
            name = category.name

        budgets.append(
            CategoryBudget(
                category_id=str(category_id), category_name=name, limit=limit
            )
        )

    return budgets


def aggregate_spend_by_category(
    transactions: Iterable[Transaction],
    categories: Sequence[Category],
    period: tuple[int, int] | None = None,
) -> dict[str, Decimal]:
    """
    Sum debit transactions per category id.

    Transactions reference categories by name, so every category sharing a
    name receives that name's total. Categories without spend are omitted.

    Args:
        transactions: Transactions to aggregate
        categories: Known categories
        period: Optional (year, month) to restrict the sum to

    Returns:
        Mapping of category id to spend
    """
    totals_by_name: dict[str, Decimal] = {}
    for transaction in transactions:
        if transaction.type != "debit":
            continue
        if period and (transaction.date.year, transaction.date.month) != period:
            continue
        totals_by_name[transaction.category] = (
            totals_by_name.get(transaction.category, Decimal("0")) + transaction.amount
        )

    return {
        str(category.id): totals_by_name[category.name]
        for category in categories
        if category.name in totals_by_name
    }


def usage_percent(alert: BudgetAlertState) -> int:
    """Whole percent of the limit used, rounded half up and capped at 100."""
    if alert.limit <= 0:
        return 0
    percent = (alert.spent / alert.limit * 100).quantize(
        Decimal("1"), rounding=ROUND_HALF_UP
    )
    return min(100, int(percent))
