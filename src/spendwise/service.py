"""Service layer that composes snapshot data with the core calculations.

The core modules are pure; this layer resolves ids and names from the
snapshot and hands plain collections to them.
"""

import logging
from datetime import date
from decimal import Decimal

from .analytics import compute_insights, compute_weekly_summary
from .balances import compute_balances, plan_settlements
from .budgets import (
    aggregate_spend_by_category,
    find_alert_candidate,
    resolve_category_budgets,
    to_decimal,
)
from .categorizer import DEFAULT_RULES, KeywordCategorizer
from .config import Settings
from .models import (
    BudgetAlertState,
    BudgetUsage,
    CategoryBudget,
    Group,
    Settlement,
    SpendingInsights,
    WeeklySummary,
)
from .snapshot import Snapshot

logger = logging.getLogger(__name__)


class ExpenseService:
    """Service for answering balance, budget and analytics questions."""

    def __init__(self, settings: Settings, snapshot: Snapshot):
        """Initialize the service and auto-categorize if enabled."""
        self.settings = settings
        self.snapshot = snapshot
        self.categorizer = KeywordCategorizer(
            rules=DEFAULT_RULES, fallback=settings.fallback_category
        )

        if settings.auto_categorize:
            self.categorizer.categorize_transactions(
                snapshot.transactions, snapshot.categories
            )

    # ========================================================================
    # Groups
    # ========================================================================

    def get_group(self, group_id: str) -> Group:
        """Get a group from the snapshot."""
        return self.snapshot.group(group_id)

    def group_balances(self, group_id: str) -> dict[str, Decimal]:
        """Compute net balances for every member of a group."""
        group = self.get_group(group_id)
        expenses = self.snapshot.expenses_for_group(group_id)

        balances = compute_balances(group.member_ids, expenses)

        logger.info(
            f"Computed balances for group '{group.name}' from {len(expenses)} expenses"
        )
        return balances

    def settlement_plan(self, group_id: str) -> list[Settlement]:
        """Suggest transfers that settle a group."""
        return plan_settlements(
            self.group_balances(group_id), self.settings.settled_tolerance
        )

    # ========================================================================
    # Budgets
    # ========================================================================

    def category_budgets(self) -> list[CategoryBudget]:
        """Resolve the budget record into named budgets."""
        return resolve_category_budgets(
            self.snapshot.budgets.budgets, self.snapshot.categories
        )

    def spend_by_category(
        self, period: tuple[int, int] | None = None
    ) -> dict[str, Decimal]:
        """Debit spend per category id."""
        return aggregate_spend_by_category(
            self.snapshot.transactions, self.snapshot.categories, period
        )

    def budget_overview(self) -> list[BudgetUsage]:
        """Every budget with its spend, in record order."""
        spend = self.spend_by_category()
        return [
            BudgetUsage(
                budget=budget,
                spent=spend.get(budget.category_id, Decimal("0")),
            )
            for budget in self.category_budgets()
        ]

    def find_budget_alert(
        self,
        dismissed_category_names: set[str],
        threshold: Decimal | float | None = None,
    ) -> BudgetAlertState | None:
        """Find the budget alert to show given the dismissed names."""
        return find_alert_candidate(
            budgets=self.category_budgets(),
            spend_by_category=self.spend_by_category(),
            dismissed_category_names=dismissed_category_names,
            threshold=(
                threshold
                if threshold is not None
                else self.settings.budget_alert_threshold
            ),
        )

    # ========================================================================
    # Analytics
    # ========================================================================

    def insights(self, today: date) -> SpendingInsights:
        """Monthly spending insights."""
        return compute_insights(
            self.snapshot.transactions, today, self.settings.trend_months
        )

    def weekly_summary(self, today: date) -> WeeklySummary:
        """This week's spending against the pro-rated budget."""
        return compute_weekly_summary(
            self.snapshot.transactions, self.snapshot.budgets.budgets, today
        )

    def categorize(self, merchant: str) -> str:
        """Categorize a merchant against the snapshot's categories."""
        return self.categorizer.categorize(merchant, self.snapshot.categories)


class BudgetAlertSession:
    """
    Tracks dismissed budget alerts for the lifetime of one session.

    The dismissed set only grows. Dismissal is by category name, so a
    dismissed category stays quiet even if its spend drops and rises again.
    """

    def __init__(self, service: ExpenseService, threshold: float | None = None):
        """Initialize an empty session."""
        self.service = service
        self.threshold = to_decimal(
            threshold
            if threshold is not None
            else service.settings.budget_alert_threshold
        )
        self.dismissed: set[str] = set()

    def next_alert(self) -> BudgetAlertState | None:
        """Re-evaluate budgets against the current dismissed set."""
        return self.service.find_budget_alert(
            self.dismissed, threshold=self.threshold
        )

    def dismiss(self, alert: BudgetAlertState) -> None:
        """Suppress further alerts for the alert's category."""
        self.dismissed.add(alert.category_name)
        logger.info(f"Dismissed budget alert for {alert.category_name}")
