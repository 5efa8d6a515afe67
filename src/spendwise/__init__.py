"""spendwise - Group balances, budget alerts and spending insights."""

__version__ = "0.1.0"

from .balances import compute_balances, is_settled, plan_settlements
from .budgets import (
    aggregate_spend_by_category,
    find_alert_candidate,
    resolve_category_budgets,
)
from .categorizer import KeywordCategorizer
from .config import Settings, load_settings
from .models import (
    BudgetAlertState,
    CategoryBudget,
    SharedExpense,
    Settlement,
)
from .service import BudgetAlertSession, ExpenseService
from .snapshot import Snapshot, load_snapshot

__all__ = [
    "Settings",
    "load_settings",
    "Snapshot",
    "load_snapshot",
    "BudgetAlertState",
    "CategoryBudget",
    "SharedExpense",
    "Settlement",
    "compute_balances",
    "is_settled",
    "plan_settlements",
    "aggregate_spend_by_category",
    "find_alert_candidate",
    "resolve_category_budgets",
    "KeywordCategorizer",
    "BudgetAlertSession",
    "ExpenseService",
]
