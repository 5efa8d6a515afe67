"""Loading of backend JSON exports."""

import json
import logging
from decimal import Decimal
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

from .exceptions import GroupNotFoundError, SnapshotError
from .models import Category, Group, GroupExpense, SharedExpense, Transaction

logger = logging.getLogger(__name__)


class BudgetSettings(BaseModel):
    """The per-user budget record: monthly limit per category id."""

    budgets: dict[str, Decimal] = Field(default_factory=dict)


class Snapshot(BaseModel):
    """A point-in-time export of one user's rows."""

    user_id: str | None = None
    transactions: list[Transaction] = Field(default_factory=list)
    categories: list[Category] = Field(default_factory=list)
    budgets: BudgetSettings = Field(default_factory=BudgetSettings)
    groups: list[Group] = Field(default_factory=list)
    group_expenses: list[GroupExpense] = Field(default_factory=list)

    def group(self, group_id: str) -> Group:
        """Get a group by id."""
        for group in self.groups:
            if group.id == group_id:
                return group
        raise GroupNotFoundError(group_id)

    def expenses_for_group(self, group_id: str) -> list[SharedExpense]:
        """Get a group's shared expenses in file order."""
        return [
            expense.to_shared_expense()
            for expense in self.group_expenses
            if expense.group_id == group_id
        ]


def load_snapshot(path: Path) -> Snapshot:
    """
    Read and validate a snapshot file.

    Args:
        path: Path to the JSON export

    Returns:
        Validated snapshot

    Raises:
        SnapshotError: If the file is missing, not JSON, or has invalid rows
    """
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise SnapshotError(f"Could not read snapshot {path}: {e}") from e

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise SnapshotError(f"Snapshot {path} is not valid JSON: {e}") from e

    try:
        snapshot = Snapshot.model_validate(data)
    except ValidationError as e:
        raise SnapshotError(f"Snapshot {path} failed validation:\n{e}") from e

    logger.info(
        f"Loaded snapshot with {len(snapshot.transactions)} transactions, "
        f"{len(snapshot.categories)} categories, {len(snapshot.groups)} groups"
    )

    return snapshot
