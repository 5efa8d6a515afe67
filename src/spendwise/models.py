"""Pydantic domain models for spendwise."""

import datetime as dt
from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, Field

# ============================================================================
# Backend Row Models
# ============================================================================


class Transaction(BaseModel):
    """A personal transaction row."""

    id: int
    date: dt.date
    merchant: str = ""
    amount: Decimal = Field(ge=0)
    category: str = ""
    status: Literal["completed", "pending"] = "completed"
    type: Literal["credit", "debit"] = "debit"  # debit = spending, credit = income
    note: str | None = None
    group_id: str | None = None
    payment_method: str | None = None


class Category(BaseModel):
    """A user-defined spending category."""

    id: int
    name: str
    icon: str | None = None
    color: str | None = None


class GroupMember(BaseModel):
    """Display details for a group member."""

    uid: str
    display_name: str = ""


class Group(BaseModel):
    """A named collection of members sharing expenses."""

    id: str
    name: str
    owner_id: str
    member_ids: list[str] = Field(default_factory=list)
    members: list[GroupMember] = Field(default_factory=list)

    def display_name(self, member_id: str) -> str:
        """Get a member's display name, falling back to the raw id."""
        for member in self.members:
            if member.uid == member_id and member.display_name:
                return member.display_name
        return member_id


class GroupExpense(BaseModel):
    """A shared expense row as stored for a group."""

    id: str
    group_id: str
    title: str = ""
    amount: Decimal = Field(ge=0)
    paid_by: str
    split_between: list[str] = Field(default_factory=list)
    created_at: dt.datetime | None = None

    def to_shared_expense(self) -> "SharedExpense":
        """Convert the row into the balance engine's input shape."""
        return SharedExpense(
            amount=self.amount,
            payer=self.paid_by,
            participants=list(self.split_between),
        )


# ============================================================================
# Balance Models
# ============================================================================


class SharedExpense(BaseModel):
    """An expense paid by one member and split equally between participants.

    Non-negative amounts and a non-empty participant list are the loader's
    responsibility. The balance engine skips expenses with no participants.
    """

    amount: Decimal
    payer: str
    participants: list[str] = Field(default_factory=list)


class Settlement(BaseModel):
    """A suggested transfer that moves two balances towards zero."""

    from_member: str
    to_member: str
    amount: Decimal


# ============================================================================
# Budget Models
# ============================================================================


class CategoryBudget(BaseModel):
    """A monthly spending limit for one category."""

    category_id: str
    category_name: str
    limit: Decimal


class BudgetAlertState(BaseModel):
    """The single budget currently crossing the alert threshold."""

    category_name: str
    limit: Decimal
    spent: Decimal


class BudgetUsage(BaseModel):
    """A budget together with what has been spent against it."""

    budget: CategoryBudget
    spent: Decimal

    @property
    def ratio(self) -> Decimal | None:
        """Spend as a fraction of the limit, None for non-positive limits."""
        if self.budget.limit <= 0:
            return None
        return self.spent / self.budget.limit


# ============================================================================
# Analytics Models
# ============================================================================


class CategoryShare(BaseModel):
    """A category's whole-percent share of this month's spending."""

    name: str
    percent: int


class MonthlySpend(BaseModel):
    """Debit total for one calendar month."""

    year: int
    month: int
    amount: Decimal

    @property
    def label(self) -> str:
        """Short month label, e.g. 'Jan'."""
        return dt.date(self.year, self.month, 1).strftime("%b")


class SpendingInsights(BaseModel):
    """Month-over-month spending summary."""

    total_spent_this_month: Decimal
    total_spent_last_month: Decimal
    total_income_this_month: Decimal
    net_balance: Decimal
    spending_change: int  # percent vs last month
    top_category: str
    top_category_amount: Decimal
    avg_daily_spend: Decimal
    category_totals: dict[str, Decimal] = Field(default_factory=dict)
    distribution: list[CategoryShare] = Field(default_factory=list)
    trend: list[MonthlySpend] = Field(default_factory=list)


class DailySpend(BaseModel):
    """Debit total for one day."""

    day: dt.date
    amount: Decimal

    @property
    def label(self) -> str:
        """Short weekday label, e.g. 'Mon'."""
        return self.day.strftime("%a")


class WeeklySummary(BaseModel):
    """Short-range spending compared against the monthly budgets."""

    today_spend: Decimal
    daily: list[DailySpend]
    week_spend: Decimal
    weekly_budget: Decimal
    budget_difference: int  # percent over (+) or under (-) the weekly budget
    is_over_budget: bool
