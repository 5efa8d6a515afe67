"""Tests for group balance computation and settlement planning."""

from decimal import Decimal

import pytest

from spendwise.balances import compute_balances, is_settled, plan_settlements
from spendwise.models import SharedExpense


def make_expense(amount, payer: str, participants: list[str]) -> SharedExpense:
    """Create a SharedExpense for testing."""
    return SharedExpense(
        amount=Decimal(str(amount)), payer=payer, participants=participants
    )


class TestComputeBalances:
    """Test net balance computation."""

    def test_three_way_split(self):
        """Payer covers a dinner for three, including themselves."""
        balances = compute_balances(
            ["A", "B", "C"], [make_expense(90, "A", ["A", "B", "C"])]
        )

        assert balances == {
            "A": Decimal("60"),
            "B": Decimal("-30"),
            "C": Decimal("-30"),
        }
        assert sum(balances.values()) == 0

    def test_members_without_expenses_are_zero(self):
        """Every member appears even when there is no activity."""
        balances = compute_balances(["A", "B", "C"], [])

        assert balances == {"A": Decimal("0"), "B": Decimal("0"), "C": Decimal("0")}

    def test_no_members_no_expenses(self):
        """Empty input yields an empty sheet."""
        assert compute_balances([], []) == {}

    def test_empty_participants_is_skipped(self):
        """An expense with nobody to split between leaves balances untouched."""
        balances = compute_balances(
            ["A", "B"],
            [
                make_expense(50, "A", []),
                make_expense(20, "B", ["A", "B"]),
            ],
        )

        assert balances == {"A": Decimal("-10"), "B": Decimal("10")}

    def test_self_payer_nets_n_minus_one_shares(self):
        """Payer in the split keeps A(n-1)/n, everyone else owes A/n."""
        balances = compute_balances(
            ["A", "B", "C", "D"], [make_expense(100, "A", ["A", "B", "C", "D"])]
        )

        assert balances["A"] == Decimal("75")
        for member in ("B", "C", "D"):
            assert balances[member] == Decimal("-25")

    def test_payer_outside_split(self):
        """A payer who is not a participant is credited the full amount."""
        balances = compute_balances(
            ["A", "B", "C"], [make_expense(40, "A", ["B", "C"])]
        )

        assert balances == {
            "A": Decimal("40"),
            "B": Decimal("-20"),
            "C": Decimal("-20"),
        }

    def test_payer_not_in_member_list_gets_entry(self):
        """Ids outside member_ids are created on first touch."""
        balances = compute_balances(["A"], [make_expense(30, "Z", ["A", "Y"])])

        assert balances == {
            "A": Decimal("-15"),
            "Z": Decimal("30"),
            "Y": Decimal("-15"),
        }

    def test_uneven_division_is_zero_sum(self):
        """Shares that don't divide evenly still sum to zero within tolerance."""
        balances = compute_balances(
            ["A", "B", "C"], [make_expense(100, "B", ["A", "B", "C"])]
        )

        assert abs(sum(balances.values())) < Decimal("1e-20")
        assert balances["A"] == balances["C"]
        assert balances["A"] < 0

    def test_shares_are_not_rounded(self):
        """Shares keep full precision; rounding is left to the display."""
        balances = compute_balances(
            ["A", "B", "C"], [make_expense(10, "A", ["A", "B", "C"])]
        )

        assert balances["B"] != Decimal("-3.33")
        assert balances["B"].quantize(Decimal("0.01")) == Decimal("-3.33")

    def test_order_does_not_matter(self):
        """Processing order does not change the result."""
        expenses = [
            make_expense(90, "A", ["A", "B", "C"]),
            make_expense(45, "B", ["A", "B"]),
            make_expense(12, "C", ["C"]),
            make_expense(7.5, "A", ["B", "C"]),
        ]

        forward = compute_balances(["A", "B", "C"], expenses)
        backward = compute_balances(["A", "B", "C"], list(reversed(expenses)))

        assert forward == backward

    def test_every_expense_is_zero_sum(self):
        """Adding any single expense moves the sheet's total by zero."""
        expenses = [
            make_expense(90, "A", ["A", "B", "C"]),
            make_expense(33.33, "C", ["A", "B"]),
            make_expense(19.99, "B", ["A", "B", "C"]),
        ]

        for expense in expenses:
            balances = compute_balances(["A", "B", "C"], [expense])
            assert abs(sum(balances.values())) < Decimal("1e-20")

    def test_negative_amount_is_not_validated(self):
        """Negative amounts are the caller's problem; arithmetic still runs."""
        balances = compute_balances(["A", "B"], [make_expense(-20, "A", ["A", "B"])])

        assert balances == {"A": Decimal("-10"), "B": Decimal("10")}


class TestIsSettled:
    """Test the settled classification."""

    @pytest.mark.parametrize(
        "balance,tolerance,expected",
        [
            (Decimal("0"), 1, True),
            (Decimal("0.99"), 1, True),
            (Decimal("-0.99"), 1, True),
            (Decimal("1"), 1, False),
            (Decimal("-1.5"), 1, False),
            (Decimal("0.005"), 0.01, True),
            (Decimal("0.01"), 0.01, False),
        ],
    )
    def test_threshold(self, balance, tolerance, expected):
        """Settled means strictly below the tolerance in absolute value."""
        assert is_settled(balance, tolerance) is expected


class TestPlanSettlements:
    """Test greedy settlement planning."""

    def test_two_debtors_one_creditor(self):
        """Both debtors pay the single creditor, in sheet order."""
        settlements = plan_settlements(
            {"A": Decimal("60"), "B": Decimal("-30"), "C": Decimal("-30")}
        )

        assert [(s.from_member, s.to_member, s.amount) for s in settlements] == [
            ("B", "A", Decimal("30")),
            ("C", "A", Decimal("30")),
        ]

    def test_largest_debtor_pays_largest_creditor_first(self):
        """Greedy matching starts from the biggest balances."""
        settlements = plan_settlements(
            {
                "A": Decimal("10"),
                "B": Decimal("50"),
                "C": Decimal("-45"),
                "D": Decimal("-15"),
            }
        )

        assert (settlements[0].from_member, settlements[0].to_member) == ("C", "B")
        assert settlements[0].amount == Decimal("45")
        assert sum(s.amount for s in settlements) == Decimal("60")

    def test_settled_members_are_skipped(self):
        """Balances within tolerance generate no transfers."""
        settlements = plan_settlements(
            {"A": Decimal("0.5"), "B": Decimal("-0.5")}, tolerance=1
        )

        assert settlements == []

    def test_zero_tolerance_terminates(self):
        """Exact matching still advances past fully paid members."""
        settlements = plan_settlements(
            {"A": Decimal("10"), "B": Decimal("-10")}, tolerance=0
        )

        assert len(settlements) == 1
        assert settlements[0].amount == Decimal("10")

    def test_plan_clears_computed_balances(self):
        """Applying the plan brings every balance within tolerance."""
        balances = compute_balances(
            ["A", "B", "C", "D"],
            [
                make_expense(120, "A", ["A", "B", "C", "D"]),
                make_expense(60, "B", ["B", "C"]),
                make_expense(25, "D", ["A", "D"]),
            ],
        )

        remaining = dict(balances)
        for settlement in plan_settlements(balances, tolerance=Decimal("0.01")):
            remaining[settlement.from_member] += settlement.amount
            remaining[settlement.to_member] -= settlement.amount

        assert all(
            is_settled(amount, Decimal("0.01")) for amount in remaining.values()
        )
