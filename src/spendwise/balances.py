"""Core balance logic for computing who owes whom inside a group."""

import logging
from collections.abc import Iterable, Sequence
from decimal import Decimal

from .models import SharedExpense, Settlement

logger = logging.getLogger(__name__)


def compute_balances(
    member_ids: Sequence[str],
    expenses: Iterable[SharedExpense],
) -> dict[str, Decimal]:
    """
    Compute each member's net balance from a group's shared expenses.

    Positive balances are owed to the member, negative balances are owed by
    the member. Every id in member_ids appears in the result even without
    activity; payers and participants outside member_ids get entries too.

    Steps:
    1. Start every listed member at zero
    2. For each expense, subtract an equal share from every participant
    3. Credit the full amount to the payer

    Each expense moves the sheet by exactly zero in total. Shares use true
    Decimal division and are never rounded here.

    Args:
        member_ids: Group member ids
        expenses: Shared expenses, in any order

    Returns:
        Mapping of member id to net balance
    """
    balances: dict[str, Decimal] = {
        member_id: Decimal("0") for member_id in member_ids
    }

    for expense in expenses:
        if not expense.participants:
            logger.debug(
                f"Skipping expense paid by {expense.payer} with no participants"
            )
            continue

        share = expense.amount / len(expense.participants)

        for participant in expense.participants:
            balances[participant] = balances.get(participant, Decimal("0")) - share

        balances[expense.payer] = (
            balances.get(expense.payer, Decimal("0")) + expense.amount
        )

    return balances


def is_settled(balance: Decimal, tolerance: Decimal | float = Decimal("1")) -> bool:
    """Check whether a balance is close enough to zero to count as settled."""
    return abs(balance) < Decimal(str(tolerance))


def plan_settlements(
    balances: dict[str, Decimal],
    tolerance: Decimal | float = Decimal("1"),
) -> list[Settlement]:
    """
    Suggest transfers that bring every balance back within tolerance.

    Greedy matching: the member who owes the most pays the member who is owed
    the most, then both move on once their remainder is settled. Members that
    start out settled are left alone. Ties keep balance-sheet order.

    Args:
        balances: Output of compute_balances
        tolerance: Absolute balance treated as settled

    Returns:
        Transfers in the order they should be made
    """
    limit = Decimal(str(tolerance))

    debtors = [
        [member_id, -amount]
        for member_id, amount in balances.items()
        if amount < 0 and not is_settled(amount, limit)
    ]
    creditors = [
        [member_id, amount]
        for member_id, amount in balances.items()
        if amount > 0 and not is_settled(amount, limit)
    ]

    debtors.sort(key=lambda entry: entry[1], reverse=True)
    creditors.sort(key=lambda entry: entry[1], reverse=True)

    settlements = []
    i = 0
    j = 0

    while i < len(debtors) and j < len(creditors):
        debtor = debtors[i]
        creditor = creditors[j]

        amount = min(debtor[1], creditor[1])
        settlements.append(
            Settlement(from_member=debtor[0], to_member=creditor[0], amount=amount)
        )

        debtor[1] -= amount
        creditor[1] -= amount

        if debtor[1] <= 0 or is_settled(debtor[1], limit):
            i += 1
        if creditor[1] <= 0 or is_settled(creditor[1], limit):
            j += 1

    logger.debug(f"Planned {len(settlements)} settlements for {len(balances)} members")

    return settlements
