"""Integrity checks run on expense and settlement records before folding."""
import logging
from decimal import Decimal
from typing import Iterable, List, Set

from splitbook.models.expense import Expense
from splitbook.models.settlement import Settlement

logger = logging.getLogger(__name__)


class LedgerIntegrityError(Exception):
    """Input records cannot be reconciled as given."""
    pass


class UnknownMemberError(LedgerIntegrityError):
    """A record references someone outside the supplied member set."""

    def __init__(self, member_id: str, record_kind: str, record_id: str):
        self.member_id = member_id
        self.record_kind = record_kind
        self.record_id = record_id
        super().__init__(
            f"{record_kind} '{record_id}' references unknown member '{member_id}'"
        )


class MalformedSplitError(LedgerIntegrityError):
    """A split amount is negative or the splits do not add up to the expense."""

    def __init__(self, expense_id: str, reason: str):
        self.expense_id = expense_id
        self.reason = reason
        super().__init__(f"Expense '{expense_id}': {reason}")


def validate_members(
    members: Set[str],
    expenses: Iterable[Expense],
    settlements: Iterable[Settlement],
) -> None:
    """
    Reject the computation if any record names a member outside `members`.

    Settled and self-held splits are checked too: a bad reference is a data
    problem whether or not the split would have moved a balance.
    """
    for expense in expenses:
        if expense.paid_by_user_id not in members:
            raise UnknownMemberError(expense.paid_by_user_id, "Expense", expense.id)
        for split in expense.splits:
            if split.user_id not in members:
                raise UnknownMemberError(split.user_id, "Expense", expense.id)

    for settlement in settlements:
        for party in (settlement.paid_by_user_id, settlement.received_by_user_id):
            if party not in members:
                raise UnknownMemberError(party, "Settlement", settlement.id)


def find_split_problems(expense: Expense, tolerance: Decimal) -> List[str]:
    """
    Describe what is wrong with an expense's splits.

    Rules:
    - every split amount must be non-negative
    - splits must sum to the expense amount within `tolerance`
    """
    problems = []
    for split in expense.splits:
        if split.amount < 0:
            problems.append(
                f"split for '{split.user_id}' has negative amount {split.amount}"
            )

    if expense.splits:
        split_sum = expense.splits_total()
        if abs(split_sum - expense.amount) > tolerance:
            problems.append(
                f"split sum ({split_sum}) does not equal amount ({expense.amount})"
            )
    return problems


def check_splits(
    expenses: Iterable[Expense],
    tolerance: Decimal,
    strict: bool = False,
) -> None:
    """
    Apply the malformed split policy.

    Lenient (default): log a warning and let the caller fold the literal
    split amounts. Strict: raise MalformedSplitError on the first problem.
    """
    for expense in expenses:
        problems = find_split_problems(expense, tolerance)
        if not problems:
            continue
        reason = "; ".join(problems)
        if strict:
            raise MalformedSplitError(expense.id, reason)
        logger.warning(
            "Expense %s has malformed splits, using literal amounts: %s",
            expense.id, reason,
        )
