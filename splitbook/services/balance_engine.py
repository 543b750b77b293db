"""
Balance reconciliation engine.

Folds expenses and settlements into per-member totals plus a pairwise
ledger, then projects that into per-member balance views.

Ledger representation:
- ledger[a][b] = amount a owes b, one cell per ordered pair a != b
- cells are signed: a settlement larger than the debt drives
  ledger[payer][receiver] below zero, which reads as receiver owing payer
- both directions of a pair can hold value at once; the projection nets
  them, so readers only ever see one direction per pair

Totals:
- totals[m] > 0: m is owed that much overall
- totals[m] < 0: m owes that much overall
- sum(totals.values()) == 0, every credit has an equal debit

Nothing here touches storage; each call builds fresh dicts.
"""

import logging
from decimal import Decimal
from typing import Dict, Iterable, List, NamedTuple, Sequence, Tuple

from splitbook.core.config import settings
from splitbook.models.expense import Expense
from splitbook.models.settlement import Settlement
from splitbook.models.user import MemberDetails
from splitbook.schemas.balance import BalanceView, CreditEdge, DebtEdge
from splitbook.utils.ledger_validation import check_splits, validate_members

logger = logging.getLogger(__name__)

ZERO = Decimal("0")

Totals = Dict[str, Decimal]
Ledger = Dict[str, Dict[str, Decimal]]


class LedgerState(NamedTuple):
    totals: Totals
    ledger: Ledger


def empty_state(member_ids: Sequence[str]) -> LedgerState:
    """All-zero totals and ledger for the given members."""
    totals = {m: ZERO for m in member_ids}
    ledger = {a: {b: ZERO for b in member_ids if b != a} for a in member_ids}
    return LedgerState(totals, ledger)


def _fold(
    member_ids: Sequence[str],
    expenses: Iterable[Expense],
    settlements: Iterable[Settlement],
) -> LedgerState:
    totals, ledger = empty_state(member_ids)

    for expense in expenses:
        payer = expense.paid_by_user_id
        for split in expense.splits:
            # Payer's own share and already settled shares are not outstanding
            if split.user_id == payer or split.settled:
                continue
            debtor = split.user_id
            totals[payer] += split.amount
            totals[debtor] -= split.amount
            ledger[debtor][payer] += split.amount

    for settlement in settlements:
        payer = settlement.paid_by_user_id
        receiver = settlement.received_by_user_id
        if payer == receiver:
            logger.debug("Ignoring self-settlement %s", settlement.id)
            continue
        totals[payer] += settlement.amount
        totals[receiver] -= settlement.amount
        # May go negative: the direction has flipped, see project()
        ledger[payer][receiver] -= settlement.amount

    return LedgerState(totals, ledger)


def accumulate(
    members: Iterable[str],
    expenses: Iterable[Expense],
    settlements: Iterable[Settlement],
    *,
    strict: bool | None = None,
    tolerance: Decimal | None = None,
) -> LedgerState:
    """
    Fold expenses and settlements into totals and a signed pairwise ledger.

    Input order does not matter. Raises UnknownMemberError if any record
    references someone outside `members`, before anything is folded.
    Malformed splits are logged and folded as given, or raised as
    MalformedSplitError when `strict` (default: STRICT_SPLIT_VALIDATION).
    """
    member_ids = list(dict.fromkeys(members))
    expenses = list(expenses)
    settlements = list(settlements)

    if strict is None:
        strict = settings.STRICT_SPLIT_VALIDATION
    if tolerance is None:
        tolerance = settings.SPLIT_TOLERANCE

    validate_members(set(member_ids), expenses, settlements)
    check_splits(expenses, tolerance, strict=strict)

    state = _fold(member_ids, expenses, settlements)
    logger.debug(
        "Accumulated %d expenses and %d settlements across %d members",
        len(expenses), len(settlements), len(member_ids),
    )
    return state


def net_owed(ledger: Ledger, debtor: str, creditor: str) -> Decimal:
    """How much `debtor` owes `creditor` after netting both directions."""
    forward = ledger.get(debtor, {}).get(creditor, ZERO)
    backward = ledger.get(creditor, {}).get(debtor, ZERO)
    return forward - backward


def canonical_ledger(state: LedgerState) -> Ledger:
    """Netted ledger: every cell >= 0, at most one direction per pair."""
    member_ids = list(state.ledger.keys())
    return {
        a: {b: max(net_owed(state.ledger, a, b), ZERO) for b in member_ids if b != a}
        for a in member_ids
    }


def project(members: Sequence[MemberDetails], state: LedgerState) -> List[BalanceView]:
    """
    Build one BalanceView per member, in member order.

    Each pair with a non-zero net lands in exactly one member's `owes`.
    The creditor's `owed_by` lists the debtor only while the debtor's own
    cell is still positive: the residual of an overpaid settlement shows
    only in the receiver's `owes`. Repeated member ids are projected
    once. Counterparties keep member-list order.
    """
    by_id: Dict[str, MemberDetails] = {}
    for m in members:
        by_id.setdefault(m.id, m)
    unique = list(by_id.values())
    ids = list(by_id)
    views = []
    for member in unique:
        owes = []
        owed_by = []
        for other in ids:
            if other == member.id:
                continue
            net = net_owed(state.ledger, member.id, other)
            if net > 0:
                owes.append(DebtEdge(to=other, amount=net))
            elif net < 0 and state.ledger.get(other, {}).get(member.id, ZERO) > 0:
                owed_by.append(CreditEdge(from_=other, amount=-net))

        views.append(BalanceView(
            id=member.id,
            name=member.name,
            image_url=member.image_url,
            role=member.role,
            total_balance=state.totals.get(member.id, ZERO),
            owes=owes,
            owed_by=owed_by,
        ))
    return views


def filter_direct_records(
    me: str,
    other: str,
    expenses: Iterable[Expense],
    settlements: Iterable[Settlement],
) -> Tuple[List[Expense], List[Settlement]]:
    """
    Select the direct (no group) records between two members.

    An expense qualifies when one of the two paid for it and the other
    holds an unsettled split. A settlement qualifies when it went between
    exactly these two, in either direction.
    """
    pair = {me, other}

    def holds_open_split(expense: Expense, user_id: str) -> bool:
        return any(s.user_id == user_id and not s.settled for s in expense.splits)

    direct_expenses = []
    for expense in expenses:
        if expense.group_id is not None or expense.paid_by_user_id not in pair:
            continue
        counterparty = other if expense.paid_by_user_id == me else me
        if holds_open_split(expense, counterparty):
            direct_expenses.append(expense)

    direct_settlements = [
        s for s in settlements
        if s.group_id is None
        and s.paid_by_user_id != s.received_by_user_id
        and {s.paid_by_user_id, s.received_by_user_id} == pair
    ]
    return direct_expenses, direct_settlements


def pairwise_balance(
    me: str,
    other: str,
    expenses: Iterable[Expense],
    settlements: Iterable[Settlement],
) -> Decimal:
    """
    Signed direct balance between two members.

    Positive: `other` owes `me`. Negative: `me` owes `other`. Uses the same
    fold as accumulate(), restricted to the pair, so the result matches a
    group computation over the same direct records.
    """
    if me == other:
        raise ValueError("Cannot compute a balance between a member and themself")

    direct_expenses, direct_settlements = filter_direct_records(
        me, other, expenses, settlements
    )
    check_splits(
        direct_expenses,
        settings.SPLIT_TOLERANCE,
        strict=settings.STRICT_SPLIT_VALIDATION,
    )

    # Third parties on a direct expense settle with the payer separately
    pair = {me, other}
    narrowed = [
        e.model_copy(update={"splits": [s for s in e.splits if s.user_id in pair]})
        for e in direct_expenses
    ]
    state = _fold([me, other], narrowed, direct_settlements)
    return state.totals[me]
