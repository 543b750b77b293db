from fastapi import APIRouter

from splitbook.schemas.balance import BalanceComputeRequest, BalanceComputeResponse
from splitbook.services.balance_engine import accumulate, canonical_ledger, project

router = APIRouter()

@router.post("/compute", response_model=BalanceComputeResponse)
async def compute_balances(payload: BalanceComputeRequest):
    """Reconcile posted records without touching storage"""
    state = accumulate(
        [m.id for m in payload.members],
        payload.expenses,
        payload.settlements,
        strict=payload.strict,
    )
    return BalanceComputeResponse(
        totals=state.totals,
        ledger=canonical_ledger(state),
        balances=project(payload.members, state),
    )
