from fastapi import APIRouter
from splitbook.api.v1.endpoints import balances, expenses, groups

api_router = APIRouter()

api_router.include_router(groups.router, prefix="/groups", tags=["groups"])
api_router.include_router(expenses.router, prefix="/expenses", tags=["expenses"])
api_router.include_router(balances.router, prefix="/balances", tags=["balances"])
