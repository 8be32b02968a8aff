"""
Savings account endpoints
"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from .auth import get_current_user
from .schemas import AmountRequest
from ..accounts import SavingsAccount
from ..money import to_amount
from ..users import User


router = APIRouter()


@router.post("/deposit")
async def deposit(request: AmountRequest, user: User = Depends(get_current_user)):
    """Deposit into a savings account; non-positive amounts change nothing"""
    account = user.get_account_of_kind(request.account_number, SavingsAccount)
    account.deposit(to_amount(request.amount))
    return {"ok": True, "balance": str(account.balance)}


@router.post("/withdraw")
async def withdraw(request: AmountRequest, user: User = Depends(get_current_user)):
    """Withdraw from a savings account; 400 when funds are insufficient"""
    account = user.get_account_of_kind(request.account_number, SavingsAccount)
    ok = account.withdraw(to_amount(request.amount))
    body = {"ok": ok, "balance": str(account.balance)}
    if not ok:
        body["detail"] = "Insufficient funds"
        return JSONResponse(status_code=400, content=body)
    return body
