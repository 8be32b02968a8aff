"""
Account listing and history endpoints
"""

from fastapi import APIRouter, Depends

from .auth import get_current_user
from ..users import User


router = APIRouter()


@router.get("")
async def list_accounts(user: User = Depends(get_current_user)):
    """Summaries of the caller's accounts in opening order"""
    return {
        "ok": True,
        "accounts": [account.summary() for account in user.accounts]
    }


@router.get("/{account_number}")
async def get_account(account_number: str, user: User = Depends(get_current_user)):
    """Summary of one account"""
    account = user.get_account(account_number)
    return {"ok": True, "account": account.summary()}


@router.get("/{account_number}/transactions")
async def get_account_transactions(account_number: str, user: User = Depends(get_current_user)):
    """Transaction history, oldest first"""
    account = user.get_account(account_number)
    return {
        "ok": True,
        "account_number": account.account_number,
        "transactions": [txn.to_dict() for txn in account.transactions()]
    }
