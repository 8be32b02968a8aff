"""
Fixed deposit and loan endpoints
"""

from fastapi import APIRouter, Depends, status

from .auth import get_current_user
from .schemas import AmountRequest, ApplyLoanRequest, OpenFixedDepositRequest
from ..accounts import LoanAccount
from ..money import to_amount, to_rate
from ..users import User


fd_router = APIRouter()
loan_router = APIRouter()


@fd_router.post("", status_code=status.HTTP_201_CREATED)
async def open_fixed_deposit(
    request: OpenFixedDepositRequest,
    user: User = Depends(get_current_user)
):
    """Open a fixed deposit and report its maturity amount"""
    fd = user.open_fixed_deposit(
        to_amount(request.principal), request.term_months, to_rate(request.interest_rate)
    )
    return {
        "ok": True,
        "account_number": fd.account_number,
        "principal": str(fd.principal),
        "maturity_amount": str(fd.maturity_amount())
    }


@loan_router.post("", status_code=status.HTTP_201_CREATED)
async def apply_loan(
    request: ApplyLoanRequest,
    user: User = Depends(get_current_user)
):
    """Grant a loan"""
    loan = user.apply_loan(
        to_amount(request.principal), to_rate(request.interest_rate), request.term_months
    )
    return {
        "ok": True,
        "account_number": loan.account_number,
        "outstanding": str(loan.outstanding)
    }


@loan_router.post("/pay")
async def pay_loan(request: AmountRequest, user: User = Depends(get_current_user)):
    """Pay towards a loan; overpayment is capped at the outstanding amount"""
    loan = user.get_account_of_kind(request.account_number, LoanAccount)
    applied = loan.pay(to_amount(request.amount))
    return {
        "ok": True,
        "applied": str(applied),
        "outstanding": str(loan.outstanding)
    }
