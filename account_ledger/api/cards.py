"""
Card endpoints
"""

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import JSONResponse

from .auth import get_current_user
from .schemas import AmountRequest, IssueCardRequest
from ..cards import Card, CreditCard
from ..money import to_amount
from ..users import User


router = APIRouter()


@router.post("", status_code=status.HTTP_201_CREATED)
async def issue_card(request: IssueCardRequest, user: User = Depends(get_current_user)):
    """Issue a debit card against a savings account, or a credit card with a limit"""
    card_type = request.card_type.lower()
    if card_type == "debit":
        if not request.linked_account:
            raise HTTPException(status_code=400, detail="linked_account required for debit cards")
        card = user.issue_debit_card(request.linked_account)
    elif card_type == "credit":
        if request.limit is None:
            raise HTTPException(status_code=400, detail="limit required for credit cards")
        card = user.issue_credit_card(to_amount(request.limit))
    else:
        raise HTTPException(status_code=400, detail=f"Unknown card type: {request.card_type}")

    return {"ok": True, "account_number": card.account_number, "type": card.kind.value}


@router.post("/charge")
async def charge_card(request: AmountRequest, user: User = Depends(get_current_user)):
    """Charge a card; 400 when the backing store refuses"""
    card = user.get_account_of_kind(request.account_number, Card)
    ok = card.charge(to_amount(request.amount))
    if not ok:
        return JSONResponse(status_code=400, content={"ok": False, "detail": "Charge declined"})
    return {"ok": True, "account": card.summary()}


@router.post("/pay")
async def pay_card(request: AmountRequest, user: User = Depends(get_current_user)):
    """Pay a card: deposit for debit cards, debt reduction for credit cards"""
    card = user.get_account_of_kind(request.account_number, Card)
    card.pay(to_amount(request.amount))
    return {"ok": True, "account": card.summary()}


@router.get("/{account_number}/minimum-due")
async def minimum_due(account_number: str, user: User = Depends(get_current_user)):
    """Outstanding balance and minimum payment of a credit card"""
    card = user.get_account_of_kind(account_number, CreditCard)
    return {
        "ok": True,
        "outstanding": str(card.outstanding),
        "minimum_due": str(card.minimum_due())
    }
