"""
Pydantic schemas for API requests
"""

from typing import Optional
from pydantic import BaseModel, Field


class RegisterRequest(BaseModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)
    name: Optional[str] = None


class LoginRequest(BaseModel):
    username: str
    password: str


class AmountRequest(BaseModel):
    account_number: str
    amount: str = Field(..., description="Decimal amount as string")


class OpenFixedDepositRequest(BaseModel):
    principal: str = Field(..., description="Decimal amount as string")
    term_months: int = Field(..., gt=0)
    interest_rate: str = Field(..., description="Annual rate in percent, e.g. 5.5")


class ApplyLoanRequest(BaseModel):
    principal: str = Field(..., description="Decimal amount as string")
    interest_rate: str = Field(..., description="Annual rate in percent")
    term_months: int = Field(..., gt=0)


class IssueCardRequest(BaseModel):
    card_type: str = Field(..., description="Card type (debit, credit)")
    linked_account: Optional[str] = Field(None, description="Savings account number for debit cards")
    limit: Optional[str] = Field(None, description="Credit limit for credit cards")
