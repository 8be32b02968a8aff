"""
Registration and login endpoints
"""

from fastapi import APIRouter, Depends, status

from .auth import create_access_token, get_bank, get_settings
from .schemas import LoginRequest, RegisterRequest
from ..bank import Bank
from ..config import LedgerConfig


router = APIRouter()


@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register(
    request: RegisterRequest,
    bank: Bank = Depends(get_bank)
):
    """Register a user and open their default savings account"""
    user, savings = bank.register(request.username, request.password, request.name)
    return {
        "ok": True,
        "username": user.username,
        "default_account": savings.account_number,
        "message": "registered"
    }


@router.post("/login")
async def login(
    request: LoginRequest,
    bank: Bank = Depends(get_bank),
    config: LedgerConfig = Depends(get_settings)
):
    """Authenticate and return a bearer token"""
    user = bank.authenticate(request.username, request.password)
    if config.auth_enabled:
        token = create_access_token(user.username, config)
    else:
        token = user.username
    return {
        "ok": True,
        "access_token": token,
        "token_type": "bearer",
        "name": user.name
    }
