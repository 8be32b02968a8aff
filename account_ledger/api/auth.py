"""
Authentication dependencies and token handling
"""

from datetime import datetime, timezone, timedelta
from typing import Optional
from fastapi import Depends, HTTPException, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
import jwt

from ..bank import Bank
from ..config import LedgerConfig
from ..exceptions import UserNotFoundError
from ..users import User


security = HTTPBearer(auto_error=False)


def get_bank(request: Request) -> Bank:
    """The Bank this app was created with"""
    return request.app.state.bank


def get_settings(request: Request) -> LedgerConfig:
    return request.app.state.config


def create_access_token(username: str, config: LedgerConfig) -> str:
    now = datetime.now(timezone.utc)
    payload = {
        "sub": username,
        "iat": now,
        "exp": now + timedelta(hours=config.jwt_expiry_hours),
    }
    return jwt.encode(payload, config.jwt_secret, algorithm=config.jwt_algorithm)


def _username_from_token(token: str, config: LedgerConfig) -> str:
    if not config.auth_enabled:
        # Token is the bare username, as issued when auth is disabled
        return token
    try:
        payload = jwt.decode(token, config.jwt_secret, algorithms=[config.jwt_algorithm])
    except jwt.ExpiredSignatureError:
        raise HTTPException(status_code=401, detail="Token expired")
    except jwt.InvalidTokenError:
        raise HTTPException(status_code=401, detail="Invalid token")

    username = payload.get("sub")
    if not username:
        raise HTTPException(status_code=401, detail="Invalid token")
    return username


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    bank: Bank = Depends(get_bank),
    config: LedgerConfig = Depends(get_settings)
) -> User:
    """Dependency that validates the bearer token and returns its user"""
    if not credentials:
        raise HTTPException(status_code=401, detail="Not authenticated")

    username = _username_from_token(credentials.credentials, config)
    try:
        return bank.get_user(username)
    except UserNotFoundError:
        raise HTTPException(status_code=401, detail="Not authenticated")
