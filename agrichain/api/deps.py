from fastapi import Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError
from sqlalchemy import select
from sqlalchemy.orm import Session

from agrichain.core.security import decode_token
from agrichain.db.database import get_db
from agrichain.models.account import Account
from agrichain.services.scope import AccessScope, for_caller

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/token", auto_error=False)


def _clean_candidate(value: str | None) -> str | None:
    if not value:
        return None
    cleaned = value.strip().strip("\"'").strip()
    # Normalize accidental duplicated prefixes like: "Bearer Bearer <jwt>"
    while cleaned.lower().startswith("bearer "):
        cleaned = cleaned[7:].strip().strip("\"'").strip()
    return cleaned or None


def get_current_account(
    request: Request,
    token: str | None = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
) -> Account:
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Invalid authentication credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    raw_token = _clean_candidate(token) or _clean_candidate(request.headers.get("x-access-token"))
    if not raw_token:
        raise credentials_exception

    try:
        payload = decode_token(raw_token)
    except JWTError:
        raise credentials_exception
    if payload.get("type") != "access" or payload.get("sub") is None:
        raise credentials_exception
    try:
        account_id = int(payload["sub"])
    except (TypeError, ValueError):
        raise credentials_exception

    account = db.scalar(select(Account).where(Account.id == account_id))
    if not account:
        raise credentials_exception
    if not account.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Account is disabled",
        )
    return account


def get_scope(current_account: Account = Depends(get_current_account)) -> AccessScope:
    return for_caller(current_account.role, current_account.id)
