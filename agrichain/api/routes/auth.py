import logging
from collections import defaultdict
from datetime import datetime, timedelta, timezone

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy import func, or_, select
from sqlalchemy.orm import Session

from agrichain.api.deps import get_current_account
from agrichain.core.config import settings
from agrichain.core.security import create_access_token, verify_password
from agrichain.db.database import get_db
from agrichain.models.account import Account
from agrichain.schemas.auth import LoginRequest, TokenResponse
from agrichain.schemas.master import AccountOut

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Authentication"])


class SlidingWindowLimiter:
    def __init__(self) -> None:
        self._attempts: dict[str, list[datetime]] = defaultdict(list)

    def check(self, key: str) -> bool:
        now = datetime.now(timezone.utc)
        window_start = now - timedelta(seconds=settings.login_rate_limit_window_seconds)
        self._attempts[key] = [dt for dt in self._attempts[key] if dt >= window_start]
        return len(self._attempts[key]) >= settings.login_rate_limit_max_attempts

    def hit(self, key: str) -> None:
        self._attempts[key].append(datetime.now(timezone.utc))

    def clear(self, key: str) -> None:
        self._attempts.pop(key, None)


login_rate_limiter = SlidingWindowLimiter()


def get_client_ip(request: Request) -> str | None:
    forwarded_for = request.headers.get("x-forwarded-for")
    if forwarded_for:
        return forwarded_for.split(",")[0].strip()
    if request.client:
        return request.client.host
    return None


def authenticate_account(db: Session, identity: str, password: str, request: Request) -> Account:
    ip = get_client_ip(request) or "unknown"
    rate_key = f"{ip}:{identity.lower()}"
    if login_rate_limiter.check(rate_key):
        logger.warning("Login rate limit hit for %s", rate_key)
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail="Too many login attempts, try again later",
        )

    account = db.scalar(
        select(Account).where(
            or_(
                func.lower(Account.username) == identity.lower(),
                func.lower(Account.email) == identity.lower(),
            )
        )
    )
    if not account or not verify_password(password, account.password_hash):
        login_rate_limiter.hit(rate_key)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )
    if not account.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Account is disabled",
        )

    login_rate_limiter.clear(rate_key)
    logger.info("Account %s (%s) signed in", account.id, account.role.value)
    return account


def _token_response(account: Account) -> TokenResponse:
    return TokenResponse(
        access_token=create_access_token(subject=str(account.id), role=account.role.value),
        expires_in=settings.access_token_expire_minutes * 60,
        role=account.role,
        account_id=account.id,
    )


@router.post("/login", response_model=TokenResponse)
def login(payload: LoginRequest, request: Request, db: Session = Depends(get_db)):
    account = authenticate_account(db, payload.identity, payload.password, request)
    return _token_response(account)


@router.post("/token", response_model=TokenResponse)
def login_for_access_token(
    request: Request,
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: Session = Depends(get_db),
):
    account = authenticate_account(db, form_data.username, form_data.password, request)
    return _token_response(account)


@router.get("/me", response_model=AccountOut)
def get_me(current_account: Account = Depends(get_current_account)):
    return current_account
