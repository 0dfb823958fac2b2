"""
Authentication routes
"""

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from app.core.db import get_db
from app.schemas.account import Actor, LoginRequest, Token
from app.services.account_service import AccountService
from app.services.auth_service import AuthService
from app.utils.security import get_current_actor, rate_limit_check, get_client_ip
from app.utils.responses import success_response, error_response

router = APIRouter()

# Plain def: bcrypt runs in the threadpool, off the event loop
@router.post("/login")
def login(
    request: Request,
    credentials: LoginRequest,
    db: Session = Depends(get_db)
):
    """Exchange username and password for a bearer token"""
    # Rate limiting
    client_ip = get_client_ip(request)
    if not rate_limit_check(client_ip):
        return error_response(
            message="Too many login attempts. Please try again later.",
            error_code="rate_limited",
            status_code=429
        )

    account = AuthService.authenticate(db, credentials.username, credentials.password)
    token = Token(
        access_token=AuthService.create_access_token(account),
        user=account.to_public()
    )
    return success_response(message="Logged in", data=token)

@router.get("/me")
async def read_me(
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db)
):
    """Get current account information"""
    account = AccountService.get_account(db, actor.id)
    return success_response(message="Current account", data=account.to_public())
