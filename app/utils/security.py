"""
Security utilities and authentication
"""

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
import threading
import time
from collections import defaultdict
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.db import get_db
from app.core.errors import Forbidden, InvalidCredentials
from app.core.roles import Role
from app.schemas.account import Actor
from app.services.auth_service import AuthService

# Simple in-memory rate limiter
rate_limiter = defaultdict(list)
_rate_lock = threading.Lock()

security = HTTPBearer(auto_error=False)

def get_current_actor(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    db: Session = Depends(get_db)
) -> Actor:
    """Resolve the bearer token to the acting account"""
    if credentials is None:
        raise InvalidCredentials("Not authenticated")
    account_id = AuthService.decode_access_token(credentials.credentials)
    if not account_id:
        raise InvalidCredentials("Invalid or expired token")
    return AuthService.resolve_actor(db, account_id)

def require_roles(*roles: Role):
    """Dependency factory restricting a route to some roles"""
    def dependency(actor: Actor = Depends(get_current_actor)) -> Actor:
        if actor.role not in roles:
            raise Forbidden()
        return actor
    return dependency

def rate_limit_check(client_ip: str, limit: int = None) -> bool:
    """Simple rate limiting by IP address"""
    if limit is None:
        limit = settings.RATE_LIMIT_PER_MINUTE

    current_time = time.time()
    minute_ago = current_time - 60

    with _rate_lock:
        # Clean old requests; idle clients are dropped entirely
        for ip in list(rate_limiter):
            recent = [req_time for req_time in rate_limiter[ip] if req_time > minute_ago]
            if recent:
                rate_limiter[ip] = recent
            else:
                del rate_limiter[ip]

        # Check limit
        if len(rate_limiter.get(client_ip, ())) >= limit:
            return False

        # Add current request
        rate_limiter[client_ip].append(current_time)
        return True

def get_client_ip(request) -> str:
    """Extract client IP from request"""
    # Check for forwarded IP first (for reverse proxy setups)
    forwarded_for = request.headers.get("X-Forwarded-For")
    if forwarded_for:
        return forwarded_for.split(",")[0].strip()

    # Check for real IP header
    real_ip = request.headers.get("X-Real-IP")
    if real_ip:
        return real_ip

    # Fall back to direct client IP
    return request.client.host if request.client else "unknown"
