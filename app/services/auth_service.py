"""
Authentication: password hashing, credential checks and access tokens
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional, Protocol

import bcrypt
from jose import JWTError, jwt
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.errors import AccountDisabled, InvalidCredentials
from app.schemas.account import AccountRecord, Actor
from app.services.repositories import AccountRepo

logger = logging.getLogger(__name__)


class PasswordHasher(Protocol):
    def hash(self, password: str) -> str: ...

    def verify(self, password: str, hashed: str) -> bool: ...


class BcryptHasher:
    """One-way password hash using bcrypt directly"""

    def __init__(self, rounds: int = 12):
        self.rounds = rounds

    def hash(self, password: str) -> str:
        salt = bcrypt.gensalt(rounds=self.rounds)
        return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")

    def verify(self, password: str, hashed: str) -> bool:
        try:
            return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))
        except ValueError:
            # malformed stored hash or over-long password
            return False


class AuthService:
    """Service for authenticating accounts and issuing tokens"""

    hasher: PasswordHasher = BcryptHasher(rounds=settings.BCRYPT_ROUNDS)
    _dummy_hash: Optional[str] = None

    @classmethod
    def hash_password(cls, password: str) -> str:
        return cls.hasher.hash(password)

    @classmethod
    def verify_password(cls, password: str, hashed: str) -> bool:
        return cls.hasher.verify(password, hashed)

    @classmethod
    def _burn_verify(cls, password: str) -> None:
        """Spend the same hashing work when the username does not exist"""
        if cls._dummy_hash is None:
            cls._dummy_hash = cls.hasher.hash("not-a-real-password")
        cls.hasher.verify(password, cls._dummy_hash)

    @classmethod
    def authenticate(cls, db: Session, username: str, password: str) -> AccountRecord:
        """Resolve credentials to an account.

        Unknown usernames and wrong passwords raise the same InvalidCredentials
        so callers cannot probe which usernames exist.
        """
        account = AccountRepo.get_by_username(db, username)
        if account is None:
            cls._burn_verify(password)
            logger.warning("Failed login attempt")
            raise InvalidCredentials()
        if not cls.verify_password(password, account.password_hash):
            logger.warning("Failed login attempt")
            raise InvalidCredentials()
        if not account.is_active:
            logger.info(f"Login refused for disabled account {account.id}")
            raise AccountDisabled()
        logger.info(f"Account {account.id} logged in")
        return account

    @staticmethod
    def create_access_token(account: AccountRecord, expires_minutes: Optional[int] = None) -> str:
        minutes = expires_minutes if expires_minutes is not None else settings.ACCESS_TOKEN_EXPIRE_MINUTES
        expire = datetime.now(timezone.utc) + timedelta(minutes=minutes)
        payload = {"sub": account.id, "role": account.role.value, "exp": expire}
        return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.ALGORITHM)

    @staticmethod
    def decode_access_token(token: str) -> Optional[str]:
        """Return the account id carried by a token, or None if it is invalid or expired"""
        try:
            payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
        except JWTError:
            return None
        return payload.get("sub")

    @staticmethod
    def resolve_actor(db: Session, account_id: str) -> Actor:
        """Load the account behind a session and turn it into an Actor"""
        account = AccountRepo.get(db, account_id)
        if account is None:
            raise InvalidCredentials("Invalid authentication credentials")
        if not account.is_active:
            raise AccountDisabled()
        return Actor(id=account.id, role=account.role, name=account.name)
