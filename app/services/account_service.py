"""
Account creation, listing and activation
"""

import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.errors import Forbidden, InvalidQuota, NotFound, ValidationError
from app.core.roles import Role
from app.schemas.account import AccountCreate, AccountRecord, Actor
from app.services.auth_service import AuthService
from app.services.authorizer import Authorizer
from app.services.repositories import AccountRepo

logger = logging.getLogger(__name__)

MIN_USERNAME_LENGTH = 3
MIN_PASSWORD_LENGTH = 6
# bcrypt only accepts up to 72 bytes of input
MAX_PASSWORD_BYTES = 72


class AccountService:
    """Service for managing accounts down the role hierarchy"""

    @staticmethod
    def validate_quota(quota: int) -> int:
        if quota is None or quota < settings.MIN_EVENT_QUOTA or quota > settings.MAX_EVENT_QUOTA:
            raise InvalidQuota(
                f"Event quota must be between {settings.MIN_EVENT_QUOTA} and {settings.MAX_EVENT_QUOTA}"
            )
        return quota

    @staticmethod
    def validate_fields(payload: AccountCreate) -> List[str]:
        errors = []
        if not payload.name or not payload.name.strip():
            errors.append("Name is required")
        if not payload.username or len(payload.username) < MIN_USERNAME_LENGTH:
            errors.append(f"Username must be at least {MIN_USERNAME_LENGTH} characters")
        if not payload.password or len(payload.password) < MIN_PASSWORD_LENGTH:
            errors.append(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
        elif len(payload.password.encode("utf-8")) > MAX_PASSWORD_BYTES:
            errors.append(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
        return errors

    @staticmethod
    def create_account(db: Session, actor: Actor, payload: AccountCreate) -> AccountRecord:
        """Create an account one level below the actor; the actor becomes its creator"""
        Authorizer.require_create(actor, payload.role)

        errors = AccountService.validate_fields(payload)
        if errors:
            raise ValidationError("Invalid account data", details=errors)

        quota = settings.DEFAULT_EVENT_QUOTA
        if payload.role == Role.EVENT_MANAGER and payload.event_quota is not None:
            quota = AccountService.validate_quota(payload.event_quota)

        account = AccountRepo.create(
            db,
            username=payload.username,
            name=payload.name.strip(),
            password_hash=AuthService.hash_password(payload.password),
            role=payload.role,
            created_by_id=actor.id,
            event_quota=quota,
        )
        logger.info(f"Account {account.id} ({account.role.value}) created by {actor.id}")
        return account

    @staticmethod
    def list_accounts(db: Session, actor: Actor, role: Role) -> List[AccountRecord]:
        """Accounts of one role visible to the actor"""
        if not Authorizer.can_list(actor, role):
            raise Forbidden()
        if actor.role == Role.EVENT_MANAGER:
            return AccountRepo.list_by_creator(db, actor.id, role=role)
        return AccountRepo.list_by_role(db, role)

    @staticmethod
    def set_active(db: Session, actor: Actor, account_id: str, is_active: bool) -> AccountRecord:
        target = AccountRepo.get(db, account_id)
        if target is None:
            raise NotFound("Account")
        Authorizer.require_manage(db, actor, target)
        updated = AccountRepo.update(db, account_id, is_active=is_active)
        logger.info(f"Account {account_id} {'activated' if is_active else 'deactivated'} by {actor.id}")
        return updated

    @staticmethod
    def get_account(db: Session, account_id: str) -> AccountRecord:
        account = AccountRepo.get(db, account_id)
        if account is None:
            raise NotFound("Account")
        return account

    @staticmethod
    def ensure_root(db: Session, username: Optional[str], password: Optional[str], name: str) -> Optional[AccountRecord]:
        """Create the root super admin on an empty system"""
        if AccountRepo.count_by_role(db, Role.SUPER_ADMIN) > 0:
            return None
        if not username or not password:
            logger.warning("No super admin exists and ROOT_USERNAME/ROOT_PASSWORD are not set")
            return None
        if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValidationError(f"ROOT_PASSWORD must be at most {MAX_PASSWORD_BYTES} bytes")
        root = AccountRepo.create(
            db,
            username=username,
            name=name,
            password_hash=AuthService.hash_password(password),
            role=Role.SUPER_ADMIN,
            created_by_id=None,
            event_quota=settings.DEFAULT_EVENT_QUOTA,
        )
        logger.info(f"Root super admin {root.username} created")
        return root
