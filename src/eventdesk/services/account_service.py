"""
Account Service

Owns the account collection and the single current-user session:
registration, authentication, logout, profile and password changes, and the
role-gated administrative queries.

Every administrative operation checks the current session's role immediately
before acting; the role is never cached between calls.
"""

import hmac
import json
import logging
from datetime import datetime, timedelta
from typing import Any, List, Mapping, Optional, Union

from pydantic import BaseModel, ValidationError

from eventdesk.core.config import Settings, get_settings
from eventdesk.core.exceptions import (
    AuthenticationException,
    AuthorizationException,
    DuplicateException,
    PersistenceException,
    ValidationException,
)
from eventdesk.core.validators import (
    is_blank,
    is_valid_email,
    is_valid_phone,
    is_valid_username,
    missing_fields,
)
from eventdesk.db.seed import default_accounts
from eventdesk.integrations.persistence import PersistenceAdapter
from eventdesk.models.enums import Role
from eventdesk.repositories.account_repository import AccountRepository
from eventdesk.repositories.base import coerce_id
from eventdesk.schemas.account import (
    Account,
    AccountPublic,
    ActivityReport,
    RegisterRequest,
    SessionUser,
    UpdateProfileRequest,
    UserStats,
)
from eventdesk.schemas.common import as_utc, parse_model, utcnow

logger = logging.getLogger("ACCOUNT_SERVICE")

REGISTER_REQUIRED_FIELDS = ("username", "password", "email", "full_name")


def _secret_equals(left: str, right: str) -> bool:
    return hmac.compare_digest(left.encode("utf-8"), right.encode("utf-8"))


class AccountStore:
    """
    Account collection plus the current-user session pointer.

    Example:
        accounts = AccountStore(InMemoryPersistenceAdapter())
        session = accounts.authenticate("admin", "password")
        if session is None:
            ...  # wrong credentials
        users = accounts.get_all_users()
    """

    def __init__(
        self,
        adapter: PersistenceAdapter,
        settings: Optional[Settings] = None,
    ):
        """
        Load accounts and the persisted session.

        Seeds the default accounts when the adapter has never held an
        account collection.

        Args:
            adapter: Persistence adapter for accounts and the session
            settings: Application settings (defaults to get_settings())
        """
        self.settings = settings or get_settings()
        self.adapter = adapter
        self.users = AccountRepository(adapter, self.settings.users_collection)
        if not self.users.storage_initialized:
            self.users.seed(default_accounts(self.settings))
        self._session: Optional[SessionUser] = self._load_session()

    # ========================================================================
    # Session persistence
    # ========================================================================

    def _load_session(self) -> Optional[SessionUser]:
        try:
            blob = self.adapter.read(self.settings.session_collection)
            if blob is None:
                return None
            session = SessionUser.model_validate(json.loads(blob))
        except (PersistenceException, ValueError, ValidationError) as e:
            logger.error(f"Error loading current user: {e}")
            return None

        account = self.users.get(session.id)
        if account is None or not account.is_active or account.username != session.username:
            logger.info(f"Discarding stale session for {session.username}")
            self._clear_persisted_session()
            return None
        return SessionUser.from_account(account, login_time=session.login_time)

    def _save_session(self, session: SessionUser) -> None:
        self._session = session
        try:
            self.adapter.write(self.settings.session_collection, json.dumps(session.to_record()))
        except PersistenceException as e:
            logger.error(f"Error saving current user: {e.message}")

    def _clear_persisted_session(self) -> None:
        try:
            self.adapter.remove(self.settings.session_collection)
        except PersistenceException as e:
            logger.error(f"Error clearing current user: {e.message}")

    # ========================================================================
    # Authentication
    # ========================================================================

    def _credentials_match(self, account: Account, username: str, password: str) -> bool:
        # Every check runs for every account so the failure causes look alike
        username_ok = _secret_equals(account.username.lower(), username)
        password_ok = _secret_equals(account.password, password)
        return username_ok & password_ok & account.is_active

    def authenticate(self, username: str, password: str) -> Optional[SessionUser]:
        """
        Log in with username (any case) and password.

        Returns:
            The new SessionUser, or None when the credentials do not match an
            active account

        Raises:
            ValidationException: If username or password is empty
        """
        if is_blank(username) or is_blank(password):
            raise ValidationException("Username and password are required")

        key = username.strip().lower()
        matches = [
            account for account in self.users.get_all()
            if self._credentials_match(account, key, password)
        ]
        if not matches:
            logger.warning(f"Authentication failed for username '{key}'")
            return None

        now = utcnow()
        account = self.users.update_fields(matches[0].id, last_login=now)
        session = SessionUser.from_account(account, login_time=now)
        self._save_session(session)
        logger.info(f"User logged in: {account.username}")
        return session.model_copy()

    def register(self, data: Union[Mapping[str, Any], BaseModel]) -> AccountPublic:
        """
        Register a new regular account.

        Args:
            data: username, password, email, full_name and optional phone

        Returns:
            The created account without its password

        Raises:
            ValidationException: If a field is missing or malformed
            DuplicateException: If the username or email is already registered
        """
        request = parse_model(RegisterRequest, data)
        fields = request.model_dump()

        missing = missing_fields(fields, REGISTER_REQUIRED_FIELDS)
        if missing:
            raise ValidationException(
                "Username, password, email, and full name are required",
                {"fields": missing},
            )

        username = request.username.strip()
        email = request.email.strip().lower()
        phone = request.phone.strip() if not is_blank(request.phone) else None

        if len(username) < self.settings.username_min_length:
            raise ValidationException(
                f"Username must be at least {self.settings.username_min_length} characters long",
                {"field": "username"},
            )
        if not is_valid_username(username):
            raise ValidationException(
                "Username can only contain letters, numbers, and underscores",
                {"field": "username"},
            )
        if not is_valid_email(email):
            raise ValidationException("Please enter a valid email address", {"field": "email"})
        if len(request.password) < self.settings.password_min_length:
            raise ValidationException(
                f"Password must be at least {self.settings.password_min_length} characters long",
                {"field": "password"},
            )
        if phone is not None and not is_valid_phone(phone):
            raise ValidationException("Please enter a valid phone number", {"field": "phone"})

        if self.users.username_taken(username):
            raise DuplicateException("Account", "username", username)
        if self.users.email_taken(email):
            raise DuplicateException("Account", "email", email)

        account = Account(
            id=self.users.next_id(),
            username=username,
            password=request.password,
            email=email,
            full_name=request.full_name.strip(),
            phone=phone,
            role=Role.USER,
            is_active=True,
            created_at=utcnow(),
            last_login=None,
        )
        self.users.add(account)
        logger.info(f"User registered: {username}")
        return AccountPublic.from_account(account)

    def logout(self) -> None:
        """Clear the current session; a no-op when nobody is logged in."""
        if self._session is not None:
            logger.info(f"User logged out: {self._session.username}")
        self._session = None
        self._clear_persisted_session()

    # ========================================================================
    # Session predicates
    # ========================================================================

    def current_user(self) -> Optional[SessionUser]:
        return self._session.model_copy() if self._session is not None else None

    def is_authenticated(self) -> bool:
        return self._session is not None

    def has_role(self, role: Union[Role, str]) -> bool:
        return self._session is not None and self._session.role == role

    def is_admin(self) -> bool:
        return self.has_role(Role.ADMIN)

    def validate_session(self) -> bool:
        """Whether a session is present. Sessions never expire."""
        return self._session is not None

    def require_admin(self) -> SessionUser:
        """
        Current session, checked for the admin role.

        Raises:
            AuthorizationException: If nobody or a non-admin is logged in
        """
        if not self.is_admin():
            raise AuthorizationException()
        return self._session

    def _require_session(self) -> SessionUser:
        if self._session is None:
            raise AuthenticationException("User not authenticated")
        return self._session

    # ========================================================================
    # Lookups
    # ========================================================================

    def get_all_users(self) -> List[AccountPublic]:
        """Every account without passwords. Admin only."""
        self.require_admin()
        return [AccountPublic.from_account(account) for account in self.users.get_all()]

    def get_user_by_username(self, username: str) -> Optional[AccountPublic]:
        """Account with username (any case), or None. Admin only."""
        self.require_admin()
        account = self.users.get_by_username(username)
        return AccountPublic.from_account(account) if account is not None else None

    def get_user_profile(self, id: Any) -> Optional[AccountPublic]:
        """
        Profile of the current user, or of any account for an admin.

        Raises:
            AuthenticationException: If nobody is logged in
            AuthorizationException: If a non-admin asks for another account
        """
        session = self._require_session()
        if coerce_id(id) != session.id:
            self.require_admin()
        account = self.users.get(id)
        return AccountPublic.from_account(account) if account is not None else None

    def search_users(self, term: str) -> List[AccountPublic]:
        """Accounts whose username, full name, email or phone contains term. Admin only."""
        self.require_admin()
        needle = (term or "").lower()

        def matches(account: Account) -> bool:
            return (
                needle in account.username.lower()
                or needle in account.full_name.lower()
                or needle in account.email.lower()
                or (account.phone is not None and needle in account.phone)
            )

        return [AccountPublic.from_account(account) for account in self.users.filter(matches)]

    # ========================================================================
    # Mutations
    # ========================================================================

    def update_profile(self, id: Any, patch: Union[Mapping[str, Any], BaseModel]) -> Optional[AccountPublic]:
        """
        Update full_name, email and/or phone; other keys are ignored.

        Returns:
            The updated account without password, or None if not found

        Raises:
            ValidationException: If a supplied value is blank or malformed
            DuplicateException: If the new email belongs to another account
        """
        account = self.users.get(id)
        if account is None:
            logger.warning(f"User {id} not found for profile update")
            return None

        changes = parse_model(UpdateProfileRequest, patch).model_dump(exclude_unset=True)

        if "full_name" in changes:
            if is_blank(changes["full_name"]):
                raise ValidationException("Full name cannot be empty", {"field": "full_name"})
            changes["full_name"] = changes["full_name"].strip()

        if "email" in changes:
            if is_blank(changes["email"]):
                raise ValidationException("Please enter a valid email address", {"field": "email"})
            email = changes["email"].strip().lower()
            if not is_valid_email(email):
                raise ValidationException("Please enter a valid email address", {"field": "email"})
            if self.users.email_taken(email, exclude_id=account.id):
                raise DuplicateException("Account", "email", email)
            changes["email"] = email

        if "phone" in changes:
            phone = changes["phone"]
            if is_blank(phone):
                changes["phone"] = None
            else:
                phone = phone.strip()
                if not is_valid_phone(phone):
                    raise ValidationException("Please enter a valid phone number", {"field": "phone"})
                changes["phone"] = phone

        updated = self.users.update_fields(account.id, updated_at=utcnow(), **changes)

        if self._session is not None and self._session.id == updated.id:
            self._save_session(SessionUser.from_account(updated, login_time=self._session.login_time))

        logger.info(f"Profile updated: {updated.username}")
        return AccountPublic.from_account(updated)

    def change_password(self, current_password: str, new_password: str) -> bool:
        """
        Change the current user's password and persist it.

        Returns:
            True when changed, False if the session's account no longer exists

        Raises:
            AuthenticationException: If nobody is logged in or current_password is wrong
            ValidationException: If new_password is too short
        """
        session = self._require_session()
        account = self.users.get(session.id)
        if account is None:
            return False

        if not _secret_equals(account.password, current_password or ""):
            raise AuthenticationException("Current password is incorrect")
        if not new_password or len(new_password) < self.settings.password_min_length:
            raise ValidationException(
                f"New password must be at least {self.settings.password_min_length} characters long",
                {"field": "password"},
            )

        self.users.update_fields(account.id, password=new_password, updated_at=utcnow())
        logger.info(f"Password changed: {account.username}")
        return True

    def set_active(self, id: Any, is_active: bool) -> Optional[AccountPublic]:
        """
        Activate or deactivate an account. Admin only.

        Raises:
            AuthorizationException: If the caller is not an admin
            ValidationException: If an admin tries to deactivate their own account
        """
        session = self.require_admin()
        if not is_active and coerce_id(id) == session.id:
            raise ValidationException("You cannot deactivate your own account")

        updated = self.users.update_fields(id, is_active=bool(is_active), updated_at=utcnow())
        if updated is None:
            return None
        logger.info(f"User {updated.username} {'activated' if is_active else 'deactivated'}")
        return AccountPublic.from_account(updated)

    # ========================================================================
    # Statistics
    # ========================================================================

    def stats(self, now: Optional[datetime] = None) -> UserStats:
        """Account counts; recent means created within the trailing recent_user_days."""
        now = as_utc(now) if now is not None else utcnow()
        cutoff = now - timedelta(days=self.settings.recent_user_days)
        total = self.users.count()
        admins = self.users.count(lambda account: account.role == Role.ADMIN)
        return UserStats(
            total_users=total,
            active_users=self.users.count(lambda account: account.is_active),
            admin_users=admins,
            regular_users=total - admins,
            recent_users=self.users.count(lambda account: account.created_at > cutoff),
        )

    def activity_report(self, now: Optional[datetime] = None) -> ActivityReport:
        """Login activity counts. Admin only."""
        self.require_admin()
        now = as_utc(now) if now is not None else utcnow()
        accounts = self.users.get_all()

        def logged_in_within(account: Account, window: timedelta) -> bool:
            return account.last_login is not None and now - account.last_login < window

        return ActivityReport(
            total_users=len(accounts),
            active_today=sum(1 for a in accounts if logged_in_within(a, timedelta(days=1))),
            active_this_week=sum(1 for a in accounts if logged_in_within(a, timedelta(days=7))),
            new_this_month=sum(
                1 for a in accounts
                if a.created_at.year == now.year and a.created_at.month == now.month
            ),
            never_logged_in=sum(1 for a in accounts if a.last_login is None),
        )
