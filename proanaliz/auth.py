"""
Role authentication for the dashboard.

Passwords are checked on the server against bcrypt hashes kept in the
settings table. A successful login yields an opaque session token; pages
re-validate the token on every run instead of trusting a client flag.
"""
from __future__ import annotations

import logging
import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Dict, Optional

import bcrypt

from proanaliz.config import config, SETTING_ADMIN_PASSWORD, SETTING_VIEWER_PASSWORD
from proanaliz.data.store import RecordStore, StoreError

logger = logging.getLogger(__name__)

ROLE_ADMIN = "admin"
ROLE_VIEWER = "viewer"
ROLES = (ROLE_ADMIN, ROLE_VIEWER)


class AuthenticationError(Exception):
    """Raised when a login or privileged action is refused."""
    pass


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def is_bcrypt_hash(value: Optional[str]) -> bool:
    return isinstance(value, str) and value.startswith(("$2a$", "$2b$", "$2y$"))


def check_password(password: Optional[str], hashed: Optional[str]) -> bool:
    if not password or not is_bcrypt_hash(hashed):
        return False
    try:
        return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        return False


@dataclass(frozen=True)
class Session:
    """An authenticated role, identified by its token."""
    role: str
    token: str
    expires_at: datetime

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN

    def can_view(self, allowed_roles) -> bool:
        return self.role in allowed_roles


class AuthService:
    """Verifies role passwords and tracks issued session tokens."""

    def __init__(self, store: RecordStore, ttl_minutes: Optional[int] = None):
        self.store = store
        self.ttl = timedelta(minutes=ttl_minutes if ttl_minutes is not None else config.session_ttl_minutes)
        self._sessions: Dict[str, Session] = {}
        self._fallback_hashes: Dict[str, str] = {}

    # -------------------------------------------------------------------------
    # Credentials
    # -------------------------------------------------------------------------

    def _setting_key(self, role: str) -> str:
        return SETTING_ADMIN_PASSWORD if role == ROLE_ADMIN else SETTING_VIEWER_PASSWORD

    def _bootstrap_password(self, role: str) -> str:
        return config.admin_password if role == ROLE_ADMIN else config.default_viewer_password

    def _password_hash(self, role: str) -> str:
        """
        Stored hash for a role.

        Plain-text values from older settings rows are hashed and written
        back. Missing values are bootstrapped from configuration.
        """
        key = self._setting_key(role)
        try:
            stored = self.store.get_setting(key)
        except StoreError as e:
            logger.error("Could not read %s credential: %s", role, e)
            stored = None

        if is_bcrypt_hash(stored):
            return stored

        plain = stored if stored else self._bootstrap_password(role)
        if role in self._fallback_hashes and not stored:
            return self._fallback_hashes[role]
        hashed = hash_password(plain)
        try:
            self.store.set_setting(key, hashed)
            logger.info("Stored hashed %s credential", role, extra={"role": role})
        except StoreError as e:
            logger.error("Could not persist %s credential: %s", role, e)
            self._fallback_hashes[role] = hashed
        return hashed

    def verify_password(self, role: str, password: str) -> bool:
        if role not in ROLES:
            return False
        return check_password(password, self._password_hash(role))

    def change_password(self, role: str, new_password: str) -> None:
        """Store a new hashed password for a role."""
        if role not in ROLES:
            raise AuthenticationError(f"Unknown role: {role}")
        self.store.set_setting(self._setting_key(role), hash_password(new_password))
        self._fallback_hashes.pop(role, None)

    # -------------------------------------------------------------------------
    # Sessions
    # -------------------------------------------------------------------------

    def login(self, role: str, password: str) -> Session:
        if not self.verify_password(role, password):
            logger.warning("Rejected login", extra={"role": role})
            raise AuthenticationError("Hatalı yetkilendirme şifresi!")
        session = Session(
            role=role,
            token=secrets.token_urlsafe(32),
            expires_at=datetime.now(timezone.utc) + self.ttl,
        )
        self._sessions[session.token] = session
        logger.info("Login accepted", extra={"role": role})
        return session

    def validate(self, token: Optional[str]) -> Optional[Session]:
        """Session for a token, or None when unknown or expired."""
        if not token:
            return None
        session = self._sessions.get(token)
        if session is None:
            return None
        if session.expires_at <= datetime.now(timezone.utc):
            self._sessions.pop(token, None)
            return None
        return session

    def logout(self, token: Optional[str]) -> None:
        if token:
            self._sessions.pop(token, None)

    def require_admin(self, token: Optional[str]) -> Session:
        session = self.validate(token)
        if session is None or not session.is_admin:
            raise AuthenticationError("Bu işlem için yönetici yetkisi gerekir.")
        return session
