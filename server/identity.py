"""
Identity provider and role resolution.

The identity provider only knows whether an email/password pair is valid.
Roles come from the `admins` and `supervisors` directories in the
document store; an authenticated email found in neither is not allowed in.
"""
import logging
from dataclasses import dataclass

from sqlalchemy.exc import SQLAlchemyError

from database import db
from docstore import DocumentStoreError
from models import Account
from utils.security import verify_password

logger = logging.getLogger(__name__)


class AuthenticationError(Exception):
    """Bad email or password."""


@dataclass
class AuthSession:
    email: str


@dataclass
class CurrentUser:
    id: str
    role: str
    email: str
    name: str = ''

    def to_dict(self):
        return {'id': self.id, 'role': self.role, 'email': self.email, 'name': self.name}


class IdentityProvider:
    """Tracks the signed-in account for one client and notifies listeners on change."""

    def __init__(self):
        self.current = None
        self._listeners = []

    def on_state_changed(self, callback):
        self._listeners.append(callback)

    def authenticate(self, email, password):
        email = str(email or '').strip().lower()
        try:
            account = Account.query.filter_by(email=email).first() if email else None
        except SQLAlchemyError as exc:
            db.session.rollback()
            raise DocumentStoreError('Reading accounts failed') from exc
        if account is None or not verify_password(str(password or ''), account.password_hash):
            raise AuthenticationError('Invalid credentials')

        self.current = AuthSession(email=email)
        self._notify()
        return self.current

    def sign_out(self):
        if self.current is None:
            return
        self.current = None
        self._notify()

    def _notify(self):
        for callback in list(self._listeners):
            callback(self.current)


def resolve_role(store, email):
    """
    Look the email up in the admins directory, then the supervisors one.
    Returns a CurrentUser, or None when the email holds no role.
    """
    email = email.lower()
    for collection, role in (('admins', 'admin'), ('supervisors', 'supervisor')):
        matches = store.query(collection, 'email', email)
        if matches:
            entry = matches[0]
            return CurrentUser(id=entry['id'], role=role, email=email, name=entry.get('name') or '')
    logger.warning("[AUTH] %s authenticated but holds no role", email)
    return None
