# clubportal/identity.py

import logging
import re

from flask import current_app, has_app_context

from database import get_db_session
from clubportal.errors import EmailAlreadyInUse, WeakPassword, InvalidCredentials, AccountNotFound
from clubportal.models import Account
from clubportal.utils import utcnow

logger = logging.getLogger(__name__)

ACTIVE_SESSION_KEY = 'auth_uid'
DEFAULT_MIN_PASSWORD_LENGTH = 6
EMAIL_PATTERN = re.compile(r'^[^@\s]+@[^@\s]+\.[^@\s]+$')


def _normalize_email(email):
    return (email or '').strip().lower()


class IdentityClient:
    """
    Sign-in, sign-up and sign-out against the portal's identity accounts.

    The provider keeps a single active session in ``state`` (the Flask
    session during requests, any dict elsewhere). Like hosted identity
    providers, creating an account signs the new account in and replaces
    whatever session was active before.
    """

    def __init__(self, state):
        self._state = state

    @property
    def current_uid(self):
        return self._state.get(ACTIVE_SESSION_KEY)

    def _min_password_length(self):
        if has_app_context():
            return current_app.config.get('MIN_PASSWORD_LENGTH', DEFAULT_MIN_PASSWORD_LENGTH)
        return DEFAULT_MIN_PASSWORD_LENGTH

    def _find(self, s, email):
        return s.query(Account).filter_by(email=_normalize_email(email)).first()

    def sign_up(self, email, password):
        email = _normalize_email(email)
        if not EMAIL_PATTERN.match(email):
            raise InvalidCredentials(f"Invalid email address: {email or '(empty)'}")
        if len(password or '') < self._min_password_length():
            raise WeakPassword(f"Password should be at least {self._min_password_length()} characters.")

        with get_db_session() as s:
            if self._find(s, email) is not None:
                raise EmailAlreadyInUse(f"An account already exists for {email}.")
            account = Account(email=email)
            account.set_password(password)
            account.last_sign_in_at = utcnow()
            s.add(account)
            s.commit()
            uid = account.uid

        previous = self.current_uid
        self._state[ACTIVE_SESSION_KEY] = uid
        logger.info(f"Created identity account {uid} for {email} (active session switched from {previous})")
        return account

    def sign_in(self, email, password):
        with get_db_session() as s:
            account = self._find(s, email)
            if account is None or not account.check_password(password):
                logger.info(f"Sign-in failed for {_normalize_email(email)}")
                raise InvalidCredentials("Invalid email or password.")
            account.last_sign_in_at = utcnow()
            s.commit()
            uid = account.uid

        self._state[ACTIVE_SESSION_KEY] = uid
        logger.info(f"Signed in {uid}")
        return account

    def verify_password(self, email, password):
        """Checks a credential without touching the active session."""
        with get_db_session() as s:
            account = self._find(s, email)
            return account is not None and account.check_password(password)

    def get_account(self, uid):
        with get_db_session() as s:
            return s.get(Account, uid)

    def sign_out(self):
        uid = self._state.pop(ACTIVE_SESSION_KEY, None)
        if uid:
            logger.info(f"Signed out {uid}")

    def delete_account(self, uid):
        with get_db_session() as s:
            account = s.get(Account, uid)
            if account is None:
                raise AccountNotFound(f"No identity account {uid}")
            s.delete(account)
            s.commit()
        if self.current_uid == uid:
            self._state.pop(ACTIVE_SESSION_KEY, None)
        logger.info(f"Deleted identity account {uid}")
