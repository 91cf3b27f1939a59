"""
Auth Provider Service

Email/password sign-in backed by the ``user`` table and the Flask
session. Listeners registered with ``on_state_change`` are called
with the current user (or None) once on registration and again on
every sign-in and sign-out.
"""

import logging
import re

from flask import has_request_context, session

from constants import MAX_LENGTHS, MIN_PASSWORD_LENGTH
from models import db, User
from utils.sanitizer import sanitize_name

logger = logging.getLogger(__name__)

SESSION_KEY = 'uid'

_EMAIL_RE = re.compile(r'^[^@\s]+@[^@\s]+\.[^@\s]+$')


class AuthError(Exception):
    """Raised when sign-in is refused."""


class RegistrationError(AuthError):
    """Raised when a new account cannot be created."""


def normalize_email(email):
    return (email or '').strip().lower()


class AuthProvider:
    """Sign-in state for the current request's session."""

    def __init__(self):
        self._listeners = []

    def current_user(self):
        if not has_request_context():
            return None
        uid = session.get(SESSION_KEY)
        if not uid:
            return None
        return User.query.filter_by(uid=uid).first()

    def on_state_change(self, callback):
        """
        Register a callback(user_or_none).

        The callback fires immediately with the current user. Returns a
        function that unregisters it.
        """
        self._listeners.append(callback)
        callback(self.current_user())

        def unsubscribe():
            if callback in self._listeners:
                self._listeners.remove(callback)
        return unsubscribe

    def _notify(self, user):
        for callback in list(self._listeners):
            callback(user)

    def register(self, email, password, display_name=''):
        """Create a local account. Raises RegistrationError on invalid or duplicate input."""
        email = normalize_email(email)
        if not email or len(email) > MAX_LENGTHS['email'] or not _EMAIL_RE.match(email):
            raise RegistrationError('A valid email is required')
        if not password or len(password) < MIN_PASSWORD_LENGTH:
            raise RegistrationError(f'Password must be at least {MIN_PASSWORD_LENGTH} characters')
        if User.query.filter_by(email=email).first():
            raise RegistrationError(f'An account for "{email}" already exists')

        user = User(email=email, display_name=sanitize_name(display_name, max_length=MAX_LENGTHS['display_name']))
        user.set_password(password)
        db.session.add(user)
        db.session.commit()
        logger.info('Registered user %s', user.uid)
        return user

    def sign_in(self, email, password):
        """Sign in and notify listeners. Raises AuthError on bad credentials."""
        user = User.query.filter_by(email=normalize_email(email)).first()
        if user is None or not user.check_password(password or ''):
            logger.info('Rejected sign-in for %s', normalize_email(email))
            raise AuthError('Invalid email or password')

        session.clear()
        session[SESSION_KEY] = user.uid
        logger.info('User %s signed in', user.uid)
        self._notify(user)
        return user

    def sign_out(self):
        uid = session.pop(SESSION_KEY, None)
        if uid:
            logger.info('User %s signed out', uid)
        self._notify(None)
