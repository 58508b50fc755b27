import logging
from enum import Enum
from functools import wraps

from flask import current_app, flash, g, redirect, session, url_for

from utils.db import get_identity
from utils.errors import AdminError, AuthorizationError
from utils.identity import INVALID_CREDENTIALS, normalize_email

logger = logging.getLogger(__name__)

# Flask session key holding the identity service token
SESSION_KEY = "session_token"


class GateState(Enum):
    UNAUTHENTICATED = "unauthenticated"
    CHECKING = "checking"
    AUTHENTICATED = "authenticated"


class SessionGate:
    """
    Admits only allow-listed accounts with a live identity session.

    The gate starts in CHECKING and settles in AUTHENTICATED or
    UNAUTHENTICATED after recover(), login() or logout().
    """

    def __init__(self, identity, allowed_emails, token=None):
        self.identity = identity
        self.allowed_emails = frozenset(normalize_email(e) for e in allowed_emails)
        self.token = token
        self.account = None
        self.state = GateState.CHECKING

    @property
    def authenticated(self):
        return self.state is GateState.AUTHENTICATED

    def is_allowed(self, email):
        return normalize_email(email) in self.allowed_emails

    def _reset(self):
        self.token = None
        self.account = None
        self.state = GateState.UNAUTHENTICATED
        return self.state

    def recover(self):
        """Resume the stored session. Any failure counts as no session."""
        self.state = GateState.CHECKING
        if not self.token:
            return self._reset()

        try:
            account = self.identity.get_account(self.token)
        except AdminError as e:
            logger.debug("Session recovery failed: %s", e)
            return self._reset()

        if not self.is_allowed(account["email"]):
            logger.warning("Session for %s is not on the admin allow-list", account["email"])
            return self._reset()

        self.account = account
        self.state = GateState.AUTHENTICATED
        return self.state

    def login(self, email, password):
        self.state = GateState.CHECKING
        try:
            # Checked locally first so unknown addresses never reach the identity service
            if not self.is_allowed(email):
                raise AuthorizationError(INVALID_CREDENTIALS)

            if self.token:
                try:
                    self.identity.delete_session(self.token)
                except AdminError as e:
                    logger.debug("No previous session to delete: %s", e)
                self.token = None

            token = self.identity.create_email_session(email, password)
            account = self.identity.get_account(token)

            if not self.is_allowed(account["email"]):
                try:
                    self.identity.delete_session(token)
                except AdminError as e:
                    logger.error("Could not destroy session for %s: %s", account["email"], e)
                raise AuthorizationError(INVALID_CREDENTIALS)

        except AdminError as e:
            logger.warning("Login failed for %s: %s", normalize_email(email), e)
            self._reset()
            raise

        self.token = token
        self.account = account
        self.state = GateState.AUTHENTICATED
        logger.info("Admin %s signed in", account["email"])
        return account

    def logout(self):
        if self.token:
            try:
                self.identity.delete_session(self.token)
            except AdminError as e:
                logger.error("Logout error: %s", e)
        return self._reset()


# Flask helpers
def current_gate():
    """The gate for this request, recovered from the session cookie once."""
    gate = g.get("gate")
    if gate is None:
        gate = SessionGate(
            get_identity(),
            current_app.config.get("ADMIN_EMAILS", ()),
            session.get(SESSION_KEY),
        )
        gate.recover()
        if gate.token is None:
            session.pop(SESSION_KEY, None)
        g.gate = gate
    return gate


def is_logged_in():
    return current_gate().authenticated


# This decorator makes sure that only signed-in admins can access protected pages
def login_required(view_function):
    @wraps(view_function)
    def decorated_function(*args, **kwargs):
        if not is_logged_in():
            flash("Please log in to access this page.", "warning")
            return redirect(url_for("auth.login"))
        return view_function(*args, **kwargs)
    return decorated_function


def login_user(email, password):
    gate = SessionGate(
        get_identity(),
        current_app.config.get("ADMIN_EMAILS", ()),
        session.get(SESSION_KEY),
    )
    g.gate = gate
    try:
        account = gate.login(email, password)
    except AdminError:
        session.pop(SESSION_KEY, None)
        raise
    session[SESSION_KEY] = gate.token
    return account


def logout_user():
    gate = SessionGate(
        get_identity(),
        current_app.config.get("ADMIN_EMAILS", ()),
        session.get(SESSION_KEY),
    )
    gate.logout()
    g.gate = gate
    session.clear()
    flash("You have been logged out successfully.", "success")
    return redirect(url_for("auth.login"))
