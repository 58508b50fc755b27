"""
utils/identity.py
-----------------
Account and session service for the console.

Accounts keep a werkzeug password hash; sessions are opaque random
tokens stored server side with an expiry, so destroying the session
document is enough to log a browser out everywhere.
"""

import logging
import secrets
from datetime import datetime, timedelta, timezone

from bson import ObjectId
from pymongo.errors import PyMongoError
from werkzeug.security import check_password_hash, generate_password_hash

from utils.errors import AuthorizationError, NotFoundError, RemoteServiceError, ValidationError

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 8
INVALID_CREDENTIALS = "Invalid credentials or unauthorized account"


def normalize_email(email):
    return (email or "").strip().lower()


def _public(account):
    return {
        "id": account["_id"],
        "email": account["email"],
        "name": account.get("name", ""),
        "created_at": account.get("created_at"),
    }


def _aware(moment):
    if moment is not None and moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


class IdentityService:

    def __init__(self, db, session_ttl_hours=24):
        self.db = db
        self.session_ttl = timedelta(hours=session_ttl_hours)

    def ensure_indexes(self):
        """Let Mongo purge sessions once expires_at has passed."""
        try:
            self.sessions.create_index("expires_at", expireAfterSeconds=0)
        except PyMongoError as e:
            raise RemoteServiceError(str(e)) from e

    @property
    def accounts(self):
        return self.db.accounts

    @property
    def sessions(self):
        return self.db.sessions

    # Accounts
    def create_account(self, email, password, name=""):
        email = normalize_email(email)
        if not email:
            raise ValidationError("Email is required")
        if len(password or "") < MIN_PASSWORD_LENGTH:
            raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters long")

        try:
            if self.accounts.find_one({"email": email}):
                raise ValidationError("A user with the same email already exists")

            account = {
                "_id": str(ObjectId()),
                "email": email,
                "name": name or "",
                "password_hash": generate_password_hash(password),
                "created_at": datetime.now(timezone.utc),
            }
            self.accounts.insert_one(account)
        except PyMongoError as e:
            raise RemoteServiceError(str(e)) from e

        logger.info("Created account %s for %s", account["_id"], email)
        return _public(account)

    def delete_account(self, account_id):
        try:
            self.sessions.delete_many({"account_id": account_id})
            result = self.accounts.delete_one({"_id": account_id})
        except PyMongoError as e:
            raise RemoteServiceError(str(e)) from e
        if result.deleted_count == 0:
            raise NotFoundError(f"Account {account_id} not found")

    # Sessions
    def create_email_session(self, email, password):
        """Check the credentials and return a new session token."""
        try:
            account = self.accounts.find_one({"email": normalize_email(email)})
        except PyMongoError as e:
            raise RemoteServiceError(str(e)) from e

        if not account or not check_password_hash(account["password_hash"], password or ""):
            raise AuthorizationError(INVALID_CREDENTIALS)

        now = datetime.now(timezone.utc)
        token = secrets.token_urlsafe(32)
        try:
            self.sessions.insert_one({
                "_id": token,
                "account_id": account["_id"],
                "created_at": now,
                "expires_at": now + self.session_ttl,
            })
        except PyMongoError as e:
            raise RemoteServiceError(str(e)) from e
        return token

    def get_account(self, token):
        """Return the account behind a live session token."""
        if not token:
            raise AuthorizationError("No active session")

        try:
            session = self.sessions.find_one({"_id": token})
            if session is None:
                raise AuthorizationError("No active session")

            if _aware(session["expires_at"]) <= datetime.now(timezone.utc):
                self.sessions.delete_one({"_id": token})
                raise AuthorizationError("Session expired")

            account = self.accounts.find_one({"_id": session["account_id"]})
        except PyMongoError as e:
            raise RemoteServiceError(str(e)) from e

        if account is None:
            raise AuthorizationError("No active session")
        return _public(account)

    def delete_session(self, token):
        if not token:
            raise NotFoundError("No active session")
        try:
            result = self.sessions.delete_one({"_id": token})
        except PyMongoError as e:
            raise RemoteServiceError(str(e)) from e
        if result.deleted_count == 0:
            raise NotFoundError("No active session")
