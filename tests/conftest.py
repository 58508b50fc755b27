import mongomock
import pytest

from app import create_app
from config import TestConfig
from utils.db import EXTENSION_KEY
from utils.errors import RemoteServiceError
from utils.identity import IdentityService
from utils.repository import Repository

ADMIN_EMAIL = "admin@example.com"
ADMIN_PASSWORD = "correct-horse"


# ---------- fakes ----------
class FakeUploader:
    def __init__(self, fail=False):
        self.fail = fail
        self.calls = []

    def upload(self, file, folder=None):
        self.calls.append((file.filename, folder))
        if self.fail:
            raise RemoteServiceError("Cloudinary upload failed: boom")
        return f"https://res.cloudinary.com/demo/{folder}/{file.filename}"


class SpyIdentity:
    """Records every call made to the wrapped identity service."""

    def __init__(self, inner):
        self.inner = inner
        self.calls = []

    def __getattr__(self, name):
        attr = getattr(self.inner, name)

        def wrapper(*args, **kwargs):
            self.calls.append(name)
            return attr(*args, **kwargs)

        return wrapper


# ---------- fixtures ----------
@pytest.fixture
def db():
    return mongomock.MongoClient().db


@pytest.fixture
def identity(db):
    return IdentityService(db)


@pytest.fixture
def uploader():
    return FakeUploader()


@pytest.fixture
def app(db, identity, uploader):
    return create_app(TestConfig, db=db, identity=identity, uploader=uploader)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def admin_account(identity):
    return identity.create_account(ADMIN_EMAIL, ADMIN_PASSWORD, "Admin")


@pytest.fixture
def logged_in(client, admin_account):
    resp = client.post("/login", data={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD})
    assert resp.status_code == 302
    return client


@pytest.fixture
def failing_uploader(app):
    broken = FakeUploader(fail=True)
    app.extensions[EXTENSION_KEY]["uploader"] = broken
    return broken


@pytest.fixture
def repo_factory(db):
    return lambda name: Repository(db, name)
