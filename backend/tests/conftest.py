import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool

from config import Settings
from database import init_db, make_engine, make_session_factory
from main import create_app
from services.users import UserService
from utils.tokenJWT import Identity

TEST_SECRET = "test-secret"


@pytest.fixture
def settings():
    return Settings(
        _env_file=None,
        SECRET_KEY=TEST_SECRET,
        DATABASE_URL="sqlite://",
        BCRYPT_ROUNDS=4,
        LOG_LEVEL="WARNING",
    )


@pytest.fixture
def engine():
    # A single shared in-memory database for the whole test
    engine = make_engine("sqlite://", poolclass=StaticPool)
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db(engine):
    session = make_session_factory(engine)()
    yield session
    session.close()


@pytest.fixture
def app(settings, engine):
    return create_app(settings, engine=engine)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


def _token_for(app, user):
    return app.state.token_service.issue(Identity(user_id=user.id, email=user.email, role=user.role))


@pytest.fixture
def admin_user(db):
    return UserService(db, bcrypt_rounds=4).create_admin("admin@example.com", "admin123")


@pytest.fixture
def plain_user(db):
    return UserService(db, bcrypt_rounds=4).register("user@example.com", "user123")


@pytest.fixture
def admin_headers(app, admin_user):
    return {"Authorization": f"Bearer {_token_for(app, admin_user)}"}


@pytest.fixture
def user_headers(app, plain_user):
    return {"Authorization": f"Bearer {_token_for(app, plain_user)}"}
