import os

SQLALCHEMY_DATABASE_URL = "sqlite:///./test_temp.db"

# Settings are read once, so the environment must be in place before the app is imported
os.environ["DATABASE_URL"] = SQLALCHEMY_DATABASE_URL
os.environ["ACCESS_TOKEN_SECRET"] = "test-secret"
os.environ["STRIPE_SECRET_KEY"] = "sk_test_dummy"
os.environ["PAYMENT_CURRENCY"] = "usd"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from eco_electric.main import app as fastapi_app
from eco_electric.database import Base, get_db, init_db, make_engine
from eco_electric.models import User
from eco_electric.tokens import TokenService, get_token_service

engine = make_engine(SQLALCHEMY_DATABASE_URL)
TestingSessionLocal = sessionmaker(
    autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(autouse=True)
def setup_db():
    init_db(engine)
    yield
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db():
    session = TestingSessionLocal()
    yield session
    session.close()


@pytest.fixture
def other_db():
    """A second session, standing in for a concurrent request."""
    session = TestingSessionLocal()
    yield session
    session.close()


@pytest.fixture
def token_service():
    return TokenService("test-secret")


@pytest.fixture
def client(token_service):
    def override_get_db():
        session = TestingSessionLocal()
        try:
            yield session
        finally:
            session.close()

    fastapi_app.dependency_overrides[get_db] = override_get_db
    fastapi_app.dependency_overrides[get_token_service] = lambda: token_service
    with TestClient(fastapi_app) as c:
        yield c
    fastapi_app.dependency_overrides.clear()


@pytest.fixture
def auth_headers(token_service):
    def make(email):
        return {"Authorization": f"Bearer {token_service.issue(email)}"}
    return make


@pytest.fixture
def admin_email(db):
    db.add(User(email="admin@example.com", profile={"name": "Admin"}, role="admin"))
    db.commit()
    return "admin@example.com"
