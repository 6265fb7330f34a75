"""
Pytest fixtures for Solar ERP backend tests.

Provides an in-memory database, one user per role, and auth helpers.
"""

import pytest
from solarerp import create_app
from solarerp.extensions import db
from solarerp.models import Partner, Product
from solarerp.permissions import Role
from solarerp.services.auth_service import create_user


PASSWORD = "Password123"


@pytest.fixture(scope='session')
def app():
    """Create application for testing."""
    app = create_app({
        'TESTING': True,
        'SQLALCHEMY_DATABASE_URI': 'sqlite:///:memory:',
        'SQLALCHEMY_TRACK_MODIFICATIONS': False,
        'BCRYPT_ROUNDS': 4,
    })

    with app.app_context():
        db.create_all()
        yield app
        db.drop_all()


@pytest.fixture(scope='function')
def client(app):
    """Create test client."""
    return app.test_client()


@pytest.fixture(scope='function')
def db_session(app):
    """Create fresh database for each test."""
    with app.app_context():
        # Clear all data but keep schema
        meta = db.metadata
        for table in reversed(meta.sorted_tables):
            db.session.execute(table.delete())
        db.session.commit()

        yield db.session

        db.session.rollback()


@pytest.fixture(scope='function')
def users(db_session):
    """One active user per role, keyed by Role. Username is '<role>_user'."""
    return {
        role: create_user(
            username=f"{role.value}_user",
            email=f"{role.value}@test.local",
            password=PASSWORD,
            role=role,
        )
        for role in Role
    }


@pytest.fixture(scope='function')
def headers_for(client, users):
    """Return Authorization headers for a freshly logged-in user of the given role."""
    def _headers(role: Role) -> dict:
        token = get_auth_token(client, f"{role.value}_user", PASSWORD)
        assert token, f"login failed for {role.value}"
        return auth_headers(token)
    return _headers


@pytest.fixture(scope='function')
def partner(db_session):
    partner = Partner(name="Solar Tech Egypt", contact_person="Omar", email="contact@solartech.test")
    db_session.add(partner)
    db_session.commit()
    return partner


@pytest.fixture(scope='function')
def product(db_session):
    product = Product(
        sku="PV-550",
        name="Mono Solar Panel 550W",
        category="import_solar_panel",
        sell_price=100,
        min_sell_price=90,
    )
    db_session.add(product)
    db_session.commit()
    return product


def get_auth_token(client, username: str, password: str) -> str:
    """Helper to get auth token for a user."""
    response = client.post('/api/auth/login', json={
        'username': username,
        'password': password
    })
    if response.status_code == 200:
        return response.json.get('token')
    return None


def auth_headers(token: str) -> dict:
    """Helper to create Authorization headers."""
    return {'Authorization': f'Bearer {token}'}
