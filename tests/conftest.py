import os

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault('DATABASE_URL', 'sqlite:///./test.db')

from sweetshop.database import Base, get_db  # noqa: E402
from sweetshop.main import app  # noqa: E402
from sweetshop.models.sweet import Sweet  # noqa: E402
from sweetshop.models.user import User  # noqa: E402
from sweetshop.schemas.sweet import SweetCreate  # noqa: E402
from sweetshop.services import auth_service, sweet_service  # noqa: E402


@pytest.fixture
def db_engine():
    engine = create_engine(
        'sqlite://',
        connect_args={'check_same_thread': False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine, tables=[User.__table__, Sweet.__table__])
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine, tables=[Sweet.__table__, User.__table__])
        engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=db_engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


def _serve(session_factory, **client_options):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app, **client_options)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def client(session_factory):
    yield from _serve(session_factory)


@pytest.fixture
def lenient_client(session_factory):
    # Unhandled errors come back as responses instead of being re-raised.
    yield from _serve(session_factory, raise_server_exceptions=False)


@pytest.fixture
def create_user(db):
    def _create(email='shopper@example.com', role='user', password='Password123', name='Test User'):
        return auth_service.register_user(db, name=name, email=email, password=password, role=role)

    return _create


@pytest.fixture
def user_headers(create_user):
    token, _ = create_user(email='shopper@example.com', role='user')
    return {'Authorization': f'Bearer {token}'}


@pytest.fixture
def admin_headers(create_user):
    token, _ = create_user(email='admin@example.com', role='admin', name='Admin User')
    return {'Authorization': f'Bearer {token}'}


@pytest.fixture
def create_sweet(db):
    def _create(**overrides):
        data = {
            'name': 'Kaju Katli',
            'category': 'Dry Fruits',
            'price': 800,
            'quantity': 50,
            'description': 'Premium cashew fudge with a thin silver leaf.',
        }
        data.update(overrides)
        return sweet_service.create_sweet(db, SweetCreate(**data))

    return _create
