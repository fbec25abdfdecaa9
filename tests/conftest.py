import pytest
from datetime import datetime
from decimal import Decimal
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.main import app
from app.config.database import get_db
from app.config.settings import settings
from app.core.auth.service import TokenVerifier
from app.shared.database.enums import Role
from app.shared.database.models import Base, User, Parcel, Rider

ADMIN_EMAIL = "admin@parcels.com"
USER_EMAIL = "customer@parcels.com"
OTHER_USER_EMAIL = "other@parcels.com"
RIDER_EMAIL = "rider@parcels.com"


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def verifier():
    return TokenVerifier.from_settings(settings)


@pytest.fixture
def auth_headers(verifier):
    def _headers(email):
        token = verifier.create_token({"email": email, "sub": email.split("@")[0]})
        return {"Authorization": f"Bearer {token}"}
    return _headers


@pytest.fixture
def seeded_users(db_session):
    """Un usuario por rol; el rider todavía no tiene rol hasta ser aprobado"""
    now = datetime.now()
    for email, role in [
        (ADMIN_EMAIL, Role.ADMIN),
        (USER_EMAIL, Role.USER),
        (OTHER_USER_EMAIL, Role.USER),
        (RIDER_EMAIL, Role.USER),
    ]:
        db_session.add(User(email=email, role=role.value, created_at=now, last_login=now))
    db_session.commit()


@pytest.fixture
def approved_rider(client, auth_headers, seeded_users):
    """Rider que se postula y es aprobado por un administrador"""
    response = client.post(
        "/riders",
        json={"name": "Rahim", "email": RIDER_EMAIL, "district": "Dhaka", "city": "Mirpur"},
        headers=auth_headers(RIDER_EMAIL),
    )
    assert response.status_code == 201
    rider_id = response.json()["id"]

    response = client.patch(
        f"/riders/{rider_id}/status",
        json={"status": "approved", "email": RIDER_EMAIL},
        headers=auth_headers(ADMIN_EMAIL),
    )
    assert response.status_code == 200
    return rider_id


@pytest.fixture
def make_parcel(db_session):
    def _make(cost="500", sender_region="Dhaka", receiver_region="Dhaka",
              created_by=USER_EMAIL, created_at=None, **fields):
        parcel = Parcel(
            cost=Decimal(cost),
            sender_region=sender_region,
            receiver_region=receiver_region,
            created_by=created_by,
            created_at=created_at or datetime.now(),
            details={},
            **fields
        )
        db_session.add(parcel)
        db_session.commit()
        return parcel.id
    return _make


@pytest.fixture
def get_rider(session_factory):
    def _get(email=RIDER_EMAIL):
        session = session_factory()
        try:
            return session.query(Rider).filter(Rider.email == email).one()
        finally:
            session.close()
    return _get


@pytest.fixture
def get_parcel(session_factory):
    def _get(parcel_id):
        session = session_factory()
        try:
            return session.query(Parcel).filter(Parcel.id == parcel_id).one()
        finally:
            session.close()
    return _get
