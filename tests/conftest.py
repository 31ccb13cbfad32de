import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["BACKEND_URL"] = "http://backend.test"
os.environ["BACKEND_ANON_KEY"] = "anon-key"
os.environ["BACKEND_SERVICE_KEY"] = "service-key"
os.environ["BACKEND_JWT_SECRET"] = "test-jwt-secret"

import uuid
from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient
from jose import jwt
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from handling_portal.core.config import settings
from handling_portal.db.session import Base, get_db
from handling_portal.models.user import User
from handling_portal.models.handling_service import HandlingService
from handling_portal.models.payment_method import PaymentMethod
from handling_portal.models.membership import Membership
from handling_portal.models.agent_user import AgentUser  # noqa: F401
from handling_portal.models.location import Country, City, Location  # noqa: F401
from handling_portal.models.handling_booking import HandlingBooking  # noqa: F401
from handling_portal.models.payment import Payment, PaymentBooking  # noqa: F401
from handling_portal.models.transaction import TransactionHistory  # noqa: F401
from handling_portal.models.topup_request import TopUpRequest  # noqa: F401
from handling_portal.services.backend_client import BackendClient, BackendConfig, get_backend_client
from handling_portal.main import app

BACKEND_URL = "http://backend.test"


@pytest.fixture
def engine():
    eng = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
    Base.metadata.create_all(eng)
    yield eng
    Base.metadata.drop_all(eng)
    eng.dispose()


@pytest.fixture
def SessionTesting(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(SessionTesting):
    s = SessionTesting()
    yield s
    s.close()


@pytest.fixture
def backend():
    return BackendClient(BackendConfig(base_url=BACKEND_URL, anon_key="anon-key", service_key="service-key"))


@pytest.fixture
def client(SessionTesting, backend):
    def _get_db():
        s = SessionTesting()
        try:
            yield s
        finally:
            s.close()

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_backend_client] = lambda: backend
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def prices(db):
    rows = [
        (40, "arrival", 25000, 10000),
        (41, "departure", 25000, 10000),
        (42, "arrival_departure", 45000, 15000),
        (46, "transit", 50000, 15000),
    ]
    for sid, trip_type, sell, additional in rows:
        db.add(HandlingService(id=sid, service_type=settings.HANDLING_SERVICE_TYPE,
                               category=settings.HANDLING_GROUP_CATEGORY, trip_type=trip_type,
                               sell_price=sell, additional=additional))
    db.commit()


@pytest.fixture
def bank(db):
    b = PaymentMethod(id=str(uuid.uuid4()), name="BCA", bank_name="Bank Central Asia",
                      account_holder="PT Layanan Handling Bandara", account_number="1234567890",
                      type="manual", is_active=True)
    db.add(b)
    db.commit()
    return b


def make_user(db, *, role="Agent", status="active", saldo=0, discount=None, membership=None, email=None) -> User:
    u = User(
        id=str(uuid.uuid4()),
        email=email or f"{uuid.uuid4().hex[:8]}@agent.co.id",
        full_name="Budi Santoso",
        company_name="PT Umroh Berkah",
        phone_number="081234567890",
        role=role,
        status=status,
        saldo=saldo,
    )
    if discount is not None:
        u.handling_discount_kind = "AMOUNT"
        u.handling_discount_value = discount
        u.handling_discount_active = True
    db.add(u)
    if membership is not None:
        db.add(Membership(id=str(uuid.uuid4()), user_id=u.id, discount_percentage=membership, is_active=True))
    db.commit()
    db.refresh(u)
    return u


def token_for(user: User, **claims) -> str:
    payload = {
        "sub": user.id,
        "aud": settings.BACKEND_JWT_AUDIENCE,
        "exp": datetime.now(timezone.utc) + timedelta(hours=1),
        "role": "authenticated",
    }
    payload.update(claims)
    return jwt.encode(payload, settings.BACKEND_JWT_SECRET, algorithm="HS256")


def auth(user: User) -> dict:
    return {"Authorization": f"Bearer {token_for(user)}"}


def draft(**overrides) -> dict:
    body = {
        "companyName": "PT Umroh Berkah",
        "fullName": "Budi Santoso",
        "email": "budi@umrohberkah.co.id",
        "phone": "081234567890",
        "passengers": 3,
        "flightNumber": "GA 980",
        "country": "IDN",
        "city": "Jakarta",
        "travelTypes": ["arrival", "departure"],
        "additionalBaggage": 0,
        "pickupArea": "Terminal 3",
        "dropoffArea": "Terminal 3",
        "pickupDate": "2026-10-20",
        "pickupTime": "08:30",
        "notes": "",
    }
    body.update(overrides)
    return body
