import os

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("ALGORITHM", "HS256")
os.environ.setdefault("STRIPE_SECRET_KEY", "sk_test_dummy")
os.environ.setdefault("STRIPE_WEBHOOK_SECRET", "whsec_test_dummy")
os.environ.setdefault("DB_URL", "sqlite+aiosqlite:///:memory:")

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import (
    create_async_engine,
    async_sessionmaker,
    AsyncSession,
)
from sqlalchemy.pool import StaticPool

from coursepay.db.base import Base
from coursepay.db.user import User, UserRole
from coursepay.db.course import Course
from coursepay.db.lecture import Lecture
from coursepay.db.course_purchase import CoursePurchase, PurchaseStatus
from coursepay.helpers.payments import CheckoutSession, WebhookVerificationError

from coursepay.app import app
from coursepay.dependencies import get_current_user, get_payment_gateway

DATABASE_URL = "sqlite+aiosqlite:///:memory:"


class FakeGateway:
    """Stands in for StripeGateway; records calls and returns canned data."""

    def __init__(self):
        self.session = CheckoutSession(
            id="cs_test_123", url="https://checkout.stripe.test/cs_test_123"
        )
        self.create_error: Exception | None = None
        self.event: dict | None = None
        self.created_for: list[tuple[int, int]] = []

    async def create_checkout_session(self, course, user_id):
        self.created_for.append((course.id, user_id))
        if self.create_error is not None:
            raise self.create_error
        return self.session

    def construct_event(self, payload, sig_header):
        if sig_header != "valid":
            raise WebhookVerificationError("No signatures found matching the expected signature")
        return self.event


def _make_event(event_type: str, session_id: str, **fields) -> dict:
    return {
        "type": event_type,
        "data": {"object": {"id": session_id, "object": "checkout.session", **fields}},
    }


@pytest.fixture
def make_event():
    return _make_event


@pytest_asyncio.fixture
async def async_engine():
    engine = create_async_engine(
        DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def test_db(async_engine):
    async_session = async_sessionmaker(
        async_engine, class_=AsyncSession, expire_on_commit=False
    )
    async with async_session() as session:
        yield session


@pytest_asyncio.fixture
async def test_user(test_db: AsyncSession) -> User:
    user = User(
        username="testuser",
        email="testuser@example.com",
        role=UserRole.student,
        hashed_password="fakehashed",
        is_active=True,
    )
    test_db.add(user)
    await test_db.commit()
    return user


@pytest_asyncio.fixture
async def test_instructor_user(test_db: AsyncSession) -> User:
    user = User(
        username="instructor",
        email="instructor@example.com",
        first_name="Ada",
        last_name="Lovelace",
        role=UserRole.instructor,
        hashed_password="fakehashed",
        is_active=True,
    )
    test_db.add(user)
    await test_db.commit()
    return user


@pytest_asyncio.fixture
async def test_course(test_db: AsyncSession, test_instructor_user: User) -> Course:
    course = Course(
        title="Test Course",
        description="Test Description",
        price=33.2,
        thumbnail="https://cdn.example.com/thumb.png",
        is_published=True,
        creator_id=test_instructor_user.id,
    )
    test_db.add(course)
    await test_db.commit()
    return course


@pytest_asyncio.fixture
async def test_lectures(test_db: AsyncSession, test_course: Course) -> list[Lecture]:
    lectures = [
        Lecture(title="Intro", position=0, is_preview_free=True, course_id=test_course.id),
        Lecture(title="Deep dive", position=1, course_id=test_course.id),
        Lecture(title="Wrap up", position=2, course_id=test_course.id),
    ]
    test_db.add_all(lectures)
    await test_db.commit()
    return lectures


@pytest_asyncio.fixture
async def test_pending_purchase(
    test_db: AsyncSession, test_user: User, test_course: Course
) -> CoursePurchase:
    purchase = CoursePurchase(
        user_id=test_user.id,
        course_id=test_course.id,
        amount=test_course.price,
        status=PurchaseStatus.pending,
        payment_id="cs_test_123",
    )
    test_db.add(purchase)
    await test_db.commit()
    return purchase


@pytest.fixture
def fake_gateway():
    gateway = FakeGateway()
    app.dependency_overrides[get_payment_gateway] = lambda: gateway
    yield gateway
    app.dependency_overrides.pop(get_payment_gateway, None)


@pytest.fixture
def override_get_current_user_student(test_user: User):
    async def _override_user():
        return test_user

    app.dependency_overrides[get_current_user] = _override_user
    yield
    app.dependency_overrides.pop(get_current_user, None)
