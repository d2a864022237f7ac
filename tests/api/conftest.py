import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from coursepay.app import app
from coursepay.db import get_async_db_session


@pytest.fixture(autouse=True)
def override_db_session(test_db: AsyncSession):
    app.dependency_overrides[get_async_db_session] = lambda: test_db
    yield
    app.dependency_overrides.pop(get_async_db_session, None)
