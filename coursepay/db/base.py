from sqlalchemy.ext.asyncio import (
    AsyncAttrs,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from coursepay.core.settings import SQLALCHEMY_DATABASE_URL, SQLALCHEMY_ECHO


engine = create_async_engine(SQLALCHEMY_DATABASE_URL, echo=SQLALCHEMY_ECHO)

async_session_maker = async_sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False
)


class Base(AsyncAttrs, DeclarativeBase):
    pass


async def get_async_db_session():
    async with async_session_maker() as session:
        yield session
