import asyncio
import logging
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from coursepay.core.logging import setup_logging
from coursepay.db.base import Base, engine, async_session_maker
from coursepay.db.user import User, UserRole
from coursepay.db.course import Course
from coursepay.db.lecture import Lecture
from coursepay.auth.auth import pwd_context

logger = logging.getLogger(__name__)

DEMO_LECTURES = [
    "Introduction",
    "Setting up the environment",
    "Building the first project",
]


async def create_tables():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Tables created successfully.")


async def seed_admin_user(session: AsyncSession) -> User:
    admin_email = "admin@example.com"

    existing_admin = await session.scalar(
        select(User).where(User.email == admin_email)
    )
    if existing_admin:
        logger.info("Admin user already exists.")
        return existing_admin

    admin_user = User(
        username="admin",
        email=admin_email,
        hashed_password=pwd_context.hash("adminpassword"),
        first_name="Super",
        last_name="Admin",
        role=UserRole.admin,
        is_active=True,
    )
    session.add(admin_user)
    await session.commit()
    logger.info("Admin user '%s' created successfully.", admin_user.username)
    return admin_user


async def seed_demo_course(session: AsyncSession, creator: User) -> Course:
    title = "Mastering Python for Web"

    existing_course = await session.scalar(
        select(Course).where(Course.title == title)
    )
    if existing_course:
        logger.info("Demo course already exists.")
        return existing_course

    course = Course(
        title=title,
        subtitle="FastAPI, databases and deployment",
        description="From the basics of Python to a production web service.",
        category="Development",
        level="Beginner",
        price=33.2,
        is_published=True,
        creator_id=creator.id,
        lectures=[
            Lecture(title=lecture_title, position=position, is_preview_free=position == 0)
            for position, lecture_title in enumerate(DEMO_LECTURES)
        ],
    )
    session.add(course)
    await session.commit()
    logger.info("Demo course '%s' created successfully.", course.title)
    return course


async def main():
    setup_logging()
    await create_tables()
    async with async_session_maker() as session:
        admin = await seed_admin_user(session)
        await seed_demo_course(session, admin)


if __name__ == "__main__":
    asyncio.run(main())
