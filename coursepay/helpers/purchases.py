import logging

from sqlalchemy import select, update, delete, exists, insert
from sqlalchemy.orm import selectinload
from sqlalchemy.ext.asyncio import AsyncSession

from coursepay.db import (
    Course,
    CoursePurchase,
    Lecture,
    PurchaseStatus,
    user_course,
)
from coursepay.helpers.payments import from_minor_units

logger = logging.getLogger(__name__)


class PurchaseRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    def new_pending_purchase(
        self, course: Course, user_id: int
    ) -> CoursePurchase:
        return CoursePurchase(
            course_id=course.id,
            user_id=user_id,
            amount=course.price,
            status=PurchaseStatus.pending,
        )

    async def save(self, purchase: CoursePurchase) -> CoursePurchase:
        self.db.add(purchase)
        await self.db.commit()
        await self.db.refresh(purchase)
        return purchase

    async def get_by_payment_id(
        self, payment_id: str
    ) -> CoursePurchase | None:
        stmt = (
            select(CoursePurchase)
            .where(CoursePurchase.payment_id == payment_id)
            .options(selectinload(CoursePurchase.course))
        )
        result = await self.db.execute(stmt)
        return result.scalars().first()

    async def get_for_user_and_course(
        self, user_id: int, course_id: int
    ) -> CoursePurchase | None:
        stmt = select(CoursePurchase).where(
            CoursePurchase.user_id == user_id,
            CoursePurchase.course_id == course_id,
        )
        result = await self.db.execute(stmt)
        return result.scalars().first()

    async def list_completed(self) -> list[CoursePurchase]:
        stmt = (
            select(CoursePurchase)
            .where(CoursePurchase.status == PurchaseStatus.completed)
            .options(selectinload(CoursePurchase.course))
            .order_by(CoursePurchase.id)
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def delete_by_payment_id(self, payment_id: str) -> int:
        result = await self.db.execute(
            delete(CoursePurchase).where(
                CoursePurchase.payment_id == payment_id
            )
        )
        await self.db.commit()
        return result.rowcount

    async def complete(
        self, purchase: CoursePurchase, amount_total: int | None
    ) -> CoursePurchase:
        """
        Mark the purchase completed, unlock every lecture of its course and
        enroll the buyer.  Everything is written in a single commit.
        """
        try:
            if amount_total:
                purchase.amount = from_minor_units(amount_total)
            purchase.status = PurchaseStatus.completed

            await self.db.execute(
                update(Lecture)
                .where(Lecture.course_id == purchase.course_id)
                .values(is_preview_free=True)
            )

            await self._enroll(purchase.user_id, purchase.course_id)

            self.db.add(purchase)
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise

        return purchase

    async def _enroll(self, user_id: int, course_id: int) -> None:
        already_enrolled = await self.db.scalar(
            select(
                exists().where(
                    user_course.c.user_id == user_id,
                    user_course.c.course_id == course_id,
                )
            )
        )
        if already_enrolled:
            logger.info(
                "User %s is already enrolled in course %s", user_id, course_id
            )
            return

        await self.db.execute(
            insert(user_course).values(user_id=user_id, course_id=course_id)
        )
