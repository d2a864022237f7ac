import logging

from fastapi import Depends, APIRouter, Request, Response, status, HTTPException
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import selectinload
from sqlalchemy.ext.asyncio import AsyncSession

from coursepay.db import get_async_db_session, Course, User
from coursepay.dependencies import get_current_user, get_payment_gateway
from coursepay.helpers.payments import (
    StripeGateway,
    WebhookVerificationError,
    EVENT_CHECKOUT_COMPLETED,
    EVENT_CHECKOUT_EXPIRED,
)
from coursepay.helpers.purchases import PurchaseRepository
from coursepay.schemas import (
    SCheckoutSessionRequest,
    SCheckoutSessionResponse,
    SCourseWithPurchaseStatus,
    SPurchasedCoursesResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/purchase", tags=["Purchase"])


@router.post(
    "/checkout/create-checkout-session",
    response_model=SCheckoutSessionResponse,
)
async def create_checkout_session(
    request: SCheckoutSessionRequest,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_db_session),
    gateway: StripeGateway = Depends(get_payment_gateway),
):
    try:
        course = await db.get(Course, request.course_id)
        if course is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Course not found!",
            )

        repo = PurchaseRepository(db)
        purchase = repo.new_pending_purchase(course, user.id)

        session = await gateway.create_checkout_session(course, user.id)
        if not session.url:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Error while creating session",
            )

        purchase.payment_id = session.id
        await repo.save(purchase)

        return {"success": True, "url": session.url}

    except HTTPException as e:
        await db.rollback()
        raise e

    except Exception:
        logger.exception(
            "Failed to create checkout session for course %s", request.course_id
        )
        await db.rollback()
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Server error",
        )


@router.post("/webhook")
async def stripe_webhook(
    request: Request,
    db: AsyncSession = Depends(get_async_db_session),
    gateway: StripeGateway = Depends(get_payment_gateway),
):
    payload = await request.body()
    try:
        event = gateway.construct_event(
            payload, request.headers.get("stripe-signature")
        )
    except WebhookVerificationError as e:
        logger.warning("Webhook error: %s", e)
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Webhook error: {e}",
        )

    repo = PurchaseRepository(db)
    try:
        event_type = event["type"]
        session = event["data"]["object"]

        if event_type == EVENT_CHECKOUT_COMPLETED:
            logger.info("Checkout session completed: %s", session["id"])
            purchase = await repo.get_by_payment_id(session["id"])
            if purchase is None:
                logger.error("Purchase not found for session %s", session["id"])
                raise HTTPException(
                    status_code=status.HTTP_404_NOT_FOUND,
                    detail="Purchase not found",
                )
            await repo.complete(purchase, session.get("amount_total"))

        elif event_type == EVENT_CHECKOUT_EXPIRED:
            deleted = await repo.delete_by_payment_id(session["id"])
            logger.info(
                "Checkout session expired: %s, removed %s pending purchase(s)",
                session["id"], deleted,
            )

        else:
            logger.info("Unhandled event type: %s", event_type)

    except HTTPException as e:
        raise e

    except Exception:
        logger.exception("Error handling webhook event")
        await db.rollback()
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal Server Error",
        )

    return Response(status_code=status.HTTP_200_OK)


@router.get(
    "/course/{course_id}/detail-with-status",
    response_model=SCourseWithPurchaseStatus,
)
async def get_course_detail_with_purchase_status(
    course_id: int,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_db_session),
):
    try:
        course = await db.scalar(
            select(Course)
            .where(Course.id == course_id)
            .options(
                selectinload(Course.creator),
                selectinload(Course.lectures),
            )
        )
        if course is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="course not found!",
            )

        # any purchase row counts, pending ones included
        purchase = await PurchaseRepository(db).get_for_user_and_course(
            user.id, course_id
        )

        return {"course": course, "purchased": purchase is not None}

    except HTTPException as e:
        raise e

    except SQLAlchemyError:
        logger.exception("Failed to load purchase status for course %s", course_id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Database error",
        )

    except Exception:
        logger.exception("Failed to load purchase status for course %s", course_id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Server error",
        )


@router.get("/", response_model=SPurchasedCoursesResponse)
async def get_all_purchased_courses(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_db_session),
):
    try:
        purchases = await PurchaseRepository(db).list_completed()
        return {"purchased_course": purchases}

    except SQLAlchemyError:
        logger.exception("Failed to list purchased courses")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Database error",
        )

    except Exception:
        logger.exception("Failed to list purchased courses")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Server error",
        )
