"""
Stripe integration for course checkout.

``StripeGateway`` is the only place that talks to the Stripe SDK.  It is
built per request by :func:`coursepay.dependencies.get_payment_gateway`
with the API key passed explicitly on every call, so no global
``stripe.api_key`` is ever set and tests can swap the gateway through
``app.dependency_overrides``.
"""
import json
import logging
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Any

import stripe
from fastapi.concurrency import run_in_threadpool

from coursepay.core.config import StripeSettings
from coursepay.db import Course

logger = logging.getLogger(__name__)

EVENT_CHECKOUT_COMPLETED = "checkout.session.completed"
EVENT_CHECKOUT_EXPIRED = "checkout.session.expired"

class WebhookVerificationError(Exception):
    """Raised when a webhook payload or its signature cannot be trusted."""


@dataclass
class CheckoutSession:
    id: str
    url: str | None


def to_minor_units(price: float, exchange_rate: float) -> int:
    """Convert a catalog price into the provider currency's minor units.

    The converted amount is rounded half-up to two decimals before being
    scaled, e.g. ``to_minor_units(33.2, 3.32) == 1000``.
    """
    converted = (Decimal(str(price)) / Decimal(str(exchange_rate))).quantize(
        Decimal("0.01"), rounding=ROUND_HALF_UP
    )
    return int(converted * 100)


def from_minor_units(amount: int) -> float:
    return amount / 100


class StripeGateway:
    def __init__(
        self,
        secret_key: str,
        webhook_secret: str,
        currency: str,
        exchange_rate: float,
        success_url: str,
        cancel_url: str,
        allowed_countries: list[str],
    ):
        self.secret_key = secret_key
        self.webhook_secret = webhook_secret
        self.currency = currency
        self.exchange_rate = exchange_rate
        self.success_url = success_url
        self.cancel_url = cancel_url
        self.allowed_countries = allowed_countries

    @classmethod
    def from_settings(cls, stripe_settings: StripeSettings) -> "StripeGateway":
        return cls(
            secret_key=stripe_settings.secret_key.get_secret_value(),
            webhook_secret=stripe_settings.webhook_secret.get_secret_value(),
            currency=stripe_settings.currency,
            exchange_rate=stripe_settings.exchange_rate,
            success_url=stripe_settings.success_url,
            cancel_url=stripe_settings.cancel_url,
            allowed_countries=stripe_settings.allowed_countries,
        )

    def build_session_params(self, course: Course, user_id: int) -> dict[str, Any]:
        product_data: dict[str, Any] = {"name": course.title}
        if course.thumbnail:
            product_data["images"] = [course.thumbnail]

        return {
            "payment_method_types": ["card"],
            "line_items": [
                {
                    "price_data": {
                        "currency": self.currency,
                        "product_data": product_data,
                        "unit_amount": to_minor_units(
                            course.price, self.exchange_rate
                        ),
                    },
                    "quantity": 1,
                }
            ],
            "mode": "payment",
            "success_url": self.success_url.format(course_id=course.id),
            "cancel_url": self.cancel_url.format(course_id=course.id),
            "metadata": {
                "courseId": str(course.id),
                "userId": str(user_id),
            },
            "shipping_address_collection": {
                "allowed_countries": self.allowed_countries,
            },
        }

    async def create_checkout_session(
        self, course: Course, user_id: int
    ) -> CheckoutSession:
        params = self.build_session_params(course, user_id)
        session = await run_in_threadpool(
            stripe.checkout.Session.create, api_key=self.secret_key, **params
        )
        logger.info(
            "Created Stripe checkout session %s for course %s, user %s",
            session.id, course.id, user_id,
        )
        return CheckoutSession(id=session.id, url=session.url)

    def construct_event(self, payload: bytes, sig_header: str | None) -> dict[str, Any]:
        """Verify the signature and return the event decoded into plain dicts."""
        if not sig_header:
            raise WebhookVerificationError("Missing Stripe-Signature header")
        try:
            if isinstance(payload, bytes):
                payload = payload.decode("utf-8")
            stripe.WebhookSignature.verify_header(
                payload,
                sig_header,
                self.webhook_secret,
                tolerance=stripe.Webhook.DEFAULT_TOLERANCE,
            )
            return json.loads(payload)
        except ValueError as e:
            raise WebhookVerificationError(f"Invalid payload: {e}") from e
        except stripe.SignatureVerificationError as e:
            raise WebhookVerificationError(str(e)) from e
