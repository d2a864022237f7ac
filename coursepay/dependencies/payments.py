from coursepay.core import settings
from coursepay.helpers.payments import StripeGateway


def get_payment_gateway() -> StripeGateway:
    return StripeGateway.from_settings(settings.settings.stripe_settings)
