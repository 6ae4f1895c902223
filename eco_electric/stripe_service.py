import logging
from decimal import Decimal, ROUND_HALF_UP, InvalidOperation
from typing import Optional

import stripe

from eco_electric.config import get_settings
from eco_electric.errors import InvalidAmount, PaymentProviderError

logger = logging.getLogger(__name__)

CENT = Decimal("1")

# largest amount Stripe accepts, in minor units
MAX_AMOUNT = 99999999


def to_minor_units(price) -> int:
    """Convert a price in major units to whole cents, rounding half up."""
    try:
        value = Decimal(str(price))
    except InvalidOperation:
        raise InvalidAmount()
    if not value.is_finite() or value <= 0:
        raise InvalidAmount()
    try:
        amount = int((value * 100).quantize(CENT, rounding=ROUND_HALF_UP))
    except InvalidOperation:
        raise InvalidAmount("Price exceeds the maximum chargeable amount")
    if amount <= 0:
        raise InvalidAmount()
    if amount > MAX_AMOUNT:
        raise InvalidAmount("Price exceeds the maximum chargeable amount")
    return amount


class PaymentGateway:
    def __init__(self, api_key: Optional[str], currency: str = "usd"):
        self.api_key = api_key
        self.currency = currency

    def create_intent(self, price) -> dict:
        amount = to_minor_units(price)
        try:
            intent = stripe.PaymentIntent.create(
                amount=amount,
                currency=self.currency,
                payment_method_types=["card"],
                api_key=self.api_key,
            )
        except stripe.StripeError as e:
            logger.error("Stripe rejected payment intent for %s %s: %s", amount, self.currency, e)
            raise PaymentProviderError()
        logger.info("Created payment intent %s for %s %s", intent.id, amount, self.currency)
        return {"clientSecret": intent.client_secret}


def get_payment_gateway() -> PaymentGateway:
    settings = get_settings()
    return PaymentGateway(settings.stripe_secret_key, settings.payment_currency)
