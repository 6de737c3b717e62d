"""
SoulFinder Backend: Payment Intent Gateway
=============================================

What:  Abstract payment-gateway contract plus the Stripe implementation.
How:   `create_payment_intent(price)` converts a decimal price into the
       provider's minor currency unit and returns the client secret the
       frontend needs to confirm the card payment.
Who:   Constructed once in the app lifespan; called by
       POST /create-payment-intent.
"""

import logging
from abc import ABC, abstractmethod
from decimal import ROUND_HALF_UP, Decimal

import stripe
from starlette.concurrency import run_in_threadpool

from soulfinder.exceptions import PaymentServiceError, ValidationError

logger = logging.getLogger(__name__)


def to_minor_units(price: float) -> int:
    """Convert a price like 5.99 into integer cents (599), rounding half-up."""
    cents = (Decimal(str(price)) * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    return int(cents)


class PaymentGateway(ABC):
    """Contract for payment providers."""

    @abstractmethod
    async def create_payment_intent(self, price: float) -> str:
        """Create a payment intent for `price` and return its client secret."""
        ...


class StripePaymentGateway(PaymentGateway):
    """
    Creates card PaymentIntents through the Stripe API.

    The API key is passed per call instead of assigned to the global
    `stripe.api_key`, so the gateway carries its own configuration.
    """

    def __init__(self, secret_key: str, currency: str = "usd"):
        self._secret_key = secret_key
        self._currency = currency

    async def create_payment_intent(self, price: float) -> str:
        amount = to_minor_units(price)
        if amount < 1:
            raise ValidationError(message="Price must be at least one minor currency unit", field="price")
        if not self._secret_key:
            raise PaymentServiceError(message="Payments are not configured on this server.")

        try:
            intent = await run_in_threadpool(
                stripe.PaymentIntent.create,
                amount=amount,
                currency=self._currency,
                payment_method_types=["card"],
                api_key=self._secret_key,
            )
        except stripe.StripeError as e:
            logger.error("Stripe PaymentIntent creation failed: %s", e.user_message or str(e))
            raise PaymentServiceError(context={"provider": "stripe", "error_type": type(e).__name__})

        logger.info("Created payment intent %s for %d %s", intent.id, amount, self._currency)
        return intent.client_secret
