"""
SoulFinder Backend: Payment Route Handlers
"""

from fastapi import APIRouter, Depends

from soulfinder.dependencies import get_payment_gateway
from soulfinder.schemas.common import ErrorResponse
from soulfinder.schemas.payment import PaymentIntentRequest, PaymentIntentResponse
from soulfinder.services.payment_service import PaymentGateway

router = APIRouter(tags=["Payments"])


@router.post(
    "/create-payment-intent",
    response_model=PaymentIntentResponse,
    responses={500: {"description": "Payment provider failure", "model": ErrorResponse}},
    summary="Create a card payment intent",
)
async def create_payment_intent(
    body: PaymentIntentRequest,
    gateway: PaymentGateway = Depends(get_payment_gateway),
) -> PaymentIntentResponse:
    client_secret = await gateway.create_payment_intent(body.price)
    return PaymentIntentResponse(client_secret=client_secret)
