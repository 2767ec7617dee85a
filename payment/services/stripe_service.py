import logging
from decimal import Decimal

import stripe
from django.conf import settings

from booking.exceptions import NotFound
from booking.models import Booking
from hotel_management_service.exceptions import storage_errors
from payment.exceptions import InvalidAmount, InvalidBookingState
from payment.services.reconciliation import CLOSED_STATUSES, outstanding, payments_total

logger = logging.getLogger(__name__)

stripe.api_key = settings.STRIPE_SECRET_KEY


def to_cents(amount: Decimal) -> int:
    return int(amount.quantize(Decimal("0.01")) * 100)


def from_cents(cents: int) -> Decimal:
    return (Decimal(cents) / 100).quantize(Decimal("0.01"))


def create_checkout_session(amount, name, booking_id):
    session = stripe.checkout.Session.create(
        mode="payment",
        line_items=[
            {
                "price_data": {
                    "currency": settings.HOTEL_CURRENCY,
                    "product_data": {
                        "name": name,
                    },
                    "unit_amount": to_cents(amount),
                },
                "quantity": 1,
            }
        ],
        metadata={"booking_id": str(booking_id)},
        client_reference_id=str(booking_id),
        success_url=settings.STRIPE_SUCCESS_URL,
        cancel_url=settings.STRIPE_CANCEL_URL,
    )

    return session


def start_booking_checkout(booking_id) -> dict:
    """Open a card checkout for whatever is still owed on a booking."""
    with storage_errors():
        try:
            booking = Booking.objects.select_related("room_type").get(pk=booking_id)
        except (Booking.DoesNotExist, ValueError, TypeError):
            raise NotFound(f"Booking {booking_id} not found.")
        balance = outstanding(booking.total_amount, payments_total(booking.pk))

    if booking.status in CLOSED_STATUSES:
        raise InvalidBookingState(booking.id, booking.status)
    if balance <= 0:
        raise InvalidAmount(f"Booking {booking.id} has no outstanding balance.")

    session = create_checkout_session(
        amount=balance,
        name=f"{booking.room_type.name} stay, booking {booking.id}",
        booking_id=booking.id,
    )
    logger.info("Checkout session %s opened for booking %s (%s)", session.id, booking.id, balance)

    return {
        "booking_id": booking.id,
        "amount": balance,
        "currency": settings.HOTEL_CURRENCY,
        "session_id": session.id,
        "session_url": session.url,
    }
