import logging

from celery import shared_task

from booking.models import Booking
from notifications.messages import payment_message
from notifications.tasks import send_telegram_notification
from payment.models import Payment
from payment.services.reconciliation import reconcile

logger = logging.getLogger(__name__)


@shared_task
def check_payment_integrity():
    """
    Nightly check: every non-cancelled booking's stored paid amount
    must equal the sum of its payments.
    """
    booking_ids = Booking.objects.exclude(
        status=Booking.BookingStatus.CANCELLED
    ).values_list("id", flat=True)

    drifted = []
    for booking_id in booking_ids:
        result = reconcile(booking_id)
        if not result.is_consistent:
            drifted.append(booking_id)
            logger.error(
                "Booking %s: stored paid %s, payments sum %s (drift %s)",
                booking_id, result.stored_paid_amount, result.paid_amount, result.drift,
            )

    return f"Checked {len(booking_ids)} bookings, {len(drifted)} inconsistent"


@shared_task
def notify_successful_payment_telegram(payment_id):
    """Send detailed notification to Telegram about successful payment"""
    try:
        payment = Payment.objects.select_related(
            "booking__room_type", "booking__customer"
        ).get(id=payment_id)
    except Payment.DoesNotExist:
        return f"Could not find payment {payment_id}"

    send_telegram_notification.delay(payment_message(payment))
    return "Successfully triggered success notification."
