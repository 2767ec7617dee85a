import logging

from django.dispatch import receiver

from booking.models import Booking
from booking.signals import booking_created, booking_status_changed
from notifications.messages import (
    booking_created_message,
    customer_email,
    payment_receipt_email,
    status_changed_message,
)
from notifications.tasks import send_customer_email, send_telegram_notification
from payment.signals import payment_confirmed
from payment.tasks import notify_successful_payment_telegram

logger = logging.getLogger(__name__)

EMAILED_STATUSES = (Booking.BookingStatus.CONFIRMED, Booking.BookingStatus.CANCELLED)


@receiver(booking_created)
def booking_created_notification(sender, booking, **kwargs):
    send_telegram_notification.delay(booking_created_message(booking))
    subject, body = customer_email(booking)
    send_customer_email.delay(booking.customer.email, subject, body)
    logger.info("Queued notifications for new booking %s", booking.id)


@receiver(booking_status_changed)
def booking_status_notification(sender, booking, old_status, new_status, **kwargs):
    send_telegram_notification.delay(
        status_changed_message(booking, old_status, new_status)
    )
    if new_status in EMAILED_STATUSES:
        subject, body = customer_email(booking, new_status)
        send_customer_email.delay(booking.customer.email, subject, body)


@receiver(payment_confirmed)
def payment_notification(sender, payment, booking, **kwargs):
    notify_successful_payment_telegram.delay(payment.id)
    subject, body = payment_receipt_email(payment)
    send_customer_email.delay(booking.customer.email, subject, body)
