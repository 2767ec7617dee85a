from celery import shared_task

from booking.models import Booking
from booking.services.lifecycle import detect_overstays
from notifications.messages import overstay_message
from notifications.tasks import send_telegram_notification


@shared_task
def detect_overstays_task():
    """Flag Checked-In bookings past their check-out date and alert staff once."""
    report = detect_overstays()

    for booking_id in report.newly_flagged:
        notify_overstay_telegram.delay(booking_id)

    return (
        f"Detected {len(report.bookings)} overstays, "
        f"{len(report.newly_flagged)} new"
    )


@shared_task
def notify_overstay_telegram(booking_id):
    """Send detailed notification to Telegram about an overstaying guest"""
    try:
        booking = Booking.objects.select_related("room_type", "customer").get(id=booking_id)
    except Booking.DoesNotExist:
        return f"Booking {booking_id} does not exist"

    send_telegram_notification.delay(overstay_message(booking))
    return f"Overstay alert queued for booking {booking_id}"
