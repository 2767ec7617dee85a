import logging

from django.dispatch import Signal

logger = logging.getLogger(__name__)

# sender: Booking class; kwargs: booking, actor
booking_created = Signal()

# sender: Booking class; kwargs: booking, old_status, new_status, actor
booking_status_changed = Signal()


def emit(signal: Signal, sender, **kwargs) -> None:
    """Fire-and-forget delivery: receiver failures are logged, never raised."""
    for receiver, response in signal.send_robust(sender=sender, **kwargs):
        if isinstance(response, Exception):
            logger.error(
                "Receiver %s failed for %s: %s",
                getattr(receiver, "__name__", receiver), sender.__name__, response,
            )
