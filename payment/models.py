from decimal import Decimal

from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models
from django.db.models import ForeignKey, Q
from django.utils import timezone

from booking.models import Booking


class Payment(models.Model):
    class PaymentMethod(models.TextChoices):
        CASH = "cash"
        CARD = "card"
        MOBILE_MONEY = "mobile_money"
        BANK_TRANSFER = "bank_transfer"

    booking = ForeignKey(Booking, related_name="payments", on_delete=models.PROTECT)
    amount_paid = models.DecimalField(
        max_digits=12, decimal_places=2, validators=[MinValueValidator(Decimal("0.01"))]
    )
    method = models.CharField(choices=PaymentMethod, max_length=20)
    receipt_reference = models.CharField(max_length=255, blank=True)
    session_id = models.CharField(max_length=255, blank=True)
    paid_at = models.DateTimeField(default=timezone.now)
    recorded_by = ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True,
        related_name="recorded_payments",
    )

    class Meta:
        ordering = ("-paid_at",)
        constraints = [
            models.CheckConstraint(
                condition=Q(amount_paid__gt=0),
                name="payment_amount_positive",
            ),
            models.UniqueConstraint(
                fields=["session_id"],
                condition=~Q(session_id=""),
                name="unique_checkout_session",
            ),
        ]

    def __str__(self):
        return f"{self.amount_paid} ({self.method}) for booking #{self.booking_id}"
