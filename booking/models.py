from decimal import Decimal

from django.conf import settings
from django.db import models
from django.db.models import F, ForeignKey, Q

from room.models import RoomType


class Customer(models.Model):
    full_name = models.CharField(max_length=255)
    email = models.EmailField(unique=True)
    phone = models.CharField(max_length=32, blank=True)
    id_number = models.CharField(max_length=64, blank=True)
    user = models.OneToOneField(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True,
        related_name="customer",
    )
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self):
        return f"{self.full_name} <{self.email}>"


class Booking(models.Model):
    class BookingStatus(models.TextChoices):
        PENDING = "Pending"
        CONFIRMED = "Confirmed"
        CHECKED_IN = "Checked-In"
        CHECKED_OUT = "Checked-Out"
        CANCELLED = "Cancelled"

    # Pending is counted so that unpaid reservations cannot be oversold
    CAPACITY_STATUSES = (
        BookingStatus.PENDING,
        BookingStatus.CONFIRMED,
        BookingStatus.CHECKED_IN,
    )

    customer = ForeignKey(Customer, on_delete=models.PROTECT, related_name="bookings")
    room_type = ForeignKey(RoomType, on_delete=models.PROTECT, related_name="bookings")
    check_in = models.DateField()
    check_out = models.DateField()
    guests_count = models.PositiveIntegerField(default=1)
    breakfast = models.BooleanField(default=False)
    vehicle = models.BooleanField(default=False)
    base_price = models.DecimalField(max_digits=12, decimal_places=2)
    extras_price = models.DecimalField(
        max_digits=12, decimal_places=2, default=Decimal("0.00")
    )
    total_amount = models.DecimalField(max_digits=12, decimal_places=2)
    paid_amount = models.DecimalField(
        max_digits=12, decimal_places=2, default=Decimal("0.00")
    )
    status = models.CharField(
        choices=BookingStatus, max_length=20, default=BookingStatus.PENDING
    )
    created_by = ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True,
        related_name="created_bookings",
    )
    assigned_staff = ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True,
        related_name="assigned_bookings",
    )
    overstay_detected = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ("-created_at",)
        indexes = [
            models.Index(fields=["room_type", "check_in", "check_out"], name="booking_room_type_dates_idx"),
            models.Index(fields=["status"], name="booking_status_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=Q(check_out__gt=F("check_in")),
                name="check_out_after_check_in",
            ),
            models.CheckConstraint(
                condition=Q(paid_amount__gte=0) & Q(paid_amount__lte=F("total_amount")),
                name="paid_amount_within_total",
            ),
        ]

    @property
    def nights(self) -> int:
        return (self.check_out - self.check_in).days

    @property
    def outstanding_balance(self) -> Decimal:
        return max(Decimal("0.00"), self.total_amount - self.paid_amount)

    def __str__(self):
        return f"Booking #{self.pk} {self.room_type} {self.check_in}..{self.check_out}"
