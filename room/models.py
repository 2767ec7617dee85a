from decimal import Decimal

from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models
from django.db.models import F, ForeignKey, Q


class RoomType(models.Model):
    name = models.CharField(max_length=100, unique=True)
    description = models.TextField(blank=True)
    total_rooms = models.PositiveIntegerField(default=0)
    base_price = models.DecimalField(
        max_digits=10, decimal_places=2, validators=[MinValueValidator(Decimal("0"))]
    )
    max_occupancy = models.PositiveIntegerField(
        default=2, validators=[MinValueValidator(1)]
    )
    standard_occupancy = models.PositiveIntegerField(default=2)
    extra_guest_fee = models.DecimalField(
        max_digits=10, decimal_places=2, default=Decimal("0.00"),
        validators=[MinValueValidator(Decimal("0"))],
    )
    breakfast_price = models.DecimalField(
        max_digits=10, decimal_places=2, default=Decimal("0.00"),
        validators=[MinValueValidator(Decimal("0"))],
    )
    active = models.BooleanField(default=True)

    class Meta:
        ordering = ("name",)
        constraints = [
            models.CheckConstraint(
                condition=Q(max_occupancy__gte=1),
                name="room_type_max_occupancy_positive",
            ),
        ]

    def __str__(self):
        return self.name


class SeasonalPriceOverride(models.Model):
    room_type = ForeignKey(
        RoomType, on_delete=models.PROTECT, related_name="price_overrides"
    )
    start_date = models.DateField()
    end_date = models.DateField()
    override_price = models.DecimalField(
        max_digits=10, decimal_places=2, validators=[MinValueValidator(Decimal("0"))]
    )
    reason = models.CharField(max_length=255, default="Seasonal adjustment")
    active = models.BooleanField(default=True)
    created_by = ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True,
        related_name="+",
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ("start_date",)
        constraints = [
            models.CheckConstraint(
                condition=Q(end_date__gte=F("start_date")),
                name="override_end_not_before_start",
            ),
        ]

    def covers(self, night) -> bool:
        return self.start_date <= night <= self.end_date

    def __str__(self):
        return f"{self.room_type} {self.start_date}..{self.end_date}: {self.override_price}"


class RoomBlock(models.Model):
    class BlockReason(models.TextChoices):
        MAINTENANCE = "maintenance"
        ADMIN_HOLD = "admin_hold"
        RENOVATION = "renovation"
        EMERGENCY = "emergency"

    room_type = ForeignKey(RoomType, on_delete=models.PROTECT, related_name="blocks")
    start_date = models.DateField()
    end_date = models.DateField()
    blocked_rooms = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    reason = models.CharField(choices=BlockReason, max_length=20)
    description = models.TextField(blank=True)
    active = models.BooleanField(default=True)
    created_by = ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True,
        related_name="+",
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ("start_date",)
        constraints = [
            models.CheckConstraint(
                condition=Q(end_date__gte=F("start_date")),
                name="block_end_not_before_start",
            ),
        ]

    def __str__(self):
        return f"{self.blocked_rooms} x {self.room_type} ({self.reason})"
