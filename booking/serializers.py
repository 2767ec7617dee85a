from django.utils import timezone
from rest_framework import serializers

from booking.models import Booking, Customer
from booking.services.lifecycle import BookingRequest, create_booking
from payment.serializers import PaymentSerializer
from room.models import RoomType


class CustomerSerializer(serializers.ModelSerializer):
    class Meta:
        model = Customer
        fields = ("id", "full_name", "email", "phone", "id_number")


class BookingReadSerializer(serializers.ModelSerializer):
    customer = CustomerSerializer(read_only=True)
    room_type_name = serializers.CharField(source="room_type.name", read_only=True)
    nights = serializers.IntegerField(read_only=True)
    outstanding_balance = serializers.DecimalField(
        max_digits=12, decimal_places=2, read_only=True
    )
    payments = PaymentSerializer(many=True, read_only=True)

    class Meta:
        model = Booking
        fields = (
            "id",
            "customer",
            "room_type",
            "room_type_name",
            "check_in",
            "check_out",
            "nights",
            "guests_count",
            "breakfast",
            "vehicle",
            "base_price",
            "extras_price",
            "total_amount",
            "paid_amount",
            "outstanding_balance",
            "status",
            "created_by",
            "assigned_staff",
            "overstay_detected",
            "created_at",
            "updated_at",
            "payments",
        )


class BookingCreateSerializer(serializers.Serializer):
    """Serializer for creating bookings with validation."""

    room_type = serializers.PrimaryKeyRelatedField(
        queryset=RoomType.objects.filter(active=True)
    )
    check_in = serializers.DateField()
    check_out = serializers.DateField()
    guests_count = serializers.IntegerField(min_value=1, default=1)
    breakfast = serializers.BooleanField(default=False)
    vehicle = serializers.BooleanField(default=False)
    full_name = serializers.CharField(max_length=255)
    email = serializers.EmailField()
    phone = serializers.CharField(max_length=32, required=False, allow_blank=True, default="")
    id_number = serializers.CharField(
        max_length=64, required=False, allow_blank=True, default=""
    )

    def validate_check_in(self, value):
        """Validate that check-in date is not in the past."""
        if value < timezone.localdate():
            raise serializers.ValidationError("Check-in date cannot be in the past.")
        return value

    def validate(self, attrs):
        if attrs["check_out"] <= attrs["check_in"]:
            raise serializers.ValidationError(
                "Check-out date must be after check-in date."
            )
        return attrs

    def create(self, validated_data):
        request = BookingRequest(
            room_type_id=validated_data.pop("room_type").pk,
            **validated_data,
        )
        return create_booking(request, actor=self.context["request"].user)


class BookingStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=Booking.BookingStatus.choices)
