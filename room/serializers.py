from rest_framework import serializers

from room.models import RoomBlock, RoomType, SeasonalPriceOverride


class RoomTypeSerializer(serializers.ModelSerializer):
    class Meta:
        model = RoomType
        fields = (
            "id",
            "name",
            "description",
            "total_rooms",
            "base_price",
            "max_occupancy",
            "standard_occupancy",
            "extra_guest_fee",
            "breakfast_price",
            "active",
        )


class SeasonalPriceOverrideSerializer(serializers.ModelSerializer):
    room_type_name = serializers.CharField(source="room_type.name", read_only=True)

    class Meta:
        model = SeasonalPriceOverride
        fields = (
            "id",
            "room_type",
            "room_type_name",
            "start_date",
            "end_date",
            "override_price",
            "reason",
            "active",
            "created_by",
            "created_at",
        )
        read_only_fields = ("active", "created_by", "created_at")

    def validate(self, attrs):
        start = attrs.get("start_date", getattr(self.instance, "start_date", None))
        end = attrs.get("end_date", getattr(self.instance, "end_date", None))
        if start and end and end < start:
            raise serializers.ValidationError("end_date must not be before start_date.")
        return attrs


class SeasonalPriceOverrideUpdateSerializer(serializers.ModelSerializer):
    class Meta:
        model = SeasonalPriceOverride
        fields = ("override_price", "reason", "active")


class RoomBlockSerializer(serializers.ModelSerializer):
    room_type_name = serializers.CharField(source="room_type.name", read_only=True)

    class Meta:
        model = RoomBlock
        fields = (
            "id",
            "room_type",
            "room_type_name",
            "start_date",
            "end_date",
            "blocked_rooms",
            "reason",
            "description",
            "active",
            "created_by",
            "created_at",
        )
        read_only_fields = ("active", "created_by", "created_at")

    def validate(self, attrs):
        if attrs["end_date"] < attrs["start_date"]:
            raise serializers.ValidationError("end_date must not be before start_date.")
        return attrs


class DateRangeQuerySerializer(serializers.Serializer):
    start_date = serializers.DateField()
    end_date = serializers.DateField()


class CalendarQuerySerializer(serializers.Serializer):
    date_from = serializers.DateField()
    date_to = serializers.DateField()


class QuoteQuerySerializer(serializers.Serializer):
    check_in = serializers.DateField()
    check_out = serializers.DateField()
    guests_count = serializers.IntegerField(min_value=1, default=1)
    breakfast = serializers.BooleanField(default=False)
    vehicle = serializers.BooleanField(default=False)


class RoomAvailabilitySerializer(serializers.Serializer):
    total_rooms = serializers.IntegerField()
    confirmed_bookings = serializers.IntegerField()
    blocked_rooms = serializers.IntegerField()
    overstays = serializers.IntegerField()
    available_rooms = serializers.IntegerField()
    occupancy_rate = serializers.DecimalField(max_digits=5, decimal_places=2)


class RoomCalendarSerializer(serializers.Serializer):
    date = serializers.DateField()
    available_rooms = serializers.IntegerField()
    available = serializers.BooleanField()


class PriceBreakdownSerializer(serializers.Serializer):
    nights = serializers.IntegerField()
    base_total = serializers.DecimalField(max_digits=12, decimal_places=2)
    extras_total = serializers.DecimalField(max_digits=12, decimal_places=2)
    grand_total = serializers.DecimalField(max_digits=12, decimal_places=2)


class BookingQuoteSerializer(serializers.Serializer):
    is_available = serializers.BooleanField()
    availability = RoomAvailabilitySerializer()
    price = PriceBreakdownSerializer()
    warnings = serializers.ListField(child=serializers.CharField())
    error_message = serializers.CharField(allow_blank=True)
