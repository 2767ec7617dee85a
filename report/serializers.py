from django.utils import timezone
from rest_framework import serializers


class OccupancyQuerySerializer(serializers.Serializer):
    date = serializers.DateField(required=False)

    def validate(self, attrs):
        attrs.setdefault("date", timezone.localdate())
        return attrs


class RevenueQuerySerializer(serializers.Serializer):
    start_date = serializers.DateField()
    end_date = serializers.DateField()


class OptionalRangeQuerySerializer(serializers.Serializer):
    start_date = serializers.DateField(required=False)
    end_date = serializers.DateField(required=False)

    def validate(self, attrs):
        if ("start_date" in attrs) != ("end_date" in attrs):
            raise serializers.ValidationError(
                "start_date and end_date must be given together."
            )
        return attrs
