from rest_framework import serializers

from payment.models import Payment


class PaymentSerializer(serializers.ModelSerializer):
    class Meta:
        model = Payment
        fields = (
            "id",
            "booking",
            "amount_paid",
            "method",
            "receipt_reference",
            "paid_at",
            "recorded_by",
        )
        read_only_fields = fields


class PaymentCreateSerializer(serializers.Serializer):
    booking = serializers.IntegerField(min_value=1)
    amount = serializers.DecimalField(max_digits=12, decimal_places=2)
    method = serializers.CharField(max_length=20)
    receipt_reference = serializers.CharField(
        max_length=255, required=False, allow_blank=True, default=""
    )


class PaymentResultSerializer(serializers.Serializer):
    payment = PaymentSerializer()
    paid_amount = serializers.DecimalField(max_digits=12, decimal_places=2)
    outstanding_balance = serializers.DecimalField(max_digits=12, decimal_places=2)
    status = serializers.CharField()


class ReconciliationSerializer(serializers.Serializer):
    booking_id = serializers.IntegerField()
    total_amount = serializers.DecimalField(max_digits=12, decimal_places=2)
    stored_paid_amount = serializers.DecimalField(max_digits=12, decimal_places=2)
    paid_amount = serializers.DecimalField(max_digits=12, decimal_places=2)
    outstanding_balance = serializers.DecimalField(max_digits=12, decimal_places=2)
    drift = serializers.DecimalField(max_digits=12, decimal_places=2)
    is_consistent = serializers.BooleanField()


class CheckoutSessionSerializer(serializers.Serializer):
    booking_id = serializers.IntegerField()
    amount = serializers.DecimalField(max_digits=12, decimal_places=2)
    currency = serializers.CharField()
    session_id = serializers.CharField()
    session_url = serializers.URLField()
