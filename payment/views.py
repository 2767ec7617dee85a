import logging

import stripe
from django.conf import settings
from django.utils.decorators import method_decorator
from django.views.decorators.csrf import csrf_exempt
from drf_spectacular.utils import extend_schema
from rest_framework import mixins, status, viewsets
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework_simplejwt.authentication import JWTAuthentication

from account.permissions import IsStaffOrHigher
from booking.exceptions import NotFound
from payment.exceptions import InvalidAmount, InvalidBookingState
from payment.models import Payment
from payment.serializers import (
    CheckoutSessionSerializer,
    PaymentCreateSerializer,
    PaymentResultSerializer,
    PaymentSerializer,
    ReconciliationSerializer,
)
from payment.services.reconciliation import reconcile, record_checkout_payment, record_payment
from payment.services.stripe_service import from_cents, start_booking_checkout

logger = logging.getLogger(__name__)


class PaymentViewSet(
    mixins.ListModelMixin,
    mixins.CreateModelMixin,
    viewsets.GenericViewSet,
):
    queryset = Payment.objects.select_related("booking").order_by("-id")
    serializer_class = PaymentSerializer
    authentication_classes = (JWTAuthentication,)
    permission_classes = [IsStaffOrHigher]
    filterset_fields = ("booking", "method")

    def get_serializer_class(self):
        if self.action == "create":
            return PaymentCreateSerializer
        return PaymentSerializer

    @extend_schema(
        request=PaymentCreateSerializer,
        responses={201: PaymentResultSerializer},
        description=(
            "Record a payment taken at the desk.\n\n"
            "The booking's paid amount is re-derived from all its payments; "
            "a fully paid Pending booking is confirmed."
        ),
    )
    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        result = record_payment(
            data["booking"],
            data["amount"],
            data["method"],
            request.user,
            receipt_reference=data["receipt_reference"],
        )
        return Response(
            PaymentResultSerializer(result).data, status=status.HTTP_201_CREATED
        )


class ReconcileView(APIView):
    authentication_classes = (JWTAuthentication,)
    permission_classes = [IsStaffOrHigher]

    @extend_schema(responses={200: ReconciliationSerializer})
    def get(self, request, booking_id):
        return Response(ReconciliationSerializer(reconcile(booking_id)).data)


class CheckoutView(APIView):
    """Guests pay their own outstanding balance by card."""

    authentication_classes = (JWTAuthentication,)
    permission_classes = [AllowAny]

    @extend_schema(request=None, responses={201: CheckoutSessionSerializer})
    def post(self, request, booking_id):
        checkout = start_booking_checkout(booking_id)
        return Response(
            CheckoutSessionSerializer(checkout).data, status=status.HTTP_201_CREATED
        )


@method_decorator(csrf_exempt, name="dispatch")
class StripeWebhook(APIView):
    authentication_classes = []
    permission_classes = []

    def post(self, request, *args, **kwargs):
        payload = request.body
        sig_header = request.META.get("HTTP_STRIPE_SIGNATURE")

        try:
            event = stripe.Webhook.construct_event(
                payload, sig_header, settings.STRIPE_WEBHOOK_SECRET
            )
        except stripe.SignatureVerificationError:
            return Response(status=status.HTTP_400_BAD_REQUEST)
        except ValueError as e:
            return Response({"error": str(e)}, status=status.HTTP_400_BAD_REQUEST)

        if event["type"] != "checkout.session.completed":
            return Response(status=status.HTTP_200_OK)

        session = event["data"]["object"]
        if session.get("payment_status") != "paid":
            return Response(status=status.HTTP_200_OK)

        booking_id = (session.get("metadata") or {}).get("booking_id")
        if not booking_id:
            logger.warning("Checkout session %s carries no booking id", session["id"])
            return Response(status=status.HTTP_200_OK)

        try:
            result = record_checkout_payment(
                session["id"], booking_id, from_cents(session["amount_total"])
            )
        except (NotFound, InvalidBookingState, InvalidAmount) as e:
            # not retryable; acknowledge so the delivery is not repeated
            logger.error(
                "Checkout session %s for booking %s not recorded: %s",
                session["id"], booking_id, e.message,
            )
            return Response({"detail": e.message}, status=status.HTTP_200_OK)

        return Response(
            {"payment": result.payment.id, "status": result.status},
            status=status.HTTP_200_OK,
        )


class PaymentSuccessView(APIView):
    authentication_classes = []
    permission_classes = [AllowAny]

    def get(self, request):
        return Response({"detail": "Payment successful!"})


class PaymentCancelView(APIView):
    authentication_classes = []
    permission_classes = [AllowAny]

    def get(self, request):
        return Response({"detail": "Payment cancelled"})
