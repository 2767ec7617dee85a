from django_filters.rest_framework import DjangoFilterBackend
from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework_simplejwt.authentication import JWTAuthentication

from account.permissions import IsStaffOrHigher
from account.roles import Role, role_at_least
from booking.filters import BookingFilter
from booking.models import Booking
from booking.serializers import (
    BookingCreateSerializer,
    BookingReadSerializer,
    BookingStatusSerializer,
)
from booking.services.lifecycle import detect_overstays, transition_status

STAFF_ACTIONS = ("change_status", "confirm", "check_in", "check_out", "cancel", "overstays")


class BookingViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.CreateModelMixin,
    viewsets.GenericViewSet,
):
    serializer_class = BookingReadSerializer
    authentication_classes = (JWTAuthentication,)
    filter_backends = [DjangoFilterBackend]
    filterset_class = BookingFilter

    def get_permissions(self):
        if self.action == "create":
            return [AllowAny()]
        if self.action in STAFF_ACTIONS:
            return [IsStaffOrHigher()]
        return [IsAuthenticated()]

    def get_queryset(self):
        queryset = Booking.objects.select_related(
            "room_type", "customer"
        ).prefetch_related("payments")

        if getattr(self, "swagger_fake_view", False):
            return queryset.none()
        if role_at_least(self.request.user, Role.STAFF):
            return queryset

        return queryset.filter(customer__user=self.request.user)

    def get_serializer_class(self):
        if self.action == "create":
            return BookingCreateSerializer
        if self.action == "change_status":
            return BookingStatusSerializer
        return BookingReadSerializer

    @extend_schema(
        request=BookingCreateSerializer,
        responses={201: BookingReadSerializer},
        description=(
                "Reserve a room type for a stay. Open to anonymous guests.\n\n"
                "The booking starts as Pending; the price is fixed at creation."
        ),
    )
    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        booking = serializer.save()

        response_serializer = BookingReadSerializer(booking)
        return Response(response_serializer.data, status=status.HTTP_201_CREATED)

    @extend_schema(
        summary="List bookings",
        description=(
            "Retrieve a list of bookings.\n\n"
            "- Customers see only bookings made while signed in to their account.\n"
            "- Staff, managers and admins see all bookings.\n"
            "- Supports filtering by room type, status, customer and date range."
        ),
        parameters=[
            OpenApiParameter(
                name="status",
                type=OpenApiTypes.STR,
                location=OpenApiParameter.QUERY,
                description="Booking status (Pending, Confirmed, Checked-In, Checked-Out, Cancelled)",
                required=False,
            ),
            OpenApiParameter(
                name="from_date",
                type=OpenApiTypes.DATE,
                location=OpenApiParameter.QUERY,
                description="Filter bookings with check-in date from this date",
                required=False,
            ),
            OpenApiParameter(
                name="to_date",
                type=OpenApiTypes.DATE,
                location=OpenApiParameter.QUERY,
                description="Filter bookings with check-out date to this date",
                required=False,
            ),
        ],
    )
    def list(self, request, *args, **kwargs):
        return super().list(request, *args, **kwargs)

    def _transition(self, request, pk, new_status):
        booking = transition_status(pk, new_status, request.user)
        booking = self.get_queryset().get(pk=booking.pk)
        return Response(BookingReadSerializer(booking).data, status=status.HTTP_200_OK)

    @extend_schema(request=BookingStatusSerializer, responses={200: BookingReadSerializer})
    @action(detail=True, methods=["patch"], url_path="status")
    def change_status(self, request, pk=None):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        return self._transition(request, pk, serializer.validated_data["status"])

    @extend_schema(request=None, responses={200: BookingReadSerializer})
    @action(detail=True, methods=["post"], url_path="confirm")
    def confirm(self, request, pk=None):
        return self._transition(request, pk, Booking.BookingStatus.CONFIRMED)

    @extend_schema(request=None, responses={200: BookingReadSerializer})
    @action(detail=True, methods=["post"], url_path="check-in")
    def check_in(self, request, pk=None):
        return self._transition(request, pk, Booking.BookingStatus.CHECKED_IN)

    @extend_schema(request=None, responses={200: BookingReadSerializer})
    @action(detail=True, methods=["post"], url_path="check-out")
    def check_out(self, request, pk=None):
        return self._transition(request, pk, Booking.BookingStatus.CHECKED_OUT)

    @extend_schema(request=None, responses={200: BookingReadSerializer})
    @action(detail=True, methods=["post"], url_path="cancel")
    def cancel(self, request, pk=None):
        return self._transition(request, pk, Booking.BookingStatus.CANCELLED)

    @extend_schema(
        request=None,
        responses={200: BookingReadSerializer(many=True)},
        description="Run overstay detection and list Checked-In bookings past check-out.",
    )
    @action(detail=False, methods=["get", "post"], url_path="overstays", filter_backends=[])
    def overstays(self, request):
        report = detect_overstays()
        return Response(
            {
                "overstays_detected": len(report.bookings),
                "newly_flagged": report.newly_flagged,
                "details": BookingReadSerializer(report.bookings, many=True).data,
            }
        )
