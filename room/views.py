from django_filters.rest_framework import DjangoFilterBackend
from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import mixins, status
from rest_framework.decorators import action
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet, ModelViewSet
from rest_framework_simplejwt.authentication import JWTAuthentication

from account.permissions import IsManagerOrReadOnly
from account.roles import Role, require_role, role_at_least
from audit.services import record_audit
from room.models import RoomBlock, RoomType, SeasonalPriceOverride
from room.serializers import (
    BookingQuoteSerializer,
    CalendarQuerySerializer,
    DateRangeQuerySerializer,
    QuoteQuerySerializer,
    RoomAvailabilitySerializer,
    RoomBlockSerializer,
    RoomCalendarSerializer,
    RoomTypeSerializer,
    SeasonalPriceOverrideSerializer,
    SeasonalPriceOverrideUpdateSerializer,
)
from room.services import inventory
from room.services.availability import availability_calendar, calculate_availability
from room.services.quote import quote_stay


def date_parameter(name, description):
    return OpenApiParameter(
        name=name,
        type=OpenApiTypes.DATE,
        location=OpenApiParameter.QUERY,
        description=description,
        required=True,
    )


class RoomTypeViewSet(ModelViewSet):
    serializer_class = RoomTypeSerializer
    authentication_classes = (JWTAuthentication,)
    permission_classes = (IsManagerOrReadOnly,)

    filter_backends = (DjangoFilterBackend,)
    filterset_fields = ("active", "max_occupancy")

    def get_queryset(self):
        queryset = RoomType.objects.all().order_by("id")
        if role_at_least(self.request.user, Role.MANAGER):
            return queryset
        return queryset.filter(active=True)

    def perform_destroy(self, instance):
        """Room types are never deleted, only taken out of sale."""
        instance.active = False
        instance.save(update_fields=["active"])
        record_audit(
            "room_type_deactivated",
            entity="room_type",
            entity_id=instance.id,
            actor=self.request.user,
            before_state={"active": True},
            after_state={"active": False},
        )

    @extend_schema(
        parameters=[
            date_parameter("start_date", "First night of the range (YYYY-MM-DD)"),
            date_parameter("end_date", "Day after the last night (YYYY-MM-DD)"),
        ],
        responses={200: RoomAvailabilitySerializer},
        description=(
                "Remaining capacity for a room type over [start_date, end_date).\n\n"
                "Pending, Confirmed and Checked-In bookings and active room blocks "
                "consume capacity."
        ),
    )
    @action(methods=["GET"], detail=True, url_path="availability", filter_backends=[])
    def availability(self, request, pk=None):
        query = DateRangeQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)

        result = calculate_availability(
            pk, query.validated_data["start_date"], query.validated_data["end_date"]
        )
        return Response(RoomAvailabilitySerializer(result).data)

    @extend_schema(
        parameters=[
            date_parameter("date_from", "First date (YYYY-MM-DD)"),
            date_parameter("date_to", "Last date, inclusive (YYYY-MM-DD)"),
        ],
        responses={200: RoomCalendarSerializer(many=True)},
        description="Remaining capacity of a room type per night.",
    )
    @action(methods=["GET"], detail=True, url_path="calendar", filter_backends=[])
    def calendar(self, request, pk=None):
        query = CalendarQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)

        calendar = availability_calendar(
            pk, query.validated_data["date_from"], query.validated_data["date_to"]
        )
        return Response(RoomCalendarSerializer(calendar, many=True).data)

    @extend_schema(
        parameters=[QuoteQuerySerializer],
        responses={200: BookingQuoteSerializer},
        description="Price and availability of a prospective stay, with warnings.",
    )
    @action(methods=["GET"], detail=True, url_path="quote", filter_backends=[])
    def quote(self, request, pk=None):
        query = QuoteQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)

        result = quote_stay(pk, **query.validated_data)
        return Response(BookingQuoteSerializer(result).data)


class SeasonalPriceOverrideViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.CreateModelMixin,
    mixins.UpdateModelMixin,
    mixins.DestroyModelMixin,
    GenericViewSet,
):
    queryset = SeasonalPriceOverride.objects.select_related("room_type")
    authentication_classes = (JWTAuthentication,)
    permission_classes = (IsManagerOrReadOnly,)
    filterset_fields = ("room_type", "active")

    def get_serializer_class(self):
        if self.action in ("update", "partial_update"):
            return SeasonalPriceOverrideUpdateSerializer
        return SeasonalPriceOverrideSerializer

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        override = inventory.add_seasonal_override(actor=request.user, **serializer.validated_data)

        return Response(
            SeasonalPriceOverrideSerializer(override).data,
            status=status.HTTP_201_CREATED,
        )

    def update(self, request, *args, **kwargs):
        partial = kwargs.pop("partial", False)
        override = self.get_object()
        serializer = self.get_serializer(override, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)

        override = inventory.update_seasonal_override(
            override, request.user, **serializer.validated_data
        )
        return Response(SeasonalPriceOverrideSerializer(override).data)

    def destroy(self, request, *args, **kwargs):
        require_role(request.user, Role.ADMIN)
        inventory.deactivate_override(self.get_object(), request.user)
        return Response(status=status.HTTP_204_NO_CONTENT)


class RoomBlockViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.CreateModelMixin,
    mixins.DestroyModelMixin,
    GenericViewSet,
):
    queryset = RoomBlock.objects.select_related("room_type")
    serializer_class = RoomBlockSerializer
    authentication_classes = (JWTAuthentication,)
    permission_classes = (IsManagerOrReadOnly,)
    filterset_fields = ("room_type", "reason", "active")

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        block = inventory.block_rooms(actor=request.user, **serializer.validated_data)

        return Response(self.get_serializer(block).data, status=status.HTTP_201_CREATED)

    def destroy(self, request, *args, **kwargs):
        inventory.release_block(self.get_object(), request.user)
        return Response(status=status.HTTP_204_NO_CONTENT)
