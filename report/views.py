from drf_spectacular.utils import extend_schema
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework_simplejwt.authentication import JWTAuthentication

from account.permissions import IsManagerOrHigher
from report.serializers import (
    OccupancyQuerySerializer,
    OptionalRangeQuerySerializer,
    RevenueQuerySerializer,
)
from report.services import (
    daily_report,
    occupancy_report,
    outstanding_balances,
    repeat_customers,
    revenue_report,
    room_performance,
    staff_performance,
    vehicle_usage,
)


class ReportView(APIView):
    authentication_classes = (JWTAuthentication,)
    permission_classes = (IsManagerOrHigher,)


class RangeReportView(ReportView):
    """Report over bookings created in an optional inclusive date range."""

    report = None

    @extend_schema(parameters=[OptionalRangeQuerySerializer])
    def get(self, request):
        query = OptionalRangeQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        return Response(
            self.report(
                query.validated_data.get("start_date"),
                query.validated_data.get("end_date"),
            )
        )


class OccupancyReportView(ReportView):
    @extend_schema(
        parameters=[OccupancyQuerySerializer],
        description="Occupancy of every active room type for one night (default today).",
    )
    def get(self, request):
        query = OccupancyQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        return Response(occupancy_report(query.validated_data["date"]))


class DailyReportView(ReportView):
    @extend_schema(
        parameters=[OccupancyQuerySerializer],
        description=(
            "Bookings made, revenue from them, check-ins, check-outs and the "
            "outstanding balance for one day (default today)."
        ),
    )
    def get(self, request):
        query = OccupancyQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        return Response(daily_report(query.validated_data["date"]))


class RevenueReportView(ReportView):
    @extend_schema(
        parameters=[RevenueQuerySerializer],
        description="Payments received in an inclusive date range, cancelled bookings excluded.",
    )
    def get(self, request):
        query = RevenueQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        return Response(
            revenue_report(
                query.validated_data["start_date"], query.validated_data["end_date"]
            )
        )


class OutstandingReportView(ReportView):
    def get(self, request):
        return Response(outstanding_balances())


class RepeatCustomersReportView(ReportView):
    def get(self, request):
        return Response(repeat_customers())


class RoomPerformanceReportView(RangeReportView):
    report = staticmethod(room_performance)


class StaffPerformanceReportView(RangeReportView):
    report = staticmethod(staff_performance)


class VehicleUsageReportView(RangeReportView):
    report = staticmethod(vehicle_usage)
