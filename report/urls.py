from django.urls import path

from report.views import (
    DailyReportView,
    OccupancyReportView,
    OutstandingReportView,
    RepeatCustomersReportView,
    RevenueReportView,
    RoomPerformanceReportView,
    StaffPerformanceReportView,
    VehicleUsageReportView,
)

app_name = "report"

urlpatterns = [
    path("occupancy/", OccupancyReportView.as_view(), name="occupancy"),
    path("daily/", DailyReportView.as_view(), name="daily"),
    path("revenue/", RevenueReportView.as_view(), name="revenue"),
    path("outstanding/", OutstandingReportView.as_view(), name="outstanding"),
    path("repeat-customers/", RepeatCustomersReportView.as_view(), name="repeat-customers"),
    path("room-performance/", RoomPerformanceReportView.as_view(), name="room-performance"),
    path("staff-performance/", StaffPerformanceReportView.as_view(), name="staff-performance"),
    path("vehicle-usage/", VehicleUsageReportView.as_view(), name="vehicle-usage"),
]
