from django.contrib import admin

from booking.models import Booking, Customer


@admin.register(Customer)
class CustomerAdmin(admin.ModelAdmin):
    list_display = ("id", "full_name", "email", "phone", "user")
    search_fields = ("full_name", "email", "phone")
    raw_id_fields = ("user",)


@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "room_type",
        "customer",
        "check_in",
        "check_out",
        "status",
        "total_amount",
        "paid_amount",
    )

    list_filter = (
        "status",
        "check_in",
        "check_out",
        "room_type",
        "overstay_detected",
    )

    search_fields = (
        "customer__email",
        "customer__full_name",
    )

    readonly_fields = ("total_amount", "paid_amount", "base_price", "extras_price")

    ordering = ("-check_in",)
