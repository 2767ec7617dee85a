import django_filters

from booking.models import Booking


class BookingFilter(django_filters.FilterSet):
    from_date = django_filters.DateFilter(field_name="check_in", lookup_expr="gte")
    to_date = django_filters.DateFilter(field_name="check_out", lookup_expr="lte")

    room_type_name = django_filters.CharFilter(
        field_name="room_type__name", lookup_expr="iexact"
    )
    email = django_filters.CharFilter(field_name="customer__email", lookup_expr="iexact")

    class Meta:
        model = Booking
        fields = ["room_type", "status", "customer", "assigned_staff", "overstay_detected"]
