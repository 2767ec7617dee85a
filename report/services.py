from datetime import date, timedelta
from decimal import ROUND_HALF_UP, Decimal

from django.db.models import Count, F, Q, Sum
from django.db.models.functions import TruncDate

from booking.models import Booking, Customer
from hotel_management_service.exceptions import storage_errors
from payment.models import Payment
from room.exceptions import InvalidDateRange
from room.models import RoomType
from room.services.availability import availability_for, occupancy_rate

ZERO = Decimal("0.00")
CENTS = Decimal("0.01")
LIVE_STATUSES = [
    status for status in Booking.BookingStatus if status != Booking.BookingStatus.CANCELLED
]


def occupancy_report(day: date) -> dict:
    """Capacity use of every active room type for the night starting on day."""
    next_day = day + timedelta(days=1)
    rows = []
    with storage_errors():
        for room_type in RoomType.objects.filter(active=True).order_by("name"):
            availability = availability_for(room_type, day, next_day, today=day)
            rows.append({
                "room_type_id": room_type.id,
                "room_type": room_type.name,
                **availability.as_dict(),
            })

    total_rooms = sum(row["total_rooms"] for row in rows)
    available = sum(row["available_rooms"] for row in rows)
    return {
        "date": day,
        "total_rooms": total_rooms,
        "available_rooms": available,
        "occupied_rooms": total_rooms - available,
        "occupancy_rate": occupancy_rate(total_rooms, available),
        "room_types": rows,
    }


def revenue_report(start_date: date, end_date: date) -> dict:
    """Payments taken between start_date and end_date inclusive, excluding cancelled bookings."""
    if start_date > end_date:
        raise InvalidDateRange("start_date must not be after end_date.")

    with storage_errors():
        payments = Payment.objects.filter(
            paid_at__date__gte=start_date,
            paid_at__date__lte=end_date,
        ).exclude(booking__status=Booking.BookingStatus.CANCELLED)

        totals = payments.aggregate(total=Sum("amount_paid"), count=Count("id"))
        by_method = list(
            payments.values("method")
            .annotate(total=Sum("amount_paid"), count=Count("id"))
            .order_by("method")
        )
        by_day = list(
            payments.annotate(day=TruncDate("paid_at"))
            .values("day")
            .annotate(total=Sum("amount_paid"), count=Count("id"))
            .order_by("day")
        )
        by_room_type = list(
            payments.values(room_type=F("booking__room_type__name"))
            .annotate(total=Sum("amount_paid"), count=Count("id"))
            .order_by("room_type")
        )

    total = totals["total"] or ZERO
    count = totals["count"]
    average = (total / count).quantize(CENTS, rounding=ROUND_HALF_UP) if count else ZERO

    return {
        "start_date": start_date,
        "end_date": end_date,
        "total_revenue": total,
        "payment_count": count,
        "average_payment": average,
        "by_method": by_method,
        "by_day": by_day,
        "by_room_type": by_room_type,
    }


def outstanding_balances() -> dict:
    """Live bookings that still owe money."""
    with storage_errors():
        bookings = list(
            Booking.objects.filter(
                status__in=Booking.CAPACITY_STATUSES,
                paid_amount__lt=F("total_amount"),
            )
            .select_related("customer", "room_type")
            .order_by("check_in", "id")
        )

    rows = [
        {
            "booking_id": booking.id,
            "customer": booking.customer.full_name,
            "email": booking.customer.email,
            "room_type": booking.room_type.name,
            "check_in": booking.check_in,
            "check_out": booking.check_out,
            "status": booking.status,
            "total_amount": booking.total_amount,
            "paid_amount": booking.paid_amount,
            "outstanding_balance": booking.outstanding_balance,
        }
        for booking in bookings
    ]
    return {
        "count": len(rows),
        "total_outstanding": sum((row["outstanding_balance"] for row in rows), ZERO),
        "bookings": rows,
    }


def _live_bookings(start_date=None, end_date=None):
    """Non-cancelled bookings, optionally limited to those created in an inclusive range."""
    bookings = Booking.objects.exclude(status=Booking.BookingStatus.CANCELLED)
    if start_date is None and end_date is None:
        return bookings
    if start_date is None or end_date is None:
        raise InvalidDateRange("start_date and end_date must be given together.")
    if start_date > end_date:
        raise InvalidDateRange("start_date must not be after end_date.")
    return bookings.filter(
        created_at__date__gte=start_date, created_at__date__lte=end_date
    )


def _percentage(part: Decimal, whole: Decimal) -> Decimal:
    if not whole:
        return ZERO
    return (part / whole * 100).quantize(CENTS, rounding=ROUND_HALF_UP)


def daily_report(day: date) -> dict:
    """Front desk summary for one day."""
    with storage_errors():
        live = _live_bookings()
        created_today = live.filter(created_at__date=day)
        revenue = Payment.objects.filter(booking__in=created_today).aggregate(
            total=Sum("amount_paid")
        )["total"]
        owed = live.filter(created_at__date__lte=day).aggregate(
            total=Sum("total_amount"), paid=Sum("paid_amount")
        )
        summary = {
            "date": day,
            "total_bookings": created_today.count(),
            "total_revenue": revenue or ZERO,
            "check_ins": live.filter(check_in=day).count(),
            "check_outs": live.filter(check_out=day).count(),
        }

    summary["outstanding_balance"] = max(ZERO, (owed["total"] or ZERO) - (owed["paid"] or ZERO))
    return summary


def repeat_customers(min_bookings: int = 2) -> list:
    """Customers with at least min_bookings non-cancelled bookings, most loyal first."""
    with storage_errors():
        return list(
            Customer.objects.annotate(
                booking_count=Count(
                    "bookings",
                    filter=Q(bookings__status__in=LIVE_STATUSES),
                )
            )
            .filter(booking_count__gte=min_bookings)
            .order_by("-booking_count", "full_name")
            .values("id", "full_name", "email", "phone", "booking_count")
        )


def room_performance(start_date=None, end_date=None) -> list:
    with storage_errors():
        rows = list(
            _live_bookings(start_date, end_date)
            .values(room_type_name=F("room_type__name"))
            .annotate(
                booking_count=Count("id", distinct=True),
                total_revenue=Sum("payments__amount_paid"),
            )
            .order_by("room_type_name")
        )

    return [
        {
            "room_type": row["room_type_name"],
            "booking_count": row["booking_count"],
            "total_revenue": row["total_revenue"] or ZERO,
        }
        for row in rows
    ]


def staff_performance(start_date=None, end_date=None) -> list:
    """Bookings and revenue per staff member the bookings are assigned to."""
    with storage_errors():
        rows = list(
            _live_bookings(start_date, end_date)
            .filter(assigned_staff__isnull=False)
            .values(
                "assigned_staff",
                staff_email=F("assigned_staff__email"),
                staff_name=F("assigned_staff__full_name"),
                role=F("assigned_staff__role"),
            )
            .annotate(
                booking_count=Count("id", distinct=True),
                total_revenue=Sum("payments__amount_paid"),
            )
            .order_by("-booking_count", "staff_email")
        )

    return [
        {
            "staff_id": row["assigned_staff"],
            "staff_name": row["staff_name"] or row["staff_email"],
            "email": row["staff_email"],
            "role": row["role"],
            "booking_count": row["booking_count"],
            "total_revenue": row["total_revenue"] or ZERO,
        }
        for row in rows
    ]


def vehicle_usage(start_date=None, end_date=None) -> dict:
    with storage_errors():
        bookings = _live_bookings(start_date, end_date)
        counts = bookings.aggregate(
            with_vehicle=Count("id", filter=Q(vehicle=True)),
            without_vehicle=Count("id", filter=Q(vehicle=False)),
        )
        revenue = Payment.objects.filter(booking__in=bookings).aggregate(
            with_vehicle=Sum("amount_paid", filter=Q(booking__vehicle=True)),
            without_vehicle=Sum("amount_paid", filter=Q(booking__vehicle=False)),
        )

    vehicle_revenue = revenue["with_vehicle"] or ZERO
    other_revenue = revenue["without_vehicle"] or ZERO
    total = vehicle_revenue + other_revenue
    return {
        "vehicle_count": counts["with_vehicle"],
        "non_vehicle_count": counts["without_vehicle"],
        "vehicle_revenue": vehicle_revenue,
        "non_vehicle_revenue": other_revenue,
        "vehicle_percentage": _percentage(vehicle_revenue, total),
        "non_vehicle_percentage": _percentage(other_revenue, total),
    }
