from dataclasses import asdict, dataclass
from datetime import date, timedelta
from decimal import ROUND_HALF_UP, Decimal

from django.db.models import Sum
from django.utils import timezone

from booking.models import Booking
from hotel_management_service.exceptions import storage_errors
from room.exceptions import InvalidDateRange, RoomTypeNotFound
from room.models import RoomBlock, RoomType


@dataclass(frozen=True)
class RoomAvailability:
    total_rooms: int
    confirmed_bookings: int
    blocked_rooms: int
    overstays: int
    available_rooms: int
    occupancy_rate: Decimal

    def as_dict(self) -> dict:
        return asdict(self)


def get_active_room_type(room_type_id, queryset=None) -> RoomType:
    queryset = RoomType.objects.all() if queryset is None else queryset
    try:
        return queryset.get(pk=room_type_id, active=True)
    except (RoomType.DoesNotExist, ValueError, TypeError):
        raise RoomTypeNotFound()


def validate_range(start_date: date, end_date: date) -> None:
    if start_date >= end_date:
        raise InvalidDateRange()


def overlapping_bookings(room_type, start_date: date, end_date: date):
    """Bookings holding capacity anywhere in [start_date, end_date)."""
    return Booking.objects.filter(
        room_type=room_type,
        status__in=Booking.CAPACITY_STATUSES,
        check_in__lt=end_date,
        check_out__gt=start_date,
    )


def overlapping_blocks(room_type, start_date: date, end_date: date):
    # block ranges are inclusive of their end date
    return RoomBlock.objects.filter(
        room_type=room_type,
        active=True,
        start_date__lt=end_date,
        end_date__gte=start_date,
    )


def occupancy_rate(total_rooms: int, available_rooms: int) -> Decimal:
    if total_rooms == 0:
        return Decimal("0.00")
    rate = Decimal(total_rooms - available_rooms) / Decimal(total_rooms) * 100
    return rate.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


def availability_for(room_type: RoomType, start_date: date, end_date: date,
                     today: date | None = None) -> RoomAvailability:
    today = today or timezone.localdate()

    confirmed = overlapping_bookings(room_type, start_date, end_date).count()
    blocked = (
        overlapping_blocks(room_type, start_date, end_date)
        .aggregate(total=Sum("blocked_rooms"))["total"]
        or 0
    )
    overstays = Booking.objects.filter(
        room_type=room_type,
        status=Booking.BookingStatus.CHECKED_IN,
        check_out__lt=today,
    ).count()

    available = max(0, room_type.total_rooms - confirmed - blocked)

    return RoomAvailability(
        total_rooms=room_type.total_rooms,
        confirmed_bookings=confirmed,
        blocked_rooms=blocked,
        overstays=overstays,
        available_rooms=available,
        occupancy_rate=occupancy_rate(room_type.total_rooms, available),
    )


def calculate_availability(room_type_id, start_date: date, end_date: date,
                           today: date | None = None) -> RoomAvailability:
    validate_range(start_date, end_date)
    with storage_errors():
        room_type = get_active_room_type(room_type_id)
        return availability_for(room_type, start_date, end_date, today=today)


def availability_calendar(room_type_id, date_from: date, date_to: date) -> list[dict]:
    """Per-night remaining capacity for the inclusive range date_from..date_to."""
    if date_from > date_to:
        raise InvalidDateRange("date_from must not be after date_to.")

    end_exclusive = date_to + timedelta(days=1)
    with storage_errors():
        room_type = get_active_room_type(room_type_id)
        bookings = list(
            overlapping_bookings(room_type, date_from, end_exclusive)
            .values_list("check_in", "check_out")
        )
        blocks = list(
            overlapping_blocks(room_type, date_from, end_exclusive)
            .values_list("start_date", "end_date", "blocked_rooms")
        )

    calendar = []
    current_date = date_from
    while current_date <= date_to:
        booked = sum(
            1 for check_in, check_out in bookings if check_in <= current_date < check_out
        )
        blocked = sum(
            count for start, end, count in blocks if start <= current_date <= end
        )
        available = max(0, room_type.total_rooms - booked - blocked)
        calendar.append({
            "date": current_date,
            "available_rooms": available,
            "available": available > 0,
        })
        current_date += timedelta(days=1)

    return calendar
