from dataclasses import asdict, dataclass
from datetime import date, timedelta
from decimal import Decimal

from django.conf import settings

from room.exceptions import InvalidStay
from room.models import RoomType, SeasonalPriceOverride

CENTS = Decimal("0.01")


@dataclass(frozen=True)
class PriceBreakdown:
    nights: int
    base_total: Decimal
    extras_total: Decimal
    grand_total: Decimal

    def as_dict(self) -> dict:
        return asdict(self)


def active_overrides(room_type: RoomType, check_in: date, check_out: date):
    return list(
        SeasonalPriceOverride.objects.filter(
            room_type=room_type,
            active=True,
            start_date__lt=check_out,
            end_date__gte=check_in,
        )
    )


def nightly_rate(room_type: RoomType, night: date, overrides) -> Decimal:
    for override in overrides:
        if override.covers(night):
            return override.override_price
    return room_type.base_price


def compute_price(
    room_type: RoomType,
    check_in: date,
    check_out: date,
    guests_count: int = 1,
    breakfast: bool = False,
    vehicle: bool = False,
) -> PriceBreakdown:
    """
    Price a stay night by night.

    Each night is charged at the seasonal override covering it, or at the
    room type's base price. Guests above the standard occupancy add the
    room type's extra guest fee to every night. Breakfast is charged per
    guest per night and parking as one flat fee.
    """
    nights = (check_out - check_in).days
    if nights <= 0:
        raise InvalidStay()
    if guests_count < 0:
        raise InvalidStay("Guests count cannot be negative.")

    overrides = active_overrides(room_type, check_in, check_out)
    extra_guests = max(guests_count - room_type.standard_occupancy, 0)
    surcharge = room_type.extra_guest_fee * extra_guests

    base_total = Decimal("0")
    for offset in range(nights):
        night = check_in + timedelta(days=offset)
        base_total += nightly_rate(room_type, night, overrides) + surcharge

    breakfast_cost = (
        room_type.breakfast_price * guests_count * nights if breakfast else Decimal("0")
    )
    vehicle_cost = Decimal(settings.HOTEL_VEHICLE_FEE) if vehicle else Decimal("0")
    extras_total = breakfast_cost + vehicle_cost

    return PriceBreakdown(
        nights=nights,
        base_total=base_total.quantize(CENTS),
        extras_total=extras_total.quantize(CENTS),
        grand_total=(base_total + extras_total).quantize(CENTS),
    )
