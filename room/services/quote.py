from dataclasses import dataclass, field
from datetime import date

from django.conf import settings

from hotel_management_service.exceptions import storage_errors
from room.services.availability import (
    RoomAvailability,
    availability_for,
    get_active_room_type,
    validate_range,
)
from room.services.pricing import PriceBreakdown, compute_price


@dataclass
class BookingQuote:
    is_available: bool
    availability: RoomAvailability
    price: PriceBreakdown
    warnings: list[str] = field(default_factory=list)
    error_message: str = ""


def quote_stay(room_type_id, check_in: date, check_out: date, guests_count: int = 1,
               breakfast: bool = False, vehicle: bool = False) -> BookingQuote:
    """Availability, price and operational warnings for a prospective stay."""
    validate_range(check_in, check_out)
    with storage_errors():
        room_type = get_active_room_type(room_type_id)
        availability = availability_for(room_type, check_in, check_out)
        price = compute_price(room_type, check_in, check_out, guests_count, breakfast, vehicle)

    warnings = []
    if availability.occupancy_rate > settings.HOTEL_HIGH_OCCUPANCY_THRESHOLD:
        warnings.append("High occupancy period - limited availability")
    if availability.overstays > 0:
        warnings.append(
            f"{availability.overstays} overstays detected - may affect availability"
        )

    quote = BookingQuote(
        is_available=availability.available_rooms > 0,
        availability=availability,
        price=price,
        warnings=warnings,
    )
    if guests_count > room_type.max_occupancy:
        quote.is_available = False
        quote.error_message = (
            f"{room_type.name} rooms hold at most {room_type.max_occupancy} guests"
        )
    elif not quote.is_available:
        quote.error_message = f"No {room_type.name} rooms available for selected dates"
    return quote
