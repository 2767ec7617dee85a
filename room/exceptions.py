from rest_framework import status

from hotel_management_service.exceptions import HotelServiceError


class InvalidDateRange(HotelServiceError):
    default_code = "invalid_date_range"
    default_message = "Start date must be before end date."


class InvalidStay(HotelServiceError):
    default_code = "invalid_stay"
    default_message = "Check-out date must be after check-in date."


class RoomTypeNotFound(HotelServiceError):
    status_code = status.HTTP_404_NOT_FOUND
    default_code = "room_type_not_found"
    default_message = "Room type not found or inactive."


class OverlappingOverride(HotelServiceError):
    default_code = "overlapping_override"
    default_message = "An active seasonal price already covers part of this range."
