from rest_framework import status

from hotel_management_service.exceptions import HotelServiceError


class NoAvailability(HotelServiceError):
    status_code = status.HTTP_409_CONFLICT
    default_code = "no_availability"
    default_message = "No rooms available for selected dates."


class NotFound(HotelServiceError):
    status_code = status.HTTP_404_NOT_FOUND
    default_code = "not_found"
    default_message = "Booking not found."


class InvalidTransition(HotelServiceError):
    status_code = status.HTTP_409_CONFLICT
    default_code = "invalid_transition"
    default_message = "Status transition is not allowed."

    def __init__(self, current_status=None, new_status=None, message=None) -> None:
        if message is None and current_status is not None:
            message = f"Cannot transition from {current_status} to {new_status}"
        super().__init__(message)
        self.current_status = current_status
        self.new_status = new_status
