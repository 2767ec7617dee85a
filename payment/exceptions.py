from typing import Optional

from rest_framework import status

from hotel_management_service.exceptions import HotelServiceError


class InvalidBookingState(HotelServiceError):
    """Thrown when a payment is attempted on a Cancelled or Checked-Out booking"""

    status_code = status.HTTP_409_CONFLICT
    default_code = "invalid_booking_state"

    def __init__(
            self,
            booking_id: Optional[int] = None,
            booking_status: Optional[str] = None,
            message: Optional[str] = None
    ) -> None:
        if message is None:
            message = (
                f"Booking {booking_id} is {booking_status}; payments are not accepted."
                if booking_id else "Payments are not accepted for this booking."
            )
        super().__init__(message)
        self.booking_id = booking_id
        self.booking_status = booking_status


class InvalidAmount(HotelServiceError):
    default_code = "invalid_amount"
    default_message = "Payment amount must be greater than zero."


class InvalidPaymentMethod(HotelServiceError):
    default_code = "invalid_payment_method"
    default_message = "Unknown payment method."
