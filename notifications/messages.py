from django.conf import settings


def _money(amount) -> str:
    return f"{amount} {settings.HOTEL_CURRENCY.upper()}"


def booking_created_message(booking) -> str:
    return (
        "🆕 New booking created\n"
        f"Booking ID: {booking.id}\n"
        f"Guest: {booking.customer.full_name} ({booking.customer.email})\n"
        f"Room type: {booking.room_type.name}\n"
        f"Check-in: {booking.check_in}\n"
        f"Check-out: {booking.check_out}\n"
        f"Guests: {booking.guests_count}\n"
        f"Total: {_money(booking.total_amount)}"
    )


STATUS_HEADLINES = {
    "Confirmed": "✅ Booking Confirmed",
    "Checked-In": "🛎 Guest Checked In",
    "Checked-Out": "👋 Guest Checked Out",
    "Cancelled": "❌ Booking Cancelled",
}


def status_changed_message(booking, old_status, new_status) -> str:
    headline = STATUS_HEADLINES.get(new_status, "🔄 Booking Updated")
    return (
        f"{headline}\n"
        f"Booking ID: {booking.id}\n"
        f"Guest: {booking.customer.full_name}\n"
        f"Room type: {booking.room_type.name}\n"
        f"Dates: {booking.check_in} - {booking.check_out}\n"
        f"Status: {old_status} → {new_status}"
    )


def payment_message(payment) -> str:
    booking = payment.booking
    return (
        "💰 Payment Received\n"
        f"Booking ID: {booking.id}\n"
        f"Guest: {booking.customer.email}\n"
        f"Room type: {booking.room_type.name}\n"
        f"Amount: {_money(payment.amount_paid)} ({payment.method})\n"
        f"Paid so far: {_money(booking.paid_amount)} of {_money(booking.total_amount)}"
    )


def overstay_message(booking) -> str:
    return (
        "⚠️ OVERSTAY ALERT ⚠️\n"
        "\n"
        f"📋 Booking ID: {booking.id}\n"
        f"🚪 Room type: {booking.room_type.name}\n"
        f"👤 Guest: {booking.customer.full_name}\n"
        f"📧 Email: {booking.customer.email}\n"
        f"📅 Check-out Date: {booking.check_out}\n"
        f"💰 Outstanding: {_money(booking.outstanding_balance)}"
    )


def customer_email(booking, new_status=None) -> tuple[str, str]:
    """Subject and plain-text body of the e-mail a guest receives."""
    if new_status is None:
        subject = f"Your reservation #{booking.id} has been received"
        intro = "Thank you for your reservation. It is pending until payment is received."
    elif new_status == "Confirmed":
        subject = f"Your reservation #{booking.id} is confirmed"
        intro = "Your reservation is confirmed. We look forward to welcoming you."
    else:
        subject = f"Your reservation #{booking.id} has been cancelled"
        intro = "Your reservation has been cancelled."

    body = (
        f"Dear {booking.customer.full_name},\n\n"
        f"{intro}\n\n"
        f"Room type: {booking.room_type.name}\n"
        f"Check-in: {booking.check_in}\n"
        f"Check-out: {booking.check_out} ({booking.nights} nights)\n"
        f"Total: {_money(booking.total_amount)}\n"
        f"Paid: {_money(booking.paid_amount)}\n"
    )
    return subject, body


def payment_receipt_email(payment) -> tuple[str, str]:
    booking = payment.booking
    subject = f"Payment received for reservation #{booking.id}"
    body = (
        f"Dear {booking.customer.full_name},\n\n"
        f"We received {_money(payment.amount_paid)} by {payment.get_method_display()}.\n"
        f"Outstanding balance: {_money(booking.outstanding_balance)}\n"
    )
    return subject, body
