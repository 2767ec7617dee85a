import logging
from dataclasses import dataclass
from datetime import date
from functools import partial

from django.db import OperationalError, transaction
from django.utils import timezone

from account.roles import Role, require_role, role_at_least
from audit.services import record_audit
from booking.exceptions import InvalidTransition, NoAvailability, NotFound
from booking.models import Booking, Customer
from booking.signals import booking_created, booking_status_changed, emit
from hotel_management_service.exceptions import (
    ConcurrencyConflict,
    StorageUnavailable,
    storage_errors,
)
from room.exceptions import InvalidStay
from room.models import RoomType
from room.services.availability import (
    availability_for,
    get_active_room_type,
    overlapping_bookings,
    validate_range,
)
from room.services.pricing import compute_price

logger = logging.getLogger(__name__)

Status = Booking.BookingStatus

TRANSITIONS = {
    Status.PENDING: frozenset({Status.CONFIRMED, Status.CANCELLED}),
    Status.CONFIRMED: frozenset({Status.CHECKED_IN, Status.CANCELLED}),
    Status.CHECKED_IN: frozenset({Status.CHECKED_OUT}),
    Status.CHECKED_OUT: frozenset(),
    Status.CANCELLED: frozenset(),
}


@dataclass
class BookingRequest:
    room_type_id: int
    check_in: date
    check_out: date
    full_name: str
    email: str
    guests_count: int = 1
    phone: str = ""
    id_number: str = ""
    breakfast: bool = False
    vehicle: bool = False


def is_legal_transition(current_status, new_status) -> bool:
    return new_status in TRANSITIONS.get(current_status, frozenset())


def booking_state(booking: Booking) -> dict:
    return {
        "status": booking.status,
        "total_amount": str(booking.total_amount),
        "paid_amount": str(booking.paid_amount),
    }


def _authenticated(actor):
    if actor is not None and getattr(actor, "is_authenticated", False):
        return actor
    return None


def find_or_create_customer(full_name, email, phone="", id_number="", account=None) -> Customer:
    """
    Look up the customer by e-mail, creating it on first booking.

    A customer record is linked to a user account only when that account
    books under its own e-mail; this link decides which bookings the
    account can see.
    """
    customer, created = Customer.objects.get_or_create(
        email=email.strip().lower(),
        defaults={"full_name": full_name, "phone": phone, "id_number": id_number},
    )
    if created:
        logger.info("Created customer %s", customer.email)

    if (
        account is not None
        and customer.user_id is None
        and account.email.lower() == customer.email
        and not Customer.objects.filter(user=account).exists()
    ):
        customer.user = account
        customer.save(update_fields=["user"])
    return customer


def _is_lock_error(exc: OperationalError) -> bool:
    message = str(exc).lower()
    return "lock" in message or "serialize" in message or "deadlock" in message


def create_booking(request: BookingRequest, actor=None) -> Booking:
    """
    Reserve one room of a room type for [check_in, check_out).

    The room type row is locked for the duration of the availability check
    and the insert, so concurrent requests for the same room type are
    serialized. The insert is re-validated before commit; a booking that
    would exceed capacity is rolled back with ConcurrencyConflict.
    """
    validate_range(request.check_in, request.check_out)

    with storage_errors():
        room_type = get_active_room_type(request.room_type_id)

    if request.guests_count < 1:
        raise InvalidStay("At least one guest is required.")
    if request.guests_count > room_type.max_occupancy:
        raise InvalidStay(
            f"{room_type.name} rooms hold at most {room_type.max_occupancy} guests."
        )

    actor = _authenticated(actor)

    try:
        with transaction.atomic():
            customer = find_or_create_customer(
                request.full_name,
                request.email,
                request.phone,
                request.id_number,
                account=actor,
            )
            room_type = get_active_room_type(
                room_type.pk, queryset=RoomType.objects.select_for_update()
            )
            availability = availability_for(room_type, request.check_in, request.check_out)
            if availability.available_rooms <= 0:
                raise NoAvailability(
                    f"No {room_type.name} rooms available for selected dates."
                )

            price = compute_price(
                room_type,
                request.check_in,
                request.check_out,
                request.guests_count,
                request.breakfast,
                request.vehicle,
            )
            booking = Booking.objects.create(
                customer=customer,
                room_type=room_type,
                check_in=request.check_in,
                check_out=request.check_out,
                guests_count=request.guests_count,
                breakfast=request.breakfast,
                vehicle=request.vehicle,
                base_price=price.base_total,
                extras_price=price.extras_total,
                total_amount=price.grand_total,
                status=Status.PENDING,
                created_by=actor if role_at_least(actor, Role.STAFF) else None,
            )

            held = overlapping_bookings(room_type, request.check_in, request.check_out).count()
            if held + availability.blocked_rooms > room_type.total_rooms:
                raise ConcurrencyConflict()

            record_audit(
                "booking_created",
                entity="booking",
                entity_id=booking.id,
                actor=actor,
                after_state=booking_state(booking),
                details={
                    "room_type_id": room_type.id,
                    "customer_email": customer.email,
                    "check_in": request.check_in.isoformat(),
                    "check_out": request.check_out.isoformat(),
                    "availability_check": True,
                },
            )
            transaction.on_commit(
                partial(emit, booking_created, sender=Booking, booking=booking, actor=actor)
            )
    except OperationalError as exc:
        if _is_lock_error(exc):
            logger.warning("Booking for room type %s lost a race: %s", room_type.pk, exc)
            raise ConcurrencyConflict() from exc
        raise StorageUnavailable() from exc

    logger.info(
        "Booking %s created for %s (%s..%s, total %s)",
        booking.id, room_type.name, booking.check_in, booking.check_out, booking.total_amount,
    )
    return booking


def get_locked_booking(booking_id) -> Booking:
    try:
        return Booking.objects.select_for_update().get(pk=booking_id)
    except (Booking.DoesNotExist, ValueError, TypeError):
        raise NotFound(f"Booking {booking_id} not found.")


def apply_transition(booking: Booking, new_status, actor) -> Booking:
    """Move a booking that the caller has already locked to new_status."""
    current_status = booking.status
    if not is_legal_transition(current_status, new_status):
        raise InvalidTransition(current_status, new_status)

    before = booking_state(booking)
    booking.status = new_status
    update_fields = ["status", "updated_at"]

    if (
        new_status == Status.CONFIRMED
        and booking.assigned_staff_id is None
        and actor is not None
    ):
        booking.assigned_staff = actor
        update_fields.append("assigned_staff")

    booking.save(update_fields=update_fields)

    record_audit(
        "booking_status_changed",
        entity="booking",
        entity_id=booking.id,
        actor=actor,
        before_state=before,
        after_state=booking_state(booking),
    )
    transaction.on_commit(
        partial(
            emit,
            booking_status_changed,
            sender=Booking,
            booking=booking,
            old_status=current_status,
            new_status=new_status,
            actor=actor,
        )
    )
    logger.info("Booking %s: %s -> %s", booking.id, current_status, new_status)
    return booking


def transition_status(booking_id, new_status, actor) -> Booking:
    require_role(actor, Role.STAFF)
    if new_status not in Status.values:
        raise InvalidTransition(message=f"Invalid status '{new_status}'.")

    with storage_errors(), transaction.atomic():
        booking = get_locked_booking(booking_id)
        return apply_transition(booking, Status(new_status), _authenticated(actor))


def cancel_booking(booking_id, actor) -> Booking:
    return transition_status(booking_id, Status.CANCELLED, actor)


@dataclass
class OverstayReport:
    bookings: list
    newly_flagged: list


def detect_overstays(today: date | None = None) -> OverstayReport:
    """Flag Checked-In bookings whose check-out date has passed."""
    today = today or timezone.localdate()
    with storage_errors():
        overstays = list(
            Booking.objects.filter(
                status=Status.CHECKED_IN, check_out__lt=today
            ).select_related("customer", "room_type")
        )
        newly_flagged = [b.pk for b in overstays if not b.overstay_detected]
        if newly_flagged:
            Booking.objects.filter(pk__in=newly_flagged).update(overstay_detected=True)

    for booking in overstays:
        booking.overstay_detected = True
    if newly_flagged:
        logger.warning("Detected %s new overstays: %s", len(newly_flagged), newly_flagged)
    return OverstayReport(bookings=overstays, newly_flagged=newly_flagged)
