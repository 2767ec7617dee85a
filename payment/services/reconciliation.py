import logging
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from functools import partial

from django.db import transaction
from django.db.models import Sum

from account.roles import Role, require_role
from audit.services import record_audit
from booking.exceptions import NotFound
from booking.models import Booking
from booking.services.lifecycle import apply_transition, booking_state, get_locked_booking
from booking.signals import emit
from hotel_management_service.exceptions import storage_errors
from payment.exceptions import InvalidAmount, InvalidBookingState, InvalidPaymentMethod
from payment.models import Payment
from payment.signals import payment_confirmed

logger = logging.getLogger(__name__)

CENTS = Decimal("0.01")

CLOSED_STATUSES = (
    Booking.BookingStatus.CANCELLED,
    Booking.BookingStatus.CHECKED_OUT,
)


@dataclass(frozen=True)
class PaymentResult:
    payment: Payment
    paid_amount: Decimal
    outstanding_balance: Decimal
    status: str


@dataclass(frozen=True)
class Reconciliation:
    booking_id: int
    total_amount: Decimal
    stored_paid_amount: Decimal
    paid_amount: Decimal
    outstanding_balance: Decimal
    drift: Decimal

    @property
    def is_consistent(self) -> bool:
        return self.drift == 0 and self.paid_amount <= self.total_amount


def payments_total(booking_id) -> Decimal:
    total = Payment.objects.filter(booking_id=booking_id).aggregate(
        total=Sum("amount_paid")
    )["total"]
    return (total or Decimal("0")).quantize(CENTS)


def outstanding(total_amount: Decimal, paid_amount: Decimal) -> Decimal:
    return max(Decimal("0.00"), total_amount - paid_amount)


def _to_amount(amount) -> Decimal:
    try:
        value = Decimal(str(amount)).quantize(CENTS)
    except (InvalidOperation, ValueError, TypeError):
        raise InvalidAmount(f"'{amount}' is not a valid amount.")
    if not value.is_finite() or value <= 0:
        raise InvalidAmount()
    return value


def _record_payment(booking_id, amount, method, actor, receipt_reference="",
                    session_id="") -> PaymentResult:
    with storage_errors(), transaction.atomic():
        booking = get_locked_booking(booking_id)
        if booking.status in CLOSED_STATUSES:
            raise InvalidBookingState(booking.id, booking.status)
        amount = _to_amount(amount)
        if method not in Payment.PaymentMethod.values:
            raise InvalidPaymentMethod(f"Unknown payment method '{method}'.")

        balance = outstanding(booking.total_amount, payments_total(booking.pk))
        if amount > balance:
            raise InvalidAmount(
                f"Payment of {amount} exceeds outstanding balance of {balance}."
            )

        before = booking_state(booking)
        payment = Payment.objects.create(
            booking=booking,
            amount_paid=amount,
            method=method,
            receipt_reference=receipt_reference,
            session_id=session_id,
            recorded_by=actor,
        )

        booking.paid_amount = payments_total(booking.pk)
        booking.save(update_fields=["paid_amount", "updated_at"])

        record_audit(
            "payment_recorded",
            entity="payment",
            entity_id=payment.id,
            actor=actor,
            before_state=before,
            after_state=booking_state(booking),
            details={
                "booking_id": booking.id,
                "amount_paid": str(amount),
                "method": method,
                "receipt_reference": receipt_reference,
            },
        )

        # full payment confirms a pending booking
        if (
            booking.paid_amount >= booking.total_amount
            and booking.status == Booking.BookingStatus.PENDING
        ):
            apply_transition(booking, Booking.BookingStatus.CONFIRMED, actor)

        transaction.on_commit(
            partial(
                emit,
                payment_confirmed,
                sender=Payment,
                payment=payment,
                booking=booking,
                actor=actor,
            )
        )

    logger.info(
        "Payment %s of %s (%s) recorded for booking %s; paid %s of %s",
        payment.id, amount, method, booking.id, booking.paid_amount, booking.total_amount,
    )
    return PaymentResult(
        payment=payment,
        paid_amount=booking.paid_amount,
        outstanding_balance=outstanding(booking.total_amount, booking.paid_amount),
        status=booking.status,
    )


def record_payment(booking_id, amount, method, actor, receipt_reference="") -> PaymentResult:
    """Append a payment taken at the desk and re-derive the booking's paid amount."""
    require_role(actor, Role.STAFF)
    return _record_payment(booking_id, amount, method, actor, receipt_reference)


def record_checkout_payment(session_id: str, booking_id, amount) -> PaymentResult:
    """Record a completed card checkout once, however often it is delivered."""
    existing = Payment.objects.filter(session_id=session_id).select_related("booking").first()
    if existing is not None:
        booking = existing.booking
        return PaymentResult(
            payment=existing,
            paid_amount=booking.paid_amount,
            outstanding_balance=outstanding(booking.total_amount, booking.paid_amount),
            status=booking.status,
        )

    return _record_payment(
        booking_id,
        amount,
        Payment.PaymentMethod.CARD,
        actor=None,
        receipt_reference=session_id,
        session_id=session_id,
    )


def reconcile(booking_id) -> Reconciliation:
    """Compare the stored paid amount against the sum of payment rows."""
    with storage_errors():
        try:
            booking = Booking.objects.get(pk=booking_id)
        except (Booking.DoesNotExist, ValueError, TypeError):
            raise NotFound(f"Booking {booking_id} not found.")
        paid = payments_total(booking.pk)

    return Reconciliation(
        booking_id=booking.pk,
        total_amount=booking.total_amount,
        stored_paid_amount=booking.paid_amount,
        paid_amount=paid,
        outstanding_balance=outstanding(booking.total_amount, paid),
        drift=booking.paid_amount - paid,
    )
