from datetime import date
from decimal import Decimal
from unittest.mock import MagicMock

from django.contrib.auth import get_user_model
from django.test import TestCase

from account.roles import Role
from audit.models import AuditLog
from booking.exceptions import NotFound
from booking.models import Booking, Customer
from hotel_management_service.exceptions import InsufficientRole
from payment.exceptions import InvalidAmount, InvalidBookingState, InvalidPaymentMethod
from payment.models import Payment
from payment.services.reconciliation import (
    reconcile,
    record_checkout_payment,
    record_payment,
)
from payment.signals import payment_confirmed
from room.models import RoomType


class PaymentTestMixin:
    def setUp(self):
        self.staff = get_user_model().objects.create_user(
            email="cashier@test.com", password="test12345", role=Role.STAFF
        )
        self.room_type = RoomType.objects.create(
            name="Double", total_rooms=3, base_price=Decimal("4800.00")
        )
        self.customer = Customer.objects.create(full_name="Jane Doe", email="jane@test.com")
        self.booking = self.create_booking()

    def create_booking(self, status=Booking.BookingStatus.PENDING, total="9600.00"):
        return Booking.objects.create(
            customer=self.customer,
            room_type=self.room_type,
            check_in=date(2031, 1, 10),
            check_out=date(2031, 1, 12),
            base_price=Decimal(total),
            total_amount=Decimal(total),
            status=status,
        )


class RecordPaymentTests(PaymentTestMixin, TestCase):
    def test_two_payments_settle_and_confirm_booking(self):
        first = record_payment(self.booking.id, Decimal("5000"), "cash", self.staff)

        self.assertEqual(first.paid_amount, Decimal("5000.00"))
        self.assertEqual(first.outstanding_balance, Decimal("4600.00"))
        self.assertEqual(first.status, Booking.BookingStatus.PENDING)

        second = record_payment(self.booking.id, Decimal("4600"), "mobile_money", self.staff)

        self.assertEqual(second.outstanding_balance, Decimal("0.00"))
        self.assertEqual(second.status, Booking.BookingStatus.CONFIRMED)
        self.booking.refresh_from_db()
        self.assertEqual(self.booking.paid_amount, Decimal("9600.00"))
        self.assertEqual(self.booking.status, Booking.BookingStatus.CONFIRMED)
        self.assertEqual(self.booking.assigned_staff, self.staff)

    def test_full_payment_after_check_in_keeps_status(self):
        booking = self.create_booking(status=Booking.BookingStatus.CHECKED_IN)

        result = record_payment(booking.id, "9600.00", "card", self.staff)

        self.assertEqual(result.status, Booking.BookingStatus.CHECKED_IN)

    def test_payment_above_outstanding_rejected(self):
        record_payment(self.booking.id, Decimal("9000"), "cash", self.staff)

        with self.assertRaises(InvalidAmount):
            record_payment(self.booking.id, Decimal("600.01"), "cash", self.staff)

        self.booking.refresh_from_db()
        self.assertEqual(self.booking.paid_amount, Decimal("9000.00"))
        self.assertEqual(Payment.objects.count(), 1)

    def test_non_positive_amount_rejected(self):
        for amount in (Decimal("0"), Decimal("-10"), "abc"):
            with self.assertRaises(InvalidAmount):
                record_payment(self.booking.id, amount, "cash", self.staff)

    def test_unknown_method_rejected(self):
        with self.assertRaises(InvalidPaymentMethod):
            record_payment(self.booking.id, Decimal("100"), "cheque", self.staff)

    def test_closed_bookings_refuse_payment(self):
        for status in (Booking.BookingStatus.CANCELLED, Booking.BookingStatus.CHECKED_OUT):
            booking = self.create_booking(status=status)
            with self.assertRaises(InvalidBookingState):
                record_payment(booking.id, Decimal("100"), "cash", self.staff)

    def test_missing_booking(self):
        with self.assertRaises(NotFound):
            record_payment(999999, Decimal("100"), "cash", self.staff)

    def test_missing_booking_reported_before_bad_amount(self):
        with self.assertRaises(NotFound):
            record_payment(999999, Decimal("-1"), "cheque", self.staff)

    def test_closed_booking_reported_before_bad_amount(self):
        booking = self.create_booking(status=Booking.BookingStatus.CANCELLED)

        with self.assertRaises(InvalidBookingState):
            record_payment(booking.id, Decimal("0"), "cash", self.staff)

    def test_customer_cannot_record_payment(self):
        customer = get_user_model().objects.create_user(
            email="customer@test.com", password="test12345"
        )

        with self.assertRaises(InsufficientRole):
            record_payment(self.booking.id, Decimal("100"), "cash", customer)

    def test_payment_is_audited(self):
        payment = record_payment(
            self.booking.id, Decimal("1000"), "bank_transfer", self.staff,
            receipt_reference="TRX-1",
        ).payment

        entry = AuditLog.objects.get(action="payment_recorded")
        self.assertEqual(entry.entity_id, str(payment.id))
        self.assertEqual(entry.before_state["paid_amount"], "0.00")
        self.assertEqual(entry.after_state["paid_amount"], "1000.00")
        self.assertEqual(entry.details["receipt_reference"], "TRX-1")

    def test_payment_event_after_commit(self):
        receiver = MagicMock()
        payment_confirmed.connect(receiver, weak=False, dispatch_uid="test-payment")
        self.addCleanup(payment_confirmed.disconnect, dispatch_uid="test-payment")

        with self.captureOnCommitCallbacks(execute=True):
            result = record_payment(self.booking.id, Decimal("100"), "cash", self.staff)

        receiver.assert_called_once()
        self.assertEqual(receiver.call_args.kwargs["payment"], result.payment)


class CheckoutPaymentTests(PaymentTestMixin, TestCase):
    def test_same_session_recorded_once(self):
        first = record_checkout_payment("cs_test_1", self.booking.id, Decimal("9600.00"))
        second = record_checkout_payment("cs_test_1", self.booking.id, Decimal("9600.00"))

        self.assertEqual(first.payment.pk, second.payment.pk)
        self.assertEqual(Payment.objects.filter(session_id="cs_test_1").count(), 1)
        self.booking.refresh_from_db()
        self.assertEqual(self.booking.paid_amount, Decimal("9600.00"))
        self.assertEqual(self.booking.status, Booking.BookingStatus.CONFIRMED)
        self.assertEqual(first.payment.method, Payment.PaymentMethod.CARD)


class ReconcileTests(PaymentTestMixin, TestCase):
    def test_paid_amount_equals_sum_of_payments(self):
        for amount in ("1200.50", "3000.25", "99.25"):
            record_payment(self.booking.id, Decimal(amount), "cash", self.staff)

        result = reconcile(self.booking.id)

        self.assertEqual(result.paid_amount, Decimal("4300.00"))
        self.assertEqual(result.stored_paid_amount, Decimal("4300.00"))
        self.assertEqual(result.outstanding_balance, Decimal("5300.00"))
        self.assertEqual(result.drift, Decimal("0.00"))
        self.assertTrue(result.is_consistent)

    def test_detects_drift(self):
        record_payment(self.booking.id, Decimal("1000"), "cash", self.staff)
        Booking.objects.filter(pk=self.booking.pk).update(paid_amount=Decimal("1500.00"))

        result = reconcile(self.booking.id)

        self.assertEqual(result.drift, Decimal("500.00"))
        self.assertFalse(result.is_consistent)

    def test_missing_booking(self):
        with self.assertRaises(NotFound):
            reconcile(999999)
