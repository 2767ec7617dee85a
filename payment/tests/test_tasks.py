from datetime import date
from decimal import Decimal
from unittest.mock import patch

from django.test import TestCase

from booking.models import Booking, Customer
from payment.models import Payment
from payment.tasks import check_payment_integrity, notify_successful_payment_telegram
from room.models import RoomType


class PaymentTasksTestCase(TestCase):
    def setUp(self):
        room_type = RoomType.objects.create(
            name="Suite", total_rooms=1, base_price=Decimal("9000.00")
        )
        customer = Customer.objects.create(full_name="John Doe", email="john@test.com")
        self.booking = Booking.objects.create(
            customer=customer,
            room_type=room_type,
            check_in=date(2031, 2, 1),
            check_out=date(2031, 2, 2),
            base_price=Decimal("9000.00"),
            total_amount=Decimal("9000.00"),
            paid_amount=Decimal("3000.00"),
        )

    def test_integrity_check_reports_drift(self):
        Payment.objects.create(
            booking=self.booking, amount_paid=Decimal("2000.00"), method="cash"
        )

        with self.assertLogs("payment.tasks", level="ERROR") as logs:
            result = check_payment_integrity()

        self.assertEqual(result, "Checked 1 bookings, 1 inconsistent")
        self.assertIn(f"Booking {self.booking.id}", logs.output[0])

    def test_integrity_check_consistent(self):
        Payment.objects.create(
            booking=self.booking, amount_paid=Decimal("3000.00"), method="cash"
        )

        self.assertEqual(check_payment_integrity(), "Checked 1 bookings, 0 inconsistent")

    @patch("payment.tasks.send_telegram_notification.delay")
    def test_notify_successful_payment(self, mock_send):
        payment = Payment.objects.create(
            booking=self.booking, amount_paid=Decimal("3000.00"), method="card"
        )

        notify_successful_payment_telegram(payment.id)

        message = mock_send.call_args.args[0]
        self.assertIn("Payment Received", message)
        self.assertIn("3000.00", message)

    def test_notify_missing_payment(self):
        self.assertEqual(
            notify_successful_payment_telegram(424242), "Could not find payment 424242"
        )
