from datetime import date, timedelta
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from account.roles import Role
from booking.models import Booking, Customer
from room.models import RoomType

BOOKINGS_URL = reverse("booking:booking-list")


def booking_action_url(booking_id, action):
    return reverse(f"booking:booking-{action}", args=[booking_id])


class BookingViewSetTest(APITestCase):
    def setUp(self):
        self.user = get_user_model().objects.create_user(
            email="user@test.com", password="password123"
        )
        self.staff = get_user_model().objects.create_user(
            email="staff@test.com", password="password123", role=Role.STAFF
        )
        self.admin = get_user_model().objects.create_superuser(
            email="admin@test.com", password="adminpass123"
        )

        self.room_type = RoomType.objects.create(
            name="Double", total_rooms=2, base_price=Decimal("4800.00"), max_occupancy=2
        )

        self.user_booking = self.create_booking(email="user@test.com", user=self.user)
        self.other_booking = self.create_booking(
            email="other@test.com", status=Booking.BookingStatus.CONFIRMED
        )

    def create_booking(self, email, status=Booking.BookingStatus.PENDING, offset=1, user=None):
        customer, _ = Customer.objects.get_or_create(
            email=email, defaults={"full_name": email.split("@")[0], "user": user}
        )
        return Booking.objects.create(
            customer=customer,
            room_type=self.room_type,
            check_in=date.today() + timedelta(days=offset),
            check_out=date.today() + timedelta(days=offset + 2),
            base_price=Decimal("9600.00"),
            total_amount=Decimal("9600.00"),
            status=status,
        )

    def test_authentication_required(self):
        response = self.client.get(BOOKINGS_URL)
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_customer_sees_only_own_bookings(self):
        self.client.force_authenticate(user=self.user)

        response = self.client.get(BOOKINGS_URL)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data), 1)
        self.assertEqual(response.data[0]["id"], self.user_booking.id)

    def test_customer_cannot_retrieve_foreign_booking(self):
        self.client.force_authenticate(user=self.user)

        response = self.client.get(
            reverse("booking:booking-detail", args=[self.other_booking.id])
        )

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_staff_sees_all_bookings(self):
        self.client.force_authenticate(user=self.staff)

        response = self.client.get(BOOKINGS_URL)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(Booking.objects.count(), len(response.data))

    def test_filter_by_status(self):
        self.client.force_authenticate(user=self.admin)

        response = self.client.get(BOOKINGS_URL, {"status": "Confirmed"})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data), 1)
        self.assertTrue(all(b["status"] == "Confirmed" for b in response.data))

    def test_filter_by_email(self):
        self.client.force_authenticate(user=self.admin)

        response = self.client.get(BOOKINGS_URL, {"email": "OTHER@test.com"})

        self.assertEqual(len(response.data), 1)
        self.assertEqual(response.data[0]["customer"]["email"], "other@test.com")

    def test_anonymous_guest_can_book(self):
        payload = {
            "room_type": self.room_type.id,
            "check_in": str(date.today() + timedelta(days=10)),
            "check_out": str(date.today() + timedelta(days=12)),
            "guests_count": 2,
            "full_name": "Walk In",
            "email": "walkin@test.com",
            "breakfast": True,
        }

        response = self.client.post(BOOKINGS_URL, payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["status"], Booking.BookingStatus.PENDING)
        self.assertEqual(response.data["total_amount"], "9600.00")
        self.assertEqual(response.data["outstanding_balance"], "9600.00")
        self.assertIsNone(response.data["created_by"])

    def test_customer_booking_is_linked_to_account(self):
        self.client.force_authenticate(user=self.user)
        payload = {
            "room_type": self.room_type.id,
            "check_in": str(date.today() + timedelta(days=10)),
            "check_out": str(date.today() + timedelta(days=11)),
            "full_name": "User",
            "email": "user@test.com",
        }

        response = self.client.post(BOOKINGS_URL, payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertIsNone(response.data["created_by"])
        booking = Booking.objects.get(pk=response.data["id"])
        self.assertEqual(booking.customer.user, self.user)

        listing = self.client.get(BOOKINGS_URL)
        self.assertIn(booking.id, [b["id"] for b in listing.data])

    def test_staff_booking_records_creator(self):
        self.client.force_authenticate(user=self.staff)
        payload = {
            "room_type": self.room_type.id,
            "check_in": str(date.today() + timedelta(days=10)),
            "check_out": str(date.today() + timedelta(days=11)),
            "full_name": "Phone Guest",
            "email": "phone@test.com",
        }

        response = self.client.post(BOOKINGS_URL, payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["created_by"], self.staff.id)
        booking = Booking.objects.get(pk=response.data["id"])
        self.assertIsNone(booking.customer.user)

    def test_guest_bookings_stay_hidden_from_matching_account(self):
        guest_booking = self.create_booking(email="victim@test.com", offset=30)
        guest_booking.customer.id_number = "ID-SECRET"
        guest_booking.customer.save()
        attacker = get_user_model().objects.create_user(
            email="attacker@test.com", password="password123"
        )
        self.client.force_authenticate(user=attacker)

        rename = self.client.patch(
            reverse("account:manage"), {"email": "victim@test.com"}, format="json"
        )
        response = self.client.get(BOOKINGS_URL)

        self.assertEqual(rename.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data, [])

    def test_registering_with_guest_email_does_not_expose_bookings(self):
        self.create_booking(email="walkin@test.com", offset=30)
        late_account = get_user_model().objects.create_user(
            email="walkin@test.com", password="password123"
        )
        self.client.force_authenticate(user=late_account)

        response = self.client.get(BOOKINGS_URL)

        self.assertEqual(response.data, [])

    def test_create_booking_without_availability(self):
        self.create_booking(email="third@test.com", offset=20)
        self.create_booking(email="fourth@test.com", offset=20)
        payload = {
            "room_type": self.room_type.id,
            "check_in": str(date.today() + timedelta(days=21)),
            "check_out": str(date.today() + timedelta(days=23)),
            "full_name": "Late Comer",
            "email": "late@test.com",
        }

        response = self.client.post(BOOKINGS_URL, payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(response.data["code"], "no_availability")
        self.assertFalse(response.data["retryable"])

    def test_create_booking_in_past_fails(self):
        payload = {
            "room_type": self.room_type.id,
            "check_in": str(date.today() - timedelta(days=1)),
            "check_out": str(date.today() + timedelta(days=1)),
            "full_name": "Late",
            "email": "late@test.com",
        }

        response = self.client.post(BOOKINGS_URL, payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("check_in", response.data)

    def test_customer_cannot_confirm(self):
        self.client.force_authenticate(user=self.user)

        response = self.client.post(booking_action_url(self.user_booking.id, "confirm"))

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_staff_walks_booking_through_stay(self):
        self.client.force_authenticate(user=self.staff)

        for action, expected in (
            ("confirm", Booking.BookingStatus.CONFIRMED),
            ("check-in", Booking.BookingStatus.CHECKED_IN),
            ("check-out", Booking.BookingStatus.CHECKED_OUT),
        ):
            response = self.client.post(booking_action_url(self.user_booking.id, action))
            self.assertEqual(response.status_code, status.HTTP_200_OK)
            self.assertEqual(response.data["status"], expected)

        self.user_booking.refresh_from_db()
        self.assertEqual(self.user_booking.assigned_staff, self.staff)

    def test_change_status_rejects_illegal_move(self):
        self.client.force_authenticate(user=self.staff)

        response = self.client.patch(
            booking_action_url(self.user_booking.id, "change-status"),
            {"status": Booking.BookingStatus.CHECKED_OUT},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(response.data["code"], "invalid_transition")

    def test_cancel(self):
        self.client.force_authenticate(user=self.staff)

        response = self.client.post(booking_action_url(self.other_booking.id, "cancel"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.other_booking.refresh_from_db()
        self.assertEqual(self.other_booking.status, Booking.BookingStatus.CANCELLED)

    def test_overstays_endpoint(self):
        self.client.force_authenticate(user=self.staff)
        overstay = Booking.objects.create(
            customer=self.user_booking.customer,
            room_type=self.room_type,
            check_in=date.today() - timedelta(days=4),
            check_out=date.today() - timedelta(days=1),
            base_price=Decimal("9600.00"),
            total_amount=Decimal("9600.00"),
            status=Booking.BookingStatus.CHECKED_IN,
        )

        response = self.client.post(reverse("booking:booking-overstays"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["overstays_detected"], 1)
        self.assertEqual(response.data["newly_flagged"], [overstay.id])
