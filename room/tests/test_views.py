from datetime import date, timedelta
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient, APITestCase

from account.roles import Role
from audit.models import AuditLog
from room.models import RoomBlock, RoomType, SeasonalPriceOverride

ROOM_TYPES_URL = reverse("room:room-types-list")
OVERRIDES_URL = reverse("room:seasonal-pricing-list")
BLOCKS_URL = reverse("room:room-blocks-list")


def room_type_detail_url(room_type_id: int) -> str:
    return reverse("room:room-types-detail", args=[room_type_id])


def room_type_action_url(room_type_id: int, action: str) -> str:
    return reverse(f"room:room-types-{action}", args=[room_type_id])


def create_user(**params):
    defaults = {
        "email": "user@test.com",
        "password": "test12345",
    }
    defaults.update(params)
    return get_user_model().objects.create_user(**defaults)


def create_room_type(**params):
    defaults = {
        "name": "Single",
        "total_rooms": 2,
        "base_price": Decimal("2500.00"),
        "max_occupancy": 2,
    }
    defaults.update(params)
    return RoomType.objects.create(**defaults)


class PublicRoomTypeApiTests(APITestCase):
    def setUp(self):
        self.client = APIClient()

    def test_list_room_types_allowed_for_anon(self):
        create_room_type(name="Single")
        create_room_type(name="Double")
        create_room_type(name="Closed", active=False)

        res = self.client.get(ROOM_TYPES_URL)

        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(len(res.data), 2)

    def test_create_room_type_unauthorized_for_anon(self):
        payload = {"name": "Suite", "total_rooms": 1, "base_price": "9000.00"}

        res = self.client.post(ROOM_TYPES_URL, payload)

        self.assertEqual(res.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_availability_for_anon(self):
        room_type = create_room_type()
        start = date.today() + timedelta(days=10)

        res = self.client.get(
            room_type_action_url(room_type.id, "availability"),
            {"start_date": start, "end_date": start + timedelta(days=2)},
        )

        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["available_rooms"], 2)
        self.assertEqual(res.data["total_rooms"], 2)

    def test_availability_with_inverted_range(self):
        room_type = create_room_type()
        start = date.today() + timedelta(days=10)

        res = self.client.get(
            room_type_action_url(room_type.id, "availability"),
            {"start_date": start, "end_date": start},
        )

        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(res.data["code"], "invalid_date_range")

    def test_calendar_returns_one_entry_per_day(self):
        room_type = create_room_type()
        start = date.today() + timedelta(days=10)

        res = self.client.get(
            room_type_action_url(room_type.id, "calendar"),
            {"date_from": start, "date_to": start + timedelta(days=6)},
        )

        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(len(res.data), 7)

    def test_quote_includes_price_and_occupancy_error(self):
        room_type = create_room_type(max_occupancy=2)
        start = date.today() + timedelta(days=10)

        res = self.client.get(
            room_type_action_url(room_type.id, "quote"),
            {"check_in": start, "check_out": start + timedelta(days=2), "guests_count": 3},
        )

        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertFalse(res.data["is_available"])
        self.assertIn("at most 2 guests", res.data["error_message"])
        self.assertEqual(res.data["price"]["nights"], 2)


class CustomerRoomTypeApiTests(APITestCase):
    def setUp(self):
        self.client = APIClient()
        self.user = create_user()
        self.client.force_authenticate(self.user)

    def test_customer_cannot_create_room_type(self):
        payload = {"name": "Suite", "total_rooms": 1, "base_price": "9000.00"}

        res = self.client.post(ROOM_TYPES_URL, payload)

        self.assertEqual(res.status_code, status.HTTP_403_FORBIDDEN)

    def test_customer_cannot_add_seasonal_price(self):
        room_type = create_room_type()
        payload = {
            "room_type": room_type.id,
            "start_date": "2031-12-20",
            "end_date": "2031-12-31",
            "override_price": "4000.00",
        }

        res = self.client.post(OVERRIDES_URL, payload)

        self.assertEqual(res.status_code, status.HTTP_403_FORBIDDEN)


class ManagerRoomTypeApiTests(APITestCase):
    def setUp(self):
        self.client = APIClient()
        self.manager = create_user(email="manager@test.com", role=Role.MANAGER)
        self.client.force_authenticate(self.manager)

    def test_create_room_type(self):
        payload = {
            "name": "Suite",
            "total_rooms": 4,
            "base_price": "9000.00",
            "max_occupancy": 4,
            "extra_guest_fee": "800.00",
        }

        res = self.client.post(ROOM_TYPES_URL, payload)

        self.assertEqual(res.status_code, status.HTTP_201_CREATED)
        room_type = RoomType.objects.get(id=res.data["id"])
        self.assertEqual(room_type.extra_guest_fee, Decimal("800.00"))

    def test_delete_deactivates_room_type(self):
        room_type = create_room_type()

        res = self.client.delete(room_type_detail_url(room_type.id))

        self.assertEqual(res.status_code, status.HTTP_204_NO_CONTENT)
        room_type.refresh_from_db()
        self.assertFalse(room_type.active)
        self.assertTrue(
            AuditLog.objects.filter(
                action="room_type_deactivated", entity_id=str(room_type.id)
            ).exists()
        )

    def test_manager_sees_inactive_room_types(self):
        create_room_type(name="Closed", active=False)

        res = self.client.get(ROOM_TYPES_URL)

        self.assertEqual(len(res.data), 1)

    def test_add_seasonal_price(self):
        room_type = create_room_type()
        payload = {
            "room_type": room_type.id,
            "start_date": "2031-12-20",
            "end_date": "2031-12-31",
            "override_price": "4000.00",
            "reason": "Festive season",
        }

        res = self.client.post(OVERRIDES_URL, payload)

        self.assertEqual(res.status_code, status.HTTP_201_CREATED)
        override = SeasonalPriceOverride.objects.get(id=res.data["id"])
        self.assertEqual(override.created_by, self.manager)
        self.assertTrue(override.active)

    def test_overlapping_seasonal_price_rejected(self):
        room_type = create_room_type()
        SeasonalPriceOverride.objects.create(
            room_type=room_type,
            start_date=date(2031, 12, 20),
            end_date=date(2031, 12, 31),
            override_price=Decimal("4000.00"),
        )
        payload = {
            "room_type": room_type.id,
            "start_date": "2031-12-31",
            "end_date": "2032-01-02",
            "override_price": "3500.00",
        }

        res = self.client.post(OVERRIDES_URL, payload)

        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(res.data["code"], "overlapping_override")

    def test_manager_cannot_delete_seasonal_price(self):
        override = SeasonalPriceOverride.objects.create(
            room_type=create_room_type(),
            start_date=date(2031, 12, 20),
            end_date=date(2031, 12, 31),
            override_price=Decimal("4000.00"),
        )

        res = self.client.delete(reverse("room:seasonal-pricing-detail", args=[override.id]))

        self.assertEqual(res.status_code, status.HTTP_403_FORBIDDEN)
        override.refresh_from_db()
        self.assertTrue(override.active)

    def test_block_and_release_rooms(self):
        room_type = create_room_type()
        payload = {
            "room_type": room_type.id,
            "start_date": "2031-05-01",
            "end_date": "2031-05-03",
            "blocked_rooms": 1,
            "reason": RoomBlock.BlockReason.MAINTENANCE,
        }

        res = self.client.post(BLOCKS_URL, payload)

        self.assertEqual(res.status_code, status.HTTP_201_CREATED)
        block = RoomBlock.objects.get(id=res.data["id"])
        self.assertTrue(block.active)

        res = self.client.delete(reverse("room:room-blocks-detail", args=[block.id]))

        self.assertEqual(res.status_code, status.HTTP_204_NO_CONTENT)
        block.refresh_from_db()
        self.assertFalse(block.active)


class AdminSeasonalPriceApiTests(APITestCase):
    def test_admin_deactivates_seasonal_price(self):
        admin = get_user_model().objects.create_superuser(
            email="admin@test.com", password="test12345"
        )
        self.client.force_authenticate(admin)
        override = SeasonalPriceOverride.objects.create(
            room_type=create_room_type(),
            start_date=date(2031, 12, 20),
            end_date=date(2031, 12, 31),
            override_price=Decimal("4000.00"),
        )

        res = self.client.delete(reverse("room:seasonal-pricing-detail", args=[override.id]))

        self.assertEqual(res.status_code, status.HTTP_204_NO_CONTENT)
        override.refresh_from_db()
        self.assertFalse(override.active)
