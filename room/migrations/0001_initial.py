import django.core.validators
import django.db.models.deletion
from decimal import Decimal
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="RoomType",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=100, unique=True)),
                ("description", models.TextField(blank=True)),
                ("total_rooms", models.PositiveIntegerField(default=0)),
                ("base_price", models.DecimalField(decimal_places=2, max_digits=10, validators=[django.core.validators.MinValueValidator(Decimal("0"))])),
                ("max_occupancy", models.PositiveIntegerField(default=2, validators=[django.core.validators.MinValueValidator(1)])),
                ("standard_occupancy", models.PositiveIntegerField(default=2)),
                ("extra_guest_fee", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=10, validators=[django.core.validators.MinValueValidator(Decimal("0"))])),
                ("breakfast_price", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=10, validators=[django.core.validators.MinValueValidator(Decimal("0"))])),
                ("active", models.BooleanField(default=True)),
            ],
            options={
                "ordering": ("name",),
                "constraints": [
                    models.CheckConstraint(condition=models.Q(("max_occupancy__gte", 1)), name="room_type_max_occupancy_positive"),
                ],
            },
        ),
        migrations.CreateModel(
            name="SeasonalPriceOverride",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("start_date", models.DateField()),
                ("end_date", models.DateField()),
                ("override_price", models.DecimalField(decimal_places=2, max_digits=10, validators=[django.core.validators.MinValueValidator(Decimal("0"))])),
                ("reason", models.CharField(default="Seasonal adjustment", max_length=255)),
                ("active", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("created_by", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="+", to=settings.AUTH_USER_MODEL)),
                ("room_type", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="price_overrides", to="room.roomtype")),
            ],
            options={
                "ordering": ("start_date",),
                "constraints": [
                    models.CheckConstraint(condition=models.Q(("end_date__gte", models.F("start_date"))), name="override_end_not_before_start"),
                ],
            },
        ),
        migrations.CreateModel(
            name="RoomBlock",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("start_date", models.DateField()),
                ("end_date", models.DateField()),
                ("blocked_rooms", models.PositiveIntegerField(validators=[django.core.validators.MinValueValidator(1)])),
                ("reason", models.CharField(choices=[("maintenance", "Maintenance"), ("admin_hold", "Admin Hold"), ("renovation", "Renovation"), ("emergency", "Emergency")], max_length=20)),
                ("description", models.TextField(blank=True)),
                ("active", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("created_by", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="+", to=settings.AUTH_USER_MODEL)),
                ("room_type", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="blocks", to="room.roomtype")),
            ],
            options={
                "ordering": ("start_date",),
                "constraints": [
                    models.CheckConstraint(condition=models.Q(("end_date__gte", models.F("start_date"))), name="block_end_not_before_start"),
                ],
            },
        ),
    ]
