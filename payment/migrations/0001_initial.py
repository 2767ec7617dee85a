import django.core.validators
import django.db.models.deletion
import django.utils.timezone
from decimal import Decimal
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("booking", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Payment",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("amount_paid", models.DecimalField(decimal_places=2, max_digits=12, validators=[django.core.validators.MinValueValidator(Decimal("0.01"))])),
                ("method", models.CharField(choices=[("cash", "Cash"), ("card", "Card"), ("mobile_money", "Mobile Money"), ("bank_transfer", "Bank Transfer")], max_length=20)),
                ("receipt_reference", models.CharField(blank=True, max_length=255)),
                ("session_id", models.CharField(blank=True, max_length=255)),
                ("paid_at", models.DateTimeField(default=django.utils.timezone.now)),
                ("booking", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="payments", to="booking.booking")),
                ("recorded_by", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="recorded_payments", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "ordering": ("-paid_at",),
                "constraints": [
                    models.CheckConstraint(condition=models.Q(("amount_paid__gt", 0)), name="payment_amount_positive"),
                    models.UniqueConstraint(condition=models.Q(("session_id", ""), _negated=True), fields=("session_id",), name="unique_checkout_session"),
                ],
            },
        ),
    ]
