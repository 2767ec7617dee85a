from django.contrib import admin

from payment.models import Payment


@admin.register(Payment)
class PaymentAdmin(admin.ModelAdmin):
    list_display = ("id", "booking", "amount_paid", "method", "paid_at", "recorded_by")
    list_filter = ("method",)
    search_fields = ("receipt_reference", "session_id", "booking__customer__email")
    readonly_fields = [field.name for field in Payment._meta.fields]

    def has_delete_permission(self, request, obj=None):
        return False
