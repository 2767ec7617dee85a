from django.urls import include, path
from rest_framework import routers

from payment.views import (
    CheckoutView,
    PaymentCancelView,
    PaymentSuccessView,
    PaymentViewSet,
    ReconcileView,
    StripeWebhook,
)

app_name = "payment"

router = routers.SimpleRouter()
router.register("", PaymentViewSet, basename="payment")

urlpatterns = [
    path("reconcile/<int:booking_id>/", ReconcileView.as_view(), name="reconcile"),
    path("checkout/<int:booking_id>/", CheckoutView.as_view(), name="checkout"),
    path("webhook/", StripeWebhook.as_view(), name="stripe-webhook"),
    path("success/", PaymentSuccessView.as_view(), name="success"),
    path("cancel/", PaymentCancelView.as_view(), name="cancel"),
    path("", include(router.urls)),
]
