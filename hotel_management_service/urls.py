from django.conf import settings
from django.contrib import admin
from django.urls import include, path
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView

urlpatterns = [
    path("admin/", admin.site.urls),
    path("api/user/", include("account.urls", namespace="account")),
    path("api/", include("booking.urls", namespace="booking")),
    path("api/", include("room.urls", namespace="room")),
    path("api/payments/", include("payment.urls", namespace="payment")),
    path("api/reports/", include("report.urls", namespace="report")),
    path("api/audit/", include("audit.urls", namespace="audit")),
    path("api/schema/", SpectacularAPIView.as_view(), name="schema"),
    path(
        "api/schema/swagger-ui/",
        SpectacularSwaggerView.as_view(url_name="schema"),
        name="swagger-ui",
    ),
]

if "debug_toolbar" in settings.INSTALLED_APPS:
    urlpatterns.append(path("__debug__/", include("debug_toolbar.urls")))
