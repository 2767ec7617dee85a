from rest_framework import routers

from audit.views import AuditLogViewSet

app_name = "audit"

router = routers.SimpleRouter()
router.register("", AuditLogViewSet, basename="auditlog")

urlpatterns = router.urls
