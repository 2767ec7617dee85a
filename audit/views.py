from django_filters.rest_framework import DjangoFilterBackend
from rest_framework.viewsets import ReadOnlyModelViewSet
from rest_framework_simplejwt.authentication import JWTAuthentication

from account.permissions import IsAdminRole
from audit.filters import AuditLogFilter
from audit.models import AuditLog
from audit.serializers import AuditLogSerializer


class AuditLogViewSet(ReadOnlyModelViewSet):
    queryset = AuditLog.objects.select_related("actor")
    serializer_class = AuditLogSerializer
    authentication_classes = (JWTAuthentication,)
    permission_classes = (IsAdminRole,)
    filter_backends = [DjangoFilterBackend]
    filterset_class = AuditLogFilter
