import django_filters

from audit.models import AuditLog


class AuditLogFilter(django_filters.FilterSet):
    from_date = django_filters.DateFilter(field_name="timestamp", lookup_expr="date__gte")
    to_date = django_filters.DateFilter(field_name="timestamp", lookup_expr="date__lte")

    class Meta:
        model = AuditLog
        fields = ["action", "entity", "entity_id", "actor"]
