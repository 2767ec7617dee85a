from rest_framework import serializers

from audit.models import AuditLog


class AuditLogSerializer(serializers.ModelSerializer):
    actor_email = serializers.EmailField(source="actor.email", read_only=True, default=None)

    class Meta:
        model = AuditLog
        fields = (
            "id",
            "action",
            "entity",
            "entity_id",
            "actor",
            "actor_email",
            "before_state",
            "after_state",
            "details",
            "timestamp",
        )
        read_only_fields = fields
