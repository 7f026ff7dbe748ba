from rest_framework import serializers

from core.audit.models import AuditLog
from core.iam.utils import display_name


class AuditLogSerializer(serializers.ModelSerializer):
    leadId = serializers.UUIDField(source="lead_id", read_only=True, allow_null=True)
    userId = serializers.IntegerField(source="user_id", read_only=True, allow_null=True)
    user = serializers.SerializerMethodField()
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)

    class Meta:
        model = AuditLog
        fields = ["id", "action", "leadId", "userId", "user", "meta", "createdAt"]

    def get_user(self, log):
        return display_name(log.user) or "System"
