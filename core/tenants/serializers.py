from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from rest_framework import serializers

from core.common.middleware import RESERVED_SEGMENTS
from core.tenants.models import Tenant, TenantSettings

TENANT_SLUG = r"^[a-z0-9-]+$"
HHMM = r"^([01][0-9]|2[0-3]):[0-5][0-9]$"


def _check_timezone(value):
    try:
        ZoneInfo(value)
    except (ZoneInfoNotFoundError, ValueError):
        raise serializers.ValidationError("Unknown timezone.")
    return value


class TenantSerializer(serializers.ModelSerializer):
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)

    class Meta:
        model = Tenant
        fields = ["id", "name", "slug", "industry", "timezone", "createdAt"]


class TenantCreateSerializer(serializers.Serializer):
    name = serializers.CharField(min_length=1, max_length=255)
    slug = serializers.RegexField(TENANT_SLUG, min_length=3, max_length=50)
    industry = serializers.CharField(required=False, allow_blank=True, max_length=100, default="")
    timezone = serializers.CharField(required=False, max_length=64, default="Europe/London")

    def validate_slug(self, value):
        if value in RESERVED_SEGMENTS:
            raise serializers.ValidationError("This slug is reserved.")
        if Tenant.objects.filter(slug=value).exists():
            raise serializers.ValidationError("This slug is already in use.")
        return value

    def validate_timezone(self, value):
        return _check_timezone(value)


class TenantSettingsSerializer(serializers.ModelSerializer):
    businessName = serializers.CharField(source="business_name", required=False, allow_blank=True, max_length=255)
    businessAddress = serializers.CharField(source="business_address", required=False, allow_blank=True, max_length=500)
    businessPhone = serializers.CharField(source="business_phone", required=False, allow_blank=True, max_length=32)
    businessEmail = serializers.EmailField(source="business_email", required=False, allow_blank=True)
    website = serializers.URLField(required=False, allow_blank=True)
    workingHoursStart = serializers.RegexField(HHMM, source="working_hours_start", required=False)
    workingHoursEnd = serializers.RegexField(HHMM, source="working_hours_end", required=False)
    workingDays = serializers.ListField(
        source="working_days", child=serializers.IntegerField(min_value=1, max_value=7), required=False
    )
    defaultEmailSender = serializers.CharField(
        source="default_email_sender", required=False, allow_blank=True, max_length=255
    )
    defaultSmsSender = serializers.CharField(source="default_sms_sender", required=False, allow_blank=True, max_length=32)
    autoAssignLeads = serializers.BooleanField(source="auto_assign_leads", required=False)
    leadSlaHours = serializers.IntegerField(source="lead_sla_hours", required=False, min_value=1, max_value=720)
    primaryColor = serializers.RegexField(r"^#[0-9A-Fa-f]{6}$", source="primary_color", required=False)
    logo = serializers.CharField(required=False, allow_blank=True, max_length=500)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = TenantSettings
        fields = [
            "businessName",
            "businessAddress",
            "businessPhone",
            "businessEmail",
            "website",
            "workingHoursStart",
            "workingHoursEnd",
            "workingDays",
            "defaultEmailSender",
            "defaultSmsSender",
            "autoAssignLeads",
            "leadSlaHours",
            "primaryColor",
            "logo",
            "updatedAt",
        ]
