# repo-root/core/leads/serializers.py

from rest_framework import serializers

from core.iam.utils import display_name
from core.leads.models import Lead, Appointment


class UserRefSerializer(serializers.Serializer):
    name = serializers.SerializerMethodField()
    email = serializers.EmailField(read_only=True)

    def get_name(self, user):
        return display_name(user)


class LeadSerializer(serializers.ModelSerializer):
    tenantId = serializers.UUIDField(source="tenant_id", read_only=True)
    statusId = serializers.UUIDField(source="status_id", read_only=True)
    productTypeId = serializers.UUIDField(source="product_type_id", read_only=True, allow_null=True)
    assignedUserId = serializers.IntegerField(source="assigned_user_id", read_only=True, allow_null=True)
    createdById = serializers.IntegerField(source="created_by_id", read_only=True)
    jobValue = serializers.DecimalField(source="job_value", max_digits=12, decimal_places=2, read_only=True, allow_null=True)
    estimatedValue = serializers.DecimalField(
        source="estimated_value", max_digits=12, decimal_places=2, read_only=True, allow_null=True
    )
    customFieldValues = serializers.JSONField(source="custom_field_values", read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    status = serializers.SerializerMethodField()
    productType = serializers.SerializerMethodField()
    createdBy = UserRefSerializer(source="created_by", read_only=True)
    assignedUser = UserRefSerializer(source="assigned_user", read_only=True, allow_null=True)

    class Meta:
        model = Lead
        fields = [
            "id",
            "tenantId",
            "name",
            "email",
            "phone",
            "address",
            "postcode",
            "jobValue",
            "estimatedValue",
            "priority",
            "source",
            "notes",
            "customFieldValues",
            "statusId",
            "productTypeId",
            "assignedUserId",
            "createdById",
            "status",
            "productType",
            "createdBy",
            "assignedUser",
            "createdAt",
            "updatedAt",
        ]

    def get_status(self, lead):
        s = lead.status
        return {"name": s.name, "slug": s.slug, "color": s.color}

    def get_productType(self, lead):
        pt = lead.product_type
        return {"name": pt.name, "slug": pt.slug} if pt else None


class LeadCreateSerializer(serializers.Serializer):
    name = serializers.CharField(required=False, allow_blank=True, max_length=200, default="")
    email = serializers.EmailField(required=False, allow_blank=True, default="")
    phone = serializers.CharField(required=False, allow_blank=True, max_length=32, default="")
    address = serializers.CharField(required=False, allow_blank=True, max_length=500, default="")
    postcode = serializers.CharField(required=False, allow_blank=True, max_length=16, default="")

    statusId = serializers.UUIDField(required=False, allow_null=True)
    productTypeId = serializers.UUIDField(required=False, allow_null=True)
    assignedUserId = serializers.IntegerField(required=False, allow_null=True)

    jobValue = serializers.DecimalField(max_digits=12, decimal_places=2, required=False, allow_null=True)
    estimatedValue = serializers.DecimalField(max_digits=12, decimal_places=2, required=False, allow_null=True)

    priority = serializers.ChoiceField(choices=Lead.Priority.choices, default=Lead.Priority.MEDIUM)
    source = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=100)
    notes = serializers.CharField(required=False, allow_blank=True, default="")
    customFieldValues = serializers.DictField(required=False, default=dict)

    def validate_jobValue(self, value):
        if value is not None and value <= 0:
            raise serializers.ValidationError("Must be a positive number.")
        return value

    def validate_estimatedValue(self, value):
        if value is not None and value <= 0:
            raise serializers.ValidationError("Must be a positive number.")
        return value

    def validate(self, attrs):
        for key in ("name", "phone", "address", "postcode"):
            if key in attrs:
                attrs[key] = (attrs.get(key) or "").strip()
        if "customFieldValues" in attrs and attrs["customFieldValues"] is None:
            attrs["customFieldValues"] = {}
        return attrs


class LeadUpdateSerializer(LeadCreateSerializer):
    """
    Every create field, all optional, none defaulted: only what the caller
    sent ends up in validated_data.
    """
    statusId = None

    def __init__(self, *args, **kwargs):
        kwargs["partial"] = True
        super().__init__(*args, **kwargs)


class LeadStatusUpdateSerializer(serializers.Serializer):
    statusId = serializers.UUIDField()

    def validate(self, attrs):
        extra = sorted(set(self.initial_data) - {"statusId"})
        if extra:
            raise serializers.ValidationError(
                {"statusId": [f"Status changes must be sent on their own (got: {', '.join(extra)})."]}
            )
        return attrs


class AppointmentSerializer(serializers.ModelSerializer):
    leadId = serializers.UUIDField(source="lead_id", read_only=True)
    startsAt = serializers.DateTimeField(source="starts_at", read_only=True)
    endsAt = serializers.DateTimeField(source="ends_at", read_only=True, allow_null=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)

    class Meta:
        model = Appointment
        fields = [
            "id",
            "leadId",
            "type",
            "title",
            "description",
            "startsAt",
            "endsAt",
            "location",
            "notes",
            "createdAt",
        ]


class AppointmentCreateSerializer(serializers.Serializer):
    type = serializers.ChoiceField(choices=Appointment.Type.choices)
    title = serializers.CharField(min_length=1, max_length=200)
    description = serializers.CharField(required=False, allow_blank=True, default="")
    startsAt = serializers.DateTimeField()
    endsAt = serializers.DateTimeField(required=False, allow_null=True)
    location = serializers.CharField(required=False, allow_blank=True, max_length=500, default="")
    notes = serializers.CharField(required=False, allow_blank=True, default="")

    def validate(self, attrs):
        ends = attrs.get("endsAt")
        if ends and ends < attrs["startsAt"]:
            raise serializers.ValidationError({"endsAt": ["Must not be before startsAt."]})
        return attrs
