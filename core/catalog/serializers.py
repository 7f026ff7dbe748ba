from rest_framework import serializers

from core.catalog.models import LeadStatus, ProductType, CustomField

HEX_COLOR = r"^#[0-9A-Fa-f]{6}$"


class LeadStatusSerializer(serializers.ModelSerializer):
    isDefault = serializers.BooleanField(source="is_default", read_only=True)
    isFinal = serializers.BooleanField(source="is_final", read_only=True)

    class Meta:
        model = LeadStatus
        fields = ["id", "name", "slug", "color", "order", "isDefault", "isFinal"]


class LeadStatusCreateSerializer(serializers.Serializer):
    name = serializers.CharField(min_length=1, max_length=100)
    slug = serializers.RegexField(r"^[a-z0-9_]+$", max_length=100)
    color = serializers.RegexField(HEX_COLOR)
    order = serializers.IntegerField(min_value=0, default=0)
    isDefault = serializers.BooleanField(default=False)
    isFinal = serializers.BooleanField(default=False)


class ProductTypeSerializer(serializers.ModelSerializer):
    isActive = serializers.BooleanField(source="is_active", read_only=True)

    class Meta:
        model = ProductType
        fields = ["id", "name", "slug", "description", "order", "isActive"]


class ProductTypeCreateSerializer(serializers.Serializer):
    name = serializers.CharField(min_length=1, max_length=200)
    slug = serializers.RegexField(r"^[a-z0-9_-]+$", max_length=100)
    description = serializers.CharField(required=False, allow_blank=True, default="")
    order = serializers.IntegerField(min_value=0, default=0)


class CustomFieldSerializer(serializers.ModelSerializer):
    isRequired = serializers.BooleanField(source="is_required", read_only=True)
    isActive = serializers.BooleanField(source="is_active", read_only=True)

    class Meta:
        model = CustomField
        fields = ["id", "name", "slug", "type", "options", "isRequired", "isActive", "order"]


class CustomFieldCreateSerializer(serializers.Serializer):
    name = serializers.CharField(min_length=1, max_length=200)
    slug = serializers.RegexField(r"^[a-z0-9_]+$", max_length=100)
    type = serializers.ChoiceField(choices=CustomField.Type.choices)
    options = serializers.ListField(child=serializers.CharField(), required=False)
    isRequired = serializers.BooleanField(default=False)
    order = serializers.IntegerField(min_value=0, default=0)

    def validate(self, attrs):
        if attrs["type"] in (CustomField.Type.SELECT, CustomField.Type.MULTISELECT) and not attrs.get("options"):
            raise serializers.ValidationError({"options": ["Options are required for select fields."]})
        return attrs
