from rest_framework import serializers


class PublicLeadSerializer(serializers.Serializer):
    """
    Embed form payload. Only name is required.
    """
    name = serializers.CharField(min_length=1, max_length=200)
    email = serializers.EmailField(required=False, allow_blank=True, default="")
    phone = serializers.CharField(required=False, allow_blank=True, max_length=32, default="")
    address = serializers.CharField(required=False, allow_blank=True, max_length=500, default="")
    postcode = serializers.CharField(required=False, allow_blank=True, max_length=16, default="")
    message = serializers.CharField(required=False, allow_blank=True, default="")
    source = serializers.CharField(required=False, allow_blank=True, max_length=100, default="")

    utmSource = serializers.CharField(required=False, allow_blank=True, max_length=200)
    utmMedium = serializers.CharField(required=False, allow_blank=True, max_length=200)
    utmCampaign = serializers.CharField(required=False, allow_blank=True, max_length=200)

    customFieldValues = serializers.DictField(required=False, default=dict)

    def validate_name(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError("Name is required.")
        return value

    def validate(self, attrs):
        attrs["source"] = (attrs.get("source") or "").strip() or "website"
        return attrs

    @property
    def utm(self):
        data = self.validated_data
        return {
            "source": data.get("utmSource"),
            "medium": data.get("utmMedium"),
            "campaign": data.get("utmCampaign"),
        }
