from rest_framework import serializers

from core.iam.utils import display_name
from core.messaging.models import Channel, Message, Template


class TemplateSerializer(serializers.ModelSerializer):
    isActive = serializers.BooleanField(source="is_active", read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)

    class Meta:
        model = Template
        fields = ["id", "name", "channel", "subject", "body", "isActive", "createdAt"]


class TemplateCreateSerializer(serializers.Serializer):
    name = serializers.CharField(min_length=1, max_length=200)
    channel = serializers.ChoiceField(choices=Channel.choices)
    subject = serializers.CharField(required=False, allow_blank=True, max_length=255, default="")
    body = serializers.CharField(min_length=1)
    isActive = serializers.BooleanField(required=False, default=True)


class MessageSerializer(serializers.ModelSerializer):
    leadId = serializers.UUIDField(source="lead_id", read_only=True)
    templateId = serializers.UUIDField(source="template_id", read_only=True, allow_null=True)
    providerId = serializers.CharField(source="provider_id", read_only=True)
    sentBy = serializers.SerializerMethodField()
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)

    class Meta:
        model = Message
        fields = [
            "id",
            "leadId",
            "templateId",
            "channel",
            "to",
            "subject",
            "body",
            "status",
            "providerId",
            "error",
            "sentBy",
            "createdAt",
        ]

    def get_sentBy(self, msg):
        return display_name(msg.user)


class SendMessageSerializer(serializers.Serializer):
    """
    Either a body or a templateId is required. `to` falls back to the lead's
    phone (SMS, WhatsApp) or email.
    """
    channel = serializers.ChoiceField(choices=Channel.choices)
    templateId = serializers.UUIDField(required=False, allow_null=True)
    subject = serializers.CharField(required=False, allow_blank=True, max_length=255)
    body = serializers.CharField(required=False, allow_blank=True)
    to = serializers.CharField(required=False, allow_blank=True, max_length=255)

    def validate(self, attrs):
        if not attrs.get("templateId") and not (attrs.get("body") or "").strip():
            raise serializers.ValidationError({"body": ["Message body is required."]})
        return attrs
