from django.contrib.auth import get_user_model
from rest_framework import serializers

from core.iam.models import Role, TenantMembership
from core.iam.utils import display_name

User = get_user_model()


class MembershipSerializer(serializers.ModelSerializer):
    userId = serializers.IntegerField(source="user_id", read_only=True)
    name = serializers.SerializerMethodField()
    email = serializers.EmailField(source="user.email", read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)

    class Meta:
        model = TenantMembership
        fields = ["id", "userId", "name", "email", "role", "createdAt"]

    def get_name(self, m):
        return display_name(m.user)


class MembershipCreateSerializer(serializers.Serializer):
    """
    Adds an existing user, looked up by email, to the tenant.
    """
    email = serializers.EmailField()
    role = serializers.ChoiceField(choices=Role.choices, default=Role.AGENT)

    def validate_email(self, value):
        user = User.objects.filter(email__iexact=value.strip()).first()
        if not user:
            raise serializers.ValidationError("No user with this email.")
        self.context["user"] = user
        return value


class MembershipUpdateSerializer(serializers.Serializer):
    role = serializers.ChoiceField(choices=Role.choices)
