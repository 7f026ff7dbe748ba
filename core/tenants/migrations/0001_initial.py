from django.db import migrations, models
import django.db.models.deletion
import uuid
from django.utils import timezone

import core.tenants.models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Tenant",
            fields=[
                ("id", models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False, serialize=False)),
                ("slug", models.SlugField(unique=True)),
                ("name", models.CharField(max_length=255)),
                ("industry", models.CharField(blank=True, default="", max_length=100)),
                ("timezone", models.CharField(default="Europe/London", max_length=64)),
                ("created_at", models.DateTimeField(db_index=True, default=timezone.now)),
            ],
            options={"db_table": "tenants"},
        ),
        migrations.CreateModel(
            name="TenantSettings",
            fields=[
                ("id", models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False, serialize=False)),
                ("business_name", models.CharField(blank=True, default="", max_length=255)),
                ("business_address", models.CharField(blank=True, default="", max_length=500)),
                ("business_phone", models.CharField(blank=True, default="", max_length=32)),
                ("business_email", models.EmailField(blank=True, default="", max_length=254)),
                ("website", models.URLField(blank=True, default="")),
                ("working_hours_start", models.CharField(default="09:00", max_length=5)),
                ("working_hours_end", models.CharField(default="17:00", max_length=5)),
                ("working_days", models.JSONField(default=core.tenants.models.default_working_days)),
                ("default_email_sender", models.CharField(blank=True, default="", max_length=255)),
                ("default_sms_sender", models.CharField(blank=True, default="", max_length=32)),
                ("auto_assign_leads", models.BooleanField(default=False)),
                ("lead_sla_hours", models.PositiveIntegerField(default=24)),
                ("primary_color", models.CharField(default="#3b82f6", max_length=7)),
                ("logo", models.CharField(blank=True, default="", max_length=500)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "tenant",
                    models.OneToOneField(
                        on_delete=django.db.models.deletion.CASCADE, related_name="settings", to="tenants.tenant"
                    ),
                ),
            ],
            options={"db_table": "tenant_settings"},
        ),
    ]
