from django.db import migrations, models
import django.db.models.deletion
import uuid
from django.utils import timezone


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("tenants", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="LeadStatus",
            fields=[
                ("id", models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False, serialize=False)),
                ("name", models.CharField(max_length=100)),
                ("slug", models.CharField(max_length=100)),
                ("color", models.CharField(default="#6b7280", max_length=7)),
                ("order", models.PositiveIntegerField(default=0)),
                ("is_default", models.BooleanField(default=False)),
                ("is_final", models.BooleanField(default=False)),
                ("created_at", models.DateTimeField(default=timezone.now)),
                (
                    "tenant",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE, related_name="lead_statuses", to="tenants.tenant"
                    ),
                ),
            ],
            options={"db_table": "lead_statuses"},
        ),
        migrations.CreateModel(
            name="ProductType",
            fields=[
                ("id", models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False, serialize=False)),
                ("name", models.CharField(max_length=200)),
                ("slug", models.CharField(max_length=100)),
                ("description", models.TextField(blank=True, default="")),
                ("order", models.PositiveIntegerField(default=0)),
                ("is_active", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(default=timezone.now)),
                (
                    "tenant",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE, related_name="product_types", to="tenants.tenant"
                    ),
                ),
            ],
            options={"db_table": "product_types"},
        ),
        migrations.CreateModel(
            name="CustomField",
            fields=[
                ("id", models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False, serialize=False)),
                ("name", models.CharField(max_length=200)),
                ("slug", models.CharField(max_length=100)),
                (
                    "type",
                    models.CharField(
                        choices=[
                            ("TEXT", "Text"),
                            ("NUMBER", "Number"),
                            ("SELECT", "Select"),
                            ("MULTISELECT", "Multi-select"),
                            ("DATE", "Date"),
                            ("BOOLEAN", "Boolean"),
                            ("TEXTAREA", "Text area"),
                        ],
                        default="TEXT",
                        max_length=16,
                    ),
                ),
                ("options", models.JSONField(blank=True, null=True)),
                ("is_required", models.BooleanField(default=False)),
                ("is_active", models.BooleanField(default=True)),
                ("order", models.PositiveIntegerField(default=0)),
                ("created_at", models.DateTimeField(default=timezone.now)),
                (
                    "tenant",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE, related_name="custom_fields", to="tenants.tenant"
                    ),
                ),
            ],
            options={"db_table": "custom_fields"},
        ),
        migrations.AddIndex(
            model_name="leadstatus",
            index=models.Index(fields=["tenant", "order"], name="lead_status_tenant_order_idx"),
        ),
        migrations.AddConstraint(
            model_name="leadstatus",
            constraint=models.UniqueConstraint(fields=("tenant", "slug"), name="uq_lead_status_tenant_slug"),
        ),
        migrations.AddIndex(
            model_name="producttype",
            index=models.Index(fields=["tenant", "is_active", "order"], name="product_type_tenant_active_idx"),
        ),
        migrations.AddConstraint(
            model_name="producttype",
            constraint=models.UniqueConstraint(fields=("tenant", "slug"), name="uq_product_type_tenant_slug"),
        ),
        migrations.AddIndex(
            model_name="customfield",
            index=models.Index(fields=["tenant", "is_active", "order"], name="custom_field_tenant_active_idx"),
        ),
        migrations.AddConstraint(
            model_name="customfield",
            constraint=models.UniqueConstraint(fields=("tenant", "slug"), name="uq_custom_field_tenant_slug"),
        ),
    ]
