# core/tenants/management/commands/seed_demo.py

from decimal import Decimal

from django.core.management.base import BaseCommand
from django.contrib.auth import get_user_model

from core.catalog.models import CustomField, LeadStatus, ProductType
from core.leads import services as lead_services
from core.messaging.models import Channel, Template
from core.tenants.models import Tenant
from core.tenants.services import create_tenant

DEMO_SLUG = "premier-blinds"

PRODUCT_TYPES = [
    ("Venetian Blinds", "venetian-blinds", "Classic horizontal slat blinds"),
    ("Roller Blinds", "roller-blinds", "Simple up and down rolling blinds"),
    ("Vertical Blinds", "vertical-blinds", "Vertical slat blinds for large windows"),
    ("Plantation Shutters", "plantation-shutters", "Wooden interior shutters"),
    ("Cafe Style Shutters", "cafe-shutters", "Half-height window shutters"),
    ("Motorised Blinds", "motorised-blinds", "Electric remote-controlled blinds"),
]

CUSTOM_FIELDS = [
    ("Property Type", "property_type", CustomField.Type.SELECT, ["House", "Flat", "Bungalow", "Commercial"]),
    ("Number of Windows", "window_count", CustomField.Type.NUMBER, None),
    ("Installation Urgency", "urgency", CustomField.Type.SELECT, ["ASAP", "Within 2 weeks", "Within a month", "No rush"]),
    ("Budget Range", "budget_range", CustomField.Type.SELECT, ["Under £500", "£500-£1000", "£1000-£2000", "£2000+"]),
    (
        "Heard About Us",
        "referral_source",
        CustomField.Type.SELECT,
        ["Google Search", "Facebook", "Recommendation", "Local Ad", "Previous Customer"],
    ),
]

TEMPLATES = [
    (
        "Initial Contact SMS",
        Channel.SMS,
        "",
        "Hi {{lead.name}}, thanks for your interest in {{tenant.businessName}}. We'll be in touch within "
        "24 hours to discuss your {{lead.productType}} requirements.",
    ),
    (
        "Quote Follow Up",
        Channel.EMAIL,
        "Your Quote from {{tenant.businessName}}",
        "Dear {{lead.name}},\n\nThank you for choosing {{tenant.businessName}}. Please find attached your "
        "personalised quote.\n\nIf you have any questions, please don't hesitate to contact us.\n\n"
        "Best regards,\n{{user.name}}\n{{tenant.businessPhone}}",
    ),
    (
        "Thank You Message",
        Channel.EMAIL,
        "Thank you for choosing {{tenant.businessName}}",
        "Dear {{lead.name}},\n\nThank you for choosing {{tenant.businessName}}. We appreciate your business "
        "and hope you love your new {{lead.productType}}.\n\nBest regards,\nThe {{tenant.businessName}} Team",
    ),
]

LEADS = [
    {
        "name": "John Smith",
        "email": "john.smith@email.com",
        "phone": "+44 7123 456789",
        "address": "45 Oak Avenue, London",
        "postcode": "SW12 8QR",
        "product": "venetian-blinds",
        "status": "new",
        "estimatedValue": Decimal("850"),
        "priority": "HIGH",
        "source": "website",
        "customFieldValues": {"property_type": "House", "window_count": 6, "urgency": "Within 2 weeks", "budget_range": "£500-£1000"},
    },
    {
        "name": "Emma Wilson",
        "email": "emma.wilson@email.com",
        "phone": "+44 7987 654321",
        "address": "12 Pine Close, Brighton",
        "postcode": "BN2 4RT",
        "product": "plantation-shutters",
        "status": "contacted",
        "estimatedValue": Decimal("2200"),
        "priority": "MEDIUM",
        "source": "referral",
        "customFieldValues": {"property_type": "Flat", "window_count": 3, "urgency": "Within a month", "budget_range": "£2000+"},
    },
    {
        "name": "Michael Brown",
        "email": "mike.brown@email.com",
        "phone": "+44 7555 123456",
        "address": "78 Elm Street, Manchester",
        "postcode": "M15 6PA",
        "product": "venetian-blinds",
        "status": "new",
        "estimatedValue": Decimal("450"),
        "priority": "LOW",
        "source": "google",
        "customFieldValues": {"property_type": "Bungalow", "window_count": 4, "urgency": "No rush", "budget_range": "Under £500"},
    },
]


class Command(BaseCommand):
    help = "Create a demo tenant with pipeline, catalog, templates and a few leads (skips if it exists)"

    def add_arguments(self, parser):
        parser.add_argument("--password", default="Demo@12345", help="password for the demo admin user")

    def handle(self, *args, **options):
        if Tenant.objects.filter(slug=DEMO_SLUG).exists():
            self.stdout.write(f"Demo tenant '{DEMO_SLUG}' already exists, nothing to do")
            return

        self.stdout.write("Seeding demo data...")

        User = get_user_model()
        user, created = User.objects.get_or_create(
            username="admin@premierblinds.co.uk",
            defaults={"email": "admin@premierblinds.co.uk", "first_name": "Sarah", "last_name": "Johnson"},
        )
        if created:
            user.set_password(options["password"])
            user.save(update_fields=["password"])

        tenant = create_tenant(
            owner=user,
            name="Premier Blinds & Shutters",
            slug=DEMO_SLUG,
            industry="home-improvement",
            timezone="Europe/London",
            settings={
                "business_name": "Premier Blinds & Shutters Ltd",
                "business_address": "123 High Street, London, SW1A 1AA",
                "business_phone": "+44 20 7123 4567",
                "business_email": "info@premierblinds.co.uk",
                "website": "https://premierblinds.co.uk",
                "working_hours_end": "17:30",
                "primary_color": "#2563eb",
            },
        )

        for i, (name, slug, description) in enumerate(PRODUCT_TYPES, start=1):
            ProductType.objects.create(tenant=tenant, name=name, slug=slug, description=description, order=i)

        for i, (name, slug, field_type, options_) in enumerate(CUSTOM_FIELDS, start=1):
            CustomField.objects.create(tenant=tenant, name=name, slug=slug, type=field_type, options=options_, order=i)

        for name, channel, subject, body in TEMPLATES:
            Template.objects.create(tenant=tenant, name=name, channel=channel, subject=subject, body=body)

        statuses = {s.slug: s for s in LeadStatus.objects.filter(tenant=tenant)}
        products = {p.slug: p for p in ProductType.objects.filter(tenant=tenant)}

        for row in LEADS:
            data = {k: v for k, v in row.items() if k not in ("product", "status")}
            data["statusId"] = statuses[row["status"]].id
            data["productTypeId"] = products[row["product"]].id
            lead_services.create_lead(tenant=tenant, created_by=user, audited_by=user, data=data)

        self.stdout.write(self.style.SUCCESS("Demo data seeded"))
        self.stdout.write(f"Tenant: {tenant.slug}")
        self.stdout.write(f"Admin user: {user.email}")
