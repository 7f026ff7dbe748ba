from django.db import transaction
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework import status

from core.catalog.models import LeadStatus, ProductType, CustomField
from core.catalog.serializers import (
    LeadStatusSerializer,
    LeadStatusCreateSerializer,
    ProductTypeSerializer,
    ProductTypeCreateSerializer,
    CustomFieldSerializer,
    CustomFieldCreateSerializer,
)
from core.common.exceptions import error_response
from core.iam.models import Role
from core.iam.permissions import IsTenantMember, require_role


def _slug_taken(model, tenant, slug):
    if model.objects.filter(tenant=tenant, slug=slug).exists():
        return error_response(
            "Validation error",
            "VALIDATION_ERROR",
            status.HTTP_400_BAD_REQUEST,
            details={"slug": ["This slug is already in use."]},
        )
    return None


@api_view(["GET", "POST"])
@permission_classes([IsAuthenticated, IsTenantMember])
def lead_statuses(request, tenant: str):
    """
    GET  /api/{tenant}/statuses   pipeline stages in display order
    POST /api/{tenant}/statuses   manager+
    """
    if request.method == "GET":
        qs = LeadStatus.objects.filter(tenant=request.tenant).order_by("order", "name")
        return Response({"statuses": LeadStatusSerializer(qs, many=True).data})

    require_role(request.membership, Role.MANAGER)

    s = LeadStatusCreateSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    data = s.validated_data

    err = _slug_taken(LeadStatus, request.tenant, data["slug"])
    if err:
        return err

    with transaction.atomic():
        # one default per tenant
        if data["isDefault"]:
            LeadStatus.objects.filter(tenant=request.tenant, is_default=True).update(is_default=False)
        row = LeadStatus.objects.create(
            tenant=request.tenant,
            name=data["name"],
            slug=data["slug"],
            color=data["color"],
            order=data["order"],
            is_default=data["isDefault"],
            is_final=data["isFinal"],
        )
    return Response(LeadStatusSerializer(row).data, status=status.HTTP_201_CREATED)


@api_view(["GET", "POST"])
@permission_classes([IsAuthenticated, IsTenantMember])
def product_types(request, tenant: str):
    """
    GET  /api/{tenant}/product-types
    POST /api/{tenant}/product-types   manager+
    """
    if request.method == "GET":
        qs = ProductType.objects.filter(tenant=request.tenant).order_by("order", "name")
        return Response({"productTypes": ProductTypeSerializer(qs, many=True).data})

    require_role(request.membership, Role.MANAGER)

    s = ProductTypeCreateSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    data = s.validated_data

    err = _slug_taken(ProductType, request.tenant, data["slug"])
    if err:
        return err

    row = ProductType.objects.create(tenant=request.tenant, **data)
    return Response(ProductTypeSerializer(row).data, status=status.HTTP_201_CREATED)


@api_view(["GET", "POST"])
@permission_classes([IsAuthenticated, IsTenantMember])
def custom_fields(request, tenant: str):
    """
    GET  /api/{tenant}/custom-fields
    POST /api/{tenant}/custom-fields   manager+
    """
    if request.method == "GET":
        qs = CustomField.objects.filter(tenant=request.tenant).order_by("order", "name")
        return Response({"customFields": CustomFieldSerializer(qs, many=True).data})

    require_role(request.membership, Role.MANAGER)

    s = CustomFieldCreateSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    data = s.validated_data

    err = _slug_taken(CustomField, request.tenant, data["slug"])
    if err:
        return err

    row = CustomField.objects.create(
        tenant=request.tenant,
        name=data["name"],
        slug=data["slug"],
        type=data["type"],
        options=data.get("options"),
        is_required=data["isRequired"],
        order=data["order"],
    )
    return Response(CustomFieldSerializer(row).data, status=status.HTTP_201_CREATED)
