from __future__ import annotations

from typing import Any

from django.utils.dateparse import parse_date, parse_datetime
from rest_framework import serializers

from core.catalog.models import CustomField


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_date(value) -> bool:
    if not isinstance(value, str):
        return False
    try:
        return bool(parse_date(value) or parse_datetime(value))
    except ValueError:
        return False


def _check(field: CustomField, value) -> str | None:
    if value is None:
        return None

    options = field.options or []

    if field.type in (CustomField.Type.TEXT, CustomField.Type.TEXTAREA):
        return None if isinstance(value, str) else "Must be a string."
    if field.type == CustomField.Type.NUMBER:
        return None if _is_number(value) else "Must be a number."
    if field.type == CustomField.Type.BOOLEAN:
        return None if isinstance(value, bool) else "Must be true or false."
    if field.type == CustomField.Type.DATE:
        return None if _is_date(value) else "Must be an ISO date."
    if field.type == CustomField.Type.SELECT:
        return None if value in options else f"Must be one of: {', '.join(options)}."
    if field.type == CustomField.Type.MULTISELECT:
        if not isinstance(value, list):
            return "Must be a list."
        bad = [v for v in value if v not in options]
        return f"Unknown options: {', '.join(map(str, bad))}." if bad else None
    return None


def validate_custom_field_values(tenant, values: dict[str, Any] | None) -> dict[str, Any]:
    """
    Check a custom-field bag against the tenant's active declarations.

    Declared fields must carry a value of their declared type and required
    fields must be present. Keys nobody declared (utm tags, legacy keys) are
    kept as they are.
    """
    values = dict(values or {})
    issues: dict[str, list[str]] = {}

    for field in CustomField.objects.filter(tenant=tenant, is_active=True):
        value = values.get(field.slug)
        if field.is_required and value in (None, "", []):
            issues[field.slug] = ["This field is required."]
            continue
        problem = _check(field, value)
        if problem:
            issues[field.slug] = [problem]

    if issues:
        raise serializers.ValidationError({"customFieldValues": issues})
    return values
