from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from typing import Any

TOKEN_RE = re.compile(r"\{\{\s*([A-Za-z0-9_]+(?:\.[A-Za-z0-9_]+)*)\s*\}\}")

_MISSING = object()


def _lookup(variables: Mapping[str, Any], path: str):
    current: Any = variables
    for part in path.split("."):
        if isinstance(current, Mapping):
            if part not in current:
                return _MISSING
            current = current[part]
        elif isinstance(current, Sequence) and not isinstance(current, str) and part.isdigit():
            index = int(part)
            if index >= len(current):
                return _MISSING
            current = current[index]
        else:
            return _MISSING
    return current


def render_template(text: str, variables: Mapping[str, Any]) -> str:
    """
    Replace {{a.b.c}} tokens with values found by walking the dotted path.

    Tokens that do not resolve stay in the output verbatim so missing
    variables remain visible. None renders as an empty string.
    """
    def replace(match: re.Match) -> str:
        value = _lookup(variables, match.group(1))
        if value is _MISSING:
            return match.group(0)
        if value is None:
            return ""
        return str(value)

    return TOKEN_RE.sub(replace, text or "")


def template_variables(*, lead=None, tenant=None, user=None, extra: Mapping[str, Any] | None = None) -> dict[str, Any]:
    """
    The variable bag offered to message templates.
    """
    bag: dict[str, Any] = {}

    if tenant is not None:
        settings_row = getattr(tenant, "settings", None)
        bag["tenant"] = {
            "name": tenant.name,
            "slug": tenant.slug,
            "businessName": (settings_row.business_name if settings_row else "") or tenant.name,
            "businessPhone": settings_row.business_phone if settings_row else "",
            "businessEmail": settings_row.business_email if settings_row else "",
            "website": settings_row.website if settings_row else "",
        }

    if lead is not None:
        bag["lead"] = {
            "name": lead.name,
            "email": lead.email,
            "phone": lead.phone,
            "address": lead.address,
            "postcode": lead.postcode,
            "source": lead.source,
            "status": lead.status.name,
            "productType": lead.product_type.name if lead.product_type else "",
            "customFields": dict(lead.custom_field_values or {}),
        }

    if user is not None:
        bag["user"] = {
            "name": user.get_full_name() or user.username,
            "email": user.email,
        }

    if extra:
        bag.update(extra)
    return bag
