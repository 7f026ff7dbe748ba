from __future__ import annotations

from typing import Any

from core.audit.models import AuditLog


def record_audit(*, tenant, action: str, lead=None, user=None, meta: dict[str, Any] | None = None) -> AuditLog:
    """
    Append one audit row. Call inside the same transaction.atomic() block as
    the mutation it describes so neither can be committed without the other.
    """
    return AuditLog.objects.create(
        tenant=tenant,
        lead=lead,
        user=user if (user is not None and user.is_authenticated) else None,
        action=action,
        meta=meta or {},
    )
