from typing import Any

from coursedesk.core.exceptions import ValidationError

def require_fields(payload: Any, *fields: str) -> None:
    """Reject a payload whose required fields are absent or blank, before any store access."""
    missing = [name for name in fields if not getattr(payload, name, None)]
    if missing:
        raise ValidationError("Missing required fields", details={"missing": missing})
