from typing import Optional, Type

from hostelhub.core.database import get_db  # noqa: F401
from hostelhub.core.exceptions import ValidationError


def enum_filter(value: Optional[str], enum_cls: Type, field: str, aliases: Optional[dict] = None):
    """
    Turn a query-string filter into an enum member.

    Empty and "all" mean no filter (None); anything unknown is a 400.
    """
    if value is None or not value.strip() or value.strip().lower() == "all":
        return None
    label = value.strip().upper()
    if aliases and label in aliases:
        return aliases[label]
    try:
        return enum_cls(label)
    except ValueError:
        allowed = ", ".join(m.value for m in enum_cls)
        raise ValidationError(
            f"Invalid {field}",
            details=[{"field": field, "message": f"must be one of: all, {allowed}"}],
        )
