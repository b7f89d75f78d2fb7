from typing import Any, Type, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from hostelhub.core.exceptions import ValidationError

SchemaT = TypeVar("SchemaT", bound=BaseModel)


def parse_payload(schema: Type[SchemaT], payload: Any) -> SchemaT:
    """
    Accept an already-validated schema instance or a plain dict.

    Engines call this on their input so direct callers (voice flow, scripts,
    tests) get the same field-level ValidationError as the HTTP layer.
    """
    if isinstance(payload, schema):
        return payload
    try:
        if isinstance(payload, BaseModel):
            payload = payload.model_dump()
        return schema.model_validate(payload)
    except PydanticValidationError as e:
        details = [
            {"field": ".".join(str(p) for p in err["loc"]), "message": err["msg"]}
            for err in e.errors()
        ]
        raise ValidationError("Invalid input data", details=details)
