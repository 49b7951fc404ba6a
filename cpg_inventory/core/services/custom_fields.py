"""Validation of schema-less custom data against company field definitions."""

from collections.abc import Sequence
from datetime import date
from typing import Annotated, Any

from pydantic import AfterValidator, Field, StrictBool, StrictStr, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from cpg_inventory.core.entities.company import CustomField, CustomFieldType
from cpg_inventory.core.exceptions import CustomFieldValidationError

# Values are checked, never coerced: "180" is not a number and 1 is not true
_ADAPTERS: dict[CustomFieldType, tuple[TypeAdapter, str]] = {
    CustomFieldType.TEXT: (TypeAdapter(StrictStr), "Expected text"),
    CustomFieldType.NUMBER: (
        TypeAdapter(Annotated[float, Field(strict=True, allow_inf_nan=False)]),
        "Expected a finite number",
    ),
    CustomFieldType.BOOLEAN: (TypeAdapter(StrictBool), "Expected true or false"),
    CustomFieldType.DATE: (
        TypeAdapter(Annotated[StrictStr, AfterValidator(date.fromisoformat)]),
        "Expected an ISO date",
    ),
}


def validate_custom_data(
    definitions: Sequence[CustomField], data: dict[str, Any] | None
) -> dict[str, Any]:
    """
    Check custom data against the company's current field definitions.

    Unknown keys are rejected. None clears a field and is always accepted.
    Accepted values are returned as given.

    Returns:
        The validated data (empty dict for None input).
    """
    if not data:
        return {}

    by_name = {d.field_name: d for d in definitions}
    for key, value in data.items():
        field = by_name.get(key)
        if field is None:
            raise CustomFieldValidationError(key, "Unknown custom field", value)
        if value is None:
            continue
        adapter, reason = _ADAPTERS[field.field_type]
        try:
            adapter.validate_python(value)
        except PydanticValidationError as e:
            raise CustomFieldValidationError(key, reason, value) from e
    return dict(data)
