"""Record field access shared by the collection templates."""

from protean.exceptions import ValidationError


def require_text(record: dict, field: str) -> str:
    """Return ``record[field]``, which must be present and a string."""
    value = record.get(field)
    if value is None:
        raise ValidationError({field: ["is required"]})
    if not isinstance(value, str):
        raise ValidationError({field: [f"must be a string, got {type(value).__name__}"]})
    return value
