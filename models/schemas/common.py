from decimal import Decimal, InvalidOperation

from marshmallow import ValidationError


def non_blank(max_len: int):
    """Validator: a stripped, non-empty string no longer than max_len (the column size)."""
    def _validate(value: str) -> bool:
        if not value or not value.strip():
            raise ValidationError("Must not be blank.")
        if len(value) > max_len:
            raise ValidationError(f"Longer than maximum length {max_len}.")
        return True
    return _validate


def to_decimal_2(value) -> Decimal:
    if value is None:
        return None
    try:
        d = Decimal(value)
    except (InvalidOperation, TypeError):
        raise ValidationError("Invalid decimal.")
    if d < 0:
        raise ValidationError("Must be greater than or equal to 0.")
    # DECIMAL(10, 2) columns
    return d.quantize(Decimal("0.01"))
