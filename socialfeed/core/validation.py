"""Input checks applied before any statement reaches the datastore."""
from typing import Any
from socialfeed.core.exceptions import ValidationError

# Largest value an INTEGER primary key column can hold
MAX_ID = 2 ** 31 - 1


def parse_id(value: Any, name: str = "id") -> int:
    """Return ``value`` as a positive integer id.

    Accepts ints and ASCII base-10 digit strings within the INTEGER column
    range; anything else is a ValidationError.
    """
    if isinstance(value, bool):
        raise ValidationError(f"Invalid {name}")
    if isinstance(value, str):
        value = value.strip()
        if not (value.isascii() and value.isdigit()):
            raise ValidationError(f"Invalid {name}")
        value = int(value)
    if not isinstance(value, int) or value < 1 or value > MAX_ID:
        raise ValidationError(f"Invalid {name}")
    return value


def require_text(value: Any, name: str = "Content") -> str:
    """Trim ``value`` and reject it when nothing is left."""
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{name} is required")
    return value.strip()
