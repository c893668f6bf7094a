"""
Field validation for the project input form.

A Validatable describes one raw value plus the rules it must satisfy.
Length bounds apply only to text, numeric bounds only to numbers, the same
way a browser form would treat them.
"""
from dataclasses import dataclass
from typing import Dict, List, Optional, Union

Value = Union[str, int, float, None]

INVALID_INPUT_MESSAGE = "Invalid input, please try again."


class ValidationError(Exception):
    """Raised when one or more form fields fail validation."""

    def __init__(self, message: str, fields: Optional[List[str]] = None):
        super().__init__(message)
        self.fields = fields or []


@dataclass(frozen=True)
class Validatable:
    value: Value
    required: bool = False
    min_length: Optional[int] = None
    max_length: Optional[int] = None
    min: Optional[float] = None
    max: Optional[float] = None


def _is_number(value: Value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def validate(rule: Validatable) -> bool:
    """Return True if the value satisfies every rule set on the descriptor."""
    value = rule.value
    if rule.required:
        if value is None or str(value).strip() == "":
            return False
    if isinstance(value, str):
        length = len(value.strip())
        if rule.min_length is not None and length < rule.min_length:
            return False
        if rule.max_length is not None and length > rule.max_length:
            return False
    if _is_number(value):
        if rule.min is not None and value < rule.min:
            return False
        if rule.max is not None and value > rule.max:
            return False
    return True


def parse_people(raw: Value) -> Optional[int]:
    """Coerce the team-size field to an int; None when it is not a whole number."""
    if _is_number(raw):
        return int(raw) if float(raw).is_integer() else None
    if raw is None:
        return None
    try:
        number = float(str(raw).strip())
    except ValueError:
        return None
    return int(number) if number.is_integer() else None


def project_rules(
    title: Value,
    description: Value,
    people: Value,
    description_min_length: int = 5,
    description_max_length: int = 99,
    people_min: int = 1,
    people_max: int = 5,
) -> Dict[str, Validatable]:
    """Build the three descriptors the input form checks before submitting."""
    return {
        "title": Validatable(value=title, required=True),
        "description": Validatable(
            value=description,
            required=True,
            min_length=description_min_length,
            max_length=description_max_length,
        ),
        "people": Validatable(
            value=people,
            required=True,
            min=people_min,
            max=people_max,
        ),
    }


def validate_all(rules: Dict[str, Validatable]) -> None:
    """
    Check every descriptor.

    Raises:
        ValidationError listing the failing field names.
    """
    failed = [name for name, rule in rules.items() if not validate(rule)]
    if failed:
        raise ValidationError(INVALID_INPUT_MESSAGE, fields=failed)
