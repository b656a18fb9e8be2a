"""Barton number string validation with strong typing."""

import re
from dataclasses import dataclass
from typing import Any, NamedTuple
from returns.result import Result, Success, Failure


# Validation limits
BLUEPRINT_ID = 39
MIN_SEGMENT = 1
MAX_SEGMENT = 99

_CANONICAL_PATTERN = re.compile(r"^([0-9]+)\.([0-9]+)\.([0-9]+)\.([0-9]+)$")


class ValidationError(Exception):
    """Validation failed."""

    pass


@dataclass(frozen=True)
class ValidationResult:
    """Validation error with details (for Result pattern)."""

    message: str
    field: str | None = None
    value: Any | None = None


class BartonParts(NamedTuple):
    """Numeric parts of a Barton number."""

    blueprint_id: int
    module: int
    submodule: int
    file: int


def in_segment_range(value: int) -> bool:
    """Check a module/submodule/file value against the inclusive range."""
    return MIN_SEGMENT <= value <= MAX_SEGMENT


def format_barton_number(blueprint_id: int, module: int, submodule: int, file: int) -> str:
    """
    Render the canonical dotted form.

    Module, submodule and file are zero-padded to two digits; the blueprint
    id is not padded. Values wider than two digits are printed in full.

    Examples:
        >>> format_barton_number(39, 1, 1, 1)
        '39.01.01.01'
    """
    return f"{blueprint_id}.{module:02d}.{submodule:02d}.{file:02d}"


def parse_barton_number(text: str) -> BartonParts | None:
    """
    Parse a dotted Barton number.

    Args:
        text: String such as ``"39.01.01.01"``

    Returns:
        Parsed parts, or None if the text is not four dot-separated integers
    """
    match = _CANONICAL_PATTERN.match(text.strip())
    if match is None:
        return None
    return BartonParts(*(int(group) for group in match.groups()))


def validate_barton_number(text: str, blueprint_id: int = BLUEPRINT_ID) -> bool:
    """Check that text parses and every part is within bounds."""
    return check_barton_number(text, blueprint_id).map(lambda _: True).value_or(False)


def check_barton_number(
    text: str, blueprint_id: int = BLUEPRINT_ID
) -> Result[BartonParts, ValidationResult]:
    """
    Validate a Barton number string (Result pattern version).

    Args:
        text: Dotted Barton number
        blueprint_id: Blueprint ID this deployment accepts

    Returns:
        Success with the parsed parts, or Failure describing the first problem
    """
    parts = parse_barton_number(text)
    if parts is None:
        return Failure(ValidationResult("Malformed Barton number", field="barton_number", value=text))

    if parts.blueprint_id != blueprint_id:
        return Failure(
            ValidationResult(
                f"Blueprint {parts.blueprint_id} does not match {blueprint_id}",
                field="blueprint_id",
                value=parts.blueprint_id,
            )
        )

    for name in ("module", "submodule", "file"):
        value = getattr(parts, name)
        if not in_segment_range(value):
            return Failure(
                ValidationResult(
                    f"{name} {value} outside [{MIN_SEGMENT}, {MAX_SEGMENT}]",
                    field=name,
                    value=value,
                )
            )

    return Success(parts)


def require_barton_number(text: str, blueprint_id: int = BLUEPRINT_ID) -> BartonParts:
    """
    Parse and validate, raising on failure.

    Raises:
        ValidationError: If the number is malformed or out of bounds
    """
    result = check_barton_number(text, blueprint_id)
    if isinstance(result, Failure):
        raise ValidationError(result.failure().message)
    return result.unwrap()
