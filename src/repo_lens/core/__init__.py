"""Core utilities and infrastructure."""

from .config import Settings, get_settings
from .validate import (
    BLUEPRINT_ID,
    BartonParts,
    ValidationError,
    ValidationResult,
    check_barton_number,
    format_barton_number,
    parse_barton_number,
    require_barton_number,
    validate_barton_number,
)
from .logging_config import configure_logging, get_logger, LogContext
from .json import JSONEncodeError, dump_model, safe_json_dumps
from .hash import bucket, hash_fields, path_hash


def create_container(settings: Settings | None = None):
    """Create dependency injection container (lazy import to avoid circular deps)."""
    from .container import create_container as _create_container

    return _create_container(settings)


__all__ = [
    # Config
    "Settings",
    "get_settings",
    # Validation
    "BLUEPRINT_ID",
    "BartonParts",
    "ValidationError",
    "ValidationResult",
    "check_barton_number",
    "format_barton_number",
    "parse_barton_number",
    "require_barton_number",
    "validate_barton_number",
    # Logging
    "configure_logging",
    "get_logger",
    "LogContext",
    # JSON
    "JSONEncodeError",
    "dump_model",
    "safe_json_dumps",
    # DI
    "create_container",
    # Hashing
    "bucket",
    "hash_fields",
    "path_hash",
]
