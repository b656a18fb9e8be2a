"""Fast JSON encoding for reports."""

from typing import Any
import json

import orjson
from pydantic import BaseModel


class JSONEncodeError(Exception):
    """JSON encoding failed."""

    def __init__(self, message: str, original: Exception | None = None) -> None:
        super().__init__(message)
        self.original = original


def safe_json_dumps(obj: Any, indent: int = 0) -> str:
    """
    Encode object to JSON string.

    orjson handles the compact and two-space forms; other indents go
    through the standard library.

    Args:
        obj: Object to encode
        indent: Spaces per nesting level (0 = compact)

    Returns:
        JSON string

    Raises:
        JSONEncodeError: If the object is not serializable
    """
    try:
        if indent == 0:
            return orjson.dumps(obj).decode("utf-8")
        if indent == 2:
            return orjson.dumps(obj, option=orjson.OPT_INDENT_2).decode("utf-8")
        return json.dumps(obj, indent=indent, ensure_ascii=False)
    except (TypeError, ValueError) as e:
        raise JSONEncodeError(f"Cannot encode {type(obj).__name__}: {e}", e)


def dump_model(model: BaseModel, indent: int = 0) -> str:
    """Encode a pydantic model with its camelCase aliases."""
    return safe_json_dumps(model.model_dump(mode="json", by_alias=True), indent=indent)
