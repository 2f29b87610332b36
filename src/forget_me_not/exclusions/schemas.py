"""
Pydantic schemas and payload parsing for exclusion management.
"""

import json
from collections.abc import Mapping
from typing import Any, Literal
from urllib.parse import parse_qs

from markupsafe import escape
from pydantic import BaseModel

from forget_me_not.shared.exceptions import ValidationError

REMOVAL_FIELD = "module"


class RemovalResponse(BaseModel):
    """Status returned by the removal endpoint."""

    status: Literal["success", "error"]


def parse_removal_payload(body: bytes, content_type: str | None) -> str:
    """Extract the ``module`` field from a raw form-urlencoded or JSON body.

    Raises:
        ValidationError: If the body is not valid UTF-8 (including
            percent-encoded bytes) or the field is missing.
    """
    try:
        text = body.decode("utf-8")
        if media_type(content_type) == "application/json":
            data = json.loads(text) if text else {}
            value = data.get(REMOVAL_FIELD) if isinstance(data, dict) else None
        else:
            values = parse_qs(
                text,
                keep_blank_values=True,
                encoding="utf-8",
                errors="strict",
            ).get(REMOVAL_FIELD)
            value = values[0] if values else None
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise ValidationError("Malformed removal payload", details={"error": str(e)}) from e

    if not isinstance(value, str):
        raise ValidationError(f"Missing '{REMOVAL_FIELD}' field")
    return value


def media_type(content_type: str | None) -> str:
    """Lower-cased media type of a Content-Type header, without parameters."""
    return (content_type or "").split(";")[0].strip().lower()


def removal_field_from_form(form: Mapping[str, Any]) -> str:
    """Extract the ``module`` field from a parsed multipart form.

    Raises:
        ValidationError: If the field is missing or is an uploaded file.
    """
    value = form.get(REMOVAL_FIELD)
    if not isinstance(value, str):
        raise ValidationError(f"Missing '{REMOVAL_FIELD}' field")
    return value


def sanitize_identifier(value: str) -> str:
    """Strip surrounding whitespace and HTML-escape."""
    return str(escape(value.strip()))
