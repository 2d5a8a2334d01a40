from __future__ import annotations

import json
from typing import Any

from jsonschema import Draft202012Validator
from jsonschema.exceptions import best_match

from .errors import InvalidJSONResponseError, MalformedJSONError

# headers: required, non-empty, string values. body: required, may be "".
RESPONSE_SCHEMA: dict[str, Any] = {
    "type": "object",
    "required": ["headers", "body"],
    "properties": {
        "headers": {
            "type": "object",
            "minProperties": 1,
            "additionalProperties": {"type": "string"},
        },
        "body": {"type": "string"},
    },
}

_response_validator = Draft202012Validator(RESPONSE_SCHEMA)


def parse_json(text: str) -> Any:
    """Parse JSON from a model response.

    Assumes the provider was instructed to return JSON only.
    """

    try:
        return json.loads(text)
    except ValueError as e:
        raise MalformedJSONError(
            f"malformed JSON: input is not valid JSON: {e}", cleaned=text
        ) from e


def validate_json(instance: Any, *, cleaned: str = "") -> None:
    error = best_match(_response_validator.iter_errors(instance))
    if error is not None:
        where = "/".join(str(p) for p in error.absolute_path) or "$"
        raise InvalidJSONResponseError(
            f"invalid JSON response: validation error at {where}: {error.message}",
            cleaned=cleaned,
        )
