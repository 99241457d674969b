"""Parsing of raw model replies into loosely-typed records."""
import json
import re
from typing import Any, Dict, List

from pydantic import TypeAdapter, ValidationError

from finscan.utils.logger import get_logger
from finscan.utils.exceptions import MalformedResponse

logger = get_logger()

_FENCE_RE = re.compile(r"^```(?:json)?[ \t]*\n?(.*?)\n?[ \t]*```$", re.DOTALL | re.IGNORECASE)

# Field values stay untyped here; the normalizer decides what they mean.
_RECORD = TypeAdapter(Dict[str, Any])
_RECORD_LIST = TypeAdapter(List[Dict[str, Any]])


def strip_fence(text: str) -> str:
    """Trim the reply and remove a surrounding ``` or ```json fence."""
    cleaned = text.strip()
    match = _FENCE_RE.match(cleaned)
    if match:
        cleaned = match.group(1).strip()
    return cleaned


def _load_json(text: str) -> Any:
    cleaned = strip_fence(text)
    try:
        return json.loads(cleaned)
    # JSONDecodeError is a ValueError; so is an over-long integer literal
    except ValueError as e:
        logger.error(f"Failed to parse JSON response: {e}")
        logger.debug(f"Response text: {text[:500]}")
        raise MalformedResponse(f"Invalid JSON response from AI service: {e}") from e


def parse_object(text: str) -> Dict[str, Any]:
    """
    Parse a single-receipt reply.

    Raises:
        MalformedResponse: If the reply is not one JSON object
    """
    data = _load_json(text)
    try:
        return _RECORD.validate_python(data)
    except ValidationError as e:
        logger.error(f"Receipt response is not a JSON object: {type(data).__name__}")
        raise MalformedResponse("AI response is not a JSON object") from e


def parse_array(text: str) -> List[Dict[str, Any]]:
    """
    Parse a bulk-statement reply.

    Raises:
        MalformedResponse: If the reply is not a JSON array of objects
    """
    data = _load_json(text)
    if not isinstance(data, list):
        logger.error(f"Statement response is not an array: {type(data).__name__}")
        raise MalformedResponse("AI response is not a JSON array")
    try:
        return _RECORD_LIST.validate_python(data)
    except ValidationError as e:
        logger.error(f"Statement response contains non-object entries: {e}")
        raise MalformedResponse("AI response array contains non-object entries") from e
