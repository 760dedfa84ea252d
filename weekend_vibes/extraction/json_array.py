"""
Extraction of a JSON array embedded in free-form model output.

Generative models asked for "just the raw JSON array" still wrap it in markdown
fences or surround it with prose now and then. Extraction strips the fences,
takes the greedy ``[...]`` span and parses it strictly. Nothing is repaired: a
span that does not parse is reported as MalformedJSONError so the caller can
retry the whole request.
"""

import json
import math
import re
from typing import Any, Optional

from weekend_vibes.utils.errors import MalformedJSONError, NoArrayFoundError
from weekend_vibes.utils.logging import get_logger

logger = get_logger(__name__)

FENCE_MARKERS = ("```json", "```")

# Greedy and newline-spanning: first "[" through last "]".
ARRAY_PATTERN = re.compile(r"\[.*\]", re.DOTALL)


def _reject_constant(token: str) -> Any:
    raise ValueError(f"non-standard JSON constant {token!r}")


def _finite_float(token: str) -> float:
    value = float(token)
    if not math.isfinite(value):
        raise ValueError(f"number {token!r} overflows a float")
    return value


def strip_code_fences(text: str) -> str:
    """Remove every markdown code-fence marker and trim the result."""
    for marker in FENCE_MARKERS:
        text = text.replace(marker, "")
    return text.strip()


def find_array_span(text: str) -> Optional[str]:
    """Return the greedy ``[...]`` span of ``text``, or None."""
    match = ARRAY_PATTERN.search(text)
    if match is None:
        return None
    return match.group(0)


def parse_json_array(snippet: str) -> list[Any]:
    """
    Parse ``snippet`` as a strict JSON array.

    Raises:
        MalformedJSONError: If the snippet is not valid JSON, uses NaN/Infinity,
            or is not an array.
    """
    try:
        data = json.loads(snippet, parse_constant=_reject_constant, parse_float=_finite_float)
    except json.JSONDecodeError as e:
        raise MalformedJSONError(snippet, f"{e.msg} (line {e.lineno}, column {e.colno})") from e
    except (ValueError, RecursionError) as e:
        raise MalformedJSONError(snippet, str(e)) from e

    if not isinstance(data, list):
        raise MalformedJSONError(snippet, f"expected a JSON array, got {type(data).__name__}")
    return data


def extract_json_array(raw_text: str) -> list[Any]:
    """
    Extract the JSON array embedded in ``raw_text``.

    Args:
        raw_text: Untrusted text returned by the upstream model

    Returns:
        The parsed array; element shapes are passed through untouched

    Raises:
        NoArrayFoundError: If no ``[...]`` span exists after fence stripping
        MalformedJSONError: If the span is not a valid JSON array
    """
    cleaned = strip_code_fences(raw_text or "")

    snippet = find_array_span(cleaned)
    if snippet is None:
        raise NoArrayFoundError(cleaned)

    records = parse_json_array(snippet)
    logger.debug(f"Extracted {len(records)} records from {len(raw_text)} characters")
    return records
