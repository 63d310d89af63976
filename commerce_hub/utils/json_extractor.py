"""
JSON extraction for language-model output that may be wrapped in
reasoning blocks, markdown fences or surrounding prose.
"""

import json
import logging
import re
from typing import Any, Dict, Optional, Union

logger = logging.getLogger(__name__)

JSONValue = Union[Dict[str, Any], list]

THINK_BLOCK = re.compile(r"<think>.*?</think>", re.DOTALL)
FENCED_BLOCKS = (
    re.compile(r"```json\s*(\{.*?\}|\[.*?\])\s*```", re.DOTALL),
    re.compile(r"```\s*(\{.*?\}|\[.*?\])\s*```", re.DOTALL),
)


def _outermost_span(text: str, opener: str, closer: str) -> Optional[str]:
    """Slice from the first opener to its balanced closer, ignoring brackets inside strings."""
    start = text.find(opener)
    if start == -1:
        return None

    depth = 0
    in_string = False
    escaped = False
    for index in range(start, len(text)):
        char = text[index]
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
            continue
        if char == '"':
            in_string = True
        elif char == opener:
            depth += 1
        elif char == closer:
            depth -= 1
            if depth == 0:
                return text[start : index + 1]
    return None


def extract_json_from_text(
    text: str,
    default: Optional[JSONValue] = None,
    required_keys: Optional[list[str]] = None,
) -> Optional[JSONValue]:
    """
    Extract JSON from text that may contain additional formatting.

    Tries, in order: the whole text, fenced code blocks, then the outermost
    balanced object or array found in the text.

    Args:
        text: The text containing JSON data
        default: Value returned when nothing parseable is found
        required_keys: Keys that must be present when the result is an object

    Returns:
        Parsed JSON object (dict or list) or the default value
    """
    if not text:
        logger.warning("Empty text provided for JSON extraction")
        return default

    clean_text = THINK_BLOCK.sub("", text).strip()

    candidates: list[str] = [clean_text]
    for pattern in FENCED_BLOCKS:
        candidates.extend(match.strip() for match in pattern.findall(clean_text))
    for opener, closer in (("{", "}"), ("[", "]")):
        span = _outermost_span(clean_text, opener, closer)
        if span:
            candidates.append(span)

    for candidate in candidates:
        try:
            parsed = json.loads(candidate)
        except json.JSONDecodeError:
            continue

        if not isinstance(parsed, (dict, list)):
            continue

        if required_keys and isinstance(parsed, dict) and not all(key in parsed for key in required_keys):
            logger.debug(f"JSON missing required keys: {required_keys}")
            continue

        return parsed

    logger.warning("Could not extract valid JSON from text")
    return default


def extract_json_safely(
    text: str,
    expected_type: type = dict,
    default: Optional[JSONValue] = None,
) -> Optional[JSONValue]:
    """
    Extract JSON ensuring it matches the expected type.

    Args:
        text: The text containing JSON data
        expected_type: Expected type of the JSON (dict or list)
        default: Default value to return if extraction fails

    Returns:
        Parsed JSON of the expected type or default value
    """
    result = extract_json_from_text(text, default)

    if result is not None and not isinstance(result, expected_type):
        logger.warning(f"Extracted JSON is not of expected type {expected_type.__name__}")
        return default

    return result
