"""Response sanitizer — turns raw model text into decodable JSON.

Gemini occasionally wraps forced-JSON output in markdown fences or thinking
tags, emits runaway integers, floats with float-noise precision, or repeats a
key. Each fix here is idempotent, so sanitizing already-clean JSON is a no-op.
"""

from __future__ import annotations

import json
import logging
import re

logger = logging.getLogger(__name__)

_THINKING_CLOSE = "</thinking>"
# Both fences sit on their own line; JSON strings cannot hold a raw newline,
# so a ``` inside a value never closes the block.
_FENCE_RE = re.compile(r"```(?:json)?[ \t]*\n(.*?)\n[ \t]*```", re.DOTALL | re.IGNORECASE)
_PRIORITY_RE = re.compile(r'"priority"\s*:\s*\d{10,}')
_HUGE_NUMBER_RE = re.compile(r":\s*\d{20,}")
_LONG_FLOAT_RE = re.compile(r":\s*(\d+\.\d{10,})")


def extract_json(text: str) -> str:
    """Strip thinking blocks, markdown fences and surrounding prose.

    Returns the text between the first ``{`` and the last ``}`` when both are
    present, otherwise the trimmed remainder.
    """
    cleaned = text
    if _THINKING_CLOSE in cleaned:
        cleaned = cleaned.rsplit(_THINKING_CLOSE, 1)[1]

    fenced = _FENCE_RE.search(cleaned)
    if fenced:
        cleaned = fenced.group(1)
    cleaned = cleaned.strip()

    start = cleaned.find("{")
    end = cleaned.rfind("}")
    if start != -1 and end > start:
        cleaned = cleaned[start : end + 1]
    return cleaned


def _round_float(match: re.Match) -> str:
    return f": {float(match.group(1)):.2f}"


def _keep_first(pairs: list[tuple[str, object]]) -> dict:
    result: dict = {}
    for key, value in pairs:
        if key in result:
            logger.debug("Dropping duplicate key %r from model output", key)
            continue
        result[key] = value
    return result


def remove_duplicate_keys(text: str) -> str:
    """Re-serialize *text* keeping the first occurrence of every key.

    Text that does not parse is returned unchanged so the typed decoder can
    report the failure.
    """
    try:
        parsed = json.loads(text, object_pairs_hook=_keep_first)
    except json.JSONDecodeError:
        return text
    return json.dumps(parsed, ensure_ascii=False)


def sanitize_json(response: str) -> str:
    """Clean a raw model response into a JSON string ready for decoding."""
    cleaned = extract_json(response)
    cleaned = _PRIORITY_RE.sub('"priority": 1', cleaned)
    cleaned = _HUGE_NUMBER_RE.sub(": 1", cleaned)
    cleaned = _LONG_FLOAT_RE.sub(_round_float, cleaned)
    return remove_duplicate_keys(cleaned)
