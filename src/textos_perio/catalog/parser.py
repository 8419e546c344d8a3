"""
Parser Module - Turn model output into catalog data.
====================================================

The model is asked for bare JSON but often answers with markdown fences,
leading prose or slightly off field values. Parsing is best effort:
- Code fences are stripped
- The first JSON array/object in the text that holds records is used
- Each record is normalized and validated on its own
- Anything unrecoverable yields an empty result list, never an exception
"""

import json
import re
from typing import Any, Iterator, Optional

from pydantic import ValidationError

from textos_perio.shared.logging import get_logger
from textos_perio.shared.schemas import SearchResult, TextType
from textos_perio.shared.utils import generate_result_id, normalize_text, truncate_text

logger = get_logger(__name__)

CODE_FENCE_PATTERN = re.compile(r"```(?:json)?", re.IGNORECASE)
JSON_START_PATTERN = re.compile(r"[\[{]")

# Keys under which a model sometimes wraps the result list
RESULT_LIST_KEYS = ("results", "resultados", "items", "data")


class ResponseParseError(Exception):
    """The model response does not contain parseable JSON."""


# ─────────────────────────────────────────────────────────────────────────────
# JSON Extraction
# ─────────────────────────────────────────────────────────────────────────────


def strip_code_fences(text: str) -> str:
    """
    Remove markdown code-fence markers and surrounding whitespace.

    Example:
        >>> strip_code_fences('```json\\n[1, 2]\\n```')
        '[1, 2]'
    """
    return CODE_FENCE_PATTERN.sub("", text).strip()


def iter_json_values(text: str) -> Iterator[Any]:
    """
    Yield every JSON value found in a model response, in text order.

    The whole response (code fences stripped) comes first; after that, one
    value per opening bracket that decodes. Brackets in surrounding prose
    simply fail to decode and are skipped.
    """
    if not text or not text.strip():
        return

    cleaned = strip_code_fences(text)

    try:
        yield json.loads(cleaned)
        return
    except json.JSONDecodeError:
        pass

    decoder = json.JSONDecoder()
    for match in JSON_START_PATTERN.finditer(cleaned):
        try:
            value, _ = decoder.raw_decode(cleaned, match.start())
        except json.JSONDecodeError:
            continue
        yield value


def extract_json(text: str) -> Any:
    """
    Extract the first JSON value from a model response.

    Raises:
        ResponseParseError: if the text is empty or nothing parses
    """
    if not text or not text.strip():
        raise ResponseParseError("Empty response from model")

    for value in iter_json_values(text):
        return value

    raise ResponseParseError("Could not extract JSON from model response")


# ─────────────────────────────────────────────────────────────────────────────
# Record Normalization
# ─────────────────────────────────────────────────────────────────────────────


def normalize_text_type(value: Any) -> Optional[TextType]:
    """
    Map a free-form type label to a TextType.

    Matching ignores case and accents. Returns None for any other type.

    Example:
        >>> normalize_text_type("articulo academico")
        <TextType.ARTICULO: 'Artículo Académico'>
    """
    if isinstance(value, TextType):
        return value
    if not isinstance(value, str):
        return None

    label = normalize_text(value)
    if label in ("libro", "book"):
        return TextType.LIBRO
    if label.startswith("articulo") or label in ("article", "academic article"):
        return TextType.ARTICULO
    return None


def _unwrap_result_list(data: Any) -> list:
    """Return the list of records from a parsed response."""
    if isinstance(data, list):
        return data
    if isinstance(data, dict):
        for key in RESULT_LIST_KEYS:
            if isinstance(data.get(key), list):
                return data[key]
        # A single record
        if "title" in data:
            return [data]
    return []


def _normalize_record(item: dict) -> Optional[dict]:
    """Normalize one raw record, or return None if its type is unusable."""
    text_type = normalize_text_type(item.get("type"))
    if text_type is None:
        logger.warning(f"Dropping result with unsupported type: {item.get('type')!r}")
        return None

    record = dict(item)
    record["type"] = text_type
    record["title"] = str(record.get("title") or "").strip()
    record["author"] = str(record.get("author") or "").strip()

    raw_id = record.get("id")
    if raw_id is None or not str(raw_id).strip():
        record["id"] = generate_result_id(record["title"], record["author"])
    else:
        record["id"] = str(raw_id).strip()

    return record


def parse_search_results(raw_response: Optional[str]) -> list[SearchResult]:
    """
    Parse the search response into validated results.

    Args:
        raw_response: Raw text returned by the model

    Returns:
        List of SearchResult; empty when the response cannot be parsed
    """
    if not raw_response:
        return []

    logger.debug(f"Parsing search response ({len(raw_response)} chars)")

    items = None
    found_json = False
    # Skip values like "[1]" in prose that carry no records
    for data in iter_json_values(raw_response):
        found_json = True
        candidate = _unwrap_result_list(data)
        if any(isinstance(item, dict) for item in candidate):
            items = candidate
            break

    if not found_json:
        logger.error(
            f"Could not extract JSON from model response. "
            f"Response: {truncate_text(raw_response, 300)}"
        )
        return []

    if not items:
        logger.warning("Search response contains no result list")
        return []

    results: list[SearchResult] = []
    seen_ids: set[str] = set()

    for i, item in enumerate(items):
        if not isinstance(item, dict):
            logger.warning(f"Skipping result {i}: not an object")
            continue

        record = _normalize_record(item)
        if record is None:
            continue

        try:
            result = SearchResult(**record)
        except ValidationError as e:
            logger.warning(f"Skipping result {i}: {e.error_count()} validation error(s)")
            continue

        # Result ids must be unique within one list
        if result.id in seen_ids:
            suffix = 2
            while f"{result.id}-{suffix}" in seen_ids:
                suffix += 1
            result = result.model_copy(update={"id": f"{result.id}-{suffix}"})
        seen_ids.add(result.id)

        results.append(result)

    logger.info(f"Parsed {len(results)} of {len(items)} search results")
    return results
