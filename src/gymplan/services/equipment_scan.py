"""Equipment recognition from gym photos.

The vision model is unreliable: besides well-formed object lists it has
been seen answering with key/value pairs flattened into one list
(`["name", "Leg Press", "category", "machines", ...]`), JSON objects
encoded a second time as strings, bare names, stray numbers and nulls.
`normalize_equipment_response` turns any of these into clean records.
"""

import hashlib
import json
import logging
import re
import time
import uuid
from typing import Any, Literal

from ..clients.ai import AIClient, ImageInput
from ..errors import UpstreamServiceError, ValidationError
from ..models.equipment import DetectedEquipment, EquipmentCategory, icon_for_category
from .prompts import build_scan_prompt

logger = logging.getLogger(__name__)

UNKNOWN_NAME = "Unknown Machine"
DEFAULT_CATEGORY = EquipmentCategory.MACHINES.value
DEFAULT_CONFIDENCE = 0.8
BARE_NAME_CONFIDENCE = 0.9

# Scalars that mark the start of a field in a flattened list
KEY_MARKERS = ("name", "category")
# Leftover field names that must never become equipment names
FIELD_TOKENS = {"name", "category", "icon", "confidence", "id"}

IdStrategy = Literal["random", "content"]

_FENCED_JSON = re.compile(r"```(?:json)?\s*\n([\s\S]*?)\n\s*```")


def parse_json_text(text: str) -> Any | None:
    """Parse model output as JSON, also accepting a fenced ```json block.

    Returns None when nothing parseable is found.
    """
    try:
        return json.loads(text)
    except (json.JSONDecodeError, TypeError):
        pass

    match = _FENCED_JSON.search(text or "")
    if match:
        try:
            return json.loads(match.group(1))
        except json.JSONDecodeError:
            return None
    return None


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_flat_list(items: list) -> bool:
    """Key markers present as scalars next to non-object elements."""
    has_marker = any(isinstance(i, str) and i in KEY_MARKERS for i in items)
    has_scalar = any(not isinstance(i, (dict, list)) for i in items)
    return has_marker and has_scalar


def _rebuild_flat_list(items: list) -> list[dict]:
    """Re-pair a flattened key/value list into objects.

    A new "name" key closes the object being built. Numbers outside
    [0, 1] are skipped as noise when they appear in key position.
    """
    rebuilt: list[dict] = []
    current: dict = {}
    i = 0
    while i < len(items):
        value = items[i]
        if _is_number(value) and value not in (0, 1) and (value > 1 or value < 0):
            i += 1
            continue

        has_next = i + 1 < len(items)
        if value == "name":
            if current.get("name"):
                rebuilt.append(current)
                current = {}
            if has_next:
                current["name"] = items[i + 1]
                i += 1
        elif value in ("category", "confidence") and has_next:
            current[value] = items[i + 1]
            i += 1
        i += 1

    if current.get("name"):
        rebuilt.append(current)
    return rebuilt


def _coerce_item(item: Any) -> dict | None:
    """Turn one list element into an object, or None to drop it."""
    if isinstance(item, dict):
        return item
    if isinstance(item, str):
        if item.strip().startswith("{"):
            try:
                parsed = json.loads(item)
            except json.JSONDecodeError:
                return {"name": item}
            return parsed if isinstance(parsed, dict) else None
        if item.strip().lower() in FIELD_TOKENS:
            return None
        return {
            "name": item,
            "category": DEFAULT_CATEGORY,
            "confidence": BARE_NAME_CONFIDENCE,
        }
    # numbers, booleans, lists
    return None


def _clean_name(value: Any) -> str:
    if isinstance(value, str) and value.strip():
        return value.strip()
    if _is_number(value) and value:
        return str(value)
    return UNKNOWN_NAME


def _clean_category(value: Any) -> str:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return DEFAULT_CATEGORY


def _clean_confidence(value: Any) -> float:
    if _is_number(value) and value:
        return float(value)
    if isinstance(value, str):
        try:
            parsed = float(value)
        except ValueError:
            return DEFAULT_CONFIDENCE
        return parsed or DEFAULT_CONFIDENCE
    return DEFAULT_CONFIDENCE


def _make_id(name: str, category: str, strategy: IdStrategy) -> str:
    if strategy == "content":
        digest = hashlib.sha1(f"{name.lower()}|{category}".encode("utf-8"))
        return digest.hexdigest()[:12]
    return uuid.uuid4().hex[:12]


def normalize_equipment_response(
    payload: Any, id_strategy: IdStrategy = "random"
) -> list[DetectedEquipment]:
    """Coerce a raw scan answer into deduplicated equipment records.

    `payload` is either `{"equipment": [...]}` or the list itself.
    Every returned record has all fields populated. Ids are random per
    call unless `id_strategy="content"`, which derives them from the
    normalized name and category.
    """
    if isinstance(payload, dict):
        payload = payload.get("equipment")
    if not isinstance(payload, list):
        return []

    items = [item for item in payload if item is not None]

    if items and _is_flat_list(items):
        rebuilt = _rebuild_flat_list(items)
        if rebuilt:
            items = rebuilt

    detected: list[DetectedEquipment] = []
    seen: set[str] = set()
    for item in items:
        obj = _coerce_item(item)
        if obj is None:
            continue

        name = _clean_name(obj.get("name"))
        key = name.lower()
        if key in seen:
            continue
        seen.add(key)

        category = _clean_category(obj.get("category"))
        detected.append(
            DetectedEquipment(
                id=_make_id(name, category, id_strategy),
                name=name,
                category=category,
                confidence=_clean_confidence(obj.get("confidence")),
                icon=icon_for_category(category),
            )
        )
    return detected


class EquipmentScanner:
    """Recognizes equipment in uploaded photos through the AI service."""

    def __init__(self, ai_client: AIClient | None, id_strategy: IdStrategy = "random"):
        self.ai_client = ai_client
        self.id_strategy = id_strategy

    async def scan(self, images: list[ImageInput]) -> list[DetectedEquipment]:
        """Detect equipment across all images in one AI call.

        Raises:
            ValidationError: no images were given
            UpstreamServiceError: the AI service is not configured or failed
        """
        if not images:
            raise ValidationError("No images uploaded")
        if self.ai_client is None:
            raise UpstreamServiceError("AI API key not configured")

        logger.info("Sending %d image(s) for equipment recognition", len(images))
        started = time.perf_counter()
        try:
            text = await self.ai_client.complete_json(build_scan_prompt(), images=images)
        except Exception as e:
            logger.exception("Equipment recognition request failed")
            raise UpstreamServiceError("Failed to analyze image") from e
        logger.info(
            "Equipment recognition answered in %.0fms", (time.perf_counter() - started) * 1000
        )

        parsed = parse_json_text(text)
        if parsed is None:
            logger.warning("Unparseable recognition answer: %.200s", text)
            parsed = {"equipment": []}

        detected = normalize_equipment_response(parsed, id_strategy=self.id_strategy)
        logger.info("Detected %d equipment item(s)", len(detected))
        return detected
