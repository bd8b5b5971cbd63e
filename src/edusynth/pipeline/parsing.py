import json
import logging
from typing import Any

from edusynth.pipeline.errors import IncompleteResponse, MalformedResponse
from edusynth.pipeline.note import StudyNote

logger = logging.getLogger(__name__)


def extract_json_object(text: str | None) -> str | None:
    """Return the span from the first ``{`` to the last ``}``.

    Best-effort isolation of a JSON object the model wrapped in prose. Braces
    inside that prose will be picked up as well.
    """
    value = str(text or "")
    start = value.find("{")
    end = value.rfind("}")
    if start == -1 or end == -1 or end <= start:
        return None
    return value[start : end + 1]


def candidate_text(raw: str) -> str:
    """Concatenate ``candidates[0].content.parts[*].text``, else the raw body."""
    try:
        payload: Any = json.loads(raw)
    except (TypeError, ValueError, RecursionError):
        payload = None

    joined = "".join(_part_texts(payload))
    return joined or raw


def _part_texts(payload: Any) -> list[str]:
    candidates = _field(payload, "candidates")
    if not isinstance(candidates, list) or not candidates:
        return []
    parts = _field(_field(candidates[0], "content"), "parts")
    if not isinstance(parts, list):
        return []
    texts: list[str] = []
    for part in parts:
        text = _field(part, "text")
        texts.append(text if isinstance(text, str) else "")
    return texts


def _field(obj: Any, key: str) -> Any:
    if isinstance(obj, dict):
        return obj.get(key)
    return None


def _clean(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value.strip()
    return str(value).strip()


def project_note(data: Any) -> StudyNote:
    raw_points = _field(data, "keyPoints")
    key_points: tuple[str, ...] = ()
    if isinstance(raw_points, list):
        key_points = tuple(point for point in (_clean(item) for item in raw_points) if point)
    note = StudyNote(
        summary=_clean(_field(data, "summary")),
        explanation=_clean(_field(data, "explanation")),
        key_points=key_points,
        conclusion=_clean(_field(data, "conclusion")),
    )
    if not note.summary or not note.explanation or not note.conclusion or not note.key_points:
        raise IncompleteResponse("Model JSON was missing required fields.")
    return note


def parse_and_validate(raw: str) -> StudyNote:
    text = candidate_text(raw)
    json_text = extract_json_object(text)
    if json_text is None:
        logger.warning("parse.no_json candidate_chars=%d", len(text))
        raise MalformedResponse("Model response did not contain JSON.")
    try:
        data = json.loads(json_text)
    except json.JSONDecodeError as exc:
        logger.warning("parse.invalid_json detail=%s", exc)
        raise MalformedResponse(f"Model response contained invalid JSON ({exc.msg}).") from exc
    except RecursionError as exc:
        logger.warning("parse.too_deep json_chars=%d", len(json_text))
        raise MalformedResponse("Model response JSON was nested too deeply.") from exc
    return project_note(data)
