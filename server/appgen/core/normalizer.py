# appgen/core/normalizer.py
"""
Turn raw model text into a parsed JSON object.

Even with JSON mode on, Gemini sometimes wraps its answer in a markdown fence or
adds a sentence before/after the object, so both are tolerated here. Plain
JSON is always tried first: string values may legitimately contain backticks.
"""
import json
import re
from typing import Any, Dict, Iterator, List, Optional

from appgen.core.errors import MalformedModelOutput

_OPEN_FENCE_RE = re.compile(r"^```[A-Za-z0-9_+-]*[ \t]*")
_CLOSE_FENCE_RE = re.compile(r"\s*```\s*$")
_FENCED_BLOCK_RE = re.compile(r"```[A-Za-z0-9_+-]*[ \t]*\n?(.*?)```", re.DOTALL)


def strip_code_fences(text: str) -> str:
    s = (text or "").strip()
    if s.startswith("```"):
        s = _OPEN_FENCE_RE.sub("", s, count=1)
        s = _CLOSE_FENCE_RE.sub("", s, count=1)
        return s.strip()
    # fenced block embedded in prose
    m = _FENCED_BLOCK_RE.search(s)
    if m:
        return m.group(1).strip()
    return s


def _object_span_at(text: str, start: int) -> Optional[str]:
    depth = 0
    in_string = False
    escaped = False
    for i in range(start, len(text)):
        ch = text[i]
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            continue
        if ch == '"':
            in_string = True
        elif ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return text[start:i + 1]
    return None


def iter_json_objects(text: str) -> Iterator[str]:
    """
    Yield successive top-level {...} spans, matching braces outside of string
    literals. Scanning resumes after the end of each span, so prose like
    "{brand} tone: {...}" still reaches the real object.
    """
    pos = text.find("{")
    while pos != -1:
        span = _object_span_at(text, pos)
        if span is None:
            return
        yield span
        pos = text.find("{", pos + len(span))


def extract_json_object(text: str) -> Optional[str]:
    """First top-level {...} span, or None if there is no complete object."""
    return next(iter_json_objects(text), None)


def _load_object(text: str) -> Optional[Dict[str, Any]]:
    try:
        parsed = json.loads(text)
    except json.JSONDecodeError:
        return None
    return parsed if isinstance(parsed, dict) else None


def parse_model_output(raw: Optional[str]) -> Dict[str, Any]:
    """
    Raises MalformedModelOutput (carrying the raw text) when no JSON object can
    be recovered. Never returns an empty placeholder.
    """
    if raw is None or not str(raw).strip():
        raise MalformedModelOutput("model output is empty", raw_text=raw)

    text = str(raw).strip()
    candidates: List[str] = [text]
    cleaned = strip_code_fences(text)
    if cleaned != text:
        candidates.append(cleaned)

    for candidate in candidates:
        parsed = _load_object(candidate)
        if parsed is not None:
            return parsed

    found_span = False
    for candidate in candidates:
        for span in iter_json_objects(candidate):
            found_span = True
            parsed = _load_object(span)
            if parsed is not None:
                return parsed

    if not found_span:
        raise MalformedModelOutput("no JSON object found in model output", raw_text=raw)
    raise MalformedModelOutput("invalid JSON in model output", raw_text=raw)
