"""
Response Normalizer

Turns the raw text of a vision model reply into an AnalysisResult.

The reply is untrusted: the model is asked for JSON but may answer
with fenced JSON, a bulleted outline, or plain prose. Strategies are
tried in a fixed order and the first one that produces a result wins:

1. The whole reply parsed as a JSON object
2. A reply that is only a Markdown code fence around a JSON record
3. A line scan that files bullet items under section headings
4. The whole reply as a single UX insight (always matches)

normalize() never raises for string input.
"""

import json
import logging
import re
from enum import Enum
from typing import Any, Callable, Optional

from pydantic import ValidationError

from .models import AnalysisResult, Annotation

logger = logging.getLogger(__name__)

Strategy = Callable[[str], Optional[AnalysisResult]]

_BULLET_RE = re.compile(r"^(?:-|•|\d+\.)\s*")
_FENCE_RE = re.compile(r"\A```(?:json)?[ \t]*\n(.*)\n[ \t]*```\Z", re.DOTALL)

RECORD_KEYS = frozenset({"uxInsights", "visualDesign", "bestPractices", "annotations"})


class Section(str, Enum):
    """Feedback category a scanned bullet item is filed under."""

    UX_INSIGHTS = "ux_insights"
    VISUAL_DESIGN = "visual_design"
    BEST_PRACTICES = "best_practices"


# Checked in order; the first keyword hit decides the section.
SECTION_KEYWORDS: tuple[tuple[Section, tuple[str, ...]], ...] = (
    (Section.UX_INSIGHTS, ("ux", "usability")),
    (Section.VISUAL_DESIGN, ("visual", "design")),
    (Section.BEST_PRACTICES, ("best", "practice")),
)


def normalize(raw_text: str) -> AnalysisResult:
    """
    Normalize a raw vision model reply into an AnalysisResult.

    Args:
        raw_text: Reply text exactly as returned by the provider

    Returns:
        AnalysisResult with all three feedback lists present

    Example:
        result = normalize("UX Insights\\n- Good contrast")
        assert result.ux_insights == ["Good contrast"]
    """
    for strategy in STRATEGIES:
        result = strategy(raw_text)
        if result is not None:
            logger.debug("Reply normalized by %s: %s", strategy.__name__, result.summary())
            return result

    logger.debug("No structure found in reply, keeping it as a single insight")
    return degenerate_result(raw_text)


def parse_structured(raw_text: str) -> Optional[AnalysisResult]:
    """
    Parse the whole reply as a JSON object.

    Missing or malformed fields become empty lists. Returns None when
    the reply is not a JSON object.
    """
    data = _load_object(raw_text.strip())
    if data is None:
        return None
    return _result_from_record(data)


def parse_fenced(raw_text: str) -> Optional[AnalysisResult]:
    """
    Parse a reply that is exactly one Markdown code fence around a
    JSON record.

    Handles both ```json and bare ``` fences. The body must be a JSON
    object with at least one record field; anything else returns None
    so the line scan still sees the reply.
    """
    fenced = extract_fenced_block(raw_text)
    if fenced is None:
        return None

    data = _load_object(fenced)
    if data is None or not RECORD_KEYS.intersection(data):
        return None
    return _result_from_record(data)


def scan_sections(raw_text: str) -> Optional[AnalysisResult]:
    """
    File bulleted lines under the most recent section heading.

    A line mentioning a section keyword only switches the current
    section, even if it is also bulleted. Bullet lines ("-", "•" or
    "1.") are appended to the current section with the marker removed.
    Everything else is ignored. Items before any heading go to UX
    insights.

    Returns None when no items were found.
    """
    items: dict[Section, list[str]] = {section: [] for section in Section}
    current = Section.UX_INSIGHTS

    for line in raw_text.split("\n"):
        stripped = line.strip()
        if not stripped:
            continue

        switched_to = _section_for_heading(stripped)
        if switched_to is not None:
            current = switched_to
            continue

        marker = _BULLET_RE.match(stripped)
        if marker:
            item = stripped[marker.end():].strip()
            if item:
                items[current].append(item)

    if not any(items.values()):
        return None

    return AnalysisResult(
        ux_insights=items[Section.UX_INSIGHTS],
        visual_design=items[Section.VISUAL_DESIGN],
        best_practices=items[Section.BEST_PRACTICES],
    )


def degenerate_result(raw_text: str) -> AnalysisResult:
    """Keep the whole reply as a single UX insight"""
    return AnalysisResult(ux_insights=[raw_text])


STRATEGIES: tuple[Strategy, ...] = (
    parse_structured,
    parse_fenced,
    scan_sections,
)


def extract_fenced_block(text: str) -> Optional[str]:
    """Return the fence body when the whole reply is a single code fence"""
    match = _FENCE_RE.match(text.strip())
    if match is None:
        return None
    return match.group(1).strip()


def _section_for_heading(line: str) -> Optional[Section]:
    lowered = line.lower()
    for section, keywords in SECTION_KEYWORDS:
        if any(keyword in lowered for keyword in keywords):
            return section
    return None


def _load_object(text: str) -> Optional[dict]:
    try:
        data = json.loads(text)
    except (ValueError, RecursionError):
        return None
    return data if isinstance(data, dict) else None


def _result_from_record(data: dict) -> AnalysisResult:
    return AnalysisResult(
        ux_insights=_string_items(data.get("uxInsights")),
        visual_design=_string_items(data.get("visualDesign")),
        best_practices=_string_items(data.get("bestPractices")),
        annotations=_annotation_items(data.get("annotations")),
    )


def _string_items(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [item if isinstance(item, str) else str(item) for item in value if item is not None]


def _annotation_items(value: Any) -> list[Annotation]:
    if not isinstance(value, list):
        return []

    annotations = []
    for item in value:
        try:
            annotations.append(Annotation.model_validate(item))
        except ValidationError as e:
            logger.debug("Dropping malformed annotation %r: %s", item, e)
    return annotations
