"""Detection states: how resolved an issue already is, computed from evidence.

Only the highest-traffic subfactors have a detection function. Every other
key reports ``NOT_FOUND``, which never suppresses a recommendation.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Callable, Dict, Optional, Union

from models import DetectionState

from .evidence import (
    all_headings,
    author_info,
    faq_count,
    get_path,
    has_faq_schema,
    has_organization_schema,
    has_sitemap,
    image_alt_stats,
    robots_blocks_ai_crawlers,
    schema_type_count,
    unwrap_evidence,
)

logger = logging.getLogger(__name__)

DetectionFn = Callable[[Dict[str, Any]], DetectionState]

QUESTION_HEADING = re.compile(r"^(how|what|why|when|where|which|who|can|does|is|are|do)\b", re.IGNORECASE)
STATS_PATTERN = re.compile(r"\d+%|\d+x|\$\d+|ROI|case stud(y|ies)", re.IGNORECASE)
TESTIMONIAL_PATTERN = re.compile(r"testimonial|customer|client.*said|review", re.IGNORECASE)


def _organization_schema(ev: Dict[str, Any]) -> DetectionState:
    if not has_organization_schema(ev):
        return DetectionState.NOT_FOUND
    errors = get_path(ev, "technical.schemaValidationErrors")
    if isinstance(errors, list):
        for error in errors:
            schema = error.get("schema") if isinstance(error, dict) else error
            if "organization" in str(schema or "").lower():
                return DetectionState.SCHEMA_INVALID
    return DetectionState.COMPLETE


def _structured_data_coverage(ev: Dict[str, Any]) -> DetectionState:
    count = schema_type_count(ev)
    if count >= 4:
        return DetectionState.COMPLETE
    if count >= 1:
        return DetectionState.PARTIAL
    return DetectionState.NOT_FOUND


def _sitemap_indexing(ev: Dict[str, Any]) -> DetectionState:
    if not has_sitemap(ev):
        return DetectionState.NOT_FOUND
    urls = get_path(ev, "crawler.sitemap.urls")
    if isinstance(urls, list) and not urls:
        return DetectionState.PARTIAL
    return DetectionState.COMPLETE


def _crawler_access(ev: Dict[str, Any]) -> DetectionState:
    if robots_blocks_ai_crawlers(ev):
        return DetectionState.BLOCKING
    ttfb = get_path(ev, "performance.ttfb")
    if isinstance(ttfb, (int, float)) and not isinstance(ttfb, bool):
        if ttfb > 2000:
            return DetectionState.PARTIAL
        if 0 < ttfb < 500:
            return DetectionState.COMPLETE
    # Not blocked, but response time is unknown or middling.
    return DetectionState.PARTIAL


def _icp_faqs(ev: Dict[str, Any]) -> DetectionState:
    count = faq_count(ev)
    schema = has_faq_schema(ev)
    if count >= 5 and schema:
        return DetectionState.COMPLETE
    if count > 0 and not schema:
        return DetectionState.CONTENT_NO_SCHEMA
    if count > 0:
        return DetectionState.PARTIAL
    return DetectionState.NOT_FOUND


def _query_intent_alignment(ev: Dict[str, Any]) -> DetectionState:
    headings = all_headings(ev)
    if not headings:
        return DetectionState.NOT_FOUND
    questions = [h for h in headings if isinstance(h, str) and QUESTION_HEADING.match(h.strip())]
    ratio = len(questions) / len(headings)
    if ratio >= 0.3:
        return DetectionState.COMPLETE
    if ratio > 0:
        return DetectionState.PARTIAL
    return DetectionState.NOT_FOUND


def _social_meta_tags(ev: Dict[str, Any]) -> DetectionState:
    tags = ("metadata.ogTitle", "metadata.ogDescription", "metadata.ogImage", "metadata.twitterCard")
    present = sum(1 for path in tags if get_path(ev, path))
    if present == len(tags):
        return DetectionState.COMPLETE
    if present >= 2:
        return DetectionState.PARTIAL
    return DetectionState.NOT_FOUND


def _evidence_proof_points(ev: Dict[str, Any]) -> DetectionState:
    body = get_path(ev, "content.bodyText")
    if isinstance(body, str) and body:
        text = body
    else:
        paragraphs = get_path(ev, "content.paragraphs")
        text = " ".join(str(p) for p in paragraphs) if isinstance(paragraphs, list) else ""
    has_stats = STATS_PATTERN.search(text) is not None
    has_testimonials = TESTIMONIAL_PATTERN.search(text) is not None
    if has_stats and has_testimonials:
        return DetectionState.COMPLETE
    if has_stats or has_testimonials:
        return DetectionState.PARTIAL
    return DetectionState.NOT_FOUND


def _author_bios(ev: Dict[str, Any]) -> DetectionState:
    has_author = author_info(ev)["has_author"]
    has_about = bool(get_path(ev, "navigation.keyPages.about"))
    people = get_path(ev, "entities.entities.people")
    has_people = isinstance(people, list) and len(people) > 0
    if has_author and has_people:
        return DetectionState.COMPLETE
    if has_author or has_about or has_people:
        return DetectionState.PARTIAL
    return DetectionState.NOT_FOUND


def _alt_text_coverage(ev: Dict[str, Any]) -> DetectionState:
    stats = image_alt_stats(ev)
    if stats["total"] == 0:
        return DetectionState.COMPLETE
    coverage = stats["with_alt"] / stats["total"]
    if coverage >= 0.9:
        return DetectionState.COMPLETE
    if coverage >= 0.5:
        return DetectionState.PARTIAL
    if coverage > 0:
        return DetectionState.WEAK
    return DetectionState.NOT_FOUND


DETECTION_FUNCTIONS: Dict[str, DetectionFn] = {
    "technical_setup.organization_schema": _organization_schema,
    "technical_setup.structured_data_coverage": _structured_data_coverage,
    "technical_setup.sitemap_indexing": _sitemap_indexing,
    "technical_setup.crawler_access": _crawler_access,
    "ai_search_readiness.icp_faqs": _icp_faqs,
    "ai_search_readiness.query_intent_alignment": _query_intent_alignment,
    "technical_setup.social_meta_tags": _social_meta_tags,
    "ai_search_readiness.evidence_proof_points": _evidence_proof_points,
    "trust_authority.author_bios": _author_bios,
    "ai_readability.alt_text_coverage": _alt_text_coverage,
}


def detect_state(canonical_key: Optional[str], evidence: Any) -> DetectionState:
    """Detection state for ``canonical_key``; NOT_FOUND when unknown or on error."""
    fn = DETECTION_FUNCTIONS.get(canonical_key or "")
    if fn is None:
        return DetectionState.NOT_FOUND
    try:
        return fn(unwrap_evidence(evidence))
    except Exception as exc:
        logger.warning("Detection failed for %s: %s", canonical_key, exc)
        return DetectionState.NOT_FOUND


def has_detection(canonical_key: Optional[str]) -> bool:
    return (canonical_key or "") in DETECTION_FUNCTIONS


def should_suppress(state: Union[DetectionState, str, None]) -> bool:
    return getattr(state, "value", state) == DetectionState.COMPLETE.value


__all__ = [
    "DETECTION_FUNCTIONS",
    "detect_state",
    "has_detection",
    "should_suppress",
]
