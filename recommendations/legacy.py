"""Re-render persisted recommendation rows that only carry free-text titles.

Rows written before canonical keys existed are matched back to a playbook
entry, then either marked implemented (when the latest evidence shows the
issue resolved) or given freshly rendered content in both the legacy
three-field shape and the five-section shape. Input rows are never mutated.
"""

from __future__ import annotations

import json
import logging
from datetime import date, datetime, timezone
from typing import Any, Dict, List, Mapping, Optional, Tuple

from gates import verification_action_items
from logging_utils import get_error_info, log_exception
from models import DetectionState

from .canonical import match_legacy_row
from .context import build_merged_context
from .detection import detect_state, has_detection, should_suppress
from .gating import assess_evidence_quality
from .placeholders import resolve_template, resolve_template_list
from .playbook import get_entry

logger = logging.getLogger(__name__)

RESOLVED_FINDINGS = "Detected as complete in the latest scan, no action needed."
RESOLVED_IMPACT = "This item appears properly implemented on your site."
RESOLVED_REASON = "resolved_by_latest_scan"


def parse_legacy_evidence(raw: Any) -> Dict[str, Any]:
    """Accept a dict, a JSON string, or a wrapper carrying ``scanEvidence``."""
    evidence: Any = raw
    if isinstance(raw, (str, bytes)):
        try:
            evidence = json.loads(raw)
        except ValueError:
            logger.warning("Legacy evidence is not valid JSON; continuing without evidence")
            evidence = {}
    if not isinstance(evidence, dict):
        return {}
    nested = evidence.get("scanEvidence")
    if isinstance(nested, dict):
        return nested
    return evidence


def render_legacy_sections(
    canonical_key: str,
    evidence: Dict[str, Any],
    context: Dict[str, Any],
    state: Optional[DetectionState] = None,
) -> Optional[Dict[str, Any]]:
    """Five rendered sections for ``canonical_key``; None for unknown keys."""
    entry = get_entry(canonical_key)
    if entry is None:
        return None
    assessment = assess_evidence_quality(evidence, entry, context)
    template_context = dict(context)
    template_context["detection_state"] = state.value if state else ""
    action_items = resolve_template_list(entry.action_items_template, template_context, state)
    return {
        "finding": resolve_template(entry.finding_templates, template_context, state),
        "why_it_matters": resolve_template(entry.why_it_matters_template, template_context, state),
        "recommendation": resolve_template(entry.recommendation_template, template_context, state),
        "what_to_include": resolve_template(entry.what_to_include_template, template_context, state),
        "how_to_implement": verification_action_items(assessment, canonical_key) + action_items,
    }


def _mark_resolved(row: Dict[str, Any], now: str) -> None:
    if not row.get("status") or row.get("status") == "pending":
        row["status"] = "implemented"
    if not row.get("implemented_at"):
        row["implemented_at"] = now
    row["archived_reason"] = row.get("archived_reason") or RESOLVED_REASON
    row["validation_status"] = row.get("validation_status") or "complete"
    row["findings"] = RESOLVED_FINDINGS
    row["impact_description"] = RESOLVED_IMPACT
    row["finding"] = ""
    row["why_it_matters"] = ""
    row["recommendation"] = ""
    row["what_to_include"] = ""
    row["how_to_implement"] = []


def _apply_sections(row: Dict[str, Any], sections: Dict[str, Any]) -> None:
    row["findings"] = sections["finding"] or row.get("findings") or ""
    row["impact_description"] = sections["why_it_matters"] or row.get("impact_description") or ""
    row["action_steps"] = list(sections["how_to_implement"])
    row["finding"] = sections["finding"]
    row["why_it_matters"] = sections["why_it_matters"]
    row["recommendation"] = sections["recommendation"]
    row["what_to_include"] = sections["what_to_include"]
    row["how_to_implement"] = list(sections["how_to_implement"])


def enrich_legacy_recommendations(
    recommendations: Optional[List[Mapping[str, Any]]],
    evidence: Any,
    scan: Optional[Mapping[str, Any]] = None,
    context: Optional[Mapping[str, Any]] = None,
    debug: bool = False,
    now: Optional[datetime] = None,
    today: Optional[date] = None,
) -> Tuple[List[Any], Dict[str, Any]]:
    """Return ``(enriched_rows, debug_info)``.

    Each row is a shallow copy of its input. Unmatched rows come back
    unchanged; a failure on one row, including a row that is not a mapping,
    is logged, recorded in ``errors`` and leaves that row as-is.
    """
    ev = parse_legacy_evidence(evidence)
    scan = scan or {}
    timestamp = (now or datetime.now(timezone.utc)).isoformat()
    merged_context = build_merged_context(ev, context, scan, today)

    debug_info: Dict[str, Any] = {
        "enriched_count": 0,
        "resolved_count": 0,
        "matched_by_counts": {},
        "unmatched_titles": [],
        "errors": [],
    }
    trace: List[Dict[str, Any]] = []
    enriched: List[Any] = []

    for index, original in enumerate(recommendations or []):
        # Failed rows go back as they came in; mappings still as a fresh copy.
        enriched.append(original)
        title = original.get("recommendation_text") if isinstance(original, Mapping) else None
        key: Optional[str] = None
        matched_by: Optional[str] = None
        try:
            if not isinstance(original, Mapping):
                raise TypeError(f"expected a mapping row, got {type(original).__name__}")
            row = dict(original)
            enriched[-1] = row
            key, matched_by = match_legacy_row(row)

            if key is None:
                if title and str(title) not in debug_info["unmatched_titles"]:
                    debug_info["unmatched_titles"].append(str(title))
                path = "unmatched"
            else:
                counts = debug_info["matched_by_counts"]
                counts[matched_by] = counts.get(matched_by, 0) + 1
                state = detect_state(key, ev) if has_detection(key) else None
                if should_suppress(state):
                    _mark_resolved(row, timestamp)
                    debug_info["resolved_count"] += 1
                    path = "resolved_complete"
                else:
                    sections = render_legacy_sections(key, ev, merged_context, state)
                    if sections is None:
                        raise KeyError(f"no playbook entry for {key}")
                    _apply_sections(row, sections)
                    debug_info["enriched_count"] += 1
                    path = "rendered"
        except Exception as exc:
            log_exception(logger, exc, context=f"Legacy enrichment failed for row {index}", row_index=index)
            enriched[-1] = dict(original) if isinstance(original, Mapping) else original
            debug_info["errors"].append(get_error_info(exc, {"index": index, "canonical_key": key, "title": title}))
            path = "error"
        trace.append({"index": index, "path": path, "canonical_key": key, "matched_by": matched_by})

    if debug:
        debug_info["trace"] = trace
    logger.info(
        "Legacy enrichment: %d rendered, %d resolved, %d unmatched, %d errors",
        debug_info["enriched_count"],
        debug_info["resolved_count"],
        len(debug_info["unmatched_titles"]),
        len(debug_info["errors"]),
    )
    return enriched, debug_info


__all__ = [
    "RESOLVED_FINDINGS",
    "RESOLVED_IMPACT",
    "parse_legacy_evidence",
    "render_legacy_sections",
    "enrich_legacy_recommendations",
]
