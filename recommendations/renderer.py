"""Evidence-gated recommendation rendering.

``render_recommendations`` walks a scoring result, picks the failing
subfactors, ranks and caps them, then for each one: suppresses it when the
evidence shows the issue is already resolved, grades the evidence, adjusts the
automation level, fills the playbook templates and (for generate-level
entries) runs the generation hook. A single render never raises for bad data.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Any, Dict, List, Mapping, Optional, Tuple

from config import AuditConfig
from gates import adjust_automation_level, should_skip_recommendation, verification_action_items
from models import (
    AutomationLevel,
    DetectionState,
    EvidenceQuality,
    FailingSubfactor,
    GeneratedAsset,
    Recommendation,
    TargetLevel,
)

from .canonical import get_playbook_entry
from .context import build_merged_context
from .detection import detect_state, has_detection, should_suppress
from .evidence import collect_selectors, get_path, unwrap_evidence
from .gating import assess_evidence_quality
from .hooks import HookRegistry, can_run_generation_hook
from .keys import build_canonical_key, to_snake_case
from .placeholders import find_leaks, resolve_template, resolve_template_list
from .playbook import PlaybookEntry
from .targeting import get_target_level, normalize_recommendation_targets, target_level_description

logger = logging.getLogger(__name__)

TEXT_FIELDS = ("gap", "finding", "why_it_matters", "recommendation", "what_to_include")
LIST_FIELDS = ("how_to_implement", "action_items", "examples")


def numeric_score(value: Any) -> Optional[float]:
    """Plain numbers and ``{score, state}`` objects; None for unmeasured."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, Mapping):
        return numeric_score(value.get("score"))
    return None


def extract_failing_subfactors(
    scoring_result: Optional[Mapping[str, Any]],
    threshold: Optional[float] = None,
) -> List[FailingSubfactor]:
    """Every measured subfactor strictly below ``threshold``, in scoring order."""
    limit = float(AuditConfig.RECOMMENDATION_SCORE_THRESHOLD if threshold is None else threshold)
    categories = (scoring_result or {}).get("categories") or {}
    failing: List[FailingSubfactor] = []
    for category, data in categories.items():
        subfactors = data.get("subfactors") if isinstance(data, Mapping) else None
        if not isinstance(subfactors, Mapping):
            continue
        for subfactor, raw in subfactors.items():
            score = numeric_score(raw)
            if score is None or score >= limit:
                continue
            failing.append(
                FailingSubfactor(
                    category=category,
                    subfactor=subfactor,
                    score=score,
                    threshold=limit,
                    gap=limit - score,
                )
            )
    return failing


def _rank_key(item: Tuple[FailingSubfactor, Optional[PlaybookEntry]]) -> Tuple[int, int, float]:
    failing, entry = item
    priority = AuditConfig.PRIORITY_WEIGHTS.get(entry.priority.value, 0) if entry else 0
    impact = AuditConfig.IMPACT_WEIGHTS.get(entry.impact, 0) if entry else 0
    return (-priority, -impact, failing.score)


def rank_failing_subfactors(
    failing: List[FailingSubfactor],
    max_count: Optional[int] = None,
) -> List[Tuple[FailingSubfactor, Optional[PlaybookEntry]]]:
    """Pair each subfactor with its playbook entry, rank, and cap the list."""
    cap = AuditConfig.MAX_RECOMMENDATIONS if max_count is None else max_count
    paired = [(item, get_playbook_entry(item.subfactor, item.category)) for item in failing]
    paired.sort(key=_rank_key)
    return paired[:cap]


def _fmt(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else f"{value:g}"


def _scan_identity(scan: Any) -> Tuple[str, Optional[str]]:
    if isinstance(scan, Mapping):
        scan_id = scan.get("id") or scan.get("scan_id")
        return (str(scan_id) if scan_id is not None else "unknown"), scan.get("url")
    if scan is None:
        return "unknown", None
    return str(scan), None


def _fallback_recommendation(item: FailingSubfactor, scan_id: str, evidence: Dict[str, Any]) -> Dict[str, Any]:
    """Template-free recommendation for a subfactor with no playbook entry."""
    subfactor_key = build_canonical_key(item.category, item.subfactor)
    label = to_snake_case(item.subfactor)
    if label.endswith("_score"):
        label = label[: -len("_score")]
    level = get_target_level(subfactor_key)
    why = f"This subfactor scored {_fmt(item.score)}/100, below the {_fmt(item.threshold)} threshold."
    action = "Review and improve this area based on best practices"
    return {
        "rec_key": f"{subfactor_key}::{scan_id}",
        "pillar": subfactor_key.split(".", 1)[0],
        "subfactor_key": subfactor_key,
        "gap": f"Improve {label.replace('_', ' ')}",
        "finding": why,
        "why_it_matters": why,
        "recommendation": action,
        "what_to_include": "",
        "how_to_implement": [action],
        "action_items": [action],
        "examples": [],
        "automation_level": AutomationLevel.MANUAL,
        "confidence": 0.3,
        "evidence_quality": EvidenceQuality.WEAK,
        "evidence_summary": "No playbook entry - limited guidance available",
        "target_level": level,
        "target_url": None,
        "target_description": target_level_description(level),
        "evidence_json": {
            "subfactor_key": subfactor_key,
            "extracted": {},
            "scan_url": get_path(evidence, "url"),
            "score": item.score,
            "threshold": item.threshold,
            "gap": item.gap,
            "detection_state": None,
        },
        "generated_assets": [],
        "detection_state": None,
    }


async def _run_generation_hook(
    entry: PlaybookEntry,
    evidence: Dict[str, Any],
    context: Mapping[str, Any],
    hooks: Optional[HookRegistry],
) -> Tuple[AutomationLevel, Optional[GeneratedAsset], str]:
    """Return (level, asset, blocked_reason) for a generate-level entry.

    ``context`` is the caller's context, not the template context: inferred
    placeholder defaults must not satisfy the readiness checks.
    """
    hook_key = entry.generator_hook_key or ""
    allowed, reason = can_run_generation_hook(hook_key, evidence, context)
    if not allowed:
        logger.info("Hook %s blocked for %s: %s", hook_key, entry.canonical_key, reason)
        return adjust_automation_level(AutomationLevel.GENERATE, EvidenceQuality.WEAK), None, reason
    if hooks is None or not hooks.has(hook_key):
        logger.info("No hook registered for %s; downgrading to draft", hook_key)
        return AutomationLevel.DRAFT, None, ""
    logger.info("Running generation hook %s", hook_key)
    asset = await hooks.execute(hook_key, evidence, dict(context))
    if asset is None:
        return AutomationLevel.DRAFT, None, ""
    return AutomationLevel.GENERATE, asset, ""


def _leaks(data: Dict[str, Any]) -> List[str]:
    leaks: List[str] = []
    for field in TEXT_FIELDS:
        leaks.extend(f"{field}: {leak}" for leak in find_leaks(data.get(field)))
    for field in LIST_FIELDS:
        for idx, value in enumerate(data.get(field) or []):
            leaks.extend(f"{field}[{idx}]: {leak}" for leak in find_leaks(value))
    return leaks


async def _render_entry(
    item: FailingSubfactor,
    entry: PlaybookEntry,
    scan_id: str,
    evidence: Dict[str, Any],
    context: Mapping[str, Any],
    base_context: Dict[str, Any],
    hooks: Optional[HookRegistry],
    noise_gap: Optional[float],
) -> Optional[Dict[str, Any]]:
    key = entry.canonical_key
    state: Optional[DetectionState] = detect_state(key, evidence) if has_detection(key) else None
    if should_suppress(state):
        logger.info("Suppressed %s: detected as complete", key)
        return None

    assessment = assess_evidence_quality(evidence, entry, context)
    if should_skip_recommendation(assessment, item.gap, noise_gap):
        logger.info("Skipped %s: weak evidence %s points below threshold", key, _fmt(item.gap))
        return None

    level = adjust_automation_level(entry.automation_level, assessment.quality)
    template_context = dict(base_context)
    template_context["detection_state"] = state.value if state else ""

    action_items = resolve_template_list(entry.action_items_template, template_context, state)
    found, _ = collect_selectors(evidence, entry.evidence_selectors)
    data: Dict[str, Any] = {
        "rec_key": f"{key}::{scan_id}",
        "pillar": entry.pillar,
        "subfactor_key": key,
        "gap": entry.gap_label,
        "finding": resolve_template(entry.finding_templates, template_context, state),
        "why_it_matters": resolve_template(entry.why_it_matters_template, template_context, state),
        "recommendation": resolve_template(entry.recommendation_template, template_context, state),
        "what_to_include": resolve_template(entry.what_to_include_template, template_context, state),
        "how_to_implement": verification_action_items(assessment, key) + action_items,
        "action_items": action_items,
        "examples": resolve_template_list(entry.examples_template, template_context, state),
        "automation_level": level,
        "confidence": assessment.confidence,
        "evidence_quality": assessment.quality,
        "evidence_summary": assessment.summary,
        "target_level": get_target_level(key),
        "target_url": None,
        "target_description": "",
        "evidence_json": {
            "subfactor_key": key,
            "extracted": found,
            "scan_url": get_path(evidence, "url"),
            "score": item.score,
            "threshold": item.threshold,
            "gap": item.gap,
            "detection_state": state.value if state else None,
        },
        "generated_assets": [],
        "detection_state": state,
    }

    if entry.automation_level == AutomationLevel.GENERATE and level == AutomationLevel.GENERATE:
        level, asset, blocked_reason = await _run_generation_hook(entry, evidence, context, hooks)
        data["automation_level"] = level
        if asset is not None:
            data["generated_assets"] = [asset]
        if blocked_reason:
            data["evidence_summary"] = f"{data['evidence_summary']}. {blocked_reason}"

    if AuditConfig.VALIDATE_PLACEHOLDERS:
        leaks = _leaks(data)
        if leaks:
            logger.warning("Placeholder leaks in %s: %s", key, "; ".join(leaks))
    return data


async def render_recommendations(
    scan: Any,
    scoring_result: Optional[Mapping[str, Any]],
    evidence: Any,
    context: Optional[Mapping[str, Any]] = None,
    hooks: Optional[HookRegistry] = None,
    threshold: Optional[float] = None,
    max_count: Optional[int] = None,
    noise_gap: Optional[float] = None,
    today: Optional[date] = None,
) -> List[Recommendation]:
    """Render the ranked, capped, target-scoped recommendation list for one scan.

    ``scan`` is a mapping with ``id``/``url`` or a bare scan id. ``hooks`` is a
    caller-owned :class:`HookRegistry`; without one, generate-level entries are
    delivered as drafts.
    """
    scan_id, scan_url = _scan_identity(scan)
    ev = unwrap_evidence(evidence)
    ctx = dict(context or {})
    logger.info("Rendering recommendations for scan %s", scan_id)

    failing = extract_failing_subfactors(scoring_result, threshold)
    ranked = rank_failing_subfactors(failing, max_count)
    logger.info("%d failing subfactors, %d after cap", len(failing), len(ranked))

    base_context = build_merged_context(ev, ctx, {"id": scan_id, "url": scan_url}, today)
    rendered: List[Dict[str, Any]] = []
    seen: set = set()
    for item, entry in ranked:
        if entry is None:
            fallback = _fallback_recommendation(item, scan_id, ev)
            if fallback["subfactor_key"] in seen:
                continue
            seen.add(fallback["subfactor_key"])
            logger.info("No playbook entry for %s.%s; using fallback", item.category, item.subfactor)
            rendered.append(fallback)
            continue
        if entry.canonical_key in seen:
            continue
        seen.add(entry.canonical_key)
        data = await _render_entry(item, entry, scan_id, ev, ctx, base_context, hooks, noise_gap)
        if data is not None:
            rendered.append(data)

    normalize_recommendation_targets(rendered, ev, ctx)
    for data in rendered:
        if not data.get("target_description"):
            data["target_description"] = target_level_description(data["target_level"])

    recommendations = [Recommendation(**data) for data in rendered]
    logger.info(
        "Rendered %d recommendations for scan %s (%d page-level)",
        len(recommendations),
        scan_id,
        sum(1 for rec in recommendations if rec.target_level == TargetLevel.PAGE),
    )
    return recommendations


__all__ = [
    "numeric_score",
    "extract_failing_subfactors",
    "rank_failing_subfactors",
    "render_recommendations",
]
