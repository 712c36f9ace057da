"""Evidence quality gating for playbook entries.

``assess_evidence_quality`` turns selector coverage and a few domain
heuristics into an :class:`~models.EvidenceAssessment`. It is a pure
function: the evidence is only read through the accessor module.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Dict, List, Mapping, Optional

from config import AuditConfig
from confidence import ConfidenceBreakdown, headline
from models import EvidenceAssessment, EvidenceQuality

from .evidence import collect_selectors, faq_items, get_path, has_faq_schema, is_evidence_present, unwrap_evidence
from .playbook import PlaybookEntry, Rule

logger = logging.getLogger(__name__)

# Navigation and accordion toggles that extractors mistake for FAQ questions.
FAQ_FALSE_POSITIVE_PATTERNS = [
    re.compile(r"^close\s", re.IGNORECASE),
    re.compile(r"^open\s", re.IGNORECASE),
    re.compile(r"\smenu$", re.IGNORECASE),
    re.compile(r"\smenu\s", re.IGNORECASE),
    re.compile(r"^menu\s", re.IGNORECASE),
    re.compile(r"about\s+us\s+menu", re.IGNORECASE),
    re.compile(r"products?\s+menu", re.IGNORECASE),
    re.compile(r"services?\s+menu", re.IGNORECASE),
    re.compile(r"toggle\s", re.IGNORECASE),
    re.compile(r"navigation", re.IGNORECASE),
    re.compile(r"expand\s", re.IGNORECASE),
    re.compile(r"collapse\s", re.IGNORECASE),
    re.compile(r"show\s+more", re.IGNORECASE),
    re.compile(r"hide\s", re.IGNORECASE),
]


def is_faq_false_positive(question: Any) -> bool:
    if not question or not isinstance(question, str):
        return False
    text = question.strip()
    if any(pattern.search(text) for pattern in FAQ_FALSE_POSITIVE_PATTERNS):
        return True
    # Very short non-questions are usually labels, not FAQ entries.
    return len(text) < 10 and "?" not in text


def analyze_faq_quality(evidence: Any) -> Dict[str, Any]:
    """Flag FAQ content that is likely menu toggles or unsupported by page/schema."""
    ev = unwrap_evidence(evidence)
    result: Dict[str, Any] = {
        "is_suspicious": False,
        "suspicious_count": 0,
        "total_count": 0,
        "reasons": [],
    }
    faqs = faq_items(ev)
    result["total_count"] = len(faqs)

    for faq in faqs:
        question = faq.get("question") or faq.get("q") or ""
        if is_faq_false_positive(question):
            result["suspicious_count"] += 1
            if len(result["reasons"]) < 3:
                result["reasons"].append(f'"{str(question)[:50]}" looks like a navigation toggle')

    total = result["total_count"]
    if total and result["suspicious_count"] >= total * AuditConfig.FAQ_SUSPICIOUS_RATIO:
        result["is_suspicious"] = True
        result["reasons"].insert(
            0, f"{result['suspicious_count']}/{total} detected FAQs appear to be navigation toggles"
        )

    has_faq_url = (
        get_path(ev, "navigation.keyPages.faq")
        or get_path(ev, "crawler.discoveredSections.hasFaqUrl")
        or get_path(ev, "navigation.hasFAQLink")
    )
    if total and not has_faq_url and not has_faq_schema(ev) and not result["is_suspicious"]:
        result["is_suspicious"] = True
        result["reasons"].append("FAQs detected in content but no FAQ page URL or FAQPage schema found")

    return result


def _rule_triggered(evidence: Any, rule: Rule) -> bool:
    value = get_path(evidence, rule.selector)
    if rule.pattern:
        return bool(value) and re.search(rule.pattern, str(value), re.IGNORECASE) is not None
    return is_evidence_present(value)


def _has_context(context: Optional[Mapping[str, Any]]) -> bool:
    if not context:
        return False
    return bool(context.get("detected_industry") or context.get("icp_roles"))


def assess_evidence_quality(
    evidence: Any,
    entry: Optional[PlaybookEntry],
    context: Optional[Mapping[str, Any]] = None,
) -> EvidenceAssessment:
    """Grade the evidence behind ``entry``.

    Disqualifiers, ambiguity rules and the FAQ heuristics force ``ambiguous``.
    Otherwise coverage of ``min_evidence`` (or ``evidence_selectors`` when no
    minimum is declared) maps to strong/medium/weak. Industry or ICP context
    adds a small boost that can promote a borderline weak result.
    """
    ev = unwrap_evidence(evidence)
    selectors: List[str] = list(entry.evidence_selectors) if entry else []
    min_evidence: List[str] = list(entry.min_evidence) if entry else []
    key = entry.canonical_key if entry else ""

    found, missing = collect_selectors(ev, selectors)
    min_found, min_missing = collect_selectors(ev, min_evidence)

    details: Dict[str, Any] = {
        "selectors_checked": len(selectors),
        "selectors_found": len(found),
        "selectors_missing": missing,
        "min_evidence_checked": len(min_evidence),
        "min_evidence_found": len(min_found),
        "min_evidence_missing": min_missing,
        "disqualifiers_triggered": [],
        "ambiguity_triggered": [],
    }
    summary_parts: List[str] = []
    quality: Optional[EvidenceQuality] = None
    breakdown = ConfidenceBreakdown(base=AuditConfig.CONFIDENCE_MEDIUM)

    for rule in entry.disqualifiers if entry else []:
        if _rule_triggered(ev, rule):
            details["disqualifiers_triggered"].append(rule.reason)
    if details["disqualifiers_triggered"]:
        quality = EvidenceQuality.AMBIGUOUS
        breakdown.ceiling = AuditConfig.CONFIDENCE_AMBIGUOUS
        summary_parts.append("Disqualified: " + "; ".join(details["disqualifiers_triggered"]))

    for rule in entry.ambiguity_rules if entry else []:
        if _rule_triggered(ev, rule):
            details["ambiguity_triggered"].append(rule.reason)
    if details["ambiguity_triggered"] and quality is None:
        quality = EvidenceQuality.AMBIGUOUS
        breakdown.ceiling = AuditConfig.CONFIDENCE_AMBIGUOUS + 0.1
        summary_parts.append("Ambiguous: " + "; ".join(details["ambiguity_triggered"]))

    if "faq" in key.lower():
        faq_analysis = analyze_faq_quality(ev)
        if faq_analysis["is_suspicious"]:
            quality = EvidenceQuality.AMBIGUOUS
            breakdown.ceiling = min(breakdown.ceiling, AuditConfig.CONFIDENCE_AMBIGUOUS)
            summary_parts.append(faq_analysis["reasons"][0] if faq_analysis["reasons"] else "FAQ content appears suspicious")
            details["faq_analysis"] = faq_analysis

    if quality is None:
        if min_evidence:
            checked, hits, label = len(min_evidence), len(min_found), "required signals"
        else:
            checked, hits, label = len(selectors), len(found), "evidence selectors"

        if not checked:
            quality = EvidenceQuality.WEAK
            breakdown.base = AuditConfig.CONFIDENCE_WEAK
            summary_parts.append("No evidence selectors defined for this recommendation")
        else:
            coverage = hits / checked
            if coverage >= AuditConfig.STRONG_COVERAGE:
                quality = EvidenceQuality.STRONG
                breakdown.base = AuditConfig.CONFIDENCE_STRONG
                summary_parts.append(f"Strong evidence: {hits}/{checked} {label} found")
            elif coverage >= AuditConfig.MEDIUM_COVERAGE:
                quality = EvidenceQuality.MEDIUM
                breakdown.base = AuditConfig.CONFIDENCE_MEDIUM
                breakdown.coverage_adjustment = (coverage - AuditConfig.MEDIUM_COVERAGE) * 0.4
                summary_parts.append(f"Medium evidence: {hits}/{checked} {label} found")
            else:
                quality = EvidenceQuality.WEAK
                breakdown.base = AuditConfig.CONFIDENCE_WEAK
                breakdown.coverage_adjustment = coverage * 0.3
                summary_parts.append(f"Weak evidence: only {hits}/{checked} {label} found")

    if _has_context(context):
        breakdown.context_adjustment = AuditConfig.CONTEXT_CONFIDENCE_BOOST

    confidence = headline(breakdown)
    if quality == EvidenceQuality.WEAK and confidence > AuditConfig.CONFIDENCE_WEAK + 0.15:
        quality = EvidenceQuality.MEDIUM

    logger.debug("Assessed %s: %s (%.2f)", key or "<no entry>", quality.value, confidence)
    return EvidenceAssessment(
        quality=quality,
        confidence=confidence,
        summary=". ".join(summary_parts) or "Evidence assessed",
        details=details,
    )


__all__ = [
    "FAQ_FALSE_POSITIVE_PATTERNS",
    "is_faq_false_positive",
    "analyze_faq_quality",
    "assess_evidence_quality",
]
