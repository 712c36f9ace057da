"""Target scope (site / page / both) for canonical keys."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, MutableMapping, Optional, Union

from models import TargetLevel

from .evidence import get_path, unwrap_evidence

logger = logging.getLogger(__name__)

TARGETING_RULES: Dict[TargetLevel, List[str]] = {
    TargetLevel.SITE: [
        "technical_setup.sitemap_indexing",
        "technical_setup.crawler_access",
        "technical_setup.organization_schema",
        "trust_authority.third_party_profiles",
        "trust_authority.thought_leadership",
        "trust_authority.professional_certifications",
        "ai_search_readiness.pillar_pages",
        "content_freshness.update_cadence",
        "voice_optimization.local_intent",
    ],
    TargetLevel.PAGE: [
        "technical_setup.social_meta_tags",
        "technical_setup.canonical_hreflang",
        "ai_readability.alt_text_coverage",
        "ai_readability.media_accessibility",
        "content_structure.semantic_heading_structure",
        "content_structure.entity_cues",
        "ai_search_readiness.query_intent_alignment",
        "ai_search_readiness.evidence_proof_points",
        "ai_search_readiness.scannability",
        "voice_optimization.conversational_content",
        "content_freshness.last_updated",
        "speed_ux.performance",
        "trust_authority.author_bios",
    ],
    TargetLevel.BOTH: [
        "technical_setup.structured_data_coverage",
        "ai_search_readiness.icp_faqs",
        "content_structure.navigation_clarity",
    ],
}

SUBFACTOR_TO_TARGET: Dict[str, TargetLevel] = {
    key: level for level, keys in TARGETING_RULES.items() for key in keys
}

CATEGORY_DEFAULTS: Dict[str, TargetLevel] = {
    "technical_setup": TargetLevel.SITE,
    "trust_authority": TargetLevel.SITE,
    "ai_readability": TargetLevel.PAGE,
    "content_structure": TargetLevel.PAGE,
    "voice_optimization": TargetLevel.PAGE,
    "content_freshness": TargetLevel.PAGE,
    "speed_ux": TargetLevel.PAGE,
    "ai_search_readiness": TargetLevel.BOTH,
}

TARGET_DESCRIPTIONS: Dict[TargetLevel, str] = {
    TargetLevel.SITE: "This recommendation applies site-wide and should be implemented once at the domain level.",
    TargetLevel.PAGE: "This recommendation applies per page and should be implemented on individual pages.",
    TargetLevel.BOTH: "This recommendation can be implemented site-wide or on individual pages.",
}

IMPLEMENTATION_SCOPES: Dict[TargetLevel, Dict[str, Any]] = {
    TargetLevel.SITE: {
        "scope": "Site-wide implementation",
        "priority": "Implement once, affects all pages",
        "examples": [
            "Add to global layout/template",
            "Configure at domain/CMS level",
            "Update site-wide configuration files",
        ],
    },
    TargetLevel.PAGE: {
        "scope": "Per-page implementation",
        "priority": "Prioritize high-traffic pages first",
        "examples": [
            "Update individual page content",
            "Add page-specific markup",
            "Modify page templates",
        ],
    },
    TargetLevel.BOTH: {
        "scope": "Flexible implementation",
        "priority": "Can be site-wide template or per-page",
        "examples": [
            "Create site-wide default, customize per page",
            "Implement in template with page overrides",
            "Batch update or individual page edits",
        ],
    },
}


def get_target_level(canonical_key: Optional[str]) -> TargetLevel:
    """Static scope for a key; falls back to the pillar default, then page."""
    if not canonical_key or not isinstance(canonical_key, str):
        return TargetLevel.PAGE
    key = canonical_key.strip().lower()
    if key in SUBFACTOR_TO_TARGET:
        return SUBFACTOR_TO_TARGET[key]
    return CATEGORY_DEFAULTS.get(key.split(".", 1)[0], TargetLevel.PAGE)


def target_level_description(level: Union[TargetLevel, str, None]) -> str:
    try:
        return TARGET_DESCRIPTIONS[TargetLevel(level)]
    except ValueError:
        return ""


def implementation_scope(level: Union[TargetLevel, str, None]) -> Dict[str, Any]:
    try:
        scope = IMPLEMENTATION_SCOPES[TargetLevel(level)]
    except ValueError:
        return {"scope": "Unknown", "priority": "", "examples": []}
    return {"scope": scope["scope"], "priority": scope["priority"], "examples": list(scope["examples"])}


def is_site_level(canonical_key: Optional[str]) -> bool:
    return get_target_level(canonical_key) in (TargetLevel.SITE, TargetLevel.BOTH)


def is_page_level(canonical_key: Optional[str]) -> bool:
    return get_target_level(canonical_key) in (TargetLevel.PAGE, TargetLevel.BOTH)


def keys_for_target_level(level: Union[TargetLevel, str]) -> List[str]:
    try:
        return list(TARGETING_RULES[TargetLevel(level)])
    except ValueError:
        return []


def _blank(value: Any) -> bool:
    return not isinstance(value, str) or not value.strip()


def normalize_recommendation_target(
    rec: MutableMapping[str, Any],
    evidence: Any = None,
    context: Optional[Mapping[str, Any]] = None,
) -> MutableMapping[str, Any]:
    """Give page-scoped recs a concrete URL, or demote them to site scope."""
    level = rec.get("target_level")
    if getattr(level, "value", level) != TargetLevel.PAGE.value or not _blank(rec.get("target_url")):
        return rec
    ctx = context or {}
    candidates = (get_path(unwrap_evidence(evidence), "url"), ctx.get("site_url"), ctx.get("page_url"))
    derived = next((url.strip() for url in candidates if not _blank(url)), None)
    if derived:
        rec["target_url"] = derived
    else:
        logger.info("No URL available for %s; demoting to site scope", rec.get("subfactor_key"))
        rec["target_level"] = TargetLevel.SITE
        rec["target_url"] = None
    rec["target_description"] = target_level_description(rec["target_level"])
    return rec


def normalize_recommendation_targets(
    recs: List[MutableMapping[str, Any]],
    evidence: Any = None,
    context: Optional[Mapping[str, Any]] = None,
) -> List[MutableMapping[str, Any]]:
    return [normalize_recommendation_target(rec, evidence, context) for rec in recs]


__all__ = [
    "TARGETING_RULES",
    "SUBFACTOR_TO_TARGET",
    "CATEGORY_DEFAULTS",
    "get_target_level",
    "target_level_description",
    "implementation_scope",
    "is_site_level",
    "is_page_level",
    "keys_for_target_level",
    "normalize_recommendation_target",
    "normalize_recommendation_targets",
]
