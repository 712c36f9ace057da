"""Canonical key resolution for loose keys, recommendation objects and legacy titles.

Every resolver returns ``None`` when nothing matches; callers treat that as an
unknown subfactor.
"""

from __future__ import annotations

import re
from typing import Any, Dict, List, Mapping, Optional, Tuple

from pillars import normalize_pillar_key

from .keys import build_canonical_key, normalize_key, split_key
from .playbook import ALIASES, REGISTRY, PlaybookEntry

_MIN_FUZZY_LENGTH = 3


def _exact_or_alias(key: str) -> Optional[str]:
    if key in REGISTRY:
        return key
    target = ALIASES.get(key)
    if target in REGISTRY:
        return target
    return None


def _fuzzy_match(short: str, candidates: List[str]) -> List[str]:
    """Canonical keys whose subfactor matches ``short`` loosely.

    Exact subfactor matches win; otherwise prefix matches in either direction
    (``alt_text`` -> ``alt_text_coverage``, ``performance_score`` -> ``performance``).
    """
    stripped = short[:-6] if short.endswith("_score") else short
    if len(stripped) < _MIN_FUZZY_LENGTH:
        return []
    exact = [key for key in candidates if split_key(key)[1] in (short, stripped)]
    if exact:
        return exact
    matches = []
    for key in candidates:
        entry_short = split_key(key)[1]
        if entry_short.startswith(stripped) or stripped.startswith(entry_short):
            matches.append(key)
    return matches


def resolve_canonical_key(key: Optional[str], category: Optional[str] = None) -> Optional[str]:
    """Resolve any subfactor spelling to a registry key.

    Order: exact, alias, normalized exact/alias, fuzzy within the hinted pillar,
    then a global fuzzy match that only accepts a single candidate.
    """
    if not key or not isinstance(key, str):
        return None
    raw = key.strip()
    hit = _exact_or_alias(raw)
    if hit:
        return hit

    normalized = normalize_key(raw)
    if category and "." not in normalized:
        normalized = build_canonical_key(category, normalized)
    hit = _exact_or_alias(normalized)
    if hit:
        return hit

    pillar, short = split_key(normalized)
    if not short:
        return None
    if pillar:
        in_pillar = [k for k in REGISTRY if k.startswith(f"{pillar}.")]
        matches = _fuzzy_match(short, in_pillar)
        if matches:
            return matches[0]

    matches = _fuzzy_match(short, list(REGISTRY))
    if len(matches) == 1:
        return matches[0]
    return None


def get_playbook_entry(key: Optional[str], category: Optional[str] = None) -> Optional[PlaybookEntry]:
    canonical = resolve_canonical_key(key, category)
    return REGISTRY.get(canonical) if canonical else None


def _build_suffix_map() -> Dict[str, Optional[str]]:
    suffixes: Dict[str, Optional[str]] = {}
    for key in REGISTRY:
        short = split_key(key)[1]
        # Ambiguous suffixes resolve to None
        suffixes[short] = None if short in suffixes else key
    return suffixes


SUFFIX_MAP: Dict[str, Optional[str]] = _build_suffix_map()


def canonical_key_for_rec(rec: Mapping[str, Any]) -> Optional[str]:
    """Canonical key for a recommendation-like mapping.

    Tries ``subfactor_key``, the ``rec_key`` prefix before ``::``, the pillar
    hint plus subfactor suffix, then a unique suffix.
    """
    if not rec:
        return None
    subfactor_key = (rec.get("subfactor_key") or "").strip()
    if subfactor_key in REGISTRY:
        return subfactor_key

    rec_key = (rec.get("rec_key") or "").strip()
    if rec_key:
        prefix = rec_key.split("::", 1)[0]
        if prefix in REGISTRY:
            return prefix

    source = subfactor_key or (rec_key.split("::", 1)[0] if rec_key else "")
    if not source:
        return None
    suffix = normalize_key(split_key(source)[1])
    hint = rec.get("pillar_key") or rec.get("pillar") or rec.get("category")
    if hint:
        candidate = f"{normalize_pillar_key(str(hint))}.{suffix}"
        if candidate in REGISTRY:
            return candidate
    return SUFFIX_MAP.get(suffix)


# ---------------------------------------------------------------------------
# Legacy free-text titles
# ---------------------------------------------------------------------------

_WHITESPACE = re.compile(r"\s+")
_TRAILING_PERIODS = re.compile(r"\.+$")


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def norm_title(title: Any) -> str:
    """Trim, lowercase, collapse whitespace and drop trailing periods."""
    text = _WHITESPACE.sub(" ", _as_text(title).strip().lower())
    return _TRAILING_PERIODS.sub("", text).strip()


_RAW_TITLES: Dict[str, str] = {
    "Add FAQ Schema Markup": "ai_search_readiness.icp_faqs",
    "Implement XML Sitemap with Priority Signals": "technical_setup.sitemap_indexing",
    "Add Author Bio and Credentials": "trust_authority.author_bios",
    "Add Organization Schema with Social Links": "technical_setup.organization_schema",
    "Optimize Image Alt Text for AI Understanding": "ai_readability.alt_text_coverage",
    "Add Open Graph & Twitter Card meta tags": "technical_setup.social_meta_tags",
    "Weak Evidence & Proof Points": "ai_search_readiness.evidence_proof_points",
    "Crawler Access Issues": "technical_setup.crawler_access",
    "Limited Structured Data Coverage": "technical_setup.structured_data_coverage",
    # Alternate phrasings of the same keys
    "Add FAQ Structured Data": "ai_search_readiness.icp_faqs",
    "Missing ICP-Specific FAQs": "ai_search_readiness.icp_faqs",
    "Improve faqScore": "ai_search_readiness.icp_faqs",
    "Improve faq Schema": "ai_search_readiness.icp_faqs",
    "Missing or Incomplete Sitemap": "technical_setup.sitemap_indexing",
    "Optimize XML Sitemap": "technical_setup.sitemap_indexing",
    "Improve sitemapScore": "technical_setup.sitemap_indexing",
    "Add Comprehensive Author Profiles": "trust_authority.author_bios",
    "Missing Author & Team Credentials": "trust_authority.author_bios",
    "Add Organization + WebSite + WebPage schema": "technical_setup.organization_schema",
    "Missing Organization Schema": "technical_setup.organization_schema",
    "Improve altTextScore": "ai_readability.alt_text_coverage",
    "Incomplete Image Alt Text": "ai_readability.alt_text_coverage",
    "AI Readability: Image Alt Text": "ai_readability.alt_text_coverage",
    "AI Readability: altTextScore": "ai_readability.alt_text_coverage",
    "Improve openGraphScore": "technical_setup.social_meta_tags",
    "Technical Setup: Open Graph & Social Meta Tags": "technical_setup.social_meta_tags",
    "Improve painPointsScore": "ai_search_readiness.evidence_proof_points",
    "Improve crawlerAccessScore": "technical_setup.crawler_access",
    "Technical Setup: crawlerAccessScore": "technical_setup.crawler_access",
    "Implement Structured Data": "technical_setup.structured_data_coverage",
    "Implement Structured Data Schema": "technical_setup.structured_data_coverage",
    "Improve structuredDataScore": "technical_setup.structured_data_coverage",
    "Technical Setup: Schema Markup": "technical_setup.structured_data_coverage",
}

TITLE_TO_CANONICAL: Dict[str, str] = {norm_title(title): key for title, key in _RAW_TITLES.items()}


def _has(text: str, *terms: str) -> bool:
    return any(term in text for term in terms)


def keyword_fallback(title: Any, category: Any = None) -> Optional[str]:
    """Conservative title match requiring two distinctive co-occurring terms."""
    text = norm_title(title)
    if not text:
        return None
    cat = _as_text(category).lower()

    if "faq" in text and "schema" in text:
        return "ai_search_readiness.icp_faqs"
    if "sitemap" in text and "xml" in text:
        return "technical_setup.sitemap_indexing"
    if "author" in text and _has(text, "bio", "credentials"):
        return "trust_authority.author_bios"
    if "organization" in text and "schema" in text:
        return "technical_setup.organization_schema"
    if "alt" in text and "text" in text and "readability" in cat:
        return "ai_readability.alt_text_coverage"
    if _has(text, "open graph", "twitter card"):
        return "technical_setup.social_meta_tags"
    if "ai search" in cat and _has(text, "proof", "evidence"):
        return "ai_search_readiness.evidence_proof_points"
    if "crawler" in text and "access" in text:
        return "technical_setup.crawler_access"
    if "structured data" in text and _has(text, "coverage", "limited"):
        return "technical_setup.structured_data_coverage"
    return None


def match_legacy_row(row: Mapping[str, Any]) -> Tuple[Optional[str], Optional[str]]:
    """Resolve a persisted row to ``(canonical_key, matched_by)``.

    Strategies in order: ``title``, ``rec_key``, ``subfactor_key``, ``keyword``.
    """
    title = _as_text(row.get("recommendation_text") or row.get("title"))
    category = _as_text(row.get("category") or row.get("pillar"))

    key = TITLE_TO_CANONICAL.get(norm_title(title))
    if key:
        return key, "title"

    rec_key = row.get("rec_key")
    if isinstance(rec_key, str) and rec_key.strip():
        key = resolve_canonical_key(rec_key.split("::", 1)[0], category or None)
        if key:
            return key, "rec_key"

    subfactor_key = row.get("subfactor_key")
    if isinstance(subfactor_key, str) and subfactor_key.strip():
        key = resolve_canonical_key(subfactor_key, category or None)
        if key:
            return key, "subfactor_key"

    key = keyword_fallback(title, category)
    if key:
        return key, "keyword"
    return None, None


def validate_resolution_tables() -> List[str]:
    """Every dictionary and alias target must be a registry key."""
    errors = [f"title '{title}' -> {key}" for title, key in TITLE_TO_CANONICAL.items() if key not in REGISTRY]
    errors.extend(f"alias {old} -> {new}" for old, new in ALIASES.items() if new not in REGISTRY)
    return errors


_table_errors = validate_resolution_tables()
if _table_errors:
    raise ValueError("Unresolvable canonical key targets: " + "; ".join(_table_errors))


__all__ = [
    "resolve_canonical_key",
    "get_playbook_entry",
    "canonical_key_for_rec",
    "SUFFIX_MAP",
    "norm_title",
    "TITLE_TO_CANONICAL",
    "keyword_fallback",
    "match_legacy_row",
    "validate_resolution_tables",
]
