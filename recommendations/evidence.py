"""Null-safe access to scan evidence.

The evidence object is opaque nested JSON produced by the extractor. Nothing
in the pipeline reads it directly; everything goes through :func:`get_path`
or one of the semantic extractors below, each of which documents the default
it returns when the underlying data is missing.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional, Tuple

COMMON_SCHEMAS = ["Organization", "WebSite", "FAQPage", "BreadcrumbList"]
AI_CRAWLERS = ["GPTBot", "CCBot", "Google-Extended", "anthropic-ai", "ClaudeBot"]


def unwrap_evidence(scan_or_evidence: Any) -> Dict[str, Any]:
    """Return the evidence dict, unwrapping ``detailed_analysis`` on scan rows."""
    if not isinstance(scan_or_evidence, dict):
        return {}
    nested = scan_or_evidence.get("detailed_analysis")
    if isinstance(nested, dict):
        return nested
    return scan_or_evidence


def get_path(obj: Any, path: str) -> Any:
    """Read a dotted path; returns None when any node along the way is missing.

    Numeric segments index into lists ("technical.structuredData.0.type").
    """
    if obj is None or not path or not isinstance(path, str):
        return None
    current = obj
    for part in path.split("."):
        if current is None:
            return None
        if isinstance(current, dict):
            current = current.get(part)
        elif isinstance(current, (list, tuple)) and part.isdigit():
            index = int(part)
            current = current[index] if index < len(current) else None
        else:
            return None
    return current


def collect_selectors(evidence: Any, selectors: Iterable[str]) -> Tuple[Dict[str, Any], List[str]]:
    """Split selectors into found values (keyed by last segment) and missing paths."""
    found: Dict[str, Any] = {}
    missing: List[str] = []
    for selector in selectors or []:
        value = get_path(evidence, selector)
        if value is None:
            missing.append(selector)
        else:
            found[selector.split(".")[-1]] = value
    return found, missing


def is_evidence_present(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value > 0
    if isinstance(value, (list, tuple, dict)):
        return len(value) > 0
    if isinstance(value, str):
        return len(value.strip()) > 0
    return bool(value)


def _as_list(value: Any) -> list:
    return value if isinstance(value, list) else []


def _number(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value
    return None


# --------------------------------------------------------------------------
# Semantic extractors
# --------------------------------------------------------------------------


def pages_checked_count(evidence: Any) -> Optional[int]:
    """Pages crawled; None when the extractor recorded no count."""
    ev = unwrap_evidence(evidence)
    return (
        get_path(ev, "crawler.totalDiscoveredUrls")
        or get_path(ev, "siteMetrics.pagesChecked")
        or get_path(ev, "siteMetrics.totalPages")
        or None
    )


def pages_checked_list(evidence: Any, limit: int = 5) -> str:
    """Up to ``limit`` crawled URLs joined with ', '; '' when none."""
    ev = unwrap_evidence(evidence)
    urls = get_path(ev, "crawler.discoveredUrls") or get_path(ev, "siteMetrics.checkedUrls") or []
    if not isinstance(urls, list) or not urls:
        return ""
    return ", ".join(str(url) for url in urls[:limit])


def faq_items(evidence: Any) -> List[Dict[str, Any]]:
    return [faq for faq in _as_list(get_path(unwrap_evidence(evidence), "content.faqs")) if isinstance(faq, dict)]


def faq_count(evidence: Any) -> int:
    """Number of FAQ items; falls back to siteMetrics.faqCount, then 0."""
    ev = unwrap_evidence(evidence)
    faqs = get_path(ev, "content.faqs")
    if isinstance(faqs, list):
        return len(faqs)
    return int(_number(get_path(ev, "siteMetrics.faqCount")) or 0)


def pages_with_faqs(evidence: Any) -> List[str]:
    urls: List[str] = []
    for faq in faq_items(evidence):
        for key in ("sourceUrl", "source_url"):
            url = faq.get(key)
            if url and url not in urls:
                urls.append(url)
    return urls


def error_summary(evidence: Any) -> str:
    """First three validation messages joined with '; '; '' when clean."""
    ev = unwrap_evidence(evidence)
    schema_errors = get_path(ev, "technical.schemaValidationErrors")
    if isinstance(schema_errors, list) and schema_errors:
        return "; ".join(_message(err) for err in schema_errors[:3])
    errors = get_path(ev, "errors") or get_path(ev, "issues")
    if isinstance(errors, list) and errors:
        return "; ".join(_message(err) for err in errors[:3])
    return ""


def _message(err: Any) -> str:
    if isinstance(err, dict):
        return str(err.get("message") or err)
    return str(err)


def error_count(evidence: Any) -> int:
    ev = unwrap_evidence(evidence)
    return len(_as_list(get_path(ev, "errors")) or _as_list(get_path(ev, "issues")))


def structured_data(evidence: Any) -> List[Dict[str, Any]]:
    items = _as_list(get_path(unwrap_evidence(evidence), "technical.structuredData"))
    return [item for item in items if isinstance(item, dict)]


def _schema_type(item: Dict[str, Any]) -> str:
    return str(item.get("type") or item.get("@type") or "")


def has_schema_type(evidence: Any, schema_type: str) -> bool:
    wanted = schema_type.lower()
    return any(_schema_type(item).lower() == wanted for item in structured_data(evidence))


def _flag_or_schema(evidence: Any, flag: str, schema_type: str) -> bool:
    return get_path(unwrap_evidence(evidence), f"technical.{flag}") is True or has_schema_type(evidence, schema_type)


def has_faq_schema(evidence: Any) -> bool:
    return _flag_or_schema(evidence, "hasFAQSchema", "FAQPage")


def has_organization_schema(evidence: Any) -> bool:
    return _flag_or_schema(evidence, "hasOrganizationSchema", "Organization")


def has_article_schema(evidence: Any) -> bool:
    return _flag_or_schema(evidence, "hasArticleSchema", "Article")


def has_breadcrumb_schema(evidence: Any) -> bool:
    return _flag_or_schema(evidence, "hasBreadcrumbSchema", "BreadcrumbList")


def schema_type_count(evidence: Any) -> int:
    """Number of structured-data entries (not unique types); 0 when absent."""
    return len(structured_data(evidence))


def detected_schema_types(evidence: Any) -> List[str]:
    types: List[str] = []
    for item in structured_data(evidence):
        schema_type = _schema_type(item)
        if schema_type and schema_type not in types:
            types.append(schema_type)
    return types


def missing_common_schemas(evidence: Any) -> List[str]:
    detected = {schema_type.lower() for schema_type in detected_schema_types(evidence)}
    return [schema for schema in COMMON_SCHEMAS if schema.lower() not in detected]


def image_alt_stats(evidence: Any) -> Dict[str, int]:
    """{'total', 'with_alt', 'without_alt'}; all 0 when no media block exists."""
    ev = unwrap_evidence(evidence)
    total = _number(get_path(ev, "media.imageCount")) or _number(get_path(ev, "media.totalImages")) or 0
    with_alt = _number(get_path(ev, "media.imagesWithAlt")) or 0
    without_alt = _number(get_path(ev, "media.imagesWithoutAlt")) or (total - with_alt)
    return {"total": int(total), "with_alt": int(with_alt), "without_alt": int(without_alt)}


def all_headings(evidence: Any) -> List[Any]:
    headings = get_path(unwrap_evidence(evidence), "content.headings")
    if not isinstance(headings, dict):
        return []
    flattened: List[Any] = []
    for values in headings.values():
        if isinstance(values, list):
            flattened.extend(values)
        elif values is not None:
            flattened.append(values)
    return flattened


def heading_info(evidence: Any) -> Dict[str, Any]:
    """{'h1_count', 'total_headings', 'issues'}; issues name a missing or repeated H1."""
    h1 = get_path(unwrap_evidence(evidence), "content.headings.h1")
    h1_count = len(h1) if isinstance(h1, list) else 0
    issues: List[str] = []
    if h1_count == 0:
        issues.append("Missing H1")
    if h1_count > 1:
        issues.append(f"Multiple H1s ({h1_count})")
    return {"h1_count": h1_count, "total_headings": len(all_headings(evidence)), "issues": issues}


def ttfb_ms(evidence: Any) -> Optional[float]:
    ev = unwrap_evidence(evidence)
    return _number(get_path(ev, "performance.ttfb")) or _number(get_path(ev, "performance.responseTime")) or None


def robots_blocks_ai_crawlers(evidence: Any) -> bool:
    robots = get_path(unwrap_evidence(evidence), "crawler.robotsTxt")
    if not isinstance(robots, str):
        return False
    lower = robots.lower()
    if "disallow: /" not in lower:
        return False
    return any(f"user-agent: {bot.lower()}" in lower for bot in AI_CRAWLERS)


def has_sitemap(evidence: Any) -> bool:
    ev = unwrap_evidence(evidence)
    return bool(
        get_path(ev, "technical.hasSitemapLink")
        or get_path(ev, "crawler.sitemap.detected")
        or get_path(ev, "crawler.sitemapDetected")
    )


def has_canonical(evidence: Any) -> bool:
    ev = unwrap_evidence(evidence)
    return bool(get_path(ev, "technical.hasCanonical") or get_path(ev, "technical.canonicalUrl"))


def author_info(evidence: Any) -> Dict[str, Any]:
    name = get_path(unwrap_evidence(evidence), "metadata.author")
    name = name.strip() if isinstance(name, str) else ""
    return {"name": name, "has_author": bool(name)}


def _flag(value: bool) -> str:
    return "true" if value else "false"


def build_evidence_context(evidence: Any) -> Dict[str, str]:
    """Flatten every extractor into string placeholders for template filling."""
    ev = unwrap_evidence(evidence)
    images = image_alt_stats(ev)
    headings = heading_info(ev)
    author = author_info(ev)
    ttfb = ttfb_ms(ev)
    errors = error_count(ev)

    return {
        "pages_checked_count": str(pages_checked_count(ev) or "multiple"),
        "pages_checked_list": pages_checked_list(ev) or "homepage and key pages",
        "faq_count": str(faq_count(ev)),
        "pages_with_faqs": ", ".join(pages_with_faqs(ev)),
        "error_count": str(errors) if errors else "some",
        "error_summary": error_summary(ev),
        "schema_count": str(schema_type_count(ev)),
        "detected_schemas": ", ".join(detected_schema_types(ev)),
        "missing_schemas": ", ".join(missing_common_schemas(ev)),
        "has_faq_schema": _flag(has_faq_schema(ev)),
        "has_org_schema": _flag(has_organization_schema(ev)),
        "has_article_schema": _flag(has_article_schema(ev)),
        "has_breadcrumb_schema": _flag(has_breadcrumb_schema(ev)),
        "total_images": str(images["total"]),
        "images_with_alt": str(images["with_alt"]),
        "images_without_alt": str(images["without_alt"]),
        "heading_count": str(headings["total_headings"]),
        "h1_count": str(headings["h1_count"]),
        "heading_issues": ", ".join(headings["issues"]) or "none detected",
        "ttfb": f"{_format_number(ttfb)} ms" if ttfb is not None else "unknown",
        "has_sitemap": _flag(has_sitemap(ev)),
        "has_canonical": _flag(has_canonical(ev)),
        "robots_blocks_ai": _flag(robots_blocks_ai_crawlers(ev)),
        "author_name": author["name"] or "your team expert",
        "has_author": _flag(author["has_author"]),
    }


def _format_number(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else str(value)


__all__ = [
    "unwrap_evidence",
    "get_path",
    "collect_selectors",
    "is_evidence_present",
    "pages_checked_count",
    "pages_checked_list",
    "faq_items",
    "faq_count",
    "pages_with_faqs",
    "error_summary",
    "error_count",
    "structured_data",
    "has_schema_type",
    "has_faq_schema",
    "has_organization_schema",
    "has_article_schema",
    "has_breadcrumb_schema",
    "schema_type_count",
    "detected_schema_types",
    "missing_common_schemas",
    "image_alt_stats",
    "all_headings",
    "heading_info",
    "ttfb_ms",
    "robots_blocks_ai_crawlers",
    "has_sitemap",
    "has_canonical",
    "author_info",
    "build_evidence_context",
]
