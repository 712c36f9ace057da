"""Placeholder context: company, page and industry facts inferred for templates."""

from __future__ import annotations

import re
from datetime import date
from typing import Any, Dict, Mapping, Optional
from urllib.parse import urlparse

from .evidence import build_evidence_context, get_path, structured_data, unwrap_evidence

DEFAULT_SITE_URL = "https://example.com"
_TITLE_SEPARATORS = re.compile(r"\s*[|\-–—]\s*")

INDUSTRY_SCHEMAS: Dict[str, str] = {
    "saas": "SoftwareApplication",
    "ecommerce": "Product",
    "healthcare": "MedicalOrganization",
    "fintech": "FinancialService",
    "agency": "Service",
    "telecom": "Service",
    "technology": "SoftwareApplication",
    "cybersecurity": "Service",
}

INDUSTRY_CERTIFICATIONS: Dict[str, str] = {
    "saas": "SOC 2, ISO 27001, GDPR",
    "cybersecurity": "SOC 2, ISO 27001, CISSP, CISM",
    "healthcare": "HIPAA, HITRUST, SOC 2",
    "fintech": "PCI-DSS, SOC 2, ISO 27001",
    "telecom": "ISO 27001, TL 9000",
    "technology": "SOC 2, ISO 27001",
}


def extract_domain(url: Optional[str]) -> str:
    """Hostname without ``www.``; 'example.com' when the URL has no host."""
    if not url or not isinstance(url, str):
        return "example.com"
    host = urlparse(url.strip()).hostname or ""
    host = re.sub(r"^www\.", "", host)
    return host or "example.com"


def _organization_schema(ev: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    for item in structured_data(ev):
        if (item.get("type") or item.get("@type")) == "Organization":
            return item
    return None


def infer_company_name(evidence: Any, context: Optional[Mapping[str, Any]] = None) -> str:
    ctx = context or {}
    if ctx.get("company_name"):
        return str(ctx["company_name"])

    ev = unwrap_evidence(evidence)
    org = _organization_schema(ev)
    if org:
        name = get_path(org, "raw.name") or org.get("name")
        if name:
            return str(name)

    og_title = get_path(ev, "metadata.ogTitle")
    if isinstance(og_title, str) and og_title:
        # "Page Title | Company" or "Company - Tagline": take the last segment
        parts = _TITLE_SEPARATORS.split(og_title)
        if len(parts) > 1 and parts[-1].strip():
            return parts[-1].strip()

    h1 = get_path(ev, "content.headings.h1.0")
    if isinstance(h1, str) and h1.strip():
        return h1.strip()

    label = extract_domain(get_path(ev, "url") or ctx.get("site_url")).split(".")[0]
    return label[:1].upper() + label[1:]


def infer_logo_url(evidence: Any, context: Optional[Mapping[str, Any]] = None) -> Optional[str]:
    ctx = context or {}
    if ctx.get("logo_url"):
        return str(ctx["logo_url"])
    ev = unwrap_evidence(evidence)
    org = _organization_schema(ev)
    logo = get_path(org, "raw.logo") if org else None
    if isinstance(logo, dict):
        logo = logo.get("url")
    if logo:
        return str(logo)
    return get_path(ev, "metadata.ogImage") or get_path(ev, "metadata.favicon") or None


def infer_description(evidence: Any, context: Optional[Mapping[str, Any]] = None) -> str:
    ev = unwrap_evidence(evidence)
    for path in ("metadata.ogDescription", "metadata.description"):
        value = get_path(ev, path)
        if isinstance(value, str) and value.strip():
            return value.strip()
    first = get_path(ev, "content.paragraphs.0")
    if isinstance(first, str) and first.strip():
        first = first.strip()
        return first if len(first) <= 160 else first[:157] + "..."
    return f"Welcome to {infer_company_name(ev, context)}"


def _industry_lookup(table: Dict[str, str], industry: Optional[str], default: str) -> str:
    normalized = (industry or "").lower()
    for key, value in table.items():
        if key in normalized:
            return value
    return default


def industry_specific_schema(industry: Optional[str]) -> str:
    return _industry_lookup(INDUSTRY_SCHEMAS, industry, "Service")


def relevant_certifications(industry: Optional[str]) -> str:
    return _industry_lookup(INDUSTRY_CERTIFICATIONS, industry, "SOC 2, ISO 27001")


def build_placeholder_context(
    evidence: Any,
    context: Optional[Mapping[str, Any]] = None,
    scan: Optional[Mapping[str, Any]] = None,
    today: Optional[date] = None,
) -> Dict[str, Any]:
    """Company, page, social, date and industry facts for template filling.

    Caller context wins over anything inferred from evidence.
    """
    ev = unwrap_evidence(evidence)
    ctx = context or {}
    scan = scan or {}
    today = today or date.today()

    company = infer_company_name(ev, ctx)
    site_url = get_path(ev, "url") or ctx.get("site_url") or scan.get("url") or DEFAULT_SITE_URL
    # Templates append paths ("{{site_url}}/sitemap.xml")
    site_url = str(site_url).strip().rstrip("/") or DEFAULT_SITE_URL
    domain = extract_domain(site_url)
    label = domain.split(".")[0]
    industry = ctx.get("detected_industry") or ctx.get("industry") or "technology"
    roles = ctx.get("icp_roles")
    author = get_path(ev, "metadata.author")
    long_date = f"{today:%B} {today.day}, {today.year}"

    return {
        "company_name": company,
        "site_url": site_url,
        "page_url": ctx.get("page_url") or site_url,
        "domain": domain,
        "industry": industry,
        "product_name": ctx.get("product_name") or company,
        "product_type": ctx.get("product_type") or "solution",
        "icp_roles": ", ".join(roles) if isinstance(roles, list) and roles else (roles or "decision-makers"),
        "region": ctx.get("region") or "",
        "page_title": get_path(ev, "metadata.title") or company,
        "page_description": infer_description(ev, ctx),
        "og_image_url": get_path(ev, "metadata.ogImage") or f"{site_url}/og-image.jpg",
        "logo_url": infer_logo_url(ev, ctx) or f"{site_url}/logo.png",
        "linkedin_url": ctx.get("linkedin_url") or f"https://linkedin.com/company/{label}",
        "twitter_url": ctx.get("twitter_url") or f"https://twitter.com/{label}",
        "current_date": long_date,
        "last_updated_date": get_path(ev, "metadata.lastModified") or long_date,
        "iso_date": today.isoformat(),
        "year": str(today.year),
        "industry_specific_schema": industry_specific_schema(industry),
        "relevant_certs": relevant_certifications(industry),
        "topic": ctx.get("topic") or "your specialty",
        "pain_point": ctx.get("pain_point") or "common challenges",
        "author_name": ctx.get("author_name") or (author.strip() if isinstance(author, str) and author.strip() else "your team expert"),
        "author_title": ctx.get("author_title") or "Subject Matter Expert",
        "years": str(ctx.get("years") or "several"),
    }


def build_merged_context(
    evidence: Any,
    context: Optional[Mapping[str, Any]] = None,
    scan: Optional[Mapping[str, Any]] = None,
    today: Optional[date] = None,
) -> Dict[str, Any]:
    """Layer caller context, evidence facts and inferred placeholder facts.

    Later layers override earlier ones: caller keys survive only where the
    evidence and placeholder layers do not set them. Identity fields
    (``company_name``, ``industry``, ``product_name``...) still prefer caller
    values because the placeholder layer reads them from ``context`` first,
    while measured facts such as ``site_url``, ``domain`` and ``ttfb`` come
    from the evidence.
    """
    merged: Dict[str, Any] = dict(context or {})
    merged.update(build_evidence_context(evidence))
    merged.update(build_placeholder_context(evidence, context, scan, today))
    return merged


__all__ = [
    "extract_domain",
    "infer_company_name",
    "infer_logo_url",
    "infer_description",
    "industry_specific_schema",
    "relevant_certifications",
    "build_placeholder_context",
    "build_merged_context",
]
