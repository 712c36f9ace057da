"""Leak-proof ``{{placeholder}}`` filling for playbook templates.

Resolution order for each placeholder: a per-call resolver for that key, a
dotted-path lookup in the merged context, :data:`SAFE_FALLBACKS`, then the
empty string. Template syntax never survives into output.
"""

from __future__ import annotations

import re
from datetime import date
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Union

from models import DetectionState

from .evidence import get_path
from .playbook import StateTemplate

Resolver = Callable[[Mapping[str, Any]], Any]
TemplateLike = Union[str, StateTemplate, Mapping[str, str], None]

PLACEHOLDER_PATTERN = re.compile(r"\{\{([^}]+)\}\}")
BRACKET_TOKEN = re.compile(r"\[([a-zA-Z][a-zA-Z0-9_]{2,})\](?!\()")
SAFE_BRACKET_WORDS = {"README", "TODO", "FIXME", "NOTE", "WARN", "INFO", "DEBUG", "ERROR"}


def _long_date(today: date) -> str:
    return f"{today:%B} {today.day}, {today.year}"


def safe_fallbacks(today: Optional[date] = None) -> Dict[str, str]:
    """Generic wording used when neither resolver nor context supplies a value."""
    today = today or date.today()
    return {
        "domain": "your website",
        "company_name": "your company",
        "site_url": "",
        "page_url": "",
        "pages_checked_count": "multiple",
        "pages_checked_list": "homepage and key pages",
        "faq_count": "0",
        "error_count": "some",
        "logo_url": "",
        "primary_faq_page": "your FAQ page",
        "industry": "your industry",
        "product_name": "your product",
        "product_type": "solution",
        "icp_roles": "decision-makers",
        "region": "",
        "page_title": "your page",
        "page_description": "",
        "og_image_url": "",
        "linkedin_url": "",
        "twitter_url": "",
        "heading_count": "several",
        "total_images": "several",
        "images_with_alt": "some",
        "images_without_alt": "some",
        "schema_count": "0",
        "detected_schemas": "none",
        "ttfb": "unknown",
        "heading_issues": "heading structure issues detected",
        "current_date": _long_date(today),
        "last_updated_date": "",
        "iso_date": "",
        "year": str(today.year),
        "industry_specific_schema": "Service",
        "relevant_certs": "relevant industry certifications",
        "topic": "your specialty",
        "pain_point": "common challenges",
        "author_name": "your team expert",
        "author_title": "Subject Matter Expert",
        "years": "several",
        "error_summary": "validation issues detected",
        "detection_state": "",
        "missing_schemas": "key schemas",
        "crawl_issues": "access restrictions detected",
    }


SAFE_FALLBACKS: Dict[str, str] = safe_fallbacks()


def is_usable_value(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, (list, tuple, dict)) and not value:
        return False
    text = _stringify(value).strip()
    return bool(text) and text not in ("undefined", "null")


def _stringify(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return ", ".join(_stringify(item) for item in value if item is not None)
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


_CLEANUPS = [
    (re.compile(r"\(\s*\)"), ""),
    (re.compile(r"\[\s*\]"), ""),
    (re.compile(r"(?<=\S)[ \t]{2,}"), " "),
    (re.compile(r"(?<!\.)\.[ \t]*\.(?!\.)"), "."),
    (re.compile(r",[ \t]*,"), ","),
    (re.compile(r",[ \t]*\."), "."),
    (re.compile(r"[ \t]+([.,;:!?])"), r"\1"),
]


def clean_text(text: str) -> str:
    """Remove artifacts left by empty substitutions; newlines are preserved."""
    for pattern, replacement in _CLEANUPS:
        text = pattern.sub(replacement, text)
    return text.strip()


def select_template(template: TemplateLike, state: Optional[DetectionState] = None) -> str:
    if not template:
        return ""
    if isinstance(template, str):
        return template
    if isinstance(template, StateTemplate):
        return template.pick(state)
    if isinstance(template, Mapping):
        return StateTemplate.coerce(dict(template)).pick(state)
    return ""


def resolve_template(
    template: TemplateLike,
    context: Optional[Mapping[str, Any]] = None,
    state: Optional[DetectionState] = None,
    resolvers: Optional[Mapping[str, Resolver]] = None,
) -> str:
    text = select_template(template, state)
    if not text:
        return ""
    ctx = context or {}
    per_call = resolvers or {}

    def _replace(match: "re.Match[str]") -> str:
        key = match.group(1).strip()
        resolver = per_call.get(key)
        if callable(resolver):
            value = resolver(ctx)
            if is_usable_value(value):
                return _stringify(value)
        value = ctx.get(key) if key in ctx else get_path(ctx, key)
        if is_usable_value(value):
            return _stringify(value)
        return SAFE_FALLBACKS.get(key, "")

    return clean_text(PLACEHOLDER_PATTERN.sub(_replace, text))


def resolve_template_list(
    templates: Optional[Iterable[str]],
    context: Optional[Mapping[str, Any]] = None,
    state: Optional[DetectionState] = None,
    resolvers: Optional[Mapping[str, Resolver]] = None,
) -> List[str]:
    """Resolve element-wise and drop entries that end up blank."""
    resolved = [resolve_template(item, context, state, resolvers) for item in templates or []]
    return [item for item in resolved if item.strip()]


def find_leaks(text: Any) -> List[str]:
    """Template syntax or placeholder artifacts present in ``text``."""
    if not isinstance(text, str) or not text:
        return []
    leaks: List[str] = []
    for match in PLACEHOLDER_PATTERN.finditer(text):
        leaks.append(f"Unresolved placeholder: {match.group(0)}")
    if "{{" in text or "}}" in text:
        if not leaks:
            leaks.append("Stray template braces")
    for match in BRACKET_TOKEN.finditer(text):
        inner = match.group(1)
        if inner.upper() in SAFE_BRACKET_WORDS or len(inner) > 30:
            continue
        leaks.append(f"Bracket placeholder: [{inner}]")
    stripped = text.strip()
    if stripped in ("undefined", "null"):
        leaks.append(f'Literal "{stripped}" used as value')
    elif '"undefined"' in text:
        leaks.append('Literal string "undefined" detected')
    elif re.search(r':\s*"null"', text):
        leaks.append('Literal string "null" detected as value')
    return leaks


__all__ = [
    "PLACEHOLDER_PATTERN",
    "SAFE_FALLBACKS",
    "safe_fallbacks",
    "is_usable_value",
    "clean_text",
    "select_template",
    "resolve_template",
    "resolve_template_list",
    "find_leaks",
]
