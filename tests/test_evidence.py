from recommendations.evidence import (
    build_evidence_context,
    collect_selectors,
    detected_schema_types,
    error_summary,
    faq_count,
    get_path,
    has_faq_schema,
    heading_info,
    image_alt_stats,
    is_evidence_present,
    missing_common_schemas,
    pages_with_faqs,
    robots_blocks_ai_crawlers,
    unwrap_evidence,
)


def _evidence():
    return {
        "url": "https://www.acme.io/",
        "technical": {
            "structuredData": [{"type": "Organization"}, {"@type": "WebSite"}, {"type": "Organization"}],
            "schemaValidationErrors": [{"message": "Missing logo"}, "Bad url"],
        },
        "content": {
            "headings": {"h1": ["Acme", "Welcome"], "h2": ["What is Acme?"]},
            "faqs": [
                {"question": "What is Acme?", "sourceUrl": "https://acme.io/faq"},
                {"question": "How much?", "sourceUrl": "https://acme.io/faq"},
            ],
        },
        "media": {"imageCount": 8, "imagesWithAlt": 6},
    }


def test_get_path_is_null_safe_and_indexes_lists():
    ev = _evidence()
    assert get_path(ev, "technical.structuredData.1.@type") == "WebSite"
    assert get_path(ev, "technical.structuredData.9.type") is None
    assert get_path(ev, "content.missing.deeper") is None
    assert get_path(None, "url") is None
    assert get_path(ev, "url.host") is None


def test_unwrap_evidence_prefers_detailed_analysis():
    assert unwrap_evidence({"detailed_analysis": {"url": "x"}}) == {"url": "x"}
    assert unwrap_evidence("not a dict") == {}


def test_collect_selectors_splits_found_and_missing():
    found, missing = collect_selectors(_evidence(), ["url", "media.imageCount", "crawler.robotsTxt"])
    assert found == {"url": "https://www.acme.io/", "imageCount": 8}
    assert missing == ["crawler.robotsTxt"]


def test_is_evidence_present():
    assert is_evidence_present("x")
    assert is_evidence_present([1])
    assert not is_evidence_present("  ")
    assert not is_evidence_present(0)
    assert not is_evidence_present(False)
    assert not is_evidence_present({})


def test_schema_extractors():
    ev = _evidence()
    assert detected_schema_types(ev) == ["Organization", "WebSite"]
    assert missing_common_schemas(ev) == ["FAQPage", "BreadcrumbList"]
    assert not has_faq_schema(ev)
    assert error_summary(ev) == "Missing logo; Bad url"


def test_faq_and_media_extractors():
    ev = _evidence()
    assert faq_count(ev) == 2
    assert pages_with_faqs(ev) == ["https://acme.io/faq"]
    assert faq_count({"siteMetrics": {"faqCount": 4}}) == 4
    assert image_alt_stats(ev) == {"total": 8, "with_alt": 6, "without_alt": 2}
    assert image_alt_stats({}) == {"total": 0, "with_alt": 0, "without_alt": 0}


def test_heading_info_flags_multiple_h1():
    info = heading_info(_evidence())
    assert info == {"h1_count": 2, "total_headings": 3, "issues": ["Multiple H1s (2)"]}
    assert heading_info({})["issues"] == ["Missing H1"]


def test_robots_blocking_requires_ai_agent_and_disallow():
    blocked = {"crawler": {"robotsTxt": "User-agent: GPTBot\nDisallow: /"}}
    allowed = {"crawler": {"robotsTxt": "User-agent: *\nDisallow: /admin"}}
    assert robots_blocks_ai_crawlers(blocked)
    assert not robots_blocks_ai_crawlers(allowed)
    assert not robots_blocks_ai_crawlers({})


def test_evidence_context_defaults_for_empty_evidence():
    ctx = build_evidence_context({})
    assert ctx["pages_checked_count"] == "multiple"
    assert ctx["error_count"] == "some"
    assert ctx["ttfb"] == "unknown"
    assert ctx["heading_issues"] == "Missing H1"
    assert ctx["author_name"] == "your team expert"
    assert ctx["has_faq_schema"] == "false"
    assert all(isinstance(value, str) for value in ctx.values())
