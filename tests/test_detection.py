import pytest

from models import DetectionState
from recommendations import detection
from recommendations.detection import detect_state, has_detection, should_suppress


@pytest.mark.parametrize(
    "media, expected",
    [
        ({"imageCount": 10, "imagesWithAlt": 9}, DetectionState.COMPLETE),
        ({"imageCount": 10, "imagesWithAlt": 6}, DetectionState.PARTIAL),
        ({"imageCount": 10, "imagesWithAlt": 2}, DetectionState.WEAK),
        ({"imageCount": 10, "imagesWithAlt": 0}, DetectionState.NOT_FOUND),
    ],
)
def test_alt_text_coverage_states(media, expected):
    assert detect_state("ai_readability.alt_text_coverage", {"media": media}) == expected


def test_icp_faq_states():
    six = [{"question": f"Question {i}?"} for i in range(6)]
    three = six[:3]
    assert detect_state("ai_search_readiness.icp_faqs", {"content": {"faqs": six}, "technical": {"hasFAQSchema": True}}) == DetectionState.COMPLETE
    assert detect_state("ai_search_readiness.icp_faqs", {"content": {"faqs": three}, "technical": {"hasFAQSchema": False}}) == DetectionState.CONTENT_NO_SCHEMA
    assert detect_state("ai_search_readiness.icp_faqs", {"content": {"faqs": three}, "technical": {"hasFAQSchema": True}}) == DetectionState.PARTIAL
    assert detect_state("ai_search_readiness.icp_faqs", {}) == DetectionState.NOT_FOUND


def test_organization_schema_states():
    key = "technical_setup.organization_schema"
    org = {"technical": {"structuredData": [{"type": "Organization"}]}}
    assert detect_state(key, org) == DetectionState.COMPLETE
    org["technical"]["schemaValidationErrors"] = [{"schema": "Organization", "message": "logo missing"}]
    assert detect_state(key, org) == DetectionState.SCHEMA_INVALID
    assert detect_state(key, {}) == DetectionState.NOT_FOUND


def test_crawler_access_states():
    key = "technical_setup.crawler_access"
    assert detect_state(key, {"crawler": {"robotsTxt": "User-agent: GPTBot\nDisallow: /"}}) == DetectionState.BLOCKING
    assert detect_state(key, {"performance": {"ttfb": 320}}) == DetectionState.COMPLETE
    assert detect_state(key, {"performance": {"ttfb": 2600}}) == DetectionState.PARTIAL
    assert detect_state(key, {}) == DetectionState.PARTIAL


def test_structured_data_and_social_tags():
    four = {"technical": {"structuredData": [{"type": t} for t in ("Organization", "WebSite", "FAQPage", "Article")]}}
    assert detect_state("technical_setup.structured_data_coverage", four) == DetectionState.COMPLETE
    assert detect_state("technical_setup.social_meta_tags", {"metadata": {"ogTitle": "Acme", "ogImage": "x.png"}}) == DetectionState.PARTIAL


def test_detection_reads_wrapped_scan_rows():
    row = {"detailed_analysis": {"media": {"imageCount": 4, "imagesWithAlt": 4}}}
    assert detect_state("ai_readability.alt_text_coverage", row) == DetectionState.COMPLETE


def test_unknown_keys_are_not_found():
    assert not has_detection("speed_ux.performance")
    assert detect_state("speed_ux.performance", {"performance": {"ttfb": 100}}) == DetectionState.NOT_FOUND
    assert detect_state(None, {}) == DetectionState.NOT_FOUND


def test_detection_errors_fall_back_to_not_found(monkeypatch):
    def _boom(ev):
        raise RuntimeError("bad evidence")

    monkeypatch.setitem(detection.DETECTION_FUNCTIONS, "technical_setup.sitemap_indexing", _boom)
    assert detect_state("technical_setup.sitemap_indexing", {}) == DetectionState.NOT_FOUND


def test_should_suppress_only_complete():
    assert should_suppress(DetectionState.COMPLETE)
    assert should_suppress("COMPLETE")
    assert not should_suppress(DetectionState.PARTIAL)
    assert not should_suppress(None)
    assert not should_suppress("bogus")
