import copy
import json
from datetime import datetime, timezone

from recommendations import legacy
from recommendations.legacy import (
    RESOLVED_FINDINGS,
    enrich_legacy_recommendations,
    parse_legacy_evidence,
)

NOW = datetime(2026, 1, 15, 12, 0, tzinfo=timezone.utc)
LATER = datetime(2026, 2, 1, 9, 30, tzinfo=timezone.utc)

EVIDENCE = {
    "url": "https://acme.io",
    "content": {
        "faqs": [
            {"question": "What does Acme cost?"},
            {"question": "How long is onboarding?"},
            {"question": "Which CRMs do you support?"},
        ]
    },
    "technical": {"hasFAQSchema": False},
    "navigation": {"keyPages": {"faq": "https://acme.io/faq"}},
    "media": {"imageCount": 10, "imagesWithAlt": 10},
}


def _rows():
    return [
        {"id": 1, "recommendation_text": "Add FAQ Schema Markup", "status": "pending", "findings": "old", "custom": "keep"},
        {"id": 2, "recommendation_text": "Optimize Image Alt Text for AI Understanding", "status": "pending"},
        {"id": 3, "recommendation_text": "Launch a podcast"},
        {"id": 4, "recommendation_text": "Launch a podcast"},
    ]


def test_enrichment_renders_resolves_and_reports():
    rows = _rows()
    original = copy.deepcopy(rows)
    enriched, info = enrich_legacy_recommendations(rows, EVIDENCE, now=NOW)

    assert rows == original
    faq, alt, podcast, _ = enriched

    assert faq["findings"] == "acme.io has 3 FAQ items, but none are marked up with FAQPage schema."
    assert faq["finding"] == faq["findings"]
    assert faq["impact_description"] == faq["why_it_matters"]
    assert faq["recommendation"].startswith("Wrap your existing FAQ content in FAQPage JSON-LD")
    assert faq["action_steps"] == faq["how_to_implement"]
    assert faq["action_steps"][0] == "Create an FAQ section addressing common decision-makers questions"
    assert faq["custom"] == "keep"
    assert faq["status"] == "pending"

    assert alt["status"] == "implemented"
    assert alt["implemented_at"] == NOW.isoformat()
    assert alt["archived_reason"] == "resolved_by_latest_scan"
    assert alt["findings"] == RESOLVED_FINDINGS
    assert alt["finding"] == "" and alt["how_to_implement"] == []

    assert podcast == original[2]

    assert info["enriched_count"] == 1
    assert info["resolved_count"] == 1
    assert info["matched_by_counts"] == {"title": 2}
    assert info["unmatched_titles"] == ["Launch a podcast"]
    assert info["errors"] == []
    assert "trace" not in info


def test_resolution_is_idempotent():
    first, _ = enrich_legacy_recommendations(_rows(), EVIDENCE, now=NOW)
    second, info = enrich_legacy_recommendations(first, EVIDENCE, now=LATER)
    assert second[1]["implemented_at"] == NOW.isoformat()
    assert second[1]["status"] == "implemented"
    assert second[1] == first[1]
    assert info["resolved_count"] == 1


def test_existing_lifecycle_status_is_kept():
    rows = [{"recommendation_text": "Incomplete Image Alt Text", "status": "dismissed", "implemented_at": "2025-12-01"}]
    enriched, _ = enrich_legacy_recommendations(rows, EVIDENCE, now=NOW)
    assert enriched[0]["status"] == "dismissed"
    assert enriched[0]["implemented_at"] == "2025-12-01"


def test_evidence_accepts_json_and_wrapper():
    wrapped = json.dumps({"scanEvidence": EVIDENCE})
    assert parse_legacy_evidence(wrapped) == EVIDENCE
    assert parse_legacy_evidence("{not json") == {}
    assert parse_legacy_evidence(None) == {}

    from_json, _ = enrich_legacy_recommendations(_rows(), wrapped, now=NOW)
    from_dict, _ = enrich_legacy_recommendations(_rows(), EVIDENCE, now=NOW)
    assert from_json == from_dict


def test_one_failing_row_does_not_stop_the_batch(monkeypatch):
    real = legacy.render_legacy_sections

    def flaky(canonical_key, *args, **kwargs):
        if canonical_key == "ai_search_readiness.icp_faqs":
            raise RuntimeError("template exploded")
        return real(canonical_key, *args, **kwargs)

    monkeypatch.setattr(legacy, "render_legacy_sections", flaky)
    rows = _rows() + [{"recommendation_text": "Crawler Access Issues"}]
    enriched, info = enrich_legacy_recommendations(rows, EVIDENCE, debug=True, now=NOW)

    assert enriched[0] == rows[0]
    assert enriched[1]["status"] == "implemented"
    assert enriched[4]["finding"]
    assert len(info["errors"]) == 1
    assert info["errors"][0]["error_type"] == "RuntimeError"
    assert info["errors"][0]["context"]["canonical_key"] == "ai_search_readiness.icp_faqs"
    assert [step["path"] for step in info["trace"]] == ["error", "resolved_complete", "unmatched", "unmatched", "rendered"]


def test_debug_trace_records_strategy():
    rows = [{"recommendation_text": "Fix things", "rec_key": "technical_setup.sitemap::old"}]
    _, info = enrich_legacy_recommendations(rows, {}, debug=True, now=NOW)
    assert info["trace"] == [
        {"index": 0, "path": "rendered", "canonical_key": "technical_setup.sitemap_indexing", "matched_by": "rec_key"}
    ]


def test_empty_input():
    assert enrich_legacy_recommendations(None, {}) == (
        [],
        {"enriched_count": 0, "resolved_count": 0, "matched_by_counts": {}, "unmatched_titles": [], "errors": []},
    )


def test_non_string_title_does_not_stop_the_batch():
    rows = [{"recommendation_text": 123}, {"recommendation_text": "Crawler Access Issues"}]
    enriched, info = enrich_legacy_recommendations(rows, EVIDENCE, debug=True, now=NOW)

    assert enriched[0] == rows[0]
    assert enriched[1]["finding"]
    assert info["unmatched_titles"] == ["123"]
    assert [step["path"] for step in info["trace"]] == ["unmatched", "rendered"]


def test_non_mapping_rows_pass_through():
    rows = [None, "Add FAQ Schema Markup", {"recommendation_text": "Crawler Access Issues"}]
    enriched, info = enrich_legacy_recommendations(rows, EVIDENCE, debug=True, now=NOW)

    assert enriched[0] is None
    assert enriched[1] == "Add FAQ Schema Markup"
    assert enriched[2]["finding"]
    assert info["enriched_count"] == 1
    assert [error["error_type"] for error in info["errors"]] == ["TypeError", "TypeError"]
    assert [error["context"]["index"] for error in info["errors"]] == [0, 1]
    assert [step["path"] for step in info["trace"]] == ["error", "error", "rendered"]
