"""Evidence quality tiers, negative signals and FAQ heuristics."""

from models import EvidenceQuality
from recommendations.gating import analyze_faq_quality, assess_evidence_quality, is_faq_false_positive
from recommendations.playbook import PlaybookEntry, get_entry


def _custom_entry(selectors):
    return PlaybookEntry(
        canonical_key="speed_ux.page_weight",
        category_display_name="Speed & UX",
        gap_label="Heavy pages",
        priority="P2",
        effort="S",
        impact="Med",
        automation_level="guide",
        evidence_selectors=selectors,
        finding_templates="Pages are heavy.",
        why_it_matters_template="Slow pages lose crawlers.",
        recommendation_template="Trim page weight.",
        what_to_include_template="",
    )


def test_full_minimum_evidence_is_strong():
    entry = get_entry("technical_setup.organization_schema")
    ev = {"url": "https://acme.io", "technical": {"structuredData": [{"type": "WebSite"}]}}
    assessment = assess_evidence_quality(ev, entry)
    assert assessment.quality == EvidenceQuality.STRONG
    assert assessment.confidence == 0.85
    assert assessment.summary == "Strong evidence: 2/2 required signals found"
    assert assessment.details["min_evidence_missing"] == []


def test_half_minimum_evidence_is_medium():
    entry = get_entry("technical_setup.organization_schema")
    assessment = assess_evidence_quality({"url": "https://acme.io"}, entry)
    assert assessment.quality == EvidenceQuality.MEDIUM
    assert assessment.confidence == 0.6
    assert assessment.details["min_evidence_missing"] == ["technical.structuredData"]


def test_missing_evidence_is_weak():
    entry = get_entry("technical_setup.organization_schema")
    assessment = assess_evidence_quality({}, entry)
    assert assessment.quality == EvidenceQuality.WEAK
    assert assessment.confidence == 0.4
    assert assessment.summary == "Weak evidence: only 0/2 required signals found"
    assert assessment.details["min_evidence_missing"] == ["url", "technical.structuredData"]


def test_ambiguity_rule_caps_confidence():
    entry = get_entry("technical_setup.organization_schema")
    ev = {
        "url": "https://acme.io",
        "technical": {"structuredData": [{"type": "WebSite"}], "schemaParseErrors": ["bad json"]},
    }
    assessment = assess_evidence_quality(ev, entry)
    assert assessment.quality == EvidenceQuality.AMBIGUOUS
    assert assessment.confidence == 0.45
    assert assessment.summary.startswith("Ambiguous: ")
    assert assessment.details["ambiguity_triggered"] == ["Some JSON-LD blocks could not be parsed"]


def test_disqualifier_forces_ambiguous():
    entry = get_entry("ai_search_readiness.icp_faqs")
    ev = {"content": {"faqSource": "Accordion widget"}}
    assessment = assess_evidence_quality(ev, entry)
    assert assessment.quality == EvidenceQuality.AMBIGUOUS
    assert assessment.confidence == 0.35
    assert assessment.details["disqualifiers_triggered"] == ["FAQ candidates came from accordion or menu widgets"]


def test_navigation_toggles_make_faq_evidence_ambiguous():
    entry = get_entry("ai_search_readiness.icp_faqs")
    ev = {
        "content": {
            "faqs": [
                {"question": "Close menu"},
                {"question": "Products menu"},
                {"question": "What does Acme cost?"},
            ]
        },
        "technical": {"hasFAQSchema": True},
    }
    assessment = assess_evidence_quality(ev, entry)
    assert assessment.quality == EvidenceQuality.AMBIGUOUS
    assert assessment.confidence == 0.35
    assert assessment.summary == "2/3 detected FAQs appear to be navigation toggles"
    assert assessment.details["faq_analysis"]["suspicious_count"] == 2


def test_faqs_without_page_or_schema_are_suspicious():
    ev = {"content": {"faqs": [{"question": "What does Acme cost?"}, {"question": "How do I start?"}]}}
    analysis = analyze_faq_quality(ev)
    assert analysis["is_suspicious"]
    assert analysis["reasons"] == ["FAQs detected in content but no FAQ page URL or FAQPage schema found"]

    ev["navigation"] = {"keyPages": {"faq": "https://acme.io/faq"}}
    assert not analyze_faq_quality(ev)["is_suspicious"]


def test_faq_false_positive_patterns():
    assert is_faq_false_positive("Toggle navigation")
    assert is_faq_false_positive("Pricing")
    assert not is_faq_false_positive("What is Acme?")
    assert not is_faq_false_positive(None)


def test_context_boost_promotes_borderline_weak_evidence():
    entry = _custom_entry(["a", "b", "c", "d", "e"])
    ev = {"a": 1, "b": 1}

    without_context = assess_evidence_quality(ev, entry)
    assert without_context.quality == EvidenceQuality.WEAK
    assert without_context.confidence == 0.52

    with_context = assess_evidence_quality(ev, entry, {"detected_industry": "SaaS"})
    assert with_context.quality == EvidenceQuality.MEDIUM
    assert with_context.confidence == 0.57


def test_no_entry_is_weak():
    assessment = assess_evidence_quality({}, None)
    assert assessment.quality == EvidenceQuality.WEAK
    assert assessment.confidence == 0.4
    assert assessment.summary == "No evidence selectors defined for this recommendation"
