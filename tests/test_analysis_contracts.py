from analysis_contracts import lint_recommendation, lint_recommendation_set, validate_no_placeholder_leaks
from models import Recommendation


def _valid_rec(**overrides):
    payload = {
        "rec_key": "technical_setup.crawler_access::scan-1",
        "pillar": "technical_setup",
        "subfactor_key": "technical_setup.crawler_access",
        "gap": "Crawler Access Issues",
        "finding": "robots.txt on acme.io disallows GPTBot.",
        "how_to_implement": ["Review robots.txt for overly restrictive rules"],
        "automation_level": "manual",
        "confidence": 0.85,
        "evidence_quality": "strong",
        "target_level": "site",
        "target_url": None,
        "evidence_json": {"score": 40, "extracted": {"robotsTxt": "{{raw}}"}},
    }
    payload.update(overrides)
    return payload


def test_valid_recommendation_passes():
    assert lint_recommendation(_valid_rec()) == []
    assert lint_recommendation(Recommendation(**_valid_rec())) == []


def test_raw_evidence_is_not_checked_for_leaks():
    assert validate_no_placeholder_leaks(_valid_rec()) == []


def test_leaks_in_copy_fields_are_reported():
    rec = _valid_rec(finding="Hello {{company_name}}", how_to_implement=["Call [company_name]"])
    assert validate_no_placeholder_leaks(rec) == [
        "finding: Unresolved placeholder: {{company_name}}",
        "how_to_implement[0]: Bracket placeholder: [company_name]",
    ]
    assert any(error.startswith("placeholder leak in finding") for error in lint_recommendation(rec))


def test_page_target_requires_url():
    errors = lint_recommendation(_valid_rec(target_level="page", target_url=""))
    assert errors == ["page-level recommendation must carry a non-empty target_url."]


def test_generate_requires_asset_and_enums_are_checked():
    errors = lint_recommendation(_valid_rec(automation_level="generate"))
    assert errors == ["generate-level recommendation must carry at least one generated asset."]
    errors = lint_recommendation(_valid_rec(automation_level="autopilot", evidence_quality="great", confidence=1.5))
    assert len(errors) == 3


def test_rec_key_must_match_subfactor():
    errors = lint_recommendation(_valid_rec(rec_key="other.key::scan-1"))
    assert errors == ["rec_key 'other.key::scan-1' does not start with subfactor_key 'technical_setup.crawler_access'."]


def test_set_checks_cap_duplicates_and_order():
    org = _valid_rec(
        rec_key="technical_setup.organization_schema::scan-1",
        subfactor_key="technical_setup.organization_schema",
        gap="Missing Organization Schema",
        evidence_json={"score": 20},
    )
    performance = _valid_rec(
        rec_key="speed_ux.performance::scan-1",
        pillar="speed_ux",
        subfactor_key="speed_ux.performance",
        gap="Slow Page Performance",
        evidence_json={"score": 10},
    )
    assert lint_recommendation_set([org, _valid_rec(), performance]) == []

    errors = lint_recommendation_set([performance, org])
    assert errors == [
        "'technical_setup.organization_schema' outranks 'speed_ux.performance' by priority, impact or score but is listed after it."
    ]

    errors = lint_recommendation_set([org, org], max_count=1)
    assert errors[0] == "recommendations must contain ≤1 entries (got 2)."
    assert "duplicates subfactor_key" in errors[1]
