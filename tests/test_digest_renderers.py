from pathlib import Path

import pytest

from models import Recommendation
from renderers import available_renderers, get_renderer
from renderers.context import build_digest_context


def _bundle():
    recs = [
        Recommendation(
            rec_key="technical_setup.organization_schema::scan-1",
            pillar="technical_setup",
            subfactor_key="technical_setup.organization_schema",
            gap="Missing Organization Schema",
            finding="We checked multiple pages on acme.io and found no Organization schema.",
            why_it_matters="AI assistants cannot identify Acme as a verified business entity.",
            how_to_implement=["Add the Organization JSON-LD schema", "Validate the schema"],
            examples=["Use the Organization type"],
            automation_level="generate",
            confidence=0.85,
            evidence_quality="strong",
            evidence_summary="Strong evidence: 2/2 required signals found",
            target_level="site",
            generated_assets=[{"asset_type": "json-ld", "content": {"@type": "Organization", "name": "Acme"}}],
        ),
        Recommendation(
            rec_key="speed_ux.performance::scan-1",
            pillar="speed_ux",
            subfactor_key="speed_ux.performance",
            gap="Slow Page Performance",
            automation_level="manual",
            confidence=0.6,
            evidence_quality="medium",
            target_level="page",
            target_url="https://acme.io/pricing",
        ),
    ]
    return {
        "title": "Acme AI visibility",
        "scan": {"id": "scan-1", "url": "https://acme.io"},
        "generated_at": "Jan 15, 2026",
        "recommendations": recs,
    }


def test_registry():
    assert available_renderers() == ["markdown_digest", "html_digest"]
    assert get_renderer(" Markdown_Digest ").name == "markdown_digest"
    with pytest.raises(ValueError):
        get_renderer("pdf")


def test_digest_context():
    context = build_digest_context(_bundle())
    first, second = context["items"]
    assert first["rank"] == 1
    assert first["pillar_name"] == "Technical Setup"
    assert first["pillar_headline"] == "Solid Foundation"
    assert second["pillar_headline"] == "Be Fast & Frictionless"
    assert first["priority"] == "P0"
    assert first["confidence_pct"] == 85
    assert '"name": "Acme"' in first["assets"][0]["content"]
    assert second["target_label"] == "Page: https://acme.io/pricing"
    assert context["automation_counts"] == {"generate": 1, "manual": 1}


def test_markdown_digest(tmp_path):
    paths = get_renderer("markdown_digest").render(_bundle(), str(tmp_path / "out"))
    assert paths == [str(tmp_path / "out" / "recommendations_digest.md")]
    text = Path(paths[0]).read_text(encoding="utf-8")
    assert text.startswith("# Acme AI visibility")
    assert "## 1. Missing Organization Schema" in text
    assert "## 2. Slow Page Performance" in text
    assert "_Technical Setup: Solid Foundation · P0 · Automation generate" in text
    assert "1. Add the Organization JSON-LD schema" in text
    assert "Page: https://acme.io/pricing" in text
    assert "[[" not in text and "{%" not in text


def test_markdown_digest_without_recommendations(tmp_path):
    bundle = {"scan": {"id": "scan-2"}, "recommendations": [], "generated_at": "Jan 15, 2026"}
    path = get_renderer("markdown_digest").render(bundle, str(tmp_path))[0]
    assert "No open recommendations" in Path(path).read_text(encoding="utf-8")


def test_html_digest(tmp_path):
    paths = get_renderer("html_digest").render(_bundle(), str(tmp_path))
    html = Path(paths[0]).read_text(encoding="utf-8")
    assert paths[0].endswith("recommendations_digest.html")
    assert "<title>Acme AI visibility</title>" in html
    assert "<h2>1. Missing Organization Schema</h2>" in html
    assert "<strong>Finding</strong>" in html
