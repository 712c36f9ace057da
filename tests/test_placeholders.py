from models import DetectionState
from recommendations.placeholders import (
    SAFE_FALLBACKS,
    clean_text,
    find_leaks,
    is_usable_value,
    resolve_template,
    resolve_template_list,
    safe_fallbacks,
)
from recommendations.playbook import StateTemplate


def test_unknown_placeholder_leaves_no_trace():
    out = resolve_template("Contact {{unknown_key_zzz}} today", {})
    assert out == "Contact today"
    assert find_leaks(out) == []


def test_context_value_wins_over_fallback():
    assert resolve_template("Hello {{company_name}}.", {"company_name": "Acme"}) == "Hello Acme."
    assert resolve_template("Hello {{company_name}}.", {}) == "Hello your company."


def test_unusable_values_use_fallbacks():
    ctx = {"domain": "undefined", "faq_count": None, "icp_roles": []}
    out = resolve_template("{{domain}} has {{faq_count}} FAQs for {{icp_roles}}", ctx)
    assert out == "your website has 0 FAQs for decision-makers"


def test_dotted_paths_and_value_formatting():
    ctx = {"scan": {"pages": 12.0}, "flags": [True, "x"]}
    assert resolve_template("{{scan.pages}} pages, {{flags}}", ctx) == "12 pages, true, x"


def test_resolver_takes_precedence():
    resolvers = {"company_name": lambda ctx: ctx["brand"].upper()}
    assert resolve_template("{{company_name}}", {"brand": "acme", "company_name": "Other"}, resolvers=resolvers) == "ACME"


def test_resolver_returning_blank_falls_through():
    resolvers = {"company_name": lambda ctx: ""}
    assert resolve_template("{{company_name}}", {"company_name": "Acme"}, resolvers=resolvers) == "Acme"


def test_state_keyed_templates():
    template = StateTemplate.coerce({"PARTIAL": "Partly {{domain}}", "default": "Nothing on {{domain}}"})
    ctx = {"domain": "acme.io"}
    assert resolve_template(template, ctx, DetectionState.PARTIAL) == "Partly acme.io"
    assert resolve_template(template, ctx, DetectionState.NOT_FOUND) == "Nothing on acme.io"
    assert resolve_template({"WEAK": "Weak only"}, ctx, None) == "Weak only"
    assert resolve_template(None, ctx) == ""


def test_cleanup_of_empty_substitutions():
    out = resolve_template("Schemas ({{region}}) found: {{detected_schemas}} , {{region}}.", {})
    assert out == "Schemas found: none."


def test_clean_text_keeps_indentation_and_ellipses():
    text = '{\n  "name": "Acme"\n}\nWait...'
    assert clean_text(text) == text


def test_template_list_drops_blank_entries():
    items = resolve_template_list(["Visit {{site_url}}", "Call {{company_name}}"], {})
    assert items == ["Visit", "Call your company"]
    assert resolve_template_list(["{{site_url}}", "Keep"], {}) == ["Keep"]


def test_is_usable_value():
    assert is_usable_value(0)
    assert is_usable_value(False)
    assert not is_usable_value("null")
    assert not is_usable_value("  ")
    assert not is_usable_value({})


def test_safe_fallbacks_are_leak_free():
    for key, value in SAFE_FALLBACKS.items():
        assert find_leaks(value) == [], key
    assert "{{" not in "".join(SAFE_FALLBACKS.values())


def test_safe_fallbacks_use_supplied_date():
    from datetime import date

    fallbacks = safe_fallbacks(date(2024, 3, 5))
    assert fallbacks["current_date"] == "March 5, 2024"
    assert fallbacks["year"] == "2024"


def test_find_leaks_flags_template_artifacts():
    assert find_leaks("Hello {{name}}") == ["Unresolved placeholder: {{name}}"]
    assert find_leaks("Hello [company_name]") == ["Bracket placeholder: [company_name]"]
    assert find_leaks("See [docs](https://x.io) and [TODO]") == []
    assert find_leaks("undefined") == ['Literal "undefined" used as value']
    assert find_leaks('{"name": "null"}') == ['Literal string "null" detected as value']
    assert find_leaks(None) == []


def test_every_playbook_template_resolves_without_leaks():
    from datetime import date

    from recommendations.context import build_merged_context
    from recommendations.playbook import REGISTRY

    context = build_merged_context({}, {}, today=date(2026, 1, 15))
    states = list(DetectionState) + [None]
    for key, entry in REGISTRY.items():
        for state in states:
            ctx = dict(context, detection_state=state.value if state else "")
            texts = [
                resolve_template(template, ctx, state)
                for template in (
                    entry.finding_templates,
                    entry.why_it_matters_template,
                    entry.recommendation_template,
                    entry.what_to_include_template,
                )
            ]
            texts += resolve_template_list(entry.action_items_template, ctx, state)
            texts += resolve_template_list(entry.examples_template, ctx, state)
            for text in texts:
                assert find_leaks(text) == [], (key, state, text)
