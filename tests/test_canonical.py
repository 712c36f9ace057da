import pytest

from recommendations.canonical import (
    TITLE_TO_CANONICAL,
    canonical_key_for_rec,
    get_playbook_entry,
    keyword_fallback,
    match_legacy_row,
    norm_title,
    resolve_canonical_key,
    validate_resolution_tables,
)
from recommendations.playbook import REGISTRY


def test_resolution_tables_point_at_registry_keys():
    assert validate_resolution_tables() == []
    assert all(key in REGISTRY for key in TITLE_TO_CANONICAL.values())


def test_exact_and_alias_resolution():
    assert resolve_canonical_key("technical_setup.crawler_access") == "technical_setup.crawler_access"
    assert resolve_canonical_key("ai_search_readiness.faq_score") == "ai_search_readiness.icp_faqs"
    assert resolve_canonical_key("technical_setup.sitemap") == "technical_setup.sitemap_indexing"


def test_camel_case_keys_with_category_hint():
    assert resolve_canonical_key("faqScore", "aiSearchReadiness") == "ai_search_readiness.icp_faqs"
    assert resolve_canonical_key("altTextScore", "AI Readability") == "ai_readability.alt_text_coverage"


def test_dotted_camel_case_key_resolves_through_alias():
    assert resolve_canonical_key("technicalSetup.openGraphScore") == "technical_setup.social_meta_tags"


def test_global_fuzzy_match_requires_single_candidate():
    assert resolve_canonical_key("crawlerAccessScore") == "technical_setup.crawler_access"


@pytest.mark.parametrize("key", [None, "", "ab", "totallyUnknownThing"])
def test_unresolvable_keys_return_none(key):
    assert resolve_canonical_key(key) is None
    assert get_playbook_entry(key) is None


def test_canonical_key_for_rec_uses_rec_key_prefix():
    rec = {"rec_key": "technical_setup.crawler_access::scan-1"}
    assert canonical_key_for_rec(rec) == "technical_setup.crawler_access"


def test_canonical_key_for_rec_falls_back_to_unique_suffix():
    assert canonical_key_for_rec({"subfactor_key": "trustAuthority.authorBios"}) == "trust_authority.author_bios"
    assert canonical_key_for_rec({}) is None


def test_norm_title_collapses_case_whitespace_and_periods():
    assert norm_title("  Add   FAQ Schema Markup.. ") == "add faq schema markup"


def test_non_string_titles_are_tolerated():
    assert norm_title(None) == ""
    assert norm_title(42) == "42"
    assert keyword_fallback(404, 7) is None
    assert match_legacy_row({"recommendation_text": 7, "category": 3}) == (None, None)


@pytest.mark.parametrize(
    "title",
    ["add faq schema markup", "Add FAQ Schema Markup", "  ADD  faq schema MARKUP. "],
)
def test_legacy_title_resolves_to_icp_faqs(title):
    assert match_legacy_row({"recommendation_text": title}) == ("ai_search_readiness.icp_faqs", "title")


def test_legacy_row_falls_back_to_rec_key():
    row = {"recommendation_text": "Something new", "rec_key": "technical_setup.sitemap::old-scan"}
    assert match_legacy_row(row) == ("technical_setup.sitemap_indexing", "rec_key")


def test_legacy_row_falls_back_to_subfactor_key_with_category():
    row = {"recommendation_text": "Custom", "subfactor_key": "crawlerAccessScore", "category": "Technical Setup"}
    assert match_legacy_row(row) == ("technical_setup.crawler_access", "subfactor_key")


def test_legacy_row_keyword_fallback():
    row = {"recommendation_text": "Your robots file blocks crawler access"}
    assert match_legacy_row(row) == ("technical_setup.crawler_access", "keyword")


def test_keyword_fallback_is_conservative():
    assert keyword_fallback("Improve alt text on product pages") is None
    assert keyword_fallback("Improve alt text on product pages", "AI Readability") == "ai_readability.alt_text_coverage"
    assert match_legacy_row({"recommendation_text": "Launch a podcast"}) == (None, None)
