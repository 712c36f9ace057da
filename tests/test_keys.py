from recommendations.keys import build_canonical_key, normalize_key, split_key, to_camel_case, to_snake_case


def test_snake_case_handles_camel_and_hyphens():
    assert to_snake_case("altTextScore") == "alt_text_score"
    assert to_snake_case("alt-text") == "alt_text"
    assert to_snake_case("") == ""


def test_camel_case_round_trips_simple_keys():
    assert to_camel_case("alt_text_coverage") == "altTextCoverage"
    assert to_snake_case(to_camel_case("icp_faqs")) == "icp_faqs"


def test_normalize_bare_key_strips_score_suffix():
    assert normalize_key("altTextScore") == "alt_text"
    assert normalize_key("  faqScore ") == "faq"


def test_normalize_dotted_key_keeps_shape():
    assert normalize_key("technicalSetup.openGraphScore") == "technical_setup.open_graph_score"
    assert normalize_key(None) == ""


def test_build_canonical_key_accepts_display_names():
    assert build_canonical_key("Trust & Authority", "authorBios") == "trust_authority.author_bios"
    assert build_canonical_key("speedUX", "performance") == "speed_ux.performance"


def test_split_key():
    assert split_key("technical_setup.crawler_access") == ("technical_setup", "crawler_access")
    assert split_key("faq") == ("", "faq")
    assert split_key("") == ("", "")
