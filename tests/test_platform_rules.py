import pytest

from gigroute.services.platform_rules import (
    CATEGORY_ALIASES,
    FeatureRule,
    GENERIC_ADDRESS,
    PLATFORM_PROFILES,
    fallback_address,
    feature_description,
    get_profile,
    keyword_title,
    normalize_platform,
    platform_names,
)


@pytest.mark.parametrize("raw,expected", [
    ("instacart", "instacart"),
    ("  DoorDash ", "doordash"),
    ("food-delivery", "doordash"),
    ("survey", "alt360"),
    ("unknown-app", "unknown-app"),
    ("", None),
    ("   ", None),
    (None, None),
])
def test_normalize_platform(raw, expected):
    assert normalize_platform(raw) == expected


def test_every_profile_has_a_unique_category():
    assert len(CATEGORY_ALIASES) == len(PLATFORM_PROFILES)


def test_profiles_are_keyed_by_their_id():
    for platform_id, profile in PLATFORM_PROFILES.items():
        assert profile.id == platform_id
        assert profile.fallback_address
        assert profile.description_extractor("")


def test_get_profile_accepts_aliases():
    assert get_profile("mystery-shop").id == "ellis"
    assert get_profile("manual") is None
    assert get_profile(None) is None


def test_fallback_address():
    assert fallback_address("instacart") == "Local grocery store"
    assert fallback_address("epms") == "Store location"
    assert fallback_address("nope") == GENERIC_ADDRESS
    assert fallback_address(None) == GENERIC_ADDRESS


def test_platform_names_include_manual():
    names = platform_names()
    assert names["manual"] == "Manual"
    assert names["uber"] == "Uber Eats"


def test_feature_description_keeps_rule_order():
    extract = feature_description([
        FeatureRule("First", ("alpha",)),
        FeatureRule("Second", pattern=r"b\d"),
        FeatureRule("Third", ("gamma", "delta")),
    ], "Nothing")

    assert extract("DELTA then alpha") == "First • Third"
    assert extract("b7") == "Second"
    assert extract("zzz") == "Nothing"


def test_keyword_title_first_rule_wins():
    extract = keyword_title([
        (("walmart",), "Walmart"),
        (("audit",), "Audit"),
    ], "Default")

    assert extract("Walmart audit") == "Walmart"
    assert extract("quick audit") == "Audit"
    assert extract("") == "Default"


@pytest.mark.parametrize("text,minutes", [
    ("3 items", 21),
    ("1 item", 17),
    ("40 items", 60),
    ("no count", 45),
    ("9" * 5000 + " items", 45),
])
def test_instacart_duration(text, minutes):
    assert PLATFORM_PROFILES["instacart"].duration_for(text) == minutes


def test_profile_without_extractor_uses_default_duration():
    assert PLATFORM_PROFILES["ellis"].duration_for("anything") == 60
    assert PLATFORM_PROFILES["gigspot"].duration_for("anything") is None


@pytest.mark.parametrize("platform,text,title", [
    ("epms", "Kroger planogram check", "Kroger Compliance Audit"),
    ("ellis", "Hotel stay evaluation", "Hotel Service Evaluation"),
    ("alt360", "In-store survey with tablet", "Customer Survey Collection"),
    ("prestoshopper", "Pharmacy prescription pickup", "Pharmacy Shopping Task"),
    ("uber", "Downtown Kitchen order", "Restaurant - Downtown Kitchen"),
    ("doordash", "Nothing useful", "Restaurant Pickup"),
])
def test_platform_titles(platform, text, title):
    assert PLATFORM_PROFILES[platform].title_extractor(text) == title
