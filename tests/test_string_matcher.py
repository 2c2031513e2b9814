from gigroute.utils.string_matcher import KeywordMatcher, match_any_keywords


def test_find_keywords_is_case_insensitive():
    matcher = KeywordMatcher(["Heavy", "organic"])
    assert matcher.find_keywords("HEAVY order with Organic milk") == {"heavy", "organic"}


def test_substring_matching():
    assert KeywordMatcher(["tip"]).contains_any("Great tips expected")


def test_contains_any_without_match():
    assert not KeywordMatcher(["alcohol"]).contains_any("Groceries only")


def test_count_keywords():
    matcher = KeywordMatcher(["photo", "receipt"])
    assert matcher.count_keywords("Photo of shelf, photo of receipt") == {"photo": 2, "receipt": 1}


def test_blank_and_duplicate_keywords_are_dropped():
    matcher = KeywordMatcher(["photo", " Photo ", "", "   "])
    assert matcher.keywords == ["photo"]


def test_empty_keyword_set_matches_nothing():
    matcher = KeywordMatcher([])
    assert not matcher.contains_any("anything")
    assert matcher.find_keywords("anything") == set()
    assert matcher.count_keywords("anything") == {}


def test_empty_text():
    assert not KeywordMatcher(["a"]).contains_any("")


def test_match_any_keywords():
    assert match_any_keywords(["peak", "bonus"], "Peak pay active")
    assert not match_any_keywords(["peak"], "regular pay")
