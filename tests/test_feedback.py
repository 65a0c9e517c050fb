"""
Tests for strength/feedback.py
"""
from strength.feedback import DEFAULT_SUGGESTIONS, EXTRA_SUGGESTION, get_feedback
from strength.matches import Match, MatchKind, ScoredMatch
from strength.scoring import score_password


def scored(token, kind, guesses=100.0, start=0, **fields):
    m = Match(start=start, end=start + len(token) - 1, token=token, kind=MatchKind(kind), **fields)
    return ScoredMatch(m, guesses)


def word(token, dictionary_name="passwords", rank=1, **fields):
    return scored(token, "dictionary", guesses=float(rank), rank=rank, dictionary_name=dictionary_name, **fields)


class TestGeneralRules:
    def test_empty_sequence(self):
        assert get_feedback(0, []) == {"warning": "", "suggestions": DEFAULT_SUGGESTIONS}

    def test_strong_password(self):
        assert get_feedback(3, [word("password")]) == {"warning": "", "suggestions": []}
        assert get_feedback(4, [scored("x7!", "bruteforce", cardinality=95)]) == {"warning": "", "suggestions": []}

    def test_multi_match_prepends_and_clears_warning(self):
        seq = [scored("xyz", "bruteforce", cardinality=26), word("password", rank=2, start=3)]
        fb = get_feedback(1, seq)
        assert fb["suggestions"][0] == EXTRA_SUGGESTION
        assert fb["warning"] == ""

    def test_longest_match_is_representative(self):
        seq = [
            scored("qwerty", "spatial", graph="qwerty", turns=1),
            scored("abc", "sequence", start=6, ascending=True),
        ]
        fb = get_feedback(1, seq)
        assert fb["suggestions"] == [EXTRA_SUGGESTION, "Use a longer keyboard pattern with more turns"]

    def test_unmatched_rule_falls_back(self):
        assert get_feedback(0, [scored("abc", "bruteforce", cardinality=26)]) == {
            "warning": "", "suggestions": [EXTRA_SUGGESTION]}
        assert get_feedback(1, [scored("1234", "regex", regex_name="digits")]) == {
            "warning": "", "suggestions": [EXTRA_SUGGESTION]}

    def test_from_real_scoring(self, make_match):
        pw = "xyzpassword"
        result = score_password(pw, [make_match(pw, "password", "dictionary", rank=2, dictionary_name="passwords")])
        fb = get_feedback(result.score, result.sequence)
        assert fb["warning"] == ""
        assert fb["suggestions"][0] == EXTRA_SUGGESTION


class TestDictionaryRules:
    def test_top_10(self):
        assert get_feedback(0, [word("password", rank=2)])["warning"] == "This is a top-10 common password"

    def test_top_100(self):
        assert get_feedback(0, [word("monkey", rank=50)])["warning"] == "This is a top-100 common password"

    def test_very_common(self):
        assert get_feedback(0, [word("hunter", rank=5000)])["warning"] == "This is a very common password"

    def test_similar_to_common(self):
        fb = get_feedback(0, [word("p4ssword", rank=2, l33t=True, sub={"4": "a"})])
        assert fb["warning"] == "This is similar to a commonly used password"
        assert "Predictable substitutions like '@' instead of 'a' don't help very much" in fb["suggestions"]

    def test_english_word(self):
        assert get_feedback(0, [word("horse", "english", rank=900)])["warning"] == "A word by itself is easy to guess"

    def test_names(self):
        assert get_feedback(0, [word("smith", "surnames")])["warning"] == \
            "Names and surnames by themselves are easy to guess"

    def test_capitalization(self):
        fb = get_feedback(0, [word("Password", rank=2)])
        assert "Capitalization doesn't help very much" in fb["suggestions"]

    def test_all_uppercase(self):
        fb = get_feedback(0, [word("PASSWORD", rank=2)])
        assert "All-uppercase is almost as easy to guess as all-lowercase" in fb["suggestions"]

    def test_reversed(self):
        fb = get_feedback(0, [word("drowssap", rank=2, reversed=True)])
        assert "Reversed words aren't much harder to guess" in fb["suggestions"]
        assert fb["warning"] == "This is similar to a commonly used password"


class TestPatternRules:
    def test_spatial(self):
        straight = get_feedback(0, [scored("qwerty", "spatial", graph="qwerty", turns=1)])
        assert straight["warning"] == "Straight rows of keys are easy to guess"
        bent = get_feedback(0, [scored("qwedsa", "spatial", graph="qwerty", turns=2)])
        assert bent["warning"] == "Short keyboard patterns are easy to guess"

    def test_repeat(self):
        single = get_feedback(0, [scored("aaa", "repeat", base_token="a", repeat_count=3)])
        assert single["warning"] == 'Repeats like "aaa" are easy to guess'
        multi = get_feedback(0, [scored("abcabc", "repeat", base_token="abc", repeat_count=2)])
        assert multi["warning"] == 'Repeats like "abcabcabc" are only slightly harder to guess than "abc"'
        assert multi["suggestions"] == ["Avoid repeated words and characters"]

    def test_sequence(self):
        fb = get_feedback(0, [scored("6543", "sequence", ascending=False)])
        assert fb == {"warning": "Sequences like abc or 6543 are easy to guess", "suggestions": ["Avoid sequences"]}

    def test_recent_year(self):
        fb = get_feedback(0, [scored("2019", "regex", regex_name="recent_year", regex_match=("2019",))])
        assert fb["warning"] == "Recent years are easy to guess"
        assert fb["suggestions"] == ["Avoid recent years", "Avoid years that are associated with you"]

    def test_date(self):
        fb = get_feedback(1, [scored("1/2/1990", "date", day=1, month=2, year=1990, separator="/")])
        assert fb["warning"] == "Dates are often easy to guess"
