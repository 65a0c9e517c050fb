# strength/feedback.py
"""
Turn a score and its winning match sequence into one warning and a few
suggestions for the user.
"""
from typing import Optional, Sequence

from .guesses import ALL_UPPER, START_UPPER
from .matches import MatchKind, ScoredMatch

DEFAULT_SUGGESTIONS = [
    "Use a few words, avoid common phrases",
    "No need for symbols, digits, or uppercase letters",
]
EXTRA_SUGGESTION = "Add another word or two. Uncommon words are better."

NAME_DICTIONARIES = ("surnames", "male_names", "female_names")


def get_feedback(score: int, sequence: Sequence[ScoredMatch]) -> dict:
    if not sequence:
        return {"warning": "", "suggestions": list(DEFAULT_SUGGESTIONS)}
    if score > 2:
        return {"warning": "", "suggestions": []}

    longest = sequence[0]
    for scored in sequence[1:]:
        if len(scored.token) > len(longest.token):
            longest = scored

    feedback = _match_feedback(longest, len(sequence) == 1)
    if feedback is None:
        return {"warning": "", "suggestions": [EXTRA_SUGGESTION]}
    if len(sequence) > 1:
        feedback["suggestions"].insert(0, EXTRA_SUGGESTION)
        feedback["warning"] = ""
    return feedback


def _match_feedback(scored: ScoredMatch, is_sole_match: bool) -> Optional[dict]:
    match = scored.match
    if match.kind is MatchKind.DICTIONARY:
        return _dictionary_feedback(scored, is_sole_match)
    if match.kind is MatchKind.SPATIAL:
        if match.turns == 1:
            warning = "Straight rows of keys are easy to guess"
        else:
            warning = "Short keyboard patterns are easy to guess"
        return {"warning": warning, "suggestions": ["Use a longer keyboard pattern with more turns"]}
    if match.kind is MatchKind.REPEAT:
        if len(match.base_token) == 1:
            warning = 'Repeats like "aaa" are easy to guess'
        else:
            warning = 'Repeats like "abcabcabc" are only slightly harder to guess than "abc"'
        return {"warning": warning, "suggestions": ["Avoid repeated words and characters"]}
    if match.kind is MatchKind.SEQUENCE:
        return {"warning": "Sequences like abc or 6543 are easy to guess", "suggestions": ["Avoid sequences"]}
    if match.kind is MatchKind.REGEX:
        if match.regex_name == "recent_year":
            return {
                "warning": "Recent years are easy to guess",
                "suggestions": ["Avoid recent years", "Avoid years that are associated with you"],
            }
        return None
    if match.kind is MatchKind.DATE:
        return {
            "warning": "Dates are often easy to guess",
            "suggestions": ["Avoid dates and years that are associated with you"],
        }
    return None


def _dictionary_feedback(scored: ScoredMatch, is_sole_match: bool) -> dict:
    match = scored.match
    warning = ""
    if match.dictionary_name == "passwords":
        if is_sole_match and not match.l33t and not match.reversed:
            if match.rank is not None and match.rank <= 10:
                warning = "This is a top-10 common password"
            elif match.rank is not None and match.rank <= 100:
                warning = "This is a top-100 common password"
            else:
                warning = "This is a very common password"
        elif scored.guesses_log10 <= 4:
            warning = "This is similar to a commonly used password"
    elif match.dictionary_name == "english":
        if is_sole_match:
            warning = "A word by itself is easy to guess"
    elif match.dictionary_name in NAME_DICTIONARIES:
        if is_sole_match:
            warning = "Names and surnames by themselves are easy to guess"
        else:
            warning = "Common names and surnames are easy to guess"

    suggestions = []
    word = match.token
    if START_UPPER.match(word):
        suggestions.append("Capitalization doesn't help very much")
    elif ALL_UPPER.match(word) and word.lower() != word:
        suggestions.append("All-uppercase is almost as easy to guess as all-lowercase")
    if match.reversed and len(word) >= 4:
        suggestions.append("Reversed words aren't much harder to guess")
    if match.l33t:
        suggestions.append("Predictable substitutions like '@' instead of 'a' don't help very much")
    return {"warning": warning, "suggestions": suggestions}
