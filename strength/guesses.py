# strength/guesses.py
"""
Guess estimators, one per match kind.

Every estimator is a pure function of a single candidate and returns a float
>= 1. Results saturate at GUESSES_CEILING instead of overflowing, so very
long tokens all land on the same (huge) value.
"""
import math
import os
import re
from datetime import date

from .matches import InvalidMatch, Match, MatchKind
from .reference import DEFAULT_REFERENCE, ReferenceData

GUESSES_CEILING = 1e300
_CEILING_LOG10 = 300.0

REFERENCE_YEAR = int(os.environ.get("STRENGTH_REFERENCE_YEAR") or date.today().year)
MIN_YEAR_SPACE = 20

MIN_SUBMATCH_GUESSES_SINGLE_CHAR = 10
MIN_SUBMATCH_GUESSES_MULTI_CHAR = 50

CHAR_CLASS_BASES = {
    "alpha_lower": 26,
    "alpha_upper": 26,
    "alpha": 52,
    "alphanumeric": 62,
    "digits": 10,
    "symbols": 33,
}

START_UPPER = re.compile(r"^[A-Z][^A-Z]+$")
END_UPPER = re.compile(r"^[^A-Z]+[A-Z]$")
ALL_UPPER = re.compile(r"^[^a-z]+$")
ALL_LOWER = re.compile(r"^[^A-Z]+$")


# ---------- numeric helpers ----------

def clamp(guesses: float) -> float:
    if guesses != guesses or guesses > GUESSES_CEILING:  # nan or inf from a saturated product
        return GUESSES_CEILING
    return max(guesses, 1.0)


def saturating_pow(base: float, exponent: int) -> float:
    if base <= 1:
        return 1.0
    if exponent * math.log10(base) >= _CEILING_LOG10:
        return GUESSES_CEILING
    return float(base) ** exponent


def nck(n: int, k: int) -> float:
    """n choose k as a float, saturating rather than overflowing."""
    if k < 0 or k > n:
        return 0.0
    c = math.comb(n, k)
    if c.bit_length() > 996:
        return GUESSES_CEILING
    return float(c)


def _variations(a: int, b: int) -> float:
    """Ways to flip up to min(a, b) of a+b positions, at least one."""
    total = 0.0
    for i in range(1, min(a, b) + 1):
        total = clamp(total + nck(a + b, i))
    return total


# ---------- estimators ----------

def bruteforce_guesses(match: Match, reference: ReferenceData = DEFAULT_REFERENCE) -> float:
    return clamp(saturating_pow(match.cardinality, len(match.token)))


def dictionary_guesses(match: Match, reference: ReferenceData = DEFAULT_REFERENCE) -> float:
    rank = match.rank
    if rank is None:
        word = match.matched_word or (match.token[::-1] if match.reversed else match.token)
        rank = reference.dictionaries.rank(word, match.dictionary_name)
        if rank is None:
            raise InvalidMatch(f"{match.token!r} has no rank in dictionary {match.dictionary_name!r}")
    if rank <= 0:
        raise InvalidMatch(f"rank must be positive, got {rank}")
    reversed_variations = 2 if match.reversed else 1
    guesses = rank * uppercase_variations(match) * l33t_variations(match, reference) * reversed_variations
    return clamp(guesses)


def uppercase_variations(match: Match) -> float:
    word = match.token
    if ALL_LOWER.match(word) or word.lower() == word:
        return 1.0
    # capitalised, end-capitalised and all-caps only double the space
    for regex in (START_UPPER, END_UPPER, ALL_UPPER):
        if regex.match(word):
            return 2.0
    upper = sum(1 for ch in word if ch.isupper())
    lower = sum(1 for ch in word if ch.islower())
    return max(_variations(upper, lower), 1.0)


def l33t_variations(match: Match, reference: ReferenceData = DEFAULT_REFERENCE) -> float:
    if not match.l33t:
        return 1.0
    sub = match.sub
    if not sub and match.matched_word:
        sub = reference.l33t.derive_sub(match.token, match.matched_word)
    variations = 1.0
    chars = match.token.lower()
    for subbed, original in sub.items():
        subbed_count = chars.count(subbed)
        original_count = chars.count(original)
        if subbed_count == 0 or original_count == 0:
            # every such char was (or wasn't) substituted: one extra bit
            variations *= 2
        else:
            variations *= _variations(original_count, subbed_count)
        variations = clamp(variations)
    return variations


def spatial_guesses(match: Match, reference: ReferenceData = DEFAULT_REFERENCE) -> float:
    geometry = reference.keyboards.geometry(match.graph)
    s = geometry.starting_positions
    d = geometry.average_degree
    length = len(match.token)
    turns = match.turns
    guesses = 0.0
    # patterns of length <= L with <= t turns
    for i in range(2, length + 1):
        if guesses >= GUESSES_CEILING:
            break
        for j in range(1, min(turns, i - 1) + 1):
            guesses = clamp(guesses + nck(i - 1, j - 1) * s * saturating_pow(d, j))
    if match.shifted_count:
        shifted = match.shifted_count
        unshifted = length - shifted
        if unshifted == 0:
            guesses *= 2
        else:
            guesses *= _variations(shifted, unshifted)
    return clamp(guesses)


def repeat_guesses(match: Match, reference: ReferenceData = DEFAULT_REFERENCE) -> float:
    base_guesses = match.base_guesses
    if base_guesses is None:
        from .scoring import most_guessable_sequence
        base_guesses = most_guessable_sequence(match.base_token, match.base_matches, reference).guesses
    return clamp(base_guesses * match.repeat_count)


def sequence_guesses(match: Match, reference: ReferenceData = DEFAULT_REFERENCE) -> float:
    first = match.token[0]
    if first in "aAzZ019":
        base_guesses = 4
    elif first.isdigit():
        base_guesses = 10
    else:
        # could be lowercase, uppercase or unicode; lowercase is the safe bet
        base_guesses = 26
    if not match.ascending:
        base_guesses *= 2
    return clamp(base_guesses * len(match.token))


def regex_guesses(match: Match, reference: ReferenceData = DEFAULT_REFERENCE) -> float:
    if match.regex_name in CHAR_CLASS_BASES:
        return clamp(saturating_pow(CHAR_CLASS_BASES[match.regex_name], len(match.token)))
    if match.regex_name == "recent_year":
        # attackers walk outwards from the current year
        year_space = abs(int(match.regex_match[0]) - REFERENCE_YEAR)
        return float(max(year_space, MIN_YEAR_SPACE))
    raise InvalidMatch(f"unknown regex_name {match.regex_name!r}")


def date_guesses(match: Match, reference: ReferenceData = DEFAULT_REFERENCE) -> float:
    year_space = max(abs(match.year - REFERENCE_YEAR), MIN_YEAR_SPACE)
    guesses = year_space * 365
    if match.separator:
        guesses *= 4
    return float(guesses)


ESTIMATORS = {
    MatchKind.BRUTEFORCE: bruteforce_guesses,
    MatchKind.DICTIONARY: dictionary_guesses,
    MatchKind.SPATIAL: spatial_guesses,
    MatchKind.REPEAT: repeat_guesses,
    MatchKind.SEQUENCE: sequence_guesses,
    MatchKind.REGEX: regex_guesses,
    MatchKind.DATE: date_guesses,
}


def estimate_guesses(match: Match, password: str = None, reference: ReferenceData = DEFAULT_REFERENCE) -> float:
    """
    Guesses for one candidate. When the surrounding password is given, a
    submatch shorter than it is floored so that splitting a password into
    many tiny pieces never looks cheaper than it is.
    """
    match.validate()
    guesses = ESTIMATORS[match.kind](match, reference)
    if password is None:
        return max(guesses, 1.0)
    return max(guesses, submatch_floor(len(match.token), len(password)))


def submatch_floor(token_length: int, password_length: int) -> float:
    if token_length >= password_length:
        return 1.0
    if token_length == 1:
        return MIN_SUBMATCH_GUESSES_SINGLE_CHAR
    return MIN_SUBMATCH_GUESSES_MULTI_CHAR
