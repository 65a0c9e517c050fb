# strength/password_strength.py
from typing import Iterable, Mapping

from .crack_time import custom_crack_time
from .feedback import get_feedback
from .matches import InvalidMatch, Match
from .reference import DEFAULT_REFERENCE, ReferenceData
from .scoring import score_password


def parse_matches(matches: Iterable) -> list:
    out = []
    for m in matches or ():
        if isinstance(m, Match):
            out.append(m)
        elif isinstance(m, Mapping):
            out.append(Match.from_dict(m))
        else:
            raise InvalidMatch(f"cannot read a match from {type(m).__name__}")
    return out


def analyze_password(password: str, matches: Iterable = (), hash_algo: str = None, hardware: str = None,
                     reference: ReferenceData = DEFAULT_REFERENCE) -> dict:
    """
    Score a password from the candidate matches found in it.
    `matches` may hold Match objects or their dict form; a bad one raises InvalidMatch.
    """
    result = score_password(password, parse_matches(matches), reference)

    out = result.to_dict()
    out["guesses_human"] = f"{int(result.guesses):,}"
    out["feedback"] = get_feedback(result.score, result.sequence)
    if hash_algo or hardware:
        custom = custom_crack_time(result.guesses, hash_algo, hardware)
        out["time_to_crack"] = custom.display
        out["time_to_crack_seconds"] = custom.seconds
    return out
