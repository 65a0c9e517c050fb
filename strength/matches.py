# strength/matches.py
"""
Candidate matches handed over by the pattern matchers, plus the scored
wrapper the sequence search works with.
"""
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Mapping, Optional, Tuple


class InvalidMatch(ValueError):
    """A candidate breaks its structural invariants; the matcher stage is at fault."""


class MatchKind(str, Enum):
    DICTIONARY = "dictionary"
    SPATIAL = "spatial"
    REPEAT = "repeat"
    SEQUENCE = "sequence"
    REGEX = "regex"
    DATE = "date"
    BRUTEFORCE = "bruteforce"


# lower wins when two decompositions cost the same
KIND_PRIORITY = {
    MatchKind.DICTIONARY: 0,
    MatchKind.SPATIAL: 1,
    MatchKind.REPEAT: 2,
    MatchKind.SEQUENCE: 3,
    MatchKind.DATE: 4,
    MatchKind.REGEX: 5,
    MatchKind.BRUTEFORCE: 6,
}

CHAR_CLASS_REGEXES = ("alpha_lower", "alpha_upper", "alpha", "alphanumeric", "digits", "symbols")
REGEX_NAMES = CHAR_CLASS_REGEXES + ("recent_year",)


@dataclass(frozen=True)
class Match:
    start: int
    end: int
    token: str
    kind: MatchKind
    # dictionary
    rank: Optional[int] = None
    dictionary_name: Optional[str] = None
    matched_word: Optional[str] = None
    reversed: bool = False
    l33t: bool = False
    sub: Mapping[str, str] = field(default_factory=dict, hash=False)
    # spatial
    graph: Optional[str] = None
    turns: Optional[int] = None
    shifted_count: int = 0
    # repeat
    base_token: Optional[str] = None
    repeat_count: Optional[int] = None
    base_matches: Tuple["Match", ...] = ()
    base_guesses: Optional[float] = None
    # sequence
    sequence_name: Optional[str] = None
    sequence_space: Optional[int] = None
    delta: Optional[int] = None
    ascending: Optional[bool] = None
    # regex
    regex_name: Optional[str] = None
    regex_match: Tuple[str, ...] = ()
    # date
    day: Optional[int] = None
    month: Optional[int] = None
    year: Optional[int] = None
    separator: str = ""
    # bruteforce
    cardinality: Optional[int] = None

    @property
    def length(self) -> int:
        return self.end - self.start + 1

    def validate(self, password: Optional[str] = None) -> "Match":
        """Raise InvalidMatch unless the candidate is well formed (and fits `password`)."""
        _check_types(self)
        if not self.token:
            raise InvalidMatch(f"{self.kind.value} match has an empty token")
        if self.start < 0 or self.end < self.start:
            raise InvalidMatch(f"bad span [{self.start}, {self.end}] for {self.token!r}")
        if self.length != len(self.token):
            raise InvalidMatch(f"span [{self.start}, {self.end}] does not fit token {self.token!r}")
        if password is not None:
            if self.end >= len(password):
                raise InvalidMatch(f"span [{self.start}, {self.end}] is outside a {len(password)}-char password")
            if password[self.start:self.end + 1] != self.token:
                raise InvalidMatch(f"token {self.token!r} does not match password at [{self.start}, {self.end}]")
        _KIND_CHECKS[self.kind](self)
        return self

    @classmethod
    def from_dict(cls, payload: Mapping) -> "Match":
        """Build a candidate from the matcher's JSON form (zxcvbn-style keys accepted)."""
        if not isinstance(payload, Mapping):
            raise InvalidMatch(f"cannot read a match from {type(payload).__name__}")
        try:
            kind = MatchKind(payload.get("kind") or payload.get("pattern"))
        except ValueError:
            raise InvalidMatch(f"unknown match kind {payload.get('kind') or payload.get('pattern')!r}")
        try:
            start = int(payload["start"] if "start" in payload else payload["i"])
            end = int(payload["end"] if "end" in payload else payload["j"])
        except (KeyError, TypeError, ValueError):
            raise InvalidMatch("match is missing an integer start/end")
        token = payload.get("token")
        if not isinstance(token, str):
            raise InvalidMatch("match token must be a string")

        kwargs = {}
        for name in _SCALAR_FIELDS:
            if payload.get(name) is not None:
                kwargs[name] = payload[name]
        if payload.get("dictionary_name") is None and payload.get("dictionary") is not None:
            kwargs["dictionary_name"] = payload["dictionary"]
        if payload.get("sub"):
            if not isinstance(payload["sub"], Mapping):
                raise InvalidMatch("sub must map substituted characters to originals")
            kwargs["sub"] = dict(payload["sub"])
        if payload.get("regex_match"):
            if not isinstance(payload["regex_match"], (list, tuple)):
                raise InvalidMatch("regex_match must be a list")
            kwargs["regex_match"] = tuple(str(x) for x in payload["regex_match"])
        if payload.get("base_matches"):
            if not isinstance(payload["base_matches"], (list, tuple)):
                raise InvalidMatch("base_matches must be a list")
            kwargs["base_matches"] = tuple(cls.from_dict(m) for m in payload["base_matches"])
        match = cls(start=start, end=end, token=token, kind=kind, **kwargs)
        _check_types(match)
        return match

    def to_dict(self) -> dict:
        out = {"kind": self.kind.value, "start": self.start, "end": self.end, "token": self.token}
        for name in _PAYLOAD_FIELDS[self.kind]:
            value = getattr(self, name)
            if isinstance(value, Mapping):
                value = dict(value)
            elif isinstance(value, tuple):
                value = list(value)
            out[name] = value
        return out


@dataclass(frozen=True)
class ScoredMatch:
    """A candidate together with the guesses it costs inside one scoring call."""
    match: Match
    guesses: float

    @property
    def start(self) -> int:
        return self.match.start

    @property
    def end(self) -> int:
        return self.match.end

    @property
    def token(self) -> str:
        return self.match.token

    @property
    def kind(self) -> MatchKind:
        return self.match.kind

    @property
    def guesses_log10(self) -> float:
        return math.log10(self.guesses)

    def to_dict(self) -> dict:
        out = self.match.to_dict()
        out["guesses"] = self.guesses
        out["guesses_log10"] = self.guesses_log10
        return out


# ---------- per-kind checks ----------

def _require(cond, match, msg):
    if not cond:
        raise InvalidMatch(f"{match.kind.value} match {match.token!r}: {msg}")


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_char(value) -> bool:
    return isinstance(value, str) and len(value) == 1


_TYPE_CHECKS = {
    int: (_is_int, "an integer"),
    float: (_is_number, "a number"),
    bool: (lambda v: isinstance(v, bool), "a boolean"),
    str: (lambda v: isinstance(v, str), "a string"),
}


def _check_types(m: Match):
    """Reject wrongly typed fields before any estimator touches them."""
    if not isinstance(m.token, str):
        raise InvalidMatch(f"match token must be a string, got {type(m.token).__name__}")
    if not (_is_int(m.start) and _is_int(m.end)):
        raise InvalidMatch(f"match span must be integers, got [{m.start!r}, {m.end!r}]")
    for name, expected in _FIELD_TYPES.items():
        value = getattr(m, name)
        if value is None:
            continue
        check, label = _TYPE_CHECKS[expected]
        _require(check(value), m, f"{name} must be {label}, got {value!r}")
    _require(isinstance(m.sub, Mapping), m, "sub must be a mapping")
    for subbed, original in m.sub.items():
        _require(_is_char(subbed) and _is_char(original), m, f"bad l33t substitution {subbed!r}->{original!r}")
    _require(all(isinstance(x, str) for x in m.regex_match), m, "regex_match must hold strings")
    _require(all(isinstance(x, Match) for x in m.base_matches), m, "base_matches must hold matches")


def _check_dictionary(m: Match):
    _require(m.dictionary_name, m, "missing dictionary_name")
    if m.rank is not None:
        _require(m.rank > 0, m, f"rank must be a positive integer, got {m.rank!r}")


def _check_spatial(m: Match):
    _require(m.graph, m, "missing graph")
    _require(_is_int(m.turns) and m.turns >= 1, m, f"turns must be >= 1, got {m.turns!r}")
    _require(_is_int(m.shifted_count) and 0 <= m.shifted_count <= len(m.token), m,
             f"shifted_count out of range: {m.shifted_count!r}")


def _check_repeat(m: Match):
    _require(m.base_token, m, "missing base_token")
    _require(_is_int(m.repeat_count) and m.repeat_count >= 1, m, f"repeat_count must be >= 1, got {m.repeat_count!r}")
    _require(len(m.base_token) <= len(m.token), m, "base_token is longer than the token")
    if m.base_guesses is not None:
        _require(m.base_guesses >= 1, m, "base_guesses must be >= 1")
    for sub in m.base_matches:
        sub.validate(m.base_token)


def _check_sequence(m: Match):
    _require(isinstance(m.ascending, bool), m, "missing ascending flag")
    if m.delta is not None:
        _require(_is_int(m.delta) and m.delta != 0, m, f"delta must be a non-zero integer, got {m.delta!r}")


def _check_regex(m: Match):
    _require(m.regex_name in REGEX_NAMES, m, f"unknown regex_name {m.regex_name!r}")
    if m.regex_name == "recent_year":
        _require(m.regex_match and m.regex_match[0].isdigit(), m, "recent_year needs a numeric regex_match")


def _check_date(m: Match):
    for name in ("day", "month", "year"):
        _require(_is_int(getattr(m, name)), m, f"missing integer {name}")
    _require(1 <= m.month <= 12 and 1 <= m.day <= 31, m, f"impossible date {m.day}/{m.month}")


def _check_bruteforce(m: Match):
    _require(_is_int(m.cardinality) and m.cardinality > 0, m, "bruteforce needs a positive cardinality")


_KIND_CHECKS = {
    MatchKind.DICTIONARY: _check_dictionary,
    MatchKind.SPATIAL: _check_spatial,
    MatchKind.REPEAT: _check_repeat,
    MatchKind.SEQUENCE: _check_sequence,
    MatchKind.REGEX: _check_regex,
    MatchKind.DATE: _check_date,
    MatchKind.BRUTEFORCE: _check_bruteforce,
}

_PAYLOAD_FIELDS = {
    MatchKind.DICTIONARY: ("rank", "dictionary_name", "matched_word", "reversed", "l33t", "sub"),
    MatchKind.SPATIAL: ("graph", "turns", "shifted_count"),
    MatchKind.REPEAT: ("base_token", "repeat_count"),
    MatchKind.SEQUENCE: ("sequence_name", "sequence_space", "delta", "ascending"),
    MatchKind.REGEX: ("regex_name", "regex_match"),
    MatchKind.DATE: ("day", "month", "year", "separator"),
    MatchKind.BRUTEFORCE: ("cardinality",),
}

_FIELD_TYPES = {
    "rank": int, "dictionary_name": str, "matched_word": str, "reversed": bool, "l33t": bool,
    "graph": str, "turns": int, "shifted_count": int,
    "base_token": str, "repeat_count": int, "base_guesses": float,
    "sequence_name": str, "sequence_space": int, "delta": int, "ascending": bool,
    "regex_name": str,
    "day": int, "month": int, "year": int, "separator": str,
    "cardinality": int,
}

_SCALAR_FIELDS = tuple(name for name in _FIELD_TYPES if name != "cardinality")
